import io

from streetprop.house import HouseRecord, parse_house_detail_rows
from streetprop.stat import ImporterStat

HEADERS = [["serial", "x", "size"], ["header two"]]


def _row(serial, size, floors="3"):
    return [serial, "unused", size, "residence", "concrete", "2001-01-01", floors, "5"]


def test_header_rows_skipped_and_fields_mapped():
    rows = HEADERS + [_row("S1", "100")]
    records = list(parse_house_detail_rows(rows))
    assert len(records) == 1
    rec = records[0]
    assert rec.serial_number == "S1"
    assert rec.size_m2 == "100"
    assert rec.main_use == "residence"
    assert rec.main_building_material == "concrete"
    assert rec.construct_completed_date == "2001-01-01"
    assert rec.number_of_floors == "3"
    assert rec.building_lamination == "5"
    assert rec.address == ""
    assert rec.uniq_prop_key == "S1#100"


def test_default_coord_and_empty_price_histories():
    rec = next(parse_house_detail_rows(HEADERS + [_row("S1", "100")]))
    assert rec.coord == [0, 0]
    assert rec.price_histories_sell == []
    assert rec.price_histories_rent == []
    assert rec.created_at == rec.updated_at
    assert rec.created_at > 0


def test_coordinate_lookup_by_unique_key():
    coords = {"S2#50": [25.0, 121.5]}
    rows = HEADERS + [_row("S1", "100"), _row("S2", "50")]
    records = list(parse_house_detail_rows(rows, coords))
    assert [r.coord for r in records] == [[0, 0], [25.0, 121.5]]


def test_rows_without_key_are_skipped_and_counted():
    stat = ImporterStat(stream=io.StringIO())
    rows = HEADERS + [[], ["", "x", ""], _row("S3", "")]
    records = list(parse_house_detail_rows(rows, stat=stat))
    assert [r.uniq_prop_key for r in records] == ["S3#"]
    assert stat.skipped == 4


def test_short_row_uses_empty_cells():
    rec = next(parse_house_detail_rows(HEADERS + [["S9"]]))
    assert rec == HouseRecord(
        serial_number="S9",
        uniq_prop_key="S9#",
        created_at=rec.created_at,
        updated_at=rec.updated_at,
    )