"""House detail rows read from the house spreadsheet."""

from __future__ import annotations

import time
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from streetprop.stat import ImporterStat

HOUSE_DETAIL_SHEET = "建物HouseDetail"
HEADER_ROWS = 2

SERIAL_COLUMN = 0
SIZE_COLUMN = 2
MAIN_USE_COLUMN = 3
MATERIAL_COLUMN = 4
COMPLETED_DATE_COLUMN = 5
FLOORS_COLUMN = 6
LAMINATION_COLUMN = 7

KEY_SEPARATOR = "#"


@dataclass
class HouseRecord:
    """One house built from a row of the house detail sheet."""

    serial_number: str = ""
    size_m2: str = ""
    main_use: str = ""
    main_building_material: str = ""
    construct_completed_date: str = ""
    number_of_floors: str = ""
    building_lamination: str = ""
    address: str = ""
    uniq_prop_key: str = ""
    coord: list[Any] = field(default_factory=lambda: [0, 0])
    price_histories_sell: list[Any] = field(default_factory=list)
    price_histories_rent: list[Any] = field(default_factory=list)
    created_at: int = 0
    updated_at: int = 0


def _cell(row: Sequence[str], index: int) -> str:
    return row[index] if index < len(row) else ""


def parse_house_detail_rows(
    rows: Iterable[Sequence[str]],
    coords: Mapping[str, Sequence[Any]] | None = None,
    stat: ImporterStat | None = None,
) -> Iterator[HouseRecord]:
    """Yield a house for each data row that has a serial number or a size.

    The unique key is serial#size; its coordinate is looked up in coords and
    defaults to [0, 0]. Header rows and rows without a key count as skipped.
    """
    coords = coords or {}
    for index, row in enumerate(rows):
        if stat is not None:
            stat.report()
        if index < HEADER_ROWS:
            if stat is not None:
                stat.skip()
            continue
        serial = _cell(row, SERIAL_COLUMN)
        size = _cell(row, SIZE_COLUMN)
        key = f"{serial}{KEY_SEPARATOR}{size}"
        if key == KEY_SEPARATOR:
            if stat is not None:
                stat.skip()
            continue
        now = int(time.time())
        coord = coords.get(key)
        yield HouseRecord(
            serial_number=serial,
            size_m2=size,
            main_use=_cell(row, MAIN_USE_COLUMN),
            main_building_material=_cell(row, MATERIAL_COLUMN),
            construct_completed_date=_cell(row, COMPLETED_DATE_COLUMN),
            number_of_floors=_cell(row, FLOORS_COLUMN),
            building_lamination=_cell(row, LAMINATION_COLUMN),
            uniq_prop_key=key,
            coord=list(coord) if coord is not None else [0, 0],
            created_at=now,
            updated_at=now,
        )