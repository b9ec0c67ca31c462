"""Address updates read from the transaction sheets of the house spreadsheet."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from streetprop.stat import ImporterStat

BUY_SELL_SHEET = "不動產買賣BuyandSell"
RENT_SHEET = "不動產租賃Rent"

DISTRICT_COLUMN = 0
ADDRESS_COLUMN = 2

BUY_SELL_HEADER_ROWS = 2
BUY_SELL_SERIAL_COLUMN = 27
RENT_HEADER_ROWS = 3
RENT_SERIAL_COLUMNS = (27, 28)


@dataclass(frozen=True)
class AddressUpdate:
    """District and address to apply to every house with this serial number."""

    district: str
    address: str
    serial_number: str


def _cell(row: Sequence[str], index: int) -> str:
    return row[index] if index < len(row) else ""


def address_updates(
    rows: Iterable[Sequence[str]],
    skip_rows: int,
    serial_column: int,
    stat: ImporterStat | None = None,
) -> Iterator[AddressUpdate]:
    """Yield an update for each data row holding a district, address and serial number.

    The first skip_rows rows are headers. Header rows and incomplete rows are
    counted as skipped in stat, which also reports progress once per row.
    """
    for index, row in enumerate(rows):
        if stat is not None:
            stat.report()
        if index < skip_rows:
            if stat is not None:
                stat.skip()
            continue
        update = AddressUpdate(
            district=_cell(row, DISTRICT_COLUMN),
            address=_cell(row, ADDRESS_COLUMN),
            serial_number=_cell(row, serial_column),
        )
        if not (update.district and update.address and update.serial_number):
            if stat is not None:
                stat.skip()
            continue
        yield update