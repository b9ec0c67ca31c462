"""Price history summaries and timestamp repairs for imported properties."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

BUY_SELL = "BUY_SELL"

# Rows were imported with unix milliseconds; anything above this is not seconds.
WRONG_IMPORT_AT = 1_678_000_000_000


@dataclass(frozen=True)
class PriceEntry:
    """One transaction from a property's history."""

    price_ntd: int
    transaction_time: str
    transaction_type: str


@dataclass
class PriceSummary:
    """Highest price seen and the sell and rent price points."""

    last_price: str = "0"
    sell: list[tuple[int, str]] = field(default_factory=list)
    rent: list[tuple[int, str]] = field(default_factory=list)


def summarize_prices(histories: Iterable[PriceEntry]) -> PriceSummary:
    """Split priced transactions into sell and rent points and keep the highest price."""
    summary = PriceSummary()
    highest = 0
    for entry in histories:
        if entry.price_ntd == 0:
            continue
        point = (entry.price_ntd, entry.transaction_time)
        if entry.transaction_type == BUY_SELL:
            summary.sell.append(point)
        else:
            summary.rent.append(point)
        if entry.price_ntd > highest:
            highest = entry.price_ntd
            summary.last_price = str(highest)
    return summary


def fix_millis_timestamps(
    created_at: int, updated_at: int, fill_missing_updated: bool = False
) -> tuple[int | None, int | None]:
    """Return corrected (created_at, updated_at); None where no change is needed.

    Values stored in milliseconds become seconds. With fill_missing_updated, an
    updated_at of 0 takes the created time in seconds.
    """
    new_created = created_at // 1000 if created_at > WRONG_IMPORT_AT else None
    if updated_at > WRONG_IMPORT_AT:
        new_updated: int | None = updated_at // 1000
    elif fill_missing_updated and updated_at == 0:
        new_updated = created_at // 1000
    else:
        new_updated = None
    return new_created, new_updated