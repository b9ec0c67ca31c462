"""Helpers that shape property data for the public and user pages."""

from __future__ import annotations

import re
from datetime import datetime, timedelta

_UINT_RE = re.compile(r"[0-9]+")
_UINT64_MAX = 2**64 - 1


def _to_uint(text: str) -> int:
    if not _UINT_RE.fullmatch(text):
        return 0
    value = int(text)
    return value if value <= _UINT64_MAX else 0


def _is_ascii_alpha(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def split_country_prop_id(param: str) -> tuple[str, int]:
    """Split an id that may start with a two-letter country code.

    Returns the upper-cased code (or "") and the numeric id (0 when not a number).
    """
    if len(param) > 2 and _is_ascii_alpha(param[0]) and _is_ascii_alpha(param[1]):
        return param[:2].upper(), _to_uint(param[2:])
    return "", _to_uint(param)


def property_description(
    size_m2: str, bedroom: int, bathroom: int, number_of_floors: str
) -> str:
    """Short description such as '120 m2, 3 bedroom, 2 bathroom, 4 floor'."""
    parts = [f"{size_m2} m2"]
    if bedroom > 0:
        parts.append(f"{bedroom} bedroom")
    if bathroom > 0:
        parts.append(f"{bathroom} bathroom")
    if number_of_floors not in ("", "0"):
        parts.append(f"{number_of_floors} floor")
    return ", ".join(parts)


def property_title(prop_id: int, address: str, formatted_address: str) -> str:
    """Page title naming the property and, when known, its address."""
    title = f"Property #{prop_id}"
    if address:
        return f"{title} on {address}"
    if formatted_address:
        return f"{title} on {formatted_address}"
    return title


def og_timestamp(unix_seconds: int) -> str:
    """Format a unix time in local time as ISO 8601, with Z for a zero offset."""
    moment = datetime.fromtimestamp(unix_seconds).astimezone()
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    offset = moment.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return text + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{mins:02d}"


def og_url(proto_domain: str, action: str, country_code: str, prop_id: int) -> str:
    """Canonical address of a public property page."""
    return f"{proto_domain}/{action}/{country_code}{prop_id}"