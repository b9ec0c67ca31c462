"""Pagination, filtering and ordering for SQL list queries."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum

MAX_PER_PAGE = 1000
DEFAULT_PER_PAGE = 10

# Upper bound that any realistic string compares below.
_STRING_CEILING = "~" * 32


class TtType(str, Enum):
    """Column types of the OLTP store."""

    UNSIGNED = "unsigned"
    INTEGER = "integer"
    DOUBLE = "double"
    STRING = "string"
    BOOLEAN = "boolean"
    ARRAY = "array"
    MAP = "map"


class ChType(str, Enum):
    """Column types of the analytics store."""

    INT8 = "Int8"
    INT16 = "Int16"
    INT32 = "Int32"
    INT64 = "Int64"
    UINT8 = "UInt8"
    UINT16 = "UInt16"
    UINT32 = "UInt32"
    UINT64 = "UInt64"
    FLOAT32 = "Float32"
    FLOAT64 = "Float64"
    STRING = "String"
    FIXED_STRING = "FixedString"
    DATE_TIME = "DateTime"
    DATE_TIME64 = "DateTime64"
    BOOL = "Bool"
    IPV4 = "IPv4"
    IPV6 = "IPv6"
    UUID = "UUID"


_TT_NUMERIC = frozenset({TtType.UNSIGNED, TtType.INTEGER, TtType.DOUBLE})
_TT_STRING = frozenset({TtType.STRING})
_CH_NUMERIC = frozenset(
    {
        ChType.INT8,
        ChType.INT16,
        ChType.INT32,
        ChType.INT64,
        ChType.UINT8,
        ChType.UINT16,
        ChType.UINT32,
        ChType.UINT64,
        ChType.FLOAT32,
        ChType.FLOAT64,
    }
)
_CH_STRING = frozenset({ChType.STRING, ChType.FIXED_STRING})


def quote_identifier(name: str) -> str:
    """Wrap a column name in double quotes."""
    return f'"{name}"'


def quote_string(value: str) -> str:
    """Trim a value, escape single quotes as &apos; and wrap it in single quotes."""
    return "'" + value.strip().replace("'", "&apos;") + "'"


def split_operator_value(text: str) -> tuple[str, str]:
    """Split a filter value into its comparison operator and the right-hand side.

    Recognised prefixes are >, >=, <, <=, <>; anything else means equality.
    """
    if not text:
        return "=", ""
    second = text[1] if len(text) > 1 else ""
    if text[0] == ">":
        start = 2 if second == "=" else 1
    elif text[0] == "<":
        start = 2 if second in ("=", ">") else 1
    else:
        return "=", text
    return text[:start], text[start:]


_INF_LITERALS = frozenset({"inf", "infinity", "nan"})


def _parse_float(text: str) -> float | None:
    if not text or text.strip() != text or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if math.isinf(value) and text.lstrip("+-").lower() not in _INF_LITERALS:
        return None  # out of range
    return value


def _equality_clauses(
    values: Iterable[str], numeric: bool, column: str
) -> tuple[list[str], list[str]]:
    """Build OR-able conditions for one column and the filter values that were accepted."""
    where_or: list[str] = []
    filtered: list[str] = []
    equal: list[str] = []
    unequal: list[str] = []
    gte = lte = gtf = ltf = ""
    gtv: float | str = math.inf if numeric else _STRING_CEILING
    ltv: float | str = -math.inf if numeric else ""

    for text in values:
        operator, rhs = split_operator_value(text)
        if numeric:
            number = _parse_float(rhs)
            if number is None:
                continue
            key: float | str = number
            literal = rhs
        else:
            key = rhs
            literal = quote_string(rhs)

        if operator == "=":
            filtered.append(rhs)
            if not numeric and "*" in rhs:
                where_or.append(f"{column} LIKE {quote_string(rhs.replace('*', '%'))}")
                continue
            equal.append(literal)
        elif operator == "<>":
            filtered.append(operator + rhs)
            if not numeric and "*" in rhs:
                where_or.append(f"{column} NOT LIKE {quote_string(rhs.replace('*', '%'))}")
                continue
            unequal.append(literal)
        else:
            if operator[0] == ">" and gtv >= key:
                gtv = key
                gte = column + operator + literal
                gtf = operator + rhs
            if operator[0] == "<" and ltv <= key:
                ltv = key
                lte = column + operator + literal
                ltf = operator + rhs

    if gte and lte:
        filtered += [gtf, ltf]
        if gtv < ltv:
            # the two ranges intersect, so both must hold
            where_or.append(f"({gte} AND {lte})")
        else:
            where_or += [lte, gte]
    elif gte:
        filtered.append(gtf)
        where_or.append(gte)
    elif lte:
        filtered.append(ltf)
        where_or.append(lte)

    if equal:
        where_or.append(f"{column} IN ({','.join(equal)})")
    if unequal:
        where_or.append(f"{column} NOT IN ({','.join(unequal)})")
    return where_or, filtered


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _limit(per_page: int) -> int:
    if per_page <= 0:
        return DEFAULT_PER_PAGE
    return min(per_page, MAX_PER_PAGE)


def _offset(page: int, per_page: int, count: int) -> int:
    if page <= 0:
        return 0
    # clamp to the last page on overflow
    expected = (page - 1) * per_page
    max_offset = _trunc_div(count, per_page) * per_page
    return min(expected, max_offset)


@dataclass
class PagerIn:
    """Requested page, filters and ordering.

    A filter maps a column to values that are ORed together; columns are ANDed.
    Order entries are +column for ascending and -column for descending.
    """

    page: int = 0
    per_page: int = 0
    filters: dict[str, list[str]] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)


@dataclass
class PagerOut:
    """Resolved page position, totals and the filters that were applied."""

    page: int = 0
    per_page: int = 0
    pages: int = 0
    total: int = 0
    filters: dict[str, list[str]] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)

    def limit_offset_sql(self) -> str:
        offset = f" OFFSET {(self.page - 1) * self.per_page}" if self.page > 1 else ""
        return f"\nLIMIT {self.per_page}{offset}"

    def _order_by_sql(
        self, orders: Sequence[str] | None, known: Mapping[str, object], quote: bool
    ) -> str:
        parts: list[str] = []
        for entry in orders or ():
            if len(entry) <= 2:
                continue
            direction, column = entry[0], entry[1:]
            if direction == "+":
                suffix = ""
            elif direction == "-":
                suffix = " DESC"
            else:
                continue
            if column not in known:
                continue
            parts.append((quote_identifier(column) if quote else column) + suffix)
        return "\nORDER BY " + ", ".join(parts) if parts else ""

    def order_by_sql_tt(
        self, orders: Sequence[str] | None, field_to_type: Mapping[str, TtType]
    ) -> str:
        """ORDER BY clause with quoted column names; unknown columns are dropped."""
        return self._order_by_sql(orders, field_to_type, quote=True)

    def order_by_sql_ch(
        self, orders: Sequence[str] | None, field_to_type: Mapping[str, ChType]
    ) -> str:
        """ORDER BY clause with bare column names; unknown columns are dropped."""
        return self._order_by_sql(orders, field_to_type, quote=False)

    def _where_and_sql(
        self,
        filters: Mapping[str, Sequence[str]] | None,
        field_to_type: Mapping[str, object],
        numeric_types: frozenset,
        string_types: frozenset,
        quote: bool,
    ) -> str:
        clauses: list[str] = []
        for column in sorted(filters or {}):
            if column not in field_to_type:
                continue
            typ = field_to_type[column]
            if typ in numeric_types or typ in string_types:
                where_or, filtered = _equality_clauses(
                    filters[column],
                    typ in numeric_types,
                    quote_identifier(column) if quote else column,
                )
            else:
                where_or, filtered = [], []
            if where_or:
                clauses.append(" OR ".join(where_or))
            self.filters[column] = filtered
        return "\nWHERE (" + ")\nAND (".join(clauses) + ")" if clauses else ""

    def where_and_sql_tt(
        self, filters: Mapping[str, Sequence[str]] | None, field_to_type: Mapping[str, TtType]
    ) -> str:
        """WHERE clause for the OLTP store; records accepted filters in self.filters."""
        return self._where_and_sql(filters, field_to_type, _TT_NUMERIC, _TT_STRING, quote=True)

    def where_and_sql_ch(
        self, filters: Mapping[str, Sequence[str]] | None, field_to_type: Mapping[str, ChType]
    ) -> str:
        """WHERE clause for the analytics store; records accepted filters in self.filters."""
        return self._where_and_sql(filters, field_to_type, _CH_NUMERIC, _CH_STRING, quote=False)

    def calculate_pages(self, page: int, per_page: int, count: int) -> None:
        """Clamp page and page size and compute the page count for count rows."""
        self.per_page = _limit(per_page)
        offset = _offset(page, self.per_page, count)
        self.page = offset // self.per_page + 1
        self.total = count
        if count > 0:
            self.pages = (self.per_page - 1 + count) // self.per_page