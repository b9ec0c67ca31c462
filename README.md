# streetprop

Building blocks for a real-estate listing service, using only the standard
library (Python 3.10 and later):

- `streetprop.pager` – page clamping and `WHERE`, `ORDER BY` and
  `LIMIT`/`OFFSET` SQL fragments built from column filters and sort orders.
- `streetprop.stat` – `ImporterStat`, a progress counter for import jobs.
- `streetprop.house` and `streetprop.house_address` – turn rows of the house
  spreadsheet into house records and address updates.
- `streetprop.pricing` – price history summaries and repair of timestamps
  stored in milliseconds.
- `streetprop.translation` – download a translation sheet as TSV and write it
  out as JSON.
- `streetprop.pages` – titles, descriptions and Open Graph values for property
  pages.
- `streetprop.routes` – the table of page routes, route lookup and splitting of
  command-line calls.

## Pagination and filters

```python
from streetprop.pager import PagerOut, TtType

out = PagerOut()
out.calculate_pages(2, 5, 11)      # page, per page, total row count
out.page, out.per_page, out.pages, out.total   # (2, 5, 3, 11)
out.limit_offset_sql()                         # "\nLIMIT 5 OFFSET 5"

types = {"id": TtType.INTEGER, "name": TtType.STRING}
out.order_by_sql_tt(["-name", "+id"], types)   # '\nORDER BY "name" DESC, "id"'
out.where_and_sql_tt({"id": [">1", "<=23"]}, types)
# '\nWHERE (("id">1 AND "id"<=23))'
```

A per-page value of zero or less becomes 10; 1000 or more becomes 1000. A page
past the end is moved to the last page, and a page of zero or less to the first.

Sort entries are `+column` or `-column`; entries for unknown columns or without
a direction are dropped. Filter values may start with `>`, `>=`, `<`, `<=` or
`<>`; anything else means equality. Values for one column are joined with
`OR`, columns with `AND`. Numeric values that do not parse are ignored; a `*`
in a string value becomes a `LIKE` (or `NOT LIKE`) wildcard. Strings are
trimmed and single quotes are written as `&apos;` (`quote_string`). The values
that were applied are recorded in `out.filters`.

The `*_tt` methods take `TtType` columns and quote column names with
`quote_identifier`; the `*_ch` methods take `ChType` columns and leave them
bare. `split_operator_value(">=5")` returns `(">=", "5")`.

## Import progress

```python
from streetprop.stat import ImporterStat

stat = ImporterStat(total=3)
stat.ok(True)
stat.skip()
stat.fail("no response")     # counts a failure and a warning
stat.set_last("row 3")
stat.report(final=True)      # writes the line and the warning counts
```

`report()` without `final` writes only every `print_every` items (100 by
default) and returns `None` otherwise. Output goes to `stream`, or to standard
output.

## Spreadsheet rows

The importers take rows as sequences of cell strings, already read from the
sheet.

- `parse_house_detail_rows(rows, coords, stat)` skips the two header rows and
  yields a `HouseRecord` per row, keyed `serial#size`, with its coordinate from
  `coords` or `[0, 0]`.
- `address_updates(rows, skip_rows, serial_column, stat)` yields an
  `AddressUpdate` for each row that has a district, an address and a serial
  number. `BUY_SELL_HEADER_ROWS`, `BUY_SELL_SERIAL_COLUMN`, `RENT_HEADER_ROWS`
  and `RENT_SERIAL_COLUMNS` give the layouts of the two transaction sheets.

## Prices and timestamps

```python
from streetprop.pricing import PriceEntry, summarize_prices, fix_millis_timestamps

summary = summarize_prices([
    PriceEntry(500, "1100101", "BUY_SELL"),
    PriceEntry(20, "1100202", "RENT"),
    PriceEntry(0, "1100303", "BUY_SELL"),   # unpriced, ignored
])
summary.last_price, summary.sell, summary.rent
# ("500", [(500, "1100101")], [(20, "1100202")])

fix_millis_timestamps(1_700_000_000_000, 0, fill_missing_updated=True)
# (1700000000, 1700000000)
```

## Translations

`parse_translation_tsv` reads rows of key, English and Taiwanese text and
returns `{key: english, key + "TW": taiwanese}`; rows without a key are
skipped. `download_translation(doc_id, output_path)` fetches the sheet at
`translation_sheet_url(doc_id)`, writes the mapping as indented JSON (by
default to `svelte/translation.json`) and returns it. It raises
`TranslationDownloadError` on a failed or empty download.

## Pages and routes

```python
from streetprop.pages import split_country_prop_id, property_title, property_description
from streetprop.routes import route_for, parse_cli_args

split_country_prop_id("tw123")                 # ("TW", 123)
property_title(123, "", "Main Street")         # "Property #123 on Main Street"
property_description("120", 3, 2, "4")         # "120 m2, 3 bedroom, 2 bathroom, 4 floor"

route, params = route_for("GET", "/guest/property/TW12")
route.view, params                             # ("GuestPropertyPublic", {"propId": "TW12"})

parse_cli_args(["UserProfile", "{}"], [])      # ("UserProfile", b"{}")
```

`static_routes()` lists every `Route` with its methods, path pattern, view,
title, handler name and `Access` level. `route_for` raises `LookupError` when
nothing matches; `parse_cli_args` raises `ValueError` when the action or the
payload is missing. `og_timestamp` and `og_url` give the Open Graph time and
address of a property page.

## What this package does not do

- It runs no web server: the routes are a table to look up, not handlers.
- It talks to no database: it builds SQL fragments and yields records, but
  does not run queries or store anything.
- It reads no spreadsheet files; rows must be supplied by the caller.
- It installs no command: `parse_cli_args` only splits arguments.

## Running the tests

Install the package with its `test` extra and run `pytest` in the project
directory.