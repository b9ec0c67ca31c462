"""Download a translation sheet as TSV and turn it into a JSON dictionary."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from http import HTTPStatus
from pathlib import Path

SHEET_EXPORT_URL = "https://docs.google.com/spreadsheets/d/{doc_id}/export?format=tsv&gid={gid}"
DEFAULT_OUTPUT = Path("svelte") / "translation.json"
TW_SUFFIX = "TW"

_ESCAPES = {"t": "\t", "n": "\n", "\\": "\\"}


class TranslationDownloadError(RuntimeError):
    """The translation sheet could not be downloaded."""


def translation_sheet_url(doc_id: str) -> str:
    """Return the TSV export address of the first sheet of a document."""
    return SHEET_EXPORT_URL.format(doc_id=doc_id, gid=0)


def _unescape(cell: str) -> str:
    if "\\" not in cell:
        return cell
    out: list[str] = []
    chars = iter(cell)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, "")
            out.append(_ESCAPES.get(nxt, "\\" + nxt))
        else:
            out.append(ch)
    return "".join(out)


def parse_translation_tsv(text: str) -> dict[str, str]:
    """Parse rows of key, EN, TW into a mapping of key to EN and keyTW to TW.

    Rows with an empty key are skipped; columns after the third are ignored.
    """
    result: dict[str, str] = {}
    for lineno, line in enumerate(text.split("\n"), start=1):
        cols = line.removesuffix("\r").split("\t")
        key = _unescape(cols[0])
        if not key:
            continue
        if len(cols) < 3:
            raise ValueError(f"line {lineno}: expected key, EN and TW columns")
        result[key] = _unescape(cols[1])
        result[key + TW_SUFFIX] = _unescape(cols[2])
    return result


def download_translation(doc_id: str, output_path: str | Path = DEFAULT_OUTPUT) -> dict[str, str]:
    """Fetch the sheet, write it as pretty JSON to output_path and return the mapping."""
    url = translation_sheet_url(doc_id)
    try:
        with urllib.request.urlopen(url) as response:
            status = response.status
            if status != HTTPStatus.OK:
                raise TranslationDownloadError(f"unexpected status {status} from {url}")
            body = response.read()
    except urllib.error.HTTPError as exc:
        raise TranslationDownloadError(f"unexpected status {exc.code} from {url}") from exc
    except urllib.error.URLError as exc:
        raise TranslationDownloadError(f"request to {url} failed: {exc.reason}") from exc
    if not body:
        raise TranslationDownloadError(f"empty response from {url}")

    translations = parse_translation_tsv(body.decode("utf-8"))
    Path(output_path).write_text(
        json.dumps(translations, indent=2, ensure_ascii=False, sort_keys=True),
        encoding="utf-8",
    )
    return translations