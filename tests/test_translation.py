import json
from unittest import mock

import pytest

from streetprop.translation import (
    TranslationDownloadError,
    download_translation,
    parse_translation_tsv,
    translation_sheet_url,
)


def test_sheet_url():
    assert (
        translation_sheet_url("abc")
        == "https://docs.google.com/spreadsheets/d/abc/export?format=tsv&gid=0"
    )


def test_parse_basic_rows_and_skips_empty_key():
    text = "key\tEN\tTW\nhello\tHello\t哈囉\n\tdup\tdup\nbye\tBye\t再見\textra\n"
    assert parse_translation_tsv(text) == {
        "key": "EN",
        "keyTW": "TW",
        "hello": "Hello",
        "helloTW": "哈囉",
        "bye": "Bye",
        "byeTW": "再見",
    }


def test_parse_without_trailing_newline_and_crlf():
    text = "a\tA\tAA\r\nb\tB\tBB"
    assert parse_translation_tsv(text) == {"a": "A", "aTW": "AA", "b": "B", "bTW": "BB"}


def test_parse_unescapes_cells():
    result = parse_translation_tsv("k\tone\\ttwo\\nthree\tback\\\\slash")
    assert result["k"] == "one\ttwo\nthree"
    assert result["kTW"] == "back\\slash"


def test_parse_missing_columns_raises():
    with pytest.raises(ValueError):
        parse_translation_tsv("key\tonly-en\n")


def _fake_response(status, body):
    response = mock.MagicMock()
    response.status = status
    response.read.return_value = body
    cm = mock.MagicMock()
    cm.__enter__.return_value = response
    cm.__exit__.return_value = False
    return cm


def test_download_writes_json(tmp_path):
    body = "hi\tHi\t嗨\n".encode("utf-8")
    target = tmp_path / "translation.json"
    with mock.patch("urllib.request.urlopen", return_value=_fake_response(200, body)) as opened:
        result = download_translation("doc1", target)
    assert opened.call_args[0][0] == translation_sheet_url("doc1")
    assert result == {"hi": "Hi", "hiTW": "嗨"}
    assert json.loads(target.read_text(encoding="utf-8")) == result


def test_download_bad_status_raises(tmp_path):
    target = tmp_path / "translation.json"
    with mock.patch("urllib.request.urlopen", return_value=_fake_response(404, b"")):
        with pytest.raises(TranslationDownloadError):
            download_translation("doc1", target)
    assert not target.exists()