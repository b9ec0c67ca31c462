from datetime import datetime

import pytest

from streetprop.pages import (
    og_timestamp,
    og_url,
    property_description,
    property_title,
    split_country_prop_id,
)


@pytest.mark.parametrize(
    "param, expected",
    [
        ("TW123", ("TW", 123)),
        ("tw123", ("TW", 123)),
        ("123", ("", 123)),
        ("US", ("", 0)),
        ("ABx", ("AB", 0)),
        ("", ("", 0)),
        ("-5", ("", 0)),
    ],
)
def test_split_country_prop_id(param, expected):
    assert split_country_prop_id(param) == expected


def test_split_rejects_overflow():
    assert split_country_prop_id("TW" + "9" * 30) == ("TW", 0)


def test_description_all_parts():
    assert property_description("120", 3, 2, "4") == "120 m2, 3 bedroom, 2 bathroom, 4 floor"


def test_description_omits_zero_parts():
    assert property_description("80", 0, 0, "0") == "80 m2"
    assert property_description("80", 0, 1, "") == "80 m2, 1 bathroom"


def test_title_prefers_address():
    assert property_title(7, "Main St", "Other") == "Property #7 on Main St"
    assert property_title(7, "", "Other") == "Property #7 on Other"
    assert property_title(7, "", "") == "Property #7"


def test_og_url():
    assert og_url("https://example.com", "guest/property", "TW", 42) == (
        "https://example.com/guest/property/TW42"
    )


@pytest.mark.parametrize("ts", [0, 1_700_000_000, 1_234_567_890])
def test_og_timestamp_round_trip(ts):
    text = og_timestamp(ts)
    parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    assert parsed.tzinfo is not None
    assert int(parsed.timestamp()) == ts
    assert len(text.split("T")[0]) == 10