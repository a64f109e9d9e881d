import time
from datetime import datetime, timezone

import pytest

from unixtime.convert.converter import (
    coerce_unixtime,
    shortcut_to_midnight,
    shortcut_to_now,
    to_text_time,
    to_unixtime,
)
from unixtime.errors import (
    IncompleteSelectionError,
    InvalidUnixtimeError,
    TextTimeParseError,
    UnixtimeRangeError,
)

DEFAULT_FORMAT = "YYYY-MM-DD HH:mm:ss z"
LOSSLESS_FORMAT = "YYYY-MM-DD HH:mm:ss"


def test_epoch_zero_in_utc():
    assert to_text_time(0, DEFAULT_FORMAT, "UTC", None) == "1970-01-01 00:00:00 UTC"


def test_new_york_text_to_unixtime():
    assert to_unixtime("2024-01-01 00:00:00", LOSSLESS_FORMAT, "America", "New_York") == 1704085200


def test_text_time_accepts_typed_unixtime():
    assert to_text_time(" 1704085200 ", LOSSLESS_FORMAT, "America", "New_York") == "2024-01-01 00:00:00"


def test_utc_ignores_city():
    assert to_text_time(0, LOSSLESS_FORMAT, "UTC", "Los_Angeles") == "1970-01-01 00:00:00"


@pytest.mark.parametrize("unixtime", [-3155760000, -1, 0, 1, 1704085200, 253402300000])
def test_round_trip_in_fixed_offset_zone(unixtime):
    text = to_text_time(unixtime, LOSSLESS_FORMAT, "Etc", "GMT+5")
    assert to_unixtime(text, LOSSLESS_FORMAT, "Etc", "GMT+5") == unixtime


def test_round_trip_with_zone_abbreviation():
    text = to_text_time(1730615400, DEFAULT_FORMAT, "America", "New_York")
    assert text == "2024-11-03 01:30:00 EST"
    assert to_unixtime(text, DEFAULT_FORMAT, "America", "New_York") == 1730615400


def test_conversion_requires_complete_selection():
    with pytest.raises(IncompleteSelectionError):
        to_unixtime("2024-01-01 00:00:00", LOSSLESS_FORMAT, None, None)
    with pytest.raises(IncompleteSelectionError):
        to_text_time(0, LOSSLESS_FORMAT, "America", None)


def test_mismatched_text_raises():
    with pytest.raises(TextTimeParseError):
        to_unixtime("01/01/2024", LOSSLESS_FORMAT, "UTC", None)


def test_unixtime_out_of_range():
    with pytest.raises(UnixtimeRangeError):
        to_text_time(253402300800, LOSSLESS_FORMAT, "UTC", None)
    with pytest.raises(UnixtimeRangeError):
        to_text_time(10**16, LOSSLESS_FORMAT, "UTC", None)


def test_coerce_unixtime():
    assert coerce_unixtime(42) == 42
    assert coerce_unixtime("-7") == -7
    assert coerce_unixtime("+8") == 8
    for bad in ("1.5", "abc", "", True):
        with pytest.raises(InvalidUnixtimeError):
            coerce_unixtime(bad)


def test_shortcut_to_now_matches_clock():
    assert abs(shortcut_to_now() - time.time()) <= 2


def test_shortcut_to_now_with_fixed_clock():
    assert shortcut_to_now(datetime(2024, 1, 1, tzinfo=timezone.utc)) == 1704067200


def test_midnight_in_given_zone():
    now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert shortcut_to_midnight("America/New_York", now=now) == 1704085200


def test_midnight_defaults_to_local_timezone(monkeypatch):
    from unixtime.config.settings import get_settings

    monkeypatch.setenv("DEFAULT_TIMEZONE", "Asia/Tokyo")
    get_settings.cache_clear()
    now = datetime(2024, 1, 1, 20, 0, tzinfo=timezone.utc)
    # 05:00 on Jan 2 in Tokyo
    assert shortcut_to_midnight(now=now) == 1704121200
