from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from unixtime.convert.tokens import Token, format_datetime, parse_text, tokenize
from unixtime.errors import FormatTokenError, TextTimeParseError
from unixtime.utils.time_utils import epoch_seconds

UTC = ZoneInfo("UTC")
NEW_YORK = ZoneInfo("America/New_York")
SAMPLE = datetime(2024, 3, 5, 14, 7, 9, tzinfo=UTC)  # 1709647629


def test_tokenize_splits_tokens_and_literals():
    assert tokenize("YYYY-MM-DD [at] HH") == [
        Token("YYYY"),
        Token("-", literal=True),
        Token("MM"),
        Token("-", literal=True),
        Token("DD"),
        Token(" ", literal=True),
        Token("at", literal=True),
        Token(" ", literal=True),
        Token("HH"),
    ]


def test_format_default_pattern():
    assert format_datetime(SAMPLE, "YYYY-MM-DD HH:mm:ss z") == "2024-03-05 14:07:09 UTC"


def test_format_names_and_ordinals():
    assert format_datetime(SAMPLE, "dddd, MMMM Do YYYY h:mm A") == "Tuesday, March 5th 2024 2:07 PM"
    assert format_datetime(SAMPLE, "ddd MMM D YY a") == "Tue Mar 5 24 pm"


def test_format_calendar_numbers():
    assert format_datetime(SAMPLE, "Q [W]W GGGG d") == "1 W10 2024 2"
    assert format_datetime(SAMPLE, "X x SSS") == "1709647629 1709647629000 000"


def test_format_offsets_and_zone_names():
    winter = datetime(2024, 1, 15, 9, 0, tzinfo=NEW_YORK)
    assert format_datetime(winter, "Z ZZ z zzz") == "-05:00 -0500 EST America/New_York"


def test_format_midnight_hour_variants():
    midnight = datetime(2024, 1, 1, 0, 5, tzinfo=UTC)
    assert format_datetime(midnight, "H HH h hh k kk") == "0 00 12 12 24 24"


def test_format_escaped_text_is_literal():
    assert format_datetime(SAMPLE, "[Year] YYYY [MM]") == "Year 2024 MM"


def test_format_negative_epoch():
    before = datetime(1969, 12, 31, 23, 59, 59, tzinfo=UTC)
    assert format_datetime(before, "X") == "-1"


def test_parse_full_datetime():
    moment = parse_text("2024-03-05 14:07:09", "YYYY-MM-DD HH:mm:ss", UTC)
    assert epoch_seconds(moment) == 1709647629


def test_parse_in_zone():
    moment = parse_text("2024-01-01 00:00:00", "YYYY-MM-DD HH:mm:ss", NEW_YORK)
    assert epoch_seconds(moment) == 1704085200


def test_parse_twelve_hour_clock():
    moment = parse_text("05/03/2024 02:07:09 pm", "DD/MM/YYYY hh:mm:ss a", UTC)
    assert moment.hour == 14
    moment = parse_text("05/03/2024 12:30:00 AM", "DD/MM/YYYY hh:mm:ss A", UTC)
    assert moment.hour == 0


def test_parse_month_names_and_ordinals():
    moment = parse_text("March 5th, 2024", "MMMM Do, YYYY", UTC)
    assert (moment.year, moment.month, moment.day) == (2024, 3, 5)
    moment = parse_text("05-mar-24", "DD-MMM-YY", UTC)
    assert (moment.year, moment.month, moment.day) == (2024, 3, 5)


def test_parse_two_digit_year_pivot():
    assert parse_text("69", "YY", UTC).year == 1969
    assert parse_text("68", "YY", UTC).year == 2068


def test_parse_missing_fields_default_from_now():
    now = datetime(2024, 6, 15, 10, 0, tzinfo=timezone.utc)
    assert parse_text("08:30", "HH:mm", UTC, now=now) == datetime(2024, 6, 15, 8, 30, tzinfo=UTC)
    assert parse_text("2020", "YYYY", UTC, now=now) == datetime(2020, 1, 1, tzinfo=UTC)
    assert parse_text("07", "MM", UTC, now=now) == datetime(2024, 7, 1, tzinfo=UTC)


def test_parse_explicit_offset_overrides_zone():
    moment = parse_text("2024-01-01T00:00:00+09:00", "YYYY-MM-DD[T]HH:mm:ssZ", NEW_YORK)
    assert epoch_seconds(moment) == 1704034800


def test_parse_epoch_tokens():
    assert epoch_seconds(parse_text("1700000000", "X", NEW_YORK)) == 1700000000
    assert epoch_seconds(parse_text("-1500", "x", UTC)) == -2


def test_parse_abbreviation_selects_repeated_hour():
    edt = parse_text("2024-11-03 01:30:00 EDT", "YYYY-MM-DD HH:mm:ss z", NEW_YORK)
    est = parse_text("2024-11-03 01:30:00 EST", "YYYY-MM-DD HH:mm:ss z", NEW_YORK)
    assert epoch_seconds(edt) == 1730611800
    assert epoch_seconds(est) == 1730615400


def test_parse_rejects_wrong_abbreviation():
    with pytest.raises(TextTimeParseError):
        parse_text("2024-01-01 00:00:00 PST", "YYYY-MM-DD HH:mm:ss z", NEW_YORK)


def test_parse_is_strict_about_shape():
    with pytest.raises(TextTimeParseError):
        parse_text("2024-01-01", "YYYY-MM-DD HH:mm:ss", UTC)
    with pytest.raises(TextTimeParseError):
        parse_text("2024-01-01 00:00:00 extra", "YYYY-MM-DD HH:mm:ss", UTC)
    with pytest.raises(TextTimeParseError):
        parse_text("2024-1-01", "YYYY-MM-DD", UTC)


def test_parse_rejects_impossible_dates():
    with pytest.raises(TextTimeParseError):
        parse_text("2023-02-29", "YYYY-MM-DD", UTC)
    with pytest.raises(TextTimeParseError):
        parse_text("2024-01-01 24:00", "YYYY-MM-DD HH:mm", UTC)


def test_parse_rejects_output_only_tokens():
    with pytest.raises(FormatTokenError):
        parse_text("Monday 2024", "dddd YYYY", UTC)


def test_parse_long_runs_of_variable_width_tokens_fail_fast():
    import time

    started = time.perf_counter()
    with pytest.raises(TextTimeParseError):
        parse_text("1" * 60 + "x", "DHms" * 10, UTC)
    assert time.perf_counter() - started < 1.0


def test_parse_variable_width_tokens_take_longest_match():
    assert epoch_seconds(parse_text("2024-3-5 14:7", "YYYY-M-D H:m", UTC)) == 1709647620
    assert epoch_seconds(parse_text("2024-115", "YYYY-MD", UTC)) == 1730764800
