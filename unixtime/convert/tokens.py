"""Day.js style format tokens: rendering and strict parsing of date/time text.

Tokens follow the conventional vocabulary (``YYYY-MM-DD HH:mm:ss z``). Text in
square brackets is emitted verbatim; any character that is not part of a token
is a literal as well. Names (months, weekdays, meridiem) are English.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Callable

from unixtime.errors import FormatTokenError, TextTimeParseError
from unixtime.utils.time_utils import EPOCH, epoch_milliseconds, epoch_seconds

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
MONTHS_SHORT = tuple(name[:3] for name in MONTHS)
WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
WEEKDAYS_SHORT = tuple(name[:3] for name in WEEKDAYS)
WEEKDAYS_MIN = tuple(name[:2] for name in WEEKDAYS)

# Longer tokens must precede their prefixes.
_TOKEN_RE = re.compile(
    r"\[([^\]]*)\]"
    r"|YYYY|YY|Q|MMMM|MMM|MM|M|Do|DD|D|dddd|ddd|dd|d"
    r"|HH|H|hh|h|kk|k|mm|m|ss|s|SSS|SS|S|A|a|ZZ|Z|zzz|z|X|x|WW|W|GGGG"
)


@dataclass(frozen=True)
class Token:
    text: str
    literal: bool = False


def tokenize(text_format: str) -> list[Token]:
    """Split a format string into pattern tokens and literal runs."""
    tokens: list[Token] = []
    position = 0
    for match in _TOKEN_RE.finditer(text_format):
        if match.start() > position:
            tokens.append(Token(text_format[position:match.start()], literal=True))
        if match.group(1) is not None:
            if match.group(1):
                tokens.append(Token(match.group(1), literal=True))
        else:
            tokens.append(Token(match.group(0)))
        position = match.end()
    if position < len(text_format):
        tokens.append(Token(text_format[position:], literal=True))
    return tokens


# -- rendering -------------------------------------------------------------


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def _offset(dt: datetime, separator: str) -> str:
    offset = dt.utcoffset() or timedelta(0)
    minutes = round(offset.total_seconds() / 60)
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


def _zone_name(dt: datetime) -> str:
    return getattr(dt.tzinfo, "key", None) or dt.tzname() or ""


def _sunday_index(dt: datetime) -> int:
    return (dt.weekday() + 1) % 7


_FORMATTERS: dict[str, Callable[[datetime], str]] = {
    "YYYY": lambda dt: f"{dt.year:04d}",
    "YY": lambda dt: f"{dt.year:04d}"[-2:],
    "Q": lambda dt: str((dt.month - 1) // 3 + 1),
    "M": lambda dt: str(dt.month),
    "MM": lambda dt: f"{dt.month:02d}",
    "MMM": lambda dt: MONTHS_SHORT[dt.month - 1],
    "MMMM": lambda dt: MONTHS[dt.month - 1],
    "D": lambda dt: str(dt.day),
    "DD": lambda dt: f"{dt.day:02d}",
    "Do": lambda dt: _ordinal(dt.day),
    "d": lambda dt: str(_sunday_index(dt)),
    "dd": lambda dt: WEEKDAYS_MIN[_sunday_index(dt)],
    "ddd": lambda dt: WEEKDAYS_SHORT[_sunday_index(dt)],
    "dddd": lambda dt: WEEKDAYS[_sunday_index(dt)],
    "H": lambda dt: str(dt.hour),
    "HH": lambda dt: f"{dt.hour:02d}",
    "h": lambda dt: str(dt.hour % 12 or 12),
    "hh": lambda dt: f"{dt.hour % 12 or 12:02d}",
    "k": lambda dt: str(dt.hour or 24),
    "kk": lambda dt: f"{dt.hour or 24:02d}",
    "m": lambda dt: str(dt.minute),
    "mm": lambda dt: f"{dt.minute:02d}",
    "s": lambda dt: str(dt.second),
    "ss": lambda dt: f"{dt.second:02d}",
    "S": lambda dt: str(dt.microsecond // 100000),
    "SS": lambda dt: f"{dt.microsecond // 10000:02d}",
    "SSS": lambda dt: f"{dt.microsecond // 1000:03d}",
    "A": lambda dt: "PM" if dt.hour >= 12 else "AM",
    "a": lambda dt: "pm" if dt.hour >= 12 else "am",
    "Z": lambda dt: _offset(dt, ":"),
    "ZZ": lambda dt: _offset(dt, ""),
    "z": lambda dt: dt.tzname() or "",
    "zzz": _zone_name,
    "X": lambda dt: str(epoch_seconds(dt)),
    "x": lambda dt: str(epoch_milliseconds(dt)),
    "W": lambda dt: str(dt.isocalendar()[1]),
    "WW": lambda dt: f"{dt.isocalendar()[1]:02d}",
    "GGGG": lambda dt: f"{dt.isocalendar()[0]:04d}",
}


def format_datetime(dt: datetime, text_format: str) -> str:
    """Render an aware datetime using format tokens."""
    parts: list[str] = []
    for token in tokenize(text_format):
        parts.append(token.text if token.literal else _FORMATTERS[token.text](dt))
    return "".join(parts)


# -- parsing ---------------------------------------------------------------


def _names(names: tuple[str, ...]) -> str:
    return "(?i:" + "|".join(names) + ")"


def _two_digit_year(value: str) -> int:
    year = int(value)
    return year + (1900 if year > 68 else 2000)


def _month_name(value: str) -> int:
    lowered = value.lower()
    for index, (full, short) in enumerate(zip(MONTHS, MONTHS_SHORT), start=1):
        if lowered in (full.lower(), short.lower()):
            return index
    raise ValueError(value)


def _offset_minutes(value: str) -> int:
    if value.upper() == "Z":
        return 0
    sign = -1 if value[0] == "-" else 1
    digits = value[1:].replace(":", "")
    return sign * (int(digits[:2]) * 60 + int(digits[2:] or 0))


def _epoch_ms(value: str, scale: int) -> int:
    try:
        return int((Decimal(value) * scale).to_integral_value(rounding="ROUND_FLOOR"))
    except InvalidOperation as exc:
        raise ValueError(value) from exc


# token -> (regex, field, converter)
_PARSERS: dict[str, tuple[str, str, Callable[[str], object]]] = {
    "YYYY": (r"[+-]?\d{4}", "year", int),
    "YY": (r"\d{2}", "year", _two_digit_year),
    "M": (r"\d{1,2}", "month", int),
    "MM": (r"\d{2}", "month", int),
    "MMM": (_names(MONTHS_SHORT), "month", _month_name),
    "MMMM": (_names(MONTHS), "month", _month_name),
    "D": (r"\d{1,2}", "day", int),
    "DD": (r"\d{2}", "day", int),
    "Do": (r"\d{1,2}(?:st|nd|rd|th)", "day", lambda value: int(value[:-2])),
    "H": (r"\d{1,2}", "hour", int),
    "HH": (r"\d{2}", "hour", int),
    "h": (r"\d{1,2}", "hour", int),
    "hh": (r"\d{2}", "hour", int),
    "k": (r"\d{1,2}", "hour", lambda value: int(value) % 24),
    "kk": (r"\d{2}", "hour", lambda value: int(value) % 24),
    "m": (r"\d{1,2}", "minute", int),
    "mm": (r"\d{2}", "minute", int),
    "s": (r"\d{1,2}", "second", int),
    "ss": (r"\d{2}", "second", int),
    "S": (r"\d", "millisecond", lambda value: int(value) * 100),
    "SS": (r"\d{2}", "millisecond", lambda value: int(value) * 10),
    "SSS": (r"\d{3}", "millisecond", int),
    "A": (r"(?i:am|pm)", "afternoon", lambda value: value.lower() == "pm"),
    "a": (r"(?i:am|pm)", "afternoon", lambda value: value.lower() == "pm"),
    "Z": (r"[+-]\d{2}:?\d{2}|Z", "offset", _offset_minutes),
    "ZZ": (r"[+-]\d{2}:?\d{2}|Z", "offset", _offset_minutes),
    "z": (r"[A-Za-z]{1,6}|[+-]\d{2}(?:\d{2})?", "abbreviation", str),
    "X": (r"[+-]?\d+(?:\.\d+)?", "epoch_ms", lambda value: _epoch_ms(value, 1000)),
    "x": (r"[+-]?\d+", "epoch_ms", lambda value: _epoch_ms(value, 1)),
}


_COMPILED_PARSERS: dict[str, re.Pattern[str]] = {token: re.compile(spec[0]) for token, spec in _PARSERS.items()}


@dataclass(frozen=True)
class _Step:
    literal: str | None = None
    token: str | None = None


def _compile(text_format: str) -> list[_Step]:
    steps: list[_Step] = []
    for token in tokenize(text_format):
        if token.literal:
            steps.append(_Step(literal=token.text))
            continue
        if token.text not in _PARSERS:
            raise FormatTokenError(
                f"Token '{token.text}' can be used for output only, not for parsing",
            )
        steps.append(_Step(token=token.text))
    return steps


def _scan(text: str, text_format: str, steps: list[_Step]) -> dict[str, object]:
    """Match tokens left to right; each takes its longest match and is never revisited."""
    values: dict[str, object] = {}
    position = 0
    for step in steps:
        if step.literal is not None:
            if not text.startswith(step.literal, position):
                break
            position += len(step.literal)
            continue
        match = _COMPILED_PARSERS[step.token].match(text, position)
        if match is None:
            break
        _, field, convert = _PARSERS[step.token]
        try:
            values[field] = convert(match.group(0))
        except ValueError as exc:
            raise TextTimeParseError(f"Invalid value '{match.group(0)}' in '{text}'", wrapped=exc) from exc
        position = match.end()
    else:
        if position == len(text):
            return values
    raise TextTimeParseError(
        f"'{text}' does not match format '{text_format}'",
        internal_details=f"stopped at offset {position}",
    )


def _resolve_fold(naive: datetime, zone, abbreviation: str | None, text: str) -> datetime:
    candidate = naive.replace(tzinfo=zone, fold=0)
    if abbreviation is None:
        return candidate
    for fold in (0, 1):
        moment = naive.replace(tzinfo=zone, fold=fold)
        if moment.tzname() == abbreviation:
            return moment
    raise TextTimeParseError(
        f"Timezone abbreviation '{abbreviation}' does not match the selected timezone",
        internal_details=f"text={text!r} expected={candidate.tzname()!r}",
    )


def parse_text(text: str, text_format: str, zone, now: datetime | None = None) -> datetime:
    """Parse ``text`` strictly against ``text_format`` as a wall time in ``zone``.

    Returns an aware datetime. Offset (``Z``) and epoch (``X``/``x``) tokens
    pin the instant independently of ``zone``.
    """
    values = _scan(text, text_format, _compile(text_format))

    if "epoch_ms" in values:
        try:
            return (EPOCH + timedelta(milliseconds=values["epoch_ms"])).astimezone(zone)
        except (OverflowError, ValueError) as exc:
            raise TextTimeParseError(f"'{text}' is outside the supported range", wrapped=exc) from exc

    today = (now or datetime.now(timezone.utc)).astimezone(zone)
    year = values.get("year")
    month = values.get("month")
    day = values.get("day")
    if month is None:
        month = 1 if year is not None else today.month
    if day is None:
        day = 1 if (year is not None or "month" in values) else today.day
    if year is None:
        year = today.year

    hour = values.get("hour", 0)
    afternoon = values.get("afternoon")
    if afternoon is not None:
        if afternoon and hour < 12:
            hour += 12
        elif not afternoon and hour == 12:
            hour = 0

    try:
        naive = datetime(
            year,
            month,
            day,
            hour,
            values.get("minute", 0),
            values.get("second", 0),
            values.get("millisecond", 0) * 1000,
        )
    except (ValueError, OverflowError) as exc:
        raise TextTimeParseError(f"'{text}' is not a valid date/time", wrapped=exc) from exc

    if "offset" in values:
        return naive.replace(tzinfo=timezone(timedelta(minutes=values["offset"])))
    return _resolve_fold(naive, zone, values.get("abbreviation"), text)
