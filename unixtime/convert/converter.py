"""Conversions between epoch seconds and formatted text in a chosen timezone."""
from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

from unixtime.config.timezones import TimezoneCatalog, get_catalog
from unixtime.errors import InvalidUnixtimeError
from unixtime.utils.time_utils import (
    epoch_seconds,
    from_epoch_seconds,
    get_local_timezone,
    load_zone,
    local_date_start,
)

from .tokens import format_datetime, parse_text

logger = logging.getLogger("unixtime.convert")

_INTEGER_RE = re.compile(r"[+-]?\d+")


def coerce_unixtime(value: int | str) -> int:
    """Accept an int or the integer text typed into the unixtime field."""
    if isinstance(value, bool):
        raise InvalidUnixtimeError(f"'{value}' is not a unixtime")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not _INTEGER_RE.fullmatch(text):
        raise InvalidUnixtimeError(f"'{value}' is not an integer number of seconds")
    return int(text)


def to_unixtime(
    text_time: str,
    text_format: str,
    region: str | None,
    city: str | None,
    *,
    catalog: TimezoneCatalog | None = None,
    now: datetime | None = None,
) -> int:
    """Parse ``text_time`` in the selected timezone and return epoch seconds."""
    zone_name = (catalog or get_catalog()).resolve(region, city)
    moment = parse_text(text_time, text_format, load_zone(zone_name), now=now)
    unixtime = epoch_seconds(moment)
    logger.debug("Converted %r (%s, %s) to %d", text_time, text_format, zone_name, unixtime)
    return unixtime


def to_text_time(
    unixtime: int | str,
    text_format: str,
    region: str | None,
    city: str | None,
    *,
    catalog: TimezoneCatalog | None = None,
) -> str:
    """Format epoch seconds in the selected timezone."""
    zone_name = (catalog or get_catalog()).resolve(region, city)
    seconds = coerce_unixtime(unixtime)
    text_time = format_datetime(from_epoch_seconds(seconds, load_zone(zone_name)), text_format)
    logger.debug("Converted %d (%s, %s) to %r", seconds, text_format, zone_name, text_time)
    return text_time


def shortcut_to_now(now: datetime | None = None) -> int:
    """Current epoch seconds."""
    return epoch_seconds(now or datetime.now(timezone.utc))


def shortcut_to_midnight(zone_name: str | None = None, now: datetime | None = None) -> int:
    """Epoch seconds of today's 00:00:00.

    Uses the machine's local timezone unless ``zone_name`` is given.
    """
    zone = load_zone(zone_name) if zone_name else get_local_timezone()
    return epoch_seconds(local_date_start(now, zone))
