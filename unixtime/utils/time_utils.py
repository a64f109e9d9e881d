"""Timezone-aware time utilities."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from unixtime.config.settings import get_settings
from unixtime.errors import UnixtimeRangeError, UnknownTimezoneError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_SECOND = timedelta(seconds=1)


def load_zone(zone_name: str) -> ZoneInfo:
    """Return the ZoneInfo for an identifier, raising a catalog error if unknown."""
    try:
        return ZoneInfo(zone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise UnknownTimezoneError(f"Unknown timezone '{zone_name}'", wrapped=exc) from exc


def get_local_timezone() -> ZoneInfo:
    """Get the machine's local timezone as configured or detected at startup."""
    settings = get_settings()
    return ZoneInfo(settings.default_timezone)


def now_local(zone: ZoneInfo | None = None) -> datetime:
    """Get current time in ``zone`` (the local timezone by default)."""
    return datetime.now(zone or get_local_timezone())


def to_local_time(dt: datetime, zone: ZoneInfo | None = None) -> datetime:
    """Convert a datetime to ``zone`` (the local timezone by default)."""
    # Naive datetimes are taken as UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(zone or get_local_timezone())


def local_date_start(dt: datetime | None = None, zone: ZoneInfo | None = None) -> datetime:
    """Get start of day (00:00:00) in ``zone`` for given date or today."""
    if dt is None:
        dt = now_local(zone)
    else:
        dt = to_local_time(dt, zone)

    return dt.replace(hour=0, minute=0, second=0, microsecond=0, fold=0)


def epoch_seconds(dt: datetime) -> int:
    """Whole seconds since the epoch, rounded towards negative infinity."""
    return (dt - EPOCH) // _ONE_SECOND


def epoch_milliseconds(dt: datetime) -> int:
    return (dt - EPOCH) // timedelta(milliseconds=1)


def from_epoch_seconds(unixtime: int, zone: ZoneInfo) -> datetime:
    """Interpret ``unixtime`` as epoch seconds and express it in ``zone``."""
    try:
        return (EPOCH + timedelta(seconds=unixtime)).astimezone(zone)
    except (OverflowError, ValueError) as exc:
        raise UnixtimeRangeError(
            f"Unixtime {unixtime} is outside the supported range (years 1-9999)",
            wrapped=exc,
        ) from exc
