"""Timezone selection rules and the values the converter reads from."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Union

from unixtime.config.settings import get_settings
from unixtime.config.shortcuts import get_shortcut
from unixtime.config.timezones import UTC_REGION, TimezoneCatalog, get_catalog, split_identifier
from unixtime.convert.converter import shortcut_to_now, to_text_time
from unixtime.errors import ConversionError, UnknownShortcutError, UnknownTimezoneError

logger = logging.getLogger("unixtime.selection")


@dataclass(frozen=True)
class Selection:
    region: Optional[str] = None
    city: Optional[str] = None
    text_format: str = ""


@dataclass(frozen=True)
class TimeValue:
    """Timestamp and text fields; only an explicit conversion moves data between them."""

    unixtime: Union[int, str]
    text_time: str = ""


@dataclass(frozen=True)
class InitialState:
    selection: Selection
    time_value: TimeValue
    zone: str


class SelectionState:
    """Applies the region/city/format rules against a timezone catalog."""

    def __init__(self, catalog: TimezoneCatalog | None = None) -> None:
        self.catalog = catalog or get_catalog()

    def set_region(self, selection: Selection, region: str) -> Selection:
        if region == UTC_REGION:
            return replace(selection, region=UTC_REGION, city=None)
        if region not in self.catalog:
            raise UnknownTimezoneError(f"Unknown region '{region}'")
        cities = self.catalog.city_options(region)
        return replace(selection, region=region, city=cities[0] if cities else None)

    def set_city(self, selection: Selection, city: str | None) -> Selection:
        if city is None:
            return replace(selection, city=None)
        if not selection.region or selection.region == UTC_REGION:
            raise UnknownTimezoneError(f"Region '{selection.region or ''}' has no cities")
        if not self.catalog.has_city(selection.region, city):
            raise UnknownTimezoneError(f"Unknown city '{city}' in region '{selection.region}'")
        return replace(selection, city=city)

    def set_text_format(self, selection: Selection, text_format: str) -> Selection:
        return replace(selection, text_format=text_format)

    def apply_shortcut(self, selection: Selection, label: str) -> Selection:
        shortcut = get_shortcut(label)
        if shortcut is None:
            raise UnknownShortcutError(f"Unknown shortcut '{label}'")
        return replace(selection, region=shortcut.region, city=shortcut.city)

    def is_complete(self, selection: Selection) -> bool:
        try:
            self.catalog.resolve(selection.region, selection.city)
        except ConversionError:
            return False
        return True

    def initial_state(self, guess_zone: str | None = None, now: datetime | None = None) -> InitialState:
        """Seed selection and time fields from the guessed local timezone."""
        settings = get_settings()
        guess = guess_zone or settings.default_timezone
        region, city = split_identifier(guess)
        selection = Selection(text_format=settings.default_text_format)
        if region not in self.catalog:
            logger.warning("Region of local timezone '%s' not found in catalog; leaving selection empty", guess)
        elif region != UTC_REGION and city is not None and self.catalog.has_city(region, city):
            selection = replace(selection, region=region, city=city)
        else:
            if region != UTC_REGION and city is not None:
                logger.warning("City of local timezone '%s' not found in catalog; using first city of %s", guess, region)
            selection = self.set_region(selection, region)

        unixtime = shortcut_to_now(now)
        if self.is_complete(selection):
            zone = self.catalog.resolve(selection.region, selection.city)
        else:
            zone = UTC_REGION
        text_time = to_text_time(unixtime, selection.text_format, *split_identifier(zone), catalog=self.catalog)
        return InitialState(selection=selection, time_value=TimeValue(unixtime=unixtime, text_time=text_time), zone=zone)
