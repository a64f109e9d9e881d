"""Region/city timezone catalog derived from the platform timezone database."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

from unixtime.errors import IncompleteSelectionError, TimezoneSourceError, UnknownTimezoneError

logger = logging.getLogger("unixtime.catalog")

UTC_REGION = "UTC"


@dataclass(frozen=True)
class TimezoneOption:
    value: str
    label: str


def split_identifier(zone_name: str) -> tuple[str, str | None]:
    """Split ``Region/City`` on the first separator; bare names have no city."""
    region, sep, city = zone_name.partition("/")
    return region, (city if sep and city else None)


@dataclass(frozen=True)
class TimezoneCatalog:
    """Read-only mapping of region name to its cities, UTC first."""

    regions: Mapping[str, tuple[str, ...]]

    def __len__(self) -> int:
        return len(self.regions)

    def __contains__(self, region: object) -> bool:
        return region in self.regions

    def region_options(self) -> list[str]:
        return list(self.regions)

    def city_options(self, region: str | None) -> list[str]:
        if not region or region == UTC_REGION:
            return []
        return list(self.regions.get(region, ()))

    def has_city(self, region: str, city: str) -> bool:
        return city in self.regions.get(region, ())

    def zone_count(self) -> int:
        return sum(len(cities) or 1 for cities in self.regions.values())

    def resolve(self, region: str | None, city: str | None) -> str:
        """Return the effective timezone identifier for a region/city pair."""
        if not region:
            raise IncompleteSelectionError("Select a region first")
        if region == UTC_REGION:
            return UTC_REGION
        if region not in self.regions:
            raise UnknownTimezoneError(f"Unknown region '{region}'")
        cities = self.regions[region]
        if city is None:
            if cities:
                raise IncompleteSelectionError(f"Select a city in {region}")
            return region
        if city not in cities:
            raise UnknownTimezoneError(f"Unknown city '{city}' in region '{region}'")
        return f"{region}/{city}"


def build_catalog(identifiers: Iterable[str]) -> TimezoneCatalog:
    """Group identifiers by region, keeping enumeration order and dropping duplicates."""
    grouped: dict[str, list[str]] = {UTC_REGION: []}
    for zone_name in identifiers:
        region, city = split_identifier(zone_name)
        if not region:
            continue
        cities = grouped.setdefault(region, [])
        if city and region != UTC_REGION:
            cities.append(city)
    regions = {region: tuple(dict.fromkeys(cities)) for region, cities in grouped.items()}
    return TimezoneCatalog(regions=MappingProxyType(regions))


@lru_cache(maxsize=1)
def get_catalog() -> TimezoneCatalog:
    """Build the catalog from ``zoneinfo`` once per process."""
    identifiers = sorted(available_timezones())
    if not identifiers:
        raise TimezoneSourceError(
            "Timezone database unavailable",
            internal_details="zoneinfo.available_timezones() returned no identifiers; install tzdata",
        )
    catalog = build_catalog(identifiers)
    logger.info("Timezone catalog built: %d regions, %d zones", len(catalog), catalog.zone_count())
    return catalog


def region_option_items(catalog: TimezoneCatalog | None = None) -> list[TimezoneOption]:
    catalog = catalog or get_catalog()
    return [TimezoneOption(value=region, label=region) for region in catalog.region_options()]


def city_option_items(region: str, catalog: TimezoneCatalog | None = None) -> list[TimezoneOption]:
    """Return labelled city options, annotated with the current abbreviation."""
    catalog = catalog or get_catalog()
    options: list[TimezoneOption] = []
    now = datetime.now(timezone.utc)
    for city in catalog.city_options(region):
        try:
            abbreviation = now.astimezone(ZoneInfo(f"{region}/{city}")).tzname()
            label = f"{city} ({abbreviation})" if abbreviation else city
        except (ZoneInfoNotFoundError, ValueError):
            label = city
        options.append(TimezoneOption(value=city, label=label))
    return options
