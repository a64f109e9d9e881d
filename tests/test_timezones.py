from zoneinfo import available_timezones

import pytest

from unixtime.config.timezones import build_catalog, city_option_items, get_catalog, split_identifier
from unixtime.errors import IncompleteSelectionError, UnknownTimezoneError

SAMPLE = [
    "Africa/Abidjan",
    "America/Argentina/Buenos_Aires",
    "America/New_York",
    "America/New_York",
    "UTC",
    "GMT",
    "Europe/London",
]


def test_utc_region_is_first_even_when_enumerated_later():
    catalog = build_catalog(SAMPLE)
    assert catalog.region_options() == ["UTC", "Africa", "America", "GMT", "Europe"]


def test_utc_present_without_source_entry():
    catalog = build_catalog(["Asia/Tokyo"])
    assert catalog.region_options()[0] == "UTC"
    assert catalog.city_options("UTC") == []


def test_cities_split_on_first_separator_and_deduplicated():
    catalog = build_catalog(SAMPLE)
    assert catalog.city_options("America") == ["Argentina/Buenos_Aires", "New_York"]


def test_regions_without_cities_have_empty_options():
    catalog = build_catalog(SAMPLE)
    assert catalog.city_options("GMT") == []
    assert catalog.city_options("Nowhere") == []
    assert catalog.city_options(None) == []


def test_split_identifier():
    assert split_identifier("America/Indiana/Knox") == ("America", "Indiana/Knox")
    assert split_identifier("UTC") == ("UTC", None)


def test_resolve_identifiers():
    catalog = build_catalog(SAMPLE)
    assert catalog.resolve("UTC", "Ignored") == "UTC"
    assert catalog.resolve("America", "New_York") == "America/New_York"
    assert catalog.resolve("GMT", None) == "GMT"


def test_resolve_requires_region_and_city():
    catalog = build_catalog(SAMPLE)
    with pytest.raises(IncompleteSelectionError):
        catalog.resolve(None, None)
    with pytest.raises(IncompleteSelectionError):
        catalog.resolve("America", None)


def test_resolve_rejects_unknown_entries():
    catalog = build_catalog(SAMPLE)
    with pytest.raises(UnknownTimezoneError):
        catalog.resolve("Atlantis", "Capital")
    with pytest.raises(UnknownTimezoneError):
        catalog.resolve("America", "Springfield")


def test_catalog_is_read_only():
    catalog = build_catalog(SAMPLE)
    with pytest.raises(TypeError):
        catalog.regions["Mars"] = ("Olympus",)  # type: ignore[index]


def test_platform_catalog_contains_every_identifier():
    catalog = get_catalog()
    regions = set(catalog.region_options())
    assert catalog.region_options()[0] == "UTC"
    for zone_name in available_timezones():
        if "/" not in zone_name:
            assert zone_name in regions
            continue
        region, city = zone_name.split("/", 1)
        assert region in regions
        assert city in catalog.city_options(region)


def test_platform_catalog_is_built_once():
    assert get_catalog() is get_catalog()


def test_city_option_labels_include_abbreviation():
    catalog = build_catalog(["Asia/Tokyo"])
    options = city_option_items("Asia", catalog)
    assert [option.value for option in options] == ["Tokyo"]
    assert options[0].label == "Tokyo (JST)"
