"""FastAPI dependencies used across routers."""
from __future__ import annotations

from unixtime.config.settings import Settings, get_settings
from unixtime.config.timezones import TimezoneCatalog, get_catalog
from unixtime.state.selection import SelectionState


def get_app_settings() -> Settings:
    return get_settings()


def get_timezone_catalog() -> TimezoneCatalog:
    return get_catalog()


def get_selection_state() -> SelectionState:
    return SelectionState(get_catalog())
