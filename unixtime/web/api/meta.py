"""Metadata endpoints for dropdown and shortcut options."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from unixtime.config.settings import Settings
from unixtime.config.shortcuts import iter_shortcuts
from unixtime.config.timezones import TimezoneCatalog, city_option_items, region_option_items

from . import deps, schemas

router = APIRouter(prefix="/api/meta", tags=["meta"])


@router.get("/options", response_model=schemas.OptionsResponse)
def get_options(
    settings: Settings = Depends(deps.get_app_settings),
    catalog: TimezoneCatalog = Depends(deps.get_timezone_catalog),
) -> schemas.OptionsResponse:
    return schemas.OptionsResponse(
        regions=[schemas.OptionItem.model_validate(option) for option in region_option_items(catalog)],
        shortcuts=[schemas.ShortcutItem.model_validate(shortcut) for shortcut in iter_shortcuts()],
        default_text_format=settings.default_text_format,
        default_timezone=settings.default_timezone,
        strict_conversion=settings.strict_conversion,
        midnight_uses_selected_timezone=settings.midnight_uses_selected_timezone,
    )


@router.get("/regions/{region}/cities", response_model=schemas.CitiesResponse)
def get_cities(region: str, catalog: TimezoneCatalog = Depends(deps.get_timezone_catalog)) -> schemas.CitiesResponse:
    if region not in catalog:
        raise HTTPException(status_code=404, detail=f"Unknown region '{region}'")
    return schemas.CitiesResponse(
        region=region,
        cities=[schemas.OptionItem.model_validate(option) for option in city_option_items(region, catalog)],
    )
