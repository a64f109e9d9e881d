"""Conversion routes and the Now/Midnight timestamp shortcuts."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from unixtime.config.settings import Settings
from unixtime.config.timezones import TimezoneCatalog
from unixtime.convert import converter
from unixtime.errors import ConversionError, IncompleteSelectionError, UnknownTimezoneError

from . import deps, schemas

logger = logging.getLogger("unixtime.web.convert")

router = APIRouter(prefix="/api", tags=["convert"])

INVALID_TEXT_TIME = "Invalid Date"


@router.post("/convert/to-unixtime", response_model=schemas.UnixtimeResponse)
def convert_to_unixtime(
    payload: schemas.ToUnixtimeRequest,
    settings: Settings = Depends(deps.get_app_settings),
    catalog: TimezoneCatalog = Depends(deps.get_timezone_catalog),
) -> schemas.UnixtimeResponse:
    try:
        unixtime = converter.to_unixtime(
            payload.text_time, payload.text_format, payload.region, payload.city, catalog=catalog
        )
    except (IncompleteSelectionError, UnknownTimezoneError) as exc:
        raise HTTPException(status_code=422, detail=exc.user_message) from exc
    except ConversionError as exc:
        logger.warning("Text time rejected: %s (%s)", exc.user_message, exc.internal())
        if settings.strict_conversion:
            raise HTTPException(status_code=422, detail=exc.user_message) from exc
        return schemas.UnixtimeResponse(unixtime=None, valid=False, error=exc.user_message)
    return schemas.UnixtimeResponse(unixtime=unixtime)


@router.post("/convert/to-text", response_model=schemas.TextTimeResponse)
def convert_to_text_time(
    payload: schemas.ToTextTimeRequest,
    settings: Settings = Depends(deps.get_app_settings),
    catalog: TimezoneCatalog = Depends(deps.get_timezone_catalog),
) -> schemas.TextTimeResponse:
    try:
        text_time = converter.to_text_time(
            payload.unixtime, payload.text_format, payload.region, payload.city, catalog=catalog
        )
    except (IncompleteSelectionError, UnknownTimezoneError) as exc:
        raise HTTPException(status_code=422, detail=exc.user_message) from exc
    except ConversionError as exc:
        logger.warning("Unixtime rejected: %s", exc.internal())
        if settings.strict_conversion:
            raise HTTPException(status_code=422, detail=exc.user_message) from exc
        return schemas.TextTimeResponse(text_time=INVALID_TEXT_TIME, valid=False, error=exc.user_message)
    return schemas.TextTimeResponse(text_time=text_time)


@router.get("/shortcuts/now", response_model=schemas.UnixtimeResponse)
def now_shortcut() -> schemas.UnixtimeResponse:
    return schemas.UnixtimeResponse(unixtime=converter.shortcut_to_now())


@router.get("/shortcuts/midnight", response_model=schemas.UnixtimeResponse)
def midnight_shortcut(
    timezone: str | None = Query(default=None, description="Browser timezone, used as the local day boundary"),
    region: str | None = Query(default=None),
    city: str | None = Query(default=None),
    settings: Settings = Depends(deps.get_app_settings),
    catalog: TimezoneCatalog = Depends(deps.get_timezone_catalog),
) -> schemas.UnixtimeResponse:
    zone_name = timezone or None
    try:
        if settings.midnight_uses_selected_timezone and region:
            zone_name = catalog.resolve(region, city)
        unixtime = converter.shortcut_to_midnight(zone_name)
    except ConversionError as exc:
        raise HTTPException(status_code=422, detail=exc.user_message) from exc
    return schemas.UnixtimeResponse(unixtime=unixtime)
