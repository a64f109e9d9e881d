"""Selection routes: startup guess and the region/city/format/shortcut setters.

The browser holds the current selection and posts it back with each change;
the server applies the rules and answers with the new selection.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from unixtime.errors import ConversionError
from unixtime.state.selection import Selection, SelectionState

from . import deps, schemas

logger = logging.getLogger("unixtime.web.selection")

router = APIRouter(prefix="/api", tags=["selection"])


def _to_selection(model: schemas.SelectionModel) -> Selection:
    return Selection(region=model.region, city=model.city, text_format=model.text_format)


def _respond(state: SelectionState, selection: Selection) -> schemas.SelectionResponse:
    complete = state.is_complete(selection)
    return schemas.SelectionResponse(
        region=selection.region,
        city=selection.city,
        text_format=selection.text_format,
        complete=complete,
        zone=state.catalog.resolve(selection.region, selection.city) if complete else None,
    )


def _reject(exc: ConversionError) -> HTTPException:
    logger.warning("Selection rejected: %s", exc.internal())
    return HTTPException(status_code=422, detail=exc.user_message)


@router.get("/state/initial", response_model=schemas.InitialStateResponse)
def get_initial_state(
    timezone: str | None = Query(default=None, description="Browser timezone used to preselect region and city"),
    state: SelectionState = Depends(deps.get_selection_state),
) -> schemas.InitialStateResponse:
    initial = state.initial_state(timezone or None)
    return schemas.InitialStateResponse(
        selection=_respond(state, initial.selection),
        unixtime=initial.time_value.unixtime,
        text_time=initial.time_value.text_time,
        zone=initial.zone,
    )


@router.post("/selection/region", response_model=schemas.SelectionResponse)
def change_region(
    payload: schemas.RegionChange,
    state: SelectionState = Depends(deps.get_selection_state),
) -> schemas.SelectionResponse:
    try:
        selection = state.set_region(_to_selection(payload.selection), payload.region)
    except ConversionError as exc:
        raise _reject(exc) from exc
    return _respond(state, selection)


@router.post("/selection/city", response_model=schemas.SelectionResponse)
def change_city(
    payload: schemas.CityChange,
    state: SelectionState = Depends(deps.get_selection_state),
) -> schemas.SelectionResponse:
    try:
        selection = state.set_city(_to_selection(payload.selection), payload.city)
    except ConversionError as exc:
        raise _reject(exc) from exc
    return _respond(state, selection)


@router.post("/selection/format", response_model=schemas.SelectionResponse)
def change_format(
    payload: schemas.FormatChange,
    state: SelectionState = Depends(deps.get_selection_state),
) -> schemas.SelectionResponse:
    selection = state.set_text_format(_to_selection(payload.selection), payload.text_format)
    return _respond(state, selection)


@router.post("/selection/shortcut", response_model=schemas.SelectionResponse)
def apply_shortcut(
    payload: schemas.ShortcutChange,
    state: SelectionState = Depends(deps.get_selection_state),
) -> schemas.SelectionResponse:
    try:
        selection = state.apply_shortcut(_to_selection(payload.selection), payload.label)
    except ConversionError as exc:
        raise _reject(exc) from exc
    return _respond(state, selection)
