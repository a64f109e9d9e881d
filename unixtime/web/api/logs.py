"""Expose recent log entries for troubleshooting."""
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query

from unixtime.utils.log_buffer import get_log_buffer_handler

router = APIRouter(prefix="/api/logs", tags=["logs"])


@router.get("", response_model=dict)
def list_logs(
    limit: int = Query(200, ge=1, le=1000),
    level: str = Query("DEBUG", description="Minimum level to include"),
) -> dict:
    min_level = logging.getLevelName(level.upper())
    if not isinstance(min_level, int):
        raise HTTPException(status_code=422, detail=f"Unknown log level '{level}'")

    handler = get_log_buffer_handler()
    entries = handler.get_entries(limit, min_level=min_level)
    return {
        "entries": entries,
        "count": len(entries),
        "limit": limit,
        "available": handler.size(),
        "capacity": handler.capacity,
    }


@router.delete("", response_model=dict)
def clear_logs() -> dict:
    handler = get_log_buffer_handler()
    handler.clear()
    return {"cleared": True}
