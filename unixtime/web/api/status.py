"""Health endpoint."""
from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from unixtime.config.settings import Settings
from unixtime.config.timezones import TimezoneCatalog

from . import deps

router = APIRouter(tags=["status"])


@router.get("/health")
def healthcheck(
    settings: Settings = Depends(deps.get_app_settings),
    catalog: TimezoneCatalog = Depends(deps.get_timezone_catalog),
) -> dict:
    now = datetime.now(timezone.utc)
    return {
        "status": "ok",
        "app": settings.app_name,
        "environment": settings.environment,
        "server_time": now.isoformat(),
        "local_timezone": settings.default_timezone,
        "regions": len(catalog),
        "zones": catalog.zone_count(),
    }
