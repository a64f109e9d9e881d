"""FastAPI application entry point."""
from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from unixtime.config.settings import get_settings
from unixtime.config.timezones import get_catalog
from unixtime.utils.logging import setup_logging
from .api import (
    convert as convert_routes,
    logs as log_routes,
    meta as meta_routes,
    selection as selection_routes,
    status as status_routes,
)

settings = get_settings()
setup_logging(level=settings.log_level, buffer_capacity=settings.log_buffer_capacity)
logger = logging.getLogger("unixtime.web")

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)

# API routes must be registered before the static mount at "/"
app.include_router(status_routes.router)
app.include_router(meta_routes.router)
app.include_router(selection_routes.router)
app.include_router(convert_routes.router)
app.include_router(log_routes.router)

static_dir = Path(__file__).parent / "static"
index_file = static_dir / "index.html"
if static_dir.exists() and index_file.exists():
    app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
else:
    @app.get("/")
    async def index() -> dict:
        return {"message": "Unixtime API running", "docs": "/docs", "health": "/health"}


@app.on_event("startup")
async def on_startup() -> None:
    catalog = get_catalog()
    logger.info(
        "Starting %s (%s); local timezone %s, %d timezone regions",
        settings.app_name,
        settings.environment,
        settings.default_timezone,
        len(catalog),
    )
