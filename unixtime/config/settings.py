"""Application configuration and environment management."""
from __future__ import annotations

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

load_dotenv()

DEFAULT_TEXT_FORMAT = "YYYY-MM-DD HH:mm:ss z"


def _detect_timezone() -> str:
    tz_env = os.environ.get("TZ") or os.environ.get("LOCAL_TIMEZONE")
    if tz_env:
        return tz_env

    try:
        import tzlocal

        return tzlocal.get_localzone_name() or "UTC"
    except Exception:
        return "UTC"


class Settings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    app_name: str = Field(default="Unixtime", description="Human readable app name")
    environment: str = Field(default="development", description="Runtime environment name")

    default_timezone: str = Field(
        default_factory=_detect_timezone,
        description="Olson identifier of the machine's local timezone",
    )
    default_text_format: str = Field(
        default=DEFAULT_TEXT_FORMAT,
        description="Format string preselected in the UI",
    )

    log_level: str = Field(default="INFO", description="Level for the unixtime logger")
    log_buffer_capacity: int = Field(default=1000, ge=1, description="Entries kept for /api/logs")

    strict_conversion: bool = Field(
        default=True,
        description="Reject text that does not match the format instead of returning an invalid value",
    )
    midnight_uses_selected_timezone: bool = Field(
        default=False,
        description="Compute the Midnight shortcut in the selected zone rather than the local one",
    )

    @field_validator("default_timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        value = value.strip()
        # TZ may carry a leading ':' (":America/New_York")
        value = value.lstrip(":")
        try:
            ZoneInfo(value)
        except ZoneInfoNotFoundError as exc:
            raise ValueError(f"Unknown timezone '{value}'") from exc
        return value

    @field_validator("default_text_format")
    @classmethod
    def _validate_format(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Text format cannot be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        value_upper = value.strip().upper()
        if not isinstance(logging.getLevelName(value_upper), int):
            raise ValueError(f"Unknown log level '{value}'")
        return value_upper


_ENV_MAPPING = {
    "APP_NAME": "app_name",
    "ENVIRONMENT": "environment",
    "DEFAULT_TIMEZONE": "default_timezone",
    "DEFAULT_TEXT_FORMAT": "default_text_format",
    "LOG_LEVEL": "log_level",
    "LOG_BUFFER_CAPACITY": "log_buffer_capacity",
    "STRICT_CONVERSION": "strict_conversion",
    "MIDNIGHT_USES_SELECTED_TIMEZONE": "midnight_uses_selected_timezone",
}


def _load_settings() -> Settings:
    data: dict[str, object] = {}
    for env_name, field_name in _ENV_MAPPING.items():
        if env_name not in os.environ:
            continue
        data[field_name] = os.environ[env_name]
    return Settings(**data)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return _load_settings()
