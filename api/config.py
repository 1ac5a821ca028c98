"""Runtime configuration for the DevEvent API.

All environment lookups happen here. The rest of the code asks
:func:`get_settings` for a validated :class:`Settings` object instead of
reading ``os.environ`` directly.
"""
from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

DEFAULT_BASE_URL = "http://localhost:8000"


class ConfigurationError(RuntimeError):
    """Raised when required settings are missing or invalid."""


class Settings(BaseModel):
    """Validated application settings."""

    mongodb_uri: str = Field(min_length=1)
    mongodb_db: str = "devevent"
    cloudinary_cloud_name: str = Field(min_length=1)
    cloudinary_api_key: str = Field(min_length=1)
    cloudinary_api_secret: str = Field(min_length=1)
    upload_folder: str = "DevEvent"
    base_url: str = DEFAULT_BASE_URL
    featured_events_source: Literal["local", "api"] = "local"
    page_cache_seconds: int = Field(default=3600, ge=0)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


# Maps Settings fields to the environment variables that feed them.
ENV_VARS = {
    "mongodb_uri": "MONGODB_URI",
    "mongodb_db": "MONGODB_DB",
    "cloudinary_cloud_name": "CLOUDINARY_CLOUD_NAME",
    "cloudinary_api_key": "CLOUDINARY_API_KEY",
    "cloudinary_api_secret": "CLOUDINARY_API_SECRET",
    "upload_folder": "UPLOAD_FOLDER",
    "featured_events_source": "FEATURED_EVENTS_SOURCE",
    "page_cache_seconds": "PAGE_CACHE_SECONDS",
}


def _read_env() -> dict[str, str]:
    values = {field: os.getenv(var) for field, var in ENV_VARS.items()}
    # The landing page historically used NEXT_PUBLIC_BASE_URL for self-fetches.
    values["base_url"] = os.getenv("BASE_URL") or os.getenv("NEXT_PUBLIC_BASE_URL")
    return {key: value for key, value in values.items() if value not in (None, "")}


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build settings from the environment and an optional ``.env`` file.

    Values already present in the environment win over the ``.env`` file.

    Raises:
        ConfigurationError: if a required variable is missing or a value
            does not validate.
    """
    load_dotenv(env_file)
    try:
        return Settings(**_read_env())
    except ValidationError as exc:
        names = []
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else ""
            names.append(ENV_VARS.get(field, "BASE_URL" if field == "base_url" else field))
        raise ConfigurationError(
            f"Invalid or missing configuration: {', '.join(sorted(set(names)))}"
        ) from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return load_settings()
