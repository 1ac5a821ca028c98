"""Client for the DevEvent events API."""
from __future__ import annotations

import json
import logging
import mimetypes
from pathlib import Path
from typing import Any

import requests

from api.config import DEFAULT_BASE_URL, ConfigurationError, get_settings

logger = logging.getLogger(__name__)


def _resolve_base_url(base_url: str | None) -> str:
    """Use the given base URL or the configured one."""
    if base_url:
        return base_url.rstrip("/")
    try:
        return get_settings().base_url
    except ConfigurationError:
        return DEFAULT_BASE_URL


def _log_request(method: str, url: str, payload: Any | None = None) -> None:
    """Log details about an outgoing HTTP request."""
    logger.info("%s %s", method.upper(), url)
    if payload is not None:
        logger.info("Payload: %s", payload)


def post_event(fields: dict[str, Any], image_path: str | Path, base_url: str | None = None) -> dict[str, Any]:
    """Create an event with its cover image and return the stored event.

    ``tags`` and ``agenda`` in ``fields`` may be Python lists; they are sent
    JSON-encoded as the API expects.
    """
    url = f"{_resolve_base_url(base_url)}/api/events"
    form = {}
    for key, value in fields.items():
        if key in ("tags", "agenda") and not isinstance(value, str):
            value = json.dumps(value)
        form[key] = value
    form.setdefault("tags", "[]")
    form.setdefault("agenda", "[]")

    path = Path(image_path)
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    _log_request("post", url, form)
    with path.open("rb") as fh:
        response = requests.post(
            url,
            data=form,
            files={"image": (path.name, fh, content_type)},
            timeout=60,
        )
    response.raise_for_status()
    return response.json()["event"]


def fetch_events(base_url: str | None = None) -> list[dict[str, Any]]:
    """Return every event from the API, newest first."""
    url = f"{_resolve_base_url(base_url)}/api/events"
    _log_request("get", url)
    response = requests.get(url, timeout=30)
    response.raise_for_status()
    return response.json()["events"]
