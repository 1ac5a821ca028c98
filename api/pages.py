"""Server-rendered landing page."""
import logging
from pathlib import Path
from typing import Dict, List

from fastapi import APIRouter, Request
from fastapi.templating import Jinja2Templates

from api.config import Settings, get_settings
from api.constants import FEATURED_EVENTS
from ingest.api_client import fetch_events

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

router = APIRouter()


def load_featured_events(settings: Settings) -> List[Dict]:
    """Events to feature, from the bundled list or the live events API."""
    if settings.featured_events_source == "api":
        return fetch_events(settings.base_url)
    return FEATURED_EVENTS


@router.get("/", include_in_schema=False)
def landing_page(request: Request):
    """Render the landing page with one card per featured event."""
    settings = get_settings()
    events = load_featured_events(settings)
    logger.debug("Rendering landing page with %d featured event(s)", len(events))

    response = templates.TemplateResponse(request, "index.html", {"events": events})
    response.headers["Cache-Control"] = f"public, max-age={settings.page_cache_seconds}"
    return response
