"""FastAPI application for the DevEvent hub."""
import json
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.datastructures import FormData, UploadFile

from api.config import get_settings
from api.pages import router as pages_router
from database.connection import close_db, connect_db
from database.event import RESERVED_FIELDS, Event, create_event, list_events
from media import uploader
from media.uploader import delete_image, upload_image

VERSION = "1.0.0"

logger = logging.getLogger(__name__)
if os.getenv("DEVEVENT_DEBUG"):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    uploader.configure(
        settings.cloudinary_cloud_name,
        settings.cloudinary_api_key,
        settings.cloudinary_api_secret,
    )
    yield
    await close_db()


app = FastAPI(
    title="DevEvent API",
    description="Create and list developer events: hackathons, meetups and conferences",
    version=VERSION,
    lifespan=lifespan,
)
app.include_router(pages_router)


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    version: str


class InvalidFieldError(ValueError):
    """A form field could not be decoded into the expected shape."""


def _health(status: str) -> HealthResponse:
    return HealthResponse(
        status=status,
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=VERSION,
    )


def _reject_constant(token: str):
    # NaN and Infinity are not JSON, and cannot be sent back out as JSON.
    raise ValueError(f"{token} is not valid JSON")


def _parse_json_list(form: FormData, name: str) -> List[Any]:
    """Decode a JSON-encoded array sent as a plain form field."""
    raw = form.get(name)
    if not isinstance(raw, str):
        raise InvalidFieldError(f"Invalid JSON in '{name}'")
    try:
        value = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as exc:
        raise InvalidFieldError(f"Invalid JSON in '{name}'") from exc
    if not isinstance(value, list):
        raise InvalidFieldError(f"Invalid JSON in '{name}'")
    return value


def _scalar_fields(form: FormData) -> Dict[str, str]:
    """Plain text form fields, minus files and store-assigned keys."""
    fields = {}
    for key, value in form.multi_items():
        if key == "image" or key in RESERVED_FIELDS:
            continue
        if isinstance(value, str):
            fields[key] = value
    return fields


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return _health("healthy")


@app.get("/live", response_model=HealthResponse)
async def liveness_check():
    """Liveness check endpoint for container orchestration."""
    return _health("alive")


@app.get("/ready", response_model=HealthResponse)
async def readiness_check():
    """Readiness check: the database must be reachable."""
    try:
        await connect_db()
    except Exception as e:
        logger.warning("Readiness check failed: %s", e)
        return JSONResponse(_health("unavailable").model_dump(), status_code=503)
    return _health("ready")


@app.post("/api/events", status_code=201)
async def create_event_endpoint(request: Request):
    """
    Create an event from multipart form data.

    The ``image`` file part is uploaded to the image host first; the event is
    stored only once a URL for it exists. ``tags`` and ``agenda`` arrive as
    JSON-encoded strings. Every other text field is stored verbatim.
    """
    try:
        db = await connect_db()

        try:
            form = await request.form()
        except Exception as e:
            logger.info("Rejected unparseable form: %s", e)
            return JSONResponse({"message": "Invalid form data format"}, status_code=400)

        try:
            return await _create_from_form(db, form)
        finally:
            # Releases the spooled temp files behind uploaded parts.
            await form.close()

    except Exception as e:
        logger.exception("Event creation failed")
        return JSONResponse(
            {"message": "Event Creation Failed", "error": str(e) or type(e).__name__},
            status_code=500,
        )


async def _create_from_form(db, form: FormData) -> JSONResponse:
    file = form.get("image")
    if not isinstance(file, UploadFile):
        return JSONResponse({"message": "Image file is required"}, status_code=400)

    try:
        tags = _parse_json_list(form, "tags")
        agenda = _parse_json_list(form, "agenda")
        if not all(isinstance(tag, str) for tag in tags):
            raise InvalidFieldError("Invalid JSON in 'tags'")
    except InvalidFieldError as e:
        return JSONResponse({"message": str(e)}, status_code=400)

    data = await file.read()
    if not data:
        return JSONResponse({"message": "Image file is required"}, status_code=400)

    settings = get_settings()
    uploaded = await upload_image(data, settings.upload_folder)

    event = Event(**{**_scalar_fields(form), "tags": tags, "agenda": agenda, "image": uploaded.url})
    try:
        created = await create_event(db, event)
    except Exception:
        # The image is useless without its document.
        try:
            await delete_image(uploaded.public_id)
        except Exception as cleanup_error:
            logger.error("Failed to remove orphaned image %s: %s", uploaded.public_id, cleanup_error)
        raise

    logger.info("Created event %s", created.get("_id"))
    return JSONResponse(
        {"message": "Event created successfully", "event": created},
        status_code=201,
    )


@app.get("/api/events")
async def list_events_endpoint():
    """Return all events, newest first."""
    try:
        db = await connect_db()
        events = await list_events(db)
        # Rendered here so encoding failures still get the error envelope.
        return JSONResponse({"message": "Events fetched successfully", "events": events})
    except Exception as e:
        logger.exception("Event fetching failed")
        return JSONResponse(
            {"message": "Event Fetching Failed", "error": str(e) or type(e).__name__},
            status_code=500,
        )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
