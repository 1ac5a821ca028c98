"""Event documents stored in the ``events`` collection."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pymongo import DESCENDING
from pymongo.asynchronous.database import AsyncDatabase

COLLECTION = "events"

# Keys the store assigns itself; never taken from user input.
RESERVED_FIELDS = frozenset({"_id", "createdAt", "updatedAt"})


class Event(BaseModel):
    """A developer event (hackathon, meetup, conference).

    Fields not declared here are kept as-is and stored on the document.
    """

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    agenda: List[Any] = Field(default_factory=list)
    image: Optional[str] = None

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, tags: List[str]) -> List[str]:
        # Tags are a set; keep the first occurrence order for display.
        return list(dict.fromkeys(tags))


def _now() -> datetime:
    return datetime.now(timezone.utc)


def serialize_event(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Return a JSON-safe copy of a stored event document."""
    out: Dict[str, Any] = {}
    for key, value in doc.items():
        if isinstance(value, ObjectId):
            out[key] = str(value)
        elif isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            out[key] = value.isoformat()
        else:
            out[key] = value
    return out


async def create_event(db: AsyncDatabase, event: Event) -> Dict[str, Any]:
    """Insert ``event`` and return the stored document.

    Raises:
        ValueError: if the event has no image URL. Events are only stored
            once their cover image has been uploaded.
    """
    if not event.image:
        raise ValueError("Event image URL is required")

    doc = {k: v for k, v in event.model_dump().items() if k not in RESERVED_FIELDS}
    now = _now()
    doc["createdAt"] = now
    doc["updatedAt"] = now

    result = await db[COLLECTION].insert_one(doc)
    doc["_id"] = result.inserted_id
    return serialize_event(doc)


async def list_events(db: AsyncDatabase) -> List[Dict[str, Any]]:
    """Return every event, newest first."""
    cursor = db[COLLECTION].find().sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
    docs = await cursor.to_list(length=None)
    return [serialize_event(doc) for doc in docs]
