"""Process-wide MongoDB connection shared by every request handler."""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from api.config import Settings, get_settings

logger = logging.getLogger(__name__)

_client: Optional[AsyncMongoClient] = None
_connecting: Optional[asyncio.Future] = None


def _create_client(settings: Settings) -> AsyncMongoClient:
    return AsyncMongoClient(settings.mongodb_uri)


async def _open_client(settings: Settings) -> AsyncMongoClient:
    """Create a client and make sure the server answers before handing it out."""
    client = _create_client(settings)
    try:
        await client.admin.command("ping")
    except Exception:
        await client.close()
        raise
    logger.info("Connected to MongoDB database %s", settings.mongodb_db)
    return client


async def connect_db() -> AsyncDatabase:
    """Return the application database, connecting on first use.

    Calls made while the first connection attempt is still in flight wait on
    that same attempt instead of opening their own client. A failed attempt
    is forgotten so the next call starts a fresh one.
    """
    global _client, _connecting

    settings = get_settings()
    if _client is not None:
        return _client[settings.mongodb_db]

    if _connecting is None:
        _connecting = asyncio.ensure_future(_open_client(settings))
    pending = _connecting

    try:
        # Shielded so a cancelled request does not abort the shared attempt.
        client = await asyncio.shield(pending)
    except Exception:
        if _connecting is pending:
            _connecting = None
        raise

    if _client is None:
        _client = client
        _connecting = None
    return _client[settings.mongodb_db]


async def close_db() -> None:
    """Close the memoized client, if one was opened."""
    global _client, _connecting

    client, _client, _connecting = _client, None, None
    if client is not None:
        await client.close()
        logger.info("MongoDB connection closed")
