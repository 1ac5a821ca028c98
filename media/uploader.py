"""Cloudinary client for event cover images."""
from __future__ import annotations

import asyncio
import io
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import cloudinary
import cloudinary.uploader

logger = logging.getLogger(__name__)

# The Cloudinary SDK is blocking; keep its calls off the event loop.
executor = ThreadPoolExecutor(max_workers=4)


class ImageUploadError(Exception):
    """Raised when the image host rejects or fails an upload."""


@dataclass
class UploadResult:
    """Location of an uploaded image."""

    url: str
    public_id: str


def configure(cloud_name: str, api_key: str, api_secret: str) -> None:
    """Set the Cloudinary credentials used by every upload."""
    cloudinary.config(
        cloud_name=cloud_name,
        api_key=api_key,
        api_secret=api_secret,
        secure=True,
    )


def _upload_sync(data: bytes, folder: str) -> UploadResult:
    try:
        result = cloudinary.uploader.upload(
            io.BytesIO(data),
            resource_type="image",
            folder=folder,
        )
    except Exception as exc:
        raise ImageUploadError(f"Image upload failed: {exc}") from exc

    url = (result or {}).get("secure_url")
    if not url:
        raise ImageUploadError("Image upload failed: response did not include a secure URL")

    logger.info("Uploaded image %s (%d bytes)", result.get("public_id"), len(data))
    return UploadResult(url=url, public_id=result.get("public_id", ""))


async def upload_image(data: bytes, folder: str) -> UploadResult:
    """Upload raw image bytes into ``folder`` and return where they landed.

    A single attempt is made; there is no retry.

    Raises:
        ImageUploadError: on any SDK, transport or remote-service failure.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(executor, _upload_sync, data, folder)


def _delete_sync(public_id: str) -> None:
    result = cloudinary.uploader.destroy(public_id, resource_type="image")
    if (result or {}).get("result") not in ("ok", "not found"):
        raise ImageUploadError(f"Image delete failed for {public_id}: {result}")


async def delete_image(public_id: str) -> None:
    """Remove a previously uploaded image."""
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(executor, _delete_sync, public_id)
