"""
Media Service

Image storage for avatars, banners and post images.

Cloudinary is used when all three credentials are configured, with the
local uploads directory as a single fallback; otherwise images go straight
to the local directory. The choice is made once per process.
"""

import hashlib
import logging
import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

import httpx

from app.core.config import Settings, get_settings
from app.core.exceptions import BadRequestError, UpstreamError
from app.core.http_client import get_http_client


logger = logging.getLogger(__name__)


CLOUDINARY_API_BASE = "https://api.cloudinary.com/v1_1"
CLOUDINARY_ROOT_FOLDER = "creatorhub"

# Incoming transformations per folder; anything else only gets auto quality
CLOUDINARY_TRANSFORMATIONS = {
    "posts": "c_limit,h_1200,w_1200/q_auto",
}
CLOUDINARY_DEFAULT_TRANSFORMATION = "q_auto"

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif", ".webp"}
ALLOWED_CONTENT_TYPES = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class MediaStoreError(Exception):
    """A store could not persist an image. The message is the store's own."""


@dataclass(frozen=True)
class ImageUpload:
    """A validated image read from a multipart request."""

    data: bytes
    filename: str
    content_type: str


def validate_image(
    data: Optional[bytes],
    filename: Optional[str],
    content_type: Optional[str],
    max_bytes: int,
) -> ImageUpload:
    """
    Check an uploaded file before any store is called.

    Raises:
        BadRequestError: No file, wrong type, or larger than max_bytes.
    """
    if not filename or data is None:
        raise BadRequestError("No image file provided")

    ext = os.path.splitext(filename)[1].lower()
    content_type = (content_type or "").lower()
    if ext not in ALLOWED_EXTENSIONS or content_type not in ALLOWED_CONTENT_TYPES:
        raise BadRequestError("Only image files are allowed (jpeg, jpg, png, gif, webp)")

    if len(data) > max_bytes:
        raise BadRequestError(f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB")
    if not data:
        raise BadRequestError("No image file provided")

    return ImageUpload(data=data, filename=filename, content_type=content_type)


class MediaStore(ABC):
    """Object storage for images."""

    @abstractmethod
    async def put(self, data: bytes, folder: str, name: str, content_type: str) -> str:
        """Store `data` and return its public URL. Raises MediaStoreError."""

    @abstractmethod
    async def delete(self, url: str) -> bool:
        """Best-effort removal. Never raises; returns whether a file was removed."""


class LocalMediaStore(MediaStore):
    """Files under the uploads directory, served by the /uploads static mount."""

    def __init__(self, root_dir: str | Path, base_url: str):
        self.root = Path(root_dir)
        self.base_url = base_url.rstrip("/")

    async def put(self, data: bytes, folder: str, name: str, content_type: str) -> str:
        ext = ALLOWED_CONTENT_TYPES.get(content_type, ".jpg")
        filename = f"{name}_{int(time.time() * 1000)}{ext}"
        target_dir = self.root / folder
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            (target_dir / filename).write_bytes(data)
        except OSError as e:
            raise MediaStoreError(f"Failed to save image locally: {e}") from e
        return f"{self.base_url}/uploads/{folder}/{filename}"

    def path_for(self, url: str) -> Optional[Path]:
        """Local path for one of our URLs, None for anything else."""
        if not url or "/uploads/" not in url:
            return None
        relative = url.split("/uploads/", 1)[1]
        root = self.root.resolve()
        path = (root / relative).resolve()
        if root not in path.parents:
            return None
        return path

    async def delete(self, url: str) -> bool:
        path = self.path_for(url)
        if path is None or not path.is_file():
            return False
        try:
            path.unlink()
        except OSError as e:
            logger.warning("Failed to delete local image %s: %s", path, e)
            return False
        return True


class CloudinaryMediaStore(MediaStore):
    """Signed uploads to the Cloudinary REST API."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_http_client()

    @property
    def upload_url(self) -> str:
        return f"{CLOUDINARY_API_BASE}/{self.cloud_name}/image/upload"

    def sign(self, params: dict) -> str:
        """sha1 of the sorted `key=value` pairs followed by the API secret."""
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1(f"{to_sign}{self.api_secret}".encode("utf-8")).hexdigest()

    async def put(self, data: bytes, folder: str, name: str, content_type: str) -> str:
        params = {
            "folder": f"{CLOUDINARY_ROOT_FOLDER}/{folder}",
            "public_id": name,
            "timestamp": int(time.time()),
            "transformation": CLOUDINARY_TRANSFORMATIONS.get(folder, CLOUDINARY_DEFAULT_TRANSFORMATION),
        }
        form = {
            **{key: str(value) for key, value in params.items()},
            "api_key": self.api_key,
            "signature": self.sign(params),
        }
        try:
            response = await self.client.post(
                self.upload_url,
                data=form,
                files={"file": (name, data, content_type)},
            )
        except httpx.HTTPError as e:
            raise MediaStoreError(f"Cloudinary request failed: {e}") from e

        if response.status_code >= 400:
            try:
                message = response.json()["error"]["message"]
            except (ValueError, KeyError, TypeError):
                message = response.text
            raise MediaStoreError(f"Cloudinary upload failed: {message}")

        try:
            secure_url = response.json().get("secure_url")
        except (ValueError, AttributeError) as e:
            raise MediaStoreError("Cloudinary upload failed: invalid response") from e
        if not secure_url:
            raise MediaStoreError("Cloudinary upload failed: no URL in response")
        return secure_url

    async def delete(self, url: str) -> bool:
        # Replaced images are overwritten in place by public_id
        return False


class FallbackMediaStore(MediaStore):
    """Primary store with exactly one fallback attempt."""

    def __init__(self, primary: MediaStore, fallback: MediaStore):
        self.primary = primary
        self.fallback = fallback

    async def put(self, data: bytes, folder: str, name: str, content_type: str) -> str:
        try:
            return await self.primary.put(data, folder, name, content_type)
        except MediaStoreError as e:
            logger.warning("Primary media store failed, falling back: %s", e)
        return await self.fallback.put(data, folder, name, content_type)

    async def delete(self, url: str) -> bool:
        if await self.primary.delete(url):
            return True
        return await self.fallback.delete(url)


def build_media_store(settings: Settings) -> MediaStore:
    local = LocalMediaStore(settings.UPLOADS_DIR, settings.public_base_url)
    if not settings.cloudinary_configured:
        logger.info("Cloudinary not configured, storing images in %s", settings.UPLOADS_DIR)
        return local
    cloudinary = CloudinaryMediaStore(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
    )
    return FallbackMediaStore(cloudinary, local)


@lru_cache
def get_media_store() -> MediaStore:
    """Process-wide media store, chosen once from settings."""
    return build_media_store(get_settings())


async def store_image(store: MediaStore, image: ImageUpload, folder: str, name: str) -> str:
    """
    Persist an image and return its URL.

    Raises:
        UpstreamError: Every store attempt failed; carries the last
            store's message.
    """
    try:
        return await store.put(image.data, folder, name, image.content_type)
    except MediaStoreError as e:
        raise UpstreamError(str(e)) from e


async def discard_image(store: MediaStore, url: str) -> None:
    """Best-effort removal of a previously stored image."""
    if url:
        await store.delete(url)
