"""
Blob storage service for profile photos.
Uploads photo bytes to an HTTP object store and returns their public URL.
"""

import time
from typing import Optional
from urllib.parse import quote

import httpx

from linkswipe.core.config import settings
from linkswipe.core.exceptions import StorageError
from linkswipe.core.logging import LoggerMixin, log_storage_operation


def build_photo_key(filename: str, uploaded_at_ms: Optional[int] = None) -> str:
    """
    Build the object key for a profile photo.

    Args:
        filename: Original upload filename
        uploaded_at_ms: Upload time in epoch milliseconds, defaults to now

    Returns:
        Key of the form ``profiles/<filename>_<epochMillis>``
    """
    if uploaded_at_ms is None:
        uploaded_at_ms = int(time.time() * 1000)
    # Client-supplied names may carry directory parts
    name = filename.replace("\\", "/").rsplit("/", 1)[-1] or "photo"
    return f"{settings.PROFILE_PHOTO_PREFIX}/{name}_{uploaded_at_ms}"


class BlobStorageService(LoggerMixin):
    """Service for object store operations."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        upload_url: Optional[str] = None,
        public_url: Optional[str] = None,
        token: Optional[str] = None,
    ):
        """
        Initialize blob storage service.

        Args:
            client: Shared HTTP client owned by the application lifespan
            upload_url: Base URL objects are PUT under
            public_url: Base URL objects are served from
            token: Optional bearer token for uploads
        """
        self.client = client
        self.upload_url = (upload_url or settings.BLOB_STORAGE_UPLOAD_URL).rstrip("/")
        self.public_url = (public_url or settings.BLOB_STORAGE_PUBLIC_URL).rstrip("/")
        self.token = token if token is not None else settings.BLOB_STORAGE_TOKEN

    def get_public_url(self, key: str) -> str:
        """
        Get the public URL for an object key.

        Args:
            key: Object key

        Returns:
            Full public URL
        """
        return f"{self.public_url}/{quote(key)}"

    async def upload(self, key: str, data: bytes, content_type: str) -> str:
        """
        Upload bytes under a key.

        Args:
            key: Object key
            data: Object bytes
            content_type: MIME type stored with the object

        Returns:
            Public URL of the stored object

        Raises:
            StorageError: If the object store rejects or cannot be reached
        """
        headers = {"Content-Type": content_type}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        target = f"{self.upload_url}/{quote(key)}"
        self.logger.info(f"Uploading to blob storage: {target}")

        try:
            response = await self.client.put(target, content=data, headers=headers)
        except httpx.HTTPError as e:
            self.logger.error(f"Error uploading to blob storage: {e}")
            raise StorageError("Photo upload failed", {"key": key}) from e

        if response.status_code not in (200, 201, 204):
            self.logger.error(
                f"Failed to upload to blob storage: {response.status_code} - {response.text}"
            )
            raise StorageError(
                "Photo upload failed",
                {"key": key, "status_code": response.status_code},
            )

        url = self.get_public_url(key)
        log_storage_operation("upload", key=key, file_size=len(data), url=url)
        return url

    async def upload_profile_photo(
        self, filename: str, data: bytes, content_type: str
    ) -> str:
        """Store a profile photo under a timestamped key and return its URL."""
        return await self.upload(build_photo_key(filename), data, content_type)
