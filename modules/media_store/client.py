"""
Media store client.

Fetches source images and provider outputs over HTTP, and persists generated
clips to Supabase Storage.
"""
from typing import Optional
from urllib.parse import urlparse
import posixpath

import httpx

from shared.config import settings
from shared.errors import FetchError, StorageError
from shared.logging import get_logger
from shared.storage import StorageClient, get_storage_client
from modules.video_providers.base import ImageAsset

logger = get_logger("media_store")


def get_video_path(workspace_id: str, project_id: str, filename: str) -> str:
    """Storage key for a generated clip: {workspace}/videos/{project}/{filename}."""
    return f"{workspace_id}/videos/{project_id}/{filename}"


def _file_name_from_url(url: str, default: str) -> str:
    name = posixpath.basename(urlparse(url).path)
    return name or default


class MediaStore:
    """HTTP fetch + durable upload for clip media."""

    def __init__(
        self,
        storage: Optional[StorageClient] = None,
        bucket: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self._storage = storage
        self.bucket = bucket or settings.video_storage_bucket
        self.timeout = timeout or settings.media_fetch_timeout_seconds

    @property
    def storage(self) -> StorageClient:
        if self._storage is None:
            self._storage = get_storage_client()
        return self._storage

    async def _get(self, url: str) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Fetch of {url} returned {e.response.status_code}",
                extra={"url": url, "status_code": e.response.status_code}
            )
            raise FetchError(f"Failed to fetch {url}: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Fetch of {url} failed: {e}", extra={"url": url, "error_type": type(e).__name__})
            raise FetchError(f"Failed to fetch {url}: {str(e) or type(e).__name__}") from e

    async def fetch(self, url: str) -> bytes:
        """
        Download a remote object.

        Raises:
            FetchError: On a non-2xx response or transport failure
        """
        response = await self._get(url)
        return response.content

    async def fetch_image(self, url: str, file_name: Optional[str] = None) -> ImageAsset:
        """Download an image and wrap it with its content type for provider staging."""
        response = await self._get(url)
        content_type = response.headers.get("content-type", "image/jpeg").split(";")[0].strip()
        return ImageAsset(
            data=response.content,
            content_type=content_type or "image/jpeg",
            file_name=file_name or _file_name_from_url(url, "image.jpg")
        )

    async def upload(self, data: bytes, path: str, content_type: str = "video/mp4") -> str:
        """
        Persist bytes under the given storage key, replacing any previous object.

        Returns:
            Public URL of the stored object

        Raises:
            StorageError: If the upload fails after retries
        """
        try:
            return await self.storage.upload_file(
                bucket=self.bucket,
                path=path,
                file_data=data,
                content_type=content_type
            )
        except Exception as e:
            raise StorageError(f"Failed to store {path}: {str(e)}") from e

    def get_video_path(self, workspace_id: str, project_id: str, filename: str) -> str:
        return get_video_path(workspace_id, project_id, filename)
