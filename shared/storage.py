"""
Storage utilities.

Supabase Storage operations for durable clip persistence.
"""

import asyncio
import mimetypes
from functools import lru_cache
from typing import Optional, Dict, Any, Callable
from supabase import create_client
from shared.config import settings
from shared.errors import RetryableError, ConfigError, ValidationError
from shared.retry import retry_with_backoff
from shared.logging import get_logger

logger = get_logger("storage")

# Default file size limits per bucket (in bytes)
DEFAULT_BUCKET_LIMITS: Dict[str, int] = {
    "videos": 200 * 1024 * 1024,  # 200MB
}


class StorageClient:
    """Supabase Storage client for file operations."""

    def __init__(self, bucket_limits: Optional[Dict[str, int]] = None):
        """
        Initialize storage client.

        Args:
            bucket_limits: Optional dict of bucket name to max file size in bytes
        """
        try:
            self.client = create_client(
                settings.supabase_url,
                settings.supabase_service_key
            )
            self.storage = self.client.storage
            self.bucket_limits = bucket_limits or DEFAULT_BUCKET_LIMITS.copy()
        except Exception as e:
            raise ConfigError(f"Failed to initialize storage client: {str(e)}") from e

    async def _execute_sync(self, func: Callable[[], Any]) -> Any:
        """
        Execute a synchronous Supabase storage operation in an async context.

        Args:
            func: Synchronous function to execute

        Returns:
            Function result
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func)

    def _detect_content_type(self, path: str, default: Optional[str] = None) -> str:
        """
        Detect content type from file path.

        Args:
            path: File path
            default: Default content type if detection fails

        Returns:
            Content type string
        """
        content_type, _ = mimetypes.guess_type(path)
        if content_type:
            return content_type
        return default or "application/octet-stream"

    @retry_with_backoff(max_attempts=3, base_delay=2)
    async def upload_file(
        self,
        bucket: str,
        path: str,
        file_data: bytes,
        content_type: Optional[str] = None,
        max_size: Optional[int] = None
    ) -> str:
        """
        Upload a file to Supabase Storage, overwriting any existing object.

        Args:
            bucket: Storage bucket name
            path: File path in bucket
            file_data: File data as bytes
            content_type: Content type (auto-detected if not provided)
            max_size: Maximum file size in bytes (uses bucket default if not provided)

        Returns:
            Public URL of uploaded file

        Raises:
            RetryableError: If upload fails after retries
            ValidationError: If file size exceeds limit
        """
        if not content_type:
            content_type = self._detect_content_type(path)

        max_size = max_size or self.bucket_limits.get(bucket, 50 * 1024 * 1024)
        if len(file_data) > max_size:
            max_size_mb = max_size / (1024 * 1024)
            file_size_mb = len(file_data) / (1024 * 1024)
            raise ValidationError(
                f"File size ({file_size_mb:.2f} MB) exceeds maximum of {max_size_mb:.2f} MB for bucket {bucket}"
            )

        try:
            # Upsert so a regenerated clip replaces the previous attempt at the same path
            def _upload():
                return self.storage.from_(bucket).upload(
                    path=path,
                    file=file_data,
                    file_options={"content-type": content_type, "upsert": "true"}
                )

            await self._execute_sync(_upload)

            def _get_public_url():
                return self.storage.from_(bucket).get_public_url(path)

            file_url = await self._execute_sync(_get_public_url)

            logger.info(
                f"Uploaded file to {bucket}/{path}",
                extra={"bucket": bucket, "path": path, "size": len(file_data)}
            )

            return file_url

        except Exception as e:
            logger.error(
                f"Failed to upload file to {bucket}/{path}: {str(e)}",
                extra={"bucket": bucket, "path": path, "error": str(e)}
            )
            raise RetryableError(f"Failed to upload file: {str(e)}") from e


@lru_cache(maxsize=1)
def get_storage_client() -> StorageClient:
    """Shared storage client, created on first use."""
    return StorageClient()
