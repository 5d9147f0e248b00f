"""
fal.ai provider adapter.

Synchronous-style protocol: one subscribe call blocks until fal resolves the
request to a final asset. Queue updates are logged, never branched on.
"""
import asyncio
from typing import Any, Dict, Optional

import fal_client

from shared.config import settings
from shared.errors import ProviderError
from shared.logging import get_logger
from modules.video_providers.base import VideoProvider, ProviderInput, ImageAsset
from modules.video_providers.config import FAL_KLING_MODEL, FAL_SUBSCRIBE_TIMEOUT_SECONDS

logger = get_logger("video_providers.fal")


def extract_video_url(result: Any) -> Optional[str]:
    """
    Pull the video URL out of a fal result.

    Handles both the direct payload ({"video": {"url": ...}}) and the
    wrapped form ({"data": {"video": {...}}}).
    """
    if not isinstance(result, dict):
        return None
    output = result.get("data") if isinstance(result.get("data"), dict) else result
    video = output.get("video")
    if isinstance(video, dict):
        return video.get("url") or None
    return None


class FalVideoProvider(VideoProvider):
    """Kling image-to-video through fal.ai queue subscription."""

    name = "fal"

    def __init__(
        self,
        client: Optional[fal_client.AsyncClient] = None,
        model: str = FAL_KLING_MODEL,
        timeout_seconds: float = FAL_SUBSCRIBE_TIMEOUT_SECONDS
    ):
        self.client = client or fal_client.AsyncClient(key=settings.fal_key)
        self.model = model
        self.timeout_seconds = timeout_seconds

    async def stage_image(self, image: ImageAsset) -> str:
        try:
            url = await self.client.upload(image.data, image.content_type, file_name=image.file_name)
        except Exception as e:
            logger.error(
                f"fal storage upload failed: {e}",
                extra={"file_name": image.file_name, "error_type": type(e).__name__}
            )
            raise ProviderError(f"fal storage upload failed: {str(e)}", provider=self.name) from e
        logger.info("Uploaded image to fal storage", extra={"file_name": image.file_name, "fal_url": url})
        return url

    def _on_queue_update(self, update: Any) -> None:
        logger.info(
            "Kling processing update",
            extra={"status": type(update).__name__, "position": getattr(update, "position", None)}
        )

    async def generate_clip(self, request: ProviderInput) -> str:
        source_url, tail_url = await self.stage_images(request)

        arguments: Dict[str, Any] = {
            "image_url": source_url,
            "tail_image_url": tail_url,
            "prompt": request.prompt,
            "duration": str(request.duration),
            "aspect_ratio": request.aspect_ratio,
            "generate_audio": request.generate_audio,
        }
        if request.negative_prompt:
            arguments["negative_prompt"] = request.negative_prompt

        logger.info(
            "Submitting clip to fal",
            extra={
                "model": self.model,
                "duration": arguments["duration"],
                "aspect_ratio": request.aspect_ratio,
                "generate_audio": request.generate_audio,
            }
        )

        try:
            result = await asyncio.wait_for(
                self.client.subscribe(
                    self.model,
                    arguments=arguments,
                    with_logs=True,
                    on_queue_update=self._on_queue_update,
                ),
                timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError as e:
            raise ProviderError(
                f"fal generation timed out after {self.timeout_seconds:.0f}s", provider=self.name
            ) from e
        except Exception as e:
            raise ProviderError(f"fal generation failed: {str(e)}", provider=self.name) from e

        video_url = extract_video_url(result)
        if not video_url:
            logger.error("No video in fal response", extra={"result": str(result)[:500]})
            raise ProviderError("No video returned from Kling API", provider=self.name)

        logger.info("Kling result received", extra={"video_url": video_url})
        return video_url
