"""
Replicate provider adapter.

Submit-then-poll protocol: creating a prediction returns immediately, then
the adapter reloads it on a fixed interval until it reaches a terminal state
or the maximum wait elapses.
"""
import asyncio
import io
import time
from typing import Any, Dict, Optional

import replicate

from shared.config import settings
from shared.errors import ProviderError
from shared.logging import get_logger
from modules.video_providers.base import VideoProvider, ProviderInput, ImageAsset
from modules.video_providers.config import (
    PROVIDER_CONFIGS,
    REPLICATE_KLING_MODEL,
    REPLICATE_POLL_INTERVAL_SECONDS,
    REPLICATE_MAX_WAIT_SECONDS,
    REPLICATE_TERMINAL_STATUSES,
)

logger = get_logger("video_providers.replicate")


def extract_output_url(output: Any) -> Optional[str]:
    """
    Extract the video URL from a prediction output.

    Output may be a URL string, a list of URLs, or a FileOutput-like object
    exposing .url.
    """
    if isinstance(output, list):
        if not output:
            return None
        output = output[0]
    if isinstance(output, str):
        return output or None
    url = getattr(output, "url", None)
    return str(url) if url else None


class ReplicateVideoProvider(VideoProvider):
    """Kling image-to-video through Replicate predictions."""

    name = "replicate"

    def __init__(
        self,
        client: Optional[replicate.Client] = None,
        model: str = REPLICATE_KLING_MODEL,
        poll_interval: float = REPLICATE_POLL_INTERVAL_SECONDS,
        max_wait: float = REPLICATE_MAX_WAIT_SECONDS
    ):
        self.client = client or replicate.Client(api_token=settings.replicate_api_token)
        self.model = model
        self.poll_interval = poll_interval
        self.max_wait = max_wait

    async def stage_image(self, image: ImageAsset) -> str:
        file_obj = io.BytesIO(image.data)
        file_obj.name = image.file_name
        try:
            uploaded = await self.client.files.async_create(file_obj)
        except Exception as e:
            logger.error(
                f"Replicate file upload failed: {e}",
                extra={"file_name": image.file_name, "error_type": type(e).__name__}
            )
            raise ProviderError(f"Replicate file upload failed: {str(e)}", provider=self.name) from e

        urls = getattr(uploaded, "urls", None) or {}
        url = urls.get("get")
        if not url:
            raise ProviderError("Replicate file upload returned no URL", provider=self.name)
        logger.info("Uploaded image to Replicate files", extra={"file_name": image.file_name})
        return url

    async def generate_clip(self, request: ProviderInput) -> str:
        source_url, tail_url = await self.stage_images(request)

        input_data: Dict[str, Any] = {
            "start_image": source_url,
            "end_image": tail_url,
            "prompt": request.prompt,
            "duration": request.duration,
            "mode": PROVIDER_CONFIGS[self.name]["mode"],
        }
        if request.negative_prompt:
            input_data["negative_prompt"] = request.negative_prompt
        if request.generate_audio and not PROVIDER_CONFIGS[self.name]["supports_audio"]:
            logger.warning(
                "Native audio requested but not supported by Replicate Kling, generating silent clip",
                extra={"model": self.model}
            )

        try:
            prediction = await self.client.predictions.async_create(model=self.model, input=input_data)
        except Exception as e:
            raise ProviderError(f"Replicate prediction submit failed: {str(e)}", provider=self.name) from e

        logger.info(
            "Replicate prediction submitted",
            extra={"prediction_id": prediction.id, "model": self.model, "duration": request.duration}
        )

        start_time = time.monotonic()
        while prediction.status not in REPLICATE_TERMINAL_STATUSES:
            elapsed = time.monotonic() - start_time
            if elapsed >= self.max_wait:
                raise ProviderError(
                    f"Replicate prediction {prediction.id} timed out after {elapsed:.1f}s",
                    provider=self.name
                )

            await asyncio.sleep(self.poll_interval)

            try:
                await prediction.async_reload()
            except Exception as e:
                raise ProviderError(f"Replicate poll failed: {str(e)}", provider=self.name) from e

            logger.debug(
                "Replicate prediction status",
                extra={"prediction_id": prediction.id, "status": prediction.status}
            )

        if prediction.status != "succeeded":
            raise ProviderError(
                f"Replicate prediction {prediction.status}: {prediction.error or 'no error detail'}",
                provider=self.name
            )

        video_url = extract_output_url(prediction.output)
        if not video_url:
            raise ProviderError("No video returned from Replicate prediction", provider=self.name)

        logger.info(
            "Replicate prediction succeeded",
            extra={"prediction_id": prediction.id, "elapsed": round(time.monotonic() - start_time, 1)}
        )
        return video_url
