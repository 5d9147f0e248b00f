"""
Video provider base interface.

Every provider adapter turns a ProviderInput into the URL of a generated
video, or raises ProviderError.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, Field

from shared.models.video import AspectRatio


class ImageAsset(BaseModel):
    """Raw image bytes fetched from the source location."""

    data: bytes
    content_type: str = "image/jpeg"
    file_name: str = "image.jpg"


class ProviderInput(BaseModel):
    """Provider-neutral request for one image-to-video clip."""

    source_image: ImageAsset
    tail_image: Optional[ImageAsset] = Field(
        default=None,
        description="End frame; the source image is reused when absent"
    )
    prompt: str
    duration: int = 5
    aspect_ratio: AspectRatio = "16:9"
    generate_audio: bool = False
    negative_prompt: Optional[str] = None


class VideoProvider(ABC):
    """Abstract adapter over an external image-to-video service."""

    name: str = "base"

    @abstractmethod
    async def stage_image(self, image: ImageAsset) -> str:
        """
        Upload image bytes to the provider's own storage.

        Returns:
            Provider-hosted URL for the image

        Raises:
            ProviderError: If the staging upload fails
        """

    @abstractmethod
    async def generate_clip(self, request: ProviderInput) -> str:
        """
        Generate a clip and return the provider's video URL.

        Raises:
            ProviderError: On any staging, transport, generation or timeout failure
        """

    async def stage_images(self, request: ProviderInput) -> tuple[str, str]:
        """Stage source and tail images, reusing the source URL when no tail is given."""
        source_url = await self.stage_image(request.source_image)
        if request.tail_image is None:
            return source_url, source_url
        tail_url = await self.stage_image(request.tail_image)
        return source_url, tail_url
