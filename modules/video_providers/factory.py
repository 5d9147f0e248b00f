"""
Provider selection.

Maps a provider name to its adapter, creating each adapter once.
"""
from typing import Dict, Optional

from shared.config import settings
from shared.errors import ValidationError
from modules.video_providers.base import VideoProvider
from modules.video_providers.config import SUPPORTED_PROVIDERS

_providers: Dict[str, VideoProvider] = {}


def get_provider(name: Optional[str] = None) -> VideoProvider:
    """
    Get the adapter for a provider name.

    Args:
        name: "fal" or "replicate"; None selects DEFAULT_VIDEO_PROVIDER

    Returns:
        VideoProvider adapter

    Raises:
        ValidationError: If the provider name is unknown
    """
    key = (name or settings.default_video_provider).lower()
    if key not in SUPPORTED_PROVIDERS:
        raise ValidationError(
            f"Unknown video provider '{name}'. Supported: {', '.join(SUPPORTED_PROVIDERS)}"
        )

    if key not in _providers:
        if key == "fal":
            from modules.video_providers.fal_provider import FalVideoProvider
            _providers[key] = FalVideoProvider()
        else:
            from modules.video_providers.replicate_provider import ReplicateVideoProvider
            _providers[key] = ReplicateVideoProvider()

    return _providers[key]
