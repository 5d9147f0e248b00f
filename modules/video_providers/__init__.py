"""
Video provider adapters.

fal (subscribe) and Replicate (submit + poll) behind one interface.
"""

from modules.video_providers.base import VideoProvider, ProviderInput, ImageAsset
from modules.video_providers.factory import get_provider

__all__ = ["VideoProvider", "ProviderInput", "ImageAsset", "get_provider"]
