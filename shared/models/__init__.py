"""
Data models for the clip generation pipeline.

This module exports all Pydantic models used across pipeline modules.
"""

from .video import (
    VideoProject,
    VideoClip,
    MusicTrack,
    ClipGenerationResult,
    GenerationSummary,
    AspectRatio,
    ProjectStatus,
    ClipStatus,
    IN_FLIGHT_STATUSES,
    DEFAULT_CLIP_DURATION,
)

__all__ = [
    "VideoProject",
    "VideoClip",
    "MusicTrack",
    "ClipGenerationResult",
    "GenerationSummary",
    "AspectRatio",
    "ProjectStatus",
    "ClipStatus",
    "IN_FLIGHT_STATUSES",
    "DEFAULT_CLIP_DURATION",
]
