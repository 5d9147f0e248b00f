"""
Video project data models.

Defines VideoProject, VideoClip, MusicTrack and the result types exchanged
between the clip generator, the orchestrator and the API layer.
"""

from datetime import datetime
from typing import Literal, Optional, Dict, Any
from pydantic import BaseModel, Field, field_validator

AspectRatio = Literal["16:9", "9:16", "1:1"]
ProjectStatus = Literal["pending", "generating", "compiling", "completed", "failed"]
ClipStatus = Literal["pending", "processing", "completed", "failed"]

# Statuses during which a project must not be re-triggered
IN_FLIGHT_STATUSES = ("generating", "compiling")

DEFAULT_CLIP_DURATION = 5


class VideoProject(BaseModel):
    """Video project owning an ordered set of clips."""

    id: str
    workspace_id: str
    # Display hint set at creation. The live clip list is authoritative.
    clip_count: int = 0
    aspect_ratio: AspectRatio = "16:9"
    generate_native_audio: bool = False
    music_volume: float = Field(default=0.3, ge=0.0, le=1.0)
    video_volume: float = Field(default=1.0, ge=0.0, le=1.0)
    status: ProjectStatus = "pending"
    estimated_cost_cents: int = 0
    actual_cost_cents: int = 0
    error_message: Optional[str] = None
    listing_id: Optional[str] = None
    music_track_id: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    completed_clip_count: int = 0
    failed_clip_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("metadata", mode="before")
    @classmethod
    def default_metadata(cls, v: Any) -> Any:
        """Treat a NULL metadata column as an empty dict."""
        return v if v is not None else {}

    @property
    def provider(self) -> Optional[str]:
        """Provider preference stored in free-form metadata, if any."""
        return self.metadata.get("provider")


class VideoClip(BaseModel):
    """One clip of a video project, generated from a still image pair."""

    id: str
    video_project_id: str
    sequence_order: int
    source_image_url: str
    end_image_url: Optional[str] = None
    room_type: Optional[str] = None
    room_label: Optional[str] = None
    motion_prompt: Optional[str] = None
    duration: Literal[5, 10] = DEFAULT_CLIP_DURATION
    status: ClipStatus = "pending"
    clip_url: Optional[str] = None
    error_message: Optional[str] = None

    @field_validator("duration", mode="before")
    @classmethod
    def default_duration(cls, v: Any) -> Any:
        """Missing durations fall back to the default clip length."""
        return DEFAULT_CLIP_DURATION if v is None else int(v)

    @property
    def is_completed(self) -> bool:
        """True when the clip already holds a durable result."""
        return self.status == "completed" and bool(self.clip_url)


class MusicTrack(BaseModel):
    """Background music track descriptor used for native-audio prompts."""

    id: str
    name: str
    mood: Optional[str] = None
    category: Optional[str] = None


class ClipGenerationResult(BaseModel):
    """Terminal outcome of one clip generation attempt."""

    clip_id: str
    success: bool
    clip_url: Optional[str] = None
    error: Optional[str] = None
    skipped: bool = Field(default=False, description="True when an already completed clip was reused")


class GenerationSummary(BaseModel):
    """Outcome of starting generation for a whole project."""

    project_id: str
    successful_clips: int
    failed_clips: int
    handoff_reference: Optional[str] = None
