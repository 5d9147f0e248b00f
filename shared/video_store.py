"""
Video project/clip state store.

Single-record reads and writes against the video_projects, video_clips and
music_tracks tables. No operation spans more than one row, so callers never
need a transaction or a lock.
"""

from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, List, Optional

from shared.database import DatabaseClient, get_database
from shared.logging import get_logger
from shared.models.video import IN_FLIGHT_STATUSES, VideoProject, VideoClip, MusicTrack

logger = get_logger("video_store")

PROJECTS_TABLE = "video_projects"
CLIPS_TABLE = "video_clips"
MUSIC_TRACKS_TABLE = "music_tracks"


def _first_row(result: Any) -> Optional[Dict[str, Any]]:
    """Return the first row of a PostgREST response, or None."""
    data = getattr(result, "data", None)
    if not data:
        return None
    if isinstance(data, list):
        return data[0]
    return data


def _timestamped(patch: Dict[str, Any]) -> Dict[str, Any]:
    return {**patch, "updated_at": datetime.now(timezone.utc).isoformat()}


class VideoStateStore:
    """Durable record of video project and clip status."""

    def __init__(self, db: Optional[DatabaseClient] = None):
        self.db = db or get_database()

    async def get_project(self, project_id: str) -> Optional[VideoProject]:
        """Load a project by ID, or None if it does not exist."""
        result = await self.db.table(PROJECTS_TABLE).select("*").eq("id", project_id).limit(1).execute()
        row = _first_row(result)
        return VideoProject.model_validate(row) if row else None

    async def get_clip(self, clip_id: str) -> Optional[VideoClip]:
        """Load a clip by ID, or None if it does not exist."""
        result = await self.db.table(CLIPS_TABLE).select("*").eq("id", clip_id).limit(1).execute()
        row = _first_row(result)
        return VideoClip.model_validate(row) if row else None

    async def get_clips(self, project_id: str) -> List[VideoClip]:
        """Load every clip of a project, ordered by sequence_order."""
        result = await (
            self.db.table(CLIPS_TABLE)
            .select("*")
            .eq("video_project_id", project_id)
            .order("sequence_order")
            .execute()
        )
        return [VideoClip.model_validate(row) for row in (result.data or [])]

    async def get_music_track(self, track_id: str) -> Optional[MusicTrack]:
        """Load a music track descriptor, or None if it does not exist."""
        result = await self.db.table(MUSIC_TRACKS_TABLE).select("*").eq("id", track_id).limit(1).execute()
        row = _first_row(result)
        return MusicTrack.model_validate(row) if row else None

    async def update_project(self, project_id: str, patch: Dict[str, Any]) -> None:
        """Apply a partial update to one project row."""
        await self.db.table(PROJECTS_TABLE).update(_timestamped(patch)).eq("id", project_id).execute()
        logger.debug(
            "Updated video project",
            extra={"video_project_id": project_id, "fields": ",".join(sorted(patch))}
        )

    async def claim_project_for_generation(self, project_id: str, patch: Dict[str, Any]) -> bool:
        """
        Apply a patch only if the project is not already generating or compiling.

        The status check and the write are one conditional UPDATE, so of two
        concurrent starts only one gets a row back.

        Returns:
            True if this caller claimed the project
        """
        result = await (
            self.db.table(PROJECTS_TABLE)
            .update(_timestamped(patch))
            .eq("id", project_id)
            .not_.in_("status", list(IN_FLIGHT_STATUSES))
            .execute()
        )
        claimed = bool(getattr(result, "data", None))
        logger.debug(
            "Claimed video project" if claimed else "Video project already in flight",
            extra={"video_project_id": project_id}
        )
        return claimed

    async def update_clip(self, clip_id: str, patch: Dict[str, Any]) -> None:
        """Apply a partial update to one clip row."""
        await self.db.table(CLIPS_TABLE).update(_timestamped(patch)).eq("id", clip_id).execute()
        logger.debug(
            "Updated video clip",
            extra={"clip_id": clip_id, "fields": ",".join(sorted(patch))}
        )

    async def recompute_project_counts(self, project_id: str) -> Dict[str, int]:
        """
        Recompute aggregate clip counts from the live clip rows.

        Only the aggregate columns are written. Project status belongs to the
        orchestrator and is left untouched.

        Args:
            project_id: Video project ID

        Returns:
            The counts that were written
        """
        clips = await self.get_clips(project_id)
        counts = {
            "clip_count": len(clips),
            "completed_clip_count": sum(1 for c in clips if c.status == "completed"),
            "failed_clip_count": sum(1 for c in clips if c.status == "failed"),
        }
        await self.update_project(project_id, counts)
        return counts


@lru_cache(maxsize=1)
def get_video_store() -> VideoStateStore:
    """Shared state store, created on first use."""
    return VideoStateStore()
