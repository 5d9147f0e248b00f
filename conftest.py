"""
Pytest configuration and shared fixtures.
"""

import os
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from shared.models.video import IN_FLIGHT_STATUSES, VideoProject, VideoClip, MusicTrack

TEST_ENV = {
    "SUPABASE_URL": "https://test.supabase.co",
    "SUPABASE_SERVICE_KEY": "test_service_key_1234567890123456789012345678901234567890",
    "SUPABASE_JWT_SECRET": "test_jwt_secret_123456789012345678901234567890",
    "REDIS_URL": "redis://localhost:6379",
    "FAL_KEY": "fal_test_key_1234567890123456789012345678901234567890",
    "REPLICATE_API_TOKEN": "r8_test123456789012345678901234567890",
    "ENVIRONMENT": "development",
    "LOG_LEVEL": "DEBUG",
}


def pytest_configure(config):
    """Set up environment variables before any imports."""
    for key, value in TEST_ENV.items():
        os.environ.setdefault(key, value)


@pytest.fixture(autouse=True)
def test_env_vars(monkeypatch):
    """Set up test environment variables (autouse to ensure they're set)."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


class FakeStateStore:
    """In-memory stand-in for VideoStateStore."""

    def __init__(self):
        self.projects: Dict[str, Dict[str, Any]] = {}
        self.clips: Dict[str, Dict[str, Any]] = {}
        self.music_tracks: Dict[str, Dict[str, Any]] = {}
        self.project_updates: List[tuple] = []
        self.clip_updates: List[tuple] = []
        self.recompute_calls: List[str] = []

    def add_project(self, project_id: str = "proj-1", **fields) -> Dict[str, Any]:
        row = {"id": project_id, "workspace_id": "ws-1", **fields}
        self.projects[project_id] = row
        return row

    def add_clip(self, clip_id: str, project_id: str = "proj-1", sequence_order: int = 0, **fields) -> Dict[str, Any]:
        row = {
            "id": clip_id,
            "video_project_id": project_id,
            "sequence_order": sequence_order,
            "source_image_url": f"https://images.example.com/{clip_id}.jpg",
            "room_type": "living-room",
            **fields,
        }
        self.clips[clip_id] = row
        return row

    def add_music_track(self, track_id: str, **fields) -> Dict[str, Any]:
        row = {"id": track_id, **fields}
        self.music_tracks[track_id] = row
        return row

    async def get_project(self, project_id: str) -> Optional[VideoProject]:
        row = self.projects.get(project_id)
        return VideoProject.model_validate(row) if row else None

    async def get_clip(self, clip_id: str) -> Optional[VideoClip]:
        row = self.clips.get(clip_id)
        return VideoClip.model_validate(row) if row else None

    async def get_clips(self, project_id: str) -> List[VideoClip]:
        rows = [r for r in self.clips.values() if r["video_project_id"] == project_id]
        return [VideoClip.model_validate(r) for r in sorted(rows, key=lambda r: r["sequence_order"])]

    async def get_music_track(self, track_id: str) -> Optional[MusicTrack]:
        row = self.music_tracks.get(track_id)
        return MusicTrack.model_validate(row) if row else None

    async def update_project(self, project_id: str, patch: Dict[str, Any]) -> None:
        self.project_updates.append((project_id, dict(patch)))
        self.projects[project_id].update(patch)

    async def claim_project_for_generation(self, project_id: str, patch: Dict[str, Any]) -> bool:
        row = self.projects.get(project_id)
        if row is None or row.get("status") in IN_FLIGHT_STATUSES:
            return False
        self.project_updates.append((project_id, dict(patch)))
        row.update(patch)
        return True

    async def update_clip(self, clip_id: str, patch: Dict[str, Any]) -> None:
        self.clip_updates.append((clip_id, dict(patch)))
        self.clips[clip_id].update(patch)

    async def recompute_project_counts(self, project_id: str) -> Dict[str, int]:
        self.recompute_calls.append(project_id)
        clips = await self.get_clips(project_id)
        counts = {
            "clip_count": len(clips),
            "completed_clip_count": sum(1 for c in clips if c.status == "completed"),
            "failed_clip_count": sum(1 for c in clips if c.status == "failed"),
        }
        self.projects[project_id].update(counts)
        return counts

    def clip_statuses(self, clip_id: str) -> List[str]:
        """Every status written to a clip, in order."""
        return [p["status"] for cid, p in self.clip_updates if cid == clip_id and "status" in p]


@pytest.fixture
def fake_store() -> FakeStateStore:
    return FakeStateStore()


@pytest.fixture
def fake_media_store():
    """MediaStore double: fetches succeed, uploads return a storage URL for the path."""
    from modules.media_store.client import get_video_path
    from modules.video_providers.base import ImageAsset

    media = MagicMock()

    async def _fetch_image(url: str, file_name: Optional[str] = None) -> ImageAsset:
        return ImageAsset(data=f"image:{url}".encode(), file_name=file_name or "image.jpg")

    async def _upload(data: bytes, path: str, content_type: str = "video/mp4") -> str:
        return f"https://test.supabase.co/storage/v1/object/public/videos/{path}"

    media.fetch_image = AsyncMock(side_effect=_fetch_image)
    media.fetch = AsyncMock(return_value=b"mp4-bytes")
    media.upload = AsyncMock(side_effect=_upload)
    media.get_video_path = MagicMock(side_effect=get_video_path)
    return media


class FakeProvider:
    """Provider double recording every request it receives."""

    name = "fake"

    def __init__(self, behavior: Optional[Callable[[Any], str]] = None):
        self.requests: List[Any] = []
        self.behavior = behavior

    async def generate_clip(self, request) -> str:
        self.requests.append(request)
        if self.behavior is not None:
            return self.behavior(request)
        return f"https://provider.example.com/out/{len(self.requests)}.mp4"


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()
