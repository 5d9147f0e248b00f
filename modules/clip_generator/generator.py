"""
Single-clip generation.

Drives one clip from its still image(s) to a durable video URL through a
provider adapter, keeping the clip row's status consistent on every path.
"""
from typing import Optional

from shared.errors import NotFoundError, FetchError
from shared.logging import get_logger, set_project_id
from shared.models.video import ClipGenerationResult, VideoClip, VideoProject
from shared.video_store import VideoStateStore, get_video_store
from modules.media_store.client import MediaStore
from modules.video_providers.base import ImageAsset, ProviderInput
from modules.video_providers.factory import get_provider
from modules.clip_generator.motion_prompts import (
    DEFAULT_NEGATIVE_PROMPT,
    build_audio_prompt,
    get_motion_prompt,
    resolve_room_label,
)

logger = get_logger("clip_generator")


async def _fetch_tail_image(
    media: MediaStore,
    clip: VideoClip,
    tail_image_url: Optional[str]
) -> Optional[ImageAsset]:
    """Fetch the end frame; a failed fetch falls back to the source image (None)."""
    url = tail_image_url or clip.end_image_url
    if not url:
        return None
    try:
        return await media.fetch_image(url, file_name=f"{clip.id}-tail.jpg")
    except FetchError as e:
        logger.warning(
            "Failed to fetch tail image, falling back to source",
            extra={"clip_id": clip.id, "tail_image_url": url, "error": str(e)}
        )
        return None


async def build_prompt(
    store: VideoStateStore,
    project: VideoProject,
    clip: VideoClip,
    target_room_label: Optional[str] = None
) -> str:
    """
    Resolve the final prompt for a clip.

    An explicit motion_prompt wins over the room-type template. With native
    audio on, the music and ambient-sound clauses are appended.
    """
    label = resolve_room_label(clip.room_type, target_room_label or clip.room_label)
    prompt = clip.motion_prompt or get_motion_prompt(clip.room_type, label)

    if not project.generate_native_audio:
        return prompt

    track = None
    if project.music_track_id:
        track = await store.get_music_track(project.music_track_id)
    return f"{prompt} {build_audio_prompt(track, label)}"


async def generate_clip(
    clip_id: str,
    *,
    tail_image_url: Optional[str] = None,
    target_room_label: Optional[str] = None,
    provider: Optional[str] = None,
    recompute_counts: bool = True,
    store: Optional[VideoStateStore] = None,
    media_store: Optional[MediaStore] = None
) -> ClipGenerationResult:
    """
    Generate one clip and persist the outcome on the clip row.

    Clip-level failures never raise: they mark the clip failed and come back
    as an unsuccessful result.

    Args:
        clip_id: Clip to generate
        tail_image_url: End frame override (else the clip's end_image_url)
        target_room_label: Room label override for the prompt
        provider: Provider override (else project metadata, else default)
        recompute_counts: Recompute project aggregates when done
        store: State store (defaults to the shared store)
        media_store: Media store (defaults to a new MediaStore)

    Returns:
        ClipGenerationResult

    Raises:
        NotFoundError: If the clip or its project does not exist
    """
    store = store or get_video_store()
    media = media_store or MediaStore()

    clip = await store.get_clip(clip_id)
    if clip is None:
        raise NotFoundError(f"Clip {clip_id} not found")

    project = await store.get_project(clip.video_project_id)
    if project is None:
        raise NotFoundError(f"Video project {clip.video_project_id} not found")

    set_project_id(project.id)

    if clip.is_completed:
        logger.info("Clip already completed, reusing result", extra={"clip_id": clip_id})
        if recompute_counts:
            await store.recompute_project_counts(project.id)
        return ClipGenerationResult(clip_id=clip_id, success=True, clip_url=clip.clip_url, skipped=True)

    try:
        await store.update_clip(clip_id, {"status": "processing", "error_message": None})

        source_image = await media.fetch_image(clip.source_image_url, file_name=f"{clip_id}.jpg")
        tail_image = await _fetch_tail_image(media, clip, tail_image_url)
        prompt = await build_prompt(store, project, clip, target_room_label)

        adapter = get_provider(provider or project.provider)
        logger.info(
            "Generating clip",
            extra={
                "clip_id": clip_id,
                "provider": adapter.name,
                "duration": clip.duration,
                "has_tail_image": tail_image is not None,
                "generate_audio": project.generate_native_audio,
            }
        )

        provider_url = await adapter.generate_clip(ProviderInput(
            source_image=source_image,
            tail_image=tail_image,
            prompt=prompt,
            duration=clip.duration,
            aspect_ratio=project.aspect_ratio,
            generate_audio=project.generate_native_audio,
            negative_prompt=DEFAULT_NEGATIVE_PROMPT,
        ))

        video_bytes = await media.fetch(provider_url)
        path = media.get_video_path(project.workspace_id, project.id, f"{clip_id}.mp4")
        clip_url = await media.upload(video_bytes, path, "video/mp4")

        await store.update_clip(clip_id, {"status": "completed", "clip_url": clip_url, "error_message": None})
        logger.info("Clip completed", extra={"clip_id": clip_id, "clip_url": clip_url})
        result = ClipGenerationResult(clip_id=clip_id, success=True, clip_url=clip_url)

    except Exception as e:
        error_message = str(e) or type(e).__name__
        logger.error(
            f"Clip generation failed: {error_message}",
            extra={"clip_id": clip_id, "error_type": type(e).__name__}
        )
        await store.update_clip(clip_id, {"status": "failed", "error_message": error_message})
        result = ClipGenerationResult(clip_id=clip_id, success=False, error=error_message)

    if recompute_counts:
        await store.recompute_project_counts(project.id)

    return result
