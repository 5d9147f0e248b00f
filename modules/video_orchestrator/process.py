"""
Main entry point for project video generation.

Fans out clip generation for every clip of a project, aggregates the
outcomes, and hands surviving clips off to compilation.
"""
import asyncio
from typing import List, Optional, Union

from shared.errors import (
    AllClipsFailedError,
    ConflictError,
    HandoffError,
    NotFoundError,
    ValidationError,
)
from shared.logging import get_logger, set_project_id
from shared.models.video import (
    ClipGenerationResult,
    GenerationSummary,
    IN_FLIGHT_STATUSES,
    VideoClip,
    VideoProject,
)
from shared.video_store import VideoStateStore, get_video_store
from modules.clip_generator.generator import generate_clip
from modules.media_store.client import MediaStore
from modules.video_orchestrator.compilation import CompilationQueue
from modules.video_orchestrator.cost_estimator import calculate_video_cost, cost_to_cents

logger = get_logger("video_orchestrator.process")

ALL_CLIPS_FAILED_MESSAGE = "All clip generations failed"


def _is_success(result: Union[ClipGenerationResult, BaseException]) -> bool:
    return isinstance(result, ClipGenerationResult) and result.success


async def _mark_failed(store: VideoStateStore, project_id: str, error_message: str) -> None:
    """Best-effort transition to failed while another error is already propagating."""
    try:
        await store.update_project(project_id, {"status": "failed", "error_message": error_message})
    except Exception as e:
        logger.error(
            "Failed to mark project as failed",
            exc_info=e,
            extra={"original_error": error_message}
        )


async def generate_all_clips(
    project: VideoProject,
    clips: List[VideoClip],
    store: VideoStateStore,
    media_store: MediaStore
) -> List[Union[ClipGenerationResult, BaseException]]:
    """
    Generate every clip concurrently, one task per clip.

    Counts are deferred to the caller. Exceptions come back in place of a
    result instead of cancelling the other tasks.
    """
    tasks = [
        generate_clip(
            clip.id,
            provider=project.provider,
            recompute_counts=False,
            store=store,
            media_store=media_store,
        )
        for clip in clips
    ]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    for clip, result in zip(clips, results):
        if isinstance(result, BaseException):
            logger.error(
                f"Clip task raised: {result}",
                extra={"clip_id": clip.id, "error_type": type(result).__name__}
            )
    return results


async def start_generation(
    project_id: str,
    store: Optional[VideoStateStore] = None,
    compilation: Optional[CompilationQueue] = None,
    media_store: Optional[MediaStore] = None
) -> GenerationSummary:
    """
    Generate all clips of a project and trigger compilation.

    Args:
        project_id: Video project ID
        store: State store (defaults to the shared store)
        compilation: Compilation queue (defaults to the configured queue)
        media_store: Media store shared by the clip tasks

    Returns:
        GenerationSummary with success/failure counts and the handoff run ID

    Raises:
        NotFoundError: If the project does not exist
        ValidationError: If the project has no clips
        ConflictError: If generation is already in flight
        AllClipsFailedError: If no clip succeeded (project is marked failed)
        HandoffError: If compilation could not be triggered (project stays compiling)
    """
    store = store or get_video_store()
    compilation = compilation or CompilationQueue()
    media_store = media_store or MediaStore()
    set_project_id(project_id)

    project = await store.get_project(project_id)
    if project is None:
        raise NotFoundError(f"Video project not found: {project_id}", project_id=project_id)

    clips = await store.get_clips(project_id)
    if not clips:
        raise ValidationError("No clips to generate", project_id=project_id)

    if project.status in IN_FLIGHT_STATUSES:
        raise ConflictError(
            f"Video generation already in progress (status: {project.status})",
            project_id=project_id
        )

    estimated_cost = calculate_video_cost(len(clips), project.generate_native_audio)
    claimed = await store.claim_project_for_generation(project_id, {
        "status": "generating",
        "error_message": None,
        "clip_count": len(clips),
        "estimated_cost_cents": cost_to_cents(estimated_cost),
    })
    if not claimed:
        raise ConflictError("Video generation already in progress", project_id=project_id)

    logger.info(
        "Starting clip generation",
        extra={
            "clip_count": len(clips),
            "provider": project.provider or "default",
            "estimated_cost": float(estimated_cost),
        }
    )

    try:
        results = await generate_all_clips(project, clips, store, media_store)
    except Exception as e:
        logger.error(f"Video generation failed: {e}", exc_info=e)
        await _mark_failed(store, project_id, str(e) or type(e).__name__)
        raise

    try:
        await store.recompute_project_counts(project_id)
    except Exception as e:
        logger.error(f"Failed to recompute clip counts: {e}", exc_info=e)

    successful = sum(1 for r in results if _is_success(r))
    failed = len(results) - successful

    logger.info("Clip generation completed", extra={"successful": successful, "failed": failed})

    if successful == 0:
        await store.update_project(project_id, {"status": "failed", "error_message": ALL_CLIPS_FAILED_MESSAGE})
        raise AllClipsFailedError(ALL_CLIPS_FAILED_MESSAGE, failed_clips=failed, project_id=project_id)

    if failed:
        logger.warning(
            "Some clips failed to generate",
            extra={
                "failed_count": failed,
                "failed_clip_ids": ",".join(c.id for c, r in zip(clips, results) if not _is_success(r)),
            }
        )

    actual_cost = calculate_video_cost(successful, project.generate_native_audio)
    await store.update_project(project_id, {
        "status": "compiling",
        "actual_cost_cents": cost_to_cents(actual_cost),
    })

    try:
        run_id = await compilation.trigger(project_id)
    except Exception as e:
        error_message = f"Failed to trigger compilation: {str(e) or type(e).__name__}"
        logger.error(error_message, exc_info=e)
        await store.update_project(project_id, {"error_message": error_message})
        raise HandoffError(
            error_message,
            successful_clips=successful,
            failed_clips=failed,
            project_id=project_id
        ) from e

    logger.info("Compile task triggered", extra={"run_id": run_id})

    return GenerationSummary(
        project_id=project_id,
        successful_clips=successful,
        failed_clips=failed,
        handoff_reference=run_id
    )
