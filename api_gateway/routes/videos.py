"""
Video generation endpoints.

Start generation for a project, regenerate a single clip, and poll project
status.
"""
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, status
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from shared.errors import (
    AllClipsFailedError,
    ConflictError,
    HandoffError,
    NotFoundError,
    ValidationError,
)
from shared.logging import get_logger
from shared.video_store import get_video_store
from api_gateway.dependencies import get_current_user
from modules.clip_generator.generator import generate_clip
from modules.video_orchestrator.process import start_generation

logger = get_logger(__name__)

router = APIRouter()


class StartRequest(BaseModel):
    """Request body for starting generation of a whole project."""

    project_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("projectId", "videoProjectId")
    )


class GenerateClipRequest(BaseModel):
    """Request body for (re)generating a single clip."""

    model_config = ConfigDict(populate_by_name=True)

    clip_id: str = Field(min_length=1, alias="clipId")
    tail_image_url: Optional[str] = Field(default=None, alias="tailImageUrl")
    target_room_label: Optional[str] = Field(default=None, alias="targetRoomLabel")
    provider: Optional[Literal["fal", "replicate"]] = None


@router.post("/start")
async def start_video_generation(
    request: StartRequest,
    current_user: dict = Depends(get_current_user)
) -> dict:
    """
    Generate every clip of a project and hand off to compilation.

    Returns:
        {success, runId, successfulClips, failedClips}
    """
    logger.info(
        "Starting video generation",
        extra={"video_project_id": request.project_id, "user_id": current_user.get("user_id")}
    )

    try:
        summary = await start_generation(request.project_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except AllClipsFailedError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": e.message, "successfulClips": 0, "failedClips": e.failed_clips}
        )
    except HandoffError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "error": e.message,
                "successfulClips": e.successful_clips,
                "failedClips": e.failed_clips,
            }
        )
    except Exception as e:
        logger.error("Video generation failed", exc_info=e, extra={"video_project_id": request.project_id})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Video generation failed: {str(e)}"
        )

    return {
        "success": True,
        "runId": summary.handoff_reference,
        "successfulClips": summary.successful_clips,
        "failedClips": summary.failed_clips,
    }


@router.post("/generate-clip")
async def generate_single_clip(
    request: GenerateClipRequest,
    current_user: dict = Depends(get_current_user)
) -> dict:
    """
    Generate (or regenerate) one clip without re-running the whole project.

    Returns:
        {success, clipUrl}
    """
    try:
        result = await generate_clip(
            request.clip_id,
            tail_image_url=request.tail_image_url,
            target_room_label=request.target_room_label,
            provider=request.provider,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=result.error or "Clip generation failed"
        )

    return {"success": True, "clipUrl": result.clip_url}


@router.get("/{project_id}")
async def get_video_project(
    project_id: str = Path(..., description="Video project ID"),
    current_user: dict = Depends(get_current_user)
) -> dict:
    """Project status plus its clips in sequence order, for UI polling."""
    store = get_video_store()
    project = await store.get_project(project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Video project not found: {project_id}")

    clips = await store.get_clips(project_id)
    return {
        "project": project.model_dump(mode="json"),
        "clips": [clip.model_dump(mode="json") for clip in clips],
    }
