"""
Error hierarchy.

Every error raised by the clip generation pipeline derives from PipelineError.
"""

from typing import Optional


class PipelineError(Exception):
    """Base error for the clip generation pipeline."""

    def __init__(self, message: str, project_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.project_id = project_id


class ConfigError(PipelineError):
    """Missing or invalid configuration."""
    pass


class ValidationError(PipelineError):
    """Invalid input or precondition."""
    pass


class RetryableError(PipelineError):
    """Transient infrastructure failure that may succeed on retry."""
    pass


class NotFoundError(PipelineError):
    """Project or clip does not exist."""
    pass


class ConflictError(PipelineError):
    """Generation is already in flight for the project."""
    pass


class FetchError(PipelineError):
    """A source asset could not be fetched."""
    pass


class ProviderError(PipelineError):
    """
    Adapter-level failure.

    Covers provider staging uploads, transport errors, failed predictions,
    missing assets in a successful response, and poll timeouts.
    """

    def __init__(self, message: str, provider: Optional[str] = None, project_id: Optional[str] = None):
        super().__init__(message, project_id=project_id)
        self.provider = provider


class StorageError(PipelineError):
    """Generated clip could not be persisted to durable storage."""
    pass


class AllClipsFailedError(PipelineError):
    """Every clip of a project failed, nothing left to compile."""

    def __init__(self, message: str, failed_clips: int = 0, project_id: Optional[str] = None):
        super().__init__(message, project_id=project_id)
        self.failed_clips = failed_clips


class HandoffError(PipelineError):
    """Clips were generated but the compilation trigger was rejected."""

    def __init__(
        self,
        message: str,
        successful_clips: int = 0,
        failed_clips: int = 0,
        project_id: Optional[str] = None
    ):
        super().__init__(message, project_id=project_id)
        self.successful_clips = successful_clips
        self.failed_clips = failed_clips
