"""
Configuration management.

Centralized environment variable management and validation.
"""

from typing import Literal, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from shared.errors import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # Allow case-insensitive env var matching
        extra="ignore"
    )

    # Supabase configuration
    supabase_url: str
    supabase_service_key: str
    supabase_jwt_secret: str  # Supabase JWT secret for token validation

    # Redis configuration
    redis_url: str

    # Provider API keys
    fal_key: str
    replicate_api_token: str

    # Environment
    environment: Literal["development", "staging", "production"] = "development"

    # REDIS_QUEUE_NAME: Optional override for the compilation queue name
    # (defaults to "video_compilation_{environment}")
    redis_queue_name: Optional[str] = None

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # DEFAULT_VIDEO_PROVIDER: used when a project carries no provider in its metadata
    default_video_provider: Literal["fal", "replicate"] = "fal"

    # Supabase Storage bucket holding generated clips
    video_storage_bucket: str = "videos"

    # Timeout for fetching source images and provider results
    media_fetch_timeout_seconds: float = 60.0

    @field_validator("supabase_url")
    @classmethod
    def validate_supabase_url(cls, v: str) -> str:
        """Validate Supabase URL format."""
        if not v:
            raise ConfigError("SUPABASE_URL is required")
        if not v.startswith(("http://", "https://")):
            raise ConfigError("SUPABASE_URL must be a valid HTTP/HTTPS URL")
        return v

    @field_validator("supabase_service_key")
    @classmethod
    def validate_supabase_service_key(cls, v: str) -> str:
        """Validate Supabase service key format."""
        if not v:
            raise ConfigError("SUPABASE_SERVICE_KEY is required")
        if len(v) < 20:  # Basic format check
            raise ConfigError("SUPABASE_SERVICE_KEY appears to be invalid")
        return v

    @field_validator("supabase_jwt_secret")
    @classmethod
    def validate_supabase_jwt_secret(cls, v: str) -> str:
        """Validate Supabase JWT secret format."""
        if not v:
            raise ConfigError("SUPABASE_JWT_SECRET is required")
        if len(v) < 32:
            raise ConfigError("SUPABASE_JWT_SECRET must be at least 32 characters")
        return v

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: str) -> str:
        """Validate Redis URL format."""
        if not v:
            raise ConfigError("REDIS_URL is required")
        if not v.startswith(("redis://", "rediss://")):
            raise ConfigError("REDIS_URL must start with redis:// or rediss://")
        return v

    @field_validator("fal_key")
    @classmethod
    def validate_fal_key(cls, v: str) -> str:
        """Validate fal.ai API key format."""
        if not v:
            raise ConfigError("FAL_KEY is required")
        if len(v) < 20:
            raise ConfigError("FAL_KEY appears to be invalid")
        return v

    @field_validator("replicate_api_token")
    @classmethod
    def validate_replicate_api_token(cls, v: str) -> str:
        """Validate Replicate API token format."""
        if not v:
            raise ConfigError("REPLICATE_API_TOKEN is required")
        if not v.startswith("r8_"):
            raise ConfigError("REPLICATE_API_TOKEN must start with 'r8_'")
        if len(v) < 20:
            raise ConfigError("REPLICATE_API_TOKEN appears to be invalid")
        return v

    @property
    def queue_name(self) -> str:
        """
        Get the Redis compilation queue name, environment-aware.

        If REDIS_QUEUE_NAME is set, use that. Otherwise, derive from environment:
        - development -> "video_compilation_development"
        - production -> "video_compilation_production"

        Keeps local compile workers from consuming production handoffs.
        """
        if self.redis_queue_name:
            return self.redis_queue_name
        return f"video_compilation_{self.environment}"


# Singleton instance
try:
    settings = Settings()
except Exception as e:
    # Re-raise as ConfigError for consistency
    if isinstance(e, ConfigError):
        raise
    raise ConfigError(f"Failed to load configuration: {str(e)}") from e
