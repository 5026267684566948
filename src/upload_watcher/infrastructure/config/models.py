"""Pydantic configuration models for application settings."""

from __future__ import annotations

from typing import Any
from zoneinfo import ZoneInfo

from pydantic import BaseModel, Field, validator

from upload_watcher.domain.models.channel import ChannelConfig


def _blank_to_none(v: str | None) -> str | None:
    """Treat empty strings (unset environment variables) as missing."""
    if v is None or not v.strip():
        return None
    return v.strip()


class RetrySettings(BaseModel):
    """Configuration for API retry behavior."""

    max_attempts: int = Field(default=3, ge=1, le=10, description="Maximum retry attempts")
    backoff_factor: float = Field(default=2.0, ge=1.0, le=10.0, description="Exponential backoff factor")
    max_delay: int = Field(default=30, ge=1, description="Maximum delay between retries in seconds")

    def delay_for(self, attempt: int) -> float:
        """Backoff delay in seconds before retry number ``attempt`` (1-based)."""
        return float(min(self.backoff_factor ** (attempt - 1), self.max_delay))

    class Config:
        """Pydantic configuration."""
        extra = "forbid"


class LoggingConfig(BaseModel):
    """Configuration for application logging."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string used by the file handler"
    )
    file_path: str | None = Field(default=None, description="Log file path (None for console only)")
    max_file_size: int = Field(default=10485760, ge=1024, description="Max log file size in bytes (10MB)")
    backup_count: int = Field(default=5, ge=1, description="Number of backup log files to keep")

    @validator("level")
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @validator("file_path")
    def validate_file_path(cls, v: str | None) -> str | None:
        """Allow an unset environment variable to disable the file handler."""
        return _blank_to_none(v)

    class Config:
        """Pydantic configuration."""
        extra = "forbid"


class ProcessingSettings(BaseModel):
    """Configuration for upload discovery and filtering."""

    max_pages: int = Field(default=3, ge=1, le=20, description="Max playlist pages per channel")
    page_size: int = Field(default=50, ge=1, le=50, description="Playlist entries per page")
    max_playlist_items: int = Field(default=150, ge=1, le=1000, description="Max playlist entries per channel")
    max_uploads_per_channel: int = Field(default=10, ge=1, le=50, description="Max uploads kept after filtering")
    shorts_marker: str = Field(default="#shorts", description="Title marker of short-form videos")
    short_form_max_seconds: int = Field(default=60, ge=0, description="Durations up to this are short-form")
    suppress_first_run_listing: bool = Field(
        default=True, description="Do not list uploads of channels seen for the first time"
    )
    run_deadline_seconds: int | None = Field(
        default=None, ge=1, description="Stop starting new channels after this many seconds"
    )

    class Config:
        """Pydantic configuration."""
        extra = "forbid"


class YouTubeAPIConfig(BaseModel):
    """Configuration for YouTube Data API access."""

    api_key: str | None = Field(default=None, description="YouTube Data API v3 key")
    timeout_seconds: int = Field(default=30, ge=1, le=300, description="Per-call timeout")

    @validator("api_key")
    def validate_api_key(cls, v: str | None) -> str | None:
        """Normalise an unset key to None."""
        return _blank_to_none(v)

    class Config:
        """Pydantic configuration."""
        extra = "forbid"


class SanityConfig(BaseModel):
    """Configuration for the Sanity CMS channel source."""

    project_id: str = Field(..., min_length=1, description="Sanity project ID")
    dataset: str = Field(default="production", min_length=1, description="Sanity dataset")
    token: str | None = Field(default=None, description="API token, required for write-back")
    api_version: str = Field(default="2025-04-29", description="Sanity API version date")
    document_type: str = Field(default="liver", min_length=1, description="Document type holding channels")
    url_field: str = Field(default="youtube", min_length=1, description="Field holding the profile URL")
    timeout_seconds: int = Field(default=30, ge=1, le=300, description="Per-call timeout")

    @validator("token")
    def validate_token(cls, v: str | None) -> str | None:
        """Normalise an unset token to None."""
        return _blank_to_none(v)

    @validator("api_version")
    def validate_api_version(cls, v: str) -> str:
        """Accept both '2025-04-29' and 'v2025-04-29'."""
        return v[1:] if v.startswith("v") else v

    class Config:
        """Pydantic configuration."""
        extra = "forbid"


class DynamoDBConfig(BaseModel):
    """Configuration for the DynamoDB video store."""

    table_name: str = Field(default="YouTubeChannelVideos", min_length=1, description="Table name")
    index_name: str = Field(
        default="ChannelPublishedAtIndex", min_length=1,
        description="GSI with channelId as hash key and publishedAt as range key"
    )
    region: str = Field(default="ap-northeast-1", description="AWS region")
    endpoint_url: str | None = Field(default=None, description="Custom endpoint (e.g. DynamoDB Local)")
    retention_days: int = Field(default=7, ge=1, le=365, description="Days before records expire")
    timeout_seconds: int = Field(default=30, ge=1, le=300, description="Per-call timeout")

    @validator("endpoint_url")
    def validate_endpoint_url(cls, v: str | None) -> str | None:
        """Normalise an unset endpoint to None."""
        return _blank_to_none(v)

    @property
    def retention_seconds(self) -> int:
        """Retention window in seconds."""
        return self.retention_days * 24 * 60 * 60

    class Config:
        """Pydantic configuration."""
        extra = "forbid"


class SlackConfig(BaseModel):
    """Configuration for Slack notifications."""

    webhook_url: str | None = Field(default=None, description="Incoming webhook URL (None disables)")
    display_timezone: str = Field(default="Asia/Tokyo", description="Timezone for rendered timestamps")
    max_listed_uploads: int = Field(default=15, ge=0, le=15, description="Uploads listed per summary")
    task_button: bool = Field(default=True, description="Attach an 'add task' button to each upload")
    timeout_seconds: int = Field(default=10, ge=1, le=120, description="Per-call timeout")

    @validator("webhook_url")
    def validate_webhook_url(cls, v: str | None) -> str | None:
        """Normalise an unset webhook to None and require https."""
        v = _blank_to_none(v)
        if v is not None and not v.startswith("https://"):
            raise ValueError(f"Webhook URL must use https: {v}")
        return v

    @validator("display_timezone")
    def validate_display_timezone(cls, v: str) -> str:
        """Validate timezone string."""
        try:
            ZoneInfo(v)
        except Exception as e:
            raise ValueError(f"Invalid timezone: {v}") from e
        return v

    class Config:
        """Pydantic configuration."""
        extra = "forbid"


class AppConfig(BaseModel):
    """
    Main application configuration model.

    This is the root configuration object that contains all application settings,
    validated using Pydantic for type safety and runtime validation.
    """

    # Channel sources
    sanity: SanityConfig | None = Field(default=None, description="Fetch channels from Sanity CMS")
    channels: list[ChannelConfig] = Field(default_factory=list, description="Statically configured channels")

    # Integrations
    youtube_api: YouTubeAPIConfig = Field(default_factory=YouTubeAPIConfig)
    dynamodb: DynamoDBConfig = Field(default_factory=DynamoDBConfig)
    slack: SlackConfig = Field(default_factory=SlackConfig)

    # Behaviour
    processing: ProcessingSettings = Field(default_factory=ProcessingSettings)
    retry_settings: RetrySettings = Field(default_factory=RetrySettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @validator("channels")
    def validate_channels(cls, v: list[ChannelConfig]) -> list[ChannelConfig]:
        """Validate channel configurations."""
        names = [channel.name for channel in v]
        if len(names) != len(set(names)):
            raise ValueError("Duplicate channel names found in configuration")

        for channel in v:
            if not channel.channel_id and not channel.profile_url:
                raise ValueError(f"Channel {channel.name} needs a channel_id or a profile_url")
        return v

    def get_enabled_channels(self) -> list[ChannelConfig]:
        """Get only the enabled channels."""
        return [channel for channel in self.channels if channel.enabled]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return self.dict()

    class Config:
        """Pydantic configuration."""
        extra = "forbid"
        validate_assignment = True
