"""Channel domain model and configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass

from pydantic import BaseModel, Field, validator

CHANNEL_ID_PATTERN = re.compile(r"^UC[a-zA-Z0-9_-]{22}$")


@dataclass(frozen=True)
class ChannelEntry:
    """
    A channel as listed by the channel source.

    ``channel_id`` is only present once the profile URL has been resolved
    and written back to the source.
    """

    doc_id: str
    name: str
    profile_url: str | None = None
    channel_id: str | None = None

    def __post_init__(self) -> None:
        """Validate channel data after initialization."""
        if not self.doc_id:
            raise ValueError("Channel document ID cannot be empty")

    @property
    def display_name(self) -> str:
        """Name used in logs and notifications."""
        return self.name or "(unnamed channel)"

    @property
    def is_resolved(self) -> bool:
        """Whether the channel already carries a stable channel ID."""
        return bool(self.channel_id)

    def __str__(self) -> str:
        """Human-readable string representation."""
        return f"ChannelEntry(name='{self.display_name}', id={self.channel_id or 'unresolved'})"


class ChannelConfig(BaseModel):
    """
    Statically configured channel.

    Used when channels are listed in the YAML configuration instead of
    being fetched from the CMS.
    """

    name: str = Field(..., min_length=1, description="Display name of the channel")
    profile_url: str | None = Field(default=None, description="YouTube profile URL")
    channel_id: str | None = Field(default=None, description="Resolved YouTube channel ID")
    enabled: bool = Field(default=True, description="Whether to watch this channel")

    @validator("channel_id")
    def validate_channel_id(cls, v: str | None) -> str | None:
        """Validate YouTube channel ID format."""
        if v is None:
            return v
        if not CHANNEL_ID_PATTERN.match(v):
            raise ValueError(f"Invalid YouTube channel ID format: {v}")
        return v

    @validator("profile_url")
    def validate_profile_url(cls, v: str | None) -> str | None:
        """Require an absolute http(s) URL."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Profile URL must be an absolute http(s) URL: {v}")
        return v

    def to_domain(self) -> ChannelEntry:
        """Convert to a domain ChannelEntry."""
        return ChannelEntry(
            doc_id=self.name,
            name=self.name,
            profile_url=self.profile_url,
            channel_id=self.channel_id,
        )

    class Config:
        """Pydantic configuration."""

        extra = "forbid"
        validate_assignment = True
