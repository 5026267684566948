"""Upload domain model and stored record representation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

DEFAULT_WATERMARK = "1970-01-01T00:00:00Z"
WATCH_URL_TEMPLATE = "https://www.youtube.com/watch?v={video_id}"


@dataclass(frozen=True)
class Upload:
    """
    A video discovered in a channel's uploads playlist.

    Instances only live for the duration of a run. Enrichment with detail
    metadata produces a new instance, the original is never mutated.
    """

    video_id: str
    title: str
    published_at: str
    is_live: bool = False
    duration_seconds: int | None = None

    def __post_init__(self) -> None:
        """Validate upload data after initialization."""
        if not self.video_id:
            raise ValueError("Video ID cannot be empty")
        if not self.published_at:
            raise ValueError("Published timestamp cannot be empty")

    @property
    def url(self) -> str:
        """Public watch URL of the video."""
        return WATCH_URL_TEMPLATE.format(video_id=self.video_id)

    def with_details(self, details: VideoDetails) -> Upload:
        """Create a new Upload enriched with live status and duration."""
        return replace(
            self,
            is_live=details.is_live,
            duration_seconds=details.duration_seconds,
        )

    def __str__(self) -> str:
        """Human-readable string representation."""
        return f"Upload(id={self.video_id}, title='{self.title[:50]}', published_at={self.published_at})"


@dataclass(frozen=True)
class VideoDetails:
    """Live-broadcast status and duration returned by the video detail call."""

    video_id: str
    is_live: bool
    duration_seconds: int | None = None


@dataclass(frozen=True)
class StoredVideoRecord:
    """
    Persisted record of an upload that has been seen.

    Keyed by ``(channel_id, video_id)``. ``expires_at`` is an epoch timestamp
    used by the store's time-to-live reaper.
    """

    channel_id: str
    video_id: str
    channel_name: str
    title: str
    published_at: str
    expires_at: int

    @classmethod
    def from_upload(
        cls, channel_id: str, channel_name: str, upload: Upload, expires_at: int
    ) -> StoredVideoRecord:
        """Build a record for an upload."""
        return cls(
            channel_id=channel_id,
            video_id=upload.video_id,
            channel_name=channel_name,
            title=upload.title,
            published_at=upload.published_at,
            expires_at=expires_at,
        )

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> StoredVideoRecord:
        """Build a record from a raw store item."""
        return cls(
            channel_id=str(item.get("channelId", "")),
            video_id=str(item.get("videoId", "")),
            channel_name=str(item.get("channelName", "")),
            title=str(item.get("title", "")),
            published_at=str(item.get("publishedAt", DEFAULT_WATERMARK)),
            expires_at=int(item.get("expiresAt", 0)),
        )

    def to_item(self) -> dict[str, Any]:
        """Convert to the attribute map written to the store."""
        return {
            "channelId": self.channel_id,
            "videoId": self.video_id,
            "channelName": self.channel_name,
            "title": self.title,
            "publishedAt": self.published_at,
            "expiresAt": self.expires_at,
        }

    @property
    def key(self) -> dict[str, str]:
        """Primary key of the record."""
        return {"channelId": self.channel_id, "videoId": self.video_id}
