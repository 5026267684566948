"""Run accounting models for tracking a watch run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, IntEnum

from upload_watcher.domain.models.video import Upload

logger = logging.getLogger(__name__)


class QuotaCost(IntEnum):
    """YouTube Data API quota units charged per call type."""

    CHANNEL_LOOKUP = 1
    CHANNEL_SEARCH = 100
    CHANNEL_METADATA = 1
    PLAYLIST_PAGE = 1
    VIDEO_DETAILS = 1


class ChannelStatus(str, Enum):
    """Outcome of processing one channel."""

    PENDING = "pending"
    PROCESSED = "processed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ChannelProcessingResult:
    """
    Result of processing a single channel.

    Carries the uploads that passed the watermark gate and how many of them
    were persisted.
    """

    channel_name: str
    channel_id: str | None = None
    status: ChannelStatus = ChannelStatus.PENDING
    new_uploads: list[Upload] = field(default_factory=list)
    recorded_count: int = 0
    first_run: bool = False
    attempted: bool = True
    error_message: str | None = None

    @property
    def new_count(self) -> int:
        """Number of uploads newer than the channel watermark."""
        return len(self.new_uploads)

    @property
    def has_errors(self) -> bool:
        """Whether the channel failed."""
        return self.status == ChannelStatus.FAILED

    def mark_failed(self, message: str) -> None:
        """Mark the channel as failed, dropping partial results."""
        self.status = ChannelStatus.FAILED
        self.error_message = message
        self.new_uploads = []

    def __str__(self) -> str:
        """Human-readable string representation."""
        error_part = f" (ERROR: {self.error_message})" if self.error_message else ""
        return f"{self.channel_name}: {self.status.value}, {self.new_count} new{error_part}"


@dataclass(frozen=True)
class ListedUpload:
    """A new upload paired with the channel it came from."""

    channel_name: str
    channel_id: str
    upload: Upload


@dataclass
class RunSummary:
    """
    Run context shared by every stage of a watch run.

    The orchestrator creates one per run and passes it through the stages,
    which add quota units and channel results to it. It is consumed once by
    the notifier.
    """

    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    channels_total: int = 0
    channels_processed: int = 0
    api_units_used: int = 0
    channel_results: list[ChannelProcessingResult] = field(default_factory=list)
    completed_at: datetime | None = None

    def add_quota(self, units: int, operation: str) -> None:
        """Charge quota units for an API call."""
        self.api_units_used += int(units)
        logger.debug(f"[API] {operation} (+{int(units)} units, total {self.api_units_used})")

    def add_channel_result(self, result: ChannelProcessingResult) -> None:
        """Record the outcome of a channel."""
        self.channel_results.append(result)
        if result.attempted:
            self.channels_processed += 1

    def complete(self) -> None:
        """Mark the run as completed."""
        self.completed_at = datetime.now(timezone.utc)

    @property
    def elapsed_seconds(self) -> float:
        """Seconds between start and completion (or now, while running)."""
        end = self.completed_at or datetime.now(timezone.utc)
        return (end - self.started_at).total_seconds()

    @property
    def total_new_uploads(self) -> int:
        """Number of new uploads across all channels."""
        return sum(result.new_count for result in self.channel_results)

    @property
    def failed_channels(self) -> list[ChannelProcessingResult]:
        """Channels that failed inside the per-channel boundary."""
        return [r for r in self.channel_results if r.has_errors]

    @property
    def skipped_channels(self) -> list[ChannelProcessingResult]:
        """Channels skipped because they could not be resolved or ran out of time."""
        return [r for r in self.channel_results if r.status == ChannelStatus.SKIPPED]

    def new_uploads(self, include_first_run: bool = True) -> list[ListedUpload]:
        """New uploads across channels, newest first."""
        listed = [
            ListedUpload(
                channel_name=result.channel_name,
                channel_id=result.channel_id or "",
                upload=upload,
            )
            for result in self.channel_results
            if include_first_run or not result.first_run
            for upload in result.new_uploads
        ]
        return sorted(listed, key=lambda item: item.upload.published_at, reverse=True)

    def first_run_upload_count(self) -> int:
        """Uploads recorded for channels seen for the first time."""
        return sum(r.new_count for r in self.channel_results if r.first_run)

    def __str__(self) -> str:
        """Human-readable string representation."""
        return (
            f"RunSummary(channels={self.channels_processed}/{self.channels_total}, "
            f"units={self.api_units_used}, new={self.total_new_uploads})"
        )
