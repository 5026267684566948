"""Domain models for the Upload Watcher application."""

from upload_watcher.domain.models.channel import ChannelConfig, ChannelEntry
from upload_watcher.domain.models.processing import (
    ChannelProcessingResult,
    ChannelStatus,
    ListedUpload,
    QuotaCost,
    RunSummary,
)
from upload_watcher.domain.models.video import (
    DEFAULT_WATERMARK,
    StoredVideoRecord,
    Upload,
    VideoDetails,
)

__all__ = [
    "DEFAULT_WATERMARK",
    "ChannelConfig",
    "ChannelEntry",
    "ChannelProcessingResult",
    "ChannelStatus",
    "ListedUpload",
    "QuotaCost",
    "RunSummary",
    "StoredVideoRecord",
    "Upload",
    "VideoDetails",
]
