"""Watermark-based deduplication of discovered uploads."""

from __future__ import annotations

import logging

from upload_watcher.domain.models.video import DEFAULT_WATERMARK, Upload
from upload_watcher.domain.services.video_store import VideoStore

logger = logging.getLogger(__name__)


class WatermarkGate:
    """
    Keeps only uploads published after the channel's watermark.

    The watermark is the publish time of the newest stored record of the
    channel. ISO 8601 UTC timestamps compare correctly as strings.
    """

    def __init__(self, video_store: VideoStore) -> None:
        self.video_store = video_store

    async def last_watermark(self, channel_id: str) -> str:
        """
        Read the channel's watermark.

        Returns:
            Publish time of the newest record, or DEFAULT_WATERMARK when the
            channel has no record or the store cannot be read
        """
        try:
            record = await self.video_store.get_latest_record(channel_id)
        except Exception as e:
            logger.error(f"  Failed to read watermark of {channel_id}, assuming none: {e}")
            return DEFAULT_WATERMARK

        if record is None or not record.published_at:
            logger.info(f"  No stored record for {channel_id}, using {DEFAULT_WATERMARK}")
            return DEFAULT_WATERMARK

        logger.info(f"  Watermark of {channel_id}: {record.published_at}")
        return record.published_at

    @staticmethod
    def filter_new(uploads: list[Upload], watermark: str) -> list[Upload]:
        """Uploads strictly newer than the watermark."""
        return [upload for upload in uploads if upload.published_at > watermark]

    @staticmethod
    def is_first_run(watermark: str) -> bool:
        """Whether the watermark is the never-seen default."""
        return watermark == DEFAULT_WATERMARK
