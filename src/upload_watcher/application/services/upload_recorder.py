"""Batched persistence of newly seen uploads."""

from __future__ import annotations

import logging
import time

from upload_watcher.domain.models.video import StoredVideoRecord, Upload
from upload_watcher.domain.services.video_store import VideoStore

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_SECONDS = 7 * 24 * 60 * 60


class UploadRecorder:
    """
    Writes one expiring record per new upload, in store-sized batches.

    A failed batch is logged and skipped. Its uploads stay below the
    watermark and are offered again on the next run.
    """

    def __init__(
        self,
        video_store: VideoStore,
        retention_seconds: int = DEFAULT_RETENTION_SECONDS,
        batch_size: int | None = None,
    ) -> None:
        self.video_store = video_store
        self.retention_seconds = retention_seconds
        self.batch_size = min(batch_size or video_store.max_batch_size, video_store.max_batch_size)

    async def record(
        self,
        channel_id: str,
        channel_name: str,
        uploads: list[Upload],
        now: float | None = None,
    ) -> int:
        """
        Persist uploads of a channel.

        Args:
            channel_id: YouTube channel ID
            channel_name: Display name stored with each record
            uploads: New uploads to record
            now: Write time as epoch seconds (defaults to the current time)

        Returns:
            Number of records written successfully
        """
        if not uploads:
            logger.debug(f"  No new uploads to record for {channel_id}")
            return 0

        expires_at = int(now if now is not None else time.time()) + self.retention_seconds
        records = [
            StoredVideoRecord.from_upload(channel_id, channel_name, upload, expires_at)
            for upload in uploads
        ]

        written = 0
        for start in range(0, len(records), self.batch_size):
            batch = records[start:start + self.batch_size]
            try:
                await self.video_store.put_records(batch)
            except Exception as e:
                logger.error(
                    f"  Failed to record batch of {len(batch)} uploads for "
                    f"{channel_name} ({channel_id}): {e}"
                )
                continue
            written += len(batch)
            logger.debug(f"  Recorded batch of {len(batch)} uploads")

        logger.info(f"  Recorded {written}/{len(records)} uploads for {channel_name}")
        return written
