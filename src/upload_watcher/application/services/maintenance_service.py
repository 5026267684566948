"""Out-of-band maintenance operations on the video store."""

from __future__ import annotations

import logging
from typing import Any

from upload_watcher.domain.models.video import StoredVideoRecord
from upload_watcher.domain.services.video_store import VideoStore

logger = logging.getLogger(__name__)


class MaintenanceService:
    """Administrative operations: clear, list and describe the store."""

    def __init__(self, video_store: VideoStore) -> None:
        self.video_store = video_store

    async def clear_table(self) -> int:
        """
        Delete every record in the store.

        Records are scanned by key only and deleted in store-sized batches.
        A failed batch is logged and the remaining batches continue.

        Returns:
            Number of records deleted
        """
        logger.info("Clearing all records from the video store")
        batch_size = self.video_store.max_batch_size
        deleted = 0
        failed = 0

        async for page in self.video_store.scan_records(keys_only=True):
            for start in range(0, len(page), batch_size):
                batch = page[start:start + batch_size]
                try:
                    await self.video_store.delete_records(batch)
                except Exception as e:
                    failed += len(batch)
                    logger.error(f"Failed to delete batch of {len(batch)} records: {e}")
                    continue
                deleted += len(batch)
                logger.debug(f"Deleted {deleted} records so far")

        if failed:
            logger.warning(f"Cleared {deleted} records, {failed} could not be deleted")
        else:
            logger.info(f"Cleared {deleted} records")
        return deleted

    async def list_records(self) -> list[StoredVideoRecord]:
        """All records, newest publish time first."""
        records: list[StoredVideoRecord] = []
        async for page in self.video_store.scan_records():
            records.extend(page)
        records.sort(key=lambda record: record.published_at or "", reverse=True)
        logger.info(f"Listed {len(records)} records")
        return records

    async def describe_table(self) -> dict[str, Any]:
        """Description of the underlying table."""
        return await self.video_store.describe()
