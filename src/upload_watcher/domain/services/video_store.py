"""Abstract base class for the durable video store."""

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Optional

from upload_watcher.domain.models.video import StoredVideoRecord


class VideoStore(ABC):
    """
    Abstract store of uploads that have already been seen.

    Records expire through the store's own time-to-live mechanism. Batch
    operations accept at most ``max_batch_size`` requests per call.
    """

    max_batch_size: int = 25

    @abstractmethod
    async def get_latest_record(self, channel_id: str) -> Optional[StoredVideoRecord]:
        """
        Get the most recently published record of a channel.

        Raises:
            StoreError: If the store cannot be queried
        """
        pass

    @abstractmethod
    async def put_records(self, records: list[StoredVideoRecord]) -> None:
        """
        Write a batch of records.

        Raises:
            StoreError: If the batch cannot be written
        """
        pass

    @abstractmethod
    def scan_records(self, keys_only: bool = False) -> AsyncIterator[list[StoredVideoRecord]]:
        """
        Iterate over all records, one page at a time.

        Args:
            keys_only: Only fetch the key attributes

        Raises:
            StoreError: If a page cannot be scanned
        """
        pass

    @abstractmethod
    async def delete_records(self, records: list[StoredVideoRecord]) -> None:
        """
        Delete a batch of records by key.

        Raises:
            StoreError: If the batch cannot be deleted
        """
        pass

    @abstractmethod
    async def describe(self) -> dict[str, Any]:
        """
        Describe the underlying table.

        Raises:
            StoreError: If the description cannot be fetched
        """
        pass
