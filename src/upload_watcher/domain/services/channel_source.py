"""Abstract base class for the channel list source."""

from abc import ABC, abstractmethod

from upload_watcher.domain.models.channel import ChannelEntry


class ChannelSource(ABC):
    """
    Abstract source of the channels to watch.

    The source is read once per run and receives resolved channel IDs so
    that profile URL resolution is not repeated on later runs.
    """

    @abstractmethod
    async def get_channels(self) -> list[ChannelEntry]:
        """
        Get all channels to watch.

        Raises:
            ChannelSourceError: If the list cannot be fetched
        """
        pass

    @abstractmethod
    async def set_channel_id(self, doc_id: str, channel_id: str) -> bool:
        """
        Persist a resolved channel ID.

        Args:
            doc_id: Source document identifier of the channel
            channel_id: Resolved YouTube channel ID

        Returns:
            True if the update was persisted, False if it was skipped

        Raises:
            ChannelSourceError: If the update fails
        """
        pass
