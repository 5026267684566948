"""Abstract base class for the main watch run orchestration."""

from abc import ABC, abstractmethod

from upload_watcher.domain.models.channel import ChannelEntry
from upload_watcher.domain.models.processing import ChannelProcessingResult, RunSummary


class WatcherService(ABC):
    """
    Abstract service for orchestrating a watch run.

    This is the main business logic interface that coordinates the channel
    source, resolver, discovery, watermark gate, persistence and notifier.
    """

    @abstractmethod
    async def run(self) -> RunSummary:
        """
        Process every channel once and send the summary notification.

        This is the main entry point of the scheduled job. It should:
        1. Announce the start of the run
        2. Load the channel list
        3. Process each channel inside its own failure boundary
        4. Send the summary notification

        Returns:
            RunSummary with counters and channel results

        Raises:
            WatchRunError: If the run fails outside the per-channel boundary
        """
        pass

    @abstractmethod
    async def process_channel(
        self, channel: ChannelEntry, summary: RunSummary
    ) -> ChannelProcessingResult:
        """
        Run resolve, discover, gate and record for one channel.

        Never raises: failures are captured on the returned result.

        Args:
            channel: Channel to process
            summary: Run context that receives quota charges

        Returns:
            ChannelProcessingResult for the channel
        """
        pass
