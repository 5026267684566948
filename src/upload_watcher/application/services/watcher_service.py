"""Default implementation of the watcher service."""

from __future__ import annotations

import logging
import time

from upload_watcher.application.services.channel_resolver import ChannelResolver
from upload_watcher.application.services.notifications import NotificationBuilder
from upload_watcher.application.services.upload_discovery import UploadDiscovery
from upload_watcher.application.services.upload_recorder import UploadRecorder
from upload_watcher.application.services.watermark_gate import WatermarkGate
from upload_watcher.domain.exceptions import WatchRunError
from upload_watcher.domain.models.channel import ChannelEntry
from upload_watcher.domain.models.processing import (
    ChannelProcessingResult,
    ChannelStatus,
    RunSummary,
)
from upload_watcher.domain.services.channel_source import ChannelSource
from upload_watcher.domain.services.notifier import NotificationMessage, Notifier
from upload_watcher.domain.services.watcher_service import WatcherService
from upload_watcher.infrastructure.config.models import ProcessingSettings

logger = logging.getLogger(__name__)


class DefaultWatcherService(WatcherService):
    """
    Default implementation of the watcher service.

    Channels are processed one at a time. Each channel runs inside its own
    failure boundary so that one broken channel never stops the others.
    """

    def __init__(
        self,
        channel_source: ChannelSource,
        resolver: ChannelResolver,
        discovery: UploadDiscovery,
        gate: WatermarkGate,
        recorder: UploadRecorder,
        notifier: Notifier,
        messages: NotificationBuilder | None = None,
        settings: ProcessingSettings | None = None,
    ) -> None:
        """
        Initialize the watcher service.

        Args:
            channel_source: Source of the channels to watch
            resolver: Profile URL to channel ID resolver
            discovery: Upload discovery over the video API
            gate: Watermark-based deduplication
            recorder: Batched persistence of new uploads
            notifier: Notification sink
            messages: Builder of notification messages
            settings: Processing settings
        """
        self.channel_source = channel_source
        self.resolver = resolver
        self.discovery = discovery
        self.gate = gate
        self.recorder = recorder
        self.notifier = notifier
        self.settings = settings or ProcessingSettings()
        self.messages = messages or NotificationBuilder(
            suppress_first_run_listing=self.settings.suppress_first_run_listing
        )

    async def run(self) -> RunSummary:
        """
        Process every channel once and send the summary notification.

        Returns:
            RunSummary with counters and channel results

        Raises:
            WatchRunError: If the run fails outside the per-channel boundary
        """
        summary = RunSummary()
        logger.info("Starting upload watch run")

        try:
            await self._notify(self.messages.started(summary.started_at))

            channels = await self._load_channels()
            if not channels:
                summary.complete()
                await self._notify(self.messages.no_channels())
                logger.info("No channels to process, run finished")
                return summary

            summary.channels_total = len(channels)
            logger.info(f"Processing {len(channels)} channels")

            deadline = self._deadline()
            for index, channel in enumerate(channels, start=1):
                if deadline is not None and time.monotonic() >= deadline:
                    logger.warning(
                        f"[{index}/{len(channels)}] Run deadline reached, skipping {channel.display_name}"
                    )
                    summary.add_channel_result(ChannelProcessingResult(
                        channel_name=channel.display_name,
                        channel_id=channel.channel_id,
                        status=ChannelStatus.SKIPPED,
                        attempted=False,
                        error_message="Run deadline reached",
                    ))
                    continue

                logger.info(f"[{index}/{len(channels)}] {channel.display_name}")
                result = await self.process_channel(channel, summary)
                summary.add_channel_result(result)

            summary.complete()
            logger.info(
                f"Run complete: {summary.channels_processed}/{summary.channels_total} channels, "
                f"{summary.api_units_used} units, {summary.total_new_uploads} new uploads "
                f"in {summary.elapsed_seconds:.1f}s"
            )
            await self._notify(self.messages.summary(summary))
            return summary

        except Exception as e:
            logger.exception(f"Watch run failed: {e}")
            summary.complete()
            await self._notify(self.messages.failed(e))
            raise WatchRunError(f"Watch run failed: {e}", e) from e

    async def process_channel(
        self, channel: ChannelEntry, summary: RunSummary
    ) -> ChannelProcessingResult:
        """
        Run resolve, discover, gate and record for one channel.

        Args:
            channel: Channel to process
            summary: Run context that receives quota charges

        Returns:
            ChannelProcessingResult for the channel
        """
        result = ChannelProcessingResult(
            channel_name=channel.display_name,
            channel_id=channel.channel_id,
        )

        try:
            channel_id = channel.channel_id
            if not channel_id:
                channel_id = await self.resolver.resolve(channel.profile_url, summary)
                if not channel_id:
                    result.status = ChannelStatus.SKIPPED
                    result.error_message = f"Could not resolve channel from {channel.profile_url}"
                    logger.warning(f"  Skipping {channel.display_name}: {result.error_message}")
                    return result
                result.channel_id = channel_id
                await self._persist_channel_id(channel, channel_id)

            watermark = await self.gate.last_watermark(channel_id)
            result.first_run = self.gate.is_first_run(watermark)

            uploads = await self.discovery.discover(channel_id, summary)
            result.new_uploads = self.gate.filter_new(uploads, watermark)
            logger.info(
                f"  {len(result.new_uploads)} new of {len(uploads)} discovered uploads "
                f"for {channel.display_name}"
            )

            result.recorded_count = await self.recorder.record(
                channel_id, channel.display_name, result.new_uploads
            )
            result.status = ChannelStatus.PROCESSED

        except Exception as e:
            logger.exception(
                f"  Failed to process channel {channel.display_name} "
                f"({result.channel_id or 'unresolved'}): {e}"
            )
            result.mark_failed(str(e))

        return result

    async def _load_channels(self) -> list[ChannelEntry]:
        try:
            return await self.channel_source.get_channels()
        except Exception as e:
            logger.error(f"Failed to fetch channel list: {e}")
            return []

    async def _persist_channel_id(self, channel: ChannelEntry, channel_id: str) -> None:
        """Write a resolved ID back to the source; failures are only logged."""
        try:
            updated = await self.channel_source.set_channel_id(channel.doc_id, channel_id)
        except Exception as e:
            logger.error(f"  Failed to save channel ID for {channel.display_name}: {e}")
            return
        if updated:
            logger.info(f"  Saved channel ID {channel_id} for {channel.display_name}")

    async def _notify(self, message: NotificationMessage) -> None:
        try:
            await self.notifier.send(message)
        except Exception as e:
            logger.error(f"Failed to send notification '{message.text}': {e}")

    def _deadline(self) -> float | None:
        if self.settings.run_deadline_seconds is None:
            return None
        return time.monotonic() + self.settings.run_deadline_seconds
