"""Channel source backed by the channels listed in the configuration file."""

from __future__ import annotations

import logging

from upload_watcher.domain.models.channel import ChannelConfig, ChannelEntry
from upload_watcher.domain.services.channel_source import ChannelSource

logger = logging.getLogger(__name__)


class StaticChannelSource(ChannelSource):
    """
    Serves the enabled channels of the configuration file.

    Resolved IDs cannot be written back to the YAML file, so they are kept
    for the lifetime of this object and logged for the operator to copy
    into the configuration.
    """

    def __init__(self, channels: list[ChannelConfig]) -> None:
        self.channels = channels
        self._resolved: dict[str, str] = {}

    async def get_channels(self) -> list[ChannelEntry]:
        entries = []
        for channel in self.channels:
            if not channel.enabled:
                continue
            entry = channel.to_domain()
            resolved = self._resolved.get(entry.doc_id)
            if resolved and not entry.channel_id:
                entry = ChannelEntry(
                    doc_id=entry.doc_id,
                    name=entry.name,
                    profile_url=entry.profile_url,
                    channel_id=resolved,
                )
            entries.append(entry)
        return entries

    async def set_channel_id(self, doc_id: str, channel_id: str) -> bool:
        self._resolved[doc_id] = channel_id
        logger.info(
            f"Resolved channel '{doc_id}' to {channel_id}; add "
            f"'channel_id: {channel_id}' to the configuration to skip resolution"
        )
        return False
