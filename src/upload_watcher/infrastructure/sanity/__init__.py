"""Sanity CMS integration implementations."""

from upload_watcher.infrastructure.sanity.channel_source import SanityChannelSource

__all__ = ["SanityChannelSource"]
