"""Abstract base classes for domain services."""

from upload_watcher.domain.services.channel_source import ChannelSource
from upload_watcher.domain.services.configuration_provider import (
    ConfigurationProvider,
)
from upload_watcher.domain.services.notifier import NotificationMessage, Notifier
from upload_watcher.domain.services.video_repository import PlaylistPage, VideoRepository
from upload_watcher.domain.services.video_store import VideoStore
from upload_watcher.domain.services.watcher_service import WatcherService

__all__ = [
    "ChannelSource",
    "ConfigurationProvider",
    "NotificationMessage",
    "Notifier",
    "PlaylistPage",
    "VideoRepository",
    "VideoStore",
    "WatcherService",
]
