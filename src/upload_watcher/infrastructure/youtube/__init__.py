"""YouTube API integration implementations."""

from upload_watcher.infrastructure.youtube.client import YouTubeClient
from upload_watcher.infrastructure.youtube.video_repository import YouTubeVideoRepository

__all__ = [
    "YouTubeClient",
    "YouTubeVideoRepository",
]
