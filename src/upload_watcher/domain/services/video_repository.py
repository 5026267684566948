"""Abstract base class for YouTube Data API operations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from upload_watcher.domain.models.video import Upload, VideoDetails


@dataclass(frozen=True)
class PlaylistPage:
    """One page of playlist entries and the cursor for the next page."""

    uploads: list[Upload] = field(default_factory=list)
    next_page_token: Optional[str] = None


class VideoRepository(ABC):
    """
    Abstract repository for the video-hosting API.

    Each method maps to exactly one API call so that callers can charge the
    corresponding quota cost. Implementations translate transport errors
    into APIError / RateLimitError.
    """

    @abstractmethod
    async def find_channel_id_by_username(self, username: str) -> Optional[str]:
        """
        Look up a channel ID from a legacy username.

        Args:
            username: Legacy YouTube username

        Returns:
            Channel ID, or None if no channel matched

        Raises:
            APIError: If the API call fails
        """
        pass

    @abstractmethod
    async def search_channel_id(self, query: str) -> Optional[str]:
        """
        Search for a channel and return the top hit's ID.

        Args:
            query: Search query ("@handle" or a custom name)

        Returns:
            Channel ID, or None if the search returned nothing

        Raises:
            APIError: If the API call fails
        """
        pass

    @abstractmethod
    async def get_uploads_playlist_id(self, channel_id: str) -> Optional[str]:
        """
        Get the ID of the channel's uploads playlist.

        Args:
            channel_id: YouTube channel ID

        Returns:
            Uploads playlist ID, or None if the channel exposes none

        Raises:
            APIError: If the API call fails
        """
        pass

    @abstractmethod
    async def get_playlist_page(
        self, playlist_id: str, page_token: Optional[str] = None, page_size: int = 50
    ) -> PlaylistPage:
        """
        Fetch one page of playlist entries.

        Args:
            playlist_id: Playlist to read
            page_token: Cursor returned by the previous page
            page_size: Maximum entries per page (at most 50)

        Returns:
            The page's uploads and the next page token

        Raises:
            APIError: If the API call fails
        """
        pass

    @abstractmethod
    async def get_video_details(self, video_ids: list[str]) -> dict[str, VideoDetails]:
        """
        Fetch live status and duration for up to 50 videos in one call.

        Args:
            video_ids: Video IDs to look up

        Returns:
            Mapping of video ID to details; unknown IDs are absent

        Raises:
            APIError: If the API call fails
        """
        pass
