"""YouTube API video repository implementation."""

from __future__ import annotations

import logging
from typing import Any

from googleapiclient.errors import HttpError
from httplib2 import HttpLib2Error

from upload_watcher.domain.exceptions import APIError, RateLimitError
from upload_watcher.domain.models.video import Upload, VideoDetails
from upload_watcher.domain.parsing import parse_duration_seconds
from upload_watcher.domain.services.video_repository import PlaylistPage, VideoRepository
from upload_watcher.infrastructure.youtube.client import YouTubeClient

logger = logging.getLogger(__name__)

MAX_IDS_PER_CALL = 50


class YouTubeVideoRepository(VideoRepository):
    """
    YouTube API implementation of the video repository.

    Each public method issues exactly one API request. Transient failures
    (5xx, 429) are retried by the client library up to ``num_retries`` times.
    """

    def __init__(self, client: YouTubeClient, num_retries: int = 2) -> None:
        """
        Initialize the YouTube video repository.

        Args:
            client: Factory for the YouTube API service
            num_retries: Retries for transient HTTP failures
        """
        self.client = client
        self.num_retries = num_retries

    async def find_channel_id_by_username(self, username: str) -> str | None:
        """Look up a channel ID from a legacy username."""
        response = self._execute(
            "channels.list(forUsername)",
            lambda service: service.channels().list(
                part="id", forUsername=username, maxResults=1
            ),
        )
        items = response.get("items") or []
        return items[0].get("id") if items else None

    async def search_channel_id(self, query: str) -> str | None:
        """Search for a channel and return the top hit's ID."""
        response = self._execute(
            "search.list(type=channel)",
            lambda service: service.search().list(
                part="snippet", q=query, type="channel", maxResults=1
            ),
        )
        items = response.get("items") or []
        if not items:
            return None
        return items[0].get("snippet", {}).get("channelId") or items[0].get("id", {}).get("channelId")

    async def get_uploads_playlist_id(self, channel_id: str) -> str | None:
        """Get the ID of the channel's uploads playlist."""
        response = self._execute(
            "channels.list(contentDetails)",
            lambda service: service.channels().list(part="contentDetails", id=channel_id),
        )
        items = response.get("items") or []
        if not items:
            return None
        return (
            items[0]
            .get("contentDetails", {})
            .get("relatedPlaylists", {})
            .get("uploads")
        )

    async def get_playlist_page(
        self, playlist_id: str, page_token: str | None = None, page_size: int = 50
    ) -> PlaylistPage:
        """Fetch one page of playlist entries."""
        params: dict[str, Any] = {
            "part": "snippet",
            "playlistId": playlist_id,
            "maxResults": min(page_size, MAX_IDS_PER_CALL),
        }
        if page_token:
            params["pageToken"] = page_token

        response = self._execute(
            "playlistItems.list",
            lambda service: service.playlistItems().list(**params),
        )

        uploads = []
        for item in response.get("items") or []:
            upload = self._parse_playlist_item(item)
            if upload:
                uploads.append(upload)

        return PlaylistPage(uploads=uploads, next_page_token=response.get("nextPageToken"))

    async def get_video_details(self, video_ids: list[str]) -> dict[str, VideoDetails]:
        """Fetch live status and duration for up to 50 videos."""
        if not video_ids:
            return {}
        if len(video_ids) > MAX_IDS_PER_CALL:
            raise ValueError(f"At most {MAX_IDS_PER_CALL} video IDs per call, got {len(video_ids)}")

        response = self._execute(
            "videos.list",
            lambda service: service.videos().list(
                part="liveStreamingDetails,contentDetails", id=",".join(video_ids)
            ),
        )

        details: dict[str, VideoDetails] = {}
        for item in response.get("items") or []:
            video_id = item.get("id")
            if not video_id:
                continue
            duration = item.get("contentDetails", {}).get("duration")
            details[video_id] = VideoDetails(
                video_id=video_id,
                is_live=bool(item.get("liveStreamingDetails")),
                duration_seconds=parse_duration_seconds(duration) if duration else None,
            )
        return details

    def _execute(self, operation: str, make_request: Any) -> dict[str, Any]:
        """
        Build and execute one API request, mapping transport errors.

        Args:
            operation: Name of the call, used in error messages
            make_request: Callable taking the service and returning a request

        Returns:
            Decoded JSON response
        """
        service = self.client.get_service()
        try:
            return make_request(service).execute(num_retries=self.num_retries) or {}
        except HttpError as e:
            raise self._map_http_error(operation, e) from e
        except (OSError, HttpLib2Error) as e:
            raise APIError(f"YouTube API {operation} failed: {e}", cause=e) from e

    @staticmethod
    def _map_http_error(operation: str, error: HttpError) -> APIError:
        """Translate an HttpError into a domain API error."""
        status = getattr(error.resp, "status", None)
        content = error.content
        if isinstance(content, bytes):
            content = content.decode("utf-8", "replace")
        if status == 403 and ("quotaExceeded" in (content or "") or "quotaExceeded" in str(error)):
            return RateLimitError(f"YouTube API quota exceeded during {operation}", cause=error)
        return APIError(f"YouTube API {operation} failed: {error}", status_code=status, cause=error)

    @staticmethod
    def _parse_playlist_item(item: dict[str, Any]) -> Upload | None:
        """
        Parse a playlistItems entry into an Upload.

        Entries without a video ID, title or publish time (deleted or
        private videos) are dropped.
        """
        snippet = item.get("snippet") or {}
        video_id = (snippet.get("resourceId") or {}).get("videoId")
        title = snippet.get("title")
        published_at = snippet.get("publishedAt")

        if not video_id or not title or not published_at:
            logger.debug(f"Skipping incomplete playlist entry: {item.get('id', 'unknown')}")
            return None

        return Upload(video_id=video_id, title=title, published_at=published_at)

