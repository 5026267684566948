"""Discovery of a channel's latest long-form uploads."""

from __future__ import annotations

import logging

from upload_watcher.domain.exceptions import APIError
from upload_watcher.domain.models.processing import QuotaCost, RunSummary
from upload_watcher.domain.models.video import Upload, VideoDetails
from upload_watcher.domain.parsing import has_title_marker, is_short_form_duration
from upload_watcher.domain.services.video_repository import VideoRepository
from upload_watcher.infrastructure.config.models import ProcessingSettings

logger = logging.getLogger(__name__)

DETAILS_BATCH_SIZE = 50


class UploadDiscovery:
    """
    Lists a channel's recent uploads and drops everything that is not new
    long-form content.

    API failures never abort the channel: a failed page truncates
    pagination and a failed detail batch leaves its items unenriched.
    """

    def __init__(
        self, video_repository: VideoRepository, settings: ProcessingSettings | None = None
    ) -> None:
        self.video_repository = video_repository
        self.settings = settings or ProcessingSettings()

    async def discover(self, channel_id: str, summary: RunSummary) -> list[Upload]:
        """
        Discover the latest uploads of a channel.

        Args:
            channel_id: YouTube channel ID
            summary: Run context charged with every API call

        Returns:
            Uploads newest first, at most ``max_uploads_per_channel``
        """
        playlist_id = await self._get_uploads_playlist_id(channel_id, summary)
        if not playlist_id:
            return []

        uploads = await self._list_playlist(playlist_id, summary)
        if not uploads:
            return []

        details = await self._get_details([u.video_id for u in uploads], summary)
        enriched = [
            upload.with_details(details[upload.video_id]) if upload.video_id in details else upload
            for upload in uploads
        ]

        kept = self.filter_uploads(enriched)
        logger.info(f"  {len(kept)} of {len(uploads)} uploads kept after filtering ({channel_id})")

        kept.sort(key=lambda upload: upload.published_at, reverse=True)
        return kept[: self.settings.max_uploads_per_channel]

    def filter_uploads(self, uploads: list[Upload]) -> list[Upload]:
        """Drop live streams and short-form videos."""
        return [upload for upload in uploads if not self.is_excluded(upload)]

    def is_excluded(self, upload: Upload) -> bool:
        """
        Whether an upload is excluded.

        Live streams (live-broadcast metadata present), titles carrying the
        short-form marker, and known durations in (0, short_form_max_seconds]
        are excluded. An unknown duration never excludes.
        """
        if upload.is_live:
            return True
        if has_title_marker(upload.title, self.settings.shorts_marker):
            return True
        return is_short_form_duration(upload.duration_seconds, self.settings.short_form_max_seconds)

    async def _get_uploads_playlist_id(self, channel_id: str, summary: RunSummary) -> str | None:
        summary.add_quota(QuotaCost.CHANNEL_METADATA, f"channels.list(contentDetails, {channel_id})")
        try:
            playlist_id = await self.video_repository.get_uploads_playlist_id(channel_id)
        except APIError as e:
            logger.error(f"  Failed to fetch uploads playlist of {channel_id}: {e}")
            return None

        if not playlist_id:
            logger.warning(f"  Channel {channel_id} has no uploads playlist")
        return playlist_id

    async def _list_playlist(self, playlist_id: str, summary: RunSummary) -> list[Upload]:
        """Follow the page cursor until it ends or a cap is reached."""
        uploads: list[Upload] = []
        seen: set[str] = set()
        page_token: str | None = None

        for page_number in range(1, self.settings.max_pages + 1):
            summary.add_quota(QuotaCost.PLAYLIST_PAGE, f"playlistItems.list page {page_number}")
            try:
                page = await self.video_repository.get_playlist_page(
                    playlist_id, page_token, self.settings.page_size
                )
            except APIError as e:
                logger.error(f"  Failed to fetch page {page_number} of {playlist_id}: {e}")
                break

            for upload in page.uploads:
                if upload.video_id not in seen:
                    seen.add(upload.video_id)
                    uploads.append(upload)
            logger.debug(f"  Page {page_number}: {len(page.uploads)} entries ({len(uploads)} total)")

            if len(uploads) >= self.settings.max_playlist_items:
                uploads = uploads[: self.settings.max_playlist_items]
                break

            page_token = page.next_page_token
            if not page_token:
                break

        return uploads

    async def _get_details(
        self, video_ids: list[str], summary: RunSummary
    ) -> dict[str, VideoDetails]:
        details: dict[str, VideoDetails] = {}
        for start in range(0, len(video_ids), DETAILS_BATCH_SIZE):
            batch = video_ids[start:start + DETAILS_BATCH_SIZE]
            batch_number = start // DETAILS_BATCH_SIZE + 1
            summary.add_quota(QuotaCost.VIDEO_DETAILS, f"videos.list batch {batch_number}")
            try:
                details.update(await self.video_repository.get_video_details(batch))
            except APIError as e:
                logger.error(f"  Failed to fetch video details (batch {batch_number}): {e}")

        live_count = sum(1 for d in details.values() if d.is_live)
        logger.debug(f"  Details for {len(details)} videos, {live_count} live")
        return details
