"""Resolution of channel profile URLs to stable channel IDs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from upload_watcher.domain.exceptions import APIError
from upload_watcher.domain.models.processing import QuotaCost, RunSummary
from upload_watcher.domain.parsing import ProfileUrlShape, match_profile_url
from upload_watcher.domain.services.video_repository import VideoRepository

logger = logging.getLogger(__name__)

Lookup = Callable[[VideoRepository, str], Awaitable[Optional[str]]]


async def _use_channel_id(repository: VideoRepository, value: str) -> str | None:
    return value


async def _lookup_username(repository: VideoRepository, value: str) -> str | None:
    return await repository.find_channel_id_by_username(value)


async def _search_handle(repository: VideoRepository, value: str) -> str | None:
    return await repository.search_channel_id(f"@{value}")


async def _search_custom_name(repository: VideoRepository, value: str) -> str | None:
    return await repository.search_channel_id(value)


@dataclass(frozen=True)
class ResolutionStrategy:
    """How one URL shape is turned into a channel ID and what it costs."""

    cost: int
    operation: str
    lookup: Lookup


STRATEGIES: dict[ProfileUrlShape, ResolutionStrategy] = {
    ProfileUrlShape.CHANNEL_ID: ResolutionStrategy(0, "direct channel ID", _use_channel_id),
    ProfileUrlShape.USERNAME: ResolutionStrategy(
        QuotaCost.CHANNEL_LOOKUP, "channels.list(forUsername)", _lookup_username
    ),
    ProfileUrlShape.HANDLE: ResolutionStrategy(
        QuotaCost.CHANNEL_SEARCH, "search.list(handle)", _search_handle
    ),
    ProfileUrlShape.CUSTOM_NAME: ResolutionStrategy(
        QuotaCost.CHANNEL_SEARCH, "search.list(custom name)", _search_custom_name
    ),
}


class ChannelResolver:
    """
    Maps a channel profile URL to a channel ID.

    The URL is matched against the known shapes in priority order and only
    the first matching shape is tried. The cost of the lookup is charged to
    the run summary before the call is made.
    """

    def __init__(self, video_repository: VideoRepository) -> None:
        self.video_repository = video_repository

    async def resolve(self, profile_url: str | None, summary: RunSummary) -> str | None:
        """
        Resolve a profile URL.

        Args:
            profile_url: URL as stored in the channel source
            summary: Run context charged with the lookup cost

        Returns:
            Channel ID, or None when the URL cannot be resolved
        """
        match = match_profile_url(profile_url)
        if match is None:
            logger.warning(f"Could not resolve channel ID from URL {profile_url}: unknown URL shape")
            return None

        strategy = STRATEGIES[match.shape]
        logger.info(f"Detected {match.shape.value} URL ({match.value}), resolving via {strategy.operation}")
        if strategy.cost:
            summary.add_quota(strategy.cost, strategy.operation)

        try:
            channel_id = await strategy.lookup(self.video_repository, match.value)
        except APIError as e:
            logger.error(f"Channel lookup for {match.shape.value} '{match.value}' failed: {e}")
            return None

        if not channel_id:
            logger.warning(f"No channel found for {match.shape.value} '{match.value}'")
            return None

        logger.info(f"Resolved {match.value} -> {channel_id}")
        return channel_id
