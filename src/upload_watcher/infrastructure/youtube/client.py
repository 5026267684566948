"""YouTube Data API service factory."""

from __future__ import annotations

import httplib2
from googleapiclient.discovery import Resource, build

from upload_watcher.domain.exceptions import ConfigurationError


class YouTubeClient:
    """
    Builds and caches the YouTube Data API v3 service.

    Only public data is read, so an API key is enough; no OAuth flow is
    involved. Every HTTP call made through the service uses the configured
    timeout.
    """

    def __init__(self, api_key: str | None, timeout_seconds: int = 30) -> None:
        """
        Initialize the YouTube client.

        Args:
            api_key: YouTube Data API v3 key
            timeout_seconds: Socket timeout applied to every call
        """
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self._service: Resource | None = None

    @property
    def is_configured(self) -> bool:
        """Whether an API key is available."""
        return bool(self.api_key)

    def get_service(self) -> Resource:
        """
        Get the YouTube API service instance.

        Returns:
            YouTube Data API v3 service

        Raises:
            ConfigurationError: If no API key is configured
        """
        if not self.api_key:
            raise ConfigurationError(
                "YouTube API key is not configured. Set youtube_api.api_key "
                "(for example ${YOUTUBE_API_KEY}) in the configuration file."
            )

        if self._service is None:
            self._service = build(
                "youtube",
                "v3",
                developerKey=self.api_key,
                http=httplib2.Http(timeout=self.timeout_seconds),
                cache_discovery=False,
            )
        return self._service
