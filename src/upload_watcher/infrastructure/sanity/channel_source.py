"""Sanity CMS implementation of the channel source."""

from __future__ import annotations

import logging
from typing import Any

import requests

from upload_watcher.domain.exceptions import ChannelSourceError
from upload_watcher.domain.models.channel import ChannelEntry
from upload_watcher.domain.services.channel_source import ChannelSource
from upload_watcher.infrastructure.config.models import SanityConfig

logger = logging.getLogger(__name__)


class SanityChannelSource(ChannelSource):
    """
    Reads channels from Sanity documents and writes resolved IDs back.

    Uses the HTTP query API for reads and the mutate API for the
    ``channelId`` patch. Writes are skipped when no token is configured.
    """

    def __init__(self, config: SanityConfig, session: requests.Session | None = None) -> None:
        """
        Initialize the Sanity channel source.

        Args:
            config: Sanity project settings
            session: HTTP session (a new one is created if omitted)
        """
        self.config = config
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        """Versioned API root of the project."""
        return f"https://{self.config.project_id}.api.sanity.io/v{self.config.api_version}"

    @property
    def query(self) -> str:
        """GROQ query listing the channel documents."""
        return (
            f'*[_type == "{self.config.document_type}"]'
            f'{{ _id, name, "profileUrl": {self.config.url_field}, channelId }}'
        )

    async def get_channels(self) -> list[ChannelEntry]:
        """Fetch all channel documents."""
        url = f"{self.base_url}/data/query/{self.config.dataset}"
        try:
            response = self.session.get(
                url,
                params={"query": self.query},
                headers=self._headers(),
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
            documents = response.json().get("result") or []
        except (requests.RequestException, ValueError) as e:
            raise ChannelSourceError(f"Failed to fetch channels from Sanity: {e}", e) from e

        channels = []
        for document in documents:
            entry = self._parse_document(document)
            if entry:
                channels.append(entry)

        logger.info(f"Fetched {len(channels)} channels from Sanity")
        return channels

    async def set_channel_id(self, doc_id: str, channel_id: str) -> bool:
        """Patch the document's ``channelId`` field."""
        if not doc_id or not channel_id:
            logger.warning("Skipping Sanity update: document ID or channel ID missing")
            return False
        if not self.config.token:
            logger.warning("Skipping Sanity update: no API token configured")
            return False

        url = f"{self.base_url}/data/mutate/{self.config.dataset}"
        payload = {"mutations": [{"patch": {"id": doc_id, "set": {"channelId": channel_id}}}]}
        try:
            response = self.session.post(
                url,
                json=payload,
                headers=self._headers(),
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise ChannelSourceError(f"Failed to update Sanity document {doc_id}: {e}", e) from e

        logger.info(f"Stored channel ID {channel_id} on Sanity document {doc_id}")
        return True

    def _headers(self) -> dict[str, str]:
        """Request headers, with the bearer token when configured."""
        if self.config.token:
            return {"Authorization": f"Bearer {self.config.token}"}
        return {}

    @staticmethod
    def _parse_document(document: dict[str, Any]) -> ChannelEntry | None:
        """Convert a query result document into a ChannelEntry."""
        doc_id = document.get("_id")
        if not doc_id:
            return None
        return ChannelEntry(
            doc_id=doc_id,
            name=document.get("name") or "",
            profile_url=document.get("profileUrl"),
            channel_id=document.get("channelId") or None,
        )
