"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest
import yaml

from upload_watcher.domain.models.channel import ChannelEntry
from upload_watcher.domain.models.processing import RunSummary
from upload_watcher.domain.models.video import StoredVideoRecord, Upload
from upload_watcher.domain.services.video_repository import PlaylistPage
from upload_watcher.infrastructure.config.models import AppConfig


@pytest.fixture
def sample_config_data() -> dict[str, Any]:
    """Sample configuration data for testing."""
    return {
        "channels": [
            {
                "name": "Test Channel 1",
                "channel_id": "UCTestChannelID000000001",
                "enabled": True,
            },
            {
                "name": "Test Channel 2",
                "profile_url": "https://www.youtube.com/@testchannel2",
                "enabled": True,
            },
            {
                "name": "Test Channel 3",
                "channel_id": "UCTestChannelID000000003",
                "enabled": False,
            },
        ],
        "youtube_api": {
            "api_key": "test-api-key",
            "timeout_seconds": 20,
        },
        "dynamodb": {
            "table_name": "TestVideos",
            "region": "us-east-1",
            "retention_days": 7,
        },
        "slack": {
            "webhook_url": "https://hooks.slack.com/services/T000/B000/XXXX",
            "display_timezone": "Asia/Tokyo",
        },
        "processing": {
            "max_pages": 3,
            "page_size": 50,
            "max_playlist_items": 150,
            "max_uploads_per_channel": 10,
        },
        "retry_settings": {
            "max_attempts": 3,
            "backoff_factor": 2.0,
            "max_delay": 30,
        },
        "logging": {
            "level": "INFO",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "file_path": None,
            "max_file_size": 10485760,
            "backup_count": 5,
        },
    }


@pytest.fixture
def temp_config_file(sample_config_data: dict[str, Any]) -> Path:
    """Create a temporary configuration file for testing."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yml", delete=False) as f:
        yaml.dump(sample_config_data, f)
        return Path(f.name)


@pytest.fixture
def app_config(sample_config_data: dict[str, Any]) -> AppConfig:
    """Create an AppConfig instance for testing."""
    return AppConfig(**sample_config_data)


@pytest.fixture
def make_upload() -> Callable[..., Upload]:
    """Factory for uploads with sensible defaults."""

    def _make(
        video_id: str,
        published_at: str = "2024-05-01T12:00:00Z",
        title: str | None = None,
        is_live: bool = False,
        duration_seconds: int | None = None,
    ) -> Upload:
        return Upload(
            video_id=video_id,
            title=title if title is not None else f"Video {video_id}",
            published_at=published_at,
            is_live=is_live,
            duration_seconds=duration_seconds,
        )

    return _make


@pytest.fixture
def sample_channel() -> ChannelEntry:
    """A channel that already carries its channel ID."""
    return ChannelEntry(
        doc_id="doc-1",
        name="Test Channel 1",
        profile_url="https://www.youtube.com/channel/UCTestChannelID000000001",
        channel_id="UCTestChannelID000000001",
    )


@pytest.fixture
def unresolved_channel() -> ChannelEntry:
    """A channel known only by its handle URL."""
    return ChannelEntry(
        doc_id="doc-2",
        name="Test Channel 2",
        profile_url="https://www.youtube.com/@testchannel2",
    )


@pytest.fixture
def run_summary() -> RunSummary:
    """A fresh run context."""
    return RunSummary()


@pytest.fixture
def sample_record() -> StoredVideoRecord:
    """A stored record of an upload."""
    return StoredVideoRecord(
        channel_id="UCTestChannelID000000001",
        video_id="vid-stored",
        channel_name="Test Channel 1",
        title="Stored video",
        published_at="2024-05-01T00:00:00Z",
        expires_at=1714608000,
    )


@pytest.fixture
def mock_video_repository() -> AsyncMock:
    """Create a mock video repository with an empty channel."""
    mock = AsyncMock()
    mock.find_channel_id_by_username.return_value = None
    mock.search_channel_id.return_value = None
    mock.get_uploads_playlist_id.return_value = "UUTestChannelID000000001"
    mock.get_playlist_page.return_value = PlaylistPage(uploads=[], next_page_token=None)
    mock.get_video_details.return_value = {}
    return mock


@pytest.fixture
def mock_video_store() -> AsyncMock:
    """Create a mock video store with no records."""
    mock = AsyncMock()
    mock.max_batch_size = 25
    mock.get_latest_record.return_value = None
    mock.put_records.return_value = None
    mock.delete_records.return_value = None
    mock.describe.return_value = {"TableName": "TestVideos", "ItemCount": 0}
    return mock


@pytest.fixture
def mock_channel_source(sample_channel: ChannelEntry) -> AsyncMock:
    """Create a mock channel source listing one resolved channel."""
    mock = AsyncMock()
    mock.get_channels.return_value = [sample_channel]
    mock.set_channel_id.return_value = True
    return mock


@pytest.fixture
def mock_notifier() -> AsyncMock:
    """Create a mock notifier that always delivers."""
    mock = AsyncMock()
    mock.send.return_value = True
    return mock
