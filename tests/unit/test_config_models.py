"""Tests for configuration models."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from upload_watcher.domain.models.channel import ChannelConfig
from upload_watcher.infrastructure.config.models import (
    AppConfig,
    DynamoDBConfig,
    LoggingConfig,
    ProcessingSettings,
    RetrySettings,
    SanityConfig,
    SlackConfig,
    YouTubeAPIConfig,
)


class TestChannelConfig:
    """Tests for ChannelConfig model."""

    def test_channel_config_to_domain(self) -> None:
        """The configured name doubles as the document ID."""
        config = ChannelConfig(name="Test Channel", channel_id="UCTestChannelID000000001")
        entry = config.to_domain()

        assert entry.doc_id == "Test Channel"
        assert entry.name == "Test Channel"
        assert entry.is_resolved is True

    def test_channel_config_invalid_id(self) -> None:
        """Channel IDs must be 'UC' followed by 22 characters."""
        with pytest.raises(ValidationError):
            ChannelConfig(name="Test Channel", channel_id="INVALID")

    def test_channel_config_invalid_url(self) -> None:
        """Profile URLs must be absolute."""
        with pytest.raises(ValidationError):
            ChannelConfig(name="Test Channel", profile_url="youtube.com/@handle")


class TestProcessingSettings:
    """Tests for ProcessingSettings model."""

    def test_processing_settings_defaults(self) -> None:
        """Test processing settings with default values."""
        settings = ProcessingSettings()
        assert settings.max_pages == 3
        assert settings.page_size == 50
        assert settings.max_playlist_items == 150
        assert settings.max_uploads_per_channel == 10
        assert settings.shorts_marker == "#shorts"
        assert settings.short_form_max_seconds == 60
        assert settings.suppress_first_run_listing is True
        assert settings.run_deadline_seconds is None

    def test_processing_settings_validation_page_size(self) -> None:
        """The API returns at most 50 entries per page."""
        with pytest.raises(ValidationError):
            ProcessingSettings(page_size=51)

    def test_processing_settings_extra_field(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            ProcessingSettings(unknown=True)


class TestIntegrationConfigs:
    """Tests for the per-integration settings."""

    def test_youtube_blank_key_is_none(self) -> None:
        """An unset environment variable leaves the key unset."""
        assert YouTubeAPIConfig(api_key="  ").api_key is None

    def test_sanity_api_version_prefix(self) -> None:
        """A leading 'v' on the API version is accepted."""
        config = SanityConfig(project_id="abc123", api_version="v2024-01-01")
        assert config.api_version == "2024-01-01"
        assert config.dataset == "production"
        assert config.token is None

    def test_sanity_requires_project_id(self) -> None:
        """The project ID is mandatory."""
        with pytest.raises(ValidationError):
            SanityConfig(project_id="")

    def test_dynamodb_defaults(self) -> None:
        """Table defaults and retention in seconds."""
        config = DynamoDBConfig()
        assert config.table_name == "YouTubeChannelVideos"
        assert config.index_name == "ChannelPublishedAtIndex"
        assert config.retention_seconds == 7 * 24 * 60 * 60
        assert DynamoDBConfig(endpoint_url="").endpoint_url is None

    def test_slack_webhook_requires_https(self) -> None:
        """Plain http webhooks are rejected."""
        with pytest.raises(ValidationError):
            SlackConfig(webhook_url="http://hooks.slack.com/services/x")

    def test_slack_blank_webhook_disables(self) -> None:
        """An empty webhook disables notifications."""
        assert SlackConfig(webhook_url="").webhook_url is None

    def test_slack_invalid_timezone(self) -> None:
        """Unknown timezones are rejected."""
        with pytest.raises(ValidationError):
            SlackConfig(display_timezone="Mars/Olympus_Mons")

    def test_slack_listing_cap(self) -> None:
        """The listing cap keeps messages within Slack's block limit."""
        with pytest.raises(ValidationError):
            SlackConfig(max_listed_uploads=16)


class TestRetrySettings:
    """Tests for RetrySettings model."""

    def test_retry_settings_defaults(self) -> None:
        """Test retry settings with default values."""
        settings = RetrySettings()
        assert settings.max_attempts == 3
        assert settings.backoff_factor == 2.0
        assert settings.max_delay == 30

    def test_retry_settings_validation_max_attempts(self) -> None:
        """Test retry settings validation for max attempts."""
        with pytest.raises(ValidationError):
            RetrySettings(max_attempts=0)  # Too low

        with pytest.raises(ValidationError):
            RetrySettings(max_attempts=11)  # Too high

    def test_delay_for_is_capped(self) -> None:
        """Backoff grows exponentially up to max_delay."""
        settings = RetrySettings(backoff_factor=2.0, max_delay=5)
        assert settings.delay_for(1) == 1.0
        assert settings.delay_for(2) == 2.0
        assert settings.delay_for(3) == 4.0
        assert settings.delay_for(4) == 5.0


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_logging_settings_defaults(self) -> None:
        """Test logging settings with default values."""
        settings = LoggingConfig()
        assert settings.level == "INFO"
        assert "%(asctime)s" in settings.format
        assert settings.file_path is None
        assert settings.max_file_size == 10485760  # 10MB
        assert settings.backup_count == 5

    def test_logging_level_is_normalised(self) -> None:
        """Levels are accepted in any case."""
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_logging_settings_validation_level(self) -> None:
        """Test logging settings validation for level."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="INVALID")

    def test_logging_blank_file_path(self) -> None:
        """An empty file path disables the file handler."""
        assert LoggingConfig(file_path="").file_path is None


class TestAppConfig:
    """Tests for AppConfig model."""

    def test_app_config_creation(self, sample_config_data: dict[str, Any]) -> None:
        """Test app config creation with valid data."""
        config = AppConfig(**sample_config_data)
        assert config.sanity is None
        assert len(config.channels) == 3
        assert len(config.get_enabled_channels()) == 2
        assert config.youtube_api.api_key == "test-api-key"
        assert config.dynamodb.table_name == "TestVideos"
        assert config.retry_settings.max_attempts == 3
        assert config.logging.level == "INFO"

    def test_app_config_default_sections(self) -> None:
        """An empty mapping yields defaults for every section."""
        config = AppConfig()
        assert config.channels == []
        assert config.processing.max_pages == 3
        assert config.slack.webhook_url is None
        assert config.dynamodb.retention_days == 7

    def test_app_config_duplicate_channel_names(self, sample_config_data: dict[str, Any]) -> None:
        """Channel names must be unique."""
        sample_config_data["channels"][1]["name"] = "Test Channel 1"
        with pytest.raises(ValidationError, match="Duplicate channel names"):
            AppConfig(**sample_config_data)

    def test_app_config_channel_needs_id_or_url(self, sample_config_data: dict[str, Any]) -> None:
        """A channel without ID or URL cannot be watched."""
        sample_config_data["channels"].append({"name": "Nowhere"})
        with pytest.raises(ValidationError, match="needs a channel_id or a profile_url"):
            AppConfig(**sample_config_data)

    def test_app_config_unknown_section(self, sample_config_data: dict[str, Any]) -> None:
        """Unknown top-level sections are rejected."""
        sample_config_data["stake_info"] = {"name": "old"}
        with pytest.raises(ValidationError):
            AppConfig(**sample_config_data)
