"""Tests for YAML configuration provider."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any

import pytest
import yaml

from upload_watcher.domain.exceptions import ConfigurationError
from upload_watcher.infrastructure.config.yaml_provider import YamlConfigurationProvider


def _write_config(data: Any) -> Path:
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yml", delete=False) as f:
        yaml.dump(data, f)
        return Path(f.name)


class TestYamlConfigurationProvider:
    """Tests for YamlConfigurationProvider."""

    def test_yaml_provider_creation(self, temp_config_file: Path) -> None:
        """Test YAML provider creation with valid config file."""
        provider = YamlConfigurationProvider(temp_config_file)
        assert provider.config_path == temp_config_file
        assert provider._config is not None

    def test_yaml_provider_nonexistent_file(self) -> None:
        """Test YAML provider with nonexistent config file."""
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            YamlConfigurationProvider("nonexistent.yml")

    def test_yaml_provider_invalid_yaml(self) -> None:
        """Test YAML provider with invalid YAML file."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yml", delete=False) as f:
            f.write("invalid: yaml: content: [")
            temp_path = Path(f.name)

        with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
            YamlConfigurationProvider(temp_path)

    def test_yaml_provider_empty_file(self) -> None:
        """Test YAML provider with empty config file."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yml", delete=False) as f:
            f.write("")
            temp_path = Path(f.name)

        with pytest.raises(ConfigurationError, match="Configuration file is empty"):
            YamlConfigurationProvider(temp_path)

    def test_yaml_provider_not_a_mapping(self) -> None:
        """A top-level list is rejected."""
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            YamlConfigurationProvider(_write_config(["a", "b"]))

    def test_yaml_provider_invalid_config_structure(self) -> None:
        """Test YAML provider with invalid config structure."""
        invalid_config = {
            "channels": [{"name": "Broken", "channel_id": "INVALID"}],
        }

        with pytest.raises(ConfigurationError, match="Configuration validation failed"):
            YamlConfigurationProvider(_write_config(invalid_config))

    def test_get_channels(self, temp_config_file: Path) -> None:
        """Test getting channels from config."""
        provider = YamlConfigurationProvider(temp_config_file)
        channels = provider.get_channels()

        assert len(channels) == 3
        assert channels[0].name == "Test Channel 1"
        assert channels[0].channel_id == "UCTestChannelID000000001"
        assert channels[1].profile_url == "https://www.youtube.com/@testchannel2"
        assert channels[2].enabled is False  # Third channel is disabled

    def test_get_sections(self, temp_config_file: Path) -> None:
        """Every section getter returns the validated model."""
        provider = YamlConfigurationProvider(temp_config_file)

        assert provider.get_youtube_api_config().api_key == "test-api-key"
        assert provider.get_youtube_api_config().timeout_seconds == 20
        assert provider.get_sanity_config() is None
        assert provider.get_dynamodb_config().table_name == "TestVideos"
        assert provider.get_slack_config().webhook_url.startswith("https://hooks.slack.com/")
        assert provider.get_processing_settings().max_uploads_per_channel == 10
        assert provider.get_retry_settings().max_delay == 30
        assert provider.get_logging_config().file_path is None

    def test_environment_variable_expansion(
        self, sample_config_data: dict[str, Any], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Placeholders are replaced from the environment or their default."""
        monkeypatch.setenv("TEST_YOUTUBE_KEY", "env-api-key")
        monkeypatch.delenv("TEST_SANITY_DATASET", raising=False)
        monkeypatch.delenv("TEST_SLACK_WEBHOOK", raising=False)

        sample_config_data["youtube_api"]["api_key"] = "${TEST_YOUTUBE_KEY}"
        sample_config_data["slack"]["webhook_url"] = "${TEST_SLACK_WEBHOOK:}"
        sample_config_data["sanity"] = {
            "project_id": "proj123",
            "dataset": "${TEST_SANITY_DATASET:staging}",
        }

        provider = YamlConfigurationProvider(_write_config(sample_config_data))

        assert provider.get_youtube_api_config().api_key == "env-api-key"
        assert provider.get_sanity_config().dataset == "staging"
        assert provider.get_slack_config().webhook_url is None

    def test_config_reload(self, sample_config_data: dict[str, Any]) -> None:
        """Reload picks up changes made to the file."""
        temp_path = _write_config(sample_config_data)
        provider = YamlConfigurationProvider(temp_path)
        assert provider.get_processing_settings().max_pages == 3

        sample_config_data["processing"]["max_pages"] = 5
        with open(temp_path, "w") as f:
            yaml.dump(sample_config_data, f)

        provider.reload()

        assert provider.get_processing_settings().max_pages == 5
