"""YAML-based configuration provider implementation."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from upload_watcher.domain.exceptions import ConfigurationError
from upload_watcher.domain.models.channel import ChannelConfig
from upload_watcher.domain.services.configuration_provider import ConfigurationProvider
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

# ${VAR_NAME} or ${VAR_NAME:default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


class YamlConfigurationProvider(ConfigurationProvider):
    """
    Configuration provider that loads settings from YAML files.

    This implementation supports loading configuration from YAML files
    with environment variable substitution and validation using Pydantic models.
    Secrets (API key, tokens, webhook URL) are expected to come from the
    environment through ``${VAR}`` placeholders.
    """

    def __init__(self, config_path: str | Path) -> None:
        """
        Initialize the YAML configuration provider.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            ConfigurationError: If the configuration file cannot be loaded or is invalid
        """
        self.config_path = Path(config_path)
        self._config: AppConfig | None = None
        self._load_config()

    def _load_config(self) -> None:
        """Load and validate configuration from YAML file."""
        if not self.config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse YAML configuration: {e}", e) from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file: {e}", e) from e

        if not raw_config:
            raise ConfigurationError("Configuration file is empty")
        if not isinstance(raw_config, dict):
            raise ConfigurationError("Configuration file must contain a mapping")

        raw_config = self._substitute_env_vars(raw_config)

        try:
            self._config = AppConfig(**raw_config)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}", e) from e

    def _substitute_env_vars(self, obj: Any) -> Any:
        """
        Recursively substitute environment variables in configuration.

        Supports ${VAR_NAME} and ${VAR_NAME:default_value} syntax.
        """
        if isinstance(obj, dict):
            return {key: self._substitute_env_vars(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [self._substitute_env_vars(item) for item in obj]
        elif isinstance(obj, str):
            return self._substitute_string_env_vars(obj)
        else:
            return obj

    def _substitute_string_env_vars(self, value: str) -> str:
        """Substitute environment variables in a string value."""

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.getenv(var_name, default_value)

        return ENV_VAR_PATTERN.sub(replace_var, value)

    @property
    def config(self) -> AppConfig:
        """Get the loaded configuration."""
        if self._config is None:
            raise ConfigurationError("Configuration not loaded")
        return self._config

    def get_channels(self) -> list[ChannelConfig]:
        """Get the statically configured channels."""
        return self.config.channels

    def get_youtube_api_config(self) -> YouTubeAPIConfig:
        """Get YouTube Data API settings."""
        return self.config.youtube_api

    def get_sanity_config(self) -> SanityConfig | None:
        """Get Sanity CMS settings, if configured."""
        return self.config.sanity

    def get_dynamodb_config(self) -> DynamoDBConfig:
        """Get DynamoDB table settings."""
        return self.config.dynamodb

    def get_slack_config(self) -> SlackConfig:
        """Get Slack notification settings."""
        return self.config.slack

    def get_processing_settings(self) -> ProcessingSettings:
        """Get discovery and filtering settings."""
        return self.config.processing

    def get_retry_settings(self) -> RetrySettings:
        """Get retry configuration for API operations."""
        return self.config.retry_settings

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration."""
        return self.config.logging

    def reload(self) -> None:
        """Reload configuration from source."""
        self._config = None
        self._load_config()
