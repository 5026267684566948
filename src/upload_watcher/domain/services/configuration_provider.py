"""Abstract base class for configuration management."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from upload_watcher.domain.models.channel import ChannelConfig


class ConfigurationProvider(ABC):
    """
    Abstract service for providing application configuration.

    This interface defines the contract for loading and validating
    configuration data from various sources (files, environment variables,
    remote configuration services, etc.).
    """

    @abstractmethod
    def get_channels(self) -> list[ChannelConfig]:
        """
        Get the statically configured channels.

        Returns:
            List of validated channel configurations (may be empty when the
            channel list comes from the CMS)
        """
        pass

    @abstractmethod
    def get_youtube_api_config(self) -> Any:
        """
        Get YouTube Data API settings (API key, timeout).

        Raises:
            ConfigurationError: If configuration is invalid
        """
        pass

    @abstractmethod
    def get_sanity_config(self) -> Optional[Any]:
        """
        Get Sanity CMS settings.

        Returns:
            Sanity settings, or None when channels are configured statically
        """
        pass

    @abstractmethod
    def get_dynamodb_config(self) -> Any:
        """Get DynamoDB table settings."""
        pass

    @abstractmethod
    def get_slack_config(self) -> Any:
        """Get Slack notification settings."""
        pass

    @abstractmethod
    def get_processing_settings(self) -> Any:
        """
        Get discovery and filtering settings.

        This covers pagination caps, the short-form filter and the run
        deadline.
        """
        pass

    @abstractmethod
    def get_retry_settings(self) -> Any:
        """
        Get retry configuration for API operations.

        Returns:
            Retry settings (max_attempts, backoff_factor, max_delay)
        """
        pass

    @abstractmethod
    def get_logging_config(self) -> Any:
        """
        Get logging configuration.

        Returns:
            Logging settings (level, format, file handler)
        """
        pass

    @abstractmethod
    def reload(self) -> None:
        """
        Reload configuration from source.

        Raises:
            ConfigurationError: If configuration cannot be reloaded or is invalid
        """
        pass
