"""Use case for validating application configuration."""

from __future__ import annotations

from upload_watcher.domain.services.configuration_provider import ConfigurationProvider


class ValidateConfigUseCase:
    """
    Use case for validating the application configuration.

    Schema errors are already rejected when the configuration is loaded.
    This use case checks that the loaded settings describe a runnable job.
    """

    def __init__(self, config_provider: ConfigurationProvider) -> None:
        """
        Initialize the validation use case.

        Args:
            config_provider: Configuration provider to validate
        """
        self.config_provider = config_provider

    def execute(self) -> list[str]:
        """
        Execute configuration validation.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors: list[str] = []

        try:
            youtube_config = self.config_provider.get_youtube_api_config()
            if not youtube_config.api_key:
                errors.append("YouTube API key is not set (youtube_api.api_key)")

            sanity_config = self.config_provider.get_sanity_config()
            channels = [c for c in self.config_provider.get_channels() if c.enabled]
            if sanity_config is None and not channels:
                errors.append("No channel source: configure 'sanity' or list enabled 'channels'")

            if sanity_config is not None and channels:
                errors.append("Both 'sanity' and 'channels' are configured; static channels would be ignored")

            processing = self.config_provider.get_processing_settings()
            if processing.max_playlist_items > processing.max_pages * processing.page_size:
                errors.append(
                    f"max_playlist_items ({processing.max_playlist_items}) can never be reached "
                    f"with {processing.max_pages} pages of {processing.page_size}"
                )

        except Exception as e:
            errors.append(f"Configuration validation failed: {e}")

        return errors

    def warnings(self) -> list[str]:
        """
        Settings that are valid but probably unintended.

        Returns:
            List of warning messages
        """
        messages: list[str] = []

        if not self.config_provider.get_slack_config().webhook_url:
            messages.append("Slack webhook URL is not set; notifications will be skipped")

        sanity_config = self.config_provider.get_sanity_config()
        if sanity_config is not None and not sanity_config.token:
            messages.append("Sanity token is not set; resolved channel IDs will not be saved")

        return messages
