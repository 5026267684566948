"""Dependency injection container configuration."""

from __future__ import annotations

from pathlib import Path

from dependency_injector import containers, providers

from upload_watcher.application.services.channel_resolver import ChannelResolver
from upload_watcher.application.services.maintenance_service import MaintenanceService
from upload_watcher.application.services.notifications import NotificationBuilder
from upload_watcher.application.services.upload_discovery import UploadDiscovery
from upload_watcher.application.services.upload_recorder import UploadRecorder
from upload_watcher.application.services.watcher_service import DefaultWatcherService
from upload_watcher.application.services.watermark_gate import WatermarkGate
from upload_watcher.domain.services.channel_source import ChannelSource
from upload_watcher.domain.services.configuration_provider import ConfigurationProvider
from upload_watcher.domain.services.notifier import Notifier
from upload_watcher.domain.services.video_repository import VideoRepository
from upload_watcher.domain.services.video_store import VideoStore
from upload_watcher.domain.services.watcher_service import WatcherService
from upload_watcher.infrastructure.config.channel_source import StaticChannelSource
from upload_watcher.infrastructure.config.yaml_provider import YamlConfigurationProvider
from upload_watcher.infrastructure.dynamodb.video_store import DynamoDBVideoStore
from upload_watcher.infrastructure.sanity.channel_source import SanityChannelSource
from upload_watcher.infrastructure.slack.notifier import SlackWebhookNotifier
from upload_watcher.infrastructure.youtube.client import YouTubeClient
from upload_watcher.infrastructure.youtube.video_repository import YouTubeVideoRepository


class Container(containers.DeclarativeContainer):
    """
    Dependency injection container for the Upload Watcher application.

    The container owns the configuration provider. Services are assembled
    by the getter functions below from the settings it exposes.
    """

    # Configuration
    config_file_path = providers.Configuration()

    # Configuration Provider
    configuration_provider = providers.Singleton(
        YamlConfigurationProvider,
        config_path=config_file_path,
    )


def create_container(config_path: str | Path) -> Container:
    """
    Create and configure the dependency injection container.

    The configuration is loaded immediately so that a missing or invalid
    file is reported before any work starts.

    Args:
        config_path: Path to the configuration file

    Returns:
        Configured container instance

    Raises:
        ConfigurationError: If the configuration cannot be loaded
    """
    container = Container()
    container.config_file_path.override(str(config_path))
    container.configuration_provider()
    return container


def get_configuration_provider(container: Container) -> ConfigurationProvider:
    """
    Get the configuration provider from the container.

    Args:
        container: The dependency injection container

    Returns:
        Configuration provider instance
    """
    return container.configuration_provider()


def get_youtube_client(container: Container) -> YouTubeClient:
    """Get the YouTube API client."""
    youtube_config = get_configuration_provider(container).get_youtube_api_config()
    return YouTubeClient(
        api_key=youtube_config.api_key,
        timeout_seconds=youtube_config.timeout_seconds,
    )


def get_video_repository(container: Container) -> VideoRepository:
    """Get the video repository service."""
    retry_settings = get_configuration_provider(container).get_retry_settings()
    return YouTubeVideoRepository(
        get_youtube_client(container),
        num_retries=retry_settings.max_attempts - 1,
    )


def get_channel_source(container: Container) -> ChannelSource:
    """Get the channel source: Sanity when configured, else the static list."""
    config_provider = get_configuration_provider(container)
    sanity_config = config_provider.get_sanity_config()
    if sanity_config is not None:
        return SanityChannelSource(sanity_config)
    return StaticChannelSource(config_provider.get_channels())


def get_video_store(container: Container) -> VideoStore:
    """Get the durable video store."""
    config_provider = get_configuration_provider(container)
    return DynamoDBVideoStore(
        config_provider.get_dynamodb_config(),
        retry_settings=config_provider.get_retry_settings(),
    )


def get_notifier(container: Container) -> Notifier:
    """Get the notification sink."""
    slack_config = get_configuration_provider(container).get_slack_config()
    return SlackWebhookNotifier(
        webhook_url=slack_config.webhook_url,
        timeout_seconds=slack_config.timeout_seconds,
    )


def get_notification_builder(container: Container) -> NotificationBuilder:
    """Get the builder of notification messages."""
    config_provider = get_configuration_provider(container)
    slack_config = config_provider.get_slack_config()
    return NotificationBuilder(
        display_timezone=slack_config.display_timezone,
        max_listed_uploads=slack_config.max_listed_uploads,
        task_button=slack_config.task_button,
        suppress_first_run_listing=config_provider.get_processing_settings().suppress_first_run_listing,
    )


def get_watcher_service(container: Container) -> WatcherService:
    """Get the main watcher service."""
    config_provider = get_configuration_provider(container)
    settings = config_provider.get_processing_settings()
    video_repository = get_video_repository(container)
    video_store = get_video_store(container)

    return DefaultWatcherService(
        channel_source=get_channel_source(container),
        resolver=ChannelResolver(video_repository),
        discovery=UploadDiscovery(video_repository, settings),
        gate=WatermarkGate(video_store),
        recorder=UploadRecorder(
            video_store,
            retention_seconds=config_provider.get_dynamodb_config().retention_seconds,
        ),
        notifier=get_notifier(container),
        messages=get_notification_builder(container),
        settings=settings,
    )


def get_maintenance_service(container: Container) -> MaintenanceService:
    """Get the store maintenance service."""
    return MaintenanceService(get_video_store(container))
