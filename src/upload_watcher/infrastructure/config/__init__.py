"""Configuration management implementations."""

from upload_watcher.infrastructure.config.models import AppConfig
from upload_watcher.infrastructure.config.yaml_provider import YamlConfigurationProvider

__all__ = ["AppConfig", "YamlConfigurationProvider"]
