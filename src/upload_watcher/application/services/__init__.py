"""Application services for business logic orchestration."""

from upload_watcher.application.services.channel_resolver import ChannelResolver
from upload_watcher.application.services.maintenance_service import MaintenanceService
from upload_watcher.application.services.notifications import NotificationBuilder
from upload_watcher.application.services.upload_discovery import UploadDiscovery
from upload_watcher.application.services.upload_recorder import UploadRecorder
from upload_watcher.application.services.watcher_service import DefaultWatcherService
from upload_watcher.application.services.watermark_gate import WatermarkGate

__all__ = [
    "ChannelResolver",
    "DefaultWatcherService",
    "MaintenanceService",
    "NotificationBuilder",
    "UploadDiscovery",
    "UploadRecorder",
    "WatermarkGate",
]
