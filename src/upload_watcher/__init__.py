"""Upload Watcher - Scheduled watcher for new YouTube uploads of tracked channels."""

__version__ = "0.1.0"
__description__ = "Detects new long-form YouTube uploads of tracked channels and reports them to Slack"

from upload_watcher.domain.models import ChannelEntry, RunSummary, Upload

__all__ = ["ChannelEntry", "RunSummary", "Upload"]
