"""Domain-specific exceptions for the Upload Watcher application."""

from typing import Optional


class UploadWatcherError(Exception):
    """Base exception for all Upload Watcher errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigurationError(UploadWatcherError):
    """Raised when there are configuration-related errors."""

    pass


class APIError(UploadWatcherError):
    """Raised when YouTube API calls fail."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, cause)
        self.status_code = status_code


class RateLimitError(APIError):
    """Raised when the YouTube API quota is exhausted."""

    def __init__(
        self,
        message: str = "YouTube API quota exceeded",
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, 403, cause)


class StoreError(UploadWatcherError):
    """Raised when the durable video store cannot be read or written."""

    def __init__(
        self, operation: str, table_name: str, cause: Optional[Exception] = None
    ) -> None:
        message = f"Failed to {operation} on table {table_name}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, cause)
        self.operation = operation
        self.table_name = table_name


class ChannelSourceError(UploadWatcherError):
    """Raised when the channel list cannot be fetched or updated."""

    pass


class WatchRunError(UploadWatcherError):
    """Raised when a watch run fails outside the per-channel boundary."""

    pass
