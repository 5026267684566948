"""Logging configuration for the application."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from upload_watcher.infrastructure.config.models import LoggingConfig

# Chatty third-party loggers kept at WARNING unless verbose.
NOISY_LOGGERS = ("googleapiclient.discovery_cache", "botocore", "boto3", "urllib3")


def configure_logging(
    config: LoggingConfig, verbose: bool = False, console: Console | None = None
) -> None:
    """
    Configure the root logger from the logging settings.

    Console output goes through Rich; a rotating file handler is added when
    ``file_path`` is set. Calling this again replaces previously installed
    handlers.

    Args:
        config: Logging settings
        verbose: Force DEBUG level
        console: Console used by the Rich handler (stderr by default)
    """
    level = logging.DEBUG if verbose else getattr(logging, config.level, logging.INFO)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(level)

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(level)
    root.addHandler(rich_handler)

    if config.file_path:
        log_path = Path(config.file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(config.format))
        root.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
