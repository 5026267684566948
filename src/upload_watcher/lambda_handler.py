"""Serverless entry point performing a regular watch run."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any

from upload_watcher.infrastructure.container import (
    create_container,
    get_configuration_provider,
    get_watcher_service,
)
from upload_watcher.infrastructure.logging_setup import configure_logging

CONFIG_PATH_ENV = "UPLOAD_WATCHER_CONFIG"
DEFAULT_CONFIG_PATH = "config/config.yml"

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any] | None, context: Any) -> dict[str, Any]:
    """
    Run one watch cycle for a scheduled invocation.

    The configuration path is read from ``UPLOAD_WATCHER_CONFIG``. Run-level
    failures are re-raised so the platform records the invocation as failed.

    Returns:
        Response with status code 200 and the run counters
    """
    container = create_container(os.getenv(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH))
    configure_logging(get_configuration_provider(container).get_logging_config())

    summary = asyncio.run(get_watcher_service(container).run())
    logger.info(f"Invocation finished: {summary}")

    return {
        "statusCode": 200,
        "body": {
            "message": "Upload check complete",
            "channelsTotal": summary.channels_total,
            "channelsProcessed": summary.channels_processed,
            "apiUnitsUsed": summary.api_units_used,
            "newUploads": summary.total_new_uploads,
        },
    }
