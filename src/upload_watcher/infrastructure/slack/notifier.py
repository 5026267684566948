"""Slack incoming-webhook notifier."""

from __future__ import annotations

import logging

import requests

from upload_watcher.domain.services.notifier import NotificationMessage, Notifier

logger = logging.getLogger(__name__)


class SlackWebhookNotifier(Notifier):
    """
    Posts Block Kit messages to a Slack incoming webhook.

    Without a webhook URL, messages are only logged.
    """

    def __init__(
        self,
        webhook_url: str | None,
        timeout_seconds: int = 10,
        session: requests.Session | None = None,
    ) -> None:
        self.webhook_url = webhook_url
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    async def send(self, message: NotificationMessage) -> bool:
        if not self.webhook_url:
            logger.info(f"Slack webhook not configured, skipping notification: {message.text}")
            return False

        try:
            response = self.session.post(
                self.webhook_url,
                json=message.to_payload(),
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            body = getattr(getattr(e, "response", None), "text", "")
            logger.error(f"Slack notification failed: {e} {body}".strip())
            return False

        logger.info(f"Slack notification sent: {message.text}")
        return True
