"""Slack integration implementations."""

from upload_watcher.infrastructure.slack.notifier import SlackWebhookNotifier

__all__ = ["SlackWebhookNotifier"]
