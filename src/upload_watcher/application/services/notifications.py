"""Block Kit messages for run start, summary and failure."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any
from zoneinfo import ZoneInfo

from upload_watcher.domain.models.processing import ListedUpload, RunSummary
from upload_watcher.domain.services.notifier import NotificationMessage

TASK_ACTION_ID = "add_youtube_task"


class NotificationBuilder:
    """
    Builds the notification messages of a watch run.

    Slack rejects messages with more than 50 blocks; each listed upload
    takes three, so the listing is capped by ``max_listed_uploads``.
    """

    def __init__(
        self,
        display_timezone: str = "Asia/Tokyo",
        max_listed_uploads: int = 15,
        task_button: bool = True,
        suppress_first_run_listing: bool = True,
    ) -> None:
        self.tz = ZoneInfo(display_timezone)
        self.max_listed_uploads = max_listed_uploads
        self.task_button = task_button
        self.suppress_first_run_listing = suppress_first_run_listing

    def started(self, started_at: datetime) -> NotificationMessage:
        text = "YouTube upload check started."
        return NotificationMessage(
            text=text,
            blocks=[
                _section(f":rocket: {text}\n(started at {self.format_time(started_at)})"),
            ],
        )

    def no_channels(self) -> NotificationMessage:
        return NotificationMessage(
            text="YouTube upload check finished: 0 channels to process",
            blocks=[
                _section(":information_source: Finished: there were no channels to process."),
            ],
        )

    def summary(self, summary: RunSummary) -> NotificationMessage:
        """Summary of a completed run, listing new uploads."""
        total_new = summary.total_new_uploads
        blocks: list[dict[str, Any]] = [
            {
                "type": "header",
                "text": {"type": "plain_text", "text": ":white_check_mark: YouTube upload check complete", "emoji": True},
            },
            {
                "type": "section",
                "fields": [
                    {"type": "mrkdwn", "text": f"*Elapsed:* {summary.elapsed_seconds:.1f} s"},
                    {"type": "mrkdwn", "text": f"*Channels:* {summary.channels_processed} / {summary.channels_total}"},
                    {"type": "mrkdwn", "text": f"*Quota used:* {summary.api_units_used} units"},
                    {"type": "mrkdwn", "text": f"*New uploads:* {total_new}"},
                ],
            },
        ]

        notes = []
        if summary.failed_channels:
            names = ", ".join(r.channel_name for r in summary.failed_channels)
            notes.append(f":warning: {len(summary.failed_channels)} channel(s) failed: {names}")
        silent = summary.first_run_upload_count() if self.suppress_first_run_listing else 0
        if silent:
            notes.append(f":inbox_tray: {silent} upload(s) from newly tracked channels recorded without listing.")
        if notes:
            blocks.append(_section("\n".join(notes)))

        blocks.append({"type": "divider"})

        listed = summary.new_uploads(include_first_run=not self.suppress_first_run_listing)
        if not listed:
            blocks.append(_section("No new uploads."))
        else:
            for item in listed[: self.max_listed_uploads]:
                blocks.extend(self._upload_blocks(item))
            remaining = len(listed) - self.max_listed_uploads
            if remaining > 0:
                blocks.append(_section(f"…and {remaining} more."))

        return NotificationMessage(
            text=f"YouTube upload check complete ({total_new} new)",
            blocks=blocks,
        )

    def failed(self, error: BaseException) -> NotificationMessage:
        message = str(error) or type(error).__name__
        return NotificationMessage(
            text="YouTube upload check failed",
            blocks=[
                {
                    "type": "header",
                    "text": {"type": "plain_text", "text": ":x: YouTube upload check failed", "emoji": True},
                },
                _section(f"An error occurred during the run.\n*Error message:*\n```{message}```"),
            ],
        )

    def format_time(self, value: datetime | str) -> str:
        """Render a datetime or ISO 8601 string in the display timezone."""
        if isinstance(value, str):
            try:
                value = datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                return value
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(self.tz).strftime("%Y-%m-%d %H:%M")

    def _upload_blocks(self, item: ListedUpload) -> list[dict[str, Any]]:
        upload = item.upload
        blocks: list[dict[str, Any]] = [
            _section(
                f"*{escape_mrkdwn(item.channel_name)}*\n"
                f"<{upload.url}|{escape_mrkdwn(upload.title)}>\n"
                f"*Published:* {self.format_time(upload.published_at)}"
            ),
        ]
        if self.task_button:
            blocks.append({
                "type": "actions",
                "elements": [
                    {
                        "type": "button",
                        "text": {"type": "plain_text", "text": "Add to tasks", "emoji": True},
                        "style": "primary",
                        "action_id": TASK_ACTION_ID,
                        "value": task_payload(item),
                    }
                ],
            })
        blocks.append({"type": "divider"})
        return blocks


def escape_mrkdwn(text: str) -> str:
    """Escape the characters Slack treats as control sequences."""
    return (text or "").replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def task_payload(item: ListedUpload) -> str:
    """JSON value carried by the 'add task' button (Slack caps it at 2000 chars)."""
    upload = item.upload
    payload = {
        "videoId": upload.video_id,
        "title": upload.title,
        "channelName": item.channel_name,
        "publishedAt": upload.published_at,
        "videoUrl": upload.url,
    }
    value = json.dumps(payload, ensure_ascii=False)
    if len(value) > 2000:
        payload["title"] = upload.title[:200]
        value = json.dumps(payload, ensure_ascii=False)
    return value


def _section(text: str) -> dict[str, Any]:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}
