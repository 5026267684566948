"""Utility functions for CLI operations."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from upload_watcher.domain.models.processing import ChannelStatus, RunSummary

console = Console()


def display_error_summary(errors: list[str]) -> None:
    """Display configuration or processing errors."""
    if not errors:
        return

    console.print(Panel(
        "\n".join(f"• {error}" for error in errors),
        title="[red]❌ Errors Found[/red]",
        border_style="red"
    ))


def display_success_message(message: str) -> None:
    """Display a success message."""
    console.print(Panel(
        f"[green]{message}[/green]",
        title="[green]✅ Success[/green]",
        border_style="green"
    ))


def display_warning_message(message: str) -> None:
    """Display a warning message."""
    console.print(Panel(
        f"[yellow]{message}[/yellow]",
        title="[yellow]⚠️ Warning[/yellow]",
        border_style="yellow"
    ))


def format_duration(seconds: float | None) -> str:
    """Format duration in seconds to human-readable format."""
    if seconds is None:
        return "Unknown"

    seconds = int(seconds)
    if seconds < 60:
        return f"{seconds}s"
    elif seconds < 3600:
        minutes = seconds // 60
        remaining_seconds = seconds % 60
        return f"{minutes}m {remaining_seconds}s"
    else:
        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        return f"{hours}h {minutes}m"


def create_run_table(summary: RunSummary) -> Table:
    """Create a table with one row per channel of a run."""
    table = Table(title="📊 Run Results")
    table.add_column("Channel", style="cyan")
    table.add_column("Channel ID", style="dim")
    table.add_column("New", justify="right", style="green")
    table.add_column("Recorded", justify="right")
    table.add_column("Status", justify="center")

    status_map = {
        ChannelStatus.PROCESSED: "[green]✅ Processed[/green]",
        ChannelStatus.SKIPPED: "[yellow]⏭️ Skipped[/yellow]",
        ChannelStatus.FAILED: "[red]❌ Failed[/red]",
        ChannelStatus.PENDING: "[dim]… Pending[/dim]",
    }

    for result in summary.channel_results:
        status = status_map[result.status]
        if result.status == ChannelStatus.PROCESSED and result.first_run:
            status = "[blue]🆕 First run[/blue]"
        table.add_row(
            result.channel_name,
            result.channel_id or "-",
            str(result.new_count),
            str(result.recorded_count),
            status,
        )

    return table


def create_records_table(records: list[Any], title: str = "Stored Videos") -> Table:
    """Create a table displaying stored video records."""
    table = Table(title=title)
    table.add_column("Published", style="dim")
    table.add_column("Channel", style="cyan")
    table.add_column("Title", max_width=50)
    table.add_column("Video ID")
    table.add_column("Expires At", justify="right", style="dim")

    for record in records:
        title_text = record.title or ""
        table.add_row(
            record.published_at or "-",
            record.channel_name or record.channel_id,
            title_text[:47] + "..." if len(title_text) > 50 else title_text,
            record.video_id,
            str(record.expires_at) if record.expires_at else "-",
        )

    return table
