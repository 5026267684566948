"""Main CLI interface for Upload Watcher."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from upload_watcher import __version__
from upload_watcher.application.use_cases.validate_config import ValidateConfigUseCase
from upload_watcher.cli.utils import (
    create_records_table,
    create_run_table,
    display_error_summary,
    display_success_message,
    display_warning_message,
    format_duration,
)
from upload_watcher.domain.exceptions import (
    ConfigurationError,
    UploadWatcherError,
    WatchRunError,
)
from upload_watcher.domain.models.processing import RunSummary
from upload_watcher.infrastructure.container import (
    Container,
    create_container,
    get_configuration_provider,
    get_maintenance_service,
    get_watcher_service,
)
from upload_watcher.infrastructure.logging_setup import configure_logging

console = Console()


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="Upload Watcher")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default="config/config.yml",
    help="Path to configuration file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.pass_context
def cli(ctx: click.Context, config: Path, verbose: bool) -> None:
    """
    Upload Watcher - Detects new YouTube uploads of tracked channels.

    Without a command, performs a regular watch run: new long-form uploads
    are recorded and reported to Slack.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose

    if verbose:
        console.print(f"[dim]Using configuration: {config}[/dim]")

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.pass_context
def run(ctx: click.Context) -> None:
    """Check every channel for new uploads and send the summary."""
    verbose = ctx.obj["verbose"]

    try:
        container = _load_container(ctx)
        summary = asyncio.run(_run_watch(container))
        _display_run_results(summary, verbose)

    except ConfigurationError as e:
        console.print(f"[red]❌ Configuration Error:[/red] {e}")
        sys.exit(1)
    except WatchRunError as e:
        console.print(f"[red]❌ Run Failed:[/red] {e}")
        if verbose:
            console.print_exception()
        sys.exit(1)
    except UploadWatcherError as e:
        console.print(f"[red]❌ Error:[/red] {e}")
        sys.exit(1)


@cli.command()
@click.pass_context
def validate(ctx: click.Context) -> None:
    """Validate configuration settings."""
    console.print(Panel(
        "[blue]🔍 Configuration Validation[/blue]\n"
        "Checking configuration file, channel source and integrations...",
        title="Validation",
        border_style="blue"
    ))

    try:
        container = _load_container(ctx)
    except ConfigurationError as e:
        console.print(f"\n[red]❌ Configuration Error:[/red] {e}")
        sys.exit(1)

    config_provider = get_configuration_provider(container)
    use_case = ValidateConfigUseCase(config_provider)

    console.print("\n[cyan]📋 Configuration Check[/cyan]")
    sanity_config = config_provider.get_sanity_config()
    if sanity_config is not None:
        console.print(
            f"✅ Channel source: Sanity project {sanity_config.project_id} "
            f"({sanity_config.dataset})"
        )
    else:
        channels = [c for c in config_provider.get_channels() if c.enabled]
        console.print(f"✅ Found {len(channels)} configured channels")
    dynamodb_config = config_provider.get_dynamodb_config()
    console.print(f"✅ Store: {dynamodb_config.table_name} ({dynamodb_config.region})")
    console.print(f"✅ Retention: {dynamodb_config.retention_days} days")

    errors = use_case.execute()
    for warning in use_case.warnings():
        console.print(f"[yellow]⚠️  {warning}[/yellow]")

    if errors:
        display_error_summary(errors)
        sys.exit(1)

    console.print("\n[green]✅ Validation complete![/green]")


@cli.group()
def maintenance() -> None:
    """Administrative operations on the video store."""
    pass


@maintenance.command("clear-table")
@click.confirmation_option(prompt="Are you sure you want to delete every stored record?")
@click.pass_context
def clear_table(ctx: click.Context) -> None:
    """Delete every record from the video store."""
    try:
        container = _load_container(ctx)
        service = get_maintenance_service(container)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Clearing records...", total=None)
            deleted = asyncio.run(service.clear_table())
            progress.update(task, description="Clearing complete!")

        display_success_message(f"Deleted {deleted} records")

    except UploadWatcherError as e:
        console.print(f"[red]❌ Error clearing table:[/red] {e}")
        sys.exit(1)


@maintenance.command("list-records")
@click.option("--limit", type=int, default=None, help="Show only the newest N records")
@click.pass_context
def list_records(ctx: click.Context, limit: int | None) -> None:
    """List stored records, newest first."""
    try:
        container = _load_container(ctx)
        service = get_maintenance_service(container)
        records = asyncio.run(service.list_records())

    except UploadWatcherError as e:
        console.print(f"[red]❌ Error listing records:[/red] {e}")
        sys.exit(1)

    if not records:
        display_warning_message("The video store is empty.")
        return

    shown = records[:limit] if limit else records
    console.print(create_records_table(shown, title=f"📼 Stored Videos ({len(records)} total)"))


@maintenance.command("describe-table")
@click.pass_context
def describe_table(ctx: click.Context) -> None:
    """Show the description of the video store table."""
    try:
        container = _load_container(ctx)
        service = get_maintenance_service(container)
        description = asyncio.run(service.describe_table())

    except UploadWatcherError as e:
        console.print(f"[red]❌ Error describing table:[/red] {e}")
        sys.exit(1)

    console.print_json(json.dumps(description, default=str))


def _load_container(ctx: click.Context) -> Container:
    """Create the container and configure logging from its settings."""
    container = create_container(ctx.obj["config_path"])
    configure_logging(
        get_configuration_provider(container).get_logging_config(),
        verbose=ctx.obj["verbose"],
    )
    return container


async def _run_watch(container: Any) -> RunSummary:
    """Run the watcher service with a progress spinner."""
    watcher_service = get_watcher_service(container)

    console.print("\n[cyan]📺 Checking channels for new uploads...[/cyan]")
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Processing channels...", total=None)
        summary = await watcher_service.run()
        progress.update(task, description="Processing complete!")

    return summary


def _display_run_results(summary: RunSummary, verbose: bool) -> None:
    """Display the results of a watch run."""
    if summary.channel_results:
        console.print(create_run_table(summary))

    console.print("\n[bold]📈 Overall Summary:[/bold]")
    console.print(f"🏢 Channels processed: {summary.channels_processed} / {summary.channels_total}")
    console.print(f"🔢 Quota used: {summary.api_units_used} units")
    console.print(f"🆕 New uploads: {summary.total_new_uploads}")
    console.print(f"⏱️ Processing time: {format_duration(summary.elapsed_seconds)}")

    if summary.failed_channels:
        console.print("\n[red]⚠️ Errors occurred during processing:[/red]")
        for result in summary.failed_channels:
            console.print(f"• {result.channel_name}: {result.error_message}")

    if verbose and summary.skipped_channels:
        console.print("\n[yellow]⏭️ Skipped channels:[/yellow]")
        for result in summary.skipped_channels:
            console.print(f"• {result.channel_name}: {result.error_message}")

    if summary.channels_total == 0:
        display_warning_message("No channels to process. Check the channel source.")
    elif summary.total_new_uploads:
        display_success_message(f"Found {summary.total_new_uploads} new uploads!")
    else:
        display_success_message("All channels are up to date. No new uploads.")


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
