"""Integration tests for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator
from unittest.mock import AsyncMock, Mock, patch

import pytest
from click.testing import CliRunner

from upload_watcher.cli.main import cli
from upload_watcher.domain.exceptions import StoreError, WatchRunError
from upload_watcher.domain.models.processing import (
    ChannelProcessingResult,
    ChannelStatus,
    RunSummary,
)
from upload_watcher.domain.models.video import StoredVideoRecord, Upload


@pytest.fixture(autouse=True)
def no_logging_setup() -> Iterator[Mock]:
    """Keep the CLI from replacing the test run's logging handlers."""
    with patch("upload_watcher.cli.main.configure_logging") as mock_configure:
        yield mock_configure


def _summary() -> RunSummary:
    summary = RunSummary(channels_total=2, api_units_used=6)
    summary.add_channel_result(ChannelProcessingResult(
        channel_name="Test Channel 1",
        channel_id="UCTestChannelID000000001",
        status=ChannelStatus.PROCESSED,
        new_uploads=[Upload(video_id="abc", title="New video", published_at="2024-05-02T00:00:00Z")],
    ))
    summary.add_channel_result(ChannelProcessingResult(
        channel_name="Test Channel 2",
        status=ChannelStatus.FAILED,
        error_message="quota exceeded",
    ))
    summary.complete()
    return summary


class TestCLIIntegration:
    """Integration tests for CLI commands."""

    @pytest.fixture
    def cli_runner(self) -> CliRunner:
        """Create a CLI runner for testing."""
        return CliRunner()

    def test_cli_help(self, cli_runner: CliRunner) -> None:
        """Test CLI help command."""
        result = cli_runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Upload Watcher" in result.output
        assert "run" in result.output
        assert "validate" in result.output
        assert "maintenance" in result.output

    def test_cli_version(self, cli_runner: CliRunner) -> None:
        """Test CLI version command."""
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_validate_command_success(
        self,
        cli_runner: CliRunner,
        temp_config_file: Path,
    ) -> None:
        """Test validate command with valid configuration."""
        result = cli_runner.invoke(cli, [
            "--config", str(temp_config_file),
            "validate"
        ])

        assert result.exit_code == 0
        assert "Configuration Check" in result.output
        assert "Found 2 configured channels" in result.output
        assert "Validation complete" in result.output

    def test_validate_command_reports_errors(
        self,
        cli_runner: CliRunner,
        tmp_path: Path,
    ) -> None:
        """A configuration without API key fails validation."""
        config_file = tmp_path / "config.yml"
        config_file.write_text(
            "youtube_api:\n  api_key: ''\n"
            "channels:\n  - name: Alpha\n    channel_id: UCTestChannelID000000001\n"
        )

        result = cli_runner.invoke(cli, ["--config", str(config_file), "validate"])

        assert result.exit_code == 1
        assert "Errors Found" in result.output
        assert "Slack webhook URL is not set" in result.output

    def test_validate_command_config_error(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        """Test validate command with a malformed configuration file."""
        config_file = tmp_path / "config.yml"
        config_file.write_text("processing:\n  page_size: 500\n")

        result = cli_runner.invoke(cli, ["--config", str(config_file), "validate"])

        assert result.exit_code == 1
        assert "Configuration Error" in result.output

    def test_run_command(
        self,
        cli_runner: CliRunner,
        temp_config_file: Path,
    ) -> None:
        """The run command shows per-channel results and totals."""
        with patch("upload_watcher.cli.main.get_watcher_service") as mock_get_service:
            mock_service = Mock()
            mock_service.run = AsyncMock(return_value=_summary())
            mock_get_service.return_value = mock_service

            result = cli_runner.invoke(cli, [
                "--config", str(temp_config_file),
                "run"
            ])

        assert result.exit_code == 0
        assert "Run Results" in result.output
        assert "Quota used: 6 units" in result.output
        assert "quota exceeded" in result.output
        assert "Found 1 new uploads" in result.output

    def test_run_is_default_command(
        self,
        cli_runner: CliRunner,
        temp_config_file: Path,
    ) -> None:
        """Without a command a watch run is performed."""
        with patch("upload_watcher.cli.main.get_watcher_service") as mock_get_service:
            mock_service = Mock()
            mock_service.run = AsyncMock(return_value=RunSummary())
            mock_get_service.return_value = mock_service

            result = cli_runner.invoke(cli, ["--config", str(temp_config_file)])

        assert result.exit_code == 0
        mock_service.run.assert_awaited_once()
        assert "No channels to process" in result.output

    def test_run_command_failure(
        self,
        cli_runner: CliRunner,
        temp_config_file: Path,
    ) -> None:
        """A failed run exits with status 1."""
        with patch("upload_watcher.cli.main.get_watcher_service") as mock_get_service:
            mock_service = Mock()
            mock_service.run = AsyncMock(side_effect=WatchRunError("Watch run failed: boom"))
            mock_get_service.return_value = mock_service

            result = cli_runner.invoke(cli, [
                "--config", str(temp_config_file),
                "run"
            ])

        assert result.exit_code == 1
        assert "Run Failed" in result.output

    def test_list_records(
        self,
        cli_runner: CliRunner,
        temp_config_file: Path,
    ) -> None:
        """Stored records are listed in a table."""
        record = StoredVideoRecord(
            channel_id="UCTestChannelID000000001",
            video_id="vid-1",
            channel_name="Test Channel 1",
            title="Stored video",
            published_at="2024-05-01T00:00:00Z",
            expires_at=1714608000,
        )
        with patch("upload_watcher.cli.main.get_maintenance_service") as mock_get_service:
            mock_service = Mock()
            mock_service.list_records = AsyncMock(return_value=[record])
            mock_get_service.return_value = mock_service

            result = cli_runner.invoke(cli, [
                "--config", str(temp_config_file),
                "maintenance", "list-records"
            ])

        assert result.exit_code == 0
        assert "Stored Videos (1 total)" in result.output
        assert "vid-1" in result.output

    def test_list_records_empty(
        self,
        cli_runner: CliRunner,
        temp_config_file: Path,
    ) -> None:
        """An empty store is reported as a warning."""
        with patch("upload_watcher.cli.main.get_maintenance_service") as mock_get_service:
            mock_service = Mock()
            mock_service.list_records = AsyncMock(return_value=[])
            mock_get_service.return_value = mock_service

            result = cli_runner.invoke(cli, [
                "--config", str(temp_config_file),
                "maintenance", "list-records"
            ])

        assert result.exit_code == 0
        assert "The video store is empty." in result.output

    def test_clear_table(
        self,
        cli_runner: CliRunner,
        temp_config_file: Path,
    ) -> None:
        """Clearing asks for confirmation and reports the count."""
        with patch("upload_watcher.cli.main.get_maintenance_service") as mock_get_service:
            mock_service = Mock()
            mock_service.clear_table = AsyncMock(return_value=42)
            mock_get_service.return_value = mock_service

            result = cli_runner.invoke(cli, [
                "--config", str(temp_config_file),
                "maintenance", "clear-table"
            ], input="y\n")

        assert result.exit_code == 0
        assert "Deleted 42 records" in result.output

    def test_clear_table_aborted(
        self,
        cli_runner: CliRunner,
        temp_config_file: Path,
    ) -> None:
        """Declining the confirmation deletes nothing."""
        with patch("upload_watcher.cli.main.get_maintenance_service") as mock_get_service:
            result = cli_runner.invoke(cli, [
                "--config", str(temp_config_file),
                "maintenance", "clear-table"
            ], input="n\n")

        assert result.exit_code == 1
        mock_get_service.assert_not_called()

    def test_describe_table_error(
        self,
        cli_runner: CliRunner,
        temp_config_file: Path,
    ) -> None:
        """Store errors exit with status 1."""
        with patch("upload_watcher.cli.main.get_maintenance_service") as mock_get_service:
            mock_service = Mock()
            mock_service.describe_table = AsyncMock(
                side_effect=StoreError("describe table", "TestVideos")
            )
            mock_get_service.return_value = mock_service

            result = cli_runner.invoke(cli, [
                "--config", str(temp_config_file),
                "maintenance", "describe-table"
            ])

        assert result.exit_code == 1
        assert "Error describing table" in result.output

    def test_verbose_flag(
        self,
        cli_runner: CliRunner,
        temp_config_file: Path,
    ) -> None:
        """Test verbose flag functionality."""
        result = cli_runner.invoke(cli, [
            "--config", str(temp_config_file),
            "--verbose",
            "validate"
        ])

        assert result.exit_code == 0
        assert "Using configuration:" in result.output

    def test_invalid_config_path(self, cli_runner: CliRunner) -> None:
        """Test CLI with invalid config path."""
        result = cli_runner.invoke(cli, [
            "--config", "nonexistent.yml",
            "validate"
        ])

        assert result.exit_code == 2  # Click validation error
        assert "does not exist" in result.output

    def test_maintenance_help(self, cli_runner: CliRunner, temp_config_file: Path) -> None:
        """Test maintenance command help."""
        result = cli_runner.invoke(cli, [
            "--config", str(temp_config_file),
            "maintenance", "--help"
        ])

        assert result.exit_code == 0
        assert "clear-table" in result.output
        assert "list-records" in result.output
        assert "describe-table" in result.output
