"""Tests for the UploadRecorder."""

from __future__ import annotations

from typing import Callable
from unittest.mock import AsyncMock

import pytest

from upload_watcher.application.services.upload_recorder import (
    DEFAULT_RETENTION_SECONDS,
    UploadRecorder,
)
from upload_watcher.domain.exceptions import StoreError
from upload_watcher.domain.models.video import Upload

CHANNEL_ID = "UCTestChannelID000000001"
NOW = 1_714_521_600


class TestUploadRecorder:
    """Tests for UploadRecorder."""

    @pytest.fixture
    def recorder(self, mock_video_store: AsyncMock) -> UploadRecorder:
        """Create a recorder over the mock store."""
        return UploadRecorder(mock_video_store)

    @pytest.mark.asyncio
    async def test_empty_input_is_noop(
        self, recorder: UploadRecorder, mock_video_store: AsyncMock
    ) -> None:
        """Nothing is written for an empty list."""
        assert await recorder.record(CHANNEL_ID, "Test Channel 1", []) == 0
        mock_video_store.put_records.assert_not_called()

    @pytest.mark.asyncio
    async def test_batches_of_twenty_five(
        self,
        recorder: UploadRecorder,
        mock_video_store: AsyncMock,
        make_upload: Callable[..., Upload],
    ) -> None:
        """51 uploads are written as 25 + 25 + 1."""
        uploads = [make_upload(f"vid-{i}") for i in range(51)]

        written = await recorder.record(CHANNEL_ID, "Test Channel 1", uploads, now=NOW)

        assert written == 51
        assert mock_video_store.put_records.await_count == 3
        sizes = [len(call.args[0]) for call in mock_video_store.put_records.await_args_list]
        assert sizes == [25, 25, 1]

    @pytest.mark.asyncio
    async def test_record_contents(
        self,
        recorder: UploadRecorder,
        mock_video_store: AsyncMock,
        make_upload: Callable[..., Upload],
    ) -> None:
        """Records carry the channel, upload fields and expiry."""
        upload = make_upload("vid-1", "2024-05-01T12:00:00Z", title="Episode 1")

        await recorder.record(CHANNEL_ID, "Test Channel 1", [upload], now=NOW)

        record = mock_video_store.put_records.await_args.args[0][0]
        assert record.channel_id == CHANNEL_ID
        assert record.video_id == "vid-1"
        assert record.channel_name == "Test Channel 1"
        assert record.title == "Episode 1"
        assert record.published_at == "2024-05-01T12:00:00Z"
        assert record.expires_at == NOW + DEFAULT_RETENTION_SECONDS

    @pytest.mark.asyncio
    async def test_failed_batch_is_skipped(
        self,
        recorder: UploadRecorder,
        mock_video_store: AsyncMock,
        make_upload: Callable[..., Upload],
    ) -> None:
        """A failing batch does not stop the following batches."""
        mock_video_store.put_records.side_effect = [
            StoreError("batch write", "TestVideos"),
            None,
            None,
        ]
        uploads = [make_upload(f"vid-{i}") for i in range(51)]

        written = await recorder.record(CHANNEL_ID, "Test Channel 1", uploads, now=NOW)

        assert written == 26
        assert mock_video_store.put_records.await_count == 3

    def test_batch_size_never_exceeds_store_limit(self, mock_video_store: AsyncMock) -> None:
        """A configured batch size above the store maximum is clamped."""
        assert UploadRecorder(mock_video_store, batch_size=100).batch_size == 25
        assert UploadRecorder(mock_video_store, batch_size=10).batch_size == 10
