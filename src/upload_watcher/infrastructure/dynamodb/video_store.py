"""DynamoDB implementation of the video store."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncIterator

import boto3
from boto3.dynamodb.conditions import Key
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from upload_watcher.domain.exceptions import StoreError
from upload_watcher.domain.models.video import StoredVideoRecord
from upload_watcher.domain.services.video_store import VideoStore
from upload_watcher.infrastructure.config.models import DynamoDBConfig, RetrySettings

logger = logging.getLogger(__name__)

KEY_ATTRIBUTES = "channelId, videoId"


class DynamoDBVideoStore(VideoStore):
    """
    Video store backed by a DynamoDB table.

    Table layout: hash key ``channelId``, range key ``videoId``, a global
    secondary index keyed by ``channelId`` with ``publishedAt`` as range key,
    and TTL enabled on ``expiresAt``.
    """

    def __init__(
        self,
        config: DynamoDBConfig,
        retry_settings: RetrySettings | None = None,
        resource: Any | None = None,
    ) -> None:
        """
        Initialize the DynamoDB video store.

        Args:
            config: Table settings
            retry_settings: Retry policy for unprocessed batch items
            resource: Pre-built boto3 DynamoDB resource (built from config if omitted)
        """
        self.config = config
        self.retry_settings = retry_settings or RetrySettings()
        self._resource = resource
        self._table: Any | None = None

    @property
    def resource(self) -> Any:
        """Lazily built boto3 DynamoDB resource."""
        if self._resource is None:
            self._resource = boto3.resource(
                "dynamodb",
                region_name=self.config.region,
                endpoint_url=self.config.endpoint_url,
                config=BotoConfig(
                    connect_timeout=self.config.timeout_seconds,
                    read_timeout=self.config.timeout_seconds,
                    retries={"max_attempts": self.retry_settings.max_attempts, "mode": "standard"},
                ),
            )
        return self._resource

    @property
    def table(self) -> Any:
        """The DynamoDB table handle."""
        if self._table is None:
            self._table = self.resource.Table(self.config.table_name)
        return self._table

    async def get_latest_record(self, channel_id: str) -> StoredVideoRecord | None:
        """Get the most recently published record of a channel."""
        try:
            response = self.table.query(
                IndexName=self.config.index_name,
                KeyConditionExpression=Key("channelId").eq(channel_id),
                ScanIndexForward=False,
                Limit=1,
            )
        except (BotoCoreError, ClientError) as e:
            raise StoreError("query latest record", self.config.table_name, e) from e

        items = response.get("Items") or []
        return StoredVideoRecord.from_item(items[0]) if items else None

    async def put_records(self, records: list[StoredVideoRecord]) -> None:
        """Write a batch of at most 25 records."""
        requests = [{"PutRequest": {"Item": record.to_item()}} for record in records]
        await self._batch_write("batch put", requests)

    async def delete_records(self, records: list[StoredVideoRecord]) -> None:
        """Delete a batch of at most 25 records by key."""
        requests = [{"DeleteRequest": {"Key": record.key}} for record in records]
        await self._batch_write("batch delete", requests)

    async def scan_records(self, keys_only: bool = False) -> AsyncIterator[list[StoredVideoRecord]]:
        """Iterate over all records, one scan page at a time."""
        scan_kwargs: dict[str, Any] = {}
        if keys_only:
            scan_kwargs["ProjectionExpression"] = KEY_ATTRIBUTES

        while True:
            try:
                response = self.table.scan(**scan_kwargs)
            except (BotoCoreError, ClientError) as e:
                raise StoreError("scan", self.config.table_name, e) from e

            yield [StoredVideoRecord.from_item(item) for item in response.get("Items") or []]

            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            scan_kwargs["ExclusiveStartKey"] = last_key

    async def describe(self) -> dict[str, Any]:
        """Describe the underlying table."""
        try:
            response = self.resource.meta.client.describe_table(TableName=self.config.table_name)
        except (BotoCoreError, ClientError) as e:
            raise StoreError("describe table", self.config.table_name, e) from e
        return response.get("Table", {})

    async def _batch_write(self, operation: str, requests: list[dict[str, Any]]) -> None:
        """
        Send one BatchWriteItem call, retrying unprocessed items with backoff.

        Raises:
            StoreError: If the call fails or items stay unprocessed after
                the last attempt
        """
        if not requests:
            return
        if len(requests) > self.max_batch_size:
            raise ValueError(
                f"At most {self.max_batch_size} requests per batch, got {len(requests)}"
            )

        pending = {self.config.table_name: requests}
        for attempt in range(1, self.retry_settings.max_attempts + 1):
            try:
                response = self.resource.batch_write_item(RequestItems=pending)
            except (BotoCoreError, ClientError) as e:
                raise StoreError(operation, self.config.table_name, e) from e

            pending = response.get("UnprocessedItems") or {}
            if not pending:
                return

            if attempt < self.retry_settings.max_attempts:
                delay = self.retry_settings.delay_for(attempt)
                unprocessed = len(pending.get(self.config.table_name, []))
                logger.warning(
                    f"{operation}: {unprocessed} unprocessed items, retrying in {delay:.1f}s"
                )
                await asyncio.sleep(delay)

        unprocessed = len(pending.get(self.config.table_name, []))
        raise StoreError(
            f"{operation} ({unprocessed} items left unprocessed)", self.config.table_name
        )
