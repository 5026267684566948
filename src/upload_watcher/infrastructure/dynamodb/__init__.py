"""DynamoDB integration implementations."""

from upload_watcher.infrastructure.dynamodb.video_store import DynamoDBVideoStore

__all__ = ["DynamoDBVideoStore"]
