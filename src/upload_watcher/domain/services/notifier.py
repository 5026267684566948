"""Abstract base class for the outbound notification sink."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class NotificationMessage:
    """Structured message: typed content blocks plus a plain-text fallback."""

    text: str
    blocks: list[dict[str, Any]] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """Convert to the JSON payload posted to the sink."""
        return {"text": self.text, "blocks": self.blocks}


class Notifier(ABC):
    """Abstract notification sink."""

    @abstractmethod
    async def send(self, message: NotificationMessage) -> bool:
        """
        Deliver a message.

        Delivery is best effort: implementations log failures instead of
        raising them.

        Returns:
            True if the message was delivered
        """
        pass
