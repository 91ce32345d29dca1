from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..models.report import WorkbookReport

logger = logging.getLogger(__name__)

"""Synchronous publish/subscribe for coordinator notifications.

The UI layer subscribes to react to a user-initiated submission without
depending on the return value of submit(). Handlers run in subscription order
on the caller's thread; an exception raised by a handler propagates to the
publisher.
"""

__all__ = [
    "TOPIC_VALIDATED",
    "TOPIC_VALIDATION_FAILED",
    "Handler",
    "Notifier",
    "ValidatedEvent",
    "ValidationFailedEvent",
]

TOPIC_VALIDATED = "validated"
TOPIC_VALIDATION_FAILED = "validation-failed"

Handler = Callable[[Any], None]


@dataclass(frozen=True)
class ValidatedEvent:
    """Published after a candidate passed validation and was committed."""
    file_name: str
    sheet_names: tuple[str, ...]  # Sheets with at least one valid row


@dataclass(frozen=True)
class ValidationFailedEvent:
    """Published when no sheet of the candidate has a valid row."""
    file_name: str
    report: WorkbookReport


class Notifier:
    """Topic -> handlers registry."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def subscribe(self, topic: str, handler: Handler) -> Callable[[], None]:
        """Register a handler for a topic.

        Returns:
            Callable that removes the subscription
        """
        self._handlers[topic].append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers[topic]:
                self._handlers[topic].remove(handler)

        return unsubscribe

    def publish(self, topic: str, event: Any) -> int:
        """Deliver an event to every handler of the topic.

        Returns:
            Number of handlers that received the event
        """
        handlers = list(self._handlers.get(topic, ()))
        logger.debug("publish topic=%s handlers=%d", topic, len(handlers))
        for handler in handlers:
            handler(event)
        return len(handlers)
