"""User-facing success/error notifications."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Literal, Protocol

logger = logging.getLogger(__name__)

Variant = Literal["success", "error", "info"]


@dataclass(slots=True, frozen=True)
class Notification:
    """One toast-style message."""

    title: str
    variant: Variant
    message: str


class Notifier(Protocol):
    """Protocol for notification sinks."""

    def notify(self, notification: Notification) -> None:
        """Surface one notification."""


class LoggingNotifier:
    """Writes notifications to the module logger only."""

    def notify(self, notification: Notification) -> None:
        level = logging.WARNING if notification.variant == "error" else logging.INFO
        logger.log(
            level,
            "notification.%s title=%s message=%s",
            notification.variant,
            notification.title,
            notification.message,
        )


@dataclass(slots=True)
class NotificationFeed:
    """Bounded buffer of notifications waiting to be shown."""

    max_items: int = 50
    _items: deque[Notification] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._items = deque(maxlen=self.max_items)

    def notify(self, notification: Notification) -> None:
        LoggingNotifier().notify(notification)
        self._items.append(notification)

    @property
    def pending(self) -> list[Notification]:
        return list(self._items)

    def drain(self) -> list[Notification]:
        """Return and clear pending notifications."""

        items = list(self._items)
        self._items.clear()
        return items
