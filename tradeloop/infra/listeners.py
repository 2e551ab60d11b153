"""
Ready-made notification listeners.

- LoggingListener: logs every notification (debugging / CI)
- RecordingListener: keeps every notification in memory (headless / testing)

Both attach to every notification kind of a Notifier.
"""

from __future__ import annotations

import logging
from typing import Any

from tradeloop.core.notifications import Notification, Notifier

logger = logging.getLogger(__name__)


class LoggingListener:
    """Logs notifications at INFO level, errors at WARNING."""

    def __init__(self, label: str = "trade"):
        self._label = label

    def attach(self, notifier: Notifier) -> None:
        for kind in Notification:
            notifier.subscribe(kind, self._handler(kind))

    def _handler(self, kind: Notification):
        def _log(*args: Any) -> None:
            level = logging.WARNING if kind == Notification.ERROR else logging.INFO
            logger.log(
                level,
                "Notification [%s] %s: %s",
                self._label,
                kind.value,
                [str(a)[:100] for a in args],
            )
        return _log


class RecordingListener:
    """Collects (kind, args) pairs for later inspection."""

    def __init__(self) -> None:
        self.received: list[tuple[Notification, tuple[Any, ...]]] = []

    def attach(self, notifier: Notifier) -> None:
        for kind in Notification:
            notifier.subscribe(kind, self._handler(kind))

    def _handler(self, kind: Notification):
        def _record(*args: Any) -> None:
            self.received.append((kind, args))
        return _record

    def of_kind(self, kind: Notification) -> list[tuple[Any, ...]]:
        return [args for k, args in self.received if k == kind]

    def count(self, kind: Notification) -> int:
        return len(self.of_kind(kind))

    def reset(self) -> None:
        self.received.clear()
