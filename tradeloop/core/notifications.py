"""
Notification hub — the host-facing callback surface.

The host subscribes callbacks per notification kind. Callbacks run in
registration order during ``poll()`` or a command; a callback returning
an awaitable is awaited before the next one runs.

Callback signatures by kind:

- CLOSED:         ()
- ERROR:          (message: str)
- INITIALIZED:    ()
- ITEM_ADDED:     (schema_item: SchemaItem | None, item: InventoryItem | None)
- ITEM_REMOVED:   (schema_item: SchemaItem | None, item: InventoryItem | None)
- MESSAGE:        (text: str)
- READY_CHANGED:  (ready: bool)
- ACCEPTED:       ()
"""

from __future__ import annotations

import inspect
import logging
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class Notification(str, Enum):
    CLOSED = "closed"
    ERROR = "error"
    INITIALIZED = "initialized"
    ITEM_ADDED = "item_added"
    ITEM_REMOVED = "item_removed"
    MESSAGE = "message"
    READY_CHANGED = "ready_changed"
    ACCEPTED = "accepted"


Callback = Callable[..., Any]


class Notifier:
    """Subscription list per notification kind."""

    def __init__(self) -> None:
        self._subscribers: dict[Notification, list[Callback]] = {
            kind: [] for kind in Notification
        }

    def subscribe(self, kind: Notification | str, callback: Callback) -> Callback:
        """Register ``callback`` for ``kind``. Returns the callback (decorator-friendly)."""
        self._subscribers[Notification(kind)].append(callback)
        return callback

    def unsubscribe(self, kind: Notification | str, callback: Callback) -> bool:
        subscribers = self._subscribers[Notification(kind)]
        if callback in subscribers:
            subscribers.remove(callback)
            return True
        return False

    def on(self, kind: Notification | str) -> Callable[[Callback], Callback]:
        """Decorator form of subscribe()."""
        def _register(callback: Callback) -> Callback:
            return self.subscribe(kind, callback)
        return _register

    def subscriber_count(self, kind: Notification | str) -> int:
        return len(self._subscribers[Notification(kind)])

    async def emit(self, kind: Notification, *args: Any) -> None:
        """Invoke every subscriber of ``kind`` in registration order."""
        # Copy so a callback may unsubscribe itself mid-dispatch.
        for callback in list(self._subscribers[kind]):
            result = callback(*args)
            if inspect.isawaitable(result):
                await result
