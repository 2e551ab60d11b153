"""EventLog — remote events already seen, for at-most-once delivery."""

from __future__ import annotations

from .events import TradeEvent


class EventLog:
    """
    Deduplicating record of trade events.

    Identity is full structural equality of the event record. Events are
    kept in first-seen order.
    """

    def __init__(self) -> None:
        self._seen: set[TradeEvent] = set()
        self._order: list[TradeEvent] = []

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, event: object) -> bool:
        return event in self._seen

    def __iter__(self):
        return iter(self._order)

    def record(self, event: TradeEvent) -> bool:
        """Record an event. Returns False if it had already been recorded."""
        if event in self._seen:
            return False
        self._seen.add(event)
        self._order.append(event)
        return True
