"""
Trade event definitions — the remote negotiation log entries.

Each snapshot carries the server's event log (or a window of it). Events
are immutable records; two events are the same event exactly when every
field is equal, which is what deduplication across snapshots relies on.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import ItemRef


class TradeEventKind(IntEnum):
    """Wire action codes of the trade event log."""
    ITEM_ADDED = 0
    ITEM_REMOVED = 1
    READY_SET = 2
    READY_UNSET = 3
    ACCEPT = 4
    CHAT = 7


ITEM_KINDS = frozenset({TradeEventKind.ITEM_ADDED, TradeEventKind.ITEM_REMOVED})


@dataclass(frozen=True)
class TradeEvent:
    """
    One entry of the remote event log.

    ``action`` keeps the raw wire code so unrecognized actions can still be
    reported; ``kind`` is None for those.
    """
    actor: str
    action: int
    timestamp: int = 0
    item: Optional[ItemRef] = None
    text: str = ""

    @property
    def kind(self) -> Optional[TradeEventKind]:
        try:
            return TradeEventKind(self.action)
        except ValueError:
            return None


# ============ Factory Functions ============

def item_added(actor: str, item: ItemRef, timestamp: int = 0) -> TradeEvent:
    return TradeEvent(actor=actor, action=TradeEventKind.ITEM_ADDED, timestamp=timestamp, item=item)


def item_removed(actor: str, item: ItemRef, timestamp: int = 0) -> TradeEvent:
    return TradeEvent(actor=actor, action=TradeEventKind.ITEM_REMOVED, timestamp=timestamp, item=item)


def ready_set(actor: str, ready: bool = True, timestamp: int = 0) -> TradeEvent:
    action = TradeEventKind.READY_SET if ready else TradeEventKind.READY_UNSET
    return TradeEvent(actor=actor, action=action, timestamp=timestamp)


def accepted(actor: str, timestamp: int = 0) -> TradeEvent:
    return TradeEvent(actor=actor, action=TradeEventKind.ACCEPT, timestamp=timestamp)


def chat(actor: str, text: str, timestamp: int = 0) -> TradeEvent:
    return TradeEvent(actor=actor, action=TradeEventKind.CHAT, timestamp=timestamp, text=text)
