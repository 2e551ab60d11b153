"""
Core data models for the trade session engine.

These are the value types shared across all modules: item identity,
inventory and schema records, and the status snapshot the server reports
on every poll. They define WHAT the engine works with, not HOW it
processes them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional

from .events import TradeEvent


# ============ Item Identity ============

@dataclass(frozen=True)
class ItemRef:
    """
    Namespace-qualified reference to one asset.

    An asset id is only unique within its (app_id, context_id) pair.
    Carries no trading semantics, just identity.
    """
    asset_id: int
    app_id: int
    context_id: int


@dataclass
class InventoryItem:
    """An item as listed in a party's inventory."""
    id: int
    defindex: int = 0
    app_id: int = 0
    context_id: int = 0
    tradable: bool = True

    def to_ref(self) -> ItemRef:
        return ItemRef(asset_id=self.id, app_id=self.app_id, context_id=self.context_id)


@dataclass(frozen=True)
class SchemaItem:
    """Item definition from the game's item schema, keyed by defindex."""
    defindex: int
    name: str
    item_class: str = ""


# ============ Status Snapshot ============

class TradeStatus(IntEnum):
    """Trade status codes reported by the server on each snapshot."""
    OPEN = 0
    COMPLETED = 1
    EMPTY = 2
    CANCELLED = 3
    TIMED_OUT = 4
    FAILED = 5


@dataclass(frozen=True)
class PartyStatus:
    """
    One party's block of a snapshot.

    ``assets`` is None when the server omitted the offer list entirely;
    an empty tuple means the party confirmed offering nothing.
    """
    ready: bool = False
    assets: Optional[tuple[ItemRef, ...]] = None

    @property
    def asset_ids(self) -> tuple[int, ...]:
        return tuple(a.asset_id for a in self.assets or ())


@dataclass(frozen=True)
class Snapshot:
    """
    One server-reported view of trade status, offers and events.

    ``changed`` set means this snapshot is a full-state replace at
    ``version``; events are only meaningful when it is not set.
    """
    status: int
    changed: bool = False
    version: int = 0
    log_pos: int = 0
    me: Optional[PartyStatus] = None
    them: Optional[PartyStatus] = None
    events: tuple[TradeEvent, ...] = field(default_factory=tuple)


# ============ Session / Commands ============

class SessionState(str, Enum):
    """
    Session lifecycle states.

    NOT_STARTED -> RUNNING -> {COMPLETED, CANCELLED, ABORTED, CLOSED}
    """
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"     # Server reported a successful trade
    CANCELLED = "cancelled"     # Server reported the trade closed (cancel, timeout, failure)
    ABORTED = "aborted"         # Fatal desync or ledger mismatch
    CLOSED = "closed"           # Host closed the session explicitly


TERMINAL_STATES = frozenset({
    SessionState.COMPLETED,
    SessionState.CANCELLED,
    SessionState.ABORTED,
    SessionState.CLOSED,
})


class CommandKind(str, Enum):
    """Mutating commands a transport must be able to issue."""
    ADD_ITEM = "add_item"
    REMOVE_ITEM = "remove_item"
    SET_READY = "set_ready"
    ACCEPT = "accept"
    CANCEL = "cancel"
    SEND_MESSAGE = "send_message"
