"""Core session engine — models, events, reconciliation, errors."""

from .controller import SessionController
from .dispatcher import EventDispatcher
from .errors import (
    ConfigError,
    LedgerValidationError,
    TradeAbortedError,
    TradeError,
    TransportError,
    VersionMismatchError,
)
from .event_log import EventLog
from .events import TradeEvent, TradeEventKind
from .ledger import OfferLedger
from .models import (
    CommandKind,
    InventoryItem,
    ItemRef,
    PartyStatus,
    SchemaItem,
    SessionState,
    Snapshot,
    TradeStatus,
)
from .notifications import Notification, Notifier
from .protocols import Backoff, ForeignInventory, InventoryLookup, ItemSchema, Transport
from .retry import RetryExecutor
from .session import TradeSession
from .version_gate import GateDecision

__all__ = [
    "SessionController", "EventDispatcher",
    "TradeError", "TransportError", "ConfigError",
    "TradeAbortedError", "VersionMismatchError", "LedgerValidationError",
    "EventLog", "TradeEvent", "TradeEventKind", "OfferLedger",
    "CommandKind", "InventoryItem", "ItemRef", "PartyStatus", "SchemaItem",
    "SessionState", "Snapshot", "TradeStatus",
    "Notification", "Notifier",
    "Backoff", "ForeignInventory", "InventoryLookup", "ItemSchema", "Transport",
    "RetryExecutor", "TradeSession", "GateDecision",
]
