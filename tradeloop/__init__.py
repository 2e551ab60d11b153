"""
tradeloop — client-side session engine for poll-driven item trades.

Public API surface. Import everything you need from here::

    from tradeloop import SessionBuilder, SessionController, Notification

Extension points (implement these Protocols to customize):

- ``Transport`` — the wire layer (status snapshots, commands, foreign inventory)
- ``InventoryLookup`` — a party's public inventory
- ``ForeignInventory`` — the partner's private inventory view
- ``ItemSchema`` — defindex -> schema item resolution
- ``Backoff`` — the delay between retry attempts
"""

# -- Core engine --
from tradeloop.core.controller import SessionController
from tradeloop.core.session import TradeSession

# -- Data models --
from tradeloop.core.models import (
    CommandKind,
    InventoryItem,
    ItemRef,
    PartyStatus,
    SchemaItem,
    SessionState,
    Snapshot,
    TradeStatus,
)

# -- Events / notifications --
from tradeloop.core.events import TradeEvent, TradeEventKind
from tradeloop.core.notifications import Notification, Notifier

# -- Errors --
from tradeloop.core.errors import (
    ConfigError,
    LedgerValidationError,
    TradeAbortedError,
    TradeError,
    TransportError,
    VersionMismatchError,
)

# -- Protocols (contracts for extension) --
from tradeloop.core.protocols import (
    Backoff,
    ForeignInventory,
    InventoryLookup,
    ItemSchema,
    Transport,
)

# -- Infrastructure --
from tradeloop.builder import SessionBuilder
from tradeloop.infra.config import TradeConfig
from tradeloop.infra.http_transport import HttpTradeTransport
from tradeloop.infra.inventory import ForeignInventoryView, Inventory, StaticItemSchema
from tradeloop.infra.listeners import LoggingListener, RecordingListener

__all__ = [
    # Engine
    "SessionController", "TradeSession", "SessionBuilder",
    # Models
    "CommandKind", "InventoryItem", "ItemRef", "PartyStatus", "SchemaItem",
    "SessionState", "Snapshot", "TradeStatus",
    # Events
    "TradeEvent", "TradeEventKind", "Notification", "Notifier",
    # Errors
    "ConfigError", "LedgerValidationError", "TradeAbortedError",
    "TradeError", "TransportError", "VersionMismatchError",
    # Protocols
    "Backoff", "ForeignInventory", "InventoryLookup", "ItemSchema", "Transport",
    # Infra
    "TradeConfig", "HttpTradeTransport",
    "ForeignInventoryView", "Inventory", "StaticItemSchema",
    "LoggingListener", "RecordingListener",
]
