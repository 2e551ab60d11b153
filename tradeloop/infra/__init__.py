from .config import TradeConfig
from .http_transport import HttpTradeTransport
from .inventory import ForeignInventoryView, Inventory, StaticItemSchema
from .listeners import LoggingListener, RecordingListener

__all__ = [
    "TradeConfig", "HttpTradeTransport",
    "ForeignInventoryView", "Inventory", "StaticItemSchema",
    "LoggingListener", "RecordingListener",
]
