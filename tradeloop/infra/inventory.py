"""
In-memory implementations of the inventory and schema collaborators.

Hosts that already hold inventory data (fetched by their own web layer)
wrap it here to satisfy InventoryLookup / ForeignInventory / ItemSchema.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from tradeloop.core.models import InventoryItem, SchemaItem

logger = logging.getLogger(__name__)


class Inventory:
    """A party's inventory, indexed by asset id and by defindex."""

    def __init__(self, items: Iterable[InventoryItem] = ()):
        self._items: dict[int, InventoryItem] = {}
        for item in items:
            self._items[item.id] = item

    def __len__(self) -> int:
        return len(self._items)

    def get_item(self, item_id: int) -> Optional[InventoryItem]:
        return self._items.get(item_id)

    def get_items_by_defindex(self, defindex: int) -> list[InventoryItem]:
        return [item for item in self._items.values() if item.defindex == defindex]

    @classmethod
    def from_payload(
        cls, payload: dict[str, Any], app_id: int = 0, context_id: int = 0,
    ) -> Inventory:
        """
        Build from a game inventory payload:
        ``{"result": {"items": [{"id", "defindex", "flag_cannot_trade"}, ...]}}``.
        """
        raw_items = (payload.get("result") or {}).get("items") or []
        items = [
            InventoryItem(
                id=int(raw["id"]),
                defindex=int(raw.get("defindex", 0)),
                app_id=app_id,
                context_id=context_id,
                tradable=not raw.get("flag_cannot_trade", False),
            )
            for raw in raw_items
        ]
        logger.debug("Loaded inventory with %d items", len(items))
        return cls(items)


class ForeignInventoryView:
    """Partner's private inventory as seen during a trade: id -> defindex."""

    def __init__(self, defindexes: dict[int, int]):
        self._defindexes = dict(defindexes)

    def __len__(self) -> int:
        return len(self._defindexes)

    def get_defindex(self, item_id: int) -> Optional[int]:
        return self._defindexes.get(item_id)


class StaticItemSchema:
    """Item schema held in memory."""

    def __init__(self, items: Iterable[SchemaItem] = ()):
        self._items = {item.defindex: item for item in items}

    def get_item(self, defindex: int) -> Optional[SchemaItem]:
        return self._items.get(defindex)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> StaticItemSchema:
        """Build from ``{"result": {"items": [{"defindex", "item_name", "item_class"}]}}``."""
        raw_items = (payload.get("result") or {}).get("items") or []
        return cls(
            SchemaItem(
                defindex=int(raw["defindex"]),
                name=raw.get("item_name") or raw.get("name", ""),
                item_class=raw.get("item_class", ""),
            )
            for raw in raw_items
        )
