"""
Module-boundary Protocol definitions — the contracts between the engine
and its external collaborators.

These Protocols define WHAT each collaborator must do, not HOW. The
wire transport, inventories and item schema are all opaque to the engine;
any implementation that satisfies the Protocol can be used.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional, Protocol, runtime_checkable

from .models import CommandKind, InventoryItem, SchemaItem, Snapshot


# Awaitable delay between retry attempts, in seconds. Default: asyncio.sleep.
Backoff = Callable[[float], Awaitable[Any]]


# ============ Inventories ============

@runtime_checkable
class InventoryLookup(Protocol):
    """A party's public inventory."""

    def get_item(self, item_id: int) -> Optional[InventoryItem]:
        """Return the item with this asset id, or None."""
        ...

    def get_items_by_defindex(self, defindex: int) -> list[InventoryItem]:
        """Return every item with this definition index."""
        ...


@runtime_checkable
class ForeignInventory(Protocol):
    """
    Minimal view of a private inventory, as exposed to the trade partner.

    Only item id -> defindex resolution is available.
    """

    def get_defindex(self, item_id: int) -> Optional[int]:
        ...


@runtime_checkable
class ItemSchema(Protocol):
    """Resolves a definition index to its schema entry."""

    def get_item(self, defindex: int) -> Optional[SchemaItem]:
        ...


# ============ Transport ============

@runtime_checkable
class Transport(Protocol):
    """
    Wire transport for one trade.

    All methods swallow transient failures: ``None`` / ``False`` means
    "not confirmed, safe to retry". They never raise for network errors.
    """

    async def fetch_status(self, version: int, log_pos: int) -> Optional[Snapshot]:
        """Fetch one status snapshot relative to the caller's cursor."""
        ...

    async def send_command(self, kind: CommandKind, params: dict[str, Any]) -> bool:
        """Issue one mutating command. Returns whether the server accepted it."""
        ...

    async def fetch_foreign_inventory(
        self, party_id: str, context_id: int, app_id: int,
    ) -> Optional[ForeignInventory]:
        """Fetch the partner's inventory as visible to us."""
        ...
