"""
EventDispatcher — turns new remote events into host notifications.

Each event in a snapshot is delivered at most once (EventLog), events
originated by the local party are recorded but not re-notified, and an
unrecognized event is reported as a warning without stopping the batch.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .event_log import EventLog
from .events import ITEM_KINDS, TradeEvent, TradeEventKind
from .models import InventoryItem, ItemRef, SchemaItem
from .notifications import Notification, Notifier
from .protocols import ForeignInventory, InventoryLookup, ItemSchema, Transport
from .session import TradeSession

logger = logging.getLogger(__name__)


class EventDispatcher:
    """Maps remote trade events to typed notifications."""

    def __init__(
        self,
        session: TradeSession,
        notifier: Notifier,
        event_log: EventLog,
        transport: Transport,
        remote_inventory: Optional[InventoryLookup] = None,
        schema: Optional[ItemSchema] = None,
    ):
        self._session = session
        self._notifier = notifier
        self._log = event_log
        self._transport = transport
        self._remote_inventory = remote_inventory
        self._schema = schema
        # (app_id, context_id) -> partner's private inventory view
        self._foreign: dict[tuple[int, int], ForeignInventory] = {}

    async def dispatch(self, events: Iterable[TradeEvent]) -> bool:
        """
        Deliver every not-yet-seen remote event, in order.

        Returns True if at least one remote event was delivered. An event is
        logged only once its notification has been delivered, so if a host
        callback raises, that event is delivered again on the next poll.
        """
        remote_acted = False
        for event in events:
            if event in self._log:
                continue
            if event.actor != self._session.local_id:
                remote_acted = True
                await self._dispatch_one(event)
            self._log.record(event)
        return remote_acted

    async def _dispatch_one(self, event: TradeEvent) -> None:
        kind = event.kind

        if kind in ITEM_KINDS:
            schema_item, item = await self._resolve_item(event)
            notification = (
                Notification.ITEM_ADDED
                if kind == TradeEventKind.ITEM_ADDED
                else Notification.ITEM_REMOVED
            )
            await self._notifier.emit(notification, schema_item, item)
        elif kind == TradeEventKind.READY_SET:
            self._session.set_remote_ready(True)
            await self._notifier.emit(Notification.READY_CHANGED, True)
        elif kind == TradeEventKind.READY_UNSET:
            self._session.set_remote_ready(False)
            await self._notifier.emit(Notification.READY_CHANGED, False)
        elif kind == TradeEventKind.ACCEPT:
            await self._notifier.emit(Notification.ACCEPTED)
        elif kind == TradeEventKind.CHAT:
            await self._notifier.emit(Notification.MESSAGE, event.text)
        else:
            await self._warn(f"Unknown event action: {event.action}")

    # ============ Item Resolution ============

    async def _resolve_item(
        self, event: TradeEvent,
    ) -> tuple[Optional[SchemaItem], Optional[InventoryItem]]:
        """
        Resolve an item event to (schema item, inventory item).

        Public inventory first; otherwise the partner's private inventory
        view; otherwise (None, None). Never raises, never drops.
        """
        ref = event.item
        if ref is None:
            await self._warn(f"Item event without item payload (action {event.action})")
            return None, None

        if self._remote_inventory is not None:
            item = self._remote_inventory.get_item(ref.asset_id)
            if item is not None:
                return await self._schema_item(item.defindex), item

        defindex = await self._private_defindex(ref)
        if defindex is None:
            await self._warn(f"Could not resolve partner item {ref.asset_id}")
            return None, None

        placeholder = InventoryItem(
            id=ref.asset_id,
            defindex=defindex,
            app_id=ref.app_id,
            context_id=ref.context_id,
        )
        return await self._schema_item(defindex), placeholder

    async def _private_defindex(self, ref: ItemRef) -> Optional[int]:
        key = (ref.app_id, ref.context_id)
        foreign = self._foreign.get(key)
        if foreign is None:
            foreign = await self._transport.fetch_foreign_inventory(
                self._session.remote_id, ref.context_id, ref.app_id,
            )
            if foreign is None:
                logger.warning(
                    "Foreign inventory unavailable for %s (app %d, context %d)",
                    self._session.remote_id, ref.app_id, ref.context_id,
                )
                return None
            self._foreign[key] = foreign
        return foreign.get_defindex(ref.asset_id)

    async def _schema_item(self, defindex: int) -> Optional[SchemaItem]:
        if self._schema is None:
            return None
        schema_item = self._schema.get_item(defindex)
        if schema_item is None:
            await self._warn(f"Partner item has unknown defindex {defindex}")
        return schema_item

    async def _warn(self, message: str) -> None:
        logger.warning("Trade %s: %s", self._session.remote_id, message)
        await self._notifier.emit(Notification.ERROR, message)
