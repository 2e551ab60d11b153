"""
SessionController — drives one trade from first poll to a terminal state.

The host calls ``poll()`` on its own cadence and issues commands in
between. The controller owns the session, the offer ledger and the event
log; nothing else writes to them.

Poll cycle:
    fetch snapshot -> classify status -> version gate ->
    (full-state replace | event dispatch + readiness update)

Every remote call goes through the RetryExecutor, which stops making
requests as soon as the session is terminal.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .dispatcher import EventDispatcher
from .errors import ConfigError, LedgerValidationError, VersionMismatchError
from .event_log import EventLog
from .ledger import OfferLedger
from .models import CommandKind, InventoryItem, ItemRef, Snapshot, TradeStatus
from .notifications import Notification, Notifier
from .protocols import Backoff, InventoryLookup, ItemSchema, Transport
from .reconciler import reconcile
from .retry import DEFAULT_MAX_ATTEMPTS, DEFAULT_RETRY_DELAY_S, RetryExecutor
from .session import TradeSession
from .version_gate import GateDecision, admit

logger = logging.getLogger(__name__)

DEFAULT_APP_ID = 440
DEFAULT_CONTEXT_ID = 2


class SessionController:
    """
    Poll loop and mutating commands for one trade.

    Commands return a plain success boolean: False covers "session is
    terminal", "server rejected" and "retries exhausted" alike. The next
    snapshot is the ground truth.
    """

    def __init__(
        self,
        session: TradeSession,
        transport: Transport,
        notifier: Optional[Notifier] = None,
        local_inventory: Optional[InventoryLookup] = None,
        remote_inventory: Optional[InventoryLookup] = None,
        schema: Optional[ItemSchema] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay_s: float = DEFAULT_RETRY_DELAY_S,
        backoff: Optional[Backoff] = None,
        default_app_id: int = DEFAULT_APP_ID,
        default_context_id: int = DEFAULT_CONTEXT_ID,
    ):
        self._session = session
        self._transport = transport
        self._notifier = notifier or Notifier()
        self._local_inventory = local_inventory
        self._default_app_id = default_app_id
        self._default_context_id = default_context_id
        self._ledger = OfferLedger()
        self._event_log = EventLog()
        self._closed_notified = False
        self._retry = RetryExecutor(
            is_terminal=lambda: session.is_terminal,
            max_attempts=max_attempts,
            delay_s=retry_delay_s,
            backoff=backoff,
        )
        self._dispatcher = EventDispatcher(
            session=session,
            notifier=self._notifier,
            event_log=self._event_log,
            transport=transport,
            remote_inventory=remote_inventory,
            schema=schema,
        )

    # ============ Read-only view ============

    @property
    def session(self) -> TradeSession:
        return self._session

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    @property
    def ledger(self) -> OfferLedger:
        return self._ledger

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def my_offered_items(self) -> list[int]:
        """Asset ids we intend to offer, in slot order."""
        return self._ledger.offered_ids

    @property
    def other_offered_items(self) -> tuple[int, ...]:
        """Asset ids the partner has confirmed offering."""
        return self._ledger.confirmed_remote

    def on(self, kind: Notification | str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator shortcut for ``notifier.subscribe``."""
        return self._notifier.on(kind)

    # ============ Poll Cycle ============

    async def poll(self) -> bool:
        """
        Run one poll cycle.

        Returns True if the partner did something this cycle (or the offer
        state was replaced). Raises VersionMismatchError if the server
        skipped a version; the session is aborted in that case.
        """
        session = self._session
        if session.is_terminal:
            return False

        if not session.started:
            # No feedback tells us the trade is initialized; the first poll is it.
            session.start()
            await self._notifier.emit(Notification.INITIALIZED)

        snapshot: Optional[Snapshot] = await self._retry.execute(
            lambda: self._transport.fetch_status(session.version, session.log_pos),
            label="fetch_status",
        )
        if snapshot is None:
            return False

        if not await self._handle_status(snapshot):
            return False

        try:
            decision = admit(snapshot, session.version)
        except VersionMismatchError as exc:
            logger.error("Trade %s aborted: %s", session.remote_id, exc)
            session.abort(str(exc))
            raise

        if decision == GateDecision.STALE:
            return False

        if decision == GateDecision.REPLACE:
            session.adopt_version(snapshot.version)
            reconcile(snapshot, self._ledger)
            return True

        remote_acted = await self._dispatcher.dispatch(snapshot.events)

        if snapshot.me is not None:
            session.set_local_ready(snapshot.me.ready)
        if snapshot.them is not None:
            session.set_remote_ready(snapshot.them.ready)
        if snapshot.log_pos != 0:
            session.advance_log_pos(snapshot.log_pos)

        return remote_acted

    async def _handle_status(self, snapshot: Snapshot) -> bool:
        """Apply the trade status code. Returns False once the trade has ended."""
        session = self._session
        if snapshot.status == TradeStatus.OPEN:
            return True

        if snapshot.status == TradeStatus.COMPLETED:
            session.complete()
            return False

        session.cancel()
        await self._notifier.emit(
            Notification.ERROR,
            f"Trade was closed by other user. Trade status: {int(snapshot.status)}",
        )
        await self._notify_closed()
        return False

    async def _notify_closed(self) -> None:
        if self._closed_notified:
            return
        self._closed_notified = True
        await self._notifier.emit(Notification.CLOSED)

    # ============ Commands ============

    def _rejects(self, label: str) -> bool:
        if self._session.is_terminal:
            logger.debug(
                "Rejecting %s: session is %s", label, self._session.state.value,
            )
            return True
        return False

    async def _send(self, kind: CommandKind, params: dict[str, Any]) -> bool:
        result = await self._retry.execute(
            lambda: self._transport.send_command(kind, params),
            label=kind.value,
        )
        return bool(result)

    def _validate_ledger(self) -> None:
        try:
            self._ledger.validate()
        except LedgerValidationError as exc:
            logger.error("Trade %s aborted: %s", self._session.remote_id, exc)
            self._session.abort(str(exc))
            raise

    async def add_item(self, item: ItemRef) -> bool:
        """Offer ``item`` in the lowest free slot."""
        if self._rejects("add_item"):
            return False
        if self._ledger.contains(item.asset_id):
            logger.warning("Item %d is already offered", item.asset_id)
            return False

        slot = self._ledger.next_slot()
        success = await self._send(
            CommandKind.ADD_ITEM,
            {
                "asset_id": item.asset_id,
                "app_id": item.app_id,
                "context_id": item.context_id,
                "slot": slot,
            },
        )
        if success:
            self._ledger.record(slot, item)
        return success

    async def remove_item(self, asset_id: int) -> bool:
        """Withdraw an offered item. False if it is not in the ledger."""
        if self._rejects("remove_item"):
            return False
        slot = self._ledger.slot_of(asset_id)
        if slot is None:
            return False

        item = self._ledger.item_at(slot)
        success = await self._send(
            CommandKind.REMOVE_ITEM,
            {
                "asset_id": item.asset_id,
                "app_id": item.app_id,
                "context_id": item.context_id,
                "slot": slot,
            },
        )
        if success:
            self._ledger.release(slot)
        return success

    async def set_ready(self, ready: bool) -> bool:
        """
        Set our ready state.

        Unready is recorded locally before the call so a failed request
        still leaves us conservatively unready. Ready-up validates the
        ledger first and raises LedgerValidationError on drift.
        """
        if self._rejects("set_ready"):
            return False
        if not ready:
            self._session.set_local_ready(False)
        else:
            self._validate_ledger()

        return await self._send(
            CommandKind.SET_READY,
            {"ready": ready, "version": self._session.version},
        )

    async def accept(self) -> bool:
        """Confirm the trade. Raises LedgerValidationError on drift."""
        if self._rejects("accept"):
            return False
        self._validate_ledger()
        return await self._send(
            CommandKind.ACCEPT, {"version": self._session.version},
        )

    async def cancel(self) -> bool:
        """Cancel the trade. Emits CLOSED on success."""
        if self._rejects("cancel"):
            return False
        success = await self._send(CommandKind.CANCEL, {})
        if success:
            await self._notify_closed()
        return success

    async def send_message(self, text: str) -> bool:
        if self._rejects("send_message"):
            return False
        return await self._send(
            CommandKind.SEND_MESSAGE,
            {
                "message": text,
                "version": self._session.version,
                "log_pos": self._session.log_pos,
            },
        )

    async def close(self) -> None:
        """Abandon the session locally. No remote call is made."""
        if self._session.is_terminal:
            return
        self._session.close()
        await self._notify_closed()

    # ============ Inventory-based helpers ============

    def _require_local_inventory(self) -> InventoryLookup:
        if self._local_inventory is None:
            raise ConfigError("This operation needs a local inventory")
        return self._local_inventory

    def _ref_for(self, item: InventoryItem) -> ItemRef:
        return ItemRef(
            asset_id=item.id,
            app_id=item.app_id or self._default_app_id,
            context_id=item.context_id or self._default_context_id,
        )

    async def add_item_by_id(
        self,
        asset_id: int,
        app_id: Optional[int] = None,
        context_id: Optional[int] = None,
    ) -> bool:
        """
        Offer an item by asset id.

        Without an explicit app/context the default namespace is used, and
        the id must exist in the local inventory (when one is configured).
        """
        if app_id is None and context_id is None and self._local_inventory is not None:
            item = self._local_inventory.get_item(asset_id)
            if item is None:
                return False
            return await self.add_item(self._ref_for(item))

        return await self.add_item(ItemRef(
            asset_id=asset_id,
            app_id=self._default_app_id if app_id is None else app_id,
            context_id=self._default_context_id if context_id is None else context_id,
        ))

    async def add_item_by_defindex(self, defindex: int) -> bool:
        """Offer the first tradable, not yet offered item with ``defindex``."""
        inventory = self._require_local_inventory()
        for item in inventory.get_items_by_defindex(defindex):
            if item.tradable and not self._ledger.contains(item.id):
                return await self.add_item(self._ref_for(item))
        return False

    async def add_all_items_by_defindex(self, defindex: int, limit: int = 0) -> int:
        """
        Offer every tradable item with ``defindex``.

        ``limit`` caps the number added; 0 means no cap. Returns the count added.
        """
        inventory = self._require_local_inventory()
        added = 0
        for item in inventory.get_items_by_defindex(defindex):
            if not item.tradable or self._ledger.contains(item.id):
                continue
            if await self.add_item(self._ref_for(item)):
                added += 1
            if limit > 0 and added >= limit:
                break
        return added

    async def remove_item_by_defindex(self, defindex: int) -> bool:
        """Withdraw one offered item with ``defindex``."""
        inventory = self._require_local_inventory()
        for asset_id in self._ledger.offered_ids:
            item = inventory.get_item(asset_id)
            if item is not None and item.defindex == defindex:
                return await self.remove_item(asset_id)
        return False

    async def remove_all_items_by_defindex(self, defindex: int, limit: int = 0) -> int:
        """Withdraw every offered item with ``defindex``. Returns the count removed."""
        inventory = self._require_local_inventory()
        removed = 0
        for item in inventory.get_items_by_defindex(defindex):
            if not self._ledger.contains(item.id):
                continue
            if await self.remove_item(item.id):
                removed += 1
            if limit > 0 and removed >= limit:
                break
        return removed

    async def remove_all_items(self) -> int:
        """Withdraw everything we offered. Returns the count removed."""
        removed = 0
        for asset_id in self._ledger.offered_ids:
            if await self.remove_item(asset_id):
                removed += 1
        return removed
