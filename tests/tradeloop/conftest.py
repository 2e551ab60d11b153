"""
Shared test fixtures for tradeloop tests.

Provides a scripted fake transport, a recording backoff, sample
inventories and factories for snapshots.
"""

from __future__ import annotations

from typing import Any, Optional

import pytest

from tradeloop.core.controller import SessionController
from tradeloop.core.events import TradeEvent
from tradeloop.core.models import (
    CommandKind,
    InventoryItem,
    ItemRef,
    PartyStatus,
    SchemaItem,
    Snapshot,
    TradeStatus,
)
from tradeloop.core.notifications import Notifier
from tradeloop.core.session import TradeSession
from tradeloop.infra.inventory import ForeignInventoryView, Inventory, StaticItemSchema
from tradeloop.infra.listeners import RecordingListener


LOCAL_ID = "76561198000000001"
REMOTE_ID = "76561198000000002"


# ============ Snapshot helpers ============

def ref(asset_id: int, app_id: int = 440, context_id: int = 2) -> ItemRef:
    return ItemRef(asset_id=asset_id, app_id=app_id, context_id=context_id)


def party(*asset_ids: int, ready: bool = False) -> PartyStatus:
    return PartyStatus(ready=ready, assets=tuple(ref(a) for a in asset_ids))


def snapshot(
    status: int = TradeStatus.OPEN,
    changed: bool = False,
    version: int = 0,
    log_pos: int = 0,
    me: Optional[PartyStatus] = None,
    them: Optional[PartyStatus] = None,
    events: tuple[TradeEvent, ...] = (),
) -> Snapshot:
    return Snapshot(
        status=status,
        changed=changed,
        version=version,
        log_pos=log_pos,
        me=me,
        them=them,
        events=tuple(events),
    )


# ============ Fake Transport ============

class FakeTransport:
    """
    Scripted transport.

    ``statuses`` is consumed one entry per fetch (None = transient failure);
    once exhausted the last real snapshot is repeated. Commands succeed
    unless a result is queued for their kind.
    """

    def __init__(self) -> None:
        self.statuses: list[Optional[Snapshot]] = []
        self.status_calls: list[tuple[int, int]] = []
        self.commands: list[tuple[CommandKind, dict[str, Any]]] = []
        self.command_results: dict[CommandKind, list[bool]] = {}
        self.default_command_result = True
        self.foreign_inventory: Optional[ForeignInventoryView] = None
        self.foreign_calls: list[tuple[str, int, int]] = []
        self._last: Optional[Snapshot] = None

    def queue(self, *snapshots: Optional[Snapshot]) -> None:
        self.statuses.extend(snapshots)

    def fail_command(self, kind: CommandKind, times: int = 1) -> None:
        self.command_results.setdefault(kind, []).extend([False] * times)

    def commands_of(self, kind: CommandKind) -> list[dict[str, Any]]:
        return [params for k, params in self.commands if k == kind]

    async def fetch_status(self, version: int, log_pos: int) -> Optional[Snapshot]:
        self.status_calls.append((version, log_pos))
        if self.statuses:
            result = self.statuses.pop(0)
            if result is not None:
                self._last = result
            return result
        return self._last

    async def send_command(self, kind: CommandKind, params: dict[str, Any]) -> bool:
        self.commands.append((kind, dict(params)))
        queued = self.command_results.get(kind)
        if queued:
            return queued.pop(0)
        return self.default_command_result

    async def fetch_foreign_inventory(
        self, party_id: str, context_id: int, app_id: int,
    ) -> Optional[ForeignInventoryView]:
        self.foreign_calls.append((party_id, context_id, app_id))
        return self.foreign_inventory


class RecordingBackoff:
    """Backoff that records requested delays instead of sleeping."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


# ============ Sample Data ============

SAMPLE_SCHEMA = StaticItemSchema([
    SchemaItem(defindex=5021, name="Mann Co. Supply Crate Key"),
    SchemaItem(defindex=5002, name="Refined Metal"),
    SchemaItem(defindex=5000, name="Scrap Metal"),
])


def local_inventory() -> Inventory:
    return Inventory([
        InventoryItem(id=101, defindex=5002, app_id=440, context_id=2),
        InventoryItem(id=102, defindex=5002, app_id=440, context_id=2),
        InventoryItem(id=103, defindex=5002, app_id=440, context_id=2, tradable=False),
        InventoryItem(id=104, defindex=5000, app_id=440, context_id=2),
        InventoryItem(id=105, defindex=5021, app_id=440, context_id=2),
    ])


def remote_inventory() -> Inventory:
    return Inventory([
        InventoryItem(id=201, defindex=5021, app_id=440, context_id=2),
        InventoryItem(id=202, defindex=9999, app_id=440, context_id=2),
    ])


# ============ Fixtures ============

@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def backoff() -> RecordingBackoff:
    return RecordingBackoff()


@pytest.fixture
def session() -> TradeSession:
    return TradeSession(local_id=LOCAL_ID, remote_id=REMOTE_ID)


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()


@pytest.fixture
def recorder(notifier: Notifier) -> RecordingListener:
    listener = RecordingListener()
    listener.attach(notifier)
    return listener


@pytest.fixture
def controller(
    session: TradeSession,
    transport: FakeTransport,
    notifier: Notifier,
    recorder: RecordingListener,
    backoff: RecordingBackoff,
) -> SessionController:
    return SessionController(
        session=session,
        transport=transport,
        notifier=notifier,
        local_inventory=local_inventory(),
        remote_inventory=remote_inventory(),
        schema=SAMPLE_SCHEMA,
        backoff=backoff,
    )
