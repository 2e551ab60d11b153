"""
Pydantic models for the trade web API status payload.

The server is loose with types (numbers as strings, lists as index-keyed
objects, empty lists for absent blocks), so everything is coerced here
and converted to the engine's frozen Snapshot.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from tradeloop.core.events import TradeEvent
from tradeloop.core.models import ItemRef, PartyStatus, Snapshot


def _as_list(value: Any) -> list[Any]:
    """The API sends arrays either as lists or as {"0": ..., "1": ...} objects."""
    if value is None:
        return []
    if isinstance(value, dict):
        return [value[k] for k in sorted(value, key=lambda k: int(k))]
    return list(value)


class AssetPayload(BaseModel):
    assetid: int
    appid: int = 0
    contextid: int = 0
    amount: int = 1

    def to_ref(self) -> ItemRef:
        return ItemRef(asset_id=self.assetid, app_id=self.appid, context_id=self.contextid)


class PartyPayload(BaseModel):
    ready: int = 0
    confirmed: int = 0
    sec_since_touch: int = 0
    assets: Optional[list[AssetPayload]] = None

    @field_validator("assets", mode="before")
    @classmethod
    def _normalize_assets(cls, value: Any) -> Any:
        if value is None:
            return None
        return _as_list(value)

    def to_status(self) -> PartyStatus:
        assets = None
        if self.assets is not None:
            assets = tuple(a.to_ref() for a in self.assets)
        return PartyStatus(ready=self.ready == 1, assets=assets)


class EventPayload(BaseModel):
    steamid: str
    action: int
    timestamp: int = 0
    assetid: Optional[int] = None
    appid: int = 0
    contextid: int = 0
    text: str = ""

    def to_event(self) -> TradeEvent:
        item = None
        if self.assetid is not None:
            item = ItemRef(asset_id=self.assetid, app_id=self.appid, context_id=self.contextid)
        return TradeEvent(
            actor=self.steamid,
            action=self.action,
            timestamp=self.timestamp,
            item=item,
            text=self.text,
        )


class StatusPayload(BaseModel):
    success: bool = True
    trade_status: int = 0
    newversion: bool = False
    version: int = 0
    logpos: int = 0
    me: Optional[PartyPayload] = None
    them: Optional[PartyPayload] = None
    events: list[EventPayload] = Field(default_factory=list)

    @field_validator("events", mode="before")
    @classmethod
    def _normalize_events(cls, value: Any) -> Any:
        return _as_list(value)

    @field_validator("me", "them", mode="before")
    @classmethod
    def _empty_party_is_absent(cls, value: Any) -> Any:
        # An absent party block comes through as [] on some responses.
        if value in ([], {}, ""):
            return None
        return value

    def to_snapshot(self) -> Snapshot:
        return Snapshot(
            status=self.trade_status,
            changed=self.newversion,
            version=self.version,
            log_pos=self.logpos,
            me=self.me.to_status() if self.me else None,
            them=self.them.to_status() if self.them else None,
            events=tuple(e.to_event() for e in self.events),
        )


class CommandResponse(BaseModel):
    success: bool = False
    error: str = ""


class ForeignInventoryPayload(BaseModel):
    success: bool = False
    rgInventory: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @field_validator("rgInventory", mode="before")
    @classmethod
    def _empty_inventory(cls, value: Any) -> Any:
        if value in (None, []):
            return {}
        return value

    def defindexes(self) -> dict[int, int]:
        """asset id -> defindex, for the entries that carry one."""
        result: dict[int, int] = {}
        for key, entry in self.rgInventory.items():
            defindex = entry.get("def_index", entry.get("defindex"))
            if defindex is None:
                continue
            result[int(entry.get("id", key))] = int(defindex)
        return result
