"""
HttpTradeTransport — Transport implementation over the trade web API.

Thin async wrapper around the per-partner trade endpoints. Every failure
(network error, HTTP error status, non-JSON body, invalid payload,
``success: false``) is logged and reported as None / False so the
engine's retry policy decides what happens next.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from tradeloop.core.errors import TransportError
from tradeloop.core.models import CommandKind, Snapshot

from .config import TradeConfig
from .inventory import ForeignInventoryView
from .schemas import CommandResponse, ForeignInventoryPayload, StatusPayload

logger = logging.getLogger(__name__)

# Command kind -> endpoint path under the partner's trade URL.
COMMAND_PATHS: dict[CommandKind, str] = {
    CommandKind.ADD_ITEM: "additem/",
    CommandKind.REMOVE_ITEM: "removeitem/",
    CommandKind.SET_READY: "toggleready/",
    CommandKind.ACCEPT: "confirm/",
    CommandKind.CANCEL: "cancel/",
    CommandKind.SEND_MESSAGE: "chat/",
}


def _form_fields(kind: CommandKind, params: dict[str, Any]) -> dict[str, Any]:
    """Translate engine command params into the endpoint's form fields."""
    if kind in (CommandKind.ADD_ITEM, CommandKind.REMOVE_ITEM):
        return {
            "appid": params["app_id"],
            "contextid": params["context_id"],
            "itemid": params["asset_id"],
            "slot": params["slot"],
        }
    if kind == CommandKind.SET_READY:
        return {
            "ready": "true" if params["ready"] else "false",
            "version": params["version"],
        }
    if kind == CommandKind.ACCEPT:
        return {"version": params["version"]}
    if kind == CommandKind.SEND_MESSAGE:
        return {
            "message": params["message"],
            "logpos": params.get("log_pos", 0),
            "version": params.get("version", 0),
        }
    return {}


class HttpTradeTransport:
    """
    Transport for one trade with one partner.

    ``session_id`` and ``token`` come from an already authenticated web
    session; this class does not log in.
    """

    def __init__(
        self,
        partner_id: str,
        session_id: str,
        token: str = "",
        config: Optional[TradeConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not session_id:
            raise TransportError("A web session id is required")
        self._config = config or TradeConfig()
        self._partner_id = partner_id
        self._session_id = session_id
        self.base = f"{self._config.base_url.rstrip('/')}/{partner_id}"
        self._owns_client = client is None
        self._http = client or httpx.AsyncClient(
            timeout=self._config.request_timeout_seconds,
            cookies={"sessionid": session_id, "steamLogin": token},
        )

    def _url(self, path: str) -> str:
        return f"{self.base}/{path}"

    async def _post_json(self, path: str, data: dict[str, Any]) -> Optional[dict[str, Any]]:
        form = {"sessionid": self._session_id, **data}
        try:
            resp = await self._http.post(self._url(path), data=form)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError as e:
            logger.warning("POST %s failed: %s", path, e)
        except ValueError as e:
            logger.warning("POST %s returned a non-JSON body: %s", path, e)
        return None

    async def fetch_status(self, version: int, log_pos: int) -> Optional[Snapshot]:
        data = await self._post_json("tradestatus/", {"logpos": log_pos, "version": version})
        if data is None:
            return None
        try:
            payload = StatusPayload.model_validate(data)
        except ValidationError as e:
            logger.warning("Invalid trade status payload: %s", e)
            return None
        if not payload.success:
            logger.warning("Trade status request was not successful")
            return None
        return payload.to_snapshot()

    async def send_command(self, kind: CommandKind, params: dict[str, Any]) -> bool:
        data = await self._post_json(COMMAND_PATHS[kind], _form_fields(kind, params))
        if data is None:
            return False
        try:
            response = CommandResponse.model_validate(data)
        except ValidationError as e:
            logger.warning("Invalid %s response: %s", kind.value, e)
            return False
        if not response.success:
            logger.info("%s rejected: %s", kind.value, response.error or "no reason given")
        return response.success

    async def fetch_foreign_inventory(
        self, party_id: str, context_id: int, app_id: int,
    ) -> Optional[ForeignInventoryView]:
        params = {
            "sessionid": self._session_id,
            "steamid": party_id,
            "appid": app_id,
            "contextid": context_id,
        }
        try:
            resp = await self._http.get(self._url("foreigninventory/"), params=params)
            resp.raise_for_status()
            payload = ForeignInventoryPayload.model_validate(resp.json())
        except httpx.HTTPError as e:
            logger.warning("Foreign inventory request failed: %s", e)
            return None
        except ValidationError as e:
            logger.warning("Invalid foreign inventory payload: %s", e)
            return None
        except ValueError as e:
            logger.warning("Foreign inventory returned a non-JSON body: %s", e)
            return None
        if not payload.success:
            return None
        return ForeignInventoryView(payload.defindexes())

    async def close(self) -> None:
        """Close the HTTP client, unless it was supplied by the caller."""
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> HttpTradeTransport:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
