"""
SessionBuilder — convenience factory for assembling a SessionController
with all its collaborators.

Only the party ids and a transport are truly required; retry settings and
the default item namespace come from TradeConfig.

Usage::

    from tradeloop import SessionBuilder

    controller = (
        SessionBuilder("76561198000000001", "76561198000000002")
        .with_transport(transport)
        .with_remote_inventory(partner_inventory)
        .with_logging()
        .build()
    )
    while not controller.session.is_terminal:
        await controller.poll()
        await asyncio.sleep(0.8)
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from tradeloop.core.controller import SessionController
from tradeloop.core.errors import ConfigError
from tradeloop.core.notifications import Notifier
from tradeloop.core.protocols import Backoff, InventoryLookup, ItemSchema, Transport
from tradeloop.core.session import TradeSession
from tradeloop.infra.config import TradeConfig
from tradeloop.infra.listeners import LoggingListener

logger = logging.getLogger(__name__)


class SessionBuilder:
    """Fluent builder for SessionController."""

    def __init__(self, local_id: str, remote_id: str) -> None:
        self._local_id = local_id
        self._remote_id = remote_id
        self._config: TradeConfig | None = None
        self._transport: Transport | None = None
        self._notifier: Notifier | None = None
        self._local_inventory: InventoryLookup | None = None
        self._remote_inventory: InventoryLookup | None = None
        self._schema: ItemSchema | None = None
        self._backoff: Backoff | None = None
        self._log_notifications = False
        self._metadata: dict[str, Any] = {}
        self._version = 0
        self._log_pos = 0

    def with_config(self, config: TradeConfig) -> SessionBuilder:
        self._config = config
        return self

    def with_transport(self, transport: Transport) -> SessionBuilder:
        self._transport = transport
        return self

    def with_notifier(self, notifier: Notifier) -> SessionBuilder:
        self._notifier = notifier
        return self

    def with_local_inventory(self, inventory: InventoryLookup) -> SessionBuilder:
        self._local_inventory = inventory
        return self

    def with_remote_inventory(self, inventory: InventoryLookup) -> SessionBuilder:
        self._remote_inventory = inventory
        return self

    def with_schema(self, schema: ItemSchema) -> SessionBuilder:
        self._schema = schema
        return self

    def with_backoff(self, backoff: Backoff) -> SessionBuilder:
        self._backoff = backoff
        return self

    def with_cursor(self, version: int, log_pos: int = 0) -> SessionBuilder:
        """Resume from the version and log position the trade was opened at."""
        self._version = version
        self._log_pos = log_pos
        return self

    def with_logging(self) -> SessionBuilder:
        self._log_notifications = True
        return self

    def with_metadata(self, **metadata: Any) -> SessionBuilder:
        self._metadata.update(metadata)
        return self

    def build(self) -> SessionController:
        if self._transport is None:
            raise ConfigError("A transport is required to build a trade session")

        config = self._config or TradeConfig()
        if config.max_retries < 1:
            raise ConfigError("max_retries must be at least 1")
        if self._version < 0 or self._log_pos < 0:
            raise ConfigError("The trade cursor must not be negative")

        notifier = self._notifier or Notifier()
        if self._log_notifications:
            LoggingListener(label=self._remote_id).attach(notifier)

        session = TradeSession(
            local_id=self._local_id,
            remote_id=self._remote_id,
            metadata=dict(self._metadata) or None,
            version=self._version,
            log_pos=self._log_pos,
        )
        controller = SessionController(
            session=session,
            transport=self._transport,
            notifier=notifier,
            local_inventory=self._local_inventory,
            remote_inventory=self._remote_inventory,
            schema=self._schema,
            max_attempts=config.max_retries,
            retry_delay_s=config.retry_delay_s,
            backoff=self._backoff,
            default_app_id=config.default_app_id,
            default_context_id=config.default_context_id,
        )
        logger.info("Built trade session %s <-> %s", self._local_id, self._remote_id)
        return controller
