"""
TradeSession — the single owned state object for one negotiation.

Fields are exposed read-only; every mutation goes through a method so the
controller stays the only writer. State transitions are validated the same
way the negotiation engine validates its own state machine.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .errors import TradeError
from .models import TERMINAL_STATES, SessionState

logger = logging.getLogger(__name__)

# Valid state transitions. Key = current state, value = set of allowed next states.
VALID_TRANSITIONS: dict[SessionState, set[SessionState]] = {
    SessionState.NOT_STARTED: {
        SessionState.RUNNING,
        SessionState.ABORTED,
        SessionState.CLOSED,
    },
    SessionState.RUNNING: {
        SessionState.COMPLETED,
        SessionState.CANCELLED,
        SessionState.ABORTED,
        SessionState.CLOSED,
    },
    SessionState.COMPLETED: set(),
    SessionState.CANCELLED: set(),
    SessionState.ABORTED: set(),
    SessionState.CLOSED: set(),
}


class TradeSession:
    """
    State of one trade with one partner.

    ``version`` mirrors the server's state generation and never decreases.
    ``log_pos`` is the cursor into the remote event log.
    Both start at the cursor the trade was opened with (0 for a fresh trade).
    """

    def __init__(
        self,
        local_id: str,
        remote_id: str,
        metadata: Optional[dict[str, Any]] = None,
        *,
        version: int = 0,
        log_pos: int = 0,
    ):
        if version < 0 or log_pos < 0:
            raise ValueError("version and log_pos must not be negative")
        self._local_id = local_id
        self._remote_id = remote_id
        self._state = SessionState.NOT_STARTED
        self._version = version
        self._log_pos = log_pos
        self._local_ready = False
        self._remote_ready = False
        self._abort_reason: Optional[str] = None
        self.metadata: dict[str, Any] = metadata or {}

    def __repr__(self) -> str:
        return (
            f"TradeSession(local={self._local_id!r}, remote={self._remote_id!r}, "
            f"state={self._state.value}, version={self._version})"
        )

    # ============ Read-only view ============

    @property
    def local_id(self) -> str:
        return self._local_id

    @property
    def remote_id(self) -> str:
        return self._remote_id

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def version(self) -> int:
        return self._version

    @property
    def log_pos(self) -> int:
        return self._log_pos

    @property
    def started(self) -> bool:
        return self._state != SessionState.NOT_STARTED

    @property
    def local_ready(self) -> bool:
        return self._local_ready

    @property
    def remote_ready(self) -> bool:
        return self._remote_ready

    @property
    def completed_ok(self) -> bool:
        return self._state == SessionState.COMPLETED

    @property
    def remote_cancelled(self) -> bool:
        return self._state == SessionState.CANCELLED

    @property
    def abort_reason(self) -> Optional[str]:
        return self._abort_reason

    @property
    def is_terminal(self) -> bool:
        return self._state in TERMINAL_STATES

    # ============ Mutation ============

    def _transition(self, new_state: SessionState) -> None:
        """
        Move to a new state.

        Raises TradeError if the transition is not valid.
        """
        current = self._state
        if new_state not in VALID_TRANSITIONS.get(current, set()):
            raise TradeError(
                f"Invalid session transition: {current.value} -> {new_state.value}"
            )
        logger.info(
            "Trade %s<->%s: %s -> %s",
            self._local_id, self._remote_id, current.value, new_state.value,
        )
        self._state = new_state

    def start(self) -> None:
        self._transition(SessionState.RUNNING)

    def complete(self) -> None:
        self._transition(SessionState.COMPLETED)

    def cancel(self) -> None:
        self._transition(SessionState.CANCELLED)

    def close(self) -> None:
        self._transition(SessionState.CLOSED)

    def abort(self, reason: str) -> None:
        self._abort_reason = reason
        self._transition(SessionState.ABORTED)

    def adopt_version(self, version: int) -> None:
        if version < self._version:
            raise TradeError(
                f"Version may not decrease: {self._version} -> {version}"
            )
        self._version = version

    def advance_log_pos(self, log_pos: int) -> None:
        self._log_pos = log_pos

    def set_local_ready(self, ready: bool) -> None:
        self._local_ready = ready

    def set_remote_ready(self, ready: bool) -> None:
        self._remote_ready = ready
