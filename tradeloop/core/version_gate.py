"""
VersionGate — decides whether a snapshot may be applied.

A version-changed snapshot is a full-state replace and is safe to adopt.
A snapshot that is ahead of us *without* the changed flag means we missed
a full-state replace; the missing delta cannot be reconstructed, so the
session is aborted rather than continued on a guess.
"""

from __future__ import annotations

import logging
from enum import Enum

from .errors import VersionMismatchError
from .models import Snapshot

logger = logging.getLogger(__name__)


class GateDecision(str, Enum):
    REPLACE = "replace"     # Full-state replace: adopt version, reconcile offers
    EVENTS = "events"       # Same generation: process the event delta
    STALE = "stale"         # Older than what we already applied: ignore


def admit(snapshot: Snapshot, current_version: int) -> GateDecision:
    """
    Classify a snapshot against the last applied version.

    Raises VersionMismatchError when the snapshot jumped ahead without
    declaring a change.
    """
    if snapshot.version < current_version:
        logger.info(
            "Ignoring stale snapshot: version %d < current %d",
            snapshot.version, current_version,
        )
        return GateDecision.STALE

    if snapshot.changed:
        return GateDecision.REPLACE

    if snapshot.version > current_version:
        raise VersionMismatchError(
            "The trade version does not match. Aborting. "
            f"(snapshot={snapshot.version}, current={current_version})"
        )

    return GateDecision.EVENTS
