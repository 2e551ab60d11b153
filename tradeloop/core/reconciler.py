"""SnapshotReconciler — copies confirmed offers out of a full-state snapshot."""

from __future__ import annotations

import logging
from typing import Optional

from .ledger import OfferLedger
from .models import PartyStatus, Snapshot

logger = logging.getLogger(__name__)


def _asset_ids(party: Optional[PartyStatus]) -> Optional[tuple[int, ...]]:
    # A missing party block keeps the previous mirror; a present block
    # without assets means an empty offer.
    if party is None:
        return None
    return party.asset_ids


def reconcile(snapshot: Snapshot, ledger: OfferLedger) -> None:
    """
    Replace both confirmed mirrors from ``snapshot``.

    Mirrors are replaced wholesale, never patched, so a missed delta
    cannot accumulate into drift.
    """
    local = _asset_ids(snapshot.me)
    remote = _asset_ids(snapshot.them)
    if local is None or remote is None:
        logger.warning(
            "Version %d snapshot without %s offer block, keeping previous mirror",
            snapshot.version,
            "local" if local is None else "remote",
        )
    ledger.replace_confirmed(local=local, remote=remote)
    logger.debug(
        "Reconciled version %d: local=%s remote=%s",
        snapshot.version, ledger.confirmed_local, ledger.confirmed_remote,
    )
