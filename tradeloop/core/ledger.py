"""
OfferLedger — local bookkeeping of the local party's offer.

Two views are kept side by side:

- the *intended* mapping (slot -> item), built from our own successful
  add/remove commands;
- the *confirmed* mirrors, copied wholesale from the last full-state
  snapshot for both parties.

The only feedback on whether an add/remove really took effect is the next
version-changed snapshot, so ``validate()`` must pass before anything that
commits to the current offer (ready-up, accept).
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .errors import LedgerValidationError
from .models import ItemRef

logger = logging.getLogger(__name__)


class OfferLedger:
    """Intended slot mapping plus server-confirmed offer mirrors."""

    def __init__(self) -> None:
        self._slots: dict[int, ItemRef] = {}
        self._confirmed_local: tuple[int, ...] = ()
        self._confirmed_remote: tuple[int, ...] = ()

    # ============ Intended mapping ============

    @property
    def slots(self) -> dict[int, ItemRef]:
        """Copy of the intended slot -> item mapping."""
        return dict(self._slots)

    @property
    def offered_ids(self) -> list[int]:
        return [item.asset_id for _, item in sorted(self._slots.items())]

    def next_slot(self) -> int:
        """Lowest slot number not currently occupied."""
        slot = 0
        while slot in self._slots:
            slot += 1
        return slot

    def slot_of(self, asset_id: int) -> Optional[int]:
        for slot, item in self._slots.items():
            if item.asset_id == asset_id:
                return slot
        return None

    def item_at(self, slot: int) -> Optional[ItemRef]:
        return self._slots.get(slot)

    def contains(self, asset_id: int) -> bool:
        return self.slot_of(asset_id) is not None

    def record(self, slot: int, item: ItemRef) -> None:
        self._slots[slot] = item

    def release(self, slot: int) -> Optional[ItemRef]:
        return self._slots.pop(slot, None)

    # ============ Confirmed mirrors ============

    @property
    def confirmed_local(self) -> tuple[int, ...]:
        return self._confirmed_local

    @property
    def confirmed_remote(self) -> tuple[int, ...]:
        return self._confirmed_remote

    def replace_confirmed(
        self,
        local: Optional[Iterable[int]] = None,
        remote: Optional[Iterable[int]] = None,
    ) -> None:
        """
        Replace the confirmed mirrors. A side passed as None keeps its
        previous value; a side passed as a sequence replaces it wholesale.
        """
        new_local = self._confirmed_local if local is None else tuple(local)
        new_remote = self._confirmed_remote if remote is None else tuple(remote)
        self._confirmed_local, self._confirmed_remote = new_local, new_remote

    # ============ Validation ============

    def validate(self) -> None:
        """
        Check the intended mapping against the confirmed local offer.

        Raises LedgerValidationError on a count mismatch or when an intended
        item is missing from the confirmed copy.
        """
        intended = [item.asset_id for item in self._slots.values()]
        if len(intended) != len(self._confirmed_local):
            raise LedgerValidationError(
                "Error validating local copy of items in the trade: count mismatch "
                f"(local={len(intended)}, confirmed={len(self._confirmed_local)})"
            )
        confirmed = set(self._confirmed_local)
        missing = [asset_id for asset_id in intended if asset_id not in confirmed]
        if missing:
            raise LedgerValidationError(
                "Error validating local copy of items in the trade: "
                f"items not in the confirmed copy: {missing}"
            )
