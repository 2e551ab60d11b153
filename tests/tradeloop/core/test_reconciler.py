"""Tests for snapshot reconciliation into the offer ledger."""

from tradeloop.core.ledger import OfferLedger
from tradeloop.core.models import PartyStatus
from tradeloop.core.reconciler import reconcile

from tests.tradeloop.conftest import party, snapshot


def test_copies_both_parties():
    ledger = OfferLedger()
    reconcile(snapshot(changed=True, version=1, me=party(1, 2), them=party(9)), ledger)
    assert ledger.confirmed_local == (1, 2)
    assert ledger.confirmed_remote == (9,)


def test_replaces_rather_than_merges():
    ledger = OfferLedger()
    reconcile(snapshot(changed=True, version=1, me=party(1, 2), them=party(9, 8)), ledger)
    reconcile(snapshot(changed=True, version=2, me=party(2), them=party(7)), ledger)
    assert ledger.confirmed_local == (2,)
    assert ledger.confirmed_remote == (7,)


def test_party_without_assets_means_empty_offer():
    ledger = OfferLedger()
    ledger.replace_confirmed(local=[1], remote=[9])
    reconcile(
        snapshot(changed=True, version=2, me=PartyStatus(assets=None), them=party()),
        ledger,
    )
    assert ledger.confirmed_local == ()
    assert ledger.confirmed_remote == ()


def test_missing_party_block_keeps_mirror():
    ledger = OfferLedger()
    ledger.replace_confirmed(local=[1], remote=[9])
    reconcile(snapshot(changed=True, version=2, me=party(1, 3), them=None), ledger)
    assert ledger.confirmed_local == (1, 3)
    assert ledger.confirmed_remote == (9,)
