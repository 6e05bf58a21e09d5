"""
Unit tests for the listing ledger and the in-memory currency and ownership ledgers.
"""

import pytest

from marketplace.balances import Balances
from marketplace.config import BALANCE_MAX, QUANTITY_MAX
from marketplace.errors import (
    ExistentialDeposit,
    HoldingsOverflow,
    InsufficientBalance,
    InsufficientHoldings,
    KeepAlive,
    Overflow,
)
from marketplace.events import EventLog
from marketplace.models import Listed, SaleRecord
from marketplace.nfts import NFTs
from marketplace.store import ListingLedger


class TestListingLedger:
    def test_missing_key_reads_as_empty_record(self):
        ledger = ListingLedger()
        assert ledger.get("A", "s") == SaleRecord(price=0, quantity=0)

    def test_put_overwrites(self):
        ledger = ListingLedger()
        ledger.put("A", "s", SaleRecord(price=1, quantity=2))
        ledger.put("A", "s", SaleRecord(price=3, quantity=4))
        assert ledger.get("A", "s") == SaleRecord(price=3, quantity=4)

    def test_keys_are_per_asset_and_seller(self):
        ledger = ListingLedger()
        ledger.put("A", "s", SaleRecord(price=1, quantity=1))
        ledger.put("A", "t", SaleRecord(price=2, quantity=2))
        ledger.put("B", "s", SaleRecord(price=3, quantity=3))
        assert len(ledger.sales) == 3
        assert [listing.seller for listing in ledger.list_listings("A")] == ["s", "t"]

    def test_zero_quantity_is_not_stored(self):
        ledger = ListingLedger()
        ledger.put("A", "s", SaleRecord(price=1, quantity=1))
        ledger.put("A", "s", SaleRecord(price=1, quantity=0))
        assert ledger.sales == {}

    def test_remove_is_idempotent(self):
        ledger = ListingLedger()
        ledger.put("A", "s", SaleRecord(price=1, quantity=1))
        ledger.remove("A", "s")
        ledger.remove("A", "s")
        assert ledger.sales == {}

    def test_decrement(self):
        ledger = ListingLedger()
        ledger.put("A", "s", SaleRecord(price=9, quantity=5))
        ledger.decrement_quantity("A", "s", 2)
        assert ledger.get("A", "s") == SaleRecord(price=9, quantity=3)
        ledger.decrement_quantity("A", "s", 3)
        assert ledger.sales == {}

    def test_decrement_past_zero_raises(self):
        ledger = ListingLedger()
        ledger.put("A", "s", SaleRecord(price=9, quantity=1))
        with pytest.raises(ValueError):
            ledger.decrement_quantity("A", "s", 2)
        assert ledger.get("A", "s").quantity == 1


class TestBalances:
    def test_transfer(self):
        b = Balances(existential_deposit=1)
        b.deposit("a", 100)
        b.transfer("a", "b", 40)
        assert b.free_balance("a") == 60
        assert b.free_balance("b") == 40

    def test_insufficient_balance(self):
        b = Balances(existential_deposit=1)
        b.deposit("a", 10)
        with pytest.raises(InsufficientBalance):
            b.transfer("a", "b", 11)

    def test_keep_alive_keeps_existential_deposit(self):
        b = Balances(existential_deposit=5)
        b.deposit("a", 100)
        with pytest.raises(KeepAlive):
            b.transfer("a", "b", 96, keep_alive=True)
        b.transfer("a", "b", 95, keep_alive=True)
        assert b.free_balance("a") == 5

    def test_allow_death_reaps_sender(self):
        b = Balances(existential_deposit=5)
        b.deposit("a", 100)
        b.transfer("a", "b", 97, keep_alive=False)
        assert "a" not in b.accounts
        assert b.free_balance("b") == 97

    def test_cannot_create_account_below_existential_deposit(self):
        b = Balances(existential_deposit=5)
        b.deposit("a", 100)
        with pytest.raises(ExistentialDeposit):
            b.transfer("a", "new", 4)

    def test_overflow(self):
        b = Balances(existential_deposit=0)
        b.deposit("a", BALANCE_MAX)
        b.deposit("b", 1)
        with pytest.raises(Overflow):
            b.transfer("b", "a", 1, keep_alive=False)

    def test_snapshot_restore(self):
        b = Balances(existential_deposit=1)
        b.deposit("a", 100)
        snap = b.snapshot("a", "b")
        b.transfer("a", "b", 50)
        b.restore(snap)
        assert b.accounts == {"a": 100}


class TestNFTs:
    def test_mint_and_transfer(self):
        n = NFTs()
        n.mint("A", "s", 5)
        n.transfer("A", "s", "b", 5)
        assert n.amount_owned("A", "s") == 0
        assert n.holdings_of("b") == {"A": 5}
        assert ("A", "s") not in n.holdings

    def test_transfer_more_than_owned_fails(self):
        n = NFTs()
        n.mint("A", "s", 1)
        with pytest.raises(InsufficientHoldings):
            n.transfer("A", "s", "b", 2)

    def test_burn(self):
        n = NFTs()
        n.mint("A", "s", 3)
        n.burn("A", "s", 2)
        assert n.amount_owned("A", "s") == 1
        with pytest.raises(InsufficientHoldings):
            n.burn("A", "s", 2)

    def test_mint_overflow(self):
        n = NFTs()
        n.mint("A", "s", QUANTITY_MAX)
        with pytest.raises(HoldingsOverflow):
            n.mint("A", "s", 1)


class TestEventLog:
    def test_keeps_order(self):
        log = EventLog()
        for q in (1, 2, 3):
            log.notify(Listed(asset_id="A", seller="s", price=1, quantity=q))
        assert [e.quantity for e in log.events] == [1, 2, 3]

    def test_drops_oldest_past_capacity(self):
        log = EventLog(maxlen=2)
        for q in (1, 2, 3):
            log.notify(Listed(asset_id="A", seller="s", price=1, quantity=q))
        assert [e.quantity for e in log.events] == [2, 3]
