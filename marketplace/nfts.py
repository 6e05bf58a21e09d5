"""
In-memory ownership registry for quantity-bearing assets.

Holdings are keyed by (asset, account); zero holdings are not stored.
"""

import logging
from typing import Optional

from marketplace.arith import check_quantity
from marketplace.config import QUANTITY_MAX
from marketplace.errors import HoldingsOverflow, InsufficientHoldings
from marketplace.models import AccountId, AssetId, Quantity

logger = logging.getLogger(__name__)


class NFTs:
    def __init__(self) -> None:
        self.holdings: dict[tuple[AssetId, AccountId], Quantity] = {}

    # ── writes ────────────────────────────────────────────────────────────────

    def mint(self, asset_id: AssetId, owner: AccountId, quantity: Quantity) -> None:
        check_quantity(quantity)
        new_amount = self.amount_owned(asset_id, owner) + quantity
        if new_amount > QUANTITY_MAX:
            raise HoldingsOverflow(f"Holdings of {asset_id} by {owner} would exceed {QUANTITY_MAX}")
        self._set(asset_id, owner, new_amount)

    def burn(self, asset_id: AssetId, owner: AccountId, quantity: Quantity) -> None:
        check_quantity(quantity)
        owned = self.amount_owned(asset_id, owner)
        if quantity > owned:
            raise InsufficientHoldings(f"{owner} owns {owned} of {asset_id}, cannot burn {quantity}")
        self._set(asset_id, owner, owned - quantity)

    def transfer(self, asset_id: AssetId, source: AccountId, dest: AccountId, quantity: Quantity) -> None:
        check_quantity(quantity)
        owned = self.amount_owned(asset_id, source)
        if quantity > owned:
            raise InsufficientHoldings(f"{source} owns {owned} of {asset_id}, cannot transfer {quantity}")
        if quantity == 0 or source == dest:
            return
        received = self.amount_owned(asset_id, dest) + quantity
        if received > QUANTITY_MAX:
            raise HoldingsOverflow(f"Holdings of {asset_id} by {dest} would exceed {QUANTITY_MAX}")
        self._set(asset_id, source, owned - quantity)
        self._set(asset_id, dest, received)
        logger.debug("Moved %s of %s from %s to %s", quantity, asset_id, source, dest)

    def _set(self, asset_id: AssetId, account: AccountId, quantity: Quantity) -> None:
        if quantity == 0:
            self.holdings.pop((asset_id, account), None)
        else:
            self.holdings[(asset_id, account)] = quantity

    def clear(self) -> None:
        self.holdings.clear()

    # ── reads ─────────────────────────────────────────────────────────────────

    def amount_owned(self, asset_id: AssetId, account: AccountId) -> Quantity:
        return self.holdings.get((asset_id, account), 0)

    def holdings_of(self, account: AccountId) -> dict[AssetId, Quantity]:
        return {a: q for (a, owner), q in sorted(self.holdings.items()) if owner == account}

    # ── transactional ─────────────────────────────────────────────────────────

    def snapshot(self, *keys: tuple[AssetId, AccountId]) -> dict[tuple[AssetId, AccountId], Optional[Quantity]]:
        return {k: self.holdings.get(k) for k in keys}

    def restore(self, snapshot: dict[tuple[AssetId, AccountId], Optional[Quantity]]) -> None:
        for key, quantity in snapshot.items():
            if quantity is None:
                self.holdings.pop(key, None)
            else:
                self.holdings[key] = quantity
