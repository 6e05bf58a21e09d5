from dataclasses import dataclass, field
from typing import Optional

from marketplace.balances import Balances
from marketplace.events import EventLog
from marketplace.models import AccountId, AssetId, Listing, Quantity, SaleRecord
from marketplace.nfts import NFTs

_EMPTY = SaleRecord()


class ListingLedger:
    """(asset, seller) -> SaleRecord. A zero-quantity record is never stored."""

    def __init__(self) -> None:
        self.sales: dict[tuple[AssetId, AccountId], SaleRecord] = {}

    # ── writes ────────────────────────────────────────────────────────────────

    def put(self, asset_id: AssetId, seller: AccountId, record: SaleRecord) -> None:
        if record.quantity == 0:
            self.remove(asset_id, seller)
        else:
            self.sales[(asset_id, seller)] = record

    def remove(self, asset_id: AssetId, seller: AccountId) -> None:
        self.sales.pop((asset_id, seller), None)

    def decrement_quantity(self, asset_id: AssetId, seller: AccountId, delta: Quantity) -> None:
        record = self.get(asset_id, seller)
        if delta > record.quantity:
            raise ValueError(
                f"Cannot take {delta} from listing ({asset_id}, {seller}) holding {record.quantity}"
            )
        self.put(asset_id, seller, record.model_copy(update={"quantity": record.quantity - delta}))

    def clear(self) -> None:
        self.sales.clear()

    # ── reads ─────────────────────────────────────────────────────────────────

    def get(self, asset_id: AssetId, seller: AccountId) -> SaleRecord:
        return self.sales.get((asset_id, seller), _EMPTY)

    def list_listings(self, asset_id: Optional[AssetId] = None) -> list[Listing]:
        return [
            Listing(asset_id=a, seller=s, price=r.price, quantity=r.quantity)
            for (a, s), r in sorted(self.sales.items())
            if asset_id is None or a == asset_id
        ]

    # ── transactional ─────────────────────────────────────────────────────────

    def snapshot(self, *keys: tuple[AssetId, AccountId]) -> dict[tuple[AssetId, AccountId], Optional[SaleRecord]]:
        # records are frozen, no need to copy them
        return {k: self.sales.get(k) for k in keys}

    def restore(self, snapshot: dict[tuple[AssetId, AccountId], Optional[SaleRecord]]) -> None:
        for key, record in snapshot.items():
            if record is None:
                self.sales.pop(key, None)
            else:
                self.sales[key] = record


@dataclass
class Market:
    """Everything a sale operation touches, wired together."""

    listings: ListingLedger = field(default_factory=ListingLedger)
    balances: Balances = field(default_factory=Balances)
    nfts: NFTs = field(default_factory=NFTs)
    events: EventLog = field(default_factory=EventLog)

    def clear(self) -> None:
        self.listings.clear()
        self.balances.clear()
        self.nfts.clear()
        self.events.clear()


# module-level singleton used by the app
market = Market()
