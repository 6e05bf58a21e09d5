"""
Deterministic demo data.

Produces:
  - 4 accounts with free balances
  - 3 assets minted to their creators
  - 3 active listings (one of them a partial listing of the holdings)
"""

from marketplace.engine import list_for_sale
from marketplace.store import Market

ACCOUNTS = {
    "alice":   1_000_000,
    "bob":     1_000_000,
    "charlie":   250_000,
    "dave":       10_000,
}

# (asset, owner, quantity)
MINTS = [
    ("NFT-001", "alice",   100),
    ("NFT-002", "bob",      20),
    ("NFT-003", "charlie",   1),
]

# (seller, asset, unit price, quantity)
LISTINGS = [
    ("alice",   "NFT-001",    250, 40),
    ("bob",     "NFT-002",  1_000, 20),
    ("charlie", "NFT-003", 90_000,  1),
]


def seed(market: Market) -> None:
    market.clear()

    for account, amount in ACCOUNTS.items():
        market.balances.deposit(account, amount)

    for asset_id, owner, quantity in MINTS:
        market.nfts.mint(asset_id, owner, quantity)

    for seller, asset_id, price, quantity in LISTINGS:
        list_for_sale(seller, asset_id, price, quantity, market)
