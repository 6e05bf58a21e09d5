import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Protocol

from marketplace.arith import check_balance, check_quantity, saturating_mul, to_balance
from marketplace.errors import NotEnoughInSale, NotEnoughOwned, ZeroAmount
from marketplace.models import (
    AccountId,
    AssetId,
    Balance,
    Listed,
    Quantity,
    SaleReceipt,
    SaleRecord,
    Sold,
)
from marketplace.store import Market

logger = logging.getLogger(__name__)


class Transactional(Protocol):
    def snapshot(self, *keys: Any) -> Any: ...

    def restore(self, snapshot: Any) -> None: ...


@contextmanager
def transactional(*scopes: tuple[Transactional, Iterable[Any]]) -> Iterator[None]:
    """
    Run the block as one unit over the given (resource, keys) scopes.

    Only the listed keys are saved on entry, and all of them are put back if
    the block raises. The block must not write any other key.
    """
    saved = [(resource, resource.snapshot(*keys)) for resource, keys in scopes]
    try:
        yield
    except Exception as exc:
        for resource, snapshot in saved:
            resource.restore(snapshot)
        logger.warning("Rolled back after %s: %s", type(exc).__name__, exc)
        raise


def list_for_sale(
    caller: AccountId,
    asset_id: AssetId,
    price: Balance,
    quantity: Quantity,
    market: Market,
) -> SaleRecord:
    """
    Offer ``quantity`` units of ``asset_id`` at ``price`` each.

    Replaces any listing the caller already has for this asset. Holdings are
    checked now and only now; they are re-checked at purchase time.
    """
    check_balance(price)
    check_quantity(quantity)

    if quantity == 0:
        raise ZeroAmount("Cannot list a quantity of zero")

    owned = market.nfts.amount_owned(asset_id, caller)
    if owned < quantity:
        raise NotEnoughOwned(f"{caller} owns {owned} of {asset_id}, cannot list {quantity}")

    record = SaleRecord(price=price, quantity=quantity)
    market.listings.put(asset_id, caller, record)

    market.events.notify(Listed(asset_id=asset_id, seller=caller, price=price, quantity=quantity))
    return record


def purchase(
    buyer: AccountId,
    asset_id: AssetId,
    seller: AccountId,
    quantity: Quantity,
    market: Market,
) -> SaleReceipt:
    """
    Buy ``quantity`` units from ``seller``'s listing of ``asset_id``.

    Payment, asset transfer and the listing update happen together or not at
    all. A seller with no listing looks like a listing of zero, so asking for
    anything from them fails with NotEnoughInSale.
    """
    check_quantity(quantity)

    sale = market.listings.get(asset_id, seller)
    owned = market.nfts.amount_owned(asset_id, seller)

    if quantity > sale.quantity:
        raise NotEnoughInSale(f"{seller} offers {sale.quantity} of {asset_id}, requested {quantity}")
    # holdings may have dropped since the listing was made
    if sale.quantity > owned:
        raise NotEnoughOwned(f"{seller} lists {sale.quantity} of {asset_id} but owns {owned}")

    total = saturating_mul(sale.price, to_balance(quantity))

    with transactional(
        (market.listings, [(asset_id, seller)]),
        (market.balances, [buyer, seller]),
        (market.nfts, [(asset_id, seller), (asset_id, buyer)]),
    ):
        market.balances.transfer(buyer, seller, total, keep_alive=True)
        market.nfts.transfer(asset_id, seller, buyer, quantity)

        if quantity == sale.quantity:
            market.listings.remove(asset_id, seller)
        else:
            market.listings.decrement_quantity(asset_id, seller, quantity)

    market.events.notify(Sold(asset_id=asset_id, seller=seller, buyer=buyer, quantity=quantity))

    remaining = market.listings.get(asset_id, seller)
    return SaleReceipt(
        asset_id=asset_id,
        seller=seller,
        buyer=buyer,
        quantity=quantity,
        unit_price=sale.price,
        total_paid=total,
        remaining=remaining if remaining.quantity else None,
    )
