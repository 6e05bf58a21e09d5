"""
Errors raised by the sale operations and by the ledgers they drive.

Every error rejects the whole call. ``module`` names the component that
raised it and ``kind`` the error variant, which is what the HTTP layer
reports back to the caller.
"""


class DispatchError(Exception):
    module = "dispatch"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.kind)
        self.message = message or self.kind

    @property
    def kind(self) -> str:
        return type(self).__name__


# ── marketplace ──────────────────────────────────────────────────────────────

class MarketplaceError(DispatchError):
    module = "marketplace"


class ZeroAmount(MarketplaceError):
    pass


class NotEnoughOwned(MarketplaceError):
    pass


class NotEnoughInSale(MarketplaceError):
    pass


class Conversion(MarketplaceError):
    pass


# ── currency ledger ──────────────────────────────────────────────────────────

class BalancesError(DispatchError):
    module = "balances"


class InsufficientBalance(BalancesError):
    pass


class KeepAlive(BalancesError):
    pass


class ExistentialDeposit(BalancesError):
    pass


class Overflow(BalancesError):
    pass


# ── ownership registry ───────────────────────────────────────────────────────

class NftsError(DispatchError):
    module = "nfts"


class InsufficientHoldings(NftsError):
    pass


class HoldingsOverflow(NftsError):
    pass
