"""
In-memory currency ledger.

Free balances only; no locks, reserves or fees. An account whose balance
drops to zero is removed. Accounts must keep at least the existential
deposit, and a keep-alive transfer refuses to take the sender below it.
"""

import logging
from typing import Optional

from marketplace.arith import check_balance
from marketplace.config import BALANCE_MAX, EXISTENTIAL_DEPOSIT
from marketplace.errors import ExistentialDeposit, InsufficientBalance, KeepAlive, Overflow
from marketplace.models import AccountId, Balance

logger = logging.getLogger(__name__)


class Balances:
    def __init__(self, existential_deposit: Optional[Balance] = None) -> None:
        self.existential_deposit = (
            EXISTENTIAL_DEPOSIT if existential_deposit is None else check_balance(existential_deposit)
        )
        self.accounts: dict[AccountId, Balance] = {}

    def free_balance(self, account: AccountId) -> Balance:
        return self.accounts.get(account, 0)

    def deposit(self, account: AccountId, amount: Balance) -> None:
        """Mint ``amount`` into ``account``."""
        check_balance(amount)
        new_balance = self.free_balance(account) + amount
        if new_balance > BALANCE_MAX:
            raise Overflow(f"Balance of {account} would exceed {BALANCE_MAX}")
        if 0 < new_balance < self.existential_deposit:
            raise ExistentialDeposit(
                f"Deposit of {amount} leaves {account} below the existential deposit"
            )
        self._set(account, new_balance)

    def transfer(self, source: AccountId, dest: AccountId, amount: Balance, keep_alive: bool = True) -> None:
        check_balance(amount)
        if amount == 0 or source == dest:
            return

        from_balance = self.free_balance(source)
        if amount > from_balance:
            raise InsufficientBalance(f"{source} has {from_balance}, needs {amount}")

        remaining = from_balance - amount
        if remaining < self.existential_deposit:
            if keep_alive:
                raise KeepAlive(
                    f"Transfer would leave {source} with {remaining}, "
                    f"below the existential deposit of {self.existential_deposit}"
                )
            # dust is burned with the reaped account
            remaining = 0

        to_balance = self.free_balance(dest)
        if to_balance == 0 and amount < self.existential_deposit:
            raise ExistentialDeposit(f"Transfer of {amount} cannot create account {dest}")
        if to_balance + amount > BALANCE_MAX:
            raise Overflow(f"Balance of {dest} would exceed {BALANCE_MAX}")

        self._set(source, remaining)
        self._set(dest, to_balance + amount)
        logger.debug("Transferred %s from %s to %s", amount, source, dest)

    def _set(self, account: AccountId, balance: Balance) -> None:
        if balance == 0:
            if self.accounts.pop(account, None) is not None:
                logger.debug("Reaped account %s", account)
        else:
            self.accounts[account] = balance

    def clear(self) -> None:
        self.accounts.clear()

    def snapshot(self, *accounts: AccountId) -> dict[AccountId, Optional[Balance]]:
        return {a: self.accounts.get(a) for a in accounts}

    def restore(self, snapshot: dict[AccountId, Optional[Balance]]) -> None:
        for account, balance in snapshot.items():
            if balance is None:
                self.accounts.pop(account, None)
            else:
                self.accounts[account] = balance
