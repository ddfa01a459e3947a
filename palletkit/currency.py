"""Account balances with free and reserved parts, locks and an existential deposit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Iterable

from .runtime import DispatchError, Pallet, System

DEFAULT_EXISTENTIAL_DEPOSIT = 1


class InsufficientBalance(DispatchError):
    """The free balance is too low for the operation."""


class LiquidityRestrictions(DispatchError):
    """The operation would move funds held by a lock."""


class ExistentialDeposit(DispatchError):
    """The amount is too small to create a new account."""


@dataclass(frozen=True)
class Reserved:
    """Funds moved from free to reserved."""

    who: Hashable
    amount: int


@dataclass(frozen=True)
class Unreserved:
    """Funds moved from reserved back to free."""

    who: Hashable
    amount: int


@dataclass(frozen=True)
class Transfer:
    """Funds moved between two accounts."""

    source: Hashable
    dest: Hashable
    amount: int


@dataclass
class _Account:
    free: int = 0
    reserved: int = 0


def _check_amount(amount: int) -> int:
    if amount < 0:
        raise ValueError(f"amount {amount} must not be negative")
    return amount


class Balances(Pallet):
    """A currency whose accounts disappear once their total drops below the existential deposit."""

    def __init__(
        self,
        system: System,
        balances: Iterable[tuple[Hashable, int]] = (),
        existential_deposit: int = DEFAULT_EXISTENTIAL_DEPOSIT,
    ) -> None:
        super().__init__(system)
        if existential_deposit <= 0:
            raise ValueError("existential deposit must be positive")
        self.existential_deposit = existential_deposit
        self._accounts: dict[Hashable, _Account] = {}
        self._locks: dict[Hashable, dict[bytes, int]] = {}
        for who, amount in balances:
            if amount < existential_deposit:
                raise ValueError(f"genesis balance of {who!r} is below the existential deposit")
            self._accounts[who] = _Account(free=amount)

    def free_balance(self, who: Hashable) -> int:
        account = self._accounts.get(who)
        return account.free if account else 0

    def reserved_balance(self, who: Hashable) -> int:
        account = self._accounts.get(who)
        return account.reserved if account else 0

    def locked_balance(self, who: Hashable) -> int:
        """The largest lock on the account; free balance may not drop below it."""
        return max(self._locks.get(who, {}).values(), default=0)

    def _ensure_can_withdraw(self, who: Hashable, new_free: int) -> None:
        if new_free < self.locked_balance(who):
            raise LiquidityRestrictions(who)

    def _take_free(self, who: Hashable, amount: int) -> _Account:
        account = self._accounts.get(who)
        free = account.free if account else 0
        if amount > free:
            raise InsufficientBalance(who)
        self._ensure_can_withdraw(who, free - amount)
        assert account is not None
        return account

    def _maybe_reap(self, who: Hashable) -> None:
        account = self._accounts.get(who)
        if account and account.free + account.reserved < self.existential_deposit:
            del self._accounts[who]

    def deposit_creating(self, who: Hashable, amount: int) -> int:
        """Credit an account, creating it if the amount reaches the existential deposit.

        Returns the amount actually credited.
        """
        _check_amount(amount)
        if amount == 0:
            return 0
        account = self._accounts.get(who)
        if account is None:
            if amount < self.existential_deposit:
                return 0
            account = self._accounts[who] = _Account()
        account.free += amount
        return amount

    def withdraw(self, who: Hashable, amount: int) -> int:
        """Remove free funds from an account, allowing it to be reaped."""
        _check_amount(amount)
        if amount == 0:
            return 0
        account = self._take_free(who, amount)
        account.free -= amount
        self._maybe_reap(who)
        return amount

    def transfer(self, source: Hashable, dest: Hashable, amount: int) -> None:
        """Move free funds; the source may be reaped, the destination created."""
        _check_amount(amount)
        if amount == 0 or source == dest:
            return
        account = self._take_free(source, amount)
        target = self._accounts.get(dest)
        if target is None:
            if amount < self.existential_deposit:
                raise ExistentialDeposit(dest)
            target = self._accounts[dest] = _Account()
        account.free -= amount
        target.free += amount
        self._maybe_reap(source)
        self.deposit_event(Transfer(source, dest, amount))

    def reserve(self, who: Hashable, amount: int) -> None:
        """Move funds from free to reserved."""
        _check_amount(amount)
        if amount == 0:
            return
        account = self._take_free(who, amount)
        account.free -= amount
        account.reserved += amount
        self.deposit_event(Reserved(who, amount))

    def unreserve(self, who: Hashable, amount: int) -> int:
        """Move up to ``amount`` back to free; return the part that was not reserved."""
        _check_amount(amount)
        if amount == 0:
            return 0
        account = self._accounts.get(who)
        if account is None:
            return amount
        actual = min(account.reserved, amount)
        account.reserved -= actual
        account.free += actual
        self.deposit_event(Unreserved(who, actual))
        return amount - actual

    def set_lock(self, lock_id: bytes, who: Hashable, amount: int) -> None:
        """Create or replace a lock; a zero amount does nothing."""
        _check_amount(amount)
        if amount == 0:
            return
        self._locks.setdefault(who, {})[lock_id] = amount

    def extend_lock(self, lock_id: bytes, who: Hashable, amount: int) -> None:
        """Raise a lock to at least ``amount``, creating it if absent."""
        _check_amount(amount)
        if amount == 0:
            return
        locks = self._locks.setdefault(who, {})
        locks[lock_id] = max(locks.get(lock_id, 0), amount)

    def remove_lock(self, lock_id: bytes, who: Hashable) -> None:
        locks = self._locks.get(who)
        if locks is None:
            return
        locks.pop(lock_id, None)
        if not locks:
            del self._locks[who]