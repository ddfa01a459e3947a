"""A pallet locking, extending and releasing a caller's funds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

from .currency import Balances
from .runtime import Origin, Pallet, System, ensure_signed

EXAMPLE_ID = b"example "


@dataclass(frozen=True)
class Locked:
    who: Hashable
    amount: int


@dataclass(frozen=True)
class ExtendedLock:
    who: Hashable
    amount: int


@dataclass(frozen=True)
class Unlocked:
    who: Hashable


class LockableCurrency(Pallet):
    """Places a single lock, identified by EXAMPLE_ID, on callers' balances."""

    def __init__(self, system: System, currency: Balances) -> None:
        super().__init__(system)
        self.currency = currency

    def lock_capital(self, origin: Origin, amount: int) -> None:
        """Lock the given amount of the caller's funds."""
        user = ensure_signed(origin)
        self.currency.set_lock(EXAMPLE_ID, user, amount)
        self.deposit_event(Locked(user, amount))

    def extend_lock(self, origin: Origin, amount: int) -> None:
        """Raise the caller's lock to at least the given amount."""
        user = ensure_signed(origin)
        self.currency.extend_lock(EXAMPLE_ID, user, amount)
        self.deposit_event(ExtendedLock(user, amount))

    def unlock_all(self, origin: Origin) -> None:
        """Release the caller's lock."""
        user = ensure_signed(origin)
        self.currency.remove_lock(EXAMPLE_ID, user)
        self.deposit_event(Unlocked(user))