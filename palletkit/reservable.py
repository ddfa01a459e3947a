"""A pallet reserving, releasing and moving funds of a reservable currency."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

from .currency import Balances, InsufficientBalance, LiquidityRestrictions
from .runtime import DispatchError, Origin, Pallet, System, ensure_signed


@dataclass(frozen=True)
class LockFunds:
    who: Hashable
    amount: int
    block_number: int


@dataclass(frozen=True)
class UnlockFunds:
    who: Hashable
    amount: int
    block_number: int


@dataclass(frozen=True)
class TransferFunds:
    """sender, dest, amount, block number"""

    source: Hashable
    dest: Hashable
    amount: int
    block_number: int


class ReservableCurrency(Pallet):
    """Thin dispatchable layer over a currency's reserve and transfer operations."""

    def __init__(self, system: System, currency: Balances) -> None:
        super().__init__(system)
        self.currency = currency

    def reserve_funds(self, origin: Origin, amount: int) -> None:
        """Reserve funds from the caller."""
        locker = ensure_signed(origin)
        try:
            self.currency.reserve(locker, amount)
        except (InsufficientBalance, LiquidityRestrictions) as err:
            raise DispatchError("locker can't afford to lock the amount requested") from err
        self.deposit_event(LockFunds(locker, amount, self.system.block_number))

    def unreserve_funds(self, origin: Origin, amount: int) -> None:
        """Unreserve up to ``amount`` of the caller's funds; never fails."""
        unlocker = ensure_signed(origin)
        self.currency.unreserve(unlocker, amount)
        self.deposit_event(UnlockFunds(unlocker, amount, self.system.block_number))

    def transfer_funds(self, origin: Origin, dest: Hashable, amount: int) -> None:
        sender = ensure_signed(origin)
        self.currency.transfer(sender, dest, amount)
        self.deposit_event(TransferFunds(sender, dest, amount, self.system.block_number))

    def unreserve_and_transfer(
        self, origin: Origin, to_punish: Hashable, dest: Hashable, collateral: int
    ) -> None:
        """Unreserve the collateral of ``to_punish`` and transfer what was reserved.

        Any signed account may call this.
        """
        ensure_signed(origin)
        overdraft = self.currency.unreserve(to_punish, collateral)
        moved = collateral - overdraft
        self.currency.transfer(to_punish, dest, moved)
        self.deposit_event(TransferFunds(to_punish, dest, moved, self.system.block_number))