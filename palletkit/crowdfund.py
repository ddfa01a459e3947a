"""A simple on-chain crowdfunding mechanism.

Anyone may open a fund with a goal and an end block, paying a small deposit.
Contributors send funds to the fund's own account until the end block. A
successful fund is dispensed to its beneficiary; contributors to an
unsuccessful one may withdraw until the retirement period ends, after which
anyone may dissolve the fund and collect what is left.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Hashable

from .currency import Balances
from .runtime import DispatchError, Origin, Pallet, System, ensure_signed

PALLET_ID = b"ex/cfund"
U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1


class EndTooEarly(DispatchError):
    """Crowdfund must end after it starts."""


class ContributionTooSmall(DispatchError):
    """Must contribute at least the minimum amount of funds."""


class InvalidIndex(DispatchError):
    """The fund index specified does not exist."""


class ContributionPeriodOver(DispatchError):
    """The contribution period has ended; no more contributions are accepted."""


class FundStillActive(DispatchError):
    """Funds may not be withdrawn or dispensed while the fund is still active."""


class NoContribution(DispatchError):
    """Nothing to withdraw because the account has not contributed."""


class FundNotRetired(DispatchError):
    """The fund has not yet completed its retirement period."""


class UnsuccessfulFund(DispatchError):
    """Cannot dispense funds from an unsuccessful fund."""


@dataclass(frozen=True)
class FundInfo:
    """The stored state of one fund."""

    beneficiary: Hashable
    deposit: int
    raised: int
    end: int
    goal: int


@dataclass(frozen=True)
class Created:
    index: int
    block_number: int


@dataclass(frozen=True)
class Contributed:
    who: Hashable
    index: int
    balance: int
    block_number: int


@dataclass(frozen=True)
class Withdrew:
    who: Hashable
    index: int
    balance: int
    block_number: int


@dataclass(frozen=True)
class Dissolved:
    index: int
    block_number: int
    reporter: Hashable


@dataclass(frozen=True)
class Dispensed:
    index: int
    block_number: int
    caller: Hashable


class Crowdfund(Pallet):
    """Creates, funds, refunds and settles crowdfunds denominated in a currency."""

    def __init__(
        self,
        system: System,
        currency: Balances,
        submission_deposit: int,
        min_contribution: int,
        retirement_period: int,
    ) -> None:
        super().__init__(system)
        if submission_deposit < 0 or min_contribution < 0 or retirement_period < 0:
            raise ValueError("crowdfund parameters must not be negative")
        self.currency = currency
        self.submission_deposit = submission_deposit
        self.min_contribution = min_contribution
        self.retirement_period = retirement_period
        self._funds: dict[int, FundInfo] = {}
        self._fund_count = 0
        self._contributions: dict[int, dict[Hashable, int]] = {}

    def _fund_or_raise(self, index: int) -> FundInfo:
        try:
            return self._funds[index]
        except KeyError:
            raise InvalidIndex(index) from None

    def _account_exists(self, who: Hashable) -> bool:
        return self.currency.free_balance(who) + self.currency.reserved_balance(who) > 0

    def create(self, origin: Origin, beneficiary: Hashable, goal: int, end: int) -> None:
        """Open a new fund, taking the submission deposit from the creator."""
        creator = ensure_signed(origin)
        now = self.system.block_number
        if end <= now:
            raise EndTooEarly(end)
        deposit = self.submission_deposit
        taken = self.currency.withdraw(creator, deposit)

        index = self._fund_count
        if index >= U32_MAX:
            raise OverflowError("fund index space exhausted")
        self._fund_count = index + 1
        self.currency.deposit_creating(self.fund_account_id(index), taken)

        self._funds[index] = FundInfo(
            beneficiary=beneficiary, deposit=deposit, raised=0, end=end, goal=goal
        )
        self.deposit_event(Created(index, now))

    def contribute(self, origin: Origin, index: int, value: int) -> None:
        """Send funds to an open fund."""
        who = ensure_signed(origin)
        if value < self.min_contribution:
            raise ContributionTooSmall(value)
        fund = self._fund_or_raise(index)
        now = self.system.block_number
        if fund.end <= now:
            raise ContributionPeriodOver(index)

        self.currency.transfer(who, self.fund_account_id(index), value)
        self._funds[index] = dataclasses.replace(fund, raised=fund.raised + value)

        balance = min(self.contribution_get(index, who) + value, U64_MAX)
        self.contribution_put(index, who, balance)
        self.deposit_event(Contributed(who, index, balance, now))

    def withdraw(self, origin: Origin, index: int) -> None:
        """Return a contributor's full balance from an ended fund, without fees."""
        who = ensure_signed(origin)
        fund = self._fund_or_raise(index)
        now = self.system.block_number
        if not fund.end < now:
            raise FundStillActive(index)
        balance = self.contribution_get(index, who)
        if balance <= 0:
            raise NoContribution(who)

        exists = self._account_exists(who)
        taken = self.currency.withdraw(self.fund_account_id(index), balance)
        # Funds returned to an account that no longer exists are lost.
        if exists:
            self.currency.deposit_creating(who, taken)

        self.contribution_kill(index, who)
        self._funds[index] = dataclasses.replace(fund, raised=max(fund.raised - balance, 0))
        self.deposit_event(Withdrew(who, index, balance, now))

    def dissolve(self, origin: Origin, index: int) -> None:
        """Remove a retired fund; the caller collects the deposit and any remaining funds."""
        reporter = ensure_signed(origin)
        fund = self._fund_or_raise(index)
        now = self.system.block_number
        if now < fund.end + self.retirement_period:
            raise FundNotRetired(index)

        account = self.fund_account_id(index)
        taken = self.currency.withdraw(account, fund.deposit + fund.raised)
        self.currency.deposit_creating(reporter, taken)

        del self._funds[index]
        self.crowdfund_kill(index)
        self.deposit_event(Dissolved(index, now, reporter))

    def dispense(self, origin: Origin, index: int) -> None:
        """Pay a successful fund to its beneficiary; the caller collects the deposit."""
        caller = ensure_signed(origin)
        fund = self._fund_or_raise(index)
        now = self.system.block_number
        if now < fund.end:
            raise FundStillActive(index)
        if fund.raised < fund.goal:
            raise UnsuccessfulFund(index)

        account = self.fund_account_id(index)
        raised = self.currency.withdraw(account, fund.raised)
        self.currency.deposit_creating(fund.beneficiary, raised)
        deposit = self.currency.withdraw(account, fund.deposit)
        self.currency.deposit_creating(caller, deposit)

        del self._funds[index]
        self.crowdfund_kill(index)
        self.deposit_event(Dispensed(index, now, caller))

    def fund_account_id(self, index: int) -> bytes:
        """The account holding the funds of the fund at ``index``."""
        if not 0 <= index <= U32_MAX:
            raise ValueError(f"fund index {index} is not an unsigned 32-bit integer")
        return b"modl" + PALLET_ID + index.to_bytes(4, "little")

    def funds(self, index: int) -> FundInfo | None:
        return self._funds.get(index)

    def fund_count(self) -> int:
        return self._fund_count

    def contribution_get(self, index: int, who: Hashable) -> int:
        """The amount ``who`` has contributed to a fund, or zero."""
        return self._contributions.get(index, {}).get(who, 0)

    def contribution_put(self, index: int, who: Hashable, balance: int) -> None:
        self._contributions.setdefault(index, {})[who] = balance

    def contribution_kill(self, index: int, who: Hashable) -> None:
        contributions = self._contributions.get(index)
        if contributions is None:
            return
        contributions.pop(who, None)
        if not contributions:
            del self._contributions[index]

    def crowdfund_kill(self, index: int) -> None:
        """Forget every contribution to a fund at once."""
        self._contributions.pop(index, None)