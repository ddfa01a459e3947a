"""A bounded membership set kept in a storage map."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

from .runtime import DispatchError, Origin, Pallet, System, ensure_signed

MAX_MEMBERS = 16
"""When membership reaches this number, no new members may join."""


class AlreadyMember(DispatchError):
    """Cannot join because the account is already a member."""


class NotMember(DispatchError):
    """Cannot leave because the account is not a member."""


class MembershipLimitReached(DispatchError):
    """Cannot add another member because the limit is reached."""


@dataclass(frozen=True)
class MemberAdded:
    who: Hashable


@dataclass(frozen=True)
class MemberRemoved:
    who: Hashable


class MapSet(Pallet):
    """Accounts join and leave by calling; at most MAX_MEMBERS at a time."""

    def __init__(self, system: System) -> None:
        super().__init__(system)
        self._members: set[Hashable] = set()

    def add_member(self, origin: Origin) -> None:
        new_member = ensure_signed(origin)
        if len(self._members) >= MAX_MEMBERS:
            raise MembershipLimitReached(new_member)
        if new_member in self._members:
            raise AlreadyMember(new_member)
        self._members.add(new_member)
        self.deposit_event(MemberAdded(new_member))

    def remove_member(self, origin: Origin) -> None:
        old_member = ensure_signed(origin)
        if old_member not in self._members:
            raise NotMember(old_member)
        self._members.remove(old_member)
        self.deposit_event(MemberRemoved(old_member))

    def is_member(self, account: Hashable) -> bool:
        return account in self._members

    def member_count(self) -> int:
        return len(self._members)

    def accounts(self) -> list[Hashable]:
        """All members in ascending order."""
        return sorted(self._members)