"""A pallet keeping one unsigned 32-bit entry per account."""

from collections.abc import Hashable
from dataclasses import dataclass

from .runtime import DispatchError, Origin, Pallet, System, ensure_signed

U32_MAX = 2**32 - 1


class NoValueStored(DispatchError):
    """The requested user has not stored a value yet."""


class MaxValueReached(DispatchError):
    """The value cannot be incremented further."""


@dataclass(frozen=True)
class _EntryEvent:
    who: Hashable
    entry: int


class EntrySet(_EntryEvent):
    """A user has set their entry."""


class EntryGot(_EntryEvent):
    """A user has read an entry, leaving it in storage."""


class EntryTaken(_EntryEvent):
    """A user has read their entry, removing it from storage."""


@dataclass(frozen=True)
class EntryIncreased:
    """A user has increased their entry: (user, old_entry, new_entry)."""

    who: Hashable
    old_entry: int
    new_entry: int


def _check_u32(value: int) -> int:
    if not 0 <= value <= U32_MAX:
        raise ValueError(f"{value} is not an unsigned 32-bit integer")
    return value


class SimpleMap(Pallet):
    """Maps accounts to numbers."""

    def __init__(self, system: System) -> None:
        super().__init__(system)
        self._entries: dict[Hashable, int] = {}

    def _stored(self, account: Hashable) -> int:
        try:
            return self._entries[account]
        except KeyError:
            raise NoValueStored(account) from None

    def set_single_entry(self, origin: Origin, entry: int) -> None:
        """Set the caller's own entry."""
        user = ensure_signed(origin)
        self._entries[user] = _check_u32(entry)
        self.deposit_event(EntrySet(user, entry))

    def get_single_entry(self, origin: Origin, account: Hashable) -> None:
        """Emit any account's entry, leaving it in place."""
        getter = ensure_signed(origin)
        self.deposit_event(EntryGot(getter, self._stored(account)))

    def take_single_entry(self, origin: Origin) -> None:
        """Remove the caller's entry and emit it."""
        user = ensure_signed(origin)
        entry = self._stored(user)
        del self._entries[user]
        self.deposit_event(EntryTaken(user, entry))

    def increase_single_entry(self, origin: Origin, add_this_val: int) -> None:
        """Add to the caller's entry, failing on overflow."""
        user = ensure_signed(origin)
        _check_u32(add_this_val)
        original = self._stored(user)
        new_value = original + add_this_val
        if new_value > U32_MAX:
            raise MaxValueReached(user)
        self._entries[user] = new_value
        self.deposit_event(EntryIncreased(user, original, new_value))

    def simple_map(self, account: Hashable) -> int:
        """The entry stored for an account, or zero."""
        return self._entries.get(account, 0)