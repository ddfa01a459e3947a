"""A pallet that remembers the last account to call it."""

from collections.abc import Hashable
from dataclasses import dataclass

from .runtime import Origin, Pallet, ensure_signed


@dataclass(frozen=True)
class Called:
    """An account made the call."""

    who: Hashable


class LastCaller(Pallet):
    """Stores the most recent caller."""

    _caller: Hashable | None = None

    def call(self, origin: Origin) -> None:
        self._caller = ensure_signed(origin)
        self.deposit_event(Called(self._caller))

    def caller(self) -> Hashable | None:
        """The last account that called, or None if nobody has."""
        return self._caller