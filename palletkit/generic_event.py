"""A pallet whose event carries the calling account."""

from collections.abc import Hashable
from dataclasses import dataclass

from .runtime import Origin, Pallet, ensure_signed


@dataclass(frozen=True)
class EmitInput:
    """Some input was sent by an account."""

    who: Hashable
    value: int


class GenericEvent(Pallet):
    """Emits the caller together with the number it was given."""

    def do_something(self, origin: Origin, input_value: int) -> None:
        self.deposit_event(EmitInput(ensure_signed(origin), input_value))