"""A pallet whose only call emits an event holding its input."""

from dataclasses import dataclass

from .runtime import Origin, Pallet, ensure_signed


@dataclass(frozen=True)
class EmitInput:
    """Some input was sent."""

    value: int


class SimpleEvent(Pallet):
    """Emits the number it is given."""

    def do_something(self, origin: Origin, input_value: int) -> None:
        ensure_signed(origin)
        self.deposit_event(EmitInput(input_value))