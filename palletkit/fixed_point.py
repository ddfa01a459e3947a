"""Three multiplicative accumulators built on different fixed-point representations.

* ``Permill``: parts per million, restricted to the range [0, 1].
* ``U16F16``: an unsigned number with 16 integer and 16 fractional bits.
* a plain unsigned 32-bit integer whose low 16 bits are read as the fraction.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Union

from .runtime import DispatchError, Origin, Pallet, System, ensure_signed

U32_MAX = 2**32 - 1
FRAC_BITS = 16
ONE_BITS = 1 << FRAC_BITS


class Overflow(DispatchError):
    """The product does not fit in the accumulator."""


@dataclass(frozen=True, order=True)
class Permill:
    """A fraction in parts per million, between zero and one inclusive."""

    parts: int

    ACCURACY = 1_000_000

    def __post_init__(self) -> None:
        if not 0 <= self.parts <= self.ACCURACY:
            raise ValueError(f"{self.parts} parts per million is outside [0, 1]")

    @classmethod
    def from_percent(cls, percent: int) -> Permill:
        """The fraction ``percent`` / 100, capped at one."""
        if percent < 0:
            raise ValueError("percent must not be negative")
        return cls(min(percent, 100) * (cls.ACCURACY // 100))

    @classmethod
    def one(cls) -> Permill:
        return cls(cls.ACCURACY)

    def saturating_mul(self, other: Permill) -> Permill:
        """The product, rounded down; it can never leave [0, 1]."""
        return Permill(self.parts * other.parts // self.ACCURACY)

    def __float__(self) -> float:
        return self.parts / self.ACCURACY


class U16F16:
    """An unsigned fixed-point number with 16 integer and 16 fractional bits."""

    __slots__ = ("bits",)

    def __init__(self, bits: int) -> None:
        if not 0 <= bits <= U32_MAX:
            raise OverflowError(f"raw value {bits} does not fit in 32 bits")
        self.bits = bits

    @classmethod
    def from_num(cls, value: Union[int, float, Fraction]) -> U16F16:
        """Convert a number; integers are exact, other values are rounded."""
        if isinstance(value, int):
            bits = value << FRAC_BITS if value >= 0 else -1
        else:
            bits = round(Fraction(value) * ONE_BITS)
        if not 0 <= bits <= U32_MAX:
            raise OverflowError(f"{value} does not fit in U16F16")
        return cls(bits)

    def checked_mul(self, other: U16F16) -> U16F16 | None:
        """The product truncated to 16 fractional bits, or None on overflow."""
        bits = (self.bits * other.bits) >> FRAC_BITS
        if bits > U32_MAX:
            return None
        return U16F16(bits)

    def __truediv__(self, divisor: Union[int, U16F16]) -> U16F16:
        if isinstance(divisor, U16F16):
            if divisor.bits == 0:
                raise ZeroDivisionError("division by zero")
            return U16F16((self.bits << FRAC_BITS) // divisor.bits)
        if isinstance(divisor, int):
            if divisor == 0:
                raise ZeroDivisionError("division by zero")
            if divisor < 0:
                raise ValueError("cannot divide an unsigned value by a negative number")
            return U16F16(self.bits // divisor)
        return NotImplemented

    def to_fraction(self) -> Fraction:
        return Fraction(self.bits, ONE_BITS)

    def __float__(self) -> float:
        return self.bits / ONE_BITS

    def __eq__(self, other: object) -> bool:
        if isinstance(other, U16F16):
            return self.bits == other.bits
        if isinstance(other, int):
            return other >= 0 and self.bits == other << FRAC_BITS
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.to_fraction())

    def __repr__(self) -> str:
        return f"U16F16({float(self)!r})"


@dataclass(frozen=True)
class PermillUpdated:
    """The Permill accumulator changed: (new_factor, new_product)."""

    new_factor: Permill
    new_product: Permill


@dataclass(frozen=True)
class FixedUpdated:
    """The U16F16 accumulator changed: (new_factor, new_product)."""

    new_factor: U16F16
    new_product: U16F16


@dataclass(frozen=True)
class ManualUpdated:
    """The hand-rolled accumulator changed: (new_factor, new_product)."""

    new_factor: int
    new_product: int


class FixedPoint(Pallet):
    """Keeps three accumulators, each starting at one."""

    def __init__(self, system: System) -> None:
        super().__init__(system)
        self._permill = Permill.one()
        self._fixed = U16F16.from_num(1)
        self._manual = ONE_BITS

    def update_permill(self, origin: Origin, new_factor: Permill) -> None:
        """Multiply the Permill accumulator; it cannot overflow."""
        ensure_signed(origin)
        new_product = self._permill.saturating_mul(new_factor)
        self._permill = new_product
        self.deposit_event(PermillUpdated(new_factor, new_product))

    def update_fixed(self, origin: Origin, new_factor: U16F16) -> None:
        """Multiply the U16F16 accumulator, raising Overflow if it does not fit."""
        ensure_signed(origin)
        new_product = self._fixed.checked_mul(new_factor)
        if new_product is None:
            raise Overflow("U16F16 accumulator overflowed")
        self._fixed = new_product
        self.deposit_event(FixedUpdated(new_factor, new_product))

    def update_manual(self, origin: Origin, new_factor: int) -> None:
        """Multiply the 16.16 integer accumulator, raising Overflow if it does not fit."""
        ensure_signed(origin)
        if not 0 <= new_factor <= U32_MAX:
            raise ValueError(f"{new_factor} is not an unsigned 32-bit integer")
        shifted = (self._manual * new_factor) >> FRAC_BITS
        if shifted > U32_MAX:
            raise Overflow("manual accumulator overflowed")
        self._manual = shifted
        self.deposit_event(ManualUpdated(new_factor, shifted))

    def permill_value(self) -> Permill:
        return self._permill

    def fixed_value(self) -> U16F16:
        return self._fixed

    def manual_value(self) -> int:
        return self._manual