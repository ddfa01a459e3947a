"""Minimal runtime: origins, dispatch errors, the event log and a pallet base."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Hashable


class OriginKind(enum.Enum):
    """Who a call claims to come from."""

    SIGNED = "signed"
    ROOT = "root"
    NONE = "none"


@dataclass(frozen=True)
class Origin:
    """The origin of a dispatched call."""

    kind: OriginKind
    who: Hashable | None = None


def signed(who: Hashable) -> Origin:
    """An origin signed by the account ``who``."""
    return Origin(OriginKind.SIGNED, who)


def root() -> Origin:
    """The privileged root origin."""
    return Origin(OriginKind.ROOT)


def unsigned() -> Origin:
    """An origin carrying no signature."""
    return Origin(OriginKind.NONE)


class DispatchError(Exception):
    """Base class for every error a dispatched call can raise."""


class BadOrigin(DispatchError):
    """The call came from an origin it does not accept."""


def ensure_signed(origin: Origin) -> Hashable:
    """Return the signing account, or raise BadOrigin."""
    if origin.kind is not OriginKind.SIGNED:
        raise BadOrigin(f"expected a signed origin, got {origin.kind.value}")
    return origin.who


def ensure_none(origin: Origin) -> None:
    """Raise BadOrigin unless the origin is unsigned."""
    if origin.kind is not OriginKind.NONE:
        raise BadOrigin(f"expected an unsigned origin, got {origin.kind.value}")


class Phase(enum.Enum):
    """The part of block execution in which an event was deposited."""

    INITIALIZATION = "initialization"
    APPLY_EXTRINSIC = "apply_extrinsic"
    FINALIZATION = "finalization"


@dataclass(frozen=True)
class EventRecord:
    """An event as stored in the system event log."""

    phase: Phase
    event: Any
    topics: tuple = field(default_factory=tuple)


class System:
    """Holds the current block number and the events deposited in it."""

    def __init__(self, block_number: int = 0) -> None:
        self.block_number = block_number
        self._events: list[EventRecord] = []

    def set_block_number(self, number: int) -> None:
        self.block_number = number

    def deposit_event(self, event: Any) -> None:
        """Record an event; events are not kept at the genesis block."""
        if self.block_number == 0:
            return
        self._events.append(EventRecord(Phase.INITIALIZATION, event))

    def events(self) -> list[EventRecord]:
        return list(self._events)

    def reset_events(self) -> None:
        self._events.clear()


class Pallet:
    """Base for pallets: holds the system and forwards events to it."""

    def __init__(self, system: System) -> None:
        self.system = system

    def deposit_event(self, event: Any) -> None:
        self.system.deposit_event(event)