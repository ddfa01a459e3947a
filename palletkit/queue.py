"""A pallet exposing a ring-buffer FIFO queue of small records."""

from collections.abc import Iterable
from dataclasses import dataclass

from .ringbuffer import RingBuffer, RingBufferStorage
from .runtime import Origin, Pallet, System, ensure_signed

BUFFER_INDEX_BITS = 8


@dataclass(frozen=True)
class ValueStruct:
    """One queued record."""

    integer: int = 0
    boolean: bool = False


@dataclass(frozen=True)
class Popped:
    """An item was removed from the queue."""

    integer: int
    boolean: bool


class RingBufferQueue(Pallet):
    """Signed accounts push to and pop from a shared queue."""

    def __init__(self, system: System) -> None:
        super().__init__(system)
        self._storage = RingBufferStorage()

    def add_to_queue(self, origin: Origin, integer: int, boolean: bool) -> None:
        self.add_multiple(origin, [integer], boolean)

    def add_multiple(self, origin: Origin, integers: Iterable[int], boolean: bool) -> None:
        ensure_signed(origin)
        with RingBuffer(self._storage, BUFFER_INDEX_BITS) as queue:
            for integer in integers:
                queue.push(ValueStruct(integer, boolean))

    def pop_from_queue(self, origin: Origin) -> None:
        """Remove the oldest item, emitting it if there was one."""
        ensure_signed(origin)
        with RingBuffer(self._storage, BUFFER_INDEX_BITS) as queue:
            item = queue.pop()
        if item is not None:
            self.deposit_event(Popped(item.integer, item.boolean))

    def get_value(self, index: int) -> ValueStruct:
        """The item stored at an index, or the default record."""
        return self._storage.items.get(index, ValueStruct())

    def range(self) -> tuple[int, int]:
        """The queue's (start, end) bounds."""
        return self._storage.bounds