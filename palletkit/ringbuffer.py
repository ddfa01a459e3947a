"""A FIFO ring buffer presented over a bounds value and an index-to-item map.

Changes to the bounds are held in the buffer and written back on ``commit``;
used as a context manager, the buffer commits when the block ends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_INDEX_BITS = 16


@dataclass
class RingBufferStorage:
    """The persistent state behind a ring buffer: its bounds and its items."""

    bounds: tuple[int, int] = (0, 0)
    items: dict[int, Any] = field(default_factory=dict)


class RingBuffer:
    """A queue over ``RingBufferStorage`` whose indices wrap at ``index_bits`` bits.

    When the queue is full, pushing overwrites the oldest item.
    """

    def __init__(self, storage: RingBufferStorage, index_bits: int = DEFAULT_INDEX_BITS) -> None:
        if index_bits <= 0:
            raise ValueError("index_bits must be positive")
        self._storage = storage
        self._mask = (1 << index_bits) - 1
        start, end = storage.bounds
        if not (0 <= start <= self._mask and 0 <= end <= self._mask):
            raise ValueError(f"stored bounds {storage.bounds} do not fit in {index_bits} bits")
        self._start = start
        self._end = end

    def _next(self, index: int) -> int:
        return (index + 1) & self._mask

    def push(self, item: Any) -> None:
        """Append an item; the bounds are not written until ``commit``."""
        self._storage.items[self._end] = item
        next_index = self._next(self._end)
        if next_index == self._start:
            # The queue would present as empty: drop the oldest item instead.
            self._start = self._next(self._start)
        self._end = next_index

    def pop(self) -> Any | None:
        """Remove and return the oldest item, or None if the queue is empty."""
        if self.is_empty():
            return None
        item = self._storage.items.pop(self._start, None)
        self._start = self._next(self._start)
        return item

    def is_empty(self) -> bool:
        return self._start == self._end

    def commit(self) -> None:
        """Write the current bounds back to storage."""
        self._storage.bounds = (self._start, self._end)

    def __enter__(self) -> RingBuffer:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.commit()