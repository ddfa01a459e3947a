"""Consuming (insecure) pseudorandomness from a pluggable source."""

from __future__ import annotations

import abc
import hashlib
from collections import deque
from dataclasses import dataclass

from .runtime import Origin, Pallet, System, ensure_signed

HASH_LEN = 32
RANDOM_MATERIAL_LEN = 81
U32_MASK = 0xFFFF_FFFF


def _hash(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=HASH_LEN).digest()


class RandomnessSource(abc.ABC):
    """Anything that can produce 32-byte random values."""

    @abc.abstractmethod
    def random_seed(self) -> bytes:
        """A random value not tied to any subject."""

    @abc.abstractmethod
    def random(self, subject: bytes) -> bytes:
        """A random value derived for ``subject``."""


class CollectiveFlip(RandomnessSource):
    """Low-influence randomness mixed from the most recent parent block hashes.

    Until any hash has been noted, every value is all zero bytes.
    """

    def __init__(self) -> None:
        self._material: deque[bytes] = deque(maxlen=RANDOM_MATERIAL_LEN)

    def note_parent_hash(self, block_hash: bytes) -> None:
        """Add a block hash to the material, dropping the oldest when full."""
        if len(block_hash) != HASH_LEN:
            raise ValueError(f"block hash must be {HASH_LEN} bytes")
        self._material.append(bytes(block_hash))

    def random_seed(self) -> bytes:
        return self.random(b"")

    def random(self, subject: bytes) -> bytes:
        if not self._material:
            return bytes(HASH_LEN)
        mixed = 0
        for position, material in enumerate(self._material):
            digest = _hash(bytes([position & 0xFF]) + bytes(subject) + material)
            mixed ^= int.from_bytes(digest, "little")
        return mixed.to_bytes(HASH_LEN, "little")


@dataclass(frozen=True)
class RandomnessConsumed:
    """The raw seed and the value drawn using the nonce."""

    seed: bytes
    value: bytes


class RandomnessPallet(Pallet):
    """Draws random values, using an incrementing nonce as the subject."""

    def __init__(self, system: System, source: RandomnessSource) -> None:
        super().__init__(system)
        self.source = source
        self._nonce = 0

    def _encode_and_update_nonce(self) -> bytes:
        nonce = self._nonce
        self._nonce = (nonce + 1) & U32_MASK
        return nonce.to_bytes(4, "little")

    def consume_randomness(self, origin: Origin) -> None:
        ensure_signed(origin)
        subject = self._encode_and_update_nonce()
        seed = self.source.random_seed()
        value = self.source.random(subject)
        self.deposit_event(RandomnessConsumed(seed, value))

    def nonce(self) -> int:
        return self._nonce