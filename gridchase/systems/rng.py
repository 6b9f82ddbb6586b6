"""Domain-separated deterministic RNG using xxhash.

The outcome of tick T depends only on the seed, the state at T-1 and the
inputs buffered before T. Nothing reads a global generator.

Formula: value = Hash(seed, domain, key, tick, salt)
"""

from __future__ import annotations

import struct
from typing import Sequence, TypeVar

import xxhash

from gridchase.core.enums import Domain

T = TypeVar("T")


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Each call is a pure function of (seed, domain, key, tick, salt), so
    reordering unrelated draws never changes results. ``salt`` separates
    several draws made by the same key on the same tick.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, key: int, tick: int, salt: int) -> int:
        payload = struct.pack("<qiqqi", self._seed, domain.value, key, tick, salt)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, key: int, tick: int, salt: int = 0) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, key, tick, salt) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, key: int, tick: int, low: int, high: int, salt: int = 0) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, key, tick, salt)
        return min(high, low + int(f * (high - low + 1)))

    def next_bool(self, domain: Domain, key: int, tick: int, probability: float = 0.5, salt: int = 0) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain, key, tick, salt) < probability

    def choice(self, domain: Domain, key: int, tick: int, options: Sequence[T], salt: int = 0) -> T:
        """Pick uniformly from a non-empty sequence."""
        return options[self.next_int(domain, key, tick, 0, len(options) - 1, salt)]
