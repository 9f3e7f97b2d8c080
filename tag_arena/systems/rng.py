"""Domain-separated deterministic RNG using xxhash.

A match replays identically from the same seed and the same sequence of
inputs: every random draw is a pure function of its call-site key.

Formula: RNG_Value = Hash(Seed, Domain, EntityID, Sequence)
"""

from __future__ import annotations

import struct

import xxhash

from tag_arena.core.enums import Domain


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Each call is a pure function of (seed, domain, entity_id, seq) with no
    internal mutable state.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, entity_id: int, seq: int) -> int:
        payload = struct.pack("<qiqq", self._seed, domain.value, entity_id, seq)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, entity_id: int, seq: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, entity_id, seq) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, entity_id: int, seq: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, entity_id, seq)
        return low + int(f * (high - low + 1))

    def next_range(self, domain: Domain, entity_id: int, seq: int, low: float, high: float) -> float:
        """Return a deterministic float in [low, high)."""
        return low + self.next_float(domain, entity_id, seq) * (high - low)
