"""Engine systems: deterministic randomness."""

from tag_arena.systems.rng import DeterministicRNG

__all__ = ["DeterministicRNG"]
