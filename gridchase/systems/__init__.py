"""Game systems: RNG, map generation, spawning."""

from gridchase.systems.rng import DeterministicRNG
from gridchase.systems.mapgen import generate_map
from gridchase.systems.spawner import build_state

__all__ = ["DeterministicRNG", "build_state", "generate_map"]
