"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Direction(IntEnum):
    """Cardinal movement directions. No diagonals."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


@unique
class TileKind(IntEnum):
    """Tile kinds on the terrain map.

    Concrete meaning varies by variant: in the meadow variant HAZARD is
    water, ENCOUNTER_ZONE is tall grass, SPECIAL_ZONE is a healing center
    and BONUS_ITEM is a berry; in the maze variant BONUS_ITEM is a power
    pellet.
    """

    WALL = 0
    COLLECTIBLE = 1
    EMPTY = 2
    HAZARD = 3
    SPECIAL_ZONE = 4
    BONUS_ITEM = 5
    ENCOUNTER_ZONE = 6


@unique
class AdversaryMode(IntEnum):
    """Behavioral mode of an adversary."""

    NORMAL = 0
    VULNERABLE = 1   # Player contact defeats the adversary


@unique
class Outcome(IntEnum):
    """Run outcome."""

    RUNNING = 0
    WON = 1
    LOST = 2


@unique
class Variant(IntEnum):
    """Game variants sharing the same core."""

    MEADOW = 0   # Decorated field, wandering adversaries, single level
    MAZE = 1     # Fixed maze, pursuing adversaries, power pellets, looping levels


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    MAP_GEN = 0
    AI_DECISION = 1
    ENCOUNTER = 2
    RESPAWN = 3
