"""Core data models: Vector2, Player, Adversary, RunState."""

from __future__ import annotations

from dataclasses import dataclass

from gridchase.core.enums import AdversaryMode, Direction, Outcome


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def manhattan(self, other: Vector2) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


_OFFSETS: dict[Direction, Vector2] = {
    Direction.UP: Vector2(0, -1),
    Direction.DOWN: Vector2(0, 1),
    Direction.LEFT: Vector2(-1, 0),
    Direction.RIGHT: Vector2(1, 0),
}


def direction_offset(direction: Direction) -> Vector2:
    """Unit offset for a cardinal direction."""
    return _OFFSETS[direction]


def parse_direction(value: object) -> Direction | None:
    """Coerce *value* into a Direction, or None when it is not one.

    Accepts Direction members, case-insensitive names ("up", "LEFT") and the
    integer values. Booleans and everything else are rejected.
    """
    if isinstance(value, Direction):
        return value
    if isinstance(value, str):
        try:
            return Direction[value.strip().upper()]
        except KeyError:
            return None
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return Direction(value)
        except ValueError:
            return None
    return None


@dataclass(slots=True)
class Player:
    """The player entity. ``pending`` is the buffered, not-yet-applied turn."""

    pos: Vector2
    facing: Direction
    spawn: Vector2
    spawn_facing: Direction
    pending: Direction | None = None

    def respawn(self) -> None:
        self.pos = self.spawn
        self.facing = self.spawn_facing
        self.pending = None

    def copy(self) -> Player:
        return Player(
            pos=self.pos, facing=self.facing, spawn=self.spawn,
            spawn_facing=self.spawn_facing, pending=self.pending,
        )


@dataclass(slots=True)
class Adversary:
    """A mobile adversary bound to a stable display slot."""

    slot: int
    name: str
    pos: Vector2
    facing: Direction
    spawn: Vector2
    spawn_facing: Direction
    mode: AdversaryMode = AdversaryMode.NORMAL
    vulnerable_until: int | None = None   # tick deadline while VULNERABLE

    @property
    def vulnerable(self) -> bool:
        return self.mode == AdversaryMode.VULNERABLE

    def make_vulnerable(self, until_tick: int) -> None:
        self.mode = AdversaryMode.VULNERABLE
        self.vulnerable_until = until_tick

    def clear_vulnerable(self) -> None:
        self.mode = AdversaryMode.NORMAL
        self.vulnerable_until = None

    def copy(self) -> Adversary:
        return Adversary(
            slot=self.slot, name=self.name, pos=self.pos, facing=self.facing,
            spawn=self.spawn, spawn_facing=self.spawn_facing,
            mode=self.mode, vulnerable_until=self.vulnerable_until,
        )


@dataclass(slots=True)
class RunState:
    """Score, lives and progression for one run."""

    score: int = 0
    lives: int = 3
    max_lives: int = 3
    level: int = 1
    outcome: Outcome = Outcome.RUNNING
    running: bool = False
    collected: int = 0
    captures: int = 0

    @property
    def over(self) -> bool:
        return self.outcome != Outcome.RUNNING

    @property
    def won(self) -> bool:
        return self.outcome == Outcome.WON

    def add_score(self, points: int) -> None:
        if points > 0:
            self.score += points

    def gain_lives(self, count: int) -> None:
        self.lives = max(0, min(self.max_lives, self.lives + count))

    def lose_life(self) -> None:
        self.lives = max(0, self.lives - 1)

    def copy(self) -> RunState:
        return RunState(
            score=self.score, lives=self.lives, max_lives=self.max_lives,
            level=self.level, outcome=self.outcome, running=self.running,
            collected=self.collected, captures=self.captures,
        )
