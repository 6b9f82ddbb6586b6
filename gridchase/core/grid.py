"""Terrain map: fixed-shape, mutable-content tile grid."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from gridchase.core.effects import NO_EFFECT, TileEffect
from gridchase.core.enums import TileKind
from gridchase.core.models import Vector2

IMPASSABLE_KINDS = frozenset({TileKind.WALL, TileKind.HAZARD})
ONE_SHOT_KINDS = frozenset({TileKind.COLLECTIBLE, TileKind.BONUS_ITEM})


class TerrainMap:
    """2D tile grid backed by a flat list for cache-friendly access.

    Dimensions never change after construction; a resize means building a
    new map. ``goal_kinds`` are the kinds counted by
    :meth:`remaining_collectibles`, kept as a running counter so the win
    check never has to scan the grid.
    """

    __slots__ = ("width", "height", "_tiles", "_effects", "_impassable", "_goal_kinds",
                 "_remaining", "tunnel_rows")

    def __init__(
        self,
        width: int,
        height: int,
        default: TileKind = TileKind.WALL,
        effects: Mapping[TileKind, TileEffect] | None = None,
        impassable: Iterable[TileKind] = IMPASSABLE_KINDS,
        goal_kinds: Iterable[TileKind] = (TileKind.COLLECTIBLE,),
        tunnel_rows: Iterable[int] = (),
    ) -> None:
        self.width = width
        self.height = height
        self._tiles: list[TileKind] = [default] * (width * height)
        self._effects: Mapping[TileKind, TileEffect] = MappingProxyType(dict(effects or {}))
        self._impassable = frozenset(impassable)
        self._goal_kinds = frozenset(goal_kinds)
        self._remaining = width * height if default in self._goal_kinds else 0
        self.tunnel_rows: frozenset[int] = frozenset(tunnel_rows)

    # -- access --

    def _idx(self, x: int, y: int) -> int:
        return y * self.width + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> TileKind:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self._tiles[y * self.width + x]
        return TileKind.WALL

    def get_at(self, pos: Vector2) -> TileKind:
        return self.get(pos.x, pos.y)

    def set(self, x: int, y: int, kind: TileKind) -> None:
        if not self.in_bounds(x, y):
            return
        idx = self._idx(x, y)
        old = self._tiles[idx]
        if old in self._goal_kinds:
            self._remaining -= 1
        if kind in self._goal_kinds:
            self._remaining += 1
        self._tiles[idx] = kind

    # -- rules --

    @property
    def goal_kinds(self) -> frozenset[TileKind]:
        return self._goal_kinds

    def effect_for(self, kind: TileKind) -> TileEffect:
        return self._effects.get(kind, NO_EFFECT)

    def is_passable(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return False
        return self._tiles[y * self.width + x] not in self._impassable

    def is_passable_at(self, pos: Vector2) -> bool:
        return self.is_passable(pos.x, pos.y)

    def consume(self, x: int, y: int) -> TileEffect:
        """Return the effect of the tile at (x, y), consuming one-shot kinds.

        Collectibles and bonus items downgrade to EMPTY. Repeatable kinds
        (special and encounter zones) keep their kind and trigger again on
        every visit. Empty, impassable and out-of-bounds cells have no effect.
        """
        if not self.is_passable(x, y):
            return NO_EFFECT
        kind = self._tiles[self._idx(x, y)]
        effect = self.effect_for(kind)
        if kind in ONE_SHOT_KINDS:
            self.set(x, y, TileKind.EMPTY)
        return effect

    def remaining_collectibles(self) -> int:
        return self._remaining

    def count(self, kind: TileKind) -> int:
        return sum(1 for t in self._tiles if t == kind)

    # -- views --

    def rows(self) -> list[list[int]]:
        """Row-major 2D list of tile values for render collaborators."""
        w = self.width
        return [[int(t) for t in self._tiles[y * w:(y + 1) * w]] for y in range(self.height)]

    def raw(self) -> list[TileKind]:
        return list(self._tiles)

    # -- copy --

    def copy(self) -> TerrainMap:
        new = TerrainMap.__new__(TerrainMap)
        new.width = self.width
        new.height = self.height
        new._tiles = list(self._tiles)
        new._effects = self._effects
        new._impassable = self._impassable
        new._goal_kinds = self._goal_kinds
        new._remaining = self._remaining
        new.tunnel_rows = self.tunnel_rows
        return new
