"""MovementResolver: buffered turning and passability for the player."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gridchase.core.enums import Direction
from gridchase.core.models import Vector2, direction_offset

if TYPE_CHECKING:
    from gridchase.core.grid import TerrainMap
    from gridchase.core.models import Player

logger = logging.getLogger(__name__)


class MovementResolver:
    """Stateless one-cell-per-tick movement.

    With ``wrap_horizontal`` a step past either column edge lands on the
    opposite edge of the same row before passability is checked.
    """

    __slots__ = ("_wrap",)

    def __init__(self, wrap_horizontal: bool = False) -> None:
        self._wrap = wrap_horizontal

    def step(self, pos: Vector2, direction: Direction, terrain: TerrainMap) -> Vector2:
        """Cell one step from *pos* in *direction*, wrapped if enabled."""
        target = pos + direction_offset(direction)
        if self._wrap:
            if target.x < 0:
                target = Vector2(terrain.width - 1, target.y)
            elif target.x >= terrain.width:
                target = Vector2(0, target.y)
        return target

    def can_step(self, pos: Vector2, direction: Direction, terrain: TerrainMap) -> bool:
        return terrain.is_passable_at(self.step(pos, direction, terrain))

    def resolve(self, player: Player, terrain: TerrainMap) -> Vector2:
        """Apply the buffered turn if possible and return the player's next cell.

        A blocked pending turn stays buffered. A blocked facing leaves the
        player in place with its facing unchanged. Only ``facing`` and
        ``pending`` are mutated here; the caller moves the player.
        """
        pending = player.pending
        if pending is not None and self.can_step(player.pos, pending, terrain):
            player.facing = pending
            player.pending = None

        target = self.step(player.pos, player.facing, terrain)
        if terrain.is_passable_at(target):
            return target
        logger.debug("Player blocked at %s facing %s", player.pos, player.facing.name)
        return player.pos
