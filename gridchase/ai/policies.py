"""Adversary movement policies: class-based, registry-dispatched.

Architecture:
  - AIContext bundles everything a policy needs (adversary, player position,
    terrain, config, rng, tick).
  - Each policy implements ``choose`` and returns the facing to take this
    tick, or None to stay put (no passable neighbour).
  - Policies are registered in POLICIES by name; ``GameConfig.adversary_policy``
    selects one.

All random draws go through the injected DeterministicRNG keyed by
(AI_DECISION, slot, tick, salt), so a run is reproducible from its seed
and its inputs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gridchase.core.enums import Direction, Domain
from gridchase.core.models import direction_offset

if TYPE_CHECKING:
    from gridchase.config import GameConfig
    from gridchase.core.grid import TerrainMap
    from gridchase.core.models import Adversary, Vector2
    from gridchase.systems.rng import DeterministicRNG

# Salts separating the draws one adversary makes on one tick
_SALT_PURSUE = 0
_SALT_PICK = 1
_SALT_TURN = 2
_SALT_TURN_PICK = 3


@dataclass(slots=True)
class AIContext:
    """All data a policy might need for one adversary on one tick."""

    adversary: Adversary
    player_pos: Vector2
    terrain: TerrainMap
    config: GameConfig
    rng: DeterministicRNG
    tick: int

    _passable: list[Direction] | None = None

    @property
    def passable(self) -> list[Direction]:
        """Directions whose neighbouring cell is passable, in enum order."""
        if self._passable is None:
            pos = self.adversary.pos
            self._passable = [
                d for d in Direction
                if self.terrain.is_passable_at(pos + direction_offset(d))
            ]
        return self._passable

    def roll(self, probability: float, salt: int) -> bool:
        return self.rng.next_bool(Domain.AI_DECISION, self.adversary.slot, self.tick, probability, salt=salt)

    def pick(self, options: list[Direction], salt: int) -> Direction:
        return self.rng.choice(Domain.AI_DECISION, self.adversary.slot, self.tick, options, salt=salt)


def closing_direction(from_pos: Vector2, to_pos: Vector2) -> Direction | None:
    """Direction that closes the dominant axis toward *to_pos*.

    Horizontal wins only when ``|dx| > |dy|``; ties go vertical. Returns
    None when the positions coincide.
    """
    dx = to_pos.x - from_pos.x
    dy = to_pos.y - from_pos.y
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    if dy != 0:
        return Direction.DOWN if dy > 0 else Direction.UP
    return None


class AdversaryPolicy(ABC):
    """Base class for adversary movement policies."""

    @abstractmethod
    def choose(self, ctx: AIContext) -> Direction | None:
        """Return the facing for this tick, or None to stay."""


class WanderPolicy(AdversaryPolicy):
    """Keep going until blocked, then turn at random.

    On top of that, with ``wander_turn_chance`` the adversary re-picks a
    random passable direction even when its way is clear.
    """

    def choose(self, ctx: AIContext) -> Direction | None:
        options = ctx.passable
        if not options:
            return None
        facing = ctx.adversary.facing
        if facing not in options:
            facing = ctx.pick(options, _SALT_PICK)
        if ctx.roll(ctx.config.wander_turn_chance, _SALT_TURN):
            facing = ctx.pick(options, _SALT_TURN_PICK)
        return facing


class PursuitPolicy(AdversaryPolicy):
    """Chase the player along the dominant axis with ``pursuit_chance``.

    When the closing move is blocked the adversary keeps its current facing
    if that is open; otherwise, and on the non-pursuit roll, it picks
    uniformly among passable directions.
    """

    def choose(self, ctx: AIContext) -> Direction | None:
        options = ctx.passable
        if not options:
            return None
        if ctx.roll(ctx.config.pursuit_chance, _SALT_PURSUE):
            preferred = closing_direction(ctx.adversary.pos, ctx.player_pos)
            if preferred in options:
                return preferred
            if ctx.adversary.facing in options:
                return ctx.adversary.facing
        return ctx.pick(options, _SALT_PICK)


POLICIES: dict[str, AdversaryPolicy] = {
    "wander": WanderPolicy(),
    "pursuit": PursuitPolicy(),
}
