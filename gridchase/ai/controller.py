"""AdversaryController: per-tick facing decisions and moves for adversaries."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gridchase.ai.policies import POLICIES, AIContext, AdversaryPolicy
from gridchase.core.enums import Direction
from gridchase.core.models import direction_offset

if TYPE_CHECKING:
    from gridchase.config import GameConfig
    from gridchase.core.grid import TerrainMap
    from gridchase.core.models import Adversary, Vector2
    from gridchase.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


class AdversaryController:
    """Dispatches adversary decisions to the configured policy.

    Holds no per-run state: everything it needs arrives through the call or
    through the injected RNG, so the same inputs always give the same moves.
    """

    __slots__ = ("_config", "_rng", "_policy")

    def __init__(
        self,
        config: GameConfig,
        rng: DeterministicRNG,
        policy: AdversaryPolicy | None = None,
    ) -> None:
        self._config = config
        self._rng = rng
        self._policy = policy or POLICIES[config.adversary_policy]

    @property
    def policy(self) -> AdversaryPolicy:
        return self._policy

    def decide(self, adversary: Adversary, player_pos: Vector2, terrain: TerrainMap, tick: int) -> Direction | None:
        """Facing for *adversary* this tick; None when fully enclosed."""
        ctx = AIContext(
            adversary=adversary,
            player_pos=player_pos,
            terrain=terrain,
            config=self._config,
            rng=self._rng,
            tick=tick,
        )
        return self._policy.choose(ctx)

    def advance(self, adversary: Adversary, player_pos: Vector2, terrain: TerrainMap, tick: int) -> bool:
        """Decide and move one cell. Returns True if the adversary moved."""
        facing = self.decide(adversary, player_pos, terrain, tick)
        if facing is None:
            logger.debug("Adversary %d enclosed at %s", adversary.slot, adversary.pos)
            return False
        adversary.facing = facing
        target = adversary.pos + direction_offset(facing)
        if not terrain.is_passable_at(target):
            return False
        adversary.pos = target
        return True

    def advance_all(self, adversaries: list[Adversary], player_pos: Vector2, terrain: TerrainMap, tick: int) -> int:
        """Advance every adversary in slot order. Returns how many moved."""
        moved = 0
        for adversary in sorted(adversaries, key=lambda a: a.slot):
            if self.advance(adversary, player_pos, terrain, tick):
                moved += 1
        return moved
