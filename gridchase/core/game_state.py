"""Mutable authoritative game state, only mutated by the GameLoop."""

from __future__ import annotations

from gridchase.core.grid import TerrainMap
from gridchase.core.models import Adversary, Player, RunState, Vector2


class GameState:
    """The single source of truth for one run."""

    __slots__ = ("tick", "seed", "terrain", "player", "adversaries", "run")

    def __init__(
        self,
        seed: int,
        terrain: TerrainMap,
        player: Player,
        adversaries: list[Adversary],
        run: RunState,
    ) -> None:
        self.tick: int = 0
        self.seed: int = seed
        self.terrain: TerrainMap = terrain
        self.player: Player = player
        self.adversaries: list[Adversary] = sorted(adversaries, key=lambda a: a.slot)
        self.run: RunState = run

    def adversary(self, slot: int) -> Adversary | None:
        for adv in self.adversaries:
            if adv.slot == slot:
                return adv
        return None

    def adversaries_at(self, pos: Vector2) -> list[Adversary]:
        """Adversaries on *pos*, in slot order."""
        return [a for a in self.adversaries if a.pos == pos]

    def replace_terrain(self, terrain: TerrainMap) -> None:
        """Swap in a regenerated map; entities on now-blocked cells go back to spawn."""
        self.terrain = terrain
        if not terrain.is_passable_at(self.player.pos):
            self.player.respawn()
        for adv in self.adversaries:
            if not terrain.is_passable_at(adv.pos):
                adv.pos = adv.spawn
                adv.facing = adv.spawn_facing
