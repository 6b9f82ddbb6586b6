"""Immutable snapshot of the game state for render collaborators and the API."""

from __future__ import annotations

from dataclasses import dataclass

from gridchase.core.game_state import GameState
from gridchase.core.grid import TerrainMap
from gridchase.core.models import Adversary, Player, RunState


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of a completed tick, safe to hand to other threads.

    Entities, run state and terrain are copies, so a snapshot never observes
    a later tick's mutations.
    """

    tick: int
    seed: int
    terrain: TerrainMap
    player: Player
    adversaries: tuple[Adversary, ...]
    run: RunState

    @classmethod
    def from_state(cls, state: GameState) -> Snapshot:
        return cls(
            tick=state.tick,
            seed=state.seed,
            terrain=state.terrain.copy(),
            player=state.player.copy(),
            adversaries=tuple(a.copy() for a in state.adversaries),
            run=state.run.copy(),
        )

    @property
    def remaining_collectibles(self) -> int:
        return self.terrain.remaining_collectibles()
