"""GameArena: test fixture for hand-built boards.

Builds a real GameLoop, then swaps in a terrain drawn from an ASCII layout
and places the player and adversaries where the test wants them.

Usage:
    arena = GameArena([
        "#######",
        "#  .  #",
        "#######",
    ], player=(2, 1, Direction.RIGHT))
    arena.loop.start()
    arena.tick()
    assert arena.run.score == 10

Legend: '#' wall, '.' collectible, ' ' empty, '~' hazard, '+' special zone,
'o' bonus item, 'g' encounter zone. A row starting with 'T' is a tunnel row
('T' cells are empty).
"""

from __future__ import annotations

import sys
import os
from unittest.mock import MagicMock

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from gridchase.config import GameConfig
from gridchase.core.enums import Direction, TileKind
from gridchase.core.grid import TerrainMap
from gridchase.core.models import Adversary, Player, Vector2
from gridchase.engine.game_loop import GameLoop
from gridchase.systems.mapgen import tile_effects
from gridchase.systems.rng import DeterministicRNG

LEGEND: dict[str, TileKind] = {
    "#": TileKind.WALL,
    ".": TileKind.COLLECTIBLE,
    " ": TileKind.EMPTY,
    "T": TileKind.EMPTY,
    "~": TileKind.HAZARD,
    "+": TileKind.SPECIAL_ZONE,
    "o": TileKind.BONUS_ITEM,
    "g": TileKind.ENCOUNTER_ZONE,
}


def make_terrain(
    layout: list[str],
    config: GameConfig | None = None,
    goal_kinds: tuple[TileKind, ...] = (TileKind.COLLECTIBLE,),
) -> TerrainMap:
    config = config or GameConfig()
    tunnel_rows = tuple(y for y, row in enumerate(layout) if row.startswith("T"))
    terrain = TerrainMap(
        len(layout[0]), len(layout),
        default=TileKind.WALL,
        effects=tile_effects(config),
        goal_kinds=goal_kinds,
        tunnel_rows=tunnel_rows,
    )
    for y, row in enumerate(layout):
        for x, char in enumerate(row):
            terrain.set(x, y, LEGEND[char])
    return terrain


class GameArena:
    """A GameLoop on a hand-drawn board with recording collaborators."""

    def __init__(
        self,
        layout: list[str],
        player: tuple[int, int, Direction],
        adversaries: tuple[tuple[int, int, Direction], ...] = (),
        goal_kinds: tuple[TileKind, ...] = (TileKind.COLLECTIBLE,),
        seed: int = 7,
        **overrides,
    ) -> None:
        px, py, pfacing = player
        self.config = GameConfig(
            world_seed=seed,
            grid_width=len(layout[0]),
            grid_height=len(layout),
            player_spawn=(px, py),
            player_facing=pfacing,
            adversary_spawns=tuple((x, y) for x, y, _ in adversaries),
            adversary_facings=tuple(f for _, _, f in adversaries),
            adversary_names=tuple(f"adv{i}" for i in range(len(adversaries))),
            **overrides,
        )
        self.renderer = MagicMock()
        self.audio = MagicMock()
        self.lifecycle = MagicMock()
        self.loop = GameLoop(
            self.config,
            rng=DeterministicRNG(seed),
            renderer=self.renderer,
            audio=self.audio,
            lifecycle=self.lifecycle,
        )
        state = self.loop.state
        state.terrain = make_terrain(layout, self.config, goal_kinds)
        spawn = Vector2(px, py)
        state.player = Player(pos=spawn, facing=pfacing, spawn=spawn, spawn_facing=pfacing)
        state.adversaries = [
            Adversary(
                slot=i, name=f"adv{i}", pos=Vector2(x, y), facing=f,
                spawn=Vector2(x, y), spawn_facing=f,
            )
            for i, (x, y, f) in enumerate(adversaries)
        ]

    # -- shortcuts --

    @property
    def state(self):
        return self.loop.state

    @property
    def run(self):
        return self.loop.state.run

    @property
    def player(self) -> Player:
        return self.loop.state.player

    @property
    def terrain(self) -> TerrainMap:
        return self.loop.state.terrain

    def adversary(self, slot: int) -> Adversary:
        adv = self.loop.state.adversary(slot)
        assert adv is not None
        return adv

    def tick(self, count: int = 1) -> list:
        """Run *count* ticks and return every event they emitted."""
        events: list = []
        for _ in range(count):
            if not self.loop.tick_once():
                break
            events.extend(self.loop.tick_events)
        return events

    def cues(self) -> list[str]:
        return [c.args[0] for c in self.audio.play.call_args_list]
