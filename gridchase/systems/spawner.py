"""Builds players, adversaries and whole game states from configuration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gridchase.core.game_state import GameState
from gridchase.core.models import Adversary, Player, RunState, Vector2
from gridchase.systems.mapgen import generate_map

if TYPE_CHECKING:
    from gridchase.config import GameConfig
    from gridchase.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


def spawn_player(config: GameConfig) -> Player:
    spawn = Vector2(*config.player_spawn)
    return Player(pos=spawn, facing=config.player_facing, spawn=spawn, spawn_facing=config.player_facing)


def spawn_adversaries(config: GameConfig) -> list[Adversary]:
    """One adversary per configured spawn; the slot is the spawn index."""
    adversaries: list[Adversary] = []
    for slot, ((x, y), facing, name) in enumerate(
        zip(config.adversary_spawns, config.adversary_facings, config.adversary_names)
    ):
        spawn = Vector2(x, y)
        adversaries.append(Adversary(
            slot=slot, name=name, pos=spawn, facing=facing,
            spawn=spawn, spawn_facing=facing,
        ))
    return adversaries


def new_run(config: GameConfig) -> RunState:
    return RunState(score=0, lives=config.start_lives, max_lives=config.max_lives, level=1)


def build_state(config: GameConfig, rng: DeterministicRNG) -> GameState:
    """Fresh map, entities and run state, all derived from *config* and *rng*."""
    terrain = generate_map(config, rng, level=1)
    state = GameState(
        seed=config.world_seed,
        terrain=terrain,
        player=spawn_player(config),
        adversaries=spawn_adversaries(config),
        run=new_run(config),
    )
    logger.info(
        "Built %s game %dx%d: %d adversaries, %d collectibles",
        config.variant.name.lower(), terrain.width, terrain.height,
        len(state.adversaries), terrain.remaining_collectibles(),
    )
    return state
