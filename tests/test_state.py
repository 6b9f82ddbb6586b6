"""Tests for spawning, GameState and snapshots."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from gridchase.config import GameConfig
from gridchase.core.enums import AdversaryMode, Direction, TileKind, Variant
from gridchase.core.models import Vector2
from gridchase.core.snapshot import Snapshot
from gridchase.systems.rng import DeterministicRNG
from gridchase.systems.spawner import build_state, spawn_adversaries


class TestSpawner:
    def test_slots_follow_spawn_order(self):
        config = GameConfig.for_variant(Variant.MAZE)
        advs = spawn_adversaries(config)
        assert [a.slot for a in advs] == [0, 1, 2, 3]
        assert [a.name for a in advs] == ["Blinky", "Pinky", "Inky", "Clyde"]
        assert advs[0].pos == Vector2(14, 9)
        assert all(a.mode == AdversaryMode.NORMAL for a in advs)

    def test_build_state(self):
        config = GameConfig()
        state = build_state(config, DeterministicRNG(config.world_seed))
        assert state.tick == 0
        assert state.run.lives == 3
        assert not state.run.running
        assert state.player.pos == Vector2(1, 1)
        assert state.player.facing == Direction.RIGHT
        assert len(state.adversaries) == 3
        assert state.adversary(2).pos == Vector2(18, 13)
        assert state.adversary(7) is None


class TestGameState:
    def test_adversaries_at(self):
        config = GameConfig()
        state = build_state(config, DeterministicRNG(1))
        state.adversaries[2].pos = state.adversaries[0].pos
        assert [a.slot for a in state.adversaries_at(state.adversaries[0].pos)] == [0, 2]

    def test_replace_terrain_respawns_blocked_entities(self):
        config = GameConfig()
        state = build_state(config, DeterministicRNG(1))
        state.player.pos = Vector2(5, 5)
        state.adversaries[0].pos = Vector2(7, 7)
        new_terrain = state.terrain.copy()
        new_terrain.set(5, 5, TileKind.WALL)
        new_terrain.set(7, 7, TileKind.HAZARD)

        state.replace_terrain(new_terrain)

        assert state.terrain is new_terrain
        assert state.player.pos == state.player.spawn
        assert state.adversaries[0].pos == state.adversaries[0].spawn


class TestSnapshot:
    def test_snapshot_copies_everything(self):
        config = GameConfig()
        state = build_state(config, DeterministicRNG(1))
        snap = Snapshot.from_state(state)
        before = snap.remaining_collectibles

        state.player.pos = Vector2(2, 1)
        state.adversaries[0].make_vulnerable(10)
        state.run.score = 999
        state.terrain.set(5, 5, TileKind.EMPTY)
        state.terrain.set(6, 5, TileKind.EMPTY)

        assert snap.player.pos == Vector2(1, 1)
        assert snap.adversaries[0].mode == AdversaryMode.NORMAL
        assert snap.run.score == 0
        assert snap.remaining_collectibles == before
