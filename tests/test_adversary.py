"""Tests for adversary policies and the AdversaryController."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from gridchase.ai.controller import AdversaryController
from gridchase.ai.policies import PursuitPolicy, WanderPolicy, closing_direction
from gridchase.config import GameConfig
from gridchase.core.enums import Direction
from gridchase.core.models import Adversary, Vector2
from gridchase.systems.rng import DeterministicRNG
from tests.helpers.arena import make_terrain

OPEN = [
    "#########",
    "#       #",
    "#       #",
    "#       #",
    "#       #",
    "#########",
]

POCKET = [
    "#####",
    "#####",
    "## ##",
    "#####",
]


def _adv(x: int, y: int, facing: Direction, slot: int = 0) -> Adversary:
    spawn = Vector2(x, y)
    return Adversary(slot=slot, name=f"adv{slot}", pos=spawn, facing=facing,
                     spawn=spawn, spawn_facing=facing)


class TestClosingDirection:
    def test_horizontal_when_dominant(self):
        assert closing_direction(Vector2(1, 1), Vector2(5, 2)) == Direction.RIGHT
        assert closing_direction(Vector2(5, 1), Vector2(1, 2)) == Direction.LEFT

    def test_vertical_when_dominant(self):
        assert closing_direction(Vector2(1, 1), Vector2(2, 5)) == Direction.DOWN
        assert closing_direction(Vector2(1, 5), Vector2(2, 1)) == Direction.UP

    def test_ties_go_vertical(self):
        assert closing_direction(Vector2(1, 1), Vector2(3, 3)) == Direction.DOWN
        assert closing_direction(Vector2(3, 3), Vector2(1, 1)) == Direction.UP

    def test_same_cell(self):
        assert closing_direction(Vector2(2, 2), Vector2(2, 2)) is None


class TestPursuit:
    def setup_method(self):
        self.config = GameConfig(adversary_policy="pursuit", pursuit_chance=1.0)
        self.terrain = make_terrain(OPEN)
        self.ctl = AdversaryController(self.config, DeterministicRNG(5))

    def test_uses_pursuit_policy(self):
        assert isinstance(self.ctl.policy, PursuitPolicy)

    def test_closes_on_player(self):
        adv = _adv(7, 1, Direction.UP)
        player = Vector2(1, 2)
        start = adv.pos.manhattan(player)
        for tick in range(3):
            assert self.ctl.advance(adv, player, self.terrain, tick)
        assert adv.pos.manhattan(player) == start - 3
        assert adv.facing == Direction.LEFT

    def test_blocked_preference_keeps_facing(self):
        # Player straight above the top-row adversary: UP is a wall, keep going RIGHT
        adv = _adv(3, 1, Direction.RIGHT)
        assert self.ctl.decide(adv, Vector2(3, -5), self.terrain, 0) == Direction.RIGHT

    def test_never_pursues_when_chance_is_zero(self):
        config = GameConfig(adversary_policy="pursuit", pursuit_chance=0.0)
        ctl = AdversaryController(config, DeterministicRNG(5))
        adv = _adv(4, 2, Direction.UP)
        picks = {ctl.decide(adv, Vector2(1, 2), self.terrain, t) for t in range(60)}
        assert picks == set(Direction)


class TestWander:
    def setup_method(self):
        self.config = GameConfig(adversary_policy="wander", wander_turn_chance=0.0)
        self.terrain = make_terrain(OPEN)
        self.ctl = AdversaryController(self.config, DeterministicRNG(9))

    def test_uses_wander_policy(self):
        assert isinstance(self.ctl.policy, WanderPolicy)

    def test_keeps_going_until_blocked(self):
        adv = _adv(1, 2, Direction.RIGHT)
        for tick in range(6):
            self.ctl.advance(adv, Vector2(0, 0), self.terrain, tick)
        assert adv.pos == Vector2(7, 2)

    def test_turns_when_blocked(self):
        adv = _adv(7, 2, Direction.RIGHT)
        choice = self.ctl.decide(adv, Vector2(0, 0), self.terrain, 0)
        assert choice in (Direction.UP, Direction.DOWN, Direction.LEFT)

    def test_turn_chance_rerolls(self):
        config = GameConfig(adversary_policy="wander", wander_turn_chance=1.0)
        ctl = AdversaryController(config, DeterministicRNG(9))
        adv = _adv(4, 2, Direction.RIGHT)
        picks = {ctl.decide(adv, Vector2(0, 0), self.terrain, t) for t in range(60)}
        assert len(picks) > 1


class TestController:
    def test_enclosed_adversary_stays(self):
        ctl = AdversaryController(GameConfig(), DeterministicRNG(1))
        terrain = make_terrain(POCKET)
        adv = _adv(2, 2, Direction.UP)
        assert ctl.decide(adv, Vector2(0, 0), terrain, 0) is None
        assert not ctl.advance(adv, Vector2(0, 0), terrain, 0)
        assert adv.pos == Vector2(2, 2)

    def test_same_seed_same_moves(self):
        terrain = make_terrain(OPEN)
        config = GameConfig(adversary_policy="pursuit", pursuit_chance=0.5)
        paths = []
        for _ in range(2):
            ctl = AdversaryController(config, DeterministicRNG(77))
            advs = [_adv(1, 1, Direction.RIGHT, 0), _adv(7, 4, Direction.LEFT, 1)]
            trail = []
            for tick in range(40):
                ctl.advance_all(advs, Vector2(4, 2), terrain, tick)
                trail.append(tuple((a.pos.x, a.pos.y, int(a.facing)) for a in advs))
            paths.append(trail)
        assert paths[0] == paths[1]

    def test_advance_all_counts_moves(self):
        terrain = make_terrain(OPEN)
        ctl = AdversaryController(GameConfig(wander_turn_chance=0.0), DeterministicRNG(3))
        advs = [_adv(1, 1, Direction.RIGHT, 0), _adv(7, 4, Direction.LEFT, 1)]
        assert ctl.advance_all(advs, Vector2(4, 2), terrain, 0) == 2
        assert advs[0].pos == Vector2(2, 1)
        assert advs[1].pos == Vector2(6, 4)

    def test_adversaries_never_enter_walls(self):
        terrain = make_terrain(OPEN)
        ctl = AdversaryController(GameConfig(), DeterministicRNG(11))
        advs = [_adv(1, 1, Direction.RIGHT, 0), _adv(7, 4, Direction.LEFT, 1)]
        for tick in range(200):
            ctl.advance_all(advs, Vector2(4, 2), terrain, tick)
            for a in advs:
                assert terrain.is_passable_at(a.pos)
