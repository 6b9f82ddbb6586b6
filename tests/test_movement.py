"""Tests for MovementResolver: buffered turns, blocking and tunnel wrap."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from gridchase.core.enums import Direction, TileKind
from gridchase.core.models import Player, Vector2, direction_offset, parse_direction
from gridchase.engine.movement import MovementResolver
from tests.helpers.arena import make_terrain

CORRIDOR = [
    "#######",
    "#     #",
    "# ### #",
    "#  ~  #",
    "#######",
]

TUNNEL = [
    "#####",
    "T   T",
    "#####",
]


def _player(x: int, y: int, facing: Direction, pending: Direction | None = None) -> Player:
    spawn = Vector2(x, y)
    return Player(pos=spawn, facing=facing, spawn=spawn, spawn_facing=facing, pending=pending)


class TestDirections:
    def test_offsets(self):
        assert direction_offset(Direction.UP) == Vector2(0, -1)
        assert direction_offset(Direction.DOWN) == Vector2(0, 1)
        assert direction_offset(Direction.LEFT) == Vector2(-1, 0)
        assert direction_offset(Direction.RIGHT) == Vector2(1, 0)

    def test_parse_accepts_names_members_and_values(self):
        assert parse_direction("up") == Direction.UP
        assert parse_direction(" Left ") == Direction.LEFT
        assert parse_direction(Direction.DOWN) == Direction.DOWN
        assert parse_direction(3) == Direction.RIGHT

    def test_parse_rejects_garbage(self):
        for value in ["north", "", None, 4, -1, True, 1.0, ["up"]]:
            assert parse_direction(value) is None


class TestResolve:
    def setup_method(self):
        self.terrain = make_terrain(CORRIDOR)
        self.mover = MovementResolver()

    def test_moves_along_facing(self):
        player = _player(1, 1, Direction.RIGHT)
        assert self.mover.resolve(player, self.terrain) == Vector2(2, 1)

    def test_blocked_facing_stays_put(self):
        player = _player(1, 1, Direction.UP)
        assert self.mover.resolve(player, self.terrain) == Vector2(1, 1)
        assert player.facing == Direction.UP

    def test_pending_turn_applied_and_cleared(self):
        player = _player(1, 1, Direction.RIGHT, pending=Direction.DOWN)
        assert self.mover.resolve(player, self.terrain) == Vector2(1, 2)
        assert player.facing == Direction.DOWN
        assert player.pending is None

    def test_blocked_pending_stays_buffered(self):
        player = _player(2, 1, Direction.RIGHT, pending=Direction.DOWN)
        assert self.mover.resolve(player, self.terrain) == Vector2(3, 1)
        assert player.facing == Direction.RIGHT
        assert player.pending == Direction.DOWN

    def test_buffered_turn_taken_at_next_opening(self):
        player = _player(3, 1, Direction.RIGHT, pending=Direction.DOWN)
        player.pos = self.mover.resolve(player, self.terrain)      # (4, 1): wall below
        assert player.pending == Direction.DOWN
        player.pos = self.mover.resolve(player, self.terrain)      # (5, 1)
        assert player.pos == Vector2(5, 1)
        assert self.mover.resolve(player, self.terrain) == Vector2(5, 2)
        assert player.facing == Direction.DOWN

    def test_hazard_blocks(self):
        player = _player(2, 3, Direction.RIGHT)
        assert self.mover.resolve(player, self.terrain) == Vector2(2, 3)

    def test_never_moves_onto_impassable(self):
        for y in range(self.terrain.height):
            for x in range(self.terrain.width):
                if not self.terrain.is_passable(x, y):
                    continue
                for facing in Direction:
                    target = self.mover.resolve(_player(x, y, facing), self.terrain)
                    assert self.terrain.is_passable_at(target)


class TestTunnelWrap:
    def setup_method(self):
        self.terrain = make_terrain(TUNNEL)

    def test_wrap_left_edge(self):
        mover = MovementResolver(wrap_horizontal=True)
        assert mover.resolve(_player(0, 1, Direction.LEFT), self.terrain) == Vector2(4, 1)

    def test_wrap_right_edge(self):
        mover = MovementResolver(wrap_horizontal=True)
        assert mover.resolve(_player(4, 1, Direction.RIGHT), self.terrain) == Vector2(0, 1)

    def test_no_wrap_when_disabled(self):
        mover = MovementResolver()
        assert mover.resolve(_player(0, 1, Direction.LEFT), self.terrain) == Vector2(0, 1)
        assert mover.resolve(_player(4, 1, Direction.RIGHT), self.terrain) == Vector2(4, 1)

    def test_wrap_does_not_open_vertical_edges(self):
        mover = MovementResolver(wrap_horizontal=True)
        terrain = make_terrain(["     ", "     "])
        assert terrain.get(2, 0) == TileKind.EMPTY
        assert mover.resolve(_player(2, 0, Direction.UP), terrain) == Vector2(2, 0)
