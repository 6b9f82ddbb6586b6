"""Game configuration with per-variant presets."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from gridchase.core.enums import Direction, Variant


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for a game run.

    Defaults describe the meadow variant; use :meth:`for_variant` to get
    the maze preset.
    """

    variant: Variant = Variant.MEADOW

    # World
    world_seed: int = 42
    grid_width: int = 20
    grid_height: int = 15
    min_grid_width: int = 20
    min_grid_height: int = 15

    # Timing
    tick_interval_ms: float = 200.0
    slow_tick_interval_ms: float = 250.0   # used when performance_mode is on
    performance_mode: bool = False
    frame_rate_hz: float = 60.0            # host frame cadence (API engine thread)
    max_ticks: int = 20000                 # headless CLI cap

    # Player
    player_spawn: tuple[int, int] = (1, 1)
    player_facing: Direction = Direction.RIGHT
    start_lives: int = 3
    max_lives: int = 3

    # Adversaries (index = slot)
    adversary_spawns: tuple[tuple[int, int], ...] = ((18, 1), (1, 13), (18, 13))
    adversary_facings: tuple[Direction, ...] = (Direction.LEFT, Direction.UP, Direction.DOWN)
    adversary_names: tuple[str, ...] = ("enemy", "enemy2", "enemy3")
    respawn_area: tuple[int, int, int, int] | None = None   # (x, y, w, h); None = own spawn

    # AI
    adversary_policy: str = "wander"       # "wander" | "pursuit"
    pursuit_chance: float = 0.7
    wander_turn_chance: float = 0.1

    # Movement
    wrap_horizontal: bool = False

    # Scoring
    collectible_score: int = 10
    bonus_item_score: int = 100
    bonus_item_extra_lives: int = 1
    bonus_item_vulnerable: bool = False
    special_zone_bonus: int = 50           # awarded with a restored life
    encounter_chance: float = 0.1
    encounter_score: int = 5
    capture_bounty: int = 200
    completion_bonus: int = 100
    vulnerable_duration_ms: float = 5000.0

    # Levels
    loop_levels: bool = False

    # Map generation
    bonus_item_chance: float = 0.15
    route_collectible_chance: float = 0.8
    connectivity_pass: bool = False

    # Logging / replay
    log_level: str = "INFO"
    replay_file: str = "replay.json"

    # Extra presentation binding per slot (sprite keys), never read by the core
    adversary_sprites: tuple[str, ...] = ("enemy.png", "enemy2.png", "enemy3.png")

    def __post_init__(self) -> None:
        if self.grid_width < 3 or self.grid_height < 3:
            raise ValueError(f"grid must be at least 3x3, got {self.grid_width}x{self.grid_height}")
        if self.tick_interval_ms <= 0 or self.slow_tick_interval_ms <= 0:
            raise ValueError("tick intervals must be positive")
        if self.max_lives < 1 or not 0 < self.start_lives <= self.max_lives:
            raise ValueError(f"invalid lives: start={self.start_lives} max={self.max_lives}")
        n = len(self.adversary_spawns)
        if len(self.adversary_facings) != n or len(self.adversary_names) != n:
            raise ValueError("adversary spawns, facings and names must have the same length")
        if self.adversary_policy not in ("wander", "pursuit"):
            raise ValueError(f"unknown adversary policy {self.adversary_policy!r}")
        for x, y in (self.player_spawn, *self.adversary_spawns):
            if not self._interior(x, y):
                raise ValueError(
                    f"spawn ({x}, {y}) is not inside the {self.grid_width}x{self.grid_height} grid border"
                )
        if self.respawn_area is not None:
            ax, ay, aw, ah = self.respawn_area
            if aw < 1 or ah < 1 or not (self._interior(ax, ay) and self._interior(ax + aw - 1, ay + ah - 1)):
                raise ValueError(f"respawn area {self.respawn_area} is not inside the grid border")

    def _interior(self, x: int, y: int) -> bool:
        return 0 < x < self.grid_width - 1 and 0 < y < self.grid_height - 1

    # -- derived --

    @property
    def adversary_count(self) -> int:
        return len(self.adversary_spawns)

    @property
    def effective_tick_interval_ms(self) -> float:
        return self.slow_tick_interval_ms if self.performance_mode else self.tick_interval_ms

    @property
    def vulnerable_ticks(self) -> int:
        """Vulnerable duration in ticks at the configured interval."""
        return self.vulnerable_ticks_at(self.effective_tick_interval_ms)

    def vulnerable_ticks_at(self, interval_ms: float) -> int:
        """Vulnerable duration in ticks of *interval_ms* (at least one)."""
        return max(1, math.ceil(self.vulnerable_duration_ms / interval_ms))

    # -- presets --

    @classmethod
    def for_variant(cls, variant: Variant | str, **overrides) -> GameConfig:
        """Build the preset for *variant*, then apply *overrides*."""
        if isinstance(variant, str):
            variant = Variant[variant.upper()]
        base = dict(_MAZE_PRESET) if variant == Variant.MAZE else {}
        base.update(overrides)
        return cls(variant=variant, **base)

    def with_viewport(self, width_px: float, height_px: float, tile_px: float) -> GameConfig:
        """Derive grid dimensions from a viewport, clamped to the variant minimums.

        Meadow spawns are re-anchored to the new corners; the maze layout is
        fixed so its spawns stay put.
        """
        if tile_px <= 0:
            raise ValueError("tile size must be positive")
        cols = max(self.min_grid_width, int(width_px // tile_px))
        rows = max(self.min_grid_height, int(height_px // tile_px))
        if self.variant == Variant.MAZE:
            return replace(self, grid_width=cols, grid_height=rows)
        spawns = _corner_spawns(cols, rows, self.adversary_count)
        return replace(self, grid_width=cols, grid_height=rows, adversary_spawns=spawns)

    def with_grid(self, cols: int, rows: int) -> GameConfig:
        """Same as :meth:`with_viewport` with a one-pixel tile."""
        return self.with_viewport(cols, rows, 1)


def _corner_spawns(cols: int, rows: int, count: int) -> tuple[tuple[int, int], ...]:
    corners = ((cols - 2, 1), (1, rows - 2), (cols - 2, rows - 2))
    return tuple(corners[i % len(corners)] for i in range(count))


_MAZE_PRESET: dict = dict(
    grid_width=28,
    grid_height=22,
    min_grid_width=28,
    min_grid_height=22,
    tick_interval_ms=150.0,
    player_spawn=(1, 9),
    player_facing=Direction.RIGHT,
    adversary_spawns=((14, 9), (15, 9), (14, 10), (15, 10)),
    adversary_facings=(Direction.LEFT, Direction.UP, Direction.RIGHT, Direction.DOWN),
    adversary_names=("Blinky", "Pinky", "Inky", "Clyde"),
    adversary_sprites=("enemy1", "enemy2", "enemy3", "enemy1"),
    respawn_area=(14, 9, 2, 2),
    adversary_policy="pursuit",
    wrap_horizontal=True,
    bonus_item_score=50,
    bonus_item_extra_lives=0,
    bonus_item_vulnerable=True,
    encounter_chance=0.0,
    completion_bonus=1000,
    loop_levels=True,
)
