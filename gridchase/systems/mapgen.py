"""Map generation for both variants.

Meadow: a deterministic modular skeleton of rocks, water and tall grass,
decorated pseudo-randomly with collectibles and rare bonus items, then
healing centers, cleared spawns and two route corridors. The generator
does not guarantee that every collectible is reachable from the player
spawn unless ``connectivity_pass`` is enabled.

Maze: a fixed text pattern overlaid on an all-wall grid.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from gridchase.core.effects import TileEffect
from gridchase.core.enums import Direction, Domain, TileKind, Variant
from gridchase.core.grid import TerrainMap
from gridchase.core.models import Vector2, direction_offset

if TYPE_CHECKING:
    from gridchase.config import GameConfig
    from gridchase.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

# '#' wall, '.' collectible, 'o' bonus item, 'T' tunnel mouth,
# ' ' / '-' / 'G' empty (open floor, house door, house interior)
MAZE_PATTERN: tuple[str, ...] = (
    "############################",
    "#............##............#",
    "#.####.#####.##.#####.####.#",
    "#o........................o#",
    "#.####.##.########.##.####.#",
    "#......##....##....##......#",
    "######.#####.##.#####.######",
    "######.##..........##.######",
    "######.##.###--###.##.######",
    "T.........# GGGG #.........T",
    "######.##.# GGGG #.##.######",
    "######.##.########.##.######",
    "######.##..........##.######",
    "######.##.########.##.######",
    "#............##............#",
    "#.####.#####.##.#####.####.#",
    "#o..##................##..o#",
    "###.##.##.########.##.##.###",
    "#......##....##....##......#",
    "#.##########.##.##########.#",
    "#..........................#",
    "############################",
)

_PATTERN_KINDS: dict[str, TileKind] = {
    "#": TileKind.WALL,
    ".": TileKind.COLLECTIBLE,
    "o": TileKind.BONUS_ITEM,
}


def tile_effects(config: GameConfig) -> dict[TileKind, TileEffect]:
    """Effect table for a configuration."""
    return {
        TileKind.COLLECTIBLE: TileEffect(score=config.collectible_score, cue="collect"),
        TileKind.BONUS_ITEM: TileEffect(
            score=config.bonus_item_score,
            extra_lives=config.bonus_item_extra_lives,
            vulnerable=config.bonus_item_vulnerable,
            cue="powerup",
        ),
        TileKind.SPECIAL_ZONE: TileEffect(
            restore_life=True, restore_bonus=config.special_zone_bonus, cue="heal",
        ),
        TileKind.ENCOUNTER_ZONE: TileEffect(
            encounter_chance=config.encounter_chance,
            encounter_score=config.encounter_score,
            cue="encounter",
        ),
    }


def _new_map(config: GameConfig, goal_kinds: tuple[TileKind, ...], tunnel_rows: tuple[int, ...] = ()) -> TerrainMap:
    return TerrainMap(
        config.grid_width,
        config.grid_height,
        default=TileKind.WALL,
        effects=tile_effects(config),
        goal_kinds=goal_kinds,
        tunnel_rows=tunnel_rows,
    )


def _spawn_cells(config: GameConfig) -> list[tuple[int, int]]:
    return [config.player_spawn, *config.adversary_spawns]


def _clear(terrain: TerrainMap, x: int, y: int) -> None:
    if 0 < x < terrain.width - 1 and 0 < y < terrain.height - 1:
        terrain.set(x, y, TileKind.EMPTY)


# ---------------------------------------------------------------------------
# Meadow
# ---------------------------------------------------------------------------

def healing_centers(cols: int, rows: int) -> list[tuple[int, int]]:
    """Fixed healing-center coordinates for a meadow of the given size."""
    return [(cols // 2, rows // 2), (3, 3), (cols - 4, rows - 4)]


def generate_meadow(config: GameConfig, rng: DeterministicRNG, level: int = 1) -> TerrainMap:
    cols, rows = config.grid_width, config.grid_height
    terrain = _new_map(config, goal_kinds=(TileKind.COLLECTIBLE,))

    for y in range(rows):
        for x in range(cols):
            if x == 0 or x == cols - 1 or y == 0 or y == rows - 1:
                kind = TileKind.WALL
            elif (x % 6 == 0 and y % 4 == 0) or (x % 4 == 0 and y % 6 == 0):
                kind = TileKind.WALL
            elif (x + y) % 8 == 0 and 2 < x < cols - 3 and 2 < y < rows - 3:
                kind = TileKind.HAZARD
            elif x % 7 == 3 and y % 5 == 2 and 1 < x < cols - 2 and 1 < y < rows - 2:
                kind = TileKind.ENCOUNTER_ZONE
            elif rng.next_bool(Domain.MAP_GEN, level, y * cols + x, config.bonus_item_chance):
                kind = TileKind.BONUS_ITEM
            else:
                kind = TileKind.COLLECTIBLE
            terrain.set(x, y, kind)

    centers = healing_centers(cols, rows)
    for cx, cy in centers:
        if 0 < cx < cols - 1 and 0 < cy < rows - 1:
            terrain.set(cx, cy, TileKind.SPECIAL_ZONE)

    # Route corridors through the middle row and column; centers survive
    mid_row, mid_col = rows // 2, cols // 2
    for x in range(1, cols - 1):
        if x % 3 != 0 and terrain.get(x, mid_row) != TileKind.SPECIAL_ZONE:
            keep = rng.next_bool(Domain.MAP_GEN, level, mid_row * cols + x, config.route_collectible_chance, salt=1)
            terrain.set(x, mid_row, TileKind.COLLECTIBLE if keep else TileKind.EMPTY)
    for y in range(1, rows - 1):
        if y % 3 != 0 and terrain.get(mid_col, y) != TileKind.SPECIAL_ZONE:
            keep = rng.next_bool(Domain.MAP_GEN, level, y * cols + mid_col, config.route_collectible_chance, salt=2)
            terrain.set(mid_col, y, TileKind.COLLECTIBLE if keep else TileKind.EMPTY)

    # Open the ring around each center
    for cx, cy in centers:
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                x, y = cx + dx, cy + dy
                if 0 < x < cols - 1 and 0 < y < rows - 1 and terrain.get(x, y) in (TileKind.WALL, TileKind.HAZARD):
                    terrain.set(x, y, TileKind.EMPTY)

    px, py = config.player_spawn
    for x, y in ((px, py), (px + 1, py), (px, py + 1), *config.adversary_spawns):
        _clear(terrain, x, y)

    if config.connectivity_pass:
        _drop_unreachable(terrain, Vector2(*config.player_spawn))

    logger.debug("Generated meadow %dx%d (level %d): %d collectibles",
                 cols, rows, level, terrain.remaining_collectibles())
    return terrain


# ---------------------------------------------------------------------------
# Maze
# ---------------------------------------------------------------------------

def generate_maze(config: GameConfig, pattern: tuple[str, ...] = MAZE_PATTERN) -> TerrainMap:
    cols, rows = config.grid_width, config.grid_height
    tunnel_rows = tuple(
        y for y, line in enumerate(pattern[:rows])
        if line.startswith("T") and line.endswith("T") and len(line) == cols
    )
    terrain = _new_map(config, goal_kinds=(TileKind.COLLECTIBLE, TileKind.BONUS_ITEM), tunnel_rows=tunnel_rows)

    for y, line in enumerate(pattern[:rows]):
        for x, char in enumerate(line[:cols]):
            terrain.set(x, y, _PATTERN_KINDS.get(char, TileKind.EMPTY))

    # Border stays solid except at tunnel mouths
    for x in range(cols):
        terrain.set(x, 0, TileKind.WALL)
        terrain.set(x, rows - 1, TileKind.WALL)
    for y in range(rows):
        if y in terrain.tunnel_rows:
            continue
        terrain.set(0, y, TileKind.WALL)
        terrain.set(cols - 1, y, TileKind.WALL)

    for x, y in _spawn_cells(config):
        _clear(terrain, x, y)

    if config.connectivity_pass:
        _drop_unreachable(terrain, Vector2(*config.player_spawn), wrap=config.wrap_horizontal)
    return terrain


def generate_map(config: GameConfig, rng: DeterministicRNG, level: int = 1) -> TerrainMap:
    """Build the map for the configured variant."""
    if config.variant == Variant.MAZE:
        return generate_maze(config)
    return generate_meadow(config, rng, level)


# ---------------------------------------------------------------------------
# Optional connectivity post-pass
# ---------------------------------------------------------------------------

def reachable_cells(terrain: TerrainMap, start: Vector2, wrap: bool = False) -> set[tuple[int, int]]:
    """Flood fill of passable cells from *start* (4-neighbourhood)."""
    if not terrain.is_passable_at(start):
        return set()
    seen = {(start.x, start.y)}
    frontier = deque([start])
    while frontier:
        cur = frontier.popleft()
        for d in Direction:
            nxt = cur + direction_offset(d)
            if wrap and nxt.y in terrain.tunnel_rows:
                nxt = Vector2(nxt.x % terrain.width, nxt.y)
            key = (nxt.x, nxt.y)
            if key in seen or not terrain.is_passable_at(nxt):
                continue
            seen.add(key)
            frontier.append(nxt)
    return seen


def _drop_unreachable(terrain: TerrainMap, start: Vector2, wrap: bool = False) -> None:
    reachable = reachable_cells(terrain, start, wrap)
    dropped = 0
    for y in range(terrain.height):
        for x in range(terrain.width):
            if terrain.get(x, y) in terrain.goal_kinds and (x, y) not in reachable:
                terrain.set(x, y, TileKind.EMPTY)
                dropped += 1
    if dropped:
        logger.info("Connectivity pass cleared %d unreachable collectibles", dropped)
