"""ScoringEvaluator: tile effects, player/adversary collisions, win and loss.

Tile effects are produced by ``TerrainMap.consume`` when the player moves
and applied here in the same tick, so collisions and the win check always
see the updated score, lives and adversary modes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from gridchase.core.enums import Domain, Outcome
from gridchase.core.models import Vector2

if TYPE_CHECKING:
    from gridchase.config import GameConfig
    from gridchase.core.effects import TileEffect
    from gridchase.core.game_state import GameState
    from gridchase.core.grid import TerrainMap
    from gridchase.core.models import Adversary, Player, RunState
    from gridchase.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

# (minimum score, title), highest first
RANKS: tuple[tuple[int, str], ...] = (
    (2000, "Master"),
    (1500, "Elite Trainer"),
    (1000, "Gym Leader"),
    (700, "Ace Trainer"),
    (500, "Veteran"),
    (300, "Expert"),
    (150, "Trainer"),
    (0, "Rookie"),
)


def rank_for_score(score: int) -> str:
    """Title shown with the final score."""
    for threshold, title in RANKS:
        if score >= threshold:
            return title
    return RANKS[-1][1]


@dataclass(frozen=True, slots=True)
class CollisionResult:
    """What happened when adversaries overlapped the player this tick."""

    captured: tuple[int, ...] = ()   # slots defeated while vulnerable
    hit_by: int | None = None        # slot that cost the player a life
    game_over: bool = False


@dataclass(frozen=True, slots=True)
class WinResult:
    """Outcome of the end-of-tick win check."""

    cleared: bool = False
    won: bool = False
    level_up: bool = False
    bonus: int = 0


class ScoringEvaluator:
    """Applies scoring rules to the run state. Randomness comes from the injected RNG."""

    __slots__ = ("_config", "_rng")

    def __init__(self, config: GameConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng

    # -- timed modes --

    def expire_vulnerability(self, adversaries: list[Adversary], tick: int) -> list[int]:
        """Revert adversaries whose vulnerable deadline has passed. Returns their slots."""
        expired: list[int] = []
        for adv in adversaries:
            if adv.vulnerable and adv.vulnerable_until is not None and tick >= adv.vulnerable_until:
                adv.clear_vulnerable()
                expired.append(adv.slot)
        return expired

    # -- tile effects --

    def apply_tile_effect(
        self,
        effect: TileEffect,
        run: RunState,
        adversaries: list[Adversary],
        tick: int,
        interval_ms: float | None = None,
    ) -> list[str]:
        """Apply *effect* to the run. Returns the audio cues it produced.

        *interval_ms* is the tick interval currently in use; the vulnerable
        deadline is measured in ticks of that length. Defaults to the
        configured interval.
        """
        if effect.is_noop:
            return []
        cues: list[str] = []
        applied = False

        if effect.score:
            run.add_score(effect.score)
            applied = True
        if effect.extra_lives:
            run.gain_lives(effect.extra_lives)
            applied = True
        if effect.restore_life and run.lives < run.max_lives:
            run.gain_lives(1)
            run.add_score(effect.restore_bonus)
            applied = True
        if effect.vulnerable:
            if interval_ms is None:
                until = tick + self._config.vulnerable_ticks
            else:
                until = tick + self._config.vulnerable_ticks_at(interval_ms)
            for adv in adversaries:
                adv.make_vulnerable(until)
            applied = True
        if effect.encounter_chance > 0 and self._rng.next_bool(
            Domain.ENCOUNTER, 0, tick, effect.encounter_chance
        ):
            run.add_score(effect.encounter_score)
            applied = True

        if applied and effect.cue:
            cues.append(effect.cue)
        return cues

    # -- collisions --

    def evaluate(
        self,
        player: Player,
        adversaries: list[Adversary],
        run: RunState,
        terrain: TerrainMap,
        tick: int,
    ) -> CollisionResult:
        """Resolve every adversary on the player's cell, in slot order.

        A vulnerable adversary is captured and sent back to its respawn area.
        A normal one costs a life; the player then respawns and the rest of
        this tick's overlaps are ignored.
        """
        captured: list[int] = []
        for adv in sorted(adversaries, key=lambda a: a.slot):
            if adv.pos != player.pos:
                continue
            if adv.vulnerable:
                run.add_score(self._config.capture_bounty)
                run.captures += 1
                adv.pos = self._respawn_cell(adv, terrain, tick)
                adv.clear_vulnerable()
                captured.append(adv.slot)
                logger.debug("Tick %d: adversary %d captured, sent to %s", tick, adv.slot, adv.pos)
                continue

            run.lose_life()
            if run.lives <= 0:
                run.outcome = Outcome.LOST
                run.running = False
                logger.info("Tick %d: out of lives (score %d)", tick, run.score)
                return CollisionResult(captured=tuple(captured), hit_by=adv.slot, game_over=True)
            player.respawn()
            logger.debug("Tick %d: hit by adversary %d, %d lives left", tick, adv.slot, run.lives)
            return CollisionResult(captured=tuple(captured), hit_by=adv.slot)

        return CollisionResult(captured=tuple(captured))

    def _respawn_cell(self, adversary: Adversary, terrain: TerrainMap, tick: int) -> Vector2:
        area = self._config.respawn_area
        if area is None:
            return adversary.spawn
        ax, ay, aw, ah = area
        cells = [
            Vector2(x, y)
            for y in range(ay, ay + ah)
            for x in range(ax, ax + aw)
            if terrain.is_passable(x, y)
        ]
        if not cells:
            return adversary.spawn
        return self._rng.choice(Domain.RESPAWN, adversary.slot, tick, cells)

    # -- win --

    def check_win(self, state: GameState, regenerate: Callable[[int], TerrainMap] | None = None) -> WinResult:
        """Clear-the-board check, run once at the end of each tick.

        Without level looping a cleared board ends the run as won. With
        looping the level goes up, the bonus is paid and *regenerate* builds
        the next map; score and lives carry over.
        """
        run = state.run
        if run.over or state.terrain.remaining_collectibles() > 0:
            return WinResult()

        bonus = self._config.completion_bonus
        run.add_score(bonus)

        if self._config.loop_levels and regenerate is not None:
            run.level += 1
            terrain = regenerate(run.level)
            if terrain.remaining_collectibles() > 0:
                state.replace_terrain(terrain)
                logger.info("Tick %d: board cleared, advancing to level %d", state.tick, run.level)
                return WinResult(cleared=True, level_up=True, bonus=bonus)
            logger.warning("Level %d map has nothing to collect; ending run", run.level)

        run.outcome = Outcome.WON
        run.running = False
        logger.info("Tick %d: board cleared, run won (score %d)", state.tick, run.score)
        return WinResult(cleared=True, won=True, bonus=bonus)
