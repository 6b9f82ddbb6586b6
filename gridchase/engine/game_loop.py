"""GameLoop: the authoritative tick sequencer.

Tick order:
  1. Expire vulnerability whose deadline has been reached
  2. Player movement, tile consumption and tile effect
  3. Adversary decisions and moves, in slot order
  4. Collisions, in slot order
  5. Win check (board cleared)
  6. Advance the tick counter, publish events, cues and the replay record
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from gridchase.ai.controller import AdversaryController
from gridchase.core.interfaces import GameOverNotice
from gridchase.core.models import parse_direction
from gridchase.core.snapshot import Snapshot
from gridchase.engine.clock import FixedStepClock
from gridchase.engine.movement import MovementResolver
from gridchase.engine.scoring import ScoringEvaluator, rank_for_score
from gridchase.systems.mapgen import generate_map
from gridchase.systems.rng import DeterministicRNG
from gridchase.systems.spawner import build_state
from gridchase.utils.event_log import SimEvent

if TYPE_CHECKING:
    from gridchase.config import GameConfig
    from gridchase.core.game_state import GameState
    from gridchase.core.interfaces import AudioSink, LifecycleListener, Renderer
    from gridchase.utils.replay import ReplayRecorder

logger = logging.getLogger(__name__)


class GameLoop:
    """The heartbeat of a run.

    Single writer of the GameState. Other threads may only queue a turn via
    :meth:`request_direction`. Render, audio and lifecycle collaborators are
    optional; a failing collaborator is logged and never alters the run.
    """

    __slots__ = (
        "_config",
        "_rng",
        "_state",
        "_clock",
        "_movement",
        "_ai",
        "_scoring",
        "_renderer",
        "_audio",
        "_lifecycle",
        "_recorder",
        "_tick_events",
        "_tick_cues",
    )

    def __init__(
        self,
        config: GameConfig,
        rng: DeterministicRNG | None = None,
        renderer: Renderer | None = None,
        audio: AudioSink | None = None,
        lifecycle: LifecycleListener | None = None,
        recorder: ReplayRecorder | None = None,
    ) -> None:
        self._config = config
        self._rng = rng or DeterministicRNG(config.world_seed)
        self._renderer = renderer
        self._audio = audio
        self._lifecycle = lifecycle
        self._recorder = recorder
        self._clock = FixedStepClock(config.effective_tick_interval_ms)
        self._tick_events: list[SimEvent] = []
        self._tick_cues: list[str] = []
        self._build()

    def _build(self) -> None:
        config = self._config
        self._movement = MovementResolver(wrap_horizontal=config.wrap_horizontal)
        self._ai = AdversaryController(config, self._rng)
        self._scoring = ScoringEvaluator(config, self._rng)
        self._state = build_state(config, self._rng)

    # -- accessors --

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def clock(self) -> FixedStepClock:
        return self._clock

    @property
    def running(self) -> bool:
        return self._state.run.running

    @property
    def tick_events(self) -> list[SimEvent]:
        """Events emitted during the most recent tick."""
        return self._tick_events

    @property
    def tick_cues(self) -> list[str]:
        """Audio cues produced during the most recent tick."""
        return self._tick_cues

    def create_snapshot(self) -> Snapshot:
        return Snapshot.from_state(self._state)

    # -- lifecycle --

    def start(self, now_ms: float = 0.0) -> None:
        """Begin a run; the first tick is due one interval later.

        A run that was stopped after ticking is not resumed: it is reset and
        starts over from tick 0.
        """
        run = self._state.run
        if run.over:
            logger.warning("Run already finished; reset before starting again")
            return
        if run.running:
            return
        if self._state.tick > 0:
            logger.info("Run was stopped at tick %d; restarting from a fresh reset", self._state.tick)
            self.reset()
            run = self._state.run
        run.running = True
        self._clock.start(now_ms)
        logger.info("=== Game started (%s, seed=%d) ===",
                    self._config.variant.name.lower(), self._state.seed)
        self._play("game_start")

    def stop(self) -> None:
        """Pause the run. Subsequent ticks are ignored until :meth:`start`."""
        self._state.run.running = False
        self._clock.stop()

    def reset(self) -> None:
        """Rebuild map, entities and run state from configuration."""
        self._rng = DeterministicRNG(self._config.world_seed)
        self._clock.stop()
        self._tick_events = []
        self._tick_cues = []
        self._build()
        logger.info("Game reset (seed=%d)", self._state.seed)

    def resize(self, cols: int, rows: int) -> None:
        """Adopt new grid dimensions and regenerate the map wholesale.

        Entities go back to their (re-anchored) spawns; score, lives and
        level carry over.
        """
        config = self._config.with_grid(cols, rows)
        if (config.grid_width, config.grid_height) == (self._state.terrain.width, self._state.terrain.height):
            return
        self._config = config
        run, tick = self._state.run, self._state.tick
        self._build()
        self._state.run = run
        self._state.tick = tick
        logger.info("Resized to %dx%d", config.grid_width, config.grid_height)

    def set_tick_interval(self, interval_ms: float) -> None:
        self._clock.interval_ms = interval_ms

    # -- input --

    def request_direction(self, value: object) -> bool:
        """Buffer a turn request. Malformed input is ignored and returns False."""
        direction = parse_direction(value)
        if direction is None:
            logger.debug("Ignoring malformed direction %r", value)
            return False
        self._state.player.pending = direction
        return True

    # -- frames and ticks --

    def frame(self, now_ms: float) -> bool:
        """Host frame callback: apply at most one tick, then render.

        Returns True if a tick was applied.
        """
        ticked = False
        if self.running and self._clock.advance(now_ms):
            ticked = self.tick_once()
        if self._renderer is not None:
            self._notify(self._renderer.render, self.create_snapshot())
        return ticked

    def tick_once(self) -> bool:
        """Execute a single tick. Returns False if the run is not active."""
        state = self._state
        run = state.run
        if not run.running or run.over:
            return False

        self._tick_events = []
        self._tick_cues = []
        tick = state.tick
        player = state.player
        terrain = state.terrain
        requested = player.pending

        # 1. timed modes
        expired = self._scoring.expire_vulnerability(state.adversaries, tick)
        if expired:
            self._emit("vulnerable_end", "Adversaries back to normal", entity_ids=tuple(expired))

        # 2. player
        target = self._movement.resolve(player, terrain)
        if target != player.pos:
            player.pos = target
            kind = terrain.get_at(target)
            effect = terrain.consume(target.x, target.y)
            if kind in terrain.goal_kinds:
                run.collected += 1
            for cue in self._scoring.apply_tile_effect(
                effect, run, state.adversaries, tick, interval_ms=self._clock.interval_ms,
            ):
                self._tick_cues.append(cue)
                self._emit(cue, f"Player triggered {kind.name.lower()} at {target}",
                           metadata={"score": run.score, "lives": run.lives})

        # 3. adversaries
        self._ai.advance_all(state.adversaries, player.pos, terrain, tick)

        # 4. collisions
        collision = self._scoring.evaluate(player, state.adversaries, run, terrain, tick)
        if collision.captured:
            self._tick_cues.append("capture")
            self._emit("capture", f"Captured {len(collision.captured)} adversaries",
                       entity_ids=collision.captured, metadata={"score": run.score})
        if collision.hit_by is not None:
            self._tick_cues.append("damage")
            self._emit("hit", f"Hit by adversary {collision.hit_by}, {run.lives} lives left",
                       entity_ids=(collision.hit_by,), metadata={"lives": run.lives})

        # 5. win check
        win = self._scoring.check_win(state, regenerate=self._regenerator())
        if win.level_up:
            self._tick_cues.append("level_up")
            self._emit("level_up", f"Board cleared, level {run.level}",
                       metadata={"level": run.level, "bonus": win.bonus})
        elif win.won:
            self._tick_cues.append("victory")

        # 6. advance and publish
        state.tick += 1
        for cue in self._tick_cues:
            self._play(cue)
        if run.over:
            self._finish()
        if self._recorder is not None:
            self._recorder.record_tick(tick, requested, state)
        return True

    def run(self, max_ticks: int | None = None, inputs: Callable[[int], Any] | None = None) -> int:
        """Headless run without a clock. Returns the number of ticks applied.

        *inputs*, if given, is called with the tick number before each tick
        and its result (if not None) is passed to :meth:`request_direction`.
        """
        limit = max_ticks if max_ticks is not None else self._config.max_ticks
        if not self.running:
            self.start()
        applied = 0
        while applied < limit:
            if inputs is not None:
                requested = inputs(self._state.tick)
                if requested is not None:
                    self.request_direction(requested)
            if not self.tick_once():
                break
            applied += 1
            if self._state.tick % 100 == 0:
                run = self._state.run
                logger.info("Tick %d: score %d, lives %d, level %d, %d left",
                            self._state.tick, run.score, run.lives, run.level,
                            self._state.terrain.remaining_collectibles())
        logger.info("=== Game finished at tick %d (%s) ===",
                    self._state.tick, self._state.run.outcome.name.lower())
        if self._recorder is not None:
            self._recorder.flush()
        return applied

    # -- internals --

    def _regenerator(self) -> Callable[[int], Any]:
        config, rng = self._config, self._rng
        return lambda level: generate_map(config, rng, level)

    def _finish(self) -> None:
        run = self._state.run
        notice = GameOverNotice(
            score=run.score,
            outcome=run.outcome,
            level=run.level,
            rank=rank_for_score(run.score),
            tick=self._state.tick,
        )
        self._clock.stop()
        self._emit("game_over", f"Game over: {run.outcome.name.lower()} with {run.score} points ({notice.rank})",
                   metadata={"score": run.score, "outcome": run.outcome.name, "rank": notice.rank})
        logger.info("Game over at tick %d: %s, score %d, rank %s",
                    notice.tick, run.outcome.name.lower(), run.score, notice.rank)
        if self._lifecycle is not None:
            self._notify(self._lifecycle.game_over, notice)

    def _emit(self, category: str, message: str,
              entity_ids: tuple[int, ...] = (), metadata: dict | None = None) -> None:
        self._tick_events.append(SimEvent(
            tick=self._state.tick,
            category=category,
            message=message,
            entity_ids=entity_ids,
            metadata=metadata,
        ))

    def _play(self, cue: str) -> None:
        if self._audio is not None:
            self._notify(self._audio.play, cue)

    @staticmethod
    def _notify(callback: Callable[..., Any], *args: Any) -> None:
        try:
            callback(*args)
        except Exception:
            logger.warning("Collaborator %r failed", callback, exc_info=True)
