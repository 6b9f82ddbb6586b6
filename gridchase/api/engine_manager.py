"""EngineManager: runs the GameLoop's frame callback on a background thread.

The API reads from an atomically swapped immutable Snapshot; the GameLoop
mutates GameState exclusively on the engine thread. HTTP input only queues
a turn on the player.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING

from gridchase.core.enums import Direction
from gridchase.core.snapshot import Snapshot
from gridchase.engine.game_loop import GameLoop
from gridchase.systems.rng import DeterministicRNG
from gridchase.utils.event_log import EventLog

if TYPE_CHECKING:
    from gridchase.config import GameConfig
    from gridchase.utils.event_log import SimEvent

logger = logging.getLogger(__name__)


def _now_ms() -> float:
    return time.monotonic() * 1000.0


class EngineManager:
    """Manages the game lifecycle on a background thread.

    Provides thread-safe access to:
      - latest snapshot (atomic reference swap)
      - event log (lock-guarded ring buffer)
      - control commands (start / pause / resume / step / reset)
      - direction input
    """

    def __init__(self, config: GameConfig, event_log_size: int = 500) -> None:
        self.config = config

        self._loop: GameLoop | None = None

        # Thread-safe shared state
        self._snapshot_lock = threading.Lock()
        self._latest_snapshot: Snapshot | None = None
        self._event_log = EventLog(maxlen=event_log_size)
        self._games_played: int = 0

        # Control
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def game_over(self) -> bool:
        return self._loop is not None and self._loop.state.run.over

    @property
    def tick_rate(self) -> float:
        """Seconds between simulation ticks."""
        assert self._loop is not None
        return self._loop.clock.interval_ms / 1000.0

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        assert self._loop is not None
        self._loop.set_tick_interval(max(0.01, min(value, 2.0)) * 1000.0)

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def games_played(self) -> int:
        return self._games_played

    # -- snapshot access --

    def get_snapshot(self) -> Snapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    # -- input --

    def request_direction(self, direction: Direction | str) -> bool:
        assert self._loop is not None
        return self._loop.request_direction(direction)

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        assert self._loop is not None
        if self._loop.state.run.over:
            logger.warning("Game already over; reset before starting")
            return
        self._stop_requested.clear()
        self._paused.clear()
        if self._loop.state.tick > 0:
            # the loop restarts a stopped run from scratch
            self._event_log.clear()
        self._loop.start(_now_ms())
        self._publish_snapshot()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="engine-loop", daemon=True)
        self._thread.start()
        logger.info("EngineManager started (tick_rate=%.3fs)", self.tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("EngineManager paused at tick %d", self._current_tick())

    def resume(self) -> None:
        if self._loop is not None:
            self._loop.clock.start(_now_ms())
        self._paused.clear()
        logger.info("EngineManager resumed at tick %d", self._current_tick())

    def step(self) -> None:
        """Execute exactly one tick (must be paused)."""
        if not self._paused.is_set():
            self.pause()
        self._step_requested.set()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        if self._loop is not None:
            self._loop.stop()
        logger.info("EngineManager stopped.")

    def reset(self) -> None:
        """Stop, rebuild, and leave stopped ready to start."""
        self.stop()
        self._event_log.clear()
        self._build()
        logger.info("EngineManager reset.")

    # -- internals --

    def _build(self) -> None:
        interval = self._loop.clock.interval_ms if self._loop is not None else None
        self._loop = GameLoop(self.config, rng=DeterministicRNG(self.config.world_seed))
        if interval is not None:
            self._loop.set_tick_interval(interval)
        self._games_played += 1
        self._publish_snapshot()

    def _run_loop(self) -> None:
        """Background thread main loop: one frame per display interval."""
        logger.info("Engine thread started.")
        assert self._loop is not None
        frame_interval = 1.0 / self.config.frame_rate_hz

        while not self._stop_requested.is_set():
            if self._paused.is_set() and not self._step_requested.is_set():
                time.sleep(0.01)
                continue

            if self._step_requested.is_set():
                self._step_requested.clear()
                ticked = self._loop.tick_once()
            else:
                ticked = self._loop.frame(_now_ms())

            if ticked:
                self._publish_snapshot(self._loop.tick_events)

            if self._loop.state.run.over:
                logger.info("Game ended at tick %d.", self._loop.state.tick)
                break

            time.sleep(frame_interval)

        self._running.clear()
        logger.info("Engine thread exited.")

    def _publish_snapshot(self, events: list[SimEvent] | None = None) -> None:
        """Swap snapshot and push the last tick's events."""
        assert self._loop is not None
        snap = self._loop.create_snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap
        if events:
            self._event_log.append_many(events)

    def _current_tick(self) -> int:
        if self._loop:
            return self._loop.state.tick
        return 0
