"""Replay serialization: records tick-by-tick state for deterministic replay."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gridchase.core.enums import Direction
    from gridchase.core.game_state import GameState

logger = logging.getLogger(__name__)


class ReplayRecorder:
    """Accumulates per-tick records and flushes them to a JSON replay file.

    Each record holds the direction input consumed on that tick, so a run
    can be reproduced by feeding the same inputs to a loop built from the
    same seed and variant.
    """

    __slots__ = ("_path", "_ticks", "_seed", "_variant")

    def __init__(self, path: str | Path, seed: int, variant: str = "meadow") -> None:
        self._path = Path(path)
        self._seed = seed
        self._variant = variant
        self._ticks: list[dict[str, Any]] = []

    @property
    def ticks(self) -> list[dict[str, Any]]:
        return self._ticks

    def record_tick(self, tick: int, input_direction: Direction | None, state: GameState) -> None:
        run = state.run
        self._ticks.append(
            {
                "tick": tick,
                "input": input_direction.name if input_direction is not None else None,
                "player": [state.player.pos.x, state.player.pos.y],
                "adversaries": [
                    {
                        "slot": a.slot,
                        "pos": [a.pos.x, a.pos.y],
                        "mode": a.mode.name,
                    }
                    for a in state.adversaries
                ],
                "score": run.score,
                "lives": run.lives,
                "level": run.level,
                "outcome": run.outcome.name,
            }
        )

    def flush(self) -> None:
        """Write accumulated data to disk."""
        replay = {
            "version": "1.0",
            "seed": self._seed,
            "variant": self._variant,
            "total_ticks": len(self._ticks),
            "ticks": self._ticks,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(replay, indent=2), encoding="utf-8")
        logger.info("Replay saved to %s (%d ticks)", self._path, len(self._ticks))


def load_replay(path: str | Path) -> dict[str, Any]:
    """Read a replay file written by :meth:`ReplayRecorder.flush`."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if "ticks" not in data or "seed" not in data:
        raise ValueError(f"{path} is not a replay file")
    return data
