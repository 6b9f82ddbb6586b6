"""Tile effects: what stepping onto a tile does to the run."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TileEffect:
    """Scoring / life / mode effect attached to a tile kind.

    ``restore_life`` only applies while the player is below max lives, and
    ``restore_bonus`` is awarded alongside it. ``encounter_chance`` is rolled
    by the scoring evaluator; on success ``encounter_score`` is added.
    """

    score: int = 0
    extra_lives: int = 0
    restore_life: bool = False
    restore_bonus: int = 0
    vulnerable: bool = False
    encounter_chance: float = 0.0
    encounter_score: int = 0
    cue: str | None = None

    @property
    def is_noop(self) -> bool:
        return self == NO_EFFECT


NO_EFFECT = TileEffect()
