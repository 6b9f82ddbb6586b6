"""Engine layer: game loop, movement, scoring, fixed-step clock."""

from gridchase.engine.clock import FixedStepClock
from gridchase.engine.game_loop import GameLoop
from gridchase.engine.movement import MovementResolver
from gridchase.engine.scoring import ScoringEvaluator

__all__ = ["FixedStepClock", "GameLoop", "MovementResolver", "ScoringEvaluator"]
