"""Core data models and terrain representation."""

from gridchase.core.enums import AdversaryMode, Direction, Domain, Outcome, TileKind, Variant
from gridchase.core.models import Adversary, Player, RunState, Vector2
from gridchase.core.grid import TerrainMap
from gridchase.core.game_state import GameState
from gridchase.core.snapshot import Snapshot

__all__ = [
    "Adversary",
    "AdversaryMode",
    "Direction",
    "Domain",
    "GameState",
    "Outcome",
    "Player",
    "RunState",
    "Snapshot",
    "TerrainMap",
    "TileKind",
    "Variant",
    "Vector2",
]
