"""Collaborator boundaries the core drives: render, audio, lifecycle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from gridchase.core.enums import Outcome

if TYPE_CHECKING:
    from gridchase.core.snapshot import Snapshot


@dataclass(frozen=True, slots=True)
class GameOverNotice:
    """Sent once when a run ends."""

    score: int
    outcome: Outcome
    level: int
    rank: str
    tick: int

    @property
    def won(self) -> bool:
        return self.outcome == Outcome.WON


class Renderer(Protocol):
    def render(self, snapshot: Snapshot) -> None: ...


class AudioSink(Protocol):
    def play(self, cue: str) -> None: ...


class LifecycleListener(Protocol):
    def game_over(self, notice: GameOverNotice) -> None: ...
