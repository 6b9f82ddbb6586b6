"""Thread-safe event buffer for game events exposed via the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SimEvent:
    """A single game event (collect, capture, hit, level_up, game_over, ...)."""

    tick: int
    category: str
    message: str
    entity_ids: tuple[int, ...] = ()   # adversary slots involved
    metadata: dict | None = None


class EventLog:
    """Event buffer. Writers append once per tick; readers get copies.

    With ``maxlen`` the oldest events are dropped first; without it events
    are kept until :meth:`clear`.
    """

    __slots__ = ("_buffer", "_lock")

    def __init__(self, maxlen: int | None = None) -> None:
        self._buffer: deque[SimEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def append(self, event: SimEvent) -> None:
        with self._lock:
            self._buffer.append(event)

    def append_many(self, events: list[SimEvent]) -> None:
        with self._lock:
            self._buffer.extend(events)

    def since_tick(self, tick: int) -> list[SimEvent]:
        """Return all events with tick >= *tick*."""
        with self._lock:
            return [e for e in self._buffer if e.tick >= tick]

    def latest(self, count: int = 50) -> list[SimEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:] if count > 0 else []

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()
