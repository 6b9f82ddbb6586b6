"""Fixed-timestep clock decoupling simulation ticks from frame cadence."""

from __future__ import annotations


class FixedStepClock:
    """Decides, once per host frame, whether a simulation tick is due.

    A tick is due when at least ``interval_ms`` has elapsed since the last
    applied tick. When it fires the baseline jumps to the current frame time
    and any remainder is dropped: a long stall yields one tick, never a
    catch-up burst.
    """

    __slots__ = ("_interval", "_last")

    def __init__(self, interval_ms: float) -> None:
        if interval_ms <= 0:
            raise ValueError("interval must be positive")
        self._interval = float(interval_ms)
        self._last: float | None = None

    @property
    def interval_ms(self) -> float:
        return self._interval

    @interval_ms.setter
    def interval_ms(self, value: float) -> None:
        if value <= 0:
            raise ValueError("interval must be positive")
        self._interval = float(value)

    def start(self, now_ms: float) -> None:
        """Set the baseline; the first tick fires one interval later."""
        self._last = float(now_ms)

    def stop(self) -> None:
        self._last = None

    def advance(self, now_ms: float) -> bool:
        """True (at most once per call) when a tick should be applied now."""
        if self._last is None:
            self._last = float(now_ms)
            return False
        if now_ms - self._last >= self._interval:
            self._last = float(now_ms)
            return True
        return False
