"""Tests for the fixed-step simulation clock."""

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from gridchase.engine.clock import FixedStepClock


class TestFixedStepClock:
    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            FixedStepClock(0)
        clock = FixedStepClock(100)
        with pytest.raises(ValueError):
            clock.interval_ms = -5

    def test_first_frame_sets_baseline(self):
        clock = FixedStepClock(200)
        assert clock.advance(5000) is False
        assert clock.advance(5199) is False
        assert clock.advance(5200) is True

    def test_one_tick_per_interval(self):
        clock = FixedStepClock(200)
        clock.start(0)
        due = [t for t in range(0, 1001, 16) if clock.advance(t)]
        # 60 Hz frames over one second at 200 ms per tick
        assert len(due) == 4
        for earlier, later in zip(due, due[1:]):
            assert later - earlier >= 200

    def test_stall_yields_single_tick(self):
        clock = FixedStepClock(200)
        clock.start(0)
        assert clock.advance(10_000) is True
        assert clock.advance(10_000) is False
        assert clock.advance(10_199) is False
        assert clock.advance(10_200) is True

    def test_stop_clears_baseline(self):
        clock = FixedStepClock(150)
        clock.start(0)
        clock.stop()
        assert clock.advance(500) is False
        assert clock.advance(649) is False
        assert clock.advance(650) is True

    def test_interval_change_applies_immediately(self):
        clock = FixedStepClock(200)
        clock.start(0)
        clock.interval_ms = 50
        assert clock.advance(50) is True
