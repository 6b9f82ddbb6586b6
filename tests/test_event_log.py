"""Tests for SimEvent / EventLog and the events a tick emits."""

import sys
import os
import threading

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from gridchase.core.enums import Direction
from gridchase.utils.event_log import EventLog, SimEvent
from tests.helpers.arena import GameArena


class TestSimEvent:
    def test_default_metadata_is_none(self):
        ev = SimEvent(tick=1, category="collect", message="test")
        assert ev.metadata is None
        assert ev.entity_ids == ()

    def test_metadata_with_entity_ids(self):
        ev = SimEvent(tick=5, category="capture", message="captured",
                      entity_ids=(2,), metadata={"score": 200})
        assert ev.entity_ids == (2,)
        assert ev.metadata["score"] == 200


class TestEventLog:
    def test_since_tick(self):
        log = EventLog(maxlen=100)
        for t in range(10):
            log.append(SimEvent(tick=t, category="collect", message=f"t{t}"))
        assert [e.tick for e in log.since_tick(7)] == [7, 8, 9]

    def test_maxlen_drops_oldest(self):
        log = EventLog(maxlen=3)
        log.append_many([SimEvent(tick=t, category="x", message="") for t in range(5)])
        assert len(log) == 3
        assert [e.tick for e in log.latest(10)] == [2, 3, 4]

    def test_latest_and_clear(self):
        log = EventLog(maxlen=100)
        log.append(SimEvent(tick=1, category="hit", message="a", metadata={"lives": 2}))
        log.append(SimEvent(tick=2, category="level_up", message="b", metadata={"level": 2}))
        assert log.latest(1)[0].metadata["level"] == 2
        assert log.latest(0) == []
        log.clear()
        assert len(log) == 0

    def test_concurrent_appends(self):
        log = EventLog()

        def writer(base: int) -> None:
            for i in range(500):
                log.append(SimEvent(tick=base + i, category="x", message=""))

        threads = [threading.Thread(target=writer, args=(n * 1000,)) for n in range(4)]
        for th in threads:
            th.start()
        for th in threads:
            th.join()
        assert len(log) == 2000


class TestTickEvents:
    def test_collect_event_carries_run_metadata(self):
        arena = GameArena([
            "######",
            "# .. #",
            "######",
        ], player=(1, 1, Direction.RIGHT))
        arena.loop.start()
        events = arena.tick()
        collect = [e for e in events if e.category == "collect"]
        assert len(collect) == 1
        assert collect[0].tick == 0
        assert collect[0].metadata == {"score": 10, "lives": 3}

    def test_events_reset_each_tick(self):
        arena = GameArena([
            "#######",
            "# .   #",
            "#    .#",
            "#######",
        ], player=(1, 1, Direction.RIGHT))
        arena.loop.start()
        arena.tick()
        assert arena.loop.tick_events
        arena.tick()
        assert arena.loop.tick_events == []
