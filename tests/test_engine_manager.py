"""Tests for the EngineManager host cadence and command handling.

The manager is driven with a fake millisecond clock and ``advance()`` calls,
so no background thread is involved.
"""

import unittest

from tag_arena.api.engine_manager import EngineManager
from tag_arena.config import SimulationConfig
from tag_arena.core.enums import EndReason, GameMode, HumanRole, MatchPhase
from tag_arena.core.models import DirectionalIntent
from tag_arena.utils.event_log import EventLog, SimEvent


class _FakeClock:
    def __init__(self, start: float = 10_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def step(self, ms: float) -> None:
        self.now += ms


def _build_manager(**overrides):
    clock = _FakeClock()
    return EngineManager(SimulationConfig(**overrides), clock=clock), clock


class TestEngineManagerCadence(unittest.TestCase):

    def test_no_snapshot_before_start(self):
        mgr, clock = _build_manager()
        self.assertIsNone(mgr.get_snapshot())
        clock.step(5000.0)
        mgr.advance()
        self.assertIsNone(mgr.get_snapshot())

    def test_start_publishes_snapshot(self):
        mgr, _ = _build_manager()
        snap = mgr.start_match(GameMode.SINGLE, HumanRole.CHASER)
        self.assertIsNotNone(snap)
        self.assertEqual(snap.phase, MatchPhase.RUNNING)
        self.assertEqual(snap.remaining_s, 180)
        self.assertEqual(snap.frame, 0)

    def test_frames_advance_with_clock(self):
        mgr, clock = _build_manager()
        mgr.start_match(GameMode.SINGLE, HumanRole.CHASER)
        for _ in range(5):
            clock.step(16.67)
            mgr.advance()
        self.assertEqual(mgr.get_snapshot().frame, 5)

    def test_countdown_once_per_second(self):
        mgr, clock = _build_manager()
        mgr.start_match(GameMode.MULTI, HumanRole.RUNNER)
        clock.step(999.0)
        mgr.advance()
        self.assertEqual(mgr.get_snapshot().remaining_s, 300)
        clock.step(1.0)
        mgr.advance()
        self.assertEqual(mgr.get_snapshot().remaining_s, 299)
        clock.step(2000.0)
        mgr.advance()
        self.assertEqual(mgr.get_snapshot().remaining_s, 297)

    def test_time_up_ends_match(self):
        mgr, clock = _build_manager(single_duration_s=2)
        mgr.start_match(GameMode.SINGLE, HumanRole.CHASER)
        clock.step(2000.0)
        mgr.advance()
        snap = mgr.get_snapshot()
        self.assertEqual(snap.phase, MatchPhase.ENDED)
        self.assertEqual(snap.end_reason, EndReason.TIME_UP)
        self.assertEqual(snap.result.headline, "Time's Up!")

    def test_paused_clock_holds(self):
        mgr, clock = _build_manager()
        mgr.start_match(GameMode.SINGLE, HumanRole.CHASER)
        self.assertTrue(mgr.pause())
        clock.step(3000.0)
        mgr.advance()
        self.assertEqual(mgr.get_snapshot().remaining_s, 180)
        self.assertTrue(mgr.get_snapshot().paused)
        self.assertTrue(mgr.resume())
        self.assertFalse(mgr.get_snapshot().paused)


class TestEngineManagerCommands(unittest.TestCase):

    def test_quit_then_noop(self):
        """A second quit on an ended match is refused."""
        mgr, _ = _build_manager()
        mgr.start_match(GameMode.MULTI, HumanRole.CHASER)
        self.assertTrue(mgr.quit())
        self.assertFalse(mgr.quit())
        self.assertEqual(mgr.get_snapshot().end_reason, EndReason.QUIT)

    def test_freeze_marks_agents(self):
        mgr, _ = _build_manager()
        mgr.start_match(GameMode.SINGLE, HumanRole.CHASER)
        self.assertTrue(mgr.freeze())
        self.assertTrue(all(a.frozen for a in mgr.get_snapshot().agents))

    def test_intent_reset_on_new_match(self):
        mgr, _ = _build_manager()
        mgr.set_intent(DirectionalIntent(up=True))
        self.assertFalse(mgr.intent.idle)
        mgr.start_match(GameMode.SINGLE, HumanRole.CHASER)
        self.assertTrue(mgr.intent.idle)

    def test_events_published_and_cleared_per_match(self):
        mgr, _ = _build_manager()
        mgr.start_match(GameMode.SINGLE, HumanRole.CHASER)
        mgr.freeze()
        categories = [e.category for e in mgr.event_log.latest()]
        self.assertEqual(categories, ["match", "ability"])
        mgr.start_match(GameMode.MULTI, HumanRole.RUNNER)
        self.assertEqual([e.category for e in mgr.event_log.latest()], ["match"])

    def test_thread_start_stop(self):
        mgr, _ = _build_manager()
        mgr.start()
        self.assertTrue(mgr.running)
        mgr.stop()
        self.assertFalse(mgr.running)


class TestEventLog(unittest.TestCase):

    def test_bounded(self):
        log = EventLog(maxlen=3)
        log.append_many([SimEvent(tick=i, category="tag", message=str(i)) for i in range(5)])
        self.assertEqual([e.tick for e in log.latest()], [2, 3, 4])

    def test_since_tick(self):
        log = EventLog()
        for i in range(4):
            log.append(SimEvent(tick=i * 10, category="tag", message=""))
        self.assertEqual([e.tick for e in log.since_tick(15)], [20, 30])

    def test_clear(self):
        log = EventLog()
        log.append(SimEvent(tick=1, category="match", message="x"))
        log.clear()
        self.assertEqual(log.latest(), [])


if __name__ == "__main__":
    unittest.main()
