"""EngineManager — runs the MatchController's frame and clock cadence on a background thread.

The API reads from an atomically-swapped immutable MatchSnapshot. Control
commands and input arrive from request threads and are applied under a lock
between frames, so the match state has a single writer at any moment.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Callable

from tag_arena.core.enums import GameMode, HumanRole
from tag_arena.core.models import DirectionalIntent
from tag_arena.engine.match_controller import MatchController
from tag_arena.systems.rng import DeterministicRNG
from tag_arena.utils.event_log import EventLog

if TYPE_CHECKING:
    from tag_arena.config import SimulationConfig
    from tag_arena.core.snapshot import MatchSnapshot

logger = logging.getLogger(__name__)

_CLOCK_PERIOD_MS = 1000.0


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class EngineManager:
    """Manages the host cadence for one controller.

    Provides thread-safe access to:
      - latest snapshot (atomic reference swap)
      - event log (lock-guarded buffer)
      - match commands (start / pause / resume / quit / freeze / input)
    """

    def __init__(self, config: SimulationConfig, clock: Callable[[], float] | None = None) -> None:
        self.config = config
        self._clock = clock or _monotonic_ms
        self._frame_interval: float = 1.0 / config.frame_rate

        self._controller = MatchController(config, DeterministicRNG(config.seed))
        self._intent = DirectionalIntent()
        self._next_clock_at: float = 0.0

        # Thread-safe shared state
        self._match_lock = threading.Lock()
        self._snapshot_lock = threading.Lock()
        self._latest_snapshot: MatchSnapshot | None = None
        self._event_log = EventLog()

        # Control
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._stop_requested = threading.Event()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def intent(self) -> DirectionalIntent:
        return self._intent

    def get_snapshot(self) -> MatchSnapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    # -- thread lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="match-loop", daemon=True)
        self._thread.start()
        logger.info("EngineManager started (%.0f fps)", self.config.frame_rate)

    def stop(self) -> None:
        self._stop_requested.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        self._running.clear()
        logger.info("EngineManager stopped.")

    # -- match commands (any thread) --

    def start_match(self, mode: GameMode, human_role: HumanRole) -> MatchSnapshot | None:
        with self._match_lock:
            now = self._clock()
            self._controller.start_match(mode, human_role, now)
            self._intent = DirectionalIntent()
            self._next_clock_at = now + _CLOCK_PERIOD_MS
            self._event_log.clear()
            self._publish()
        return self.get_snapshot()

    def pause(self) -> bool:
        return self._command(self._controller.pause)

    def resume(self) -> bool:
        return self._command(self._controller.resume)

    def quit(self) -> bool:
        return self._command(self._controller.quit)

    def freeze(self) -> bool:
        return self._command(lambda: self._controller.freeze_all(self._clock()))

    def set_intent(self, intent: DirectionalIntent) -> None:
        self._intent = intent

    def advance(self) -> None:
        """Run one frame plus any due countdown steps on the calling thread."""
        with self._match_lock:
            now = self._clock()
            self._controller.tick(now, self._intent)
            while self._controller.state is not None and now >= self._next_clock_at:
                self._controller.clock_tick()
                self._next_clock_at += _CLOCK_PERIOD_MS
            self._publish()

    # -- internals --

    def _command(self, action: Callable[[], bool]) -> bool:
        with self._match_lock:
            ok = action()
            self._publish()
        return ok

    def _publish(self) -> None:
        """Swap snapshot and push pending events. Caller holds the match lock."""
        snap = self._controller.snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap
        events = self._controller.drain_events()
        if events:
            self._event_log.append_many(events)

    def _run_loop(self) -> None:
        logger.info("Match thread started.")
        while not self._stop_requested.is_set():
            started = time.perf_counter()
            self.advance()
            remaining = self._frame_interval - (time.perf_counter() - started)
            if remaining > 0:
                time.sleep(remaining)
        self._running.clear()
        logger.info("Match thread exited.")
