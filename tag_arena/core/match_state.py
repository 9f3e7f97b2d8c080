"""Mutable authoritative match state — only mutated by the MatchController."""

from __future__ import annotations

from tag_arena.core.enums import EndReason, GameMode, MatchPhase
from tag_arena.core.models import Agent, PowerUp, RankingEntry, SafeZone, TagRecord


class MatchInvariantError(RuntimeError):
    """Role or index state that the rules forbid; fatal to the current match."""


class MatchState:
    """The single source of truth for one match."""

    __slots__ = (
        "mode", "match_no", "phase", "duration_s", "remaining_s", "human_id",
        "started_at", "now", "last_frame_at", "last_tag_at", "frame",
        "agents", "safe_zones", "power_ups", "next_power_up_at",
        "_next_power_up_id", "tag_log", "rankings", "end_reason",
        "_last_chaser_count",
    )

    def __init__(
        self,
        mode: GameMode,
        duration_s: int,
        human_id: int,
        started_at: float,
        match_no: int = 0,
    ) -> None:
        self.mode: GameMode = mode
        self.match_no: int = match_no
        self.phase: MatchPhase = MatchPhase.SETUP
        self.duration_s: int = duration_s
        self.remaining_s: int = duration_s
        self.human_id: int = human_id
        self.started_at: float = started_at
        self.now: float = started_at
        self.last_frame_at: float = started_at
        self.last_tag_at: float | None = None
        self.frame: int = 0
        self.agents: list[Agent] = []
        self.safe_zones: list[SafeZone] = []
        self.power_ups: list[PowerUp] = []
        self.next_power_up_at: float = started_at
        self._next_power_up_id: int = 1
        self.tag_log: list[TagRecord] = []
        self.rankings: list[RankingEntry] = []
        self.end_reason: EndReason | None = None
        self._last_chaser_count: int = 0

    # -- phase helpers --

    @property
    def running(self) -> bool:
        return self.phase == MatchPhase.RUNNING

    @property
    def paused(self) -> bool:
        return self.phase == MatchPhase.PAUSED

    @property
    def ended(self) -> bool:
        return self.phase == MatchPhase.ENDED

    @property
    def elapsed_ms(self) -> float:
        return self.now - self.started_at

    # -- agents --

    def agent(self, agent_id: int) -> Agent:
        if not 0 <= agent_id < len(self.agents):
            raise MatchInvariantError(f"agent index {agent_id} out of range")
        return self.agents[agent_id]

    @property
    def human(self) -> Agent:
        return self.agent(self.human_id)

    def chaser_count(self) -> int:
        return sum(1 for a in self.agents if a.is_chaser)

    def runner_count(self) -> int:
        return sum(1 for a in self.agents if not a.is_chaser)

    def rng_seq(self, seq: int) -> int:
        """Fold the match number into an RNG sequence so each match draws fresh values."""
        return (self.match_no << 32) | seq

    def check_invariants(self) -> None:
        """Raise MatchInvariantError if the role assignment is inconsistent with the mode."""
        count = self.chaser_count()
        if self.mode == GameMode.SINGLE and count != 1:
            raise MatchInvariantError(f"single mode requires exactly one chaser, found {count}")
        if self.mode == GameMode.MULTI and count < self._last_chaser_count:
            raise MatchInvariantError(
                f"chaser count dropped from {self._last_chaser_count} to {count} in multi mode")
        self._last_chaser_count = count

    # -- power-ups --

    def allocate_power_up_id(self) -> int:
        pid = self._next_power_up_id
        self._next_power_up_id += 1
        return pid

    def active_power_ups(self) -> list[PowerUp]:
        return [p for p in self.power_ups if not p.collected]
