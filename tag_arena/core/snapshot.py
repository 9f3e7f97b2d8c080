"""Immutable snapshot of the match state for the presentation layer."""

from __future__ import annotations

import math
from dataclasses import dataclass

from tag_arena.core.enums import AIState, EndReason, GameMode, MatchPhase
from tag_arena.core.match_state import MatchState
from tag_arena.core.models import PowerUp, RankingEntry, SafeZone, TagRecord


@dataclass(frozen=True, slots=True)
class AgentView:
    """Render-ready agent state with effect flags resolved at snapshot time."""

    id: int
    x: float
    y: float
    radius: float
    is_human: bool
    is_chaser: bool
    in_safe_zone: bool
    has_speed_boost: bool
    is_invincible: bool
    frozen: bool
    tag_back_immune: bool
    ai_state: AIState


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Game-over summary text for the presentation layer."""

    headline: str
    detail: str


@dataclass(frozen=True, slots=True)
class MatchSnapshot:
    """Read-only view of a match, safe to hand to another thread."""

    frame: int
    elapsed_ms: float
    mode: GameMode
    phase: MatchPhase
    remaining_s: int
    human_id: int
    agents: tuple[AgentView, ...]
    safe_zones: tuple[SafeZone, ...]
    power_ups: tuple[PowerUp, ...]
    tag_log: tuple[TagRecord, ...]
    rankings: tuple[RankingEntry, ...]
    end_reason: EndReason | None
    human_safe_seconds_left: int | None
    result: MatchResult | None = None

    @classmethod
    def from_match(
        cls,
        state: MatchState,
        max_dwell_ms: float = 3000.0,
        result: MatchResult | None = None,
    ) -> MatchSnapshot:
        now = state.now
        agents = tuple(
            AgentView(
                id=a.id, x=a.pos.x, y=a.pos.y, radius=a.radius,
                is_human=a.is_human, is_chaser=a.is_chaser,
                in_safe_zone=a.in_safe_zone,
                has_speed_boost=a.has_speed_boost(now),
                is_invincible=a.is_invincible(now),
                frozen=a.is_frozen(now),
                tag_back_immune=a.is_tag_back_immune(now),
                ai_state=a.ai_state,
            )
            for a in state.agents
        )

        safe_left: int | None = None
        if state.agents:
            human = state.human
            if human.in_safe_zone and human.safe_zone_entered_at is not None:
                dwell_s = math.floor((now - human.safe_zone_entered_at) / 1000)
                safe_left = max(0, int(max_dwell_ms // 1000) - dwell_s)

        return cls(
            frame=state.frame,
            elapsed_ms=state.elapsed_ms,
            mode=state.mode,
            phase=state.phase,
            remaining_s=state.remaining_s,
            human_id=state.human_id,
            agents=agents,
            safe_zones=tuple(z.copy() for z in state.safe_zones),
            power_ups=tuple(p.copy() for p in state.active_power_ups()),
            tag_log=tuple(state.tag_log),
            rankings=tuple(state.rankings),
            end_reason=state.end_reason,
            human_safe_seconds_left=safe_left,
            result=result,
        )

    # -- derived labels --

    @property
    def paused(self) -> bool:
        return self.phase == MatchPhase.PAUSED

    @property
    def mode_label(self) -> str:
        return self.mode.label

    @property
    def runner_count(self) -> int:
        return sum(1 for a in self.agents if not a.is_chaser)

    @property
    def human_role_label(self) -> str:
        if not self.agents:
            return ""
        return "Chaser" if self.agents[self.human_id].is_chaser else "Runner"
