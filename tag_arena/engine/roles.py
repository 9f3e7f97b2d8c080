"""Role state machine — tag resolution, win condition, final rankings.

Single mode ("hot potato"): the chaser role moves from tagger to tagged and
the demoted agent gets a short tag-back immunity window.
Multi mode ("infection"): the tagged runner becomes an extra chaser and the
tag is appended to the match's tag log.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tag_arena.core.effects import tag_back_immunity
from tag_arena.core.enums import EndReason, GameMode, RankStatus
from tag_arena.core.models import RankingEntry, TagRecord
from tag_arena.core.snapshot import MatchResult
from tag_arena.utils.event_log import SimEvent

if TYPE_CHECKING:
    from tag_arena.config import SimulationConfig
    from tag_arena.core.match_state import MatchState
    from tag_arena.core.models import Agent

logger = logging.getLogger(__name__)


def agent_name(agent_id: int, human_id: int) -> str:
    return "You" if agent_id == human_id else f"Player {agent_id + 1}"


def ordinal(num: int) -> str:
    """1 → '1st', 12 → '12th', 23 → '23rd'."""
    v = num % 100
    if 11 <= v <= 13:
        return f"{num}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(v % 10, "th")
    return f"{num}{suffix}"


class RoleStateMachine:
    """Owns every mutation of chaser flags and the tag log."""

    __slots__ = ("_config",)

    def __init__(self, config: SimulationConfig) -> None:
        self._config = config

    # -- tagging --

    def cooldown_active(self, state: MatchState) -> bool:
        if state.last_tag_at is None:
            return False
        return state.now - state.last_tag_at < self._config.tag_cooldown_ms

    @staticmethod
    def can_tag(tagger: Agent, target: Agent, now: float) -> bool:
        return (
            tagger.is_chaser
            and target.is_vulnerable(now)
            and not target.is_tag_back_immune(now)
        )

    def resolve_tag(self, state: MatchState, tagger: Agent, tagged: Agent) -> SimEvent | None:
        """Apply a tag of *tagged* by *tagger*. Returns None when the tag is refused."""
        now = state.now
        if tagged.in_safe_zone or not self.can_tag(tagger, tagged, now):
            return None

        state.last_tag_at = now

        if state.mode == GameMode.SINGLE:
            tagger.is_chaser = False
            tagged.is_chaser = True
            tagger.apply_effect(tag_back_immunity(now, self._config.tag_back_window_ms))
            message = f"{agent_name(tagger.id, state.human_id)} tagged {agent_name(tagged.id, state.human_id)}"
        else:
            tagged.is_chaser = True
            state.tag_log.append(TagRecord(
                tagged_id=tagged.id, elapsed_ms=state.elapsed_ms, tagger_id=tagger.id,
            ))
            message = (
                f"{agent_name(tagger.id, state.human_id)} infected "
                f"{agent_name(tagged.id, state.human_id)} ({state.runner_count()} runners left)"
            )

        logger.info("TAG (%s) frame %d: agent %d -> agent %d",
                    state.mode.value, state.frame, tagger.id, tagged.id)
        return SimEvent(
            tick=state.frame, category="tag", message=message,
            entity_ids=(tagger.id, tagged.id),
        )

    # -- end of match --

    @staticmethod
    def check_win(state: MatchState) -> EndReason | None:
        if state.mode == GameMode.MULTI and state.runner_count() == 0:
            return EndReason.ALL_TAGGED
        return None

    @staticmethod
    def compute_rankings(state: MatchState) -> list[RankingEntry]:
        """Winners in index order, then tagged agents with the latest tag ranked highest."""
        if state.mode != GameMode.MULTI:
            return []
        rankings: list[RankingEntry] = []
        for agent in state.agents:
            if not agent.is_chaser:
                rankings.append(RankingEntry(
                    rank=len(rankings) + 1, agent_id=agent.id,
                    name=agent_name(agent.id, state.human_id), status=RankStatus.WINNER,
                ))
        for record in reversed(state.tag_log):
            rankings.append(RankingEntry(
                rank=len(rankings) + 1, agent_id=record.tagged_id,
                name=agent_name(record.tagged_id, state.human_id), status=RankStatus.TAGGED,
            ))
        return rankings

    @staticmethod
    def summarize(state: MatchState) -> MatchResult:
        reason = state.end_reason
        if reason == EndReason.TIME_UP:
            detail = ""
            if state.mode == GameMode.SINGLE:
                detail = ("You were the final chaser!" if state.human.is_chaser
                          else "You survived until the end!")
            return MatchResult("Time's Up!", detail)
        if reason == EndReason.ALL_TAGGED:
            detail = ""
            for entry in state.rankings:
                if entry.agent_id == state.human_id:
                    detail = f"You finished in {ordinal(entry.rank)} place!"
                    break
            return MatchResult("All Players Tagged!", detail)
        if reason == EndReason.QUIT:
            return MatchResult("Game Quit", "Thanks for playing!")
        return MatchResult("Match Aborted", "The match ended unexpectedly.")
