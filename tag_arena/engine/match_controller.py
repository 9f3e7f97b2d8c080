"""MatchController — match lifecycle and the per-tick pipeline.

Lifecycle:
  SETUP → RUNNING ⇄ PAUSED → ENDED

Tick pipeline (RUNNING only):
  1. Movement: human intent and AI steering, in agent index order
  2. Interactions: effects, safe zones, contact, power-ups
  3. Win check: multi mode ends when no runners remain
  4. Invariants: an inconsistent role assignment aborts the match

All time is supplied by the host in milliseconds. Timed effects are expiry
timestamps compared against that clock, so nothing can fire after the match
ends. The host calls ``tick`` every frame and ``clock_tick`` once a second.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tag_arena.ai.policy import AIPolicy
from tag_arena.core.effects import freeze
from tag_arena.core.enums import Domain, EndReason, GameMode, HumanRole, MatchPhase
from tag_arena.core.match_state import MatchInvariantError, MatchState
from tag_arena.core.models import Agent, DirectionalIntent, Vector2
from tag_arena.core.snapshot import MatchResult, MatchSnapshot
from tag_arena.engine.interactions import InteractionEngine, build_safe_zones
from tag_arena.engine.movement import MovementResolver
from tag_arena.engine.roles import RoleStateMachine
from tag_arena.utils.event_log import SimEvent

if TYPE_CHECKING:
    from tag_arena.config import SimulationConfig
    from tag_arena.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

_IDLE = DirectionalIntent()


class MatchController:
    """Owns the current MatchState and drives it through its lifecycle."""

    __slots__ = (
        "_config", "_rng", "_movement", "_policy", "_roles", "_interactions",
        "_state", "_result", "_tick_events", "_matches_played",
    )

    def __init__(self, config: SimulationConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng
        self._movement = MovementResolver(config)
        self._policy = AIPolicy(config, rng, self._movement)
        self._roles = RoleStateMachine(config)
        self._interactions = InteractionEngine(config, rng, self._roles)
        self._state: MatchState | None = None
        self._result: MatchResult | None = None
        self._tick_events: list[SimEvent] = []
        self._matches_played: int = 0

    @property
    def state(self) -> MatchState | None:
        return self._state

    @property
    def tick_events(self) -> list[SimEvent]:
        """Events emitted since the last call to ``drain_events``."""
        return self._tick_events

    def drain_events(self) -> list[SimEvent]:
        events, self._tick_events = self._tick_events, []
        return events

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_match(
        self,
        mode: GameMode | str = GameMode.SINGLE,
        human_role: HumanRole | str = HumanRole.RANDOM,
        now: float = 0.0,
    ) -> MatchState:
        """Discard any previous match and start a fresh one in RUNNING."""
        mode = GameMode(mode)
        human_role = HumanRole(human_role)
        cfg = self._config
        # Distinct RNG keys per match so "play again" does not replay the same layout.
        match_no = self._matches_played
        self._matches_played += 1

        duration = cfg.single_duration_s if mode == GameMode.SINGLE else cfg.multi_duration_s
        state = MatchState(mode=mode, duration_s=duration, human_id=cfg.human_index,
                           started_at=now, match_no=match_no)

        for i in range(cfg.agent_count):
            x = self._rng.next_range(Domain.SPAWN, i, match_no * 2,
                                     cfg.spawn_margin, cfg.field_width - cfg.spawn_margin)
            y = self._rng.next_range(Domain.SPAWN, i, match_no * 2 + 1,
                                     cfg.spawn_margin, cfg.field_height - cfg.spawn_margin)
            state.agents.append(Agent(
                id=i, pos=Vector2(x, y), radius=cfg.agent_radius, speed=cfg.agent_speed,
                is_human=(i == cfg.human_index),
            ))

        chaser_id = self._pick_initial_chaser(human_role, match_no)
        state.agent(chaser_id).is_chaser = True

        state.safe_zones = build_safe_zones(cfg)
        self._interactions.spawn_power_up(state)

        state.phase = MatchPhase.RUNNING
        state.check_invariants()
        self._state = state
        self._result = None
        self._tick_events = [SimEvent(
            tick=0, category="match",
            message=f"{mode.label} match started, Player {chaser_id + 1} is it",
            entity_ids=(chaser_id,),
        )]
        logger.info("Match started: mode=%s duration=%ds chaser=%d human=%d",
                    mode.value, duration, chaser_id, cfg.human_index)
        return state

    def _pick_initial_chaser(self, role: HumanRole, match_no: int) -> int:
        cfg = self._config
        if role == HumanRole.CHASER:
            return cfg.human_index
        if role == HumanRole.RUNNER:
            ai_ids = [i for i in range(cfg.agent_count) if i != cfg.human_index]
            return ai_ids[self._rng.next_int(Domain.ROLE, 0, match_no, 0, len(ai_ids) - 1)]
        return self._rng.next_int(Domain.ROLE, 1, match_no, 0, cfg.agent_count - 1)

    def pause(self) -> bool:
        state = self._state
        if state is None or state.phase != MatchPhase.RUNNING:
            return False
        state.phase = MatchPhase.PAUSED
        logger.info("Match paused at %.1fs", state.elapsed_ms / 1000)
        return True

    def resume(self) -> bool:
        state = self._state
        if state is None or state.phase != MatchPhase.PAUSED:
            return False
        state.phase = MatchPhase.RUNNING
        logger.info("Match resumed at %.1fs", state.elapsed_ms / 1000)
        return True

    def quit(self) -> bool:
        return self.end_match(EndReason.QUIT)

    def freeze_all(self, now: float) -> bool:
        """Freeze every agent (the triggering human included) for the freeze duration."""
        state = self._state
        if state is None or state.phase != MatchPhase.RUNNING:
            return False
        for agent in state.agents:
            agent.apply_effect(freeze(now, self._config.freeze_ms))
        self._tick_events.append(SimEvent(
            tick=state.frame, category="ability", message="Everyone is frozen!",
        ))
        return True

    def end_match(self, reason: EndReason) -> bool:
        """Transition to ENDED and compute rankings. Returns False if already ended."""
        state = self._state
        if state is None or state.ended:
            return False
        state.phase = MatchPhase.ENDED
        state.end_reason = reason
        state.rankings = self._roles.compute_rankings(state)
        self._result = self._roles.summarize(state)
        self._tick_events.append(SimEvent(
            tick=state.frame, category="match",
            message=f"{self._result.headline} {self._result.detail}".strip(),
        ))
        logger.info("Match ended: reason=%s elapsed=%.1fs tags=%d",
                    reason.value, state.elapsed_ms / 1000, len(state.tag_log))
        return True

    # ------------------------------------------------------------------
    # Cadence
    # ------------------------------------------------------------------

    def tick(self, now: float, intent: DirectionalIntent = _IDLE) -> None:
        """Advance one frame to host time *now* (ms)."""
        state = self._state
        if state is None or state.ended:
            return
        if state.phase != MatchPhase.RUNNING:
            state.last_frame_at = now
            return

        elapsed = max(0.0, now - state.last_frame_at)
        state.last_frame_at = now
        state.now = now
        state.frame += 1

        try:
            for agent in state.agents:
                if agent.id == state.human_id:
                    self._movement.move_human(agent, intent, elapsed, now)
                else:
                    self._policy.steer(agent, state, elapsed)

            self._tick_events.extend(self._interactions.run(state))

            reason = self._roles.check_win(state)
            if reason is not None:
                self.end_match(reason)
                return

            state.check_invariants()
        except MatchInvariantError:
            logger.exception("Invariant violated at frame %d, aborting match", state.frame)
            self.end_match(EndReason.ERROR)

    def clock_tick(self) -> None:
        """One-second countdown step; counts only while RUNNING."""
        state = self._state
        if state is None or state.phase != MatchPhase.RUNNING:
            return
        state.remaining_s -= 1
        if state.remaining_s <= 0:
            state.remaining_s = 0
            self.end_match(EndReason.TIME_UP)

    # ------------------------------------------------------------------
    # Read model
    # ------------------------------------------------------------------

    def snapshot(self) -> MatchSnapshot | None:
        if self._state is None:
            return None
        return MatchSnapshot.from_match(
            self._state, self._config.safe_zone_max_dwell_ms, self._result)
