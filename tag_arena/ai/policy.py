"""AIPolicy — chase/flee/wander steering for autonomous agents.

Steering runs every tick from the agent's current role:
  chaser  → CHASE the nearest vulnerable runner (IDLE if none)
  runner  → FLEE the nearest chaser when it is inside the flee radius,
            otherwise WANDER between random waypoints at reduced speed

The per-agent decision cadence only re-rolls ``next_decision_at``; it does
not gate steering. There is no path planning: the field has no obstacles.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from tag_arena.core.enums import AIState, Domain
from tag_arena.core.models import Vector2

if TYPE_CHECKING:
    from tag_arena.config import SimulationConfig
    from tag_arena.core.match_state import MatchState
    from tag_arena.core.models import Agent
    from tag_arena.engine.movement import MovementResolver
    from tag_arena.systems.rng import DeterministicRNG


class AIPolicy:
    """Decision engine for non-human agents. Holds no per-match state."""

    __slots__ = ("_config", "_rng", "_movement")

    def __init__(
        self,
        config: SimulationConfig,
        rng: DeterministicRNG,
        movement: MovementResolver,
    ) -> None:
        self._config = config
        self._rng = rng
        self._movement = movement

    # ------------------------------------------------------------------
    # Target selection
    # ------------------------------------------------------------------

    @staticmethod
    def nearest_vulnerable(actor: Agent, agents: Iterable[Agent], now: float) -> Agent | None:
        """Closest agent that is not a chaser, not invincible and not in a safe zone.

        Ties go to the lowest index.
        """
        candidates = [a for a in agents if a.id != actor.id and a.is_vulnerable(now)]
        if not candidates:
            return None
        return min(candidates, key=lambda a: (actor.pos.distance_to(a.pos), a.id))

    @staticmethod
    def nearest_chaser(actor: Agent, agents: Iterable[Agent]) -> Agent | None:
        """Closest chaser regardless of its status effects."""
        chasers = [a for a in agents if a.id != actor.id and a.is_chaser]
        if not chasers:
            return None
        return min(chasers, key=lambda a: (actor.pos.distance_to(a.pos), a.id))

    def random_point(self, agent_id: int, seq: int) -> Vector2:
        """Uniform point inside the spawn margin, keyed on (agent, seq)."""
        cfg = self._config
        m = cfg.spawn_margin
        x = self._rng.next_range(Domain.WANDER, agent_id, seq * 2, m, cfg.field_width - m)
        y = self._rng.next_range(Domain.WANDER, agent_id, seq * 2 + 1, m, cfg.field_height - m)
        return Vector2(x, y)

    # ------------------------------------------------------------------
    # Per-tick steering
    # ------------------------------------------------------------------

    def update_cadence(self, actor: Agent, state: MatchState) -> None:
        if state.now >= actor.next_decision_at:
            actor.next_decision_at = state.now + self._rng.next_range(
                Domain.AI_DECISION, actor.id, state.rng_seq(state.frame),
                self._config.decision_min_ms, self._config.decision_max_ms,
            )

    def steer(self, actor: Agent, state: MatchState, elapsed_ms: float) -> AIState:
        """Move *actor* one tick according to its role and return what it did."""
        now = state.now
        self.update_cadence(actor, state)
        if actor.is_frozen(now):
            return actor.ai_state

        if actor.is_chaser:
            target = self.nearest_vulnerable(actor, state.agents, now)
            if target is None:
                actor.ai_state = AIState.IDLE
            else:
                self._movement.move_toward(actor, target.pos, elapsed_ms, now)
                actor.ai_state = AIState.CHASE
            return actor.ai_state

        threat = self.nearest_chaser(actor, state.agents)
        if threat is None:
            actor.ai_state = AIState.IDLE
            return actor.ai_state

        if actor.pos.distance_to(threat.pos) < self._config.flee_radius:
            self._movement.move_away(actor, threat.pos, elapsed_ms, now)
            actor.ai_state = AIState.FLEE
            return actor.ai_state

        cfg = self._config
        if actor.wander_target is None or actor.pos.distance_to(actor.wander_target) < cfg.waypoint_reach:
            actor.wander_target = self.random_point(actor.id, state.rng_seq(state.frame))
        self._movement.move_toward(
            actor, actor.wander_target, elapsed_ms, now, factor=cfg.wander_speed_factor)
        actor.ai_state = AIState.WANDER
        return actor.ai_state
