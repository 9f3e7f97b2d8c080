"""Movement resolver — turns intent or a steering target into a clamped position delta.

Speed is expressed in units per nominal 60 Hz frame and scaled by the real
elapsed time, so agents cover the same distance per second at any frame rate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tag_arena.core.models import Vector2

if TYPE_CHECKING:
    from tag_arena.config import SimulationConfig
    from tag_arena.core.models import Agent, DirectionalIntent


class MovementResolver:
    """Stateless movement helpers bound to the field geometry."""

    __slots__ = ("_config",)

    def __init__(self, config: SimulationConfig) -> None:
        self._config = config

    def _step(self, agent: Agent, elapsed_ms: float, now: float) -> float:
        speed = agent.effective_speed(now, self._config.speed_boost_mult)
        return speed * elapsed_ms / self._config.frame_ms

    def clamp(self, agent: Agent) -> None:
        """Keep the agent's full radius inside the field."""
        cfg = self._config
        r = agent.radius
        x = max(r, min(cfg.field_width - r, agent.pos.x))
        y = max(r, min(cfg.field_height - r, agent.pos.y))
        agent.pos = Vector2(x, y)

    def move_human(self, agent: Agent, intent: DirectionalIntent, elapsed_ms: float, now: float) -> None:
        if intent.idle or agent.is_frozen(now):
            return
        step = self._step(agent, elapsed_ms, now)
        dx = dy = 0.0
        if intent.up:
            dy -= step
        if intent.down:
            dy += step
        if intent.left:
            dx -= step
        if intent.right:
            dx += step
        agent.pos = Vector2(agent.pos.x + dx, agent.pos.y + dy)
        self.clamp(agent)

    def move_toward(
        self,
        agent: Agent,
        target: Vector2,
        elapsed_ms: float,
        now: float,
        factor: float = 1.0,
    ) -> bool:
        """Step along the unit vector to *target*. Returns False when no movement happened."""
        if agent.is_frozen(now):
            return False
        offset = target - agent.pos
        distance = offset.length()
        if distance == 0:
            return False
        step = self._step(agent, elapsed_ms, now) * factor
        agent.pos = agent.pos + offset.scaled(step / distance)
        self.clamp(agent)
        return True

    def move_away(self, agent: Agent, threat: Vector2, elapsed_ms: float, now: float) -> bool:
        """Step directly away from *threat*. Coincident positions are a no-op."""
        if agent.is_frozen(now):
            return False
        offset = agent.pos - threat
        distance = offset.length()
        if distance == 0:
            return False
        step = self._step(agent, elapsed_ms, now)
        agent.pos = agent.pos + offset.scaled(step / distance)
        self.clamp(agent)
        return True
