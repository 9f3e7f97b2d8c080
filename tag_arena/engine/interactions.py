"""Spatial interaction engine — safe zones, contact tagging and power-ups.

Per-tick order (the order matters):
  1. expire status effects
  2. safe-zone occupancy and forced ejection
  3. chaser/runner contact under the global tag cooldown
  4. power-up pickup
  5. power-up respawn timer

Zone flags are settled before contact is evaluated so an agent that reached
a zone this tick is already immune.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tag_arena.core.effects import invincibility, speed_boost
from tag_arena.core.enums import Domain, PowerUpType
from tag_arena.core.models import PowerUp, SafeZone, Vector2
from tag_arena.utils.event_log import SimEvent

if TYPE_CHECKING:
    from tag_arena.config import SimulationConfig
    from tag_arena.core.match_state import MatchState
    from tag_arena.core.models import Agent
    from tag_arena.engine.roles import RoleStateMachine
    from tag_arena.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

_POWER_UP_TYPES = (PowerUpType.SPEED, PowerUpType.INVINCIBLE)


def build_safe_zones(config: SimulationConfig) -> list[SafeZone]:
    """Fixed 2x2 layout: one zone near each corner of the field."""
    zones: list[SafeZone] = []
    for i in range(config.safe_zone_count):
        zones.append(SafeZone(
            x=config.safe_zone_offset + (i % 2) * (config.field_width - config.safe_zone_inset),
            y=config.safe_zone_offset + (i // 2) * (config.field_height - config.safe_zone_inset),
            width=config.safe_zone_size,
            height=config.safe_zone_size,
        ))
    return zones


class InteractionEngine:
    """Evaluates every agent/zone/pickup interaction for one tick."""

    __slots__ = ("_config", "_rng", "_roles")

    def __init__(
        self,
        config: SimulationConfig,
        rng: DeterministicRNG,
        roles: RoleStateMachine,
    ) -> None:
        self._config = config
        self._rng = rng
        self._roles = roles

    def run(self, state: MatchState) -> list[SimEvent]:
        events: list[SimEvent] = []
        self.expire_effects(state)
        events.extend(self.update_safe_zones(state))
        events.extend(self.resolve_contacts(state))
        events.extend(self.collect_power_ups(state))
        if state.now >= state.next_power_up_at:
            event = self.spawn_power_up(state)
            if event is not None:
                events.append(event)
        return events

    # ------------------------------------------------------------------
    # Effects
    # ------------------------------------------------------------------

    @staticmethod
    def expire_effects(state: MatchState) -> None:
        for agent in state.agents:
            agent.expire_effects(state.now)

    # ------------------------------------------------------------------
    # Safe zones
    # ------------------------------------------------------------------

    def update_safe_zones(self, state: MatchState) -> list[SimEvent]:
        events: list[SimEvent] = []
        now = state.now
        for zone in state.safe_zones:
            zone.occupants = []

        for agent in state.agents:
            zone = next((z for z in state.safe_zones if z.contains(agent.pos)), None)
            if zone is None:
                if agent.in_safe_zone:
                    agent.leave_safe_zone()
                continue

            if not agent.in_safe_zone or agent.safe_zone_entered_at is None:
                agent.in_safe_zone = True
                agent.safe_zone_entered_at = now

            if now - agent.safe_zone_entered_at > self._config.safe_zone_max_dwell_ms:
                self.eject(agent, zone)
                logger.info("Agent %d ejected from safe zone at %s", agent.id, agent.pos)
                events.append(SimEvent(
                    tick=state.frame, category="safe_zone",
                    message=f"Player {agent.id + 1} overstayed a safe zone and was pushed out",
                    entity_ids=(agent.id,),
                ))
            else:
                zone.occupants.append(agent.id)
        return events

    def eject(self, agent: Agent, zone: SafeZone) -> None:
        """Push *agent* just past the nearest zone edge that keeps it on the field."""
        cfg = self._config
        r = agent.radius
        p = agent.pos
        candidates = sorted(
            [
                (p.x - zone.x, Vector2(zone.x - r, p.y)),
                (zone.x + zone.width - p.x, Vector2(zone.x + zone.width + r, p.y)),
                (p.y - zone.y, Vector2(p.x, zone.y - r)),
                (zone.y + zone.height - p.y, Vector2(p.x, zone.y + zone.height + r)),
            ],
            key=lambda c: c[0],
        )
        dest = candidates[0][1]
        for _dist, pos in candidates:
            if r <= pos.x <= cfg.field_width - r and r <= pos.y <= cfg.field_height - r:
                dest = pos
                break
        agent.pos = dest
        agent.leave_safe_zone()

    # ------------------------------------------------------------------
    # Contact
    # ------------------------------------------------------------------

    def resolve_contacts(self, state: MatchState) -> list[SimEvent]:
        events: list[SimEvent] = []
        agents = state.agents
        for i in range(len(agents)):
            for j in range(i + 1, len(agents)):
                if self._roles.cooldown_active(state):
                    return events
                a, b = agents[i], agents[j]
                if a.pos.distance_to(b.pos) >= a.radius + b.radius:
                    continue
                if a.is_chaser and not b.is_chaser:
                    event = self._roles.resolve_tag(state, a, b)
                elif b.is_chaser and not a.is_chaser:
                    event = self._roles.resolve_tag(state, b, a)
                else:
                    continue
                if event is not None:
                    events.append(event)
        return events

    # ------------------------------------------------------------------
    # Power-ups
    # ------------------------------------------------------------------

    def collect_power_ups(self, state: MatchState) -> list[SimEvent]:
        """Every agent in reach of a pickup gets its effect; the pickup is then removed."""
        events: list[SimEvent] = []
        now = state.now
        remaining: list[PowerUp] = []
        for power_up in state.power_ups:
            if power_up.collected:
                continue
            takers = [
                a for a in state.agents
                if a.pos.distance_to(power_up.pos) < a.radius + self._config.power_up_pickup_bonus
            ]
            if not takers:
                remaining.append(power_up)
                continue
            power_up.collected = True
            for agent in takers:
                if power_up.type == PowerUpType.SPEED:
                    agent.apply_effect(speed_boost(now, power_up.duration_ms))
                else:
                    agent.apply_effect(invincibility(now, power_up.duration_ms))
                events.append(SimEvent(
                    tick=state.frame, category="power_up",
                    message=f"Player {agent.id + 1} picked up {power_up.type.value}",
                    entity_ids=(agent.id,),
                ))
            logger.debug("Power-up %d (%s) collected by %s",
                         power_up.id, power_up.type.value, [a.id for a in takers])
        state.power_ups = remaining
        return events

    def spawn_power_up(self, state: MatchState) -> SimEvent | None:
        """Place a new pickup if below the cap and schedule the next attempt."""
        cfg = self._config
        state.next_power_up_at = state.now + self._rng.next_range(
            Domain.POWER_UP, 0, state.rng_seq(state.frame),
            cfg.power_up_respawn_min_ms, cfg.power_up_respawn_max_ms,
        )
        if len(state.active_power_ups()) >= cfg.power_up_cap:
            return None

        pid = state.allocate_power_up_id()
        m = cfg.power_up_margin
        x = self._rng.next_range(Domain.POWER_UP, pid, state.rng_seq(1), m, cfg.field_width - m)
        y = self._rng.next_range(Domain.POWER_UP, pid, state.rng_seq(2), m, cfg.field_height - m)
        kind = self._rng.next_int(Domain.POWER_UP, pid, state.rng_seq(3), 0, len(_POWER_UP_TYPES) - 1)
        ptype = _POWER_UP_TYPES[kind]
        duration = cfg.speed_boost_ms if ptype == PowerUpType.SPEED else cfg.invincible_ms
        state.power_ups.append(PowerUp(id=pid, pos=Vector2(x, y), type=ptype, duration_ms=duration))
        return SimEvent(
            tick=state.frame, category="power_up",
            message=f"A {ptype.value} power-up appeared",
        )
