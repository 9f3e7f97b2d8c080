"""Core data models: Vector2, Agent, SafeZone, PowerUp, TagRecord."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from tag_arena.core.effects import EffectType, StatusEffect
from tag_arena.core.enums import AIState, PowerUpType, RankStatus


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable real-valued 2D point."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def scaled(self, factor: float) -> Vector2:
        return Vector2(self.x * factor, self.y * factor)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: Vector2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x:.1f}, {self.y:.1f})"


@dataclass(frozen=True, slots=True)
class DirectionalIntent:
    """Held directional input for the human agent."""

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    @property
    def idle(self) -> bool:
        return not (self.up or self.down or self.left or self.right)


@dataclass(slots=True)
class Agent:
    """A participant on the field: the human player or an autonomous one."""

    id: int
    pos: Vector2
    radius: float = 20.0
    speed: float = 3.0
    is_human: bool = False
    is_chaser: bool = False
    in_safe_zone: bool = False
    safe_zone_entered_at: float | None = None
    effects: dict[EffectType, StatusEffect] = field(default_factory=dict)
    # Autonomous agents only
    wander_target: Vector2 | None = None
    next_decision_at: float = 0.0
    ai_state: AIState = AIState.IDLE

    # -- effect helpers --

    def has_effect(self, effect_type: EffectType, now: float) -> bool:
        eff = self.effects.get(effect_type)
        return eff is not None and eff.active(now)

    def apply_effect(self, effect: StatusEffect) -> None:
        """Attach *effect*, keeping whichever expiry of the same type is later."""
        current = self.effects.get(effect.effect_type)
        if current is None or effect.expires_at > current.expires_at:
            self.effects[effect.effect_type] = effect

    def expire_effects(self, now: float) -> list[EffectType]:
        expired = [t for t, e in self.effects.items() if not e.active(now)]
        for t in expired:
            del self.effects[t]
        return expired

    def has_speed_boost(self, now: float) -> bool:
        return self.has_effect(EffectType.SPEED_BOOST, now)

    def is_invincible(self, now: float) -> bool:
        return self.has_effect(EffectType.INVINCIBLE, now)

    def is_frozen(self, now: float) -> bool:
        return self.has_effect(EffectType.FROZEN, now)

    def is_tag_back_immune(self, now: float) -> bool:
        return self.has_effect(EffectType.TAG_BACK_IMMUNE, now)

    def effective_speed(self, now: float, boost_mult: float = 1.5) -> float:
        return self.speed * boost_mult if self.has_speed_boost(now) else self.speed

    def is_vulnerable(self, now: float) -> bool:
        """A runner a chaser may pursue: not a chaser, not invincible, not in a safe zone."""
        return not self.is_chaser and not self.is_invincible(now) and not self.in_safe_zone

    def leave_safe_zone(self) -> None:
        self.in_safe_zone = False
        self.safe_zone_entered_at = None


@dataclass(slots=True)
class SafeZone:
    """Axis-aligned rectangle granting tag immunity for a limited dwell time."""

    x: float
    y: float
    width: float
    height: float
    occupants: list[int] = field(default_factory=list)

    def contains(self, pos: Vector2) -> bool:
        return (self.x <= pos.x <= self.x + self.width
                and self.y <= pos.y <= self.y + self.height)

    def copy(self) -> SafeZone:
        return SafeZone(self.x, self.y, self.width, self.height, list(self.occupants))


@dataclass(slots=True)
class PowerUp:
    """Temporary-effect pickup lying on the field."""

    id: int
    pos: Vector2
    type: PowerUpType
    duration_ms: float
    collected: bool = False

    def copy(self) -> PowerUp:
        return PowerUp(self.id, self.pos, self.type, self.duration_ms, self.collected)


@dataclass(frozen=True, slots=True)
class TagRecord:
    """One infection in a multi-chaser match, in order of occurrence."""

    tagged_id: int
    elapsed_ms: float
    tagger_id: int


@dataclass(frozen=True, slots=True)
class RankingEntry:
    rank: int
    agent_id: int
    name: str
    status: RankStatus
