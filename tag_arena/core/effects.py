"""Status effect system — temporary timed states on agents.

Design:
  - Each agent holds at most one effect per EffectType, keyed by type.
  - An effect carries an absolute expiry timestamp (ms) instead of a
    countdown, so "is it active" is a single comparison against ``now``.
  - The interaction engine prunes expired effects at the start of each
    tick; queries never depend on that pruning having run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, unique


@unique
class EffectType(IntEnum):
    """Categories of status effects."""

    SPEED_BOOST = 0       # Effective speed x1.5
    INVINCIBLE = 1        # Cannot be tagged or targeted
    FROZEN = 2            # No movement
    TAG_BACK_IMMUNE = 3   # Just handed the chaser role over; cannot be tagged back


@dataclass(slots=True)
class StatusEffect:
    """A temporary state applied to an agent until ``expires_at``."""

    effect_type: EffectType
    expires_at: float
    source: str = ""

    def active(self, now: float) -> bool:
        return now < self.expires_at


# ---------------------------------------------------------------------------
# Factory helpers for common effects
# ---------------------------------------------------------------------------

def speed_boost(now: float, duration_ms: float, source: str = "power_up") -> StatusEffect:
    return StatusEffect(EffectType.SPEED_BOOST, now + duration_ms, source)


def invincibility(now: float, duration_ms: float, source: str = "power_up") -> StatusEffect:
    return StatusEffect(EffectType.INVINCIBLE, now + duration_ms, source)


def freeze(now: float, duration_ms: float, source: str = "freeze_ability") -> StatusEffect:
    return StatusEffect(EffectType.FROZEN, now + duration_ms, source)


def tag_back_immunity(now: float, duration_ms: float, source: str = "role_swap") -> StatusEffect:
    """Window during which a freshly demoted chaser cannot be tagged back."""
    return StatusEffect(EffectType.TAG_BACK_IMMUNE, now + duration_ms, source)
