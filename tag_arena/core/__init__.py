"""Core data models and match representation."""

from tag_arena.core.effects import EffectType, StatusEffect
from tag_arena.core.enums import AIState, Domain, EndReason, GameMode, HumanRole, MatchPhase, PowerUpType
from tag_arena.core.match_state import MatchInvariantError, MatchState
from tag_arena.core.models import Agent, DirectionalIntent, PowerUp, SafeZone, TagRecord, Vector2
from tag_arena.core.snapshot import MatchSnapshot

__all__ = [
    "AIState",
    "Agent",
    "DirectionalIntent",
    "Domain",
    "EffectType",
    "EndReason",
    "GameMode",
    "HumanRole",
    "MatchInvariantError",
    "MatchPhase",
    "MatchSnapshot",
    "MatchState",
    "PowerUp",
    "PowerUpType",
    "SafeZone",
    "StatusEffect",
    "TagRecord",
    "Vector2",
]
