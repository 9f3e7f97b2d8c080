"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class GameMode(str, Enum):
    """Role-transition rules for a match."""

    SINGLE = "single"   # Hot potato: one chaser, tagging swaps roles
    MULTI = "multi"     # Infection: tagged runners join the chasers

    @property
    def label(self) -> str:
        return "Single Chaser" if self is GameMode.SINGLE else "Multi-Chaser"


@unique
class HumanRole(str, Enum):
    """Requested starting role for the human-controlled agent."""

    CHASER = "chaser"
    RUNNER = "runner"
    RANDOM = "random"


@unique
class MatchPhase(IntEnum):
    """Match lifecycle states."""

    SETUP = 0
    RUNNING = 1
    PAUSED = 2
    ENDED = 3


@unique
class EndReason(str, Enum):
    """Why a match reached ENDED."""

    TIME_UP = "timeUp"
    ALL_TAGGED = "allTagged"
    QUIT = "quit"
    ERROR = "error"


@unique
class PowerUpType(str, Enum):
    """Pickup kinds available on the field."""

    SPEED = "speed"
    INVINCIBLE = "invincible"


@unique
class RankStatus(str, Enum):
    """Final standing of an agent in a multi-chaser match."""

    WINNER = "Winner"
    TAGGED = "Tagged"


@unique
class AIState(IntEnum):
    """What an autonomous agent is doing this tick (informational)."""

    IDLE = 0
    CHASE = 1
    FLEE = 2
    WANDER = 3


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    SPAWN = 0
    ROLE = 1
    AI_DECISION = 2
    WANDER = 3
    POWER_UP = 4
