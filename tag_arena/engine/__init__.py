"""Engine layer: movement, interactions, role rules, match lifecycle."""

from tag_arena.engine.interactions import InteractionEngine
from tag_arena.engine.match_controller import MatchController
from tag_arena.engine.movement import MovementResolver
from tag_arena.engine.roles import RoleStateMachine

__all__ = ["InteractionEngine", "MatchController", "MovementResolver", "RoleStateMachine"]
