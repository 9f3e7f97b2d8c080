"""AI layer: target selection and chase/flee/wander steering."""

from tag_arena.ai.policy import AIPolicy

__all__ = ["AIPolicy"]
