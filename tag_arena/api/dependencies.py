"""FastAPI dependency injection — provides the EngineManager singleton."""

from __future__ import annotations

from fastapi import HTTPException

from tag_arena.api.engine_manager import EngineManager
from tag_arena.core.snapshot import MatchSnapshot

_engine_manager: EngineManager | None = None


def set_engine_manager(manager: EngineManager | None) -> None:
    global _engine_manager
    _engine_manager = manager


def get_engine_manager() -> EngineManager:
    if _engine_manager is None:
        raise RuntimeError("EngineManager not initialized, server not started correctly.")
    return _engine_manager


def require_snapshot(manager: EngineManager) -> MatchSnapshot:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=409, detail="No match has been started.")
    return snapshot
