"""GET /api/v1/config — expose match configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tag_arena.api.dependencies import get_engine_manager
from tag_arena.api.engine_manager import EngineManager
from tag_arena.api.schemas import SimulationConfigResponse

router = APIRouter()


@router.get("/config", response_model=SimulationConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> SimulationConfigResponse:
    cfg = manager.config
    return SimulationConfigResponse(
        seed=cfg.seed,
        field_width=cfg.field_width,
        field_height=cfg.field_height,
        agent_count=cfg.agent_count,
        human_index=cfg.human_index,
        agent_radius=cfg.agent_radius,
        agent_speed=cfg.agent_speed,
        frame_rate=cfg.frame_rate,
        single_duration_s=cfg.single_duration_s,
        multi_duration_s=cfg.multi_duration_s,
        tag_cooldown_ms=cfg.tag_cooldown_ms,
        safe_zone_max_dwell_ms=cfg.safe_zone_max_dwell_ms,
        power_up_cap=cfg.power_up_cap,
        freeze_ms=cfg.freeze_ms,
    )
