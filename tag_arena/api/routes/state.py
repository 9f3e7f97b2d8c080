"""GET /api/v1/state — live match data (polled by the presentation layer every frame)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from tag_arena.api.dependencies import get_engine_manager, require_snapshot
from tag_arena.api.engine_manager import EngineManager
from tag_arena.api.schemas import (
    AgentSchema,
    EngineStats,
    EventSchema,
    MatchStateResponse,
    PowerUpSchema,
    RankingSchema,
    ResultSchema,
    SafeZoneSchema,
    TagRecordSchema,
)
from tag_arena.core.snapshot import MatchSnapshot
from tag_arena.engine.roles import agent_name

router = APIRouter()


def serialize_snapshot(snap: MatchSnapshot) -> MatchStateResponse:
    return MatchStateResponse(
        frame=snap.frame,
        phase=snap.phase.name.lower(),
        mode=snap.mode.value,
        mode_label=snap.mode_label,
        paused=snap.paused,
        remaining_s=snap.remaining_s,
        elapsed_ms=snap.elapsed_ms,
        human_id=snap.human_id,
        human_role=snap.human_role_label,
        runner_count=snap.runner_count,
        human_safe_seconds_left=snap.human_safe_seconds_left,
        agents=[
            AgentSchema(
                id=a.id, name=agent_name(a.id, snap.human_id),
                x=a.x, y=a.y, radius=a.radius,
                is_human=a.is_human, is_chaser=a.is_chaser,
                in_safe_zone=a.in_safe_zone, has_speed_boost=a.has_speed_boost,
                is_invincible=a.is_invincible, frozen=a.frozen,
                tag_back_immune=a.tag_back_immune,
                ai_state=a.ai_state.name.lower(),
            )
            for a in snap.agents
        ],
        safe_zones=[
            SafeZoneSchema(x=z.x, y=z.y, width=z.width, height=z.height, occupants=list(z.occupants))
            for z in snap.safe_zones
        ],
        power_ups=[
            PowerUpSchema(id=p.id, x=p.pos.x, y=p.pos.y, type=p.type.value, collected=p.collected)
            for p in snap.power_ups
        ],
        tag_log=[
            TagRecordSchema(tagged_id=t.tagged_id, tagger_id=t.tagger_id, elapsed_ms=t.elapsed_ms)
            for t in snap.tag_log
        ],
        end_reason=snap.end_reason.value if snap.end_reason else None,
        rankings=[
            RankingSchema(rank=r.rank, agent_id=r.agent_id, name=r.name, status=r.status.value)
            for r in snap.rankings
        ],
        result=ResultSchema(headline=snap.result.headline, detail=snap.result.detail)
        if snap.result else None,
    )


@router.get("/state", response_model=MatchStateResponse)
def get_state(manager: EngineManager = Depends(get_engine_manager)) -> MatchStateResponse:
    return serialize_snapshot(require_snapshot(manager))


@router.get("/events", response_model=list[EventSchema])
def get_events(
    since_tick: int | None = Query(None, ge=0, description="Only events at or after this frame"),
    limit: int = Query(50, ge=1, le=500),
    manager: EngineManager = Depends(get_engine_manager),
) -> list[EventSchema]:
    log = manager.event_log
    events = log.since_tick(since_tick)[-limit:] if since_tick is not None else log.latest(limit)
    return [
        EventSchema(tick=e.tick, category=e.category, message=e.message, entity_ids=list(e.entity_ids))
        for e in events
    ]


@router.get("/stats", response_model=EngineStats)
def get_stats(manager: EngineManager = Depends(get_engine_manager)) -> EngineStats:
    snap = manager.get_snapshot()
    return EngineStats(
        frame=snap.frame if snap else 0,
        running=manager.running,
        paused=snap.paused if snap else False,
        phase=snap.phase.name.lower() if snap else None,
    )
