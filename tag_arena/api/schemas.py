"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from tag_arena.core.enums import GameMode, HumanRole


# --- Match state ---

class AgentSchema(BaseModel):
    id: int
    name: str
    x: float
    y: float
    radius: float
    is_human: bool
    is_chaser: bool
    in_safe_zone: bool
    has_speed_boost: bool
    is_invincible: bool
    frozen: bool
    tag_back_immune: bool
    ai_state: str


class SafeZoneSchema(BaseModel):
    x: float
    y: float
    width: float
    height: float
    occupants: list[int] = Field(default_factory=list)


class PowerUpSchema(BaseModel):
    id: int
    x: float
    y: float
    type: str
    collected: bool = False


class TagRecordSchema(BaseModel):
    tagged_id: int
    tagger_id: int
    elapsed_ms: float


class RankingSchema(BaseModel):
    rank: int
    agent_id: int
    name: str
    status: str


class ResultSchema(BaseModel):
    headline: str
    detail: str = ""


class MatchStateResponse(BaseModel):
    frame: int
    phase: str
    mode: str
    mode_label: str
    paused: bool
    remaining_s: int
    elapsed_ms: float
    human_id: int
    human_role: str
    runner_count: int
    human_safe_seconds_left: int | None = None
    agents: list[AgentSchema]
    safe_zones: list[SafeZoneSchema] = Field(default_factory=list)
    power_ups: list[PowerUpSchema] = Field(default_factory=list)
    tag_log: list[TagRecordSchema] = Field(default_factory=list)
    end_reason: str | None = None
    rankings: list[RankingSchema] = Field(default_factory=list)
    result: ResultSchema | None = None


class EventSchema(BaseModel):
    tick: int
    category: str
    message: str
    entity_ids: list[int] = Field(default_factory=list)


# --- Requests ---

class StartMatchRequest(BaseModel):
    mode: GameMode = GameMode.SINGLE
    human_role: HumanRole = HumanRole.RANDOM


class IntentRequest(BaseModel):
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    frame: int = 0


# --- Config ---

class SimulationConfigResponse(BaseModel):
    seed: int
    field_width: float
    field_height: float
    agent_count: int
    human_index: int
    agent_radius: float
    agent_speed: float
    frame_rate: float
    single_duration_s: int
    multi_duration_s: int
    tag_cooldown_ms: float
    safe_zone_max_dwell_ms: float
    power_up_cap: int
    freeze_ms: float


# --- Stats ---

class EngineStats(BaseModel):
    frame: int
    running: bool
    paused: bool
    phase: str | None = None
