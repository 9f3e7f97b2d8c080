"""Simulation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration for a match."""

    # World
    seed: int = 42
    field_width: float = 800.0
    field_height: float = 600.0

    # Agents
    agent_count: int = 8
    human_index: int = 7
    agent_radius: float = 20.0
    agent_speed: float = 3.0               # Units per nominal 60 Hz frame
    spawn_margin: float = 50.0

    # Timing
    frame_ms: float = 16.67                # Nominal frame the speed is defined against
    frame_rate: float = 60.0               # Host tick cadence (frames per second)
    single_duration_s: int = 180
    multi_duration_s: int = 300

    # AI
    decision_min_ms: float = 500.0
    decision_max_ms: float = 1500.0
    flee_radius: float = 150.0
    waypoint_reach: float = 20.0
    wander_speed_factor: float = 0.5

    # Tagging
    tag_cooldown_ms: float = 1000.0        # Global, across all agent pairs
    tag_back_window_ms: float = 1500.0

    # Safe zones
    safe_zone_count: int = 4
    safe_zone_size: float = 80.0
    safe_zone_offset: float = 100.0
    safe_zone_inset: float = 250.0         # Distance from the far edge for the second row/column
    safe_zone_max_dwell_ms: float = 3000.0

    # Power-ups
    power_up_cap: int = 2
    power_up_pickup_bonus: float = 10.0    # Added to agent radius for pickup distance
    power_up_margin: float = 50.0
    speed_boost_ms: float = 5000.0
    speed_boost_mult: float = 1.5
    invincible_ms: float = 3000.0
    power_up_respawn_min_ms: float = 10000.0
    power_up_respawn_max_ms: float = 25000.0

    # Abilities
    freeze_ms: float = 2000.0

    # Logging
    log_level: str = "INFO"
