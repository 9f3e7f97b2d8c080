"""Tests for the MovementResolver: human intent, steering steps, field clamping."""

import math

from tag_arena.config import SimulationConfig
from tag_arena.core.effects import freeze, speed_boost
from tag_arena.core.models import Agent, DirectionalIntent, Vector2
from tag_arena.engine.movement import MovementResolver


def _make_config(**overrides) -> SimulationConfig:
    return SimulationConfig(**overrides)


def _make_agent(x: float = 400.0, y: float = 300.0, **kwargs) -> Agent:
    return Agent(id=0, pos=Vector2(x, y), radius=20.0, speed=3.0, **kwargs)


class TestHumanMovement:

    def test_one_nominal_frame_moves_by_speed(self):
        cfg = _make_config()
        mover = MovementResolver(cfg)
        agent = _make_agent()
        mover.move_human(agent, DirectionalIntent(up=True), cfg.frame_ms, now=0.0)
        assert math.isclose(agent.pos.y, 297.0)
        assert agent.pos.x == 400.0

    def test_step_scales_with_elapsed_time(self):
        cfg = _make_config()
        mover = MovementResolver(cfg)
        agent = _make_agent()
        mover.move_human(agent, DirectionalIntent(right=True), cfg.frame_ms * 2, now=0.0)
        assert math.isclose(agent.pos.x, 406.0)

    def test_diagonal_is_not_normalized(self):
        cfg = _make_config()
        mover = MovementResolver(cfg)
        agent = _make_agent()
        mover.move_human(agent, DirectionalIntent(down=True, left=True), cfg.frame_ms, now=0.0)
        assert math.isclose(agent.pos.x, 397.0)
        assert math.isclose(agent.pos.y, 303.0)

    def test_no_keys_held_keeps_position(self):
        cfg = _make_config()
        mover = MovementResolver(cfg)
        agent = _make_agent()
        mover.move_human(agent, DirectionalIntent(), cfg.frame_ms, now=0.0)
        assert agent.pos == Vector2(400.0, 300.0)

    def test_opposite_keys_cancel(self):
        """Up and down together is not idle, but the two steps cancel out."""
        cfg = _make_config()
        mover = MovementResolver(cfg)
        agent = _make_agent()
        mover.move_human(agent, DirectionalIntent(up=True, down=True), cfg.frame_ms, now=0.0)
        assert agent.pos == Vector2(400.0, 300.0)

    def test_speed_boost_multiplies_step(self):
        cfg = _make_config()
        mover = MovementResolver(cfg)
        agent = _make_agent()
        agent.apply_effect(speed_boost(0.0, 5000.0))
        mover.move_human(agent, DirectionalIntent(left=True), cfg.frame_ms, now=10.0)
        assert math.isclose(agent.pos.x, 395.5)

    def test_frozen_human_does_not_move(self):
        cfg = _make_config()
        mover = MovementResolver(cfg)
        agent = _make_agent()
        agent.apply_effect(freeze(0.0, 2000.0))
        mover.move_human(agent, DirectionalIntent(up=True), cfg.frame_ms, now=100.0)
        assert agent.pos == Vector2(400.0, 300.0)

    def test_clamped_at_field_edge(self):
        cfg = _make_config()
        mover = MovementResolver(cfg)
        agent = _make_agent(x=21.0, y=579.0)
        for _ in range(10):
            mover.move_human(agent, DirectionalIntent(left=True, down=True), cfg.frame_ms, now=0.0)
        assert agent.pos == Vector2(20.0, 580.0)


class TestSteering:

    def test_move_toward_unit_step(self):
        cfg = _make_config()
        mover = MovementResolver(cfg)
        agent = _make_agent()
        moved = mover.move_toward(agent, Vector2(400.0, 400.0), cfg.frame_ms, now=0.0)
        assert moved
        assert math.isclose(agent.pos.y, 303.0)

    def test_move_toward_with_factor(self):
        cfg = _make_config()
        mover = MovementResolver(cfg)
        agent = _make_agent()
        mover.move_toward(agent, Vector2(500.0, 300.0), cfg.frame_ms, now=0.0, factor=0.5)
        assert math.isclose(agent.pos.x, 401.5)

    def test_move_toward_same_point_is_noop(self):
        cfg = _make_config()
        mover = MovementResolver(cfg)
        agent = _make_agent()
        assert not mover.move_toward(agent, Vector2(400.0, 300.0), cfg.frame_ms, now=0.0)
        assert agent.pos == Vector2(400.0, 300.0)

    def test_move_away_from_threat(self):
        cfg = _make_config()
        mover = MovementResolver(cfg)
        agent = _make_agent()
        assert mover.move_away(agent, Vector2(300.0, 300.0), cfg.frame_ms, now=0.0)
        assert math.isclose(agent.pos.x, 403.0)

    def test_move_away_coincident_is_noop(self):
        cfg = _make_config()
        mover = MovementResolver(cfg)
        agent = _make_agent()
        assert not mover.move_away(agent, Vector2(400.0, 300.0), cfg.frame_ms, now=0.0)
        assert agent.pos == Vector2(400.0, 300.0)

    def test_frozen_agent_does_not_steer(self):
        cfg = _make_config()
        mover = MovementResolver(cfg)
        agent = _make_agent()
        agent.apply_effect(freeze(0.0, 2000.0))
        assert not mover.move_toward(agent, Vector2(0.0, 0.0), cfg.frame_ms, now=1.0)

    def test_flee_into_wall_stays_in_bounds(self):
        cfg = _make_config()
        mover = MovementResolver(cfg)
        agent = _make_agent(x=cfg.field_width - 20.0, y=300.0)
        mover.move_away(agent, Vector2(cfg.field_width - 100.0, 300.0), cfg.frame_ms, now=0.0)
        assert agent.pos.x == cfg.field_width - agent.radius
