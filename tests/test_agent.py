"""Tests for core/agent.py - jump physics and gravity selection."""
import random

import pytest

from steeplechase.config.settings import GravityPolicy, HorseSettings
from steeplechase.core.agent import Horse, select_gravity

GROUND_Y = 250
FRAME_MS = 1000.0 / 60.0


def ticks_to_apex(horse: Horse, held: bool, delta_ms: float = 16.0) -> int:
    """Jump and count ticks until upward motion stops."""
    horse.jump()
    ticks = 0
    while horse.velocity < 0:
        horse.integrate(delta_ms, held, ticks * delta_ms)
        ticks += 1
    return ticks


def airborne_ticks(horse: Horse, hold_through_ascent: bool, delta_ms: float = 16.0) -> int:
    """Jump and count ticks until landing, optionally holding until the apex."""
    horse.jump()
    held = hold_through_ascent
    ticks = 0
    while True:
        ticks += 1
        if horse.integrate(delta_ms, held, ticks * delta_ms):
            return ticks
        if held and horse.velocity >= 0:
            held = False


@pytest.mark.unit
class TestHorseInitialState:
    """Initial state and jump initiation."""

    def test_starts_grounded(self, horse):
        assert horse.y == GROUND_Y
        assert horse.velocity == 0
        assert horse.is_airborne is False

    def test_geometry_from_settings(self, horse):
        assert horse.x == 50
        assert horse.width == 40
        assert horse.height == 30
        assert horse.ceiling_y == GROUND_Y - 150

    def test_jump_sets_velocity(self, horse):
        assert horse.jump() is True
        assert horse.is_airborne is True
        assert horse.velocity == -8

    def test_jump_ignored_while_airborne(self, horse):
        horse.jump()
        horse.integrate(16.0, False)
        velocity = horse.velocity

        assert horse.jump() is False
        assert horse.velocity == velocity

    def test_grounded_horse_is_not_integrated(self, horse):
        assert horse.integrate(16.0, True, 500.0) is False
        assert horse.y == GROUND_Y
        assert horse.velocity == 0


@pytest.mark.unit
class TestGravitySelection:
    """Gravity policy selection."""

    def test_hold_state_policy(self):
        cfg = HorseSettings(gravity_policy=GravityPolicy.HOLD_STATE)

        assert select_gravity(cfg, True, 0.0) == cfg.weak_gravity
        assert select_gravity(cfg, False, 0.0) == cfg.strong_gravity

    def test_hold_threshold_policy(self):
        cfg = HorseSettings(gravity_policy=GravityPolicy.HOLD_THRESHOLD, hold_threshold_ms=200)

        assert select_gravity(cfg, True, 100.0) == cfg.strong_gravity
        assert select_gravity(cfg, True, 200.0) == cfg.strong_gravity
        assert select_gravity(cfg, True, 201.0) == cfg.weak_gravity
        assert select_gravity(cfg, False, 1000.0) == cfg.strong_gravity


@pytest.mark.unit
class TestIntegration:
    """Integrator invariants."""

    def test_first_step_semi_implicit(self, horse):
        horse.jump()
        horse.integrate(FRAME_MS, False)

        # velocity updated first, then position with the new velocity
        assert horse.velocity == pytest.approx(-8 + 0.35)
        assert horse.y == pytest.approx(GROUND_Y - 8 + 0.35)

    def test_delta_scales_motion(self):
        short = Horse(GROUND_Y)
        long = Horse(GROUND_Y)
        short.jump()
        long.jump()

        short.integrate(FRAME_MS / 2, False)
        long.integrate(FRAME_MS, False)

        assert GROUND_Y - short.y < GROUND_Y - long.y

    def test_zero_delta_keeps_fresh_jump(self, horse):
        horse.jump()

        assert horse.integrate(0.0, False) is False
        assert horse.is_airborne is True
        assert horse.velocity == -8.0

        horse.integrate(FRAME_MS, False)
        assert horse.y < GROUND_Y

    def test_y_stays_within_bounds(self, horse):
        rng = random.Random(3)
        for _ in range(2000):
            if not horse.is_airborne and rng.random() < 0.2:
                horse.jump()
            horse.integrate(rng.uniform(0, 100), rng.random() < 0.5, rng.uniform(0, 600))

            assert horse.ceiling_y <= horse.y <= GROUND_Y

    def test_apex_clamp_zeroes_velocity(self):
        horse = Horse(GROUND_Y, HorseSettings(max_jump_height=20))
        horse.jump()
        for _ in range(3):
            horse.integrate(FRAME_MS, True)

        assert horse.y == GROUND_Y - 20
        assert horse.velocity >= 0

    def test_landing_detected_exactly_once(self, horse):
        horse.jump()
        landings = 0
        for _ in range(500):
            if horse.integrate(16.0, False):
                landings += 1

        assert landings == 1
        assert horse.is_airborne is False
        assert horse.y == GROUND_Y
        assert horse.velocity == 0

    def test_reset_grounds_horse(self, horse):
        horse.jump()
        horse.integrate(16.0, False)
        horse.reset()

        assert horse.y == GROUND_Y
        assert horse.velocity == 0
        assert horse.is_airborne is False


@pytest.mark.unit
class TestHangTime:
    """Holding the control flattens the arc."""

    def test_hold_extends_time_to_apex(self):
        # High ceiling so the clamp does not cut the held arc short
        cfg = HorseSettings(max_jump_height=1000)

        held = ticks_to_apex(Horse(GROUND_Y, cfg), held=True)
        released = ticks_to_apex(Horse(GROUND_Y, cfg), held=False)

        assert held > released

    def test_hold_threshold_delays_weak_gravity(self):
        cfg = HorseSettings(
            max_jump_height=1000,
            gravity_policy=GravityPolicy.HOLD_THRESHOLD,
        )

        held = ticks_to_apex(Horse(GROUND_Y, cfg), held=True)
        released = ticks_to_apex(Horse(GROUND_Y, cfg), held=False)

        assert held > released

    def test_scenario_held_jump_stays_airborne_longer(self):
        cfg = HorseSettings(
            jump_force=-8,
            max_jump_height=150,
            strong_gravity=0.35,
            weak_gravity=0.08,
        )

        held = airborne_ticks(Horse(GROUND_Y, cfg), hold_through_ascent=True)
        released = airborne_ticks(Horse(GROUND_Y, cfg), hold_through_ascent=False)

        assert released == 47
        assert held == 53
        assert held > released
