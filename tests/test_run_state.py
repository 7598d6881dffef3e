"""Tests for core/run.py - tick ordering, scoring, termination and reset."""
import random

import pytest

from steeplechase.core.obstacles import Obstacle
from steeplechase.core.run import RunState
from steeplechase.core.state import RunPhase

GROUND_Y = 250
FRAME_MS = 1000.0 / 60.0


def initial_view(run: RunState):
    snap = run.snapshot()
    return (
        snap.score,
        snap.phase,
        snap.obstacles,
        snap.horse,
        snap.scroll_speed,
        snap.elapsed_ms,
        run.field.spawn_timer,
        run.field.next_spawn_interval,
        run.input.is_held,
    )


def end_run(run: RunState) -> None:
    run.field.obstacles.append(Obstacle.fence(60, 40))
    run.tick(FRAME_MS)
    assert run.is_ended


@pytest.mark.unit
class TestScoring:
    """Points for obstacles leaving the world."""

    def test_score_increments_once_per_exit(self, run):
        run.field.obstacles.append(Obstacle.fence(-19, 40))

        report = run.tick(FRAME_MS)

        assert report.points == 1
        assert run.score == 1

        run.tick(FRAME_MS)
        assert run.score == 1

    def test_two_exits_same_tick(self, run):
        run.field.obstacles.extend([Obstacle.fence(-19, 40), Obstacle.ditch(-51, 50)])

        run.tick(FRAME_MS)

        assert run.score == 2

    def test_no_score_while_ended(self, run):
        end_run(run)
        stray = Obstacle.fence(-19, 40)
        run.field.obstacles.append(stray)

        run.tick(FRAME_MS)

        assert run.score == 0
        assert stray.x == -19


@pytest.mark.unit
class TestTermination:
    """Running -> Ended and the frozen world afterwards."""

    def test_collision_ends_run(self, run):
        run.field.obstacles.append(Obstacle.fence(60, 40))

        report = run.tick(FRAME_MS)

        assert report.collided_with is not None
        assert run.phase is RunPhase.ENDED
        assert run.phases.context.reason == "hit fence"

    def test_ditch_under_grounded_horse_ends_run(self, run):
        run.field.obstacles.append(Obstacle.ditch(60, 60))

        run.tick(FRAME_MS)

        assert run.is_ended

    def test_jumping_over_ditch_survives(self, run):
        run.field.obstacles.append(Obstacle.ditch(100, 50))
        run.press_start()

        # Ditch passes under the horse while it is still airborne
        for _ in range(20):
            run.tick(FRAME_MS)
            assert run.is_ended is False

    def test_ended_tick_is_noop(self, run):
        end_run(run)
        before = initial_view(run)

        for _ in range(10):
            run.tick(FRAME_MS)

        assert initial_view(run) == before

    def test_no_jump_while_ended(self, run):
        end_run(run)

        assert run.jump() is False
        assert run.press_start() is False
        assert run.horse.is_airborne is False

    def test_high_score_recorded_on_end(self, run):
        run.field.obstacles.append(Obstacle.fence(-19, 40))
        run.tick(FRAME_MS)
        end_run(run)

        assert run.high_score == 1


@pytest.mark.unit
class TestTickOrdering:
    """Integration before scrolling, collisions after."""

    def test_collision_checked_against_scrolled_position(self, run):
        # Touching edge before the scroll, overlapping after it
        run.field.obstacles.append(Obstacle.fence(90, 40))

        run.tick(FRAME_MS)

        assert run.is_ended

    def test_fresh_spawn_does_not_collide(self, run):
        run.field.spawn_timer = 5000

        report = run.tick(FRAME_MS)

        assert report.spawned is not None
        assert run.is_ended is False

    def test_speed_ramps_with_spawns_and_caps(self, run):
        speeds = []
        for _ in range(3000):
            run.tick(16.0)
            # Keep the course clear so the run never ends
            run.field.obstacles.clear()
            speeds.append(run.scroll_speed)

        assert speeds == sorted(speeds)
        assert max(speeds) <= 5.0
        assert speeds[-1] == 5.0
        assert run.field.spawn_count >= 10


@pytest.mark.unit
class TestInput:
    """Hold tracking on the simulation clock."""

    def test_hold_duration_follows_ticks(self, run):
        run.press_start()
        for _ in range(3):
            run.tick(16.0)

        assert run.hold_duration_ms == pytest.approx(48.0)

        run.press_end()
        assert run.hold_duration_ms == 0.0

    def test_set_jump_held_does_not_jump(self, run):
        run.set_jump_held(True)

        assert run.input.is_held is True
        assert run.horse.is_airborne is False

    def test_held_jump_lasts_longer(self, settings):
        def airborne_ticks(hold: bool) -> int:
            run = RunState(settings, 500, 300, GROUND_Y, random.Random(0))
            run.press_start()
            if not hold:
                run.press_end()
            ticks = 0
            while True:
                ticks += 1
                if run.tick(16.0).landed:
                    return ticks
                if run.input.is_held and run.horse.velocity >= 0:
                    run.press_end()

        assert airborne_ticks(hold=True) > airborne_ticks(hold=False)


@pytest.mark.unit
class TestReset:
    """reset() restores the initial state."""

    def test_reset_restores_initial_state(self, settings):
        fresh = RunState(settings, 500, 300, GROUND_Y, random.Random(0))
        expected = initial_view(fresh)

        run = RunState(settings, 500, 300, GROUND_Y, random.Random(0))
        run.press_start()
        for _ in range(200):
            run.tick(16.0)
        if not run.is_ended:
            end_run(run)

        run.reset()
        assert initial_view(run) == expected

        run.reset()
        assert initial_view(run) == expected

    def test_reset_keeps_high_score(self, run):
        run.field.obstacles.append(Obstacle.fence(-19, 40))
        run.tick(FRAME_MS)
        end_run(run)

        run.reset()

        assert run.score == 0
        assert run.high_score == 1
        assert run.phase is RunPhase.RUNNING
