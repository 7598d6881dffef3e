"""Tests for core/collision.py - fence hitboxes and the ditch rule."""
import pytest

from steeplechase.core.agent import Horse
from steeplechase.core.collision import hitbox, hits
from steeplechase.core.obstacles import Obstacle

GROUND_Y = 250


def airborne_at(y: float) -> Horse:
    horse = Horse(GROUND_Y)
    horse.jump()
    horse.y = y
    return horse


@pytest.mark.unit
class TestHitbox:
    """Collision box shape."""

    def test_grounded_hitbox_is_full_body(self, horse):
        assert hitbox(horse) == (50, 220, 90, 250)

    def test_airborne_hitbox_shrunk_and_shifted(self):
        horse = airborne_at(200)

        assert hitbox(horse) == (50, 175, 90, 195)


@pytest.mark.unit
class TestFenceCollision:
    """Axis-aligned fence hits."""

    def test_grounded_horse_hits_overlapping_fence(self, horse):
        fence = Obstacle.fence(50, 40)

        assert hits(horse, fence) is True

    def test_fence_behind_horse_does_not_hit(self, horse):
        fence = Obstacle.fence(0, 40)

        assert hits(horse, fence) is False

    def test_touching_edges_do_not_hit(self, horse):
        assert hits(horse, Obstacle.fence(90, 40)) is False
        assert hits(horse, Obstacle.fence(30, 40)) is False

    def test_airborne_clear_of_short_fence(self):
        fence = Obstacle.fence(50, 40)

        assert hits(airborne_at(GROUND_Y - 35), fence) is False
        assert hits(airborne_at(GROUND_Y - 60), fence) is False

    def test_airborne_low_still_hits(self):
        fence = Obstacle.fence(50, 40)

        assert hits(airborne_at(GROUND_Y - 20), fence) is True

    def test_tall_fence_needs_higher_jump(self):
        fence = Obstacle.fence(60, 60)

        assert hits(airborne_at(GROUND_Y - 35), fence) is True
        assert hits(airborne_at(GROUND_Y - 55), fence) is False

    def test_hits_is_pure(self, horse):
        fence = Obstacle.fence(50, 40)
        before = (horse.y, horse.velocity, horse.is_airborne, fence.x)

        hits(horse, fence)

        assert (horse.y, horse.velocity, horse.is_airborne, fence.x) == before


@pytest.mark.unit
class TestDitchRule:
    """Ditches only catch a running horse."""

    def test_grounded_overlap_fails(self, horse):
        assert hits(horse, Obstacle.ditch(60, 70)) is True

    def test_grounded_horse_inside_wide_ditch_fails(self, horse):
        assert hits(horse, Obstacle.ditch(30, 85)) is True

    def test_airborne_over_ditch_never_fails(self):
        ditch = Obstacle.ditch(40, 89)
        for y in (GROUND_Y - 1, GROUND_Y - 10, GROUND_Y - 100, GROUND_Y - 150):
            assert hits(airborne_at(y), ditch) is False

    def test_grounded_without_overlap_is_safe(self, horse):
        assert hits(horse, Obstacle.ditch(90, 60)) is False
        assert hits(horse, Obstacle.ditch(-10, 60)) is False
