"""Per-run simulation state and the tick that advances it.

RunState owns the horse, the obstacle field and the jump control state for
one run. Each tick applies, in order: horse integration, obstacle spawning
and scrolling (with scoring), then collision checks against the scrolled
positions. Once a collision ends the run nothing moves until reset().
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from steeplechase.config.settings import Settings
from steeplechase.core.agent import Horse
from steeplechase.core.collision import hits
from steeplechase.core.input import InputState
from steeplechase.core.obstacles import Obstacle, ObstacleField, difficulty_speed
from steeplechase.core.snapshot import HorseView, ObstacleView, RunSnapshot
from steeplechase.core.state import PhaseMachine, RunPhase

logger = logging.getLogger(__name__)


@dataclass
class TickReport:
    """What happened during one tick."""
    landed: bool = False
    spawned: Optional[Obstacle] = None
    cleared: List[Obstacle] = field(default_factory=list)
    collided_with: Optional[Obstacle] = None

    @property
    def points(self) -> int:
        return len(self.cleared)


class RunState:
    """State of one run and the rules that advance it."""

    def __init__(
        self,
        settings: Settings,
        world_width: float,
        world_height: float,
        ground_y: float,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings
        self.world_width = world_width
        self.world_height = world_height
        self.ground_y = ground_y

        frame_ms = settings.world.reference_frame_ms
        self.horse = Horse(ground_y, settings.horse, frame_ms)
        self.field = ObstacleField(
            world_width,
            settings.obstacles,
            rng if rng is not None else random.Random(settings.seed),
            frame_ms,
        )
        self.input = InputState()
        self.phases = PhaseMachine()

        self.score = 0
        self.high_score = 0
        self.scroll_speed = settings.obstacles.base_scroll_speed
        self.elapsed_ms = 0.0

    @property
    def phase(self) -> RunPhase:
        return self.phases.phase

    @property
    def is_ended(self) -> bool:
        return self.phases.phase is RunPhase.ENDED

    @property
    def obstacles(self) -> List[Obstacle]:
        return self.field.obstacles

    def reset(self) -> None:
        """Reinitialize every per-run field. The session high score is kept."""
        self.horse.reset()
        self.field.reset()
        self.input.clear()
        self.score = 0
        self.scroll_speed = self.settings.obstacles.base_scroll_speed
        self.elapsed_ms = 0.0
        self.phases.reset()

    def jump(self) -> bool:
        if self.is_ended:
            return False
        return self.horse.jump()

    def press_start(self) -> bool:
        """Hold the jump control and start a jump if grounded."""
        if self.is_ended:
            return False
        self.input.press_start(self.elapsed_ms)
        return self.horse.jump()

    def press_end(self) -> None:
        self.input.press_end()

    def set_jump_held(self, held: bool) -> None:
        if held:
            self.input.press_start(self.elapsed_ms)
        else:
            self.input.press_end()

    @property
    def hold_duration_ms(self) -> float:
        return self.input.hold_duration(self.elapsed_ms)

    def tick(self, delta_ms: float) -> TickReport:
        """Advance the run by one frame. No-op once the run has ended."""
        report = TickReport()
        if self.is_ended:
            return report

        self.elapsed_ms += delta_ms

        report.landed = self.horse.integrate(
            delta_ms,
            self.input.is_held,
            self.input.hold_duration(self.elapsed_ms),
        )

        for obstacle, just_scored in self.field.advance(delta_ms, self.scroll_speed):
            if just_scored:
                report.cleared.append(obstacle)
        report.spawned = self.field.last_spawn

        self.score += report.points
        if report.spawned is not None:
            ramped = difficulty_speed(self.settings.obstacles, self.field.spawn_count)
            self.scroll_speed = max(self.scroll_speed, ramped)

        for obstacle in self.field.obstacles:
            if hits(self.horse, obstacle):
                report.collided_with = obstacle
                self._end(obstacle)
                break

        return report

    def _end(self, obstacle: Obstacle) -> None:
        if self.score > self.high_score:
            self.high_score = self.score
        self.phases.transition(
            RunPhase.ENDED,
            reason=f"hit {obstacle.kind.name.lower()}",
            final_score=self.score,
        )
        logger.info(f"Run ended on {obstacle.kind.name} with score {self.score}")

    def snapshot(self) -> RunSnapshot:
        return RunSnapshot(
            horse=HorseView.of(self.horse),
            obstacles=tuple(ObstacleView.of(o) for o in self.field.obstacles),
            score=self.score,
            high_score=self.high_score,
            scroll_speed=self.scroll_speed,
            phase=self.phase,
            world_width=self.world_width,
            world_height=self.world_height,
            ground_y=self.ground_y,
            elapsed_ms=self.elapsed_ms,
        )
