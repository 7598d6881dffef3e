"""Read-only views of the simulation for renderers and input layers."""

from dataclasses import dataclass
from typing import Tuple

from steeplechase.core.agent import Horse
from steeplechase.core.obstacles import Obstacle, ObstacleKind
from steeplechase.core.state import RunPhase


@dataclass(frozen=True)
class HorseView:
    x: float
    y: float
    width: float
    height: float
    velocity: float
    is_airborne: bool

    @classmethod
    def of(cls, horse: Horse) -> "HorseView":
        return cls(
            x=horse.x,
            y=horse.y,
            width=horse.width,
            height=horse.height,
            velocity=horse.velocity,
            is_airborne=horse.is_airborne,
        )


@dataclass(frozen=True)
class ObstacleView:
    kind: ObstacleKind
    x: float
    width: float
    height: float

    @classmethod
    def of(cls, obstacle: Obstacle) -> "ObstacleView":
        return cls(obstacle.kind, obstacle.x, obstacle.width, obstacle.height)


@dataclass(frozen=True)
class RunSnapshot:
    """Everything a renderer needs for one frame."""

    horse: HorseView
    obstacles: Tuple[ObstacleView, ...]
    score: int
    high_score: int
    scroll_speed: float
    phase: RunPhase
    world_width: float
    world_height: float
    ground_y: float
    elapsed_ms: float

    @property
    def is_ended(self) -> bool:
        return self.phase is RunPhase.ENDED
