"""Obstacle field: procedural spawning, scrolling and scoring.

Obstacles enter at the leading edge of the world (``x = world_width``),
scroll left at the shared scroll speed, and score a point once they have
fully left the world on the other side. The scroll speed ramps up with the
number of spawns until it reaches its cap.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple

from steeplechase.config.settings import ObstacleSettings

logger = logging.getLogger(__name__)


class ObstacleKind(Enum):
    """Types of obstacles."""
    FENCE = auto()
    DITCH = auto()


@dataclass
class Obstacle:
    """An obstacle in the world.

    Fences stand on the ground and are solid. Ditches are cut into the
    ground and only catch a horse that is running, not jumping.
    """
    kind: ObstacleKind
    x: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"{self.kind.name} needs a positive size, got {self.width}x{self.height}"
            )

    @classmethod
    def fence(cls, x: float, height: float, config: Optional[ObstacleSettings] = None) -> "Obstacle":
        """Build a fence, checking its height against the configured choices."""
        config = config or ObstacleSettings()
        if height not in config.fence_heights:
            raise ValueError(f"Fence height {height} not in {config.fence_heights}")
        return cls(ObstacleKind.FENCE, x, config.fence_width, height)

    @classmethod
    def ditch(cls, x: float, width: float, config: Optional[ObstacleSettings] = None) -> "Obstacle":
        """Build a ditch, checking its width against the configured range."""
        config = config or ObstacleSettings()
        if not config.ditch_min_width <= width < config.ditch_max_width:
            raise ValueError(
                f"Ditch width {width} outside [{config.ditch_min_width}, {config.ditch_max_width})"
            )
        return cls(ObstacleKind.DITCH, x, width, config.ditch_depth)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def is_past(self) -> bool:
        """True once the trailing edge has left the world."""
        return self.right < 0

    def vertical_span(self, ground_y: float) -> Tuple[float, float]:
        """(top, bottom) in screen coordinates."""
        if self.kind is ObstacleKind.DITCH:
            return ground_y, ground_y + self.height
        return ground_y - self.height, ground_y


def difficulty_speed(config: ObstacleSettings, spawn_count: int) -> float:
    """Scroll speed after ``spawn_count`` spawns: linear ramp, then capped."""
    speed = config.base_scroll_speed + spawn_count * config.speed_step
    return min(config.max_scroll_speed, speed)


@dataclass
class ObstacleField:
    """Ordered obstacles plus the spawn timer that feeds them."""

    world_width: float
    config: ObstacleSettings = field(default_factory=ObstacleSettings)
    rng: random.Random = field(default_factory=random.Random)
    reference_frame_ms: float = 1000.0 / 60.0

    obstacles: List[Obstacle] = field(init=False, default_factory=list)
    spawn_timer: float = field(init=False, default=0.0)
    next_spawn_interval: float = field(init=False, default=0.0)
    spawn_count: int = field(init=False, default=0)
    last_spawn: Optional[Obstacle] = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.next_spawn_interval = self.config.initial_interval

    def reset(self) -> None:
        """Clear all obstacles and restart the spawn timer."""
        self.obstacles = []
        self.spawn_timer = 0.0
        self.next_spawn_interval = self.config.initial_interval
        self.spawn_count = 0
        self.last_spawn = None

    def advance(self, delta_ms: float, scroll_speed: float) -> List[Tuple[Obstacle, bool]]:
        """Spawn, scroll and retire obstacles for one frame.

        Returns:
            Every obstacle handled this frame, paired with True if it just
            left the world (and therefore scores)
        """
        self.last_spawn = None
        self.spawn_timer += delta_ms
        if self.spawn_timer > self.next_spawn_interval:
            self.last_spawn = self.spawn()
            self.spawn_timer = 0.0

        shift = scroll_speed * (delta_ms / self.reference_frame_ms)
        handled: List[Tuple[Obstacle, bool]] = []
        remaining: List[Obstacle] = []
        for obs in self.obstacles:
            obs.x -= shift
            if obs.is_past:
                handled.append((obs, True))
            else:
                handled.append((obs, False))
                remaining.append(obs)

        self.obstacles = remaining
        return handled

    def spawn(self) -> Obstacle:
        """Create one obstacle at the leading edge and pick the next interval."""
        obstacle = self._generate(self.world_width)
        self.obstacles.append(obstacle)
        self.spawn_count += 1
        self.next_spawn_interval = self._sample_interval()

        logger.debug(
            f"Spawned {obstacle.kind.name} {obstacle.width:.0f}x{obstacle.height:.0f}, "
            f"next in {self.next_spawn_interval:.0f}ms"
        )
        return obstacle

    def _generate(self, x: float) -> Obstacle:
        cfg = self.config
        if self.rng.random() < cfg.ditch_chance:
            width = self.rng.uniform(cfg.ditch_min_width, cfg.ditch_max_width)
            # uniform() can round up onto the exclusive upper bound
            width = min(width, math.nextafter(cfg.ditch_max_width, cfg.ditch_min_width))
            return Obstacle.ditch(x, width, cfg)

        if self.rng.random() < cfg.fence_short_chance:
            height = cfg.fence_short_height
        else:
            height = cfg.fence_tall_height
        return Obstacle.fence(x, height, cfg)

    def _sample_interval(self) -> float:
        cfg = self.config
        # Occasional tight pairs make difficulty spikes
        if self.rng.random() < cfg.tight_pair_chance:
            low, high = cfg.tight_interval_min, cfg.tight_interval_max
        else:
            low, high = cfg.min_interval, cfg.max_interval
        return self.rng.uniform(low, high)
