"""Decorative background: drifting clouds and the occasional manor house.

Purely cosmetic. It scrolls with the shared scroll speed so it moves in step
with the obstacles, but it never feeds back into the simulation.
"""

import random
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Cloud:
    """A background cloud."""
    x: float
    y: float
    width: int
    height: int


@dataclass
class Manor:
    """The manor house that sometimes drifts past behind the course."""
    x: float
    y: float
    width: int = 200
    height: int = 150
    active: bool = False
    speed: float = 0.5  # Pixels per reference frame


def default_clouds() -> List[Cloud]:
    return [
        Cloud(x=0, y=50, width=100, height=30),
        Cloud(x=200, y=80, width=80, height=25),
        Cloud(x=400, y=40, width=120, height=35),
    ]


@dataclass
class Scenery:
    """Background elements for one world."""

    world_width: float
    ground_y: float
    rng: random.Random = field(default_factory=random.Random)
    reference_frame_ms: float = 1000.0 / 60.0

    # Clouds scroll at a fraction of the course speed (parallax)
    CLOUD_PARALLAX = 0.5
    MANOR_CHANCE = 0.001  # Per reference frame

    clouds: List[Cloud] = field(init=False, default_factory=default_clouds)
    manor: Manor = field(init=False)

    def __post_init__(self) -> None:
        self.manor = Manor(x=self.world_width, y=self.ground_y - 150)

    def update(self, delta_ms: float, scroll_speed: float) -> None:
        factor = delta_ms / self.reference_frame_ms

        for cloud in self.clouds:
            cloud.x -= scroll_speed * self.CLOUD_PARALLAX * factor
            if cloud.x + cloud.width < 0:
                cloud.x = self.world_width
                cloud.y = self.rng.random() * 100

        manor = self.manor
        if manor.active:
            manor.x -= manor.speed * factor
            if manor.x + manor.width < 0:
                manor.active = False
        elif self.rng.random() < self.MANOR_CHANCE * factor:
            manor.active = True
            manor.x = self.world_width

    def reset(self, rng: Optional[random.Random] = None) -> None:
        if rng is not None:
            self.rng = rng
        self.clouds = default_clouds()
        self.manor = Manor(x=self.world_width, y=self.ground_y - 150)
