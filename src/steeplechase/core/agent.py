"""The horse: vertical jump physics with variable gravity.

The horse never moves horizontally; the world scrolls past it. Its ``y`` is
the baseline of its body (screen coordinates, y grows downward), so a horse
standing on the ground has ``y == ground_y``.

Holding the jump control while airborne selects a weaker gravity, which
flattens the arc and lengthens hang time. Releasing it brings the stronger
gravity back and the horse drops faster.
"""

import logging
from dataclasses import dataclass, field

from steeplechase.config.settings import GravityPolicy, HorseSettings

logger = logging.getLogger(__name__)

REFERENCE_FRAME_MS = 1000.0 / 60.0


def select_gravity(
    config: HorseSettings,
    is_jump_held: bool,
    hold_duration_ms: float,
) -> float:
    """Pick this tick's gravity according to the configured policy."""
    if not is_jump_held:
        return config.strong_gravity

    if config.gravity_policy is GravityPolicy.HOLD_THRESHOLD:
        if hold_duration_ms > config.hold_threshold_ms:
            return config.weak_gravity
        return config.strong_gravity

    return config.weak_gravity


@dataclass
class Horse:
    """The jumping agent."""

    ground_y: float
    config: HorseSettings = field(default_factory=HorseSettings)
    reference_frame_ms: float = REFERENCE_FRAME_MS

    y: float = field(init=False)
    velocity: float = field(init=False, default=0.0)
    is_airborne: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        self.y = self.ground_y

    @property
    def x(self) -> float:
        return self.config.x

    @property
    def width(self) -> float:
        return self.config.width

    @property
    def height(self) -> float:
        return self.config.height

    @property
    def ceiling_y(self) -> float:
        """Highest point (smallest y) the baseline may reach."""
        return self.ground_y - self.config.max_jump_height

    def jump(self) -> bool:
        """Start a jump. Only effective while grounded."""
        if self.is_airborne:
            return False
        self.is_airborne = True
        self.velocity = self.config.jump_force
        logger.debug(f"Jump started with velocity {self.velocity}")
        return True

    def integrate(
        self,
        delta_ms: float,
        is_jump_held: bool,
        hold_duration_ms: float = 0.0,
    ) -> bool:
        """Advance the jump arc by one frame.

        Args:
            delta_ms: Frame time in milliseconds
            is_jump_held: Whether the jump control is currently held
            hold_duration_ms: How long the control has been held

        Returns:
            True if the horse landed during this step
        """
        if not self.is_airborne:
            return False

        factor = delta_ms / self.reference_frame_ms
        if factor == 0:
            # No time passed; a fresh jump is still on the ground line
            return False

        gravity = select_gravity(self.config, is_jump_held, hold_duration_ms)

        # Semi-implicit Euler
        self.velocity += gravity * factor
        self.y += self.velocity * factor

        # Apex clamp arrests upward motion
        if self.y < self.ceiling_y:
            self.y = self.ceiling_y
            self.velocity = 0.0

        if self.y >= self.ground_y:
            self.land()
            return True

        return False

    def land(self) -> None:
        self.y = self.ground_y
        self.velocity = 0.0
        self.is_airborne = False
        logger.debug("Horse landed")

    def reset(self) -> None:
        """Put the horse back on the ground at rest."""
        self.land()
