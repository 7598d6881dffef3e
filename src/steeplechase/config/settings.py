"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups use a double underscore, e.g. STEEPLECHASE_HORSE__JUMP_FORCE=-9.
"""

from enum import Enum
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GravityPolicy(str, Enum):
    """How the airborne gravity is chosen from the jump control."""

    HOLD_STATE = "hold_state"          # Weak gravity whenever the control is held
    HOLD_THRESHOLD = "hold_threshold"  # Weak gravity only after a minimum hold


class WorldSettings(BaseModel):
    """World geometry and timestep settings."""

    width: int = Field(default=500, gt=0)
    height: int = Field(default=300, gt=0)
    ground_offset: int = Field(default=50, ge=0)

    # Motion constants are expressed per reference frame (60 fps)
    reference_frame_ms: float = Field(default=1000.0 / 60.0, gt=0.0)
    max_delta_ms: float = Field(default=100.0, gt=0.0)

    @property
    def ground_y(self) -> int:
        return self.height - self.ground_offset


class HorseSettings(BaseModel):
    """Horse geometry and jump physics."""

    x: float = 50.0
    width: float = Field(default=40.0, gt=0.0)
    height: float = Field(default=30.0, gt=0.0)

    jump_force: float = Field(default=-8.0, lt=0.0)
    max_jump_height: float = Field(default=150.0, gt=0.0)
    strong_gravity: float = Field(default=0.35, gt=0.0)
    weak_gravity: float = Field(default=0.08, gt=0.0)
    gravity_policy: GravityPolicy = GravityPolicy.HOLD_STATE
    hold_threshold_ms: float = Field(default=200.0, ge=0.0)

    # Forgiving hitbox while airborne
    airborne_hitbox_height: float = Field(default=20.0, gt=0.0)
    airborne_hitbox_offset: float = Field(default=5.0, ge=0.0)

    @model_validator(mode="after")
    def _check_gravity(self) -> "HorseSettings":
        if self.weak_gravity > self.strong_gravity:
            raise ValueError("weak_gravity must not exceed strong_gravity")
        if self.airborne_hitbox_offset + self.airborne_hitbox_height > self.height:
            raise ValueError("airborne hitbox must fit inside the horse body")
        return self


class ObstacleSettings(BaseModel):
    """Obstacle generation and difficulty ramp."""

    # Spawn timing (ms)
    initial_interval: float = Field(default=2000.0, gt=0.0)
    min_interval: float = Field(default=500.0, gt=0.0)
    max_interval: float = Field(default=4000.0, gt=0.0)
    tight_pair_chance: float = Field(default=0.3, ge=0.0, le=1.0)
    tight_interval_min: float = Field(default=500.0, gt=0.0)
    tight_interval_max: float = Field(default=1000.0, gt=0.0)

    # Obstacle shapes
    ditch_chance: float = Field(default=0.2, ge=0.0, le=1.0)
    fence_width: float = Field(default=20.0, gt=0.0)
    fence_short_height: float = Field(default=40.0, gt=0.0)
    fence_tall_height: float = Field(default=60.0, gt=0.0)
    fence_short_chance: float = Field(default=0.7, ge=0.0, le=1.0)
    ditch_min_width: float = Field(default=50.0, gt=0.0)
    ditch_max_width: float = Field(default=90.0, gt=0.0)
    ditch_depth: float = Field(default=20.0, gt=0.0)

    # Scroll speed ramp (px per reference frame)
    base_scroll_speed: float = Field(default=2.0, gt=0.0)
    max_scroll_speed: float = Field(default=5.0, gt=0.0)
    speed_step: float = Field(default=0.3, ge=0.0)

    @model_validator(mode="after")
    def _check_ranges(self) -> "ObstacleSettings":
        if self.min_interval >= self.max_interval:
            raise ValueError("min_interval must be below max_interval")
        if self.tight_interval_min >= self.tight_interval_max:
            raise ValueError("tight_interval_min must be below tight_interval_max")
        if self.ditch_min_width >= self.ditch_max_width:
            raise ValueError("ditch_min_width must be below ditch_max_width")
        if self.base_scroll_speed > self.max_scroll_speed:
            raise ValueError("base_scroll_speed must not exceed max_scroll_speed")
        return self

    @property
    def fence_heights(self) -> tuple[float, float]:
        return (self.fence_short_height, self.fence_tall_height)


class SimulatorSettings(BaseModel):
    """Desktop simulator window settings."""

    scale: int = Field(default=2, ge=1)
    fps: int = Field(default=60, gt=0)
    title: str = "Steeplechase"
    restart_cooldown_ms: float = Field(default=500.0, ge=0.0)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="STEEPLECHASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Environment
    env: Literal["simulator", "headless"] = "simulator"
    debug: bool = False

    # Fixed seed for reproducible obstacle sequences (None = random)
    seed: int | None = None

    # Headless run length
    headless_ticks: int = Field(default=3600, gt=0)

    # Nested settings
    world: WorldSettings = Field(default_factory=WorldSettings)
    horse: HorseSettings = Field(default_factory=HorseSettings)
    obstacles: ObstacleSettings = Field(default_factory=ObstacleSettings)
    simulator: SimulatorSettings = Field(default_factory=SimulatorSettings)

    @property
    def is_simulator(self) -> bool:
        """Check if running with the desktop window."""
        return self.env == "simulator"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
