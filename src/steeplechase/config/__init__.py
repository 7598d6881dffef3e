"""Configuration for Steeplechase."""

from .settings import (
    GravityPolicy,
    HorseSettings,
    ObstacleSettings,
    Settings,
    SimulatorSettings,
    WorldSettings,
    get_settings,
)

__all__ = [
    "GravityPolicy",
    "HorseSettings",
    "ObstacleSettings",
    "Settings",
    "SimulatorSettings",
    "WorldSettings",
    "get_settings",
]
