"""Simulation core for Steeplechase."""

from .agent import Horse, select_gravity
from .collision import hitbox, hits
from .engine import SteeplechaseEngine
from .events import Event, EventBus, EventType
from .input import InputState
from .obstacles import Obstacle, ObstacleField, ObstacleKind, difficulty_speed
from .run import RunState, TickReport
from .snapshot import HorseView, ObstacleView, RunSnapshot
from .state import PhaseMachine, RunPhase

__all__ = [
    "Horse",
    "select_gravity",
    "hitbox",
    "hits",
    "SteeplechaseEngine",
    "Event",
    "EventBus",
    "EventType",
    "InputState",
    "Obstacle",
    "ObstacleField",
    "ObstacleKind",
    "difficulty_speed",
    "RunState",
    "TickReport",
    "HorseView",
    "ObstacleView",
    "RunSnapshot",
    "PhaseMachine",
    "RunPhase",
]
