"""Shared fixtures for the Steeplechase test suite."""
import random

import pytest

from steeplechase.config.settings import HorseSettings, Settings
from steeplechase.core.agent import Horse
from steeplechase.core.engine import SteeplechaseEngine
from steeplechase.core.events import EventBus
from steeplechase.core.run import RunState

GROUND_Y = 250
FRAME_MS = 1000.0 / 60.0


@pytest.fixture
def settings():
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None, seed=1234)


@pytest.fixture
def horse():
    return Horse(GROUND_Y, HorseSettings())


@pytest.fixture
def run(settings):
    return RunState(settings, 500, 300, GROUND_Y, random.Random(1234))


@pytest.fixture
def event_bus():
    return EventBus(history_limit=10_000)


@pytest.fixture
def engine(settings, event_bus):
    eng = SteeplechaseEngine(settings, event_bus, random.Random(1234))
    eng.initialize(500, 300, GROUND_Y)
    return eng
