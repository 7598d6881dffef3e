"""Play session: the engine plus everything a front-end wraps around it.

A session owns one engine, the decorative scenery and the renderer, and
turns raw button presses into engine calls. After a run ends, a press only
restarts once the restart cooldown has passed, so a panicked double tap does
not skip the game-over screen. The cooldown is measured here, outside the
simulation.
"""

import logging
import random
from typing import Optional

from steeplechase.config.settings import Settings, get_settings
from steeplechase.core.engine import SteeplechaseEngine
from steeplechase.core.events import Event, EventBus, EventType
from steeplechase.core.run import TickReport
from steeplechase.core.state import PhaseContext, RunPhase
from steeplechase.graphics.primitives import Buffer, new_buffer
from steeplechase.graphics.renderer import SceneRenderer
from steeplechase.graphics.scenery import Scenery

logger = logging.getLogger(__name__)


class RaceSession:
    """Drives one engine from button presses and frame deltas.

    Usage:
        session = RaceSession()

        # In update loop:
        session.update(delta_ms)
        session.press()    # Button down
        session.release()  # Button up

        # In render loop:
        buffer = session.render()
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.event_bus = event_bus or EventBus()

        seed = self.settings.seed
        self.engine = SteeplechaseEngine(self.settings, self.event_bus, random.Random(seed))
        self.engine.initialize_from_settings()

        world = self.settings.world
        self.scenery = Scenery(
            world.width,
            world.ground_y,
            random.Random(None if seed is None else seed + 1),
            world.reference_frame_ms,
        )
        self.renderer = SceneRenderer(world.width, world.height)
        self._buffer = new_buffer(world.width, world.height)
        self._ended_for_ms = 0.0

        self.engine.add_phase_listener(self._on_phase_change)
        if self.settings.debug:
            self.event_bus.subscribe_all(self._trace_event)

    @property
    def can_restart(self) -> bool:
        return (
            self.engine.is_ended
            and self._ended_for_ms >= self.settings.simulator.restart_cooldown_ms
        )

    def update(self, delta_ms: float) -> TickReport:
        """Advance simulation and scenery by one frame."""
        if self.engine.is_ended:
            # Frozen world; only the restart cooldown keeps counting
            self._ended_for_ms += delta_ms
            return self.engine.tick(delta_ms)

        report = self.engine.tick(delta_ms)
        self.scenery.update(min(delta_ms, self.settings.world.max_delta_ms), self.engine.scroll_speed)
        return report

    def _on_phase_change(self, old: RunPhase, new: RunPhase, context: PhaseContext) -> None:
        if new is RunPhase.ENDED:
            self._ended_for_ms = 0.0
            logger.info(f"Run over ({context.reason}), final score {context.final_score}")

    def _trace_event(self, event: Event) -> None:
        if event.type is not EventType.TICK:
            logger.debug(f"{event.source}: {event.type} {event.data}")

    def press(self) -> bool:
        """Button down. Jumps while running, restarts after the cooldown."""
        if self.engine.is_ended:
            if self.can_restart:
                self.restart()
            return False
        return self.engine.press_start()

    def release(self) -> None:
        """Button up."""
        if not self.engine.is_ended:
            self.engine.press_end()

    def restart(self) -> None:
        # Only the current run's events are kept
        self.event_bus.clear_history()
        self.engine.reset()
        self.scenery.reset()
        self._ended_for_ms = 0.0

    def render(self, buffer: Optional[Buffer] = None) -> Buffer:
        """Draw the current frame into buffer (or the session's own)."""
        target = buffer if buffer is not None else self._buffer
        return self.renderer.render(self.engine.snapshot(), self.scenery, target)
