"""
Steeplechase engine - the boundary between the simulation and its drivers.

Usage:
    engine = SteeplechaseEngine()
    engine.initialize(500, 300, 250)

    # Per frame, from an external clock:
    engine.tick(delta_ms)

    # From the input layer:
    engine.press_start()
    engine.press_end()

    # From the renderer:
    snapshot = engine.snapshot()
"""

import logging
import math
import random
from typing import Optional, Tuple

from steeplechase.config.settings import Settings, get_settings
from steeplechase.core.events import Event, EventBus, EventType
from steeplechase.core.run import RunState, TickReport
from steeplechase.core.snapshot import HorseView, ObstacleView, RunSnapshot
from steeplechase.core.state import PhaseListener, RunPhase

logger = logging.getLogger(__name__)


class SteeplechaseEngine:
    """Validates calls, drives RunState and publishes events.

    All mutation goes through tick(), jump(), press_start(), press_end(),
    set_jump_held() and reset(). Everything else is read-only.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.event_bus = event_bus
        self._rng = rng
        self._run: Optional[RunState] = None
        self._frame = 0

    # Setup

    @property
    def is_initialized(self) -> bool:
        return self._run is not None

    def initialize(self, world_width: float, world_height: float, ground_y: float) -> None:
        """One-time world setup."""
        if self._run is not None:
            raise RuntimeError("Engine already initialized")
        if world_width <= 0 or world_height <= 0:
            raise ValueError(f"World size must be positive, got {world_width}x{world_height}")
        if not 0 < ground_y <= world_height:
            raise ValueError(f"ground_y {ground_y} outside (0, {world_height}]")

        self._run = RunState(self.settings, world_width, world_height, ground_y, self._rng)
        logger.info(
            f"Engine initialized: world {world_width}x{world_height}, ground at {ground_y}, "
            f"gravity policy {self.settings.horse.gravity_policy.value}"
        )

    def initialize_from_settings(self) -> None:
        """Initialize with the configured world geometry."""
        world = self.settings.world
        self.initialize(world.width, world.height, world.ground_y)

    def _require_run(self) -> RunState:
        if self._run is None:
            raise RuntimeError("Engine used before initialize()")
        return self._run

    # Simulation

    def tick(self, delta_ms: float) -> TickReport:
        """Advance the simulation by one frame.

        Args:
            delta_ms: Time since the previous frame in milliseconds

        Raises:
            ValueError: If delta_ms is negative or not finite
            RuntimeError: If called before initialize()
        """
        run = self._require_run()
        if not math.isfinite(delta_ms) or delta_ms < 0:
            raise ValueError(f"tick() needs a finite non-negative delta, got {delta_ms}")

        max_delta = self.settings.world.max_delta_ms
        if delta_ms > max_delta:
            logger.debug(f"Clamping frame delta {delta_ms:.1f}ms to {max_delta:.1f}ms")
            delta_ms = max_delta

        was_ended = run.is_ended
        report = run.tick(delta_ms)

        if not was_ended:
            self._frame += 1
            self._publish_tick(report, delta_ms)
        return report

    def _publish_tick(self, report: TickReport, delta_ms: float) -> None:
        if self.event_bus is None:
            return

        run = self._require_run()
        if report.landed:
            self._emit(EventType.LANDED)
        if report.spawned is not None:
            self._emit(EventType.OBSTACLE_SPAWNED, {
                "kind": report.spawned.kind.name,
                "width": report.spawned.width,
                "height": report.spawned.height,
                "scroll_speed": run.scroll_speed,
            })
        for obstacle in report.cleared:
            self._emit(EventType.OBSTACLE_CLEARED, {"kind": obstacle.kind.name, "score": run.score})
        if report.collided_with is not None:
            self._emit(EventType.RUN_ENDED, {
                "kind": report.collided_with.kind.name,
                "score": run.score,
                "high_score": run.high_score,
            })
        self._emit(EventType.TICK, {"delta": delta_ms, "frame": self._frame})

    def jump(self) -> bool:
        """Request a jump. Ignored while airborne or after the run ended."""
        started = self._require_run().jump()
        if started:
            self._emit(EventType.JUMP_STARTED)
        return started

    def press_start(self) -> bool:
        """Jump control pressed: start holding and jump if grounded."""
        run = self._require_run()
        self._emit(EventType.BUTTON_PRESS, source="input")
        started = run.press_start()
        if started:
            self._emit(EventType.JUMP_STARTED)
        return started

    def press_end(self) -> None:
        """Jump control released."""
        self._require_run().press_end()
        self._emit(EventType.BUTTON_RELEASE, source="input")

    def set_jump_held(self, held: bool) -> None:
        """Set the hold state without requesting a jump."""
        self._require_run().set_jump_held(held)

    @property
    def hold_duration_ms(self) -> float:
        return self._require_run().hold_duration_ms

    def reset(self) -> None:
        """Start a new run. Safe to call repeatedly."""
        run = self._require_run()
        run.reset()
        self._frame = 0
        logger.info("Run reset")
        self._emit(EventType.RUN_RESET, {"high_score": run.high_score})

    def add_phase_listener(self, callback: PhaseListener) -> None:
        """Call back on every RUNNING/ENDED change, including resets."""
        self._require_run().phases.add_listener(callback)

    # Read-only views

    @property
    def frame(self) -> int:
        """Frames simulated since the last reset."""
        return self._frame

    def snapshot(self) -> RunSnapshot:
        return self._require_run().snapshot()

    @property
    def horse(self) -> HorseView:
        return HorseView.of(self._require_run().horse)

    @property
    def obstacles(self) -> Tuple[ObstacleView, ...]:
        return tuple(ObstacleView.of(o) for o in self._require_run().obstacles)

    @property
    def score(self) -> int:
        return self._require_run().score

    @property
    def high_score(self) -> int:
        return self._require_run().high_score

    @property
    def phase(self) -> RunPhase:
        return self._require_run().phase

    @property
    def scroll_speed(self) -> float:
        return self._require_run().scroll_speed

    @property
    def is_ended(self) -> bool:
        return self._require_run().is_ended

    def _emit(self, event_type: EventType, data: Optional[dict] = None, source: str = "engine") -> None:
        if self.event_bus is not None:
            self.event_bus.emit(Event(event_type, data=data or {}, source=source))
