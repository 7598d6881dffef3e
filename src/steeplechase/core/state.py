"""
Run phase state machine.

Phases:
    RUNNING: The horse is running and the world scrolls
    ENDED: The horse hit an obstacle; nothing moves until a reset
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class RunPhase(Enum):
    """Run phases."""
    RUNNING = auto()
    ENDED = auto()


@dataclass
class PhaseContext:
    """Details of the most recent phase change."""
    reason: str | None = None
    final_score: int | None = None


PhaseListener = Callable[[RunPhase, RunPhase, PhaseContext], None]


class PhaseMachine:
    """
    Guards run phase transitions and notifies listeners.

    ENDED is terminal: the only way out is reset(), which goes back
    to RUNNING.
    """

    VALID_TRANSITIONS: list[tuple[RunPhase, RunPhase]] = [
        (RunPhase.RUNNING, RunPhase.ENDED),
        (RunPhase.ENDED, RunPhase.RUNNING),  # Reset only
    ]

    def __init__(self, initial_phase: RunPhase = RunPhase.RUNNING) -> None:
        self._phase = initial_phase
        self._context = PhaseContext()
        self._listeners: list[PhaseListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"PhaseMachine initialized with phase: {initial_phase.name}")

    @property
    def phase(self) -> RunPhase:
        """Get current phase."""
        return self._phase

    @property
    def context(self) -> PhaseContext:
        return self._context

    def can_transition(self, to_phase: RunPhase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: RunPhase, reason: str | None = None, final_score: int | None = None) -> bool:
        """
        Attempt to move to a new phase.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_phase):
            logger.warning(
                f"Invalid transition: {self._phase.name} -> {to_phase.name}"
            )
            return False

        old_phase = self._phase
        self._phase = to_phase
        self._context = PhaseContext(reason=reason, final_score=final_score)

        logger.info(f"Phase transition: {old_phase.name} -> {to_phase.name}")
        self._notify(old_phase, to_phase)
        return True

    def add_listener(self, callback: PhaseListener) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

    def reset(self) -> None:
        """Return to RUNNING, notifying listeners only if the phase changed."""
        old_phase = self._phase
        self._phase = RunPhase.RUNNING
        self._context = PhaseContext(reason="reset")

        if old_phase is not RunPhase.RUNNING:
            self._notify(old_phase, RunPhase.RUNNING)

    def _notify(self, old_phase: RunPhase, new_phase: RunPhase) -> None:
        for listener in self._listeners:
            try:
                listener(old_phase, new_phase, self._context)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")
