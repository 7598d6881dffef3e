"""Jump control hold tracking.

Hold time is measured on the simulation clock (sum of tick deltas) rather
than wall time, so a recorded run replays identically.
"""

from dataclasses import dataclass


@dataclass
class InputState:
    """Whether the jump control is held and since when."""

    is_held: bool = False
    press_started_at: float = 0.0

    def press_start(self, now_ms: float) -> bool:
        """Mark the control as held. Returns False if it already was."""
        if self.is_held:
            return False
        self.is_held = True
        self.press_started_at = now_ms
        return True

    def press_end(self) -> bool:
        """Release the control. Returns False if it was not held."""
        if not self.is_held:
            return False
        self.is_held = False
        return True

    def hold_duration(self, now_ms: float) -> float:
        """Milliseconds the control has been held, 0 when released."""
        if not self.is_held:
            return 0.0
        return max(0.0, now_ms - self.press_started_at)

    def clear(self) -> None:
        self.is_held = False
        self.press_started_at = 0.0
