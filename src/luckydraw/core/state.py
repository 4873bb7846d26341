"""
Phase machine for the wheel.

States:
    IDLE: At rest, or coasting after a release too weak to spin
    DRAGGING: Pointer is held down and the wheel follows it
    SPINNING: Released with enough velocity, decaying towards settle
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class WheelPhase(Enum):
    """Wheel interaction phases."""
    IDLE = auto()
    DRAGGING = auto()
    SPINNING = auto()


PhaseListener = Callable[[WheelPhase, WheelPhase], None]


class PhaseMachine:
    """
    Tracks the wheel phase and enforces valid transitions.

    Listeners are notified with (old_phase, new_phase) after
    every successful transition.
    """

    # Valid phase transitions
    VALID_TRANSITIONS: list[tuple[WheelPhase, WheelPhase]] = [
        (WheelPhase.IDLE, WheelPhase.DRAGGING),
        (WheelPhase.DRAGGING, WheelPhase.IDLE),      # Weak release
        (WheelPhase.DRAGGING, WheelPhase.SPINNING),  # Strong release
        (WheelPhase.SPINNING, WheelPhase.IDLE),      # Settle or cancel
    ]

    def __init__(self, initial_phase: WheelPhase = WheelPhase.IDLE) -> None:
        self._phase = initial_phase
        self._listeners: list[PhaseListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)

    @property
    def phase(self) -> WheelPhase:
        """Get current phase."""
        return self._phase

    def can_transition(self, to_phase: WheelPhase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: WheelPhase) -> bool:
        """
        Attempt to transition to a new phase.

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
        logger.debug(f"Phase transition: {old_phase.name} -> {to_phase.name}")

        for listener in self._listeners:
            try:
                listener(old_phase, to_phase)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")

        return True

    def add_listener(self, callback: PhaseListener) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: PhaseListener) -> None:
        """Remove a phase change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)
