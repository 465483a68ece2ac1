"""
Phase machine for a DINORUN run.

Phases:
    IDLE: Nothing played yet (stage paused, start button shown)
    PLAYING: A run is being simulated
    ENDED: The last run hit an obstacle (stage paused, "Play Again" shown)
"""

from enum import Enum, auto
from typing import Callable, Protocol
import logging

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Run phases."""
    IDLE = auto()
    PLAYING = auto()
    ENDED = auto()


class HasPhase(Protocol):
    phase: Phase


PhaseListener = Callable[[Phase, Phase], None]


class PhaseMachine:
    """
    Guards phase changes of a game state.

    The machine does not own the phase value itself: it reads and writes
    ``target.phase`` so the controller's state record stays the single
    source of truth.
    """

    VALID_TRANSITIONS: list[tuple[Phase, Phase]] = [
        (Phase.IDLE, Phase.PLAYING),
        (Phase.PLAYING, Phase.ENDED),
        (Phase.ENDED, Phase.PLAYING),  # Play again
    ]

    def __init__(self, target: HasPhase) -> None:
        self._target = target
        self._listeners: list[PhaseListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"PhaseMachine initialized with phase: {target.phase.name}")

    @property
    def phase(self) -> Phase:
        """Get current phase."""
        return self._target.phase

    def can_transition(self, to_phase: Phase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._target.phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: Phase) -> bool:
        """
        Attempt to move to a new phase.

        Args:
            to_phase: Target phase

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_phase):
            logger.warning(
                f"Invalid transition: {self._target.phase.name} -> {to_phase.name}"
            )
            return False

        old_phase = self._target.phase
        self._target.phase = to_phase
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
