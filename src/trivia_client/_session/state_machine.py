# Area: Session
"""
trivia_client._session.state_machine — Game State Machine
=========================================================

Holds the session phase and validates/executes transitions.

Locally requested transitions must follow the table below. Phases pushed
by the coordinator are authoritative and are applied even when they do
not correspond to a table edge.
"""

import logging
from typing import Optional

from .enums import Phase, PhaseEvent

logger = logging.getLogger("trivia_client.session.state_machine")


# Valid phase transitions: {current_phase: {event: next_phase}}
TRANSITIONS = {
    Phase.SETUP: {
        PhaseEvent.CODE_ASSIGNED: Phase.WAITING,
        PhaseEvent.RESET: Phase.SETUP,
    },
    Phase.WAITING: {
        PhaseEvent.START: Phase.PLAYING,
        PhaseEvent.RESET: Phase.SETUP,
    },
    Phase.PLAYING: {
        PhaseEvent.FINISH: Phase.FINISHED,
        PhaseEvent.RESET: Phase.SETUP,
    },
    Phase.FINISHED: {
        PhaseEvent.RESET: Phase.SETUP,
    },
}


class GameStateMachine:
    """
    State machine for the session lifecycle.

    Attributes:
        current_phase: The phase the session is in
        previous_phase: The phase before the last change, if any
    """

    def __init__(self):
        """Initialize state machine in SETUP."""
        self.current_phase = Phase.SETUP
        self.previous_phase: Optional[Phase] = None

    def can_transition(self, event: PhaseEvent) -> bool:
        """
        Check if a transition is valid from the current phase.

        Args:
            event: The event to check

        Returns:
            True if the transition is valid, False otherwise
        """
        return event in TRANSITIONS.get(self.current_phase, {})

    def transition(self, event: PhaseEvent) -> Phase:
        """
        Execute a locally requested transition.

        Args:
            event: The event triggering the transition

        Returns:
            The new phase after transition

        Raises:
            ValueError: If the transition is not valid from the current phase
        """
        if not self.can_transition(event):
            raise ValueError(
                f"Invalid transition: {event.value} from {self.current_phase.value}"
            )
        return self._set(TRANSITIONS[self.current_phase][event])

    def apply(self, phase: Phase) -> Phase:
        """
        Apply a phase pushed by the coordinator.

        The coordinator is authoritative, so a phase that is not reachable
        by a table edge is still applied; it is only logged.
        """
        if phase != self.current_phase and phase not in TRANSITIONS[self.current_phase].values():
            logger.warning(
                "Out-of-order phase from coordinator: %s -> %s",
                self.current_phase.value, phase.value,
            )
        return self._set(phase)

    def reset(self) -> None:
        """Reset state machine to SETUP."""
        self._set(Phase.SETUP)

    def _set(self, phase: Phase) -> Phase:
        self.previous_phase = self.current_phase
        self.current_phase = phase
        if self.previous_phase != phase:
            logger.info("Phase %s -> %s", self.previous_phase.value, phase.value)
        return phase
