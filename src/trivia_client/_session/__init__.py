# Area: Session
"""
Session core - client-side mirror of the coordinator's session state.

This package handles:
- Phase lifecycle (state_machine)
- Local countdown synchronized to authoritative time (timer)
- Turn authorization (turn)
- Roster and winner computation (scores)
- Inbound message dispatch and outbound intents (dispatcher)

Only the leaf modules that do not depend on ``trivia_client.models`` are
re-exported here, since the models themselves import ``enums``.
"""

from .enums import Phase, PhaseEvent, InboundKind, OutboundKind
from .state_machine import GameStateMachine
from .timer import CountdownTimer

__all__ = [
    "Phase",
    "PhaseEvent",
    "InboundKind",
    "OutboundKind",
    "GameStateMachine",
    "CountdownTimer",
]
