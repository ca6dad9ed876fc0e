"""
trivia_client — Multiplayer Trivia Client
=========================================

Client-side session core for a turn-based, real-time multiplayer trivia
game played against a remote Socket.IO session coordinator.

Quick Start (console):
    trivia-client --server http://localhost:3001

Custom presentation layer:
    from trivia_client import SessionView, TriviaClient
    class MyView(SessionView): ...  # Implement render() and notify()

    async with TriviaClient(config, MyView()) as client:
        await client.create_game("Dana")
        await client.wait()

The coordinator is authoritative for phase, roster, turn and time. The
client mirrors it, runs a local countdown between updates, and refuses
to send intents that the current snapshot does not allow.
"""

from .client import TriviaClient
from .views import SessionView, ConsoleView
from .models import (
    Player,
    Question,
    QuestionUpdate,
    GameOutcome,
    SessionSnapshot,
)
from ._session.enums import Phase
from ._session.turn import can_answer, is_host
from .errors import (
    TriviaClientError,
    ConfigError,
    ConnectionExhaustedError,
    ChannelUnavailableError,
    MessageFormatError,
)

__all__ = [
    # Main classes
    "TriviaClient",
    "SessionView",
    "ConsoleView",
    # Models
    "Player",
    "Question",
    "QuestionUpdate",
    "GameOutcome",
    "SessionSnapshot",
    "Phase",
    # Predicates
    "can_answer",
    "is_host",
    # Errors
    "TriviaClientError",
    "ConfigError",
    "ConnectionExhaustedError",
    "ChannelUnavailableError",
    "MessageFormatError",
]
__version__ = "1.0.0"
