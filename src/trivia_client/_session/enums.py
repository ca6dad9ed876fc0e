# Area: Session
"""
trivia_client._session.enums — Session Enums
=============================================

Defines the session phases, the events that move between them, and the
closed sets of channel message kinds the client understands.
"""

from enum import Enum


class Phase(str, Enum):
    """
    Coarse lifecycle stage of a session.

    Phase transitions:
    SETUP -> WAITING (on CODE_ASSIGNED)
    WAITING -> PLAYING (on START)
    PLAYING -> FINISHED (on FINISH)
    Any phase -> SETUP (on RESET, i.e. leave or new game)
    """
    SETUP = "setup"
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class PhaseEvent(Enum):
    """
    Events that trigger phase transitions.

    Events are triggered by:
    - CODE_ASSIGNED: gameCode received
    - START: startGame requested / gameState(playing) received
    - FINISH: gameState(finished) received
    - RESET: leaveGame requested or channel torn down
    """
    CODE_ASSIGNED = "CODE_ASSIGNED"
    START = "START"
    FINISH = "FINISH"
    RESET = "RESET"


class InboundKind(str, Enum):
    """Message kinds pushed by the coordinator."""
    GAME_CODE = "gameCode"
    GAME_STATE = "gameState"
    PLAYER_LIST = "playerList"
    QUESTION_UPDATE = "questionUpdate"
    ERROR = "error"


class OutboundKind(str, Enum):
    """Message kinds the client sends to the coordinator."""
    CREATE_GAME = "createGame"
    JOIN_GAME = "joinGame"
    START_GAME = "startGame"
    ANSWER = "answer"
    LEAVE_GAME = "leaveGame"
