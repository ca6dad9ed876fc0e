# Area: Session
"""
trivia_client.models — Immutable session models
================================================

Pydantic models for everything the coordinator pushes to the client and
for the aggregate snapshot the presentation layer observes.

All models are frozen. A snapshot is never patched in place; the
dispatcher builds a fresh one after every routed update.

    >>> Player(id="a1", name="Dana", score=0)
    Player(id='a1', name='Dana', score=0)
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from ._session.enums import Phase

# Socket.IO session ids are strings; some coordinators send integers.
PlayerId = Union[str, int]


class Player(BaseModel):
    """A participant in the session, as last reported by the coordinator."""

    model_config = ConfigDict(frozen=True)

    id: PlayerId
    name: str = ""
    score: int = Field(default=0, ge=0)


class Question(BaseModel):
    """The active question. Replaced wholesale on every question update."""

    model_config = ConfigDict(frozen=True)

    text: str
    answers: Tuple[str, ...] = Field(min_length=2)


class QuestionUpdate(BaseModel):
    """Payload of an inbound ``questionUpdate`` message."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question: Question
    current_player: Optional[Player] = Field(default=None, alias="currentPlayer")
    time_left: int = Field(alias="timeLeft")


class GameOutcome(BaseModel):
    """
    Final standings computed when the session enters ``finished``.

    Attributes:
        max_score: Highest score on the roster (0 for an empty roster)
        winners: Every player holding ``max_score``, in roster order
    """

    model_config = ConfigDict(frozen=True)

    max_score: int = 0
    winners: Tuple[Player, ...] = ()

    @property
    def is_tie(self) -> bool:
        return len(self.winners) > 1

    @property
    def sole_winner(self) -> Optional[Player]:
        return self.winners[0] if len(self.winners) == 1 else None


class SessionSnapshot(BaseModel):
    """
    The aggregate the presentation layer renders.

    Attributes:
        phase: Coarse lifecycle stage of the session
        code: Session code assigned by the coordinator ("" until assigned)
        players: Latest full roster, in coordinator order
        current_player: Roster entry whose turn it is, if any
        active_question: Question currently on the table, if any
        time_left: Seconds remaining on the active question, never negative
        outcome: Winner computation, present only while ``finished``
    """

    model_config = ConfigDict(frozen=True)

    phase: Phase = Phase.SETUP
    code: str = ""
    players: Tuple[Player, ...] = ()
    current_player: Optional[Player] = None
    active_question: Optional[Question] = None
    time_left: int = Field(default=10, ge=0)
    outcome: Optional[GameOutcome] = None
