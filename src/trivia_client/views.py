"""
trivia_client.views — Presentation interface
============================================

The session core never draws anything. It hands every new snapshot, every
coordinator notification and the once-per-game celebration to a
``SessionView``. Subclass it to plug in any presentation layer.

    from trivia_client import SessionView, TriviaClient

    class MyView(SessionView):
        def render(self, snapshot, can_answer, is_host): ...
        def notify(self, message): ...
        def celebrate(self, winner): ...

``ConsoleView`` is a plain text implementation used by the CLI.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from .models import Player, SessionSnapshot
from ._session.enums import Phase


class SessionView(ABC):
    """
    Abstract presentation layer.

    All methods are called on the event loop thread and must not block.
    """

    @abstractmethod
    def render(self, snapshot: SessionSnapshot, can_answer: bool, is_host: bool) -> None:
        """
        Called after every snapshot change, including local timer ticks.

        Parameters
        ----------
        snapshot : SessionSnapshot
            The full, immutable session state.
        can_answer : bool
            Whether the local participant may answer right now.
        is_host : bool
            Whether the local participant may start the game.
        """

    @abstractmethod
    def notify(self, message: str) -> None:
        """Show a user-visible notification (coordinator error, lost connection)."""

    def celebrate(self, winner: Player) -> None:
        """Triggered once per finished game that has a sole winner."""


class ConsoleView(SessionView):
    """Line-oriented text view. Redraws only when something other than the timer changes."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream or sys.stdout
        self._last_key = None

    def _write(self, text: str) -> None:
        print(text, file=self._stream, flush=True)

    def render(self, snapshot: SessionSnapshot, can_answer: bool, is_host: bool) -> None:
        key = snapshot.model_copy(update={"time_left": 0})
        if key == self._last_key:
            if snapshot.phase == Phase.PLAYING and snapshot.time_left in (5, 3, 1, 0):
                self._write(f"  ... {snapshot.time_left}s left")
            return
        self._last_key = key

        if snapshot.phase == Phase.SETUP:
            self._write("== Lobby ==  commands: create NAME | join CODE NAME | quit")
        elif snapshot.phase == Phase.WAITING:
            self._write(f"== Waiting room ==  code: {snapshot.code}")
            for player in snapshot.players:
                self._write(f"  - {player.name}")
            self._write("  commands: " + ("start | " if is_host else "") + "leave")
        elif snapshot.phase == Phase.PLAYING:
            self._render_playing(snapshot, can_answer)
        elif snapshot.phase == Phase.FINISHED:
            self._render_finished(snapshot)

    def _render_playing(self, snapshot: SessionSnapshot, can_answer: bool) -> None:
        turn = snapshot.current_player.name if snapshot.current_player else "-"
        self._write(f"== Turn: {turn} ==  {snapshot.time_left}s left")
        if snapshot.active_question is not None:
            self._write(f"  {snapshot.active_question.text}")
            for number, answer in enumerate(snapshot.active_question.answers, 1):
                self._write(f"   {number}. {answer}")
        if can_answer:
            self._write("  your turn: answer N")
        self._write("  scores: " + ", ".join(f"{p.name}={p.score}" for p in snapshot.players))

    def _render_finished(self, snapshot: SessionSnapshot) -> None:
        self._write("== Game over ==")
        outcome = snapshot.outcome
        if outcome is not None and outcome.sole_winner is not None:
            self._write(f"  Winner: {outcome.sole_winner.name}")
        elif outcome is not None and outcome.is_tie:
            self._write("  Tie between: " + ", ".join(p.name for p in outcome.winners))
        for player in snapshot.players:
            self._write(f"  {player.name}: {player.score} points")
        self._write("  commands: leave (new game) | quit")

    def notify(self, message: str) -> None:
        self._write(f"!! {message}")

    def celebrate(self, winner: Player) -> None:
        self._write(f"*** Congratulations {winner.name}! ***")
