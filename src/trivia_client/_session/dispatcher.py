# Area: Session
"""
trivia_client._session.dispatcher — Event Dispatcher
====================================================

The integration point of the session core.

Inbound: every coordinator message kind in ``InboundKind`` maps to exactly
one handler in a fixed table. Handlers validate the payload, update the
state machine, roster, timer and turn state, and the resulting snapshot is
pushed to the view.

Outbound: five local intents (create, join, start, answer, leave) are
checked against the current snapshot before anything is sent. An intent
that fails its precondition is dropped and never reaches the network.

Authoritative values always win: a question update cancels and reseeds
the countdown inside its handler, before the event loop can run another
tick of the old one.

The end-of-game celebration is decided ``celebration_delay`` seconds after
the last roster push in the finished phase, from the standings held then.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Protocol

from pydantic import TypeAdapter, ValidationError

from ..errors import ChannelUnavailableError, MessageFormatError
from ..models import Player, PlayerId, Question, QuestionUpdate, SessionSnapshot
from ..views import SessionView
from .._shared.protocol_logger import ProtocolLogger, get_protocol_logger
from .enums import InboundKind, OutboundKind, Phase, PhaseEvent
from .scores import ScoreAggregator
from .state_machine import GameStateMachine
from .timer import CountdownTimer
from .turn import can_answer, is_host

logger = logging.getLogger("trivia_client.session.dispatcher")

_ROSTER = TypeAdapter(List[Player])


class Channel(Protocol):
    """What the dispatcher needs from the transport."""

    @property
    def connected(self) -> bool: ...

    @property
    def local_id(self) -> Optional[PlayerId]: ...

    async def emit(self, kind: str, payload: Any = None) -> None: ...


def _validation_errors(error: ValidationError) -> List[str]:
    return [
        f"{'.'.join(str(p) for p in item['loc']) or '<root>'}: {item['msg']}"
        for item in error.errors()
    ]


class EventDispatcher:
    """
    Owns one session's state and routes channel traffic through it.

    Attributes:
        state_machine: Phase holder
        scores: Roster and standings
        timer: Countdown seeded by question updates
        code: Session code ("" until assigned)
        question: Active question, if any
    """

    def __init__(
        self,
        channel: Channel,
        view: SessionView,
        initial_time_left: int = 10,
        tick_interval: float = 1.0,
        celebration_delay: float = 0.5,
        protocol_logger: Optional[ProtocolLogger] = None,
    ):
        self._channel = channel
        self._view = view
        self._protocol = protocol_logger or get_protocol_logger()
        self.state_machine = GameStateMachine()
        self.scores = ScoreAggregator()
        self.timer = CountdownTimer(
            initial=initial_time_left,
            interval=tick_interval,
            on_tick=self._on_tick,
        )
        self.code = ""
        self.question: Optional[Question] = None
        self._current_player_id: Optional[PlayerId] = None
        self._celebration_delay = celebration_delay
        self._celebration: Optional[asyncio.TimerHandle] = None
        self._handlers: Dict[InboundKind, Callable[[Any], bool]] = {
            InboundKind.GAME_CODE: self._on_game_code,
            InboundKind.GAME_STATE: self._on_game_state,
            InboundKind.PLAYER_LIST: self._on_player_list,
            InboundKind.QUESTION_UPDATE: self._on_question_update,
            InboundKind.ERROR: self._on_error,
        }

    # ── Snapshot ─────────────────────────────────────────────────

    @property
    def phase(self) -> Phase:
        return self.state_machine.current_phase

    @property
    def snapshot(self) -> SessionSnapshot:
        """Build the current immutable snapshot."""
        current = None
        if self._current_player_id is not None:
            current = self.scores.find(self._current_player_id)
        return SessionSnapshot(
            phase=self.phase,
            code=self.code,
            players=self.scores.players,
            current_player=current,
            active_question=self.question,
            time_left=self.timer.time_left,
            outcome=self.scores.outcome,
        )

    def can_answer(self) -> bool:
        return can_answer(self.snapshot, self._channel.local_id)

    def _publish(self) -> None:
        snapshot = self.snapshot
        local_id = self._channel.local_id
        self._view.render(snapshot, can_answer(snapshot, local_id), is_host(snapshot, local_id))

    def _on_tick(self, time_left: int) -> None:
        self._publish()

    # ── Inbound ──────────────────────────────────────────────────

    def dispatch(self, kind: str, payload: Any = None) -> None:
        """
        Route one inbound message to its handler.

        Unknown kinds and malformed payloads are logged and dropped without
        touching session state.
        """
        try:
            inbound = InboundKind(kind)
        except ValueError:
            logger.warning(f"No handler for message kind: {kind}")
            return

        self._protocol.log_received(inbound.value)
        try:
            changed = self._handlers[inbound](payload)
        except MessageFormatError as e:
            logger.warning(str(e))
            self._protocol.log_error(str(e))
            return
        if changed:
            self._publish()

    def _on_game_code(self, payload: Any) -> bool:
        if not isinstance(payload, str) or not payload.strip():
            raise MessageFormatError(InboundKind.GAME_CODE.value, payload, ["code must be a non-empty string"])
        if self.code and self.phase != Phase.SETUP:
            logger.warning("Ignoring gameCode %s: session already holds %s", payload, self.code)
            return False
        self.code = payload.strip()
        self._protocol.set_code(self.code)
        self._apply_phase(Phase.WAITING)
        return True

    def _on_game_state(self, payload: Any) -> bool:
        try:
            phase = Phase(payload)
        except ValueError:
            raise MessageFormatError(
                InboundKind.GAME_STATE.value, payload,
                [f"unknown phase, expected one of {[p.value for p in Phase]}"],
            )
        self._apply_phase(phase)
        return True

    def _on_player_list(self, payload: Any) -> bool:
        try:
            players = _ROSTER.validate_python(payload)
        except ValidationError as e:
            raise MessageFormatError(InboundKind.PLAYER_LIST.value, payload, _validation_errors(e))
        self.scores.replace(players)
        if self.phase == Phase.FINISHED:
            self._schedule_celebration()
        return True

    def _on_question_update(self, payload: Any) -> bool:
        try:
            update = QuestionUpdate.model_validate(payload)
        except ValidationError as e:
            raise MessageFormatError(InboundKind.QUESTION_UPDATE.value, payload, _validation_errors(e))
        self.question = update.question
        self._current_player_id = update.current_player.id if update.current_player else None
        if self._current_player_id is not None and self.scores.find(self._current_player_id) is None:
            logger.debug("Current player %s not on roster yet", self._current_player_id)
        self.timer.sync(update.time_left, run=self.phase == Phase.PLAYING)
        return True

    def _on_error(self, payload: Any) -> bool:
        message = payload if isinstance(payload, str) else str(payload)
        logger.info(f"Coordinator error: {message}")
        self._view.notify(message)
        return False

    # ── Phase side effects ───────────────────────────────────────

    def _apply_phase(self, phase: Phase) -> None:
        previous = self.phase
        self.state_machine.apply(phase)
        if phase == previous:
            return
        if phase == Phase.SETUP:
            self._clear_session()
            return
        if phase != Phase.PLAYING:
            self.timer.cancel()
        elif self.question is not None:
            self.timer.start()
        if previous == Phase.FINISHED:
            self._cancel_celebration()
            self.scores.leave_finished()
        if phase == Phase.FINISHED:
            self.scores.enter_finished()
            self._schedule_celebration()

    # ── Celebration ──────────────────────────────────────────────

    def _schedule_celebration(self) -> None:
        """
        Decide the celebration once the roster has settled.

        The final roster may arrive just before or just after the finished
        phase. Every roster push while finished restarts the delay, so the
        decision is made on the standings the coordinator last reported.
        """
        self._cancel_celebration()
        loop = asyncio.get_running_loop()
        self._celebration = loop.call_later(self._celebration_delay, self._celebrate)

    def _cancel_celebration(self) -> None:
        if self._celebration is not None:
            self._celebration.cancel()
            self._celebration = None

    def _celebrate(self) -> None:
        self._celebration = None
        winner = self.scores.claim_celebration()
        if winner is not None:
            self._view.celebrate(winner)

    def _clear_session(self) -> None:
        self.timer.reset()
        self.scores.clear()
        self.code = ""
        self.question = None
        self._current_player_id = None
        self._cancel_celebration()
        self._protocol.set_code(None)

    def reset(self) -> None:
        """Return to the initial snapshot. Used on leave and on channel teardown."""
        self.state_machine.reset()
        self._clear_session()
        self._publish()

    def shutdown(self) -> None:
        """Cancel the countdown and any pending celebration. Safe to call repeatedly."""
        self.timer.cancel()
        self._cancel_celebration()

    # ── Outbound intents ─────────────────────────────────────────

    def _drop(self, kind: OutboundKind, reason: str) -> bool:
        logger.debug(f"Dropped {kind.value}: {reason}")
        self._protocol.log_dropped(kind.value, reason)
        return False

    async def _send(self, kind: OutboundKind, payload: Any = None) -> bool:
        if not self._channel.connected:
            return self._drop(kind, "channel not connected")
        try:
            await self._channel.emit(kind.value, payload)
        except ChannelUnavailableError as e:
            logger.warning(f"Send failed for {kind.value}: {e}")
            self._protocol.log_error(str(e))
            return False
        self._protocol.log_sent(kind.value)
        return True

    async def create_game(self, player_name: str) -> bool:
        """Ask the coordinator for a new session. Requires a non-empty name."""
        name = (player_name or "").strip()
        if not name:
            return self._drop(OutboundKind.CREATE_GAME, "empty player name")
        if self.phase != Phase.SETUP:
            return self._drop(OutboundKind.CREATE_GAME, f"phase is {self.phase.value}")
        return await self._send(OutboundKind.CREATE_GAME, name)

    async def join_game(self, game_code: str, player_name: str) -> bool:
        """Join an existing session by code. Requires non-empty code and name."""
        code = (game_code or "").strip()
        name = (player_name or "").strip()
        if not name:
            return self._drop(OutboundKind.JOIN_GAME, "empty player name")
        if not code:
            return self._drop(OutboundKind.JOIN_GAME, "empty game code")
        if self.phase != Phase.SETUP:
            return self._drop(OutboundKind.JOIN_GAME, f"phase is {self.phase.value}")
        return await self._send(OutboundKind.JOIN_GAME, {"gameCode": code, "playerName": name})

    async def start_game(self) -> bool:
        """
        Ask the coordinator to start the game.

        Only the host may start, and only from the waiting room. The phase
        is not changed locally; the coordinator's gameState push does that.
        """
        if not self.state_machine.can_transition(PhaseEvent.START):
            return self._drop(OutboundKind.START_GAME, f"phase is {self.phase.value}")
        if not is_host(self.snapshot, self._channel.local_id):
            return self._drop(OutboundKind.START_GAME, "not the host")
        return await self._send(OutboundKind.START_GAME)

    async def answer(self, answer_index: int) -> bool:
        """Submit an answer index for the active question, if it is our turn."""
        if not self.can_answer():
            return self._drop(OutboundKind.ANSWER, "not allowed to answer now")
        if isinstance(answer_index, bool) or not isinstance(answer_index, int):
            return self._drop(OutboundKind.ANSWER, f"invalid index {answer_index!r}")
        if self.question is None or not 0 <= answer_index < len(self.question.answers):
            return self._drop(OutboundKind.ANSWER, f"index {answer_index} out of range")
        return await self._send(OutboundKind.ANSWER, answer_index)

    async def leave_game(self) -> bool:
        """
        Leave the session.

        The local reset happens regardless of whether the leave message
        could be sent; no acknowledgment is awaited.
        """
        try:
            return await self._send(OutboundKind.LEAVE_GAME)
        finally:
            self.reset()
