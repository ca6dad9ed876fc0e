# Area: Session Tests
"""Tests for EventDispatcher inbound routing."""

import asyncio
from unittest.mock import patch

import pytest

from trivia_client._session.dispatcher import EventDispatcher
from trivia_client._session.enums import Phase
from trivia_client.views import SessionView


QUESTION = {"text": "Capital of France?", "answers": ["Paris", "Rome", "Oslo"]}
ROSTER = [
    {"id": "p1", "name": "Dana", "score": 0},
    {"id": "p2", "name": "Eli", "score": 0},
]


class FakeChannel:
    """In-memory channel recording everything emitted."""

    def __init__(self, local_id="p1", connected=True):
        self.local_id = local_id
        self.connected = connected
        self.sent = []

    async def emit(self, kind, payload=None):
        self.sent.append((kind, payload))


class RecordingView(SessionView):
    """View that keeps every call for inspection."""

    def __init__(self):
        self.renders = []
        self.notices = []
        self.celebrations = []

    def render(self, snapshot, can_answer, is_host):
        self.renders.append((snapshot, can_answer, is_host))

    def notify(self, message):
        self.notices.append(message)

    def celebrate(self, winner):
        self.celebrations.append(winner)


CELEBRATION_DELAY = 0.01


def make_dispatcher(local_id="p1", tick_interval=60):
    channel = FakeChannel(local_id=local_id)
    view = RecordingView()
    dispatcher = EventDispatcher(
        channel=channel,
        view=view,
        tick_interval=tick_interval,
        celebration_delay=CELEBRATION_DELAY,
    )
    return dispatcher, channel, view


def question_update(current="p1", time_left=10, question=QUESTION):
    return {"question": question, "currentPlayer": {"id": current}, "timeLeft": time_left}


def roster(dana_score, eli_score):
    return [
        {"id": "p1", "name": "Dana", "score": dana_score},
        {"id": "p2", "name": "Eli", "score": eli_score},
    ]


async def settle():
    await asyncio.sleep(CELEBRATION_DELAY * 5)


class TestInitialSnapshot:
    """The session starts empty in setup."""

    def test_initial_snapshot(self):
        dispatcher, _, _ = make_dispatcher()
        snap = dispatcher.snapshot
        assert snap.phase == Phase.SETUP
        assert snap.code == ""
        assert snap.players == ()
        assert snap.current_player is None
        assert snap.active_question is None
        assert snap.time_left == 10
        assert snap.outcome is None


class TestGameCode:
    """gameCode sets the code and moves to waiting."""

    def test_sets_code_and_phase(self):
        dispatcher, _, view = make_dispatcher()
        dispatcher.dispatch("gameCode", "AB12")
        assert dispatcher.snapshot.code == "AB12"
        assert dispatcher.snapshot.phase == Phase.WAITING
        assert view.renders[-1][0].code == "AB12"

    def test_code_is_immutable_once_assigned(self):
        dispatcher, _, _ = make_dispatcher()
        dispatcher.dispatch("gameCode", "AB12")
        dispatcher.dispatch("gameCode", "ZZ99")
        assert dispatcher.snapshot.code == "AB12"

    def test_empty_code_is_dropped(self):
        dispatcher, _, view = make_dispatcher()
        dispatcher.dispatch("gameCode", "")
        assert dispatcher.snapshot.phase == Phase.SETUP
        assert view.renders == []


class TestGameState:
    """gameState sets the phase directly."""

    def test_sets_phase(self):
        async def scenario():
            dispatcher, _, _ = make_dispatcher()
            dispatcher.dispatch("gameCode", "AB12")
            dispatcher.dispatch("gameState", "playing")
            assert dispatcher.snapshot.phase == Phase.PLAYING
            dispatcher.shutdown()

        asyncio.run(scenario())

    def test_out_of_order_phase_is_applied(self):
        async def scenario():
            dispatcher, _, _ = make_dispatcher()
            dispatcher.dispatch("gameState", "finished")
            assert dispatcher.snapshot.phase == Phase.FINISHED
            dispatcher.shutdown()

        asyncio.run(scenario())

    def test_unknown_phase_is_dropped(self):
        dispatcher, _, view = make_dispatcher()
        with patch("trivia_client._session.dispatcher.logger") as mock_logger:
            dispatcher.dispatch("gameState", "paused")
            mock_logger.warning.assert_called_once()
        assert dispatcher.snapshot.phase == Phase.SETUP
        assert view.renders == []

    def test_setup_from_coordinator_clears_session(self):
        dispatcher, _, _ = make_dispatcher()
        dispatcher.dispatch("gameCode", "AB12")
        dispatcher.dispatch("playerList", ROSTER)
        dispatcher.dispatch("gameState", "setup")
        snap = dispatcher.snapshot
        assert snap.phase == Phase.SETUP
        assert snap.code == ""
        assert snap.players == ()


class TestPlayerList:
    """playerList replaces the roster."""

    def test_replaces_roster(self):
        dispatcher, _, _ = make_dispatcher()
        dispatcher.dispatch("playerList", ROSTER)
        dispatcher.dispatch("playerList", ROSTER[:1])
        assert [p.id for p in dispatcher.snapshot.players] == ["p1"]

    def test_malformed_roster_keeps_previous(self):
        dispatcher, _, _ = make_dispatcher()
        dispatcher.dispatch("playerList", ROSTER)
        dispatcher.dispatch("playerList", [{"name": "no id"}])
        assert len(dispatcher.snapshot.players) == 2

    def test_negative_score_rejected(self):
        dispatcher, _, _ = make_dispatcher()
        dispatcher.dispatch("playerList", [{"id": "p1", "name": "Dana", "score": -1}])
        assert dispatcher.snapshot.players == ()

    def test_integer_ids_accepted(self):
        dispatcher, _, _ = make_dispatcher()
        dispatcher.dispatch("playerList", [{"id": 1, "name": "Dana", "score": 0}])
        assert dispatcher.snapshot.players[0].id == 1


class TestQuestionUpdate:
    """questionUpdate replaces question, turn and timer together."""

    def test_applies_question_turn_and_time(self):
        async def scenario():
            dispatcher, _, _ = make_dispatcher()
            dispatcher.dispatch("playerList", ROSTER)
            dispatcher.dispatch("gameState", "playing")
            dispatcher.dispatch("questionUpdate", question_update(current="p2", time_left=7))
            snap = dispatcher.snapshot
            assert snap.active_question.text == "Capital of France?"
            assert snap.current_player.name == "Eli"
            assert snap.time_left == 7
            assert dispatcher.timer.running is True
            dispatcher.shutdown()

        asyncio.run(scenario())

    def test_time_left_equals_each_pushed_value(self):
        async def scenario():
            dispatcher, _, _ = make_dispatcher()
            dispatcher.dispatch("playerList", ROSTER)
            dispatcher.dispatch("gameState", "playing")
            for value in (10, 3, 8, 0, 5):
                dispatcher.dispatch("questionUpdate", question_update(time_left=value))
                assert dispatcher.snapshot.time_left == value
            dispatcher.shutdown()

        asyncio.run(scenario())

    def test_timer_not_started_outside_playing(self):
        dispatcher, _, _ = make_dispatcher()
        dispatcher.dispatch("questionUpdate", question_update(time_left=7))
        assert dispatcher.snapshot.time_left == 7
        assert dispatcher.timer.running is False

    def test_timer_starts_when_playing_arrives_after_question(self):
        async def scenario():
            dispatcher, _, _ = make_dispatcher()
            dispatcher.dispatch("gameCode", "AB12")
            dispatcher.dispatch("questionUpdate", question_update(time_left=7))
            dispatcher.dispatch("gameState", "playing")
            assert dispatcher.timer.running is True
            assert dispatcher.snapshot.time_left == 7
            dispatcher.shutdown()

        asyncio.run(scenario())

    def test_current_player_resolved_against_roster(self):
        dispatcher, _, _ = make_dispatcher()
        dispatcher.dispatch("questionUpdate", question_update(current="p2"))
        # Roster not received yet
        assert dispatcher.snapshot.current_player is None
        dispatcher.dispatch("playerList", ROSTER)
        assert dispatcher.snapshot.current_player.id == "p2"
        # Roster without p2
        dispatcher.dispatch("playerList", ROSTER[:1])
        assert dispatcher.snapshot.current_player is None

    def test_question_needs_two_answers(self):
        dispatcher, _, _ = make_dispatcher()
        bad = {"text": "?", "answers": ["only"]}
        dispatcher.dispatch("questionUpdate", question_update(question=bad))
        assert dispatcher.snapshot.active_question is None

    def test_missing_time_left_is_dropped(self):
        dispatcher, _, _ = make_dispatcher()
        dispatcher.dispatch("questionUpdate", {"question": QUESTION, "currentPlayer": {"id": "p1"}})
        assert dispatcher.snapshot.active_question is None

    def test_ticks_are_published(self):
        async def scenario():
            dispatcher, _, view = make_dispatcher(tick_interval=0.01)
            dispatcher.dispatch("playerList", ROSTER)
            dispatcher.dispatch("gameState", "playing")
            dispatcher.dispatch("questionUpdate", question_update(time_left=2))
            await asyncio.sleep(0.2)
            times = [snap.time_left for snap, _, _ in view.renders[-3:]]
            assert times == [2, 1, 0]
            # Answer is no longer possible once the local countdown hits 0
            assert view.renders[-1][1] is False

        asyncio.run(scenario())


class TestPhaseSideEffects:
    """Timer and standings follow the phase."""

    def test_leaving_playing_cancels_timer(self):
        async def scenario():
            dispatcher, _, _ = make_dispatcher()
            dispatcher.dispatch("playerList", ROSTER)
            dispatcher.dispatch("gameState", "playing")
            dispatcher.dispatch("questionUpdate", question_update(time_left=9))
            dispatcher.dispatch("gameState", "finished")
            assert dispatcher.timer.running is False

        asyncio.run(scenario())

    def test_finished_sole_winner_celebrated_once(self):
        async def scenario():
            dispatcher, _, view = make_dispatcher()
            dispatcher.dispatch("playerList", roster(10, 7))
            dispatcher.dispatch("gameState", "finished")
            await settle()
            dispatcher.dispatch("playerList", roster(10, 7))
            dispatcher.dispatch("gameState", "finished")
            await settle()
            assert [w.id for w in view.celebrations] == ["p1"]
            assert dispatcher.snapshot.outcome.sole_winner.id == "p1"

        asyncio.run(scenario())

    def test_finished_tie_reported_without_celebration(self):
        async def scenario():
            dispatcher, _, view = make_dispatcher()
            dispatcher.dispatch("playerList", roster(10, 10))
            dispatcher.dispatch("gameState", "finished")
            outcome = dispatcher.snapshot.outcome
            assert outcome.is_tie is True
            assert [w.id for w in outcome.winners] == ["p1", "p2"]
            await settle()
            assert view.celebrations == []

        asyncio.run(scenario())

    def test_final_roster_after_finish_is_celebrated(self):
        async def scenario():
            dispatcher, _, view = make_dispatcher()
            dispatcher.dispatch("playerList", roster(0, 0))
            dispatcher.dispatch("gameState", "finished")
            dispatcher.dispatch("playerList", roster(10, 7))
            await settle()
            assert dispatcher.snapshot.outcome.sole_winner.id == "p1"
            assert [w.id for w in view.celebrations] == ["p1"]

        asyncio.run(scenario())

    def test_final_tie_after_finish_cancels_stale_winner(self):
        async def scenario():
            dispatcher, _, view = make_dispatcher()
            dispatcher.dispatch("playerList", roster(10, 7))
            dispatcher.dispatch("gameState", "finished")
            dispatcher.dispatch("playerList", roster(10, 10))
            await settle()
            assert dispatcher.snapshot.outcome.is_tie is True
            assert view.celebrations == []

        asyncio.run(scenario())

    def test_leaving_finished_before_settle_skips_celebration(self):
        async def scenario():
            dispatcher, _, view = make_dispatcher()
            dispatcher.dispatch("playerList", roster(10, 7))
            dispatcher.dispatch("gameState", "finished")
            dispatcher.dispatch("gameState", "setup")
            await settle()
            assert view.celebrations == []

        asyncio.run(scenario())

    def test_outcome_only_while_finished(self):
        dispatcher, _, _ = make_dispatcher()
        dispatcher.dispatch("playerList", ROSTER)
        assert dispatcher.snapshot.outcome is None


class TestErrorsAndUnknownKinds:
    """Coordinator errors and unknown kinds."""

    def test_error_is_surfaced_without_state_change(self):
        dispatcher, _, view = make_dispatcher()
        before = dispatcher.snapshot
        dispatcher.dispatch("error", "Invalid game code")
        assert view.notices == ["Invalid game code"]
        assert dispatcher.snapshot == before
        assert view.renders == []

    def test_unknown_kind_is_ignored(self):
        dispatcher, _, view = make_dispatcher()
        with patch("trivia_client._session.dispatcher.logger") as mock_logger:
            dispatcher.dispatch("chatMessage", "hi")
            mock_logger.warning.assert_called_once()
        assert view.renders == []

    @pytest.mark.parametrize("kind", ["gameCode", "gameState", "playerList", "questionUpdate"])
    def test_none_payload_is_dropped(self, kind):
        dispatcher, _, _ = make_dispatcher()
        before = dispatcher.snapshot
        dispatcher.dispatch(kind, None)
        assert dispatcher.snapshot == before
