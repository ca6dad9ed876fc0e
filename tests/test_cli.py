# Area: Shared Tests
"""Tests for the command-line interface."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

from trivia_client.cli import HELP, handle_command, main, parse_args
from trivia_client.errors import ConfigError, ConnectionExhaustedError


def make_client():
    client = MagicMock()
    for intent in ("create_game", "join_game", "start_game", "answer", "leave_game"):
        setattr(client, intent, AsyncMock(return_value=True))
    return client


def run_command(line):
    client = make_client()
    keep_going = asyncio.run(handle_command(client, line))
    return client, keep_going


class TestParseArgs:
    """Argument parsing."""

    def test_defaults(self):
        args = parse_args([])
        assert args.config is None
        assert args.server is None
        assert args.verbose is False

    def test_all_options(self):
        args = parse_args([
            "--config", "c.json", "--server", "http://x", "--log-file", "out.log", "--verbose",
        ])
        assert args.config == "c.json"
        assert args.server == "http://x"
        assert args.log_file == "out.log"
        assert args.verbose is True


class TestHandleCommand:
    """Console command mapping onto client intents."""

    def test_create_joins_name_words(self):
        client, keep_going = run_command("create Dana Smith")
        client.create_game.assert_awaited_once_with("Dana Smith")
        assert keep_going is True

    def test_join(self):
        client, _ = run_command("join AB12 Eli")
        client.join_game.assert_awaited_once_with("AB12", "Eli")

    def test_start(self):
        client, _ = run_command("start")
        client.start_game.assert_awaited_once()

    def test_answer_is_one_based(self):
        client, _ = run_command("answer 2")
        client.answer.assert_awaited_once_with(1)

    def test_leave(self):
        client, _ = run_command("leave")
        client.leave_game.assert_awaited_once()

    def test_quit(self):
        _, keep_going = run_command("quit")
        assert keep_going is False

    def test_blank_line_is_ignored(self):
        client, keep_going = run_command("   ")
        assert keep_going is True
        client.view.notify.assert_not_called()

    def test_unknown_command_shows_help(self):
        client, _ = run_command("dance")
        client.view.notify.assert_called_once_with(HELP)

    def test_answer_without_number_shows_help(self):
        client, _ = run_command("answer two")
        client.answer.assert_not_awaited()
        client.view.notify.assert_called_once_with(HELP)

    def test_unbalanced_quotes_show_help(self):
        client, _ = run_command('create "Dana')
        client.create_game.assert_not_awaited()
        client.view.notify.assert_called_once_with(HELP)


class TestMain:
    """Exit codes."""

    def test_config_error_exits_1(self):
        with patch("trivia_client.cli.load_config", side_effect=ConfigError("bad")):
            assert main([]) == 1

    def test_connection_exhausted_exits_2(self):
        error = ConnectionExhaustedError("http://coordinator", 6)
        with patch("trivia_client.cli.load_config", return_value={
            "server_url": "http://coordinator", "log_file": "",
        }), \
             patch("trivia_client.cli.setup_logging"), \
             patch("trivia_client.cli.run_client", new=MagicMock()), \
             patch("trivia_client.cli.asyncio.run", side_effect=error), \
             patch("trivia_client.cli.log_client_error") as mock_log:
            assert main([]) == 2
            mock_log.assert_called_once_with(error)

    def test_server_flag_overrides_config(self):
        with patch("trivia_client.cli.load_config", return_value={
            "server_url": "http://default", "log_file": "",
        }), \
             patch("trivia_client.cli.setup_logging"), \
             patch("trivia_client.cli.run_client", new=MagicMock()) as mock_run, \
             patch("trivia_client.cli.asyncio.run"):
            assert main(["--server", "http://localhost:3001"]) == 0
            config = mock_run.call_args.args[0]
            assert config["server_url"] == "http://localhost:3001"
