# Area: Shared
"""
trivia_client.cli — Command-line interface
==========================================

Runs the client against a coordinator with the plain console view.

Usage:
    trivia-client                              # Default server
    trivia-client --server http://localhost:3001
    python -m trivia_client --config config.json

Commands typed at the prompt:
    create NAME | join CODE NAME | start | answer N | leave | quit
"""

import argparse
import asyncio
import contextlib
import logging
import shlex
import sys
import threading
from typing import Any, Dict, Optional

from ._client_config import load_config, validate_config
from ._shared.logging_config import console_mode, log_client_error, setup_logging
from ._shared.protocol_logger import get_protocol_logger
from .client import TriviaClient
from .errors import ConfigError, ConnectionExhaustedError
from .views import ConsoleView

HELP = "commands: create NAME | join CODE NAME | start | answer N | leave | quit"


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Multiplayer trivia client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  trivia-client
  trivia-client --server http://localhost:3001
  trivia-client --config config.json --verbose
  TRIVIA_SERVER_URL=http://localhost:3001 trivia-client
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to JSON config file",
    )

    parser.add_argument(
        "--server",
        type=str,
        help="Coordinator URL (overrides config and environment)",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        help="Path to the JSON log file",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show log lines and channel traffic on the terminal",
    )

    return parser.parse_args(argv)


async def handle_command(client: TriviaClient, line: str) -> bool:
    """
    Execute one console command.

    Returns:
        False when the user asked to quit, True otherwise
    """
    try:
        parts = shlex.split(line)
    except ValueError:
        client.view.notify(HELP)
        return True
    if not parts:
        return True

    command, args = parts[0].lower(), parts[1:]

    if command in ("quit", "exit"):
        return False
    if command == "create" and args:
        await client.create_game(" ".join(args))
    elif command == "join" and len(args) >= 2:
        await client.join_game(args[0], " ".join(args[1:]))
    elif command == "start":
        await client.start_game()
    elif command == "answer" and len(args) == 1 and args[0].isdigit():
        # Options are shown 1-based
        await client.answer(int(args[0]) - 1)
    elif command == "leave":
        await client.leave_game()
    else:
        client.view.notify(HELP)
    return True


def _start_stdin_reader(queue: "asyncio.Queue[Optional[str]]") -> None:
    """Feed stdin lines into the queue from a daemon thread; None marks EOF."""
    loop = asyncio.get_running_loop()

    def read() -> None:
        for line in sys.stdin:
            loop.call_soon_threadsafe(queue.put_nowait, line)
        loop.call_soon_threadsafe(queue.put_nowait, None)

    threading.Thread(target=read, name="stdin-reader", daemon=True).start()


async def _command_loop(client: TriviaClient) -> None:
    queue: "asyncio.Queue[Optional[str]]" = asyncio.Queue()
    _start_stdin_reader(queue)
    while True:
        line = await queue.get()
        if line is None or not await handle_command(client, line):
            return


async def run_client(config: Dict[str, Any]) -> None:
    """Connect, read commands until quit/EOF or until the channel is lost for good."""
    async with TriviaClient(config, ConsoleView()) as client:
        commands = asyncio.ensure_future(_command_loop(client))
        watcher = asyncio.ensure_future(client.wait())
        done, pending = await asyncio.wait(
            {commands, watcher}, return_when=asyncio.FIRST_COMPLETED
        )
        for task in pending:
            task.cancel()
        for task in done:
            task.result()


def main(argv=None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
        if args.server:
            config["server_url"] = args.server
        if args.log_file:
            config["log_file"] = args.log_file
        validate_config(config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(
        log_file_path=config["log_file"],
        level=logging.DEBUG if args.verbose else logging.INFO,
    )
    if args.verbose:
        get_protocol_logger().enabled = True

    # The console view owns the terminal unless channel traffic was asked for
    terminal = contextlib.nullcontext() if args.verbose else console_mode()
    try:
        with terminal:
            asyncio.run(run_client(config))
    except ConnectionExhaustedError as e:
        log_client_error(e)
        return 2
    except KeyboardInterrupt:
        return 130
    return 0
