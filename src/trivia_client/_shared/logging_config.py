# Area: Shared
"""
trivia_client._shared.logging_config — Logging setup
====================================================

Two handlers hang off the ``trivia_client`` logger:

    terminal   stderr, level names coloured when the stream is a TTY
    file       one JSON object per line, for later inspection

While the console view owns the terminal, ``console_mode()`` mutes the
terminal handler. The file handler keeps recording.
"""

from __future__ import annotations
import json
import logging
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Optional, TextIO

if TYPE_CHECKING:
    from ..errors import TriviaClientError

PACKAGE_LOGGER = "trivia_client"

logger = logging.getLogger(PACKAGE_LOGGER)

LEVEL_COLORS = {
    "DEBUG": "\033[36m",     # Cyan
    "INFO": "\033[32m",      # Green
    "WARNING": "\033[33m",   # Yellow
    "ERROR": "\033[31m",     # Red
    "CRITICAL": "\033[35m",  # Magenta
}
RESET = "\033[0m"


class TerminalGate(logging.Filter):
    """Drops every record while ``muted`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.muted = False

    def filter(self, record: logging.LogRecord) -> bool:
        return not self.muted


# Shared by every terminal handler setup_logging installs
_terminal_gate = TerminalGate()


class TerminalFormatter(logging.Formatter):
    """``HH:MM:SS │ LEVEL │ logger │ message``, optionally coloured."""

    def __init__(self, color: bool = True):
        super().__init__(
            fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
            datefmt="%H:%M:%S",
        )
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        if not self.color:
            return super().format(record)
        # Colour a copy; the file handler must see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{LEVEL_COLORS.get(record.levelname, '')}{record.levelname}{RESET}"
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """One JSON object per record. Carries ``error_type`` when the record has one."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        error_type = getattr(record, "error_type", None)
        if error_type:
            entry["error_type"] = error_type
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(
    log_file_path: str = "trivia_client.log",
    level: int = logging.INFO,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Install the terminal and file handlers on the package logger.

    Calling it again replaces the handlers from the previous call.

    Parameters
    ----------
    log_file_path : str
        JSON log file. An empty string disables file logging.
    level : int
        Logging level for the package and both handlers.
    stream : TextIO, optional
        Terminal stream. Defaults to stderr so stdout stays with the view.
    """
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    pkg_logger.setLevel(level)

    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()

    stream = stream or sys.stderr
    isatty = getattr(stream, "isatty", None)
    terminal_handler = logging.StreamHandler(stream)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(color=bool(isatty and isatty())))
    terminal_handler.addFilter(_terminal_gate)
    pkg_logger.addHandler(terminal_handler)

    if log_file_path:
        try:
            log_path = Path(log_file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())
            pkg_logger.addHandler(file_handler)
        except OSError as e:
            pkg_logger.warning(f"Could not create log file: {e}")

    pkg_logger.propagate = False


@contextmanager
def console_mode() -> Iterator[None]:
    """
    Mute terminal log lines for the duration of the block.

    Nests safely: the previous muted state is restored on exit.
    """
    previous = _terminal_gate.muted
    _terminal_gate.muted = True
    try:
        yield
    finally:
        _terminal_gate.muted = previous


def log_client_error(error: "TriviaClientError") -> None:
    """
    Report a fatal client error.

    The structured block from ``format_error_log()`` goes straight to
    stderr; a one-line record with the error type goes through the logger.
    """
    formatter = getattr(error, "format_error_log", None)
    if formatter is not None:
        print(formatter(), file=sys.stderr)

    logger.error(
        f"{error.__class__.__name__}: {error}",
        extra={"error_type": error.__class__.__name__},
    )
