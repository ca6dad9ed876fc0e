"""
trivia_client.errors — Custom exception classes
===============================================

Defines the exception hierarchy for the trivia client.
Each exception stores full context for structured logging.
"""

from __future__ import annotations
from typing import Any, List, Optional
import json


class TriviaClientError(Exception):
    """Base exception for all trivia client errors."""
    pass


class ConfigError(TriviaClientError, ValueError):
    """Raised when configuration is missing or invalid."""
    pass


class ConnectionExhaustedError(TriviaClientError):
    """Raised when the channel cannot be (re)established within the retry budget."""

    def __init__(self, url: str, attempts: int, last_error: Optional[BaseException] = None):
        self.url = url
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Could not connect to {url} after {attempts} attempts"
            + (f": {last_error}" if last_error else "")
        )

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="CONNECTION_EXHAUSTED",
            subject=self.url,
            details={"attempts": self.attempts, "last_error": repr(self.last_error)},
            validation_errors=None,
        )


class ChannelUnavailableError(TriviaClientError):
    """Raised when a message is emitted while the channel is down."""
    pass


class MessageFormatError(TriviaClientError):
    """Raised when an inbound message payload does not match its schema."""

    def __init__(self, kind: str, payload: Any, validation_errors: List[str]):
        self.kind = kind
        self.payload = payload
        self.validation_errors = validation_errors
        super().__init__(
            f"Malformed '{kind}' message: {validation_errors}"
        )

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type="MALFORMED_MESSAGE",
            subject=self.kind,
            details={"payload": self.payload},
            validation_errors=self.validation_errors,
        )


def _format_error_block(
    error_type: str,
    subject: str,
    details: Any,
    validation_errors: Optional[List[str]],
) -> str:
    """Format a structured error block for the error log."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " TRIVIA CLIENT ERROR",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Subject:      {subject}",
        "",
        " ── DETAILS " + "─" * 52,
        _indent_json(details),
    ]

    if validation_errors:
        lines.append("")
        lines.append(" ── VALIDATION ERRORS " + "─" * 42)
        for error in validation_errors:
            lines.append(f" • {error}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Any, indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
