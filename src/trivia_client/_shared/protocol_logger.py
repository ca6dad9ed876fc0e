# Area: Shared
"""
trivia_client._shared.protocol_logger — Channel message logging
===============================================================

One colored line per channel message: what was received from the
coordinator, what was sent, and which local intents were dropped before
reaching the network.
"""

from __future__ import annotations
import sys
from datetime import datetime
from typing import Optional

# ══════════════════════════════════════════════════════════════
# ANSI COLOR CODES
# ══════════════════════════════════════════════════════════════

GREEN = "\033[32m"       # Channel messages
ORANGE = "\033[38;5;208m"  # Dropped intents
RED = "\033[31m"         # Errors
RESET = "\033[0m"

# What the client expects to happen next after each message kind
EXPECTED_NEXT = {
    # Received
    "gameCode": "Wait for players",
    "gameState": "Follow phase",
    "playerList": "None",
    "questionUpdate": "answer (if your turn)",
    "error": "None",
    # Sent
    "createGame": "gameCode",
    "joinGame": "gameCode / error",
    "startGame": "gameState(playing)",
    "answer": "questionUpdate",
    "leaveGame": "None",
}


class ProtocolLogger:
    """Logger for channel messages."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._code: str = "------"

    def set_code(self, code: Optional[str]) -> None:
        """Set current session code for logging context."""
        self._code = code or "------"

    def _now(self) -> str:
        return datetime.now().strftime("%H:%M:%S")

    def _emit(self, line: str, stream=None) -> None:
        if self.enabled:
            print(line, file=stream or sys.stdout)

    def log_received(self, kind: str) -> None:
        """Log a message received from the coordinator."""
        expected = EXPECTED_NEXT.get(kind, "Unknown")
        self._emit(
            f"{GREEN}{self._now()} | CODE: {self._code:6} | RECEIVED | "
            f"{kind:16} | NEXT: {expected}{RESET}"
        )

    def log_sent(self, kind: str) -> None:
        """Log a message sent to the coordinator."""
        expected = EXPECTED_NEXT.get(kind, "Unknown")
        self._emit(
            f"{GREEN}{self._now()} | CODE: {self._code:6} | SENT     | "
            f"{kind:16} | EXPECTED: {expected}{RESET}"
        )

    def log_dropped(self, kind: str, reason: str) -> None:
        """Log a local intent that failed its precondition."""
        self._emit(
            f"{ORANGE}{self._now()} | CODE: {self._code:6} | DROPPED  | "
            f"{kind:16} | REASON: {reason}{RESET}"
        )

    def log_error(self, description: str) -> None:
        """Log an error."""
        self._emit(f"{RED}[ERROR] {self._now()} | {description}{RESET}", sys.stderr)


# Global singleton instance
_protocol_logger: Optional[ProtocolLogger] = None


def get_protocol_logger() -> ProtocolLogger:
    """Get or create the global protocol logger instance."""
    global _protocol_logger
    if _protocol_logger is None:
        _protocol_logger = ProtocolLogger(enabled=False)
    return _protocol_logger
