# Area: Shared
"""
Shared utilities used by the session core and the client.

This package contains:
- Socket.IO connection manager
- Logging configuration
- Channel message logger
"""

from .connection import ConnectionManager
from .logging_config import (
    setup_logging,
    log_client_error,
    console_mode,
)
from .protocol_logger import get_protocol_logger, ProtocolLogger

__all__ = [
    "ConnectionManager",
    "setup_logging",
    "log_client_error",
    "console_mode",
    "get_protocol_logger",
    "ProtocolLogger",
]
