# Area: Shared
"""
trivia_client._client_config — Client Configuration
===================================================

Defaults, loading and validation of the client configuration.

Sources, lowest priority first:
    1. DEFAULTS below
    2. JSON config file
    3. .env file in the working directory (python-dotenv)
    4. Process environment variables
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .errors import ConfigError

logger = logging.getLogger("trivia_client")

DEFAULTS: Dict[str, Any] = {
    "server_url": "https://trivia-reactjs-server.vercel.app",
    "transports": ["websocket", "polling"],
    "reconnection_attempts": 5,
    "reconnection_delay": 1.0,
    "reconnection_delay_max": 5.0,
    "wait_timeout": 5.0,
    "initial_time_left": 10,
    "tick_interval": 1.0,
    "celebration_delay": 0.5,
    "log_file": "trivia_client.log",
}

REQUIRED_CONFIG_KEYS = [
    "server_url",
]

# env var -> (config key, converter)
ENV_MAPPINGS = {
    "TRIVIA_SERVER_URL": ("server_url", str),
    "TRIVIA_RECONNECTION_ATTEMPTS": ("reconnection_attempts", int),
    "TRIVIA_RECONNECTION_DELAY": ("reconnection_delay", float),
    "TRIVIA_INITIAL_TIME_LEFT": ("initial_time_left", int),
    "TRIVIA_LOG_FILE": ("log_file", str),
}


def with_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of config with every missing key filled from DEFAULTS."""
    merged = dict(DEFAULTS)
    merged.update(config)
    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load config from file and environment, on top of DEFAULTS.

    Args:
        config_path: Optional path to a JSON config file

    Raises:
        ConfigError: If the file exists but is not valid JSON, or an
            environment value cannot be converted
    """
    config: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    config = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"Invalid JSON in {path}: {e}") from e
        else:
            logger.warning(f"Config file not found: {path}")

    load_dotenv()

    for env_key, (config_key, convert) in ENV_MAPPINGS.items():
        if env_key in os.environ:
            try:
                config[config_key] = convert(os.environ[env_key])
            except ValueError as e:
                raise ConfigError(f"Invalid value for {env_key}: {e}") from e

    return with_defaults(config)


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate required configuration keys and value ranges.

    Args:
        config: Configuration dict

    Raises:
        ConfigError: If required keys are missing or values are out of range
    """
    missing = [k for k in REQUIRED_CONFIG_KEYS if not config.get(k)]
    if missing:
        raise ConfigError(f"Missing required config keys: {missing}")

    if int(config.get("reconnection_attempts", 0)) < 0:
        raise ConfigError("reconnection_attempts must be >= 0")
    if int(config.get("initial_time_left", 0)) < 0:
        raise ConfigError("initial_time_left must be >= 0")
    if float(config.get("tick_interval", 1.0)) <= 0:
        raise ConfigError("tick_interval must be > 0")
    if float(config.get("celebration_delay", 0.0)) < 0:
        raise ConfigError("celebration_delay must be >= 0")
