# Area: Session
"""
trivia_client.client — Session client
=====================================

Wires the channel, the session core and the view together.

    async with TriviaClient(config, view) as client:
        await client.create_game("Dana")
        await client.wait()

Leaving the ``async with`` block, normally or through an exception,
cancels the countdown and any reconnection attempt and closes the channel.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from ._client_config import validate_config, with_defaults
from ._session.dispatcher import EventDispatcher
from ._shared.connection import ConnectionManager
from .errors import ConnectionExhaustedError
from .models import SessionSnapshot
from .views import SessionView

logger = logging.getLogger("trivia_client")


class TriviaClient:
    """
    One player's connection to the session coordinator.

    Exposes the five local intents and the current snapshot. Channel loss
    resets the session; reconnection exhaustion is stored and re-raised
    by ``wait()``.
    """

    def __init__(
        self,
        config: Dict[str, Any],
        view: SessionView,
        connection: Optional[ConnectionManager] = None,
    ):
        self.config = with_defaults(config)
        validate_config(self.config)
        self.view = view
        self.failure: Optional[ConnectionExhaustedError] = None
        self._stopped: Optional[asyncio.Event] = None

        self.connection = connection or ConnectionManager(
            url=self.config["server_url"],
            transports=self.config["transports"],
            reconnection_attempts=int(self.config["reconnection_attempts"]),
            reconnection_delay=float(self.config["reconnection_delay"]),
            reconnection_delay_max=float(self.config["reconnection_delay_max"]),
            wait_timeout=float(self.config["wait_timeout"]),
        )
        self.dispatcher = EventDispatcher(
            channel=self.connection,
            view=view,
            initial_time_left=int(self.config["initial_time_left"]),
            tick_interval=float(self.config["tick_interval"]),
            celebration_delay=float(self.config["celebration_delay"]),
        )
        self.connection.bind(
            on_message=self.dispatcher.dispatch,
            on_connect=self._on_connect,
            on_disconnect=self._on_disconnect,
            on_failure=self._on_failure,
        )

    @property
    def snapshot(self) -> SessionSnapshot:
        return self.dispatcher.snapshot

    # ── Lifecycle ────────────────────────────────────────────────

    async def start(self) -> None:
        """Connect to the coordinator. Raises ConnectionExhaustedError on failure."""
        self._stopped = asyncio.Event()
        logger.info("=" * 60)
        logger.info("  Trivia client — Starting")
        logger.info(f"  Server: {self.config['server_url']}")
        logger.info(f"  Retries: {self.config['reconnection_attempts']}")
        logger.info("=" * 60)
        await self.connection.connect()

    async def stop(self) -> None:
        """Cancel the countdown, cancel reconnection and close the channel."""
        self.dispatcher.shutdown()
        try:
            await self.connection.close()
        finally:
            if self._stopped is not None:
                self._stopped.set()
            logger.info("Trivia client stopped.")

    async def wait(self) -> None:
        """
        Block until the client stops.

        Raises:
            ConnectionExhaustedError: If the channel was lost for good
        """
        if self._stopped is None:
            return
        await self._stopped.wait()
        if self.failure is not None:
            raise self.failure

    async def __aenter__(self) -> "TriviaClient":
        try:
            await self.start()
        except BaseException:
            # Covers cancellation mid-handshake: the transport may be half open
            self.dispatcher.shutdown()
            try:
                await self.connection.close()
            except Exception as e:
                logger.warning(f"Error closing channel after failed start: {e}")
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stop()
        return False

    # ── Channel callbacks ────────────────────────────────────────

    def _on_connect(self) -> None:
        self.dispatcher.reset()

    def _on_disconnect(self) -> None:
        self.view.notify("Connection lost, reconnecting...")
        self.dispatcher.reset()

    def _on_failure(self, error: ConnectionExhaustedError) -> None:
        self.failure = error
        logger.error(f"Giving up: {error}")
        self.view.notify(str(error))
        self.dispatcher.shutdown()
        if self._stopped is not None:
            self._stopped.set()

    # ── Intents ──────────────────────────────────────────────────

    async def create_game(self, player_name: str) -> bool:
        return await self.dispatcher.create_game(player_name)

    async def join_game(self, game_code: str, player_name: str) -> bool:
        return await self.dispatcher.join_game(game_code, player_name)

    async def start_game(self) -> bool:
        return await self.dispatcher.start_game()

    async def answer(self, answer_index: int) -> bool:
        return await self.dispatcher.answer(answer_index)

    async def leave_game(self) -> bool:
        return await self.dispatcher.leave_game()
