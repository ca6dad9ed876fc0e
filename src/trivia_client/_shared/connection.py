# Area: Shared
"""
trivia_client._shared.connection — Socket.IO channel lifecycle
==============================================================

Owns the one bidirectional channel to the session coordinator.

The library's own reconnection is switched off; this manager runs a
bounded policy instead so that exhaustion is reported to the caller
rather than logged and forgotten:

    attempts = 1 + reconnection_attempts
    delay    = reconnection_delay, doubled per attempt, capped at
               reconnection_delay_max

The reconnection task is tracked and cancelled by ``close()``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, List, Optional

import socketio
from socketio.exceptions import ConnectionError as SocketIOConnectionError, SocketIOError

from .._session.enums import InboundKind
from ..errors import ChannelUnavailableError, ConnectionExhaustedError

logger = logging.getLogger("trivia_client.connection")

MessageCallback = Callable[[str, Any], None]


class ConnectionManager:
    """Socket.IO client wrapper with bounded reconnection."""

    def __init__(
        self,
        url: str,
        transports: Optional[List[str]] = None,
        reconnection_attempts: int = 5,
        reconnection_delay: float = 1.0,
        reconnection_delay_max: float = 5.0,
        wait_timeout: float = 5.0,
        client: Optional[socketio.AsyncClient] = None,
    ):
        """
        Args:
            url: Coordinator URL
            transports: Engine.IO transports, in preference order
            reconnection_attempts: Retries after the first failed attempt
            reconnection_delay: Delay before the first retry, in seconds
            reconnection_delay_max: Upper bound for the backoff delay
            wait_timeout: Seconds to wait for the connection handshake
            client: Pre-built client (tests inject a fake here)
        """
        self.url = url
        self.transports = transports or ["websocket", "polling"]
        self.reconnection_attempts = reconnection_attempts
        self.reconnection_delay = reconnection_delay
        self.reconnection_delay_max = reconnection_delay_max
        self.wait_timeout = wait_timeout
        self._sio = client or socketio.AsyncClient(reconnection=False)
        self._closing = False
        self._reconnect_task: Optional[asyncio.Task] = None
        self._on_message: Optional[MessageCallback] = None
        self._on_connect: Optional[Callable[[], None]] = None
        self._on_disconnect: Optional[Callable[[], None]] = None
        self._on_failure: Optional[Callable[[ConnectionExhaustedError], None]] = None

    # ── Wiring ───────────────────────────────────────────────────

    def bind(
        self,
        on_message: MessageCallback,
        on_connect: Optional[Callable[[], None]] = None,
        on_disconnect: Optional[Callable[[], None]] = None,
        on_failure: Optional[Callable[[ConnectionExhaustedError], None]] = None,
    ) -> None:
        """Register the inbound message kinds and lifecycle callbacks."""
        self._on_message = on_message
        self._on_connect = on_connect
        self._on_disconnect = on_disconnect
        self._on_failure = on_failure
        self._sio.on("connect", self._handle_connect)
        self._sio.on("disconnect", self._handle_disconnect)
        for kind in InboundKind:
            self._sio.on(kind.value, self._make_handler(kind.value))

    def _make_handler(self, kind: str):
        async def handler(*args):
            if self._on_message is not None:
                self._on_message(kind, args[0] if args else None)
        return handler

    async def _handle_connect(self) -> None:
        logger.info(f"Connected to {self.url} as {self.local_id}")
        if self._on_connect is not None:
            self._on_connect()

    async def _handle_disconnect(self, *args) -> None:
        if self._closing:
            return
        logger.warning(f"Channel lost ({args[0] if args else 'no reason'})")
        if self._on_disconnect is not None:
            self._on_disconnect()
        if self._reconnect_task is None or self._reconnect_task.done():
            self._reconnect_task = asyncio.get_running_loop().create_task(self._reconnect())

    # ── Channel ──────────────────────────────────────────────────

    @property
    def connected(self) -> bool:
        return bool(self._sio.connected)

    @property
    def local_id(self) -> Optional[str]:
        """Session id of this client on the default namespace, or None when down."""
        if not self.connected:
            return None
        return self._sio.get_sid()

    async def emit(self, kind: str, payload: Any = None) -> None:
        """Send one message. Raises ChannelUnavailableError if the channel is down."""
        if not self.connected:
            raise ChannelUnavailableError(f"Cannot send '{kind}': not connected")
        try:
            if payload is None:
                await self._sio.emit(kind)
            else:
                await self._sio.emit(kind, payload)
        except SocketIOError as e:
            raise ChannelUnavailableError(f"Cannot send '{kind}': {e}") from e

    # ── Lifecycle ────────────────────────────────────────────────

    async def connect(self) -> None:
        """
        Establish the channel, retrying with backoff.

        Raises:
            ConnectionExhaustedError: If every attempt failed
        """
        self._closing = False
        await self._connect_with_retry(delay_first=False)

    async def _connect_with_retry(self, delay_first: bool) -> None:
        attempts = 1 + self.reconnection_attempts
        delay = self.reconnection_delay
        last_error: Optional[BaseException] = None

        for attempt in range(1, attempts + 1):
            if delay_first or attempt > 1:
                await asyncio.sleep(delay)
                delay = min(delay * 2, self.reconnection_delay_max)
            try:
                await self._sio.connect(
                    self.url,
                    transports=self.transports,
                    wait_timeout=self.wait_timeout,
                )
                return
            except SocketIOConnectionError as e:
                last_error = e
                logger.warning(f"Connection attempt {attempt}/{attempts} failed: {e}")

        raise ConnectionExhaustedError(self.url, attempts, last_error)

    async def _reconnect(self) -> None:
        try:
            await self._connect_with_retry(delay_first=True)
        except ConnectionExhaustedError as e:
            logger.error(str(e))
            if self._on_failure is not None:
                self._on_failure(e)

    async def close(self) -> None:
        """Cancel reconnection and disconnect. Safe to call repeatedly."""
        self._closing = True
        task, self._reconnect_task = self._reconnect_task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        was_connected = self.connected
        # Also releases a transport left half open by an interrupted handshake
        await self._sio.disconnect()
        if was_connected:
            logger.info("Disconnected")

    async def __aenter__(self) -> "ConnectionManager":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False
