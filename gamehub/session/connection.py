"""Socket.IO connection manager: one supervised channel to the game server."""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import socketio
from socketio import exceptions as sio_exceptions

from gamehub.session.config import ClientSettings
from gamehub.session.errors import ConnectivityError, ReconnectExhaustedError
from gamehub.session.logging_config import get_logger
from gamehub.session.protocol import PUSH_EVENTS


logger = get_logger(__name__)

# The client raises ValueError when asked to connect while not fully disconnected.
_OPEN_ERRORS = (sio_exceptions.SocketIOError, ValueError)

EventSink = Callable[[str, Any], None]


class ConnectionManager:
    """Owns the Socket.IO client and forwards every event to one sink.

    The library's own reconnection is off; each attempt and the final failure
    are reported to the sink as events.
    """

    def __init__(
        self,
        settings: ClientSettings,
        client_factory: Callable[..., Any] = socketio.AsyncClient,
    ) -> None:
        self.settings = settings
        self._client = client_factory(reconnection=False, logger=False, engineio_logger=False)
        self._sink: EventSink | None = None
        self._pending: set[asyncio.Future[Any]] = set()
        self._closing = False
        self._reconnect_task: asyncio.Task[None] | None = None
        self.connected = False
        self.identity: str | None = None
        self.reconnect_attempts = 0
        self.last_failure: ReconnectExhaustedError | None = None
        self._register_handlers()

    def bind(self, sink: EventSink) -> None:
        self._sink = sink

    def _register_handlers(self) -> None:
        self._client.on("connect", handler=self._on_connect)
        self._client.on("disconnect", handler=self._on_disconnect)
        self._client.on("connect_error", handler=self._on_connect_error)
        for event in PUSH_EVENTS:
            self._client.on(event, handler=self._push_handler(event))

    def _push_handler(self, event: str) -> Callable[..., None]:
        def handler(*args: Any) -> None:
            self._dispatch(event, args[0] if args else None)

        return handler

    def _dispatch(self, event: str, payload: Any) -> None:
        if self._sink is not None:
            self._sink(event, payload)

    async def connect(self) -> bool:
        """Open the channel; on failure fall back to the reconnection policy."""
        self._closing = False
        if self.connected:
            return True
        try:
            await self._open()
        except _OPEN_ERRORS as exc:
            logger.warning("Initial connection failed", server_url=self.settings.server_url, error=str(exc))
            self._schedule_reconnect()
            return False
        return True

    async def _open(self) -> None:
        await self._client.connect(self.settings.server_url, transports=list(self.settings.transports))

    async def close(self) -> None:
        self._closing = True
        if self._reconnect_task is not None and not self._reconnect_task.done():
            self._reconnect_task.cancel()
        self._reconnect_task = None
        if self.connected:
            await self._client.disconnect()

    def _on_connect(self) -> None:
        self.connected = True
        self.identity = self._client.get_sid()
        self.reconnect_attempts = 0
        self.last_failure = None
        logger.info("Connected to server", server_url=self.settings.server_url, identity=self.identity)
        self._dispatch("connect", {"sid": self.identity})

    def _on_disconnect(self, *args: Any) -> None:
        reason = str(args[0]) if args else None
        self.connected = False
        for future in list(self._pending):
            if not future.done():
                future.set_exception(ConnectivityError("Connection lost before the server replied"))
        self._pending.clear()
        logger.info("Disconnected from server", reason=reason, explicit=self._closing)
        self._dispatch("disconnect", {"reason": reason})
        if not self._closing:
            self._schedule_reconnect()

    def _on_connect_error(self, *args: Any) -> None:
        data = args[0] if args else None
        message = data.get("message") if isinstance(data, dict) else data
        logger.error("Connection error", error=str(message))
        self._dispatch("connect_error", {"message": str(message) if message else None})

    def _schedule_reconnect(self) -> None:
        if self._reconnect_task is not None and not self._reconnect_task.done():
            return
        self._reconnect_task = asyncio.get_running_loop().create_task(self._reconnect())

    async def _reconnect(self) -> None:
        attempts = self.settings.reconnect_attempts
        for attempt in range(1, attempts + 1):
            if self.connected:
                return
            self.reconnect_attempts = attempt
            self._dispatch("reconnect_attempt", {"attempt": attempt})
            await asyncio.sleep(self.settings.reconnect_delay)
            if self._closing or self.connected:
                return
            try:
                await self._open()
            except _OPEN_ERRORS as exc:
                logger.warning("Reconnect attempt failed", attempt=attempt, max_attempts=attempts, error=str(exc))
                continue
            return
        self.last_failure = ReconnectExhaustedError(attempts)
        logger.error("Giving up on reconnection", attempts=attempts)
        self._dispatch("reconnect_failed", {"attempts": attempts})

    async def request(self, event: str, payload: dict[str, Any]) -> Any:
        """Emit ``event`` and wait for its single acknowledgement.

        There is no timeout; the wait ends with the reply or with
        ``ConnectivityError`` when the connection drops first.
        """
        self._require_connected(event)
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()

        def resolve(*args: Any) -> None:
            if not future.done():
                future.set_result(args[0] if args else None)

        self._pending.add(future)
        try:
            try:
                await self._client.emit(event, payload, callback=resolve)
            except sio_exceptions.SocketIOError as exc:
                raise ConnectivityError(f"Could not send {event}: {exc}") from exc
            return await future
        finally:
            self._pending.discard(future)

    async def notify(self, event: str, payload: dict[str, Any]) -> None:
        self._require_connected(event)
        try:
            await self._client.emit(event, payload)
        except sio_exceptions.SocketIOError as exc:
            raise ConnectivityError(f"Could not send {event}: {exc}") from exc

    def _require_connected(self, event: str) -> None:
        if not self.connected:
            raise ConnectivityError(f"Not connected; {event} was not sent")
