"""Room session store: mirrored state, request commands and subscriptions."""

from __future__ import annotations

from typing import Any, Callable, Protocol

from gamehub.session.config import ClientSettings, load_settings
from gamehub.session.connection import ConnectionManager
from gamehub.session.engine import ROOM_EVENTS, apply_server_event, event_room_id, leave_room, seed_room
from gamehub.session.errors import NotInRoomError, RequestRejectedError
from gamehub.session.games import can_draw, can_guess_letter, hangman_view, scribble_view
from gamehub.session.logging_config import configure_logging, get_logger
from gamehub.session.models import Message, Player, Room, SessionSnapshot
from gamehub.session import protocol
from gamehub.session.roles import is_local_drawer, is_local_host
from gamehub.session.state import build_initial_state


logger = get_logger(__name__)

Subscriber = Callable[[SessionSnapshot], None]


class SessionTransport(Protocol):
    connected: bool

    async def request(self, event: str, payload: dict[str, Any]) -> Any:
        """Send a request and return its single acknowledgement."""

    async def notify(self, event: str, payload: dict[str, Any]) -> None:
        """Send a message that has no acknowledgement."""


class RoomSessionStore:
    """Single owner of the session state.

    Push events go through :meth:`apply_event`; commands go out through the
    transport and only touch state once their acknowledgement is in.
    """

    def __init__(self, transport: SessionTransport) -> None:
        self._transport = transport
        self._state: dict[str, Any] = build_initial_state()
        self._subscribers: list[Subscriber] = []
        self._entering: dict[str, Any] | None = None

    @property
    def state(self) -> dict[str, Any]:
        return self._state

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def apply_event(self, event: str, payload: Any = None) -> None:
        if self._holds(event, payload):
            self._entering["held"].append((event, payload))
            logger.debug("Held server event until the room is entered", event_name=event)
            return
        self._commit(self._reduce(self._state, event, payload))

    def _holds(self, event: str, payload: Any) -> bool:
        """Whether a push belongs to the room a pending create/join is entering."""
        entering = self._entering
        if entering is None or event not in ROOM_EVENTS:
            return False
        room_id = event_room_id(event, payload)
        expected = entering["roomId"]
        matches = expected is None or (room_id is not None and room_id.upper() == expected)
        current = self._state.get("room")
        if not isinstance(current, dict):
            return matches or room_id is None
        return room_id is not None and room_id != current.get("id") and matches

    def _reduce(self, state: dict[str, Any], event: str, payload: Any) -> dict[str, Any]:
        result = apply_server_event(state, event, payload)
        for engine_event in result.engine_events:
            if engine_event["kind"] == "ignored":
                logger.warning("Dropped server event", event_name=event, reason=engine_event["reason"])
            else:
                logger.debug("Applied server event", event_name=event, **engine_event)
        return result.state

    def _commit(self, next_state: dict[str, Any]) -> None:
        if next_state is self._state:
            return
        self._state = next_state
        snapshot = self.snapshot()
        for subscriber in list(self._subscribers):
            try:
                subscriber(snapshot)
            except Exception:
                logger.exception("Session subscriber failed")

    def snapshot(self) -> SessionSnapshot:
        state = self._state
        connection = state["connection"]
        room = Room.from_state(state)
        return SessionSnapshot(
            connected=bool(connection["connected"]),
            connection_failed=bool(connection["failed"]),
            local_player_id=state.get("localPlayerId"),
            room=room,
            players=tuple(Player.from_dict(player) for player in state["players"]),
            messages=tuple(Message.from_dict(message) for message in state["messages"]),
            started=bool(state["started"]),
            is_host=is_local_host(state),
            is_drawer=is_local_drawer(state),
            current_word=state["currentWord"],
            time_left=int(state["timeLeft"]),
            round=int(state["round"]),
            total_rounds=int(state["totalRounds"]),
            game_over=bool(state["gameOver"]),
            winner=state["winner"],
            hangman=hangman_view(state),
            scribble=scribble_view(state),
        )

    def _active_room_id(self) -> str:
        room = self._state.get("room")
        if not isinstance(room, dict) or not room.get("id"):
            raise NotInRoomError("Not in a room")
        return str(room["id"])

    async def create_room(self, room_name: str, player_name: str, game_type: str) -> Room | None:
        """Create a room and become its host.

        Returns ``None`` when the reply arrives after the session moved on.
        """
        request = protocol.CreateRoomRequest(roomName=room_name, playerName=player_name, gameType=game_type)
        return await self._enter_room(protocol.CREATE_ROOM, request.model_dump(), as_host=True)

    async def join_room(self, room_id: str, player_name: str) -> Room | None:
        request = protocol.JoinRoomRequest(roomId=room_id, playerName=player_name)
        return await self._enter_room(
            protocol.JOIN_ROOM,
            request.model_dump(),
            as_host=False,
            expected_room_id=request.roomId,
        )

    async def _enter_room(
        self,
        event: str,
        payload: dict[str, Any],
        as_host: bool,
        expected_room_id: str | None = None,
    ) -> Room | None:
        epoch = self._state["epoch"]
        entering: dict[str, Any] = {"roomId": expected_room_id, "held": []}
        self._entering = entering
        try:
            ack = protocol.parse_ack(await self._transport.request(event, payload))
        finally:
            if self._entering is entering:
                self._entering = None
        held = entering["held"]
        if self._state["epoch"] != epoch:
            logger.info("Discarded stale reply", event_name=event, held_events=len(held))
            return None
        if not ack.success or ack.room is None or not ack.room.get("id"):
            default = "Failed to create room" if event == protocol.CREATE_ROOM else "Failed to join room"
            message = ack.error or default
            logger.warning("Request rejected", event_name=event, error=message)
            raise RequestRejectedError(event, message)
        if expected_room_id is not None and str(ack.room["id"]).upper() != expected_room_id:
            logger.info("Discarded reply for another room", event_name=event, room_id=ack.room["id"])
            return None

        # Pushes that arrived while waiting are newer than the ack's snapshot.
        next_state = seed_room(self._state, ack.room, ack.playerId, as_host=as_host)
        for held_event, held_payload in held:
            next_state = self._reduce(next_state, held_event, held_payload)
        self._commit(next_state)
        logger.info("Entered room", event_name=event, room_id=ack.room["id"], player_id=ack.playerId)
        return Room.from_state(self._state)

    async def leave_room(self) -> None:
        """Tell the server we left, then reset local state no matter what."""
        room = self._state.get("room")
        if isinstance(room, dict) and self._transport.connected:
            await self._transport.notify(protocol.LEAVE_ROOM, {})
        elif isinstance(room, dict):
            logger.info("Leaving room while disconnected", room_id=room.get("id"))
        self._commit(leave_room(self._state))

    async def start_game(self) -> None:
        """Ask the server to start; the ``game-started`` push does the rest."""
        request = protocol.StartGameRequest(roomId=self._active_room_id())
        ack = protocol.parse_ack(await self._transport.request(protocol.START_GAME, request.model_dump()))
        if not ack.success:
            message = ack.error or "Failed to start game"
            logger.warning("Request rejected", event_name=protocol.START_GAME, error=message)
            raise RequestRejectedError(protocol.START_GAME, message)

    async def send_hangman_guess(self, letter: str) -> bool:
        request = protocol.HangmanGuessRequest(roomId=self._active_room_id(), letter=letter)
        if not can_guess_letter(self._state, request.letter):
            logger.debug("Guess not sent", letter=request.letter)
            return False
        ack = protocol.parse_ack(await self._transport.request(protocol.HANGMAN_GUESS, request.model_dump()))
        if not ack.success:
            logger.info("Guess refused by server", letter=request.letter, error=ack.error)
        return ack.success

    async def send_draw(self, point: dict[str, Any]) -> bool:
        request = protocol.DrawRequest(roomId=self._active_room_id(), point=point)
        if not can_draw(self._state):
            return False
        await self._transport.notify(protocol.DRAW, request.model_dump())
        return True

    async def send_guess(self, guess: str) -> bool:
        request = protocol.GuessRequest(roomId=self._active_room_id(), guess=guess)
        ack = protocol.parse_ack(await self._transport.request(protocol.GUESS, request.model_dump()))
        if not ack.success:
            logger.info("Guess refused by server", error=ack.error)
        return ack.success

    async def clear_draw_buffer(self) -> None:
        """Clear the local canvas and tell the server so other clients follow."""
        request = protocol.ClearCanvasRequest(roomId=self._active_room_id())
        await self._transport.notify(protocol.CLEAR_CANVAS, request.model_dump())
        self.apply_event(protocol.CLEAR_CANVAS, {})


def create_session(settings: ClientSettings | None = None) -> tuple[RoomSessionStore, ConnectionManager]:
    """Wire a store to a Socket.IO connection; call ``connect()`` on the manager."""
    settings = settings if settings is not None else load_settings()
    configure_logging(settings.log_level)
    connection = ConnectionManager(settings)
    store = RoomSessionStore(transport=connection)
    connection.bind(store.apply_event)
    return store, connection
