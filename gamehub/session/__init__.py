"""Client-side session layer for the mini-games hub."""

from .config import ClientSettings, load_settings
from .connection import ConnectionManager
from .engine import apply_server_event, reduce_events
from .errors import ConnectivityError, NotInRoomError, ReconnectExhaustedError, RequestRejectedError, SessionError
from .games import MAX_WRONG_GUESSES, mask_word, scribble_hint
from .logging_config import configure_logging, get_logger
from .state import build_initial_state
from .store import RoomSessionStore, SessionTransport, create_session

__all__ = [
    "apply_server_event",
    "build_initial_state",
    "ClientSettings",
    "configure_logging",
    "ConnectionManager",
    "ConnectivityError",
    "create_session",
    "get_logger",
    "load_settings",
    "mask_word",
    "MAX_WRONG_GUESSES",
    "NotInRoomError",
    "ReconnectExhaustedError",
    "reduce_events",
    "RequestRejectedError",
    "RoomSessionStore",
    "scribble_hint",
    "SessionError",
    "SessionTransport",
]
