"""Error taxonomy for the session client.

None of these are fatal to the process: connectivity problems leave a
disconnected session, rejections leave state unchanged.
"""

from __future__ import annotations


class SessionError(Exception):
    """Base class for session client errors."""


class ConnectivityError(SessionError):
    """Raised when an outbound operation cannot reach the server."""


class ReconnectExhaustedError(ConnectivityError):
    """Recorded when every automatic reconnection attempt has failed."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Could not reconnect after {attempts} attempts")
        self.attempts = attempts


class RequestRejectedError(SessionError):
    """The server answered a request with ``success: false``."""

    def __init__(self, event: str, message: str) -> None:
        super().__init__(message)
        self.event = event
        self.message = message


class NotInRoomError(SessionError):
    """A room-scoped command was issued without an active room."""
