"""Wire models for client requests and their acknowledgements."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


CREATE_ROOM = "create-room"
JOIN_ROOM = "join-room"
LEAVE_ROOM = "leave-room"
START_GAME = "start-game"
HANGMAN_GUESS = "hangman-guess"
DRAW = "draw"
GUESS = "guess"
CLEAR_CANVAS = "clear-canvas"

PUSH_EVENTS = (
    "player-joined",
    "player-left",
    "new-host",
    "game-started",
    "timer-update",
    "draw",
    "clear-canvas",
    "new-message",
    "correct-guess",
    "hangman-update",
    "hangman-round-over",
    "next-round",
    "game-over",
    "room-updated",
)


def _stripped(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


class CreateRoomRequest(BaseModel):
    roomName: str = Field(min_length=1, max_length=100)
    playerName: str = Field(min_length=1, max_length=50)
    gameType: Literal["hangman", "scribble"]

    strip_names = field_validator("roomName", "playerName", mode="before")(_stripped)


class JoinRoomRequest(BaseModel):
    roomId: str = Field(min_length=1, max_length=6)
    playerName: str = Field(min_length=1, max_length=50)

    strip_name = field_validator("playerName", mode="before")(_stripped)

    @field_validator("roomId", mode="before")
    @classmethod
    def upper_code(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class StartGameRequest(BaseModel):
    roomId: str = Field(min_length=1)


class HangmanGuessRequest(BaseModel):
    roomId: str = Field(min_length=1)
    letter: str = Field(min_length=1, max_length=1)

    @field_validator("letter")
    @classmethod
    def upper_letter(cls, value: str) -> str:
        if not value.isalpha():
            raise ValueError("letter must be alphabetic")
        return value.upper()


class DrawPoint(BaseModel):
    x: float
    y: float
    color: str = "#000000"
    width: float = Field(default=4, gt=0)


class DrawRequest(BaseModel):
    roomId: str = Field(min_length=1)
    point: DrawPoint


class GuessRequest(BaseModel):
    roomId: str = Field(min_length=1)
    guess: str = Field(min_length=1, max_length=100)

    strip_guess = field_validator("guess", mode="before")(_stripped)


class ClearCanvasRequest(BaseModel):
    roomId: str = Field(min_length=1)


class AckResponse(BaseModel):
    success: bool = False
    room: dict[str, Any] | None = None
    playerId: str | None = None
    error: str | None = None


def parse_ack(raw: Any) -> AckResponse:
    """Read an acknowledgement, treating anything unexpected as a failure."""
    if not isinstance(raw, dict):
        return AckResponse(success=False, error=None)
    return AckResponse.model_validate(
        {
            "success": raw.get("success") is True,
            "room": raw.get("room") if isinstance(raw.get("room"), dict) else None,
            "playerId": raw.get("playerId") if isinstance(raw.get("playerId"), str) else None,
            "error": str(raw["error"]) if raw.get("error") else None,
        }
    )
