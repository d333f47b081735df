"""Read-model records handed to presentation code."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    score: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Player:
        return cls(id=str(data["id"]), name=str(data.get("name", "")), score=int(data.get("score", 0) or 0))


@dataclass(frozen=True)
class Room:
    id: str
    name: str
    host_id: str | None
    game_type: str
    players: tuple[Player, ...]
    started: bool
    round: int
    total_rounds: int
    time_left: int

    @classmethod
    def from_state(cls, state: dict[str, Any]) -> Room | None:
        room = state.get("room")
        if not isinstance(room, dict):
            return None
        return cls(
            id=str(room.get("id", "")),
            name=str(room.get("name", "")),
            host_id=room.get("hostId"),
            game_type=str(room.get("gameType", "")),
            players=tuple(Player.from_dict(player) for player in state.get("players", [])),
            started=bool(state.get("started")),
            round=int(state.get("round", 1)),
            total_rounds=int(state.get("totalRounds", 0)),
            time_left=int(state.get("timeLeft", 0)),
        )


@dataclass(frozen=True)
class Message:
    id: str
    player_id: str | None
    player_name: str | None
    text: str
    is_correct: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Message:
        return cls(
            id=str(data.get("id", "")),
            player_id=data.get("playerId"),
            player_name=data.get("playerName"),
            text=str(data.get("message", "")),
            is_correct=bool(data.get("isCorrect", False)),
        )


@dataclass(frozen=True)
class StrokePoint:
    x: float
    y: float
    color: str
    width: float


@dataclass(frozen=True)
class HangmanView:
    guessed_letters: tuple[str, ...]
    wrong_guesses: int
    masked_word: str
    revealed_word: str | None
    round_over: bool
    lost: bool


@dataclass(frozen=True)
class ScribbleView:
    is_drawer: bool
    round: int
    draw_points: tuple[StrokePoint, ...]
    hint: str


@dataclass(frozen=True)
class SessionSnapshot:
    connected: bool
    connection_failed: bool
    local_player_id: str | None
    room: Room | None
    players: tuple[Player, ...]
    messages: tuple[Message, ...]
    started: bool
    is_host: bool
    is_drawer: bool
    current_word: str
    time_left: int
    round: int
    total_rounds: int
    game_over: bool
    winner: str | None
    hangman: HangmanView
    scribble: ScribbleView
