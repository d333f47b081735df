"""Event reducer for server push and transport events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import uuid

from gamehub.session.roles import SCRIBBLE, drawer_id
from gamehub.session.state import (
    build_hangman_state,
    build_room_state,
    build_scribble_state,
    reset_room_state,
)


SYSTEM_ID = "system"
SYSTEM_NAME = "System"

ROOM_EVENTS = frozenset(
    {
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
    }
)


@dataclass(frozen=True)
class EventResult:
    state: dict[str, Any]
    engine_events: list[dict[str, Any]]


def apply_server_event(state: dict[str, Any], event: str, payload: Any = None) -> EventResult:
    """Apply one event to ``state`` and return the next state.

    The input state is never mutated. Unknown events, events for a room that is
    no longer active and payloads missing the fields an event needs leave the
    state as it was and report an ``ignored`` engine event instead of raising.
    """
    if event in ROOM_EVENTS:
        if not isinstance(state.get("room"), dict):
            return _ignored(state, event, "no active room")
        if not isinstance(payload, dict):
            return _ignored(state, event, "malformed payload")
        if _targets_other_room(state, payload):
            return _ignored(state, event, "room mismatch")
    handler = _HANDLERS.get(event)
    if handler is None:
        return _ignored(state, event, "unknown event")
    if event != "connect_error" and not isinstance(payload, dict):
        payload = {}
    return handler(state, payload)


def reduce_events(state: dict[str, Any], events: list[tuple[str, Any]]) -> dict[str, Any]:
    """Fold events in arrival order."""
    for event, payload in events:
        state = apply_server_event(state, event, payload).state
    return state


def leave_room(state: dict[str, Any]) -> dict[str, Any]:
    return reset_room_state(state)


def seed_room(state: dict[str, Any], room: dict[str, Any], player_id: str | None, as_host: bool) -> dict[str, Any]:
    """Seed local state from a successful create/join acknowledgement."""
    next_state = dict(state)
    next_state.update(build_room_state())
    next_state["epoch"] = int(state.get("epoch", 0)) + 1
    next_room = dict(room)
    if player_id:
        next_state["localPlayerId"] = player_id
        if as_host and not next_room.get("hostId"):
            next_room["hostId"] = player_id
    next_state["room"] = next_room
    next_state["players"] = _player_list(room.get("players")) or []
    next_state["started"] = bool(room.get("gameStarted"))
    next_state["round"] = _int_or(room.get("round"), next_state["round"])
    next_state["totalRounds"] = _int_or(room.get("totalRounds"), next_state["totalRounds"])
    next_state["timeLeft"] = _int_or(room.get("timeLeft"), next_state["timeLeft"])
    return next_state


def _ignored(state: dict[str, Any], event: str, reason: str) -> EventResult:
    return EventResult(state=state, engine_events=[{"kind": "ignored", "event": event, "reason": reason}])


def event_room_id(event: str, payload: Any) -> str | None:
    """Room id a push names, via ``roomId``, ``room.id`` or a bare room snapshot."""
    if not isinstance(payload, dict):
        return None
    room_id = payload.get("roomId")
    if room_id is None and isinstance(payload.get("room"), dict):
        room_id = payload["room"].get("id")
    if room_id is None and event == "room-updated":
        room_id = payload.get("id")
    return str(room_id) if room_id is not None else None


def _targets_other_room(state: dict[str, Any], payload: Any) -> bool:
    if not isinstance(payload, dict):
        return False
    room_id = payload.get("roomId")
    if room_id is None and isinstance(payload.get("room"), dict):
        room_id = payload["room"].get("id")
    if room_id is None:
        return False
    return room_id != state["room"].get("id")


def _player_list(value: Any) -> list[dict[str, Any]] | None:
    if not isinstance(value, list):
        return None
    return [dict(player) for player in value if isinstance(player, dict) and player.get("id")]


def _int_or(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return int(value)


def _system_message(text: str) -> dict[str, Any]:
    return {
        "id": uuid.uuid4().hex,
        "playerId": SYSTEM_ID,
        "playerName": SYSTEM_NAME,
        "message": text,
    }


def _with_message(state: dict[str, Any], message: dict[str, Any]) -> dict[str, Any]:
    next_state = dict(state)
    messages = list(state.get("messages", []))
    messages.append(message)
    next_state["messages"] = messages
    return next_state


def _apply_connect(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    sid = payload.get("sid") if isinstance(payload, dict) else None
    next_state = dict(state)
    connection = dict(state["connection"])
    connection.update(connected=True, reconnectAttempts=0, lastError=None, failed=False)
    if isinstance(sid, str) and sid:
        connection["identity"] = sid
        next_state["localPlayerId"] = sid
    next_state["connection"] = connection
    return EventResult(state=next_state, engine_events=[{"kind": "connected", "identity": connection["identity"]}])


def _apply_disconnect(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    next_state = dict(state)
    connection = dict(state["connection"])
    connection["connected"] = False
    next_state["connection"] = connection
    reason = payload.get("reason") if isinstance(payload, dict) else None
    return EventResult(state=next_state, engine_events=[{"kind": "disconnected", "reason": reason}])


def _apply_connect_error(state: dict[str, Any], payload: Any) -> EventResult:
    if isinstance(payload, dict):
        message = payload.get("message")
    else:
        message = payload
    next_state = dict(state)
    connection = dict(state["connection"])
    connection["lastError"] = str(message) if message else "connection error"
    next_state["connection"] = connection
    return EventResult(state=next_state, engine_events=[{"kind": "connect_error", "message": connection["lastError"]}])


def _apply_reconnect_attempt(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    next_state = dict(state)
    connection = dict(state["connection"])
    connection["reconnectAttempts"] = _int_or(payload.get("attempt"), connection["reconnectAttempts"] + 1)
    next_state["connection"] = connection
    return EventResult(state=next_state, engine_events=[])


def _apply_reconnect_failed(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    next_state = dict(state)
    connection = dict(state["connection"])
    connection.update(connected=False, failed=True)
    next_state["connection"] = connection
    return EventResult(state=next_state, engine_events=[{"kind": "reconnect_failed"}])


def _apply_players(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    players = _player_list(payload.get("players"))
    if players is None:
        return _ignored(state, "player-list", "missing players")
    next_state = dict(state)
    next_state["players"] = players
    return EventResult(state=next_state, engine_events=[])


def _apply_new_host(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    host_id = payload.get("hostId")
    if not isinstance(host_id, str) or host_id == "":
        return _ignored(state, "new-host", "missing hostId")
    next_state = dict(state)
    room = dict(state["room"])
    room["hostId"] = host_id
    next_state["room"] = room
    return EventResult(state=next_state, engine_events=[{"kind": "host_changed", "hostId": host_id}])


def _apply_game_started(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    next_state = dict(state)
    room = payload.get("room")
    if isinstance(room, dict):
        next_state["room"] = dict(room)
        players = _player_list(room.get("players"))
        if players is not None:
            next_state["players"] = players
        next_state["totalRounds"] = _int_or(room.get("totalRounds"), state["totalRounds"])
    word = payload.get("word")
    if isinstance(word, str):
        next_state["currentWord"] = word
    next_state["round"] = _int_or(payload.get("round"), state["round"])
    next_state["timeLeft"] = _int_or(payload.get("timeLeft"), state["timeLeft"])
    next_state["started"] = True
    next_state["gameOver"] = False
    next_state["winner"] = None
    next_state["messages"] = []
    next_state["hangman"] = build_hangman_state()
    next_state["scribble"] = build_scribble_state()
    return EventResult(state=next_state, engine_events=[{"kind": "game_started", "round": next_state["round"]}])


def _apply_timer_update(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    time_left = payload.get("timeLeft")
    if isinstance(time_left, bool) or not isinstance(time_left, (int, float)):
        return _ignored(state, "timer-update", "missing timeLeft")
    next_state = dict(state)
    next_state["timeLeft"] = int(time_left)
    return EventResult(state=next_state, engine_events=[])


def _apply_draw(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    point = payload.get("point", payload)
    if not isinstance(point, dict) or "x" not in point or "y" not in point:
        return _ignored(state, "draw", "missing point")
    next_state = dict(state)
    scribble = dict(state["scribble"])
    draw_points = list(scribble["drawPoints"])
    draw_points.append(
        {
            "x": point["x"],
            "y": point["y"],
            "color": point.get("color", "#000000"),
            "width": point.get("width", 1),
        }
    )
    scribble["drawPoints"] = draw_points
    next_state["scribble"] = scribble
    return EventResult(state=next_state, engine_events=[])


def _apply_clear_canvas(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    next_state = dict(state)
    next_state["scribble"] = build_scribble_state()
    return EventResult(state=next_state, engine_events=[{"kind": "canvas_cleared"}])


def _apply_new_message(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    if "message" not in payload:
        return _ignored(state, "new-message", "missing message")
    message = dict(payload)
    message.setdefault("id", uuid.uuid4().hex)
    return EventResult(state=_with_message(state, message), engine_events=[])


def _apply_correct_guess(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    score = payload.get("score", 0)
    message = {
        "id": uuid.uuid4().hex,
        "playerId": payload.get("playerId"),
        "playerName": payload.get("playerName"),
        "message": f"Guessed correctly! (+{score} pts)",
        "isCorrect": True,
    }
    return EventResult(state=_with_message(state, message), engine_events=[])


def _apply_hangman_update(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    next_state = dict(state)
    hangman = dict(state["hangman"])
    letters = payload.get("guessedLetters")
    if isinstance(letters, list):
        hangman["guessedLetters"] = [str(letter).upper() for letter in letters]
    events: list[dict[str, Any]] = []
    if payload.get("isCorrect") is False:
        hangman["wrongGuesses"] = int(hangman["wrongGuesses"]) + 1
        events.append({"kind": "wrong_guess", "wrongGuesses": hangman["wrongGuesses"], "letter": payload.get("letter")})
    next_state["hangman"] = hangman
    return EventResult(state=next_state, engine_events=events)


def _apply_hangman_round_over(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    word = payload.get("word")
    winner = payload.get("winner")
    if isinstance(winner, dict) and winner.get("name"):
        text = f"{winner['name']} guessed it! Word: {word}"
    else:
        text = f"Time's up! Word was: {word}"
    next_state = _with_message(state, _system_message(text))
    hangman = dict(state["hangman"])
    hangman["roundOver"] = True
    if isinstance(word, str):
        hangman["revealedWord"] = word
    next_state["hangman"] = hangman
    return EventResult(state=next_state, engine_events=[{"kind": "round_over", "word": word}])


def _apply_next_round(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    next_state = dict(state)
    next_state["round"] = _int_or(payload.get("round"), int(state["round"]) + 1)
    word = payload.get("word")
    next_state["currentWord"] = word if isinstance(word, str) else ""
    next_state["timeLeft"] = _int_or(payload.get("timeLeft"), state["timeLeft"])
    next_state["hangman"] = build_hangman_state()
    next_state["scribble"] = build_scribble_state()
    new_drawer = drawer_id(payload)
    if new_drawer is not None and state["room"].get("gameType") == SCRIBBLE:
        room = dict(state["room"])
        room["drawerId"] = new_drawer
        room.pop("isDrawer", None)
        next_state["room"] = room
    return EventResult(state=next_state, engine_events=[{"kind": "next_round", "round": next_state["round"]}])


def _apply_game_over(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    next_state = dict(state)
    next_state["started"] = False
    next_state["gameOver"] = True
    scores = _player_list(payload.get("scores"))
    if scores is not None:
        next_state["players"] = scores
    winner = payload.get("winner")
    if isinstance(winner, dict) and winner.get("name"):
        next_state["winner"] = winner["name"]
        text = f"Game Over! {winner['name']} wins with {winner.get('score', 0)} points!"
    else:
        next_state["winner"] = None
        text = "Game Over!"
    next_state = _with_message(next_state, _system_message(text))
    return EventResult(state=next_state, engine_events=[{"kind": "game_over", "winner": next_state["winner"]}])


def _apply_room_updated(state: dict[str, Any], payload: dict[str, Any]) -> EventResult:
    room = payload.get("room", payload)
    if not isinstance(room, dict) or not room.get("id"):
        return _ignored(state, "room-updated", "missing room")
    if room["id"] != state["room"].get("id"):
        return _ignored(state, "room-updated", "room mismatch")
    next_state = dict(state)
    next_state["room"] = dict(room)
    players = _player_list(room.get("players"))
    if players is not None:
        next_state["players"] = players
    if room.get("gameStarted") is True:
        next_state["started"] = True
    return EventResult(state=next_state, engine_events=[])


_HANDLERS = {
    "connect": _apply_connect,
    "disconnect": _apply_disconnect,
    "connect_error": _apply_connect_error,
    "reconnect_attempt": _apply_reconnect_attempt,
    "reconnect_failed": _apply_reconnect_failed,
    "player-joined": _apply_players,
    "player-left": _apply_players,
    "new-host": _apply_new_host,
    "game-started": _apply_game_started,
    "timer-update": _apply_timer_update,
    "draw": _apply_draw,
    "clear-canvas": _apply_clear_canvas,
    "new-message": _apply_new_message,
    "correct-guess": _apply_correct_guess,
    "hangman-update": _apply_hangman_update,
    "hangman-round-over": _apply_hangman_round_over,
    "next-round": _apply_next_round,
    "game-over": _apply_game_over,
    "room-updated": _apply_room_updated,
}
