"""State builders for the mirrored room session."""

from __future__ import annotations

from typing import Any


DEFAULT_ROUND = 1
DEFAULT_TOTAL_ROUNDS = 3


def build_hangman_state() -> dict[str, Any]:
    return {
        "guessedLetters": [],
        "wrongGuesses": 0,
        "roundOver": False,
        "revealedWord": None,
    }


def build_scribble_state() -> dict[str, Any]:
    return {"drawPoints": []}


def build_connection_state() -> dict[str, Any]:
    return {
        "connected": False,
        "identity": None,
        "reconnectAttempts": 0,
        "lastError": None,
        "failed": False,
    }


def build_room_state() -> dict[str, Any]:
    """Return the empty per-room slice restored by every leave."""
    return {
        "room": None,
        "players": [],
        "messages": [],
        "started": False,
        "currentWord": "",
        "round": DEFAULT_ROUND,
        "totalRounds": DEFAULT_TOTAL_ROUNDS,
        "timeLeft": 0,
        "gameOver": False,
        "winner": None,
        "hangman": build_hangman_state(),
        "scribble": build_scribble_state(),
    }


def build_initial_state() -> dict[str, Any]:
    """Return the state of a process that has not connected yet."""
    state = build_room_state()
    state["connection"] = build_connection_state()
    state["localPlayerId"] = None
    state["epoch"] = 0
    return state


def reset_room_state(state: dict[str, Any]) -> dict[str, Any]:
    """Drop every room-scoped field while keeping connection and identity."""
    next_state = dict(state)
    next_state.update(build_room_state())
    next_state["epoch"] = int(state.get("epoch", 0)) + 1
    return next_state
