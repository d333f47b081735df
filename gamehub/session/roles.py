"""Roles derived from the local identity and the authoritative room snapshot."""

from __future__ import annotations

from typing import Any


SCRIBBLE = "scribble"
HANGMAN = "hangman"


def drawer_id(room: dict[str, Any] | None) -> str | None:
    """Return the current drawer id; older servers send it as ``isDrawer``."""
    if not isinstance(room, dict):
        return None
    value = room.get("drawerId", room.get("isDrawer"))
    if isinstance(value, str) and value != "":
        return value
    return None


def is_local_host(state: dict[str, Any]) -> bool:
    room = state.get("room")
    local_id = state.get("localPlayerId")
    if not isinstance(room, dict) or not local_id:
        return False
    return room.get("hostId") == local_id


def is_local_drawer(state: dict[str, Any]) -> bool:
    room = state.get("room")
    local_id = state.get("localPlayerId")
    if not isinstance(room, dict) or not local_id:
        return False
    if room.get("gameType") != SCRIBBLE:
        return False
    return drawer_id(room) == local_id
