import pytest
from pydantic import ValidationError

from gamehub.session.protocol import (
    CreateRoomRequest,
    DrawRequest,
    HangmanGuessRequest,
    JoinRoomRequest,
    parse_ack,
)


def test_join_request_normalises_room_code() -> None:
    request = JoinRoomRequest(roomId=" abc123 ", playerName=" Ann ")

    assert request.model_dump() == {"roomId": "ABC123", "playerName": "Ann"}


def test_create_request_rejects_unknown_game_and_blank_names() -> None:
    with pytest.raises(ValidationError):
        CreateRoomRequest(roomName="Fun", playerName="Ann", gameType="chess")
    with pytest.raises(ValidationError):
        CreateRoomRequest(roomName="   ", playerName="Ann", gameType="hangman")


def test_hangman_guess_must_be_a_single_letter() -> None:
    assert HangmanGuessRequest(roomId="R", letter="q").letter == "Q"
    with pytest.raises(ValidationError):
        HangmanGuessRequest(roomId="R", letter="ab")
    with pytest.raises(ValidationError):
        HangmanGuessRequest(roomId="R", letter="1")


def test_draw_request_fills_point_defaults() -> None:
    request = DrawRequest(roomId="R", point={"x": 1, "y": 2.5})

    assert request.model_dump()["point"] == {"x": 1.0, "y": 2.5, "color": "#000000", "width": 4.0}


def test_parse_ack_handles_success_failure_and_garbage() -> None:
    ok = parse_ack({"success": True, "room": {"id": "ABC123"}, "playerId": "p1"})
    assert ok.success is True
    assert ok.room == {"id": "ABC123"}
    assert ok.playerId == "p1"

    rejected = parse_ack({"success": False, "error": "Room not found"})
    assert rejected.success is False
    assert rejected.error == "Room not found"

    garbage = parse_ack(None)
    assert garbage.success is False
    assert garbage.error is None
