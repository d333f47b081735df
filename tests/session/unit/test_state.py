from gamehub.session.state import build_initial_state, reset_room_state


def test_build_initial_state_has_no_room_and_no_identity() -> None:
    state = build_initial_state()

    assert state["room"] is None
    assert state["players"] == []
    assert state["messages"] == []
    assert state["started"] is False
    assert state["localPlayerId"] is None
    assert state["connection"]["connected"] is False
    assert state["hangman"] == {"guessedLetters": [], "wrongGuesses": 0, "roundOver": False, "revealedWord": None}
    assert state["scribble"] == {"drawPoints": []}
    assert state["epoch"] == 0


def test_reset_room_state_keeps_connection_and_bumps_epoch() -> None:
    state = build_initial_state()
    state["connection"] = dict(state["connection"], connected=True, identity="sid-1")
    state["localPlayerId"] = "sid-1"
    state["room"] = {"id": "ABC123"}
    state["players"] = [{"id": "sid-1", "name": "Ann", "score": 3}]
    state["started"] = True

    reset = reset_room_state(state)

    assert reset["room"] is None
    assert reset["players"] == []
    assert reset["started"] is False
    assert reset["connection"]["identity"] == "sid-1"
    assert reset["localPlayerId"] == "sid-1"
    assert reset["epoch"] == 1
    assert state["room"] == {"id": "ABC123"}
