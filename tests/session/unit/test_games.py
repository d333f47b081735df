from gamehub.session.engine import apply_server_event, seed_room
from gamehub.session.games import (
    MAX_WRONG_GUESSES,
    can_draw,
    can_guess_letter,
    hangman_view,
    is_round_lost,
    mask_word,
    scribble_hint,
    scribble_view,
)
from gamehub.session.state import build_initial_state


def _started(game_type: str, local_id: str = "p1", drawer: str | None = None, word: str = "apple") -> dict:
    state = apply_server_event(build_initial_state(), "connect", {"sid": local_id}).state
    room = {"id": "ROOM01", "hostId": "p1", "gameType": game_type}
    state = seed_room(state, room, local_id, as_host=False)
    started_room = dict(room)
    if drawer is not None:
        started_room["isDrawer"] = drawer
    return apply_server_event(state, "game-started", {"room": started_room, "word": word, "round": 1, "timeLeft": 90}).state


def test_mask_word_shows_guessed_letters_case_insensitively() -> None:
    assert mask_word("Apple", ["A", "P"]) == "A p p _ _"
    assert mask_word("ice cream", ["E"]) == "_ _ e   _ _ e _ _"
    assert mask_word("", ["A"]) == ""


def test_scribble_hint_tiers() -> None:
    assert scribble_hint("apple", 61) == "5 letters"
    assert scribble_hint("apple", 60) == 'Starts with "a"'
    assert scribble_hint("apple", 41) == 'Starts with "a"'
    assert scribble_hint("apple", 40) == 'Ends with "e"'
    assert scribble_hint("apple", 21) == 'Ends with "e"'
    assert scribble_hint("apple", 20) == ""
    assert scribble_hint("a", 30) == ""
    assert scribble_hint("", 90) == ""


def test_round_is_lost_after_six_wrong_guesses() -> None:
    assert MAX_WRONG_GUESSES == 6
    assert is_round_lost(5) is False
    assert is_round_lost(6) is True


def test_guess_guard_rejects_repeats_and_closed_rounds() -> None:
    state = _started("hangman")
    assert can_guess_letter(state, "a") is True

    state = apply_server_event(state, "hangman-update", {"guessedLetters": ["A"], "isCorrect": True}).state
    assert can_guess_letter(state, "a") is False
    assert can_guess_letter(state, "B") is True

    state = apply_server_event(state, "hangman-round-over", {"word": "APPLE", "winner": None}).state
    assert can_guess_letter(state, "B") is False


def test_guess_guard_rejects_before_start_and_after_loss() -> None:
    state = apply_server_event(build_initial_state(), "connect", {"sid": "p1"}).state
    state = seed_room(state, {"id": "ROOM01", "hostId": "p1", "gameType": "hangman"}, "p1", as_host=True)
    assert can_guess_letter(state, "A") is False

    state = _started("hangman")
    for letter in "BCDFGH":
        state = apply_server_event(state, "hangman-update", {"guessedLetters": [letter], "isCorrect": False}).state
    assert can_guess_letter(state, "Z") is False
    assert hangman_view(state).lost is True


def test_hangman_view_masks_until_letters_arrive() -> None:
    state = _started("hangman", word="CAT")
    state = apply_server_event(state, "hangman-update", {"guessedLetters": ["C", "X"], "isCorrect": False}).state

    view = hangman_view(state)

    assert view.masked_word == "C _ _"
    assert view.wrong_guesses == 1
    assert view.guessed_letters == ("C", "X")
    assert view.round_over is False


def test_only_started_drawer_can_draw() -> None:
    assert can_draw(_started("scribble", local_id="p1", drawer="p1")) is True
    assert can_draw(_started("scribble", local_id="p2", drawer="p1")) is False

    state = _started("scribble", local_id="p1", drawer="p1")
    state = apply_server_event(state, "game-over", {"winner": {"name": "Ann", "score": 3}, "scores": []}).state
    assert can_draw(state) is False


def test_scribble_view_hides_hint_from_drawer() -> None:
    guesser = scribble_view(_started("scribble", local_id="p2", drawer="p1"))
    drawer = scribble_view(_started("scribble", local_id="p1", drawer="p1"))

    assert guesser.is_drawer is False
    assert guesser.hint == "5 letters"
    assert drawer.is_drawer is True
    assert drawer.hint == ""
