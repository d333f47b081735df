"""Hangman and Scribble projections computed from the reduced session state."""

from __future__ import annotations

from typing import Any

from gamehub.session.models import HangmanView, ScribbleView, StrokePoint
from gamehub.session.roles import HANGMAN, SCRIBBLE, is_local_drawer


MAX_WRONG_GUESSES = 6


def mask_word(word: str, guessed_letters: list[str] | tuple[str, ...]) -> str:
    """Render ``word`` with unguessed letters as underscores, space separated."""
    guessed = {letter.upper() for letter in guessed_letters}
    return " ".join(
        char if (not char.isalpha() or char.upper() in guessed) else "_"
        for char in word
    )


def is_round_lost(wrong_guesses: int) -> bool:
    return wrong_guesses >= MAX_WRONG_GUESSES


def is_word_solved(word: str, guessed_letters: list[str] | tuple[str, ...]) -> bool:
    if not word:
        return False
    guessed = {letter.upper() for letter in guessed_letters}
    return all(char.upper() in guessed for char in word if char.isalpha())


def scribble_hint(word: str, time_left: int) -> str:
    """Hint shown to guessers; it only narrows as the timer runs down."""
    if not word:
        return ""
    length = len(word)
    if time_left > 60:
        return f"{length} letters"
    if time_left > 40:
        return f'Starts with "{word[0]}"'
    if time_left > 20 and length > 1:
        return f'Ends with "{word[length - 1]}"'
    return ""


def hangman_round_closed(state: dict[str, Any]) -> bool:
    hangman = state["hangman"]
    return (
        bool(hangman.get("roundOver"))
        or bool(state.get("gameOver"))
        or is_round_lost(int(hangman.get("wrongGuesses", 0)))
        or is_word_solved(state.get("currentWord", ""), hangman.get("guessedLetters", []))
    )


def can_guess_letter(state: dict[str, Any], letter: str) -> bool:
    """Local guard for ``hangman-guess``; the server still decides the outcome."""
    room = state.get("room")
    if not isinstance(room, dict) or room.get("gameType", HANGMAN) != HANGMAN:
        return False
    if not state.get("started") or hangman_round_closed(state):
        return False
    return letter.upper() not in {guessed.upper() for guessed in state["hangman"].get("guessedLetters", [])}


def can_draw(state: dict[str, Any]) -> bool:
    return bool(state.get("started")) and is_local_drawer(state)


def hangman_view(state: dict[str, Any]) -> HangmanView:
    hangman = state["hangman"]
    letters = tuple(hangman.get("guessedLetters", []))
    wrong_guesses = int(hangman.get("wrongGuesses", 0))
    return HangmanView(
        guessed_letters=letters,
        wrong_guesses=wrong_guesses,
        masked_word=mask_word(state.get("currentWord", ""), letters),
        revealed_word=hangman.get("revealedWord"),
        round_over=hangman_round_closed(state),
        lost=is_round_lost(wrong_guesses),
    )


def scribble_view(state: dict[str, Any]) -> ScribbleView:
    drawer = is_local_drawer(state)
    room = state.get("room")
    in_scribble = isinstance(room, dict) and room.get("gameType") == SCRIBBLE
    hint = ""
    if in_scribble and not drawer:
        hint = scribble_hint(state.get("currentWord", ""), int(state.get("timeLeft", 0)))
    return ScribbleView(
        is_drawer=drawer,
        round=int(state.get("round", 1)),
        draw_points=tuple(
            StrokePoint(x=point["x"], y=point["y"], color=point["color"], width=point["width"])
            for point in state["scribble"].get("drawPoints", [])
        ),
        hint=hint,
    )
