"""View model for the game screen.

Turns a :class:`GameSnapshot` into the plain dict the API returns and the
Streamlit client renders. Which affordances exist in which phase is decided
here, so every front end offers the same actions.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from rps_showdown.game_utils import EMOJI, Move, Outcome, it_beats
from rps_showdown.state_machine import GameSnapshot, Phase

PLAYER_LABEL = "You"
COMPUTER_LABEL = "PC"
THINKING_EMOJI = "🤔"
RESET_PROMPT = "Reset the score?"

RESULT_MESSAGES = {
    Outcome.WIN: "🎉 You win!",
    Outcome.LOSS: "😔 You lose",
    Outcome.TIE: "🤝 Tie",
}


def _card(label: str, move: Optional[Move]) -> Dict[str, Any]:
    if move is None:
        return {"label": label, "move": None, "emoji": THINKING_EMOJI, "thinking": True}
    return {"label": label, "move": move.value, "emoji": EMOJI[move], "thinking": False}


def build_view(snapshot: GameSnapshot) -> Dict[str, Any]:
    """Render model for the current phase.

    ``idle`` offers the move buttons. ``pending`` shows the player's card next
    to a thinking placeholder. ``resolved`` shows both cards, the result banner
    and the play-again action. Reset is offered in every phase and must be
    confirmed by the player first.
    """
    phase = snapshot.phase
    rnd = snapshot.round

    view: Dict[str, Any] = {
        "phase": phase.value,
        "score": snapshot.score.model_dump(),
        "round": {
            "player_move": rnd.player_move.value if rnd.player_move else None,
            "computer_move": rnd.computer_move.value if rnd.computer_move else None,
            "outcome": rnd.outcome.value if rnd.outcome else None,
            "pending": rnd.pending,
        },
        "prompt": None,
        "player_card": None,
        "computer_card": None,
        "center": None,
        "result": None,
        "actions": {
            "select_move": [],
            "play_again": False,
            "reset_score": {"available": True, "confirm_prompt": RESET_PROMPT},
        },
    }

    if phase == Phase.IDLE:
        view["prompt"] = "Choose your move"
        view["actions"]["select_move"] = [
            {"move": m.value, "emoji": EMOJI[m], "label": m.value.title()} for m in Move
        ]
        return view

    view["player_card"] = _card(PLAYER_LABEL, rnd.player_move)
    view["computer_card"] = _card(COMPUTER_LABEL, rnd.computer_move)

    if phase == Phase.PENDING:
        view["center"] = "..."
        return view

    view["center"] = "VS"
    view["result"] = {"outcome": rnd.outcome.value, "message": RESULT_MESSAGES[rnd.outcome]}
    view["actions"]["play_again"] = True
    return view


def rules_view() -> Dict[str, Any]:
    """Describe the beats relation for help text."""
    moves = [
        {"move": m.value, "emoji": EMOJI[m], "beats": it_beats(m).value}
        for m in Move
    ]
    caption = " • ".join(f"{EMOJI[m]} beats {EMOJI[it_beats(m)]}" for m in Move)
    return {"moves": moves, "caption": caption}


__all__ = ["build_view", "rules_view", "RESULT_MESSAGES", "RESET_PROMPT"]
