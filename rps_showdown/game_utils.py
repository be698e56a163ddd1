"""Shared gameplay utilities: moves, outcomes and the winning rule."""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum


class Move(str, Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"

    @classmethod
    def parse(cls, raw: str) -> "Move":
        """Parse a case-insensitive move name, raising ``ValueError`` otherwise."""
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            valid = [m.value for m in cls]
            raise ValueError(f"invalid move: {raw!r}. valid moves: {valid}") from None


class Outcome(str, Enum):
    """Round result from the player's perspective."""

    WIN = "win"
    LOSS = "loss"
    TIE = "tie"


# Each move defeats exactly one other move.
_DEFEATS = {
    Move.ROCK: Move.SCISSORS,
    Move.PAPER: Move.ROCK,
    Move.SCISSORS: Move.PAPER,
}

EMOJI = {
    Move.ROCK: "🗿",
    Move.PAPER: "📄",
    Move.SCISSORS: "✂️",
}


def now_iso() -> str:
    """Return the current UTC timestamp in ISO-8601 format."""
    return datetime.now(timezone.utc).isoformat()


def beats(choice: Move) -> Move:
    """Return the move that defeats ``choice``."""
    return next(m for m, loser in _DEFEATS.items() if loser == choice)


def it_beats(choice: Move) -> Move:
    """Return the move that ``choice`` defeats."""
    return _DEFEATS[choice]


def resolve(player: Move, computer: Move) -> Outcome:
    """Compute the round outcome from the player's perspective."""
    if player == computer:
        return Outcome.TIE
    return Outcome.WIN if it_beats(player) == computer else Outcome.LOSS


__all__ = [
    "Move",
    "Outcome",
    "EMOJI",
    "now_iso",
    "beats",
    "it_beats",
    "resolve",
]
