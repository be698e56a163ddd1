"""Computer move selection."""
from __future__ import annotations

import random
from typing import Optional, Protocol

from rps_showdown.game_utils import Move

MOVES = tuple(Move)


class Chooser(Protocol):
    def choose(self) -> Move: ...


class RandomChooser:
    """Pick uniformly among the three moves.

    The generator is owned by the chooser so a seed pins the sequence without
    touching the global ``random`` state.
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def choose(self) -> Move:
        return self._rng.choice(MOVES)

