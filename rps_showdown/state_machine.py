"""Round lifecycle for the single-screen game.

The machine loops ``idle -> pending -> resolved -> idle`` forever. Selecting a
move schedules a reveal after a fixed delay; the reveal draws the computer's
move, resolves the round and persists the score. All transitions run on one
event loop, so the only interleaving to care about is a reveal timer firing
after the round it belongs to has been abandoned. Every scheduled reveal
carries a generation token and only the newest token may mutate state.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol

from rps_showdown.chooser import Chooser, RandomChooser
from rps_showdown.config import get_random_seed, get_reveal_delay_seconds, get_score_key
from rps_showdown.db import KeyValueStore
from rps_showdown.errors import InvalidTransition
from rps_showdown.game_utils import Move, Outcome, resolve
from rps_showdown.metrics import (
    record_round,
    record_score_reset,
    record_stale_reveal,
    update_score,
)
from rps_showdown.score_store import Score, ScoreStore

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class Round:
    player_move: Optional[Move] = None
    computer_move: Optional[Move] = None
    outcome: Optional[Outcome] = None
    pending: bool = False

    @property
    def phase(self) -> Phase:
        if self.player_move is None:
            return Phase.IDLE
        if self.pending:
            return Phase.PENDING
        return Phase.RESOLVED


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the machine handed to the presentation layer."""

    phase: Phase
    round: Round
    score: Score


# ---- Scheduling

class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Schedule callbacks on the running asyncio loop (the FastAPI loop)."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


# ---- State machine

class GameStateMachine:
    def __init__(
        self,
        store: ScoreStore,
        chooser: Optional[Chooser] = None,
        scheduler: Optional[Scheduler] = None,
        reveal_delay: float = 1.0,
    ):
        self._store = store
        self._chooser = chooser or RandomChooser()
        self._scheduler = scheduler or AsyncioScheduler()
        self.reveal_delay = reveal_delay

        self._round = Round()
        self._score = store.load()
        self._reveal_handle: Optional[TimerHandle] = None
        self._reveal_token = 0
        update_score(self._score.player, self._score.computer)

    @property
    def phase(self) -> Phase:
        return self._round.phase

    @property
    def round(self) -> Round:
        return self._round

    @property
    def score(self) -> Score:
        return self._score

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(phase=self.phase, round=self._round, score=self._score)

    # -- actions

    def select_move(self, move: Move) -> None:
        """Record the player's move and schedule the reveal.

        Re-selecting while a reveal is outstanding supersedes it.
        """
        if self.phase == Phase.RESOLVED:
            raise InvalidTransition("select_move", self.phase.value)

        self._cancel_reveal()
        self._round = Round(player_move=move, pending=True)
        token = self._reveal_token
        self._reveal_handle = self._scheduler.call_later(self.reveal_delay, lambda: self._reveal(token))
        logger.debug("Player chose %s; reveal %d in %.2fs", move.value, token, self.reveal_delay)

    def play_again(self) -> None:
        if self.phase != Phase.RESOLVED:
            raise InvalidTransition("play_again", self.phase.value)
        self._round = Round()

    def reset_score(self) -> None:
        """Zero the score and clear the round. Callers must have confirmed with the player."""
        self._cancel_reveal()
        self._round = Round()
        self._set_score(Score.zero())
        record_score_reset()
        logger.info("Score reset")

    def close(self) -> None:
        """Cancel any outstanding reveal and release the score store."""
        self._cancel_reveal()
        self._store.close()

    # -- internals

    def _cancel_reveal(self) -> None:
        if self._reveal_handle is not None:
            self._reveal_handle.cancel()
            self._reveal_handle = None
        self._reveal_token += 1

    def _reveal(self, token: int) -> None:
        if token != self._reveal_token or self.phase != Phase.PENDING:
            record_stale_reveal()
            logger.debug("Discarding stale reveal %d (current %d)", token, self._reveal_token)
            return

        self._reveal_handle = None
        player = self._round.player_move
        computer = self._chooser.choose()
        outcome = resolve(player, computer)
        self._round = Round(player_move=player, computer_move=computer, outcome=outcome, pending=False)
        record_round(outcome.value, computer.value)

        new_score = self._score.apply(outcome)
        if new_score != self._score:
            self._set_score(new_score)
        logger.info(
            "Round resolved: %s vs %s -> %s (score %d-%d)",
            player.value, computer.value, outcome.value, self._score.player, self._score.computer,
        )

    def _set_score(self, score: Score) -> None:
        self._score = score
        update_score(score.player, score.computer)
        self._store.save(score)


# ---- Process-wide instance

_game: Optional[GameStateMachine] = None


def build_game(kv: Optional[KeyValueStore] = None) -> GameStateMachine:
    """Construct a machine from configuration."""
    store = ScoreStore(kv or KeyValueStore.open(), get_score_key())
    return GameStateMachine(
        store,
        chooser=RandomChooser(get_random_seed()),
        reveal_delay=get_reveal_delay_seconds(),
    )


def get_game() -> GameStateMachine:
    """Get the global game instance, creating it on first use."""
    global _game
    if _game is None:
        _game = build_game()
    return _game


__all__ = [
    "Phase",
    "Round",
    "GameSnapshot",
    "AsyncioScheduler",
    "GameStateMachine",
    "build_game",
    "get_game",
]
