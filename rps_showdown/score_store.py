"""Persisted score record.

The score lives under a single key of the durable key-value store as a JSON
object with exactly two non-negative integers. Anything else stored under the
key is treated as if the key were absent.
"""
from __future__ import annotations

import json
import logging
import sqlite3

from pydantic import BaseModel, ConfigDict, NonNegativeInt, ValidationError

from rps_showdown.db import KeyValueStore
from rps_showdown.errors import PersistenceReadError, PersistenceWriteError, ScoreNotFound
from rps_showdown.game_utils import Outcome
from rps_showdown.metrics import record_persistence_failure

logger = logging.getLogger(__name__)


class Score(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    player: NonNegativeInt
    computer: NonNegativeInt

    @classmethod
    def zero(cls) -> "Score":
        return cls(player=0, computer=0)

    def apply(self, outcome: Outcome) -> "Score":
        """Return the score after a round with ``outcome``; ties change nothing."""
        if outcome == Outcome.WIN:
            return self.model_copy(update={"player": self.player + 1})
        if outcome == Outcome.LOSS:
            return self.model_copy(update={"computer": self.computer + 1})
        return self


class ScoreStore:
    def __init__(self, kv: KeyValueStore, key: str):
        self._kv = kv
        self.key = key

    def read(self) -> Score:
        """Read the stored score, raising ``PersistenceReadError`` on any problem."""
        try:
            raw = self._kv.get(self.key)
        except (sqlite3.Error, OSError) as exc:
            raise PersistenceReadError(f"could not read {self.key!r}: {exc}") from exc
        if raw is None:
            raise ScoreNotFound(f"no score stored under {self.key!r}")
        try:
            return Score.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as exc:
            raise PersistenceReadError(f"malformed score under {self.key!r}: {exc}") from exc

    def load(self) -> Score:
        """Return the stored score, or ``{0, 0}`` when it is absent or corrupt."""
        try:
            return self.read()
        except ScoreNotFound:
            return Score.zero()
        except PersistenceReadError as exc:
            logger.warning("Ignoring stored score: %s", exc)
            record_persistence_failure("read")
            return Score.zero()

    def write(self, score: Score) -> None:
        try:
            self._kv.set(self.key, score.model_dump_json())
        except (sqlite3.Error, OSError) as exc:
            raise PersistenceWriteError(f"could not write {self.key!r}: {exc}") from exc

    def save(self, score: Score) -> bool:
        """Best-effort write. Returns ``False`` when the store rejected it."""
        try:
            self.write(score)
        except PersistenceWriteError:
            logger.exception("Failed to persist score %s", score.model_dump())
            record_persistence_failure("write")
            return False
        return True

    def close(self) -> None:
        self._kv.close()


__all__ = ["Score", "ScoreStore"]
