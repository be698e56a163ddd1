"""Exception taxonomy for the game service."""
from __future__ import annotations


class ShowdownError(Exception):
    """Base class for errors raised by this package."""


class PersistenceReadError(ShowdownError):
    """The stored score record is missing, unreadable or malformed."""


class PersistenceWriteError(ShowdownError):
    """The score record could not be written to the store."""


class InvalidTransition(ShowdownError):
    """An action was invoked in a phase that does not offer it."""

    def __init__(self, action: str, phase: str):
        super().__init__(f"{action} is not allowed while the round is {phase}")
        self.action = action
        self.phase = phase


class ScoreNotFound(PersistenceReadError):
    """Nothing has been stored under the score key yet."""
