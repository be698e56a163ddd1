"""Centralized configuration helpers for the RPS Showdown project.

This module provides a single place to resolve environment-dependent values,
so that the API service, tests and scripts all interpret
configuration flags consistently.
"""
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

_PROJECT_ROOT_ENV = "RPS_PROJECT_ROOT"
_DEFAULT_DATA_PATH = "/data"
_DEFAULT_SCORE_KEY = "rps-score"
_DEFAULT_REVEAL_DELAY_MS = 1000  # Suspense pause before the computer's move is shown


def project_root() -> Path:
    """Resolve the project root directory.

    The value can be overridden with the ``RPS_PROJECT_ROOT`` environment
    variable. Otherwise it is inferred from the location of this file.
    """
    root_override = os.getenv(_PROJECT_ROOT_ENV)
    if root_override:
        return Path(root_override).expanduser().resolve()
    return Path(__file__).resolve().parents[1]


@lru_cache(maxsize=1)
def get_data_dir() -> Path:
    """Return the shared data directory.

    ``DATA_PATH`` wins when set. When the directory cannot be created (the
    default ``/data`` is usually root-owned on developer machines) we fall back
    to ``./data`` so the service still starts.
    """
    data_dir = Path(os.getenv("DATA_PATH", _DEFAULT_DATA_PATH))
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except PermissionError:
        fallback_dir = Path.cwd() / "data"
        fallback_dir.mkdir(parents=True, exist_ok=True)
        print(f"Warning: DATA_PATH '{data_dir}' not writable; using '{fallback_dir}' instead")
        data_dir = fallback_dir
    return data_dir


@lru_cache(maxsize=1)
def get_score_key() -> str:
    """Return the key the score record is stored under."""
    return os.getenv("RPS_SCORE_KEY", _DEFAULT_SCORE_KEY)


@lru_cache(maxsize=1)
def get_reveal_delay_seconds() -> float:
    """Return the reveal delay in seconds (configured in milliseconds)."""
    millis = int(os.getenv("RPS_REVEAL_DELAY_MS", str(_DEFAULT_REVEAL_DELAY_MS)))
    return max(millis, 0) / 1000.0


@lru_cache(maxsize=1)
def get_random_seed() -> Optional[int]:
    """Return the seed for the computer's move generator, if one is pinned."""
    raw = os.getenv("RPS_RANDOM_SEED")
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


def clear_config_cache() -> None:
    """Forget cached values so tests can change environment variables."""
    for getter in (
        get_data_dir,
        get_score_key,
        get_reveal_delay_seconds,
        get_random_seed,
    ):
        getter.cache_clear()
