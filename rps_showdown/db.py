"""Database utilities for the RPS Showdown service.

This module centralises SQLite connection handling and schema creation. The
game only needs a durable key-value table, which :class:`KeyValueStore` wraps
so the score store never touches SQL directly.
"""
from __future__ import annotations

import logging
import os
import sqlite3
from pathlib import Path
from typing import Optional

from rps_showdown.config import project_root, get_data_dir
from rps_showdown.game_utils import now_iso

logger = logging.getLogger(__name__)

_DEFAULT_DB_FILENAME = "rps_showdown.db"
_DB_PATH_ENV_VAR = "RPS_DB_PATH"


def resolve_db_path(explicit: Optional[str | os.PathLike[str]] = None) -> Path:
    """Return the SQLite database path, honouring overrides and fallbacks.

    Priority order:
    1. ``explicit`` argument if provided.
    2. ``RPS_DB_PATH`` environment variable.
    3. ``DATA_PATH``/``/data`` directory.
    4. ``local/rps_showdown.db`` when it exists and nothing else does (useful
       for local development).
    """

    if explicit:
        path = Path(explicit)
    else:
        env_override = os.getenv(_DB_PATH_ENV_VAR)
        if env_override:
            path = Path(env_override)
        else:
            path = get_data_dir() / _DEFAULT_DB_FILENAME

    local_fallback = project_root() / "local" / _DEFAULT_DB_FILENAME
    if not explicit and not path.exists() and local_fallback.exists():
        path = local_fallback

    # Ensure target directory exists to avoid runtime errors when SQLite tries
    # to create the file.
    path.parent.mkdir(parents=True, exist_ok=True)
    return path.resolve()


def _ensure_schema(conn: sqlite3.Connection) -> None:
    """Create tables if they don't already exist."""

    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS kv_store (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_ts TEXT
        );
        """
    )
    conn.commit()


def connect(explicit_path: Optional[str | os.PathLike[str]] = None) -> sqlite3.Connection:
    """Initialise and return a SQLite connection with the project schema."""

    db_path = resolve_db_path(explicit_path)
    try:
        conn = sqlite3.connect(db_path, check_same_thread=False)
    except sqlite3.Error:
        logger.exception("Failed to connect to SQLite database at %s", db_path)
        raise

    try:
        _ensure_schema(conn)
    except sqlite3.Error:
        conn.close()
        logger.exception("Failed to initialise schema in %s", db_path)
        raise
    return conn


class KeyValueStore:
    """Durable string-to-string mapping backed by the ``kv_store`` table.

    The connection is opened on first use, so an unusable database surfaces
    from ``get``/``set`` rather than from construction. A failed open is
    retried on the next call. Errors propagate as ``sqlite3.Error`` (or
    ``OSError`` when the data directory cannot be created); callers decide
    whether a failure is fatal.
    """

    def __init__(self, explicit_path: Optional[str | os.PathLike[str]] = None):
        self._path = explicit_path
        self._conn: Optional[sqlite3.Connection] = None

    @classmethod
    def open(cls, explicit_path: Optional[str | os.PathLike[str]] = None) -> "KeyValueStore":
        return cls(explicit_path)

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = connect(self._path)
        return self._conn

    def get(self, key: str) -> Optional[str]:
        row = self._connection().execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        conn = self._connection()
        with conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_ts) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_ts = excluded.updated_ts
                """,
                (key, value, now_iso()),
            )

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None


__all__ = ["KeyValueStore", "connect", "resolve_db_path"]
