"""Shared fixtures: throwaway SQLite stores and deterministic machines."""
import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root and this directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

# Never touch a real /data volume from tests
os.environ.setdefault("DATA_PATH", tempfile.mkdtemp(prefix="rps-showdown-tests-"))

from rps_showdown.db import KeyValueStore
from rps_showdown.score_store import ScoreStore
from rps_showdown.state_machine import GameStateMachine

from doubles import FixedChooser, ManualScheduler

SCORE_KEY = "rps-score"


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "showdown.db"


@pytest.fixture
def kv(db_path):
    store = KeyValueStore.open(db_path)
    yield store
    store.close()


@pytest.fixture
def store(kv):
    return ScoreStore(kv, SCORE_KEY)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def make_machine(store, scheduler):
    """Build a machine whose computer plays the given moves in order."""

    def _make(*computer_moves, score_store=None):
        return GameStateMachine(
            score_store or store,
            chooser=FixedChooser(computer_moves or ["rock"]),
            scheduler=scheduler,
            reveal_delay=1.0,
        )

    return _make
