"""Environment-driven settings and how build_game wires them in."""
from pathlib import Path

import pytest

from rps_showdown.chooser import RandomChooser
from rps_showdown.config import (
    clear_config_cache,
    get_data_dir,
    get_random_seed,
    get_reveal_delay_seconds,
    get_score_key,
)
from rps_showdown.state_machine import build_game


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    for name in ("RPS_REVEAL_DELAY_MS", "RPS_SCORE_KEY", "RPS_RANDOM_SEED"):
        monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


def test_reveal_delay_defaults_to_one_second():
    assert get_reveal_delay_seconds() == 1.0


@pytest.mark.parametrize("millis, expected", [("250", 0.25), ("0", 0.0), ("-500", 0.0)])
def test_reveal_delay_from_milliseconds(monkeypatch, millis, expected):
    monkeypatch.setenv("RPS_REVEAL_DELAY_MS", millis)
    assert get_reveal_delay_seconds() == expected


def test_score_key_default_and_override(monkeypatch):
    assert get_score_key() == "rps-score"

    monkeypatch.setenv("RPS_SCORE_KEY", "office-league")
    clear_config_cache()
    assert get_score_key() == "office-league"


@pytest.mark.parametrize("raw, expected", [(None, None), ("", None), ("  ", None), ("42", 42)])
def test_random_seed_parsing(monkeypatch, raw, expected):
    if raw is not None:
        monkeypatch.setenv("RPS_RANDOM_SEED", raw)
    assert get_random_seed() == expected


def test_data_dir_honours_data_path(monkeypatch, tmp_path):
    target = tmp_path / "volume"
    monkeypatch.setenv("DATA_PATH", str(target))

    assert get_data_dir() == target
    assert target.is_dir()


def test_unwritable_data_path_falls_back_to_local_data(monkeypatch, tmp_path):
    blocked = tmp_path / "blocked"
    real_mkdir = Path.mkdir

    def mkdir(self, *args, **kwargs):
        if self == blocked:
            raise PermissionError(13, "Permission denied", str(self))
        return real_mkdir(self, *args, **kwargs)

    workdir = tmp_path / "workdir"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setattr(Path, "mkdir", mkdir)
    monkeypatch.setenv("DATA_PATH", str(blocked))

    data_dir = get_data_dir()

    assert data_dir == Path.cwd() / "data"
    assert data_dir.is_dir()


def test_build_game_uses_configuration(monkeypatch, tmp_path):
    monkeypatch.setenv("RPS_DB_PATH", str(tmp_path / "wired.db"))
    monkeypatch.setenv("RPS_SCORE_KEY", "wired-score")
    monkeypatch.setenv("RPS_REVEAL_DELAY_MS", "250")
    monkeypatch.setenv("RPS_RANDOM_SEED", "7")

    machine = build_game()
    try:
        assert machine.reveal_delay == 0.25
        assert machine._store.key == "wired-score"
        reference = RandomChooser(7)
        assert [machine._chooser.choose() for _ in range(20)] == [reference.choose() for _ in range(20)]
    finally:
        machine.close()


def test_build_game_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("RPS_DB_PATH", str(tmp_path / "defaults.db"))

    machine = build_game()
    try:
        assert machine.reveal_delay == 1.0
        assert machine._store.key == "rps-score"
    finally:
        machine.close()
