"""HTTP surface: the game routes driven through TestClient."""
import pytest
from fastapi.testclient import TestClient

from rps_showdown.main import app
from rps_showdown.state_machine import get_game


@pytest.fixture
def game(make_machine):
    return make_machine("scissors", "rock", "paper")


@pytest.fixture
def client(game):
    app.dependency_overrides[get_game] = lambda: game
    # No context manager: startup would build the process-wide game
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True


def test_state_starts_idle(client):
    resp = client.get("/state")
    assert resp.status_code == 200
    body = resp.json()
    assert body["phase"] == "idle"
    assert body["score"] == {"player": 0, "computer": 0}


def test_full_round_flow(client, scheduler):
    resp = client.post("/select", json={"move": "Rock"})
    assert resp.status_code == 200
    assert resp.json()["phase"] == "pending"
    assert resp.json()["computer_card"]["thinking"] is True

    scheduler.fire_all()

    body = client.get("/state").json()
    assert body["phase"] == "resolved"
    assert body["result"]["outcome"] == "win"
    assert body["score"] == {"player": 1, "computer": 0}

    resp = client.post("/play_again")
    assert resp.status_code == 200
    assert resp.json()["phase"] == "idle"
    assert resp.json()["score"] == {"player": 1, "computer": 0}


def test_invalid_move_is_rejected(client, game):
    resp = client.post("/select", json={"move": "lizard"})
    assert resp.status_code == 400
    assert game.phase.value == "idle"


def test_play_again_outside_resolved_conflicts(client):
    resp = client.post("/play_again")
    assert resp.status_code == 409


def test_select_while_resolved_conflicts(client, scheduler):
    client.post("/select", json={"move": "rock"})
    scheduler.fire_all()

    resp = client.post("/select", json={"move": "paper"})
    assert resp.status_code == 409
    assert client.get("/state").json()["round"]["player_move"] == "rock"


def test_reset_requires_confirmation(client, scheduler):
    client.post("/select", json={"move": "rock"})
    scheduler.fire_all()

    resp = client.post("/reset_score", json={})
    assert resp.status_code == 200
    assert resp.json()["score"] == {"player": 1, "computer": 0}
    assert resp.json()["phase"] == "resolved"

    resp = client.post("/reset_score", json={"confirm": True})
    assert resp.status_code == 200
    assert resp.json()["score"] == {"player": 0, "computer": 0}
    assert resp.json()["phase"] == "idle"


def test_rules_endpoint(client):
    resp = client.get("/rules")
    assert resp.status_code == 200
    assert len(resp.json()["moves"]) == 3
