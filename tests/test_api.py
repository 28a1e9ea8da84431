"""Tests for the web API and its controller."""

import pytest
from fastapi.testclient import TestClient

from tilemaze.core.errors import ConfigurationError
from tilemaze.core.loader import get_definition
from tilemaze.core.models import MazeDefinition
from tilemaze.core.state import Settings
from tilemaze.server.api import create_app
from tilemaze.server.controller import GameController, build_controller


def make_controller(**overrides) -> GameController:
    settings = Settings()
    settings.maze_name = "maze-mini"
    settings.maze_seed = 11
    for key, value in overrides.items():
        setattr(settings, key, value)
    return build_controller(settings=settings)


@pytest.fixture
def client():
    return TestClient(create_app(make_controller()))


def test_ping(client):
    assert client.get("/api/ping").json() == {"status": "ok"}


def test_maze_payload(client):
    payload = client.get("/api/maze").json()
    assert payload["rows"] == 2 and payload["columns"] == 2
    assert payload["diagnostics"] == []
    first = payload["cells"][0][0]
    assert first["walls"] == ["top", "left"]
    assert first["has_object"] is False
    question = payload["cells"][0][1]
    assert question["object_kind"] == "Question"
    assert question["object_class"] == "square-image"
    assert payload["cells"][1][1]["object_kind"] == "Flag"


def test_move_blocked(client):
    response = client.post("/api/player/move", json={"direction": "up"})
    assert response.status_code == 200
    body = response.json()
    assert body["valid"] is False
    assert body["reason"] == "blocked"
    assert body["position"] == {"row": 0, "column": 0}
    assert body["event"] is None


def test_move_triggers_event_once(client):
    body = client.post("/api/player/move", json={"direction": "right"}).json()
    assert body["valid"] is True
    assert body["event"] == "Question"

    client.post("/api/player/move", json={"direction": "left"})
    body = client.post("/api/player/move", json={"direction": "right"}).json()
    assert body["event"] is None

    cell = client.get("/api/maze").json()["cells"][0][1]
    assert cell["object_active"] is False
    assert cell["object_class"] == "square-image square-image-inactive"


def test_reaching_flag(client):
    client.post("/api/player/move", json={"direction": "down"})
    body = client.post("/api/player/move", json={"direction": "right"}).json()
    assert body["event"] == "Flag"
    assert body["goal_reached"] is True
    state = client.get("/api/state").json()
    assert state["current_position"] == {"row": 1, "column": 1}
    assert state["triggered"] == ["Flag"]
    assert state["questions_remaining"] == 1


def test_unknown_direction_rejected(client):
    response = client.post("/api/player/move", json={"direction": "north"})
    assert response.status_code == 422


def test_restart_resets_objects(client):
    client.post("/api/player/move", json={"direction": "right"})
    response = client.post("/api/state/restart", json={"seed": 5})
    body = response.json()
    assert body["state"]["seed"] == 5
    assert body["state"]["current_position"] == {"row": 0, "column": 0}
    assert body["state"]["triggered"] == []
    assert body["maze"]["cells"][0][1]["object_active"] is True


def test_strict_controller_refuses_broken_maze():
    settings = Settings()
    settings.strict_validation = True
    broken = MazeDefinition(collision=[[9, 2], [12, 6]], goal_index=3, pickup_candidates=[])
    with pytest.raises(ConfigurationError):
        build_controller(settings=settings, definition=broken)


def test_lenient_controller_reports_diagnostics():
    broken = MazeDefinition(collision=[[9, 2], [12, 6]], goal_index=3, pickup_candidates=[])
    controller = build_controller(settings=Settings(), definition=broken)
    diagnostics = controller.get_maze_payload()["diagnostics"]
    assert {"row": 0, "column": 1, "message": "is on the top edge but has no wall on its top"} in diagnostics


def test_seeded_controllers_agree():
    definition = get_definition("maze-1")
    a = GameController(settings=Settings(), definition=definition, seed=3)
    b = GameController(settings=Settings(), definition=definition, seed=3)
    assert a.get_maze_payload() == b.get_maze_payload()
