"""Tests for maze definition loading and settings."""

import json
import random

import pytest

from tilemaze.core.errors import ConfigurationError
from tilemaze.core.loader import get_definition, load_definitions
from tilemaze.core.maze import decode
from tilemaze.core.models import MazeDefinition
from tilemaze.core.state import Settings


def write_definitions(tmp_path, payload) -> str:
    path = tmp_path / "mazes.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_bundled_mazes_decode_cleanly():
    definitions = load_definitions()
    assert {"maze-1", "maze-mini"} <= set(definitions)
    for definition in definitions.values():
        maze = decode(definition.collision, definition.pickup_candidates, definition.goal_index, random.Random(1))
        assert maze.diagnostics == []


def test_definition_uses_file_field_names():
    definition = MazeDefinition.model_validate(
        {"mazeData": [[9, 3], [12, 6]], "flagLocation": 3, "questionLocations": [1, 2]}
    )
    assert definition.goal_index == 3
    assert definition.pickup_candidates == [1, 2]
    assert definition.collision[1] == [12, 6]


def test_custom_file(tmp_path):
    path = write_definitions(tmp_path, {"tiny": {"mazeData": [[15]], "flagLocation": 0}})
    definition = get_definition("tiny", path)
    assert definition.pickup_candidates == []


def test_unknown_maze_name(tmp_path):
    path = write_definitions(tmp_path, {"tiny": {"mazeData": [[15]], "flagLocation": 0}})
    with pytest.raises(ConfigurationError, match="tiny"):
        get_definition("maze-9", path)


@pytest.mark.parametrize(
    "raw",
    [
        {"mazeData": [[9, 3], [12]], "flagLocation": 0},
        {"mazeData": [], "flagLocation": 0},
        {"mazeData": [[9, 3], [12, 6]]},
    ],
)
def test_malformed_definition(tmp_path, raw):
    path = write_definitions(tmp_path, {"bad": raw})
    with pytest.raises(ConfigurationError, match="bad"):
        load_definitions(path)


def test_unreadable_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_definitions(str(tmp_path / "missing.json"))
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_definitions(str(broken))


def test_settings_load_from_dict():
    settings = Settings()
    settings.load_from_dict(
        {
            "maze": {"name": "maze-mini", "seed": 7, "strict": True},
            "logging": {"level": "debug"},
            "server": {"port": 9000},
        }
    )
    assert settings.maze_name == "maze-mini"
    assert settings.maze_seed == 7
    assert settings.strict_validation is True
    assert settings.log_level == "DEBUG"
    assert settings.server_port == 9000
    assert settings.server_host == "127.0.0.1"


def test_settings_reject_unknown_log_level():
    settings = Settings()
    with pytest.raises(ConfigurationError, match="FOO"):
        settings.load_from_dict({"logging": {"level": "foo"}})
    assert settings.log_level == "INFO"
