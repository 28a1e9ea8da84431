"""Maze definition loader; falls back to the bundled mazes.json."""

import json
from pathlib import Path
from typing import Dict, Optional

from pydantic import ValidationError

from .errors import ConfigurationError
from .models import MazeDefinition

DEFAULT_PATH = Path(__file__).parent / "mazes.json"


def load_definitions(path: Optional[str] = None) -> Dict[str, MazeDefinition]:
    """Load every named maze from a definitions file.

    Raises:
        ConfigurationError: unreadable file or malformed definition
    """
    p = Path(path) if path else DEFAULT_PATH
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Cannot read maze definitions from {p}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Maze definitions in {p} must be an object keyed by maze name")

    definitions = {}
    for name, raw in data.items():
        try:
            definitions[name] = MazeDefinition.model_validate(raw)
        except ValidationError as exc:
            raise ConfigurationError(f"Maze '{name}' in {p} is malformed: {exc}") from exc
    return definitions


def get_definition(name: str, path: Optional[str] = None) -> MazeDefinition:
    definitions = load_definitions(path)
    if name not in definitions:
        known = ", ".join(sorted(definitions)) or "none"
        raise ConfigurationError(f"Unknown maze '{name}' (available: {known})")
    return definitions[name]
