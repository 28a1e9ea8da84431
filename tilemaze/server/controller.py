"""Game backend controller.

Owns the decoded maze and the player, and builds payloads for the API.
"""

from __future__ import annotations

import logging
import random
import threading
from typing import List, Optional, Tuple

from ..core.loader import get_definition
from ..core.maze import Maze, decode
from ..core.models import MazeDefinition
from ..core.player import PlayerController
from ..core.rules import Direction, ObjectKind
from ..core.state import Settings

logger = logging.getLogger(__name__)


class GameController:
    """Wrap game flow and provide data to the web layer."""

    def __init__(
        self,
        *,
        settings: Settings,
        definition: MazeDefinition,
        seed: Optional[int] = None,
    ) -> None:
        self.settings = settings
        self.definition = definition
        self._lock = threading.Lock()
        self._events: List[str] = []
        self._start(seed)

    def _start(self, seed: Optional[int]) -> None:
        self.seed = seed if seed is not None else random.randint(1, 999_999)
        self.maze: Maze = decode(
            self.definition.collision,
            self.definition.pickup_candidates,
            self.definition.goal_index,
            random.Random(self.seed),
            strict=self.settings.strict_validation,
        )
        self.player = PlayerController(self.maze)
        self.player.subscribe(self._events.append)
        self._events.clear()

    # ------------------------------------------------------------------
    # Public accessors
    # ------------------------------------------------------------------
    def get_state_payload(self) -> dict:
        """State payload for HUD/UI."""
        state = self.player.state
        row, column = state.current_position
        return {
            "seed": self.seed,
            "current_position": {"row": row, "column": column},
            "goal_reached": state.goal_reached,
            "questions_remaining": state.remaining(self.maze, ObjectKind.QUESTION),
            "triggered": [kind.value for kind in state.triggered],
        }

    def get_maze_payload(self) -> dict:
        """Serialized maze for the frontend renderer."""
        cells = self.maze.describe(self.player.state.active_objects)
        return {
            "rows": self.maze.rows,
            "columns": self.maze.columns,
            "cells": [[cell.model_dump(mode="json") for cell in row] for row in cells],
            "diagnostics": [problem.model_dump() for problem in self.maze.diagnostics],
        }

    def move_player(self, direction: Direction | str) -> dict:
        """Attempt to move player; return outcome and any object event."""
        with self._lock:
            outcome = self.player.move(direction)
            event = self._events.pop(0) if self._events else None
            return {
                "valid": not outcome.blocked,
                "reason": "blocked" if outcome.blocked else None,
                "position": {"row": outcome.row, "column": outcome.column},
                "event": event,
                "goal_reached": self.player.state.goal_reached,
            }

    def restart_game(self, seed: Optional[int] = None) -> Tuple[dict, dict]:
        """Re-decode the maze; objects and position reset."""
        with self._lock:
            self._start(seed)
            logger.info("Game restarted (seed=%d)", self.seed)
            return self.get_state_payload(), self.get_maze_payload()


def build_controller(
    *,
    settings: Settings,
    definition: Optional[MazeDefinition] = None,
) -> GameController:
    """Load the configured maze and build a controller around it."""
    if definition is None:
        definition = get_definition(settings.maze_name, settings.maze_path)
    return GameController(settings=settings, definition=definition, seed=settings.maze_seed)
