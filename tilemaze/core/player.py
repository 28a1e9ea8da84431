"""Player movement

Moves the player token one cell at a time, refusing moves through walls and
announcing objects the player lands on.
"""

import logging
from typing import Callable, Optional, Union

from .maze import Maze
from .models import MoveOutcome
from .rules import DIRECTION_DELTA, DIRECTION_EDGE, Direction, has_edge
from .state import GameState

logger = logging.getLogger(__name__)

ObjectListener = Callable[[str], None]


class PlayerController:
    """Single-state machine: positioned at (row, column) within the maze."""

    def __init__(self, maze: Maze, state: Optional[GameState] = None):
        self.maze = maze
        self.state = state if state is not None else GameState(maze)
        self._listeners: list[ObjectListener] = []

    @property
    def position(self) -> tuple[int, int]:
        return self.state.current_position

    def subscribe(self, listener: ObjectListener) -> None:
        """Register a callback receiving the name of each triggered object."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: ObjectListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def move(self, direction: Union[Direction, str]) -> MoveOutcome:
        """Attempt a one-cell move.

        Args:
            direction: Direction member or its name

        Returns:
            blocked outcome (no state change) or the new position with the
            object consumed there, if any

        Raises:
            ConfigurationError: unrecognized direction
        """
        direction = Direction.parse(direction)
        row, column = self.state.current_position

        # Walls come from the raw matrix, not from the decoded styles
        if has_edge(self.maze.collision_at(row, column), DIRECTION_EDGE[direction]):
            return MoveOutcome.blocked_at(row, column)

        dr, dc = DIRECTION_DELTA[direction]
        target_row, target_column = row + dr, column + dc
        cell = self.maze.cell_at(target_row, target_column)
        if cell is None:
            # Only reachable with a maze that lacks its border walls
            logger.warning(
                "Move %s from (%d, %d) leaves the maze; treating as blocked",
                direction.value, row, column,
            )
            return MoveOutcome.blocked_at(row, column)

        self.state.current_position = (target_row, target_column)

        if cell.has_object and self.state.is_active(target_row, target_column):
            # Objects fire once even if a listener raises
            try:
                self._notify(cell.object_kind.value)
            finally:
                self.state.consume(target_row, target_column, cell.object_kind)
            return MoveOutcome.moved_to(target_row, target_column, cell.object_kind)

        return MoveOutcome.moved_to(target_row, target_column)

    def _notify(self, name: str) -> None:
        logger.info("Player reached %s", name)
        for listener in list(self._listeners):
            listener(name)
