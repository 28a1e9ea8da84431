"""迷宫解码

Turns a raw collision matrix into a validated, annotated grid of cells and
places the flag and question boxes.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from .errors import ConfigurationError
from .models import CellDescriptor, Diagnostic
from .rules import (
    MAX_COLLISION_VALUE,
    MAX_PICKUPS,
    MIN_PICKUPS,
    Edge,
    ObjectKind,
    has_edge,
    object_style_class,
    wall_style_tags,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cell:
    """迷宫格子 (static layout, never mutated after decoding)"""
    row: int
    column: int
    collision: int
    walls: tuple[str, ...] = ()
    object_kind: ObjectKind = ObjectKind.NONE

    @property
    def has_object(self) -> bool:
        return self.object_kind is not ObjectKind.NONE

    def describe(self, active: bool) -> CellDescriptor:
        """Combine the layout with the live object-active bit"""
        active = active and self.has_object
        return CellDescriptor(
            row=self.row,
            column=self.column,
            walls=list(self.walls),
            has_object=self.has_object,
            object_kind=self.object_kind,
            object_active=active,
            object_class=object_style_class(self.object_kind, active),
        )


@dataclass
class Maze:
    """Decoded maze"""
    rows: int
    columns: int
    collision: tuple[tuple[int, ...], ...]
    grid: list[list[Cell]] = field(default_factory=list)
    goal_index: int = 0
    pickup_indices: tuple[int, ...] = ()
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def in_bounds(self, row: int, column: int) -> bool:
        return 0 <= row < self.rows and 0 <= column < self.columns

    def cell_at(self, row: int, column: int) -> Optional[Cell]:
        """Layout cell at a position, None when off the grid"""
        if not self.in_bounds(row, column):
            return None
        return self.grid[row][column]

    def collision_at(self, row: int, column: int) -> int:
        return self.collision[row][column]

    def object_cells(self) -> list[Cell]:
        return [cell for row in self.grid for cell in row if cell.has_object]

    def describe(self, active: Iterable[tuple[int, int]] = ()) -> list[list[CellDescriptor]]:
        """Render contract: one descriptor per cell

        Args:
            active: positions whose object is still active

        Returns:
            rows of cell descriptors
        """
        active = set(active)
        return [
            [cell.describe((cell.row, cell.column) in active) for cell in row]
            for row in self.grid
        ]


def _check_shape(matrix: Sequence[Sequence[int]]) -> tuple[int, int]:
    if not matrix or not matrix[0]:
        raise ConfigurationError("Collision matrix must not be empty")
    columns = len(matrix[0])
    for r, row in enumerate(matrix):
        if len(row) != columns:
            raise ConfigurationError(
                f"Collision matrix is not rectangular: row {r} has {len(row)} cells, expected {columns}"
            )
        for c, value in enumerate(row):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"Collision value at ({r}, {c}) is not an integer: {value!r}")
    return len(matrix), columns


def _check_index(index: int, size: int, what: str) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < size:
        raise ConfigurationError(f"{what} {index!r} is outside the maze (0..{size - 1})")


def validate_collision(matrix: Sequence[Sequence[int]]) -> list[Diagnostic]:
    """检查碰撞矩阵的边界是否一致

    Every interior edge must agree from both sides and every border edge must
    be a wall. Findings are returned, not raised.

    Args:
        matrix: rectangular collision matrix

    Returns:
        one Diagnostic per violation, in row-major order
    """
    problems: list[Diagnostic] = []
    last_row = len(matrix) - 1

    def complain(r: int, c: int, message: str) -> None:
        problems.append(Diagnostic(row=r, column=c, message=message))

    for r, row in enumerate(matrix):
        last_column = len(row) - 1
        for c, value in enumerate(row):
            if value < 0 or value > MAX_COLLISION_VALUE:
                complain(r, c, "has an invalid collision value")

            # Top/bottom borders
            if r == 0:
                if not has_edge(value, Edge.TOP):
                    complain(r, c, "is on the top edge but has no wall on its top")
            else:
                if has_edge(value, Edge.TOP) != has_edge(matrix[r - 1][c], Edge.BOTTOM):
                    complain(r, c, "does not match borders with the cell above it")
            if r == last_row and not has_edge(value, Edge.BOTTOM):
                complain(r, c, "is on the bottom edge but has no wall on its bottom")

            # Left/right borders
            if c == 0:
                if not has_edge(value, Edge.LEFT):
                    complain(r, c, "is on the left edge but has no wall on its left")
            else:
                if has_edge(value, Edge.LEFT) != has_edge(row[c - 1], Edge.RIGHT):
                    complain(r, c, "does not match borders with the cell left of it")
            if c == last_column and not has_edge(value, Edge.RIGHT):
                complain(r, c, "is on the right edge but has no wall on its right")

    return problems


def choose_pickups(candidates: Sequence[int], rng: random.Random) -> list[int]:
    """随机挑选问题格子

    A target count is drawn from [MIN_PICKUPS, MAX_PICKUPS]. Pools larger than
    MAX_PICKUPS lose random entries until they hit the target; smaller pools
    are kept whole, even below MIN_PICKUPS.

    Args:
        candidates: candidate linear indices (not mutated)
        rng: random source

    Returns:
        surviving indices in their original order
    """
    pool = list(dict.fromkeys(candidates))
    target = rng.randint(MIN_PICKUPS, MAX_PICKUPS)
    if len(pool) <= MAX_PICKUPS:
        return pool
    while len(pool) > target:
        pool.pop(rng.randrange(len(pool)))
    return pool


def decode(
    matrix: Sequence[Sequence[int]],
    candidate_pickups: Sequence[int],
    goal_index: int,
    rng: Optional[random.Random] = None,
    *,
    strict: bool = False,
) -> Maze:
    """解码碰撞矩阵

    Args:
        matrix: rectangular collision matrix (row-major)
        candidate_pickups: linear indices that may hold a question box
        goal_index: linear index of the flag cell
        rng: random source for placement (a fresh unseeded one if omitted)
        strict: raise instead of only reporting border problems

    Returns:
        the decoded maze

    Raises:
        ConfigurationError: malformed matrix, indices outside the maze, or
            any diagnostic while strict
    """
    rows, columns = _check_shape(matrix)
    size = rows * columns
    _check_index(goal_index, size, "Goal index")
    for index in candidate_pickups:
        _check_index(index, size, "Pickup index")

    diagnostics = validate_collision(matrix)
    for problem in diagnostics:
        logger.warning("%s", problem)
    if strict and diagnostics:
        details = "; ".join(str(problem) for problem in diagnostics)
        raise ConfigurationError(f"Collision matrix has {len(diagnostics)} problem(s): {details}")

    if rng is None:
        rng = random.Random()
    pickups = choose_pickups(candidate_pickups, rng)
    pickup_set = set(pickups)

    grid: list[list[Cell]] = []
    index = 0
    for r, row in enumerate(matrix):
        cells = []
        for c, value in enumerate(row):
            kind = ObjectKind.NONE
            if index == goal_index:
                kind = ObjectKind.FLAG
            elif index in pickup_set:
                kind = ObjectKind.QUESTION
            cells.append(Cell(row=r, column=c, collision=value, walls=wall_style_tags(value), object_kind=kind))
            index += 1
        grid.append(cells)

    logger.debug(
        "Decoded %dx%d maze: flag at %d, %d question box(es), %d diagnostic(s)",
        rows, columns, goal_index, len(pickup_set - {goal_index}), len(diagnostics),
    )
    return Maze(
        rows=rows,
        columns=columns,
        collision=tuple(tuple(row) for row in matrix),
        grid=grid,
        goal_index=goal_index,
        pickup_indices=tuple(pickups),
        diagnostics=diagnostics,
    )
