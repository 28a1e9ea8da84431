"""Maze encoding rules

Edge flags of the collision matrix, movement directions and the table that
joins them, plus style tags and object placement constants.
"""

from enum import Enum, IntFlag
from typing import Union

from .errors import ConfigurationError


class Edge(IntFlag):
    """Wall flags of a single cell in the collision matrix"""

    TOP = 1
    RIGHT = 2
    BOTTOM = 4
    LEFT = 8


ALL_EDGES = Edge.TOP | Edge.RIGHT | Edge.BOTTOM | Edge.LEFT
MAX_COLLISION_VALUE = int(ALL_EDGES)


class Direction(str, Enum):
    """Movement intent of the player token"""

    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"

    @classmethod
    def parse(cls, value: Union["Direction", str]) -> "Direction":
        """Accept a Direction member or its case-insensitive name.

        Raises:
            ConfigurationError: for anything else (ints included)
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ConfigurationError(f"Nonsensical move direction given: {value!r}")


# A move is blocked when the current cell has the mapped edge flag set
DIRECTION_EDGE = {
    Direction.UP: Edge.TOP,
    Direction.RIGHT: Edge.RIGHT,
    Direction.DOWN: Edge.BOTTOM,
    Direction.LEFT: Edge.LEFT,
}

# (row delta, column delta)
DIRECTION_DELTA = {
    Direction.UP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
}

# Order matches the tag order the front end expects
EDGE_STYLE_TAGS = (
    (Edge.TOP, "top"),
    (Edge.RIGHT, "right"),
    (Edge.BOTTOM, "bottom"),
    (Edge.LEFT, "left"),
)


class ObjectKind(str, Enum):
    """Object sitting on a cell"""

    NONE = "None"
    FLAG = "Flag"
    QUESTION = "Question"


# Display classes per object kind while the object is still active
OBJECT_STYLE_CLASS = {
    ObjectKind.NONE: "",
    ObjectKind.FLAG: "",
    ObjectKind.QUESTION: "square-image",
}
INACTIVE_STYLE_CLASS = "square-image square-image-inactive"

# Pickup count bounds (inclusive)
MIN_PICKUPS = 5
MAX_PICKUPS = 10


def has_edge(mask: int, edge: Edge) -> bool:
    """Whether the wall flag is set on a collision value"""
    return bool(mask & edge)


def wall_style_tags(mask: int) -> tuple[str, ...]:
    """Style tags for every wall flag present in a collision value

    Args:
        mask: collision value of a cell

    Returns:
        tags in fixed top/right/bottom/left order
    """
    return tuple(tag for edge, tag in EDGE_STYLE_TAGS if has_edge(mask, edge))


def object_style_class(kind: ObjectKind, active: bool) -> str:
    if kind is ObjectKind.NONE:
        return ""
    if not active:
        return INACTIVE_STYLE_CLASS
    return OBJECT_STYLE_CLASS[kind]
