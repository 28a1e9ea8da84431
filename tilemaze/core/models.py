"""Data models (Pydantic) for maze definitions, cells and move outcomes."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .rules import ObjectKind


class MazeDefinition(BaseModel):
    """One named maze as stored in the definitions file."""

    model_config = ConfigDict(populate_by_name=True)

    collision: list[list[int]] = Field(..., alias="mazeData", description="Per-cell wall bitmasks")
    goal_index: int = Field(..., alias="flagLocation", description="Linear index of the flag cell")
    pickup_candidates: list[int] = Field(
        default_factory=list,
        alias="questionLocations",
        description="Linear indices that may hold a question box",
    )

    @field_validator("collision")
    @classmethod
    def _rectangular(cls, value: list[list[int]]) -> list[list[int]]:
        if not value or not value[0]:
            raise ValueError("collision matrix is empty")
        width = len(value[0])
        for r, row in enumerate(value):
            if len(row) != width:
                raise ValueError(f"collision matrix row {r} has {len(row)} cells, expected {width}")
        return value


class Diagnostic(BaseModel):
    """Data-quality finding for a single cell."""

    row: int
    column: int
    message: str

    def __str__(self) -> str:
        return f"Maze square ({self.row}, {self.column}) {self.message}"


class CellDescriptor(BaseModel):
    """Drawable view of one cell: static layout plus live object state."""

    row: int
    column: int
    walls: list[str] = Field(default_factory=list, description="Wall style tags")
    has_object: bool = False
    object_kind: ObjectKind = ObjectKind.NONE
    object_active: bool = False
    object_class: str = Field(default="", description="Display class for the object")


class MoveOutcome(BaseModel):
    """Result of a single move request."""

    status: Literal["blocked", "moved"]
    row: int
    column: int
    triggered: Optional[ObjectKind] = Field(default=None, description="Object consumed on arrival")

    @property
    def blocked(self) -> bool:
        return self.status == "blocked"

    @classmethod
    def blocked_at(cls, row: int, column: int) -> "MoveOutcome":
        return cls(status="blocked", row=row, column=column)

    @classmethod
    def moved_to(cls, row: int, column: int, triggered: Optional[ObjectKind] = None) -> "MoveOutcome":
        return cls(status="moved", row=row, column=column, triggered=triggered)
