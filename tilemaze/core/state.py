"""Live game state and settings."""

from typing import Optional

from .errors import ConfigurationError
from .maze import Maze
from .rules import ObjectKind


# Names understood by both logging and uvicorn
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class GameState:
    """Mutable overlay on top of a decoded maze.

    Holds the player position and the set of cells whose object has not been
    consumed yet. The maze layout itself is never touched.
    """

    def __init__(self, maze: Maze, start: tuple[int, int] = (0, 0)):
        if not maze.in_bounds(*start):
            raise ConfigurationError(f"Start position {start} is outside the maze")
        self.current_position: tuple[int, int] = start
        self.active_objects: set[tuple[int, int]] = {
            (cell.row, cell.column) for cell in maze.object_cells()
        }
        self.triggered: list[ObjectKind] = []
        self.goal_reached = False

    def is_active(self, row: int, column: int) -> bool:
        return (row, column) in self.active_objects

    def consume(self, row: int, column: int, kind: ObjectKind) -> bool:
        """Deactivate the object at a cell; False if it was already gone."""
        node = (row, column)
        if node not in self.active_objects:
            return False
        self.active_objects.discard(node)
        self.triggered.append(kind)
        if kind is ObjectKind.FLAG:
            self.goal_reached = True
        return True

    def remaining(self, maze: Maze, kind: ObjectKind) -> int:
        return sum(
            1 for cell in maze.object_cells()
            if cell.object_kind is kind and self.is_active(cell.row, cell.column)
        )


class Settings:
    """Game settings."""

    def __init__(self):
        # Maze
        self.maze_path: Optional[str] = None
        self.maze_name = "maze-1"
        self.maze_seed: Optional[int] = None
        self.strict_validation = False

        # Logging
        self.log_level = "INFO"

        # Web server
        self.server_host = "127.0.0.1"
        self.server_port = 8000
        self.auto_open_browser = True
        self.static_root = "./web"

    def load_from_dict(self, config: dict) -> None:
        if "maze" in config:
            m = config["maze"]
            self.maze_path = m.get("path", self.maze_path)
            self.maze_name = m.get("name", self.maze_name)
            self.maze_seed = m.get("seed", self.maze_seed)
            self.strict_validation = m.get("strict", self.strict_validation)

        if "logging" in config:
            level = str(config["logging"].get("level", self.log_level)).upper()
            if level not in LOG_LEVELS:
                raise ConfigurationError(
                    f"Unknown logging level '{level}' (expected one of {', '.join(LOG_LEVELS)})"
                )
            self.log_level = level

        if "server" in config:
            srv = config["server"]
            self.server_host = srv.get("host", self.server_host)
            self.server_port = srv.get("port", self.server_port)
            self.auto_open_browser = srv.get("auto_open_browser", self.auto_open_browser)
            self.static_root = srv.get("static_root", self.static_root)
