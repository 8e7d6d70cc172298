"""keymaze: a procedurally generated maze with a key and a locked door."""

from .engine import GameEvent, MoveResult, SessionState, move, new_session, regenerate
from .exceptions import GenerationError, InvalidDimensions, KeyMazeError, OutOfRange
from .maze import Direction, MazeGrid, Position
from .render import render_grid

__version__ = "0.1.0"

__all__ = [
    "Direction",
    "Position",
    "MazeGrid",
    "SessionState",
    "MoveResult",
    "GameEvent",
    "new_session",
    "regenerate",
    "move",
    "render_grid",
    "KeyMazeError",
    "InvalidDimensions",
    "OutOfRange",
    "GenerationError",
    "__version__",
]
