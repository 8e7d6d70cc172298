from .factory import MazeLayout, build_layout
from .generator import MazeGenerator, generate_maze
from .grid import FULLY_OPEN, Direction, MazeGrid, Position
from .pathfinding import count_passages, is_solvable, is_winnable, reachable_from
from .placement import Placement, place_key_and_door

__all__ = [
    "Direction",
    "Position",
    "MazeGrid",
    "FULLY_OPEN",
    "MazeGenerator",
    "generate_maze",
    "is_solvable",
    "is_winnable",
    "reachable_from",
    "count_passages",
    "Placement",
    "place_key_and_door",
    "MazeLayout",
    "build_layout",
]
