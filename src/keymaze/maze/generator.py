from __future__ import annotations

import logging
from typing import List, Optional

from ..core.rng import RNG
from ..exceptions import InvalidDimensions
from .grid import MazeGrid, Position

logger = logging.getLogger(__name__)


class MazeGenerator:
    """Randomized depth-first (recursive backtracker) maze carver.

    Carving starts at the entrance and walks an explicit stack: at each step
    an unvisited neighbour of the top cell is picked with the injected RNG and
    the wall between them is opened; a cell with no unvisited neighbours is
    popped. Every cell gets visited exactly once, so the result is a perfect
    maze with ``width * height - 1`` passages.
    """

    def __init__(self, rng: Optional[RNG] = None) -> None:
        self.rng = rng or RNG()

    def generate(self, width: int, height: int) -> MazeGrid:
        if width < 1 or height < 1:
            raise InvalidDimensions(f"Maze dimensions must be positive, got {width}x{height}")
        grid = MazeGrid(width, height)
        start = grid.entrance
        visited = [[False for _ in range(width)] for _ in range(height)]
        visited[start.y][start.x] = True
        stack: List[Position] = [start]
        carved = 0

        while stack:
            current = stack[-1]
            candidates = [(d, n) for d, n in grid.neighbors(current) if not visited[n.y][n.x]]
            if not candidates:
                stack.pop()
                continue
            direction, nxt = self.rng.choice(candidates)
            grid.carve(current, direction)
            visited[nxt.y][nxt.x] = True
            stack.append(nxt)
            carved += 1

        logger.debug("Carved %dx%d maze with %d passages", width, height, carved)
        return grid


def generate_maze(width: int, height: int, rng: Optional[RNG] = None) -> MazeGrid:
    """Convenience wrapper around MazeGenerator."""
    return MazeGenerator(rng).generate(width, height)


__all__ = ["MazeGenerator", "generate_maze"]
