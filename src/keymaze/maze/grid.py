from __future__ import annotations

import logging
from enum import IntEnum
from typing import Dict, Generator, List, NamedTuple, Sequence, Tuple, Union

from ..exceptions import InvalidDimensions, OutOfRange

logger = logging.getLogger(__name__)

FULLY_OPEN = 15


class Position(NamedTuple):
    x: int
    y: int

    def step(self, direction: "Direction") -> "Position":
        dx, dy = direction.offset
        return Position(self.x + dx, self.y + dy)


class Direction(IntEnum):
    """Cardinal directions, valued by the passage bit they open.

    - WEST: 1
    - EAST: 2
    - NORTH: 4
    - SOUTH: 8
    """

    WEST = 1
    EAST = 2
    NORTH = 4
    SOUTH = 8

    @property
    def offset(self) -> Tuple[int, int]:
        return _OFFSETS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @classmethod
    def between(cls, a: Tuple[int, int], b: Tuple[int, int]) -> "Direction":
        """Return the direction leading from ``a`` to the adjacent cell ``b``."""
        delta = (b[0] - a[0], b[1] - a[1])
        for d, off in _OFFSETS.items():
            if off == delta:
                return d
        raise ValueError(f"Cells {a} and {b} are not 4-adjacent")

    @classmethod
    def parse(cls, value: Union["Direction", int, str]) -> "Direction":
        """Accept a Direction, its bit value, or a name/alias like 'up' or 'w'."""
        if isinstance(value, Direction):
            return value
        if isinstance(value, int):
            return cls(value)
        key = str(value).strip().lower()
        if key not in _ALIASES:
            raise ValueError(f"Unknown direction: {value!r}")
        return _ALIASES[key]


_OFFSETS: Dict[Direction, Tuple[int, int]] = {
    Direction.WEST: (-1, 0),
    Direction.EAST: (1, 0),
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
}

_OPPOSITES: Dict[Direction, Direction] = {
    Direction.WEST: Direction.EAST,
    Direction.EAST: Direction.WEST,
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
}

_ALIASES: Dict[str, Direction] = {
    "west": Direction.WEST, "left": Direction.WEST, "a": Direction.WEST,
    "east": Direction.EAST, "right": Direction.EAST, "d": Direction.EAST,
    "north": Direction.NORTH, "up": Direction.NORTH, "w": Direction.NORTH,
    "south": Direction.SOUTH, "down": Direction.SOUTH, "s": Direction.SOUTH,
}

# Fixed order used when listing neighbours; seeded generation depends on it.
NEIGHBOR_ORDER: Tuple[Direction, ...] = (
    Direction.EAST,
    Direction.WEST,
    Direction.SOUTH,
    Direction.NORTH,
)


class MazeGrid:
    """A bounds-checked grid of 4-bit passage masks.

    Cells are stored as ``masks[y][x]``. A set bit means the wall on that
    side of the cell is open; carving a passage sets the reciprocal bits on
    both cells so adjacency stays consistent.
    """

    __slots__ = ("_w", "_h", "_masks")

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise InvalidDimensions(f"Maze dimensions must be positive, got {width}x{height}")
        self._w = int(width)
        self._h = int(height)
        self._masks: List[List[int]] = [[0 for _ in range(self._w)] for _ in range(self._h)]
        logger.debug("Initialized MazeGrid %dx%d", self._w, self._h)

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    @property
    def entrance(self) -> Position:
        return Position(0, 0)

    @property
    def exit(self) -> Position:
        return Position(self._w - 1, self._h - 1)

    def cells(self) -> Generator[Position, None, None]:
        for y in range(self._h):
            for x in range(self._w):
                yield Position(x, y)

    def in_bounds(self, pos: Tuple[int, int]) -> bool:
        """Return True if ``pos`` lies inside the grid. Never raises."""
        x, y = pos
        return 0 <= x < self._w and 0 <= y < self._h

    def _check(self, pos: Tuple[int, int]) -> None:
        if not self.in_bounds(pos):
            raise OutOfRange(f"Coordinates out of bounds: {tuple(pos)} for grid {self._w}x{self._h}")

    def get_mask(self, pos: Tuple[int, int]) -> int:
        self._check(pos)
        x, y = pos
        return self._masks[y][x]

    def set_mask(self, pos: Tuple[int, int], mask: int) -> None:
        self._check(pos)
        if not 0 <= mask <= FULLY_OPEN:
            raise ValueError(f"Passage mask must be within 0..15, got {mask}")
        x, y = pos
        self._masks[y][x] = mask

    def open_mask(self, pos: Tuple[int, int], direction: Direction) -> None:
        """Set a single passage bit on one cell."""
        self.set_mask(pos, self.get_mask(pos) | direction)

    def has_passage(self, pos: Tuple[int, int], direction: Direction) -> bool:
        return bool(self.get_mask(pos) & direction)

    def carve(self, pos: Tuple[int, int], direction: Direction) -> Position:
        """Open the wall between ``pos`` and its neighbour in ``direction``.

        Returns the neighbour's position.
        """
        target = Position(*pos).step(direction)
        self._check(target)
        self.open_mask(pos, direction)
        self.open_mask(target, direction.opposite)
        return target

    def neighbors(self, pos: Tuple[int, int]) -> Generator[Tuple[Direction, Position], None, None]:
        """Yield (direction, position) pairs for in-bounds 4-neighbours."""
        p = Position(*pos)
        for d in NEIGHBOR_ORDER:
            n = p.step(d)
            if self.in_bounds(n):
                yield d, n

    @classmethod
    def from_masks(cls, rows: Sequence[Sequence[int]]) -> "MazeGrid":
        """Build a grid from rows of masks (``rows[y][x]``)."""
        if not rows or not rows[0]:
            raise InvalidDimensions("rows must not be empty")
        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise InvalidDimensions(f"All rows must have equal width; row 0 has {width}, row {i} has {len(row)}")
        grid = cls(width, len(rows))
        for y, row in enumerate(rows):
            for x, mask in enumerate(row):
                grid.set_mask((x, y), int(mask))
        return grid

    def to_masks(self) -> List[List[int]]:
        return [list(row) for row in self._masks]

    def copy(self) -> "MazeGrid":
        return MazeGrid.from_masks(self._masks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MazeGrid):
            return NotImplemented
        return self._masks == other._masks

    def __repr__(self) -> str:
        return f"MazeGrid(width={self._w}, height={self._h})"


__all__ = ["Direction", "Position", "MazeGrid", "FULLY_OPEN", "NEIGHBOR_ORDER"]
