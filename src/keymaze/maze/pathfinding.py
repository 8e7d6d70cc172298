import logging
from collections import deque
from typing import AbstractSet, Optional, Set, Tuple

from .grid import Direction, MazeGrid, Position

logger = logging.getLogger(__name__)


def _can_step(
    grid: MazeGrid,
    pos: Position,
    nxt: Position,
    direction: Direction,
    doors: AbstractSet[Tuple[int, int]],
) -> bool:
    return grid.has_passage(pos, direction) or nxt in doors


def is_solvable(
    grid: MazeGrid,
    doors: AbstractSet[Tuple[int, int]] = frozenset(),
    start: Optional[Tuple[int, int]] = None,
    end: Optional[Tuple[int, int]] = None,
) -> bool:
    """Breadth-first search from start to end over open passages.

    A step is allowed when the current cell has the passage bit toward the
    neighbour or the neighbour is a locked door (a key could open it). The
    search area is bounded by ``[0, end.x] x [0, end.y]``, so ``end`` must be
    the true exit of the grid.
    """
    start = Position(*(start if start is not None else grid.entrance))
    end = Position(*(end if end is not None else grid.exit))

    q = deque([start])
    seen = {start}
    while q:
        pos = q.popleft()
        if pos == end:
            return True
        for d, n in grid.neighbors(pos):
            if n.x > end.x or n.y > end.y or n in seen:
                continue
            if _can_step(grid, pos, n, d, doors):
                seen.add(n)
                q.append(n)
    return False


def reachable_from(
    grid: MazeGrid,
    start: Optional[Tuple[int, int]] = None,
    doors: AbstractSet[Tuple[int, int]] = frozenset(),
) -> Set[Position]:
    """Return every cell reachable from ``start`` (4-neigh, same step rule as is_solvable)."""
    start = Position(*(start if start is not None else grid.entrance))
    q = deque([start])
    seen = {start}
    while q:
        pos = q.popleft()
        for d, n in grid.neighbors(pos):
            if n not in seen and _can_step(grid, pos, n, d, doors):
                seen.add(n)
                q.append(n)
    return seen


def count_passages(grid: MazeGrid) -> int:
    """Count undirected passages: adjacent pairs whose reciprocal bits are both set."""
    total = 0
    for pos in grid.cells():
        for d, n in grid.neighbors(pos):
            # Count each pair once, from its west/north member
            if n.x < pos.x or n.y < pos.y:
                continue
            if grid.has_passage(pos, d) and grid.has_passage(n, d.opposite):
                total += 1
    return total


def is_winnable(
    grid: MazeGrid,
    keys: AbstractSet[Tuple[int, int]],
    doors: AbstractSet[Tuple[int, int]],
    start: Optional[Tuple[int, int]] = None,
    end: Optional[Tuple[int, int]] = None,
) -> bool:
    """Stricter check: can the exit be reached with every door opened on the way?

    Searches over (position, keys held, keys left, doors left). Entering a
    locked door consumes one held key and opens it; the exit only counts once
    no locked doors remain, mirroring the movement rules.
    """
    start = Position(*(start if start is not None else grid.entrance))
    end = Position(*(end if end is not None else grid.exit))

    all_doors = frozenset(Position(*d) for d in doors)
    initial = (start, 0, frozenset(Position(*k) for k in keys), all_doors)
    q = deque([initial])
    seen = {initial}
    while q:
        pos, held, keys_left, doors_left = q.popleft()
        if pos == end and not doors_left:
            return True
        for d, n in grid.neighbors(pos):
            # An opened door cell is fully open
            opened = pos in all_doors and pos not in doors_left
            if not (opened or grid.has_passage(pos, d) or n in doors_left):
                continue
            n_held, n_keys, n_doors = held, keys_left, doors_left
            if n in n_keys:
                n_keys = n_keys - {n}
                n_held += 1
            if n in n_doors:
                if n_held == 0:
                    continue
                n_doors = n_doors - {n}
                n_held -= 1
            if n == end and n_doors:
                continue
            state = (n, n_held, n_keys, n_doors)
            if state not in seen:
                seen.add(state)
                q.append(state)
    logger.debug("No winning route from %s to %s after %d states", start, end, len(seen))
    return False
