from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Set

from ..core.rng import RNG
from ..exceptions import InvalidDimensions
from .grid import FULLY_OPEN, MazeGrid, Position

logger = logging.getLogger(__name__)


@dataclass
class Placement:
    """Key and locked-door positions annotating a maze.

    Sets rather than single values so the "remove on pickup/unlock" semantics
    stay the same if more than one key or door is ever placed.
    """

    keys: Set[Position] = field(default_factory=set)
    doors: Set[Position] = field(default_factory=set)

    def clear(self) -> None:
        self.keys.clear()
        self.doors.clear()


def random_position(grid: MazeGrid, rng: RNG, exclude: Iterable[Position]) -> Position:
    """Rejection-sample a cell that is not in ``exclude``."""
    excluded = {Position(*p) for p in exclude}
    if len(excluded) >= grid.width * grid.height:
        raise InvalidDimensions(
            f"No free cell left in {grid.width}x{grid.height} grid after excluding {len(excluded)}"
        )
    while True:
        pos = Position(rng.randrange(grid.width), rng.randrange(grid.height))
        if pos not in excluded:
            return pos


def place_key_and_door(grid: MazeGrid, rng: RNG, placement: Placement) -> Placement:
    """Place one key and one locked door, then force the exit cell fully open.

    Entrance and exit never hold a key or door, and the door never shares the
    key's cell. ``placement`` is cleared first and filled in place.
    """
    if grid.width * grid.height < 4:
        raise InvalidDimensions(
            f"A {grid.width}x{grid.height} grid cannot hold entrance, exit, key and door on separate cells"
        )
    placement.clear()
    entrance, exit_ = grid.entrance, grid.exit

    key = random_position(grid, rng, (entrance, exit_))
    placement.keys.add(key)

    door = random_position(grid, rng, (entrance, exit_, key))
    placement.doors.add(door)

    grid.set_mask(exit_, FULLY_OPEN)
    logger.debug("Placed key at %s and locked door at %s", key, door)
    return placement


__all__ = ["Placement", "random_position", "place_key_and_door"]
