from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Optional, Set

from ..core.rng import RNG
from ..exceptions import GenerationError
from .generator import MazeGenerator
from .grid import MazeGrid, Position
from .pathfinding import is_solvable, is_winnable
from .placement import Placement, place_key_and_door

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1000


@dataclass
class MazeLayout:
    grid: MazeGrid
    keys: Set[Position] = field(default_factory=set)
    doors: Set[Position] = field(default_factory=set)
    attempts: int = 1

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def signature(self) -> str:
        """Deterministic signature of layout content (masks + key/door coords)."""
        payload = {
            "w": self.width,
            "h": self.height,
            "masks": self.grid.to_masks(),
            "keys": sorted(self.keys),
            "doors": sorted(self.doors),
        }
        raw = str(payload).encode("utf-8")
        return hashlib.blake2b(raw, digest_size=16).hexdigest()


def build_layout(
    width: int,
    height: int,
    rng: Optional[RNG] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    require_winnable: bool = False,
) -> MazeLayout:
    """Generate, place key/door and verify until a solvable layout comes out.

    Each rejected attempt is discarded and rebuilt from scratch. Raises
    GenerationError if ``max_attempts`` layouts in a row were rejected.
    """
    rng = rng or RNG()
    generator = MazeGenerator(rng)
    placement = Placement()

    for attempt in range(1, max_attempts + 1):
        grid = generator.generate(width, height)
        place_key_and_door(grid, rng, placement)
        accepted = is_solvable(grid, placement.doors, grid.entrance, grid.exit)
        if accepted and require_winnable:
            accepted = is_winnable(grid, placement.keys, placement.doors, grid.entrance, grid.exit)
        if accepted:
            logger.debug("Accepted %dx%d layout after %d attempt(s)", width, height, attempt)
            return MazeLayout(
                grid=grid,
                keys=set(placement.keys),
                doors=set(placement.doors),
                attempts=attempt,
            )
        logger.debug("Rejected layout attempt %d; regenerating", attempt)

    raise GenerationError(f"No acceptable {width}x{height} layout after {max_attempts} attempts")


__all__ = ["MazeLayout", "build_layout", "DEFAULT_MAX_ATTEMPTS"]
