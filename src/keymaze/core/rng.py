from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RNG:
    """
    Deterministic-friendly RNG wrapper around random.Random.

    Maze carving and key/door placement draw from an instance of this class
    instead of the global generator, so a fixed seed reproduces a layout
    exactly.
    """

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)
        if self.seed is not None:
            logger.debug("Initialized RNG with deterministic seed=%s", self.seed)

    def randrange(self, stop: int) -> int:
        """Return a random integer N such that 0 <= N < stop."""
        return self._rng.randrange(stop)

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self._rng.randrange(len(seq))]


__all__ = ["RNG"]
