from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Set

from ..config import Settings
from ..core.rng import RNG
from ..maze.grid import MazeGrid, Position


@dataclass
class PlayerState:
    position: Position
    previous: Position
    has_key: bool = False

    def step_to(self, target: Position) -> None:
        self.previous = self.position
        self.position = target

    def rollback(self) -> None:
        self.position = self.previous


@dataclass
class SessionState:
    """Everything one game owns: maze, key/door sets, player and clock.

    Only the movement engine mutates a session after it is created.
    """

    grid: MazeGrid
    keys: Set[Position]
    doors: Set[Position]
    player: PlayerState
    settings: Settings = field(default_factory=Settings)
    rng: RNG = field(default_factory=RNG)
    clock: Callable[[], float] = time.monotonic
    started_at: float = 0.0
    won: bool = False
    elapsed: Optional[float] = None

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def entrance(self) -> Position:
        return self.grid.entrance

    @property
    def exit(self) -> Position:
        return self.grid.exit

    @property
    def is_terminal(self) -> bool:
        return self.won


__all__ = ["PlayerState", "SessionState"]
