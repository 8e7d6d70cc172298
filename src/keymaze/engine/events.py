from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from ..maze.grid import Position


class GameEvent(Enum):
    """Outcomes of a move reported back to the host."""

    KEY_COLLECTED = auto()
    DOOR_UNLOCKED = auto()
    DOOR_BLOCKED = auto()
    WIN_BLOCKED = auto()
    GAME_WON = auto()

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    GameEvent.KEY_COLLECTED: "You found a key!",
    GameEvent.DOOR_UNLOCKED: "You used a key to open the door!",
    GameEvent.DOOR_BLOCKED: "You need a key to open this door!",
    GameEvent.WIN_BLOCKED: "You need to open all doors to win!",
    GameEvent.GAME_WON: "Congratulations! You reached the exit.",
}


@dataclass
class MoveResult:
    """Result of a single move request.

    Attributes:
        new_position: Player position after the move (and any rollback).
        events: Events raised by the move, in the order they happened.
        moved: True when the move was legal and the player stepped.
        rolled_back: True when the player stepped and was sent back.
        elapsed: Seconds since the session started, set only with GAME_WON.
    """

    new_position: Position
    events: List[GameEvent] = field(default_factory=list)
    moved: bool = False
    rolled_back: bool = False
    elapsed: Optional[float] = None

    @property
    def won(self) -> bool:
        return GameEvent.GAME_WON in self.events


__all__ = ["GameEvent", "MoveResult"]
