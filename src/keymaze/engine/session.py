from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Union

from ..config import Settings
from ..core.rng import RNG
from ..exceptions import InvalidDimensions
from ..maze.factory import build_layout
from ..maze.grid import Direction
from .events import MoveResult
from .movement import MovementEngine
from .state import PlayerState, SessionState

logger = logging.getLogger(__name__)

_ENGINE = MovementEngine()


def new_session(
    width: int,
    height: int,
    *,
    rng: Optional[RNG] = None,
    settings: Optional[Settings] = None,
    clock: Optional[Callable[[], float]] = None,
) -> SessionState:
    """Build a solvable maze and place the player on the entrance.

    Raises InvalidDimensions if width or height is outside the supported
    range configured in ``settings``.
    """
    settings = settings or Settings()
    if not (settings.supports(width) and settings.supports(height)):
        raise InvalidDimensions(
            f"Maze size {width}x{height} outside supported range {settings.min_size}..{settings.max_size}"
        )
    rng = rng or RNG(settings.seed)
    clock = clock or time.monotonic

    layout = build_layout(
        width,
        height,
        rng=rng,
        max_attempts=settings.max_generation_attempts,
        require_winnable=settings.require_winnable,
    )
    start = layout.grid.entrance
    session = SessionState(
        grid=layout.grid,
        keys=layout.keys,
        doors=layout.doors,
        player=PlayerState(position=start, previous=start),
        settings=settings,
        rng=rng,
        clock=clock,
        started_at=clock(),
    )
    logger.info(
        "New %dx%d session: key=%s door=%s (%d attempt(s))",
        width,
        height,
        sorted(layout.keys),
        sorted(layout.doors),
        layout.attempts,
    )
    return session


def regenerate(session: SessionState) -> SessionState:
    """Start over at the session's size, reusing its RNG, settings and clock."""
    return new_session(
        session.width,
        session.height,
        rng=session.rng,
        settings=session.settings,
        clock=session.clock,
    )


def move(session: SessionState, direction: Union[Direction, int, str]) -> MoveResult:
    """Move the player one cell; see MovementEngine for the rules."""
    return _ENGINE.try_move(session, Direction.parse(direction))


__all__ = ["new_session", "regenerate", "move"]
