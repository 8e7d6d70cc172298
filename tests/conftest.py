import sys
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from keymaze.engine.state import PlayerState, SessionState  # noqa: E402
from keymaze.maze.grid import FULLY_OPEN, MazeGrid, Position  # noqa: E402

from maze_test_utils import SCENARIO_PATH, FakeClock, carve_path  # noqa: E402


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def make_session(clock):
    """Factory for hand-built sessions, by default a 5x5 grid with the scenario corridor carved."""

    def _make(
        keys: Iterable[Tuple[int, int]] = (),
        doors: Iterable[Tuple[int, int]] = (),
        path: Optional[Sequence[Tuple[int, int]]] = SCENARIO_PATH,
        size: Tuple[int, int] = (5, 5),
        start: Tuple[int, int] = (0, 0),
    ) -> SessionState:
        grid = MazeGrid(*size)
        if path:
            carve_path(grid, path)
        grid.set_mask(grid.exit, FULLY_OPEN)
        pos = Position(*start)
        return SessionState(
            grid=grid,
            keys={Position(*k) for k in keys},
            doors={Position(*d) for d in doors},
            player=PlayerState(position=pos, previous=pos),
            clock=clock,
            started_at=clock(),
        )

    return _make
