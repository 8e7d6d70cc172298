from __future__ import annotations

from typing import List, Optional

from .engine.state import SessionState
from .maze.grid import Position


def cell_glyph(session: SessionState, pos: Position) -> str:
    """Player, then key, then door, else the cell's passage mask."""
    if pos == session.player.position:
        return "P"
    if pos in session.keys:
        return "K"
    if pos in session.doors:
        return "D"
    return str(session.grid.get_mask(pos))


def render_grid(session: SessionState, cell_width: Optional[int] = None) -> str:
    """Render the session as a fixed-width text grid.

    Every cell is left-justified to ``cell_width`` characters and each row
    ends with a newline; rows are separated by a blank spacer line.
    """
    if cell_width is None:
        cell_width = session.settings.cell_width
    lines: List[str] = []
    for y in range(session.height):
        row = "".join(cell_glyph(session, Position(x, y)).ljust(cell_width) for x in range(session.width))
        lines.append(row + "\n")
        if y < session.height - 1:
            lines.append(" " * (cell_width * session.width) + "\n")
    return "".join(lines)


__all__ = ["render_grid", "cell_glyph"]
