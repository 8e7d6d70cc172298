from keymaze.engine import move
from keymaze.render import cell_glyph, render_grid
from keymaze.maze.grid import Direction, Position


def test_small_grid_exact_layout(make_session):
    # (0,0) -> (1,0) -> (1,1); exit (1,1) forced to 15
    session = make_session(keys=[(1, 0)], doors=[(0, 1)], path=[(0, 0), (1, 0), (1, 1)], size=(2, 2))
    assert render_grid(session) == "P  K  \n      \nD  15 \n"


def test_masks_shown_for_plain_cells(make_session):
    session = make_session(path=[(0, 0), (1, 0), (1, 1)], size=(2, 2))
    session.player.position = Position(1, 1)
    assert render_grid(session) == "2  9  \n      \n0  P  \n"


def test_player_drawn_over_key(make_session):
    session = make_session(keys=[(0, 0)])
    assert cell_glyph(session, Position(0, 0)) == "P"


def test_custom_cell_width(make_session):
    session = make_session(path=[(0, 0), (1, 0), (1, 1)], size=(2, 2))
    assert render_grid(session, cell_width=4) == "P   9   \n        \n0   15  \n"


def test_render_tracks_moves(make_session):
    session = make_session(keys=[(1, 1)], doors=[(2, 2)])
    first = render_grid(session)
    assert first == render_grid(session)

    move(session, Direction.EAST)
    second = render_grid(session)
    assert second != first
    lines = second.split("\n")
    # 5 rows plus 4 spacer lines, then the empty string after the final newline
    assert len(lines) == 10
    assert lines[0].startswith("2  P  ")
    assert all(len(line) == 15 for line in lines[:-1])
