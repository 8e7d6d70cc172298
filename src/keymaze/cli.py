from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO

from . import __version__
from .config import Settings
from .core.rng import RNG
from .engine import GameEvent, SessionState, move, new_session, regenerate
from .exceptions import KeyMazeError
from .logging_config import configure_logging
from .maze.factory import MazeLayout
from .paths import AppPaths
from .records import BestTimeStore, format_best_time
from .render import render_grid

logger = logging.getLogger(__name__)

MENU_TEXT = "Main Menu: [1] start  [2] results  [3] exit"
GAME_HELP = "Move with w/a/s/d (or up/down/left/right), r = regenerate maze, q = back to menu"


class TerminalGame:
    """Line-based host for the maze: main menu, game loop and best time.

    Reads commands from ``stdin`` and writes everything to ``stdout`` so the
    whole flow can be driven from tests with in-memory streams.
    """

    def __init__(
        self,
        settings: Settings,
        store: BestTimeStore,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        rng: Optional[RNG] = None,
        clock: Optional[Callable[[], float]] = None,
        default_width: Optional[int] = None,
        default_height: Optional[int] = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.rng = rng
        self.clock = clock
        self.default_width = settings.clamp_dimension(default_width, settings.default_width)
        self.default_height = settings.clamp_dimension(default_height, settings.default_height)

    # ---- IO helpers ------------------------------------------------------
    def _say(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def _ask(self, prompt: str) -> Optional[str]:
        """Prompt and read one line; None on end of input."""
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None
        return line.strip()

    def _ask_dimension(self, label: str, default: int) -> Optional[int]:
        raw = self._ask(f"Maze {label} [{self.settings.min_size}-{self.settings.max_size}]: ")
        if raw is None:
            return None
        try:
            value: Optional[int] = int(raw)
        except ValueError:
            value = None
        return self.settings.clamp_dimension(value, default)

    # ---- Flows -----------------------------------------------------------
    def run(self) -> int:
        while True:
            self._say(MENU_TEXT)
            choice = self._ask("> ")
            if choice is None or choice.lower() in {"3", "exit", "quit", "q"}:
                self._say("Goodbye!")
                return 0
            choice = choice.lower()
            if choice in {"1", "start"}:
                width = self._ask_dimension("width", self.default_width)
                height = self._ask_dimension("height", self.default_height) if width is not None else None
                if width is None or height is None:
                    self._say("Goodbye!")
                    return 0
                if not self.play(width, height):
                    return 0
            elif choice in {"2", "results"}:
                self.show_results()
            else:
                self._say(f"Unknown choice: {choice}")

    def show_results(self) -> None:
        self._say(f"Your best time: {format_best_time(self.store.best_time())}")

    def play(self, width: int, height: int) -> bool:
        """Run one game. Returns False if input ended mid-game."""
        session = new_session(width, height, rng=self.rng, settings=self.settings, clock=self.clock)
        self._say(GAME_HELP)
        while True:
            self.stdout.write(render_grid(session))
            command = self._ask("move> ")
            if command is None:
                return False
            command = command.lower()
            if command in {"q", "quit", "menu"}:
                return True
            if command in {"r", "regenerate"}:
                session = regenerate(session)
                self._say("Maze regenerated.")
                continue
            try:
                result = move(session, command)
            except ValueError:
                self._say(f"Unknown command: {command}")
                continue
            for event in result.events:
                if event is GameEvent.GAME_WON:
                    self._report_win(session)
                else:
                    self._say(event.message)
            if result.won:
                self.stdout.write(render_grid(session))
                return True

    def _report_win(self, session: SessionState) -> None:
        elapsed = session.elapsed or 0.0
        if self.store.submit(elapsed, session.width, session.height):
            self._say(f"Congratulations! New record time: {int(elapsed)} seconds")
        else:
            self._say(f"Congratulations! You completed the maze in {int(elapsed)} seconds")


def _layout_summary(session: SessionState) -> dict:
    layout = MazeLayout(grid=session.grid, keys=set(session.keys), doors=set(session.doors))
    return {
        "width": session.width,
        "height": session.height,
        "masks": session.grid.to_masks(),
        "keys": [list(p) for p in sorted(session.keys)],
        "doors": [list(p) for p in sorted(session.doors)],
        "signature": layout.signature(),
    }


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="keymaze",
        description="keymaze - a terminal maze with a key and a locked door",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--settings",
        dest="settings_path",
        type=Path,
        default=None,
        help="Path to a user settings YAML file to load/override defaults.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging.",
    )
    sub = parser.add_subparsers(dest="command")

    def add_maze_options(p: argparse.ArgumentParser) -> None:
        p.add_argument("--width", type=int, default=None, help="Maze width (default from settings).")
        p.add_argument("--height", type=int, default=None, help="Maze height (default from settings).")
        p.add_argument("--seed", type=int, default=None, help="Seed for a reproducible maze.")

    add_maze_options(sub.add_parser("play", help="Play interactively (default)."))
    gen = sub.add_parser("generate", help="Print a freshly generated maze.")
    add_maze_options(gen)
    gen.add_argument("--json", action="store_true", help="Print a JSON summary instead of the text grid.")
    sub.add_parser("results", help="Show the best completion time.")
    return parser.parse_args(argv)


def main(argv=None, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    if stdout is None:
        stdout = sys.stdout
    args = parse_args(argv)
    configure_logging(level=logging.DEBUG if args.debug else logging.WARNING)

    try:
        settings = Settings.load(user_path=args.settings_path)
        paths = AppPaths()
        store = BestTimeStore(paths.records_path)
        command = args.command or "play"

        if command == "results":
            stdout.write(f"Your best time: {format_best_time(store.best_time())}\n")
            return 0

        seed = getattr(args, "seed", None)
        rng = RNG(seed if seed is not None else settings.seed)

        if command == "generate":
            width = args.width if args.width is not None else settings.default_width
            height = args.height if args.height is not None else settings.default_height
            session = new_session(width, height, rng=rng, settings=settings)
            if args.json:
                stdout.write(json.dumps(_layout_summary(session), indent=2, sort_keys=True) + "\n")
            else:
                stdout.write(render_grid(session))
            return 0

        game = TerminalGame(
            settings,
            store,
            stdin=stdin,
            stdout=stdout,
            rng=rng,
            default_width=getattr(args, "width", None),
            default_height=getattr(args, "height", None),
        )
        return game.run()
    except KeyMazeError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
