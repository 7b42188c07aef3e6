"""Terminal entry point: the game loop, keys and the high score file."""

from __future__ import annotations

import argparse
import contextlib
import curses
import re
from pathlib import Path
from typing import Any

from brickgame.backend import UserAction
from brickgame.fsm import TetrisGame
from brickgame.frontend import CursesView, init_curses

GAME_LOOP_DELAY = 10  # ms
DEFAULT_HIGH_SCORE_FILE = "high_score.txt"

KEY_START = ord("s")
KEY_PAUSE = ord("p")
KEY_TERMINATE = ord("q")
KEY_ACTION = ord("z")

_KEY_ACTIONS = {
    KEY_START: UserAction.START,
    KEY_PAUSE: UserAction.PAUSE,
    KEY_TERMINATE: UserAction.TERMINATE,
    curses.KEY_LEFT: UserAction.LEFT,
    curses.KEY_RIGHT: UserAction.RIGHT,
    curses.KEY_UP: UserAction.UP,
    curses.KEY_DOWN: UserAction.DOWN,
    KEY_ACTION: UserAction.ACTION,
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def key_to_action(key: int) -> UserAction | None:
    """Map a key code to a user action, or None for other keys and no input."""
    return _KEY_ACTIONS.get(key)


def load_high_score(path: str | Path) -> int:
    """Read the saved high score; 0 if the file is missing or unreadable."""
    try:
        text = Path(path).read_text()
    except OSError:
        return 0
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def save_high_score(path: str | Path, high_score: int) -> None:
    """Write the high score, ignoring a file that cannot be written."""
    with contextlib.suppress(OSError):
        Path(path).write_text(str(high_score))


def game_loop(stdscr: Any, path: str | Path = DEFAULT_HIGH_SCORE_FILE) -> int:
    """Run the game until the player quits; return the final high score."""
    game = TetrisGame(load_high_score(path))
    view = CursesView(stdscr)
    view.draw_overlay()

    playing = True
    while playing:
        action = key_to_action(stdscr.getch())
        if action is UserAction.TERMINATE:
            playing = False
        if action is not None:
            game.user_input(action, False)
        info = game.update_current_state()
        view.draw(info)
        stdscr.timeout(GAME_LOOP_DELAY)

    save_high_score(path, info.high_score)
    return info.high_score


def _run(stdscr: Any, path: str) -> int:
    init_curses(stdscr)
    return game_loop(stdscr, path)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="brickgame", description="Tetris in the terminal.")
    parser.add_argument(
        "--high-score-file",
        default=DEFAULT_HIGH_SCORE_FILE,
        help="file that keeps the high score",
    )
    args = parser.parse_args(argv)
    curses.wrapper(_run, args.high_score_file)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())