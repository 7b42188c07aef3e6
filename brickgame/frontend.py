"""Terminal drawing of the game field and game information."""

from __future__ import annotations

import curses
from collections.abc import Sequence
from typing import Any

from brickgame.backend import (
    FIELD_M,
    FIELD_N,
    FIGURE_FIELD_M,
    FIGURE_FIELD_N,
    PIXEL_EMPTY,
    GameInfo,
    PauseValue,
)

ROWS_PER_PIXEL = 1
COLS_PER_PIXEL = 2

FIELD_ROWS = FIELD_N * ROWS_PER_PIXEL
FIELD_COLS = FIELD_M * COLS_PER_PIXEL

FIGURE_FIELD_ROWS = FIGURE_FIELD_N * ROWS_PER_PIXEL
FIGURE_FIELD_COLS = FIGURE_FIELD_M * COLS_PER_PIXEL

INFO_ROWS = FIELD_ROWS
INFO_COLS = 27

MARGIN_ROWS = 1
MARGIN_COLS = 1

EMPTY_PAIR = 1
FILLED_PAIR = 2

PIXEL_TEXT = " " * COLS_PER_PIXEL

CONTROLS = (
    "Controls:",
    "  Left/Right -> Move",
    "  Down       -> Drop",
    "  z          -> Rotate",
    "  s  -> Start/Repeat",
    "  p  -> Pause/Continue",
    "  q  -> Quit",
)
CONTROLS_ROW = 13

_STATUS = {
    PauseValue.START: "READY TO START",
    PauseValue.PAUSE: "PAUSE         ",
    PauseValue.GAME_OVER: "GAME OVER     ",
}


def status_text(pause: PauseValue | int) -> str:
    """Return the status line text for a pause value."""
    try:
        return _STATUS.get(PauseValue(pause), "PLAY          ")
    except ValueError:
        return "PLAY          "


def init_curses(stdscr: Any) -> None:
    """Set up the terminal for non-blocking, character-at-a-time play."""
    curses.cbreak()
    curses.noecho()
    stdscr.keypad(True)
    stdscr.nodelay(True)
    curses.curs_set(0)
    stdscr.scrollok(True)
    curses.start_color()
    curses.init_pair(EMPTY_PAIR, curses.COLOR_WHITE, curses.COLOR_BLACK)
    curses.init_pair(FILLED_PAIR, curses.COLOR_CYAN, curses.COLOR_CYAN)
    stdscr.refresh()


def _put(window: Any, y: int, x: int, text: str, attr: int = 0) -> None:
    # Writing into the bottom-right cell raises even though the text is drawn.
    try:
        window.addstr(y, x, text, attr)
    except curses.error:
        pass


class CursesView:
    """Draws the field, the next figure and the game information."""

    def __init__(self, stdscr: Any) -> None:
        self.stdscr = stdscr
        self.empty_attr = curses.color_pair(EMPTY_PAIR)
        self.filled_attr = curses.color_pair(FILLED_PAIR)
        info_y = MARGIN_ROWS * 2
        info_x = (FIELD_COLS - 1) + MARGIN_COLS * (1 + 2 + 2 + 1)
        self.field_window = stdscr.subwin(
            FIELD_ROWS, FIELD_COLS, MARGIN_ROWS * 2, MARGIN_COLS * 2
        )
        self.info_window = stdscr.subwin(INFO_ROWS, INFO_COLS, info_y, info_x)
        self.next_window = stdscr.subwin(
            FIGURE_FIELD_ROWS, FIGURE_FIELD_COLS, info_y + 2, info_x + 2
        )

    def draw_overlay(self) -> None:
        """Draw the frames, titles and the list of controls."""
        field_h = FIELD_ROWS + MARGIN_ROWS * 2
        field_w = FIELD_COLS + MARGIN_COLS * 2
        field_frame = self.stdscr.subwin(field_h, field_w, MARGIN_ROWS, MARGIN_COLS)
        field_frame.box()
        _put(field_frame, 0, (field_w - 1 - 5) // 2, "Tetris")
        field_frame.refresh()

        info_h = INFO_ROWS + MARGIN_ROWS * 2
        info_w = INFO_COLS + MARGIN_COLS * 2
        info_frame = self.stdscr.subwin(
            info_h, info_w, MARGIN_ROWS, MARGIN_COLS + (field_h - 1) + MARGIN_COLS * 2
        )
        info_frame.box()
        _put(info_frame, 0, (info_w - 1 - 9) // 2, "Game_Info")
        info_frame.refresh()

        _put(self.info_window, 0, 0, "Next:")
        for offset, line in enumerate(CONTROLS):
            _put(self.info_window, CONTROLS_ROW + offset, 0, line)
        self.info_window.refresh()

    def _draw_pixels(self, grid: Sequence[Sequence[int]], window: Any) -> None:
        for i, row in enumerate(grid):
            for j, pixel in enumerate(row):
                attr = self.empty_attr if pixel == PIXEL_EMPTY else self.filled_attr
                _put(window, i, j * COLS_PER_PIXEL, PIXEL_TEXT, attr)
        window.refresh()

    def draw(self, info: GameInfo) -> None:
        """Draw a game snapshot."""
        self._draw_pixels(info.field, self.field_window)
        self._draw_pixels(info.next, self.next_window)
        lines = (
            (7, f"High Score: {info.high_score}      "),
            (8, f"Score: {info.score}      "),
            (9, f"Level: {info.level}      "),
            (10, f"Speed: {info.speed}      "),
            (11, f"Game Status: {status_text(info.pause)}"),
        )
        for row, text in lines:
            _put(self.info_window, row, 0, text)
        self.info_window.refresh()