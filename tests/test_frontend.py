from unittest import mock

import curses
import pytest

from brickgame.backend import (
    FIELD_M,
    FIELD_N,
    FIGURE_FIELD_M,
    FIGURE_FIELD_N,
    GameInfo,
    PauseValue,
    empty_field,
    figure_matrix,
    FigureType,
)
from brickgame.frontend import CursesView, init_curses, status_text


class FakeWindow:
    def __init__(self, nlines=40, ncols=120, y=0, x=0):
        self.size = (nlines, ncols)
        self.origin = (y, x)
        self.writes = []
        self.children = []
        self.boxed = False
        self.refreshes = 0

    def subwin(self, nlines, ncols, y, x):
        child = FakeWindow(nlines, ncols, y, x)
        self.children.append(child)
        return child

    def addstr(self, y, x, text, attr=0):
        self.writes.append((y, x, text, attr))

    def box(self):
        self.boxed = True

    def refresh(self):
        self.refreshes += 1

    def texts(self):
        return [w[2] for w in self.writes]

    def row_text(self, row):
        return [w[2] for w in self.writes if w[0] == row]


@pytest.fixture
def view():
    with mock.patch("curses.color_pair", side_effect=lambda n: n << 8):
        return CursesView(FakeWindow())


@pytest.mark.parametrize(
    "pause, text",
    [
        (PauseValue.START, "READY TO START"),
        (PauseValue.PAUSE, "PAUSE         "),
        (PauseValue.GAME_OVER, "GAME OVER     "),
        (PauseValue.NO_PAUSE, "PLAY          "),
    ],
)
def test_status_text(pause, text):
    assert status_text(pause) == text


def test_status_texts_have_equal_width():
    widths = {len(status_text(p)) for p in PauseValue}
    assert len(widths) == 1


def test_init_curses_configures_terminal():
    stdscr = mock.MagicMock()
    with mock.patch.multiple(
        "curses",
        cbreak=mock.DEFAULT,
        noecho=mock.DEFAULT,
        curs_set=mock.DEFAULT,
        start_color=mock.DEFAULT,
        init_pair=mock.DEFAULT,
    ) as patched:
        init_curses(stdscr)
    stdscr.keypad.assert_called_once_with(True)
    stdscr.nodelay.assert_called_once_with(True)
    patched["curs_set"].assert_called_once_with(0)
    patched["init_pair"].assert_any_call(2, curses.COLOR_CYAN, curses.COLOR_CYAN)
    patched["init_pair"].assert_any_call(1, curses.COLOR_WHITE, curses.COLOR_BLACK)


def test_windows_created_on_screen(view):
    assert view.stdscr.children == [view.field_window, view.info_window, view.next_window]
    assert view.field_window.size == (FIELD_N, FIELD_M * 2)
    assert view.next_window.size == (FIGURE_FIELD_N, FIGURE_FIELD_M * 2)
    info_y, info_x = view.info_window.origin
    assert view.next_window.origin == (info_y + 2, info_x + 2)


def test_draw_overlay_writes_titles_and_controls(view):
    view.draw_overlay()
    frames = view.stdscr.children[3:]
    assert len(frames) == 2
    assert all(frame.boxed for frame in frames)
    assert "Tetris" in frames[0].texts()
    assert "Game_Info" in frames[1].texts()
    assert view.info_window.row_text(0) == ["Next:"]
    assert view.info_window.row_text(13) == ["Controls:"]
    assert view.info_window.row_text(19) == ["  q  -> Quit"]


def test_draw_field_pixels(view):
    field = empty_field(FIELD_N, FIELD_M)
    field[0][0] = 1
    info = GameInfo(
        field=field,
        next=figure_matrix(FigureType.O, 0),
        score=300,
        high_score=900,
        level=1,
        speed=1,
        pause=PauseValue.NO_PAUSE,
    )
    view.draw(info)
    writes = view.field_window.writes
    assert len(writes) == FIELD_N * FIELD_M
    assert view.empty_attr != view.filled_attr
    assert (0, 0, "  ", view.filled_attr) in writes
    assert (0, 2, "  ", view.empty_attr) in writes
    filled = [w for w in writes if w[3] == view.filled_attr]
    assert len(filled) == 1


def test_draw_next_figure(view):
    nxt = figure_matrix(FigureType.O, 0)
    info = GameInfo(
        field=empty_field(FIELD_N, FIELD_M),
        next=nxt,
        score=0,
        high_score=0,
        level=1,
        speed=1,
        pause=PauseValue.START,
    )
    view.draw(info)
    filled = {(y, x) for y, x, _, a in view.next_window.writes if a == view.filled_attr}
    expected = {(i, j * 2) for i, row in enumerate(nxt) for j, p in enumerate(row) if p}
    assert filled == expected
    assert view.next_window.refreshes == 1


def test_draw_info_lines(view):
    info = GameInfo(
        field=empty_field(FIELD_N, FIELD_M),
        next=empty_field(FIGURE_FIELD_N, FIGURE_FIELD_M),
        score=300,
        high_score=12345,
        level=2,
        speed=2,
        pause=PauseValue.GAME_OVER,
    )
    view.draw(info)
    assert view.info_window.row_text(7) == ["High Score: 12345      "]
    assert view.info_window.row_text(8) == ["Score: 300      "]
    assert view.info_window.row_text(9) == ["Level: 2      "]
    assert view.info_window.row_text(10) == ["Speed: 2      "]
    assert view.info_window.row_text(11) == ["Game Status: GAME OVER     "]


def test_curses_error_on_write_is_ignored(view):
    def failing(*args):
        raise curses.error("corner")

    view.field_window.addstr = failing
    field = empty_field(FIELD_N, FIELD_M)
    info = GameInfo(
        field=field,
        next=empty_field(FIGURE_FIELD_N, FIGURE_FIELD_M),
        score=0,
        high_score=0,
        level=1,
        speed=1,
        pause=PauseValue.START,
    )
    view.draw(info)
    assert view.info_window.row_text(11) == ["Game Status: READY TO START"]