"""Field, figures and scoring rules of the Tetris engine."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import IntEnum

FIELD_N = 20
FIELD_M = 10
PIXEL_EMPTY = 0
PIXEL_FILLED = 1

FIGURE_FIELD_SIZE = 4
FIGURE_FIELD_N = FIGURE_FIELD_SIZE
FIGURE_FIELD_M = FIGURE_FIELD_SIZE
FIGURE_TYPE_COUNT = 7
FIGURE_ORIENTATIONS_COUNT = 4

LVL_MIN = 1
LVL_MAX = 10
SHIFTS_PER_MIN_LVL1 = 60
SHIFTS_PER_MIN_LVL_INCR = 12

POINTS_1_LINE = 100
POINTS_2_LINE = 300
POINTS_3_LINE = 700
POINTS_4_LINE = 1500
POINTS_PER_LVL = 600

START_FIGURE_X = 3
START_FIGURE_Y = 0
MOVING_START_TIME_NOT_SET = -1

Field = list[list[int]]


class UserAction(IntEnum):
    """Input actions of the brick game interface."""

    START = 0
    PAUSE = 1
    TERMINATE = 2
    LEFT = 3
    RIGHT = 4
    UP = 5
    DOWN = 6
    ACTION = 7


class PauseValue(IntEnum):
    """What the game is waiting for, if anything."""

    NO_PAUSE = 0
    START = 1
    PAUSE = 2
    GAME_OVER = 3


class GameState(IntEnum):
    """States of the game's finite state machine."""

    START = 0
    SPAWN = 1
    MOVING = 2
    SHIFTING = 3
    PAUSE = 4
    ATTACHING = 5
    GAMEOVER = 6


class FigureType(IntEnum):
    """The seven tetromino shapes."""

    I = 0  # noqa: E741
    J = 1
    L = 2
    O = 3  # noqa: E741
    S = 4
    T = 5
    Z = 6


@dataclass(frozen=True)
class Position:
    """A cell position, row first."""

    y: int
    x: int

    def shifted(self, dy: int = 0, dx: int = 0) -> Position:
        return Position(self.y + dy, self.x + dx)


START_POSITION = Position(START_FIGURE_Y, START_FIGURE_X)


@dataclass
class GameInfo:
    """A snapshot of the game for drawing."""

    field: Field
    next: Field
    score: int
    high_score: int
    level: int
    speed: int
    pause: PauseValue


# Filled cells (y, x) of each figure in each orientation.
_FIGURE_MAPS: dict[FigureType, tuple[tuple[tuple[int, int], ...], ...]] = {
    FigureType.I: (
        ((0, 0), (0, 1), (0, 2), (0, 3)),
        ((0, 1), (1, 1), (2, 1), (3, 1)),
        ((0, 0), (0, 1), (0, 2), (0, 3)),
        ((0, 1), (1, 1), (2, 1), (3, 1)),
    ),
    FigureType.J: (
        ((0, 0), (1, 0), (1, 1), (1, 2)),
        ((0, 1), (0, 2), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (1, 2), (2, 2)),
        ((0, 1), (1, 1), (2, 0), (2, 1)),
    ),
    FigureType.L: (
        ((0, 2), (1, 0), (1, 1), (1, 2)),
        ((0, 1), (1, 1), (2, 1), (2, 2)),
        ((1, 0), (1, 1), (1, 2), (2, 0)),
        ((0, 0), (0, 1), (1, 1), (2, 1)),
    ),
    FigureType.O: (
        ((0, 1), (0, 2), (1, 1), (1, 2)),
        ((0, 1), (0, 2), (1, 1), (1, 2)),
        ((0, 1), (0, 2), (1, 1), (1, 2)),
        ((0, 1), (0, 2), (1, 1), (1, 2)),
    ),
    FigureType.S: (
        ((0, 1), (0, 2), (1, 0), (1, 1)),
        ((0, 1), (1, 1), (1, 2), (2, 2)),
        ((1, 1), (1, 2), (2, 0), (2, 1)),
        ((0, 0), (1, 0), (1, 1), (2, 1)),
    ),
    FigureType.T: (
        ((0, 1), (1, 0), (1, 1), (1, 2)),
        ((0, 1), (1, 1), (1, 2), (2, 1)),
        ((1, 0), (1, 1), (1, 2), (2, 1)),
        ((0, 1), (1, 0), (1, 1), (2, 1)),
    ),
    FigureType.Z: (
        ((0, 0), (0, 1), (1, 1), (1, 2)),
        ((0, 2), (1, 1), (1, 2), (2, 1)),
        ((1, 0), (1, 1), (2, 1), (2, 2)),
        ((0, 1), (1, 0), (1, 1), (2, 0)),
    ),
}

_POINTS = {
    1: POINTS_1_LINE,
    2: POINTS_2_LINE,
    3: POINTS_3_LINE,
    4: POINTS_4_LINE,
}


def empty_field(rows: int, columns: int) -> Field:
    """Return a rows x columns grid of empty pixels."""
    if rows <= 0 or columns <= 0:
        raise ValueError(f"field size must be positive, got {rows}x{columns}")
    return [[PIXEL_EMPTY] * columns for _ in range(rows)]


def figure_cells(f_type: FigureType | int, orientation: int) -> tuple[Position, ...]:
    """Return the filled cells of a figure within its 4x4 box."""
    if not 0 <= orientation < FIGURE_ORIENTATIONS_COUNT:
        raise ValueError(f"invalid orientation: {orientation}")
    shape = _FIGURE_MAPS[FigureType(f_type)][orientation]
    return tuple(Position(y, x) for y, x in shape)


def figure_matrix(f_type: FigureType | int, orientation: int) -> Field:
    """Return the 4x4 pixel box of a figure."""
    box = empty_field(FIGURE_FIELD_N, FIGURE_FIELD_M)
    for cell in figure_cells(f_type, orientation):
        box[cell.y][cell.x] = PIXEL_FILLED
    return box


def milliseconds_of_day() -> int:
    """Return the current wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


def random_figure_type(now_ms: int | None = None) -> FigureType:
    """Pick a figure type from the millisecond clock."""
    if now_ms is None:
        now_ms = milliseconds_of_day()
    return FigureType(now_ms % FIGURE_TYPE_COUNT)


def shifting_interval(level: int) -> int:
    """Milliseconds between automatic one-row shifts at a level."""
    return (60 * 1000) // (SHIFTS_PER_MIN_LVL1 + SHIFTS_PER_MIN_LVL_INCR * (level - 1))


def line_is_full(field: Field, row: int) -> bool:
    """Tell whether every pixel of a row is filled."""
    return all(pixel == PIXEL_FILLED for pixel in field[row])


def move_down_lines_above(field: Field, row: int) -> None:
    """Remove a row, shifting the rows above it down and clearing the top."""
    width = len(field[row])
    del field[row]
    field.insert(0, [PIXEL_EMPTY] * width)


def remove_full_lines(field: Field) -> int:
    """Remove every full row in place and return how many were removed."""
    kept = [row for row in field if not all(p == PIXEL_FILLED for p in row)]
    removed = len(field) - len(kept)
    if removed:
        width = len(field[0])
        field[:] = [[PIXEL_EMPTY] * width for _ in range(removed)] + kept
    return removed


def points_for_lines(count: int) -> int:
    """Points earned for clearing count lines at once."""
    return _POINTS.get(count, 0)


def level_for_score(score: int) -> int:
    """Level reached with a given score."""
    return min(LVL_MAX, LVL_MIN + score // POINTS_PER_LVL)