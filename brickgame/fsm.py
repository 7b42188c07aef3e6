"""The Tetris state machine."""

from __future__ import annotations

from collections.abc import Callable

from brickgame.backend import (
    FIELD_M,
    FIELD_N,
    FIGURE_FIELD_M,
    FIGURE_FIELD_N,
    FIGURE_ORIENTATIONS_COUNT,
    MOVING_START_TIME_NOT_SET,
    PIXEL_FILLED,
    START_POSITION,
    Field,
    FigureType,
    GameInfo,
    GameState,
    PauseValue,
    Position,
    UserAction,
    empty_field,
    figure_cells,
    figure_matrix,
    level_for_score,
    milliseconds_of_day,
    points_for_lines,
    random_figure_type,
    remove_full_lines,
    shifting_interval,
)


class TetrisGame:
    """A Tetris game driven by user actions and a millisecond clock."""

    def __init__(
        self,
        high_score: int = 0,
        clock: Callable[[], int] = milliseconds_of_day,
    ) -> None:
        self._clock = clock
        self.high_score = high_score
        self.field: Field = empty_field(FIELD_N, FIELD_M)
        self.figure: Field = empty_field(FIGURE_FIELD_N, FIGURE_FIELD_M)
        self.next: Field = empty_field(FIGURE_FIELD_N, FIGURE_FIELD_M)
        self.f_type = FigureType.I
        self.next_type = FigureType.I
        self.orientation = 0
        self.position = START_POSITION
        self.score = 0
        self.level = 1
        self.speed = 1
        self.state = GameState.START
        self.pause = PauseValue.START
        self.moving_start_time = MOVING_START_TIME_NOT_SET
        self._transitions: dict[tuple[GameState, UserAction], Callable[[], None]] = {
            (GameState.START, UserAction.START): self.spawn,
            (GameState.MOVING, UserAction.PAUSE): self.pause_game,
            (GameState.MOVING, UserAction.LEFT): self.move_left,
            (GameState.MOVING, UserAction.RIGHT): self.move_right,
            (GameState.MOVING, UserAction.DOWN): self.drop,
            (GameState.MOVING, UserAction.ACTION): self.rotate,
            (GameState.PAUSE, UserAction.PAUSE): self.resume,
            (GameState.GAMEOVER, UserAction.START): self.start,
        }
        self.start()

    def user_input(self, action: UserAction | int, hold: bool = False) -> None:
        """Apply a user action; hold is accepted but unused in Tetris."""
        handler = self._transitions.get((self.state, UserAction(action)))
        if handler is not None:
            handler()

    def update_current_state(self) -> GameInfo:
        """Advance time-driven transitions and return a snapshot."""
        self._tick()
        return GameInfo(
            field=self.field_with_figure(),
            next=[row[:] for row in self.next],
            score=self.score,
            high_score=self.high_score,
            level=self.level,
            speed=self.speed,
            pause=self.pause,
        )

    def _tick(self) -> None:
        if self.state != GameState.MOVING:
            return
        elapsed = self._clock() - self.moving_start_time
        # A negative elapsed time means the clock wrapped around.
        if elapsed >= shifting_interval(self.level) or elapsed < 0:
            self.shift()

    def _new_next(self) -> None:
        self.next_type = random_figure_type(self._clock())
        self.next = figure_matrix(self.next_type, 0)

    def start(self) -> None:
        """Reset the field and wait for the player to start."""
        self.figure = empty_field(FIGURE_FIELD_N, FIGURE_FIELD_M)
        self.position = START_POSITION
        self.orientation = 0
        self.f_type = FigureType.I
        self.field = empty_field(FIELD_N, FIELD_M)
        self._new_next()
        self.score = 0
        self.level = 1
        self.speed = 1
        self.state = GameState.START
        self.pause = PauseValue.START

    def spawn(self) -> None:
        """Bring the next figure into play at the start position."""
        self.state = GameState.SPAWN
        self.position = START_POSITION
        self.orientation = 0
        self.f_type = self.next_type
        self.figure = [row[:] for row in self.next]
        self._new_next()
        self.resume()

    def _try_move(self, dx: int) -> None:
        target = self.position.shifted(dx=dx)
        if self.fits(target, self.orientation):
            self.position = target

    def move_left(self) -> None:
        self._try_move(-1)

    def move_right(self) -> None:
        self._try_move(1)

    def rotate(self) -> None:
        """Turn the figure clockwise if it fits."""
        orientation = (self.orientation + 1) % FIGURE_ORIENTATIONS_COUNT
        if self.fits(self.position, orientation):
            self.orientation = orientation
            self.figure = figure_matrix(self.f_type, orientation)

    def drop(self) -> None:
        """Drop the figure as far as it goes and attach it."""
        target = self.position.shifted(dy=1)
        while self.fits(target, self.orientation):
            self.position = target
            target = target.shifted(dy=1)
        self.attach()

    def shift(self) -> None:
        """Move the figure one row down, attaching it when it lands."""
        self.state = GameState.SHIFTING
        target = self.position.shifted(dy=1)
        if self.fits(target, self.orientation):
            self.position = target
        if self.is_attaching():
            self.attach()
        else:
            self.resume()

    def pause_game(self) -> None:
        self.state = GameState.PAUSE
        self.pause = PauseValue.PAUSE

    def resume(self) -> None:
        """Enter the moving state and restart the shift timer."""
        self.state = GameState.MOVING
        self.pause = PauseValue.NO_PAUSE
        self.moving_start_time = self._clock()

    def _placed_cells(self, position: Position, orientation: int) -> list[Position]:
        return [
            Position(cell.y + position.y, cell.x + position.x)
            for cell in figure_cells(self.f_type, orientation)
        ]

    def attach(self) -> None:
        """Fix the figure to the field, clear lines and spawn the next one."""
        self.state = GameState.ATTACHING
        for cell in self._placed_cells(self.position, self.orientation):
            self.field[cell.y][cell.x] = PIXEL_FILLED
        self.update_score(remove_full_lines(self.field))
        if self.next_fits():
            self.spawn()
        else:
            self.game_over()

    def game_over(self) -> None:
        self.state = GameState.GAMEOVER
        self.pause = PauseValue.GAME_OVER

    def _free(self, cell: Position) -> bool:
        return (
            0 <= cell.y < FIELD_N
            and 0 <= cell.x < FIELD_M
            and self.field[cell.y][cell.x] != PIXEL_FILLED
        )

    def fits(self, position: Position, orientation: int) -> bool:
        """Tell whether the current figure fits at a position and orientation."""
        return all(self._free(c) for c in self._placed_cells(position, orientation))

    def next_fits(self) -> bool:
        """Tell whether the next figure fits at the start position."""
        return all(
            self._free(Position(cell.y + START_POSITION.y, cell.x + START_POSITION.x))
            for cell in figure_cells(self.next_type, 0)
        )

    def is_attaching(self) -> bool:
        """Tell whether the figure rests on the floor or on filled pixels."""
        return any(
            cell.y + 1 == FIELD_N or self.field[cell.y + 1][cell.x] == PIXEL_FILLED
            for cell in self._placed_cells(self.position, self.orientation)
        )

    def update_score(self, lines: int) -> None:
        """Add points for cleared lines and update high score, level and speed."""
        self.score += points_for_lines(lines)
        self.high_score = max(self.high_score, self.score)
        self.level = level_for_score(self.score)
        self.speed = self.level

    def field_with_figure(self) -> Field:
        """Return a copy of the field with the current figure drawn on it."""
        grid = [row[:] for row in self.field]
        for i, row in enumerate(self.figure):
            for j, pixel in enumerate(row):
                if pixel == PIXEL_FILLED:
                    grid[self.position.y + i][self.position.x + j] = PIXEL_FILLED
        return grid