# brickgame

A Tetris game that you play in the terminal. The game logic is a small
finite state machine that has no user interface of its own. A curses front end
draws the playing field, the next piece, the score, the level, the speed, the
game status and a list of controls.

The front end uses the standard `curses` module. It needs a terminal where
Python's `curses` is available, for example on Linux or macOS.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Playing

```
brickgame
```

| Key         | Action                               |
|-------------|--------------------------------------|
| Left/Right  | Move the piece                       |
| Down        | Drop the piece to the bottom         |
| z           | Rotate                               |
| s           | Start, or start again after game over |
| p           | Pause / continue                     |
| q           | Quit                                 |

The field is 20 rows by 10 columns. Clearing 1, 2, 3 or 4 lines at once gives
100, 300, 700 or 1500 points. You go up a level for every 600 points, up to
level 10. The speed always equals the level, and the pieces fall one row every
`60000 // (60 + 12 * (level - 1))` milliseconds.

When you quit, the high score is written to `high_score.txt` in the current
directory. It is read back the next time you play. If the file is missing or
cannot be read, the high score starts at 0. Another file can be chosen with:

```
brickgame --high-score-file path/to/scores.txt
```

## Using the engine

`brickgame.fsm.TetrisGame` holds all the game state. Send it actions from
`brickgame.backend.UserAction` with `user_input`. Call
`update_current_state` often to advance time. It returns a
`brickgame.backend.GameInfo` snapshot with `field`, `next`, `score`,
`high_score`, `level`, `speed` and `pause`, which you can draw:

```python
from brickgame.backend import UserAction
from brickgame.fsm import TetrisGame

game = TetrisGame(high_score=0)
game.user_input(UserAction.START, False)
game.user_input(UserAction.LEFT, False)
info = game.update_current_state()
print(info.score, info.level, info.pause)
```

`TetrisGame` also takes a `clock` argument. It is a function that returns
milliseconds and is used for the fall timer and for choosing the next piece.
Pass your own function to drive the game deterministically, for example in
tests.

`brickgame.backend` also has the field helpers the engine is built from:
`empty_field`, `figure_cells`, `figure_matrix`, `line_is_full`,
`move_down_lines_above`, `remove_full_lines`, `points_for_lines`,
`level_for_score`, `shifting_interval` and `random_figure_type`.

## What it does not do

There is no sound or music. The next piece is picked from the current
millisecond of the clock, not from a random number generator. A rotation
that does not fit is simply refused, and the piece is not moved sideways to
make it fit. The Up key is read but does nothing.