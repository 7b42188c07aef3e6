"""A terminal Tetris game: a finite-state-machine engine and a curses front end."""

__version__ = "1.0.0"
__all__ = ["backend", "fsm", "frontend", "cli"]