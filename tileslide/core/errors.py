"""Errors raised by the tile-sliding engine and its session."""


class GameError(Exception):
    """Base class for every error raised by this package."""


class OutOfRange(GameError, IndexError):
    """
    A cell coordinate falls outside the board.

    Parameters
    ----------
    row : int
        Requested row.
    col : int
        Requested column.
    size : int
        Size of the board that was addressed.
    """

    def __init__(self, row: int, col: int, size: int):
        self.row = row
        self.col = col
        self.size = size
        super().__init__(f'Cell ({row}, {col}) is outside a {size}x{size} board')


class InvalidDirection(GameError, ValueError):
    """An unrecognised direction token was given to the engine."""

    def __init__(self, token: object, accepted: tuple[str, ...]):
        self.token = token
        super().__init__(f'Invalid direction {token!r}, expected one of {", ".join(accepted)}')


class SessionBusy(GameError, RuntimeError):
    """A step was requested while another one is still in flight."""
