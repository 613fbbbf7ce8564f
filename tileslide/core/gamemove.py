"""
Move utilities for the tile-sliding game, telling which directions would change a board.
"""

from tileslide.core.board import Board
from tileslide.core.direction import Direction


def legal_mask(board: Board) -> dict[Direction, bool]:
    """
    Tell, for every direction, whether pushing the board that way moves a tile.

    Parameters
    ----------
    board : Board
        The board to inspect.

    Returns
    -------
    dict[Direction, bool]
        Legality of each direction, in action order (left, up, right, down).

    Notes
    -----
    A direction is legal if a tile has an empty neighbour on that side, or if two adjacent
    tiles along that axis hold the same value.
    """
    grid = board.as_grid()

    # ##>: Neighbouring pairs along each axis.
    left_cols, right_cols = grid[:, :-1], grid[:, 1:]
    top_rows, bottom_rows = grid[:-1, :], grid[1:, :]

    # ##>: Merges are symmetric along an axis.
    h_merge = bool(((left_cols != 0) & (left_cols == right_cols)).any())
    v_merge = bool(((top_rows != 0) & (top_rows == bottom_rows)).any())

    return {
        Direction.LEFT: h_merge or bool(((left_cols == 0) & (right_cols != 0)).any()),
        Direction.UP: v_merge or bool(((top_rows == 0) & (bottom_rows != 0)).any()),
        Direction.RIGHT: h_merge or bool(((right_cols == 0) & (left_cols != 0)).any()),
        Direction.DOWN: v_merge or bool(((bottom_rows == 0) & (top_rows != 0)).any()),
    }


def legal_directions(board: Board) -> list[Direction]:
    """Directions that would move at least one tile."""
    return [direction for direction, legal in legal_mask(board).items() if legal]


def illegal_directions(board: Board) -> list[Direction]:
    """Directions that would leave the board unchanged."""
    return [direction for direction, legal in legal_mask(board).items() if not legal]


def can_move(board: Board, direction: Direction | str | int) -> bool:
    """
    Check if pushing the board in ``direction`` moves any tile.

    Raises
    ------
    InvalidDirection
        If ``direction`` is not a valid direction token.
    """
    return legal_mask(board)[Direction.parse(direction)]
