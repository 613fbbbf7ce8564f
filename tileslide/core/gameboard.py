"""
Core functionality of the tile-sliding game: directional transitions, terminal checks and tile spawning.
"""

from typing import Mapping, NamedTuple

from numpy import any as np_any
from numpy.random import PCG64DXSM, Generator, default_rng

from tileslide.core.board import Board
from tileslide.core.direction import Direction

# ##>: Tile value that wins the game on a standard board.
WIN_VALUE = 2048

# ##>: Tile spawn probabilities (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##>: Module-level generator used when no generator is given.
_GENERATOR = default_rng(PCG64DXSM())


class Move(NamedTuple):
    """
    One elementary slide or merge of a single tile.

    Attributes
    ----------
    source : int
        Row-major index the tile leaves.
    target : int
        Row-major index the tile arrives at.
    value : int
        Value held at ``target`` once the move is done (doubled for a merge).
    merge : bool
        Whether the tile merged into an equal tile at ``target``.
    """

    source: int
    target: int
    value: int
    merge: bool


class Transition(NamedTuple):
    """
    Result of pushing a board in one direction.

    Attributes
    ----------
    board : Board
        The board after the transition, always a new object.
    moves : tuple[Move, ...]
        Every elementary move, in processing order.
    score : int
        Sum of the values produced by merges.
    """

    board: Board
    moves: tuple[Move, ...]
    score: int

    @property
    def changed(self) -> bool:
        """Whether at least one tile moved."""
        return bool(self.moves)


def traversal_order(size: int, direction: Direction | str | int) -> list[tuple[int, int]]:
    """
    Order in which cells are visited during a transition.

    Parameters
    ----------
    size : int
        Size of the board.
    direction : Direction | str | int
        Direction of the transition.

    Returns
    -------
    list[tuple[int, int]]
        Every ``(row, col)`` coordinate of the board.

    Notes
    -----
    - The base order is row-major.
    - ``down`` reverses it entirely; ``right`` sorts it by descending column, keeping rows in order.
    - Cells nearest the edge the tiles travel towards are visited first, so they settle before the
      tiles behind them arrive.
    """
    direction = Direction.parse(direction)
    positions = [(row, col) for row in range(size) for col in range(size)]

    if direction is Direction.DOWN:
        positions.reverse()
    elif direction is Direction.RIGHT:
        positions.sort(key=lambda position: -position[1])
    return positions


def compute_transition(board: Board, direction: Direction | str | int) -> Transition:
    """
    Push every tile of the board in a direction.

    Parameters
    ----------
    board : Board
        The current board. It is never modified.
    direction : Direction | str | int
        Direction of the push.

    Returns
    -------
    Transition
        The new board, the moves that produced it and the score gained.

    Raises
    ------
    InvalidDirection
        If ``direction`` is not a valid direction token.

    Notes
    -----
    - Each tile slides across empty cells until it meets the edge or another tile.
    - A tile meeting an equal tile merges into it, unless that tile already results from a merge
      during this transition. A merged tile stops there.
    - When nothing moves, the returned board equals the input, ``moves`` is empty and the score is 0.
    """
    direction = Direction.parse(direction)
    d_row, d_col = direction.vector
    size = board.size

    grid = board.clone()
    merged: set[int] = set()
    moves: list[Move] = []
    score = 0

    for row, col in traversal_order(size, direction):
        if grid.get(row, col) == 0:
            continue

        current_row, current_col = row, col
        next_row, next_col = row + d_row, col + d_col
        while 0 <= next_row < size and 0 <= next_col < size:
            value = grid.get(current_row, current_col)
            neighbour = grid.get(next_row, next_col)
            source, target = grid.index(current_row, current_col), grid.index(next_row, next_col)

            if neighbour == 0:
                # ##: Slide into the empty cell and keep going.
                grid.set(next_row, next_col, value)
                grid.set(current_row, current_col, 0)
                moves.append(Move(source, target, value, False))
            elif neighbour == value and target not in merged:
                # ##: Merge once, then stop.
                grid.set(next_row, next_col, value * 2)
                grid.set(current_row, current_col, 0)
                moves.append(Move(source, target, value * 2, True))
                merged.add(target)
                score += value * 2
                break
            else:
                break

            current_row, current_col = next_row, next_col
            next_row, next_col = next_row + d_row, next_col + d_col

    if not moves:
        return Transition(board.clone(), (), 0)
    return Transition(grid, tuple(moves), score)


def is_win(board: Board, target: int = WIN_VALUE) -> bool:
    """
    Check if a tile reached the winning value.

    Parameters
    ----------
    board : Board
        The board to check.
    target : int, optional
        Winning tile value (default is 2048).

    Returns
    -------
    bool
        True if any cell holds ``target``.
    """
    return bool(np_any(board.cells == target))


def is_terminal(board: Board) -> bool:
    """
    Check if the game has ended by determining if any moves are possible.

    Parameters
    ----------
    board : Board
        The board to check.

    Returns
    -------
    bool
        True if the game is over (no moves possible), False otherwise.

    Notes
    -----
    The game is over when there are no empty cells AND no two row or column neighbours hold the same value.
    """
    if board.empty_cells():
        return False

    grid = board.as_grid()
    return not (np_any(grid[:, :-1] == grid[:, 1:]) or np_any(grid[:-1] == grid[1:]))


def make_rng(seed: int | None = None) -> Generator:
    """Random generator used for spawning, seeded when ``seed`` is given."""
    return default_rng(PCG64DXSM(seed))


def spawn_tile(
    board: Board, rng: Generator | None = None, probs: Mapping[int, float] = TILE_SPAWN_PROBS
) -> int | None:
    """
    Place one new tile on a random empty cell.

    Parameters
    ----------
    board : Board
        The board to fill. **Modified in-place.**
    rng : Generator, optional
        Random generator. The module-level generator is used when omitted.
    probs : Mapping[int, float], optional
        Probability of each tile value (default is 90% for 2 and 10% for 4).

    Returns
    -------
    int | None
        Index of the filled cell, or None if the board is full.
    """
    rng = rng if rng is not None else _GENERATOR

    empty_cells = board.empty_cells()
    if not empty_cells:
        return None

    index = empty_cells[int(rng.integers(len(empty_cells)))]
    value = int(rng.choice(list(probs), p=list(probs.values())))
    board.set(*board.position(index), value)
    return index


def fill_cells(
    board: Board, number_tile: int, rng: Generator | None = None, probs: Mapping[int, float] = TILE_SPAWN_PROBS
) -> list[int]:
    """
    Fill empty cells with new tiles.

    Parameters
    ----------
    board : Board
        The board to fill. **Modified in-place.**
    number_tile : int
        Number of new tiles to add.
    rng : Generator, optional
        Random generator. The module-level generator is used when omitted.
    probs : Mapping[int, float], optional
        Probability of each tile value.

    Returns
    -------
    list[int]
        Indices of the filled cells.

    Notes
    -----
    If there are fewer empty cells than requested, it fills all available cells.
    """
    filled = []
    for _ in range(number_tile):
        index = spawn_tile(board, rng=rng, probs=probs)
        if index is None:
            break
        filled.append(index)
    return filled
