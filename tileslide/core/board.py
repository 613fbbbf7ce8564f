"""
Fixed-size square board of tile values, stored row-major in a flat numpy array.
"""

from typing import Iterable, Sequence

from numpy import array, array_equal, flatnonzero, int64, ndarray, zeros

from tileslide.core.errors import OutOfRange


class Board:
    """
    Square grid of tile values.

    Cells are kept in a one-dimensional array of length ``size * size`` in row-major order.
    A value of 0 marks an empty cell; every other value is a power of two.

    Parameters
    ----------
    size : int, optional
        Number of rows (and columns) of the board (default is 4).

    Raises
    ------
    ValueError
        If ``size`` is not a positive integer.
    """

    __slots__ = ('size', '_cells')

    def __init__(self, size: int = 4):
        if size < 1:
            raise ValueError(f'Board size must be positive, got {size}')
        self.size = size
        self._cells = zeros(size * size, dtype=int64)

    @classmethod
    def from_cells(cls, cells: Iterable[int], size: int | None = None) -> 'Board':
        """
        Build a board from a flat row-major sequence of values.

        Parameters
        ----------
        cells : Iterable[int]
            Row-major values, ``size * size`` of them.
        size : int, optional
            Board size. Inferred from the number of values when omitted.

        Returns
        -------
        Board
            A new board holding a copy of the values.

        Raises
        ------
        ValueError
            If the number of values does not match a square board.
        """
        values = array(list(cells), dtype=int64)
        if size is None:
            size = int(round(len(values) ** 0.5))
        if size < 1 or len(values) != size * size:
            raise ValueError(f'Expected {size * size} cells for a {size}x{size} board, got {len(values)}')

        board = cls(size)
        board._cells[:] = values
        return board

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> 'Board':
        """Build a board from a list of rows."""
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise ValueError('Rows must form a square grid')
        return cls.from_cells((value for row in rows for value in row), size=size)

    @property
    def cells(self) -> ndarray:
        """Read-only row-major view of the cell values."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    @property
    def max_tile(self) -> int:
        """Largest tile value on the board (0 for an empty board)."""
        return int(self._cells.max())

    def index(self, row: int, col: int) -> int:
        """
        Convert a coordinate into a row-major cell index.

        Raises
        ------
        OutOfRange
            If ``row`` or ``col`` lies outside ``[0, size)``.
        """
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise OutOfRange(row, col, self.size)
        return row * self.size + col

    def position(self, index: int) -> tuple[int, int]:
        """Convert a row-major cell index back into a ``(row, col)`` coordinate."""
        row, col = divmod(index, self.size)
        if not 0 <= index < self.size * self.size:
            raise OutOfRange(row, col, self.size)
        return row, col

    def get(self, row: int, col: int) -> int:
        """Value stored at ``(row, col)``."""
        return int(self._cells[self.index(row, col)])

    def set(self, row: int, col: int, value: int) -> None:
        """Store ``value`` at ``(row, col)``; the value itself is not checked."""
        self._cells[self.index(row, col)] = value

    def empty_cells(self) -> list[int]:
        """Row-major indices of every empty cell."""
        return [int(index) for index in flatnonzero(self._cells == 0)]

    def clone(self) -> 'Board':
        """Independent copy of the board."""
        board = Board(self.size)
        board._cells[:] = self._cells
        return board

    def as_grid(self) -> ndarray:
        """Copy of the cells shaped as a ``(size, size)`` array."""
        return self._cells.reshape(self.size, self.size).copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and array_equal(self._cells, other._cells)

    def __repr__(self) -> str:
        return f'Board(size={self.size}, rows={self.as_grid().tolist()})'


def new_board(size: int = 4) -> Board:
    """
    Create an empty board.

    Parameters
    ----------
    size : int, optional
        The size of the square grid (default is 4).

    Returns
    -------
    Board
        A board whose cells are all empty.
    """
    return Board(size)
