"""Move directions and the parsing of direction tokens."""

from enum import Enum
from numbers import Integral

from tileslide.core.errors import InvalidDirection

# ##: Action index of every direction.
ACTIONS = {'left': 0, 'up': 1, 'right': 2, 'down': 3}


class Direction(str, Enum):
    """
    The four directions a board can be pushed in.

    Action indices come from ``ACTIONS`` (0: left, 1: up, 2: right, 3: down).
    """

    LEFT = 'left'
    UP = 'up'
    RIGHT = 'right'
    DOWN = 'down'

    @property
    def vector(self) -> tuple[int, int]:
        """Unit step ``(d_row, d_col)`` a tile takes in this direction."""
        return _VECTORS[self]

    @property
    def action(self) -> int:
        """Action index of the direction."""
        return ACTIONS[self.value]

    @classmethod
    def parse(cls, token: 'Direction | str | int') -> 'Direction':
        """
        Resolve a direction token.

        Parameters
        ----------
        token : Direction | str | int
            A member, its name (case-insensitive), or its action index.

        Returns
        -------
        Direction
            The matching direction.

        Raises
        ------
        InvalidDirection
            If the token does not name a direction.
        """
        if isinstance(token, cls):
            return token
        if isinstance(token, str):
            try:
                return cls(token.strip().lower())
            except ValueError:
                pass
        elif isinstance(token, Integral) and not isinstance(token, bool) and 0 <= token < len(cls):
            return next(member for member in cls if member.action == token)
        raise InvalidDirection(token, tuple(member.value for member in cls))


_VECTORS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}
