"""Game session holding the board, the score and the high score of one player."""

import logging
from contextlib import contextmanager
from typing import Iterator, NamedTuple

from numpy.random import Generator

from tileslide.config import GameConfig, default_config
from tileslide.core.board import Board, new_board
from tileslide.core.direction import ACTIONS, Direction
from tileslide.core.errors import SessionBusy
from tileslide.core.gameboard import (
    Transition,
    compute_transition,
    fill_cells,
    is_terminal,
    is_win,
    make_rng,
    spawn_tile,
)
from tileslide.core.gamemove import legal_directions
from tileslide.envs.storage import MemoryStore, ScoreStore

logger = logging.getLogger(__name__)


def _stored_score(value: object) -> int:
    """Score read from a store, 0 when missing or unusable."""
    try:
        return max(int(value), 0) if value else 0
    except (TypeError, ValueError):
        return 0


class StepOutcome(NamedTuple):
    """
    Everything a step changed.

    Attributes
    ----------
    transition : Transition
        The transition computed by the engine.
    spawned : int | None
        Index of the tile spawned after the move, None if the move was a no-op.
    won : bool
        Whether the board holds the winning tile.
    finished : bool
        Whether no further move is possible.
    """

    transition: Transition
    spawned: int | None
    won: bool
    finished: bool


class GameSession:
    """
    One game of the tile-sliding puzzle.

    The session owns the current board and score, and serializes transitions through a busy flag: a step
    requested while another step (or a :meth:`hold`) is in progress raises :class:`SessionBusy`.
    """

    # ##: All Actions.
    ACTIONS = ACTIONS

    def __init__(self, config: GameConfig | None = None, store: ScoreStore | None = None, rng: Generator | None = None):
        """
        Initialize the session and start a first game.

        Parameters
        ----------
        config : GameConfig, optional
            Game configuration (default is the standard 4x4 game).
        store : ScoreStore, optional
            Where the high score is kept (default is an in-memory store).
        rng : Generator, optional
            Generator used to spawn tiles. Built from ``config.seed`` when omitted.
        """
        self.config = config if config is not None else default_config()
        self.store = store if store is not None else MemoryStore()
        self._rng = rng if rng is not None else make_rng(self.config.seed)

        self.high_score = _stored_score(self.store.get(self.config.high_score_key, 0))
        self.busy = False

        self.board: Board = new_board(self.config.size)
        self.score = 0
        self._won = False
        self.reset()

    @property
    def is_won(self) -> bool:
        """Whether the board holds the winning tile."""
        return is_win(self.board, self.config.win_value)

    @property
    def is_finished(self) -> bool:
        """Whether no direction can change the board any more."""
        return is_terminal(self.board)

    @property
    def legal_directions(self) -> list[Direction]:
        """Directions that would move at least one tile."""
        return legal_directions(self.board)

    def reset(self, seed: int | None = None) -> Board:
        """
        Start a new game on an empty board with the configured number of starting tiles.

        Parameters
        ----------
        seed : int, optional
            Reseed the spawning generator.

        Returns
        -------
        Board
            The new board.
        """
        if self.busy:
            raise SessionBusy('Cannot reset while a step is in progress')
        if seed is not None:
            self._rng = make_rng(seed)

        self.board = new_board(self.config.size)
        self.score = 0
        self._won = False
        fill_cells(self.board, self.config.start_tiles, rng=self._rng, probs=self.config.tile_spawn_probs)
        return self.board

    def step(self, direction: Direction | str | int) -> StepOutcome:
        """
        Push the board in a direction.

        Parameters
        ----------
        direction : Direction | str | int
            Direction of the push (0: left, 1: up, 2: right, 3: down).

        Returns
        -------
        StepOutcome
            The transition, the spawned tile and the game status.

        Raises
        ------
        SessionBusy
            If another step is in progress.
        InvalidDirection
            If ``direction`` is not a valid direction token.

        Notes
        -----
        - A move that changes nothing spawns no tile and leaves the score as is.
        - The high score is written to the store as soon as the score exceeds it.
        """
        with self.hold():
            direction = Direction.parse(direction)
            transition = compute_transition(self.board, direction)
            if not transition.changed:
                logger.debug('No tile moved %s', direction.value)
                return StepOutcome(transition, None, self.is_won, self.is_finished)

            # ##: Apply the transition.
            self.board = transition.board.clone()
            self.score += transition.score
            logger.debug('Moved %s: %d moves, +%d points', direction.value, len(transition.moves), transition.score)
            self._update_high_score()

            # ##: Fill randomly one cell.
            spawned = spawn_tile(self.board, rng=self._rng, probs=self.config.tile_spawn_probs)

            won, finished = self.is_won, self.is_finished
            if won and not self._won:
                self._won = True
                logger.info('Reached %d with a score of %d', self.config.win_value, self.score)
            if finished:
                logger.info('Game over with a score of %d', self.score)
            return StepOutcome(transition, spawned, won, finished)

    @contextmanager
    def hold(self) -> Iterator['GameSession']:
        """
        Mark the session busy for the duration of the block.

        Raises
        ------
        SessionBusy
            If the session is already busy.
        """
        if self.busy:
            raise SessionBusy('A step is already in progress')
        self.busy = True
        try:
            yield self
        finally:
            self.busy = False

    def render(self) -> None:
        """
        Render the game board. This method prints the current state of the game board to the console.
        """
        for row in self.board.as_grid().tolist():
            print(' \t'.join(map(str, row)))

    def _update_high_score(self) -> None:
        if self.score > self.high_score:
            self.high_score = self.score
            self.store.set(self.config.high_score_key, self.high_score)
            logger.debug('New high score %d', self.high_score)
