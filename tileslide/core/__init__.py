# -*- coding: utf-8 -*-
"""
This module provides the board and the transition engine of the tile-sliding game.

It includes the board storage, move directions, directional transitions with the list of
elementary moves they produce, terminal and win checks, legal direction queries and tile spawning.
"""

from .board import Board, new_board
from .direction import ACTIONS, Direction
from .errors import GameError, InvalidDirection, OutOfRange, SessionBusy
from .gameboard import (
    TILE_SPAWN_PROBS,
    WIN_VALUE,
    Move,
    Transition,
    compute_transition,
    fill_cells,
    is_terminal,
    is_win,
    make_rng,
    spawn_tile,
    traversal_order,
)
from .gamemove import can_move, illegal_directions, legal_directions, legal_mask

__all__ = [
    "Board",
    "new_board",
    "ACTIONS",
    "Direction",
    "GameError",
    "InvalidDirection",
    "OutOfRange",
    "SessionBusy",
    "TILE_SPAWN_PROBS",
    "WIN_VALUE",
    "Move",
    "Transition",
    "compute_transition",
    "traversal_order",
    "is_terminal",
    "is_win",
    "make_rng",
    "spawn_tile",
    "fill_cells",
    "can_move",
    "legal_mask",
    "legal_directions",
    "illegal_directions",
]
