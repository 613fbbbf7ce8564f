# -*- coding: utf-8 -*-
"""
Game sessions of the tile-sliding puzzle.

This module provides the `GameSession` class, which holds the board, score and high score of a game and applies
directional moves to it, along with the key/value stores a session keeps its high score in.
"""

from .session import GameSession, StepOutcome
from .storage import MemoryStore, ScoreStore

__all__ = ["GameSession", "StepOutcome", "MemoryStore", "ScoreStore"]
