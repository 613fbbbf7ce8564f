"""Deterministic engine for 2048-style tile-sliding puzzles."""

__version__ = "0.1.0"
