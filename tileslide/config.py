"""
Configuration of a tile-sliding game.
"""

from dataclasses import dataclass, field
from math import isclose

from tileslide.core.gameboard import TILE_SPAWN_PROBS, WIN_VALUE


def _is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


@dataclass
class GameConfig:
    """
    Configuration of a game session.

    Attributes
    ----------
    size : int
        Size of the square board.
    win_value : int
        Tile value that wins the game.
    start_tiles : int
        Number of tiles spawned on a fresh board.
    tile_spawn_probs : dict[int, float]
        Probability of each spawned tile value.
    high_score_key : str
        Key under which the high score is kept in the score store.
    seed : int | None
        Seed of the spawning generator. None draws fresh entropy.
    """

    size: int = 4
    win_value: int = WIN_VALUE
    start_tiles: int = 2
    tile_spawn_probs: dict[int, float] = field(default_factory=lambda: dict(TILE_SPAWN_PROBS))
    high_score_key: str = 'high_score'
    seed: int | None = None

    def __post_init__(self):
        if self.size < 2:
            raise ValueError(f'size must be at least 2, got {self.size}')
        if self.win_value < 4 or not _is_power_of_two(self.win_value):
            raise ValueError(f'win_value must be a power of two >= 4, got {self.win_value}')
        if not 0 <= self.start_tiles <= self.size * self.size:
            raise ValueError(f'start_tiles must be between 0 and {self.size * self.size}, got {self.start_tiles}')

        if not self.tile_spawn_probs:
            raise ValueError('tile_spawn_probs must not be empty')
        for value, prob in self.tile_spawn_probs.items():
            if value < 2 or not _is_power_of_two(value):
                raise ValueError(f'Spawned tile values must be powers of two >= 2, got {value}')
            if prob < 0:
                raise ValueError(f'Probability of tile {value} is negative')
        if not isclose(sum(self.tile_spawn_probs.values()), 1.0):
            raise ValueError('tile_spawn_probs must sum to 1')


def default_config() -> GameConfig:
    """Configuration of the standard 4x4 game up to 2048."""
    return GameConfig()
