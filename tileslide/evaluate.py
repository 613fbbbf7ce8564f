# -*- coding: utf-8 -*-
"""
Play random games and report how far they get.
"""
import logging
from collections import Counter
from typing import Dict, Tuple

from numpy.random import Generator
from tqdm import trange

from tileslide.config import GameConfig, default_config
from tileslide.core.gameboard import make_rng
from tileslide.envs import GameSession

logger = logging.getLogger(__name__)


def play_game(session: GameSession, rng: Generator) -> Tuple[int, int]:
    """
    Play a game until no move is possible, choosing uniformly among legal directions.

    Parameters
    ----------
    session : GameSession
        A freshly reset session.
    rng : Generator
        Generator used to pick directions.

    Returns
    -------
    Tuple[int, int]
        The final score and the largest tile reached.
    """
    legal = session.legal_directions
    while legal:
        session.step(legal[int(rng.integers(len(legal)))])
        legal = session.legal_directions
    return session.score, session.board.max_tile


def evaluate(
    games: int = 10, config: GameConfig | None = None, seed: int | None = None, show_progress: bool = True
) -> Dict[int, int]:
    """
    Play several random games.

    Parameters
    ----------
    games : int, optional
        The number of games to play (default is 10).
    config : GameConfig, optional
        Configuration of every game.
    seed : int, optional
        Seed for both tile spawning and direction choice. Falls back to ``config.seed``.
    show_progress : bool, optional
        Whether to show a progress bar.

    Returns
    -------
    Dict[int, int]
        How many games ended with each largest tile.
    """
    config = config if config is not None else default_config()
    seed = seed if seed is not None else config.seed
    session = GameSession(config=config, rng=make_rng(seed))
    chooser = make_rng(None if seed is None else seed + 1)
    tiles = []

    with trange(games, disable=not show_progress) as period:
        for num in period:
            session.reset()
            score, max_tile = play_game(session, chooser)

            # ##: Log.
            period.set_description(f"Game: {num + 1}")
            period.set_postfix(score=score, max=max_tile)
            logger.debug("Game %d ended with score %d and tile %d", num + 1, score, max_tile)

            # ##: Save max cells.
            tiles.append(max_tile)

    # ##: Final log.
    return dict(sorted(Counter(tiles).items()))


if __name__ == "__main__":
    from argparse import ArgumentParser

    parser = ArgumentParser(description="Play random games of the tile-sliding puzzle.")
    parser.add_argument("--games", type=int, default=10)
    parser.add_argument("--size", type=int, default=4)
    parser.add_argument("--win-value", type=int, default=2048)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    settings = GameConfig(size=args.size, win_value=args.win_value, seed=args.seed)
    result = evaluate(games=args.games, config=settings, seed=args.seed)
    wins = sum(count for tile, count in result.items() if tile >= settings.win_value)
    print(f"Max tiles over {args.games} games: {result}, wins: {wins}")
