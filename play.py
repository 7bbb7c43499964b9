from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from draughts import EnglishDraughts, PlayerId, get_search_strategy, setup_logging
from draughts.config import get_config

logger = logging.getLogger("play")


def positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return n


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    search = get_config().search
    ap = argparse.ArgumentParser(description="Play a game of English draughts between two strategies")
    ap.add_argument("--white", choices=["mcts", "random"], default="mcts", help="Strategy for the whites")
    ap.add_argument("--black", choices=["mcts", "random"], default="random", help="Strategy for the blacks")
    ap.add_argument("--time", type=positive_int, default=search.time_limit_ms, help="MCTS budget per move (ms)")
    ap.add_argument("--seed", type=int, default=search.seed, help="Random seed")
    ap.add_argument("--size", type=int, default=get_config().rules.board_size, help="Board size")
    ap.add_argument("--max-plies", type=positive_int, default=500, help="Stop after this many plies")
    return ap.parse_args(argv)


def make_strategy(name: str, args: argparse.Namespace, offset: int):
    seed = None if args.seed is None else args.seed + offset
    if name == "mcts":
        return get_search_strategy("mcts", time_limit_ms=args.time, seed=seed)
    return get_search_strategy("random", seed=seed)


def main(argv: Optional[List[str]] = None) -> None:
    setup_logging()
    args = parse_args(argv)

    game = EnglishDraughts(board_size=args.size)
    players = {
        PlayerId.ONE: make_strategy(args.white, args, 0),
        PlayerId.TWO: make_strategy(args.black, args, 1),
    }
    while game.winner() is None and game.nb_turn <= args.max_plies:
        move = players[game.player()].choose_move(game)
        logger.info("%d. %s plays %s", game.nb_turn, game.player().name, game.move_to_str(move))
        game.play(move)

    winner = game.winner()
    if winner is None:
        logger.info("Stopped after %d plies without result", args.max_plies)
    elif winner is PlayerId.NONE:
        logger.info("Draw after %d plies", game.nb_turn - 1)
    else:
        logger.info("%s wins after %d plies", winner.name, game.nb_turn - 1)


if __name__ == "__main__":
    main()
