from __future__ import annotations

from draughts.engine import EnglishDraughts
from draughts.search import get_search_strategy
from draughts.types import PlayerId


def test_end_to_end_search_and_play():
    game = EnglishDraughts(8)
    strategy = get_search_strategy("mcts", time_limit_ms=50, seed=0)

    move = strategy.choose_move(game)
    assert move is not None
    before = game.board.clone()
    game.play(move)
    assert game.board != before
    assert game.player() is PlayerId.TWO


def test_full_game_mcts_against_random():
    game = EnglishDraughts(6)
    players = {
        PlayerId.ONE: get_search_strategy("mcts", time_limit_ms=5, seed=1),
        PlayerId.TWO: get_search_strategy("random", seed=2),
    }
    while game.winner() is None:
        game.play(players[game.player()].choose_move(game))
    assert game.winner() in (PlayerId.ONE, PlayerId.TWO, PlayerId.NONE)
