"""Draughts package: rules engine and Monte-Carlo tree search.

Usage examples:
    from draughts import EnglishDraughts, MonteCarloTreeSearch
    from draughts import get_search_strategy
"""
from __future__ import annotations

# Rules
from .board import CheckerBoard
from .engine import EnglishDraughts
from .game import Game
from .moves import MoveGenerator, MoveValidator, format_move, legal_moves, parse_move_str
from .types import (
    OFF_BOARD,
    CheckerType,
    ChildStats,
    IllegalMoveError,
    MalformedMoveError,
    Move,
    PlayerId,
)

# Search
from .mcts import EvalNode, MonteCarloTreeSearch, RolloutResults
from .search import MCTSSearchStrategy, RandomStrategy, SearchStrategy, get_search_strategy

# Configuration
from .config import DraughtsConfig, get_config, setup_logging
