"""
Move-choosing strategies used by drivers, built on the search engine.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional

import numpy as np

from .config import get_search_settings
from .game import Game
from .mcts import MonteCarloTreeSearch
from .types import ChildStats


class SearchStrategy(ABC):
    """Abstract interface for move-choosing strategies."""

    @abstractmethod
    def choose_move(self, game: Game) -> Optional[Any]:  # pragma: no cover
        raise NotImplementedError


class MCTSSearchStrategy(SearchStrategy):
    """Builds a new search tree for every move and searches it under a time budget."""

    def __init__(self, time_limit_ms: Optional[int] = None, seed: Optional[int] = None,
                 rollouts_per_step: Optional[int] = None) -> None:
        settings = get_search_settings()
        self.time_limit_ms: int = time_limit_ms if time_limit_ms is not None else settings.time_limit_ms
        self.rollouts_per_step = rollouts_per_step
        self.rng = np.random.default_rng(seed if seed is not None else settings.seed)
        self.last_stats: List[ChildStats] = []

    def choose_move(self, game: Game) -> Optional[Any]:
        mcts = MonteCarloTreeSearch(game, rollouts_per_step=self.rollouts_per_step, rng=self.rng)
        mcts.evaluate_tree_with_time_limit(self.time_limit_ms)
        self.last_stats = mcts.child_stats()
        return mcts.best_move()


class RandomStrategy(SearchStrategy):
    """Plays a uniformly random legal move."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = np.random.default_rng(seed)

    def choose_move(self, game: Game) -> Optional[Any]:
        moves = game.possible_moves()
        if not moves:
            return None
        return moves[int(self.rng.integers(len(moves)))]


def get_search_strategy(name: str = "mcts", **kwargs: Any) -> SearchStrategy:
    """Factory for a strategy by name ('mcts' or 'random')."""
    if name == "mcts":
        return MCTSSearchStrategy(**kwargs)
    if name == "random":
        return RandomStrategy(**kwargs)
    raise ValueError(f"Unknown strategy: {name!r}")


__all__ = [
    "SearchStrategy",
    "MCTSSearchStrategy",
    "RandomStrategy",
    "get_search_strategy",
]
