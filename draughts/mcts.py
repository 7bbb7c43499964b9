"""
Monte-Carlo Tree Search for two-player games implementing `draughts.game.Game`.

Flat UCT: selection by upper confidence bound, expansion of one untried move,
uniform random rollouts, backpropagation of the rollout statistics along the
visited path. A fresh tree is meant to be built for every real move.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, List, Optional

import numpy as np

from .config import get_search_settings
from .game import Game
from .types import ChildStats, PlayerId

logger = logging.getLogger(__name__)


class RolloutResults:
    """Wins of each player over a number of playouts. A draw counts half a win for both."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.n: int = 0
        self.win1: float = 0.0
        self.win2: float = 0.0

    def add(self, res: "RolloutResults") -> None:
        self.win1 += res.win1
        self.win2 += res.win2
        self.n += res.n

    def update(self, winner: PlayerId) -> None:
        if winner is PlayerId.ONE:
            self.win1 += 1
        elif winner is PlayerId.TWO:
            self.win2 += 1
        elif winner is PlayerId.NONE:
            self.win1 += 0.5
            self.win2 += 0.5
        else:
            raise ValueError(f"Unsupported winner: {winner!r}")
        self.n += 1

    def nb_wins(self, player: PlayerId) -> float:
        if player is PlayerId.ONE:
            return self.win1
        if player is PlayerId.TWO:
            return self.win2
        return 0.0


class EvalNode:
    """A node of the search tree.

    `w` counts the wins of the player to move in `game`, so `score()` is the
    estimated winning probability of that player. Seen from the parent, whose
    mover is the adversary, a child is good when its score is low.
    """

    __slots__ = ("game", "move", "n", "w", "children", "_untried")

    def __init__(self, game: Game, move: Any = None) -> None:
        self.game = game
        self.move = move
        self.n: int = 0
        self.w: float = 0.0
        self.children: List[EvalNode] = []
        self._untried: Optional[List[Any]] = None

    def __repr__(self) -> str:
        return f"EvalNode(move={self.move!r}, w={self.w}, n={self.n}, children={len(self.children)})"

    def is_leaf(self) -> bool:
        return not self.children

    def score(self) -> float:
        if self.n == 0:
            return 0.0
        return self.w / self.n

    def untried_moves(self) -> List[Any]:
        """Legal moves not yet represented by a child. Empty for terminal states."""
        if self._untried is None:
            if self.game.winner() is None:
                self._untried = list(self.game.possible_moves())
            else:
                self._untried = []
        return self._untried

    def update_stats(self, res: RolloutResults) -> None:
        self.w += res.nb_wins(self.game.player())
        self.n += res.n


def uct_values(children: List[EvalNode], parent_visits: int, exploration: float = 2.0) -> np.ndarray:
    """UCT value of each child, from the point of view of the parent's player.

    (1 - score) + sqrt(exploration * ln(N) / n), where unvisited children and an
    unvisited parent fall back to a visit count of 1.
    """
    n = np.array([c.n for c in children], dtype=np.float64)
    w = np.array([c.w for c in children], dtype=np.float64)
    score = np.divide(w, n, out=np.zeros_like(w), where=n > 0)
    bonus = np.sqrt(exploration * np.log(max(parent_visits, 1)) / np.maximum(n, 1.0))
    return (1.0 - score) + bonus


class MonteCarloTreeSearch:
    """UCT search from a given game state.

    Usage:
        mcts = MonteCarloTreeSearch(game)
        mcts.evaluate_tree_with_time_limit(500)
        move = mcts.best_move()
    """

    def __init__(self, game: Game, rollouts_per_step: Optional[int] = None,
                 exploration: Optional[float] = None, seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None) -> None:
        settings = get_search_settings()
        self.root = EvalNode(game.clone())
        self.n_total: int = 0
        self.rollouts_per_step: int = rollouts_per_step if rollouts_per_step is not None else settings.rollouts_per_step
        self.exploration: float = exploration if exploration is not None else settings.exploration
        if rng is None:
            rng = np.random.default_rng(seed if seed is not None else settings.seed)
        self.rng = rng

    def _random_element(self, items: List[Any]) -> Any:
        return items[int(self.rng.integers(len(items)))]

    def play_randomly_to_end(self, game: Game) -> PlayerId:
        """Play uniformly random moves on `game` until the game ends; return the winner."""
        winner = game.winner()
        while winner is None:
            game.play(self._random_element(game.possible_moves()))
            winner = game.winner()
        return winner

    def roll_out(self, game: Game, nb_runs: int) -> RolloutResults:
        """Run `nb_runs` playouts from copies of `game` (left untouched)."""
        results = RolloutResults()
        for _ in range(nb_runs):
            results.update(self.play_randomly_to_end(game.clone()))
        return results

    def select_child(self, parent: EvalNode) -> EvalNode:
        """Child with the highest UCT value, the earliest one on ties."""
        values = uct_values(parent.children, parent.n, self.exploration)
        return parent.children[int(np.argmax(values))]

    def expand(self, parent: EvalNode) -> EvalNode:
        """Create a child for one untried move picked at random."""
        pool = parent.untried_moves()
        move = pool.pop(int(self.rng.integers(len(pool))))
        state = parent.game.clone()
        state.play(move)
        child = EvalNode(state, move)
        parent.children.append(child)
        return child

    def evaluate_tree_once(self) -> bool:
        """Perform one step: selection, expansion, simulation, backpropagation.

        Returns True when the selected node is terminal. Nothing is updated in
        that case, so the next step would select the same node again and the
        search can stop.
        """
        node = self.root
        visited = [node]
        while node.children and not node.untried_moves():
            node = self.select_child(node)
            visited.append(node)

        if not node.untried_moves():
            return True

        child = self.expand(node)
        visited.append(child)
        results = self.roll_out(child.game, self.rollouts_per_step)
        for v in visited:
            v.update_stats(results)
        self.n_total += results.n
        return False

    def evaluate_tree_iterations(self, iterations: int) -> int:
        """Run at most `iterations` steps. Returns the number of steps performed."""
        done = 0
        for _ in range(iterations):
            if self.evaluate_tree_once():
                break
            done += 1
        return done

    def evaluate_tree_with_time_limit(self, time_limit_ms: Optional[int] = None) -> None:
        """Run steps until `time_limit_ms` milliseconds have elapsed.

        The clock is only checked between steps, so a step started before the
        deadline always completes.
        """
        if time_limit_ms is None:
            time_limit_ms = get_search_settings().time_limit_ms
        start = time.perf_counter()
        while (time.perf_counter() - start) * 1000.0 < time_limit_ms:
            if self.evaluate_tree_once():
                break

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        root = self.root
        loss = 100.0 * root.w / root.n if root.n else 0.0
        logger.info("Stopped search after %.0f ms. Root stats is %.1f/%d (%.2f%% loss)",
                    elapsed_ms, root.w, root.n, loss)
        if logger.isEnabledFor(logging.DEBUG):
            for line in self.stats().splitlines():
                logger.debug(line)

    def best_move(self) -> Any:
        """The move of the root child with the lowest score (the adversary's win
        rate), the earliest child on ties. None before any expansion."""
        children = self.root.children
        if not children:
            return None
        scores = np.array([c.score() for c in children], dtype=np.float64)
        return children[int(np.argmin(scores))].move

    def child_stats(self) -> List[ChildStats]:
        return [ChildStats(move=c.move, visits=c.n, wins=c.w, score=c.score())
                for c in self.root.children]

    def stats(self, fmt: Callable[[Any], str] = str) -> str:
        lines = [f"MCTS with {self.n_total} evals"]
        for c in self.child_stats():
            lines.append(f"{fmt(c.move)} : {c.score:.4f} ({c.wins}/{c.visits})")
        return "\n".join(lines)
