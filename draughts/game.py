"""
Game interface consumed by the search engine.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from .types import PlayerId


class Game(ABC):
    """A two-player, perfect-information game state.

    Moves can be any hashable value; the search engine never looks inside them.
    """

    @abstractmethod
    def player(self) -> PlayerId:  # pragma: no cover
        """The side to move."""
        raise NotImplementedError

    @abstractmethod
    def possible_moves(self) -> List[Any]:  # pragma: no cover
        """Legal moves for the side to move, possibly empty."""
        raise NotImplementedError

    @abstractmethod
    def play(self, move: Any) -> None:  # pragma: no cover
        """Apply a legal move in place."""
        raise NotImplementedError

    @abstractmethod
    def winner(self) -> Optional[PlayerId]:  # pragma: no cover
        """The winner, PlayerId.NONE for a draw, or None while the game goes on."""
        raise NotImplementedError

    @abstractmethod
    def clone(self) -> "Game":  # pragma: no cover
        """An independent deep copy of this state."""
        raise NotImplementedError

    def is_over(self) -> bool:
        return self.winner() is not None
