"""
Type definitions shared by the draughts rules engine and the search engine.

This module provides:
- Type aliases for squares and moves
- Enumerations for players and checker types
- Error types raised by the rules engine
- Dataclasses for search diagnostics
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Sequence, Tuple

# Basic type aliases
SquareIndex = int  # 1..size*size/2 for dark squares, 0 is off-board
Move = Tuple[int, ...]  # Move sequence: (from, to, ...) for jumps
Position = Tuple[int, int]  # (row, col) coordinates

# Sentinel returned by geometry queries that leave the board
OFF_BOARD: SquareIndex = 0


class PlayerId(Enum):
    """Player identifiers. ONE plays the whites, TWO the blacks."""

    ONE = 1
    TWO = 2
    NONE = 0  # nobody: used to report a draw

    def adversary(self) -> "PlayerId":
        if self is PlayerId.ONE:
            return PlayerId.TWO
        if self is PlayerId.TWO:
            return PlayerId.ONE
        return PlayerId.NONE


class CheckerType(IntEnum):
    EMPTY = 0
    WHITE_MAN = 1
    BLACK_MAN = 2
    WHITE_KING = 3
    BLACK_KING = 4


class DraughtsError(Exception):
    """Base class for rules engine errors."""


class IllegalMoveError(DraughtsError, ValueError):
    """Raised when play() receives a move that is not legal in the position."""


class MalformedMoveError(DraughtsError, TypeError):
    """Raised when a move is not a sequence of at least two board squares."""


@dataclass(frozen=True)
class ChildStats:
    """Statistics of one root child of the search tree."""

    move: Any
    visits: int
    wins: float
    score: float


def as_move(steps: Sequence[int], nb_squares: int) -> Move:
    """Normalise a sequence of squares into a Move tuple, checking its shape."""
    if isinstance(steps, (str, bytes)) or not isinstance(steps, Sequence):
        raise MalformedMoveError(f"Move must be a sequence of squares, got {steps!r}")
    if len(steps) < 2:
        raise MalformedMoveError(f"Move needs at least two squares, got {list(steps)}")
    for s in steps:
        if isinstance(s, bool) or not isinstance(s, int):
            raise MalformedMoveError(f"Square {s!r} is not an integer")
        if not (1 <= s <= nb_squares):
            raise MalformedMoveError(f"Square {s} is off the board (1..{nb_squares})")
    return tuple(int(s) for s in steps)


def is_valid_player(player: Any) -> bool:
    """Check if a value identifies a side that can be to move."""
    return player in (PlayerId.ONE, PlayerId.TWO)
