from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Tuple

from .types import OFF_BOARD, CheckerType, Position, SquareIndex

# -----------------------------
# Board indexing and utilities
# -----------------------------
_UP_LEFT = (-1, -1)
_UP_RIGHT = (-1, 1)
_DOWN_LEFT = (1, -1)
_DOWN_RIGHT = (1, 1)

_WHITES = (CheckerType.WHITE_MAN, CheckerType.WHITE_KING)
_BLACKS = (CheckerType.BLACK_MAN, CheckerType.BLACK_KING)
_KINGS = (CheckerType.WHITE_KING, CheckerType.BLACK_KING)


class _Geometry:
    """Square numbering and neighbour tables for one board size."""

    def __init__(self, size: int) -> None:
        self.size = size
        self.nb_squares = size * size // 2
        self.rc_of: List[Position] = [(-1, -1)]
        self.idx_map: Dict[Position, SquareIndex] = {}
        i = 1
        for r in range(size):
            for c in range(size):
                if (r + c) % 2 == 1:
                    self.rc_of.append((r, c))
                    self.idx_map[(r, c)] = i
                    i += 1
        # neighbours[d][square], index 0 maps to OFF_BOARD
        self.neighbours: Dict[Tuple[int, int], List[SquareIndex]] = {}
        for dr, dc in (_UP_LEFT, _UP_RIGHT, _DOWN_LEFT, _DOWN_RIGHT):
            table = [OFF_BOARD] * (self.nb_squares + 1)
            for idx in range(1, self.nb_squares + 1):
                r, c = self.rc_of[idx]
                table[idx] = self.idx_map.get((r + dr, c + dc), OFF_BOARD)
            self.neighbours[(dr, dc)] = table


@lru_cache(maxsize=None)
def _geometry(size: int) -> _Geometry:
    return _Geometry(size)


class CheckerBoard:
    """A size x size draughts board holding a checker type for each dark square.

    Squares are numbered from 1 in reading order (row 0 at the top), over the
    dark squares only. Whites start at the bottom and move up, blacks start at
    the top and move down.
    """

    def __init__(self, size: int = 8, setup: bool = True) -> None:
        if not isinstance(size, int) or size < 4 or size % 2 != 0:
            raise ValueError(f"Board size must be an even integer >= 4, got {size!r}")
        self.size = size
        self._geo = _geometry(size)
        self.squares: List[CheckerType] = [CheckerType.EMPTY] * (self._geo.nb_squares + 1)
        if setup:
            self._setup()

    def _setup(self) -> None:
        rows = self.size // 2 - 1
        for i in range(1, self.nb_playable_tiles() + 1):
            line = self.line_of_square(i)
            if line < rows:
                self.squares[i] = CheckerType.BLACK_MAN
            elif line >= self.size - rows:
                self.squares[i] = CheckerType.WHITE_MAN

    def clone(self) -> "CheckerBoard":
        other = CheckerBoard.__new__(CheckerBoard)
        other.size = self.size
        other._geo = self._geo
        other.squares = self.squares[:]
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CheckerBoard):
            return NotImplemented
        return self.size == other.size and self.squares == other.squares

    def __repr__(self) -> str:
        return f"CheckerBoard(size={self.size}, whites={self.white_pawns()}, blacks={self.black_pawns()})"

    # Geometry

    def nb_playable_tiles(self) -> int:
        return self._geo.nb_squares

    def tile_exists(self, square: SquareIndex) -> bool:
        return 1 <= square <= self._geo.nb_squares

    def rc(self, square: SquareIndex) -> Position:
        """Convert square index to row/column coordinates."""
        return self._geo.rc_of[square]

    def square_at(self, row: int, col: int) -> SquareIndex:
        return self._geo.idx_map.get((row, col), OFF_BOARD)

    def line_of_square(self, square: SquareIndex) -> int:
        return self._geo.rc_of[square][0]

    def _neighbor(self, square: SquareIndex, direction: Tuple[int, int]) -> SquareIndex:
        if not self.tile_exists(square):
            return OFF_BOARD
        return self._geo.neighbours[direction][square]

    def neighbor_up_left(self, square: SquareIndex) -> SquareIndex:
        return self._neighbor(square, _UP_LEFT)

    def neighbor_up_right(self, square: SquareIndex) -> SquareIndex:
        return self._neighbor(square, _UP_RIGHT)

    def neighbor_down_left(self, square: SquareIndex) -> SquareIndex:
        return self._neighbor(square, _DOWN_LEFT)

    def neighbor_down_right(self, square: SquareIndex) -> SquareIndex:
        return self._neighbor(square, _DOWN_RIGHT)

    def is_adjacent(self, a: SquareIndex, b: SquareIndex) -> bool:
        """True if b is one diagonal step away from a."""
        return b != OFF_BOARD and b in (
            self.neighbor_up_left(a),
            self.neighbor_up_right(a),
            self.neighbor_down_left(a),
            self.neighbor_down_right(a),
        )

    def square_between(self, a: SquareIndex, b: SquareIndex) -> SquareIndex:
        """Get the square jumped over when going from a to b, or OFF_BOARD."""
        if not (self.tile_exists(a) and self.tile_exists(b)):
            return OFF_BOARD
        ra, ca = self.rc(a)
        rb, cb = self.rc(b)
        if abs(ra - rb) == 2 and abs(ca - cb) == 2:
            return self.square_at((ra + rb) // 2, (ca + cb) // 2)
        return OFF_BOARD

    # State

    def _checked(self, square: SquareIndex) -> SquareIndex:
        if not self.tile_exists(square):
            raise ValueError(f"Square {square!r} is off the board (1..{self._geo.nb_squares})")
        return square

    def get(self, square: SquareIndex) -> CheckerType:
        return self.squares[self._checked(square)]

    def set(self, square: SquareIndex, checker: CheckerType) -> None:
        self.squares[self._checked(square)] = CheckerType(checker)

    # Queries on a square that does not exist are False.

    def is_empty(self, square: SquareIndex) -> bool:
        return self.tile_exists(square) and self.squares[square] == CheckerType.EMPTY

    def is_white(self, square: SquareIndex) -> bool:
        return self.tile_exists(square) and self.squares[square] in _WHITES

    def is_black(self, square: SquareIndex) -> bool:
        return self.tile_exists(square) and self.squares[square] in _BLACKS

    def is_king(self, square: SquareIndex) -> bool:
        return self.tile_exists(square) and self.squares[square] in _KINGS

    def remove_pawn(self, square: SquareIndex) -> None:
        self.squares[self._checked(square)] = CheckerType.EMPTY

    def move_pawn(self, origin: SquareIndex, destination: SquareIndex) -> None:
        self._checked(origin)
        self.squares[self._checked(destination)] = self.squares[origin]
        self.squares[origin] = CheckerType.EMPTY

    def crown_pawn(self, square: SquareIndex) -> None:
        """Promote a man to king in place. Kings and empty squares are left as is."""
        if self.squares[self._checked(square)] == CheckerType.WHITE_MAN:
            self.squares[square] = CheckerType.WHITE_KING
        elif self.squares[square] == CheckerType.BLACK_MAN:
            self.squares[square] = CheckerType.BLACK_KING

    def clear(self) -> None:
        for i in range(1, len(self.squares)):
            self.squares[i] = CheckerType.EMPTY

    def white_pawns(self) -> List[SquareIndex]:
        return [i for i in range(1, len(self.squares)) if self.squares[i] in _WHITES]

    def black_pawns(self) -> List[SquareIndex]:
        return [i for i in range(1, len(self.squares)) if self.squares[i] in _BLACKS]

    def count_pieces(self) -> Tuple[int, int, int, int]:
        """Count pieces of each type on the board.

        Returns:
            Tuple of (white_men, black_men, white_kings, black_kings)
        """
        return (
            self.squares.count(CheckerType.WHITE_MAN),
            self.squares.count(CheckerType.BLACK_MAN),
            self.squares.count(CheckerType.WHITE_KING),
            self.squares.count(CheckerType.BLACK_KING),
        )
