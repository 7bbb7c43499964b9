from __future__ import annotations

from typing import Callable, FrozenSet, List, Optional, Sequence, Tuple

from .board import CheckerBoard
from .types import OFF_BOARD, Move, PlayerId, SquareIndex

Step = Callable[[SquareIndex], SquareIndex]


def _directions(board: CheckerBoard, square: SquareIndex) -> Tuple[Step, ...]:
    """Neighbour functions a piece may follow: forward only for men, all four for kings."""
    up = (board.neighbor_up_left, board.neighbor_up_right)
    down = (board.neighbor_down_left, board.neighbor_down_right)
    if board.is_king(square):
        return up + down
    if board.is_white(square):
        return up
    if board.is_black(square):
        return down
    return ()


class MoveGenerator:
    """Generates legal moves for a given board and side to move.

    Capture chains are explored depth first with an explicit worklist. Each
    entry carries the path walked so far and the squares already captured in
    this chain: a piece can be jumped only once, but a landing square can be
    visited again. Only maximal chains are reported.
    """

    def __init__(self, board: CheckerBoard, player: PlayerId) -> None:
        self.board = board
        self.player = player

    def _is_mine(self, square: SquareIndex) -> bool:
        if self.player is PlayerId.ONE:
            return self.board.is_white(square)
        if self.player is PlayerId.TWO:
            return self.board.is_black(square)
        return False

    def _is_adversary(self, square: SquareIndex) -> bool:
        if self.player is PlayerId.ONE:
            return self.board.is_black(square)
        if self.player is PlayerId.TWO:
            return self.board.is_white(square)
        return False

    def my_pawns(self) -> List[SquareIndex]:
        if self.player is PlayerId.ONE:
            return self.board.white_pawns()
        if self.player is PlayerId.TWO:
            return self.board.black_pawns()
        return []

    def _gen_simple_moves(self, idx: SquareIndex) -> List[Move]:
        moves: List[Move] = []
        for step in _directions(self.board, idx):
            nb = step(idx)
            if self.board.tile_exists(nb) and self.board.is_empty(nb):
                moves.append((idx, nb))
        return moves

    def _gen_captures_from(self, idx: SquareIndex) -> List[Move]:
        board = self.board
        dirs = _directions(board, idx)
        sequences: List[Move] = []
        stack: List[Tuple[Move, FrozenSet[SquareIndex]]] = [((idx,), frozenset())]
        while stack:
            path, captured = stack.pop()
            current = path[-1]
            extensions = []
            for step in dirs:
                mid = step(current)
                if mid == OFF_BOARD or mid in captured or not self._is_adversary(mid):
                    continue
                end = step(mid)
                # the moving piece has left its start square
                if end == OFF_BOARD or not (board.is_empty(end) or end == idx):
                    continue
                extensions.append((path + (end,), captured | {mid}))
            if extensions:
                # reversed so that chains pop in direction order
                stack.extend(reversed(extensions))
            elif len(path) >= 2:
                sequences.append(path)
        return sequences

    def captures(self) -> List[Move]:
        result: List[Move] = []
        for pawn in self.my_pawns():
            result.extend(self._gen_captures_from(pawn))
        return list(dict.fromkeys(result))

    def simple_moves(self) -> List[Move]:
        result: List[Move] = []
        for pawn in self.my_pawns():
            result.extend(self._gen_simple_moves(pawn))
        return result

    def legal_moves(self) -> List[Move]:
        captures = self.captures()
        if captures:
            return captures
        return self.simple_moves()


class MoveValidator:
    """Validates moves against generated legal moves and basic rules."""

    @staticmethod
    def is_capture(board: CheckerBoard, seq: Sequence[int]) -> bool:
        if len(seq) < 2:
            return False
        return any(board.square_between(a, b) != OFF_BOARD for a, b in zip(seq, seq[1:]))

    @staticmethod
    def validate(board: CheckerBoard, player: PlayerId, seq: Sequence[int]) -> bool:
        return tuple(seq) in MoveGenerator(board, player).legal_moves()


# Notation

def format_move(move: Sequence[int], board: CheckerBoard) -> str:
    """Render a move as e.g. '22-18' for a step or '18x11x4' for jumps."""
    if not move:
        return ""
    parts = [str(move[0])]
    for a, b in zip(move, move[1:]):
        parts.append('-' if board.is_adjacent(a, b) else 'x')
        parts.append(str(b))
    return "".join(parts)


def parse_move_str(s: str, board: CheckerBoard) -> Optional[Move]:
    """Parse a move string into a move sequence."""
    s = s.strip().lower().replace('x', '-').replace(' ', '')
    if not s:
        return None
    parts: List[str] = [p for p in s.split('-') if p]
    try:
        seq: List[int] = [int(p) for p in parts]
    except ValueError:
        return None
    if len(seq) < 2 or not all(board.tile_exists(x) for x in seq):
        return None
    return tuple(seq)


def legal_moves(board: CheckerBoard, player: PlayerId) -> List[Move]:
    return MoveGenerator(board, player).legal_moves()
