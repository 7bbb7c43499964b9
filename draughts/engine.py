"""
English draughts rules: legal moves, move application and end of game detection.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .board import CheckerBoard
from .config import get_rules_settings
from .game import Game
from .moves import MoveGenerator, format_move
from .types import CheckerType, IllegalMoveError, Move, PlayerId, SquareIndex, as_move, is_valid_player


class EnglishDraughts(Game):
    """English draughts on a size x size board.

    PlayerId.ONE plays the whites and moves first. The turn counter starts at 1
    and is incremented on every ply. The game is drawn once `draw_threshold`
    consecutive moves have been played by kings without any capture.

    play() checks the move against possible_moves() unless `validate_moves` is
    off, in which case passing a legal move is the caller's obligation.
    """

    def __init__(self, board_size: Optional[int] = None,
                 draw_threshold: Optional[int] = None,
                 validate_moves: Optional[bool] = None) -> None:
        rules = get_rules_settings()
        self.board = CheckerBoard(board_size if board_size is not None else rules.board_size)
        self.player_id: PlayerId = PlayerId.ONE
        self.nb_turn: int = 1
        self.nb_king_moves_without_capture: int = 0
        self.draw_threshold: int = draw_threshold if draw_threshold is not None else rules.draw_threshold
        self.validate_moves: bool = validate_moves if validate_moves is not None else rules.validate_moves
        self.last_move: Optional[Move] = None
        self._moves: Optional[List[Move]] = None

    @classmethod
    def from_position(cls, whites: Iterable[int] = (), white_kings: Iterable[int] = (),
                      blacks: Iterable[int] = (), black_kings: Iterable[int] = (),
                      player: PlayerId = PlayerId.ONE, **kwargs) -> "EnglishDraughts":
        """Build a game from explicit piece placements."""
        if not is_valid_player(player):
            raise ValueError(f"Player to move must be ONE or TWO, got {player!r}")
        game = cls(**kwargs)
        game.board.clear()
        for squares, checker in ((whites, CheckerType.WHITE_MAN),
                                 (white_kings, CheckerType.WHITE_KING),
                                 (blacks, CheckerType.BLACK_MAN),
                                 (black_kings, CheckerType.BLACK_KING)):
            for sq in squares:
                if not game.board.tile_exists(sq):
                    raise ValueError(f"Square {sq} is off the board")
                game.board.set(sq, checker)
        game.player_id = player
        return game

    def clone(self) -> "EnglishDraughts":
        other = EnglishDraughts.__new__(EnglishDraughts)
        other.board = self.board.clone()
        other.player_id = self.player_id
        other.nb_turn = self.nb_turn
        other.nb_king_moves_without_capture = self.nb_king_moves_without_capture
        other.draw_threshold = self.draw_threshold
        other.validate_moves = self.validate_moves
        other.last_move = self.last_move
        other._moves = list(self._moves) if self._moves is not None else None
        return other

    def __repr__(self) -> str:
        side = "W" if self.player_id is PlayerId.ONE else "B"
        return f"EnglishDraughts({self.nb_turn}. {side}, {self.board!r})"

    def player(self) -> PlayerId:
        return self.player_id

    def adversary(self) -> PlayerId:
        return self.player_id.adversary()

    def my_pawns(self) -> List[SquareIndex]:
        return MoveGenerator(self.board, self.player_id).my_pawns()

    def possible_moves(self) -> List[Move]:
        """Captures if any is available, otherwise simple diagonal steps."""
        if self._moves is None:
            self._moves = MoveGenerator(self.board, self.player_id).legal_moves()
        return list(self._moves)

    def play(self, move: Sequence[int]) -> None:
        steps = as_move(move, self.board.nb_playable_tiles())
        if self.validate_moves and steps not in self.possible_moves():
            raise IllegalMoveError(
                f"{format_move(steps, self.board)} is not a legal move for {self.player_id.name}"
            )

        board = self.board
        was_king = board.is_king(steps[0])
        captured = False
        for origin, destination in zip(steps, steps[1:]):
            board.move_pawn(origin, destination)
            between = board.square_between(origin, destination)
            if board.tile_exists(between) and not board.is_empty(between):
                board.remove_pawn(between)
                captured = True

        end = steps[-1]
        if self.player_id is PlayerId.ONE and board.line_of_square(end) == 0:
            board.crown_pawn(end)
        elif self.player_id is PlayerId.TWO and board.line_of_square(end) == board.size - 1:
            board.crown_pawn(end)

        self.player_id = self.adversary()
        self.nb_turn += 1
        if was_king and not captured:
            self.nb_king_moves_without_capture += 1
        else:
            self.nb_king_moves_without_capture = 0
        self.last_move = steps
        self._moves = None

    def winner(self) -> Optional[PlayerId]:
        """Victory when the adversary has no piece or no move left; draw after
        too many king-only moves without capture; None while undecided."""
        if not self.my_pawns() or not self.possible_moves():
            return self.adversary()
        if self.nb_king_moves_without_capture >= self.draw_threshold:
            return PlayerId.NONE
        return None

    def move_to_str(self, move: Sequence[int]) -> str:
        return format_move(move, self.board)
