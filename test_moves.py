from draughts.board import CheckerBoard
from draughts.moves import MoveGenerator, MoveValidator, format_move, legal_moves, parse_move_str
from draughts.types import CheckerType, PlayerId

# Helpers

def make_empty_board(size=8):
    return CheckerBoard(size, setup=False)


def set_board(board, whites=(), white_kings=(), blacks=(), black_kings=()):
    board.clear()
    for i in whites:
        board.set(i, CheckerType.WHITE_MAN)
    for i in white_kings:
        board.set(i, CheckerType.WHITE_KING)
    for i in blacks:
        board.set(i, CheckerType.BLACK_MAN)
    for i in black_kings:
        board.set(i, CheckerType.BLACK_KING)
    return board


def test_simple_moves_initial_position_white():
    moves = legal_moves(CheckerBoard(8), PlayerId.ONE)
    expected = [(21, 17), (22, 17), (22, 18), (23, 18), (23, 19), (24, 19), (24, 20)]
    assert set(moves) == set(expected)
    assert len(moves) == len(expected)


def test_simple_moves_initial_position_black():
    moves = legal_moves(CheckerBoard(8), PlayerId.TWO)
    expected = [(9, 13), (9, 14), (10, 14), (10, 15), (11, 15), (11, 16), (12, 16)]
    assert set(moves) == set(expected)
    assert len(moves) == len(expected)


def test_simple_take():
    board = set_board(make_empty_board(), whites=[16, 18, 19], white_kings=[7],
                      blacks=[11, 15], black_kings=[24])
    assert legal_moves(board, PlayerId.ONE) == [(19, 10)]


def test_simple_take_pawn_and_king():
    board = set_board(make_empty_board(), whites=[16, 18, 19], white_kings=[7],
                      blacks=[10, 15], black_kings=[24])
    moves = legal_moves(board, PlayerId.ONE)
    assert set(moves) == {(18, 11), (7, 14)}
    assert len(moves) == 2


def test_multiple_take():
    board = set_board(make_empty_board(), whites=[18, 19], white_kings=[10],
                      blacks=[6, 8, 15], black_kings=[7])
    moves = legal_moves(board, PlayerId.ONE)
    assert set(moves) == {(10, 1), (10, 3, 12), (18, 11, 2), (18, 11, 4)}
    assert len(moves) == 4


def test_multiple_take_king_from_corner():
    board = set_board(make_empty_board(), whites=[18, 19], white_kings=[1],
                      blacks=[6, 8, 15], black_kings=[7])
    moves = legal_moves(board, PlayerId.ONE)
    assert set(moves) == {(1, 10, 3, 12), (19, 10, 3), (18, 11, 2), (18, 11, 4)}
    assert len(moves) == 4


def test_three_captures_in_a_line_give_one_maximal_move():
    board = set_board(make_empty_board(), whites=[30], blacks=[26, 18, 10])
    moves = legal_moves(board, PlayerId.ONE)
    assert moves == [(30, 23, 14, 7)]
    assert MoveValidator.is_capture(board, moves[0])


def test_captures_mandatory_enforces_capture():
    board = set_board(make_empty_board(), whites=[22, 30], blacks=[18])
    moves = legal_moves(board, PlayerId.ONE)
    assert moves == [(22, 15)]
    assert all(MoveValidator.is_capture(board, m) for m in moves)


def test_men_do_not_capture_backwards():
    board = set_board(make_empty_board(), whites=[18], blacks=[22])
    moves = legal_moves(board, PlayerId.ONE)
    assert all(not MoveValidator.is_capture(board, m) for m in moves)
    assert set(moves) == {(18, 14), (18, 15)}


def test_king_moves_backward():
    board = set_board(make_empty_board(), white_kings=[18])
    moves = legal_moves(board, PlayerId.ONE)
    assert set(moves) == {(18, 14), (18, 15), (18, 22), (18, 23)}


def test_king_can_land_back_on_start_square():
    # king on 15 goes round the four black men and comes back home
    board = set_board(make_empty_board(), white_kings=[15], blacks=[9, 10, 17, 18])
    moves = legal_moves(board, PlayerId.ONE)
    assert set(moves) == {(15, 6, 13, 22, 15), (15, 22, 13, 6, 15)}
    assert len(moves) == 2


def test_no_square_captured_twice_in_a_chain():
    board = set_board(make_empty_board(), white_kings=[15], blacks=[9, 10, 17, 18])
    for move in legal_moves(board, PlayerId.ONE):
        jumped = [board.square_between(a, b) for a, b in zip(move, move[1:])]
        assert len(jumped) == len(set(jumped))


def test_move_validator_with_generated_move():
    board = CheckerBoard(8)
    assert MoveValidator.validate(board, PlayerId.ONE, [22, 18])
    assert not MoveValidator.validate(board, PlayerId.ONE, [22, 19])
    assert not MoveValidator.validate(board, PlayerId.TWO, [22, 18])


def test_generator_lists_pawns_of_side():
    gen = MoveGenerator(CheckerBoard(8), PlayerId.TWO)
    assert gen.my_pawns() == list(range(1, 13))
    assert gen.captures() == []


def test_format_move():
    board = CheckerBoard(8)
    assert format_move((22, 18), board) == "22-18"
    assert format_move((18, 11, 4), board) == "18x11x4"
    assert format_move((), board) == ""


def test_parse_move_str():
    board = CheckerBoard(8)
    assert parse_move_str("22-18", board) == (22, 18)
    assert parse_move_str(" 18x11x4 ", board) == (18, 11, 4)
    assert parse_move_str("18", board) is None
    assert parse_move_str("18-33", board) is None
    assert parse_move_str("a-b", board) is None
    assert parse_move_str("", board) is None
