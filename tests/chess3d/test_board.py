"""Unit tests for /src/chess3d/board.py"""

import pytest

from src.chess3d.board import Board
from src.chess3d.moves import Move
from src.chess3d.pieces import BACK_ROW, Color, Piece, PieceType
from src.chess3d.square import Square
from src.core.exceptions import InvalidFENError

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_FEN = "/".join(["8"] * 8)


# -- CREATION LOGIC ---
def test_starting_position() -> None:
    """White on the bottom two ranks, black mirrored on the top two, nothing in between"""
    board = Board.starting_position()

    expected_back_row = [
        PieceType.ROOK,
        PieceType.KNIGHT,
        PieceType.BISHOP,
        PieceType.QUEEN,
        PieceType.KING,
        PieceType.BISHOP,
        PieceType.KNIGHT,
        PieceType.ROOK,
    ]
    for file in range(8):
        assert board.piece_at(Square(file, 0)) == Piece(
            expected_back_row[file], Color.WHITE
        )
        assert board.piece_at(Square(file, 1)) == Piece(PieceType.PAWN, Color.WHITE)
        assert board.piece_at(Square(file, 6)) == Piece(PieceType.PAWN, Color.BLACK)
        assert board.piece_at(Square(file, 7)) == Piece(
            expected_back_row[file], Color.BLACK
        )

    for rank in range(2, 6):
        for file in range(8):
            assert board.piece_at(Square(file, rank)) is None


def test_back_row_constant() -> None:
    assert list(BACK_ROW) == [
        PieceType.ROOK,
        PieceType.KNIGHT,
        PieceType.BISHOP,
        PieceType.QUEEN,
        PieceType.KING,
        PieceType.BISHOP,
        PieceType.KNIGHT,
        PieceType.ROOK,
    ]


def test_from_fen_matches_starting_position() -> None:
    assert Board.from_fen(STARTING_POSITION_FEN) == Board.starting_position()


def test_creating_board_after_e4() -> None:
    """Say, white moves the pawn from e2 to e4, and I want to load up the board in this position"""
    board = Board.from_fen("rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR")
    assert board.piece_at(Square(4, 3)) == Piece(PieceType.PAWN, Color.WHITE)
    assert board.piece_at(Square(4, 1)) is None


def test_empty_board() -> None:
    board = Board.empty()
    assert board == Board.from_fen(EMPTY_FEN)
    assert board.occupied_squares(Color.WHITE) == []
    assert board.occupied_squares(Color.BLACK) == []


@pytest.mark.parametrize(
    "fen",
    [
        STARTING_POSITION_FEN,
        EMPTY_FEN,
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR",
        "r6k/8/8/8/8/8/8/Q3K3",
    ],
)
def test_to_fen(fen: str) -> None:
    assert Board.from_fen(fen).to_fen() == fen


@pytest.mark.parametrize(
    "fen",
    [
        "8/8/8/8/8/8/8",  # only 7 ranks
        "8/8/8/8/8/8/8/8/8",  # 9 ranks
        "8/8/8/8/8/8/8/7",  # a rank that is too short
        "8/8/8/8/8/8/8/9",  # a rank that is too long
        "8/8/8/8/8/8/8/PPPPPPPPP",  # a rank with too many pieces
        "8/8/8/8/8/8/8/x7",  # unknown piece
    ],
)
def test_invalid_fen(fen: str) -> None:
    with pytest.raises(InvalidFENError):
        Board.from_fen(fen)


# --- QUERIES ---
@pytest.mark.parametrize(
    "square", [Square(-1, 0), Square(0, -1), Square(8, 0), Square(0, 8), Square(9, 9)]
)
def test_piece_at_off_board_is_empty(square: Square) -> None:
    """Never raises: rules rely on squares beyond the edge reading as empty"""
    board = Board.starting_position()
    assert board.piece_at(square) is None


def test_occupied_squares_row_major() -> None:
    board = Board.from_fen("8/8/8/8/1p6/8/P6P/4K3")
    assert board.occupied_squares(Color.WHITE) == [
        Square(4, 0),
        Square(0, 1),
        Square(7, 1),
    ]
    assert board.occupied_squares(Color.BLACK) == [Square(1, 3)]


def test_count_material() -> None:
    board = Board.starting_position()
    # 8 pawns, 2 knights, 2 bishops, 2 rooks, queen, king
    expected = 8 * 10 + 2 * 30 + 2 * 30 + 2 * 50 + 90 + 900
    assert board.count_material() == {Color.WHITE: expected, Color.BLACK: expected}


# --- UPDATES ---
def test_move_piece() -> None:
    board = Board.starting_position()
    captured = board.move_piece(Move.from_uci("e2e4"))
    assert captured is None
    assert board.piece_at(Square(4, 1)) is None
    assert board.piece_at(Square(4, 3)) == Piece(PieceType.PAWN, Color.WHITE)


def test_move_piece_captures() -> None:
    """The captured piece disappears from the board altogether"""
    board = Board.from_fen("8/8/8/8/p7/8/8/R7")
    captured = board.move_piece(Move.from_uci("a1a4"))
    assert captured == Piece(PieceType.PAWN, Color.BLACK)
    assert board.piece_at(Square(0, 3)) == Piece(PieceType.ROOK, Color.WHITE)
    assert board.occupied_squares(Color.BLACK) == []


def test_place_and_remove_piece() -> None:
    board = Board.empty()
    queen = Piece(PieceType.QUEEN, Color.BLACK)
    board.place_piece(queen, Square(3, 7))
    assert board.piece_at(Square(3, 7)) == queen
    board.remove_piece(Square(3, 7))
    assert board.piece_at(Square(3, 7)) is None


def test_cannot_place_piece_off_board() -> None:
    board = Board.empty()
    with pytest.raises(ValueError):
        board.place_piece(Piece(PieceType.KING, Color.WHITE), Square(8, 0))
