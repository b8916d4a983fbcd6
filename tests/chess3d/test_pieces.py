"""Unit tests for /src/chess3d/pieces.py"""

import pytest

from src.chess3d.pieces import (
    FEN_TO_PIECE,
    PIECE_TO_FEN,
    PIECE_VALUES,
    Color,
    Piece,
    PieceType,
    opponent_of,
)


@pytest.mark.parametrize("char", [char.upper() for char in FEN_TO_PIECE.keys()])
def test_creating_white_piece_from_fen(char: str) -> None:
    """Capital letters are used for white pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.WHITE


@pytest.mark.parametrize("char", [char.lower() for char in FEN_TO_PIECE.keys()])
def test_creating_black_piece_from_fen(char: str) -> None:
    """Lower case letters are used for black pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.BLACK


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_pieces_to_fen(piece_type: PieceType) -> None:
    assert Piece(piece_type, Color.WHITE).to_fen() == PIECE_TO_FEN[piece_type].upper()
    assert Piece(piece_type, Color.BLACK).to_fen() == PIECE_TO_FEN[piece_type].lower()


@pytest.mark.parametrize(
    "piece_type, value",
    [
        (PieceType.PAWN, 10),
        (PieceType.KNIGHT, 30),
        (PieceType.BISHOP, 30),
        (PieceType.ROOK, 50),
        (PieceType.QUEEN, 90),
        (PieceType.KING, 900),
    ],
)
def test_piece_values(piece_type: PieceType, value: int) -> None:
    """The value does not depend on the color"""
    assert Piece(piece_type, Color.WHITE).value == value
    assert Piece(piece_type, Color.BLACK).value == value


def test_every_piece_type_has_a_value() -> None:
    assert set(PIECE_VALUES) == set(PieceType)


def test_pieces_are_values() -> None:
    """Two pieces of the same type and color are interchangeable, and cannot be changed"""
    piece = Piece(PieceType.ROOK, Color.BLACK)
    assert piece == Piece(PieceType.ROOK, Color.BLACK)
    with pytest.raises(AttributeError):
        piece.type = PieceType.QUEEN  # type: ignore[misc]


def test_opponent_of() -> None:
    assert opponent_of(Color.WHITE) == Color.BLACK
    assert opponent_of(Color.BLACK) == Color.WHITE
