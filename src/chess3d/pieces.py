"""Defines the types of pieces and what they are worth"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self


class PieceType(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()


FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


# Material values used by the automated opponent. The king is worth far more than
# everything else combined, so capturing it always wins the comparison.
PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 10,
    PieceType.KNIGHT: 30,
    PieceType.BISHOP: 30,
    PieceType.ROOK: 50,
    PieceType.QUEEN: 90,
    PieceType.KING: 900,
}

# Fixed order of the back row, from the a-file to the h-file
BACK_ROW: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def opponent_of(color: Color) -> Color:
    return Color.WHITE if color == Color.BLACK else Color.BLACK


@dataclass(frozen=True)
class Piece:
    """A piece is a plain value: moving it means relocating it on the board."""

    type: PieceType
    color: Color

    @property
    def value(self) -> int:
        return PIECE_VALUES[self.type]

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )
