"""
Representation of a single position: where the pieces are and whose turn it is.
"""

from dataclasses import dataclass
from typing import Self

from src.chess3d.board import Board
from src.chess3d.pieces import Color
from src.core.exceptions import InvalidFENError

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
STARTING_FEN = f"{STARTING_POSITION} w"

COLOR_TO_FEN: dict[Color, str] = {Color.WHITE: "w", Color.BLACK: "b"}
FEN_TO_COLOR: dict[str, Color] = {value: key for key, value in COLOR_TO_FEN.items()}


@dataclass
class PositionState:
    """
    Data that can be constructed from a (shortened) FEN string.
    ----

    <board position string> <active color>

    * The string to describe the board position is described in the Board class
    * The active color is either "w" or "b"

    There are no castling rights, en passant squares or move clocks in this game, so those fields are not part of it.

    ex) The standard starting position is
    rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w
    """

    position: str
    color_to_move: Color

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        """Parse the FEN into data"""
        parts = fen.strip().split(" ")
        if len(parts) != 2:
            raise InvalidFENError(
                f"FEN {fen!r} must contain 2 space-separated parts: <position> <active color>."
            )
        position, active_color = parts
        if active_color not in FEN_TO_COLOR:
            raise InvalidFENError(
                f"Active color must be one of {', '.join(FEN_TO_COLOR)}, got {active_color!r}."
            )
        # let the board parser complain about the position part
        Board.from_fen(position)
        return cls(position, FEN_TO_COLOR[active_color])

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_FEN)

    def to_fen(self) -> str:
        """reverse operation: write a FEN from the given data"""
        return f"{self.position} {COLOR_TO_FEN[self.color_to_move]}"
