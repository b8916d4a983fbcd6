"""The Game board stores the `position` (the configuration of pieces on the board) and nothing else"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from src.chess3d.moves import Move
from src.chess3d.pieces import BACK_ROW, FEN_TO_PIECE, Color, Piece, PieceType
from src.chess3d.square import BOARD_DIMENSIONS, Square, all_squares
from src.core.exceptions import InvalidFENError

logger = logging.getLogger(__name__)

Grid = list[list[Optional[Piece]]]


def _empty_grid() -> Grid:
    return [[None] * BOARD_DIMENSIONS[0] for _ in range(BOARD_DIMENSIONS[1])]


@dataclass
class Board:
    # indexed [rank][file]. A cell holds a piece or None
    grid: Grid

    @classmethod
    def empty(cls) -> Self:
        return cls(_empty_grid())

    @classmethod
    def starting_position(cls) -> Self:
        """
        White on ranks 0 and 1, Black mirrored on ranks 7 and 6.
        Back row order (a-file to h-file): rook, knight, bishop, queen, king, bishop, knight, rook
        """
        board = cls.empty()
        last_rank = BOARD_DIMENSIONS[1] - 1
        for file, piece_type in enumerate(BACK_ROW):
            board.place_piece(Piece(piece_type, Color.WHITE), Square(file, 0))
            board.place_piece(Piece(PieceType.PAWN, Color.WHITE), Square(file, 1))
            board.place_piece(
                Piece(PieceType.PAWN, Color.BLACK), Square(file, last_rank - 1)
            )
            board.place_piece(Piece(piece_type, Color.BLACK), Square(file, last_rank))
        return board

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the top rank (rank index 7), starting with the rook on a8
        * pawns cover rank index 6 entirely
        * the four middle ranks have 8 consecutive empty squares
        * the white pawns (capital letters) are on rank index 1
        * the white pieces are on rank index 0, again read from the a-file to the h-file.
        """
        fen_by_ranks = fen_str.split("/")
        if len(fen_by_ranks) != BOARD_DIMENSIONS[1]:
            raise InvalidFENError(
                f"Position {fen_str!r} must describe {BOARD_DIMENSIONS[1]} ranks."
            )

        board = cls.empty()
        for rank_idx, fen_one_rank in enumerate(fen_by_ranks):
            # FEN string is read from the top rank down
            rank = BOARD_DIMENSIONS[1] - 1 - rank_idx
            file = 0
            for character in fen_one_rank:
                if character.lower() in FEN_TO_PIECE:
                    if file >= BOARD_DIMENSIONS[0]:
                        raise InvalidFENError(f"Rank {fen_one_rank!r} is too long.")
                    board.place_piece(Piece.from_fen(character), Square(file, rank))
                    file += 1
                elif character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
                else:
                    raise InvalidFENError(
                        f"Unknown character {character!r} in position {fen_str!r}."
                    )
            if file != BOARD_DIMENSIONS[0]:
                raise InvalidFENError(
                    f"Rank {fen_one_rank!r} does not describe {BOARD_DIMENSIONS[0]} files."
                )
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1] - 1, -1, -1)
        )

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(BOARD_DIMENSIONS[0]):
            piece = self.piece_at(Square(file, rank))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def piece_at(self, square: Square) -> Optional[Piece]:
        """Off-board squares are simply empty. Rules look at squares beyond the edges and rely on that."""
        if not square.is_within_bounds():
            return None
        return self.grid[square.rank][square.file]

    def place_piece(self, piece: Piece, square: Square) -> None:
        if not square.is_within_bounds():
            raise ValueError(f"Cannot place {piece} outside the board: {square}")
        self.grid[square.rank][square.file] = piece

    def remove_piece(self, square: Square) -> None:
        if square.is_within_bounds():
            self.grid[square.rank][square.file] = None

    def move_piece(self, move: Move) -> Optional[Piece]:
        """Update the position on the board. Returns the piece that got captured (if any)."""
        piece_that_moved = self.piece_at(move.from_square)
        captured = self.piece_at(move.to_square)
        self.remove_piece(move.from_square)
        if piece_that_moved is not None:
            self.place_piece(piece_that_moved, move.to_square)
        if captured is not None:
            logger.debug("%s captured on %s", captured, move.to_square.to_algebraic())
        return captured

    def occupied_squares(self, color: Color) -> list[Square]:
        """Squares holding a piece of the given color, rank by rank, files left to right."""
        return [
            square
            for square in all_squares()
            if (piece := self.piece_at(square)) is not None and piece.color == color
        ]

    def count_material(self) -> dict[Color, int]:
        """Tally the value of the material each player has on the board"""
        return {color: self._count_material_player(color) for color in Color}

    def _count_material_player(self, color: Color) -> int:
        return sum(
            piece.value
            for square in self.occupied_squares(color)
            if (piece := self.piece_at(square)) is not None
        )
