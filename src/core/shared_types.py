"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    # No distinction between checkmate and stalemate: the side to move simply cannot move.
    NO_LEGAL_MOVES = "no legal moves"


class GameMode(StrEnum):
    PLAYER_VS_PLAYER = "pvp"
    # Human plays white, the automated opponent plays black
    PLAYER_VS_CPU = "cpu"


# --- Same names as the domain enums in src/chess3d/pieces.py, but string valued for the API / DB layers.
# --- Let the imports show which versions are used in what part of the code


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"
