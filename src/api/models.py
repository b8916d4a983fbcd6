"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, GameMode, PieceType, Status

SquareName = str


def _is_algebraic_notation(value: str) -> bool:
    """'a1' through 'h8'"""
    if len(value) != 2:
        return False
    return value[0] in "abcdefgh" and value[1] in "12345678"


def _validate_square(value: str) -> str:
    if not _is_algebraic_notation(value):
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a valid square name."
        )
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    mode: GameMode = GameMode.PLAYER_VS_PLAYER
    starting_fen: Optional[str] = None

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        parts = value.strip().split(" ")
        if len(parts) != 2:
            raise InvalidRequestError(
                "FEN string must contain 2 space-separated parts: <position> <active color>."
            )
        return value.strip()


class GetGameRequest(BaseModel):
    game_id: UUID


class PieceAtRequest(BaseModel):
    game_id: UUID
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class LegalMovesRequest(BaseModel):
    game_id: UUID
    color: Color


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: SquareName
    to_square: SquareName

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class AutomatedMoveRequest(BaseModel):
    game_id: UUID


class ResetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- ROUTE BODIES (game id comes from the path) ---
class MoveBody(BaseModel):
    from_square: SquareName
    to_square: SquareName


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    mode: GameMode
    fen_state: str
    color_to_move: Color
    move_history: list[str]
    status: Status


class PieceResponse(BaseModel):
    game_id: UUID
    square: SquareName
    # None: the square is empty
    piece_type: Optional[PieceType]
    color: Optional[Color]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    color: Color
    legal_moves: list[str]


class AutomatedMoveResponse(BaseModel):
    # None: no move available, the game is over
    move: Optional[str]
    game: GameResponse
