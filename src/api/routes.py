"""HTTP routes. Each route translates path/body into a service request, nothing more."""

import random
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api.models import (
    AutomatedMoveRequest,
    AutomatedMoveResponse,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveBody,
    MoveRequest,
    PieceAtRequest,
    PieceResponse,
    ResetGameRequest,
)
from src.core.config import get_settings
from src.core.shared_types import Color
from src.db.database import get_db
from src.db.sql_repository import SQLGameRepository
from src.services.chess_service import ChessService

router = APIRouter(prefix="/games", tags=["games"])


def get_service(db: Annotated[Session, Depends(get_db)]) -> ChessService:
    seed = get_settings().ai_seed
    rng = random.Random(seed) if seed is not None else None
    return ChessService(SQLGameRepository(db), rng=rng)


Service = Annotated[ChessService, Depends(get_service)]


@router.post("", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
def create_game(request: CreateGameRequest, service: Service) -> GameResponse:
    return service.create_new_game(request)


@router.get("/{game_id}", response_model=GameResponse)
def get_game(game_id: UUID, service: Service) -> GameResponse:
    return service.get_game_state(GetGameRequest(game_id=game_id))


@router.get("/{game_id}/squares/{square}", response_model=PieceResponse)
def get_piece(game_id: UUID, square: str, service: Service) -> PieceResponse:
    return service.piece_at(PieceAtRequest(game_id=game_id, square=square))


@router.get("/{game_id}/legal-moves", response_model=LegalMovesResponse)
def get_legal_moves(game_id: UUID, color: Color, service: Service) -> LegalMovesResponse:
    return service.legal_moves(LegalMovesRequest(game_id=game_id, color=color))


@router.post("/{game_id}/moves", response_model=GameResponse)
def make_move(game_id: UUID, body: MoveBody, service: Service) -> GameResponse:
    request = MoveRequest(
        game_id=game_id, from_square=body.from_square, to_square=body.to_square
    )
    return service.make_move(request)


@router.post("/{game_id}/automated-move", response_model=AutomatedMoveResponse)
def automated_move(game_id: UUID, service: Service) -> AutomatedMoveResponse:
    return service.request_automated_move(AutomatedMoveRequest(game_id=game_id))


@router.post("/{game_id}/reset", response_model=GameResponse)
def reset_game(game_id: UUID, service: Service) -> GameResponse:
    return service.reset_game(ResetGameRequest(game_id=game_id))


@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_game(game_id: UUID, service: Service) -> None:
    service.delete_game(DeleteGameRequest(game_id=game_id))
