"""Unit tests for src/api/models.py"""

from uuid import UUID, uuid4

import pytest

from src.api.models import CreateGameRequest, MoveRequest, PieceAtRequest
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import GameMode


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - CreateGameRequest --
def test_defaults() -> None:
    """Player against player, from the standard setup"""
    request = CreateGameRequest()
    assert request.mode == GameMode.PLAYER_VS_PLAYER
    assert request.starting_fen is None


def test_valid_fen() -> None:
    valid_fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w"
    request = CreateGameRequest(mode=GameMode.PLAYER_VS_CPU, starting_fen=valid_fen)
    assert request.starting_fen == valid_fen


def test_mode_from_string() -> None:
    assert CreateGameRequest.model_validate({"mode": "cpu"}).mode == GameMode.PLAYER_VS_CPU


@pytest.mark.parametrize(
    "invalid_fen",
    [
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR",  # active color missing
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",  # full FEN has too many fields
    ],
)
def test_invalid_fen(invalid_fen: str) -> None:
    """Structurally invalid FEN: other than 2 space-separated fields."""
    with pytest.raises(InvalidRequestError):
        _ = CreateGameRequest(starting_fen=invalid_fen)


# -- Validation - MoveRequest --
def test_valid_square_names(mock_id: UUID) -> None:
    request = MoveRequest(game_id=mock_id, from_square="e2", to_square="e4")
    assert request.from_square == "e2"
    assert request.to_square == "e4"


@pytest.mark.parametrize("square", ["e9", "i1", "e", "e22", "E2", "2e", ""])
def test_invalid_square_names(mock_id: UUID, square: str) -> None:
    with pytest.raises(InvalidRequestError):
        MoveRequest(game_id=mock_id, from_square=square, to_square="e4")
    with pytest.raises(InvalidRequestError):
        MoveRequest(game_id=mock_id, from_square="e2", to_square=square)


def test_piece_at_square_name(mock_id: UUID) -> None:
    with pytest.raises(InvalidRequestError):
        PieceAtRequest(game_id=mock_id, square="z0")
