"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
import random
import threading
from contextlib import contextmanager
from typing import Iterator, Optional
from uuid import UUID

from src.api.models import (
    AutomatedMoveRequest,
    AutomatedMoveResponse,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    PieceAtRequest,
    PieceResponse,
    ResetGameRequest,
)
from src.chess3d.game import Game
from src.chess3d.game_model import GameSnapshot
from src.chess3d.moves import Move
from src.chess3d.pieces import Color as DomainColor
from src.chess3d.position import STARTING_FEN
from src.chess3d.square import Square
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
    RepositoryError,
)
from src.core.models import GameModel
from src.core.shared_types import Color, GameMode, PieceType, Status
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)

# In a game against the computer, the human plays white
AUTOMATED_COLOR = DomainColor.BLACK

# One lock per game, shared by every service instance of the process.
# Each request builds its own service, so the locks cannot live on the instance.
_game_locks: dict[UUID, threading.Lock] = {}
_game_locks_guard = threading.Lock()


@contextmanager
def game_lock(game_id: UUID) -> Iterator[None]:
    """Hold the lock of a game for a whole load -> move -> store cycle."""
    with _game_locks_guard:
        lock = _game_locks.setdefault(game_id, threading.Lock())
    with lock:
        yield


class ChessService:
    """Orchestration of layers for a game."""

    def __init__(
        self, repository: GameRepository, rng: Optional[random.Random] = None
    ) -> None:
        self.repo = repository
        self.rng = rng if rng is not None else random.Random()

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Set up a new game (optionally from a custom position) and persist it."""
        new_game = Game.from_fen(request.starting_fen or STARTING_FEN, rng=self.rng)
        created_game_data = self._to_model(new_game, request.mode)

        stored_game, game_id = self.repo.create_game(created_game_data)
        logger.info("Created %s game %s", request.mode, game_id)
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def piece_at(self, request: PieceAtRequest) -> PieceResponse:
        """What stands on a single square (the front-end builds its scene from these)."""
        game = self._load_game(self._fetch_game(request.game_id))
        piece = game.piece_at(Square.from_algebraic(request.square))
        return PieceResponse(
            game_id=request.game_id,
            square=request.square,
            piece_type=PieceType[piece.type.name] if piece else None,
            color=Color[piece.color.name] if piece else None,
        )

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves."""
        game = self._load_game(self._fetch_game(request.game_id))
        legal_moves = game.legal_moves(DomainColor[request.color.name])
        return LegalMovesResponse(
            game_id=request.game_id,
            color=request.color,
            legal_moves=[move.to_uci() for move in legal_moves],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """
        Make a move attempt.
        ----

        In a game against the computer, a successful move is answered right away by the automated opponent.
        Moves for the same game are played one at a time: the second request sees the position after the first.
        """
        with game_lock(request.game_id):
            stored_model = self._fetch_game(request.game_id)
            mode = GameMode(stored_model.mode)
            game = self._load_game(stored_model)

            if self._is_automated_turn(game, mode):
                raise NotYourTurnError(
                    "It is not your turn. Waiting for the automated opponent to move first."
                )

            from_square = Square.from_algebraic(request.from_square)
            to_square = Square.from_algebraic(request.to_square)
            if not game.move(from_square, to_square):
                raise IllegalMoveError(
                    f"Move not allowed: {request.from_square}{request.to_square}"
                )

            if self._is_automated_turn(game, mode):
                self._play_automated_move(request.game_id, game)

            after_move = self._to_model(game, mode)
            self._store(request.game_id, after_move)
        return self._create_game_response(request.game_id, after_move)

    def request_automated_move(
        self, request: AutomatedMoveRequest
    ) -> AutomatedMoveResponse:
        """
        Let the computer play the side to move.
        ----

        In a game against the computer only the automated side may be played this way.
        No move available? Nothing changes and the response carries no move: the game is over.
        """
        with game_lock(request.game_id):
            stored_model = self._fetch_game(request.game_id)
            mode = GameMode(stored_model.mode)
            game = self._load_game(stored_model)

            if mode == GameMode.PLAYER_VS_CPU and not self._is_automated_turn(game, mode):
                raise GameStateError(
                    "The automated opponent only plays black in a game against the computer."
                )

            move = self._play_automated_move(request.game_id, game)
            after_move = self._to_model(game, mode)
            if move is not None:
                self._store(request.game_id, after_move)

        return AutomatedMoveResponse(
            move=move.to_uci() if move else None,
            game=self._create_game_response(request.game_id, after_move),
        )

    def reset_game(self, request: ResetGameRequest) -> GameResponse:
        """Back to the starting position, keeping the game mode."""
        with game_lock(request.game_id):
            stored_model = self._fetch_game(request.game_id)
            game = self._load_game(stored_model)
            game.reset()

            reset_model = self._to_model(game, GameMode(stored_model.mode))
            self._store(request.game_id, reset_model)
        logger.info("Reset game %s", request.game_id)
        return self._create_game_response(request.game_id, reset_model)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        with game_lock(request.game_id):
            deleted = self.repo.delete_game(request.game_id)
        with _game_locks_guard:
            _game_locks.pop(request.game_id, None)
        if deleted is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")
        logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _play_automated_move(self, game_id: UUID, game: Game) -> Optional[Move]:
        move = game.select_best_move(game.color_to_move)
        if move is None:
            logger.info("Game %s is over: no legal moves left", game_id)
        return move

    def _is_automated_turn(self, game: Game, mode: GameMode) -> bool:
        return mode == GameMode.PLAYER_VS_CPU and game.color_to_move == AUTOMATED_COLOR

    def _load_game(self, model: GameModel) -> Game:
        snapshot = GameSnapshot(current_fen=model.current_fen, moves_uci=model.moves_uci)
        return Game.from_snapshot(snapshot, rng=self.rng)

    def _to_model(self, game: Game, mode: GameMode) -> GameModel:
        snapshot = game.to_snapshot()
        return GameModel(
            current_fen=snapshot.current_fen,
            moves_uci=snapshot.moves_uci,
            mode=mode,
        )

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        game = self._load_game(model)
        color_to_move = game.color_to_move
        status = (
            Status.IN_PROGRESS
            if game.legal_moves(color_to_move)
            else Status.NO_LEGAL_MOVES
        )
        return GameResponse(
            game_id=game_id,
            mode=GameMode(model.mode),
            fen_state=model.current_fen,
            color_to_move=Color[color_to_move.name],
            move_history=model.moves_uci,
            status=status,
        )

    def _store(self, game_id: UUID, model: GameModel) -> None:
        """Write the game back; it may have been deleted in the meantime."""
        if self.repo.update_game(game_id, model) is None:
            raise RepositoryError(f"Game with {game_id=} not found.")

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
