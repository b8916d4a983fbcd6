"""
The Game class is the entrypoint into the domain layer for the service layer (and any other front-end).
It owns the board, the turn and the move history, and is the only thing allowed to change them.

Illegal requests are answered with False / None, never with an exception:
the caller decides what a rejected move means for its user interface.
"""

import logging
import random
from typing import Optional, Self

from src.chess3d.board import Board
from src.chess3d.game_model import GameSnapshot
from src.chess3d.moves import Move, follows_movement_rule
from src.chess3d.opponent import choose_best_move
from src.chess3d.pieces import Color, Piece, opponent_of
from src.chess3d.position import PositionState
from src.chess3d.square import Square, all_squares

logger = logging.getLogger(__name__)


class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    def __init__(
        self,
        board: Optional[Board] = None,
        color_to_move: Color = Color.WHITE,
        history: Optional[list[Move]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._board = board if board is not None else Board.starting_position()
        self._color_to_move = color_to_move
        self._history: list[Move] = list(history) if history else []
        self._rng = rng if rng is not None else random.Random()

    @classmethod
    def from_fen(cls, fen: str, rng: Optional[random.Random] = None) -> Self:
        """Start from a custom position: '<placement> <w|b>'"""
        state = PositionState.from_fen(fen)
        return cls(Board.from_fen(state.position), state.color_to_move, rng=rng)

    @classmethod
    def from_snapshot(
        cls, snapshot: GameSnapshot, rng: Optional[random.Random] = None
    ) -> Self:
        """Resume a saved game. The history is restored as recorded, not replayed."""
        game = cls.from_fen(snapshot.current_fen, rng=rng)
        game._history = [Move.from_uci(uci) for uci in snapshot.moves_uci]
        return game

    def to_snapshot(self) -> GameSnapshot:
        """Encode into the format the Service layer persists"""
        return GameSnapshot(
            current_fen=self.to_fen(),
            moves_uci=[move.to_uci() for move in self._history],
        )

    def to_fen(self) -> str:
        return PositionState(self._board.to_fen(), self._color_to_move).to_fen()

    @property
    def color_to_move(self) -> Color:
        return self._color_to_move

    @property
    def history(self) -> tuple[Move, ...]:
        return tuple(self._history)

    def piece_at(self, square: Square) -> Optional[Piece]:
        """What is standing on the square? None for an empty square or a square off the board."""
        return self._board.piece_at(square)

    def material(self) -> dict[Color, int]:
        return self._board.count_material()

    def is_legal_move(self, from_square: Square, to_square: Square) -> bool:
        """
        Is the move legal for the player whose turn it is?
        ----

        1. There must be a piece of the color to move on the starting square
        2. Staying on the same square is not a move, and neither is leaving the board
        3. You cannot take your own pieces
        4. The movement rule of the piece type decides the rest
        """
        piece = self._board.piece_at(from_square)
        if piece is None or piece.color != self._color_to_move:
            return False

        if from_square == to_square or not to_square.is_within_bounds():
            return False

        target = self._board.piece_at(to_square)
        if target is not None and target.color == piece.color:
            return False

        return follows_movement_rule(Move(from_square, to_square), self._board)

    def move(self, from_square: Square, to_square: Square) -> bool:
        """
        Attempt to make a move
        -----

        Nothing changes if the move is illegal. Otherwise:
        1. update the board (whatever stood on the target square is captured)
        2. pass the turn to the opponent
        3. update the history of moves
        """
        if not self.is_legal_move(from_square, to_square):
            logger.debug(
                "Rejected move %s%s for %s",
                from_square.to_algebraic(),
                to_square.to_algebraic(),
                self._color_to_move.name.lower(),
            )
            return False

        move = Move(from_square, to_square)
        self._board.move_piece(move)
        self._toggle_turn()
        self._history.append(move)
        logger.debug("Applied move %s", move.to_uci())
        return True

    def legal_moves(self, color: Color) -> list[Move]:
        """
        List of legal moves for the player with the 'color' pieces
        ----

        Every piece of that color (rank by rank) is tried against every square of the board (rank by rank).
        NOTE: legality is judged for the color to move. Asking for the other color gives an empty list.
        """
        return [
            Move(from_square, to_square)
            for from_square in self._board.occupied_squares(color)
            for to_square in all_squares()
            if self.is_legal_move(from_square, to_square)
        ]

    def select_best_move(self, color: Color) -> Optional[Move]:
        """
        Let the automated opponent play for 'color'.
        ----

        Returns the move that got played, or None when there are no legal moves
        (the caller has to treat that as the end of the game).
        """
        candidates = self.legal_moves(color)
        if not candidates:
            logger.info("No legal moves available for %s", color.name.lower())
            return None

        best_move = choose_best_move(candidates, self._board, self._rng)
        # for the typechecker: there was at least one candidate
        assert best_move is not None
        self.move(best_move.from_square, best_move.to_square)
        logger.info(
            "Automated move for %s: %s", color.name.lower(), best_move.to_uci()
        )
        return best_move

    def reset(self) -> None:
        """Throw away the current game and set up the pieces for a new one"""
        self._board = Board.starting_position()
        self._color_to_move = Color.WHITE
        self._history = []
        logger.debug("Game reset to the starting position")

    # -- PRIVATE HELPERS ---
    def _toggle_turn(self) -> None:
        self._color_to_move = opponent_of(self._color_to_move)
