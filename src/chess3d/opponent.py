"""
The automated opponent: a greedy, one-ply heuristic.

A move is worth whatever it captures, plus a small bonus for landing on one of the four center squares.
Nothing is looked ahead: the opponent happily walks into a recapture.
"""

import random
from typing import Optional, Protocol, Sequence

from src.chess3d.moves import Move
from src.chess3d.pieces import Piece
from src.chess3d.square import Square

CENTER_SQUARES: frozenset[Square] = frozenset(
    Square(file, rank) for file in (3, 4) for rank in (3, 4)
)
CENTER_BONUS = 1


class Board(Protocol):
    """Only needs to look at squares"""

    def piece_at(self, square: Square) -> Optional[Piece]: ...


def score_move(move: Move, board: Board) -> int:
    """Value of the captured piece (0 for a quiet move) + the center bonus"""
    captured = board.piece_at(move.to_square)
    score = captured.value if captured is not None else 0
    if move.to_square in CENTER_SQUARES:
        score += CENTER_BONUS
    return score


def choose_best_move(
    candidates: Sequence[Move], board: Board, rng: random.Random
) -> Optional[Move]:
    """
    Pick the highest scoring move.
    ---

    The candidates get shuffled first, and a later move only replaces the best move so far when it scores
    strictly higher. Together this picks uniformly among all moves sharing the top score.
    """
    shuffled = list(candidates)
    rng.shuffle(shuffled)

    best_move: Optional[Move] = None
    best_score = 0
    for move in shuffled:
        score = score_move(move, board)
        if best_move is None or score > best_score:
            best_move = move
            best_score = score
    return best_move
