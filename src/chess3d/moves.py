"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the movement rule of each piece type.
A rule answers "may the piece on the starting square go to the target square?"

The generic checks (is it your piece, is it your turn, no capturing your own pieces) are done by the Game
before a rule is consulted.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess3d.pieces import Color, Piece, PieceType
from src.chess3d.square import Square


class Board(Protocol):
    """Just the parts the movement rules need"""

    def piece_at(self, square: Square) -> Optional[Piece]: ...


Vector = tuple[int, int]

# Rank a pawn starts from, and the direction it walks in
PAWN_START_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface:
        ---
        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "b1c3": knight from b1 jumps to c3
        """
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        return cls(from_sq, to_sq)

    def to_uci(self) -> str:
        """Convert into UCI notation"""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    @property
    def file_delta(self) -> int:
        return self.to_square.file - self.from_square.file

    @property
    def rank_delta(self) -> int:
        return self.to_square.rank - self.from_square.rank


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_path_clear(move: Move, board: Board) -> bool:
    """
    Walk from the starting square towards the target square, one square at a time.
    ---

    Only the squares strictly in between are inspected: the target square may hold a piece to capture.
    The two squares must lie on the same rank, file or diagonal.
    """
    dx, dz = abs(move.file_delta), abs(move.rank_delta)
    if not (dx == 0 or dz == 0 or dx == dz):
        raise ValueError(
            f"is_path_clear requires squares on one line or diagonal. \n from: {move.from_square}\n to:{move.to_square}"
        )

    step: Vector = (_sign(move.file_delta), _sign(move.rank_delta))
    file = move.from_square.file + step[0]
    rank = move.from_square.rank + step[1]
    while Square(file, rank) != move.to_square:
        if board.piece_at(Square(file, rank)) is not None:
            return False
        file += step[0]
        rank += step[1]
    return True


# --- MOVEMENT RULES ---
def is_pawn_move(move: Move, board: Board) -> bool:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - can move by two from its starting rank, if both squares it crosses are empty
    - takes diagonally (one square forward), and only when there is something to take
    """
    pawn = board.piece_at(move.from_square)
    assert pawn is not None
    direction = PAWN_DIRECTION[pawn.color]
    target = board.piece_at(move.to_square)
    dx = abs(move.file_delta)

    # forward one
    if dx == 0 and move.rank_delta == direction and target is None:
        return True

    # forward two from the starting rank
    if (
        dx == 0
        and move.from_square.rank == PAWN_START_RANK[pawn.color]
        and move.rank_delta == 2 * direction
        and target is None
    ):
        in_between = Square(move.from_square.file, move.from_square.rank + direction)
        return board.piece_at(in_between) is None

    # diagonal capture
    if dx == 1 and move.rank_delta == direction and target is not None:
        return True

    return False


def is_knight_move(move: Move, board: Board) -> bool:
    """Knights jump in an L-shape: |delta_file|, |delta_rank| is (2, 1) or (1, 2). Nothing can block them."""
    dx, dz = abs(move.file_delta), abs(move.rank_delta)
    return (dx, dz) in ((2, 1), (1, 2))


def is_bishop_move(move: Move, board: Board) -> bool:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    if abs(move.file_delta) != abs(move.rank_delta):
        return False
    return is_path_clear(move, board)


def is_rook_move(move: Move, board: Board) -> bool:
    """Rooks move either horizontally or vertically"""
    if move.file_delta != 0 and move.rank_delta != 0:
        return False
    return is_path_clear(move, board)


def is_queen_move(move: Move, board: Board) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    dx, dz = abs(move.file_delta), abs(move.rank_delta)
    if not (dx == dz or dx == 0 or dz == 0):
        return False
    return is_path_clear(move, board)


def is_king_move(move: Move, board: Board) -> bool:
    """
    The king can move by a single square at the time.

    NOTE: there is no notion of check, so the king may step onto an attacked square.
    """
    return abs(move.file_delta) <= 1 and abs(move.rank_delta) <= 1


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MovementRuleFn = Callable[[Move, Board], bool]
MOVEMENT_RULES: dict[PieceType, MovementRuleFn] = {
    PieceType.PAWN: is_pawn_move,
    PieceType.KNIGHT: is_knight_move,
    PieceType.BISHOP: is_bishop_move,
    PieceType.ROOK: is_rook_move,
    PieceType.QUEEN: is_queen_move,
    PieceType.KING: is_king_move,
}


def follows_movement_rule(move: Move, board: Board) -> bool:
    """Look up the rule for the moving piece. A piece type without a rule can never move."""
    piece = board.piece_at(move.from_square)
    if piece is None:
        return False
    rule = MOVEMENT_RULES.get(piece.type)
    if rule is None:
        return False
    return rule(move, board)
