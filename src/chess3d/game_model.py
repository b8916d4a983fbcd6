"""
Contract for the Service layer.

Domain level data model of the information needed to save and restore a Game.
"""

from dataclasses import dataclass


@dataclass
class GameSnapshot:
    """Everything the engine needs to resume: the current position and the moves that led there."""

    current_fen: str
    moves_uci: list[str]
