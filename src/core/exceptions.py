"""
Custom exceptions used across layers.

The engine itself never raises for an illegal move: it answers with booleans / None.
These exceptions are raised where a request crosses a layer boundary (parsing saved state, service, API).
"""


class GameError(Exception):
    """Top-level exception: anything the API layer should turn into a client error."""


class InvalidFENError(GameError):
    """A position string could not be parsed."""


class InvalidRequestError(GameError):
    """Request payload is malformed (ex. unknown square name)."""


class IllegalMoveError(GameError):
    """The engine rejected the requested move."""


class NotYourTurnError(GameError):
    """Input for a side that is not allowed to move right now."""


class GameStateError(GameError):
    """Operation not allowed in the current mode / state of the game."""


class RepositoryError(GameError):
    """Game record could not be found."""
