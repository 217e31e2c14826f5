"""Exceptions raised by the tic-tac-toe engine."""

from __future__ import annotations


class GameError(ValueError):
    """Base class for every rejected board or engine operation."""


class OutOfRange(GameError, IndexError):
    """Position lies outside the grid (a caller bug, not a player mistake)."""


class CellOccupied(GameError):
    """Target cell already holds a mark."""


class NotPlayersTurn(GameError):
    """Move submitted for the player who is not next to move."""


class GameAlreadyOver(GameError):
    """Move or search requested after a win or tie was reached."""
