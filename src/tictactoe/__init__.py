"""Tic-tac-toe rules engine with an exhaustive minimax opponent."""

from .ai import MinimaxAI, best_move, minimax
from .board import Board, Cell
from .errors import CellOccupied, GameAlreadyOver, GameError, NotPlayersTurn, OutOfRange
from .game import GameEngine
from .rules import GameState, Player, Status, evaluate_board

__version__ = "0.1.0"

__all__ = [
    "Board",
    "Cell",
    "CellOccupied",
    "GameAlreadyOver",
    "GameEngine",
    "GameError",
    "GameState",
    "MinimaxAI",
    "NotPlayersTurn",
    "OutOfRange",
    "Player",
    "Status",
    "best_move",
    "evaluate_board",
    "minimax",
]
