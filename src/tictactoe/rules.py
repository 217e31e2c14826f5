"""Players, game outcomes and win/tie detection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Optional, Tuple

from .board import Board, Cell

Line = Tuple[int, ...]


class Player(str, Enum):
    # Values match the marks the players leave on the board
    A = "O"
    B = "X"

    @property
    def cell(self) -> Cell:
        return Cell.PLAYER_A if self is Player.A else Cell.PLAYER_B

    @property
    def maximizing(self) -> bool:
        """Player B is the AI side and maximizes the utility score."""
        return self is Player.B

    def opponent(self) -> "Player":
        return Player.B if self is Player.A else Player.A

    @classmethod
    def from_cell(cls, cell: Cell) -> "Player":
        if cell is Cell.EMPTY:
            raise ValueError("Empty cell has no player")
        return cls.A if cell is Cell.PLAYER_A else cls.B


class Status(str, Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    TIE = "tie"


@dataclass(frozen=True)
class GameState:
    status: Status
    winner: Optional[Player] = None

    @classmethod
    def win(cls, player: Player) -> "GameState":
        return cls(Status.WIN, player)

    @property
    def terminal(self) -> bool:
        return self.status is not Status.IN_PROGRESS

    def __str__(self) -> str:
        if self.status is Status.WIN:
            return f"{self.winner.value} wins"
        return "tie" if self.status is Status.TIE else "in progress"


IN_PROGRESS = GameState(Status.IN_PROGRESS)
TIE = GameState(Status.TIE)


@lru_cache(maxsize=None)
def winning_lines(size: int = 3) -> Tuple[Line, ...]:
    """Rows, then columns, then the main and anti diagonals."""
    rows = [tuple(x + y * size for x in range(size)) for y in range(size)]
    cols = [tuple(x + y * size for y in range(size)) for x in range(size)]
    diagonals = [
        tuple(i + i * size for i in range(size)),
        tuple((size - 1 - i) + i * size for i in range(size)),
    ]
    return tuple(rows + cols + diagonals)


def evaluate_board(board: Board) -> GameState:
    """
    Classify the board as it stands right now.

    The first complete line in scan order decides the winner, which only
    matters for synthetic boards holding more than one line.
    """
    cells = board.cells
    for line in winning_lines(board.size):
        first = cells[line[0]]
        if first is not Cell.EMPTY and all(cells[i] is first for i in line[1:]):
            return GameState.win(Player.from_cell(first))
    if Cell.EMPTY not in cells:
        return TIE
    return IN_PROGRESS
