"""Turn order, terminal detection and AI moves for one game session."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .ai import best_move
from .board import Board, Cell
from .errors import CellOccupied, GameAlreadyOver, NotPlayersTurn
from .rules import GameState, Player, evaluate_board

logger = logging.getLogger(__name__)

Move = Tuple[Player, int]

# Exhaustive search stops being practical beyond 3x3.
ALLOWED_SIZES: Tuple[int, ...] = (3,)


class GameEngine:
    """Owns the board and whose turn it is; all moves go through here."""

    def __init__(
        self,
        size: int = 3,
        first: Player = Player.A,
        board: Optional[Board] = None,
    ) -> None:
        self.board = board if board is not None else Board(size)
        self.first = first
        self.current_player = first
        self.history: List[Move] = []

    @property
    def size(self) -> int:
        return self.board.size

    # ---- API used by presentation layers ----

    def evaluate(self) -> GameState:
        return evaluate_board(self.board)

    def apply_move(self, position: int, player: Player) -> GameState:
        """Place ``player``'s mark at ``position`` and pass the turn.

        Nothing changes when the move is rejected.
        """
        if self.evaluate().terminal:
            raise GameAlreadyOver("Game already finished")
        occupant = self.board.occupant(position)  # raises OutOfRange
        if player is not self.current_player:
            raise NotPlayersTurn(
                f"It is {self.current_player.value}'s turn, not {player.value}'s"
            )
        if occupant is not Cell.EMPTY:
            raise CellOccupied(f"Cell {position} is already taken")

        self.board.set(position, player.cell)
        self.history.append((player, position))
        self.current_player = player.opponent()
        logger.debug("%s played %d", player.value, position)

        state = self.evaluate()
        if state.terminal:
            logger.info("game over: %s", state)
        return state

    def best_move_for(self, player: Player) -> int:
        return best_move(self.board, player)

    def play_ai_move(self, player: Optional[Player] = None) -> Tuple[int, GameState]:
        """Play the minimax choice for ``player`` (default: the side to move)."""
        if player is None:
            player = self.current_player
        if self.evaluate().terminal:
            raise GameAlreadyOver("Game already finished")
        if player is not self.current_player:
            # checked before the search, which is the expensive part
            raise NotPlayersTurn(
                f"It is {self.current_player.value}'s turn, not {player.value}'s"
            )
        position = self.best_move_for(player)
        return position, self.apply_move(position, player)

    def snapshot(self) -> Board:
        return self.board.copy()

    def reset(self, first: Optional[Player] = None) -> None:
        if first is not None:
            self.first = first
        self.board.clear()
        self.current_player = self.first
        self.history.clear()

    def __repr__(self) -> str:
        return (
            f"GameEngine(board={self.board!r}, "
            f"current_player={self.current_player.value!r})"
        )
