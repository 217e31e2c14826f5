"""Exhaustive minimax search for tic-tac-toe."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional

from .board import Board, Cell
from .errors import GameAlreadyOver, NotPlayersTurn
from .rules import GameState, Player, Status, evaluate_board

if TYPE_CHECKING:
    from .game import GameEngine

logger = logging.getLogger(__name__)


# Leaf values; search depth is deliberately not part of the score.
UTILITY: Mapping[Optional[Player], int] = MappingProxyType(
    {
        Player.A: -10,
        Player.B: +10,
        None: 0,
    }
)


def utility(state: GameState) -> int:
    if not state.terminal:
        raise ValueError("Utility is only defined for finished games")
    return UTILITY[state.winner if state.status is Status.WIN else None]


def _prefers(player: Player, score: int, best: int) -> bool:
    return score > best if player.maximizing else score < best


def minimax(board: Board, mover: Player) -> int:
    """Score of ``board`` with ``mover`` to play, assuming perfect play after."""
    state = evaluate_board(board)
    if state.terminal:
        return utility(state)

    best: Optional[int] = None
    for position in board.empty_positions():
        board.set(position, mover.cell)
        try:
            score = minimax(board, mover.opponent())
        finally:
            board.set(position, Cell.EMPTY)
        if best is None or _prefers(mover, score, best):
            best = score
    if best is None:
        raise RuntimeError("No valid moves available")
    return best


def best_move(board: Board, player: Player) -> int:
    """
    Return the position most favourable to ``player``.

    Candidates are tried in ``empty_positions()`` order and only a strictly
    better score replaces the current pick, so ties go to the first one.
    The board is left exactly as it was found.
    """
    if evaluate_board(board).terminal:
        raise GameAlreadyOver("No moves left to search")

    best_position: Optional[int] = None
    best_score = 0
    for position in board.empty_positions():
        board.set(position, player.cell)
        try:
            score = minimax(board, player.opponent())
        finally:
            board.set(position, Cell.EMPTY)
        if best_position is None or _prefers(player, score, best_score):
            best_position, best_score = position, score

    if best_position is None:
        raise RuntimeError("No valid moves available")
    logger.debug(
        "best move for %s is %d (score %d)", player.value, best_position, best_score
    )
    return best_position


@dataclass
class MinimaxAI:
    """AI player driving a :class:`~tictactoe.game.GameEngine`.

    ``choose`` searches a private copy of the board, so it may run on a
    worker thread while the caller keeps reading the live engine.
    """

    player: Player = Player.B

    # ---- public API ----

    def choose(self, engine: "GameEngine") -> int:
        if engine.current_player is not self.player:
            raise NotPlayersTurn("It is not this AI player's turn")
        return best_move(engine.snapshot(), self.player)

    def play(self, engine: "GameEngine") -> GameState:
        return engine.apply_move(self.choose(engine), self.player)
