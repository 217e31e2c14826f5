"""FastAPI app for playing tic-tac-toe against the minimax AI."""

from __future__ import annotations

import logging
import random
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from fastapi import BackgroundTasks, FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .ai import MinimaxAI, best_move
from .board import Cell
from .errors import GameError
from .game import ALLOWED_SIZES, GameEngine
from .rules import Player

logger = logging.getLogger(__name__)


HUMAN = Player.A
AI_THINK_DELAY: Tuple[float, float] = (0.3, 0.8)
SESSION_TTL_SECONDS = 60 * 30  # 30 minutes


@dataclass
class GameSession:
    """An engine, its AI opponent and the bookkeeping the API needs."""

    engine: GameEngine
    ai: MinimaxAI
    ai_pending: bool = False
    updated_at: float = field(default_factory=lambda: time.time())
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="tictactoe", description="Tic-tac-toe against a minimax AI")


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    model_config = ConfigDict(populate_by_name=True)

    size: int = Field(default=3, description="Board edge length")
    ai_first: bool = Field(default=False, alias="aiFirst")

    @field_validator("size")
    @classmethod
    def ensure_supported_size(cls, value: int) -> int:
        if value not in ALLOWED_SIZES:
            raise ValueError(
                f"Unsupported board size {value}. "
                f"Choose one of {', '.join(map(str, ALLOWED_SIZES))}."
            )
        return value


class MoveRequest(BaseModel):
    """A human move given either as grid coordinates or a flat position."""

    x: Optional[int] = Field(default=None, ge=0)
    y: Optional[int] = Field(default=None, ge=0)
    position: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def ensure_target(self) -> "MoveRequest":
        if (self.x is None) != (self.y is None):
            raise ValueError("x and y must be given together")
        has_coords = self.x is not None
        if has_coords == (self.position is not None):
            raise ValueError("Give either both x and y, or position")
        return self


def _cleanup_sessions() -> None:
    """Drop games nobody has touched for longer than the TTL."""

    now = time.time()
    expired = [
        game_id
        for game_id, session in list(SESSIONS.items())
        if not session.ai_pending
        and now - session.updated_at >= SESSION_TTL_SECONDS
    ]
    for game_id in expired:
        SESSIONS.pop(game_id, None)
    if expired:
        logger.info("expired %d idle game(s)", len(expired))


def _create_session(size: int, ai_first: bool) -> Tuple[str, GameSession]:
    _cleanup_sessions()
    first = HUMAN.opponent() if ai_first else HUMAN
    session = GameSession(
        engine=GameEngine(size=size, first=first),
        ai=MinimaxAI(player=HUMAN.opponent()),
    )
    if ai_first:
        session.ai.play(session.engine)
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("created game %s (size=%d, ai_first=%s)", session_id, size, ai_first)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _run_ai_turn(game_id: str) -> None:
    session = SESSIONS.get(game_id)
    if not session:
        return

    time.sleep(max(0.0, random.uniform(*AI_THINK_DELAY)))

    try:
        with session.lock:
            engine = session.engine
            if engine.evaluate().terminal:
                return
            if engine.current_player is not session.ai.player:
                return
            board = engine.snapshot()

        # Search outside the lock; the snapshot is private to this thread.
        position = best_move(board, session.ai.player)

        with session.lock:
            engine.apply_move(position, session.ai.player)
            session.updated_at = time.time()
            logger.info("game %s: AI played %d", game_id, position)
    finally:
        with session.lock:
            session.ai_pending = False


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        engine = session.engine
        state = engine.evaluate()
        move_log: List[Dict[str, object]] = []
        for player, position in engine.history:
            x, y = engine.board.coords(position)
            move_log.append(
                {"player": player.value, "position": position, "x": x, "y": y}
            )

        payload: Dict[str, object] = {
            "id": game_id,
            "size": engine.size,
            "cells": [
                "" if c is Cell.EMPTY else c.value for c in engine.board.cells
            ],
            "currentPlayer": engine.current_player.value,
            "status": state.status.value,
            "winner": state.winner.value if state.winner else None,
            "emptyPositions": engine.board.empty_positions(),
            "moveLog": move_log,
            "aiPending": session.ai_pending,
        }
        if move_log:
            payload["lastMove"] = move_log[-1]
        return payload


def _apply_player_move(
    game_id: str,
    session: GameSession,
    request: MoveRequest,
    background_tasks: Optional[BackgroundTasks] = None,
) -> None:
    with session.lock:
        if session.ai_pending:
            raise HTTPException(status_code=400, detail="AI is completing its move")

        engine = session.engine
        try:
            if request.position is not None:
                position = request.position
            else:
                position = engine.board.index(request.x, request.y)
            state = engine.apply_move(position, HUMAN)
        except GameError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        session.updated_at = time.time()

        should_schedule_ai = (
            not state.terminal and engine.current_player is session.ai.player
        )
        if should_schedule_ai:
            session.ai_pending = True

    if should_schedule_ai and background_tasks is not None:
        background_tasks.add_task(_run_ai_turn, game_id)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/api/game")
def create_game(request: NewGameRequest) -> Dict[str, object]:
    game_id, session = _create_session(request.size, request.ai_first)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(game_id, session, request, background_tasks)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        if session.ai_pending:
            raise HTTPException(status_code=400, detail="AI is completing its move")
        session.engine.reset()
        session.updated_at = time.time()
        if session.engine.current_player is session.ai.player:
            session.ai.play(session.engine)
    return _serialize_session(game_id, session)
