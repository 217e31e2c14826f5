"""Command-line entry point: play in the terminal or serve the HTTP API."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, TextIO

from . import __version__
from .ai import MinimaxAI
from .errors import GameError
from .game import ALLOWED_SIZES, GameEngine
from .rules import Player

HUMAN = Player.A

PROMPT = "Your move (x y, or position; q to quit): "


def parse_move(text: str, engine: GameEngine) -> int:
    """Turn ``"x y"`` or ``"position"`` into a board position."""
    parts = text.replace(",", " ").split()
    try:
        numbers = [int(p) for p in parts]
    except ValueError as exc:
        raise GameError(f"Not a move: {text!r}") from exc
    if len(numbers) == 2:
        return engine.board.index(*numbers)
    if len(numbers) == 1:
        return numbers[0]
    raise GameError(f"Not a move: {text!r}")


def play(
    engine: GameEngine,
    ai: MinimaxAI,
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
) -> Optional[Player]:
    """Run one interactive game; return the winner, or None for a tie/quit."""

    def show() -> None:
        print(engine.board, file=stdout)
        print(file=stdout)

    state = engine.evaluate()
    while not state.terminal:
        if engine.current_player is ai.player:
            position = ai.choose(engine)
            state = engine.apply_move(position, ai.player)
            print(f"AI plays {engine.board.coords(position)}", file=stdout)
            continue

        show()
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line or line.strip().lower() in ("q", "quit"):
            print("Bye.", file=stdout)
            return None
        try:
            state = engine.apply_move(parse_move(line, engine), HUMAN)
        except GameError as exc:
            print(f"Invalid move: {exc}", file=stdout)

    show()
    print(f"Game over: {state}.", file=stdout)
    return state.winner


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="tictactoe")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument(
        "--size",
        type=int,
        default=3,
        choices=ALLOWED_SIZES,
        help="Board edge length",
    )
    parser.add_argument(
        "--ai-first", action="store_true", help="Let the AI open the game."
    )
    parser.add_argument("--serve", action="store_true", help="Run FastAPI server")
    parser.add_argument(
        "--host",
        default=os.environ.get("TICTACTOE_HOST", "127.0.0.1"),
        help="Server host (env TICTACTOE_HOST)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("TICTACTOE_PORT", "8000")),
        help="Server port (env TICTACTOE_PORT)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("TICTACTOE_LOG_LEVEL", "INFO"),
        help="Logging level (env TICTACTOE_LOG_LEVEL)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.version:
        print(__version__)
        return 0

    if args.serve:
        import uvicorn

        uvicorn.run("tictactoe.api:app", host=args.host, port=args.port, reload=False)
        return 0

    first = HUMAN.opponent() if args.ai_first else HUMAN
    engine = GameEngine(size=args.size, first=first)
    play(engine, MinimaxAI(player=HUMAN.opponent()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
