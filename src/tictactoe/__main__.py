"""Entry point for running tictactoe via ``python -m tictactoe``."""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
