"""Grid state for tic-tac-toe: cells, positions and empty-cell queries."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Tuple

from .errors import OutOfRange


class Cell(str, Enum):
    EMPTY = " "
    PLAYER_A = "O"
    PLAYER_B = "X"

    @classmethod
    def from_symbol(cls, symbol: str) -> "Cell":
        # '.', '_' and '' are accepted as empty for readable fixtures
        if symbol in ("", ".", "_"):
            return cls.EMPTY
        return cls(symbol.upper())


class Board:
    """
    Square board of ``size * size`` cells.

    Positions are plain ints, row-major: ``(x, y) -> x + y * size``.
    The board knows nothing about turns or players; it only stores marks.
    """

    def __init__(self, size: int = 3) -> None:
        if not isinstance(size, int) or size < 1:
            raise ValueError("size must be a positive integer")
        self._size = size
        self._cells: List[Cell] = [Cell.EMPTY] * (size * size)

    @classmethod
    def from_cells(cls, cells: Iterable[str], size: int = 3) -> "Board":
        """Build a board from symbols, e.g. ``"OO..X...."``."""
        values = [Cell.from_symbol(c) for c in cells]
        if len(values) != size * size:
            raise ValueError(f"expected {size * size} cells, got {len(values)}")
        board = cls(size)
        board._cells = values
        return board

    @property
    def size(self) -> int:
        return self._size

    @property
    def cells(self) -> Tuple[Cell, ...]:
        return tuple(self._cells)

    def index(self, x: int, y: int) -> int:
        if not (0 <= x < self._size and 0 <= y < self._size):
            raise OutOfRange(f"({x}, {y}) is outside a {self._size}x{self._size} grid")
        return x + y * self._size

    def coords(self, position: int) -> Tuple[int, int]:
        self._check(position)
        return position % self._size, position // self._size

    def occupant(self, position: int) -> Cell:
        self._check(position)
        return self._cells[position]

    def set(self, position: int, cell: Cell) -> None:
        self._check(position)
        self._cells[position] = cell

    def empty_positions(self) -> List[int]:
        return [i for i, c in enumerate(self._cells) if c is Cell.EMPTY]

    def is_full(self) -> bool:
        return not self.empty_positions()

    def clear(self) -> None:
        self._cells = [Cell.EMPTY] * (self._size * self._size)

    def copy(self) -> "Board":
        board = Board(self._size)
        board._cells = self._cells.copy()
        return board

    def rows(self) -> List[Tuple[Cell, ...]]:
        n = self._size
        return [tuple(self._cells[y * n : (y + 1) * n]) for y in range(n)]

    # ---- helpers ----

    def _check(self, position: int) -> None:
        if (
            isinstance(position, bool)
            or not isinstance(position, int)
            or not 0 <= position < len(self._cells)
        ):
            raise OutOfRange(f"position {position!r} is outside the board")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._size == other._size and self._cells == other._cells

    def __repr__(self) -> str:
        symbols = "".join(c.value if c is not Cell.EMPTY else "." for c in self._cells)
        return f"Board(size={self._size}, cells={symbols!r})"

    def __str__(self) -> str:
        divider = "\n" + "+".join(["---"] * self._size) + "\n"
        return divider.join(
            "|".join(f" {c.value} " for c in row) for row in self.rows()
        )
