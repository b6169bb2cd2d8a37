"""
Core puzzle logic for Picross (nonogram).

This module contains pure domain logic without any pygame or pixel-level
concerns. It defines:
- Grid: a fixed-size generic 2D container addressed by (x, y)
- CellState: the tri-state value of a single player cell
- Hint: one run-length clue shown beside a row or column
- derive_hints: row/column clue derivation for a solution grid
- fill_cell / flag_cell / board_matches_solution: the player moves and win check

Grids are treated as values: every operation that changes a cell returns
a new Grid, so a session can keep the previous board around safely.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class MalformedShape(ValueError):
    """Raised for ragged rows in Grid.from_rows or negative grid dimensions."""


class Grid(Generic[T]):
    """Row-major rectangular grid of values.

    Attributes:
        width: Number of columns.
        height: Number of rows.

    Out-of-range reads return None (or an empty list for row/column) and
    out-of-range writes return the grid unchanged; nothing here raises
    except construction from ragged rows or negative dimensions.
    """

    __slots__ = ("width", "height", "_cells")

    def __init__(self, width: int, height: int, cells: Sequence[T]):
        if width < 0 or height < 0:
            raise MalformedShape(f"negative dimensions {width}x{height}")
        if len(cells) != width * height:
            raise MalformedShape(
                f"expected {width * height} cells for {width}x{height}, got {len(cells)}"
            )
        self.width = width
        self.height = height
        self._cells: Tuple[T, ...] = tuple(cells)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def repeat(cls, width: int, height: int, default: T) -> "Grid[T]":
        width, height = max(0, width), max(0, height)
        return cls(width, height, [default] * (width * height))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[T]]) -> "Grid[T]":
        if not rows:
            return cls.empty()
        width = len(rows[0])
        cells: List[T] = []
        for y, row in enumerate(rows):
            if len(row) != width:
                raise MalformedShape(f"row {y} has length {len(row)}, expected {width}")
            cells.extend(row)
        return cls(width, len(rows), cells)

    @classmethod
    def empty(cls) -> "Grid[T]":
        """The 0x0 sentinel grid."""
        return cls(0, 0, ())

    # ------------------------------------------------------------------
    # Addressing
    # ------------------------------------------------------------------

    def index(self, x: int, y: int) -> int:
        """Return the flat index for (x, y)."""
        return y * self.width + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Optional[T]:
        if not self.in_bounds(x, y):
            return None
        return self._cells[self.index(x, y)]

    def set(self, x: int, y: int, value: T) -> "Grid[T]":
        if not self.in_bounds(x, y):
            return self
        cells = list(self._cells)
        cells[self.index(x, y)] = value
        return Grid(self.width, self.height, cells)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def map(self, f: Callable[[T], U]) -> "Grid[U]":
        return Grid(self.width, self.height, [f(v) for v in self._cells])

    def indexed_map(self, f: Callable[[int, int, T], U]) -> "Grid[U]":
        w = self.width
        return Grid(self.width, self.height, [f(i % w, i // w, v) for i, v in enumerate(self._cells)])

    # ------------------------------------------------------------------
    # Lines
    # ------------------------------------------------------------------

    def row(self, y: int) -> List[T]:
        if not 0 <= y < self.height:
            return []
        start = y * self.width
        return list(self._cells[start:start + self.width])

    def column(self, x: int) -> List[T]:
        if not 0 <= x < self.width:
            return []
        # strided gather over the row-major storage
        return list(self._cells[x::self.width])

    def rows(self) -> List[List[T]]:
        return [self.row(y) for y in range(self.height)]

    def columns(self) -> List[List[T]]:
        return [self.column(x) for x in range(self.width)]

    def values(self) -> List[T]:
        return list(self._cells)

    def count(self, value: T) -> int:
        return self._cells.count(value)

    def to_text(self, render: Callable[[T], str] = str) -> str:
        """Multi-line rendering, one text line per grid row."""
        return "\n".join("".join(render(v) for v in row) for row in self.rows())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self._cells == other._cells
        )

    def __hash__(self) -> int:
        return hash((self.width, self.height, self._cells))

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"


class CellState(Enum):
    """Player-side value of a single cell.

    FLAGGED marks a cell the player believes is empty; it is never treated
    as filled by the win check.
    """

    EMPTY = "empty"
    FILLED = "filled"
    FLAGGED = "flagged"


@dataclass
class Hint:
    """A single clue: the derived value of one run of filled cells.

    Attributes:
        group_size: Run length plus one (a lone filled cell gives 2).
        used: Scratch mark the player toggles to cross a hint off.
    """

    group_size: int
    used: bool = False

    def toggled(self) -> "Hint":
        return replace(self, used=not self.used)


# ============================ Hints ============================

def run_lengths(line: Sequence[bool]) -> List[Tuple[bool, int]]:
    """Encode a line as (value, count) pairs of maximal equal runs."""
    runs: List[Tuple[bool, int]] = []
    for value in line:
        if runs and runs[-1][0] == value:
            runs[-1] = (value, runs[-1][1] + 1)
        else:
            runs.append((value, 1))
    return runs


def line_hints(line: Sequence[bool]) -> List[Hint]:
    # 채워진 구간만 힌트가 된다 (값은 구간 길이 + 1)
    return [Hint(count + 1) for value, count in run_lengths(line) if value]


def derive_hints(solution: Grid[bool]) -> Tuple[List[List[Hint]], List[List[Hint]]]:
    """Return (row_hints, column_hints) for a solution grid."""
    row_hints = [line_hints(row) for row in solution.rows()]
    column_hints = [line_hints(col) for col in solution.columns()]
    logger.debug("derived hints for %r: rows=%s cols=%s", solution,
                 [[h.group_size for h in hs] for hs in row_hints],
                 [[h.group_size for h in hs] for hs in column_hints])
    return row_hints, column_hints


# ============================ Player moves ============================

def blank_board(width: int, height: int) -> Grid[CellState]:
    return Grid.repeat(width, height, CellState.EMPTY)


def fill_cell(board: Grid[CellState], x: int, y: int) -> Grid[CellState]:
    """Toggle EMPTY <-> FILLED at (x, y). Flagged cells are left alone."""
    state = board.get(x, y)
    if state is CellState.EMPTY:
        return board.set(x, y, CellState.FILLED)
    if state is CellState.FILLED:
        return board.set(x, y, CellState.EMPTY)
    return board


def flag_cell(board: Grid[CellState], x: int, y: int) -> Grid[CellState]:
    """Toggle EMPTY <-> FLAGGED at (x, y). Filled cells are left alone."""
    state = board.get(x, y)
    if state is CellState.EMPTY:
        return board.set(x, y, CellState.FLAGGED)
    if state is CellState.FLAGGED:
        return board.set(x, y, CellState.EMPTY)
    return board


def filled_mask(board: Grid[CellState]) -> Grid[bool]:
    return board.map(lambda state: state is CellState.FILLED)


def board_matches_solution(board: Grid[CellState], solution: Grid[bool]) -> bool:
    return filled_mask(board) == solution
