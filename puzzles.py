"""
Puzzle sources: the curated catalog and the random solution generator.

Nothing here draws from the global random stream. Callers own a
random.Random and pass it in, so a fixed seed always reproduces the same
solution grid.
"""

import logging
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Set, Tuple, Union

import config
from components import Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Puzzle:
    """A named solution pattern. Never mutated after construction."""

    id: int
    name: str
    solution: Grid

    @classmethod
    def from_pattern(cls, id: int, name: str, pattern: Sequence[Sequence]) -> "Puzzle":
        """Build a puzzle from rows of 0/1 values ("01110" strings and booleans work too)."""
        rows = [[v in (1, "1") for v in row] for row in pattern]
        return cls(id, name, Grid.from_rows(rows))

    @property
    def is_empty(self) -> bool:
        return self.id == 0 and self.name == "" and self.solution == Grid.empty()


EMPTY_PUZZLE = Puzzle(0, "", Grid.empty())


class Catalog:
    """Immutable ordered list of curated puzzles.

    Lookups never fail: an index outside the list returns EMPTY_PUZZLE,
    which callers must not load as a level.
    """

    def __init__(self, puzzles: Sequence[Puzzle] = ()):
        self._puzzles: Tuple[Puzzle, ...] = tuple(puzzles)

    def get(self, index: int) -> Puzzle:
        if not 0 <= index < len(self._puzzles):
            return EMPTY_PUZZLE
        return self._puzzles[index]

    def names(self) -> List[str]:
        return [p.name for p in self._puzzles]

    def __len__(self) -> int:
        return len(self._puzzles)

    def __iter__(self) -> Iterator[Puzzle]:
        return iter(self._puzzles)


# ============================ Curated levels ============================
LEVELS = [
    ("Heart", [
        "01010",
        "11111",
        "11111",
        "01110",
        "00100",
    ]),
    ("Smiley", [
        "01010",
        "01010",
        "00000",
        "10001",
        "01110",
    ]),
    ("House", [
        "00100",
        "01110",
        "11111",
        "11011",
        "11011",
    ]),
    ("Arrow", [
        "00100",
        "01100",
        "11111",
        "01100",
        "00100",
    ]),
    ("Tree", [
        "0000110000",
        "0001111000",
        "0011111100",
        "0111111110",
        "0001111000",
        "0011111100",
        "0111111110",
        "1111111111",
        "0000110000",
        "0000110000",
    ]),
    ("Cat", [
        "1000000001",
        "1100000011",
        "1111111111",
        "1101111011",
        "1111111111",
        "1111001111",
        "0111111110",
        "0011111100",
        "0001111000",
        "0000000000",
    ]),
    ("Anchor", [
        "000000111000000",
        "000001101100000",
        "000000111000000",
        "000000010000000",
        "000111111111000",
        "000000010000000",
        "000000010000000",
        "000000010000000",
        "100000010000001",
        "110000010000011",
        "011000010000110",
        "001100010001100",
        "000111111111000",
        "000001111100000",
        "000000000000000",
    ]),
]


def default_catalog() -> Catalog:
    return Catalog(
        Puzzle.from_pattern(i, name, pattern) for i, (name, pattern) in enumerate(LEVELS, start=1)
    )


# ============================ Generator ============================

class SolutionStrategy:
    """Interface for random solution generators."""

    name = "base"

    def generate(self, rng: random.Random, width: int, height: int) -> Grid:
        raise NotImplementedError


class IndependentCellStrategy(SolutionStrategy):
    """Every cell is an independent fair coin flip."""

    name = "independent-cell"

    def generate(self, rng: random.Random, width: int, height: int) -> Grid:
        return Grid(width, height, [rng.random() < 0.5 for _ in range(width * height)])


class CountAndPlaceStrategy(SolutionStrategy):
    """Pick a fill count, then fill exactly that many distinct cells.

    The count is uniform over [min_fill, width*height]; coordinates are
    drawn uniformly and redrawn on collision until enough distinct cells
    are chosen.
    """

    name = "count-and-place"

    def __init__(self, min_fill: int = config.MIN_RANDOM_FILL):
        self.min_fill = min_fill

    def generate(self, rng: random.Random, width: int, height: int) -> Grid:
        total = width * height
        if total == 0:
            return Grid.repeat(width, height, False)
        target = rng.randint(min(self.min_fill, total), total)

        chosen: Set[Tuple[int, int]] = set()
        while len(chosen) < target:
            chosen.add((rng.randrange(width), rng.randrange(height)))

        return Grid.repeat(width, height, False).indexed_map(lambda x, y, _: (x, y) in chosen)


DEFAULT_STRATEGY = CountAndPlaceStrategy()

Size = Union[int, str, Grid]


def resolve_size(size: Size) -> Tuple[int, int]:
    """Turn an edge length, preset name or existing grid into (width, height)."""
    if isinstance(size, Grid):
        width, height = size.width, size.height
    elif isinstance(size, str):
        if size not in config.SIZE_PRESETS:
            raise ValueError(f"unknown size preset: {size!r}")
        width = height = config.SIZE_PRESETS[size]
    else:
        width, height = size, size
    if width < 1 or height < 1:
        raise ValueError(f"size must be at least 1x1, got {width}x{height}")
    return width, height


def generate_solution(rng: random.Random, size: Size,
                      strategy: Optional[SolutionStrategy] = None) -> Grid:
    strategy = strategy or DEFAULT_STRATEGY
    width, height = resolve_size(size)
    solution = strategy.generate(rng, width, height)
    logger.debug("generated %dx%d solution with %s (%d filled)",
                 width, height, strategy.name, solution.count(True))
    return solution
