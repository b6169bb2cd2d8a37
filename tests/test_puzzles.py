from __future__ import annotations

import random

import pytest

import config
from components import Grid
from puzzles import (
    DEFAULT_STRATEGY,
    EMPTY_PUZZLE,
    LEVELS,
    Catalog,
    CountAndPlaceStrategy,
    IndependentCellStrategy,
    Puzzle,
    default_catalog,
    generate_solution,
    resolve_size,
)


def test_from_pattern_maps_ones_to_true() -> None:
    puzzle = Puzzle.from_pattern(7, "Dot", ["010", "000"])
    assert puzzle.solution.rows() == [[False, True, False], [False, False, False]]
    assert puzzle.id == 7
    assert not puzzle.is_empty


def test_catalog_out_of_range_returns_sentinel() -> None:
    catalog = Catalog([Puzzle.from_pattern(1, "One", [[1]])])

    assert catalog.get(0).name == "One"
    assert catalog.get(1) is EMPTY_PUZZLE
    assert catalog.get(-1) is EMPTY_PUZZLE
    assert EMPTY_PUZZLE.is_empty
    assert EMPTY_PUZZLE.solution == Grid.empty()


def test_default_catalog_levels_are_well_formed() -> None:
    catalog = default_catalog()

    assert len(catalog) == len(LEVELS)
    assert catalog.names() == [name for name, _ in LEVELS]
    for i, puzzle in enumerate(catalog, start=1):
        assert puzzle.id == i
        assert puzzle.solution.width in config.SIZE_PRESETS.values()
        assert puzzle.solution.count(True) > 0


def test_resolve_size_accepts_presets_ints_and_grids() -> None:
    assert resolve_size("MEDIUM") == (10, 10)
    assert resolve_size(7) == (7, 7)
    assert resolve_size(Grid.repeat(4, 2, False)) == (4, 2)
    with pytest.raises(ValueError):
        resolve_size("HUGE")


def test_default_strategy_is_count_and_place() -> None:
    assert isinstance(DEFAULT_STRATEGY, CountAndPlaceStrategy)


def test_same_seed_reproduces_solution() -> None:
    first = generate_solution(random.Random(42), "SMALL")
    second = generate_solution(random.Random(42), "SMALL")
    assert first == second
    assert (first.width, first.height) == (5, 5)


@pytest.mark.parametrize("seed", range(20))
def test_count_and_place_fill_count_is_within_bounds(seed: int) -> None:
    solution = generate_solution(random.Random(seed), 5, CountAndPlaceStrategy())
    assert config.MIN_RANDOM_FILL <= solution.count(True) <= 25


def test_count_and_place_matches_its_own_draws() -> None:
    # same rng sequence: target count first, then coordinates until distinct
    rng = random.Random(3)
    target = rng.randint(5, 16)
    chosen = set()
    while len(chosen) < target:
        chosen.add((rng.randrange(4), rng.randrange(4)))

    solution = CountAndPlaceStrategy().generate(random.Random(3), 4, 4)
    assert solution.count(True) == target
    assert {(x, y) for x in range(4) for y in range(4) if solution.get(x, y)} == chosen


def test_count_and_place_on_tiny_grid_fills_everything() -> None:
    solution = CountAndPlaceStrategy().generate(random.Random(0), 2, 2)
    assert solution.count(True) == 4


def test_independent_cell_strategy_is_seeded() -> None:
    strategy = IndependentCellStrategy()
    a = strategy.generate(random.Random(9), 6, 3)
    b = strategy.generate(random.Random(9), 6, 3)
    assert a == b
    assert (a.width, a.height) == (6, 3)


def test_generator_leaves_global_random_alone() -> None:
    random.seed(123)
    expected = random.random()

    random.seed(123)
    generate_solution(random.Random(1), "LARGE")
    assert random.random() == expected


def test_from_pattern_accepts_booleans() -> None:
    puzzle = Puzzle.from_pattern(8, "Bools", [[True, False], [0, 1]])
    assert puzzle.solution.rows() == [[True, False], [False, True]]


@pytest.mark.parametrize("size", [0, -3, Grid.empty(), Grid.from_rows([[]])])
def test_resolve_size_rejects_sizes_below_one(size) -> None:
    with pytest.raises(ValueError):
        resolve_size(size)


@pytest.mark.parametrize("strategy", [CountAndPlaceStrategy(), IndependentCellStrategy()])
def test_generate_solution_rejects_negative_size(strategy) -> None:
    with pytest.raises(ValueError):
        generate_solution(random.Random(0), -3, strategy)
