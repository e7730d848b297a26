"""Tests for the constraint bookkeeping and the backtracking search."""

import itertools
import random

import pytest

from starbattle.constants import STATUS_READY, STATUS_SOLVED, STATUS_EXHAUSTED
from starbattle.grid import GridModel
from starbattle.puzzle_handler import parse_grid_text
from starbattle.solver import ConstraintState, SearchEngine, SolutionResult, solve_battle_grid
from starbattle.validation import find_violations


def _random_layout(dim, seed):
    """A random region assignment in which every id in [0, dim) appears."""
    rng = random.Random(seed)
    cells = list(range(dim)) + [rng.randrange(dim) for _ in range(dim * dim - dim)]
    rng.shuffle(cells)
    return GridModel.build(cells, dim, 1)


def _brute_force_one_star(model):
    """Every one-star solution, as sorted index tuples, by trying all column permutations."""
    dim = model.dim
    solutions = []
    for cols in itertools.permutations(range(dim)):
        if any(abs(cols[r] - cols[r + 1]) < 2 for r in range(dim - 1)):
            continue
        stars = tuple(model.index_of(r, c) for r, c in enumerate(cols))
        if len({model.region_of(i) for i in stars}) == dim:
            solutions.append(stars)
    return solutions


# --- ConstraintState ---

def test_initial_state_counts(scenario_b):
    state = ConstraintState.initial(scenario_b)
    assert state.star_rows == [0, 0, 0, 0]
    assert state.free_rows == [4, 4, 4, 4]
    assert state.free_cols == [4, 4, 4, 4]
    assert state.free_regions == [4, 4, 4, 4]
    assert all(state.eligible)


def test_initial_region_free_counts_follow_region_sizes():
    model = GridModel.from_rows([[0, 0, 0], [0, 1, 1], [2, 2, 2]], 1)
    assert ConstraintState.initial(model).free_regions == [4, 2, 3]


def test_commit_star_eliminates_neighbourhood_and_full_lines(scenario_b):
    state = ConstraintState.initial(scenario_b)
    assert state.commit_star(scenario_b, 0)

    assert state.star_rows == [1, 0, 0, 0]
    assert state.star_cols == [1, 0, 0, 0]
    assert state.star_regions == [1, 0, 0, 0]
    # Window (0,0),(0,1),(1,0),(1,1); full row 0; full column 0.
    eliminated = {i for i, ok in enumerate(state.eligible) if not ok}
    assert eliminated == {0, 1, 2, 3, 4, 5, 8, 12}
    assert state.free_rows == [0, 2, 3, 3]
    assert state.free_cols == [0, 2, 3, 3]
    assert state.free_regions == [0, 2, 3, 3]


def test_commit_star_closes_a_full_region():
    model = GridModel.from_rows([[0, 1, 1], [1, 1, 1], [2, 2, 0]], 1)
    state = ConstraintState.initial(model)
    state.commit_star(model, 0)
    # Region 0 also owns (2, 2), outside the star's window, row and column.
    assert not state.eligible[model.index_of(2, 2)]
    assert state.free_regions[0] == 0


def test_commit_star_reports_infeasible_branch(scenario_a):
    state = ConstraintState.initial(scenario_a)
    # The 2x2 window covers the whole grid, so row 1 has nowhere left to go.
    assert state.commit_star(scenario_a, 0) is False
    assert state.free_rows[1] == 0


def test_commit_star_rejects_ineligible_cell(scenario_b):
    state = ConstraintState.initial(scenario_b)
    state.commit_star(scenario_b, 0)
    with pytest.raises(ValueError):
        state.commit_star(scenario_b, 1)


def test_eliminate_is_idempotent(scenario_b):
    state = ConstraintState.initial(scenario_b)
    assert state.eliminate(scenario_b, 5) is True
    assert state.eliminate(scenario_b, 5) is False
    assert state.free_rows[1] == 3
    assert state.free_cols[1] == 3
    assert state.free_regions[1] == 3


def test_copy_from_shares_no_storage(scenario_b):
    parent = ConstraintState.initial(scenario_b)
    child = ConstraintState.initial(scenario_b)
    child.copy_from(parent)
    child.commit_star(scenario_b, 5)
    assert all(parent.eligible)
    assert parent.star_rows == [0, 0, 0, 0]
    assert parent.free_cols == [4, 4, 4, 4]


# --- SearchEngine ---

def test_scenario_a_has_no_solution(scenario_a):
    engine = SearchEngine(scenario_a)
    assert engine.status == STATUS_READY
    assert engine.solve() is None
    assert engine.status == STATUS_EXHAUSTED


def test_scenario_b_finds_first_solution_in_scan_order(scenario_b):
    engine = SearchEngine(scenario_b)
    result = engine.solve()
    assert isinstance(result, SolutionResult)
    assert engine.status == STATUS_SOLVED
    assert result.star_cells(scenario_b) == [(0, 1), (1, 3), (2, 0), (3, 2)]


def test_snapshot_stack_is_sized_to_target(scenario_b):
    engine = SearchEngine(scenario_b)
    assert len(engine.states) == scenario_b.target_stars + 1


def test_result_takes_over_placement_buffer(scenario_b):
    engine = SearchEngine(scenario_b)
    result = engine.solve()
    assert engine.star_pos is None
    assert sum(result.star_positions) == scenario_b.target_stars
    assert len(result.eligibility) == scenario_b.cell_count
    with pytest.raises(AttributeError):
        result.star_positions = ()


def test_exhausted_subtree_eliminates_cell_in_parent(scenario_b):
    engine = SearchEngine(scenario_b)
    engine.solve()
    # Every branch through (0, 0) dead-ends, so depth 0 no longer offers it.
    root = engine.states[0]
    assert root.eligible[0] is False
    assert root.free_rows[0] == 3
    assert root.free_cols[0] == 3


def test_solve_is_deterministic(scenario_b, forced_10x10_text):
    for model in (scenario_b, _random_layout(6, 7), parse_grid_text(forced_10x10_text)):
        engine = SearchEngine(model)
        first = engine.solve()
        again = engine.solve()
        fresh = solve_battle_grid(model)
        if first is None:
            assert again is None and fresh is None
        else:
            assert first.star_positions == again.star_positions == fresh.star_positions


def test_10x10_solution_satisfies_every_rule(forced_10x10_text, forced_10x10_solution):
    model = parse_grid_text(forced_10x10_text)
    engine = SearchEngine(model)
    result = engine.solve()
    assert result is not None
    assert engine.nodes_visited >= model.target_stars
    assert find_violations(model, result.star_positions) == []

    stars = result.star_cells(model)
    assert stars == forced_10x10_solution
    for r in range(10):
        assert sum(1 for sr, _ in stars if sr == r) == 2
        assert sum(1 for _, sc in stars if sc == r) == 2
    for (r1, c1), (r2, c2) in itertools.combinations(stars, 2):
        assert max(abs(r1 - r2), abs(c1 - c2)) >= 2


def test_unsolvable_10x10_is_exhausted(unsolvable_10x10_text):
    assert solve_battle_grid(parse_grid_text(unsolvable_10x10_text)) is None


def test_solution_cells_are_starred_or_eliminated(scenario_b):
    result = solve_battle_grid(scenario_b)
    for i in range(scenario_b.cell_count):
        if result.is_star(i):
            assert not result.is_eligible(i)
    # With every line full, nothing is left open.
    assert not any(result.eligibility)


@pytest.mark.parametrize("dim", [4, 5, 6])
@pytest.mark.parametrize("seed", range(12))
def test_matches_brute_force_on_random_layouts(dim, seed):
    model = _random_layout(dim, seed * 31 + dim)
    expected = _brute_force_one_star(model)
    result = solve_battle_grid(model)
    if not expected:
        assert result is None
    else:
        assert result is not None
        assert tuple(result.star_indices) == min(expected)


def _spaced_choices(dim, stars):
    """Column sets for one row whose stars do not touch each other."""
    return [cols for cols in itertools.combinations(range(dim), stars)
            if all(b - a >= 2 for a, b in zip(cols, cols[1:]))]


def _random_placement(dim, stars, rng):
    """A random valid placement, ignoring regions, as one column set per row."""
    choices = _spaced_choices(dim, stars)
    col_counts = [0] * dim
    picked = []

    def extend(row):
        if row == dim:
            return True
        options = choices[:]
        rng.shuffle(options)
        for cols in options:
            if any(col_counts[c] == stars for c in cols):
                continue
            if picked and any(abs(a - b) <= 1 for a in cols for b in picked[-1]):
                continue
            for c in cols:
                col_counts[c] += 1
            picked.append(cols)
            if extend(row + 1):
                return True
            picked.pop()
            for c in cols:
                col_counts[c] -= 1
        return False

    assert extend(0)
    return picked


def _grown_layout(dim, stars, seed):
    """
    A solvable layout: the stars of a random placement are paired up as
    region seeds, then regions grow one orthogonal neighbour at a time until
    every cell belongs to one.
    """
    rng = random.Random(seed)
    star_cells = [r * dim + c for r, cols in enumerate(_random_placement(dim, stars, rng)) for c in cols]
    rng.shuffle(star_cells)
    regions = [None] * (dim * dim)
    for k, cell in enumerate(star_cells):
        regions[cell] = k // stars

    def neighbours(i):
        r, c = divmod(i, dim)
        return [nr * dim + nc for nr, nc in ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1))
                if 0 <= nr < dim and 0 <= nc < dim]

    while None in regions:
        frontier = [i for i, region in enumerate(regions)
                    if region is None and any(regions[n] is not None for n in neighbours(i))]
        cell = rng.choice(frontier)
        regions[cell] = regions[rng.choice([n for n in neighbours(cell) if regions[n] is not None])]
    return GridModel.build(regions, dim, stars)


def _brute_force_by_rows(model):
    """Every solution, as sorted index tuples, by trying each valid column set row by row."""
    dim, stars = model.dim, model.stars_per_region
    choices = _spaced_choices(dim, stars)
    solutions = []

    def extend(row, col_counts, region_counts, previous, cells):
        if row == dim:
            if all(n == stars for n in region_counts):
                solutions.append(tuple(cells))
            return
        for cols in choices:
            if previous and any(abs(a - b) <= 1 for a in cols for b in previous):
                continue
            row_cells = [model.index_of(row, c) for c in cols]
            next_cols, next_regions = col_counts[:], region_counts[:]
            for c, i in zip(cols, row_cells):
                next_cols[c] += 1
                next_regions[model.region_of(i)] += 1
            if max(next_cols) > stars or max(next_regions) > stars:
                continue
            extend(row + 1, next_cols, next_regions, cols, cells + row_cells)

    extend(0, [0] * dim, [0] * dim, None, [])
    return solutions


@pytest.mark.parametrize("seed", range(40))
def test_two_star_layouts_match_brute_force(seed):
    model = _grown_layout(8, 2, seed)
    expected = _brute_force_by_rows(model)
    assert expected

    result = solve_battle_grid(model)
    assert result is not None
    assert tuple(result.star_indices) == min(expected)
    assert find_violations(model, result.star_positions) == []
