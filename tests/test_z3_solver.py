import random

import pytest

from starbattle.grid import GridModel
from starbattle.solver import solve_battle_grid
from starbattle.z3_solver import Z3StarBattleSolver, cross_check


def test_scenario_b_has_two_solutions(scenario_b):
    solutions = Z3StarBattleSolver(scenario_b).solve(max_solutions=5)
    assert set(solutions) == {frozenset({1, 7, 8, 14}), frozenset({2, 4, 11, 13})}


def test_cross_check_agrees_on_unsolvable_grid(scenario_a):
    assert cross_check(scenario_a, solve_battle_grid(scenario_a)) == (True, 0)


def test_cross_check_reports_multiple_solutions(scenario_b):
    assert cross_check(scenario_b, solve_battle_grid(scenario_b)) == (True, 2)


def test_cross_check_flags_missed_solution(scenario_b):
    agrees, count = cross_check(scenario_b, None)
    assert not agrees
    assert count == 2


@pytest.mark.parametrize("seed", range(8))
def test_engine_and_z3_agree_on_solvability(seed):
    rng = random.Random(seed)
    dim = rng.choice([5, 6])
    cells = list(range(dim)) + [rng.randrange(dim) for _ in range(dim * dim - dim)]
    rng.shuffle(cells)
    model = GridModel.build(cells, dim, 1)

    result = solve_battle_grid(model)
    solutions = Z3StarBattleSolver(model).solve(max_solutions=1)
    assert (result is None) == (not solutions)
    assert cross_check(model, result)[0]
