"""
**********************************************************************************
* Title: z3_solver.py
*
* Metadata:
* @version 1.0.0
* -------------------------------------------------------------------------------
* Description:
* An independent model of the Star Battle rules for the Z3 SMT solver. It is
* used to cross-check the brute-force engine: if both agree on whether a
* puzzle is solvable, and the engine's stars satisfy Z3's model, the engine's
* pruning has not thrown away a solution. Asking for a second model behind a
* blocking clause also tells us whether the puzzle's solution is unique.
*
**********************************************************************************
"""
# z3_solver.py
# Description: SMT encoding of a GridModel for solution cross-checking.

import time
import logging

from z3 import Solver, Bool, PbEq, Implies, And, Not, Or, sat

from starbattle.display import format_duration
from starbattle.validation import is_valid_solution


class Z3StarBattleSolver:
    """Encodes a GridModel as Z3 constraints and enumerates up to N solutions."""

    def __init__(self, model):
        """
        :param GridModel model: The puzzle to encode.
        """
        self.model = model
        self.solver = Solver()
        # X[i] is the statement "cell i holds a star".
        self.X = [Bool(f"star_{model.row_of(i)}_{model.col_of(i)}") for i in range(model.cell_count)]
        self._add_constraints()

    def _add_constraints(self):
        model, X = self.model, self.X
        dim, stars = model.dim, model.stars_per_region

        # Rule 1 and 2: exactly `stars` per row and per column
        for i in range(dim):
            self.solver.add(PbEq([(X[model.index_of(i, c)], 1) for c in range(dim)], stars))
            self.solver.add(PbEq([(X[model.index_of(r, i)], 1) for r in range(dim)], stars))

        # Rule 3: exactly `stars` per region
        for cells in model.region_cells:
            self.solver.add(PbEq([(X[i], 1) for i in cells], stars))

        # Rule 4: no two stars touch, diagonals included
        for i in range(model.cell_count):
            r, c = model.row_of(i), model.col_of(i)
            neighbors = [X[model.index_of(nr, nc)]
                         for nr in range(max(r - 1, 0), min(r + 2, dim))
                         for nc in range(max(c - 1, 0), min(c + 2, dim))
                         if (nr, nc) != (r, c)]
            if neighbors:
                self.solver.add(Implies(X[i], And([Not(n) for n in neighbors])))

    def solve(self, max_solutions=2):
        """
        Finds up to `max_solutions` distinct solutions.

        :returns list[frozenset[int]]: The star cell indices of each solution found.
        """
        solutions, start_time = [], time.monotonic()
        while len(solutions) < max_solutions and self.solver.check() == sat:
            z3_model = self.solver.model()
            stars = frozenset(i for i, var in enumerate(self.X) if z3_model.evaluate(var, model_completion=True))
            solutions.append(stars)
            # Block this solution so the next check must find another one
            self.solver.add(Or([Not(var) if i in stars else var for i, var in enumerate(self.X)]))
        logging.info(f"Z3 found {len(solutions)} solution(s) in {format_duration(time.monotonic() - start_time)}")
        return solutions


def cross_check(model, result):
    """
    Compares the engine's outcome for `model` with Z3's.

    :param GridModel model: The puzzle that was solved.
    :param Optional[SolutionResult] result: What the engine returned.
    :returns tuple[bool, int]: Whether the two agree on solvability, and how
        many solutions Z3 found (capped at 2).
    """
    solutions = Z3StarBattleSolver(model).solve(max_solutions=2)
    if result is None:
        return not solutions, len(solutions)
    if not solutions or not is_valid_solution(model, result.star_positions):
        return False, len(solutions)
    return True, len(solutions)
