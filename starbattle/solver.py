"""
**********************************************************************************
* Title: solver.py
*
* Metadata:
* @version 1.0.0
* -------------------------------------------------------------------------------
* Description:
* This module is the brute-force search engine of the Star Battle solver. It
* places stars one at a time in strictly increasing row-major cell order and
* propagates every placement immediately: the star's 3x3 neighbourhood is
* eliminated, full rows, columns and regions are closed off, and the branch is
* abandoned as soon as any row, column or region can no longer reach its star
* quota. The engine keeps one preallocated ConstraintState per search depth,
* so advancing a level is an in-place copy and backtracking is just a move of
* the depth pointer. Because the scan order is fixed, the first solution
* found is deterministic.
*
**********************************************************************************
"""
# solver.py
# Description: Constraint bookkeeping and the recursive place/prune/backtrack search.

# --- IMPORTS ---
import logging
import time
from dataclasses import dataclass

from starbattle.constants import (
    STATUS_READY, STATUS_SEARCHING, STATUS_SOLVED, STATUS_EXHAUSTED, TRACE_LOGGER_NAME
)

# Per-placement trace; silent unless something enables DEBUG on this logger.
trace_logger = logging.getLogger(TRACE_LOGGER_NAME)


# --- CONSTRAINT STATE ---
class ConstraintState:
    """
    A snapshot of the search bookkeeping at one depth: committed star counts
    and still-eligible cell counts per row, column and region, plus the
    per-cell eligibility bitmap.
    """
    def __init__(self, star_rows, star_cols, star_regions, free_rows, free_cols, free_regions, eligible):
        self.star_rows = star_rows
        self.star_cols = star_cols
        self.star_regions = star_regions
        self.free_rows = free_rows
        self.free_cols = free_cols
        self.free_regions = free_regions
        self.eligible = eligible

    @classmethod
    def initial(cls, model):
        """Returns the depth-0 state: no stars, every cell eligible."""
        dim = model.dim
        return cls(
            star_rows=[0] * dim,
            star_cols=[0] * dim,
            star_regions=[0] * dim,
            free_rows=[dim] * dim,
            free_cols=[dim] * dim,
            free_regions=[len(cells) for cells in model.region_cells],
            eligible=[True] * model.cell_count,
        )

    def copy_from(self, other):
        """Overwrites this snapshot with the values of `other`, reusing its own lists."""
        self.star_rows[:] = other.star_rows
        self.star_cols[:] = other.star_cols
        self.star_regions[:] = other.star_regions
        self.free_rows[:] = other.free_rows
        self.free_cols[:] = other.free_cols
        self.free_regions[:] = other.free_regions
        self.eligible[:] = other.eligible

    def eliminate(self, model, index):
        """
        Marks a cell as unable to host a star and decrements the free counts
        of its row, column and region. Already-ineligible cells are left alone,
        so overlapping eliminations never double count.

        :param GridModel model: The puzzle being solved.
        :param int index: The cell to eliminate.
        :returns bool: True if the cell was eligible before the call.
        """
        if not self.eligible[index]:
            return False
        self.eligible[index] = False
        self.free_rows[index // model.dim] -= 1
        self.free_cols[index % model.dim] -= 1
        self.free_regions[model.cell_regions[index]] -= 1
        return True

    def commit_star(self, model, index):
        """
        Commits a star at `index` and propagates its consequences.

        The star's clipped 3x3 window (the cell included) is eliminated, then
        the rest of its row, column and region in turn if that line or region
        has just reached its quota. Finally every row, column and region is
        checked for feasibility.

        :param GridModel model: The puzzle being solved.
        :param int index: An eligible cell.
        :returns bool: False if some row, column or region can no longer reach its quota.
        """
        if not self.eligible[index]:
            raise ValueError(f"cell {index} is not eligible for a star")

        dim = model.dim
        target = model.stars_per_region
        row, col = index // dim, index % dim
        region_id = model.cell_regions[index]

        self.star_rows[row] += 1
        self.star_cols[col] += 1
        self.star_regions[region_id] += 1

        # 1. King-move neighbourhood
        for r in range(max(row - 1, 0), min(row + 2, dim)):
            for c in range(max(col - 1, 0), min(col + 2, dim)):
                self.eliminate(model, r * dim + c)

        # 2. Close off whatever just reached its quota
        if self.star_rows[row] == target:
            for c in range(dim):
                self.eliminate(model, row * dim + c)
        if self.star_cols[col] == target:
            for r in range(dim):
                self.eliminate(model, r * dim + col)
        if self.star_regions[region_id] == target:
            for cell in model.region_cells[region_id]:
                self.eliminate(model, cell)

        return self.is_feasible(model)

    def is_feasible(self, model):
        """True while every row, column and region can still reach its quota."""
        target = model.stars_per_region
        for i in range(model.dim):
            if self.free_cols[i] + self.star_cols[i] < target:
                return False
            if self.free_rows[i] + self.star_rows[i] < target:
                return False
            if self.free_regions[i] + self.star_regions[i] < target:
                return False
        return True


# --- SOLUTION RESULT ---
@dataclass(frozen=True)
class SolutionResult:
    """
    The final star placement and the eligibility bitmap as it stood when the
    last star was committed. Empty cells that are still eligible are "open";
    the rest were eliminated.
    """
    star_positions: tuple
    eligibility: tuple

    @property
    def star_indices(self):
        return [i for i, is_star in enumerate(self.star_positions) if is_star]

    def is_star(self, index):
        return self.star_positions[index]

    def is_eligible(self, index):
        return self.eligibility[index]

    def star_cells(self, model):
        """Returns the stars as (row, col) pairs in row-major order."""
        return [(model.row_of(i), model.col_of(i)) for i in self.star_indices]


# --- SEARCH ENGINE ---
class SearchEngine:
    """
    Depth-first search over cells in increasing row-major order.

    `states[d]` holds the bookkeeping after the d-th star. Advancing copies
    depth d into depth d + 1 and commits the new star there; backtracking
    leaves the slot in place to be overwritten by the next sibling.
    """

    def __init__(self, model):
        self.model = model
        self.states = [ConstraintState.initial(model) for _ in range(model.target_stars + 1)]
        self.star_count = 0
        self.star_pos = [False] * model.cell_count
        self.status = STATUS_READY
        self.nodes_visited = 0
        self.commits_pruned = 0
        self.elapsed = 0.0
        self._result = None
        self._trace = False

    def solve(self):
        """
        Runs the search to completion.

        :returns Optional[SolutionResult]: The first solution in scan order, or
            None if the puzzle has no solution.
        """
        self._reset()
        self.status = STATUS_SEARCHING
        self._trace = trace_logger.isEnabledFor(logging.DEBUG)
        logging.info(f"Searching a {self.model.dim}x{self.model.dim} grid for "
                     f"{self.model.target_stars} stars ({self.model.stars_per_region} per row, column and region)")

        start_time = time.monotonic()
        found = self._scan(0)
        self.elapsed = time.monotonic() - start_time

        if found:
            self.status = STATUS_SOLVED
            result, self._result = self._result, None
        else:
            self.status = STATUS_EXHAUSTED
            result = None
        logging.info(f"Search {self.status} after {self.nodes_visited} placements "
                     f"({self.commits_pruned} pruned on commit)")
        return result

    def _reset(self):
        initial = ConstraintState.initial(self.model)
        self.states[0].copy_from(initial)
        self.star_count = 0
        self.star_pos = [False] * self.model.cell_count
        self.nodes_visited = 0
        self.commits_pruned = 0
        self._result = None

    def _scan(self, start):
        """Tries every eligible cell from `start` onward as the next star."""
        model = self.model
        dim = model.dim
        target = model.stars_per_region
        state = self.states[self.star_count]

        for index in range(start, model.cell_count):
            if not state.eligible[index]:
                continue
            row = index // dim
            # Rows behind the scan can never gain another star on this path.
            if row > 0 and state.star_rows[row - 1] < target:
                if self._trace:
                    self._debug(f"[PRUNE] row {row - 1} is short of stars; abandoning scan at cell {index}")
                break
            if self._place(index):
                return True
        return False

    def _place(self, index):
        """Commits a star at `index` one level down and searches beneath it."""
        model = self.model
        depth = self.star_count
        parent = self.states[depth]
        child = self.states[depth + 1]
        row = index // model.dim

        child.copy_from(parent)
        self.nodes_visited += 1
        if not child.commit_star(model, index):
            self.commits_pruned += 1
            if self._trace:
                self._debug(f"[FAIL] star at ({row}, {index % model.dim}) leaves a row, column or region short")
            return False

        self.star_count += 1
        self.star_pos[index] = True
        if self._trace:
            self._debug(f"[PASS] star {self.star_count} at ({row}, {index % model.dim})")

        if self.star_count == model.target_stars:
            # The result takes over both bitmaps; the placement buffer is consumed.
            self._result = SolutionResult(star_positions=tuple(self.star_pos),
                                          eligibility=tuple(child.eligible))
            self.star_pos = None
            return True

        if self._scan(index):
            return True

        self.star_count -= 1
        self.star_pos[index] = False

        # Nothing later in this scan can use the cell either: every branch
        # through it from here has just been exhausted.
        if parent.star_rows[row] == 0:
            parent.eliminate(model, index)
            if self._trace:
                self._debug(f"[DEAD] cell ({row}, {index % model.dim}) eliminated at depth {depth}")
        return False

    def _debug(self, message):
        trace_logger.debug("  " * self.star_count + message)


def solve_battle_grid(model):
    """Solves `model` with a fresh SearchEngine and returns the result or None."""
    return SearchEngine(model).solve()
