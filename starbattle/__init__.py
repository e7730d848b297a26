"""Brute-force Star Battle solver with forward pruning."""

from starbattle.grid import GridModel, ConstructionError
from starbattle.solver import ConstraintState, SearchEngine, SolutionResult, solve_battle_grid

__all__ = [
    "GridModel",
    "ConstructionError",
    "ConstraintState",
    "SearchEngine",
    "SolutionResult",
    "solve_battle_grid",
]
