"""
**********************************************************************************
* Title: validation.py
*
* Metadata:
* @version 1.0.0
* -------------------------------------------------------------------------------
* Description:
* Independent rule checks for a finished star placement. Every row, column
* and region must hold exactly the puzzle's star count and no two stars may
* touch, diagonals included. The command line uses these checks to confirm
* the search engine's answer, and the Z3 cross-check uses them to accept it.
*
**********************************************************************************
"""
# validation.py
# Description: Rule checks for a finished star placement.


def find_violations(model, star_positions):
    """
    Checks a star placement against every Star Battle rule.

    :param GridModel model: The puzzle.
    :param Sequence[bool] star_positions: One flag per cell, row-major.
    :returns list[str]: A message per broken rule; empty if the placement is a solution.
    """
    if len(star_positions) != model.cell_count:
        return [f"placement covers {len(star_positions)} cells, expected {model.cell_count}"]

    dim, target = model.dim, model.stars_per_region
    stars = [i for i, is_star in enumerate(star_positions) if is_star]
    violations = []

    row_counts, col_counts, region_counts = [0] * dim, [0] * dim, [0] * dim
    for i in stars:
        row_counts[model.row_of(i)] += 1
        col_counts[model.col_of(i)] += 1
        region_counts[model.region_of(i)] += 1
    for kind, counts in (("row", row_counts), ("column", col_counts), ("region", region_counts)):
        for i, count in enumerate(counts):
            if count != target:
                violations.append(f"{kind} {i} has {count} stars, expected {target}")

    for a_pos, a in enumerate(stars):
        for b in stars[a_pos + 1:]:
            if (abs(model.row_of(a) - model.row_of(b)) <= 1
                    and abs(model.col_of(a) - model.col_of(b)) <= 1):
                violations.append(
                    f"stars at ({model.row_of(a)}, {model.col_of(a)}) and "
                    f"({model.row_of(b)}, {model.col_of(b)}) touch")
    return violations


def is_valid_solution(model, star_positions):
    return not find_violations(model, star_positions)
