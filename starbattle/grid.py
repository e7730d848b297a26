"""
**********************************************************************************
* Title: grid.py
*
* Metadata:
* @version 1.0.0
* -------------------------------------------------------------------------------
* Description:
* This module provides the GridModel class, the immutable description of a
* Star Battle puzzle: its dimension, the number of stars required per row,
* column and region, the region id of every cell and, for every region, the
* ordered list of its cells. All of the index arithmetic used by the solver
* and the renderer lives here. The model is validated once on construction
* and is read-only afterwards.
*
**********************************************************************************
"""
# grid.py
# Description: The immutable puzzle model and its construction checks.

# --- EXCEPTIONS ---
class ConstructionError(ValueError):
    """Raised when a puzzle description cannot form a valid GridModel."""


# --- GRIDMODEL CLASS DEFINITION ---
class GridModel:
    """
    Immutable puzzle description. Cells are indexed row-major, so cell
    (row, col) has index row * dim + col.
    """
    def __init__(self, dim, stars_per_region, cell_regions, region_cells):
        # Use GridModel.build; this constructor trusts its arguments.
        self.dim = dim
        self.stars_per_region = stars_per_region
        self.target_stars = dim * stars_per_region
        self.cell_regions = cell_regions
        self.region_cells = region_cells

    @classmethod
    def build(cls, cell_regions, dim, stars_per_region):
        """
        Validates a row-major region assignment and returns a GridModel.

        The region id of every cell must lie in [0, dim) and every id in that
        range must own at least one cell.

        :param Sequence[int] cell_regions: Region id per cell, row-major.
        :param int dim: The width and height of the grid.
        :param int stars_per_region: Stars required per row, column and region.
        :returns GridModel: The validated model.
        :raises ConstructionError: If any of the invariants is violated.
        """
        if dim < 1:
            raise ConstructionError(f"grid dimension must be positive, got {dim}")
        if stars_per_region < 1:
            raise ConstructionError(f"stars per region must be positive, got {stars_per_region}")

        cell_regions = tuple(cell_regions)
        if len(cell_regions) != dim * dim:
            raise ConstructionError(
                f"expected {dim * dim} cells for a {dim}x{dim} grid, got {len(cell_regions)}")

        # Built incrementally so every region keeps its cells in source order.
        region_cells = [[] for _ in range(dim)]
        for index, region_id in enumerate(cell_regions):
            if not 0 <= region_id < dim:
                raise ConstructionError(
                    f"region id {region_id} at cell {index} is outside the range [0, {dim})")
            region_cells[region_id].append(index)

        missing = [region_id for region_id, cells in enumerate(region_cells) if not cells]
        if missing:
            raise ConstructionError(f"region ids {missing} have no cells; ids must be contiguous")

        return cls(dim, stars_per_region, cell_regions, tuple(tuple(cells) for cells in region_cells))

    @classmethod
    def from_rows(cls, rows, stars_per_region):
        """Builds a model from a square 2D list of region ids."""
        dim = len(rows)
        for r, row in enumerate(rows):
            if len(row) != dim:
                raise ConstructionError(f"row {r} has {len(row)} cells, expected {dim}")
        return cls.build([region_id for row in rows for region_id in row], dim, stars_per_region)

    # --- INDEX ARITHMETIC ---
    @property
    def cell_count(self):
        return self.dim * self.dim

    def row_of(self, index):
        return index // self.dim

    def col_of(self, index):
        return index % self.dim

    def index_of(self, row, col):
        return row * self.dim + col

    def region_of(self, index):
        return self.cell_regions[index]

    def cells_of_region(self, region_id):
        return self.region_cells[region_id]

    def rows(self):
        """Returns the region ids as a 2D list, one list per row."""
        return [list(self.cell_regions[r * self.dim:(r + 1) * self.dim]) for r in range(self.dim)]

    def __eq__(self, other):
        if not isinstance(other, GridModel):
            return NotImplemented
        return (self.stars_per_region == other.stars_per_region
                and self.cell_regions == other.cell_regions)

    def __hash__(self):
        return hash((self.stars_per_region, self.cell_regions))

    def __repr__(self):
        return f"GridModel(dim={self.dim}, stars_per_region={self.stars_per_region})"


# --- LAYOUT CHECKS ---
def layout_warnings(model):
    """
    Returns advisory warnings about a layout that is valid but suspicious.

    Two things are reported: cells with no orthogonal neighbour in their own
    region, and regions with fewer cells than the star count they must hold.
    Neither stops the solver, which will simply prove such puzzles unsolvable
    where they are.

    :param GridModel model: The puzzle to inspect.
    :returns list[str]: One message per finding, in cell/region order.
    """
    warnings = []
    dim = model.dim
    for index, region_id in enumerate(model.cell_regions):
        r, c = model.row_of(index), model.col_of(index)
        neighbours = [(r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)]
        if not any(0 <= nr < dim and 0 <= nc < dim and model.cell_regions[model.index_of(nr, nc)] == region_id
                   for nr, nc in neighbours):
            warnings.append(f"cell ({r}, {c}) of region {region_id} is isolated from the rest of its region")

    for region_id, cells in enumerate(model.region_cells):
        if len(cells) < model.stars_per_region:
            warnings.append(
                f"region {region_id} has {len(cells)} cells, fewer than the {model.stars_per_region} stars it needs")
    return warnings
