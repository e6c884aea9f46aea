"""
Grid world for A* pathfinding.

Cells are addressed as ``grid.cells[y][x]``; coordinates elsewhere are
``(x, y)`` tuples.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from core.exceptions import InvalidInputError

Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class GridCell:
    x: int
    y: int
    is_wall: bool = False


class Grid:
    """Rectangular grid of walkable / blocked cells."""

    def __init__(self, cells: List[List[GridCell]]):
        if not cells or not cells[0]:
            raise InvalidInputError("Grid must have at least one row and one column")
        width = len(cells[0])
        if any(len(row) != width for row in cells):
            raise InvalidInputError("All grid rows must have the same length")
        self.cells = cells
        self.rows = len(cells)
        self.cols = width

    @classmethod
    def empty(cls, rows: int, cols: int) -> 'Grid':
        return cls.from_walls(rows, cols, [])

    @classmethod
    def from_walls(cls, rows: int, cols: int, walls: Iterable[Coordinate]) -> 'Grid':
        """Build a grid with the given (x, y) positions blocked."""
        blocked = set(walls)
        return cls([
            [GridCell(x, y, (x, y) in blocked) for x in range(cols)]
            for y in range(rows)
        ])

    @classmethod
    def from_array(cls, mask: np.ndarray) -> 'Grid':
        """Build a grid from a 2-D array where non-zero means wall."""
        mask = np.asarray(mask)
        if mask.ndim != 2:
            raise InvalidInputError(f"Wall mask must be 2-D, got shape {mask.shape}")
        rows, cols = mask.shape
        return cls([
            [GridCell(x, y, bool(mask[y, x])) for x in range(cols)]
            for y in range(rows)
        ])

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def is_wall(self, x: int, y: int) -> bool:
        return self.cells[y][x].is_wall

    def walls(self) -> List[Coordinate]:
        return [(c.x, c.y) for row in self.cells for c in row if c.is_wall]

    def with_open_cells(self, *positions: Coordinate) -> 'Grid':
        """Return a copy with the given positions forced walkable."""
        opened = set(positions)
        return Grid([
            [GridCell(c.x, c.y, c.is_wall and (c.x, c.y) not in opened) for c in row]
            for row in self.cells
        ])

    def to_array(self) -> np.ndarray:
        """0/1 wall mask of shape (rows, cols)."""
        return np.array(
            [[1 if c.is_wall else 0 for c in row] for row in self.cells],
            dtype=np.int8
        )


def generate_random_grid(
    rows: int,
    cols: int,
    wall_probability: float = 0.3,
    seed: Optional[int] = None
) -> Grid:
    """
    Generate a grid where each cell is a wall with the given probability.

    Args:
        rows: Number of rows
        cols: Number of columns
        wall_probability: Chance of a cell being blocked
        seed: Random seed for reproducibility

    Returns:
        Grid instance
    """
    if not 0.0 <= wall_probability <= 1.0:
        raise InvalidInputError("wall_probability must lie in [0, 1]")
    if rows < 1 or cols < 1:
        raise InvalidInputError("Grid must have at least one row and one column")
    rng = np.random.default_rng(seed)
    return Grid.from_array(rng.random((rows, cols)) < wall_probability)
