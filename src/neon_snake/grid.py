"""Square grid model for the snake game."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

Cell = tuple[int, int]


class Grid:
    """Fixed-size N×N board.

    Cells are ``(x, y)`` pairs. Occupancy masks are NumPy arrays indexed
    ``[y, x]`` so that rows map to screen rows.
    """

    def __init__(self, size: int = 15) -> None:
        if size < 4:
            raise ValueError("Grid size must be at least 4.")
        self.size = size

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def in_bounds(self, cell: Cell) -> bool:
        """Check whether a cell lies within the grid."""
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def occupancy(self, cells: Iterable[Cell]) -> np.ndarray:
        """Return a boolean mask with ``True`` at every given in-bounds cell."""
        mask = np.zeros((self.size, self.size), dtype=bool)
        for x, y in cells:
            if 0 <= x < self.size and 0 <= y < self.size:
                mask[y, x] = True
        return mask

    def free_cells(self, occupied: Iterable[Cell]) -> list[Cell]:
        """Return every cell not present in *occupied*, in row-major order."""
        ys, xs = np.where(~self.occupancy(occupied))
        return list(zip(xs.tolist(), ys.tolist(), strict=True))
