from __future__ import annotations

import logging

import numpy as np

from .grid import EMPTY, GameGrid


logger = logging.getLogger(__name__)


class LineClearEngine:
    """Removes full rows and compacts the rows above them downward."""

    def is_full(self, grid: GameGrid, row: int) -> bool:
        cols = grid.playable_columns
        return bool(np.all(grid.grid[row, cols.start:cols.stop] != EMPTY))

    def collapse(self, grid: GameGrid, row: int) -> None:
        """Shift rows ``row-1 .. 0`` down by one and empty the top row."""
        cols = grid.playable_columns
        if row > 0:
            above = grid.grid[0:row, cols.start:cols.stop].copy()
            grid.grid[1:row + 1, cols.start:cols.stop] = above
        grid.grid[0, cols.start:cols.stop] = EMPTY

    def clear(self, grid: GameGrid) -> int:
        cleared = 0
        row = grid.playable_rows.stop - 1
        while row >= 0:
            if self.is_full(grid, row):
                self.collapse(grid, row)
                cleared += 1
                # Same index again: the row above has just moved into it
                continue
            row -= 1
        if cleared:
            logger.debug("cleared %d row(s)", cleared)
        return cleared
