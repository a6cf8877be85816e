from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np


Coordinate = Tuple[int, int]

EMPTY = 0
WALL = -1


class GridAccessError(IndexError):
    """Raised when a caller touches a cell it has no business touching."""


class GameGrid:
    """Bounded 2D well indexed as ``grid[y, x]``.

    Cells hold 0 for empty, -1 for a wall and a positive color value when
    filled. With ``walls`` enabled, the left and right columns and the bottom
    row are permanent walls; otherwise the array bounds are the only edges.
    """

    def __init__(self, width: int, height: int, walls: bool = True) -> None:
        self.width = int(width)
        self.height = int(height)
        if self.width < 4 or self.height < 4:
            raise ValueError(f"grid must be at least 4x4, got {self.width}x{self.height}")
        self.walls = bool(walls)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)
        self.reset()

    def reset(self) -> None:
        self.grid.fill(EMPTY)
        if self.walls:
            self.grid[:, 0] = WALL
            self.grid[:, -1] = WALL
            self.grid[-1, :] = WALL

    @property
    def playable_columns(self) -> range:
        return range(1, self.width - 1) if self.walls else range(self.width)

    @property
    def playable_rows(self) -> range:
        return range(self.height - 1) if self.walls else range(self.height)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_wall(self, x: int, y: int) -> bool:
        if not self.walls:
            return False
        return x == 0 or x == self.width - 1 or y == self.height - 1

    def is_blocked(self, x: int, y: int) -> bool:
        if not self.is_inside(x, y):
            return True
        return self.grid[y, x] != EMPTY

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if self.is_blocked(x, y):
                return False
        return True

    def _check(self, x: int, y: int) -> None:
        if not self.is_inside(x, y):
            raise GridAccessError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")

    def get(self, x: int, y: int) -> int:
        self._check(x, y)
        return int(self.grid[y, x])

    def set(self, x: int, y: int, value: int) -> None:
        self._check(x, y)
        if self.is_wall(x, y):
            raise GridAccessError(f"cell ({x}, {y}) is a wall")
        if value < EMPTY:
            raise GridAccessError(f"cannot write wall value at ({x}, {y})")
        self.grid[y, x] = value

    def load_rows(self, rows) -> None:
        """Overwrite the playable area, top row first.

        ``rows`` may be shorter than the playable height; it is aligned to
        the bottom of the playable area and everything above is emptied.
        """
        data = np.asarray(rows, dtype=np.int8)
        cols = self.playable_columns
        play_rows = self.playable_rows
        if data.ndim != 2 or data.shape[1] != len(cols) or data.shape[0] > len(play_rows):
            raise ValueError(f"expected at most {len(play_rows)} rows of {len(cols)} cells, got {data.shape}")
        if np.any(data < EMPTY):
            raise ValueError("rows may not contain wall cells")
        area = self.grid[play_rows.start:play_rows.stop, cols.start:cols.stop]
        area.fill(EMPTY)
        area[area.shape[0] - data.shape[0]:, :] = data

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid > EMPTY))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
