from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional, Tuple

from .grid import EMPTY, GameGrid


logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]

MIN_RUN = 3


class SelectionBuffer:
    """Holds at most two pending cell selections."""

    def __init__(self) -> None:
        self._items: Deque[Coordinate] = deque(maxlen=2)

    def __len__(self) -> int:
        return len(self._items)

    def push(self, cell: Coordinate) -> None:
        self._items.append(cell)

    def pop_pair(self) -> Tuple[Coordinate, Coordinate]:
        a = self._items.popleft()
        b = self._items.popleft()
        return a, b

    def clear(self) -> None:
        self._items.clear()

    @property
    def pending(self) -> Tuple[Coordinate, ...]:
        return tuple(self._items)


def are_adjacent(a: Coordinate, b: Coordinate) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


class MatchClearEngine:
    """Swap two neighbouring cells and keep the swap only if it makes a run of 3+.

    Cleared cells stay empty: there is no gravity, refill or cascade.
    """

    def __init__(self, grid: GameGrid) -> None:
        self.grid = grid
        self.selection = SelectionBuffer()
        self.swaps_committed = 0
        self.cells_cleared_total = 0

    def reset(self) -> None:
        self.selection.clear()
        self.swaps_committed = 0
        self.cells_cleared_total = 0

    @property
    def pending(self) -> Tuple[Coordinate, ...]:
        return self.selection.pending

    def clear_selection(self) -> None:
        self.selection.clear()

    def select(self, x: int, y: int) -> bool:
        """Queue a selection; the second one triggers a swap attempt."""
        if not self.grid.is_inside(x, y) or self.grid.get(x, y) <= EMPTY:
            return False
        self.selection.push((x, y))
        if len(self.selection) == 2:
            a, b = self.selection.pop_pair()
            self.attempt_swap(a, b)
        return True

    def attempt_swap(self, a: Coordinate, b: Coordinate) -> bool:
        if not are_adjacent(a, b):
            return False
        a_color = self.grid.get(*a)
        b_color = self.grid.get(*b)
        self.grid.set(a[0], a[1], b_color)
        self.grid.set(b[0], b[1], a_color)

        # Each side is checked against the color that came from its partner
        cleared_a = self.clear_matches_from(a, b_color)
        cleared_b = self.clear_matches_from(b, a_color)
        if not (cleared_a or cleared_b):
            self.grid.set(a[0], a[1], a_color)
            self.grid.set(b[0], b[1], b_color)
            logger.debug("swap %s <-> %s reverted", a, b)
            return False
        self.swaps_committed += 1
        logger.debug("swap %s <-> %s committed", a, b)
        return True

    def _run(self, start: Coordinate, color: int, dx: int, dy: int) -> List[Coordinate]:
        run = [start]
        for step in (1, -1):
            x, y = start[0] + dx * step, start[1] + dy * step
            while self.grid.is_inside(x, y) and self.grid.get(x, y) == color:
                run.append((x, y))
                x, y = x + dx * step, y + dy * step
        return run

    def clear_matches_from(self, p: Coordinate, color: Optional[int] = None) -> bool:
        if color is None:
            color = self.grid.get(*p)
        if color <= EMPTY:
            return False
        row_run = self._run(p, color, 1, 0)
        col_run = self._run(p, color, 0, 1)
        cleared = set()
        if len(row_run) >= MIN_RUN:
            cleared.update(row_run)
        if len(col_run) >= MIN_RUN:
            cleared.update(col_run)
        for x, y in cleared:
            self.grid.set(x, y, EMPTY)
        self.cells_cleared_total += len(cleared)
        return bool(cleared)
