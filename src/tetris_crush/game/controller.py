from __future__ import annotations

import logging
from enum import IntEnum
from typing import Optional, Union

from .bag import SevenBag, UniformRandomizer
from .grid import GameGrid
from .line_clear import LineClearEngine
from .pieces import Piece, PieceCatalog
from .rules import Score, ScoringRules


logger = logging.getLogger(__name__)

Randomizer = Union[SevenBag, UniformRandomizer]


class StepOutcome(IntEnum):
    FELL = 0
    LOCKED = 1


class FallingPieceController:
    """Moves the active piece against the grid and locks it in when it lands.

    Locking copies each block's color into the grid, clears full rows, scores
    them and immediately spawns the next piece. Spawning never checks for
    overlap; ``is_spawn_blocked`` only reports it.
    """

    def __init__(
        self,
        grid: GameGrid,
        randomizer: Randomizer,
        line_clear: LineClearEngine,
        score: Score,
        rules: Optional[ScoringRules] = None,
        spawn_x: Optional[int] = None,
        spawn_y: int = 0,
        award_drop_steps: bool = False,
    ) -> None:
        self.grid = grid
        self.randomizer = randomizer
        self.line_clear = line_clear
        self.score = score
        self.rules = rules or ScoringRules()
        cols = grid.playable_columns
        rows = grid.playable_rows
        extent = PieceCatalog.max_extent()
        if spawn_x is None:
            spawn_x = min(grid.width // 2 - 1, cols.stop - 1 - extent)
        self.spawn_x = int(spawn_x)
        self.spawn_y = int(spawn_y)
        if not (cols.start <= self.spawn_x and self.spawn_x + extent < cols.stop
                and rows.start <= self.spawn_y and self.spawn_y + extent < rows.stop):
            raise ValueError(f"spawn origin ({self.spawn_x}, {self.spawn_y}) cannot hold every piece")
        self.award_drop_steps = award_drop_steps
        self.piece: Optional[Piece] = None
        self.last_lines_cleared = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0

    def reset_counters(self) -> None:
        self.last_lines_cleared = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0

    def spawn(self) -> Piece:
        kind, colors = self.randomizer.draw()
        self.piece = Piece(kind=kind, rotation=0, x=self.spawn_x, y=self.spawn_y, colors=colors)
        return self.piece

    def is_spawn_blocked(self) -> bool:
        if self.piece is None:
            return False
        return not self.grid.can_place(self.piece.cells())

    def _fits(self, x: int, y: int, rotation: int) -> bool:
        assert self.piece is not None
        return self.grid.can_place(self.piece.cells_at(x, y, rotation))

    def try_rotate(self, direction: int) -> bool:
        if self.piece is None or direction not in (-1, 1):
            return False
        new_rotation = self.piece.rotated(direction)
        if not self._fits(self.piece.x, self.piece.y, new_rotation):
            return False
        self.piece.rotation = new_rotation
        return True

    def try_move(self, dx: int) -> bool:
        if self.piece is None:
            return False
        if not self._fits(self.piece.x + dx, self.piece.y, self.piece.rotation):
            return False
        self.piece.x += dx
        return True

    def step_down(self) -> StepOutcome:
        assert self.piece is not None
        if self._fits(self.piece.x, self.piece.y + 1, self.piece.rotation):
            self.piece.y += 1
            return StepOutcome.FELL
        self._lock_piece()
        self.spawn()
        return StepOutcome.LOCKED

    def drop_instant(self) -> int:
        """Fall until locked; returns the number of rows fallen."""
        fell = 0
        while self.step_down() is StepOutcome.FELL:
            fell += 1
        if self.award_drop_steps:
            self.score.add(fell * self.rules.drop_step_score)
        return fell

    def _lock_piece(self) -> int:
        assert self.piece is not None
        for (x, y), color in self.piece.colored_cells():
            self.grid.set(x, y, color)
        lines = self.line_clear.clear(self.grid)
        self.score.add(self.rules.score_for_lines(lines))
        self.last_lines_cleared = lines
        self.lines_cleared_total += lines
        self.pieces_locked += 1
        logger.debug("locked %s at (%d, %d) r%d, %d line(s)", self.piece.kind.name, self.piece.x, self.piece.y,
                     self.piece.rotation, lines)
        return lines
