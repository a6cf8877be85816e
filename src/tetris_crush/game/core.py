from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .bag import DEFAULT_MATCH_PALETTE, SevenBag, UniformRandomizer
from .controller import FallingPieceController, StepOutcome
from .grid import GameGrid
from .line_clear import LineClearEngine
from .match_clear import MatchClearEngine
from .rules import Score, ScoringRules


logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


class Variant(str, Enum):
    LINE_CLEAR = "line-clear"
    MATCH_THREE = "match3"


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    NONE = 6
    TICK = 7
    TOGGLE_PAUSE = 8


@dataclass
class GameConfig:
    """Session settings.

    Every rotation of every shape must fit at the spawn origin, so a walled
    well needs at least 6 columns and 5 rows; an unwalled one at least 4x4.
    """

    variant: Variant = Variant.LINE_CLEAR
    width: int = 12
    height: int = 24
    random_seed: Optional[int] = None
    spawn_x: Optional[int] = None
    spawn_y: int = 0
    palette: Tuple[int, ...] = tuple(int(c) for c in DEFAULT_MATCH_PALETTE)


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view handed to renderers after each command."""

    grid: np.ndarray
    piece_cells: Tuple[Coordinate, ...]
    piece_colors: Tuple[int, ...]
    score: int
    paused: bool = False
    pending_selection: Tuple[Coordinate, ...] = ()
    lines_cleared_total: int = 0
    pieces_locked: int = 0
    stats: dict = field(default_factory=dict)


Listener = Callable[["GameSession"], None]


class GameSession:
    """One game of either variant, driven by discrete commands.

    Commands never raise on a rejected move; they return ``False`` (or a
    neutral value) and leave the state untouched. Listeners are notified after
    every command, accepted or not.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.variant = Variant(self.config.variant)
        self.rules = rules or ScoringRules()
        self.score = Score()
        is_match = self.variant is Variant.MATCH_THREE
        self.grid = GameGrid(self.config.width, self.config.height, walls=not is_match)
        if is_match:
            self.randomizer = UniformRandomizer(self.config.palette, seed=self.config.random_seed)
        else:
            self.randomizer = SevenBag(seed=self.config.random_seed)
        self.line_clear = LineClearEngine()
        self.controller = FallingPieceController(
            self.grid,
            self.randomizer,
            self.line_clear,
            self.score,
            rules=self.rules,
            spawn_x=self.config.spawn_x,
            spawn_y=self.config.spawn_y,
            award_drop_steps=is_match,
        )
        self.matcher: Optional[MatchClearEngine] = MatchClearEngine(self.grid) if is_match else None
        self.paused = False
        self._listeners: List[Listener] = []
        self.reset()

    @property
    def is_match_variant(self) -> bool:
        return self.variant is Variant.MATCH_THREE

    def reset(self, seed: Optional[int] = None) -> None:
        self.grid.reset()
        self.score.reset()
        self.randomizer.reset(seed if seed is not None else self.config.random_seed)
        self.controller.reset_counters()
        if self.matcher is not None:
            self.matcher.reset()
        self.paused = False
        self.controller.spawn()
        self._notify()

    # ---------- Listeners ----------
    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ---------- Commands ----------
    def move(self, dx: int) -> bool:
        moved = dx in (-1, 1) and self.controller.try_move(dx)
        self._notify()
        return moved

    def rotate(self, direction: int) -> bool:
        rotated = self.controller.try_rotate(direction)
        self._notify()
        return rotated

    def soft_drop(self) -> StepOutcome:
        outcome = self.controller.step_down()
        if self.is_match_variant:
            self.score.add(self.rules.drop_step_score)
        self._notify()
        return outcome

    def hard_drop(self) -> int:
        fell = self.controller.drop_instant()
        self._notify()
        return fell

    def tick(self) -> Optional[StepOutcome]:
        if self.paused:
            self._notify()
            return None
        outcome = self.controller.step_down()
        self._notify()
        return outcome

    def select(self, x: int, y: int) -> bool:
        if self.matcher is None:
            self._notify()
            return False
        accepted = self.matcher.select(x, y)
        self._notify()
        return accepted

    def toggle_pause(self) -> bool:
        if not self.is_match_variant:
            self._notify()
            return False
        self.paused = not self.paused
        logger.debug("paused=%s", self.paused)
        self._notify()
        return True

    def step(self, action: Action) -> StepOutcome | bool | int | None:
        try:
            action = Action(action)
        except ValueError:
            # Unknown actions behave like Action.NONE
            action = Action.NONE
        if action == Action.LEFT:
            return self.move(-1)
        if action == Action.RIGHT:
            return self.move(1)
        if action == Action.ROTATE_CW:
            return self.rotate(1)
        if action == Action.ROTATE_CCW:
            return self.rotate(-1)
        if action == Action.SOFT_DROP:
            return self.soft_drop()
        if action == Action.HARD_DROP:
            return self.hard_drop()
        if action == Action.TICK:
            return self.tick()
        if action == Action.TOGGLE_PAUSE:
            return self.toggle_pause()
        self._notify()
        return None

    # ---------- Observation ----------
    def snapshot(self) -> SessionSnapshot:
        grid = self.grid.clone_state()
        grid.flags.writeable = False
        piece = self.controller.piece
        cells: Sequence[Coordinate] = piece.cells() if piece is not None else ()
        colors: Sequence[int] = piece.colors if piece is not None else ()
        stats = {"spawn_blocked": self.controller.is_spawn_blocked()}
        if self.matcher is not None:
            stats["swaps_committed"] = self.matcher.swaps_committed
            stats["cells_matched"] = self.matcher.cells_cleared_total
        return SessionSnapshot(
            grid=grid,
            piece_cells=tuple(cells),
            piece_colors=tuple(colors),
            score=self.score.value,
            paused=self.paused,
            pending_selection=self.matcher.pending if self.matcher is not None else (),
            lines_cleared_total=self.controller.lines_cleared_total,
            pieces_locked=self.controller.pieces_locked,
            stats=stats,
        )

    def get_state(self) -> np.ndarray:
        # Overlay the falling piece on a copy of the grid, negated past the wall value
        state = self.grid.clone_state()
        piece = self.controller.piece
        if piece is not None:
            for (x, y), color in piece.colored_cells():
                if self.grid.is_inside(x, y):
                    state[y, x] = -int(color) - 1
        return state


def format_grid(grid: np.ndarray) -> str:
    """Text dump of a grid or ``get_state()`` array."""
    symbols = {0: "·", -1: "#"}
    lines = []
    for row in grid:
        line = []
        for cell in row:
            v = int(cell)
            if v in symbols:
                line.append(symbols[v])
            elif v < 0:
                line.append("@")
            else:
                line.append(str(v))
        lines.append("".join(line))
    return "\n".join(lines)
