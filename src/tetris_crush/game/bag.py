from __future__ import annotations

import random
from typing import List, Optional, Sequence, Tuple

from .pieces import Color, PieceCatalog, TetrominoType


Draw = Tuple[TetrominoType, Tuple[int, ...]]

DEFAULT_MATCH_PALETTE: Tuple[Color, ...] = (Color.CYAN, Color.YELLOW, Color.GREEN, Color.PINK, Color.RED)


class SevenBag:
    """7-bag randomizer: every shape once per shuffled bag, refilled when empty.

    Pieces drawn from the bag carry their catalog color on every block.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)
        self._pending: List[TetrominoType] = []

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self._pending.clear()

    def __len__(self) -> int:
        return len(self._pending)

    def _refill(self) -> None:
        kinds = list(TetrominoType)
        self.rng.shuffle(kinds)
        self._pending.extend(kinds)

    def next_kind(self) -> TetrominoType:
        if not self._pending:
            self._refill()
        return self._pending.pop(0)

    def draw(self) -> Draw:
        kind = self.next_kind()
        return kind, (int(PieceCatalog.color(kind)),) * 4


class UniformRandomizer:
    """Uniform shape draw with an independent palette color per block."""

    def __init__(self, palette: Sequence[int] = DEFAULT_MATCH_PALETTE, seed: Optional[int] = None) -> None:
        if not palette:
            raise ValueError("palette must hold at least one color")
        valid = {int(c) for c in Color}
        bad = [c for c in palette if int(c) not in valid]
        if bad:
            raise ValueError(f"palette entries must be Color values 1..{len(Color)}, got {bad}")
        self.palette = tuple(int(c) for c in palette)
        self.rng = random.Random(seed)

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)

    def next_kind(self) -> TetrominoType:
        return self.rng.choice(list(TetrominoType))

    def draw(self) -> Draw:
        kind = self.next_kind()
        return kind, tuple(self.rng.choice(self.palette) for _ in range(4))
