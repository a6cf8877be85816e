from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional, Tuple


Offset = Tuple[int, int]
Coordinate = Tuple[int, int]


class TetrominoType(IntEnum):
    I = 0
    J = 1
    L = 2
    O = 3
    S = 4
    T = 5
    Z = 6


class Color(IntEnum):
    """Cell colors. 0 and negative values are reserved for empty and wall cells."""

    CYAN = 1
    BLUE = 2
    ORANGE = 3
    YELLOW = 4
    GREEN = 5
    PINK = 6
    RED = 7


class PieceCatalog:
    """Static tetromino definitions: four rotation states of four offsets each."""

    ROTATIONS: Dict[TetrominoType, Tuple[Tuple[Offset, ...], ...]] = {
        TetrominoType.I: (
            ((0, 1), (1, 1), (2, 1), (3, 1)),
            ((1, 0), (1, 1), (1, 2), (1, 3)),
            ((0, 1), (1, 1), (2, 1), (3, 1)),
            ((1, 0), (1, 1), (1, 2), (1, 3)),
        ),
        TetrominoType.J: (
            ((0, 1), (1, 1), (2, 1), (2, 0)),
            ((1, 0), (1, 1), (1, 2), (2, 2)),
            ((0, 1), (1, 1), (2, 1), (0, 2)),
            ((1, 0), (1, 1), (1, 2), (0, 0)),
        ),
        TetrominoType.L: (
            ((0, 1), (1, 1), (2, 1), (2, 2)),
            ((1, 0), (1, 1), (1, 2), (0, 2)),
            ((0, 1), (1, 1), (2, 1), (0, 0)),
            ((1, 0), (1, 1), (1, 2), (2, 0)),
        ),
        TetrominoType.O: (
            ((0, 0), (0, 1), (1, 0), (1, 1)),
            ((0, 0), (0, 1), (1, 0), (1, 1)),
            ((0, 0), (0, 1), (1, 0), (1, 1)),
            ((0, 0), (0, 1), (1, 0), (1, 1)),
        ),
        TetrominoType.S: (
            ((1, 0), (2, 0), (0, 1), (1, 1)),
            ((0, 0), (0, 1), (1, 1), (1, 2)),
            ((1, 0), (2, 0), (0, 1), (1, 1)),
            ((0, 0), (0, 1), (1, 1), (1, 2)),
        ),
        TetrominoType.T: (
            ((1, 0), (0, 1), (1, 1), (2, 1)),
            ((1, 0), (0, 1), (1, 1), (1, 2)),
            ((0, 1), (1, 1), (2, 1), (1, 2)),
            ((1, 0), (1, 1), (2, 1), (1, 2)),
        ),
        TetrominoType.Z: (
            ((0, 0), (1, 0), (1, 1), (2, 1)),
            ((1, 0), (0, 1), (1, 1), (0, 2)),
            ((0, 0), (1, 0), (1, 1), (2, 1)),
            ((1, 0), (0, 1), (1, 1), (0, 2)),
        ),
    }

    COLORS: Dict[TetrominoType, Color] = {
        TetrominoType.I: Color.CYAN,
        TetrominoType.J: Color.BLUE,
        TetrominoType.L: Color.ORANGE,
        TetrominoType.O: Color.YELLOW,
        TetrominoType.S: Color.GREEN,
        TetrominoType.T: Color.PINK,
        TetrominoType.Z: Color.RED,
    }

    @classmethod
    def offsets(cls, kind: TetrominoType, rotation: int = 0) -> Tuple[Offset, ...]:
        return cls.ROTATIONS[kind][rotation % 4]

    @classmethod
    def color(cls, kind: TetrominoType) -> Color:
        return cls.COLORS[kind]

    @classmethod
    def max_extent(cls) -> int:
        """Largest offset on either axis over every shape and rotation."""
        return max(max(dx, dy) for states in cls.ROTATIONS.values() for cells in states for dx, dy in cells)


@dataclass
class Piece:
    """The falling piece: shape, rotation, origin and one color per block."""

    kind: TetrominoType
    rotation: int = 0  # 0..3
    x: int = 0
    y: int = 0
    colors: Tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if not self.colors:
            self.colors = (int(PieceCatalog.color(self.kind)),) * 4
        if len(self.colors) != 4:
            raise ValueError(f"a tetromino needs 4 block colors, got {len(self.colors)}")

    def rotated(self, delta: int) -> int:
        return (self.rotation + delta) % 4

    def cells_at(self, origin_x: int, origin_y: int, rotation: Optional[int] = None) -> List[Coordinate]:
        if rotation is None:
            rotation = self.rotation
        return [(origin_x + dx, origin_y + dy) for dx, dy in PieceCatalog.offsets(self.kind, rotation)]

    def cells(self) -> List[Coordinate]:
        return self.cells_at(self.x, self.y)

    def colored_cells(self) -> List[Tuple[Coordinate, int]]:
        return list(zip(self.cells(), self.colors))
