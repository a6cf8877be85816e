"""Game module for tetris-crush.

Exports the grid simulation engine and supporting classes:
- GameGrid: Bounded well with walls and collision testing
- Piece, PieceCatalog, TetrominoType, Color: Tetromino shapes and rotation states
- SevenBag, UniformRandomizer: Piece randomizers
- FallingPieceController: Falling-piece lifecycle (spawn, move, rotate, lock)
- LineClearEngine: Full-row removal and compaction
- MatchClearEngine: Swap-to-match-3 clearing
- ScoringRules, Score: Per-clear score table and counter
- GameSession: Command surface for either rule variant
"""

from .grid import GameGrid, GridAccessError, EMPTY, WALL
from .pieces import Color, Piece, PieceCatalog, TetrominoType
from .bag import DEFAULT_MATCH_PALETTE, SevenBag, UniformRandomizer
from .rules import Score, ScoringRules
from .line_clear import LineClearEngine
from .match_clear import MatchClearEngine, SelectionBuffer
from .controller import FallingPieceController, StepOutcome
from .core import Action, GameConfig, GameSession, SessionSnapshot, Variant, format_grid

__all__ = [
    "GameGrid",
    "GridAccessError",
    "EMPTY",
    "WALL",
    "Color",
    "Piece",
    "PieceCatalog",
    "TetrominoType",
    "DEFAULT_MATCH_PALETTE",
    "SevenBag",
    "UniformRandomizer",
    "Score",
    "ScoringRules",
    "LineClearEngine",
    "MatchClearEngine",
    "SelectionBuffer",
    "FallingPieceController",
    "StepOutcome",
    "Action",
    "GameConfig",
    "GameSession",
    "SessionSnapshot",
    "Variant",
    "format_grid",
]
