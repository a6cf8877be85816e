from tetris_crush.game import EMPTY, GameGrid


def fill_row(grid: GameGrid, y: int, color: int = 1, gaps=()):
    for x in grid.playable_columns:
        grid.set(x, y, EMPTY if x in gaps else color)


def paint(grid: GameGrid, cells: dict):
    for (x, y), color in cells.items():
        grid.set(x, y, color)
