import pytest

from tetris_crush.game import (
    FallingPieceController,
    GameGrid,
    LineClearEngine,
    Piece,
    PieceCatalog,
    Score,
    SevenBag,
    StepOutcome,
    TetrominoType,
    UniformRandomizer,
)
from tests.helpers import fill_row


def make_controller(width=12, height=24, walls=True, match=False, seed=0):
    grid = GameGrid(width, height, walls=walls)
    randomizer = UniformRandomizer(seed=seed) if match else SevenBag(seed=seed)
    score = Score()
    controller = FallingPieceController(grid, randomizer, LineClearEngine(), score, award_drop_steps=match)
    controller.spawn()
    return controller


@pytest.mark.parametrize(
    "width,height,walls,spawn_x",
    [(12, 24, True, 5), (6, 5, True, 1), (8, 10, False, 3), (4, 4, False, 0)],
)
def test_spawn_never_collides_on_empty_board(width, height, walls, spawn_x):
    controller = make_controller(width=width, height=height, walls=walls, match=not walls)
    assert (controller.spawn_x, controller.spawn_y) == (spawn_x, 0)
    for kind in TetrominoType:
        for rotation in range(4):
            cells = Piece(kind, rotation).cells_at(controller.spawn_x, controller.spawn_y)
            assert not any(controller.grid.is_blocked(x, y) for x, y in cells)


def test_spawn_resets_origin_and_rotation():
    controller = make_controller()
    controller.try_move(-1)
    controller.step_down()
    controller.piece = None
    piece = controller.spawn()
    assert (piece.x, piece.y, piece.rotation) == (5, 0, 0)


def test_spawn_walks_through_whole_bags():
    controller = make_controller(seed=11)
    kinds = [controller.piece.kind] + [controller.spawn().kind for _ in range(6)]
    assert sorted(kinds) == sorted(TetrominoType)


def test_spawn_origin_must_hold_every_piece():
    grid = GameGrid(6, 10)
    with pytest.raises(ValueError):
        FallingPieceController(grid, SevenBag(), LineClearEngine(), Score(), spawn_x=4)


def test_four_rotations_return_to_start():
    controller = make_controller()
    controller.piece = Piece(TetrominoType.T, x=5, y=5)
    seen = []
    for _ in range(4):
        assert controller.try_rotate(1)
        seen.append(controller.piece.rotation)
    assert seen == [1, 2, 3, 0]
    assert controller.try_rotate(-1)
    assert controller.piece.rotation == 3


def test_rotation_blocked_by_wall_is_a_no_op():
    controller = make_controller()
    # The vertical state needs (2, 0)
    controller.piece = Piece(TetrominoType.I, rotation=0, x=1, y=0)
    controller.grid.set(2, 0, 3)
    assert not controller.try_rotate(1)
    assert controller.piece.rotation == 0


def test_rotation_rejects_other_directions():
    controller = make_controller()
    assert not controller.try_rotate(2)
    assert controller.piece.rotation == 0


def test_move_stops_at_walls():
    controller = make_controller()
    controller.piece = Piece(TetrominoType.O, x=1, y=0)
    assert not controller.try_move(-1)
    assert controller.piece.x == 1
    assert controller.try_move(1)
    assert controller.piece.x == 2


def test_step_down_falls_then_locks_and_respawns():
    controller = make_controller(width=8, height=8)
    controller.piece = Piece(TetrominoType.O, x=2, y=4)
    assert controller.step_down() is StepOutcome.FELL
    assert controller.piece.y == 5
    assert controller.step_down() is StepOutcome.LOCKED
    color = int(PieceCatalog.color(TetrominoType.O))
    assert [controller.grid.get(x, y) for x, y in ((2, 5), (3, 5), (2, 6), (3, 6))] == [color] * 4
    assert controller.pieces_locked == 1
    assert (controller.piece.x, controller.piece.y) == (controller.spawn_x, 0)


def test_lock_keeps_per_block_colors():
    controller = make_controller(width=8, height=8, walls=False, match=True)
    controller.piece = Piece(TetrominoType.O, x=0, y=6, colors=(1, 2, 3, 4))
    assert controller.step_down() is StepOutcome.LOCKED
    assert [controller.grid.get(x, y) for x, y in ((0, 6), (0, 7), (1, 6), (1, 7))] == [1, 2, 3, 4]


@pytest.mark.parametrize("rows,expected", [(1, 100), (2, 300), (3, 500), (4, 800)])
def test_lock_scores_simultaneous_rows_once(rows, expected):
    controller = make_controller()
    grid = controller.grid
    bottom = grid.playable_rows.stop - 1
    for y in range(bottom - rows + 1, bottom + 1):
        fill_row(grid, y, color=2, gaps=(1,))
    # Vertical I lands in column 1
    controller.piece = Piece(TetrominoType.I, rotation=1, x=0, y=0)
    controller.drop_instant()
    assert controller.score.value == expected
    assert controller.last_lines_cleared == rows
    assert controller.lines_cleared_total == rows


def test_drop_instant_scores_nothing_in_line_clear_mode():
    controller = make_controller()
    fell = controller.drop_instant()
    assert fell > 0
    assert controller.score.value == 0
    assert controller.pieces_locked == 1


def test_drop_instant_scores_each_fall_in_match_mode():
    controller = make_controller(width=8, height=10, walls=False, match=True)
    controller.piece = Piece(TetrominoType.O, x=3, y=0, colors=(1, 2, 3, 4))
    fell = controller.drop_instant()
    assert fell == 8
    assert controller.score.value == 8


def test_spawn_blocked_is_reported_but_not_prevented():
    controller = make_controller(width=8, height=8)
    assert not controller.is_spawn_blocked()
    # Every shape has a block one column right of the origin in rotation 0
    for y in controller.grid.playable_rows:
        controller.grid.set(controller.spawn_x + 1, y, 5)
    controller.spawn()
    assert controller.is_spawn_blocked()
    assert controller.piece is not None
