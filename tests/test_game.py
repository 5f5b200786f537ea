import numpy as np
import pytest

from lookahead2048.game import (
    Board,
    BoardFormatError,
    Move,
    Position,
    execute,
    has_won,
    is_game_over,
    is_noop,
    legal_moves,
    slide_and_combine,
)

CHECKERBOARD = [
    [2, 4, 2, 4],
    [4, 2, 4, 2],
    [2, 4, 2, 4],
    [4, 2, 4, 2],
]


def test_slide_merges_each_tile_once():
    row, score = slide_and_combine(np.array([2, 2, 2, 2]))
    assert row.tolist() == [4, 4, 0, 0]
    assert score == 8


def test_slide_merged_tile_does_not_merge_again():
    row, score = slide_and_combine(np.array([2, 2, 4, 0]))
    assert row.tolist() == [4, 4, 0, 0]
    assert score == 4


def test_slide_compacts_gaps():
    row, score = slide_and_combine(np.array([0, 2, 0, 4]))
    assert row.tolist() == [2, 4, 0, 0]
    assert score == 0


def test_slide_empty_line():
    row, score = slide_and_combine(np.array([0, 0, 0, 0]))
    assert row.tolist() == [0, 0, 0, 0]
    assert score == 0


def test_execute_left_merges_pair():
    board = Board.from_cells({(1, 1): 2, (1, 2): 2})
    score, result = execute(board, Move.LEFT)
    assert score == 4
    assert result == Board.from_cells({(1, 1): 4})


def test_execute_right_packs_against_right_edge():
    board = Board.from_cells({(1, 1): 2, (1, 2): 2, (1, 3): 2, (1, 4): 2})
    score, result = execute(board, Move.RIGHT)
    assert score == 8
    assert result == Board.from_cells({(1, 3): 4, (1, 4): 4})


def test_execute_down_no_double_merge():
    board = Board.from_cells({(1, 1): 2, (2, 1): 2, (3, 1): 4})
    score, result = execute(board, Move.DOWN)
    assert score == 4
    assert result == Board.from_cells({(3, 1): 4, (4, 1): 4})


def test_execute_up_across_gap():
    board = Board.from_cells({(2, 2): 8, (4, 2): 8})
    score, result = execute(board, Move.UP)
    assert score == 16
    assert result == Board.from_cells({(1, 2): 16})


def test_execute_noop_on_two_wide_grid():
    board = Board.from_cells({(1, 1): 2, (1, 2): 4})
    score, result = execute(board, Move.LEFT, size=2)
    assert score == 0
    assert result == board
    assert is_noop(board, Move.LEFT, size=2)


def test_execute_is_deterministic():
    board = Board.from_grid([[2, 2, 4, 8], [0, 4, 4, 0], [2, 0, 2, 2], [16, 16, 0, 16]])
    for move in Move:
        assert execute(board, move) == execute(board, move)


def test_execute_does_not_touch_input():
    cells = {(1, 1): 2, (1, 2): 2}
    board = Board.from_cells(cells)
    execute(board, Move.LEFT)
    assert board == Board.from_cells(cells)


def test_board_equality_and_hash():
    a = Board.from_cells([((1, 1), 2), ((3, 4), 8)])
    b = Board.from_grid([[2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 8], [0, 0, 0, 0]])
    assert a == b
    assert hash(a) == hash(b)
    assert a != Board.from_cells({(1, 1): 2})
    assert len({a, b}) == 1


def test_board_grid_round_trip():
    grid = [[0, 2, 0, 0], [4, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 2048]]
    board = Board.from_grid(grid)
    assert board.to_grid().tolist() == grid
    assert board.get((4, 4)) == 2048
    assert board.get(Position(1, 1)) is None
    assert board.max_tile() == 2048


@pytest.mark.parametrize("cells", [
    {(1, 1): 0},
    {(1, 1): -2},
    {(0, 1): 2},
    {(1, 1): "two"},
    [(1, 2)],
    {(1.5, 1): 2},
    {(1, 2.5): 2},
    {(True, 1): 2},
    {(1, 1): 2 ** 70},
    {(1, 1): float("inf")},
])
def test_from_cells_rejects_malformed_input(cells):
    with pytest.raises(BoardFormatError):
        Board.from_cells(cells)


def test_from_grid_rejects_bad_shapes_and_values():
    with pytest.raises(BoardFormatError):
        Board.from_grid([[2, 0, 0], [0, 0, 0]])
    with pytest.raises(BoardFormatError):
        Board.from_grid([[2, -4], [0, 0]])


def test_fractional_keys_do_not_collapse_onto_one_cell():
    with pytest.raises(BoardFormatError):
        Board.from_cells({(1.2, 1): 2, (1.7, 1): 4})


@pytest.mark.parametrize("grid", [
    [[2.7, 0], [0, 0]],
    [[float("nan"), 0], [0, 0]],
    [[2 ** 70, 0], [0, 0]],
    [["2", 0], [0, 0]],
    [[True, False], [False, False]],
])
def test_from_grid_rejects_values_that_are_not_tiles(grid):
    with pytest.raises(BoardFormatError):
        Board.from_grid(grid)


def test_from_grid_accepts_whole_floats():
    assert Board.from_grid([[2.0, 0.0], [0.0, 4.0]]) == Board.from_cells({(1, 1): 2, (2, 2): 4})


def test_to_grid_rejects_out_of_range_position():
    with pytest.raises(BoardFormatError):
        Board.from_cells({(5, 1): 2}).to_grid(4)


def test_move_parse():
    assert Move.parse("Left") is Move.LEFT
    with pytest.raises(ValueError):
        Move.parse("sideways")


def test_game_over_on_locked_board():
    board = Board.from_grid(CHECKERBOARD)
    assert is_game_over(board)
    assert legal_moves(board) == []


def test_game_not_over_with_merge_available():
    grid = [row[:] for row in CHECKERBOARD]
    grid[0][1] = 2
    assert not is_game_over(Board.from_grid(grid))
    assert not is_game_over(Board())


def test_has_won():
    assert has_won(Board.from_cells({(2, 3): 2048}))
    assert not has_won(Board.from_cells({(2, 3): 1024}))
    assert has_won(Board.from_cells({(1, 1): 512}), win_tile=512)
