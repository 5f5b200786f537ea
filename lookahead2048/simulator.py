"""In-process 2048 game that stands in for a live one."""

import numpy as np

from lookahead2048.driver import DispatchError, GameSession, GameStatus, UnreadableStateError
from lookahead2048.game import (
    BOARD_SIZE,
    WIN_TILE,
    Board,
    BoardFormatError,
    Position,
    empty_positions,
    execute,
    has_won,
    is_game_over,
)


def add_random_tile(board, rng, size=BOARD_SIZE):
    """Drop a 2 (90%) or a 4 (10%) into a random empty cell."""
    empty_cells = empty_positions(board, size)
    if not empty_cells:
        return board

    row, column = empty_cells[int(rng.integers(len(empty_cells)))]
    cells = board.cells()
    cells[Position(row, column)] = 2 if rng.random() < 0.9 else 4
    return Board(cells)


class LocalGame(GameSession):

    def __init__(self, size=BOARD_SIZE, seed=None, start_board=None, win_tile=WIN_TILE):
        self.size = size
        self.win_tile = win_tile
        self.rng = np.random.default_rng(seed)
        self.score = 0
        self.moves_made = 0
        if start_board is None:
            board = Board()
            board = add_random_tile(board, self.rng, size)
            board = add_random_tile(board, self.rng, size)
        else:
            board = start_board
        self.board = board

    def read_board(self) -> Board:
        try:
            self.board.to_grid(self.size)
        except BoardFormatError as e:
            raise UnreadableStateError(str(e)) from e
        return self.board

    def apply_move(self, move):
        score, result = execute(self.board, move, self.size)
        if result == self.board:
            raise DispatchError(f"Move {move.value} does not change the board")
        self.score += score
        self.moves_made += 1
        self.board = add_random_tile(result, self.rng, self.size)

    def status(self) -> GameStatus:
        if has_won(self.board, self.win_tile):
            return GameStatus.WON
        if is_game_over(self.board, self.size):
            return GameStatus.LOST
        return GameStatus.NONE

    def __str__(self):
        grid = self.board.to_grid(self.size)
        width = max(4, max(len(str(v)) for v in grid.flat))
        return '\n'.join(' '.join(f"{v:>{width}d}" for v in row) for row in grid)
