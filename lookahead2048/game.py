"""Board model and move execution for 2048."""

from collections import namedtuple
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

BOARD_SIZE = 4
WIN_TILE = 2048
# Largest tile that can still be doubled inside an int64 grid.
MAX_TILE = 2 ** 62


class BoardFormatError(ValueError):
    """Raised when external cell data can't be turned into a Board."""


class Move(Enum):
    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'

    @classmethod
    def parse(cls, name):
        try:
            return cls(str(name).lower())
        except ValueError:
            raise ValueError(f"Unknown move: {name!r}") from None


# Search order, also used to break ties.
MOVES = (Move.UP, Move.LEFT, Move.RIGHT, Move.DOWN)

# Quarter turns that bring a direction's leading edge to the left side.
_ROTATIONS = {
    Move.LEFT: 0,
    Move.UP: 1,
    Move.RIGHT: 2,
    Move.DOWN: 3,
}

Position = namedtuple('Position', ['row', 'column'])

MoveOutcome = namedtuple('MoveOutcome', ['score', 'board'])


class Board:
    """Sparse, immutable grid: Position -> tile value, empty cells absent."""

    __slots__ = ('_cells', '_hash')

    def __init__(self, cells: Optional[Dict[Position, int]] = None):
        self._cells = dict(cells or {})
        self._hash = None

    @classmethod
    def from_cells(cls, cells) -> 'Board':
        """
        Build a board from a sparse cell listing.

        Accepts a mapping or an iterable of ((row, column), value) pairs,
        1-indexed. Zero and negative values are rejected.
        """
        items = cells.items() if hasattr(cells, 'items') else cells
        parsed = {}
        try:
            for key, value in items:
                row, column = key
                if isinstance(value, bool) or int(value) != value:
                    raise BoardFormatError(f"Tile value must be an integer, got {value!r}")
                if value <= 0:
                    raise BoardFormatError(f"Tile value must be positive, got {value!r} at {key!r}")
                if value > MAX_TILE:
                    raise BoardFormatError(f"Tile value must not exceed {MAX_TILE}, got {value!r}")
                for coordinate in (row, column):
                    if isinstance(coordinate, bool) or int(coordinate) != coordinate:
                        raise BoardFormatError(f"Positions must be integers, got {key!r}")
                if row < 1 or column < 1:
                    raise BoardFormatError(f"Positions are 1-indexed, got {key!r}")
                parsed[Position(int(row), int(column))] = int(value)
        except (TypeError, ValueError, OverflowError) as e:
            if isinstance(e, BoardFormatError):
                raise
            raise BoardFormatError(f"Malformed cell listing: {e}") from e
        return cls(parsed)

    @classmethod
    def from_grid(cls, grid) -> 'Board':
        """Build a board from a dense row-major grid where 0 marks an empty cell."""
        try:
            raw = np.asarray(grid)
            if raw.dtype.kind not in "iuf":
                raise BoardFormatError(f"Grid must be numeric, got {raw.dtype}")
            if raw.dtype.kind == "f" and (~np.isfinite(raw) | (raw != np.floor(raw))).any():
                raise BoardFormatError("Grid values must be whole numbers")
            if (np.abs(raw) > MAX_TILE).any():
                raise BoardFormatError(f"Grid values must not exceed {MAX_TILE}")
            array = raw.astype(np.int64)
        except (TypeError, ValueError, OverflowError) as e:
            if isinstance(e, BoardFormatError):
                raise
            raise BoardFormatError(f"Grid must be numeric: {e}") from e
        if array.ndim != 2 or array.shape[0] != array.shape[1]:
            raise BoardFormatError(f"Grid must be square, got shape {array.shape}")
        if (array < 0).any():
            raise BoardFormatError("Grid contains negative tile values")
        cells = {}
        for r, c in zip(*np.nonzero(array)):
            cells[Position(int(r) + 1, int(c) + 1)] = int(array[r, c])
        return cls(cells)

    def to_grid(self, size=BOARD_SIZE) -> np.ndarray:
        grid = np.zeros((size, size), dtype=np.int64)
        for (row, column), value in self._cells.items():
            if row > size or column > size:
                raise BoardFormatError(f"Position {(row, column)} is outside a {size}x{size} grid")
            grid[row - 1, column - 1] = value
        return grid

    def get(self, position, default=None):
        return self._cells.get(Position(*position), default)

    def max_tile(self) -> int:
        return max(self._cells.values(), default=0)

    def cells(self) -> Dict[Position, int]:
        return dict(self._cells)

    def __iter__(self):
        return iter(sorted(self._cells.items()))

    def __len__(self):
        return len(self._cells)

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self):
        if self._hash is None:
            self._hash = hash(frozenset(self._cells.items()))
        return self._hash

    def __repr__(self):
        body = ', '.join(f"({r},{c}): {v}" for (r, c), v in self)
        return f"Board({{{body}}})"


def slide_and_combine(row: np.ndarray) -> Tuple[np.ndarray, int]:
    """Pack a single line toward index 0, merging each equal pair at most once."""
    tiles = row[row != 0]
    score_gained = 0
    result_row = []

    i = 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            merged_value = int(tiles[i]) * 2
            result_row.append(merged_value)
            score_gained += merged_value
            i += 2
        else:
            result_row.append(int(tiles[i]))
            i += 1

    while len(result_row) < len(row):
        result_row.append(0)

    return np.array(result_row, dtype=row.dtype), score_gained


def move_grid(grid: np.ndarray, move: Move) -> Tuple[np.ndarray, int]:
    turns = _ROTATIONS[move]
    rotated = np.rot90(grid, turns)

    new_grid = np.zeros_like(rotated)
    total_score_gained = 0
    for i, row in enumerate(rotated):
        new_row, score = slide_and_combine(row)
        new_grid[i] = new_row
        total_score_gained += score

    return np.rot90(new_grid, -turns), total_score_gained


def execute(board: Board, move: Move, size=BOARD_SIZE) -> MoveOutcome:
    """
    Simulate one move against a board.

    Returns the score gained (sum of the merged tile values) and the
    resulting board. A move that changes nothing comes back with a board
    equal to the input; callers decide what to do with it.
    """
    new_grid, score = move_grid(board.to_grid(size), move)
    return MoveOutcome(score, Board.from_grid(new_grid))


def is_noop(board: Board, move: Move, size=BOARD_SIZE) -> bool:
    return execute(board, move, size).board == board


def legal_moves(board: Board, size=BOARD_SIZE):
    return [move for move in MOVES if not is_noop(board, move, size)]


def has_won(board: Board, win_tile=WIN_TILE) -> bool:
    return board.max_tile() >= win_tile


def is_game_over(board: Board, size=BOARD_SIZE) -> bool:
    """Checks if the game is over (no empty cells and no possible merges)."""
    grid = board.to_grid(size)
    if 0 in grid:
        return False

    for i in range(size):
        for j in range(size):
            current = grid[i, j]
            if j < size - 1 and current == grid[i, j + 1]:
                return False
            if i < size - 1 and current == grid[i + 1, j]:
                return False

    return True


def empty_positions(board: Board, size=BOARD_SIZE) -> Iterable[Position]:
    return [Position(r, c)
            for r in range(1, size + 1)
            for c in range(1, size + 1)
            if board.get((r, c)) is None]
