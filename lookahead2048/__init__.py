"""Fixed-depth lookahead bot for 2048."""

from lookahead2048.game import (
    BOARD_SIZE,
    MOVES,
    WIN_TILE,
    Board,
    BoardFormatError,
    Move,
    MoveOutcome,
    Position,
    execute,
)
from lookahead2048.search import DEFAULT_DEPTH, Searcher, select_best_move
from lookahead2048.tree import build_tree

__all__ = [
    "BOARD_SIZE",
    "DEFAULT_DEPTH",
    "MOVES",
    "WIN_TILE",
    "Board",
    "BoardFormatError",
    "Move",
    "MoveOutcome",
    "Position",
    "Searcher",
    "build_tree",
    "execute",
    "select_best_move",
]
