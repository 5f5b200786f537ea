"""Fixed-depth lookahead over the player's own moves."""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from lookahead2048.game import BOARD_SIZE, Board, Move, execute, legal_moves
from lookahead2048.tree import branches, build_tree

DEFAULT_DEPTH = 2


@dataclass
class SearchStats:
    turns: int = 0
    nodes: int = 0
    pruned: int = 0

    def reset(self):
        self.turns = 0
        self.nodes = 0
        self.pruned = 0


def evaluate(board: Board, tree, size=BOARD_SIZE, stats=None) -> Optional[Tuple[int, Move]]:
    """
    Score every path in `tree` from `board` and return (value, first move)
    of the best one, or None when every move at this ply is a no-op.

    A path's value is the plain sum of the merge scores along it. Spawned
    tiles are not simulated, so deeper searches chase merges that the real
    game may never allow; depth 3 tends to play worse than depth 2.
    """
    best_value = None
    best_move = None

    for move, subtree in branches(tree):
        score, result = execute(board, move, size)
        if stats is not None:
            stats.nodes += 1
        if result == board:
            if stats is not None:
                stats.pruned += 1
            continue

        value = score
        if subtree is not None:
            child = evaluate(result, subtree, size, stats)
            # A dead end below adds nothing; the move keeps its own score.
            if child is not None:
                value += child[0]

        # Strict comparison: ties go to the earlier move in search order.
        if best_value is None or value > best_value:
            best_value = value
            best_move = move

    if best_move is None:
        return None
    return best_value, best_move


def select_best_move(board: Board, depth: int = DEFAULT_DEPTH, size=BOARD_SIZE) -> Optional[Move]:
    """Return the first move of the highest-scoring path, or None if stuck."""
    best = evaluate(board, build_tree(depth), size)
    return None if best is None else best[1]


class Searcher:
    """Lookahead strategy bound to one depth, with node counters."""

    def __init__(self, depth: int = DEFAULT_DEPTH, size=BOARD_SIZE):
        self.depth = depth
        self.size = size
        self.tree = build_tree(depth)
        self.stats = SearchStats()

    def __call__(self, board: Board) -> Optional[Move]:
        self.stats.turns += 1
        best = evaluate(board, self.tree, self.size, self.stats)
        return None if best is None else best[1]

    def __repr__(self):
        return f"Searcher(depth={self.depth})"


def random_move(board: Board, rng=None, size=BOARD_SIZE) -> Optional[Move]:
    """Baseline strategy: any move that changes the board, chosen uniformly."""
    moves = legal_moves(board, size)
    if not moves:
        return None
    rng = rng if rng is not None else np.random.default_rng()
    return moves[int(rng.integers(len(moves)))]


class RandomStrategy:

    def __init__(self, seed=None, size=BOARD_SIZE):
        self.rng = np.random.default_rng(seed)
        self.size = size

    def __call__(self, board: Board) -> Optional[Move]:
        return random_move(board, self.rng, self.size)

    def __repr__(self):
        return "RandomStrategy()"
