"""Static move trees for fixed-depth lookahead."""

from functools import lru_cache

from lookahead2048.game import MOVES, Move


@lru_cache(maxsize=None)
def build_tree(depth: int):
    """
    Build every move sequence of the given length.

    Depth 1 is the flat tuple of moves. Deeper trees pair each move with
    the tree one level shallower, e.g. depth 2 is
    ((UP, (UP, LEFT, RIGHT, DOWN)), (LEFT, (...)), ...).
    The result holds no board data and is shared across calls.
    """
    if depth < 1:
        raise ValueError(f"Search depth must be at least 1, got {depth}")
    if depth == 1:
        return MOVES
    subtree = build_tree(depth - 1)
    return tuple((move, subtree) for move in MOVES)


def branches(tree):
    """Yield (move, subtree) pairs; leaves have no subtree."""
    for node in tree:
        if isinstance(node, Move):
            yield node, None
        else:
            yield node


def count_leaves(tree) -> int:
    total = 0
    for _, subtree in branches(tree):
        total += 1 if subtree is None else count_leaves(subtree)
    return total


def tree_depth(tree) -> int:
    _, subtree = next(branches(tree))
    return 1 if subtree is None else 1 + tree_depth(subtree)
