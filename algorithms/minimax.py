"""
Minimax with alpha-beta pruning.

Two variants share the same pruning rule:
- tic-tac-toe, searched on a mutable board with apply/undo moves
- generic game trees supplied by the user as JSON

X is the maximizing mark, O the minimizing one.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from core.exceptions import InvalidInputError
from problems.game_tree import TreeNode

logger = logging.getLogger(__name__)

EMPTY = ''
MAX_MARK = 'X'
MIN_MARK = 'O'
DRAW = 'draw'

WINNING_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)


def validate_board(board: Sequence[str]) -> None:
    if len(board) != 9:
        raise InvalidInputError(f"Board must have 9 cells, got {len(board)}")
    for i, cell in enumerate(board):
        if cell not in (EMPTY, MAX_MARK, MIN_MARK):
            raise InvalidInputError(f"Cell {i} holds invalid mark {cell!r}")


def check_winner(board: Sequence[str]) -> Optional[str]:
    """
    Return 'X' or 'O' for a completed line, 'draw' for a full board,
    or None while the game is still open.
    """
    for a, b, c in WINNING_LINES:
        if board[a] and board[a] == board[b] == board[c]:
            return board[a]
    return None if EMPTY in board else DRAW


def get_empty_squares(board: Sequence[str]) -> List[int]:
    return [i for i, cell in enumerate(board) if cell == EMPTY]


def minimax(
    board: List[str],
    depth: int,
    is_maximizing: bool,
    alpha: float = -math.inf,
    beta: float = math.inf
) -> float:
    """
    Score a tic-tac-toe position under optimal play.

    ``depth`` is the number of plies already played below the root, so
    quicker wins score higher: X wins score ``10 - depth``, O wins
    ``depth - 10``, draws 0. The board is mutated during search and
    restored before returning.
    """
    winner = check_winner(board)
    if winner == MAX_MARK:
        return 10 - depth
    if winner == MIN_MARK:
        return depth - 10
    if winner == DRAW:
        return 0

    mark = MAX_MARK if is_maximizing else MIN_MARK
    best = -math.inf if is_maximizing else math.inf

    for index in get_empty_squares(board):
        board[index] = mark
        try:
            score = minimax(board, depth + 1, not is_maximizing, alpha, beta)
        finally:
            board[index] = EMPTY

        if is_maximizing:
            best = max(best, score)
            alpha = max(alpha, best)
        else:
            best = min(best, score)
            beta = min(beta, best)
        if beta <= alpha:
            break

    return best


def get_best_move(board: List[str], mark: str = MAX_MARK) -> int:
    """
    Pick the engine's move.

    Every empty cell is tried for ``mark`` and scored with minimax from
    the opponent's turn; the strictly highest score wins, so ties go to
    the lowest index. Scores are always from X's point of view, so an O
    engine prefers the lowest score.

    Returns:
        Cell index, or -1 when the board has no empty cell
    """
    validate_board(board)
    if mark not in (MAX_MARK, MIN_MARK):
        raise InvalidInputError(f"Engine mark must be 'X' or 'O', got {mark!r}")

    maximizing = mark == MAX_MARK
    best_score = -math.inf
    best_move = -1

    for index in get_empty_squares(board):
        board[index] = mark
        try:
            score = minimax(board, 0, not maximizing)
        finally:
            board[index] = EMPTY

        oriented = score if maximizing else -score
        if oriented > best_score:
            best_score = oriented
            best_move = index

    return best_move


def minimax_tree(node: TreeNode, depth: int, maximizing: bool) -> float:
    """Plain minimax over a game tree, no pruning."""
    if depth == 0 or node.is_leaf:
        return node.value if node.value is not None else 0.0

    values = [minimax_tree(child, depth - 1, not maximizing) for child in node.children]
    return max(values) if maximizing else min(values)


def alpha_beta(
    node: TreeNode,
    depth: int,
    alpha: float = -math.inf,
    beta: float = math.inf,
    maximizing: bool = True
) -> float:
    """
    Minimax value of a game tree with alpha-beta pruning.

    A node is terminal when depth reaches 0 or it has no children; a
    terminal node without a value scores 0.
    """
    return _AlphaBetaSearch().search(node, depth, alpha, beta, maximizing)


@dataclass
class AlphaBetaResult:
    value: float
    visited: int
    pruned: int
    pruned_paths: List[str]


def alpha_beta_with_stats(
    node: TreeNode,
    depth: int,
    alpha: float = -math.inf,
    beta: float = math.inf,
    maximizing: bool = True
) -> AlphaBetaResult:
    """Alpha-beta search that also reports visited and pruned subtrees."""
    search = _AlphaBetaSearch()
    value = search.search(node, depth, alpha, beta, maximizing)
    logger.debug("Alpha-beta visited %d nodes, pruned %d subtrees", search.visited, search.pruned)
    return AlphaBetaResult(value, search.visited, search.pruned, search.pruned_paths)


class _AlphaBetaSearch:
    """Recursive alpha-beta with node counters."""

    def __init__(self):
        self.visited = 0
        self.pruned = 0
        self.pruned_paths: List[str] = []

    def search(self, node, depth, alpha, beta, maximizing, path='$'):
        self.visited += 1
        if depth == 0 or node.is_leaf:
            return node.value if node.value is not None else 0.0

        best = -math.inf if maximizing else math.inf
        for i, child in enumerate(node.children):
            value = self.search(child, depth - 1, alpha, beta, not maximizing,
                                f"{path}.children[{i}]")
            if maximizing:
                best = max(best, value)
                alpha = max(alpha, value)
            else:
                best = min(best, value)
                beta = min(beta, value)

            if beta <= alpha:
                skipped = len(node.children) - i - 1
                if skipped:
                    self.pruned += skipped
                    self.pruned_paths.extend(
                        f"{path}.children[{j}]" for j in range(i + 1, len(node.children))
                    )
                break

        return best
