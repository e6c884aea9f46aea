"""
N-Queens by backtracking.

One queen per row; ``board[row]`` holds the queen's column or -1 while
the row is unplaced.
"""

import logging
from dataclasses import dataclass
from typing import List

from core.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass
class NQueensResult:
    solutions: List[List[int]]
    total_solutions: int


def solve_n_queens(n: int) -> NQueensResult:
    """
    Collect every placement of n non-attacking queens.

    Columns are tried left to right in each row, so solutions come out
    in lexicographic order.
    """
    if n < 0:
        raise InvalidInputError(f"Board size must be >= 0, got {n}")

    solutions: List[List[int]] = []
    board = [-1] * n

    def is_safe(row: int, col: int) -> bool:
        for placed_row in range(row):
            placed_col = board[placed_row]
            if placed_col == col:
                return False
            if abs(placed_col - col) == row - placed_row:
                return False
        return True

    def backtrack(row: int) -> None:
        if row == n:
            solutions.append(list(board))
            return

        for col in range(n):
            if is_safe(row, col):
                board[row] = col
                try:
                    backtrack(row + 1)
                finally:
                    board[row] = -1

    backtrack(0)
    logger.debug("N-Queens n=%d: %d solutions", n, len(solutions))
    return NQueensResult(solutions, len(solutions))


def convert_to_board(solution: List[int], n: int) -> List[List[str]]:
    """Render a solution as rows of 'Q' and '.'."""
    board = [['.'] * n for _ in range(n)]
    for row, col in enumerate(solution):
        board[row][col] = 'Q'
    return board


def is_valid_solution(solution: List[int]) -> bool:
    """One queen per row and column, no two on a diagonal."""
    n = len(solution)
    if sorted(solution) != list(range(n)):
        return False
    for r1 in range(n):
        for r2 in range(r1 + 1, n):
            if abs(solution[r1] - solution[r2]) == r2 - r1:
                return False
    return True
