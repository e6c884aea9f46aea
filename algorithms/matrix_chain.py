"""
Matrix-chain multiplication order by dynamic programming.

``dimensions`` of length n + 1 describe matrices A1..An where Ai has
shape dimensions[i-1] x dimensions[i].
"""

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from core.exceptions import InvalidInputError


@dataclass
class MatrixChainResult:
    min_multiplications: int
    parenthesization: str
    cost_table: np.ndarray


def matrix_chain_order(dimensions: Sequence[int]) -> MatrixChainResult:
    """
    Minimum scalar multiplications and the optimal parenthesization.

    Raises:
        InvalidInputError: Fewer than two dimensions or a non-positive one
    """
    if len(dimensions) < 2:
        raise InvalidInputError("Need at least two dimensions (one matrix)")
    if any(d <= 0 for d in dimensions):
        raise InvalidInputError("Matrix dimensions must be positive")

    d = [int(x) for x in dimensions]
    n = len(d) - 1
    dp = np.zeros((n, n), dtype=np.int64)
    split = np.zeros((n, n), dtype=np.int64)

    for chain_length in range(2, n + 1):
        for i in range(n - chain_length + 1):
            j = i + chain_length - 1
            best = None
            for k in range(i, j):
                cost = dp[i, k] + dp[k + 1, j] + d[i] * d[k + 1] * d[j + 1]
                # First minimum wins
                if best is None or cost < best:
                    best = cost
                    split[i, j] = k
            dp[i, j] = best

    def build(i: int, j: int) -> str:
        if i == j:
            return f"A{i + 1}"
        k = split[i, j]
        return f"({build(i, k)}{build(k + 1, j)})"

    return MatrixChainResult(int(dp[0, n - 1]), build(0, n - 1), dp)


def chain_shapes(dimensions: Sequence[int]) -> List[str]:
    """Human-readable shapes, e.g. ['A1: 10x30', 'A2: 30x5']."""
    return [f"A{i}: {dimensions[i - 1]}x{dimensions[i]}" for i in range(1, len(dimensions))]
