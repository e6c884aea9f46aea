"""
Tests for backtracking, dynamic programming and polynomial algebra.
"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.exceptions import InvalidInputError, PolynomialSyntaxError
from algorithms import (
    add_polynomials, convert_to_board, derivative, evaluate_polynomial, is_valid_solution,
    matrix_chain_order, multiply_polynomials, parse_polynomial, polynomial_to_string,
    solve_n_queens, subtract_polynomials
)
from algorithms.matrix_chain import chain_shapes


class TestNQueens:
    """Tests for the backtracking N-Queens solver."""

    @pytest.mark.parametrize('n, expected', [
        (0, 1), (1, 1), (2, 0), (3, 0), (4, 2), (5, 10), (6, 4), (8, 92),
    ])
    def test_solution_counts(self, n, expected):
        result = solve_n_queens(n)
        assert result.total_solutions == expected
        assert len(result.solutions) == expected

    def test_four_queens(self):
        assert solve_n_queens(4).solutions == [[1, 3, 0, 2], [2, 0, 3, 1]]

    def test_empty_board(self):
        assert solve_n_queens(0).solutions == [[]]

    def test_every_solution_is_valid(self):
        solutions = solve_n_queens(7).solutions
        assert all(is_valid_solution(s) for s in solutions)
        assert solutions == sorted(solutions)
        assert len({tuple(s) for s in solutions}) == len(solutions)

    def test_invalid_placements(self):
        assert not is_valid_solution([0, 1, 2, 3])
        assert not is_valid_solution([0, 0, 1, 2])

    def test_board_rendering(self):
        rows = convert_to_board([1, 3, 0, 2], 4)
        assert [''.join(r) for r in rows] == ['.Q..', '...Q', 'Q...', '..Q.']

    def test_negative_size(self):
        with pytest.raises(InvalidInputError):
            solve_n_queens(-1)


class TestPolynomialParsing:
    """Tests for polynomial parsing and formatting."""

    @pytest.mark.parametrize('text, expected', [
        ('3x^2 - x + 5', [5, -1, 3]),
        ('x', [0, 1]),
        ('-x^3', [0, 0, 0, -1]),
        ('2x + 3x', [0, 5]),
        ('5', [5]),
        ('0', []),
        ('2.5x', [0, 2.5]),
        ('3*x^2', [0, 0, 3]),
        ('  4X^2+1 ', [1, 0, 4]),
        ('x^2 - x^2', []),
    ])
    def test_parse(self, text, expected):
        assert parse_polynomial(text) == expected

    @pytest.mark.parametrize('coefficients, expected', [
        ([5, -1, 3], '3x^2-x+5'),
        ([0, 1], 'x'),
        ([0, -1], '-x'),
        ([-1], '-1'),
        ([1], '1'),
        ([0, 0, 1], 'x^2'),
        ([2, 0, -1], '-x^2+2'),
        ([0, 1.5], '1.5x'),
        ([5.0], '5'),
        ([], '0'),
    ])
    def test_format(self, coefficients, expected):
        assert polynomial_to_string(coefficients) == expected

    def test_format_then_parse(self):
        for text in ('3x^2-x+5', 'x^4+2x', '-7', '-x^2+2'):
            assert polynomial_to_string(parse_polynomial(text)) == text

    def test_parse_inverts_format(self):
        rng = np.random.default_rng(23)
        for _ in range(200):
            p = trimmed(int(c) for c in rng.integers(-20, 21, size=rng.integers(0, 7)))
            assert parse_polynomial(polynomial_to_string(p)) == p

    def test_tiny_and_huge_coefficients(self):
        assert polynomial_to_string([1e-05, 1]) == 'x+0.00001'
        for p in ([1e-05, 1], [0.5, 0, -2.5e-07], [1e20, 3]):
            assert parse_polynomial(polynomial_to_string(p)) == p

    @pytest.mark.parametrize('text', ['', '   ', '3y', 'x^', '++x', 'x^-2', 'x^2x'])
    def test_syntax_errors(self, text):
        with pytest.raises(PolynomialSyntaxError):
            parse_polynomial(text)

    def test_error_names_term(self):
        with pytest.raises(PolynomialSyntaxError) as exc_info:
            parse_polynomial('x + 3y')
        assert exc_info.value.term == '+3y'


class TestPolynomialArithmetic:
    """Tests for polynomial arithmetic."""

    def test_add_and_subtract(self):
        assert add_polynomials([1, 2], [3]) == [4, 2]
        assert add_polynomials([1, 1], [0, -1]) == [1]
        assert subtract_polynomials([1, 2, 3], [1, 2, 3]) == []
        assert polynomial_to_string(subtract_polynomials([1, 2, 3], [1, 2, 3])) == '0'

    def test_multiply(self):
        assert multiply_polynomials([1, 1], [-1, 1]) == [-1, 0, 1]
        assert polynomial_to_string(multiply_polynomials([1, 1], [-1, 1])) == 'x^2-1'
        assert multiply_polynomials([1, 2], []) == []

    def test_evaluate(self):
        assert evaluate_polynomial([5, -1, 3], 2) == 15
        assert evaluate_polynomial([], 3) == 0

    def test_derivative(self):
        assert derivative([5, -1, 3]) == [-1, 6]
        assert derivative([7]) == []
        assert derivative([]) == []

    def test_algebraic_laws(self):
        rng = np.random.default_rng(17)
        for _ in range(30):
            p, q, r = ([int(c) for c in rng.integers(-5, 6, size=rng.integers(0, 5))]
                       for _ in range(3))
            p, q, r = trimmed(p), trimmed(q), trimmed(r)

            assert add_polynomials(p, q) == add_polynomials(q, p)
            assert multiply_polynomials(p, q) == multiply_polynomials(q, p)
            assert multiply_polynomials(p, add_polynomials(q, r)) == \
                add_polynomials(multiply_polynomials(p, q), multiply_polynomials(p, r))
            for x in (-2, 0, 3):
                assert evaluate_polynomial(multiply_polynomials(p, q), x) == \
                    evaluate_polynomial(p, x) * evaluate_polynomial(q, x)


def trimmed(coefficients):
    result = list(coefficients)
    while result and result[-1] == 0:
        result.pop()
    return result


class TestMatrixChain:
    """Tests for matrix-chain multiplication."""

    def test_three_matrices(self):
        result = matrix_chain_order([10, 30, 5, 60])
        assert result.min_multiplications == 4500
        assert result.parenthesization == '((A1A2)A3)'

    def test_four_matrices(self):
        result = matrix_chain_order([40, 20, 30, 10, 30])
        assert result.min_multiplications == 26000
        assert result.parenthesization == '((A1(A2A3))A4)'
        assert result.cost_table.shape == (4, 4)
        assert result.cost_table[0, 1] == 24000

    def test_single_matrix(self):
        result = matrix_chain_order([10, 20])
        assert result.min_multiplications == 0
        assert result.parenthesization == 'A1'

    def test_invalid_dimensions(self):
        with pytest.raises(InvalidInputError):
            matrix_chain_order([10])
        with pytest.raises(InvalidInputError):
            matrix_chain_order([10, 0, 5])

    def test_shapes(self):
        assert chain_shapes([10, 30, 5]) == ['A1: 10x30', 'A2: 30x5']


if __name__ == '__main__':
    exit(pytest.main([__file__, '-v']))
