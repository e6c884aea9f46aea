"""
Algorithms module for the algorithm showcase.

Contains one self-contained implementation per algorithm:
- Minimax / alpha-beta: tic-tac-toe engine and generic game trees
- astar: A* pathfinding on a grid
- best_first_search: greedy Best-First Search on a weighted graph
- BranchAndBoundSolver: 0/1 knapsack with a fractional bound
- TabuSearch (TS): memory-based local search
- GeneticAlgorithm (GA): binary-encoded evolutionary search
- solve_n_queens: backtracking N-Queens
- polynomial: parse/format/add/multiply polynomials
- matrix_chain_order: matrix-chain multiplication DP
"""

from .base_algorithm import BaseAlgorithm
from .genetic_algorithm import GeneticAlgorithm, GAResult
from .tabu_search import (
    TabuSearch,
    TabuSearchResult,
    NeighborGenerator,
    ContinuousRandomWalk,
    PermutationSwap,
    BinaryFlip,
    get_neighbor_generator,
)
from .minimax import (
    check_winner,
    get_empty_squares,
    minimax,
    get_best_move,
    minimax_tree,
    alpha_beta,
    alpha_beta_with_stats,
    AlphaBetaResult,
)
from .astar import astar, PathResult, Heuristic, ManhattanHeuristic, get_heuristic
from .best_first_search import best_first_search, SearchResult
from .branch_and_bound import BranchAndBoundSolver, KnapsackResult, solve_knapsack
from .backtracking import solve_n_queens, convert_to_board, is_valid_solution, NQueensResult
from .polynomial import (
    parse_polynomial,
    add_polynomials,
    subtract_polynomials,
    multiply_polynomials,
    evaluate_polynomial,
    derivative,
    polynomial_to_string,
)
from .matrix_chain import matrix_chain_order, MatrixChainResult

__all__ = [
    'BaseAlgorithm',
    'GeneticAlgorithm',
    'GAResult',
    'TabuSearch',
    'TabuSearchResult',
    'NeighborGenerator',
    'ContinuousRandomWalk',
    'PermutationSwap',
    'BinaryFlip',
    'get_neighbor_generator',
    'check_winner',
    'get_empty_squares',
    'minimax',
    'get_best_move',
    'minimax_tree',
    'alpha_beta',
    'alpha_beta_with_stats',
    'AlphaBetaResult',
    'astar',
    'PathResult',
    'Heuristic',
    'ManhattanHeuristic',
    'get_heuristic',
    'best_first_search',
    'SearchResult',
    'BranchAndBoundSolver',
    'KnapsackResult',
    'solve_knapsack',
    'solve_n_queens',
    'convert_to_board',
    'is_valid_solution',
    'NQueensResult',
    'parse_polynomial',
    'add_polynomials',
    'subtract_polynomials',
    'multiply_polynomials',
    'evaluate_polynomial',
    'derivative',
    'polynomial_to_string',
    'matrix_chain_order',
    'MatrixChainResult',
    # Aliases
    'GA',
    'TS',
]

# Convenient aliases
GA = GeneticAlgorithm
TS = TabuSearch
