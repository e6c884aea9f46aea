"""
Algorithm registry and runner.

Single source of truth for every algorithm the showcase knows about.
The Streamlit pages and the CLI both dispatch through run_algorithm(),
which parses textual inputs, times the call and logs a summary.
"""

import inspect
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from algorithms import (
    GeneticAlgorithm,
    TabuSearch,
    alpha_beta_with_stats,
    astar,
    best_first_search,
    check_winner,
    get_best_move,
    get_neighbor_generator,
    matrix_chain_order,
    minimax_tree,
    solve_knapsack,
    solve_n_queens,
)
from algorithms.minimax import validate_board
from algorithms.polynomial import (
    add_polynomials,
    derivative,
    multiply_polynomials,
    parse_polynomial,
    polynomial_to_string,
    subtract_polynomials,
)
from problems import Grid, SearchGraph, TreeNode, get_fitness_problem, get_objective_problem
from problems.knapsack import Item
from utils.parsers import parse_dimensions, parse_graph, parse_items, parse_tree_input, parse_vector

from .config import GeneticAlgorithmConfig, TabuSearchConfig
from .exceptions import InvalidInputError, UnknownAlgorithmError

logger = logging.getLogger(__name__)


@dataclass
class AlgoInfo:
    key: str                              # registry key, e.g. "astar"
    label: str                            # human label, e.g. "A* Pathfinding"
    category: str                         # showcase section
    fn: Callable[..., Any]                # runner taking keyword parameters
    description: str = ''                 # one-liner for the UI card
    defaults: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RunRecord:
    key: str
    result: Any
    elapsed: float


# ---------------------------------------------------------------------------
# Runners: normalize inputs, then call into the algorithm modules
# ---------------------------------------------------------------------------

def _run_tic_tac_toe(board: Union[str, Sequence[str]], mark: str = 'X') -> Dict[str, Any]:
    if isinstance(board, str):
        board = ['' if c in '.-_ ' else c.upper() for c in board]
    board = list(board)
    validate_board(board)
    winner = check_winner(board)
    move = -1 if winner else get_best_move(board, mark)
    return {'move': move, 'winner': winner, 'board': board}


def _run_alpha_beta(
    tree: Union[str, TreeNode],
    depth: Optional[int] = None,
    maximizing: bool = True
) -> Dict[str, Any]:
    if isinstance(tree, str):
        tree = parse_tree_input(tree)
    if depth is None:
        depth = tree.depth()
    if depth < 0:
        raise InvalidInputError("depth must be >= 0")
    stats = alpha_beta_with_stats(tree, depth, maximizing=maximizing)
    return {
        'value': stats.value,
        'minimax_value': minimax_tree(tree, depth, maximizing),
        'visited': stats.visited,
        'pruned': stats.pruned,
        'pruned_paths': stats.pruned_paths,
        'total_nodes': tree.count_nodes(),
    }


def _run_astar(grid: Grid, start, goal, heuristic: str = 'manhattan'):
    return astar(grid, tuple(start), tuple(goal), heuristic)


def _run_best_first_search(graph: Union[str, SearchGraph]):
    if isinstance(graph, str):
        graph = parse_graph(graph)
    return best_first_search(graph)


def _run_branch_and_bound(items: Union[str, Sequence[Item]], capacity: float):
    if isinstance(items, str):
        items = parse_items(items)
    return solve_knapsack(items, capacity)


def _run_tabu_search(
    objective: str = 'sin_cos',
    initial_solution: Union[str, Sequence[float]] = '0, 0',
    seed: Optional[int] = None,
    **options
):
    config = TabuSearchConfig.from_dict(options)
    if isinstance(initial_solution, str):
        initial_solution = parse_vector(initial_solution)
    if config.neighbor_method in ('continuousRandomWalk', 'continuous'):
        generator = get_neighbor_generator(config.neighbor_method, step=config.step)
    else:
        generator = get_neighbor_generator(config.neighbor_method)

    ts = TabuSearch(
        get_objective_problem(objective),
        initial_solution,
        generator,
        max_iterations=config.max_iterations,
        tabu_list_size=config.tabu_list_size,
        neighborhood_size=config.neighborhood_size,
        seed=seed,
    )
    return ts.search()


def _run_genetic_algorithm(fitness: str = 'x_sin_x', seed: Optional[int] = None, **options):
    config = GeneticAlgorithmConfig.from_dict(options)
    ga = GeneticAlgorithm(get_fitness_problem(fitness), seed=seed, **config.to_dict())
    return ga.evolve()


def _run_n_queens(n: int = 8):
    return solve_n_queens(int(n))


_POLYNOMIAL_OPERATIONS = {
    'add': add_polynomials,
    'subtract': subtract_polynomials,
    'multiply': multiply_polynomials,
}


def _run_polynomial(first: str, second: str = '', operation: str = 'add') -> Dict[str, Any]:
    p1 = parse_polynomial(first)
    if operation == 'derivative':
        result = derivative(p1)
        p2 = None
    elif operation in _POLYNOMIAL_OPERATIONS:
        p2 = parse_polynomial(second)
        result = _POLYNOMIAL_OPERATIONS[operation](p1, p2)
    else:
        available = ', '.join(list(_POLYNOMIAL_OPERATIONS) + ['derivative'])
        raise InvalidInputError(f"Unknown polynomial operation: {operation}. Available: {available}")
    return {
        'first': p1,
        'second': p2,
        'result': result,
        'formatted': polynomial_to_string(result),
    }


def _run_matrix_chain(dimensions: Union[str, Sequence[int]]):
    if isinstance(dimensions, str):
        dimensions = parse_dimensions(dimensions)
    return matrix_chain_order(dimensions)


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {
    'tic_tac_toe': AlgoInfo(
        'tic_tac_toe', 'Minimax (Tic-Tac-Toe)', 'Adversarial Search', _run_tic_tac_toe,
        'Unbeatable tic-tac-toe engine using minimax with alpha-beta pruning.',
        {'board': '.........', 'mark': 'X'}),
    'alpha_beta': AlgoInfo(
        'alpha_beta', 'Alpha-Beta Pruning', 'Adversarial Search', _run_alpha_beta,
        'Minimax value of a user-supplied game tree, with pruned subtrees.'),
    'astar': AlgoInfo(
        'astar', 'A* Pathfinding', 'Search', _run_astar,
        'Shortest 4-directional grid path guided by the Manhattan distance.'),
    'best_first_search': AlgoInfo(
        'best_first_search', 'Best-First Search', 'Search', _run_best_first_search,
        'Greedy search expanding the node with the lowest heuristic.'),
    'branch_and_bound': AlgoInfo(
        'branch_and_bound', 'Branch and Bound (Knapsack)', 'Search', _run_branch_and_bound,
        '0/1 knapsack pruned with a fractional upper bound.'),
    'tabu_search': AlgoInfo(
        'tabu_search', 'Tabu Search', 'Optimization', _run_tabu_search,
        'Local search with a FIFO memory of forbidden solutions.',
        TabuSearchConfig().to_dict()),
    'genetic_algorithm': AlgoInfo(
        'genetic_algorithm', 'Genetic Algorithm', 'Optimization', _run_genetic_algorithm,
        'Binary-encoded evolution with tournament selection.',
        GeneticAlgorithmConfig().to_dict()),
    'n_queens': AlgoInfo(
        'n_queens', 'N-Queens (Backtracking)', 'Dynamic Programming', _run_n_queens,
        'All placements of n non-attacking queens.', {'n': 8}),
    'matrix_chain': AlgoInfo(
        'matrix_chain', 'Matrix Chain Multiplication', 'Dynamic Programming', _run_matrix_chain,
        'Cheapest parenthesization of a matrix product.', {'dimensions': '10, 30, 5, 60'}),
    'polynomial': AlgoInfo(
        'polynomial', 'Polynomial Manipulation', 'Symbolic Computation', _run_polynomial,
        'Parse, add, subtract, multiply and differentiate polynomials.',
        {'first': '3x^2 + 2x + 1', 'second': 'x - 1', 'operation': 'add'}),
}


def get_algorithm(key: str) -> AlgoInfo:
    if key not in REGISTRY:
        available = ", ".join(REGISTRY)
        raise UnknownAlgorithmError(f"Unknown algorithm: {key}. Available: {available}")
    return REGISTRY[key]


def list_algorithms(category: Optional[str] = None) -> List[AlgoInfo]:
    return [info for info in REGISTRY.values() if category is None or info.category == category]


def get_algorithms_by_category() -> Dict[str, List[AlgoInfo]]:
    by_category: Dict[str, List[AlgoInfo]] = {}
    for info in REGISTRY.values():
        by_category.setdefault(info.category, []).append(info)
    return by_category


def run_algorithm(key: str, **params) -> RunRecord:
    """
    Run a registered algorithm.

    Args:
        key: Registry key
        **params: Keyword parameters of the algorithm's runner

    Returns:
        RunRecord with the result and wall-clock time

    Raises:
        UnknownAlgorithmError: If key is not registered
        InvalidInputError: If the parameters fail validation
    """
    info = get_algorithm(key)
    try:
        inspect.signature(info.fn).bind(**params)
    except TypeError as e:
        raise InvalidInputError(f"Bad parameters for {key}: {e}") from None

    start_time = time.perf_counter()
    result = info.fn(**params)
    elapsed = time.perf_counter() - start_time
    logger.info("%s finished in %.3fs", info.label, elapsed)
    return RunRecord(key, result, elapsed)
