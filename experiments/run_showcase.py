"""
Command-line runner for the algorithm showcase.

Runs any registered algorithm on sample, inline or file input and prints
a short report. Results can also be dumped as JSON.

Examples:
    python experiments/run_showcase.py list
    python experiments/run_showcase.py n_queens --n 8 --show 2
    python experiments/run_showcase.py tabu_search --objective neg_sphere --initial "3, -2" -v
    python experiments/run_showcase.py branch_and_bound --items-file items.txt --capacity 50 --json
"""

import argparse
import dataclasses
import json
import logging
import math
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import numpy as np

# Add project to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from algorithms import convert_to_board, polynomial_to_string
from core import SHOWCASE_DEFAULTS, GeneticAlgorithmConfig, GridConfig, ShowcaseError, TabuSearchConfig
from core.runner import get_algorithms_by_category, list_algorithms, run_algorithm
from problems import create_sample_graph, create_sample_items, create_sample_tree, generate_random_grid
from utils.logging_utils import setup_logging, verbosity_to_level
from utils.parsers import load_text, parse_coordinate, parse_grid

logger = logging.getLogger(__name__)


def _add_config_arguments(parser: argparse.ArgumentParser, defaults) -> None:
    """Expose every field of a config dataclass as --field-name."""
    for f in dataclasses.fields(defaults):
        value = getattr(defaults, f.name)
        parser.add_argument(f"--{f.name.replace('_', '-')}", type=type(value), default=value,
                            dest=f.name, help=f"{type(defaults).__name__}.{f.name}")


def _config_from_args(args: argparse.Namespace, config_cls):
    return config_cls.from_dict({f.name: getattr(args, f.name) for f in dataclasses.fields(config_cls)})


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Run an algorithm from the showcase',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase log verbosity (-v info, -vv debug)')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Only log errors')

    subparsers = parser.add_subparsers(dest='command', required=True)

    def add(name: str, help_text: str) -> argparse.ArgumentParser:
        sub = subparsers.add_parser(name, help=help_text,
                                    formatter_class=argparse.ArgumentDefaultsHelpFormatter)
        sub.add_argument('--json', action='store_true',
                         help='Print the full result as JSON')
        sub.add_argument('--output', type=str, default=None,
                         help='Also write the JSON result to this file')
        return sub

    subparsers.add_parser('list', help='List registered algorithms')

    # Adversarial search
    sub = add('tic_tac_toe', 'Best move for a tic-tac-toe position')
    sub.add_argument('--board', type=str, default='.........',
                     help="Nine cells row by row, '.' for empty")
    sub.add_argument('--mark', type=str, default='X', choices=['X', 'O'],
                     help='Mark the engine plays')

    sub = add('alpha_beta', 'Alpha-beta value of a JSON game tree')
    sub.add_argument('--tree-file', type=str, default=None,
                     help='JSON tree file (sample tree if omitted)')
    sub.add_argument('--depth', type=int, default=None,
                     help='Depth limit (full tree if omitted)')
    sub.add_argument('--min-root', action='store_true',
                     help='Root is a MIN node')

    # Search
    grid_defaults: GridConfig = SHOWCASE_DEFAULTS['grid']
    sub = add('astar', 'A* path on a random or file grid')
    _add_config_arguments(sub, grid_defaults)
    sub.add_argument('--grid-file', type=str, default=None,
                     help="Text maze, '#' wall and '.' open (random grid if omitted)")
    sub.add_argument('--seed', type=int, default=42, help='Random grid seed')
    sub.add_argument('--start', type=str, default='0, 0', help='Start cell "x, y"')
    sub.add_argument('--goal', type=str, default=None,
                     help='Goal cell "x, y" (bottom-right if omitted)')
    sub.add_argument('--heuristic', type=str, default='manhattan', choices=['manhattan', 'zero'])

    sub = add('best_first_search', 'Greedy Best-First Search on a JSON graph')
    sub.add_argument('--graph-file', type=str, default=None,
                     help='JSON graph file (sample graph if omitted)')

    sub = add('branch_and_bound', '0/1 knapsack by Branch-and-Bound')
    sub.add_argument('--items-file', type=str, default=None,
                     help="'weight,value' lines or JSON (sample items if omitted)")
    sub.add_argument('--capacity', type=float, default=50.0, help='Knapsack capacity')

    # Optimization
    sub = add('tabu_search', 'Tabu Search over a vector objective')
    sub.add_argument('--objective', type=str, default='sin_cos',
                     help='Objective key or expression over x[i]')
    sub.add_argument('--initial', type=str, default='0, 0', help='Initial solution vector')
    sub.add_argument('--seed', type=int, default=None, help='Random seed')
    _add_config_arguments(sub, SHOWCASE_DEFAULTS['tabu_search'])

    sub = add('genetic_algorithm', 'Genetic Algorithm over a scalar fitness')
    sub.add_argument('--fitness', type=str, default='x_sin_x',
                     help='Fitness key or expression in x')
    sub.add_argument('--seed', type=int, default=None, help='Random seed')
    _add_config_arguments(sub, SHOWCASE_DEFAULTS['genetic_algorithm'])

    # Dynamic programming / symbolic
    sub = add('n_queens', 'All N-Queens solutions')
    sub.add_argument('--n', type=int, default=8, help='Board size')
    sub.add_argument('--show', type=int, default=1, help='Number of boards to print')

    sub = add('matrix_chain', 'Optimal matrix-chain parenthesization')
    sub.add_argument('--dimensions', type=str, default='10, 30, 5, 60',
                     help='n + 1 dimensions for n matrices')

    sub = add('polynomial', 'Polynomial arithmetic')
    sub.add_argument('first', type=str, help='First polynomial, e.g. "3x^2 + 2x + 1"')
    sub.add_argument('second', type=str, nargs='?', default='', help='Second polynomial')
    sub.add_argument('--operation', type=str, default='add',
                     choices=['add', 'subtract', 'multiply', 'derivative'])

    return parser.parse_args(argv)


# --- Parameter builders: argparse namespace -> run_algorithm keywords ---

def _tic_tac_toe_params(args):
    return {'board': args.board, 'mark': args.mark}


def _alpha_beta_params(args):
    if args.tree_file:
        tree = load_text(args.tree_file)
    else:
        tree = create_sample_tree()
    return {'tree': tree, 'depth': args.depth, 'maximizing': not args.min_root}


def _astar_params(args):
    if args.grid_file:
        grid = parse_grid(load_text(args.grid_file))
    else:
        config = _config_from_args(args, GridConfig)
        grid = generate_random_grid(config.rows, config.cols, config.wall_probability, seed=args.seed)

    start = parse_coordinate(args.start)
    goal = parse_coordinate(args.goal) if args.goal else (grid.cols - 1, grid.rows - 1)
    if not args.grid_file and grid.in_bounds(*start) and grid.in_bounds(*goal):
        grid = grid.with_open_cells(start, goal)
    return {'grid': grid, 'start': start, 'goal': goal, 'heuristic': args.heuristic}


def _best_first_params(args):
    if args.graph_file:
        return {'graph': load_text(args.graph_file)}
    return {'graph': create_sample_graph()}


def _branch_and_bound_params(args):
    items = load_text(args.items_file) if args.items_file else create_sample_items()
    return {'items': items, 'capacity': args.capacity}


def _tabu_params(args):
    config = _config_from_args(args, TabuSearchConfig)
    return {'objective': args.objective, 'initial_solution': args.initial,
            'seed': args.seed, **config.to_dict()}


def _genetic_params(args):
    config = _config_from_args(args, GeneticAlgorithmConfig)
    return {'fitness': args.fitness, 'seed': args.seed, **config.to_dict()}


PARAM_BUILDERS: Dict[str, Callable[[argparse.Namespace], Dict[str, Any]]] = {
    'tic_tac_toe': _tic_tac_toe_params,
    'alpha_beta': _alpha_beta_params,
    'astar': _astar_params,
    'best_first_search': _best_first_params,
    'branch_and_bound': _branch_and_bound_params,
    'tabu_search': _tabu_params,
    'genetic_algorithm': _genetic_params,
    'n_queens': lambda args: {'n': args.n},
    'matrix_chain': lambda args: {'dimensions': args.dimensions},
    'polynomial': lambda args: {'first': args.first, 'second': args.second,
                                'operation': args.operation},
}


# --- Reporting ---

def to_jsonable(value: Any) -> Any:
    """Convert result records (dataclasses, numpy values) to JSON types."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, np.ndarray):
        return to_jsonable(value.tolist())
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    return value


def format_report(key: str, result: Any, args: argparse.Namespace) -> List[str]:
    """Human-readable summary lines for one run."""
    if key == 'tic_tac_toe':
        board = result['board']
        lines = [' '.join(cell or '.' for cell in board[r * 3:r * 3 + 3]) for r in range(3)]
        if result['winner']:
            lines.append(f"Game over: {result['winner']}")
        else:
            lines.append(f"Best move for {args.mark}: cell {result['move']}")
        return lines

    if key == 'alpha_beta':
        return [
            f"Value:   {result['value']:g} (plain minimax {result['minimax_value']:g})",
            f"Visited: {result['visited']} of {result['total_nodes']} nodes",
            f"Pruned:  {result['pruned']} subtrees",
        ] + [f"  - {path}" for path in result['pruned_paths']]

    if key == 'astar':
        if not result.found:
            return [f"No path ({len(result.explored)} cells expanded)"]
        return [
            f"Path cost: {result.cost} ({len(result.explored)} cells expanded)",
            "Path: " + ' -> '.join(f"({x},{y})" for x, y in result.path),
        ]

    if key == 'best_first_search':
        if result is None:
            return ["Goal unreachable"]
        return [
            f"Path: {' -> '.join(result.path)}",
            f"Total cost: {result.total_cost:g}",
            f"Expanded: {', '.join(result.expanded)}",
        ]

    if key == 'branch_and_bound':
        return [
            f"Max value: {result.max_value:g} (weight {result.total_weight:g})",
            f"Selected items: {result.selected_indices}",
            f"Nodes explored/pruned: {result.nodes_explored}/{result.nodes_pruned}",
        ]

    if key == 'tabu_search':
        return [
            f"Best objective: {result.best_objective_value:.6f}",
            f"Best solution:  {np.array2string(result.best_solution, precision=6)}",
            f"Iterations:     {result.iterations_performed}",
        ]

    if key == 'genetic_algorithm':
        return [
            f"Best fitness:   {result.best_fitness:.6f}",
            f"Best x:         {result.best_solution:.6f}",
            f"Chromosome:     {''.join(str(b) for b in result.best_chromosome)}",
        ]

    if key == 'n_queens':
        lines = [f"{result.total_solutions} solutions for n={args.n}"]
        for solution in result.solutions[:max(0, args.show)]:
            lines.append('')
            lines.extend(' '.join(row) for row in convert_to_board(solution, args.n))
        return lines

    if key == 'matrix_chain':
        return [
            f"Minimum multiplications: {result.min_multiplications}",
            f"Parenthesization: {result.parenthesization}",
        ]

    if key == 'polynomial':
        lines = [f"P(x) = {polynomial_to_string(result['first'])}"]
        if result['second'] is not None:
            lines.append(f"Q(x) = {polynomial_to_string(result['second'])}")
        lines.append(f"{args.operation}: {result['formatted']}")
        return lines

    return [repr(result)]


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(verbosity_to_level(args.verbose, args.quiet))

    if args.command == 'list':
        for category, infos in get_algorithms_by_category().items():
            print(category)
            for info in infos:
                print(f"  {info.key:<20} {info.label}")
        logger.debug("%d algorithms registered", len(list_algorithms()))
        return 0

    try:
        params = PARAM_BUILDERS[args.command](args)
        record = run_algorithm(args.command, **params)
    except ShowcaseError as e:
        logger.error("%s", e)
        return 2

    print("=" * 60)
    print(f"{args.command} ({record.elapsed:.3f}s)")
    print("=" * 60)
    for line in format_report(args.command, record.result, args):
        print(line)

    if args.json or args.output:
        payload = json.dumps({'algorithm': args.command, 'elapsed': record.elapsed,
                              'result': to_jsonable(record.result)}, indent=2)
        if args.json:
            print(payload)
        if args.output:
            out_path = Path(args.output)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(payload, encoding='utf-8')
            logger.info("Result saved to %s", out_path)

    return 0


if __name__ == '__main__':
    sys.exit(main())
