"""
Problems module for the algorithm showcase.

Contains the problem instances the algorithms consume:
- BaseProblem / ObjectiveProblem / FitnessProblem: objective strategies
- TreeNode: game tree for Minimax and alpha-beta
- Grid: walkable/blocked cells for A*
- SearchGraph: weighted graph with heuristics for Best-First Search
- Item / KnapsackInstance: Branch-and-Bound knapsack input
"""

from .base_problem import BaseProblem, ObjectiveProblem, FitnessProblem
from .game_tree import TreeNode, create_sample_tree
from .grid import Grid, GridCell, generate_random_grid
from .graph import GraphEdge, SearchGraph, validate_graph, create_sample_graph
from .knapsack import Item, KnapsackInstance, make_items, create_sample_items
from .objectives import (
    FITNESS_FUNCTIONS,
    OBJECTIVES,
    get_fitness_problem,
    get_objective_problem,
)
from .expressions import compile_expression

__all__ = [
    'BaseProblem',
    'ObjectiveProblem',
    'FitnessProblem',
    'TreeNode',
    'create_sample_tree',
    'Grid',
    'GridCell',
    'generate_random_grid',
    'GraphEdge',
    'SearchGraph',
    'validate_graph',
    'create_sample_graph',
    'Item',
    'KnapsackInstance',
    'make_items',
    'create_sample_items',
    'FITNESS_FUNCTIONS',
    'OBJECTIVES',
    'get_fitness_problem',
    'get_objective_problem',
    'compile_expression',
]
