"""
Registry of closed-form fitness and objective functions.

Pages and the CLI pick a function by key; anything that is not a key is
treated as free-form text and compiled by the expression sandbox.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import numpy as np

from core.exceptions import InvalidInputError
from .base_problem import FitnessProblem, ObjectiveProblem
from .expressions import compile_expression


@dataclass(frozen=True)
class FunctionInfo:
    """Metadata card for a registered function."""
    key: str
    label: str
    func: Callable
    expression: str
    # Required vector length, None when any length works
    dimension: Optional[int] = None


def _rastrigin(x: np.ndarray) -> float:
    return 10.0 * len(x) + float(np.sum(x ** 2 - 10.0 * np.cos(2.0 * np.pi * x)))


FITNESS_FUNCTIONS: Dict[str, FunctionInfo] = {
    'x_sin_x': FunctionInfo(
        'x_sin_x', 'x · sin(x)',
        lambda x: x * np.sin(x), 'x * sin(x)'),
    'negative_parabola': FunctionInfo(
        'negative_parabola', '-(x - 5)²',
        lambda x: -(x - 5.0) ** 2, '-(x - 5) ** 2'),
    'sinc': FunctionInfo(
        'sinc', 'sin(x) / x',
        lambda x: float(np.sinc(x / np.pi)), 'sin(x) / x'),
    'cos_decay': FunctionInfo(
        'cos_decay', 'cos(x) · e^(-x/5)',
        lambda x: np.cos(x) * np.exp(-x / 5.0), 'cos(x) * exp(-x / 5)'),
}

OBJECTIVES: Dict[str, FunctionInfo] = {
    'sin_cos': FunctionInfo(
        'sin_cos', 'x₀·sin(x₀) + x₁·cos(x₁)',
        lambda x: x[0] * np.sin(x[0]) + x[1] * np.cos(x[1]),
        'x[0] * sin(x[0]) + x[1] * cos(x[1])', dimension=2),
    'neg_sphere': FunctionInfo(
        'neg_sphere', '-Σ xᵢ²',
        lambda x: -float(np.sum(x ** 2)), '-(sum of x[i] ** 2)'),
    'neg_rastrigin': FunctionInfo(
        'neg_rastrigin', '-Rastrigin(x)',
        lambda x: -_rastrigin(x), '-(10n + sum(x[i]**2 - 10 cos(2 pi x[i])))'),
    'one_max': FunctionInfo(
        'one_max', 'Σ xᵢ (OneMax)',
        lambda x: float(np.sum(x)), 'sum of x[i]'),
}


def list_fitness_functions() -> List[FunctionInfo]:
    return list(FITNESS_FUNCTIONS.values())


def list_objectives() -> List[FunctionInfo]:
    return list(OBJECTIVES.values())


def get_fitness_problem(name_or_expression: str) -> FitnessProblem:
    """
    Resolve a GA fitness function.

    Args:
        name_or_expression: Registry key or an expression in ``x``

    Returns:
        FitnessProblem wrapping the function
    """
    if not name_or_expression or not str(name_or_expression).strip():
        raise InvalidInputError("Fitness function is empty")
    key = str(name_or_expression).strip()
    if key in FITNESS_FUNCTIONS:
        info = FITNESS_FUNCTIONS[key]
        return FitnessProblem(info.func, name=info.key, description=info.label)
    expression = compile_expression(key, variables=('x',))
    return FitnessProblem(expression, name='expression', description=expression.source)


def get_objective_problem(name_or_expression: str) -> ObjectiveProblem:
    """
    Resolve a Tabu Search objective.

    Args:
        name_or_expression: Registry key or an expression over the vector ``x``

    Returns:
        ObjectiveProblem wrapping the function
    """
    if not name_or_expression or not str(name_or_expression).strip():
        raise InvalidInputError("Objective function is empty")
    key = str(name_or_expression).strip()
    if key in OBJECTIVES:
        info = OBJECTIVES[key]
        return ObjectiveProblem(info.func, name=info.key, description=info.label,
                                dimension=info.dimension)
    expression = compile_expression(key, variables=('x',))
    return ObjectiveProblem(expression, name='expression', description=expression.source)
