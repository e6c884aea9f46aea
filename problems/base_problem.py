"""
Abstract base class for objective/fitness strategies.

The metaheuristics (Tabu Search, Genetic Algorithm) never evaluate user
code directly. They receive a problem object wrapping a typed numeric
function, chosen from a registry or compiled by the expression sandbox.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Sequence
import numpy as np


class BaseProblem(ABC):
    """
    Abstract base class for maximization problems.

    Higher values returned by evaluate() are better. Every evaluation
    is counted so the pages can report how much work a run took.
    """

    def __init__(self, name: str, description: str = ''):
        """Initialize problem with evaluation counter."""
        self.name = name
        self.description = description
        self.evaluation_count = 0

    @property
    @abstractmethod
    def problem_type(self) -> str:
        """
        Return problem type identifier.

        Returns:
            'objective' for vector inputs, 'fitness' for scalar inputs
        """
        pass

    @abstractmethod
    def _compute(self, solution: Any) -> float:
        """Compute the raw value of a solution."""
        pass

    def evaluate(self, solution: Any) -> float:
        """
        Evaluate a solution and increment the evaluation counter.

        Args:
            solution: Problem-specific solution representation

        Returns:
            Objective value (higher is better)
        """
        self.evaluation_count += 1
        return float(self._compute(solution))

    def reset_evaluation_count(self):
        """Reset the evaluation counter to zero."""
        self.evaluation_count = 0

    def get_evaluation_count(self) -> int:
        """Get current evaluation count."""
        return self.evaluation_count

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class ObjectiveProblem(BaseProblem):
    """Objective over a solution vector, used by Tabu Search."""

    def __init__(
        self,
        func: Callable[[np.ndarray], float],
        name: str = 'custom',
        description: str = '',
        dimension: Optional[int] = None
    ):
        super().__init__(name, description)
        self.func = func
        self.dimension = dimension

    @property
    def problem_type(self) -> str:
        return 'objective'

    def _compute(self, solution: Sequence[float]) -> float:
        return self.func(np.asarray(solution, dtype=np.float64))


class FitnessProblem(BaseProblem):
    """Scalar fitness function f(x), used by the Genetic Algorithm."""

    def __init__(
        self,
        func: Callable[[float], float],
        name: str = 'custom',
        description: str = ''
    ):
        super().__init__(name, description)
        self.func = func

    @property
    def problem_type(self) -> str:
        return 'fitness'

    def _compute(self, x: float) -> float:
        return self.func(float(x))
