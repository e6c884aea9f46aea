"""
Abstract base class for the population/trajectory metaheuristics.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

import numpy as np

from problems.base_problem import BaseProblem


class BaseAlgorithm(ABC):
    """
    Shared best-so-far bookkeeping for maximizing metaheuristics.

    Subclasses call update_best() after every evaluation; it keeps a
    private copy of the incumbent and only replaces it on strict
    improvement.
    """

    def __init__(self, problem: BaseProblem, name: str, seed: Optional[int] = None):
        self.problem = problem
        self.name = name
        self.rng = np.random.default_rng(seed)

        self.best_solution: Any = None
        self.best_value = float('-inf')
        self.evaluations_used = 0

    def evaluate(self, solution: Any) -> float:
        """Evaluate through the problem and count the call."""
        self.evaluations_used += 1
        return self.problem.evaluate(solution)

    def update_best(self, solution: Any, value: float) -> bool:
        """
        Record solution as the incumbent if it strictly improves.

        Returns:
            True if the incumbent changed
        """
        if value > self.best_value:
            self.best_value = value
            self.best_solution = solution.copy() if hasattr(solution, 'copy') else solution
            return True
        return False

    def get_best(self) -> Tuple[Any, float]:
        return self.best_solution, self.best_value

    @abstractmethod
    def run(self) -> Any:
        """Run the algorithm to completion and return its result record."""
        pass
