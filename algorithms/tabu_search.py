"""
Tabu Search (TS) for continuous and discrete maximization.

A local search method that keeps a short-term memory of recently
visited solutions to avoid cycling and escape local optima.

Good for: Intensification, systematic neighborhood exploration
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from core.exceptions import InvalidInputError, UnknownAlgorithmError
from problems.base_problem import BaseProblem
from .base_algorithm import BaseAlgorithm

logger = logging.getLogger(__name__)


class NeighborGenerator(ABC):
    """Strategy producing one random neighbor of a solution."""

    name = 'base'

    @abstractmethod
    def __call__(self, solution: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        pass


class ContinuousRandomWalk(NeighborGenerator):
    """Add uniform noise in [-step, step] to every coordinate."""

    name = 'continuousRandomWalk'

    def __init__(self, step: float = 0.1):
        if step <= 0:
            raise InvalidInputError("step must be positive")
        self.step = step

    def __call__(self, solution, rng):
        return solution + rng.uniform(-self.step, self.step, size=len(solution))


class PermutationSwap(NeighborGenerator):
    """Exchange two random positions (possibly the same one)."""

    name = 'permutationSwap'

    def __call__(self, solution, rng):
        neighbor = solution.copy()
        i, j = rng.integers(len(neighbor), size=2)
        neighbor[i], neighbor[j] = neighbor[j], neighbor[i]
        return neighbor


class BinaryFlip(NeighborGenerator):
    """Invert one random bit."""

    name = 'binaryFlip'

    def __call__(self, solution, rng):
        neighbor = solution.copy()
        index = rng.integers(len(neighbor))
        neighbor[index] = 1 - neighbor[index]
        return neighbor


NEIGHBOR_GENERATORS = {
    'continuousRandomWalk': ContinuousRandomWalk,
    'continuous': ContinuousRandomWalk,
    'permutationSwap': PermutationSwap,
    'swap': PermutationSwap,
    'binaryFlip': BinaryFlip,
    'binary': BinaryFlip,
}


def get_neighbor_generator(name: str, **kwargs) -> NeighborGenerator:
    """
    Get a neighbor generator by name.

    Args:
        name: Registry key, e.g. 'continuousRandomWalk'
        **kwargs: Constructor options (``step`` for the random walk)

    Raises:
        UnknownAlgorithmError: If name is not registered
    """
    if name not in NEIGHBOR_GENERATORS:
        available = ", ".join(NEIGHBOR_GENERATORS)
        raise UnknownAlgorithmError(f"Unknown neighbor method: {name}. Available: {available}")
    cls = NEIGHBOR_GENERATORS[name]
    if cls is ContinuousRandomWalk:
        return cls(**kwargs)
    return cls()


@dataclass
class TabuSearchResult:
    best_solution: np.ndarray
    best_objective_value: float
    iterations_performed: int
    history: List[Dict[str, Any]] = field(default_factory=list)


class TabuSearch(BaseAlgorithm):
    """
    Tabu Search over a solution vector.

    Features:
    - Short-term memory (tabu list) of exact visited solutions, FIFO
    - Pluggable neighbor generation strategy
    - Always moves to the best admissible neighbor, even if worse
    - Early exit when every sampled neighbor is tabu
    """

    def __init__(
        self,
        problem: BaseProblem,
        initial_solution: Sequence[float],
        neighbor_generator: Union[str, NeighborGenerator] = 'continuousRandomWalk',
        max_iterations: int = 100,
        tabu_list_size: int = 10,
        neighborhood_size: int = 20,
        seed: Optional[int] = None
    ):
        """
        Initialize Tabu Search.

        Args:
            problem: Objective to maximize
            initial_solution: Starting vector
            neighbor_generator: Strategy instance or registry name
            max_iterations: Iteration budget
            tabu_list_size: Capacity of the tabu memory
            neighborhood_size: Neighbors sampled per iteration
            seed: Random seed for reproducibility
        """
        super().__init__(problem, 'TS', seed)

        initial = np.asarray(initial_solution, dtype=np.float64)
        if initial.ndim != 1 or initial.size == 0:
            raise InvalidInputError("Initial solution must be a non-empty 1-D vector")
        dimension = getattr(problem, 'dimension', None)
        if dimension is not None and initial.size != dimension:
            raise InvalidInputError(
                f"Objective '{problem.name}' needs a {dimension}-component initial "
                f"solution, got {initial.size}")
        if max_iterations < 0:
            raise InvalidInputError("max_iterations must be >= 0")
        if tabu_list_size < 1:
            raise InvalidInputError("tabu_list_size must be >= 1")
        if neighborhood_size < 1:
            raise InvalidInputError("neighborhood_size must be >= 1")

        if isinstance(neighbor_generator, str):
            neighbor_generator = get_neighbor_generator(neighbor_generator)

        self.initial_solution = initial
        self.neighbor_generator = neighbor_generator
        self.max_iterations = max_iterations
        self.tabu_list_size = tabu_list_size
        self.neighborhood_size = neighborhood_size

        # Search state
        self.current_solution = initial.copy()
        self.current_value = float('-inf')
        self.tabu_list: deque = deque(maxlen=tabu_list_size)
        self.iteration = 0
        self.history: List[Dict[str, Any]] = []

    def is_tabu(self, solution: np.ndarray) -> bool:
        """Check if an exact solution is held in the tabu list."""
        return any(np.array_equal(tabu, solution) for tabu in self.tabu_list)

    def _add_to_tabu(self, solution: np.ndarray) -> None:
        """Add solution to tabu list; deque evicts the oldest entry."""
        self.tabu_list.append(solution.copy())

    def _best_admissible_neighbor(self):
        best_neighbor = None
        best_neighbor_value = float('-inf')

        for _ in range(self.neighborhood_size):
            neighbor = self.neighbor_generator(self.current_solution, self.rng)
            if self.is_tabu(neighbor):
                continue

            value = self.evaluate(neighbor)
            if best_neighbor is None or value > best_neighbor_value:
                best_neighbor = neighbor
                best_neighbor_value = value

        return best_neighbor, best_neighbor_value

    def search(self) -> TabuSearchResult:
        """
        Run Tabu Search until the iteration budget is used or no
        admissible neighbor remains.

        Returns:
            TabuSearchResult with the best solution ever seen
        """
        self.current_solution = self.initial_solution.copy()
        self.current_value = self.evaluate(self.current_solution)
        # The start point is the incumbent even when its value is NaN
        self.best_solution = self.current_solution.copy()
        self.best_value = self.current_value
        self.tabu_list.clear()
        self.iteration = 0
        self.history = [{
            'iteration': 0,
            'current_value': self.current_value,
            'best_value': self.best_value,
            'solution': self.current_solution.tolist(),
        }]

        while self.iteration < self.max_iterations:
            best_neighbor, best_neighbor_value = self._best_admissible_neighbor()

            if best_neighbor is None:
                logger.debug("All sampled neighbors tabu at iteration %d; stopping", self.iteration)
                break

            self.current_solution = best_neighbor
            self.current_value = best_neighbor_value
            self._add_to_tabu(best_neighbor)
            self.update_best(best_neighbor, best_neighbor_value)

            self.iteration += 1
            self.history.append({
                'iteration': self.iteration,
                'current_value': self.current_value,
                'best_value': self.best_value,
                'solution': self.current_solution.tolist(),
            })

        logger.debug("Tabu Search finished after %d iterations, best=%.6g",
                     self.iteration, self.best_value)
        return TabuSearchResult(
            best_solution=self.best_solution.copy(),
            best_objective_value=self.best_value,
            iterations_performed=self.iteration,
            history=self.history,
        )

    def run(self) -> TabuSearchResult:
        return self.search()
