"""
Genetic Algorithm (GA) for maximizing a scalar function.

A population-based evolutionary algorithm over fixed-length binary
chromosomes that uses:
- Selection (tournament of 3)
- Crossover (single point)
- Mutation (independent bit flips)

Good for: Exploration, escaping local optima, diverse search
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from core.exceptions import InvalidInputError
from problems.base_problem import BaseProblem
from .base_algorithm import BaseAlgorithm

logger = logging.getLogger(__name__)


@dataclass
class GAResult:
    best_chromosome: List[int]
    best_fitness: float
    best_solution: float
    history: List[Dict[str, Any]] = field(default_factory=list)


class GeneticAlgorithm(BaseAlgorithm):
    """
    Genetic Algorithm with binary encoding.

    A chromosome of length L decodes linearly onto [min_range, max_range]:
    ``min + int(bits) / (2**L - 1) * (max - min)``.
    """

    TOURNAMENT_SIZE = 3

    def __init__(
        self,
        problem: BaseProblem,
        population_size: int = 100,
        chromosome_length: int = 16,
        mutation_rate: float = 0.1,
        generations: int = 50,
        min_range: float = 0.0,
        max_range: float = 10.0,
        seed: Optional[int] = None
    ):
        """
        Initialize Genetic Algorithm.

        Args:
            problem: Fitness function of the decoded value
            population_size: Number of individuals in population
            chromosome_length: Bits per chromosome
            mutation_rate: Per-bit flip probability
            generations: Number of generations to run
            min_range: Decoded value of the all-zero chromosome
            max_range: Decoded value of the all-one chromosome
            seed: Random seed for reproducibility
        """
        super().__init__(problem, 'GA', seed)

        if population_size < 1:
            raise InvalidInputError("population_size must be >= 1")
        if chromosome_length < 1:
            raise InvalidInputError("chromosome_length must be >= 1")
        if not 0.0 <= mutation_rate <= 1.0:
            raise InvalidInputError("mutation_rate must lie in [0, 1]")
        if generations < 0:
            raise InvalidInputError("generations must be >= 0")
        if min_range > max_range:
            raise InvalidInputError("min_range must not exceed max_range")

        self.population_size = population_size
        self.chromosome_length = chromosome_length
        self.mutation_rate = mutation_rate
        self.generations = generations
        self.min_range = min_range
        self.max_range = max_range

        # Population state
        self.population: List[np.ndarray] = []
        self.generation = 0
        self.best_chromosome: Optional[np.ndarray] = None
        self.history: List[Dict[str, Any]] = []

    def decode(self, chromosome: np.ndarray) -> float:
        """Decode binary chromosome to a real number in the configured range."""
        decimal = int(''.join(str(int(bit)) for bit in chromosome), 2)
        scale = 2 ** self.chromosome_length - 1
        return self.min_range + (decimal / scale) * (self.max_range - self.min_range)

    def fitness(self, chromosome: np.ndarray) -> float:
        return self.evaluate(self.decode(chromosome))

    def _initialize_population(self) -> List[np.ndarray]:
        return [
            self.rng.integers(0, 2, size=self.chromosome_length, dtype=np.int8)
            for _ in range(self.population_size)
        ]

    def _tournament_selection(self, population: List[np.ndarray]) -> List[np.ndarray]:
        """Fill a mating pool with winners of 3-way tournaments."""
        selected = []
        for _ in range(self.population_size):
            picks = self.rng.integers(len(population), size=self.TOURNAMENT_SIZE)
            winner = population[picks[0]]
            for idx in picks[1:]:
                contender = population[idx]
                if self.fitness(contender) > self.fitness(winner):
                    winner = contender
            selected.append(winner.copy())
        return selected

    def _crossover(self, parent1: np.ndarray, parent2: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Single-point crossover at a random locus in [0, L)."""
        point = int(self.rng.integers(self.chromosome_length))
        child1 = np.concatenate([parent1[:point], parent2[point:]])
        child2 = np.concatenate([parent2[:point], parent1[point:]])
        return child1, child2

    def _mutate(self, chromosome: np.ndarray) -> np.ndarray:
        """Flip each bit independently with probability mutation_rate."""
        flips = self.rng.random(self.chromosome_length) < self.mutation_rate
        return np.where(flips, 1 - chromosome, chromosome).astype(np.int8)

    def _record_generation(self, population: List[np.ndarray]) -> None:
        fitnesses = [self.fitness(c) for c in population]
        best_idx = int(np.argmax(fitnesses))
        generation_best = fitnesses[best_idx]

        if self.update_best(self.decode(population[best_idx]), generation_best):
            self.best_chromosome = population[best_idx].copy()

        self.history.append({
            'generation': self.generation,
            'generation_best': generation_best,
            'generation_mean': float(np.mean(fitnesses)),
            'best_fitness': self.best_value,
        })

    def evolve(self) -> GAResult:
        """
        Run the configured number of generations.

        Returns:
            GAResult with the best chromosome ever observed
        """
        self.best_solution = None
        self.best_value = float('-inf')
        self.best_chromosome = None
        self.history = []

        population = self._initialize_population()

        for generation in range(self.generations):
            self.generation = generation
            self._record_generation(population)

            selected = self._tournament_selection(population)

            next_population: List[np.ndarray] = []
            while len(next_population) < self.population_size:
                parent1 = selected[self.rng.integers(len(selected))]
                parent2 = selected[self.rng.integers(len(selected))]
                for child in self._crossover(parent1, parent2):
                    next_population.append(self._mutate(child))

            population = next_population[:self.population_size]

        self.population = population
        logger.debug("GA finished %d generations, best fitness=%.6g",
                     self.generations, self.best_value)

        if self.best_chromosome is None:
            # No generation evaluated
            return GAResult([], float('-inf'), 0.0, self.history)

        return GAResult(
            best_chromosome=[int(b) for b in self.best_chromosome],
            best_fitness=self.best_value,
            best_solution=float(self.best_solution),
            history=self.history,
        )

    def run(self) -> GAResult:
        return self.evolve()
