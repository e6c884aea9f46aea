"""
Default parameters for the configurable algorithms.

Each config is a plain dataclass so the Streamlit pages and the CLI share
one set of documented defaults.
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Mapping

from .exceptions import InvalidInputError


class _ConfigMixin:
    """from_dict/to_dict helpers shared by all configs."""

    @classmethod
    def from_dict(cls, mapping: Mapping[str, Any]):
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise InvalidInputError(
                f"Unknown {cls.__name__} option(s): {', '.join(unknown)}. "
                f"Available: {', '.join(sorted(known))}"
            )
        config = cls(**dict(mapping))
        config.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def validate(self) -> None:
        pass


@dataclass
class TabuSearchConfig(_ConfigMixin):
    """Tabu Search options."""
    max_iterations: int = 100
    tabu_list_size: int = 10
    neighborhood_size: int = 20
    neighbor_method: str = 'continuousRandomWalk'
    step: float = 0.1

    def validate(self) -> None:
        if self.max_iterations < 0:
            raise InvalidInputError("max_iterations must be >= 0")
        if self.tabu_list_size < 1:
            raise InvalidInputError("tabu_list_size must be >= 1")
        if self.neighborhood_size < 1:
            raise InvalidInputError("neighborhood_size must be >= 1")
        if self.step <= 0:
            raise InvalidInputError("step must be positive")


@dataclass
class GeneticAlgorithmConfig(_ConfigMixin):
    """Genetic Algorithm options."""
    population_size: int = 100
    chromosome_length: int = 16
    mutation_rate: float = 0.1
    generations: int = 50
    min_range: float = 0.0
    max_range: float = 10.0

    def validate(self) -> None:
        if self.population_size < 1:
            raise InvalidInputError("population_size must be >= 1")
        if self.chromosome_length < 1:
            raise InvalidInputError("chromosome_length must be >= 1")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise InvalidInputError("mutation_rate must lie in [0, 1]")
        if self.generations < 0:
            raise InvalidInputError("generations must be >= 0")
        if self.min_range > self.max_range:
            raise InvalidInputError("min_range must not exceed max_range")


@dataclass
class GridConfig(_ConfigMixin):
    """Random grid generation for the A* page."""
    rows: int = 10
    cols: int = 10
    wall_probability: float = 0.3

    def validate(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise InvalidInputError("Grid must have at least one row and one column")
        if not 0.0 <= self.wall_probability <= 1.0:
            raise InvalidInputError("wall_probability must lie in [0, 1]")


SHOWCASE_DEFAULTS = {
    'tabu_search': TabuSearchConfig(),
    'genetic_algorithm': GeneticAlgorithmConfig(),
    'grid': GridConfig(),
}
