"""
Core module for the algorithm showcase.

Contains the shared plumbing:
- exceptions: error taxonomy raised on malformed input
- config: documented default parameters per algorithm
- runner: algorithm registry used by the app and the CLI
  (import ``core.runner`` explicitly; it depends on every algorithm)
"""

from .exceptions import (
    ShowcaseError,
    InvalidInputError,
    TreeValidationError,
    GraphValidationError,
    PolynomialSyntaxError,
    ExpressionError,
    UnknownAlgorithmError,
)
from .config import (
    TabuSearchConfig,
    GeneticAlgorithmConfig,
    GridConfig,
    SHOWCASE_DEFAULTS,
)

__all__ = [
    'ShowcaseError',
    'InvalidInputError',
    'TreeValidationError',
    'GraphValidationError',
    'PolynomialSyntaxError',
    'ExpressionError',
    'UnknownAlgorithmError',
    'TabuSearchConfig',
    'GeneticAlgorithmConfig',
    'GridConfig',
    'SHOWCASE_DEFAULTS',
]
