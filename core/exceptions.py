"""
Exception taxonomy for the algorithm showcase.

Malformed input fails fast with one of these errors before any search
starts. Outcomes such as "no path" or "no non-tabu move" are normal
results and never raise.
"""


class ShowcaseError(Exception):
    """Base class for every error raised by the showcase core."""


class InvalidInputError(ShowcaseError, ValueError):
    """Input is malformed or violates a documented precondition."""


class TreeValidationError(InvalidInputError):
    """A user-supplied game tree is not well-formed."""

    def __init__(self, message: str, path: str = '$'):
        super().__init__(f"{message} at {path}")
        self.path = path


class GraphValidationError(InvalidInputError):
    """A search graph references unknown nodes or misses required fields."""


class PolynomialSyntaxError(InvalidInputError):
    """A polynomial expression could not be parsed."""

    def __init__(self, message: str, term: str = ''):
        if term:
            message = f"{message}: '{term}'"
        super().__init__(message)
        self.term = term


class ExpressionError(InvalidInputError):
    """A free-form objective expression uses unsupported syntax."""


class UnknownAlgorithmError(ShowcaseError, KeyError):
    """Requested algorithm, heuristic or strategy is not registered."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ''
