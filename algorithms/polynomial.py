"""
Polynomial manipulation in one variable.

A polynomial is a list of coefficients indexed by exponent
(``p[0]`` is the constant term). Every operation returns a list with
trailing zeros trimmed, so the zero polynomial is ``[]``.
"""

import re
from typing import List, Sequence, Union

import numpy as np

from core.exceptions import PolynomialSyntaxError

Number = Union[int, float]
Polynomial = List[Number]

_TERM = re.compile(
    r'^(?P<sign>[+-]?)'
    r'(?P<coeff>\d+(?:\.\d*)?|\.\d+)?'
    r'(?:\*?(?P<var>x)(?:\^(?P<exp>\d+))?)?$'
)


def trim(p: Sequence[Number]) -> Polynomial:
    """Drop trailing zero coefficients."""
    result = list(p)
    while result and result[-1] == 0:
        result.pop()
    return result


def _to_number(text: str) -> Number:
    return float(text) if '.' in text else int(text)


def parse_polynomial(text: str) -> Polynomial:
    """
    Parse expressions such as ``3x^2 - x + 5``.

    Terms are separated by explicit ``+``/``-`` signs; each term is an
    optional coefficient followed by an optional ``x`` or ``x^n``.
    Like terms are summed.

    Raises:
        PolynomialSyntaxError: On empty input or a malformed term
    """
    if text is None:
        raise PolynomialSyntaxError("Polynomial is empty")
    compact = re.sub(r'\s+', '', str(text)).lower()
    if not compact:
        raise PolynomialSyntaxError("Polynomial is empty")

    terms = [t for t in re.split(r'(?=[+-])', compact) if t]
    polynomial: Polynomial = []

    for term in terms:
        match = _TERM.match(term)
        if not match or not (match.group('coeff') or match.group('var')):
            raise PolynomialSyntaxError("Malformed term", term)

        coeff_text = match.group('coeff')
        coefficient = _to_number(coeff_text) if coeff_text else 1
        if match.group('sign') == '-':
            coefficient = -coefficient

        if match.group('var'):
            exponent = int(match.group('exp')) if match.group('exp') else 1
        else:
            exponent = 0

        while len(polynomial) <= exponent:
            polynomial.append(0)
        polynomial[exponent] += coefficient

    return trim(polynomial)


def add_polynomials(p1: Sequence[Number], p2: Sequence[Number]) -> Polynomial:
    length = max(len(p1), len(p2))
    return trim([
        (p1[i] if i < len(p1) else 0) + (p2[i] if i < len(p2) else 0)
        for i in range(length)
    ])


def subtract_polynomials(p1: Sequence[Number], p2: Sequence[Number]) -> Polynomial:
    return add_polynomials(p1, [-c for c in p2])


def multiply_polynomials(p1: Sequence[Number], p2: Sequence[Number]) -> Polynomial:
    """Convolution of the coefficient lists."""
    if not p1 or not p2:
        return []
    result: Polynomial = [0] * (len(p1) + len(p2) - 1)
    for i, a in enumerate(p1):
        for j, b in enumerate(p2):
            result[i + j] += a * b
    return trim(result)


def evaluate_polynomial(p: Sequence[Number], x: Number) -> Number:
    """Horner evaluation."""
    result = 0
    for coefficient in reversed(p):
        result = result * x + coefficient
    return result


def derivative(p: Sequence[Number]) -> Polynomial:
    return trim([i * p[i] for i in range(1, len(p))])


def _format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, float):
        # Positional digits only; the term grammar has no exponent form
        return np.format_float_positional(value, trim='-')
    return str(value)


def polynomial_to_string(p: Sequence[Number]) -> str:
    """
    Format with descending exponents, e.g. ``[5, -1, 3] -> "3x^2-x+5"``.

    Zero terms are omitted, coefficients of +-1 are implied on x terms
    and the zero polynomial prints as ``"0"``.
    """
    terms: List[str] = []
    for exponent in range(len(p) - 1, -1, -1):
        coefficient = p[exponent]
        if coefficient == 0:
            continue

        term = ''
        if coefficient > 0 and terms:
            term += '+'
        if coefficient == -1 and exponent > 0:
            term += '-'
        elif coefficient != 1 or exponent == 0:
            term += _format_number(coefficient)

        if exponent > 0:
            term += 'x'
            if exponent > 1:
                term += f'^{exponent}'

        terms.append(term)

    return ''.join(terms) if terms else '0'
