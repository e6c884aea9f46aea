"""
Sandboxed arithmetic expressions for user-supplied objectives.

Free-form objective text (e.g. ``x * sin(x)`` or
``x[0] * Math.sin(x[0]) + x[1] * Math.cos(x[1])``) is parsed with ``ast``
and validated against a whitelist. Evaluation walks the validated tree
directly, so user text never reaches ``eval``/``exec``.
"""

import ast
import logging
import operator
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

import numpy as np

from core.exceptions import ExpressionError

logger = logging.getLogger(__name__)


SAFE_FUNCTIONS: Dict[str, Callable[..., Any]] = {
    'sin': np.sin,
    'cos': np.cos,
    'tan': np.tan,
    'asin': np.arcsin,
    'acos': np.arccos,
    'atan': np.arctan,
    'sinh': np.sinh,
    'cosh': np.cosh,
    'tanh': np.tanh,
    'exp': np.exp,
    'log': np.log,
    'log10': np.log10,
    'log2': np.log2,
    'sqrt': np.sqrt,
    'abs': np.abs,
    'floor': np.floor,
    'ceil': np.ceil,
    'round': np.round,
    'min': min,
    'max': max,
    'pow': np.power,
}

# (min, max) positional arguments; None means unbounded
_ARITY_OVERRIDES: Dict[str, Tuple[int, Optional[int]]] = {
    'min': (1, None),
    'max': (1, None),
    'round': (1, 2),
}


def function_arity(name: str) -> Tuple[int, Optional[int]]:
    """Accepted argument counts for a sandbox function; ufuncs report ``nin``."""
    if name in _ARITY_OVERRIDES:
        return _ARITY_OVERRIDES[name]
    nin = getattr(SAFE_FUNCTIONS[name], 'nin', 1)
    return nin, nin


SAFE_CONSTANTS: Dict[str, float] = {
    'pi': float(np.pi),
    'PI': float(np.pi),
    'e': float(np.e),
    'E': float(np.e),
}

_BINARY_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Pow: operator.pow,
    ast.Mod: operator.mod,
}

_UNARY_OPS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


class ExpressionValidator(ast.NodeVisitor):
    """
    Allow numeric constants, the declared variables, integer subscripts
    of those variables, arithmetic and calls to SAFE_FUNCTIONS.
    Everything else (attributes, lambdas, comprehensions, ...) is rejected.
    """

    ALLOWED = (
        ast.Expression,
        ast.BinOp,
        ast.UnaryOp,
        ast.Call,
        ast.Name,
        ast.Constant,
        ast.Subscript,
        ast.Load,
    ) + tuple(_BINARY_OPS) + tuple(_UNARY_OPS)

    def __init__(self, variables: Sequence[str]):
        self.variables = tuple(variables)

    def visit(self, node):
        if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitXor):
            raise ExpressionError("'^' is not a power operator here; use '**'")
        if not isinstance(node, self.ALLOWED):
            raise ExpressionError(f"Unsupported syntax: {type(node).__name__}")
        super().visit(node)

    def visit_Constant(self, node: ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise ExpressionError(f"Only numeric constants are allowed, got {node.value!r}")

    def visit_Name(self, node: ast.Name):
        if node.id.startswith('__'):
            raise ExpressionError(f"Forbidden name: {node.id}")
        if node.id not in self.variables and node.id not in SAFE_CONSTANTS:
            allowed = ', '.join(self.variables + tuple(sorted(SAFE_CONSTANTS)))
            raise ExpressionError(f"Unknown name '{node.id}' (allowed: {allowed})")

    def visit_Call(self, node: ast.Call):
        if not isinstance(node.func, ast.Name) or node.func.id not in SAFE_FUNCTIONS:
            raise ExpressionError("Only calls to math functions are allowed: "
                                  + ', '.join(sorted(SAFE_FUNCTIONS)))
        if node.keywords:
            raise ExpressionError("Keyword arguments are not supported")
        low, high = function_arity(node.func.id)
        count = len(node.args)
        if count < low or (high is not None and count > high):
            expected = str(low) if low == high else (
                f"at least {low}" if high is None else f"{low} to {high}")
            raise ExpressionError(
                f"{node.func.id}() takes {expected} argument(s), got {count}")
        for arg in node.args:
            self.visit(arg)

    def visit_Subscript(self, node: ast.Subscript):
        if not isinstance(node.value, ast.Name) or node.value.id not in self.variables:
            raise ExpressionError("Only variables can be indexed")
        index = node.slice
        if isinstance(index, ast.UnaryOp) and isinstance(index.op, ast.USub):
            index = index.operand
        if not (isinstance(index, ast.Constant) and type(index.value) is int):
            raise ExpressionError("Index must be an integer literal, e.g. x[0]")


class CompiledExpression:
    """A validated expression callable as ``expr(value)``."""

    def __init__(self, source: str, tree: ast.Expression, variables: Tuple[str, ...]):
        self.source = source
        self._tree = tree
        self.variables = variables

    def __call__(self, *args) -> float:
        if len(args) != len(self.variables):
            raise ExpressionError(
                f"Expression expects {len(self.variables)} argument(s), got {len(args)}"
            )
        env = dict(zip(self.variables, args))
        try:
            with np.errstate(all='ignore'):
                return float(self._eval(self._tree.body, env))
        except (TypeError, ValueError) as e:
            raise ExpressionError(
                f"Cannot evaluate '{self.source}' for the given input: {e}") from None

    def _eval(self, node: ast.AST, env: Dict[str, Any]) -> Any:
        if isinstance(node, ast.Constant):
            return np.float64(node.value)
        if isinstance(node, ast.Name):
            if node.id in env:
                return env[node.id]
            return np.float64(SAFE_CONSTANTS[node.id])
        if isinstance(node, ast.BinOp):
            left = self._eval(node.left, env)
            right = self._eval(node.right, env)
            return _BINARY_OPS[type(node.op)](left, right)
        if isinstance(node, ast.UnaryOp):
            return _UNARY_OPS[type(node.op)](self._eval(node.operand, env))
        if isinstance(node, ast.Call):
            func = SAFE_FUNCTIONS[node.func.id]
            return func(*[self._eval(arg, env) for arg in node.args])
        if isinstance(node, ast.Subscript):
            target = env[node.value.id]
            index = node.slice
            if isinstance(index, ast.UnaryOp):
                position = -index.operand.value
            else:
                position = index.value
            try:
                return np.float64(target[position])
            except (IndexError, TypeError):
                raise ExpressionError(
                    f"{node.value.id}[{position}] is out of range for the given solution"
                ) from None
        raise ExpressionError(f"Unsupported syntax: {type(node).__name__}")

    def __repr__(self) -> str:
        return f"CompiledExpression({self.source!r})"


def compile_expression(text: str, variables: Sequence[str] = ('x',)) -> CompiledExpression:
    """
    Parse and validate an arithmetic expression.

    JavaScript-style ``Math.`` prefixes are accepted and stripped.

    Args:
        text: Expression source
        variables: Names the expression may reference

    Returns:
        CompiledExpression callable with one positional argument per variable

    Raises:
        ExpressionError: If the text is empty, not parseable or unsafe
    """
    if text is None or not str(text).strip():
        raise ExpressionError("Expression is empty")

    source = str(text).strip().replace('Math.', '')
    try:
        tree = ast.parse(source, mode='eval')
    except SyntaxError as e:
        raise ExpressionError(f"Invalid expression syntax: {e.msg}") from None

    ExpressionValidator(variables).visit(tree)
    logger.debug("Compiled expression %r over %s", source, variables)
    return CompiledExpression(source, tree, tuple(variables))
