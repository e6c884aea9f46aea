"""
Text-input parsers for the showcase pages.

Turns the free text typed into forms (JSON trees and graphs, item lists,
comma-separated vectors) into validated problem instances. Every parser
fails with an InvalidInputError subclass before any algorithm runs.
"""

import json
import re
from pathlib import Path
from typing import Any, List, Union

import numpy as np

from core.exceptions import GraphValidationError, InvalidInputError, TreeValidationError
from problems.game_tree import TreeNode
from problems.graph import SearchGraph, validate_graph
from problems.grid import Coordinate, Grid
from problems.knapsack import Item, make_items


def _load_json(text: str, what: str, error_cls) -> Any:
    if text is None or not str(text).strip():
        raise error_cls(f"{what} input is empty")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise error_cls(f"Invalid {what} JSON: {e.msg} (line {e.lineno}, column {e.colno})") from None


def parse_tree_input(text: str) -> TreeNode:
    """
    Parse a JSON game tree such as
    ``{"children": [{"value": 3}, {"children": [{"value": 5}]}]}``.

    Raises:
        TreeValidationError: Bad JSON or malformed node
    """
    data = _load_json(text, 'tree', TreeValidationError)
    return TreeNode.from_dict(data)


def parse_graph(text: str) -> SearchGraph:
    """
    Parse and validate a Best-First Search graph from JSON.

    Raises:
        GraphValidationError: Bad JSON, missing fields or dangling edges
    """
    data = _load_json(text, 'graph', GraphValidationError)
    graph = SearchGraph.from_dict(data)
    validate_graph(graph)
    return graph


def parse_items(text: str) -> List[Item]:
    """
    Parse knapsack items, either JSON
    (``[{"weight": 10, "value": 60}, ...]`` or ``[[10, 60], ...]``) or
    one ``weight,value`` pair per line.
    """
    if text is None or not str(text).strip():
        return []
    stripped = str(text).strip()

    if stripped.startswith('['):
        data = _load_json(stripped, 'items', InvalidInputError)
        if not isinstance(data, list):
            raise InvalidInputError("Items JSON must be a list")
        pairs = []
        for i, entry in enumerate(data):
            if isinstance(entry, dict):
                if 'weight' not in entry or 'value' not in entry:
                    raise InvalidInputError(f"Item {i} needs 'weight' and 'value'")
                pairs.append((entry['weight'], entry['value']))
            elif isinstance(entry, (list, tuple)):
                pairs.append(tuple(entry))
            else:
                raise InvalidInputError(f"Item {i} must be an object or a pair")
        return make_items(_as_numbers(pairs))

    pairs = []
    for lineno, line in enumerate(stripped.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        parts = [p for p in re.split(r'[,\s;]+', line) if p]
        if len(parts) != 2:
            raise InvalidInputError(f"Line {lineno}: expected 'weight,value', got {line!r}")
        pairs.append(parts)
    return make_items(_as_numbers(pairs))


def _as_numbers(pairs) -> List[List[float]]:
    result = []
    for i, pair in enumerate(pairs):
        try:
            result.append([float(v) for v in pair])
        except (TypeError, ValueError):
            raise InvalidInputError(f"Item {i} has non-numeric fields: {pair!r}") from None
    return result


def parse_vector(text: str) -> np.ndarray:
    """Parse a comma/space separated vector such as ``"0, 0"``."""
    if text is None or not str(text).strip():
        raise InvalidInputError("Vector is empty")
    parts = [p for p in re.split(r'[,\s]+', str(text).strip().strip('[]')) if p]
    try:
        return np.array([float(p) for p in parts], dtype=np.float64)
    except ValueError:
        raise InvalidInputError(f"Vector must contain numbers only: {text!r}") from None


def parse_dimensions(text: str) -> List[int]:
    """Parse matrix-chain dimensions such as ``"10, 30, 5, 60"``."""
    values = parse_vector(text)
    if not np.all(values == np.round(values)):
        raise InvalidInputError("Matrix dimensions must be integers")
    return [int(v) for v in values]


def parse_coordinate(text: str) -> Coordinate:
    """Parse ``"x, y"`` into an integer coordinate."""
    values = parse_dimensions(text)
    if len(values) != 2:
        raise InvalidInputError(f"Coordinate must have two components, got {text!r}")
    return values[0], values[1]


def parse_grid(text: str) -> Grid:
    """
    Parse a text maze: one row per line, ``#`` for a wall and ``.`` for
    an open cell.
    """
    lines = [line.strip() for line in str(text or '').splitlines() if line.strip()]
    if not lines:
        raise InvalidInputError("Grid input is empty")

    walls = []
    for y, line in enumerate(lines):
        if len(line) != len(lines[0]):
            raise InvalidInputError(
                f"Grid row {y} has {len(line)} cells, expected {len(lines[0])}")
        for x, char in enumerate(line):
            if char == '#':
                walls.append((x, y))
            elif char != '.':
                raise InvalidInputError(f"Unexpected grid character {char!r} at ({x}, {y})")
    return Grid.from_walls(len(lines), len(lines[0]), walls)


def load_text(path: Union[str, Path]) -> str:
    """Read an input file for the CLI."""
    path = Path(path)
    if not path.is_file():
        raise InvalidInputError(f"Input file not found: {path}")
    return path.read_text(encoding='utf-8')
