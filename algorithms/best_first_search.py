"""
Greedy Best-First Search over a weighted graph.

The frontier is ordered by the heuristic of its head node only, so the
first path found is not guaranteed to be cheapest. The reported cost
accumulates ``edge cost + heuristic(neighbor)`` per hop on top of the
start node's heuristic; that total is what the page shows as
"total cost".
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from problems.graph import SearchGraph, validate_graph

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    path: List[str]
    total_cost: float
    expanded: List[str] = field(default_factory=list)


def best_first_search(search_graph: SearchGraph) -> Optional[SearchResult]:
    """
    Find a path from start to goal, expanding the lowest-heuristic node
    first and never revisiting a node.

    Returns:
        SearchResult, or None if the goal is unreachable

    Raises:
        GraphValidationError: If the graph fails validation
    """
    validate_graph(search_graph)

    connections = search_graph.graph
    heuristics = search_graph.heuristics
    start, goal = search_graph.start, search_graph.goal

    queue: List[Tuple[str, List[str], float]] = [(start, [start], heuristics[start])]
    visited = set()
    expanded: List[str] = []

    while queue:
        # Stable sort keeps insertion order among equal heuristics
        queue.sort(key=lambda entry: heuristics[entry[0]])
        node, path, cost = queue.pop(0)

        if node in visited:
            continue
        visited.add(node)
        expanded.append(node)

        if node == goal:
            logger.debug("Best-first reached %s via %s, cost %s", goal, path, cost)
            return SearchResult(path, cost, expanded)

        for edge in connections.get(node, []):
            if edge.node not in visited:
                queue.append((
                    edge.node,
                    path + [edge.node],
                    cost + edge.cost + heuristics[edge.node],
                ))

    logger.debug("Best-first exhausted the frontier without reaching %s", goal)
    return None
