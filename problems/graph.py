"""
Weighted directed graph with per-node heuristics, for Best-First Search.
"""

from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, List, Mapping

from core.exceptions import GraphValidationError


@dataclass(frozen=True)
class GraphEdge:
    node: str
    cost: float


@dataclass
class SearchGraph:
    """Adjacency lists, heuristic table and the start/goal pair."""
    graph: Dict[str, List[GraphEdge]] = field(default_factory=dict)
    heuristics: Dict[str, float] = field(default_factory=dict)
    start: str = ''
    goal: str = ''

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SearchGraph':
        """
        Build a graph from parsed JSON of the form
        ``{"graph": {"A": [{"node": "B", "cost": 1}]}, "heuristics": {...},
        "start": "A", "goal": "H"}``.

        Only the shape is checked here; call validate_graph for the
        cross-reference checks.
        """
        if not isinstance(data, Mapping):
            raise GraphValidationError("Graph input must be a JSON object")

        missing = [k for k in ('graph', 'heuristics', 'start', 'goal') if not data.get(k)]
        if missing:
            raise GraphValidationError(f"Missing required field(s): {', '.join(missing)}")

        raw_graph = data['graph']
        if not isinstance(raw_graph, Mapping):
            raise GraphValidationError("'graph' must map node names to edge lists")

        graph: Dict[str, List[GraphEdge]] = {}
        for node, edges in raw_graph.items():
            if not isinstance(edges, list):
                raise GraphValidationError(f"Edges of '{node}' must be a list")
            parsed = []
            for i, edge in enumerate(edges):
                if not isinstance(edge, Mapping) or 'node' not in edge or 'cost' not in edge:
                    raise GraphValidationError(
                        f"Edge {i} of '{node}' must have 'node' and 'cost'")
                cost = edge['cost']
                if isinstance(cost, bool) or not isinstance(cost, Real):
                    raise GraphValidationError(
                        f"Edge {node}->{edge['node']} has non-numeric cost {cost!r}")
                parsed.append(GraphEdge(str(edge['node']), float(cost)))
            graph[str(node)] = parsed

        raw_heuristics = data['heuristics']
        if not isinstance(raw_heuristics, Mapping):
            raise GraphValidationError("'heuristics' must map node names to numbers")
        heuristics = {}
        for node, value in raw_heuristics.items():
            if isinstance(value, bool) or not isinstance(value, Real):
                raise GraphValidationError(f"Heuristic of '{node}' must be a number")
            heuristics[str(node)] = float(value)

        return cls(graph, heuristics, str(data['start']), str(data['goal']))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'graph': {
                node: [{'node': e.node, 'cost': e.cost} for e in edges]
                for node, edges in self.graph.items()
            },
            'heuristics': dict(self.heuristics),
            'start': self.start,
            'goal': self.goal,
        }

    def edges(self):
        """Iterate (source, target, cost) triples."""
        for source, edges in self.graph.items():
            for edge in edges:
                yield source, edge.node, edge.cost


def validate_graph(search_graph: SearchGraph) -> None:
    """
    Check that a graph is searchable.

    Raises:
        GraphValidationError: Missing start/goal, dangling edge target or
            node without a heuristic value
    """
    graph = search_graph.graph
    if not graph:
        raise GraphValidationError("Graph has no nodes")
    if not search_graph.start or not search_graph.goal:
        raise GraphValidationError("Start and goal must be given")
    if search_graph.start not in graph:
        raise GraphValidationError(f"Start node '{search_graph.start}' is not in the graph")
    if search_graph.goal not in graph:
        raise GraphValidationError(f"Goal node '{search_graph.goal}' is not in the graph")

    for source, target, _ in search_graph.edges():
        if target not in graph:
            raise GraphValidationError(
                f"Edge {source}->{target} points to unknown node '{target}'")

    missing = [node for node in graph if node not in search_graph.heuristics]
    if missing:
        raise GraphValidationError(f"No heuristic value for node(s): {', '.join(missing)}")


def create_sample_graph() -> SearchGraph:
    """The A..H sample graph shown on the Best-First Search page."""
    return SearchGraph.from_dict({
        'graph': {
            'A': [{'node': 'B', 'cost': 1}, {'node': 'C', 'cost': 2}],
            'B': [{'node': 'D', 'cost': 4}, {'node': 'E', 'cost': 1}],
            'C': [{'node': 'F', 'cost': 5}, {'node': 'G', 'cost': 6}],
            'D': [],
            'E': [{'node': 'H', 'cost': 2}],
            'F': [],
            'G': [],
            'H': [],
        },
        'heuristics': {'A': 7, 'B': 6, 'C': 4, 'D': 3, 'E': 2, 'F': 6, 'G': 5, 'H': 0},
        'start': 'A',
        'goal': 'H',
    })
