"""A* pathfinding on a 4-connected grid with unit step cost.

Search nodes live in a flat arena list; each record points to its
predecessor by index, so path reconstruction is a walk over integers.
"""

import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple, Union

from core.exceptions import InvalidInputError, UnknownAlgorithmError
from problems.grid import Coordinate, Grid

logger = logging.getLogger(__name__)

# Down, up, right, left
DIRECTIONS = ((0, 1), (0, -1), (1, 0), (-1, 0))


class Heuristic(ABC):
    """Estimate of the remaining cost from a cell to the goal."""

    name = 'base'

    @abstractmethod
    def __call__(self, position: Coordinate, goal: Coordinate) -> float:
        pass


class ManhattanHeuristic(Heuristic):
    """Admissible for 4-directional unit-cost moves."""

    name = 'manhattan'

    def __call__(self, position, goal):
        return abs(position[0] - goal[0]) + abs(position[1] - goal[1])


class ZeroHeuristic(Heuristic):
    """h = 0 turns A* into uniform-cost search."""

    name = 'zero'

    def __call__(self, position, goal):
        return 0


HEURISTICS = {
    'manhattan': ManhattanHeuristic,
    'zero': ZeroHeuristic,
}


def get_heuristic(name: str) -> Heuristic:
    if name not in HEURISTICS:
        available = ", ".join(HEURISTICS)
        raise UnknownAlgorithmError(f"Unknown heuristic: {name}. Available: {available}")
    return HEURISTICS[name]()


@dataclass
class AStarNode:
    """Arena record: one (position, g) discovery."""
    x: int
    y: int
    g: int
    h: float
    parent: Optional[int] = None

    @property
    def f(self) -> float:
        return self.g + self.h

    @property
    def position(self) -> Coordinate:
        return (self.x, self.y)


@dataclass
class PathResult:
    path: List[Coordinate] = field(default_factory=list)
    explored: List[Coordinate] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def cost(self) -> int:
        """Number of moves along the path, -1 when unreachable."""
        return len(self.path) - 1 if self.path else -1


def _reconstruct(arena: List[AStarNode], index: int) -> List[Coordinate]:
    path = []
    current: Optional[int] = index
    while current is not None:
        node = arena[current]
        path.append(node.position)
        current = node.parent
    path.reverse()
    return path


def astar(
    grid: Grid,
    start: Coordinate,
    goal: Coordinate,
    heuristic: Union[str, Heuristic, None] = None
) -> PathResult:
    """
    Find the cheapest 4-directional path from start to goal.

    Args:
        grid: Walkable/blocked cells
        start: (x, y) start position
        goal: (x, y) goal position
        heuristic: Strategy or registry name; Manhattan by default

    Returns:
        PathResult with the path (start to goal inclusive, empty when
        unreachable) and the cells expanded in pop order
    """
    for label, (x, y) in (('start', start), ('goal', goal)):
        if not grid.in_bounds(x, y):
            raise InvalidInputError(
                f"{label.capitalize()} {(x, y)} is outside the {grid.cols}x{grid.rows} grid")

    if heuristic is None:
        heuristic = ManhattanHeuristic()
    elif isinstance(heuristic, str):
        heuristic = get_heuristic(heuristic)

    start, goal = tuple(start), tuple(goal)
    explored: List[Coordinate] = []
    if grid.is_wall(*start) or grid.is_wall(*goal):
        return PathResult([], explored)

    arena: List[AStarNode] = [AStarNode(start[0], start[1], 0, heuristic(start, goal))]
    best_g: Dict[Coordinate, int] = {start: 0}
    closed: Set[Coordinate] = set()
    counter = itertools.count()
    frontier: List[Tuple[float, int, int]] = [(arena[0].f, next(counter), 0)]

    while frontier:
        _, _, index = heapq.heappop(frontier)
        current = arena[index]
        position = current.position

        # Stale entry superseded by a cheaper discovery
        if position in closed:
            continue

        if position == goal:
            path = _reconstruct(arena, index)
            logger.debug("A* reached goal: path length %d, expanded %d", len(path), len(explored))
            return PathResult(path, explored)

        closed.add(position)
        explored.append(position)

        for dx, dy in DIRECTIONS:
            nx, ny = current.x + dx, current.y + dy
            neighbor = (nx, ny)
            if not grid.in_bounds(nx, ny) or grid.is_wall(nx, ny) or neighbor in closed:
                continue

            tentative_g = current.g + 1
            if tentative_g < best_g.get(neighbor, float('inf')):
                best_g[neighbor] = tentative_g
                arena.append(AStarNode(nx, ny, tentative_g, heuristic(neighbor, goal), index))
                heapq.heappush(frontier, (arena[-1].f, next(counter), len(arena) - 1))

    logger.debug("A* found no path after expanding %d cells", len(explored))
    return PathResult([], explored)
