"""
Branch-and-Bound solver for the 0/1 knapsack problem.

Exhaustive include/exclude search, pruned with the fractional knapsack
relaxation of the items not yet decided.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from problems.knapsack import Item, KnapsackInstance

logger = logging.getLogger(__name__)


@dataclass
class KnapsackResult:
    max_value: float
    selected_items: List[Item]
    selected_indices: List[int]
    nodes_explored: int = 0
    nodes_pruned: int = 0

    @property
    def total_weight(self) -> float:
        return sum(item.weight for item in self.selected_items)


class BranchAndBoundSolver:
    """
    Depth-first Branch-and-Bound.

    At each item the exclude branch is explored before the include
    branch; with strict improvement on ties this makes the selection
    deterministic.
    """

    def __init__(self, items: Sequence[Item], capacity: float):
        self.instance = KnapsackInstance(tuple(items), capacity)
        self.items = self.instance.items
        self.capacity = capacity

        self.best_value = 0.0
        self.best_selection: Tuple[bool, ...] = (False,) * len(self.items)
        self.nodes_explored = 0
        self.nodes_pruned = 0

    def upper_bound(self, index: int, current_weight: float, current_value: float) -> float:
        """
        Fractional knapsack bound over items[index:].

        Remaining items are taken whole in value/weight order while they
        fit; the first one that does not fit contributes a fraction.
        """
        remaining_capacity = self.capacity - current_weight
        bound = current_value

        remaining = sorted(self.items[index:], key=lambda item: item.ratio, reverse=True)
        for item in remaining:
            if item.weight <= remaining_capacity:
                bound += item.value
                remaining_capacity -= item.weight
            else:
                bound += item.ratio * remaining_capacity
                break

        return bound

    def _explore(
        self,
        index: int,
        current_weight: float,
        current_value: float,
        selection: Tuple[bool, ...]
    ) -> None:
        self.nodes_explored += 1

        if index == len(self.items):
            if current_value > self.best_value:
                self.best_value = current_value
                self.best_selection = selection
            return

        if self.upper_bound(index, current_weight, current_value) <= self.best_value:
            self.nodes_pruned += 1
            return

        item = self.items[index]

        self._explore(index + 1, current_weight, current_value, selection + (False,))

        if current_weight + item.weight <= self.capacity:
            self._explore(
                index + 1,
                current_weight + item.weight,
                current_value + item.value,
                selection + (True,),
            )

    def solve(self) -> KnapsackResult:
        """Run the search and collect the best selection in original order."""
        self.best_value = 0.0
        self.best_selection = (False,) * len(self.items)
        self.nodes_explored = 0
        self.nodes_pruned = 0

        self._explore(0, 0.0, 0.0, ())

        indices = [i for i, taken in enumerate(self.best_selection) if taken]
        logger.debug("Branch-and-bound: value=%s explored=%d pruned=%d",
                     self.best_value, self.nodes_explored, self.nodes_pruned)
        return KnapsackResult(
            max_value=self.best_value,
            selected_items=[self.items[i] for i in indices],
            selected_indices=indices,
            nodes_explored=self.nodes_explored,
            nodes_pruned=self.nodes_pruned,
        )


def solve_knapsack(items: Sequence[Item], capacity: float) -> KnapsackResult:
    return BranchAndBoundSolver(items, capacity).solve()
