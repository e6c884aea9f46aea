"""
0/1 knapsack instance for the Branch-and-Bound solver.
"""

from dataclasses import dataclass
from typing import List, Sequence

from core.exceptions import InvalidInputError


@dataclass(frozen=True)
class Item:
    weight: float
    value: float

    @property
    def ratio(self) -> float:
        """Value per unit of weight; weightless items rank first."""
        if self.weight == 0:
            return float('inf')
        return self.value / self.weight


@dataclass(frozen=True)
class KnapsackInstance:
    items: Sequence[Item]
    capacity: float

    def __post_init__(self):
        if self.capacity < 0:
            raise InvalidInputError(f"Capacity must be >= 0, got {self.capacity}")
        for i, item in enumerate(self.items):
            if item.weight < 0 or item.value < 0:
                raise InvalidInputError(
                    f"Item {i} has negative weight or value: {item}")

    @property
    def total_weight(self) -> float:
        return sum(item.weight for item in self.items)


def make_items(pairs: Sequence[Sequence[float]]) -> List[Item]:
    """Build items from (weight, value) pairs."""
    items = []
    for i, pair in enumerate(pairs):
        if len(pair) != 2:
            raise InvalidInputError(f"Item {i} must be a (weight, value) pair, got {pair!r}")
        items.append(Item(float(pair[0]), float(pair[1])))
    return items


def create_sample_items() -> List[Item]:
    return make_items([(10, 60), (20, 100), (30, 120)])
