"""The bounded knapsack problem."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

import numpy as np

from .base import ElementSpec, Problem


@dataclass(frozen=True)
class KnapsackItem:
    cost: float
    worth: float
    amount: int = 1


DEFAULT_ITEMS: dict[str, KnapsackItem] = {
    "itemA": KnapsackItem(cost=12, worth=4),
    "itemB": KnapsackItem(cost=2, worth=2),
    "itemC": KnapsackItem(cost=1, worth=2),
    "itemD": KnapsackItem(cost=1, worth=1),
    "itemE": KnapsackItem(cost=4, worth=10),
}


class KnapsackProblem(Problem):
    """Select amounts of items maximizing total worth within a cost limit.

    There is one value per item (sorted by name), scaled to an amount from 0
    up to the item's available amount. Selections over the cost limit are
    evaluated with their worth negated.
    """

    title = "Knapsack problem"
    description = "Given a set of items with a cost and a worth, select a subset maximizing the worth sum but not exceeding a cost limit."

    def __init__(
        self,
        items: Mapping[str, KnapsackItem | Mapping[str, float]] | None = None,
        limit: float = 15,
        *,
        random: np.random.Generator | int | None = None,
    ) -> None:
        raw = DEFAULT_ITEMS if items is None else items
        self.items = {
            name: item if isinstance(item, KnapsackItem) else KnapsackItem(**item)
            for name, item in sorted(raw.items())
        }
        self.limit = float(limit)
        super().__init__(ElementSpec(len(self.items), 0.0, 1.0), objective=math.inf, random=random)

    def mapping(self, element) -> dict[str, int]:
        selection = {}
        for value, (name, item) in zip(element.values.tolist(), self.items.items()):
            selection[name] = min(int(value * (item.amount + 1)), item.amount)
        return selection

    def evaluation(self, element) -> float:
        worth = 0.0
        cost = 0.0
        for name, amount in self.mapping(element).items():
            item = self.items[name]
            worth += item.worth * amount
            cost += item.cost * amount
        return -worth if cost > self.limit else worth
