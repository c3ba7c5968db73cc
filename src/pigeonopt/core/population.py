
from __future__ import annotations
import math
from operator import attrgetter
from typing import Callable, Iterable, Iterator
import numpy as np

from .agent import Agent


class Population:
    """Ordered pigeons plus the run's global best.

    ``size`` is the configured size; Landmark rebuilds always restore it.
    ``global_best_cost`` only ever ratchets down.
    """
    def __init__(self, agents: Iterable[Agent], size: int | None = None):
        self.agents: list[Agent] = list(agents)
        self.size = len(self.agents) if size is None else size
        self.global_best_position: np.ndarray | None = None
        self.global_best_cost = math.inf

    def __len__(self) -> int:
        return len(self.agents)

    def __iter__(self) -> Iterator[Agent]:
        return iter(self.agents)

    def __getitem__(self, i: int) -> Agent:
        return self.agents[i]

    def best_agent(self) -> Agent:
        # min() keeps the first of equal costs
        return min(self.agents, key=attrgetter("cost"))

    def sort_by_cost_ascending(self) -> None:
        self.agents.sort(key=attrgetter("cost"))

    def select_elites(self, k: int | None = None) -> list[Agent]:
        k = self.size // 2 if k is None else k
        self.sort_by_cost_ascending()
        return self.agents[:k]

    def replenish(self, target_size: int, spawn: Callable[[], Agent], current: int | None = None) -> list[Agent]:
        """Fresh agents topping ``current`` (default: the present size) up to ``target_size``."""
        current = len(self.agents) if current is None else current
        return [spawn() for _ in range(target_size - current)]

    def update_global_best(self) -> bool:
        for a in self.agents:
            a.update_personal_best()
        best = min(self.agents, key=attrgetter("personal_best_cost"))
        if best.personal_best_cost < self.global_best_cost:
            self.global_best_position = best.personal_best_position.copy()
            self.global_best_cost = best.personal_best_cost
            return True
        return False

    def best_index(self) -> int | None:
        """Index of the first agent currently sitting on the global best, if any."""
        for i, a in enumerate(self.agents):
            if a.cost == self.global_best_cost and np.array_equal(a.position, self.global_best_position):
                return i
        return None

    def positions(self) -> np.ndarray:
        return np.array([a.position for a in self.agents])

    def costs(self) -> np.ndarray:
        return np.array([a.cost for a in self.agents])
