"""
objectives.py

Benchmark objective functions with their default search bounds and known minima.
The known minima are only used for display and testing, never by the optimizer.
"""
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping
import math
import numpy as np

from .errors import UnknownObjective


def sphere(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float)
    return float(np.dot(x, x))


def rastrigin(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float)
    return float(10.0 * x.size + np.sum(x**2 - 10.0 * np.cos(2 * np.pi * x)))


def rosenbrock(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float)
    return float(np.sum(100.0 * (x[1:] - x[:-1]**2)**2 + (1.0 - x[:-1])**2))


def ackley(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float)
    d = x.size
    a = -20.0 * math.exp(-0.2 * math.sqrt(float(np.dot(x, x)) / d))
    b = -math.exp(float(np.sum(np.cos(2 * np.pi * x))) / d)
    return a + b + 20.0 + math.e


@dataclass(frozen=True)
class ObjectiveFunction:
    name: str
    func: Callable[[np.ndarray], float]
    low: float
    high: float
    minimum_value: float = 0.0
    minimum_coord: float = 0.0
    min_dimensions: int = 1

    def __call__(self, x: np.ndarray) -> float:
        return self.func(np.asarray(x, dtype=float))

    def bounds(self, dim: int) -> np.ndarray:
        """Default (dim, 2) bounds array: one [low, high] row per dimension."""
        return np.tile([self.low, self.high], (dim, 1)).astype(float)

    def minimum_position(self, dim: int) -> np.ndarray:
        return np.full(dim, self.minimum_coord, dtype=float)


_REGISTRY: dict[str, ObjectiveFunction] = {
    f.name: f for f in (
        ObjectiveFunction("sphere", sphere, -100.0, 100.0),
        ObjectiveFunction("rastrigin", rastrigin, -5.12, 5.12),
        ObjectiveFunction("rosenbrock", rosenbrock, -5.0, 10.0, minimum_coord=1.0, min_dimensions=2),
        ObjectiveFunction("ackley", ackley, -32.768, 32.768),
    )
}
REGISTRY: Mapping[str, ObjectiveFunction] = MappingProxyType(_REGISTRY)


def names() -> tuple[str, ...]:
    return tuple(REGISTRY)


def get(name: str) -> ObjectiveFunction:
    try:
        return REGISTRY[name]
    except (KeyError, TypeError):
        raise UnknownObjective(name, names()) from None
