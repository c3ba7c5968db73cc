
from __future__ import annotations
import math
from typing import Callable
import numpy as np

from .errors import NumericInstability

INITIAL_VELOCITY = 3.0
MAX_VELOCITY = 10.0
BOUNCE = -0.8


class Agent:
    """One pigeon: a candidate position with its velocity, cost and personal best.

    ``cost`` always matches ``position``: every method that moves the agent
    re-evaluates the objective before returning.
    """
    __slots__ = ("fitness_fn", "lb", "ub", "position", "velocity", "cost",
                 "personal_best_position", "personal_best_cost")

    def __init__(self, fitness_fn: Callable[[np.ndarray], float], bounds: np.ndarray):
        self.fitness_fn = fitness_fn
        self.lb, self.ub = bounds[:, 0], bounds[:, 1]
        self.position = self.lb.copy()
        self.velocity = np.zeros(self.lb.size)
        self.cost = math.inf
        self.personal_best_position, self.personal_best_cost = self.position.copy(), math.inf

    @property
    def dim(self) -> int:
        return self.lb.size

    def evaluate(self, x: np.ndarray | None = None) -> float:
        x = self.position if x is None else x
        cost = float(self.fitness_fn(x))
        if not math.isfinite(cost):
            raise NumericInstability(cost, x)
        return cost

    def initialize(self, rng: np.random.Generator, initial_velocity: float = INITIAL_VELOCITY) -> "Agent":
        position = self.lb + (self.ub - self.lb) * rng.random(self.dim)
        self.velocity = rng.uniform(-initial_velocity, initial_velocity, self.dim)
        self.cost, self.position = self.evaluate(position), position
        self.personal_best_position, self.personal_best_cost = position.copy(), self.cost
        return self

    def update_personal_best(self) -> bool:
        if self.cost < self.personal_best_cost:
            self.personal_best_position, self.personal_best_cost = self.position.copy(), self.cost
            return True
        return False

    def update_velocity(self, target: np.ndarray, inertia: float, weight: float,
                        rng: np.random.Generator, max_velocity: float = MAX_VELOCITY) -> None:
        # one draw per dimension
        r = rng.random(self.dim)
        v = inertia * self.velocity + weight * r * (target - self.position)
        self.velocity = np.clip(v, -max_velocity, max_velocity)

    def move(self, bounce: float = BOUNCE) -> None:
        x = self.position + self.velocity
        out = (x < self.lb) | (x > self.ub)
        x = np.clip(x, self.lb, self.ub)
        cost = self.evaluate(x)
        self.velocity = np.where(out, self.velocity * bounce, self.velocity)
        self.position, self.cost = x, cost

    def __repr__(self) -> str:
        return f"Agent(position={self.position.tolist()!r}, cost={self.cost:.6g})"
