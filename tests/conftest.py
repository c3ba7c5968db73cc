from __future__ import annotations

import numpy as np
import pytest

from pigeonopt.algorithms.pio import PIOEngine
from pigeonopt.core import objectives
from pigeonopt.core.agent import Agent
from pigeonopt.core.rng import make_rng


@pytest.fixture
def rng():
    return make_rng(7)


@pytest.fixture
def sphere_bounds():
    return np.array([[-10.0, 10.0], [-10.0, 10.0]])


@pytest.fixture
def make_agent(rng, sphere_bounds):
    def _make(position=None, velocity=None, bounds=None, fn=objectives.sphere):
        a = Agent(fn, sphere_bounds if bounds is None else bounds).initialize(rng)
        if position is not None:
            a.position = np.array(position, dtype=float)
            a.cost = a.evaluate()
            a.personal_best_position, a.personal_best_cost = a.position.copy(), a.cost
        if velocity is not None:
            a.velocity = np.array(velocity, dtype=float)
        return a
    return _make


@pytest.fixture
def engine():
    e = PIOEngine(make_rng(2024))
    e.configure(population_size=20, max_iterations=50, objective="sphere")
    return e
