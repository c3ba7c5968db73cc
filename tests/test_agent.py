import math

import numpy as np
import pytest

from pigeonopt.core.agent import Agent
from pigeonopt.core.errors import NumericInstability
from pigeonopt.core import objectives
from pigeonopt.core.rng import make_rng


def test_initialize_within_bounds(rng):
    bounds = np.array([[-400.0, 400.0], [-300.0, 300.0]])
    for _ in range(50):
        a = Agent(objectives.sphere, bounds).initialize(rng)
        assert np.all(a.position >= bounds[:, 0]) and np.all(a.position <= bounds[:, 1])
        assert np.all(np.abs(a.velocity) <= 3.0)
        assert a.cost == objectives.sphere(a.position)
        assert a.personal_best_cost == a.cost
        assert np.array_equal(a.personal_best_position, a.position)
        assert a.personal_best_position is not a.position


def test_update_personal_best_only_on_improvement(make_agent):
    a = make_agent(position=[3.0, 4.0])
    a.position, a.cost = np.array([6.0, 8.0]), 100.0
    assert not a.update_personal_best()
    assert a.personal_best_cost == 25.0
    a.position, a.cost = np.array([0.0, 1.0]), 1.0
    assert a.update_personal_best()
    assert not a.update_personal_best()
    assert a.personal_best_cost == 1.0
    assert np.array_equal(a.personal_best_position, [0.0, 1.0])


def test_update_velocity_clamped(make_agent, rng):
    a = make_agent(position=[-10.0, -10.0], velocity=[9.0, -9.0])
    a.update_velocity(np.array([10.0, 10.0]), inertia=1.0, weight=5.0, rng=rng, max_velocity=10.0)
    assert np.all(np.abs(a.velocity) <= 10.0)


def test_update_velocity_draws_per_dimension(make_agent):
    a = make_agent(position=[0.0, 0.0], velocity=[0.0, 0.0])
    a.update_velocity(np.array([5.0, 5.0]), inertia=0.0, weight=1.0, rng=make_rng(1), max_velocity=10.0)
    assert a.velocity[0] != a.velocity[1]
    assert np.all((a.velocity >= 0) & (a.velocity < 5.0))


def test_update_velocity_formula(make_agent):
    a = make_agent(position=[1.0, -2.0], velocity=[2.0, 1.0])
    r = make_rng(3).random(2)
    a.update_velocity(np.array([0.0, 0.0]), inertia=0.5, weight=0.1, rng=make_rng(3), max_velocity=10.0)
    expected = 0.5 * np.array([2.0, 1.0]) + 0.1 * r * (np.array([0.0, 0.0]) - np.array([1.0, -2.0]))
    assert np.allclose(a.velocity, expected)


def test_move_bounces_off_boundary(make_agent):
    a = make_agent(position=[9.0, 0.0], velocity=[5.0, 1.0])
    a.move()
    assert np.array_equal(a.position, [10.0, 1.0])
    assert np.allclose(a.velocity, [-4.0, 1.0])
    assert a.cost == 101.0


def test_move_lower_boundary_custom_bounce(make_agent):
    a = make_agent(position=[-9.5, -9.5], velocity=[-2.0, -2.0])
    a.move(bounce=0.0)
    assert np.array_equal(a.position, [-10.0, -10.0])
    assert np.array_equal(np.abs(a.velocity), [0.0, 0.0])


def test_move_keeps_cost_fresh_and_in_bounds(make_agent, rng, sphere_bounds):
    a = make_agent()
    target = np.array([10.0, -10.0])
    for _ in range(200):
        a.update_velocity(target, 0.9, 2.0, rng)
        a.move()
        assert a.cost == objectives.sphere(a.position)
        assert np.all(a.position >= sphere_bounds[:, 0]) and np.all(a.position <= sphere_bounds[:, 1])


def test_non_finite_cost_raises(rng, sphere_bounds):
    with pytest.raises(NumericInstability):
        Agent(lambda x: math.nan, sphere_bounds).initialize(rng)


def test_non_finite_cost_on_move_keeps_previous_state(make_agent):
    a = make_agent(position=[1.0, 1.0], velocity=[1.0, 1.0])
    a.fitness_fn = lambda x: math.inf
    with pytest.raises(NumericInstability):
        a.move()
    assert np.array_equal(a.position, [1.0, 1.0])
    assert a.cost == 2.0
