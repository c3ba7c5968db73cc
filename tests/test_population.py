import numpy as np

from pigeonopt.core.population import Population


def test_best_agent_leftmost_on_ties(make_agent):
    agents = [make_agent(position=p) for p in ([2.0, 0.0], [1.0, 0.0], [0.0, 1.0], [0.0, -1.0])]
    pop = Population(agents)
    assert pop.best_agent() is agents[1]


def test_sort_is_stable(make_agent):
    agents = [make_agent(position=p) for p in ([0.0, 3.0], [1.0, 0.0], [3.0, 0.0], [0.0, 1.0])]
    pop = Population(agents)
    pop.sort_by_cost_ascending()
    assert pop.agents == [agents[1], agents[3], agents[0], agents[2]]


def test_select_elites_floor_half(make_agent):
    agents = [make_agent(position=[float(i), 0.0]) for i in (4, 2, 0, 3, 1)]
    pop = Population(agents)
    elites = pop.select_elites()
    assert len(elites) == 2
    assert [a.cost for a in elites] == [0.0, 1.0]


def test_replenish_restores_size(make_agent):
    agents = [make_agent() for _ in range(31)]
    pop = Population(agents)
    pop.agents = pop.select_elites()
    assert len(pop) == 15
    fresh = pop.replenish(pop.size, make_agent)
    assert len(fresh) == 16
    pop.agents += fresh
    assert len(pop) == pop.size == 31


def test_update_global_best_ratchets(make_agent):
    a, b = make_agent(position=[3.0, 4.0]), make_agent(position=[1.0, 1.0])
    pop = Population([a, b])
    assert pop.update_global_best()
    assert pop.global_best_cost == 2.0
    assert np.array_equal(pop.global_best_position, [1.0, 1.0])

    b.position = np.array([5.0, 5.0]); b.cost = b.evaluate()
    assert not pop.update_global_best()
    assert pop.global_best_cost == 2.0

    a.position = np.array([0.5, 0.0]); a.cost = a.evaluate()
    assert pop.update_global_best()
    assert pop.global_best_cost == 0.25
    assert pop.global_best_cost <= min(x.personal_best_cost for x in pop)


def test_best_index(make_agent):
    agents = [make_agent(position=[3.0, 0.0]), make_agent(position=[1.0, 0.0])]
    pop = Population(agents)
    pop.update_global_best()
    assert pop.best_index() == 1
    agents[1].position = np.array([2.0, 0.0]); agents[1].cost = agents[1].evaluate()
    assert pop.best_index() is None
    assert pop.positions().shape == (2, 2)
    assert np.array_equal(pop.costs(), [9.0, 4.0])


def test_replenish_from_elite_count(make_agent):
    pop = Population([make_agent() for _ in range(31)])
    elites = pop.select_elites()
    fresh = pop.replenish(pop.size, make_agent, current=len(elites))
    assert len(elites) + len(fresh) == 31
    # the population itself is untouched until reassembled
    assert len(pop) == 31
