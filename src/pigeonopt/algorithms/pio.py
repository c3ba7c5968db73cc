"""
pio.py

Pigeon-Inspired Optimization. The first half of a run applies the
Map-and-Compass operator to every pigeon (velocity pulled toward the global
best with linearly annealed inertia); the second half applies the Landmark
operator (the better half of the flock converges on a landmark, the rest are
replaced by fresh random pigeons).
"""
from __future__ import annotations
from dataclasses import replace
import logging
import numpy as np
from typing import Any, Dict

from .base import Phase, Snapshot, SteppedAlgorithm, frozen
from ..core import objectives
from ..core.agent import Agent
from ..core.config import PIOConfig
from ..core.errors import EngineStateError, InvalidConfiguration, NumericInstability
from ..core.history import ConvergenceHistory
from ..core.population import Population
from ..core.rng import make_rng
from ..operators.landmark import landmark_target
from ..operators.schedules import inertia_linear

logger = logging.getLogger(__name__)


class PIOEngine(SteppedAlgorithm):
    """Stepwise PIO optimizer.

    One instance owns a single run at a time: ``configure`` then ``start``,
    then ``step`` until the phase is ``FINISHED`` (or ``run_to_completion``).
    Randomness comes only from the injected ``rng``, so a fixed seed replays
    the same trajectory. Not safe to drive from more than one thread.
    """
    name = "PIO"

    def __init__(self, rng: np.random.Generator | None = None, config: PIOConfig | None = None):
        self.rng = rng if rng is not None else make_rng()
        self.cfg: PIOConfig | None = None
        self.objective: objectives.ObjectiveFunction | None = None
        self.bounds: np.ndarray | None = None
        self._clear()
        if config is not None:
            self.configure(config)

    def _clear(self) -> None:
        self.population: Population | None = None
        self.history = ConvergenceHistory()
        self.iteration = 0
        self.inertia: float | None = None
        self._aborted = False

    @property
    def phase(self) -> Phase:
        if self.cfg is None:
            return Phase.UNCONFIGURED
        if self._aborted:
            return Phase.ABORTED
        if self.population is None:
            return Phase.CONFIGURED
        if self.iteration >= self.cfg.max_iterations:
            return Phase.FINISHED
        if self.iteration < self.cfg.max_iterations / 2:
            return Phase.MAP_AND_COMPASS
        return Phase.LANDMARK

    def configure(self, config: PIOConfig | None = None, **params) -> PIOConfig:
        """Validate and install a configuration, discarding any previous run.

        Nothing is touched when validation fails.
        """
        cfg = config if config is not None else PIOConfig()
        if params:
            try:
                cfg = replace(cfg, **params)
            except TypeError as e:
                raise InvalidConfiguration("params", sorted(params), str(e)) from None
        cfg = cfg.validate()
        self.cfg, self.objective, self.bounds = cfg, objectives.get(cfg.objective), cfg.bounds
        self._clear()
        logger.debug("configured %s", cfg)
        return cfg

    def _spawn(self) -> Agent:
        return Agent(self.objective, self.bounds).initialize(self.rng, self.cfg.initial_velocity)

    def start(self) -> Snapshot:
        if self.cfg is None:
            raise EngineStateError("PIO engine must be configured before start()")
        self._clear()
        n = self.cfg.population_size
        try:
            pop = Population((self._spawn() for _ in range(n)), size=n)
        except NumericInstability:
            self._aborted = True
            logger.error("non-finite cost while initializing %s", self.cfg.objective)
            raise
        best = pop.best_agent()
        pop.global_best_position, pop.global_best_cost = best.position.copy(), best.cost
        self.population = pop
        self.history.append(pop.global_best_cost)
        logger.info("PIO start: objective=%s N=%d D=%d T=%d best=%.6g", self.cfg.objective, n,
                    self.cfg.dimensions, self.cfg.max_iterations, pop.global_best_cost)
        return self.snapshot()

    def step(self) -> Snapshot:
        phase = self.phase
        if not phase.running:
            raise EngineStateError(f"cannot step from phase {phase.value}")
        try:
            self.population.update_global_best()
            if phase is Phase.MAP_AND_COMPASS:
                self._map_and_compass()
            else:
                self._landmark()
        except NumericInstability:
            self._aborted = True
            logger.error("non-finite cost at iteration %d, run aborted", self.iteration)
            raise
        self.history.append(self.population.global_best_cost)
        self.iteration += 1
        if self.phase is not phase:
            logger.debug("iteration %d: %s -> %s", self.iteration, phase.value, self.phase.value)
        if self.phase is Phase.FINISHED:
            logger.info("PIO finished: best=%.6g", self.population.global_best_cost)
        return self.snapshot()

    def _map_and_compass(self) -> None:
        cfg, pop = self.cfg, self.population
        self.inertia = inertia_linear(self.iteration, cfg.max_iterations, cfg.inertia_start, cfg.inertia_end)
        for a in pop:
            a.update_velocity(pop.global_best_position, self.inertia, cfg.cognitive_weight,
                              self.rng, cfg.max_velocity)
            a.move(cfg.bounce)

    def _landmark(self) -> None:
        cfg, pop = self.cfg, self.population
        elites = pop.select_elites(cfg.population_size // 2)
        target = landmark_target(cfg.landmark_strategy, pop.global_best_position, elites)
        for a in elites:
            a.update_velocity(target, cfg.landmark_inertia, cfg.landmark_factor, self.rng, cfg.max_velocity)
            a.move(cfg.bounce)
        pop.agents = elites + pop.replenish(cfg.population_size, self._spawn, current=len(elites))

    def snapshot(self) -> Snapshot:
        pop = self.population
        if pop is None:
            raise EngineStateError("no run in progress")
        return Snapshot(
            iteration=self.iteration,
            phase=self.phase,
            global_best_cost=pop.global_best_cost,
            global_best_position=frozen(pop.global_best_position),
            positions=frozen(pop.positions()),
            costs=frozen(pop.costs()),
            best_index=pop.best_index(),
        )

    def get_convergence_history(self) -> np.ndarray:
        return self.history.snapshot()

    def reset(self) -> None:
        """Drop the current run; the configuration is kept."""
        self._clear()

    def result(self) -> Dict[str, Any]:
        pop = self.population
        if pop is None:
            raise EngineStateError("no run in progress")
        return {"X_best": pop.global_best_position.copy(), "f_best": pop.global_best_cost,
                "history": self.get_convergence_history()}
