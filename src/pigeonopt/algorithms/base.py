
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import numpy as np
from typing import Any, Dict

from ..core.errors import EngineStateError


class Phase(str, Enum):
    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"
    MAP_AND_COMPASS = "map_and_compass"
    LANDMARK = "landmark"
    FINISHED = "finished"
    ABORTED = "aborted"

    @property
    def running(self) -> bool:
        return self in (Phase.MAP_AND_COMPASS, Phase.LANDMARK)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a run after an iteration, for drivers that render or log."""
    iteration: int
    phase: Phase
    global_best_cost: float
    global_best_position: np.ndarray
    positions: np.ndarray
    costs: np.ndarray
    best_index: int | None = None

    @property
    def finished(self) -> bool:
        return self.phase is Phase.FINISHED


def frozen(a) -> np.ndarray:
    a = np.array(a, dtype=float)
    a.setflags(write=False)
    return a


class SteppedAlgorithm:
    """An optimizer driven one iteration at a time by an external loop."""
    name: str = "BASE"

    @property
    def phase(self) -> Phase:
        raise NotImplementedError
    def step(self) -> Snapshot:
        raise NotImplementedError
    def snapshot(self) -> Snapshot:
        raise NotImplementedError
    def result(self) -> Dict[str, Any]:
        raise NotImplementedError

    def run_to_completion(self) -> Snapshot:
        if not self.phase.running:
            raise EngineStateError(f"{self.name}: cannot run from phase {self.phase.value}")
        snap = self.snapshot()
        while self.phase.running:
            snap = self.step()
        return snap
