
from __future__ import annotations
from enum import Enum
from typing import Sequence
import numpy as np


class LandmarkStrategy(str, Enum):
    GLOBAL_BEST = "global_best"
    ELITE_CENTROID = "elite_centroid"


def landmark_target(strategy: LandmarkStrategy, global_best: np.ndarray, elites: Sequence) -> np.ndarray:
    """Point the elites converge on during the Landmark phase."""
    if strategy is LandmarkStrategy.ELITE_CENTROID:
        return np.mean([a.position for a in elites], axis=0)
    return global_best
