
from __future__ import annotations
import numpy as np


class ConvergenceHistory:
    """Append-only best-cost log: the initial sample plus one entry per iteration."""
    def __init__(self):
        self._costs: list[float] = []

    def append(self, cost: float) -> None:
        self._costs.append(float(cost))

    def snapshot(self) -> np.ndarray:
        out = np.array(self._costs, dtype=float)
        out.setflags(write=False)
        return out

    @property
    def best(self) -> float:
        return min(self._costs) if self._costs else float("inf")

    def __len__(self) -> int:
        return len(self._costs)

    def __repr__(self) -> str:
        return f"ConvergenceHistory(n={len(self)}, best={self.best:.6g})"
