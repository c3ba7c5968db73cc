
from __future__ import annotations
from pathlib import Path
from typing import Mapping, Sequence
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from ..algorithms.base import Snapshot
from ..core.objectives import ObjectiveFunction


def plot_convergence(histories: Mapping[str, Sequence], path: str | Path, log_scale: bool = True) -> Path:
    """Best cost per iteration; a label mapping to several runs is drawn as their mean."""
    plt.figure(figsize=(10, 6))
    for label, h in histories.items():
        h = np.asarray(h, dtype=float)
        plt.plot(np.nanmean(h, axis=0) if h.ndim == 2 else h, label=label)
    plt.title("PIO Convergence")
    plt.xlabel("Iteration")
    plt.ylabel("Best Cost")
    if log_scale:
        plt.yscale("symlog", linthresh=1e-6)
    plt.legend()
    plt.grid(True)
    plt.savefig(path)
    plt.close()
    return Path(path)


def plot_population(snapshot: Snapshot, objective: ObjectiveFunction, bounds: np.ndarray,
                    path: str | Path, resolution: int = 200) -> Path:
    """Flock over the objective's contour (first two dimensions)."""
    if bounds.shape[0] != 2:
        raise ValueError("plot_population needs a 2-dimensional run")
    xs = np.linspace(bounds[0, 0], bounds[0, 1], resolution)
    ys = np.linspace(bounds[1, 0], bounds[1, 1], resolution)
    X, Y = np.meshgrid(xs, ys)
    Z = np.array([[objective(np.array([x, y])) for x, y in zip(rx, ry)] for rx, ry in zip(X, Y)])

    plt.figure(figsize=(8, 6))
    plt.contourf(X, Y, np.log1p(Z), levels=30, cmap="viridis", alpha=0.8)
    pos = snapshot.positions
    plt.scatter(pos[:, 0], pos[:, 1], s=20, c="tab:blue", edgecolors="k", label="pigeons")
    m = objective.minimum_position(2)
    plt.scatter([m[0]], [m[1]], s=150, c="gold", edgecolors="darkgoldenrod", marker="o", label="known minimum")
    gb = snapshot.global_best_position
    plt.scatter([gb[0]], [gb[1]], s=80, c="tab:red", edgecolors="darkred", marker="*", label="global best")
    plt.title(f"{objective.name}: iteration {snapshot.iteration} ({snapshot.phase.value}), "
              f"best {snapshot.global_best_cost:.4g}")
    plt.xlim(tuple(bounds[0])); plt.ylim(tuple(bounds[1]))
    plt.legend(loc="upper right")
    plt.savefig(path)
    plt.close()
    return Path(path)
