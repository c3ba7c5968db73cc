"""
stats.py

Summaries of repeated PIO runs: per-(objective, strategy) descriptive
statistics with bootstrap confidence intervals, and a paired Wilcoxon
signed-rank test between the two Landmark strategies.
"""
from __future__ import annotations
from typing import Callable, Iterable, Mapping
import numpy as np
import pandas as pd
from scipy.stats import wilcoxon

RESULT_COLUMNS = ["objective", "strategy", "seed", "f_best", "iterations"]


def results_frame(rows: Iterable[Mapping]) -> pd.DataFrame:
    return pd.DataFrame(list(rows), columns=RESULT_COLUMNS)


def bootstrap_ci(x, stat_fn: Callable = np.mean, B: int = 2000, alpha: float = 0.05,
                 rng: np.random.Generator | None = None) -> tuple[float, float]:
    rng = rng if rng is not None else np.random.default_rng(42)
    x = np.asarray(x, dtype=float)
    idx = rng.integers(0, x.size, (B, x.size))
    stats = np.array([stat_fn(x[i]) for i in idx])
    return float(np.percentile(stats, 100*alpha/2)), float(np.percentile(stats, 100*(1-alpha/2)))


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """One row per (objective, strategy): run count, mean/std/median/min/max and a mean CI."""
    rows = []
    for (obj, strat), g in df.groupby(["objective", "strategy"], sort=True):
        arr = g["f_best"].to_numpy(dtype=float)
        lo, hi = bootstrap_ci(arr) if arr.size > 1 else (arr[0], arr[0])
        rows.append({
            "objective": obj, "strategy": strat, "n_runs": arr.size,
            "mean": arr.mean(), "std": arr.std(ddof=1) if arr.size > 1 else 0.0,
            "mean_ci_lo": lo, "mean_ci_hi": hi,
            "median": float(np.median(arr)), "min": arr.min(), "max": arr.max(),
        })
    return pd.DataFrame(rows)


def compare_strategies(df: pd.DataFrame, a: str = "global_best", b: str = "elite_centroid") -> pd.DataFrame:
    """Paired Wilcoxon test of strategy ``a`` against ``b`` per objective, pairing runs by seed."""
    rows = []
    for obj, g in df.groupby("objective", sort=True):
        wide = g.pivot_table(index="seed", columns="strategy", values="f_best")
        if a not in wide or b not in wide:
            continue
        pair = wide[[a, b]].dropna()
        diff = pair[a] - pair[b]
        if len(pair) < 2 or np.allclose(diff, 0.0):
            p = 1.0
        else:
            p = float(wilcoxon(pair[a], pair[b]).pvalue)
        rows.append({"objective": obj, "n_pairs": len(pair),
                     f"median_{a}": float(pair[a].median()), f"median_{b}": float(pair[b].median()),
                     "p_value": p, "better": a if diff.median() < 0 else b if diff.median() > 0 else "tie"})
    return pd.DataFrame(rows)
