"""
config.py

Run configuration for the PIO engine: the validated parameter set and the
YAML layout used by the scripts under ``scripts/``.
"""
from __future__ import annotations
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Sequence
import math
import numpy as np
import yaml

from . import objectives
from .errors import InvalidConfiguration
from ..operators.landmark import LandmarkStrategy


@dataclass(frozen=True)
class PIOConfig:
    population_size: int = 30
    max_iterations: int = 200
    dimensions: int = 2
    bounds: Any = None
    inertia_start: float = 0.9
    inertia_end: float = 0.1
    landmark_factor: float = 0.2
    objective: str = "sphere"
    landmark_strategy: LandmarkStrategy | str = LandmarkStrategy.GLOBAL_BEST
    cognitive_weight: float = 0.1
    landmark_inertia: float = 0.7
    max_velocity: float = 10.0
    initial_velocity: float = 3.0
    bounce: float = -0.8

    def validate(self) -> "PIOConfig":
        """Check every parameter; return a normalized copy or raise InvalidConfiguration."""
        def in_range(name, lo, hi, integer=False, open_lo=False):
            v = getattr(self, name)
            ok_type = isinstance(v, (int, np.integer)) if integer else isinstance(v, (int, float, np.number))
            if isinstance(v, bool) or not ok_type or not (lo <= v <= hi) or (open_lo and v == lo):
                kind = "an integer" if integer else "a number"
                raise InvalidConfiguration(name, v, f"must be {kind} in {'(' if open_lo else '['}{lo}, {hi}]")

        in_range("population_size", 10, 200, integer=True)
        in_range("max_iterations", 50, 1000, integer=True)
        in_range("inertia_start", 0.0, 1.0)
        in_range("inertia_end", 0.0, 1.0)
        if self.inertia_end >= self.inertia_start:
            raise InvalidConfiguration("inertia_end", self.inertia_end,
                                       f"must be less than inertia_start={self.inertia_start}")
        in_range("landmark_factor", 0.05, 1.0)
        in_range("cognitive_weight", 0.0, math.inf)
        in_range("landmark_inertia", 0.0, 1.0)
        in_range("initial_velocity", 0.0, math.inf)
        in_range("bounce", -1.0, 0.0)
        in_range("max_velocity", 0.0, math.inf, open_lo=True)

        if not isinstance(self.objective, str):
            raise InvalidConfiguration("objective", self.objective,
                                       f"must be one of {list(objectives.names())}")
        obj = objectives.get(self.objective)
        if isinstance(self.dimensions, bool) or not isinstance(self.dimensions, int) or self.dimensions < obj.min_dimensions:
            raise InvalidConfiguration("dimensions", self.dimensions,
                                       f"must be an integer >= {obj.min_dimensions} for {obj.name}")
        try:
            strategy = LandmarkStrategy(self.landmark_strategy)
        except ValueError:
            raise InvalidConfiguration("landmark_strategy", self.landmark_strategy,
                                       f"must be one of {[s.value for s in LandmarkStrategy]}") from None
        return replace(self, landmark_strategy=strategy, bounds=self.resolve_bounds())

    def resolve_bounds(self) -> np.ndarray:
        """Bounds as a read-only (dimensions, 2) array."""
        obj = objectives.get(self.objective)
        if self.bounds is None:
            b = obj.bounds(self.dimensions)
        else:
            try:
                b = np.array(self.bounds, dtype=float)
            except (TypeError, ValueError):
                raise InvalidConfiguration("bounds", self.bounds, "must be numeric") from None
            if b.shape == (2,):
                b = np.tile(b, (self.dimensions, 1))
            if b.shape != (self.dimensions, 2):
                raise InvalidConfiguration("bounds", self.bounds,
                                           f"need a (low, high) pair or {self.dimensions} pairs")
        if not np.all(np.isfinite(b)) or np.any(b[:, 0] >= b[:, 1]):
            raise InvalidConfiguration("bounds", b.tolist(), "each low must be finite and below its high")
        b.setflags(write=False)
        return b


_FIELDS = {f.name for f in fields(PIOConfig)}


def load_config(path: str | Path) -> dict:
    try:
        cfg = yaml.safe_load(Path(path).read_text())
    except (OSError, yaml.YAMLError) as e:
        raise InvalidConfiguration("config", str(path), f"cannot read: {e}") from e
    if not isinstance(cfg, Mapping):
        raise InvalidConfiguration("config", str(path), "top level must be a mapping")
    return dict(cfg)


def config_from_mapping(cfg: Mapping[str, Any], **overrides) -> PIOConfig:
    """Build a PIOConfig from the scripts' YAML layout (``T_iter``, nested ``pio`` block)."""
    p = dict(cfg.get("pio") or {})
    params: dict[str, Any] = {
        "population_size": cfg.get("population_size", 30),
        "max_iterations": cfg.get("T_iter", cfg.get("max_iterations", 200)),
        "dimensions": cfg.get("dimensions", 2),
        "objective": cfg.get("objective", "sphere"),
        "bounds": cfg.get("bounds"),
    }
    inertia = p.pop("inertia", None) or {}
    if "start" in inertia: params["inertia_start"] = inertia["start"]
    if "end" in inertia: params["inertia_end"] = inertia["end"]
    params.update(p)
    params.update(overrides)
    unknown = sorted(set(params) - _FIELDS)
    if unknown:
        raise InvalidConfiguration(unknown[0], params[unknown[0]], "unknown parameter")
    return PIOConfig(**params)


def seeds(cfg: Mapping[str, Any], runs: int | None = None) -> Sequence[int]:
    seed = int(cfg.get("seed", 123))
    return range(seed, seed + (runs or 1))
