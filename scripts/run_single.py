#!/usr/bin/env python
import argparse, logging
from pigeonopt.core.config import load_config, config_from_mapping
from pigeonopt.core.errors import PIOError
from pigeonopt.core.rng import make_rng
from pigeonopt.algorithms.pio import PIOEngine
from pigeonopt.analysis.plots import plot_convergence, plot_population

def main(cfg_path:str, objective:str|None=None, plot:str|None=None, flock:str|None=None):
    cfg = load_config(cfg_path)
    overrides = {"objective": objective} if objective else {}
    pcfg = config_from_mapping(cfg, **overrides)
    engine = PIOEngine(make_rng(int(cfg.get("seed", 123))), pcfg)
    engine.start()
    snap = engine.run_to_completion()
    pos = ", ".join(f"{v:.4f}" for v in snap.global_best_position)
    print(f"Best cost: {snap.global_best_cost:.6g} at ({pos}) "
          f"[{engine.cfg.objective}, dim={engine.cfg.dimensions}, T={snap.iteration}]")
    if plot:
        print(f"Convergence plot: {plot_convergence({engine.cfg.objective: engine.get_convergence_history()}, plot)}")
    if flock:
        print(f"Flock plot: {plot_population(snap, engine.objective, engine.bounds, flock)}")

if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default="configs/main.yaml")
    ap.add_argument("--objective", default=None)
    ap.add_argument("--plot", default=None, help="write the convergence curve to this PNG")
    ap.add_argument("--flock", default=None, help="write the final flock over the objective (2-D only)")
    ap.add_argument("-v", "--verbose", action="store_true")
    a = ap.parse_args()
    logging.basicConfig(level=logging.DEBUG if a.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    try:
        main(a.config, a.objective, a.plot, a.flock)
    except PIOError as e:
        raise SystemExit(f"error: {e}")
