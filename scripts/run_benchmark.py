#!/usr/bin/env python
import argparse, logging
from pathlib import Path
import numpy as np
from pigeonopt.core.config import load_config, config_from_mapping, seeds
from pigeonopt.core.errors import PIOError
from pigeonopt.core.rng import make_rng
from pigeonopt.algorithms.pio import PIOEngine
from pigeonopt.analysis.stats import results_frame, summarize, compare_strategies
from pigeonopt.analysis.plots import plot_convergence

def run_one(pcfg, seed):
    engine = PIOEngine(make_rng(seed), pcfg)
    engine.start()
    snap = engine.run_to_completion()
    return snap, engine.get_convergence_history()

def main(cfg_path:str):
    cfg = load_config(cfg_path)
    b = cfg.get("benchmark") or {}
    objectives = b.get("objectives", [cfg.get("objective", "sphere")])
    strategies = b.get("strategies", ["global_best"])
    runs = int(b.get("runs", 10))
    out = Path(b.get("out_dir", "outputs")); out.mkdir(parents=True, exist_ok=True)

    rows, histories = [], {}
    for obj in objectives:
        for strat in strategies:
            pcfg = config_from_mapping(cfg, objective=obj, landmark_strategy=strat)
            hs = []
            for seed in seeds(cfg, runs):
                snap, h = run_one(pcfg, seed)
                rows.append({"objective": obj, "strategy": strat, "seed": seed,
                             "f_best": snap.global_best_cost, "iterations": snap.iteration})
                hs.append(h)
            histories[f"{obj}/{strat}"] = np.vstack(hs)

    df = results_frame(rows)
    df.to_csv(out / "results_all.csv", index=False)
    summary = summarize(df)
    summary.to_csv(out / "summary_stats.csv", index=False)
    for obj in objectives:
        plot_convergence({k: v for k, v in histories.items() if k.startswith(f"{obj}/")},
                         out / f"convergence_{obj}.png")
    print("Summary:")
    for r in summary.itertuples():
        print(f"{r.objective:12s} {r.strategy:15s}: mean {r.mean:.4g}  median {r.median:.4g}  best {r.min:.4g}")
    if len(strategies) > 1:
        print("\nLandmark strategy comparison (Wilcoxon signed-rank):")
        print(compare_strategies(df, *strategies[:2]).to_string(index=False))

if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default="configs/main.yaml")
    ap.add_argument("-v", "--verbose", action="store_true")
    a = ap.parse_args()
    logging.basicConfig(level=logging.INFO if a.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    try:
        main(a.config)
    except PIOError as e:
        raise SystemExit(f"error: {e}")
