#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import math
import statistics as stats
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from cephalopod.cases import discover_cases, load_case
from cephalopod.paths import fixtures_dir
from cephalopod.search import MemoCache, search
from cephalopod.tracking import log_metrics, log_params, maybe_mlflow_run


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    repeats: int = 10
    fixtures: Path = Path()
    tracking: str = "none"  # or "mlflow"
    log_dir: Path = Path("runs")


def parse_args() -> Config:
    p = argparse.ArgumentParser(description="Time the memoized search over golden fixtures")
    p.add_argument("--repeats", type=int, default=10)
    p.add_argument("--fixtures", type=Path, default=None)
    p.add_argument("--tracking", choices=["none", "mlflow"], default="none")
    p.add_argument("--log-dir", type=Path, default=Path("runs"))
    ns = p.parse_args()
    return Config(
        repeats=ns.repeats,
        fixtures=ns.fixtures or fixtures_dir(),
        tracking=ns.tracking,
        log_dir=ns.log_dir,
    )


def main() -> int:
    cfg = parse_args()
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    cases = [load_case(p) for p in discover_cases(cfg.fixtures)]
    if not cases:
        logging.error("No fixtures under %s", cfg.fixtures)
        return 2
    with maybe_mlflow_run(cfg.tracking == "mlflow", run_name="benchmarks", log_dir=cfg.log_dir):
        log_params({"repeats": cfg.repeats, "cases": len(cases)})
        metrics: Dict[str, float] = {}
        for case in cases:
            times: List[float] = []
            for _ in range(cfg.repeats):
                cache = MemoCache()
                t0 = time.perf_counter()
                search(case.board, case.depth, cache=cache)
                times.append(time.perf_counter() - t0)
            m, h = ci95(times)
            name = Path(case.source or "case").stem
            logging.info("%s: mean=%.5fs ± %.5fs (95%% CI), cached=%d", name, m, h, len(cache))
            metrics[f"{name}_mean_s"] = m
            metrics[f"{name}_ci95_half_s"] = h
        log_metrics(metrics)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
