"""Micro-benchmark utilities for the solver.

Run this module as a script to time :class:`DijkstraSolver` against the
``heapq`` reference implementation across multiple random graphs.

Example:
```bash
python -m dijkstra_ipq.bench --trials 5 --sizes 1000,5000 2000,10000 --out-csv out.csv
```

Use ``--mem`` to record peak memory usage during solver runs.
"""

from __future__ import annotations

import argparse
import csv
import math
import statistics
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from .generator import random_graph
from .reference import dijkstra_reference
from .solver import DijkstraSolver, SolverMetrics


@dataclass
class BenchResult:
    """Result of a single benchmarking run."""

    metrics: SolverMetrics
    reference_ms: float
    max_abs_err: float


def _p95(values: List[float]) -> float:
    if len(values) == 1:
        return values[0]
    return statistics.quantiles(values, n=100, method="inclusive")[94]


def run_once(
    n: int,
    m: int,
    directed: bool,
    seed: int = 0,
    track_mem: bool = False,
) -> BenchResult:
    """Run the solver once and compare against the reference.

    Args:
        n: Number of nodes.
        m: Number of sampled edges.
        directed: Whether the random graph is directed.
        seed: Seed for the random graph generator.
        track_mem: Record peak memory with :mod:`tracemalloc`.

    Returns:
        Timing information and maximum absolute distance error.
    """
    graph = random_graph(n, m, seed=seed, directed=directed)
    s = 0

    peak = None
    if track_mem:
        import tracemalloc

        tracemalloc.start()
        solver = DijkstraSolver(graph, s, directed=directed)
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()
    else:
        solver = DijkstraSolver(graph, s, directed=directed)

    t0 = time.perf_counter()
    ref = dijkstra_reference(graph, s)
    t1 = time.perf_counter()

    max_err = 0.0
    dist = solver.distances()
    for u, b in ref.distances.items():
        a = dist[u]
        if math.isinf(a) and math.isinf(b):
            continue
        max_err = max(max_err, abs(a - b))

    peak_mib = (peak / (1024 * 1024)) if peak is not None else None
    return BenchResult(
        metrics=solver.metrics(peak_mib=peak_mib),
        reference_ms=(t1 - t0) * 1000.0,
        max_abs_err=max_err,
    )


def main(argv: List[str] | None = None) -> None:
    """Run benchmarking trials and optionally record results.

    Args:
        argv: Optional argument list for testing.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--trials", type=int, default=1, help="Number of trials per configuration")
    parser.add_argument(
        "--sizes",
        nargs="+",
        default=["10,20", "20,40"],
        help="Size pairs as n,m (e.g. 1000,5000). Defaults to a small demo.",
    )
    parser.add_argument("--seed-base", type=int, default=0, help="Base seed for random graphs")
    parser.add_argument("--out-csv", type=Path, help="Optional path to write per-trial CSV data")
    parser.add_argument(
        "--mem",
        action="store_true",
        help="Profile peak memory usage (MiB) using tracemalloc",
    )
    args = parser.parse_args(argv)

    sizes: List[Tuple[int, int]] = []
    for spec in args.sizes:
        try:
            n_str, m_str = spec.split(",")
            sizes.append((int(n_str), int(m_str)))
        except ValueError:
            parser.error(f"invalid size specification '{spec}'")

    rows: List[List[object]] = []
    aggregates: Dict[Tuple[int, int, bool], Dict[str, List[float]]] = {}

    for n, m in sizes:
        for directed in (True, False):
            agg: Dict[str, List[float]] = {
                "solver": [],
                "reference": [],
                "relaxed": [],
                "mem": [],
                "err": [],
            }
            for trial in range(args.trials):
                res = run_once(
                    n=n,
                    m=m,
                    directed=directed,
                    seed=args.seed_base + trial,
                    track_mem=args.mem,
                )
                mtx = res.metrics
                row: List[object] = [
                    mtx.n,
                    mtx.m,
                    int(directed),
                    trial,
                    f"{mtx.wall_ms:.6f}",
                    f"{res.reference_ms:.6f}",
                    mtx.counters["edges_relaxed"],
                    mtx.counters["neighbors_pruned"],
                    f"{res.max_abs_err:.3g}",
                ]
                if args.mem:
                    row.append(f"{(mtx.peak_mib or 0.0):.6f}")
                    agg["mem"].append(mtx.peak_mib or 0.0)
                rows.append(row)
                agg["solver"].append(mtx.wall_ms)
                agg["reference"].append(res.reference_ms)
                agg["relaxed"].append(mtx.counters["edges_relaxed"])
                agg["err"].append(res.max_abs_err)
            aggregates[(n, m, directed)] = agg

    if args.out_csv:
        with args.out_csv.open("w", newline="") as fh:
            writer = csv.writer(fh)
            csv_header = [
                "n",
                "m",
                "directed",
                "trial",
                "solver_ms",
                "reference_ms",
                "edges_relaxed",
                "neighbors_pruned",
                "max_abs_err",
            ]
            if args.mem:
                csv_header.append("peak_mib")
            writer.writerow(csv_header)
            writer.writerows(rows)

    header = (
        f"{'n':>6} {'m':>7} {'dir':>3} {'relaxed':>10}"
        f" {'ipq_med':>11} {'ipq_p95':>11}"
        f" {'ref_med':>11} {'ref_p95':>11} {'max_err':>9}"
    )
    if args.mem:
        header += f" {'mem_med':>8} {'mem_p95':>8}"
    print(header)
    for (n, m, directed), agg in aggregates.items():
        line = (
            f"{n:6d} {m:7d} {int(directed):3d} {int(statistics.median(agg['relaxed'])):10d}"
            f" {statistics.median(agg['solver']):11.2f} {_p95(agg['solver']):11.2f}"
            f" {statistics.median(agg['reference']):11.2f} {_p95(agg['reference']):11.2f}"
            f" {max(agg['err']):9.3g}"
        )
        if args.mem:
            line += f" {statistics.median(agg['mem']):8.2f} {_p95(agg['mem']):8.2f}"
        print(line)


if __name__ == "__main__":  # pragma: no cover - manual invocation
    main()
