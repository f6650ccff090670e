"""Command-line interface for running the solver."""

from __future__ import annotations

import argparse
import json
import sys
import traceback
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

from .exceptions import (
    ConfigError,
    DijkstraIPQError,
    InputError,
    UnreachableDestinationError,
)
from .export import export_tree_graphml, export_tree_json, result_to_dict
from .generator import random_graph
from .graph import Graph, edge_count, nodes
from .io import read_graph
from .logger import StdLogger
from .solver import DijkstraSolver, SolverConfig

EXAMPLE_CSV = """origin;destination;weight
2944;3948;945
2944;4907;980
2944;5950;850
3948;5950;1328
3948;9583;510
3948;6068;772
3948;2944;945
4907;2944;980
4907;9583;1152
5950;6068;1272
5950;2944;850
6068;3948;772
9583;3948;510
9583;6068;885
9583;2944;1445
"""


def _build_graph_from_file(path: str, fmt: Optional[str], directed: bool) -> Graph:
    """Build a graph from an edges file."""
    if not Path(path).exists():
        raise InputError(f"edges file not found: {path}")
    return read_graph(path, fmt, directed=directed)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``dijkstra-ipq`` command-line tool."""
    examples = (
        "Examples:\n"
        "  dijkstra-ipq --example > data.csv\n"
        "  dijkstra-ipq --edges data.csv --directed --source 5950 --target 9583 --target 4907\n"
        "  dijkstra-ipq --random --n 100 --m 500 --target 42\n"
    )
    p = argparse.ArgumentParser(
        prog="dijkstra-ipq",
        description="Single-source Dijkstra over an indexed priority queue",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured log lines")
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "warning"],
        default="warning",
        help="Log verbosity",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--edges", type=str, help="Path to edges file")
    src.add_argument("--random", action="store_true", help="Use a random graph")
    src.add_argument(
        "--example",
        action="store_true",
        help="Print a sample edges CSV to stdout and exit",
    )

    p.add_argument(
        "--format",
        choices=["csv", "jsonl"],
        default=None,
        help="Edge file format (auto-detected from extension)",
    )
    p.add_argument("--directed", action="store_true", help="Treat edges as directed")
    p.add_argument(
        "--no-prune",
        action="store_true",
        help="Relax settled neighbours on undirected graphs too",
    )

    p.add_argument("--n", type=int, default=10, help="Nodes (random mode)")
    p.add_argument("--m", type=int, default=20, help="Edges (random mode)")
    p.add_argument("--seed", type=int, default=0, help="Seed controlling random graph generation")
    p.add_argument("--source", type=int, default=None, help="Source node id (default: first node)")
    p.add_argument(
        "--target",
        type=int,
        action="append",
        default=[],
        help="Destination node id for path output (repeatable)",
    )

    p.add_argument("--export-json", type=str, default=None, help="Write shortest-path tree as JSON")
    p.add_argument(
        "--export-graphml",
        type=str,
        default=None,
        help="Write shortest-path tree as GraphML",
    )
    p.add_argument(
        "--metrics-out",
        type=str,
        default=None,
        help="Write run metrics to this JSON file",
    )
    p.add_argument("--mem", action="store_true", help="Record peak memory with tracemalloc")

    args = p.parse_args(argv)

    if args.example:
        sys.stdout.write(EXAMPLE_CSV)
        return 0

    stream = sys.stdout if args.log_json else sys.stderr
    level = "info" if args.log_json and args.log_level == "warning" else args.log_level
    logger = StdLogger(level=level, json_fmt=args.log_json, stream=stream)

    try:
        if args.random:
            if args.n <= 0 or args.m < 0:
                raise ConfigError("--n must be positive and --m non-negative")
            G = random_graph(args.n, args.m, seed=args.seed, directed=args.directed)
        else:
            G = _build_graph_from_file(args.edges, args.format, args.directed)

        source = args.source if args.source is not None else nodes(G)[0]
        cfg = SolverConfig(prune_settled=not args.no_prune)

        if args.verbose and not args.log_json:
            sys.stderr.write(
                f"config: n={len(nodes(G))} m={edge_count(G)} directed={args.directed} "
                f"prune={cfg.prune_settled} seed={args.seed} source={source}\n"
            )

        peak_mib = None
        if args.mem:
            import tracemalloc

            tracemalloc.start()
            solver = DijkstraSolver(G, source, args.directed, config=cfg, logger=logger)
            _, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            peak_mib = peak / (1024 * 1024)
        else:
            solver = DijkstraSolver(G, source, args.directed, config=cfg, logger=logger)

        out = result_to_dict(solver, args.target)

        if args.export_json:
            with open(args.export_json, "w", encoding="utf-8") as fh:
                fh.write(export_tree_json(G, solver.distances(), solver.previous()))
        if args.export_graphml:
            with open(args.export_graphml, "w", encoding="utf-8") as fh:
                fh.write(export_tree_graphml(G, solver.previous()))

        if args.metrics_out:
            metrics = solver.metrics(peak_mib=peak_mib)
            with open(args.metrics_out, "w", encoding="utf-8") as fh:
                json.dump(asdict(metrics), fh)

        logger.info(
            "run",
            n=len(out["distances"]),
            m=edge_count(G),
            source=source,
            directed=args.directed,
            **solver.summary(),
        )
        if not args.log_json:
            print(json.dumps(out))
        return 0

    except (InputError, ConfigError, UnreachableDestinationError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return 64
    except DijkstraIPQError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return 70
    except Exception as exc:  # pragma: no cover - unexpected
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return 70


if __name__ == "__main__":
    sys.exit(main())
