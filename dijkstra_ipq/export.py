"""Export utilities for shortest-path trees and solver results."""

from __future__ import annotations

import json
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .exceptions import UnreachableDestinationError
from .graph import Node, Weight, nodes
from .solver import DijkstraSolver


def shortest_path_tree(
    graph: Mapping[Node, Mapping[Node, Weight]],
    previous: Mapping[Node, Optional[Node]],
) -> List[Tuple[Node, Node, Weight]]:
    """Return the edges ``(u, v, w)`` of the tree encoded by ``previous``.

    Args:
        graph: Graph the search ran on.
        previous: Predecessor table from the solver.

    Returns:
        One edge per reached non-source node, in ``previous`` order.
    """
    tree: List[Tuple[Node, Node, Weight]] = []
    for v, u in previous.items():
        if u is None:
            continue
        tree.append((u, v, graph[u][v]))
    return tree


def _finite(value: float) -> Optional[float]:
    return None if math.isinf(value) else value


def export_tree_json(
    graph: Mapping[Node, Mapping[Node, Weight]],
    distances: Mapping[Node, float],
    previous: Mapping[Node, Optional[Node]],
) -> str:
    """Return a JSON string with nodes (and their distances) and tree edges."""
    data = {
        "nodes": [{"id": u, "distance": _finite(distances.get(u, math.inf))} for u in nodes(graph)],
        "edges": [
            {"source": u, "target": v, "weight": w}
            for (u, v, w) in shortest_path_tree(graph, previous)
        ],
    }
    return json.dumps(data)


def export_tree_graphml(
    graph: Mapping[Node, Mapping[Node, Weight]],
    previous: Mapping[Node, Optional[Node]],
) -> str:
    """Return a minimal GraphML string for the shortest-path tree."""
    lines: List[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append('<graphml xmlns="http://graphml.graphdrawing.org/xmlns">')
    lines.append('  <key id="w" for="edge" attr.name="weight" attr.type="double"/>')
    lines.append('  <graph id="G" edgedefault="directed">')
    for u in nodes(graph):
        lines.append(f'    <node id="n{u}"/>')
    for u, v, w in shortest_path_tree(graph, previous):
        lines.append(f'    <edge source="n{u}" target="n{v}"><data key="w">{w}</data></edge>')
    lines.append("  </graph>")
    lines.append("</graphml>")
    return "\n".join(lines)


def result_to_dict(solver: DijkstraSolver, targets: Iterable[Node] = ()) -> Dict[str, Any]:
    """Return a JSON-ready summary of a solver run.

    Unreached distances become ``None``. Each requested target gets either a
    ``path`` list or an ``error`` string when it is unreachable.
    """
    out: Dict[str, Any] = {
        "source": solver.source,
        "directed": solver.directed,
        "algorithm_time": solver.algorithm_time(),
        "distances": {str(u): _finite(d) for u, d in solver.distances().items()},
        "previous": {str(u): p for u, p in solver.previous().items()},
    }
    paths: Dict[str, Any] = {}
    for t in targets:
        try:
            steps = solver.shortest_path_to(t)
        except UnreachableDestinationError as exc:
            paths[str(t)] = {"error": str(exc)}
            continue
        paths[str(t)] = {
            "path": [
                {"node": s.node, "weight": s.weight, "accumulated_weight": s.accumulated_weight}
                for s in steps
            ]
        }
    if paths:
        out["paths"] = paths
    return out


def result_to_json(solver: DijkstraSolver, targets: Iterable[Node] = ()) -> str:
    """Return :func:`result_to_dict` serialized as JSON."""
    return json.dumps(result_to_dict(solver, targets))


__all__ = [
    "shortest_path_tree",
    "export_tree_json",
    "export_tree_graphml",
    "result_to_dict",
    "result_to_json",
]
