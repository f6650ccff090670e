"""Adjacency-mapping graphs consumed by the solver."""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Mapping, Tuple, Union

from .exceptions import GraphFormatError, InputError

Node = int
Weight = Union[int, float]
Graph = Dict[Node, Dict[Node, Weight]]
Edge = Tuple[Node, Node, Weight]


def nodes(graph: Mapping[Node, Mapping[Node, Weight]]) -> List[Node]:
    """Return every node of ``graph`` in first-seen order.

    Keys come first, followed by nodes that only appear as edge targets.
    """
    seen: Dict[Node, None] = dict.fromkeys(graph)
    for neighbors in graph.values():
        for v in neighbors:
            if v not in seen:
                seen[v] = None
    return list(seen)


def edge_count(graph: Mapping[Node, Mapping[Node, Weight]]) -> int:
    """Return the number of adjacency entries in ``graph``."""
    return sum(len(neighbors) for neighbors in graph.values())


def iter_edges(graph: Mapping[Node, Mapping[Node, Weight]]) -> Iterable[Edge]:
    """Yield every adjacency entry as a ``(u, v, w)`` tuple."""
    for u, neighbors in graph.items():
        for v, w in neighbors.items():
            yield u, v, w


def add_edge(graph: Graph, u: Node, v: Node, w: Weight, directed: bool = True) -> None:
    """Add the edge ``u -> v`` to ``graph`` in place.

    Undirected edges are stored in both directions. A repeated edge keeps
    the smaller weight.

    Raises:
        InputError: If ``u`` or ``v`` are not integers.
        GraphFormatError: If ``w`` is non-numeric, NaN or negative.
    """
    if isinstance(u, bool) or isinstance(v, bool) or not isinstance(u, int) or not isinstance(v, int):
        raise InputError(f"node ids must be integers, got ({u!r}, {v!r})")
    if isinstance(w, bool) or not isinstance(w, (int, float)):
        raise GraphFormatError(f"non-numeric weight {w!r} on edge ({u}, {v})")
    if math.isnan(w):
        raise GraphFormatError(f"NaN weight on edge ({u}, {v})")
    if w < 0:
        raise GraphFormatError(f"negative weight {w} on edge ({u}, {v})")
    _set_min(graph, u, v, w)
    if directed:
        graph.setdefault(v, {})
    else:
        _set_min(graph, v, u, w)


def _set_min(graph: Graph, u: Node, v: Node, w: Weight) -> None:
    neighbors = graph.setdefault(u, {})
    old = neighbors.get(v)
    if old is None or w < old:
        neighbors[v] = w


def from_edges(edges: Iterable[Edge], directed: bool = True) -> Graph:
    """Build a graph from ``(u, v, w)`` edges.

    Every endpoint becomes a key, so sinks appear with an empty mapping.

    Args:
        edges: Iterable of edges with non-negative weights.
        directed: If ``False``, each edge is also stored reversed.

    Returns:
        The adjacency mapping.

    Examples:
        ```python
        >>> from_edges([(1, 2, 5)], directed=False)
        {1: {2: 5}, 2: {1: 5}}
        ```
    """
    graph: Graph = {}
    for u, v, w in edges:
        add_edge(graph, u, v, w, directed=directed)
    return graph


def is_symmetric(graph: Mapping[Node, Mapping[Node, Weight]]) -> bool:
    """Return ``True`` if every edge has a reverse edge of equal weight."""
    for u, v, w in iter_edges(graph):
        back = graph.get(v)
        if back is None or back.get(u) != w:
            return False
    return True


__all__ = [
    "Node",
    "Weight",
    "Graph",
    "Edge",
    "nodes",
    "edge_count",
    "iter_edges",
    "add_edge",
    "from_edges",
    "is_symmetric",
]
