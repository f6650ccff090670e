"""Reference Dijkstra implementation used in tests and benchmarks."""

from __future__ import annotations

import heapq
import math
from typing import Dict, List, Mapping, Optional, Set, Tuple

from .exceptions import InvalidSourceError
from .graph import Node, Weight, nodes
from .solver import ShortestPathResult


def dijkstra_reference(
    graph: Mapping[Node, Mapping[Node, Weight]], source: Node
) -> ShortestPathResult:
    """Run textbook Dijkstra with :mod:`heapq` and lazy deletion.

    No settled-neighbour filtering is applied, so this gives an independent
    answer for both directed and symmetric graphs.

    Args:
        graph: Adjacency mapping with non-negative weights.
        source: Source node.

    Returns:
        Distances and predecessors from running Dijkstra.
    """
    all_nodes = nodes(graph)
    if source not in all_nodes:
        raise InvalidSourceError(f"source {source!r} is not a node of the graph")
    dist: Dict[Node, float] = {u: math.inf for u in all_nodes}
    pred: Dict[Node, Optional[Node]] = {u: None for u in all_nodes}
    dist[source] = 0
    # the counter keeps heap entries comparable when node ids are not
    pq: List[Tuple[float, int, Node]] = [(0, 0, source)]
    pushed = 1
    seen: Set[Node] = set()
    while pq:
        d, _, u = heapq.heappop(pq)
        if d != dist[u] or u in seen:
            continue
        seen.add(u)
        for v, w in graph.get(u, {}).items():
            nd = d + w
            if nd < dist[v]:
                dist[v] = nd
                pred[v] = u
                heapq.heappush(pq, (nd, pushed, v))
                pushed += 1
    return ShortestPathResult(distances=dist, previous=pred)


__all__ = ["dijkstra_reference"]
