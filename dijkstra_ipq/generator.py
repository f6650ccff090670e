"""Seeded random graphs for experiments, benchmarks and tests."""

from __future__ import annotations

import random
from typing import List, Optional, Set, Tuple

from .exceptions import ConfigError
from .graph import Edge, Graph, from_edges


def random_edges(
    n: int,
    m: int,
    seed: Optional[int] = 0,
    w_min: int = 1,
    w_max: int = 100,
    backbone: bool = True,
) -> List[Edge]:
    """Return ``m`` distinct edges over nodes ``0 .. n-1``.

    With ``backbone`` the chain ``i -> i+1`` is added first so every node is
    reachable from node ``0``; the remaining edges are sampled uniformly.
    Self loops are never produced and weights are integers in
    ``[w_min, w_max]``.

    Raises:
        ConfigError: If the parameters cannot produce a valid graph.
    """
    if n <= 0:
        raise ConfigError("n must be > 0.")
    if m < 0:
        raise ConfigError("m must be >= 0.")
    if w_min < 0:
        raise ConfigError("w_min must be >= 0 for Dijkstra-safe graphs.")
    if w_max < w_min:
        raise ConfigError("w_max must be >= w_min.")

    rng = random.Random(seed)
    target_m = min(m, n * (n - 1))
    seen: Set[Tuple[int, int]] = set()
    edges: List[Edge] = []

    def add(u: int, v: int) -> None:
        if u == v or (u, v) in seen:
            return
        seen.add((u, v))
        edges.append((u, v, rng.randint(w_min, w_max)))

    if backbone:
        for i in range(n - 1):
            add(i, i + 1)
    while len(edges) < target_m:
        add(rng.randrange(n), rng.randrange(n))
    return edges


def random_graph(
    n: int,
    m: int,
    seed: Optional[int] = 0,
    directed: bool = True,
    w_min: int = 1,
    w_max: int = 100,
) -> Graph:
    """Return a random adjacency mapping built from :func:`random_edges`.

    Undirected graphs store every sampled edge in both directions, keeping
    the smaller weight when both orientations were sampled.
    """
    graph = from_edges(random_edges(n, m, seed=seed, w_min=w_min, w_max=w_max), directed=directed)
    for u in range(n):
        graph.setdefault(u, {})
    return graph


__all__ = ["random_edges", "random_graph"]
