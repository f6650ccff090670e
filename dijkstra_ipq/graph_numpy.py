"""NumPy adjacency-matrix adapters for the dict-based graph."""

from __future__ import annotations

from typing import List, Mapping, Optional, Sequence

import numpy as np
import numpy.typing as npt

from .exceptions import GraphFormatError, InputError
from .graph import Graph, Node, Weight, add_edge
from .graph import nodes as graph_nodes


def graph_from_matrix(
    matrix: npt.ArrayLike,
    nodes: Optional[Sequence[Node]] = None,
    directed: bool = True,
) -> Graph:
    """Build an adjacency mapping from a square weight matrix.

    Entry ``matrix[i, j]`` is the weight of ``nodes[i] -> nodes[j]``. Zero,
    ``inf`` and ``nan`` entries mean "no edge", and the diagonal is ignored.

    Args:
        matrix: Square array of non-negative weights.
        nodes: Node ids for rows and columns, ``0 .. n-1`` when omitted.
        directed: If ``False``, each edge is also stored reversed (the
            smaller weight wins when both orientations are present).

    Raises:
        InputError: If the matrix is not square or ``nodes`` has the wrong length.
        GraphFormatError: If the matrix contains a negative weight.
    """
    arr = np.asarray(matrix, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise InputError(f"adjacency matrix must be square, got shape {arr.shape}")
    n = int(arr.shape[0])
    ids: List[Node] = list(range(n)) if nodes is None else [int(u) for u in nodes]
    if len(ids) != n:
        raise InputError(f"expected {n} node ids, got {len(ids)}")

    graph: Graph = {u: {} for u in ids}
    present = np.isfinite(arr) & (arr != 0)
    np.fill_diagonal(present, False)
    rows, cols = np.nonzero(present)
    for i, j in zip(rows.tolist(), cols.tolist()):
        w = float(arr[i, j])
        if w < 0:
            raise GraphFormatError(f"negative weight {w} on edge ({ids[i]}, {ids[j]})")
        add_edge(graph, ids[i], ids[j], int(w) if w.is_integer() else w, directed=directed)
    return graph


def graph_to_matrix(
    graph: Mapping[Node, Mapping[Node, Weight]],
    nodes: Optional[Sequence[Node]] = None,
) -> npt.NDArray[np.float64]:
    """Return the dense weight matrix of ``graph``.

    Missing edges are ``inf`` and the diagonal is ``0``.

    Args:
        graph: Adjacency mapping.
        nodes: Row/column order, the graph's own node order when omitted.
    """
    ids = list(nodes) if nodes is not None else graph_nodes(graph)
    pos = {u: i for i, u in enumerate(ids)}
    out = np.full((len(ids), len(ids)), np.inf, dtype=np.float64)
    np.fill_diagonal(out, 0.0)
    for u, neighbors in graph.items():
        if u not in pos:
            continue
        for v, w in neighbors.items():
            if v in pos and u != v:
                out[pos[u], pos[v]] = float(w)
    return out


__all__ = ["graph_from_matrix", "graph_to_matrix"]
