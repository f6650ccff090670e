"""Single-source Dijkstra solver driven by :class:`IndexedPriorityQueue`."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from .exceptions import InvalidSourceError
from .graph import Node, Weight, edge_count, nodes
from .logger import Logger, NoopLogger
from .path import PathStep, reconstruct_path
from .queue import IndexedPriorityQueue, PriorityQueueProtocol


@dataclass(frozen=True)
class ShortestPathResult:
    """Distances and predecessors produced by the solver."""

    distances: Dict[Node, float]
    previous: Dict[Node, Optional[Node]]


@dataclass(frozen=True)
class SolverMetrics:
    """Performance metrics collected from a solver run."""

    n: int
    m: int
    directed: bool
    counters: Dict[str, int]
    wall_ms: float
    peak_mib: float | None = None


@dataclass(frozen=True)
class SolverConfig:
    """Configuration knobs for the solver.

    Attributes:
        prune_settled: On undirected graphs, skip neighbours that already left
            the queue. Has no effect on directed graphs and never changes the
            resulting distances.
    """

    prune_settled: bool = True


class DijkstraSolver:
    """Dijkstra's algorithm over a non-negative adjacency mapping.

    The whole search runs inside the constructor; afterwards the solver is a
    read-only view of its results.

    Args:
        graph: Mapping of node to ``{neighbour: weight}``. Referenced, not
            copied, and never modified.
        source: Node to search from.
        directed: ``False`` declares that ``graph`` already holds both
            directions of every edge, enabling the settled-neighbour filter.
        config: Optional solver configuration.
        logger: Optional event logger.

    Raises:
        InvalidSourceError: If ``source`` is not a node of ``graph``.
    """

    def __init__(
        self,
        graph: Mapping[Node, Mapping[Node, Weight]],
        source: Node,
        directed: bool = False,
        *,
        config: Optional[SolverConfig] = None,
        logger: Logger | None = None,
    ) -> None:
        all_nodes = nodes(graph)
        if source not in graph and source not in set(all_nodes):
            raise InvalidSourceError(f"source {source!r} is not a node of the graph")
        self.graph = graph
        self.source = source
        self.directed = directed
        self.cfg = config or SolverConfig()
        self.logger = logger or NoopLogger()

        self.counters: Dict[str, int] = {
            "pops": 0,
            "edges_scanned": 0,
            "edges_relaxed": 0,
            "priority_updates": 0,
            "neighbors_pruned": 0,
        }

        self._distances: Dict[Node, float] = {}
        self._previous: Dict[Node, Optional[Node]] = {}
        self._queue: PriorityQueueProtocol = IndexedPriorityQueue()
        self._queue.push(source, 0)
        for node in all_nodes:
            self._distances[node] = math.inf
            self._previous[node] = None
            if node != source:
                self._queue.push(node, math.inf)
        self._distances[source] = 0

        self.logger.debug(
            "solver.init",
            n=len(all_nodes),
            m=edge_count(graph),
            source=source,
            directed=directed,
        )

        t0 = time.perf_counter()
        self._run()
        self._time = time.perf_counter() - t0

        self.logger.info(
            "solver.done",
            source=source,
            directed=directed,
            wall_ms=round(self._time * 1000.0, 3),
            **self.counters,
        )

    # ---------- algorithm -------------------------------------------------

    def _run(self) -> None:
        dist = self._distances
        prev = self._previous
        queue = self._queue
        while not queue.is_empty():
            current = queue.pop()
            self.counters["pops"] += 1
            d_cur = dist[current]
            for neighbor, w in self._neighbors(current).items():
                self.counters["edges_scanned"] += 1
                alt = d_cur + w
                if alt < dist[neighbor]:
                    dist[neighbor] = alt
                    prev[neighbor] = current
                    self.counters["edges_relaxed"] += 1
                    if queue.change_priority(neighbor, alt):
                        self.counters["priority_updates"] += 1

    def _neighbors(self, node: Node) -> Mapping[Node, Weight]:
        """Return the adjacency mapping of ``node`` to relax.

        On undirected graphs settled neighbours are dropped: their distance is
        final and offering them again cannot improve it.
        """
        adjacent = self.graph.get(node, {})
        if self.directed or not self.cfg.prune_settled:
            return adjacent
        queue = self._queue
        valid = {v: w for v, w in adjacent.items() if queue.contains(v)}
        self.counters["neighbors_pruned"] += len(adjacent) - len(valid)
        return valid

    # ---------- public API ------------------------------------------------

    def distances(self) -> Dict[Node, float]:
        """Return a copy of the distance table (``math.inf`` when unreached)."""
        return dict(self._distances)

    def previous(self) -> Dict[Node, Optional[Node]]:
        """Return a copy of the predecessor table."""
        return dict(self._previous)

    def algorithm_time(self) -> float:
        """Return the seconds spent in the main loop, initialisation excluded."""
        return self._time

    def result(self) -> ShortestPathResult:
        """Return both tables as a :class:`ShortestPathResult`."""
        return ShortestPathResult(distances=self.distances(), previous=self.previous())

    def shortest_path_to(self, destination: Node) -> List[PathStep]:
        """Return the shortest path from the source to ``destination``.

        Raises:
            InputError: If ``destination`` is not a node of the graph.
            UnreachableDestinationError: If ``destination`` was never reached.
        """
        return reconstruct_path(self._previous, self._distances, self.source, destination)

    # ---------- counters --------------------------------------------------

    def summary(self) -> Dict[str, int]:
        """Return a copy of internal counter values."""
        return dict(self.counters)

    def metrics(self, peak_mib: float | None = None) -> SolverMetrics:
        """Return performance metrics for the run.

        Args:
            peak_mib: Optional peak memory usage in MiB, measured by the caller.
        """
        return SolverMetrics(
            n=len(self._distances),
            m=edge_count(self.graph),
            directed=self.directed,
            counters=self.summary(),
            wall_ms=self._time * 1000.0,
            peak_mib=peak_mib,
        )


__all__ = ["DijkstraSolver", "ShortestPathResult", "SolverConfig", "SolverMetrics"]
