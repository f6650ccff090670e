"""Public package exports for :mod:`dijkstra_ipq`."""

from __future__ import annotations

from .exceptions import (
    AlgorithmError,
    ConfigError,
    DijkstraIPQError,
    DuplicateElementError,
    EmptyQueueError,
    GraphFormatError,
    InputError,
    InvalidSourceError,
    QueueError,
    UnknownElementError,
    UnreachableDestinationError,
)
from .graph import Graph, from_edges, nodes
from .io import read_graph, write_graph
from .logger import Logger, NoopLogger, StdLogger
from .path import PathStep, reconstruct_path
from .queue import HeapEntry, IndexedPriorityQueue, PriorityQueueProtocol
from .reference import dijkstra_reference
from .solver import DijkstraSolver, ShortestPathResult, SolverConfig, SolverMetrics

try:  # pragma: no cover
    from .graph_numpy import graph_from_matrix, graph_to_matrix
except ModuleNotFoundError:  # pragma: no cover
    graph_from_matrix = None  # type: ignore[assignment]
    graph_to_matrix = None  # type: ignore[assignment]

__version__ = "0.1.0"

__all__ = [
    "Graph",
    "from_edges",
    "nodes",
    "HeapEntry",
    "IndexedPriorityQueue",
    "PriorityQueueProtocol",
    "DijkstraSolver",
    "ShortestPathResult",
    "SolverConfig",
    "SolverMetrics",
    "PathStep",
    "reconstruct_path",
    "dijkstra_reference",
    "graph_from_matrix",
    "graph_to_matrix",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "read_graph",
    "write_graph",
    "DijkstraIPQError",
    "InputError",
    "GraphFormatError",
    "ConfigError",
    "InvalidSourceError",
    "UnreachableDestinationError",
    "AlgorithmError",
    "QueueError",
    "EmptyQueueError",
    "DuplicateElementError",
    "UnknownElementError",
]
