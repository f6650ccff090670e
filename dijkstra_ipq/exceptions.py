"""Custom exception types used across :mod:`dijkstra_ipq`."""

from __future__ import annotations


class DijkstraIPQError(Exception):
    """Base class for all package-specific errors."""


class InputError(DijkstraIPQError, ValueError):
    """Raised for invalid user input such as malformed edges."""


class GraphFormatError(InputError):
    """Raised when parsing a graph file or edge list fails."""


class ConfigError(DijkstraIPQError, ValueError):
    """Raised for invalid configuration options."""


class InvalidSourceError(InputError):
    """Raised when the source node is not part of the graph."""


class UnreachableDestinationError(DijkstraIPQError, LookupError):
    """Raised when a path is requested to a node the search never reached."""


class AlgorithmError(DijkstraIPQError, RuntimeError):
    """Raised when algorithm invariants are violated at runtime."""


class QueueError(AlgorithmError):
    """Base class for priority queue contract violations."""


class EmptyQueueError(QueueError, IndexError):
    """Raised when popping or peeking an empty queue."""


class DuplicateElementError(QueueError, ValueError):
    """Raised when pushing an element that is already queued."""


class UnknownElementError(QueueError, KeyError):
    """Raised when looking up an element that is not queued."""


__all__ = [
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
