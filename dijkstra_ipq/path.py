"""Utilities for reconstructing paths from predecessor tables."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Mapping, Optional

from .exceptions import AlgorithmError, InputError, UnreachableDestinationError
from .graph import Node, Weight


@dataclass(frozen=True)
class PathStep:
    """One node on a shortest path.

    Attributes:
        node: Node identifier.
        weight: Weight of the edge from the previous step (``0`` at the source).
        accumulated_weight: Distance from the source.
    """

    node: Node
    weight: Weight
    accumulated_weight: Weight


def reconstruct_path(
    previous: Mapping[Node, Optional[Node]],
    distances: Mapping[Node, float],
    source: Node,
    target: Node,
) -> List[PathStep]:
    """Return the steps from ``source`` to ``target``.

    Walks ``previous`` backwards from ``target`` and reverses the chain.
    Each step's weight is the difference between its accumulated weight and
    the one before it.

    Args:
        previous: Predecessor of each node, ``None`` for the source and for
            unreached nodes.
        distances: Distance of each node from ``source``.
        source: Source node.
        target: Destination node.

    Returns:
        Path steps in source-to-target order. The path to the source itself
        is a single step.

    Raises:
        InputError: If ``target`` is not a node of the search.
        UnreachableDestinationError: If ``target`` was never reached.
        AlgorithmError: If the predecessor chain does not lead to ``source``.
    """
    if target not in distances:
        raise InputError(f"unknown destination {target!r}")
    if math.isinf(distances[target]):
        raise UnreachableDestinationError(f"node {target!r} is unreachable from {source!r}")

    chain: List[Node] = []
    cur: Optional[Node] = target
    seen = set()
    while cur is not None:
        if cur in seen:
            raise AlgorithmError(f"predecessor cycle through node {cur!r}")
        seen.add(cur)
        chain.append(cur)
        if cur == source:
            break
        cur = previous.get(cur)
    else:
        raise AlgorithmError(f"predecessor chain of {target!r} does not reach {source!r}")
    chain.reverse()

    steps: List[PathStep] = [PathStep(node=source, weight=0, accumulated_weight=0)]
    for node in chain[1:]:
        acc = distances[node]
        steps.append(
            PathStep(node=node, weight=acc - steps[-1].accumulated_weight, accumulated_weight=acc)
        )
    return steps


__all__ = ["PathStep", "reconstruct_path"]
