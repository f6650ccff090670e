"""Graph input/output helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Mapping, Optional

from .exceptions import GraphFormatError, InputError
from .graph import Edge, Graph, Node, Weight, from_edges, iter_edges

EdgeList = List[Edge]


def _parse_weight(text: str) -> Weight:
    """Parse ``text`` as an ``int`` when it is integral, else as a ``float``."""
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


def _split_row(row: str) -> List[str]:
    for sep in (";", "\t", ","):
        if sep in row:
            return [part.strip() for part in row.split(sep)]
    return row.split()


def _read_csv(path: Path) -> EdgeList:
    """Read a delimited edge file.

    Each data row holds origin node, destination node and weight, separated
    by semicolons, tabs, commas or whitespace. Empty lines, lines starting
    with ``#`` and a leading header row (first row whose node columns are
    not integers) are ignored.

    Args:
        path: Path to the edge file.

    Returns:
        Edges as ``(u, v, w)`` tuples in file order.

    Raises:
        GraphFormatError: If a data row is malformed or no edge is found.
    """
    edges: EdgeList = []
    first = True
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row or row.startswith("#"):
                continue
            parts = _split_row(row)
            if len(parts) < 3:
                raise GraphFormatError(f"{path}:{lineno}: expected 'u;v;w', got {row!r}")
            try:
                u = int(parts[0])
                v = int(parts[1])
            except ValueError as exc:
                if first:
                    first = False
                    continue  # header
                raise GraphFormatError(f"{path}:{lineno}: invalid node id in {row!r}") from exc
            first = False
            try:
                w = _parse_weight(parts[2])
            except ValueError as exc:
                raise GraphFormatError(f"{path}:{lineno}: invalid weight in {row!r}") from exc
            edges.append((u, v, w))
    if not edges:
        raise GraphFormatError("no edges parsed from file")
    return edges


def _write_csv(path: Path, graph: Mapping[Node, Mapping[Node, Weight]]) -> None:
    """Write the edges of ``graph`` as ``origin;destination;weight`` rows with a header."""
    with path.open("w", encoding="utf-8") as fh:
        fh.write("origin;destination;weight\n")
        for u, v, w in iter_edges(graph):
            fh.write(f"{u};{v};{w}\n")


def _read_jsonl(path: Path) -> EdgeList:
    """Read a JSON Lines file of ``{"u": .., "v": .., "w": ..}`` objects.

    Raises:
        GraphFormatError: If a line is not a valid edge object or no edge is found.
    """
    edges: EdgeList = []
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row:
                continue
            try:
                obj = json.loads(row)
                u = int(obj["u"])
                v = int(obj["v"])
                w = obj["w"]
            except (ValueError, KeyError, TypeError) as exc:
                raise GraphFormatError(f"{path}:{lineno}: invalid edge {row!r}") from exc
            if isinstance(w, str):
                try:
                    w = _parse_weight(w)
                except ValueError as exc:
                    raise GraphFormatError(f"{path}:{lineno}: invalid weight {w!r}") from exc
            edges.append((u, v, w))
    if not edges:
        raise GraphFormatError("no edges parsed from file")
    return edges


def _write_jsonl(path: Path, graph: Mapping[Node, Mapping[Node, Weight]]) -> None:
    """Write one ``{"u", "v", "w"}`` JSON object per edge."""
    with path.open("w", encoding="utf-8") as fh:
        for u, v, w in iter_edges(graph):
            fh.write(json.dumps({"u": u, "v": v, "w": w}) + "\n")


_FMT_READERS = {
    "csv": _read_csv,
    "jsonl": _read_jsonl,
}

_FMT_WRITERS = {
    "csv": _write_csv,
    "jsonl": _write_jsonl,
}


def _detect_format(path: Path) -> Optional[str]:
    """Return ``"csv"`` or ``"jsonl"`` from the file extension, or ``None``."""
    ext = path.suffix.lower()
    if ext in {".csv", ".tsv", ".txt"}:
        return "csv"
    if ext in {".jsonl", ".json"}:
        return "jsonl"
    return None


def read_edges(path: str, fmt: Optional[str] = None) -> EdgeList:
    """Read the raw edge list from ``path``.

    Raises:
        GraphFormatError: If the format is unknown or the file is malformed
            or not UTF-8 text.
        InputError: If the file cannot be opened or read.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_READERS:
        raise GraphFormatError(f"unknown graph format for {path}")
    try:
        return _FMT_READERS[fmt](p)
    except UnicodeDecodeError as exc:
        raise GraphFormatError(f"{path}: not UTF-8 text ({exc.reason})") from exc
    except OSError as exc:
        raise InputError(f"cannot read {path}: {exc.strerror or exc}") from exc


def read_graph(path: str, fmt: Optional[str] = None, directed: bool = True) -> Graph:
    """Read a graph from a file in the specified format.

    Args:
        path: The path to the graph file.
        fmt: ``"csv"`` or ``"jsonl"``; auto-detected from the extension when
            omitted.
        directed: If ``False``, every edge is also stored reversed.

    Returns:
        The adjacency mapping built from the file.

    Raises:
        GraphFormatError: If the format is unknown, the file is malformed, or
            an edge has a negative weight.
    """
    return from_edges(read_edges(path, fmt), directed=directed)


def write_graph(
    graph: Mapping[Node, Mapping[Node, Weight]], path: str, fmt: Optional[str] = None
) -> None:
    """Write a graph to a file in the specified format.

    Raises:
        GraphFormatError: If the format is unknown or unsupported.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_WRITERS:
        raise GraphFormatError(f"unknown graph format for {path}")
    _FMT_WRITERS[fmt](p, graph)


__all__ = ["read_edges", "read_graph", "write_graph"]
