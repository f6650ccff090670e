"""Structured event logging for the solver and the command-line runner."""

from __future__ import annotations

import json
import math
import sys
from typing import Any, Dict, Protocol


class Logger(Protocol):
    """Protocol for the event sinks accepted by :class:`~dijkstra_ipq.solver.DijkstraSolver`."""

    def info(self, event: str, **fields: Any) -> None:
        """Emit an ``INFO``-level event."""
        ...

    def debug(self, event: str, **fields: Any) -> None:
        """Emit a ``DEBUG``-level event."""
        ...


class NoopLogger:
    """Logger that discards all events."""

    def info(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        """Ignore an ``INFO`` event."""
        return

    def debug(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        """Ignore a ``DEBUG`` event."""
        return


def _json_safe(value: Any) -> Any:
    # JSON has no infinity literal
    if isinstance(value, float) and math.isinf(value):
        return None
    return value


class StdLogger:
    """Line-oriented logger writing ``key=value`` or JSON records to a stream.

    Args:
        level: Minimum level to emit: ``"debug"``, ``"info"`` or ``"warning"``.
        json_fmt: Emit one JSON object per line instead of plain text.
        stream: Output stream, ``sys.stderr`` when omitted.
    """

    _levels: Dict[str, int] = {"debug": 10, "info": 20, "warning": 30}

    def __init__(
        self,
        level: str = "warning",
        json_fmt: bool = False,
        stream: Any | None = None,
    ) -> None:
        if level not in self._levels:
            raise ValueError(f"unknown log level {level!r}")
        self.level = level
        self.json_fmt = json_fmt
        self.stream = stream or sys.stderr

    def enabled(self, level: str) -> bool:
        """Return ``True`` if events at ``level`` would be written."""
        return self._levels[level] >= self._levels[self.level]

    def log(self, level: str, event: str, **fields: Any) -> None:
        """Emit a log ``event`` at ``level`` with additional ``fields``."""
        if not self.enabled(level):
            return
        if self.json_fmt:
            obj: Dict[str, Any] = {"level": level, "event": event}
            obj.update({k: _json_safe(v) for k, v in fields.items()})
            self.stream.write(json.dumps(obj) + "\n")
        else:
            kv = " ".join(f"{k}={v}" for k, v in fields.items())
            msg = f"{level} {event} {kv}".rstrip()
            self.stream.write(msg + "\n")

    def info(self, event: str, **fields: Any) -> None:
        """Emit an ``INFO`` event."""
        self.log("info", event, **fields)

    def debug(self, event: str, **fields: Any) -> None:
        """Emit a ``DEBUG`` event."""
        self.log("debug", event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        """Emit a ``WARNING`` event."""
        self.log("warning", event, **fields)


__all__ = ["Logger", "NoopLogger", "StdLogger"]
