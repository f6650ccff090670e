"""Indexed binary min-heap used as the Dijkstra frontier.

The heap lives in a plain list addressed from slot ``1`` (slot ``0`` is
unused), so the parent of slot ``i`` is ``i // 2`` and its children are
``2 * i`` and ``2 * i + 1``. A dictionary maps each queued element to its
current slot; every move inside the heap updates it, which is what makes
:meth:`IndexedPriorityQueue.change_priority` and
:meth:`IndexedPriorityQueue.contains` independent of the queue size.
"""

from __future__ import annotations

import time
from typing import Dict, Hashable, Iterable, List, NamedTuple, Optional, Protocol, Tuple

from .exceptions import (
    AlgorithmError,
    DuplicateElementError,
    EmptyQueueError,
    UnknownElementError,
)

Element = Hashable
Priority = float


class HeapEntry(NamedTuple):
    """One heap slot: the element, its priority and when it was placed.

    ``timestamp`` is informational only and never takes part in ordering.
    """

    element: Element
    priority: Priority
    timestamp: float


class PriorityQueueProtocol(Protocol):
    """Contract shared by priority queues the solver can drive."""

    def is_empty(self) -> bool:
        """Return ``True`` if no element is queued."""
        ...

    def push(self, element: Element, priority: Priority) -> None:
        """Queue a new element."""
        ...

    def pop(self) -> Element:
        """Remove and return the element with the smallest priority."""
        ...

    def purge(self) -> None:
        """Drop every queued element."""
        ...

    def count(self) -> int:
        """Return the number of queued elements."""
        ...

    def contains(self, element: Element) -> bool:
        """Return ``True`` if ``element`` is queued."""
        ...

    def change_priority(self, element: Element, new_priority: Priority) -> bool:
        """Move ``element`` to ``new_priority``; ``False`` if it is not queued."""
        ...


class IndexedPriorityQueue:
    """Binary min-heap with an element-to-slot index.

    Elements are identified by equality and hashing, so any hashable value
    (integers, strings, tuples) can be queued. Each element may be queued at
    most once.

    Args:
        items: Optional ``(element, priority)`` pairs pushed in order.

    Examples:
        ```python
        >>> q = IndexedPriorityQueue([("a", 5), ("b", 2)])
        >>> q.change_priority("a", 1)
        True
        >>> q.pop(), q.pop()
        ('a', 'b')
        ```
    """

    def __init__(self, items: Optional[Iterable[Tuple[Element, Priority]]] = None) -> None:
        self._heap: List[Optional[HeapEntry]] = [None]
        self._index: Dict[Element, int] = {}
        self._size = 0
        if items is not None:
            for element, priority in items:
                self.push(element, priority)

    # ---------- queries ---------------------------------------------------

    def is_empty(self) -> bool:
        """Return ``True`` if no element is queued."""
        return self._size == 0

    def count(self) -> int:
        """Return the number of queued elements."""
        return self._size

    def contains(self, element: Element) -> bool:
        """Return ``True`` if ``element`` is currently queued."""
        return element in self._index

    def __len__(self) -> int:
        return self._size

    def __contains__(self, element: object) -> bool:
        return element in self._index

    def __repr__(self) -> str:
        if self._size == 0:
            return "IndexedPriorityQueue(size=0)"
        root = self._entry(1)
        return f"IndexedPriorityQueue(size={self._size}, root={root.element!r}@{root.priority!r})"

    def priority(self, element: Element) -> Priority:
        """Return the current priority of ``element``.

        Raises:
            UnknownElementError: If ``element`` is not queued.
        """
        pos = self._index.get(element)
        if pos is None:
            raise UnknownElementError(f"element {element!r} is not in the queue")
        return self._entry(pos).priority

    def peek(self) -> Element:
        """Return the element with the smallest priority without removing it."""
        return self.peek_entry().element

    def peek_entry(self) -> HeapEntry:
        """Return the root entry without removing it.

        Raises:
            EmptyQueueError: If the queue is empty.
        """
        if self._size == 0:
            raise EmptyQueueError("Queue is empty")
        return self._entry(1)

    def entries(self) -> List[HeapEntry]:
        """Return the occupied heap slots in array order (slot 1 first)."""
        return [self._entry(pos) for pos in range(1, self._size + 1)]

    # ---------- mutation --------------------------------------------------

    def push(self, element: Element, priority: Priority) -> None:
        """Append ``element`` at the end of the heap and sift it up.

        Args:
            element: Hashable element identifier.
            priority: Ordering key; smaller comes out first.

        Raises:
            DuplicateElementError: If ``element`` is already queued.
        """
        if element in self._index:
            raise DuplicateElementError(f"element {element!r} is already in the queue")
        self._size += 1
        self._heap.append(None)
        self._sift_up(self._size, HeapEntry(element, priority, time.time()))

    def pop(self) -> Element:
        """Remove and return the element with the smallest priority.

        The last entry is moved into the root slot and sifted down.

        Raises:
            EmptyQueueError: If the queue is empty. The queue is left untouched.
        """
        if self._size == 0:
            raise EmptyQueueError("Queue is empty")
        root = self._entry(1)
        last = self._heap.pop()
        self._size -= 1
        del self._index[root.element]
        if self._size > 0 and last is not None:
            self._sift_down(1, last)
        return root.element

    def change_priority(self, element: Element, new_priority: Priority) -> bool:
        """Set the priority of a queued element and restore heap order.

        The element is sifted up when it now beats its parent and sifted down
        otherwise, wherever it sits in the heap. An unchanged priority moves
        nothing.

        Args:
            element: Element whose priority changes.
            new_priority: Replacement priority.

        Returns:
            ``True`` if the element was queued, ``False`` (queue unchanged)
            otherwise.
        """
        pos = self._index.get(element)
        if pos is None:
            return False
        if self._entry(pos).priority == new_priority:
            return True
        entry = HeapEntry(element, new_priority, time.time())
        if pos > 1 and new_priority < self._entry(pos // 2).priority:
            self._sift_up(pos, entry)
        else:
            self._sift_down(pos, entry)
        return True

    def purge(self) -> None:
        """Drop every queued element."""
        self._heap = [None]
        self._index.clear()
        self._size = 0

    # ---------- internals -------------------------------------------------

    def _entry(self, pos: int) -> HeapEntry:
        entry = self._heap[pos]
        if entry is None:
            raise AlgorithmError(f"empty heap slot {pos}")
        return entry

    def _place(self, pos: int, entry: HeapEntry) -> None:
        self._heap[pos] = entry
        self._index[entry.element] = pos

    def _sift_up(self, pos: int, entry: HeapEntry) -> int:
        """Move the hole at ``pos`` toward the root until ``entry`` fits."""
        parent = pos // 2
        while parent > 0 and entry.priority < self._entry(parent).priority:
            self._place(pos, self._entry(parent))
            pos = parent
            parent = pos // 2
        self._place(pos, entry)
        return pos

    def _sift_down(self, pos: int, entry: HeapEntry) -> int:
        """Move the hole at ``pos`` toward the leaves until ``entry`` fits."""
        child = 2 * pos
        while child <= self._size:
            # ties stay with the left child
            if child < self._size and self._entry(child + 1).priority < self._entry(child).priority:
                child += 1
            if not self._entry(child).priority < entry.priority:
                break
            self._place(pos, self._entry(child))
            pos = child
            child = 2 * pos
        self._place(pos, entry)
        return pos

    def check_invariants(self) -> None:
        """Verify heap order and index consistency.

        Raises:
            AlgorithmError: On the first violated invariant.
        """
        if len(self._heap) - 1 != self._size or len(self._index) != self._size:
            raise AlgorithmError(
                f"size mismatch: size={self._size} slots={len(self._heap) - 1} "
                f"index={len(self._index)}"
            )
        for pos in range(1, self._size + 1):
            entry = self._heap[pos]
            if entry is None:
                raise AlgorithmError(f"empty heap slot {pos}")
            if self._index.get(entry.element) != pos:
                raise AlgorithmError(f"index for {entry.element!r} does not point at slot {pos}")
            if pos > 1 and self._entry(pos // 2).priority > entry.priority:
                raise AlgorithmError(f"heap order violated between slots {pos // 2} and {pos}")


__all__ = ["HeapEntry", "IndexedPriorityQueue", "PriorityQueueProtocol"]
