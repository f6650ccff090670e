import math
import random

import pytest

from dijkstra_ipq.exceptions import (
    AlgorithmError,
    DuplicateElementError,
    EmptyQueueError,
    UnknownElementError,
)
from dijkstra_ipq.queue import HeapEntry, IndexedPriorityQueue

STRESS_PRIORITIES = [13, 18, 25, 98, 24, 1, 6, 12, 7]


def _stress_queue() -> IndexedPriorityQueue:
    q = IndexedPriorityQueue()
    for i, priority in enumerate(STRESS_PRIORITIES, start=1):
        q.push(f"Test item {i}", priority)
    return q


def _drain(q: IndexedPriorityQueue):
    out = []
    while not q.is_empty():
        out.append(q.pop())
    return out


def test_new_queue_is_empty():
    q = IndexedPriorityQueue()
    assert q.is_empty()
    assert q.count() == 0
    assert len(q) == 0


def test_push_then_pop_single_item():
    q = IndexedPriorityQueue()
    q.push("Test item", 1)
    assert q.count() == 1
    assert q.contains("Test item")
    assert q.pop() == "Test item"
    assert q.count() == 0
    assert q.is_empty()
    assert not q.contains("Test item")


def test_stress_pops_smallest_first():
    q = _stress_queue()
    assert q.count() == 9
    q.check_invariants()
    assert q.pop() == "Test item 6"
    assert q.pop() == "Test item 7"
    assert q.pop() == "Test item 9"
    assert q.count() == 6
    q.check_invariants()


def test_lowering_mid_priority_element_makes_it_next():
    q = _stress_queue()
    for _ in range(3):
        q.pop()
    assert q.change_priority("Test item 1", 1) is True
    q.check_invariants()
    assert q.pop() == "Test item 1"
    assert q.count() == 5
    assert not q.is_empty()


def test_pop_on_empty_raises_and_keeps_state():
    q = _stress_queue()
    q.purge()
    assert q.count() == 0
    with pytest.raises(EmptyQueueError, match="Queue is empty"):
        q.pop()
    assert q.count() == 0
    assert q.is_empty()
    q.check_invariants()


def test_empty_queue_error_is_an_index_error():
    with pytest.raises(IndexError):
        IndexedPriorityQueue().pop()
    with pytest.raises(EmptyQueueError):
        IndexedPriorityQueue().peek()


def test_random_pushes_pop_in_non_decreasing_order():
    rng = random.Random(7)
    for trial in range(20):
        q = IndexedPriorityQueue()
        priorities = {}
        for element in range(rng.randint(1, 60)):
            priorities[element] = rng.randint(0, 30)
            q.push(element, priorities[element])
        popped = [priorities[e] for e in _drain(q)]
        assert popped == sorted(popped)


def test_count_tracks_pushes_minus_pops():
    q = IndexedPriorityQueue()
    for k in range(10):
        q.push(k, 10 - k)
    for m in range(1, 11):
        q.pop()
        assert q.count() == 10 - m
        assert q.is_empty() == (q.count() == 0)


def test_change_priority_preserves_heap_in_both_directions():
    rng = random.Random(3)
    q = IndexedPriorityQueue((i, rng.randint(0, 100)) for i in range(64))
    for _ in range(300):
        element = rng.randrange(64)
        q.change_priority(element, rng.randint(-50, 150))
        q.check_invariants()
    popped = []
    while not q.is_empty():
        popped.append(q.peek_entry().priority)
        q.pop()
    assert popped == sorted(popped)


def test_change_priority_raising_root_sifts_down():
    q = IndexedPriorityQueue([("a", 1), ("b", 2), ("c", 3)])
    assert q.change_priority("a", 10)
    q.check_invariants()
    assert _drain(q) == ["b", "c", "a"]


def test_change_priority_lowering_last_slot_sifts_up():
    q = IndexedPriorityQueue([("a", 1), ("b", 2), ("c", 3), ("d", 4)])
    assert q.change_priority("d", 0)
    assert q.peek() == "d"
    q.check_invariants()


def test_change_priority_unchanged_moves_nothing():
    q = _stress_queue()
    before = [(e.element, e.priority) for e in q.entries()]
    assert q.change_priority("Test item 3", 25)
    assert [(e.element, e.priority) for e in q.entries()] == before


def test_change_priority_on_absent_element_returns_false():
    q = _stress_queue()
    before = q.entries()
    assert q.change_priority("missing", 0) is False
    assert q.entries() == before
    assert q.count() == 9


def test_priority_of_absent_element_raises():
    q = IndexedPriorityQueue([(1, 5)])
    assert q.priority(1) == 5
    with pytest.raises(UnknownElementError):
        q.priority(2)


def test_duplicate_push_is_rejected():
    q = IndexedPriorityQueue([(1, 5)])
    with pytest.raises(DuplicateElementError):
        q.push(1, 0)
    assert q.count() == 1
    assert q.priority(1) == 5


def test_sift_down_reaches_last_slot():
    # heap is a1, d2, c6, b5, e7; after the pop e7 must sink past d2 into b5's slot
    q = IndexedPriorityQueue([("a", 1), ("b", 5), ("c", 6), ("d", 2), ("e", 7)])
    assert q.pop() == "a"
    q.check_invariants()
    assert [e.element for e in q.entries()] == ["d", "b", "c", "e"]
    assert _drain(q) == ["d", "b", "c", "e"]


def test_ties_go_to_left_child():
    q = IndexedPriorityQueue([("root", 0), ("left", 4), ("right", 4), ("last", 9)])
    q.pop()
    assert q.peek() == "left"
    assert [e.element for e in q.entries()] == ["left", "last", "right"]


def test_infinite_priorities_and_composite_keys():
    q = IndexedPriorityQueue()
    q.push((1, "x"), math.inf)
    q.push((1, "y"), math.inf)
    q.push((2, "x"), 0)
    assert q.pop() == (2, "x")
    assert q.change_priority((1, "y"), 3)
    assert q.pop() == (1, "y")
    assert (1, "x") in q


def test_entries_and_repr():
    q = IndexedPriorityQueue([("a", 2), ("b", 1)])
    entries = q.entries()
    assert [e.element for e in entries] == ["b", "a"]
    assert all(isinstance(e, HeapEntry) for e in entries)
    assert q.peek_entry().priority == 1
    assert "size=2" in repr(q)
    assert repr(IndexedPriorityQueue()) == "IndexedPriorityQueue(size=0)"


def test_purge_allows_reuse():
    q = _stress_queue()
    q.purge()
    q.push("Test item 1", 3)
    assert q.count() == 1
    assert q.pop() == "Test item 1"


def test_corrupted_slot_raises_algorithm_error():
    q = IndexedPriorityQueue([("a", 2), ("b", 1)])
    q._heap[q._index["a"]] = None
    with pytest.raises(AlgorithmError, match="empty heap slot"):
        q.priority("a")
    with pytest.raises(AlgorithmError):
        q.check_invariants()
