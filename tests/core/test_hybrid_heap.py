from random import Random

import pytest

from astar_terrain.core.errors import HeapInvariantError
from astar_terrain.core.queue.hybrid_heap import HybridHeap


def _drain(heap: HybridHeap) -> list:
    keys = []
    while True:
        key = heap.pop()
        if key is None:
            return keys
        keys.append(key)


def test_push_one():
    heap = HybridHeap()
    heap.push("a", 3.0)
    assert len(heap) == 1
    assert heap.peek() == "a"
    assert heap.contains("a")
    assert heap.get_priority("a") == 3.0


def test_push_many_peek_returns_min():
    heap = HybridHeap()
    for key, priority in [("a", 5.0), ("b", 2.0), ("c", 9.0), ("d", 1.0)]:
        heap.push(key, priority)
    assert heap.peek() == "d"
    heap.check_invariants()


def test_push_duplicate_key_rejected():
    heap = HybridHeap()
    heap.push(1, 1.0)
    with pytest.raises(ValueError):
        heap.push(1, 0.5)
    assert len(heap) == 1
    assert heap.get_priority(1) == 1.0


def test_pop_empty():
    heap = HybridHeap()
    assert heap.pop() is None
    assert heap.peek() is None
    assert heap.is_empty()


def test_pop_one():
    heap = HybridHeap()
    heap.push(7, 0.0)
    assert heap.pop() == 7
    assert heap.is_empty()
    assert 7 not in heap
    assert heap.get_priority(7) is None


def test_pop_many_in_priority_order():
    heap = HybridHeap()
    priorities = {1: 4.0, 2: 8.0, 3: 1.0, 4: 6.0, 5: 2.0, 6: 9.0, 7: 3.0}
    for key, priority in priorities.items():
        heap.push(key, priority)
    assert _drain(heap) == [3, 5, 7, 1, 4, 2, 6]


def test_pop_random_multiset_non_decreasing():
    rnd = Random(1234)
    heap = HybridHeap()
    expected = {}
    for key in range(300):
        priority = float(rnd.randint(0, 50))
        heap.push(key, priority)
        expected[key] = priority
    popped = _drain(heap)
    assert sorted(popped) == list(range(300))
    values = [expected[k] for k in popped]
    assert values == sorted(values)


def test_change_priority_up():
    heap = HybridHeap()
    for key, priority in [("a", 1.0), ("b", 2.0), ("c", 3.0)]:
        heap.push(key, priority)
    heap.change_priority("a", 10.0)
    heap.check_invariants()
    assert heap.get_priority("a") == 10.0
    assert _drain(heap) == ["b", "c", "a"]


def test_change_priority_down():
    heap = HybridHeap()
    for key, priority in [("a", 1.0), ("b", 2.0), ("c", 3.0)]:
        heap.push(key, priority)
    heap.change_priority("c", 0.5)
    heap.check_invariants()
    assert heap.peek() == "c"
    assert _drain(heap) == ["c", "a", "b"]


def test_change_priority_equal_is_noop():
    heap = HybridHeap()
    heap.push("a", 1.0)
    heap.push("b", 2.0)
    before = heap.items()
    heap.change_priority("b", 2.0)
    assert heap.items() == before


def test_change_priority_absent_key_ignored():
    heap = HybridHeap()
    heap.push("a", 1.0)
    heap.change_priority("missing", 0.0)
    assert "missing" not in heap
    assert heap.items() == [("a", 1.0)]


def test_clear():
    heap = HybridHeap()
    heap.push(1, 1.0)
    heap.push(2, 2.0)
    heap.clear()
    assert heap.is_empty()
    assert 1 not in heap
    assert heap.pop() is None


def test_invariants_hold_after_random_operations():
    rnd = Random(99)
    heap = HybridHeap()
    live = {}
    next_key = 0
    for _ in range(2000):
        op = rnd.random()
        if op < 0.45:
            priority = rnd.uniform(0, 100)
            heap.push(next_key, priority)
            live[next_key] = priority
            next_key += 1
        elif op < 0.7 and live:
            key = heap.pop()
            assert live[key] == min(live.values())
            del live[key]
        elif live:
            key = rnd.choice(list(live))
            priority = rnd.uniform(0, 100)
            heap.change_priority(key, priority)
            live[key] = priority
        heap.check_invariants()
        assert len(heap) == len(live)
    for key, priority in live.items():
        assert heap.get_priority(key) == priority


def test_corrupted_position_map_detected():
    heap = HybridHeap()
    heap.push("a", 1.0)
    heap.push("b", 2.0)
    heap._positions["b"] = 0
    with pytest.raises(HeapInvariantError):
        heap.check_invariants()
    with pytest.raises(HeapInvariantError):
        heap.get_priority("b")


def test_stale_map_entry_on_empty_heap_is_fatal():
    heap = HybridHeap()
    heap._positions["ghost"] = 0
    with pytest.raises(HeapInvariantError):
        heap.pop()
