"""Binary min-heap with a key -> position map for in-place re-prioritisation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Tuple

from ..errors import HeapInvariantError


@dataclass
class HeapItem:
    key: Hashable
    priority: float


class HybridHeap:
    """Min-heap over ``(key, priority)`` pairs.

    Each key appears at most once. A dictionary tracks where every key lives in
    the backing list so ``contains``, ``get_priority`` and ``change_priority``
    avoid a linear scan. Order among equal priorities is unspecified.
    """

    def __init__(self) -> None:
        self._items: List[HeapItem] = []
        self._positions: Dict[Hashable, int] = {}

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._positions

    def contains(self, key: Hashable) -> bool:
        return key in self._positions

    def is_empty(self) -> bool:
        return not self._items

    def peek(self) -> Optional[Hashable]:
        """Return the key with the smallest priority without removing it."""
        if not self._items:
            return None
        return self._items[0].key

    def get_priority(self, key: Hashable) -> Optional[float]:
        """Return the priority stored for ``key`` or ``None`` if absent."""
        pos = self._positions.get(key)
        if pos is None:
            return None
        return self._item_at(pos, key).priority

    def items(self) -> List[Tuple[Hashable, float]]:
        """Return a snapshot of ``(key, priority)`` pairs in heap order."""
        return [(item.key, item.priority) for item in self._items]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def push(self, key: Hashable, priority: float) -> None:
        """Insert ``key`` with ``priority``.

        Raises ``ValueError`` if ``key`` is already queued; use
        :meth:`change_priority` to update it instead.
        """
        if key in self._positions:
            raise ValueError(f"key {key!r} is already in the heap")
        self._items.append(HeapItem(key, priority))
        index = len(self._items) - 1
        self._positions[key] = index
        self._sift_up(index)

    def pop(self) -> Optional[Hashable]:
        """Remove and return the key with the smallest priority."""
        if not self._items:
            if self._positions:
                raise HeapInvariantError(
                    f"heap is empty but {len(self._positions)} keys are still mapped"
                )
            return None

        root = self._items[0]
        last = self._items.pop()
        del self._positions[root.key]
        if self._items:
            self._items[0] = last
            self._positions[last.key] = 0
            self._sift_down(0)
        return root.key

    def change_priority(self, key: Hashable, new_priority: float) -> None:
        """Move ``key`` to ``new_priority``, sifting up or down as needed.

        Unknown keys are ignored.
        """
        pos = self._positions.get(key)
        if pos is None:
            return

        item = self._item_at(pos, key)
        old_priority = item.priority
        item.priority = new_priority
        if new_priority < old_priority:
            self._sift_up(pos)
        elif new_priority > old_priority:
            self._sift_down(pos)

    def clear(self) -> None:
        self._items.clear()
        self._positions.clear()

    # ------------------------------------------------------------------
    # Consistency
    # ------------------------------------------------------------------
    def check_invariants(self) -> None:
        """Raise :class:`HeapInvariantError` if ordering or the map is broken."""
        if len(self._positions) != len(self._items):
            raise HeapInvariantError(
                f"{len(self._items)} items but {len(self._positions)} mapped keys"
            )
        for index, item in enumerate(self._items):
            if self._positions.get(item.key) != index:
                raise HeapInvariantError(
                    f"key {item.key!r} stored at {index} but mapped to "
                    f"{self._positions.get(item.key)}"
                )
            for child in (2 * index + 1, 2 * index + 2):
                if child < len(self._items) and self._items[child].priority < item.priority:
                    raise HeapInvariantError(
                        f"child {child} has lower priority than parent {index}"
                    )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _item_at(self, pos: int, key: Hashable) -> HeapItem:
        if pos >= len(self._items) or self._items[pos].key != key:
            raise HeapInvariantError(f"position map for {key!r} points at slot {pos}")
        return self._items[pos]

    def _swap(self, i: int, j: int) -> None:
        items = self._items
        items[i], items[j] = items[j], items[i]
        self._positions[items[i].key] = i
        self._positions[items[j].key] = j

    def _sift_up(self, index: int) -> int:
        items = self._items
        while index > 0:
            parent = (index - 1) // 2
            if items[parent].priority <= items[index].priority:
                break
            self._swap(index, parent)
            index = parent
        return index

    def _sift_down(self, index: int) -> int:
        items = self._items
        size = len(items)
        while True:
            left = 2 * index + 1
            if left >= size:
                break
            right = left + 1
            smallest = left
            if right < size and items[right].priority < items[left].priority:
                smallest = right
            if items[index].priority <= items[smallest].priority:
                break
            self._swap(index, smallest)
            index = smallest
        return index


__all__ = ["HybridHeap", "HeapItem"]
