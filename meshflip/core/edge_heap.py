"""Edge priority queue with removable entries.

``EdgeHeap`` is a binary min-heap whose entries (``HeapNode``) remember their
own position, so an entry can be removed in O(log n) when the score it holds
goes stale. ``EdgeHeapTable`` pairs the heap with a slot-aligned table that
holds the current node of each candidate slot; callers never touch nodes or
heap positions directly.
"""
from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple


@dataclass(order=True)
class HeapNode:
    """Priority queue entry; ordered by score, ties by insertion order."""
    score: float
    order: int
    value: Any = field(compare=False)
    index: int = field(default=-1, compare=False, repr=False)


class EdgeHeap:
    """Indexed binary min-heap.

    ``insert`` returns the node handle; ``remove`` accepts it back. A node
    that has been popped or removed is detached (``index == -1``) and cannot
    be removed a second time.
    """

    def __init__(self):
        self._nodes: List[HeapNode] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._nodes)

    def is_empty(self) -> bool:
        return not self._nodes

    def clear(self) -> None:
        for node in self._nodes:
            node.index = -1
        self._nodes.clear()

    def insert(self, score: float, value: Any) -> HeapNode:
        node = HeapNode(float(score), next(self._counter), value, len(self._nodes))
        self._nodes.append(node)
        self._sift_up(node.index)
        return node

    def contains(self, node: HeapNode) -> bool:
        i = node.index
        return 0 <= i < len(self._nodes) and self._nodes[i] is node

    def remove(self, node: HeapNode) -> None:
        if not self.contains(node):
            raise ValueError("node is not in this heap")
        i = node.index
        last = self._nodes.pop()
        if last is not node:
            self._nodes[i] = last
            last.index = i
            if i > 0 and last < self._nodes[(i - 1) >> 1]:
                self._sift_up(i)
            else:
                self._sift_down(i)
        node.index = -1

    def pop_min_node(self) -> HeapNode:
        if not self._nodes:
            raise IndexError("pop from empty heap")
        node = self._nodes[0]
        self.remove(node)
        return node

    def pop_min(self) -> Any:
        return self.pop_min_node().value

    def _swap(self, i: int, j: int) -> None:
        nodes = self._nodes
        nodes[i], nodes[j] = nodes[j], nodes[i]
        nodes[i].index = i
        nodes[j].index = j

    def _sift_up(self, i: int) -> None:
        nodes = self._nodes
        while i > 0:
            parent = (i - 1) >> 1
            if nodes[i] < nodes[parent]:
                self._swap(i, parent)
                i = parent
            else:
                break

    def _sift_down(self, i: int) -> None:
        nodes = self._nodes
        n = len(nodes)
        while True:
            left = 2 * i + 1
            if left >= n:
                break
            child = left
            right = left + 1
            if right < n and nodes[right] < nodes[left]:
                child = right
            if nodes[child] < nodes[i]:
                self._swap(i, child)
                i = child
            else:
                break


class EdgeHeapTable:
    """Slot-aligned lookup table owning an ``EdgeHeap`` of improving edges.

    Slot ``i`` holds the node currently queued for candidate ``i`` or ``None``.
    Only negative scores are queued.
    """

    def __init__(self, n_slots: int):
        self.heap = EdgeHeap()
        self._table: List[Optional[HeapNode]] = [None] * int(n_slots)

    def __len__(self) -> int:
        return len(self.heap)

    def __contains__(self, slot: int) -> bool:
        return self._table[slot] is not None

    @property
    def n_slots(self) -> int:
        return len(self._table)

    def is_empty(self) -> bool:
        return self.heap.is_empty()

    def handle(self, slot: int) -> Optional[HeapNode]:
        return self._table[slot]

    def discard(self, slot: int) -> None:
        node = self._table[slot]
        if node is not None:
            self.heap.remove(node)
            self._table[slot] = None

    def update(self, slot: int, score: float, edge) -> bool:
        """Replace the queued entry of ``slot``; returns True if it is queued."""
        self.discard(slot)
        if score < 0.0:
            self._table[slot] = self.heap.insert(score, (slot, edge))
            return True
        return False

    def pop_min(self) -> Tuple[int, Any, float]:
        """Pop the best entry as ``(slot, edge, score)`` and clear its slot."""
        node = self.heap.pop_min_node()
        slot, edge = node.value
        self._table[slot] = None
        return slot, edge, node.score

    def clear(self) -> None:
        self.heap.clear()
        for i in range(len(self._table)):
            self._table[i] = None


__all__ = ['HeapNode', 'EdgeHeap', 'EdgeHeapTable']
