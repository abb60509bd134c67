"""Indexed binary min-heap with in-place priority updates.

Each item is stored at most once. Re-enqueueing an item that is already in the
heap replaces its priority and repairs the heap from the item's slot, which
requires an item -> array index map kept in lockstep with the heap array.
"""

from typing import Dict, Generic, Hashable, List, Optional, Tuple, TypeVar

T = TypeVar('T', bound=Hashable)


class IndexedPriorityQueue(Generic[T]):
    """Min-heap with an identity index; at most one live entry per item."""

    def __init__(self) -> None:
        self._heap: List[Tuple[T, float]] = []
        self._index: Dict[T, int] = {}

    @property
    def count(self) -> int:
        """Number of items in the queue."""
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, item: T) -> bool:
        return item in self._index

    def priority_of(self, item: T) -> Optional[float]:
        """Current priority of ``item`` or None if it is not queued."""
        idx = self._index.get(item)
        if idx is None:
            return None
        return self._heap[idx][1]

    def enqueue(self, item: T, priority: float) -> None:
        """Insert ``item`` or, if already present, update its priority."""
        if item in self._index:
            self._update_priority(item, priority)
            return

        self._heap.append((item, priority))
        idx = len(self._heap) - 1
        self._index[item] = idx
        self._sift_up(idx)

    def dequeue(self) -> Tuple[Optional[T], bool]:
        """Remove the minimum-priority item.

        Returns:
            (item, True), or (None, False) when the queue is empty
        """
        heap = self._heap
        if not heap:
            return None, False

        item = heap[0][0]
        del self._index[item]

        last = heap.pop()
        if heap:
            heap[0] = last
            self._index[last[0]] = 0
            self._sift_down(0)

        return item, True

    def clear(self) -> None:
        self._heap.clear()
        self._index.clear()

    def is_consistent(self) -> bool:
        """Check the index map against the heap array and the heap order."""
        if len(self._index) != len(self._heap):
            return False
        for idx, (item, priority) in enumerate(self._heap):
            if self._index.get(item) != idx:
                return False
            if idx > 0 and self._heap[(idx - 1) // 2][1] > priority:
                return False
        return True

    def _update_priority(self, item: T, priority: float) -> None:
        idx = self._index[item]
        old_priority = self._heap[idx][1]
        self._heap[idx] = (item, priority)

        if priority < old_priority:
            self._sift_up(idx)
        elif priority > old_priority:
            self._sift_down(idx)

    def _sift_up(self, idx: int) -> None:
        heap = self._heap
        while idx > 0:
            parent = (idx - 1) // 2
            if heap[idx][1] >= heap[parent][1]:
                break
            self._swap(idx, parent)
            idx = parent

    def _sift_down(self, idx: int) -> None:
        heap = self._heap
        count = len(heap)
        while True:
            left = idx * 2 + 1
            right = idx * 2 + 2
            smallest = idx

            if left < count and heap[left][1] < heap[smallest][1]:
                smallest = left
            if right < count and heap[right][1] < heap[smallest][1]:
                smallest = right
            if smallest == idx:
                break

            self._swap(idx, smallest)
            idx = smallest

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._index[heap[i][0]] = i
        self._index[heap[j][0]] = j
