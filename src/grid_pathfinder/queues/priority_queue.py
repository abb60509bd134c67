"""Binary min-heap priority queue that allows duplicate items.

The same item may be enqueued several times with different priorities; every
entry is independent and callers are expected to tolerate stale duplicates.
"""

import heapq
import itertools
from typing import Generic, List, Optional, Tuple, TypeVar

T = TypeVar('T')


class PriorityQueue(Generic[T]):
    """heapq-backed min-heap; equal priorities dequeue in insertion order."""

    def __init__(self) -> None:
        # (priority, sequence, item); the sequence keeps items out of comparisons
        self._heap: List[Tuple[float, int, T]] = []
        self._counter = itertools.count()

    @property
    def count(self) -> int:
        """Number of entries in the queue."""
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def enqueue(self, item: T, priority: float = 0.0) -> None:
        """Insert an entry; O(log n)."""
        heapq.heappush(self._heap, (priority, next(self._counter), item))

    def dequeue(self) -> Tuple[Optional[T], bool]:
        """Remove the minimum-priority entry.

        Returns:
            (item, True), or (None, False) when the queue is empty
        """
        if not self._heap:
            return None, False
        _, _, item = heapq.heappop(self._heap)
        return item, True

    def peek(self) -> Tuple[Optional[T], bool]:
        """Return the minimum entry without removing it."""
        if not self._heap:
            return None, False
        return self._heap[0][2], True

    def clear(self) -> None:
        self._heap.clear()
