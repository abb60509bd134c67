"""Priority queues backing the A* frontier."""

from .priority_queue import PriorityQueue
from .indexed_priority_queue import IndexedPriorityQueue

__all__ = [
    'PriorityQueue',
    'IndexedPriorityQueue'
]
