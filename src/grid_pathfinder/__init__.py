"""Grid path-search engine.

Depth-first, breadth-first and three A* variants behind a single stepwise
search contract, with the priority queues that back them.
"""

from .core import PathNode, AStarNode, SearchResult, SearchStatistics, SearchStatus
from .queues import PriorityQueue, IndexedPriorityQueue
from .search import (
    PathSearch, SearchSession, DepthFirstSearch, BreadthFirstSearch,
    AStar, AStarPriorityQueueOnly, AStarClosedSet,
    SearchStrategy, create_searcher
)
from .host import GridWorld

__version__ = "0.1.0"

__all__ = [
    'PathNode',
    'AStarNode',
    'SearchResult',
    'SearchStatistics',
    'SearchStatus',
    'PriorityQueue',
    'IndexedPriorityQueue',
    'PathSearch',
    'SearchSession',
    'DepthFirstSearch',
    'BreadthFirstSearch',
    'AStar',
    'AStarPriorityQueueOnly',
    'AStarClosedSet',
    'SearchStrategy',
    'create_searcher',
    'GridWorld'
]
