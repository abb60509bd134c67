"""Search strategies for the grid path-search engine.

Five interchangeable strategies behind one ``PathSearch`` contract: depth-first,
breadth-first and three A* frontier-management variants. Hosts pick one by
name through ``create_searcher`` or from the ``search`` config section.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Type

from .base import PathSearch, SearchSession, SearchContext, SearchEvent
from .depth_first import DepthFirstSearch
from .breadth_first import BreadthFirstSearch
from .astar import AStar, AStarPriorityQueueOnly, AStarClosedSet, AStarSearchBase
from .heuristics import HEURISTICS, get_heuristic, euclidean, squared_euclidean, manhattan

logger = logging.getLogger(__name__)


class SearchStrategy(str, Enum):
    """Registered strategy names."""
    DFS = "dfs"
    BFS = "bfs"
    ASTAR = "astar"
    ASTAR_PQ_ONLY = "astar_pq_only"
    ASTAR_CLOSED_SET = "astar_closed_set"


DEFAULT_STRATEGY = SearchStrategy.ASTAR_CLOSED_SET

STRATEGIES: Dict[SearchStrategy, Type[PathSearch]] = {
    SearchStrategy.DFS: DepthFirstSearch,
    SearchStrategy.BFS: BreadthFirstSearch,
    SearchStrategy.ASTAR: AStar,
    SearchStrategy.ASTAR_PQ_ONLY: AStarPriorityQueueOnly,
    SearchStrategy.ASTAR_CLOSED_SET: AStarClosedSet,
}


def create_searcher(strategy=DEFAULT_STRATEGY, heuristic=None, **kwargs) -> PathSearch:
    """Create a searcher for the given strategy.

    Args:
        strategy: SearchStrategy or its string value
        heuristic: Heuristic name or callable (A* strategies only)
        **kwargs: Forwarded to the searcher constructor

    Returns:
        Configured searcher

    Raises:
        ValueError: If the strategy is unknown or a heuristic is given for DFS/BFS
    """
    try:
        strategy = SearchStrategy(strategy)
    except ValueError:
        raise ValueError(
            f"Unknown search strategy '{strategy}'. "
            f"Available: {[s.value for s in SearchStrategy]}"
        ) from None

    cls = STRATEGIES[strategy]
    if issubclass(cls, AStarSearchBase):
        return cls(heuristic=heuristic, **kwargs)
    if heuristic is not None:
        raise ValueError(f"Strategy '{strategy.value}' does not use a heuristic")
    return cls(**kwargs)


def create_searcher_from_config(search_config: Optional[Any] = None, **kwargs) -> PathSearch:
    """Create a searcher from a ``search`` config section.

    Args:
        search_config: Mapping or DictConfig with strategy, heuristic,
            position_precision and log_statistics keys; the global config
            is used when None
        **kwargs: Extra constructor arguments (destination, start, oracle...)
    """
    if search_config is None:
        from grid_pathfinder.config import get_config
        cfg = get_config()
        search_config = cfg.get('search', {}) if cfg is not None else {}

    strategy = search_config.get('strategy', DEFAULT_STRATEGY.value)
    heuristic = search_config.get('heuristic', None)
    if strategy in (SearchStrategy.DFS.value, SearchStrategy.BFS.value):
        heuristic = None

    kwargs.setdefault('position_precision', int(search_config.get('position_precision', 6)))
    kwargs.setdefault('log_statistics', bool(search_config.get('log_statistics', True)))

    logger.debug(f"Creating searcher strategy={strategy}, heuristic={heuristic}")
    return create_searcher(strategy, heuristic=heuristic, **kwargs)


__all__ = [
    'PathSearch',
    'SearchSession',
    'SearchContext',
    'SearchEvent',
    'DepthFirstSearch',
    'BreadthFirstSearch',
    'AStar',
    'AStarPriorityQueueOnly',
    'AStarClosedSet',
    'AStarSearchBase',
    'SearchStrategy',
    'DEFAULT_STRATEGY',
    'STRATEGIES',
    'HEURISTICS',
    'get_heuristic',
    'euclidean',
    'squared_euclidean',
    'manhattan',
    'create_searcher',
    'create_searcher_from_config'
]
