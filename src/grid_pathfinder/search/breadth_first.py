"""Breadth-first grid search.

Uses a FIFO queue, so positions are expanded in non-decreasing step count from
the start. On a grid where every move costs the same this yields a path with
the fewest moves.
"""

import logging
from collections import deque
from typing import Deque

from grid_pathfinder.core.data_models import DIRECTIONS, PathNode, SearchStatistics, SearchStep

from .base import PathSearch, SearchContext, SearchRoutine

logger = logging.getLogger(__name__)


class BreadthFirstSearch(PathSearch):
    """FIFO traversal; fewest-moves path on unweighted grids."""

    name = "bfs"
    display_name = "BFS"

    def _search_routine(self, context: SearchContext,
                        statistics: SearchStatistics) -> SearchRoutine:
        visited = {context.start}
        queue: Deque[PathNode] = deque([PathNode(position=context.start)])
        statistics.nodes_generated += 1
        tick = 0

        while queue:
            node = queue.popleft()
            self._visit(node, statistics)

            if node.position == context.destination:
                return self._set_path(node, statistics)

            for direction in DIRECTIONS:
                next_pos = context.next_position(node.position, direction)

                if next_pos not in visited and context.is_valid_move(node.position, direction):
                    visited.add(next_pos)
                    queue.append(PathNode(position=next_pos, previous=node))
                    statistics.nodes_generated += 1

            statistics.observe_frontier(len(queue))
            tick += 1
            yield SearchStep(tick=tick, node=node, frontier_size=len(queue))

        logger.debug(f"BFS exhausted after visiting {len(visited)} positions")
        return self._exhausted(statistics)
