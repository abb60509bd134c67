"""Depth-first grid search.

Uses a stack, so the most recently discovered position is expanded next. Each
position is marked visited when it is pushed and is discovered at most once.
Finds some path if one exists; the path is not necessarily the shortest.
"""

import logging
from typing import List

from grid_pathfinder.core.data_models import DIRECTIONS, PathNode, SearchStatistics, SearchStep

from .base import PathSearch, SearchContext, SearchRoutine

logger = logging.getLogger(__name__)


class DepthFirstSearch(PathSearch):
    """Stack-based traversal, last discovered first."""

    name = "dfs"
    display_name = "DFS"

    def _search_routine(self, context: SearchContext,
                        statistics: SearchStatistics) -> SearchRoutine:
        visited = {context.start}
        stack: List[PathNode] = [PathNode(position=context.start)]
        statistics.nodes_generated += 1
        tick = 0

        while stack:
            node = stack.pop()
            self._visit(node, statistics)

            if node.position == context.destination:
                return self._set_path(node, statistics)

            for direction in DIRECTIONS:
                next_pos = context.next_position(node.position, direction)

                if next_pos not in visited and context.is_valid_move(node.position, direction):
                    visited.add(next_pos)
                    stack.append(PathNode(position=next_pos, previous=node))
                    statistics.nodes_generated += 1

            statistics.observe_frontier(len(stack))
            tick += 1
            yield SearchStep(tick=tick, node=node, frontier_size=len(stack))

        logger.debug(f"DFS exhausted after visiting {len(visited)} positions")
        return self._exhausted(statistics)
