"""A* grid search in three frontier-management variants.

All variants share the cost model (cardinal step = step distance, diagonal
step = step distance * sqrt(2)) and keep one mutable ``AStarNode`` per grid
position in a position-keyed node map. The frontier only holds references to
those records, so lowering a node's ``g`` is visible to every queue entry that
points at it. The variants differ in how they treat a position that is
reached again more cheaply:

- ``AStar``: indexed priority queue; the re-enqueue is an in-place priority
  update, so each node has at most one live queue entry.
- ``AStarPriorityQueueOnly``: plain heap; the re-enqueue inserts a duplicate
  entry and stale duplicates are expanded again when they surface.
- ``AStarClosedSet``: plain heap plus a closed set; a popped node whose
  position is already closed is discarded without expansion.
"""

import logging
from typing import Optional, Set, Union

from grid_pathfinder.core.data_models import (
    DIRECTIONS, AStarNode, Position, SearchStatistics, SearchStep, step_cost
)
from grid_pathfinder.queues import IndexedPriorityQueue, PriorityQueue

from .base import PathSearch, SearchContext, SearchRoutine
from .heuristics import Heuristic, get_heuristic, heuristic_name

logger = logging.getLogger(__name__)


class AStarSearchBase(PathSearch):
    """Shared A* expansion loop; subclasses choose the frontier policy."""

    default_heuristic = "euclidean"

    def __init__(self, *args, heuristic: Optional[Union[str, Heuristic]] = None, **kwargs):
        """Initialize A* searcher.

        Args:
            heuristic: Heuristic name or callable; the variant default if None
            *args, **kwargs: Forwarded to PathSearch
        """
        super().__init__(*args, **kwargs)
        self.heuristic: Heuristic = get_heuristic(heuristic or self.default_heuristic)
        logger.debug(f"{self.display_name} initialized with heuristic={heuristic_name(self.heuristic)}")

    def _new_frontier(self):
        return PriorityQueue()

    def _accept(self, node: AStarNode, closed: Set[Position],
                statistics: SearchStatistics) -> bool:
        """Decide whether a dequeued node is expanded."""
        return True

    def _search_routine(self, context: SearchContext,
                        statistics: SearchStatistics) -> SearchRoutine:
        heuristic = self.heuristic
        destination = context.destination

        start_node = AStarNode(
            position=context.start,
            g=0.0,
            h=heuristic(context.start, destination),
        )
        node_map = {context.start: start_node}
        closed: Set[Position] = set()
        queue = self._new_frontier()

        queue.enqueue(start_node, start_node.f_score)
        statistics.nodes_generated += 1
        tick = 0

        while True:
            node, found = queue.dequeue()
            if not found:
                break

            if not self._accept(node, closed, statistics):
                continue

            self._visit(node, statistics)

            if node.position == destination:
                return self._set_path(node, statistics)

            for direction in DIRECTIONS:
                next_pos = context.next_position(node.position, direction)
                tentative_g = node.g + step_cost(direction, context.step_distance)

                if not context.is_valid_move(node.position, direction):
                    continue

                next_node = node_map.get(next_pos)
                if next_node is None:
                    next_node = AStarNode(
                        position=next_pos,
                        previous=node,
                        g=tentative_g,
                        h=heuristic(next_pos, destination),
                    )
                    node_map[next_pos] = next_node
                    queue.enqueue(next_node, next_node.f_score)
                    statistics.nodes_generated += 1
                elif tentative_g < next_node.g:
                    next_node.relax(tentative_g, node)
                    queue.enqueue(next_node, next_node.f_score)
                    statistics.cost_updates += 1

            statistics.observe_frontier(len(queue))
            tick += 1
            yield SearchStep(tick=tick, node=node, frontier_size=len(queue))

        logger.debug(f"{self.display_name} exhausted with {len(node_map)} discovered positions")
        return self._exhausted(statistics)


class AStar(AStarSearchBase):
    """A* over an indexed priority queue (priority update instead of duplicates).

    Defaults to the squared Euclidean heuristic, which is fast but not
    admissible; pass ``heuristic="euclidean"`` for guaranteed optimal paths.
    """

    name = "astar"
    display_name = "A*"
    default_heuristic = "squared_euclidean"

    def _new_frontier(self):
        return IndexedPriorityQueue()


class AStarPriorityQueueOnly(AStarSearchBase):
    """A* over a duplicate-allowing heap; stale entries are re-expanded."""

    name = "astar_pq_only"
    display_name = "A* (PQ only)"


class AStarClosedSet(AStarSearchBase):
    """A* over a duplicate-allowing heap with a closed set of finalized positions."""

    name = "astar_closed_set"
    display_name = "A* (PQ+ClosedSet)"

    def _accept(self, node: AStarNode, closed: Set[Position],
                statistics: SearchStatistics) -> bool:
        if node.position in closed:
            statistics.duplicates_skipped += 1
            return False
        closed.add(node.position)
        return True
