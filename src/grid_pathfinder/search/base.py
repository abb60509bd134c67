"""Search host contract shared by every strategy.

A strategy is configured with a destination, a start position and a
movement-validity oracle, then started with ``search_path(step_distance)``.
The returned ``SearchSession`` is a cooperative, stepwise process: every call
to ``step()`` expands exactly one node, so a host scheduler can interleave the
search with other work, drive it to completion with ``run()``, or drop it
with ``cancel()``.
"""

import logging
import math
import numbers
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generator, Iterator, List, Optional

from grid_pathfinder.core.data_models import (
    DEFAULT_POSITION_PRECISION, Direction, PathNode, Position,
    SearchResult, SearchStatistics, SearchStatus, SearchStep,
    path_cost, quantize, reconstruct_path, step_position
)

logger = logging.getLogger(__name__)

ValidityOracle = Callable[[Position, Direction], bool]
StatisticsSink = Callable[[str, SearchStatistics], None]
SearchRoutine = Generator[SearchStep, None, SearchResult]


class SearchEvent:
    """Minimal listener list, fired synchronously in registration order."""

    def __init__(self) -> None:
        self._listeners: List[Callable[..., Any]] = []

    def add_listener(self, listener: Callable[..., Any]) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[..., Any]) -> None:
        self._listeners.remove(listener)

    def __len__(self) -> int:
        return len(self._listeners)

    def invoke(self, *args: Any) -> None:
        for listener in list(self._listeners):
            listener(*args)


@dataclass(frozen=True)
class SearchContext:
    """Inputs captured when a session starts; later setter calls don't leak in."""
    start: Position
    destination: Position
    is_valid_move: ValidityOracle
    step_distance: float
    precision: int = DEFAULT_POSITION_PRECISION

    def next_position(self, position: Position, direction: Direction) -> Position:
        return step_position(position, direction, self.step_distance, self.precision)


class SearchSession:
    """A running search. Owns its frontier and node map through the routine."""

    def __init__(self, searcher: 'PathSearch', routine: SearchRoutine,
                 statistics: SearchStatistics) -> None:
        self.searcher = searcher
        self.strategy = searcher.name
        self.statistics = statistics
        self.status = SearchStatus.IDLE
        self.result: Optional[SearchResult] = None
        self.ticks = 0
        self._routine = routine
        self._started_at: Optional[float] = None

    @property
    def done(self) -> bool:
        return self.result is not None

    def step(self) -> Optional[SearchStep]:
        """Advance one tick.

        Returns:
            The step just performed, or None once the session has ended
        """
        if self.done:
            return None

        if self._started_at is None:
            self._started_at = time.perf_counter()
        self.status = SearchStatus.RUNNING

        try:
            search_step = next(self._routine)
        except StopIteration as stop:
            self._complete(stop.value)
            return None
        except Exception:
            # Oracle or listener failure: the routine is dead, so close the session
            self._complete(self._failed("error"), status=SearchStatus.CANCELLED)
            raise

        self.ticks += 1
        return search_step

    def run(self, max_ticks: Optional[int] = None) -> SearchResult:
        """Drive the session until it ends.

        Args:
            max_ticks: Cancel the session after this many ticks (None = no bound)

        Returns:
            Final search result
        """
        while not self.done:
            if max_ticks is not None and self.ticks >= max_ticks:
                self.cancel(reason="tick_limit")
                break
            self.step()
        return self.result

    def cancel(self, reason: str = "cancelled") -> None:
        """Stop between ticks without emitting a path."""
        if self.done:
            return
        self._routine.close()
        self._complete(self._failed(reason), status=SearchStatus.CANCELLED)

    def __iter__(self) -> Iterator[SearchStep]:
        while True:
            search_step = self.step()
            if search_step is None:
                return
            yield search_step

    def _failed(self, reason: str) -> SearchResult:
        return SearchResult(
            success=False,
            strategy=self.strategy,
            termination_reason=reason,
            statistics=self.statistics,
        )

    def _complete(self, result: SearchResult,
                  status: Optional[SearchStatus] = None) -> None:
        if self._started_at is not None:
            self.statistics.computation_time = time.perf_counter() - self._started_at
        self.result = result
        if status is None:
            status = SearchStatus.FOUND if result.success else SearchStatus.EXHAUSTED
        self.status = status
        self.searcher._report(result)


class PathSearch(ABC):
    """Base class for grid search strategies."""

    name = "path_search"
    display_name = "Path search"

    def __init__(self,
                 destination: Optional[Position] = None,
                 is_valid_move: Optional[ValidityOracle] = None,
                 start: Optional[Position] = None,
                 position_precision: int = DEFAULT_POSITION_PRECISION,
                 statistics_sink: Optional[StatisticsSink] = None,
                 log_statistics: bool = True):
        """Initialize the searcher.

        Args:
            destination: Target grid position
            is_valid_move: Oracle ``(position, direction) -> bool``
            start: Position the search starts from
            position_precision: Decimals kept when quantizing positions
            statistics_sink: Optional callable receiving per-session statistics
            log_statistics: Log finished sessions at INFO (DEBUG otherwise)
        """
        self.position_precision = position_precision
        self._destination: Optional[Position] = None
        self._start: Optional[Position] = None
        self.is_valid_move: Optional[ValidityOracle] = is_valid_move
        self.statistics_sink = statistics_sink
        self.log_statistics = log_statistics

        self.on_path_found = SearchEvent()
        self.on_node_visited = SearchEvent()

        if destination is not None:
            self.destination = destination
        if start is not None:
            self.start = start

    @property
    def destination(self) -> Optional[Position]:
        return self._destination

    @destination.setter
    def destination(self, position: Position) -> None:
        self._destination = quantize(position, self.position_precision)

    @property
    def start(self) -> Optional[Position]:
        return self._start

    @start.setter
    def start(self, position: Position) -> None:
        self._start = quantize(position, self.position_precision)

    def set_destination(self, position: Position) -> None:
        self.destination = position

    def set_start(self, position: Position) -> None:
        self.start = position

    def set_validity_oracle(self, oracle: ValidityOracle) -> None:
        self.is_valid_move = oracle

    def search_path(self, step_distance: float,
                    start: Optional[Position] = None) -> SearchSession:
        """Start a stepwise search session.

        Args:
            step_distance: Distance covered by one move
            start: Overrides the configured start position

        Returns:
            A session that has not expanded anything yet

        Raises:
            RuntimeError: If destination, oracle or start is missing
            ValueError: If step_distance is not positive
        """
        if self._destination is None:
            raise RuntimeError("No destination configured. Set destination before calling search_path().")
        if self.is_valid_move is None:
            raise RuntimeError("No validity oracle configured. Set is_valid_move before calling search_path().")
        if start is not None:
            start = quantize(start, self.position_precision)
        else:
            start = self._start
        if start is None:
            raise RuntimeError("No start position configured. Set start or pass it to search_path().")
        if (isinstance(step_distance, bool) or not isinstance(step_distance, numbers.Real)
                or not math.isfinite(step_distance) or step_distance <= 0):
            raise ValueError(f"step_distance must be positive number, got {step_distance}")

        context = SearchContext(
            start=start,
            destination=self._destination,
            is_valid_move=self.is_valid_move,
            step_distance=float(step_distance),
            precision=self.position_precision,
        )
        statistics = SearchStatistics()
        logger.debug(f"{self.display_name} session started: start={start}, "
                     f"destination={context.destination}, step={context.step_distance}")
        return SearchSession(self, self._search_routine(context, statistics), statistics)

    def search(self, step_distance: float, start: Optional[Position] = None,
               max_ticks: Optional[int] = None) -> SearchResult:
        """Run a session to completion and return its result."""
        return self.search_path(step_distance, start).run(max_ticks=max_ticks)

    @abstractmethod
    def _search_routine(self, context: SearchContext,
                        statistics: SearchStatistics) -> SearchRoutine:
        """Traversal generator: yields one SearchStep per expansion, returns the result."""

    def _visit(self, node: PathNode, statistics: SearchStatistics) -> None:
        statistics.nodes_expanded += 1
        self.on_node_visited.invoke(node)

    def _set_path(self, node: PathNode, statistics: SearchStatistics) -> SearchResult:
        """Reconstruct the path ending at ``node`` and notify listeners."""
        path = reconstruct_path(node)
        self.on_path_found.invoke(path)
        return SearchResult(
            success=True,
            strategy=self.name,
            path=path,
            cost=path_cost(path),
            termination_reason="goal_reached",
            statistics=statistics,
        )

    def _exhausted(self, statistics: SearchStatistics) -> SearchResult:
        return SearchResult(
            success=False,
            strategy=self.name,
            termination_reason="search_exhausted",
            statistics=statistics,
        )

    def _report(self, result: SearchResult) -> None:
        stats = result.statistics
        level = logging.INFO if self.log_statistics else logging.DEBUG
        if result.success:
            logger.log(level, f"{self.display_name} search complete: nodes expanded = "
                              f"{stats.nodes_expanded}, time = {stats.computation_time * 1000:.1f} ms")
        else:
            logger.log(level, f"{self.display_name} search ended ({result.termination_reason}): "
                              f"nodes expanded = {stats.nodes_expanded}, "
                              f"time = {stats.computation_time * 1000:.1f} ms")
        if self.statistics_sink is not None:
            self.statistics_sink(self.name, stats)
