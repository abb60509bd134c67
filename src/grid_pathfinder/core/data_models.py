"""Core data models for the grid path-search engine."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

Position = Tuple[float, float, float]
Direction = Tuple[int, int, int]

# Lateral moves on the x/z plane; cardinal first, then diagonal.
DIRECTIONS: Tuple[Direction, ...] = (
    (0, 0, 1),    # forward
    (0, 0, -1),   # back
    (1, 0, 0),    # right
    (-1, 0, 0),   # left
    (1, 0, 1),    # forward-right
    (-1, 0, 1),   # forward-left
    (1, 0, -1),   # back-right
    (-1, 0, -1),  # back-left
)

DIAGONAL_COST_MULTIPLIER = math.sqrt(2)
DEFAULT_POSITION_PRECISION = 6


def quantize(position, precision: int = DEFAULT_POSITION_PRECISION) -> Position:
    """Round a position so it can be used as a stable identity key.

    Args:
        position: Any 3-element sequence of numbers
        precision: Number of decimals kept per coordinate

    Returns:
        Tuple of three floats
    """
    if len(position) != 3:
        raise ValueError(f"Position must have 3 coordinates, got {len(position)}")
    # + 0.0 folds -0.0 into 0.0
    return tuple(round(float(c), precision) + 0.0 for c in position)


def is_diagonal(direction: Direction) -> bool:
    """True when the direction has two non-zero lateral components."""
    return abs(direction[0]) + abs(direction[2]) == 2


def step_position(position: Position, direction: Direction, step_distance: float,
                  precision: int = DEFAULT_POSITION_PRECISION) -> Position:
    """Position reached by moving one step in ``direction``."""
    return quantize(
        (position[0] + direction[0] * step_distance,
         position[1] + direction[1] * step_distance,
         position[2] + direction[2] * step_distance),
        precision,
    )


def step_cost(direction: Direction, step_distance: float) -> float:
    """Cost of one move: step distance, times sqrt(2) on diagonals."""
    if is_diagonal(direction):
        return step_distance * DIAGONAL_COST_MULTIPLIER
    return step_distance


@dataclass(eq=False)
class PathNode:
    """A discovered grid vertex linked back to the node that discovered it.

    Nodes compare and hash by identity so they can live in sets and in the
    indexed priority queue while their costs change.
    """
    position: Position
    previous: Optional['PathNode'] = None
    marker: Any = None  # host-owned visual handle, never read by the engine

    def iter_chain(self):
        """Yield this node and its predecessors, destination first."""
        node = self
        while node is not None:
            yield node
            node = node.previous

    def depth(self) -> int:
        """Number of steps from the start node."""
        return sum(1 for _ in self.iter_chain()) - 1


@dataclass(eq=False)
class AStarNode(PathNode):
    """Path node carrying A* costs."""
    g: float = 0.0  # cost from start
    h: float = 0.0  # heuristic estimate to destination

    @property
    def f_score(self) -> float:
        """Total estimated cost f(n) = g(n) + h(n)."""
        return self.g + self.h

    def relax(self, g: float, previous: PathNode) -> None:
        """Record a cheaper path to this node."""
        self.g = g
        self.previous = previous


def reconstruct_path(node: PathNode) -> List[PathNode]:
    """Walk back-pointers from ``node`` and return the path start-first."""
    path = list(node.iter_chain())
    path.reverse()
    return path


def path_cost(path: List[PathNode]) -> float:
    """Geometric length of a path."""
    total = 0.0
    for a, b in zip(path, path[1:]):
        total += math.dist(a.position, b.position)
    return total


class SearchStatus(str, Enum):
    """Lifecycle of a search session."""
    IDLE = "idle"
    RUNNING = "running"
    FOUND = "found"
    EXHAUSTED = "exhausted"
    CANCELLED = "cancelled"


@dataclass
class SearchStatistics:
    """Per-session search diagnostics."""
    nodes_expanded: int = 0
    nodes_generated: int = 0
    cost_updates: int = 0
    duplicates_skipped: int = 0
    max_frontier_size: int = 0
    computation_time: float = 0.0

    def observe_frontier(self, size: int) -> None:
        if size > self.max_frontier_size:
            self.max_frontier_size = size

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary."""
        return {
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'cost_updates': self.cost_updates,
            'duplicates_skipped': self.duplicates_skipped,
            'max_frontier_size': self.max_frontier_size,
            'computation_time': self.computation_time,
        }


@dataclass
class SearchStep:
    """One scheduling tick: the node just expanded and the frontier size after."""
    tick: int
    node: PathNode
    frontier_size: int


@dataclass
class SearchResult:
    """Outcome of a search session."""
    success: bool
    strategy: str
    path: List[PathNode] = field(default_factory=list)
    cost: float = 0.0
    termination_reason: str = "unknown"
    statistics: SearchStatistics = field(default_factory=SearchStatistics)

    @property
    def steps(self) -> int:
        """Number of moves on the path."""
        return max(0, len(self.path) - 1)

    def positions(self) -> List[Position]:
        return [node.position for node in self.path]

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON-friendly dictionary."""
        return {
            'success': self.success,
            'strategy': self.strategy,
            'path': [list(p) for p in self.positions()],
            'steps': self.steps,
            'cost': self.cost,
            'termination_reason': self.termination_reason,
            'search_stats': self.statistics.to_dict(),
        }
