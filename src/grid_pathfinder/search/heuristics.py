"""Distance heuristics for A* search.

Three estimates of the remaining cost from a position to the destination:
- euclidean: straight-line distance; admissible for 8-connected moves with
  sqrt(2) diagonal cost
- squared_euclidean: avoids the square root; fast, but overestimates beyond
  one unit of distance, so A* loses its optimality guarantee
- manhattan: sum of axis distances; admissible only when diagonals are
  disallowed
"""

import math
from typing import Callable, Dict, Union

from grid_pathfinder.core.data_models import Position

Heuristic = Callable[[Position, Position], float]


def euclidean(position: Position, destination: Position) -> float:
    """Straight-line distance."""
    return math.dist(position, destination)


def squared_euclidean(position: Position, destination: Position) -> float:
    """Squared straight-line distance; not a lower bound on path cost."""
    dx = destination[0] - position[0]
    dy = destination[1] - position[1]
    dz = destination[2] - position[2]
    return dx * dx + dy * dy + dz * dz


def manhattan(position: Position, destination: Position) -> float:
    """Sum of per-axis distances."""
    return (abs(destination[0] - position[0])
            + abs(destination[1] - position[1])
            + abs(destination[2] - position[2]))


HEURISTICS: Dict[str, Heuristic] = {
    'euclidean': euclidean,
    'squared_euclidean': squared_euclidean,
    'manhattan': manhattan,
}


def get_heuristic(heuristic: Union[str, Heuristic]) -> Heuristic:
    """Resolve a heuristic by name, or pass a callable through.

    Raises:
        ValueError: If the name is not registered
    """
    if callable(heuristic):
        return heuristic
    try:
        return HEURISTICS[heuristic]
    except KeyError:
        raise ValueError(
            f"Unknown heuristic '{heuristic}'. Available: {sorted(HEURISTICS)}"
        ) from None


def heuristic_name(heuristic: Heuristic) -> str:
    """Registered name of a heuristic, or its function name."""
    for name, fn in HEURISTICS.items():
        if fn is heuristic:
            return name
    return getattr(heuristic, '__name__', repr(heuristic))
