"""Core data models: positions, directions, path nodes and search results."""

from .data_models import (
    Position, Direction, DIRECTIONS, DIAGONAL_COST_MULTIPLIER,
    PathNode, AStarNode, SearchStatus, SearchStatistics, SearchStep, SearchResult,
    quantize, is_diagonal, step_position, step_cost, reconstruct_path, path_cost
)

__all__ = [
    'Position',
    'Direction',
    'DIRECTIONS',
    'DIAGONAL_COST_MULTIPLIER',
    'PathNode',
    'AStarNode',
    'SearchStatus',
    'SearchStatistics',
    'SearchStep',
    'SearchResult',
    'quantize',
    'is_diagonal',
    'step_position',
    'step_cost',
    'reconstruct_path',
    'path_cost'
]
