"""Host-side helpers: an occupancy-grid movement oracle for headless runs."""

from .grid_world import GridWorld

__all__ = [
    'GridWorld'
]
