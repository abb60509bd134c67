"""Command-line interface for the grid path-search engine.

This module provides CLI commands for solving a single map and comparing strategies.
"""

from .main import main_cli
from .commands import solve_command, compare_command, config_command
from .utils import setup_logging, load_grid_from_file, save_results

__all__ = [
    'main_cli',
    'solve_command',
    'compare_command',
    'config_command',
    'setup_logging',
    'load_grid_from_file',
    'save_results'
]
