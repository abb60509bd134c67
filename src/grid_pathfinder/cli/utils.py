"""CLI utility functions."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from grid_pathfinder.core.data_models import SearchResult
from grid_pathfinder.host import GridWorld


def setup_logging(level: int = logging.INFO,
                 format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Hydra is chatty at INFO while composing
    logging.getLogger('hydra').setLevel(logging.WARNING)


def load_grid_from_file(file_path: Union[str, Path],
                        cell_size: float = 1.0,
                        allow_diagonal: bool = True,
                        cut_corners: bool = True) -> GridWorld:
    """Load an ASCII map that carries both a start and a goal marker.

    Args:
        file_path: Path to map file
        cell_size: World distance between adjacent cells (the search step)
        allow_diagonal: Permit diagonal moves
        cut_corners: Permit diagonals past blocked cardinal neighbors

    Returns:
        Loaded GridWorld

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the map is malformed or lacks S/G markers
    """
    world = GridWorld.from_file(
        file_path,
        cell_size=cell_size,
        allow_diagonal=allow_diagonal,
        cut_corners=cut_corners,
    )

    if world.start_cell is None or world.goal_cell is None:
        raise ValueError(f"Map {file_path} needs both a start 'S' and a goal 'G' marker")

    return world


def save_results(results: Dict[str, Any],
                output_path: Union[str, Path],
                pretty: bool = True) -> None:
    """Save results to JSON file.

    Args:
        results: Results dictionary
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)

    # Ensure output directory exists
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Convert numpy scalars and arrays to plain Python for JSON serialization
    def convert_numpy(obj):
        if hasattr(obj, 'tolist'):
            return obj.tolist()
        elif isinstance(obj, dict):
            return {k: convert_numpy(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [convert_numpy(item) for item in obj]
        else:
            return obj

    serializable_results = convert_numpy(results)

    with open(output_path, 'w') as f:
        if pretty:
            json.dump(serializable_results, f, indent=2, sort_keys=True)
        else:
            json.dump(serializable_results, f)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds < 0.001:
        return f"{seconds*1000000:.1f}µs"
    elif seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"


def create_comparison_rows(results: Dict[str, SearchResult]) -> List[Dict[str, Any]]:
    """Flatten per-strategy results into table rows.

    Args:
        results: Mapping of strategy name to its search result

    Returns:
        One row per strategy, in input order
    """
    rows = []
    for strategy, result in results.items():
        stats = result.statistics
        rows.append({
            'strategy': strategy,
            'success': result.success,
            'steps': result.steps if result.success else None,
            'cost': result.cost if result.success else None,
            'nodes_expanded': stats.nodes_expanded,
            'max_frontier_size': stats.max_frontier_size,
            'computation_time': stats.computation_time,
            'termination_reason': result.termination_reason,
        })
    return rows


def print_comparison(rows: List[Dict[str, Any]]) -> None:
    """Print strategy comparison table.

    Args:
        rows: Rows from create_comparison_rows
    """
    print("\n" + "="*72)
    print("STRATEGY COMPARISON")
    print("="*72)
    print(f"{'Strategy':<18}{'Found':<7}{'Steps':>7}{'Cost':>10}{'Expanded':>10}{'Frontier':>10}{'Time':>10}")
    print("-"*72)

    for row in rows:
        steps = '-' if row['steps'] is None else str(row['steps'])
        cost = '-' if row['cost'] is None else f"{row['cost']:.3f}"
        print(f"{row['strategy']:<18}"
              f"{'yes' if row['success'] else 'no':<7}"
              f"{steps:>7}"
              f"{cost:>10}"
              f"{row['nodes_expanded']:>10}"
              f"{row['max_frontier_size']:>10}"
              f"{format_duration(row['computation_time']):>10}")
