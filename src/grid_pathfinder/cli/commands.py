"""CLI command implementations."""

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from omegaconf import DictConfig, OmegaConf

from grid_pathfinder.config import load_config, validate_config, ConfigValidationError
from grid_pathfinder.core.data_models import SearchResult
from grid_pathfinder.host import GridWorld
from grid_pathfinder.search import SearchStrategy, create_searcher_from_config

from .utils import (
    load_grid_from_file, save_results, format_duration,
    create_comparison_rows, print_comparison
)

logger = logging.getLogger(__name__)


def _build_overrides(args) -> List[str]:
    """Translate command flags into Hydra overrides."""
    overrides = []
    if getattr(args, 'strategy', None):
        overrides.append(f"search.strategy={args.strategy}")
    if getattr(args, 'heuristic', None):
        overrides.append(f"search.heuristic={args.heuristic}")
    if getattr(args, 'step', None) is not None:
        overrides.append(f"search.step_distance={args.step}")
    if getattr(args, 'max_ticks', None) is not None:
        overrides.append(f"search.max_ticks={args.max_ticks}")
    if getattr(args, 'no_diagonal', False):
        overrides.append("grid.allow_diagonal=false")
    if getattr(args, 'no_corner_cut', False):
        overrides.append("grid.cut_corners=false")

    # Add global config overrides
    if getattr(args, 'config', None):
        overrides.append(args.config)

    return overrides


def _apply_config_log_level(config: DictConfig, args) -> None:
    """Use the configured level unless -v/-q chose one explicitly."""
    if getattr(args, 'verbose', 0) or getattr(args, 'quiet', False):
        return
    level = OmegaConf.select(config, 'logging.level', default='WARNING')
    logging.getLogger('grid_pathfinder').setLevel(level.upper())


def _load_world(args, config: DictConfig) -> GridWorld:
    logger.info(f"Loading map from {args.map_file}")
    return load_grid_from_file(
        args.map_file,
        cell_size=config.search.step_distance,
        allow_diagonal=config.grid.allow_diagonal,
        cut_corners=config.grid.cut_corners,
    )


def run_strategy(world: GridWorld, search_config: Dict[str, Any],
                 strategy: Optional[str] = None) -> SearchResult:
    """Run one strategy on a grid world from its start to its goal.

    Args:
        world: Map with start and goal markers
        search_config: ``search`` config section as a plain dict
        strategy: Overrides ``search_config['strategy']``

    Returns:
        Search result (cancelled with ``tick_limit`` if max_ticks is hit)
    """
    section = dict(search_config)
    if strategy is not None:
        section['strategy'] = strategy

    searcher = create_searcher_from_config(
        section,
        destination=world.goal_position,
        start=world.start_position,
        is_valid_move=world.is_valid_move,
    )
    return searcher.search(section.get('step_distance', 1.0),
                           max_ticks=section.get('max_ticks'))


def solve_command(args) -> int:
    """Handle solve command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        config = load_config(overrides=_build_overrides(args))
        _apply_config_log_level(config, args)

        world = _load_world(args, config)
        search_config = OmegaConf.to_container(config.search, resolve=True)

        logger.info(f"Searching with strategy {search_config['strategy']}...")
        start_time = time.perf_counter()
        result = run_strategy(world, search_config)
        total_time = time.perf_counter() - start_time

        output = result.to_dict()
        output.update({
            'map_file': str(args.map_file),
            'start': list(world.start_position),
            'destination': list(world.goal_position),
            'total_time': total_time,
            'timestamp': time.time()
        })

        # Output results
        if args.output:
            save_results(output, args.output)
            logger.info(f"Results saved to {args.output}")
        else:
            print(json.dumps(output, indent=2))

        # Print summary
        if not args.quiet:
            print(f"\nMap: {Path(args.map_file).name}")
            print(f"Strategy: {result.strategy}")
            print(f"Success: {result.success}")
            if result.success:
                print(f"Path steps: {result.steps}")
                print(f"Path cost: {result.cost:.3f}")
            else:
                print(f"Termination: {result.termination_reason}")
            print(f"Nodes expanded: {result.statistics.nodes_expanded}")
            print(f"Computation time: {format_duration(result.statistics.computation_time)}")

            if args.render:
                print()
                print(world.render(result.path))

        return 0 if result.success else 1

    except Exception as e:
        logger.error(f"Solve command failed: {e}")
        return 1


def compare_command(args) -> int:
    """Handle compare command: run several strategies on one map.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 if every strategy found a path)
    """
    try:
        config = load_config(overrides=_build_overrides(args))
        _apply_config_log_level(config, args)

        world = _load_world(args, config)
        search_config = OmegaConf.to_container(config.search, resolve=True)
        strategies = args.strategies or [s.value for s in SearchStrategy]

        results = {}
        for strategy in strategies:
            logger.info(f"Running {strategy}...")
            results[strategy] = run_strategy(world, search_config, strategy=strategy)

        rows = create_comparison_rows(results)

        if args.output:
            save_results({
                'map_file': str(args.map_file),
                'results': {name: result.to_dict() for name, result in results.items()},
            }, args.output)
            logger.info(f"Results saved to {args.output}")

        if not args.quiet:
            print_comparison(rows)

        return 0 if all(row['success'] for row in rows) else 1

    except Exception as e:
        logger.error(f"Compare command failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        overrides = [args.config] if getattr(args, 'config', None) else []

        if args.config_action == 'show':
            config = load_config(overrides=overrides)
            print("Current Configuration:")
            print("=" * 50)
            print(OmegaConf.to_yaml(config, resolve=True))
            return 0

        elif args.config_action == 'validate':
            try:
                config = load_config(overrides=overrides, validate=False)
                validate_config(config)
                print("✅ Configuration is valid")
                return 0
            except ConfigValidationError as e:
                print(f"❌ Configuration validation failed: {e}")
                return 1

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1
