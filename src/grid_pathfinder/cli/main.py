"""Main CLI entry point for the grid path-search engine."""

import sys
import argparse
import logging
from typing import List, Optional

from grid_pathfinder.search import SearchStrategy
from grid_pathfinder.search.heuristics import HEURISTICS

from . import commands
from .utils import setup_logging

STRATEGY_CHOICES = [s.value for s in SearchStrategy]


def _add_search_options(subparser: argparse.ArgumentParser) -> None:
    """Options shared by solve and compare."""
    subparser.add_argument(
        'map_file',
        type=str,
        help="ASCII map file ('#' blocked, '.' free, 'S' start, 'G' goal)"
    )

    subparser.add_argument(
        '--heuristic',
        choices=sorted(HEURISTICS),
        help='Heuristic for A* strategies (default: strategy default)'
    )

    subparser.add_argument(
        '--step',
        type=float,
        help='Step distance, also the map cell size (default: from config)'
    )

    subparser.add_argument(
        '--max-ticks',
        type=int,
        help='Cancel a search after this many expansions (default: from config)'
    )

    subparser.add_argument(
        '--no-diagonal',
        action='store_true',
        help='Only allow axis-aligned moves'
    )

    subparser.add_argument(
        '--no-corner-cut',
        action='store_true',
        help='Reject diagonals past a blocked neighbor'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='gridpath',
        description='Grid path search - DFS, BFS and A* variants over ASCII maps',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gridpath solve maze.txt --render              # Solve with the default strategy
  gridpath solve maze.txt --strategy bfs        # Solve with breadth-first search
  gridpath compare maze.txt                     # Compare all strategies
  gridpath config show                          # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Configuration override (e.g., search.strategy=astar)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except results'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    # Subcommands
    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        'solve',
        help='Find a path on a map',
        description='Find a path from S to G on an ASCII map with one strategy'
    )
    _add_search_options(solve_parser)

    solve_parser.add_argument(
        '--strategy', '-s',
        choices=STRATEGY_CHOICES,
        help='Search strategy (default: from config)'
    )

    solve_parser.add_argument(
        '--render',
        action='store_true',
        help='Draw the found path onto the map'
    )

    # Compare command
    compare_parser = subparsers.add_parser(
        'compare',
        help='Compare strategies on a map',
        description='Run several strategies on the same map and tabulate the results'
    )
    _add_search_options(compare_parser)

    compare_parser.add_argument(
        '--strategies',
        nargs='+',
        choices=STRATEGY_CHOICES,
        help='Strategies to compare (default: all)'
    )

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Show or validate the configuration'
    )

    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )

    config_subparsers.add_parser(
        'show',
        help='Show current configuration'
    )

    config_subparsers.add_parser(
        'validate',
        help='Validate configuration'
    )

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    # Setup logging based on verbosity
    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        if not parsed_args.command:
            parser.print_help()
            return 1

        # Route to appropriate command handler
        if parsed_args.command == 'solve':
            return commands.solve_command(parsed_args)
        if parsed_args.command == 'compare':
            return commands.compare_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130  # Standard exit code for SIGINT
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
