"""Configuration validation for the grid path-search engine."""

import logging
from omegaconf import DictConfig

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_search_config(config.get('search', {}))
        validate_grid_config(config.get('grid', {}))
        validate_logging_config(config.get('logging', {}))

        logger.info("Configuration validation passed")

    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}")


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    # Imported here to keep config importable without the search package
    from grid_pathfinder.search import SearchStrategy
    from grid_pathfinder.search.heuristics import HEURISTICS

    strategy = search_config.get('strategy', 'astar_closed_set')
    valid_strategies = [s.value for s in SearchStrategy]
    if strategy not in valid_strategies:
        raise ConfigValidationError(
            f"strategy must be one of {valid_strategies}, got {strategy}"
        )

    step = search_config.get('step_distance', 1.0)
    if isinstance(step, bool) or not isinstance(step, (int, float)) or step <= 0:
        raise ConfigValidationError(
            f"step_distance must be positive number, got {step}"
        )

    heuristic = search_config.get('heuristic', None)
    if heuristic is not None:
        if heuristic not in HEURISTICS:
            raise ConfigValidationError(
                f"heuristic must be null or one of {sorted(HEURISTICS)}, got {heuristic}"
            )
        if strategy in ('dfs', 'bfs'):
            logger.warning(f"heuristic '{heuristic}' is ignored by strategy '{strategy}'")

    precision = search_config.get('position_precision', 6)
    if not _is_int(precision) or precision < 0 or precision > 12:
        raise ConfigValidationError(
            f"position_precision must be integer between 0 and 12, got {precision}"
        )

    max_ticks = search_config.get('max_ticks', None)
    if max_ticks is not None and (not _is_int(max_ticks) or max_ticks < 1):
        raise ConfigValidationError(
            f"max_ticks must be positive integer or null, got {max_ticks}"
        )

    log_statistics = search_config.get('log_statistics', True)
    if not isinstance(log_statistics, bool):
        raise ConfigValidationError(
            f"log_statistics must be boolean, got {log_statistics}"
        )


def validate_grid_config(grid_config: DictConfig) -> None:
    """Validate grid host configuration section."""
    if not grid_config:
        return

    for key in ['allow_diagonal', 'cut_corners']:
        value = grid_config.get(key, True)
        if not isinstance(value, bool):
            raise ConfigValidationError(f"{key} must be boolean, got {value}")


def validate_logging_config(logging_config: DictConfig) -> None:
    if not logging_config:
        return

    level = logging_config.get('level', 'WARNING')
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        raise ConfigValidationError(
            f"logging level must be one of {sorted(VALID_LOG_LEVELS)}, got {level}"
        )
