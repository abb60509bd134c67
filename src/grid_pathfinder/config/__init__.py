"""Configuration management for the grid path-search engine.

This module provides Hydra-based configuration management with a single
YAML tree and runtime override capabilities.
"""

from .config_manager import (
    ConfigManager, ConfigContext, load_config, get_config, get_parameter
)
from .validators import validate_config, ConfigValidationError

__all__ = [
    'ConfigManager',
    'ConfigContext',
    'load_config',
    'get_config',
    'get_parameter',
    'validate_config',
    'ConfigValidationError'
]
