"""Configuration validation for astar-kernel."""

import logging
from typing import List
from omegaconf import DictConfig

from astar_kernel.search.frontier import TIE_BREAK_POLICIES

logger = logging.getLogger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


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
        validate_logging_config(config.get('logging', {}))
        validate_output_config(config.get('output', {}))

        logger.info("Configuration validation passed")

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

    tie_break = search_config.get('tie_break', 'fifo')
    if tie_break not in TIE_BREAK_POLICIES:
        raise ConfigValidationError(
            f"search.tie_break must be one of {list(TIE_BREAK_POLICIES)}, got {tie_break}"
        )

    validate_costs = search_config.get('validate_edge_costs', False)
    if not isinstance(validate_costs, bool):
        raise ConfigValidationError(
            f"search.validate_edge_costs must be boolean, got {validate_costs}"
        )

    # Budgets are optional; null disables them
    max_nodes = search_config.get('max_nodes_expanded', None)
    if max_nodes is not None and (not _is_int(max_nodes) or max_nodes <= 0):
        raise ConfigValidationError(
            f"search.max_nodes_expanded must be positive integer or null, got {max_nodes}"
        )

    max_time = search_config.get('max_computation_time', None)
    if max_time is not None and (
            isinstance(max_time, bool) or not isinstance(max_time, (int, float)) or max_time <= 0):
        raise ConfigValidationError(
            f"search.max_computation_time must be positive number or null, got {max_time}"
        )


def validate_logging_config(logging_config: DictConfig) -> None:
    """Validate logging configuration section.

    Args:
        logging_config: Logging configuration section
    """
    if not logging_config:
        return

    level = logging_config.get('level', 'WARNING')
    if str(level).upper() not in LOG_LEVELS:
        raise ConfigValidationError(
            f"logging.level must be one of {list(LOG_LEVELS)}, got {level}"
        )


def validate_output_config(output_config: DictConfig) -> None:
    """Validate output configuration section.

    Args:
        output_config: Output configuration section
    """
    if not output_config:
        return

    pretty = output_config.get('pretty', True)
    if not isinstance(pretty, bool):
        raise ConfigValidationError(f"output.pretty must be boolean, got {pretty}")


def validate_parameter_ranges(config: DictConfig) -> List[str]:
    """Validate parameter ranges and return warnings.

    Args:
        config: Configuration to validate

    Returns:
        List of warning messages
    """
    warnings = []

    search_config = config.get('search', {})
    if search_config:
        if search_config.get('tie_break', 'fifo') == 'lifo':
            warnings.append("tie_break=lifo explores the most recently generated of equal-f entries first")

        if search_config.get('max_nodes_expanded', None) is not None:
            warnings.append("max_nodes_expanded is set; searches may end cancelled before the goal is reached")

        if search_config.get('max_computation_time', None) is not None:
            warnings.append("max_computation_time is set; results may differ between machines")

    return warnings
