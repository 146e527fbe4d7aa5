"""CLI command implementations."""

import logging
from typing import Any, Callable, List

from omegaconf import OmegaConf

from astar_kernel.config import ConfigManager, load_config, validate_config, ConfigValidationError
from astar_kernel.config.validators import validate_parameter_ranges
from astar_kernel.search.astar import AStarSearch, SearchConfig, SearchStatus
from astar_kernel.domains.graph import EuclideanHeuristic, load_graph
from astar_kernel.domains.grid import ManhattanHeuristic, OctileHeuristic, parse_grid
from astar_kernel.domains.npuzzle import (
    PuzzleBoard, MisplacedTilesHeuristic, ManhattanDistanceHeuristic, is_solvable
)

from .utils import save_results, parse_position, parse_tiles, read_text_file, print_summary

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_CANCELLED = 2


# Command-line search options and the configuration keys they set
SEARCH_FLAGS = (
    ('tie_break', 'search.tie_break'),
    ('max_expansions', 'search.max_nodes_expanded'),
    ('timeout', 'search.max_computation_time'),
)


def _config_overrides(args) -> List[str]:
    """Split the global ``--config`` option into Hydra override strings."""
    raw = getattr(args, 'config', None)
    if not raw:
        return []
    return [item.strip() for item in raw.split(',') if item.strip()]


def apply_search_flags(manager: ConfigManager, args) -> None:
    """Write command-line search options into the loaded configuration.

    Flags win over configuration files and ``--config`` overrides. The
    adjusted configuration is validated again, so out-of-range flags such as
    ``--max-expansions 0`` are rejected rather than ignored.

    Raises:
        ConfigValidationError: If a flag value is invalid
    """
    for attr, key in SEARCH_FLAGS:
        value = getattr(args, attr, None)
        if value is not None:
            manager.set_parameter(key, value)
    if getattr(args, 'validate_costs', False):
        manager.set_parameter('search.validate_edge_costs', True)
    validate_config(manager.get_config())


def _load_settings(args) -> ConfigManager:
    manager = ConfigManager()
    manager.load_config(overrides=_config_overrides(args))
    apply_search_flags(manager, args)

    # -v/-q on the command line take precedence over logging.level
    if not getattr(args, 'verbose', 0) and not getattr(args, 'quiet', False):
        level = str(manager.get_parameter('logging.level', 'WARNING')).upper()
        logging.getLogger().setLevel(level)
    return manager


def _run_search(args, root, goal, heuristic, settings: ConfigManager,
                state_formatter: Callable[[Any], Any] = str) -> int:
    """Run one search, report it and map its outcome to an exit code."""
    search = AStarSearch(root, goal, heuristic, SearchConfig.from_config(settings.get_config()))
    session = search.run()
    result = session.to_result().to_dict(state_formatter)

    if not getattr(args, 'quiet', False):
        print_summary(result)

    if getattr(args, 'output', None):
        save_results(result, args.output, pretty=bool(settings.get_parameter('output.pretty', True)))
        logger.info(f"Results saved to {args.output}")

    if session.status is SearchStatus.GOAL_FOUND:
        return EXIT_OK
    if session.status is SearchStatus.CANCELLED:
        return EXIT_CANCELLED
    return EXIT_NOT_FOUND


def graph_command(args) -> int:
    """Handle graph command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        settings = _load_settings(args)
        graph = load_graph(args.graph_file)
        root = graph.node(args.start)
        goal = graph.node(args.goal)

        heuristic = None
        if args.heuristic == 'euclidean':
            heuristic = EuclideanHeuristic(graph, args.goal)

        logger.info(f"Searching graph {args.graph_file}: {args.start} -> {args.goal}")
        return _run_search(args, root, goal, heuristic, settings)

    except Exception as e:
        logger.error(f"Graph search failed: {e}")
        return 1


def grid_command(args) -> int:
    """Handle grid command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        settings = _load_settings(args)
        grid, start, goal = parse_grid(read_text_file(args.grid_file), diagonal=args.diagonal)
        if args.start:
            start = parse_position(args.start)
        if args.goal:
            goal = parse_position(args.goal)
        if start is None or goal is None:
            raise ValueError("Start and goal must be marked in the map (S/G) or given with --start/--goal")

        root = grid.cell(*start)
        goal_cell = grid.cell(*goal)

        heuristic = None
        if args.heuristic == 'manhattan':
            if args.diagonal:
                logger.warning("Manhattan distance is not admissible with diagonal moves; "
                               "the returned path may not be optimal")
            heuristic = ManhattanHeuristic(goal_cell)
        elif args.heuristic == 'octile':
            heuristic = OctileHeuristic(goal_cell)

        return _run_search(args, root, goal_cell, heuristic, settings)

    except Exception as e:
        logger.error(f"Grid search failed: {e}")
        return 1


def puzzle_command(args) -> int:
    """Handle puzzle command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        settings = _load_settings(args)
        root = PuzzleBoard.from_sequence(parse_tiles(args.tiles))
        if args.goal:
            goal = PuzzleBoard.from_sequence(parse_tiles(args.goal))
        else:
            goal = PuzzleBoard.solved(root.size)

        if not is_solvable(root, goal):
            # The search would still terminate, after exhausting half the state space
            logger.warning("Puzzle is not solvable; search will exhaust the reachable states")

        heuristic = None
        if args.heuristic == 'misplaced':
            heuristic = MisplacedTilesHeuristic(goal)
        elif args.heuristic == 'manhattan':
            heuristic = ManhattanDistanceHeuristic(goal)

        return _run_search(args, root, goal, heuristic, settings)

    except Exception as e:
        logger.error(f"Puzzle search failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        if args.config_action == 'show':
            config = load_config(overrides=_config_overrides(args), validate=False)
            print("Current Configuration:")
            print("=" * 50)
            print(OmegaConf.to_yaml(config, resolve=True))
            return 0

        elif args.config_action == 'validate':
            try:
                config = load_config(overrides=_config_overrides(args), validate=False)
                validate_config(config)
                for warning in validate_parameter_ranges(config):
                    print(f"WARNING: {warning}")
                print("Configuration is valid")
                return 0
            except ConfigValidationError as e:
                print(f"Configuration validation failed: {e}")
                return 1

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1
