"""Main CLI entry point for astar-kernel."""

import sys
import argparse
import logging
from typing import List, Optional

from astar_kernel.search.frontier import TIE_BREAK_POLICIES

from . import commands
from .utils import setup_logging


def _add_search_options(parser: argparse.ArgumentParser, heuristics: List[str]) -> None:
    """Options shared by every search subcommand."""
    parser.add_argument(
        '--heuristic',
        choices=heuristics,
        default='zero',
        help='Heuristic estimator (default: zero, i.e. uniform-cost search)'
    )

    parser.add_argument(
        '--max-expansions',
        type=int,
        help='Cancel the search after this many expanded states'
    )

    parser.add_argument(
        '--timeout', '-t',
        type=float,
        help='Cancel the search after this many seconds'
    )

    parser.add_argument(
        '--tie-break',
        choices=TIE_BREAK_POLICIES,
        help='Ordering among entries with equal f-score (default: from configuration)'
    )

    parser.add_argument(
        '--validate-costs',
        action='store_true',
        help='Fail on negative edge costs or heuristic estimates'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='astar-kernel',
        description='astar-kernel - A* and uniform-cost search over graphs, grids and puzzles',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  astar-kernel graph roads.json --start A --goal D        # Uniform-cost search on a graph
  astar-kernel grid maze.txt --heuristic octile --diagonal  # A* on a text grid map
  astar-kernel puzzle 1,2,3,4,0,6,7,5,8 --heuristic manhattan
  astar-kernel -c search.tie_break=lifo config show       # Show configuration with an override
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Comma-separated configuration overrides (e.g., search.tie_break=lifo)'
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
        help='Suppress all output except errors'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Graph command
    graph_parser = subparsers.add_parser(
        'graph',
        help='Search a weighted graph',
        description='Search a weighted graph loaded from a JSON file'
    )
    graph_parser.add_argument('graph_file', type=str, help='Path to graph JSON file')
    graph_parser.add_argument('--start', '-s', required=True, help='Root node name')
    graph_parser.add_argument('--goal', '-g', required=True, help='Goal node name')
    _add_search_options(graph_parser, ['zero', 'euclidean'])

    # Grid command
    grid_parser = subparsers.add_parser(
        'grid',
        help='Search a grid map',
        description='Search a text grid map (. free, 1-9 cell cost, # wall, S start, G goal)'
    )
    grid_parser.add_argument('grid_file', type=str, help='Path to grid map text file')
    grid_parser.add_argument('--start', '-s', help='Start cell as ROW,COL (overrides S)')
    grid_parser.add_argument('--goal', '-g', help='Goal cell as ROW,COL (overrides G)')
    grid_parser.add_argument(
        '--diagonal',
        action='store_true',
        help='Allow diagonal moves'
    )
    _add_search_options(grid_parser, ['zero', 'manhattan', 'octile'])

    # Puzzle command
    puzzle_parser = subparsers.add_parser(
        'puzzle',
        help='Solve a sliding-tile puzzle',
        description='Solve an n-puzzle given as comma-separated tiles (0 is the blank)'
    )
    puzzle_parser.add_argument('tiles', type=str, help='Tiles in row-major order, e.g. 1,2,3,4,0,6,7,5,8')
    puzzle_parser.add_argument('--goal', '-g', help='Goal tiles (default: ordered with blank last)')
    _add_search_options(puzzle_parser, ['zero', 'misplaced', 'manhattan'])

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Show or validate the search configuration'
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
        Exit code (0 goal found or success, 1 no path or error, 2 cancelled)
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
        if parsed_args.command == 'graph':
            return commands.graph_command(parsed_args)
        if parsed_args.command == 'grid':
            return commands.grid_command(parsed_args)
        if parsed_args.command == 'puzzle':
            return commands.puzzle_command(parsed_args)
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
