"""Command-line interface for astar-kernel.

This module provides CLI commands for searching graphs, grid maps and
sliding-tile puzzles, and for inspecting the configuration.
"""

from .main import main_cli
from .commands import graph_command, grid_command, puzzle_command, config_command
from .utils import setup_logging, save_results

__all__ = [
    'main_cli',
    'graph_command',
    'grid_command',
    'puzzle_command',
    'config_command',
    'setup_logging',
    'save_results'
]
