"""Best-first search kernel.

This module implements A* search with a closed set that doubles as the
predecessor map, lazy duplicate resolution at pop time, and per-run sessions.
"""

from .queue_entry import QueueEntry
from .frontier import Frontier
from .cancellation import expansion_budget, time_budget, any_of
from .astar import (
    AStarSearch, SearchSession, SearchStatus, SearchStatistics, SearchResult, SearchConfig,
    create_astar_search, astar_search, uniform_cost_search
)

__all__ = [
    'QueueEntry',
    'Frontier',
    'expansion_budget',
    'time_budget',
    'any_of',
    'AStarSearch',
    'SearchSession',
    'SearchStatus',
    'SearchStatistics',
    'SearchResult',
    'SearchConfig',
    'create_astar_search',
    'astar_search',
    'uniform_cost_search'
]
