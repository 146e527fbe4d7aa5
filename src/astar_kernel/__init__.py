"""astar-kernel: a generic best-first graph-search engine.

Provides A* (and, with the zero heuristic, uniform-cost) search over any
state space whose states expose ``successors()`` and ``edge_cost()``.
"""

from astar_kernel.core.contracts import State, Heuristic, ZeroHeuristic, FunctionHeuristic
from astar_kernel.core.exceptions import (
    SearchError, SearchStateError, SearchNotRunError, GoalNotFoundError, ContractViolationError
)
from astar_kernel.search.astar import (
    AStarSearch, SearchSession, SearchStatus, SearchResult, SearchConfig,
    create_astar_search, astar_search, uniform_cost_search
)

__version__ = "0.1.0"

__all__ = [
    'State',
    'Heuristic',
    'ZeroHeuristic',
    'FunctionHeuristic',
    'SearchError',
    'SearchStateError',
    'SearchNotRunError',
    'GoalNotFoundError',
    'ContractViolationError',
    'AStarSearch',
    'SearchSession',
    'SearchStatus',
    'SearchResult',
    'SearchConfig',
    'create_astar_search',
    'astar_search',
    'uniform_cost_search'
]
