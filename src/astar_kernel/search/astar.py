"""A* search kernel.

This module implements best-first search over an abstract state space. Each
state is closed at most once: the first time it is popped from the frontier
its predecessor is recorded, and later pops of the same state are discarded.
Successors are pushed without checking the frontier for a cheaper duplicate;
duplicates are resolved lazily at pop time.

With a consistent heuristic the first closing of the goal is optimal. With the
zero heuristic the search is uniform-cost search.

Every call to ``AStarSearch.run`` works on a fresh ``SearchSession``; the
session is frozen when the run terminates and answers the result queries.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from astar_kernel.core.contracts import Heuristic, HeuristicLike, State, as_heuristic
from astar_kernel.core.exceptions import (
    ContractViolationError, GoalNotFoundError, SearchNotRunError, SearchStateError
)
from astar_kernel.search.cancellation import CancelCheck, any_of, expansion_budget, time_budget
from astar_kernel.search.frontier import Frontier, TIE_BREAK_POLICIES
from astar_kernel.search.queue_entry import QueueEntry

logger = logging.getLogger(__name__)

# Emit a debug progress line every this many closed states
PROGRESS_INTERVAL = 10000


class SearchStatus(Enum):
    """Lifecycle of a search session."""
    READY = "ready"
    RUNNING = "running"
    GOAL_FOUND = "goal_found"
    EXHAUSTED = "exhausted"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (SearchStatus.GOAL_FOUND, SearchStatus.EXHAUSTED, SearchStatus.CANCELLED)


@dataclass
class SearchStatistics:
    """Counters collected during one run."""
    nodes_expanded: int = 0  # states closed
    nodes_generated: int = 0  # entries pushed, root included
    stale_entries: int = 0  # pops discarded because the state was closed
    goal_tests: int = 0
    max_frontier_size: int = 0
    max_depth_reached: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary."""
        return {
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'stale_entries': self.stale_entries,
            'goal_tests': self.goal_tests,
            'max_frontier_size': self.max_frontier_size,
            'max_depth_reached': self.max_depth_reached
        }


@dataclass
class SearchResult:
    """Plain-data summary of a terminated search session."""
    success: bool
    status: str
    path: Optional[List[Any]] = None
    cost: Optional[float] = None
    depth: Optional[int] = None
    computation_time: float = 0.0
    termination_reason: str = "unknown"
    heuristic: str = "zero"
    statistics: SearchStatistics = field(default_factory=SearchStatistics)

    def to_dict(self, state_formatter: Callable[[Any], Any] = str) -> Dict[str, Any]:
        """Convert the result to a JSON-friendly dictionary.

        Args:
            state_formatter: Converts each path state to a serializable value
        """
        return {
            'success': self.success,
            'status': self.status,
            'path': [state_formatter(s) for s in self.path] if self.path is not None else None,
            'cost': self.cost,
            'depth': self.depth,
            'computation_time': self.computation_time,
            'termination_reason': self.termination_reason,
            'heuristic': self.heuristic,
            'statistics': self.statistics.to_dict()
        }


@dataclass
class SearchConfig:
    """Configuration for A* search."""
    tie_break: str = "fifo"  # fifo: earlier insertion wins among equal f-scores
    validate_edge_costs: bool = False  # raise on negative edge costs / estimates
    max_nodes_expanded: Optional[int] = None  # cancel after this many closed states
    max_computation_time: Optional[float] = None  # cancel after this many seconds

    def __post_init__(self):
        if self.tie_break not in TIE_BREAK_POLICIES:
            raise ValueError(f"tie_break must be one of {TIE_BREAK_POLICIES}, got {self.tie_break!r}")

    @classmethod
    def from_config(cls, cfg: Optional[Any] = None) -> 'SearchConfig':
        """Build a SearchConfig from the ``search`` section of a configuration.

        Args:
            cfg: Loaded configuration; the global configuration is used when None

        Returns:
            SearchConfig with defaults for missing keys
        """
        if cfg is None:
            from astar_kernel.config import get_config
            cfg = get_config()
        if cfg is None or 'search' not in cfg:
            return cls()

        search_cfg = cfg.search
        max_nodes = search_cfg.get('max_nodes_expanded', None)
        max_time = search_cfg.get('max_computation_time', None)
        return cls(
            tie_break=str(search_cfg.get('tie_break', 'fifo')),
            validate_edge_costs=bool(search_cfg.get('validate_edge_costs', False)),
            max_nodes_expanded=int(max_nodes) if max_nodes is not None else None,
            max_computation_time=float(max_time) if max_time is not None else None
        )

    def budget_check(self) -> Optional[CancelCheck]:
        """Cancel check enforcing the configured budgets, or None."""
        return any_of(
            expansion_budget(self.max_nodes_expanded) if self.max_nodes_expanded is not None else None,
            time_budget(self.max_computation_time) if self.max_computation_time is not None else None
        )


class SearchSession:
    """Working state of a single search run.

    Holds the frontier, the closed set (which doubles as the predecessor map)
    and the most recently closed entry. Only the kernel loop mutates a
    session; once the run terminates the session is frozen and serves the
    result queries.
    """

    def __init__(self, root: State, goal: State, tie_break: str = "fifo",
                 heuristic_name: str = "zero"):
        self.root = root
        self.goal = goal
        self.heuristic_name = heuristic_name
        self.frontier = Frontier(tie_break)
        self._closed: Dict[Any, Optional[Any]] = {}
        self.current_entry: Optional[QueueEntry] = None
        self.status = SearchStatus.READY
        self.statistics = SearchStatistics()
        self.termination_reason: Optional[str] = None
        self.start_time: float = 0.0
        self.computation_time: float = 0.0

    @property
    def closed(self) -> Mapping[Any, Optional[Any]]:
        """Read-only view of the closed set: state -> predecessor (root -> None)."""
        return MappingProxyType(self._closed)

    @property
    def is_frozen(self) -> bool:
        return self.status.is_terminal

    def is_closed(self, state: State) -> bool:
        return state in self._closed

    # Mutators used by the kernel loop

    def start(self) -> None:
        if self.status is not SearchStatus.READY:
            raise SearchStateError(f"Cannot start a session in state {self.status.value}")
        self.status = SearchStatus.RUNNING
        self.start_time = time.perf_counter()

    def close(self, entry: QueueEntry) -> None:
        """Record ``entry`` as the expansion of its state."""
        if self.status is not SearchStatus.RUNNING:
            raise SearchStateError(f"Cannot modify a session in state {self.status.value}")
        self._closed[entry.state] = entry.predecessor
        self.current_entry = entry
        self.statistics.nodes_expanded += 1
        if entry.depth > self.statistics.max_depth_reached:
            self.statistics.max_depth_reached = entry.depth

    def finish(self, status: SearchStatus, reason: str) -> None:
        if self.status is not SearchStatus.RUNNING:
            raise SearchStateError(f"Cannot finish a session in state {self.status.value}")
        if not status.is_terminal:
            raise ValueError(f"{status.value} is not a terminal status")
        self.status = status
        self.termination_reason = reason
        self.computation_time = time.perf_counter() - self.start_time
        self.statistics.nodes_generated = self.frontier.pushed_count
        self.statistics.max_frontier_size = self.frontier.max_size

    # Result queries

    def _require_terminated(self) -> None:
        if not self.status.is_terminal:
            raise SearchStateError(
                f"Search session has not terminated (state: {self.status.value})"
            )

    def _require_goal(self) -> QueueEntry:
        self._require_terminated()
        if self.status is not SearchStatus.GOAL_FOUND:
            raise GoalNotFoundError(self.status.value)
        return self.current_entry

    def goal_found(self) -> bool:
        """Whether the run ended by closing the goal state."""
        self._require_terminated()
        return self.status is SearchStatus.GOAL_FOUND

    def goal_depth(self) -> int:
        """Number of edges on the path from the root to the goal."""
        return self._require_goal().depth

    def goal_cost(self) -> float:
        """Accumulated edge cost of the path from the root to the goal."""
        return self._require_goal().cost

    def goal_path(self) -> List[Any]:
        """States from the root to the goal, both inclusive."""
        entry = self._require_goal()
        path = [entry.state]
        state = self._closed[entry.state]
        while state is not None:
            path.append(state)
            state = self._closed[state]
        path.reverse()
        return path

    def to_result(self) -> SearchResult:
        """Summarize the terminated session; never raises for a missed goal."""
        self._require_terminated()
        found = self.status is SearchStatus.GOAL_FOUND
        return SearchResult(
            success=found,
            status=self.status.value,
            path=self.goal_path() if found else None,
            cost=self.goal_cost() if found else None,
            depth=self.goal_depth() if found else None,
            computation_time=self.computation_time,
            termination_reason=self.termination_reason or "unknown",
            heuristic=self.heuristic_name,
            statistics=self.statistics
        )


class AStarSearch:
    """A* search that never reopens a closed state.

    Notably, with the zero heuristic this is uniform-cost search.

    Example:
        >>> search = AStarSearch(root, goal, heuristic)
        >>> search.run()
        >>> if search.goal_found():
        ...     print(search.goal_cost(), search.goal_path())
    """

    def __init__(self, root: State, goal: State, heuristic: HeuristicLike = None,
                 config: Optional[SearchConfig] = None):
        """Initialize the search.

        Args:
            root: Root state of the search
            goal: Goal state of the search
            heuristic: Heuristic estimator or ``state -> float`` callable;
                the zero heuristic when None
            config: Search configuration parameters
        """
        self.root = root
        self.goal = goal
        self.heuristic: Heuristic = as_heuristic(heuristic)
        self.config = config or SearchConfig()
        self._session: Optional[SearchSession] = None

        logger.debug(f"A* search initialized with heuristic={self.heuristic_name}, "
                     f"tie_break={self.config.tie_break}")

    @property
    def heuristic_name(self) -> str:
        return getattr(self.heuristic, 'name', type(self.heuristic).__name__)

    @property
    def session(self) -> SearchSession:
        """Session of the most recent completed run."""
        if self._session is None:
            raise SearchNotRunError("No search has been run yet. Call run() first.")
        return self._session

    def run(self, cancel_check: Optional[CancelCheck] = None) -> SearchSession:
        """Run a fresh search to a terminal state.

        Args:
            cancel_check: Optional ``session -> bool`` callable evaluated at
                the top of each loop iteration; True cancels the run

        Returns:
            The frozen session of this run
        """
        # A run that raises leaves no session behind, not the previous one
        self._session = None
        session = SearchSession(self.root, self.goal, self.config.tie_break, self.heuristic_name)
        check = any_of(cancel_check, self.config.budget_check())

        logger.info(f"Starting A* search (heuristic={self.heuristic_name})")
        session.start()
        session.frontier.push(QueueEntry(
            state=self.root,
            predecessor=None,
            depth=0,
            cost=0.0,
            heuristic=self._estimate(self.root)
        ))

        while session.frontier:
            if check is not None and check(session):
                session.finish(SearchStatus.CANCELLED, getattr(check, 'reason', 'cancelled'))
                break
            if self._process_entry(session, session.frontier.pop()):
                session.finish(SearchStatus.GOAL_FOUND, "goal_reached")
                break
        else:
            session.finish(SearchStatus.EXHAUSTED, "search_exhausted")

        self._session = session
        self._log_outcome(session)
        return session

    def _process_entry(self, session: SearchSession, entry: QueueEntry) -> bool:
        """Close the entry's state and push its successors.

        Returns:
            True if the entry's state is the goal
        """
        state = entry.state
        if session.is_closed(state):
            session.statistics.stale_entries += 1
            return False

        session.close(entry)
        if session.statistics.nodes_expanded % PROGRESS_INTERVAL == 0:
            logger.debug(f"Closed {session.statistics.nodes_expanded} states, "
                         f"frontier size {len(session.frontier)}, f={entry.f_score}")

        session.statistics.goal_tests += 1
        if state == self.goal:
            return True

        for successor in state.successors():
            if session.is_closed(successor):
                continue
            session.frontier.push(QueueEntry(
                state=successor,
                predecessor=state,
                depth=entry.depth + 1,
                cost=entry.cost + self._edge_cost(state, successor),
                heuristic=self._estimate(successor)
            ))
        return False

    def _estimate(self, state: State) -> float:
        value = float(self.heuristic.estimate(state))
        if self.config.validate_edge_costs and (math.isnan(value) or value < 0):
            raise ContractViolationError(
                f"Heuristic {self.heuristic_name} returned {value} for {state!r}; "
                "estimates must be non-negative"
            )
        return value

    def _edge_cost(self, state: State, successor: State) -> float:
        cost = float(state.edge_cost(successor))
        if self.config.validate_edge_costs and (math.isnan(cost) or cost < 0):
            raise ContractViolationError(
                f"Edge {state!r} -> {successor!r} has cost {cost}; edge costs must be non-negative"
            )
        return cost

    def _log_outcome(self, session: SearchSession) -> None:
        stats = session.statistics
        if session.status is SearchStatus.GOAL_FOUND:
            logger.info(f"Goal found: cost={session.current_entry.cost}, "
                        f"depth={session.current_entry.depth}, expanded={stats.nodes_expanded}, "
                        f"time={session.computation_time:.4f}s")
        elif session.status is SearchStatus.CANCELLED:
            logger.warning(f"Search cancelled ({session.termination_reason}) after "
                           f"{stats.nodes_expanded} expansions")
        else:
            logger.info(f"Search exhausted without reaching the goal after "
                        f"{stats.nodes_expanded} expansions")

    # Result queries for the most recent run

    def goal_found(self) -> bool:
        return self.session.goal_found()

    def goal_depth(self) -> int:
        return self.session.goal_depth()

    def goal_cost(self) -> float:
        return self.session.goal_cost()

    def goal_path(self) -> List[Any]:
        return self.session.goal_path()

    def get_search_stats(self) -> Dict[str, Any]:
        """Get statistics of the most recent run."""
        session = self.session
        return {
            **session.statistics.to_dict(),
            'status': session.status.value,
            'computation_time': session.computation_time,
            'heuristic': self.heuristic_name,
            'config': {
                'tie_break': self.config.tie_break,
                'validate_edge_costs': self.config.validate_edge_costs,
                'max_nodes_expanded': self.config.max_nodes_expanded,
                'max_computation_time': self.config.max_computation_time
            }
        }


def create_astar_search(root: State, goal: State,
                        heuristic: HeuristicLike = None,
                        tie_break: str = "fifo",
                        validate_edge_costs: bool = False,
                        max_nodes_expanded: Optional[int] = None,
                        max_computation_time: Optional[float] = None) -> AStarSearch:
    """Factory function to create an A* search with custom configuration.

    Args:
        root: Root state
        goal: Goal state
        heuristic: Heuristic estimator; the zero heuristic when None
        tie_break: ``fifo`` or ``lifo`` ordering among equal f-scores
        validate_edge_costs: Raise on negative edge costs or estimates
        max_nodes_expanded: Cancel after this many closed states
        max_computation_time: Cancel after this many seconds

    Returns:
        Configured AStarSearch instance
    """
    config = SearchConfig(
        tie_break=tie_break,
        validate_edge_costs=validate_edge_costs,
        max_nodes_expanded=max_nodes_expanded,
        max_computation_time=max_computation_time
    )
    return AStarSearch(root, goal, heuristic, config)


def astar_search(root: State, goal: State, heuristic: HeuristicLike = None,
                 config: Optional[SearchConfig] = None) -> SearchResult:
    """Run A* once and return its result summary."""
    return AStarSearch(root, goal, heuristic, config).run().to_result()


def uniform_cost_search(root: State, goal: State,
                        config: Optional[SearchConfig] = None) -> SearchResult:
    """Run the search with the zero heuristic and return its result summary."""
    return astar_search(root, goal, None, config)
