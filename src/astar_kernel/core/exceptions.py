"""Exception hierarchy for the search kernel."""

from typing import Optional


class SearchError(Exception):
    """Base class for all errors raised by astar_kernel."""
    pass


class SearchStateError(SearchError, RuntimeError):
    """Raised when a result is queried in a state where it is not defined."""
    pass


class SearchNotRunError(SearchStateError):
    """Raised when results are requested before any search has run."""
    pass


class GoalNotFoundError(SearchStateError):
    """Raised when goal depth, cost or path is requested after a run
    that did not reach the goal."""

    def __init__(self, status: str, message: Optional[str] = None):
        self.status = status
        super().__init__(message or f"Goal was not found (search ended in {status})")


class ContractViolationError(SearchError, ValueError):
    """Raised when a State or Heuristic collaborator breaks its contract.

    The kernel only raises this when validation is enabled; otherwise a
    contract violation is undefined behaviour.
    """
    pass
