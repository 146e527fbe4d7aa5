"""Contracts and exceptions shared by the kernel and its collaborators."""

from .contracts import State, Heuristic, ZeroHeuristic, FunctionHeuristic, as_heuristic
from .exceptions import (
    SearchError, SearchStateError, SearchNotRunError, GoalNotFoundError, ContractViolationError
)

__all__ = [
    'State',
    'Heuristic',
    'ZeroHeuristic',
    'FunctionHeuristic',
    'as_heuristic',
    'SearchError',
    'SearchStateError',
    'SearchNotRunError',
    'GoalNotFoundError',
    'ContractViolationError'
]
