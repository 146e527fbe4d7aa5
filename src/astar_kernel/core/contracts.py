"""Collaborator contracts consumed by the search kernel.

The kernel never inspects a state beyond these capabilities:

- value equality and a hash consistent with it, so states can key a dict;
- ``successors()`` returning a finite, ordered sequence of states;
- ``edge_cost(successor)`` returning a non-negative number.

A heuristic is anything with an ``estimate(state)`` method returning a
non-negative estimate of the remaining cost. For optimal results it must be
admissible and consistent. Plain callables are accepted and wrapped.

Callers are responsible for these obligations: negative edge costs,
non-deterministic equality/hash or an infinite successor stream are not
recovered by the kernel.
"""

from typing import Any, Callable, Hashable, Optional, Protocol, Sequence, Union, runtime_checkable


@runtime_checkable
class State(Protocol):
    """A node of the search graph."""

    def __eq__(self, other: Any) -> bool: ...

    def __hash__(self) -> int: ...

    def successors(self) -> Sequence["State"]: ...

    def edge_cost(self, successor: "State") -> float: ...


@runtime_checkable
class Heuristic(Protocol):
    """Estimate of the remaining cost from a state to the goal."""

    def estimate(self, state: State) -> float: ...


class ZeroHeuristic:
    """Heuristic that always returns 0; turns A* into uniform-cost search."""

    name = "zero"

    def estimate(self, state: State) -> float:
        return 0.0

    def __repr__(self) -> str:
        return "ZeroHeuristic()"


class FunctionHeuristic:
    """Adapts a plain ``state -> float`` function to the Heuristic contract."""

    def __init__(self, fn: Callable[[Hashable], float], name: Optional[str] = None):
        self.fn = fn
        self.name = name or getattr(fn, "__name__", "function")

    def estimate(self, state: State) -> float:
        return float(self.fn(state))

    def __repr__(self) -> str:
        return f"FunctionHeuristic({self.name})"


HeuristicLike = Union[Heuristic, Callable[[Hashable], float], None]


def as_heuristic(heuristic: HeuristicLike) -> Heuristic:
    """Normalize ``None``, a callable or a Heuristic into a Heuristic.

    Args:
        heuristic: Heuristic object, ``state -> float`` callable, or None

    Returns:
        Object exposing ``estimate(state)``

    Raises:
        TypeError: If the value is neither a heuristic nor callable
    """
    if heuristic is None:
        return ZeroHeuristic()
    if isinstance(heuristic, Heuristic):
        return heuristic
    if callable(heuristic):
        return FunctionHeuristic(heuristic)
    raise TypeError(f"Expected a heuristic or a callable, got {type(heuristic).__name__}")
