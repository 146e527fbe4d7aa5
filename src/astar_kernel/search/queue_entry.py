"""Frontier entries and their priority ordering."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True, eq=False)
class QueueEntry:
    """A state together with the path metadata that reached it.

    Entries are ordered by ``f_score = cost + heuristic``. Equal f-scores are
    broken by ``sequence``, the insertion number assigned by the frontier, so
    ordering is total and reproducible for identical inputs.
    """
    state: Any
    predecessor: Optional[Any]
    depth: int  # edges from the root
    cost: float  # g(n) - accumulated edge cost from the root
    heuristic: float  # h(n) - estimate at creation time
    sequence: int = 0

    @property
    def f_score(self) -> float:
        """Total estimated cost f(n) = g(n) + h(n)."""
        return self.cost + self.heuristic

    def __lt__(self, other: 'QueueEntry') -> bool:
        """Comparison for the priority queue (lower f_score first)."""
        if self.f_score != other.f_score:
            return self.f_score < other.f_score
        return self.sequence < other.sequence

    def is_root(self) -> bool:
        return self.predecessor is None and self.depth == 0
