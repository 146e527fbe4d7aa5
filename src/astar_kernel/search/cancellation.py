"""Cancellation checks for the search loop.

A cancel check is a callable taking the running ``SearchSession`` and
returning True when the search should stop. The kernel evaluates it once at
the top of every loop iteration, before popping the next entry; a True result
ends the run in the CANCELLED state.
"""

import time
from typing import Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from astar_kernel.search.astar import SearchSession

CancelCheck = Callable[['SearchSession'], bool]


def expansion_budget(max_nodes_expanded: int) -> CancelCheck:
    """Stop once ``max_nodes_expanded`` states have been closed."""
    if max_nodes_expanded <= 0:
        raise ValueError(f"max_nodes_expanded must be positive, got {max_nodes_expanded}")

    def check(session: 'SearchSession') -> bool:
        return session.statistics.nodes_expanded >= max_nodes_expanded

    check.reason = "max_nodes_reached"
    return check


def time_budget(seconds: float) -> CancelCheck:
    """Stop once the run has been going for more than ``seconds``."""
    if seconds <= 0:
        raise ValueError(f"seconds must be positive, got {seconds}")

    def check(session: 'SearchSession') -> bool:
        return time.perf_counter() - session.start_time > seconds

    check.reason = "timeout"
    return check


def any_of(*checks: Optional[CancelCheck]) -> Optional[CancelCheck]:
    """Combine checks; the combined check fires when any of them does.

    ``None`` entries are skipped. Returns None when nothing is left, and the
    single check unchanged when only one remains.
    """
    active = [c for c in checks if c is not None]
    if not active:
        return None
    if len(active) == 1:
        return active[0]

    def check(session: 'SearchSession') -> bool:
        for c in active:
            if c(session):
                check.reason = getattr(c, 'reason', 'cancelled')
                return True
        return False

    check.reason = 'cancelled'
    return check
