"""Binary-heap frontier for best-first search."""

import heapq
from dataclasses import replace
from typing import List

from astar_kernel.search.queue_entry import QueueEntry

TIE_BREAK_POLICIES = ('fifo', 'lifo')


class Frontier:
    """Min-priority queue of QueueEntry objects.

    The frontier stamps each pushed entry with an insertion sequence number.
    With the ``fifo`` policy the earliest inserted of two equal-f entries is
    popped first; ``lifo`` pops the latest first.
    """

    def __init__(self, tie_break: str = 'fifo'):
        if tie_break not in TIE_BREAK_POLICIES:
            raise ValueError(f"tie_break must be one of {TIE_BREAK_POLICIES}, got {tie_break!r}")
        self.tie_break = tie_break
        self._heap: List[QueueEntry] = []
        self._counter = 0
        self.max_size = 0

    def push(self, entry: QueueEntry) -> QueueEntry:
        """Insert an entry in O(log n) and return it as stored."""
        self._counter += 1
        sequence = self._counter if self.tie_break == 'fifo' else -self._counter
        stamped = replace(entry, sequence=sequence)
        heapq.heappush(self._heap, stamped)
        if len(self._heap) > self.max_size:
            self.max_size = len(self._heap)
        return stamped

    def pop(self) -> QueueEntry:
        """Remove and return the minimum entry in O(log n).

        Raises:
            IndexError: If the frontier is empty
        """
        if not self._heap:
            raise IndexError("pop from an empty frontier")
        return heapq.heappop(self._heap)

    def peek(self) -> QueueEntry:
        if not self._heap:
            raise IndexError("peek at an empty frontier")
        return self._heap[0]

    def is_empty(self) -> bool:
        return not self._heap

    @property
    def pushed_count(self) -> int:
        """Total number of entries ever pushed."""
        return self._counter

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
