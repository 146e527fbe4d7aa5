"""Tests for queue entries and the frontier."""

import dataclasses

import pytest

from astar_kernel.search.queue_entry import QueueEntry
from astar_kernel.search.frontier import Frontier


def make_entry(state, cost, heuristic, sequence=0):
    return QueueEntry(state=state, predecessor=None, depth=0, cost=cost,
                      heuristic=heuristic, sequence=sequence)


class TestQueueEntry:
    """Test QueueEntry ordering."""

    def test_entry_creation(self):
        """Test basic entry creation."""
        entry = QueueEntry(state="B", predecessor="A", depth=1, cost=1.5, heuristic=2.0)

        assert entry.state == "B"
        assert entry.predecessor == "A"
        assert entry.depth == 1
        assert entry.cost == 1.5
        assert entry.heuristic == 2.0
        assert entry.f_score == 3.5
        assert not entry.is_root()

    def test_root_entry(self):
        """Test root detection."""
        assert make_entry("A", 0.0, 3.0).is_root()

    def test_lower_f_score_first(self):
        """Lower f-score wins regardless of how it splits into g and h."""
        cheap = make_entry("X", cost=2.0, heuristic=0.5, sequence=9)
        expensive = make_entry("Y", cost=0.0, heuristic=3.0, sequence=1)

        assert cheap < expensive
        assert not expensive < cheap

    def test_sequence_breaks_ties(self):
        """Equal f-scores are ordered by sequence number."""
        first = make_entry("X", cost=1.0, heuristic=2.0, sequence=1)
        second = make_entry("Y", cost=2.0, heuristic=1.0, sequence=2)

        assert first < second
        assert not second < first

    def test_entry_is_immutable(self):
        """Entries cannot be modified once created."""
        entry = make_entry("X", 1.0, 1.0)

        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.cost = 0.0


class TestFrontier:
    """Test Frontier functionality."""

    def test_empty_frontier(self):
        """Test emptiness checks and popping from an empty frontier."""
        frontier = Frontier()

        assert frontier.is_empty()
        assert len(frontier) == 0
        assert not frontier

        with pytest.raises(IndexError):
            frontier.pop()
        with pytest.raises(IndexError):
            frontier.peek()

    def test_pops_in_priority_order(self):
        """Entries come out by ascending f-score."""
        frontier = Frontier()
        for state, f in [("c", 3.0), ("a", 1.0), ("d", 4.0), ("b", 2.0)]:
            frontier.push(make_entry(state, f, 0.0))

        assert frontier.peek().state == "a"
        assert [frontier.pop().state for _ in range(4)] == ["a", "b", "c", "d"]
        assert frontier.is_empty()

    def test_fifo_tie_break(self):
        """With FIFO the earliest inserted of equal entries comes out first."""
        frontier = Frontier('fifo')
        for state in ["first", "second", "third"]:
            frontier.push(make_entry(state, 1.0, 1.0))

        assert [frontier.pop().state for _ in range(3)] == ["first", "second", "third"]

    def test_lifo_tie_break(self):
        """With LIFO the latest inserted of equal entries comes out first."""
        frontier = Frontier('lifo')
        for state in ["first", "second", "third"]:
            frontier.push(make_entry(state, 1.0, 1.0))

        assert [frontier.pop().state for _ in range(3)] == ["third", "second", "first"]

    def test_push_stamps_sequence(self):
        """Pushed entries are returned with their sequence number."""
        frontier = Frontier()
        original = make_entry("a", 1.0, 0.0)

        stored = frontier.push(original)

        assert stored.sequence == 1
        assert original.sequence == 0
        assert frontier.push(make_entry("b", 1.0, 0.0)).sequence == 2

    def test_size_tracking(self):
        """Test the high-water mark and push counter."""
        frontier = Frontier()
        for i in range(5):
            frontier.push(make_entry(i, float(i), 0.0))
        frontier.pop()
        frontier.pop()
        frontier.push(make_entry(9, 9.0, 0.0))

        assert len(frontier) == 4
        assert frontier.max_size == 5
        assert frontier.pushed_count == 6

    def test_invalid_tie_break(self):
        """Test rejection of unknown tie-break policies."""
        with pytest.raises(ValueError, match="tie_break"):
            Frontier('random')
