"""Sliding-tile n-puzzle as a search domain.

Boards are immutable tuples in row-major order with 0 as the blank. Each move
slides one tile into the blank and costs 1. Successors are generated by moving
the blank up, left, down, then right.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from astar_kernel.core.exceptions import ContractViolationError

logger = logging.getLogger(__name__)

BLANK = 0
BLANK_MOVES: List[Tuple[int, int]] = [(-1, 0), (0, -1), (1, 0), (0, 1)]


@dataclass(frozen=True)
class PuzzleBoard:
    """State of an n-puzzle."""
    tiles: Tuple[int, ...]
    size: int

    @classmethod
    def from_sequence(cls, tiles: Sequence[int]) -> 'PuzzleBoard':
        """Build a board from a flat tile sequence.

        Raises:
            ContractViolationError: If the tiles are not a permutation of
                0..n*n-1 for some n >= 2
        """
        tiles = tuple(int(t) for t in tiles)
        size = math.isqrt(len(tiles))
        if size < 2 or size * size != len(tiles):
            raise ContractViolationError(f"Puzzle needs a square number (>= 4) of tiles, got {len(tiles)}")
        if sorted(tiles) != list(range(len(tiles))):
            raise ContractViolationError(f"Tiles must be a permutation of 0..{len(tiles) - 1}, got {tiles}")
        return cls(tiles, size)

    @classmethod
    def solved(cls, size: int) -> 'PuzzleBoard':
        """Goal board: tiles 1..n*n-1 in order followed by the blank."""
        return cls(tuple(list(range(1, size * size)) + [BLANK]), size)

    def blank_position(self) -> Tuple[int, int]:
        return divmod(self.tiles.index(BLANK), self.size)

    def successors(self) -> List['PuzzleBoard']:
        row, col = self.blank_position()
        blank = row * self.size + col
        states = []
        for dr, dc in BLANK_MOVES:
            r, c = row + dr, col + dc
            if 0 <= r < self.size and 0 <= c < self.size:
                tiles = list(self.tiles)
                other = r * self.size + c
                tiles[blank], tiles[other] = tiles[other], tiles[blank]
                states.append(PuzzleBoard(tuple(tiles), self.size))
        return states

    def edge_cost(self, successor: 'PuzzleBoard') -> float:
        return 1.0

    def rows(self) -> List[Tuple[int, ...]]:
        return [self.tiles[i:i + self.size] for i in range(0, len(self.tiles), self.size)]

    def __str__(self) -> str:
        return ",".join(str(t) for t in self.tiles)


def _inversions(tiles: Sequence[int]) -> int:
    values = [t for t in tiles if t != BLANK]
    count = 0
    for i in range(len(values)):
        for j in range(i + 1, len(values)):
            if values[i] > values[j]:
                count += 1
    return count


def _parity(board: PuzzleBoard) -> int:
    inversions = _inversions(board.tiles)
    if board.size % 2 == 1:
        return inversions % 2
    # Even width: the blank's row counts as well
    blank_row = board.blank_position()[0]
    return (inversions + blank_row) % 2


def is_solvable(board: PuzzleBoard, goal: PuzzleBoard) -> bool:
    """Whether ``goal`` is reachable from ``board`` by sliding moves."""
    if board.size != goal.size:
        return False
    return _parity(board) == _parity(goal)


class MisplacedTilesHeuristic:
    """Number of non-blank tiles out of their goal position."""

    name = "misplaced"

    def __init__(self, goal: PuzzleBoard):
        self.goal = goal

    def estimate(self, state: PuzzleBoard) -> float:
        return float(sum(
            1 for tile, target in zip(state.tiles, self.goal.tiles)
            if tile != BLANK and tile != target
        ))


class ManhattanDistanceHeuristic:
    """Sum of the Manhattan distances of non-blank tiles to their goal cells."""

    name = "manhattan"

    def __init__(self, goal: PuzzleBoard):
        self.size = goal.size
        self.goal_positions: Dict[int, Tuple[int, int]] = {
            tile: divmod(index, goal.size) for index, tile in enumerate(goal.tiles)
        }

    def estimate(self, state: PuzzleBoard) -> float:
        total = 0
        for index, tile in enumerate(state.tiles):
            if tile == BLANK:
                continue
            row, col = divmod(index, self.size)
            goal_row, goal_col = self.goal_positions[tile]
            total += abs(row - goal_row) + abs(col - goal_col)
        return float(total)
