"""Weighted 2-D grid maps as a search domain.

Each cell holds the cost of entering it; a cost of 0 marks a wall. Moves go
to the 4 orthogonal neighbours, or to all 8 neighbours when diagonal moves are
enabled. A diagonal step costs the entered cell's cost times sqrt(2) and may
not cut a corner past a wall.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from astar_kernel.core.exceptions import ContractViolationError

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

ORTHOGONAL_MOVES: List[Position] = [(-1, 0), (0, -1), (1, 0), (0, 1)]
DIAGONAL_MOVES: List[Position] = [(-1, -1), (-1, 1), (1, -1), (1, 1)]

WALL = '#'
FREE = '.'
START = 'S'
GOAL = 'G'


@dataclass(frozen=True)
class GridCell:
    """State for one cell of a GridMap."""
    row: int
    col: int
    grid: 'GridMap' = field(compare=False, hash=False, repr=False)

    @property
    def position(self) -> Position:
        return (self.row, self.col)

    def successors(self) -> List['GridCell']:
        return [GridCell(r, c, self.grid) for r, c in self.grid.neighbors(self.position)]

    def edge_cost(self, successor: 'GridCell') -> float:
        return self.grid.step_cost(self.position, successor.position)

    def __str__(self) -> str:
        return f"{self.row},{self.col}"


class GridMap:
    """Grid of cell entry costs (0 = wall)."""

    def __init__(self, costs: np.ndarray, diagonal: bool = False):
        costs = np.asarray(costs, dtype=np.float64)
        if costs.ndim != 2:
            raise ValueError(f"Grid costs must be 2-D, got shape {costs.shape}")
        if np.any(costs < 0) or np.any(np.isnan(costs)):
            raise ContractViolationError("Grid cell costs must be non-negative numbers")
        self.costs = costs
        self.diagonal = diagonal

    @property
    def shape(self) -> Tuple[int, int]:
        return self.costs.shape

    def in_bounds(self, position: Position) -> bool:
        r, c = position
        return 0 <= r < self.costs.shape[0] and 0 <= c < self.costs.shape[1]

    def is_passable(self, position: Position) -> bool:
        return self.in_bounds(position) and self.costs[position] > 0

    def cell(self, row: int, col: int) -> GridCell:
        """Get the state for a passable cell.

        Raises:
            ValueError: If the cell is outside the grid or a wall
        """
        if not self.is_passable((row, col)):
            raise ValueError(f"Cell ({row}, {col}) is outside the grid or a wall")
        return GridCell(row, col, self)

    def neighbors(self, position: Position) -> List[Position]:
        r, c = position
        result = []
        for dr, dc in ORTHOGONAL_MOVES:
            if self.is_passable((r + dr, c + dc)):
                result.append((r + dr, c + dc))
        if self.diagonal:
            for dr, dc in DIAGONAL_MOVES:
                # No corner cutting: both orthogonal cells must be open
                if (self.is_passable((r + dr, c + dc))
                        and self.is_passable((r + dr, c))
                        and self.is_passable((r, c + dc))):
                    result.append((r + dr, c + dc))
        return result

    def step_cost(self, source: Position, target: Position) -> float:
        cost = float(self.costs[target])
        if source[0] != target[0] and source[1] != target[1]:
            return cost * math.sqrt(2)
        return cost

    @property
    def min_cost(self) -> float:
        """Smallest entry cost among passable cells (0 if there are none)."""
        passable = self.costs[self.costs > 0]
        return float(passable.min()) if passable.size else 0.0


def parse_grid(text: str, diagonal: bool = False) -> Tuple[GridMap, Optional[Position], Optional[Position]]:
    """Parse a text map.

    ``.`` is a free cell of cost 1, ``1``-``9`` are cells of that cost, ``#``
    is a wall, and ``S``/``G`` mark the start and goal (cost 1).

    Returns:
        Tuple of (grid map, start position or None, goal position or None)

    Raises:
        ValueError: If rows differ in length or a character is unknown
    """
    lines = [line.rstrip('\n') for line in text.strip().splitlines() if line.strip()]
    if not lines:
        raise ValueError("Grid text is empty")

    width = len(lines[0])
    costs = np.zeros((len(lines), width), dtype=np.float64)
    start = goal = None

    for r, line in enumerate(lines):
        if len(line) != width:
            raise ValueError(f"Row {r} has length {len(line)}, expected {width}")
        for c, ch in enumerate(line):
            if ch == WALL:
                costs[r, c] = 0
            elif ch in (FREE, START, GOAL):
                costs[r, c] = 1
                if ch == START:
                    start = (r, c)
                elif ch == GOAL:
                    goal = (r, c)
            elif ch.isdigit() and ch != '0':
                costs[r, c] = int(ch)
            else:
                raise ValueError(f"Unknown grid character {ch!r} at ({r}, {c})")

    logger.debug(f"Parsed grid {costs.shape} with start={start}, goal={goal}")
    return GridMap(costs, diagonal=diagonal), start, goal


class ManhattanHeuristic:
    """Manhattan distance scaled by the cheapest cell cost.

    Admissible and consistent for 4-connected grids only.
    """

    name = "manhattan"

    def __init__(self, goal: GridCell):
        self.goal = goal.position
        self.scale = goal.grid.min_cost

    def estimate(self, state: GridCell) -> float:
        return self.scale * (abs(state.row - self.goal[0]) + abs(state.col - self.goal[1]))


class OctileHeuristic:
    """Octile distance scaled by the cheapest cell cost.

    Admissible and consistent for both 4- and 8-connected grids.
    """

    name = "octile"

    def __init__(self, goal: GridCell):
        self.goal = goal.position
        self.scale = goal.grid.min_cost

    def estimate(self, state: GridCell) -> float:
        dr = abs(state.row - self.goal[0])
        dc = abs(state.col - self.goal[1])
        return self.scale * (max(dr, dc) + (math.sqrt(2) - 1) * min(dr, dc))
