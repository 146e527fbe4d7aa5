"""Example state spaces for the search kernel.

Each domain provides a state type satisfying the State contract together with
admissible, consistent heuristics for it.
"""

from .graph import GraphNode, WeightedGraph, EuclideanHeuristic, load_graph
from .grid import GridCell, GridMap, ManhattanHeuristic, OctileHeuristic, parse_grid
from .npuzzle import PuzzleBoard, MisplacedTilesHeuristic, ManhattanDistanceHeuristic, is_solvable

__all__ = [
    'GraphNode',
    'WeightedGraph',
    'EuclideanHeuristic',
    'load_graph',
    'GridCell',
    'GridMap',
    'ManhattanHeuristic',
    'OctileHeuristic',
    'parse_grid',
    'PuzzleBoard',
    'MisplacedTilesHeuristic',
    'ManhattanDistanceHeuristic',
    'is_solvable'
]
