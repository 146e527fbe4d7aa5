"""Explicit weighted graphs as a search domain.

A ``WeightedGraph`` stores ordered adjacency lists with non-negative edge
costs. Its nodes are exposed to the kernel as ``GraphNode`` states, which
compare and hash by name only.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from astar_kernel.core.exceptions import ContractViolationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphNode:
    """State wrapping one node of a WeightedGraph."""
    name: str
    graph: 'WeightedGraph' = field(compare=False, hash=False, repr=False)

    def successors(self) -> List['GraphNode']:
        return [GraphNode(name, self.graph) for name, _ in self.graph.neighbors(self.name)]

    def edge_cost(self, successor: 'GraphNode') -> float:
        return self.graph.cost(self.name, successor.name)

    def __str__(self) -> str:
        return self.name


class WeightedGraph:
    """Graph with ordered adjacency lists and non-negative edge costs."""

    def __init__(self, directed: bool = True):
        self.directed = directed
        self._adjacency: Dict[str, Dict[str, float]] = {}
        self.coordinates: Dict[str, np.ndarray] = {}

    def add_node(self, name: str, coordinates: Optional[Sequence[float]] = None) -> None:
        name = str(name)
        self._adjacency.setdefault(name, {})
        if coordinates is not None:
            self.coordinates[name] = np.asarray(coordinates, dtype=np.float64)

    def add_edge(self, source: str, target: str, cost: float) -> None:
        """Add an edge; undirected graphs also get the reverse edge.

        A repeated edge keeps its position in the adjacency order and takes
        the new cost.

        Raises:
            ContractViolationError: If the cost is negative
        """
        cost = float(cost)
        if np.isnan(cost) or cost < 0:
            raise ContractViolationError(f"Edge {source} -> {target} has invalid cost {cost}")
        source, target = str(source), str(target)
        self.add_node(source)
        self.add_node(target)
        self._adjacency[source][target] = cost
        if not self.directed:
            self._adjacency[target][source] = cost

    def node(self, name: str) -> GraphNode:
        """Get the state for a node.

        Raises:
            KeyError: If the graph has no such node
        """
        name = str(name)
        if name not in self._adjacency:
            raise KeyError(f"Unknown graph node: {name}")
        return GraphNode(name, self)

    def neighbors(self, name: str) -> List[Tuple[str, float]]:
        return list(self._adjacency[name].items())

    def cost(self, source: str, target: str) -> float:
        try:
            return self._adjacency[source][target]
        except KeyError:
            raise KeyError(f"No edge {source} -> {target}")

    @property
    def nodes(self) -> List[str]:
        return list(self._adjacency)

    def edges(self) -> Iterable[Tuple[str, str, float]]:
        for source, targets in self._adjacency.items():
            for target, cost in targets.items():
                yield source, target, cost

    def __contains__(self, name: str) -> bool:
        return str(name) in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WeightedGraph':
        """Build a graph from its JSON representation.

        Expected keys: ``edges`` (list of ``[source, target, cost]``),
        optional ``directed`` (default True), ``nodes`` (names of isolated
        nodes) and ``coordinates`` (``{name: [x, y]}``).

        Raises:
            ValueError: If the data is malformed
        """
        if 'edges' not in data:
            raise ValueError("Graph data must contain an 'edges' list")

        graph = cls(directed=bool(data.get('directed', True)))
        for name in data.get('nodes', []):
            graph.add_node(name)
        for edge in data['edges']:
            if len(edge) != 3:
                raise ValueError(f"Edge must be [source, target, cost], got {edge}")
            graph.add_edge(*edge)
        for name, coords in data.get('coordinates', {}).items():
            graph.add_node(name, coords)

        logger.debug(f"Loaded graph with {len(graph)} nodes (directed={graph.directed})")
        return graph


def load_graph(file_path: Union[str, Path]) -> WeightedGraph:
    """Load a weighted graph from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file format is invalid
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Graph file not found: {file_path}")

    try:
        with open(file_path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_path}: {e}")

    return WeightedGraph.from_dict(data)


class EuclideanHeuristic:
    """Straight-line distance to the goal node.

    Admissible when every edge costs at least the distance between its
    endpoints. Nodes without coordinates estimate 0.
    """

    name = "euclidean"

    def __init__(self, graph: WeightedGraph, goal: str):
        if str(goal) not in graph.coordinates:
            raise ValueError(f"Goal node {goal} has no coordinates")
        self.graph = graph
        self.goal_position = graph.coordinates[str(goal)]

    def estimate(self, state: GraphNode) -> float:
        position = self.graph.coordinates.get(state.name)
        if position is None:
            return 0.0
        return float(np.linalg.norm(position - self.goal_position))
