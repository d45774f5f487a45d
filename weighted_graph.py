"""
Concrete node-weighted graph implementation.

Implements the Graph interface with a fixed adjacency list and a mutable
per-node weight array.
"""

from typing import Iterable, List, Optional, Sequence, Tuple
import math

from errors import OutOfRange
from graph import NO_EDGE, Graph


class WeightedGraph(Graph):
    """
    Directed graph with fixed topology and mutable node weights.

    The topology is given once at construction; only weights change
    afterwards, and only between searches.
    """

    def __init__(
        self,
        node_count: int,
        adjacency: Optional[Sequence[Iterable[int]]] = None,
        weights: Optional[Sequence[float]] = None,
    ) -> None:
        if node_count < 0:
            raise ValueError("node_count must be non-negative")
        self._node_count = node_count

        if adjacency is None:
            adjacency = [() for _ in range(node_count)]
        if len(adjacency) != node_count:
            raise ValueError(
                f"adjacency has {len(adjacency)} entries, expected {node_count}"
            )
        self._edges: List[Tuple[int, ...]] = []
        for dsts in adjacency:
            row = tuple(dsts)
            for dst in row:
                self._check(dst)
            self._edges.append(row)

        if weights is None:
            self._weights: List[float] = [1] * node_count
        else:
            if len(weights) != node_count:
                raise ValueError(
                    f"weights has {len(weights)} entries, expected {node_count}"
                )
            for w in weights:
                _check_weight(w)
            self._weights = list(weights)

    # --- Graph interface -----------------------------------------------------

    @property
    def node_count(self) -> int:
        return self._node_count

    def weight(self, node: int) -> float:
        self._check(node)
        return self._weights[node]

    def set_weight(self, node: int, weight: float) -> None:
        self._check(node)
        _check_weight(weight)
        if self._weights[node] != weight:
            self._weights[node] = weight

    def adjacency(self, node: int) -> Tuple[int, ...]:
        self._check(node)
        return self._edges[node]

    def neighbors(self, node: int) -> List[int]:
        self._check(node)
        return [dst for dst in self._edges[node] if self._weights[dst] != math.inf]

    def edge_cost(self, src: int, dst: int) -> Optional[float]:
        self._check(src)
        self._check(dst)
        if dst not in self._edges[src]:
            return NO_EDGE
        w = self._weights[dst]
        if w == math.inf:
            return NO_EDGE
        return w

    # --- Queries used by editors and scenario dumps -------------------------

    def nodes_with_weight(self, weight: float = math.inf) -> List[int]:
        """Ids whose weight equals weight (walls by default)."""
        return [node for node, w in enumerate(self._weights) if w == weight]

    # --- Internal helpers ---------------------------------------------------

    def _check(self, node: int) -> None:
        if isinstance(node, bool) or not isinstance(node, int):
            raise OutOfRange(node, self._node_count)
        if not 0 <= node < self._node_count:
            raise OutOfRange(node, self._node_count)


def _check_weight(weight: float) -> None:
    if math.isnan(weight) or weight < 0:
        raise ValueError(f"node weight must be a non-negative number, got {weight!r}")
