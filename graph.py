"""
Directed, node-weighted graph abstraction for the search engine.

Nodes are integer ids in [0, node_count).
Weights live on nodes; an edge a -> b costs the weight of b. A node whose
weight is math.inf is blocked: no edge into it is ever exposed.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, Tuple

# Returned by edge_cost when there is no traversable edge.
NO_EDGE = None


class Graph(ABC):
    """Directed graph over integer node ids with per-node weights."""

    @property
    @abstractmethod
    def node_count(self) -> int:
        """Number of nodes; fixed at construction."""
        raise NotImplementedError

    @abstractmethod
    def weight(self, node: int) -> float:
        """Weight assigned to node (math.inf when blocked)."""
        raise NotImplementedError

    @abstractmethod
    def set_weight(self, node: int, weight: float) -> None:
        """Change a node weight between searches."""
        raise NotImplementedError

    @abstractmethod
    def adjacency(self, node: int) -> Sequence[int]:
        """Raw outgoing topology of node, including blocked destinations."""
        raise NotImplementedError

    @abstractmethod
    def neighbors(self, node: int) -> List[int]:
        """
        Traversable destinations of node, in search order.

        Destinations with infinite weight are never included.
        """
        raise NotImplementedError

    @abstractmethod
    def edge_cost(self, src: int, dst: int) -> Optional[float]:
        """
        Cost of the edge src -> dst.

        Returns NO_EDGE when dst is not adjacent to src or dst is blocked.
        """
        raise NotImplementedError

    # --- Derived queries ----------------------------------------------------

    def nodes(self) -> Iterable[int]:
        """Return all node ids."""
        return range(self.node_count)

    def has_edge(self, src: int, dst: int) -> bool:
        """Is dst in the raw adjacency of src?"""
        return dst in self.adjacency(src)

    def all_edges(self) -> List[Tuple[int, int]]:
        """Every (src, dst) pair with a finite-cost edge."""
        edges: List[Tuple[int, int]] = []
        for src in self.nodes():
            for dst in self.adjacency(src):
                if self.edge_cost(src, dst) is not NO_EDGE:
                    edges.append((src, dst))
        return edges
