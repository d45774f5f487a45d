"""
Views that reinterpret edge costs of an existing graph.

A view wraps a source graph and shares its node count, weights and
topology. Only edge_cost may be overridden, and only for traversable
edges: a missing or blocked edge stays NO_EDGE through every view.
"""

from typing import Callable, List, Optional, Sequence

from graph import NO_EDGE, Graph

# Grid helpers reachable through a view; anything else must exist on the view.
FORWARDED_ATTRS = frozenset({"to_id", "from_id", "valid", "width", "height"})


class GraphView(Graph):
    """
    Pass-through projection of a source graph.

    Subclasses override traversable_cost() to change what a traversable
    edge costs. The view holds a reference to the source and never copies
    its arrays, so weight edits on the source are visible immediately.
    """

    def __init__(self, source: Graph) -> None:
        self._source = source

    @property
    def source(self) -> Graph:
        return self._source

    # --- Delegated to the source graph --------------------------------------

    @property
    def node_count(self) -> int:
        return self._source.node_count

    def weight(self, node: int) -> float:
        return self._source.weight(node)

    def set_weight(self, node: int, weight: float) -> None:
        self._source.set_weight(node, weight)

    def adjacency(self, node: int) -> Sequence[int]:
        return self._source.adjacency(node)

    def neighbors(self, node: int) -> List[int]:
        return self._source.neighbors(node)

    # --- Override point -----------------------------------------------------

    def edge_cost(self, src: int, dst: int) -> Optional[float]:
        cost = self._source.edge_cost(src, dst)
        if cost is NO_EDGE:
            return NO_EDGE
        return self.traversable_cost(src, dst, cost)

    def traversable_cost(self, src: int, dst: int, source_cost: float) -> float:
        """Cost of an edge the source graph prices at source_cost."""
        return source_cost

    def __getattr__(self, name: str):
        if name in FORWARDED_ATTRS:
            return getattr(self._source, name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")


class UnitCostView(GraphView):
    """Every traversable edge costs 1, whatever the destination weight."""

    def traversable_cost(self, src: int, dst: int, source_cost: float) -> float:
        return 1


class EdgeCostView(GraphView):
    """Traversable edges cost cost_fn(src, dst), e.g. a geometric distance."""

    def __init__(self, source: Graph, cost_fn: Callable[[int, int], float]) -> None:
        super().__init__(source)
        self._cost_fn = cost_fn

    def traversable_cost(self, src: int, dst: int, source_cost: float) -> float:
        return self._cost_fn(src, dst)
