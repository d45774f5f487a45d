"""
Path reconstruction from a finished (or partial) record table.
"""

from typing import List, Optional, Sequence

from errors import OutOfRange
from graph import NO_EDGE, Graph
from search_types import NodeRecord


def reconstruct_path(records: Sequence[NodeRecord], node: int) -> List[int]:
    """
    Walk parent links from node back to a start.

    Returns the path ordered start -> node, or [] if node was never visited.
    """
    if not 0 <= node < len(records):
        raise OutOfRange(node, len(records))
    if not records[node].visited:
        return []

    path = [node]
    seen = {node}
    parent: Optional[int] = records[node].parent
    while parent is not None:
        if parent in seen:
            raise ValueError(f"parent links form a cycle through node {parent}")
        seen.add(parent)
        path.append(parent)
        parent = records[parent].parent
    path.reverse()
    return path


def path_cost(graph: Graph, path: Sequence[int]) -> float:
    """Sum of edge costs along path; raises if a hop is not traversable."""
    total: float = 0
    for src, dst in zip(path, path[1:]):
        cost = graph.edge_cost(src, dst)
        if cost is NO_EDGE:
            raise ValueError(f"no traversable edge {src} -> {dst}")
        total += cost
    return total
