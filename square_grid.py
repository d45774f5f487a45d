"""
Rectilinear grid topology built on WeightedGraph.

Tile (x, y) has id x + y * width and 4-neighbour adjacency.
"""

from typing import List, Tuple

from errors import OutOfRange
from weighted_graph import WeightedGraph


class SquareGrid(WeightedGraph):
    """
    width x height grid of tiles with uniform initial weight 1.

    The grid fixes the structure; callers set tile weights directly
    (math.inf for walls).
    """

    # east, south, west, north
    DIRS: Tuple[Tuple[int, int], ...] = ((1, 0), (0, 1), (-1, 0), (0, -1))

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("grid dimensions must be non-negative")
        self.width = width
        self.height = height

        adjacency: List[List[int]] = [[] for _ in range(width * height)]
        for x in range(width):
            for y in range(height):
                node = self.to_id(x, y)
                for dx, dy in self.DIRS:
                    x2, y2 = x + dx, y + dy
                    if self.valid(x2, y2):
                        adjacency[node].append(self.to_id(x2, y2))
        super().__init__(width * height, adjacency)

    def neighbors(self, node: int) -> List[int]:
        edges = super().neighbors(node)
        x, y = self.from_id(node)
        if (x + y) % 2 == 0:
            # Checkerboard flip so diagonal paths stair-step instead of
            # doing all east/west movement before north/south.
            edges.reverse()
        return edges

    # --- Coordinate encoding ------------------------------------------------

    def valid(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def to_id(self, x: int, y: int) -> int:
        if not self.valid(x, y):
            raise OutOfRange((x, y), self.node_count)
        return x + y * self.width

    def from_id(self, node: int) -> Tuple[int, int]:
        self._check(node)
        return node % self.width, node // self.width
