"""
Distance estimates used to build A* and greedy best-first priorities.
"""

from typing import Callable

from square_grid import SquareGrid


def manhattan_distance(grid: SquareGrid, a: int, b: int) -> int:
    """|dx| + |dy| between two grid tiles."""
    x0, y0 = grid.from_id(a)
    x1, y1 = grid.from_id(b)
    return abs(x0 - x1) + abs(y0 - y1)


def manhattan_to(grid: SquareGrid, goal: int) -> Callable[[int], int]:
    """One-argument heuristic: Manhattan distance from a tile to goal."""
    grid.from_id(goal)  # reject an out-of-range goal up front

    def heuristic(node: int) -> int:
        return manhattan_distance(grid, goal, node)

    return heuristic
