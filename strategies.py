"""
Preset search configurations.

Each strategy is a choice of priority function and reopen flag over the
same priority-first engine.
"""

from enum import Enum
from typing import Callable, Optional, Sequence

from errors import InvalidConfig
from search_types import NodeRecord, SearchConfig, SearchState, cost_priority, never_stop

Heuristic = Callable[[int], float]

# Slightly overweights the heuristic so equal-f ties resolve toward the goal.
ASTAR_TIE_BREAK = 1.01


class SearchStrategy(Enum):
    """
    Algorithms the engine can emulate.

    BREADTH_FIRST: expand by hop count; first discovery wins.
    DIJKSTRA: expand by accumulated cost.
    GREEDY_BEST_FIRST: expand by heuristic only; never reopens (suboptimal).
    A_STAR: expand by cost plus heuristic.
    """

    BREADTH_FIRST = "breadth_first"
    DIJKSTRA = "dijkstra"
    GREEDY_BEST_FIRST = "greedy_best_first"
    A_STAR = "a_star"

    @property
    def needs_heuristic(self) -> bool:
        return self in (SearchStrategy.GREEDY_BEST_FIRST, SearchStrategy.A_STAR)


def depth_priority(node: int, record: NodeRecord) -> float:
    return record.depth


def greedy_priority(heuristic: Heuristic) -> Callable[[int, NodeRecord], float]:
    def priority(node: int, record: NodeRecord) -> float:
        record.heuristic = heuristic(node)
        return record.heuristic

    return priority


def astar_priority(
    heuristic: Heuristic, tie_break: float = ASTAR_TIE_BREAK
) -> Callable[[int, NodeRecord], float]:
    def priority(node: int, record: NodeRecord) -> float:
        record.heuristic = heuristic(node)
        return record.cost_so_far + tie_break * record.heuristic

    return priority


def stop_at(goal: int) -> Callable[[SearchState], bool]:
    """Early exit once goal is popped from the frontier."""

    def should_stop(state: SearchState) -> bool:
        return state.current == goal

    return should_stop


def make_config(
    strategy: SearchStrategy,
    starts: Sequence[int],
    heuristic: Optional[Heuristic] = None,
    goal: Optional[int] = None,
) -> SearchConfig:
    """
    Build the SearchConfig for strategy.

    With goal set, the run stops early when goal becomes current.
    """
    if strategy.needs_heuristic and heuristic is None:
        raise InvalidConfig(f"{strategy.name} requires a heuristic")

    should_stop = never_stop if goal is None else stop_at(goal)

    if strategy is SearchStrategy.BREADTH_FIRST:
        return SearchConfig(starts, should_stop, depth_priority, allow_reopen=False)
    if strategy is SearchStrategy.DIJKSTRA:
        return SearchConfig(starts, should_stop, cost_priority)
    if strategy is SearchStrategy.GREEDY_BEST_FIRST:
        return SearchConfig(starts, should_stop, greedy_priority(heuristic), allow_reopen=False)
    return SearchConfig(starts, should_stop, astar_priority(heuristic))
