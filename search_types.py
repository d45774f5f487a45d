"""
Data structures shared by the search engine and its callers.

NodeRecord is the per-node table the engine writes into, SearchConfig
selects the algorithm, and SearchState is the snapshot produced per step.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, FrozenSet, List, Optional, Sequence, Tuple

from errors import InvalidConfig


class SearchStatus(Enum):
    """
    Lifecycle of a search run.

    RUNNING: the frontier still holds nodes.
    STOPPED_EARLY: should_stop fired; the last step was not relaxed.
    EXHAUSTED: the frontier emptied; every reachable node was expanded.
    """

    RUNNING = "running"
    STOPPED_EARLY = "stopped_early"
    EXHAUSTED = "exhausted"


@dataclass
class NodeRecord:
    """
    Search bookkeeping for one node.

    Owned by the caller; written only by the engine during a run.
    """
    visited: bool = False
    cost_so_far: Optional[float] = None
    parent: Optional[int] = None
    depth: Optional[int] = None
    visit_order: Optional[int] = None  # tie-break counter, not a cost
    priority: Optional[float] = None
    heuristic: Optional[float] = None  # filled by heuristic priority presets

    def reset(self) -> None:
        self.visited = False
        self.cost_so_far = None
        self.parent = None
        self.depth = None
        self.visit_order = None
        self.priority = None
        self.heuristic = None


def new_record_table(node_count: int) -> List[NodeRecord]:
    """Fresh, unvisited record table for a graph with node_count nodes."""
    return [NodeRecord() for _ in range(node_count)]


@dataclass(frozen=True)
class SearchState:
    """
    Engine state at the end of one step. Immutable once produced.

    current is None before the first step and after exhaustion.
    """
    step_count: int
    current: Optional[int]
    frontier: FrozenSet[int]
    last_expanded_neighbors: Tuple[int, ...]
    status: SearchStatus = SearchStatus.RUNNING


def never_stop(state: SearchState) -> bool:
    return False


def cost_priority(node: int, record: NodeRecord) -> float:
    """Default priority: accumulated cost (Dijkstra, or BFS on unit costs)."""
    return record.cost_so_far


@dataclass(frozen=True)
class SearchConfig:
    """
    Policy for one search run.

    Attributes:
        starts:
            One or more simultaneous origins.
        should_stop:
            Checked once per step after the current node's neighbours are
            known but before they are relaxed.
        priority:
            Frontier ordering key computed at (re)discovery time. Choosing
            it selects the algorithm.
        allow_reopen:
            Whether a visited node may be relaxed again when a cheaper path
            shows up. Greedy best-first turns this off.
    """

    starts: Sequence[int] = field(default_factory=tuple)
    should_stop: Callable[[SearchState], bool] = never_stop
    priority: Callable[[int, NodeRecord], float] = cost_priority
    allow_reopen: bool = True

    def __post_init__(self) -> None:
        try:
            starts = tuple(self.starts)
        except TypeError:
            raise InvalidConfig(f"starts must be a sequence of node ids, got {self.starts!r}") from None
        for node in starts:
            if isinstance(node, bool) or not isinstance(node, int):
                raise InvalidConfig(f"start ids must be integers, got {node!r}")
        # Freeze starts so a config cannot change between replays.
        object.__setattr__(self, "starts", starts)

        if not callable(self.should_stop):
            raise InvalidConfig("should_stop must be callable")
        if not callable(self.priority):
            raise InvalidConfig("priority must be callable")
        if not isinstance(self.allow_reopen, bool):
            raise InvalidConfig("allow_reopen must be a bool")
