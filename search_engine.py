"""
Heap-based priority-first search engine.

One algorithm covers breadth-first search, Dijkstra, greedy best-first and
A*; the SearchConfig priority function and reopen flag pick which. Runs are
stepwise and deterministic so a caller can replay any prefix of a search.
"""

from dataclasses import replace
from typing import Dict, Iterator, List, MutableSequence, Optional, Tuple
import heapq

from algorithms import SearchEngine
from errors import InvalidConfig, OutOfRange
from graph import NO_EDGE, Graph
from search_types import NodeRecord, SearchConfig, SearchState, SearchStatus


class SearchRun:
    """
    A single in-progress traversal over one graph and one record table.

    The frontier is a binary heap of (priority, visit_order, node) plus a
    map from each pending node to its live key. Re-relaxing a pending node
    pushes a fresh entry and the superseded one is skipped when popped, so
    pop order is exactly "lowest priority, then earliest visit_order" over
    the pending nodes.

    The graph must not change weights while a run is in progress.
    """

    def __init__(
        self,
        graph: Graph,
        config: SearchConfig,
        records: MutableSequence[NodeRecord],
    ) -> None:
        if len(records) < graph.node_count:
            raise InvalidConfig(
                f"record table has {len(records)} entries, graph has {graph.node_count} nodes"
            )
        for node in config.starts:
            if not 0 <= node < graph.node_count:
                raise OutOfRange(node, graph.node_count)

        self._graph = graph
        self._config = config
        self._records = records
        self._heap: List[Tuple[float, int, int]] = []
        self._pending: Dict[int, Tuple[float, int]] = {}
        self._next_order = 0

        for record in records:
            record.reset()

        for node in config.starts:
            if node in self._pending:
                # Duplicate start: the first occurrence keeps its order.
                continue
            record = records[node]
            record.cost_so_far = 0
            record.parent = None
            record.depth = 0
            record.visited = True
            self._discover(node, record)

        status = SearchStatus.RUNNING if self._pending else SearchStatus.EXHAUSTED
        self._state = SearchState(
            step_count=0,
            current=None,
            frontier=frozenset(self._pending),
            last_expanded_neighbors=(),
            status=status,
        )

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def status(self) -> SearchStatus:
        return self._state.status

    @property
    def records(self) -> MutableSequence[NodeRecord]:
        return self._records

    def step(self) -> SearchState:
        """
        Advance by one iteration.

        Once the run is stopped or exhausted this returns the final state
        without touching the records.
        """
        if self._state.status is not SearchStatus.RUNNING:
            return self._state

        step_count = self._state.step_count + 1
        current = self._pop_min()
        neighbors = tuple(self._graph.neighbors(current))
        state = SearchState(
            step_count=step_count,
            current=current,
            frontier=frozenset(self._pending),
            last_expanded_neighbors=neighbors,
        )

        if self._config.should_stop(state):
            self._state = replace(state, status=SearchStatus.STOPPED_EARLY)
            return self._state

        self._relax(current, neighbors)

        if self._pending:
            self._state = replace(state, frontier=frozenset(self._pending))
        else:
            self._state = SearchState(
                step_count=step_count,
                current=None,
                frontier=frozenset(),
                last_expanded_neighbors=(),
                status=SearchStatus.EXHAUSTED,
            )
        return self._state

    def run(self, max_steps: Optional[int] = None) -> SearchState:
        """Step until stopped, exhausted, or max_steps more steps are taken."""
        if max_steps is not None and max_steps < 0:
            raise ValueError("max_steps must be non-negative")
        taken = 0
        while self._state.status is SearchStatus.RUNNING:
            if max_steps is not None and taken >= max_steps:
                break
            self.step()
            taken += 1
        return self._state

    def states(self) -> Iterator[SearchState]:
        """Yield the current state, then the state after each further step."""
        yield self._state
        while self._state.status is SearchStatus.RUNNING:
            yield self.step()

    # --- Internal helpers ---------------------------------------------------

    def _relax(self, current: int, neighbors: Tuple[int, ...]) -> None:
        here = self._records[current]
        for nxt in neighbors:
            cost = self._graph.edge_cost(current, nxt)
            if cost is NO_EDGE:
                continue
            candidate = here.cost_so_far + cost
            record = self._records[nxt]
            if record.visited and not (
                self._config.allow_reopen and candidate < record.cost_so_far
            ):
                continue
            record.cost_so_far = candidate
            record.parent = current
            record.depth = here.depth + 1
            record.visited = True
            self._discover(nxt, record)

    def _discover(self, node: int, record: NodeRecord) -> None:
        record.visit_order = self._next_order
        self._next_order += 1
        record.priority = self._config.priority(node, record)
        key = (record.priority, record.visit_order)
        self._pending[node] = key
        heapq.heappush(self._heap, (record.priority, record.visit_order, node))

    def _pop_min(self) -> int:
        while True:
            priority, order, node = heapq.heappop(self._heap)
            # Skip entries superseded by a later relaxation of the same node
            if self._pending.get(node) == (priority, order):
                del self._pending[node]
                return node


class PriorityFirstSearchEngine(SearchEngine):
    """
    SearchEngine backed by SearchRun.

    Complexity:
        O(E log E) heap operations over the nodes reachable from the starts,
        plus O(F) per step to snapshot a frontier of size F.
    """

    def search(
        self,
        graph: Graph,
        config: SearchConfig,
        records: MutableSequence[NodeRecord],
        max_steps: Optional[int] = None,
    ) -> SearchState:
        return SearchRun(graph, config, records).run(max_steps)

    def iter_states(
        self,
        graph: Graph,
        config: SearchConfig,
        records: MutableSequence[NodeRecord],
    ) -> Iterator[SearchState]:
        yield from SearchRun(graph, config, records).states()
