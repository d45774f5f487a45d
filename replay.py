"""
Stepwise replay of a search.

Nothing is stored per step: every position is recomputed from scratch on a
fresh record table. This relies on the engine producing identical states
for identical (graph, config, step count).
"""

from typing import Iterator, List, Optional, Tuple

from algorithms import SearchEngine
from graph import Graph
from search_engine import PriorityFirstSearchEngine
from search_types import NodeRecord, SearchConfig, SearchState, SearchStatus, new_record_table


def run_to_step(
    graph: Graph,
    config: SearchConfig,
    steps: Optional[int],
    engine: Optional[SearchEngine] = None,
) -> Tuple[SearchState, List[NodeRecord]]:
    """
    Run at most `steps` iterations on a fresh table; return (state, records).

    steps=None runs until the search stops or exhausts.
    """
    engine = engine or PriorityFirstSearchEngine()
    records = new_record_table(graph.node_count)
    state = engine.search(graph, config, records, max_steps=steps)
    return state, records


class SearchReplay:
    """
    Scrubbable view of one search.

    The position is clamped to [0, max_position]. By default max_position is
    the step count of the finished search, found by running it once; runs
    that reopen nodes can take more steps than there are nodes.
    """

    def __init__(
        self,
        graph: Graph,
        config: SearchConfig,
        max_position: Optional[int] = None,
        engine: Optional[SearchEngine] = None,
    ) -> None:
        self.graph = graph
        self.config = config
        self.engine = engine or PriorityFirstSearchEngine()
        if max_position is None:
            final, _ = run_to_step(graph, config, None, self.engine)
            max_position = final.step_count
        if max_position < 0:
            raise ValueError("max_position must be non-negative")
        self.max_position = max_position
        self.position = 0

    def seek(self, position: int) -> Tuple[SearchState, List[NodeRecord]]:
        """Move to position (clamped) and recompute the search up to it."""
        self.position = min(max(position, 0), self.max_position)
        return run_to_step(self.graph, self.config, self.position, self.engine)

    def current(self) -> Tuple[SearchState, List[NodeRecord]]:
        return self.seek(self.position)

    def step_forward(self) -> Tuple[SearchState, List[NodeRecord]]:
        return self.seek(self.position + 1)

    def step_back(self) -> Tuple[SearchState, List[NodeRecord]]:
        return self.seek(self.position - 1)

    def at_end(self) -> bool:
        """True once the search at the current position has stopped or exhausted."""
        state, _ = run_to_step(self.graph, self.config, self.position, self.engine)
        return state.status is not SearchStatus.RUNNING

    def states(self) -> Iterator[SearchState]:
        """States at positions 0..max_position, each recomputed independently."""
        for position in range(self.max_position + 1):
            state, _ = self.seek(position)
            yield state
