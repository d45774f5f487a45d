"""
Algorithm interfaces for graph search.

Keeps the search policy separate from graph storage and from the code
that consumes search results.
"""

from abc import ABC, abstractmethod
from typing import Iterator, MutableSequence, Optional

from graph import Graph
from search_types import NodeRecord, SearchConfig, SearchState


class SearchEngine(ABC):
    """
    Interface for a configurable priority-first traversal.
    """

    @abstractmethod
    def search(
        self,
        graph: Graph,
        config: SearchConfig,
        records: MutableSequence[NodeRecord],
        max_steps: Optional[int] = None,
    ) -> SearchState:
        """
        Run the traversal until it stops, exhausts, or max_steps is reached.

        Writes per-node results into records in place.

        Returns:
            The SearchState as of the last step taken.
        """
        raise NotImplementedError

    @abstractmethod
    def iter_states(
        self,
        graph: Graph,
        config: SearchConfig,
        records: MutableSequence[NodeRecord],
    ) -> Iterator[SearchState]:
        """
        Yield the initial state, then the state after every step.

        records reflects the yielded state at the moment it is yielded.
        """
        raise NotImplementedError
