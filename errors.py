"""
Exceptions raised by the graph and search modules.

Terminal search outcomes (empty start list, disconnected graph, a stop
predicate that never fires) are not errors; they show up as a SearchStatus.
"""


class OutOfRange(IndexError):
    """A node id outside [0, node_count) was passed to a graph or search call."""

    def __init__(self, node_id: object, node_count: int) -> None:
        super().__init__(f"node id {node_id!r} out of range for graph with {node_count} nodes")
        self.node_id = node_id
        self.node_count = node_count


class InvalidConfig(ValueError):
    """A search configuration was rejected when it was built."""
