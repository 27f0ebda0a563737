# src/graphrx/errors.py


class GraphError(ValueError):
    """Base exception for invalid graph operations."""

    pass


class NotFoundGraphError(GraphError):
    """Raised when a node or edge key is absent from the graph."""

    pass


class UsageGraphError(GraphError):
    """Raised when an operation is not allowed in the graph's current state.

    Examples are adding a node whose key already exists, adding a parallel
    edge to a simple graph, or adding an undirected edge to a directed graph.
    """

    pass


class InvalidArgumentsGraphError(GraphError):
    """Raised when attribute arguments or updater results are not mappings."""

    pass


class GraphRxClosedError(RuntimeError):
    """Raised when a stream is requested from a wrapper that was shut down."""

    pass
