# src/graphrx/events.py
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Hashable, Optional


class GraphEvent(str, Enum):
    """Graph mutation notifications tracked by :class:`graphrx.GraphRx`."""

    NODE_ADDED = "node_added"
    EDGE_ADDED = "edge_added"
    NODE_DROPPED = "node_dropped"
    EDGE_DROPPED = "edge_dropped"
    CLEARED = "cleared"
    EDGES_CLEARED = "edges_cleared"
    ATTRIBUTES_UPDATED = "attributes_updated"
    NODE_ATTRIBUTES_UPDATED = "node_attributes_updated"
    EDGE_ATTRIBUTES_UPDATED = "edge_attributes_updated"
    EACH_NODE_ATTRIBUTES_UPDATED = "each_node_attributes_updated"
    EACH_EDGE_ATTRIBUTES_UPDATED = "each_edge_attributes_updated"


TRACKED_EVENTS: tuple[GraphEvent, ...] = tuple(GraphEvent)


def parse_graph_event(kind: "GraphEvent | str") -> GraphEvent:
    """Return the :class:`GraphEvent` for ``kind``.

    Raises:
        ValueError: If ``kind`` does not name a tracked event.
    """
    if isinstance(kind, GraphEvent):
        return kind
    try:
        return GraphEvent(kind)
    except ValueError:
        raise ValueError(f"Unknown graph event: {kind!r}") from None


@dataclass(frozen=True)
class GraphEventPayload:
    """
    Data emitted alongside a graph event.

    Attributes:
        key: The node or edge the event concerns. ``None`` for graph-level and
             bulk events.
        attributes: The entity's (or graph's) attributes after the change.
                    For dropped entities, the attributes they had when dropped.
        source: Source node of an edge event.
        target: Target node of an edge event.
        undirected: Directedness of an edge event.
        type: For attribute updates, one of ``set``, ``remove``, ``replace``,
              ``merge`` or ``update``.
        name: The attribute touched by a ``set`` or ``remove`` update.
        data: The mapping passed to a ``merge`` update.
        hints: Optional hints given to a bulk attribute update.
        previous: Shallow copy of the attributes before an attribute update.
    """

    key: Optional[Hashable] = None
    attributes: Optional[Dict[str, Any]] = None
    source: Optional[Hashable] = None
    target: Optional[Hashable] = None
    undirected: Optional[bool] = None
    type: Optional[str] = None
    name: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    hints: Optional[Dict[str, Any]] = None
    previous: Optional[Dict[str, Any]] = None
