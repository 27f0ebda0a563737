"""Reactive streams over a mutable, event-emitting graph."""

from .errors import (
    GraphError,
    GraphRxClosedError,
    InvalidArgumentsGraphError,
    NotFoundGraphError,
    UsageGraphError,
)
from .events import TRACKED_EVENTS, GraphEvent, GraphEventPayload, parse_graph_event
from .facades import EdgeAttributes, GraphAttributes, NodeAttributes
from .graph import Graph
from .graph_adapter import EventedGraph
from .graph_rx import GraphRx
from .logging_utils import configure_logging
from .streams import BehaviorSubject, Observable, Subject, Subscription, merge

__all__ = [
    "GraphRx",
    "Graph",
    "EventedGraph",
    "GraphEvent",
    "GraphEventPayload",
    "TRACKED_EVENTS",
    "parse_graph_event",
    "GraphAttributes",
    "NodeAttributes",
    "EdgeAttributes",
    "Observable",
    "Subject",
    "BehaviorSubject",
    "Subscription",
    "merge",
    "GraphError",
    "NotFoundGraphError",
    "UsageGraphError",
    "InvalidArgumentsGraphError",
    "GraphRxClosedError",
    "configure_logging",
]
