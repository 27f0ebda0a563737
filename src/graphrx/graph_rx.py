# src/graphrx/graph_rx.py
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Hashable, Iterable, Optional

from .config import load_settings
from .errors import GraphRxClosedError
from .events import TRACKED_EVENTS, GraphEvent, GraphEventPayload, parse_graph_event
from .facades import EdgeAttributes, GraphAttributes, NodeAttributes
from .graph_adapter import EventedGraph
from .metrics import ATTACHED_LISTENERS, ENTITY_STREAMS_CLOSED, GRAPH_EVENTS_BRIDGED
from .streams import BehaviorSubject, Observable, Subject, merge

logger = logging.getLogger(__name__)

Listener = Callable[..., None]


def _has_key(key: Hashable) -> Callable[[Optional[GraphEventPayload]], bool]:
    return lambda payload: payload is not None and payload.key == key


class GraphRx:
    """
    Reactive streams over an event-emitting graph.

    On construction one listener per tracked event kind is registered on
    ``graph`` (plus a shared listener that re-emits the graph on every tracked
    event). Each listener forwards its payloads to a broadcast channel from
    which :meth:`stream`, :meth:`graph_attributes`, :meth:`node` and
    :meth:`edge` derive their streams. Listeners registered on ``graph`` by
    anyone else are never touched.

    The wrapper does not own ``graph``: it may be mutated directly, and all
    mutations made while the wrapper's listeners are attached show up in the
    streams. Call :meth:`shutdown` (or use the wrapper as a context manager)
    to detach every listener and complete every stream.

    Args:
        graph: The graph to observe.
        disabled_events: Event kinds to leave detached at construction.
                         Defaults to the ``GRAPHRX_DISABLED_EVENTS`` setting.
    """

    events: tuple[GraphEvent, ...] = TRACKED_EVENTS

    def __init__(
        self,
        graph: EventedGraph,
        *,
        disabled_events: Optional[Iterable[GraphEvent | str]] = None,
    ) -> None:
        self._graph = graph
        self._closed = False
        self._graph_subject: BehaviorSubject[EventedGraph] = BehaviorSubject(graph)
        self._channels: Dict[GraphEvent, Subject[Optional[GraphEventPayload]]] = {
            event: Subject() for event in self.events
        }
        # Built once so that identity-based detection and removal stay valid.
        self._listeners: Dict[GraphEvent, Listener] = {
            event: self._bridge(event) for event in self.events
        }
        self._changed_listener: Listener = self._make_changed_listener()

        if disabled_events is None:
            disabled_events = load_settings().GRAPHRX_DISABLED_EVENTS
        disabled = {parse_graph_event(kind) for kind in disabled_events}
        for event in self.events:
            if event not in disabled:
                self._attach(event)
        logger.debug(
            "GraphRx attached to %r (disabled events: %s)",
            graph,
            sorted(event.value for event in disabled) or "none",
        )

    def __enter__(self) -> "GraphRx":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown()

    @property
    def graph(self) -> EventedGraph:
        return self._graph

    @property
    def is_closed(self) -> bool:
        return self._closed

    # --- listener registry ---

    def _bridge(self, event: GraphEvent) -> Listener:
        channel = self._channels[event]

        def listener(payload: Optional[GraphEventPayload] = None) -> None:
            GRAPH_EVENTS_BRIDGED.labels(event=event.value).inc()
            channel.on_next(payload)

        return listener

    def _make_changed_listener(self) -> Listener:
        def listener(payload: Optional[GraphEventPayload] = None) -> None:
            self._graph_subject.on_next(self._graph)

        return listener

    def _is_registered(self, event: GraphEvent, listener: Listener) -> bool:
        return any(registered is listener for registered in self._graph.listeners(event))

    def _attach(self, event: GraphEvent) -> None:
        listener = self._listeners[event]
        if self._is_registered(event, listener):
            return
        if not self._is_registered(event, self._changed_listener):
            self._graph.on(event, self._changed_listener)
        self._graph.on(event, listener)
        ATTACHED_LISTENERS.labels(event=event.value).set(1)
        logger.debug("Attached listeners for %s", event.value)

    def _detach(self, event: GraphEvent) -> None:
        self._graph.off(event, self._listeners[event])
        self._graph.off(event, self._changed_listener)
        ATTACHED_LISTENERS.labels(event=event.value).set(0)
        logger.debug("Detached listeners for %s", event.value)

    # --- lifecycle ---

    def enable_event(self, kind: GraphEvent | str) -> None:
        """Re-attach the wrapper's listeners for ``kind``. Safe to repeat.

        Raises:
            ValueError: If ``kind`` is not a tracked event.
        """
        event = parse_graph_event(kind)
        if self._closed:
            logger.warning("Ignoring enable_event(%s) on a closed GraphRx", event.value)
            return
        self._attach(event)

    def disable_event(self, kind: GraphEvent | str) -> None:
        """Detach the wrapper's listeners for ``kind``. Safe to repeat.

        Raises:
            ValueError: If ``kind`` is not a tracked event.
        """
        event = parse_graph_event(kind)
        if self._closed:
            logger.warning("Ignoring disable_event(%s) on a closed GraphRx", event.value)
            return
        self._detach(event)

    def is_enabled(self, kind: GraphEvent | str) -> bool:
        """Return whether the wrapper's listener for ``kind`` is registered."""
        event = parse_graph_event(kind)
        return self._is_registered(event, self._listeners[event])

    def shutdown(self) -> None:
        """Detach all listeners and complete every channel and derived stream.

        Calling it again is a no-op.
        """
        if self._closed:
            logger.debug("GraphRx already shut down")
            return
        self._closed = True
        for event in self.events:
            self._detach(event)
        for channel in self._channels.values():
            channel.on_completed()
        self._graph_subject.on_completed()
        logger.info("GraphRx shut down for %r", self._graph)

    # --- streams ---

    def _ensure_open(self) -> None:
        if self._closed:
            raise GraphRxClosedError("GraphRx has been shut down.")

    def stream(self) -> Observable[EventedGraph]:
        """Stream of the graph itself.

        Emits the graph on subscription and again after every tracked event.
        The same graph object is emitted each time, never a copy.
        """
        self._ensure_open()
        return self._graph_subject.as_observable()

    def graph_attributes(self) -> Observable[GraphAttributes]:
        """Stream of graph-level attribute views.

        Emits one view on subscription and one per graph attribute update.
        """
        self._ensure_open()
        graph = self._graph
        return (
            self._channels[GraphEvent.ATTRIBUTES_UPDATED]
            .map(lambda _: GraphAttributes(graph))
            .start_with(GraphAttributes(graph))
        )

    def node(self, key: Hashable) -> Observable[NodeAttributes]:
        """Stream of attribute views for node ``key``.

        Emits one view on subscription, whether or not the node exists, and
        one per attribute update of that node. Completes when the node is
        dropped or the graph is cleared.
        """
        self._ensure_open()
        graph = self._graph
        until = merge(
            self._channels[GraphEvent.CLEARED],
            self._channels[GraphEvent.NODE_DROPPED].filter(_has_key(key)),
        ).take(1)
        return (
            self._channels[GraphEvent.NODE_ATTRIBUTES_UPDATED]
            .filter(_has_key(key))
            .map(lambda _: NodeAttributes(key, graph))
            .start_with(NodeAttributes(key, graph))
            .take_until(until)
            .finalize(lambda: ENTITY_STREAMS_CLOSED.labels(entity="node").inc())
        )

    def edge(self, key: Hashable) -> Observable[EdgeAttributes]:
        """Stream of attribute views for edge ``key``.

        Emits one view on subscription, whether or not the edge exists, and
        one per attribute update of that edge. Completes when the edge is
        dropped, or when the graph or its edges are cleared.
        """
        self._ensure_open()
        graph = self._graph
        until = merge(
            self._channels[GraphEvent.CLEARED],
            self._channels[GraphEvent.EDGES_CLEARED],
            self._channels[GraphEvent.EDGE_DROPPED].filter(_has_key(key)),
        ).take(1)
        return (
            self._channels[GraphEvent.EDGE_ATTRIBUTES_UPDATED]
            .filter(_has_key(key))
            .map(lambda _: EdgeAttributes(key, graph))
            .start_with(EdgeAttributes(key, graph))
            .take_until(until)
            .finalize(lambda: ENTITY_STREAMS_CLOSED.labels(entity="edge").inc())
        )
