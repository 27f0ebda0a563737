# tests/test_enable_disable.py
from typing import Callable

import pytest

from graphrx import Graph, GraphEvent, GraphRx

# Turning an event off removes its bridge listener plus the graph-changed listener.
LISTENERS_REMOVED_COUNT = 2


def _nodes(*keys: str) -> Callable[[Graph], None]:
    def setup(graph: Graph) -> None:
        for key in keys:
            graph.add_node(key)

    return setup


def _edges(graph: Graph) -> None:
    _nodes("s", "t")(graph)
    graph.add_edge_with_key("e0", "s", "t")
    graph.add_edge_with_key("e1", "t", "s")


# event -> (setup, trigger(graph, i)); each trigger call fires exactly one event of that kind
TRIGGERS: dict[GraphEvent, tuple[Callable[[Graph], None], Callable[[Graph, int], object]]] = {
    GraphEvent.NODE_ADDED: (_nodes(), lambda g, i: g.add_node(f"n{i}")),
    GraphEvent.EDGE_ADDED: (
        _nodes("s", "t"),
        lambda g, i: g.add_edge("s", "t") if i == 0 else g.add_edge("t", "s"),
    ),
    GraphEvent.NODE_DROPPED: (_nodes("n0", "n1"), lambda g, i: g.drop_node(f"n{i}")),
    GraphEvent.EDGE_DROPPED: (_edges, lambda g, i: g.drop_edge(f"e{i}")),
    GraphEvent.CLEARED: (_nodes(), lambda g, i: g.clear()),
    GraphEvent.EDGES_CLEARED: (_nodes(), lambda g, i: g.clear_edges()),
    GraphEvent.ATTRIBUTES_UPDATED: (_nodes(), lambda g, i: g.set_attribute("attr", i)),
    GraphEvent.NODE_ATTRIBUTES_UPDATED: (_nodes("n"), lambda g, i: g.set_node_attribute("n", "attr", i)),
    GraphEvent.EDGE_ATTRIBUTES_UPDATED: (_edges, lambda g, i: g.set_edge_attribute("e0", "attr", i)),
    GraphEvent.EACH_NODE_ATTRIBUTES_UPDATED: (
        _nodes("n"),
        lambda g, i: g.update_each_node_attributes(lambda n, a: {**a, "i": i}),
    ),
    GraphEvent.EACH_EDGE_ATTRIBUTES_UPDATED: (
        _edges,
        lambda g, i: g.update_each_edge_attributes(lambda e, a: {**a, "i": i}),
    ),
}

EVENTS = list(GraphEvent)


def test_every_tracked_event_has_a_trigger() -> None:
    assert set(TRIGGERS) == set(GraphRx.events)


@pytest.mark.parametrize("event", EVENTS, ids=[e.value for e in EVENTS])
def test_enable_does_not_attach_duplicate_listeners(graph: Graph, graph_rx: GraphRx, event: GraphEvent) -> None:
    initial_count = graph.listener_count(event)

    graph_rx.enable_event(event)
    graph_rx.enable_event(event)

    assert graph.listener_count(event) == initial_count


@pytest.mark.parametrize("event", EVENTS, ids=[e.value for e in EVENTS])
def test_disable_removes_internal_listeners(graph: Graph, graph_rx: GraphRx, event: GraphEvent) -> None:
    initial_count = graph.listener_count(event)

    graph_rx.disable_event(event)
    assert graph.listener_count(event) == initial_count - LISTENERS_REMOVED_COUNT
    assert not graph_rx.is_enabled(event)

    graph_rx.disable_event(event)
    assert graph.listener_count(event) == initial_count - LISTENERS_REMOVED_COUNT


@pytest.mark.parametrize("event", EVENTS, ids=[e.value for e in EVENTS])
def test_enable_reattaches_internal_listeners(graph: Graph, graph_rx: GraphRx, event: GraphEvent) -> None:
    initial_count = graph.listener_count(event)

    graph_rx.disable_event(event)
    graph_rx.enable_event(event)

    assert graph.listener_count(event) == initial_count
    assert graph_rx.is_enabled(event)


@pytest.mark.parametrize("event", EVENTS, ids=[e.value for e in EVENTS])
def test_disable_prevents_updates_to_graph_stream(graph: Graph, graph_rx: GraphRx, recorder, event: GraphEvent) -> None:
    setup, trigger = TRIGGERS[event]
    setup(graph)
    recorder.subscribe(graph_rx.stream())

    trigger(graph, 0)
    graph_rx.disable_event(event)
    trigger(graph, 1)
    graph_rx.shutdown()

    assert len(recorder.values) == 2
    assert recorder.completed == 1


@pytest.mark.parametrize("event", EVENTS, ids=[e.value for e in EVENTS])
def test_disable_then_enable_resumes_updates(graph: Graph, graph_rx: GraphRx, recorder, event: GraphEvent) -> None:
    setup, trigger = TRIGGERS[event]
    setup(graph)
    recorder.subscribe(graph_rx.stream())

    graph_rx.disable_event(event)
    trigger(graph, 0)
    graph_rx.enable_event(event)
    trigger(graph, 1)
    graph_rx.shutdown()

    assert len(recorder.values) == 2


@pytest.mark.parametrize("event", EVENTS, ids=[e.value for e in EVENTS])
def test_disable_does_not_remove_consumer_listeners(graph: Graph, graph_rx: GraphRx, event: GraphEvent) -> None:
    setup, trigger = TRIGGERS[event]
    setup(graph)
    calls: list[object] = []
    graph.on(event, lambda payload=None: calls.append(payload))

    graph_rx.disable_event(event)
    trigger(graph, 0)

    assert len(calls) == 1


def test_consumer_listener_survives_shutdown(graph: Graph, graph_rx: GraphRx) -> None:
    calls: list[object] = []
    graph.on(GraphEvent.NODE_ADDED, calls.append)

    graph_rx.shutdown()
    graph.add_node("n")

    assert graph.listener_count(GraphEvent.NODE_ADDED) == 1
    assert len(calls) == 1


def test_disabling_an_event_pauses_streams_derived_from_it(graph: Graph, graph_rx: GraphRx, recorder) -> None:
    graph.add_node("n")
    recorder.subscribe(graph_rx.node("n"))

    graph_rx.disable_event(GraphEvent.NODE_ATTRIBUTES_UPDATED)
    graph.set_node_attribute("n", "a", 1)
    graph_rx.disable_event(GraphEvent.NODE_DROPPED)
    graph.drop_node("n")

    assert len(recorder.values) == 1
    assert recorder.completed == 0

    graph_rx.enable_event(GraphEvent.NODE_ATTRIBUTES_UPDATED)
    graph.add_node("n")
    graph.set_node_attribute("n", "a", 2)
    assert len(recorder.values) == 2


def test_string_event_names_are_accepted(graph: Graph, graph_rx: GraphRx) -> None:
    graph_rx.disable_event("node_added")
    assert not graph_rx.is_enabled(GraphEvent.NODE_ADDED)
    graph_rx.enable_event("node_added")
    assert graph_rx.is_enabled("node_added")


def test_unknown_event_raises(graph_rx: GraphRx) -> None:
    with pytest.raises(ValueError, match="Unknown graph event"):
        graph_rx.enable_event("nodeAdded")
    with pytest.raises(ValueError):
        graph_rx.disable_event("not an event")


def test_every_event_is_attached_at_construction(graph: Graph, graph_rx: GraphRx) -> None:
    for event in GraphRx.events:
        assert graph_rx.is_enabled(event)
        assert graph.listener_count(event) == 2
