# src/graphrx/facades.py
"""Scoped read/write views over the live graph.

A facade stores nothing but a key and the graph it reads from, so every call
reflects the graph as it is when the call is made. Building a facade never
touches the graph; calling a method on one for a missing node or edge raises
:class:`~graphrx.errors.NotFoundGraphError` from the graph itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Hashable, Mapping

if TYPE_CHECKING:  # pragma: no cover - used for type hints only
    from .graph_adapter import EventedGraph


class GraphAttributes:
    """Attributes of the graph itself."""

    __slots__ = ("_graph",)

    def __init__(self, graph: "EventedGraph") -> None:
        self._graph = graph

    def __repr__(self) -> str:
        return f"GraphAttributes({self._graph!r})"

    def get_attribute(self, name: str) -> Any:
        return self._graph.get_attribute(name)

    def get_attributes(self) -> Dict[str, Any]:
        """Return a shallow copy of all graph attributes."""
        return dict(self._graph.get_attributes())

    def has_attribute(self, name: str) -> bool:
        return self._graph.has_attribute(name)

    def set_attribute(self, name: str, value: Any) -> None:
        self._graph.set_attribute(name, value)

    def update_attribute(self, name: str, updater: Callable[[Any], Any]) -> None:
        self._graph.update_attribute(name, updater)

    def remove_attribute(self, name: str) -> None:
        self._graph.remove_attribute(name)

    def replace_attributes(self, attributes: Mapping[str, Any]) -> None:
        self._graph.replace_attributes(attributes)

    def merge_attributes(self, attributes: Mapping[str, Any]) -> None:
        self._graph.merge_attributes(attributes)

    def update_attributes(self, updater: Callable[[Dict[str, Any]], Mapping[str, Any]]) -> None:
        self._graph.update_attributes(updater)


class NodeAttributes:
    """Attributes of one node, addressed by ``key``."""

    __slots__ = ("key", "_graph")

    def __init__(self, key: Hashable, graph: "EventedGraph") -> None:
        self.key = key
        self._graph = graph

    def __repr__(self) -> str:
        return f"NodeAttributes(key={self.key!r})"

    def get_attribute(self, name: str) -> Any:
        return self._graph.get_node_attribute(self.key, name)

    def get_attributes(self) -> Dict[str, Any]:
        return dict(self._graph.get_node_attributes(self.key))

    def has_attribute(self, name: str) -> bool:
        return self._graph.has_node_attribute(self.key, name)

    def set_attribute(self, name: str, value: Any) -> None:
        self._graph.set_node_attribute(self.key, name, value)

    def update_attribute(self, name: str, updater: Callable[[Any], Any]) -> None:
        self._graph.update_node_attribute(self.key, name, updater)

    def remove_attribute(self, name: str) -> None:
        self._graph.remove_node_attribute(self.key, name)

    def replace_attributes(self, attributes: Mapping[str, Any]) -> None:
        self._graph.replace_node_attributes(self.key, attributes)

    def merge_attributes(self, attributes: Mapping[str, Any]) -> None:
        self._graph.merge_node_attributes(self.key, attributes)

    def update_attributes(self, updater: Callable[[Dict[str, Any]], Mapping[str, Any]]) -> None:
        self._graph.update_node_attributes(self.key, updater)


class EdgeAttributes:
    """Attributes and endpoints of one edge, addressed by ``key``.

    ``source``, ``target`` and ``undirected`` are methods so that they report
    the edge's current topology.
    """

    __slots__ = ("key", "_graph")

    def __init__(self, key: Hashable, graph: "EventedGraph") -> None:
        self.key = key
        self._graph = graph

    def __repr__(self) -> str:
        return f"EdgeAttributes(key={self.key!r})"

    def source(self) -> Hashable:
        return self._graph.source(self.key)

    def target(self) -> Hashable:
        return self._graph.target(self.key)

    def undirected(self) -> bool:
        return self._graph.is_undirected(self.key)

    def get_attribute(self, name: str) -> Any:
        return self._graph.get_edge_attribute(self.key, name)

    def get_attributes(self) -> Dict[str, Any]:
        return dict(self._graph.get_edge_attributes(self.key))

    def has_attribute(self, name: str) -> bool:
        return self._graph.has_edge_attribute(self.key, name)

    def set_attribute(self, name: str, value: Any) -> None:
        self._graph.set_edge_attribute(self.key, name, value)

    def update_attribute(self, name: str, updater: Callable[[Any], Any]) -> None:
        self._graph.update_edge_attribute(self.key, name, updater)

    def remove_attribute(self, name: str) -> None:
        self._graph.remove_edge_attribute(self.key, name)

    def replace_attributes(self, attributes: Mapping[str, Any]) -> None:
        self._graph.replace_edge_attributes(self.key, attributes)

    def merge_attributes(self, attributes: Mapping[str, Any]) -> None:
        self._graph.merge_edge_attributes(self.key, attributes)

    def update_attributes(self, updater: Callable[[Dict[str, Any]], Mapping[str, Any]]) -> None:
        self._graph.update_edge_attributes(self.key, updater)
