# src/graphrx/graph_adapter.py
from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, List, Mapping, Protocol


class EventedGraph(Protocol):
    """
    The graph operations :class:`graphrx.GraphRx` and its facades rely on.

    Any graph can be wrapped as long as it emits one event per logical change,
    synchronously and on the mutating caller's stack, using the names of
    :class:`graphrx.events.GraphEvent`, and raises a not-found error from its
    accessors when a node or edge key is absent. :class:`graphrx.graph.Graph`
    is the bundled implementation.
    """

    # Listener registration. ``off`` must compare listeners by identity and
    # ignore listeners that are not registered.
    def on(self, event: Hashable, listener: Callable[..., Any]) -> None: ...

    def off(self, event: Hashable, listener: Callable[..., Any]) -> None: ...

    def listeners(self, event: Hashable) -> List[Callable[..., Any]]: ...

    def listener_count(self, event: Hashable) -> int: ...

    # Topology
    def source(self, edge: Hashable) -> Hashable: ...

    def target(self, edge: Hashable) -> Hashable: ...

    def is_undirected(self, edge: Hashable) -> bool: ...

    # Graph attributes
    def get_attribute(self, name: str) -> Any: ...

    def get_attributes(self) -> Dict[str, Any]: ...

    def has_attribute(self, name: str) -> bool: ...

    def set_attribute(self, name: str, value: Any) -> None: ...

    def update_attribute(self, name: str, updater: Callable[[Any], Any]) -> None: ...

    def remove_attribute(self, name: str) -> None: ...

    def replace_attributes(self, attributes: Mapping[str, Any]) -> None: ...

    def merge_attributes(self, attributes: Mapping[str, Any]) -> None: ...

    def update_attributes(self, updater: Callable[[Dict[str, Any]], Mapping[str, Any]]) -> None: ...

    # Node attributes
    def get_node_attribute(self, node: Hashable, name: str) -> Any: ...

    def get_node_attributes(self, node: Hashable) -> Dict[str, Any]: ...

    def has_node_attribute(self, node: Hashable, name: str) -> bool: ...

    def set_node_attribute(self, node: Hashable, name: str, value: Any) -> None: ...

    def update_node_attribute(
        self, node: Hashable, name: str, updater: Callable[[Any], Any]
    ) -> None: ...

    def remove_node_attribute(self, node: Hashable, name: str) -> None: ...

    def replace_node_attributes(self, node: Hashable, attributes: Mapping[str, Any]) -> None: ...

    def merge_node_attributes(self, node: Hashable, attributes: Mapping[str, Any]) -> None: ...

    def update_node_attributes(
        self, node: Hashable, updater: Callable[[Dict[str, Any]], Mapping[str, Any]]
    ) -> None: ...

    # Edge attributes
    def get_edge_attribute(self, edge: Hashable, name: str) -> Any: ...

    def get_edge_attributes(self, edge: Hashable) -> Dict[str, Any]: ...

    def has_edge_attribute(self, edge: Hashable, name: str) -> bool: ...

    def set_edge_attribute(self, edge: Hashable, name: str, value: Any) -> None: ...

    def update_edge_attribute(
        self, edge: Hashable, name: str, updater: Callable[[Any], Any]
    ) -> None: ...

    def remove_edge_attribute(self, edge: Hashable, name: str) -> None: ...

    def replace_edge_attributes(self, edge: Hashable, attributes: Mapping[str, Any]) -> None: ...

    def merge_edge_attributes(self, edge: Hashable, attributes: Mapping[str, Any]) -> None: ...

    def update_edge_attributes(
        self, edge: Hashable, updater: Callable[[Dict[str, Any]], Mapping[str, Any]]
    ) -> None: ...
