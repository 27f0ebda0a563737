# src/graphrx/graph.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional, Tuple

from ._internal.emitter import EventEmitter
from .errors import InvalidArgumentsGraphError, NotFoundGraphError, UsageGraphError
from .events import GraphEvent, GraphEventPayload

Attributes = Dict[str, Any]
Updater = Callable[[Attributes], Mapping[str, Any]]

GRAPH_TYPES = ("mixed", "directed", "undirected")


@dataclass
class _EdgeData:
    key: Hashable
    source: Hashable
    target: Hashable
    undirected: bool
    attributes: Attributes = field(default_factory=dict)


def _ensure_mapping(value: Any, what: str) -> Attributes:
    if not isinstance(value, Mapping):
        raise InvalidArgumentsGraphError(
            f"{what} must be a mapping, got {type(value).__name__}."
        )
    return dict(value)


class Graph(EventEmitter):
    """
    An in-memory attributed graph that announces every mutation.

    Each logical change emits exactly one :class:`~graphrx.events.GraphEvent`
    synchronously, before the mutating call returns. Bulk attribute updates
    emit a single event rather than one per entity. Accessors referring to a
    missing node or edge raise :class:`~graphrx.errors.NotFoundGraphError`.

    Args:
        type: ``"mixed"`` (default), ``"directed"`` or ``"undirected"``.
        multi: Whether parallel edges between the same endpoints are allowed.
    """

    def __init__(self, *, type: str = "mixed", multi: bool = False) -> None:
        super().__init__()
        if type not in GRAPH_TYPES:
            raise InvalidArgumentsGraphError(
                f"Graph type must be one of {', '.join(GRAPH_TYPES)}, got {type!r}."
            )
        self._type = type
        self._multi = multi
        self._attributes: Attributes = {}
        self._nodes: Dict[Hashable, Attributes] = {}
        self._edges: Dict[Hashable, _EdgeData] = {}
        self._next_edge_id = 0

    @property
    def type(self) -> str:
        return self._type

    @property
    def multi(self) -> bool:
        return self._multi

    @property
    def order(self) -> int:
        """Number of nodes in the graph."""
        return len(self._nodes)

    @property
    def size(self) -> int:
        """Number of edges in the graph."""
        return len(self._edges)

    def __repr__(self) -> str:
        return f"Graph(type={self._type!r}, multi={self._multi}, order={self.order}, size={self.size})"

    # --- lookups ---

    def _node_attributes(self, node: Hashable) -> Attributes:
        try:
            return self._nodes[node]
        except KeyError:
            raise NotFoundGraphError(f"Node '{node}' not found.") from None

    def _edge_data(self, edge: Hashable) -> _EdgeData:
        try:
            return self._edges[edge]
        except KeyError:
            raise NotFoundGraphError(f"Edge '{edge}' not found.") from None

    def has_node(self, node: Hashable) -> bool:
        return node in self._nodes

    def has_edge(self, edge: Hashable) -> bool:
        return edge in self._edges

    def edge(
        self, source: Hashable, target: Hashable, *, undirected: Optional[bool] = None
    ) -> Optional[Hashable]:
        """Return the key of an edge joining ``source`` to ``target``, or ``None``.

        Undirected edges match in both orientations. ``undirected`` restricts
        the search to one kind of edge.
        """
        for data in self._edges.values():
            if undirected is not None and data.undirected != undirected:
                continue
            if data.source == source and data.target == target:
                return data.key
            if data.undirected and data.source == target and data.target == source:
                return data.key
        return None

    def nodes(self) -> List[Hashable]:
        return list(self._nodes)

    def edges(self) -> List[Hashable]:
        return list(self._edges)

    def source(self, edge: Hashable) -> Hashable:
        return self._edge_data(edge).source

    def target(self, edge: Hashable) -> Hashable:
        return self._edge_data(edge).target

    def extremities(self, edge: Hashable) -> Tuple[Hashable, Hashable]:
        data = self._edge_data(edge)
        return data.source, data.target

    def is_undirected(self, edge: Hashable) -> bool:
        return self._edge_data(edge).undirected

    def is_directed(self, edge: Hashable) -> bool:
        return not self._edge_data(edge).undirected

    # --- nodes ---

    def add_node(self, node: Hashable, attributes: Optional[Mapping[str, Any]] = None) -> Hashable:
        """
        Adds a new node and emits ``node_added``.

        Raises:
            UsageGraphError: If the node already exists.
            InvalidArgumentsGraphError: If ``attributes`` is not a mapping.
        """
        attrs = _ensure_mapping(attributes if attributes is not None else {}, "Node attributes")
        if node in self._nodes:
            raise UsageGraphError(f"Node '{node}' already exists.")
        self._nodes[node] = attrs
        self.emit(GraphEvent.NODE_ADDED, GraphEventPayload(key=node, attributes=attrs))
        return node

    def merge_node(
        self, node: Hashable, attributes: Optional[Mapping[str, Any]] = None
    ) -> Tuple[Hashable, bool]:
        """Add ``node`` or merge ``attributes`` into the existing one.

        Returns the node key and whether the node was added.
        """
        if node not in self._nodes:
            self.add_node(node, attributes)
            return node, True
        if attributes:
            self.merge_node_attributes(node, attributes)
        return node, False

    def update_node(
        self, node: Hashable, updater: Optional[Updater] = None
    ) -> Tuple[Hashable, bool]:
        """Add ``node`` or replace its attributes with ``updater(attributes)``.

        Returns the node key and whether the node was added.
        """
        if node not in self._nodes:
            self.add_node(node, updater({}) if updater else None)
            return node, True
        if updater is not None:
            self.update_node_attributes(node, updater)
        return node, False

    def drop_node(self, node: Hashable) -> None:
        """
        Removes ``node`` and every edge attached to it.

        Emits one ``edge_dropped`` per attached edge, then ``node_dropped``.

        Raises:
            NotFoundGraphError: If the node does not exist.
        """
        attributes = self._node_attributes(node)
        attached = [
            key for key, data in self._edges.items() if node in (data.source, data.target)
        ]
        for key in attached:
            self.drop_edge(key)
        del self._nodes[node]
        self.emit(GraphEvent.NODE_DROPPED, GraphEventPayload(key=node, attributes=attributes))

    # --- edges ---

    def _add_edge(
        self,
        key: Optional[Hashable],
        source: Hashable,
        target: Hashable,
        attributes: Optional[Mapping[str, Any]],
        undirected: bool,
    ) -> Hashable:
        if undirected and self._type == "directed":
            raise UsageGraphError("Cannot add an undirected edge to a directed graph.")
        if not undirected and self._type == "undirected":
            raise UsageGraphError("Cannot add a directed edge to an undirected graph.")
        attrs = _ensure_mapping(attributes if attributes is not None else {}, "Edge attributes")
        if key is not None and key in self._edges:
            raise UsageGraphError(f"Edge '{key}' already exists.")
        for endpoint in (source, target):
            if endpoint not in self._nodes:
                raise NotFoundGraphError(
                    f"Both source node '{source}' and target node '{target}' "
                    "must exist to add an edge."
                )
        if not self._multi and self.edge(source, target, undirected=undirected) is not None:
            raise UsageGraphError(
                f"An edge from '{source}' to '{target}' already exists in this simple graph."
            )
        if key is None:
            key = self._generate_edge_key()
        data = _EdgeData(key, source, target, undirected, attrs)
        self._edges[key] = data
        self.emit(
            GraphEvent.EDGE_ADDED,
            GraphEventPayload(
                key=key, attributes=attrs, source=source, target=target, undirected=undirected
            ),
        )
        return key

    def _generate_edge_key(self) -> str:
        while True:
            key = f"e{self._next_edge_id}"
            self._next_edge_id += 1
            if key not in self._edges:
                return key

    def add_edge(
        self, source: Hashable, target: Hashable, attributes: Optional[Mapping[str, Any]] = None
    ) -> Hashable:
        """Add an edge with a generated key, undirected only in undirected graphs."""
        return self._add_edge(None, source, target, attributes, self._type == "undirected")

    def add_directed_edge(
        self, source: Hashable, target: Hashable, attributes: Optional[Mapping[str, Any]] = None
    ) -> Hashable:
        return self._add_edge(None, source, target, attributes, False)

    def add_undirected_edge(
        self, source: Hashable, target: Hashable, attributes: Optional[Mapping[str, Any]] = None
    ) -> Hashable:
        return self._add_edge(None, source, target, attributes, True)

    def add_edge_with_key(
        self,
        edge: Hashable,
        source: Hashable,
        target: Hashable,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> Hashable:
        return self._add_edge(edge, source, target, attributes, self._type == "undirected")

    def add_directed_edge_with_key(
        self,
        edge: Hashable,
        source: Hashable,
        target: Hashable,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> Hashable:
        return self._add_edge(edge, source, target, attributes, False)

    def add_undirected_edge_with_key(
        self,
        edge: Hashable,
        source: Hashable,
        target: Hashable,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> Hashable:
        return self._add_edge(edge, source, target, attributes, True)

    def _upsert_edge(
        self,
        key: Optional[Hashable],
        source: Hashable,
        target: Hashable,
        undirected: bool,
        apply: Callable[[Hashable], None],
        initial: Callable[[], Optional[Mapping[str, Any]]],
    ) -> Tuple[Hashable, bool, bool, bool]:
        existing = key if key is not None and key in self._edges else None
        if existing is None and key is None:
            existing = self.edge(source, target, undirected=undirected)
        if existing is not None:
            data = self._edges[existing]
            if (data.source, data.target) != (source, target) and not (
                data.undirected and (data.source, data.target) == (target, source)
            ):
                raise UsageGraphError(
                    f"Edge '{existing}' does not join '{source}' to '{target}'."
                )
            apply(existing)
            return existing, False, False, False
        source_added = self.merge_node(source)[1]
        target_added = self.merge_node(target)[1]
        new_key = self._add_edge(key, source, target, initial(), undirected)
        return new_key, True, source_added, target_added

    def merge_edge(
        self,
        source: Hashable,
        target: Hashable,
        attributes: Optional[Mapping[str, Any]] = None,
        *,
        undirected: bool = False,
    ) -> Tuple[Hashable, bool, bool, bool]:
        """Add an edge, creating missing endpoints, or merge into the existing one.

        Returns ``(key, edge_added, source_added, target_added)``.
        """
        return self.merge_edge_with_key(None, source, target, attributes, undirected=undirected)

    def merge_edge_with_key(
        self,
        edge: Optional[Hashable],
        source: Hashable,
        target: Hashable,
        attributes: Optional[Mapping[str, Any]] = None,
        *,
        undirected: bool = False,
    ) -> Tuple[Hashable, bool, bool, bool]:
        def apply(key: Hashable) -> None:
            if attributes:
                self.merge_edge_attributes(key, attributes)

        return self._upsert_edge(edge, source, target, undirected, apply, lambda: attributes)

    def update_edge(
        self,
        source: Hashable,
        target: Hashable,
        updater: Optional[Updater] = None,
        *,
        undirected: bool = False,
    ) -> Tuple[Hashable, bool, bool, bool]:
        """Add an edge, creating missing endpoints, or run ``updater`` on the existing one.

        Returns ``(key, edge_added, source_added, target_added)``.
        """
        return self.update_edge_with_key(None, source, target, updater, undirected=undirected)

    def update_edge_with_key(
        self,
        edge: Optional[Hashable],
        source: Hashable,
        target: Hashable,
        updater: Optional[Updater] = None,
        *,
        undirected: bool = False,
    ) -> Tuple[Hashable, bool, bool, bool]:
        def apply(key: Hashable) -> None:
            if updater is not None:
                self.update_edge_attributes(key, updater)

        return self._upsert_edge(
            edge, source, target, undirected, apply, lambda: updater({}) if updater else None
        )

    def drop_edge(self, edge_or_source: Hashable, target: Optional[Hashable] = None) -> None:
        """
        Removes an edge, given its key or its two endpoints, and emits ``edge_dropped``.

        Raises:
            NotFoundGraphError: If no such edge exists.
        """
        if target is not None:
            key = self.edge(edge_or_source, target)
            if key is None:
                raise NotFoundGraphError(
                    f"No edge from '{edge_or_source}' to '{target}'."
                )
        else:
            key = edge_or_source
        data = self._edge_data(key)
        del self._edges[key]
        self.emit(
            GraphEvent.EDGE_DROPPED,
            GraphEventPayload(
                key=key,
                attributes=data.attributes,
                source=data.source,
                target=data.target,
                undirected=data.undirected,
            ),
        )

    def drop_directed_edge(self, source: Hashable, target: Hashable) -> None:
        key = self.edge(source, target, undirected=False)
        if key is None:
            raise NotFoundGraphError(f"No directed edge from '{source}' to '{target}'.")
        self.drop_edge(key)

    def drop_undirected_edge(self, source: Hashable, target: Hashable) -> None:
        key = self.edge(source, target, undirected=True)
        if key is None:
            raise NotFoundGraphError(f"No undirected edge between '{source}' and '{target}'.")
        self.drop_edge(key)

    def clear(self) -> None:
        """Removes all nodes and edges, keeping graph attributes. Emits ``cleared``."""
        self._nodes.clear()
        self._edges.clear()
        self.emit(GraphEvent.CLEARED)

    def clear_edges(self) -> None:
        """Removes all edges. Emits ``edges_cleared``."""
        self._edges.clear()
        self.emit(GraphEvent.EDGES_CLEARED)

    # --- graph attributes ---

    def _graph_updated(self, type: str, previous: Attributes, **extra: Any) -> None:
        self.emit(
            GraphEvent.ATTRIBUTES_UPDATED,
            GraphEventPayload(attributes=self._attributes, type=type, previous=previous, **extra),
        )

    def get_attribute(self, name: str) -> Any:
        return self._attributes.get(name)

    def get_attributes(self) -> Attributes:
        return self._attributes

    def has_attribute(self, name: str) -> bool:
        return name in self._attributes

    def set_attribute(self, name: str, value: Any) -> None:
        previous = dict(self._attributes)
        self._attributes[name] = value
        self._graph_updated("set", previous, name=name)

    def update_attribute(self, name: str, updater: Callable[[Any], Any]) -> None:
        previous = dict(self._attributes)
        self._attributes[name] = updater(self._attributes.get(name))
        self._graph_updated("set", previous, name=name)

    def remove_attribute(self, name: str) -> None:
        previous = dict(self._attributes)
        self._attributes.pop(name, None)
        self._graph_updated("remove", previous, name=name)

    def replace_attributes(self, attributes: Mapping[str, Any]) -> None:
        previous = dict(self._attributes)
        self._attributes = _ensure_mapping(attributes, "Graph attributes")
        self._graph_updated("replace", previous)

    def merge_attributes(self, attributes: Mapping[str, Any]) -> None:
        data = _ensure_mapping(attributes, "Graph attributes")
        previous = dict(self._attributes)
        self._attributes.update(data)
        self._graph_updated("merge", previous, data=data)

    def update_attributes(self, updater: Updater) -> None:
        previous = dict(self._attributes)
        self._attributes = _ensure_mapping(updater(self._attributes), "Updater result")
        self._graph_updated("update", previous)

    # --- node attributes ---

    def _node_updated(self, node: Hashable, type: str, previous: Attributes, **extra: Any) -> None:
        self.emit(
            GraphEvent.NODE_ATTRIBUTES_UPDATED,
            GraphEventPayload(
                key=node, attributes=self._nodes[node], type=type, previous=previous, **extra
            ),
        )

    def get_node_attribute(self, node: Hashable, name: str) -> Any:
        return self._node_attributes(node).get(name)

    def get_node_attributes(self, node: Hashable) -> Attributes:
        return self._node_attributes(node)

    def has_node_attribute(self, node: Hashable, name: str) -> bool:
        return name in self._node_attributes(node)

    def set_node_attribute(self, node: Hashable, name: str, value: Any) -> None:
        attributes = self._node_attributes(node)
        previous = dict(attributes)
        attributes[name] = value
        self._node_updated(node, "set", previous, name=name)

    def update_node_attribute(
        self, node: Hashable, name: str, updater: Callable[[Any], Any]
    ) -> None:
        attributes = self._node_attributes(node)
        previous = dict(attributes)
        attributes[name] = updater(attributes.get(name))
        self._node_updated(node, "set", previous, name=name)

    def remove_node_attribute(self, node: Hashable, name: str) -> None:
        attributes = self._node_attributes(node)
        previous = dict(attributes)
        attributes.pop(name, None)
        self._node_updated(node, "remove", previous, name=name)

    def replace_node_attributes(self, node: Hashable, attributes: Mapping[str, Any]) -> None:
        previous = dict(self._node_attributes(node))
        self._nodes[node] = _ensure_mapping(attributes, "Node attributes")
        self._node_updated(node, "replace", previous)

    def merge_node_attributes(self, node: Hashable, attributes: Mapping[str, Any]) -> None:
        current = self._node_attributes(node)
        data = _ensure_mapping(attributes, "Node attributes")
        previous = dict(current)
        current.update(data)
        self._node_updated(node, "merge", previous, data=data)

    def update_node_attributes(self, node: Hashable, updater: Updater) -> None:
        current = self._node_attributes(node)
        previous = dict(current)
        self._nodes[node] = _ensure_mapping(updater(current), "Updater result")
        self._node_updated(node, "update", previous)

    def update_each_node_attributes(
        self,
        updater: Callable[[Hashable, Attributes], Mapping[str, Any]],
        *,
        hints: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Replace every node's attributes with ``updater(node, attributes)``.

        Emits a single ``each_node_attributes_updated`` event.
        """
        updated = {
            node: _ensure_mapping(updater(node, attributes), "Updater result")
            for node, attributes in self._nodes.items()
        }
        self._nodes.update(updated)
        self.emit(GraphEvent.EACH_NODE_ATTRIBUTES_UPDATED, GraphEventPayload(hints=hints))

    # --- edge attributes ---

    def _edge_updated(self, edge_data: _EdgeData, type: str, previous: Attributes, **extra: Any) -> None:
        self.emit(
            GraphEvent.EDGE_ATTRIBUTES_UPDATED,
            GraphEventPayload(
                key=edge_data.key,
                attributes=edge_data.attributes,
                source=edge_data.source,
                target=edge_data.target,
                undirected=edge_data.undirected,
                type=type,
                previous=previous,
                **extra,
            ),
        )

    def get_edge_attribute(self, edge: Hashable, name: str) -> Any:
        return self._edge_data(edge).attributes.get(name)

    def get_edge_attributes(self, edge: Hashable) -> Attributes:
        return self._edge_data(edge).attributes

    def has_edge_attribute(self, edge: Hashable, name: str) -> bool:
        return name in self._edge_data(edge).attributes

    def set_edge_attribute(self, edge: Hashable, name: str, value: Any) -> None:
        data = self._edge_data(edge)
        previous = dict(data.attributes)
        data.attributes[name] = value
        self._edge_updated(data, "set", previous, name=name)

    def update_edge_attribute(
        self, edge: Hashable, name: str, updater: Callable[[Any], Any]
    ) -> None:
        data = self._edge_data(edge)
        previous = dict(data.attributes)
        data.attributes[name] = updater(data.attributes.get(name))
        self._edge_updated(data, "set", previous, name=name)

    def remove_edge_attribute(self, edge: Hashable, name: str) -> None:
        data = self._edge_data(edge)
        previous = dict(data.attributes)
        data.attributes.pop(name, None)
        self._edge_updated(data, "remove", previous, name=name)

    def replace_edge_attributes(self, edge: Hashable, attributes: Mapping[str, Any]) -> None:
        data = self._edge_data(edge)
        previous = dict(data.attributes)
        data.attributes = _ensure_mapping(attributes, "Edge attributes")
        self._edge_updated(data, "replace", previous)

    def merge_edge_attributes(self, edge: Hashable, attributes: Mapping[str, Any]) -> None:
        data = self._edge_data(edge)
        merged = _ensure_mapping(attributes, "Edge attributes")
        previous = dict(data.attributes)
        data.attributes.update(merged)
        self._edge_updated(data, "merge", previous, data=merged)

    def update_edge_attributes(self, edge: Hashable, updater: Updater) -> None:
        data = self._edge_data(edge)
        previous = dict(data.attributes)
        data.attributes = _ensure_mapping(updater(data.attributes), "Updater result")
        self._edge_updated(data, "update", previous)

    def update_each_edge_attributes(
        self,
        updater: Callable[[Hashable, Attributes], Mapping[str, Any]],
        *,
        hints: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Replace every edge's attributes with ``updater(edge, attributes)``.

        Emits a single ``each_edge_attributes_updated`` event.
        """
        updated = {
            key: _ensure_mapping(updater(key, data.attributes), "Updater result")
            for key, data in self._edges.items()
        }
        for key, attributes in updated.items():
            self._edges[key].attributes = attributes
        self.emit(GraphEvent.EACH_EDGE_ATTRIBUTES_UPDATED, GraphEventPayload(hints=hints))
