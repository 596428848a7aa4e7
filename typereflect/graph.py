"""Flatten object graphs into nodes and edges, and rebuild them.

A graph is any set of mutable Python objects that refer to each other.
Node identity is object identity, so shared nodes and cycles are kept
exactly: :func:`reify_graph` records every reachable node once, and
:func:`reflect_graph` builds one new object per node id and wires it in
everywhere that id was referenced.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

__all__ = [
    "NodeId",
    "ReifiedGraph",
    "node_id_of",
    "collect_nodes",
    "reify_graph",
    "reflect_graph",
]

T = TypeVar("T")


@dataclass(frozen=True, order=True)
class NodeId:
    """A node identifier derived from object identity."""

    value: int


@dataclass
class ReifiedGraph(Generic[T]):
    """An adjacency-list form of an object graph.

    ``nodes`` pairs each identifier with a copy of the node's data,
    ``edges`` holds directed ``(parent, child)`` pairs and ``root`` names
    the node the graph was taken from.
    """

    nodes: list[tuple[NodeId, T]] = field(default_factory=list)
    edges: list[tuple[NodeId, NodeId]] = field(default_factory=list)
    root: NodeId = NodeId(0)

    def to_json(self, encode: Callable[[T], Any] | None = None) -> str:
        """Serialise the graph to JSON.

        ``encode`` turns a node's data into a JSON-ready value; without it
        the data must already be JSON-ready.
        """
        convert = encode if encode is not None else (lambda data: data)
        document = {
            "nodes": [[node_id.value, convert(data)] for node_id, data in self.nodes],
            "edges": [[parent.value, child.value] for parent, child in self.edges],
            "root": self.root.value,
        }
        return json.dumps(document)

    @classmethod
    def from_json(
        cls, text: str, decode: Callable[[Any], T] | None = None
    ) -> ReifiedGraph[T]:
        """Read a graph written by :meth:`to_json`.

        ``decode`` turns each node's JSON value back into node data.
        """
        convert = decode if decode is not None else (lambda data: data)
        try:
            document = json.loads(text)
            nodes = [(_node_id(raw_id), convert(data)) for raw_id, data in document["nodes"]]
            edges = [(_node_id(parent), _node_id(child)) for parent, child in document["edges"]]
            root = _node_id(document["root"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"malformed graph document: {exc}") from exc
        return cls(nodes=nodes, edges=edges, root=root)


def _node_id(raw: Any) -> NodeId:
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        raise ValueError(f"node id must be a non-negative integer, got {raw!r}")
    return NodeId(raw)


def node_id_of(node: object) -> NodeId:
    """Return the identifier of ``node``; equal only for the same object."""
    return NodeId(id(node))


def collect_nodes(
    root: T, children: Callable[[T], Iterable[T]]
) -> dict[NodeId, T]:
    """Return every node reachable from ``root``, each once, keyed by id.

    Nodes appear in depth-first pre-order; cycles and shared nodes are
    visited only once.
    """
    visited: dict[NodeId, T] = {}
    stack: list[T] = [root]
    while stack:
        node = stack.pop()
        node_id = node_id_of(node)
        if node_id in visited:
            continue
        visited[node_id] = node
        stack.extend(reversed(list(children(node))))
    return visited


def reify_graph(root: T, children: Callable[[T], Iterable[T]]) -> ReifiedGraph[T]:
    """Flatten the graph reachable from ``root``.

    Each node's data is a shallow copy of the node; edges follow the order
    in which ``children`` lists them.
    """
    all_nodes = collect_nodes(root, children)
    nodes: list[tuple[NodeId, T]] = []
    edges: list[tuple[NodeId, NodeId]] = []
    for node_id, node in all_nodes.items():
        nodes.append((node_id, copy.copy(node)))
        edges.extend((node_id, node_id_of(kid)) for kid in children(node))
    return ReifiedGraph(nodes=nodes, edges=edges, root=node_id_of(root))


def reflect_graph(
    graph: ReifiedGraph[T], set_children: Callable[[T, list[T]], None]
) -> T:
    """Rebuild an object graph and return its root.

    One new object is made per node id; ``set_children`` is called on each
    node that has outgoing edges, with its children in edge order.
    """
    built: dict[NodeId, T] = {node_id: copy.copy(data) for node_id, data in graph.nodes}

    adjacency: dict[NodeId, list[NodeId]] = {}
    for parent, child in graph.edges:
        adjacency.setdefault(parent, []).append(child)

    for parent in adjacency:
        if parent not in built:
            raise KeyError(f"edge starts at unknown node {parent.value}")

    for node_id, node in built.items():
        child_ids = adjacency.get(node_id)
        if child_ids is None:
            continue
        try:
            kids = [built[child_id] for child_id in child_ids]
        except KeyError as exc:
            raise KeyError(f"edge points to unknown node {exc.args[0].value}") from None
        set_children(node, kids)

    try:
        return built[graph.root]
    except KeyError:
        raise KeyError(f"root node {graph.root.value} is not in the graph") from None