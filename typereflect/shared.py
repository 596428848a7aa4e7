"""Graph flattening for lock-guarded shared nodes.

This works like :mod:`typereflect.graph`, but for graphs whose nodes are
:class:`Shared` cells that guard their data with a lock. Node identity is
the identity of the :class:`Shared` cell, and the node ids are the same
:class:`~typereflect.graph.NodeId` values the plain graph functions use.
"""

from __future__ import annotations

import copy
import threading
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from .graph import NodeId, ReifiedGraph

__all__ = [
    "Shared",
    "node_id_of_shared",
    "collect_nodes_shared",
    "reify_graph_shared",
    "reflect_graph_shared",
]

T = TypeVar("T")


class Shared(Generic[T]):
    """A shared cell holding a value behind a lock.

    Entering the cell as a context manager takes the lock and yields the
    value; leaving it releases the lock.
    """

    __slots__ = ("_value", "_lock")

    def __init__(self, value: T) -> None:
        self._value = value
        self._lock = threading.Lock()

    def __enter__(self) -> T:
        self._lock.acquire()
        return self._value

    def __exit__(self, *args: Any) -> None:
        self._lock.release()

    def __repr__(self) -> str:
        return f"Shared(<{type(self._value).__name__}> at {id(self):#x})"


def node_id_of_shared(node: Shared[Any]) -> NodeId:
    """Return the identifier of ``node``; equal only for the same cell."""
    if not isinstance(node, Shared):
        raise TypeError(f"expected a Shared cell, got {node!r}")
    return NodeId(id(node))


def _kids_of(
    node: Shared[T], children: Callable[[T], Iterable[Shared[T]]]
) -> list[Shared[T]]:
    with node as value:
        return list(children(value))


def collect_nodes_shared(
    root: Shared[T], children: Callable[[T], Iterable[Shared[T]]]
) -> dict[NodeId, Shared[T]]:
    """Return every cell reachable from ``root``, each once, keyed by id.

    ``children`` receives a node's data, with its lock held, and returns
    the child cells. Cycles and shared cells are visited only once.
    """
    visited: dict[NodeId, Shared[T]] = {}
    stack: list[Shared[T]] = [root]
    while stack:
        node = stack.pop()
        node_id = node_id_of_shared(node)
        if node_id in visited:
            continue
        visited[node_id] = node
        stack.extend(reversed(_kids_of(node, children)))
    return visited


def reify_graph_shared(
    root: Shared[T], children: Callable[[T], Iterable[Shared[T]]]
) -> ReifiedGraph[T]:
    """Flatten the graph of cells reachable from ``root``.

    Each node's data is a shallow copy taken under the cell's lock; edges
    follow the order in which ``children`` lists them.
    """
    all_nodes = collect_nodes_shared(root, children)
    nodes: list[tuple[NodeId, T]] = []
    edges: list[tuple[NodeId, NodeId]] = []
    for node_id, cell in all_nodes.items():
        with cell as value:
            nodes.append((node_id, copy.copy(value)))
            kids = list(children(value))
        edges.extend((node_id, node_id_of_shared(kid)) for kid in kids)
    return ReifiedGraph(nodes=nodes, edges=edges, root=node_id_of_shared(root))


def reflect_graph_shared(
    graph: ReifiedGraph[T], set_children: Callable[[T, list[Shared[T]]], None]
) -> Shared[T]:
    """Rebuild a graph of :class:`Shared` cells and return the root cell.

    One new cell is made per node id; ``set_children`` is called, with the
    cell's lock held, on the data of each node that has outgoing edges.
    """
    built: dict[NodeId, Shared[T]] = {
        node_id: Shared(copy.copy(data)) for node_id, data in graph.nodes
    }

    adjacency: dict[NodeId, list[NodeId]] = {}
    for parent, child in graph.edges:
        adjacency.setdefault(parent, []).append(child)

    for parent in adjacency:
        if parent not in built:
            raise KeyError(f"edge starts at unknown node {parent.value}")

    for node_id, cell in built.items():
        child_ids = adjacency.get(node_id)
        if child_ids is None:
            continue
        try:
            kids = [built[child_id] for child_id in child_ids]
        except KeyError as exc:
            raise KeyError(f"edge points to unknown node {exc.args[0].value}") from None
        with cell as value:
            set_children(value, kids)

    try:
        return built[graph.root]
    except KeyError:
        raise KeyError(f"root node {graph.root.value} is not in the graph") from None