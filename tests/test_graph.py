from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from typereflect.graph import (
    NodeId,
    ReifiedGraph,
    collect_nodes,
    node_id_of,
    reflect_graph,
    reify_graph,
)


@dataclass(eq=False)
class Node:
    value: int
    children: list = field(default_factory=list)


def children_of(n: Node) -> list:
    return n.children


def set_children_of(n: Node, kids: list) -> None:
    n.children = kids


def encode(n: Node) -> dict:
    return {"value": n.value}


def decode(data: dict) -> Node:
    return Node(data["value"])


def test_node_id_field():
    assert NodeId(42).value == 42


def test_node_id_identity():
    a = Node(1)
    b = a
    assert node_id_of(a) == node_id_of(b)
    c = Node(1)
    assert node_id_of(a) != node_id_of(c)


def test_collect_nodes_simple_linked_list():
    c = Node(2)
    b = Node(1, [c])
    a = Node(0, [b])
    nodes = collect_nodes(a, children_of)
    assert len(nodes) == 3
    assert [n.value for n in nodes.values()] == [0, 1, 2]


def test_collect_nodes_with_cycle():
    a = Node(0)
    b = Node(1, [a])
    a.children.append(b)
    nodes = collect_nodes(a, children_of)
    assert len(nodes) == 2


def test_reify_dag_with_shared_children():
    shared = Node(99)
    a = Node(1, [shared])
    b = Node(2, [shared])
    root = Node(0, [a, b, shared])
    graph = reify_graph(root, children_of)
    assert len(graph.nodes) == 4
    assert len(graph.edges) == 5
    assert graph.root == node_id_of(root)


def test_reify_five_node_dag():
    n4 = Node(4)
    n3 = Node(3, [n4])
    n2 = Node(2, [n3])
    n1 = Node(1, [n3, n4])
    n0 = Node(0, [n1, n2])
    graph = reify_graph(n0, children_of)
    assert len(graph.nodes) == 5
    assert len(graph.edges) == 6


def test_reify_copies_node_data():
    leaf = Node(1)
    root = Node(0, [leaf])
    graph = reify_graph(root, children_of)
    data = dict(graph.nodes)[node_id_of(root)]
    assert data is not root
    assert data.value == 0


def test_round_trip_reify_reflect():
    root = Node(0, [Node(10), Node(20)])
    graph = reify_graph(root, children_of)
    rebuilt = reflect_graph(graph, set_children_of)
    assert rebuilt is not root
    assert rebuilt.value == 0
    assert len(rebuilt.children) == 2
    assert sorted(c.value for c in rebuilt.children) == [10, 20]


def test_round_trip_preserves_sharing():
    shared = Node(42)
    root = Node(0, [shared, shared])
    graph = reify_graph(root, children_of)
    rebuilt = reflect_graph(graph, set_children_of)
    assert len(rebuilt.children) == 2
    assert rebuilt.children[0] is rebuilt.children[1]
    assert rebuilt.children[0] is not shared


def test_round_trip_preserves_cycle():
    a = Node(0)
    b = Node(1, [a])
    a.children.append(b)
    rebuilt = reflect_graph(reify_graph(a, children_of), set_children_of)
    assert rebuilt.children[0].value == 1
    assert rebuilt.children[0].children[0] is rebuilt


def test_large_graph_does_not_overflow_recursion():
    nodes = [Node(i) for i in range(5000)]
    for i in range(len(nodes) - 1):
        nodes[i].children.append(nodes[i + 1])
        if i + 10 < len(nodes):
            nodes[i].children.append(nodes[i + 10])
    graph = reify_graph(nodes[0], children_of)
    assert len(graph.nodes) == 5000
    assert len(graph.edges) == sum(len(n.children) for n in nodes)


def test_serde_json_round_trip():
    leaf = Node(10)
    root = Node(0, [leaf, leaf])
    graph = reify_graph(root, children_of)
    assert len(graph.nodes) == 2

    text = graph.to_json(encode)
    assert text

    deserialized = ReifiedGraph.from_json(text, decode)
    assert len(deserialized.nodes) == 2

    rebuilt = reflect_graph(deserialized, set_children_of)
    assert rebuilt.value == 0
    assert len(rebuilt.children) == 2
    assert rebuilt.children[0] is rebuilt.children[1]
    assert rebuilt.children[0].value == 10


def test_graph_json_round_trip_shared_grandchild():
    shared = Node(99)
    a = Node(1, [shared])
    root = Node(0, [a, shared])
    graph = reify_graph(root, children_of)
    deserialized = ReifiedGraph.from_json(graph.to_json(encode), decode)
    rebuilt = reflect_graph(deserialized, set_children_of)
    assert rebuilt.value == 0
    assert len(rebuilt.children) == 2
    assert rebuilt.children[0].children[0] is rebuilt.children[1]


def test_json_without_codec():
    graph = ReifiedGraph(
        nodes=[(NodeId(0), "root"), (NodeId(1), "child")],
        edges=[(NodeId(0), NodeId(1))],
        root=NodeId(0),
    )
    restored = ReifiedGraph.from_json(graph.to_json())
    assert restored == graph


def test_from_json_rejects_malformed():
    with pytest.raises(ValueError):
        ReifiedGraph.from_json('{"nodes": [], "edges": []}')
    with pytest.raises(ValueError):
        ReifiedGraph.from_json('{"nodes": [[-1, 0]], "edges": [], "root": 0}')


def test_reflect_missing_root_raises():
    graph = ReifiedGraph(nodes=[(NodeId(1), Node(1))], edges=[], root=NodeId(7))
    with pytest.raises(KeyError):
        reflect_graph(graph, set_children_of)


def test_reflect_dangling_edge_raises():
    graph = ReifiedGraph(
        nodes=[(NodeId(1), Node(1))],
        edges=[(NodeId(1), NodeId(2))],
        root=NodeId(1),
    )
    with pytest.raises(KeyError):
        reflect_graph(graph, set_children_of)