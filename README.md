# typereflect

Tools for moving values between a type-level encoding and ordinary runtime
values.

- **Reflection** (type → value): classes such as `S[S[S[Z]]]` encode the
  number 3; calling `.reflect()` on them gives back a runtime value.
- **Reification** (value → scope): `reify(value, f)` calls `f` with a
  `Reified` token through which the value can be read while `f` runs.
- **Graph flattening**: turn a graph of shared, possibly cyclic objects into
  a flat node/edge form and rebuild it with the same sharing.

The package has no third-party dependencies.

## Modules

| Module | What it offers |
|---|---|
| `typereflect.core` | The runtime value variants `Nat`, `Bool`, `List`, `Unit` (together `RuntimeValue`); the `Reflect` base; `reify` and `Reified`. |
| `typereflect.nat` | Peano naturals `Z` and `S[...]` on the `Natural` base, the aliases `N0` to `N8`, and `succ`, `add`, `mul`, `lt`. |
| `typereflect.booleans` | `TrueType` and `FalseType` on the `TypeBool` base, and `not_`, `and_`, `or_`. |
| `typereflect.hlist` | Heterogeneous lists `HNil` and `HCons[head, tail]` on the `HList` base, with `length()`, `is_empty()` and `reflect()`. |
| `typereflect.bridges` | `reflect_elements`, `reflect_unsigned`, `reflect_bit`, `nat_to_u64`. |
| `typereflect.derive` | The `derive_reflect` class decorator, `skip` for leaving fields out, `Variant` for enum members, and `name_bytes`. |
| `typereflect.graph` | `NodeId`, `ReifiedGraph` (with `to_json` / `from_json`), `node_id_of`, `collect_nodes`, `reify_graph`, `reflect_graph`. |
| `typereflect.shared` | The lock-guarded `Shared` cell and `node_id_of_shared`, `collect_nodes_shared`, `reify_graph_shared`, `reflect_graph_shared`. |

## Runtime values

`Nat(n)` holds an integer in the unsigned 64-bit range (anything else raises
`ValueError` or `TypeError`), `Bool(b)` a `bool`, `List(items)` a tuple of
runtime values, and `Unit()` nothing. All are frozen and compare by value.
`List.of(iterable)` builds a list from any iterable.

## Type-level naturals and booleans

```python
from typereflect.core import Nat
from typereflect.nat import S, Z, N3, add, mul, lt

Three = S[S[S[Z]]]
assert Three.reflect() == Nat(3)
assert Three is N3
assert add(S[S[Z]], Three).to_u64() == 5
assert mul(S[S[Z]], Three).to_u64() == 6
assert lt(Z, S[Z])
```

`S[...]` returns the same class for the same argument, so type-level
results can be compared with `is`.

```python
from typereflect.booleans import TrueType, FalseType, and_, not_

assert TrueType.reflect() is True
assert and_(TrueType, FalseType) is FalseType
assert not_(FalseType) is TrueType
```

Type-level booleans reflect to a plain `bool`, not to `Bool`.

## Scoped reification

```python
from typereflect.core import reify

assert reify(42, lambda token: token.reflect() + 1) == 43
```

Calls nest freely. A token kept past the end of its callback raises
`RuntimeError` when read.

## Heterogeneous lists

```python
from typereflect.core import Nat
from typereflect.hlist import HCons, HNil
from typereflect.nat import S, Z

MyList = HCons[S[Z], HCons[Z, HNil]]
assert MyList.reflect() == [Nat(1), Nat(0)]
assert MyList.length() == 2
```

Every head type must reflect to a runtime value.

## Bridges

`reflect_elements(items)` reflects the type of each element of an ordinary
iterable (instances or the types themselves), `reflect_unsigned(n)` wraps an
integer in `Nat`, `reflect_bit(0 | 1)` gives a `bool`, and `nat_to_u64(N)`
returns the integer a type-level natural stands for.

## Deriving a shape

```python
from enum import Enum
from typereflect.derive import derive_reflect, skip, Variant
from typereflect.nat import S, Z

@derive_reflect
class Point:
    label: str = skip("")
    x: S[S[Z]]
    y: S[S[S[Z]]]

shape = Point.reflect()   # List of [name-bytes, value] pairs for x and y

@derive_reflect
class Shape(Enum):
    DOT = Variant()
    LINE = Variant(S[S[Z]])
    BOX = Variant(w=S[Z], h=S[S[S[Z]]])
```

- Annotated classes and dataclasses give a `List` of
  `List((name_bytes(name), value))` pairs.
- A class deriving from `tuple[A, B]` gives a `List` of positional values.
- A class with no fields gives `Unit()`; a dataclass with no fields gives an
  empty `List`.
- An `Enum` whose members are `Variant` values gives one
  `[name_bytes, payload]` entry per member.

Names are encoded as a `List` of `Nat` byte values (UTF-8). A field is left
out when its default is `skip(...)`, when it is annotated
`Annotated[..., skip()]`, or, in a dataclass, when its field metadata holds
`{"reflect": "skip"}`. To use a `skip(...)` default on a dataclass, apply
`derive_reflect` before `dataclass` (that is, below it). String annotations
are not resolved.

## Graphs

```python
from dataclasses import dataclass, field
from typereflect.graph import ReifiedGraph, reify_graph, reflect_graph

@dataclass
class Node:
    value: int
    children: list = field(default_factory=list)

leaf = Node(1)
root = Node(0, [leaf, leaf])

graph = reify_graph(root, lambda n: n.children)
assert len(graph.nodes) == 2
assert len(graph.edges) == 2

def set_children(node, kids):
    node.children = kids

rebuilt = reflect_graph(graph, set_children)
assert rebuilt.children[0] is rebuilt.children[1]
```

Node ids come from object identity. Node data is a shallow copy of each
node, and `reflect_graph` makes one new object per id. Edges to or from an
unknown id, or a missing root, raise `KeyError`.

`graph.to_json(encode)` writes the graph as JSON, with `encode` turning node
data into a JSON-ready value. `ReifiedGraph.from_json(text, decode)` reads it
back and raises `ValueError` on a malformed document. Both converters are
optional when node data is already JSON-ready.

For nodes held in lockable `Shared` cells, use the functions in
`typereflect.shared`. `with cell as value:` takes the cell's lock. The
`children` and `set_children` callbacks receive the node data while its lock
is held.

## What it does not do

This is a library only: it has no command-line tool. Graphs are written and
read only through the JSON methods of `ReifiedGraph`. The bridges work on
plain Python integers and iterables; they do not connect to any other
type-level library.