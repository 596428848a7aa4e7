"""Type-level naturals, booleans and lists, derived shapes, scoped reification and graph flattening."""

__version__ = "0.1.1"

__all__ = ["bridges", "booleans", "core", "derive", "graph", "hlist", "nat", "shared"]