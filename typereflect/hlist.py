"""Heterogeneous lists of types, reflecting to lists of runtime values."""

from __future__ import annotations

from typing import ClassVar

from .core import Bool, List, Nat, Reflect, RuntimeValue, Unit

__all__ = ["HList", "HNil", "HCons"]


def _reflect_element(kind: type) -> RuntimeValue:
    if not (isinstance(kind, type) and issubclass(kind, Reflect)):
        raise TypeError(f"{kind!r} does not implement Reflect")
    value = kind.reflect()
    if not isinstance(value, (Nat, Bool, List, Unit)):
        raise TypeError(f"{kind.__name__} does not reflect to a runtime value")
    return value


class HList(Reflect):
    """Base of the type-level lists ``HNil`` and ``HCons[H, T]``."""

    @classmethod
    def length(cls) -> int:
        """Return the number of elements in this list type."""
        raise TypeError(f"{cls.__name__} is not a concrete type-level list")

    @classmethod
    def is_empty(cls) -> bool:
        """Return whether this list type has no elements."""
        return cls.length() == 0

    @classmethod
    def reflect(cls) -> list[RuntimeValue]:
        """Reflect every element type, in order."""
        raise TypeError(f"{cls.__name__} is not a concrete type-level list")


class HNil(HList):
    """The empty type-level list."""

    @classmethod
    def length(cls) -> int:
        return 0

    @classmethod
    def reflect(cls) -> list[RuntimeValue]:
        return []


_CELLS: dict[tuple[type, type], type] = {}


class HCons(HList):
    """A cons cell: ``HCons[H, T]`` puts head type ``H`` before list ``T``."""

    _head: ClassVar[type]
    _tail: ClassVar[type[HList]]

    def __class_getitem__(cls, params: tuple[type, type[HList]]) -> type[HCons]:
        if cls is not HCons:
            raise TypeError(f"{cls.__name__} is already parameterised")
        if not isinstance(params, tuple) or len(params) != 2:
            raise TypeError("HCons takes exactly two parameters: head and tail")
        head, tail = params
        if not isinstance(head, type):
            raise TypeError(f"HCons head must be a type, got {head!r}")
        if not (isinstance(tail, type) and issubclass(tail, (HNil, HCons)) and tail is not HCons):
            raise TypeError(f"HCons tail must be a type-level list, got {tail!r}")
        try:
            return _CELLS[(head, tail)]
        except KeyError:
            pass
        name = f"HCons[{head.__name__}, {tail.__name__}]"
        cell = type(name, (HCons,), {"_head": head, "_tail": tail, "__qualname__": name})
        _CELLS[(head, tail)] = cell
        return cell

    @classmethod
    def length(cls) -> int:
        if cls is HCons:
            return super().length()
        return 1 + cls._tail.length()

    @classmethod
    def reflect(cls) -> list[RuntimeValue]:
        if cls is HCons:
            return super().reflect()
        return [_reflect_element(cls._head), *cls._tail.reflect()]