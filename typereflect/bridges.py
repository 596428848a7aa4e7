"""Helpers connecting value-bearing lists and plain integers to reflection."""

from __future__ import annotations

from collections.abc import Iterable

from .core import Bool, List, Nat, Reflect, RuntimeValue, Unit
from .nat import Natural

__all__ = ["reflect_elements", "reflect_unsigned", "reflect_bit", "nat_to_u64"]


def reflect_elements(items: Iterable[object]) -> list[RuntimeValue]:
    """Reflect the type of every element of ``items``, in order.

    Elements may be instances or the types themselves; only the type
    drives reflection.
    """
    result: list[RuntimeValue] = []
    for item in items:
        kind = item if isinstance(item, type) else type(item)
        if not issubclass(kind, Reflect):
            raise TypeError(f"{kind.__name__} does not implement Reflect")
        value = kind.reflect()
        if not isinstance(value, (Nat, Bool, List, Unit)):
            raise TypeError(f"{kind.__name__} does not reflect to a runtime value")
        result.append(value)
    return result


def reflect_unsigned(value: int) -> Nat:
    """Reflect an unsigned integer to a :class:`~typereflect.core.Nat`."""
    return Nat(value)


def reflect_bit(bit: int) -> bool:
    """Reflect a bit (0 or 1) to a ``bool``."""
    if bit not in (0, 1) or not isinstance(bit, int):
        raise ValueError(f"a bit must be 0 or 1, got {bit!r}")
    return bool(bit)


def nat_to_u64(nat: type[Natural]) -> int:
    """Return the integer a type-level natural stands for."""
    if not (isinstance(nat, type) and issubclass(nat, Natural)):
        raise TypeError(f"expected a type-level natural, got {nat!r}")
    return nat.to_u64()