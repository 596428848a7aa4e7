"""Peano naturals as types, with type-level arithmetic."""

from __future__ import annotations

from typing import ClassVar

from .core import Nat, Reflect

__all__ = [
    "Natural",
    "Z",
    "S",
    "succ",
    "add",
    "mul",
    "lt",
    "N0",
    "N1",
    "N2",
    "N3",
    "N4",
    "N5",
    "N6",
    "N7",
    "N8",
]


class Natural(Reflect):
    """Base of the type-level naturals ``Z`` and ``S[...]``."""

    _value: ClassVar[int]

    @classmethod
    def to_u64(cls) -> int:
        """Return the integer this type stands for."""
        try:
            return cls._value
        except AttributeError:
            raise TypeError(f"{cls.__name__} is not a concrete type-level natural") from None

    @classmethod
    def reflect(cls) -> Nat:
        """Reflect to a :class:`~typereflect.core.Nat`."""
        return Nat(cls.to_u64())


class Z(Natural):
    """Type-level zero."""

    _value = 0


_SUCCESSORS: dict[type, type] = {}


def _check_nat(n: object) -> type[Natural]:
    if isinstance(n, type) and issubclass(n, Natural) and hasattr(n, "_value"):
        return n
    raise TypeError(f"expected a type-level natural, got {n!r}")


class S(Natural):
    """Type-level successor: ``S[N]`` stands for ``N + 1``."""

    _pred: ClassVar[type[Natural]]

    def __class_getitem__(cls, inner: type[Natural]) -> type[S]:
        if cls is not S:
            raise TypeError(f"{cls.__name__} is already parameterised")
        pred = _check_nat(inner)
        try:
            return _SUCCESSORS[pred]
        except KeyError:
            pass
        name = f"S[{pred.__name__}]"
        successor = type(
            name,
            (S,),
            {"_pred": pred, "_value": pred.to_u64() + 1, "__qualname__": name},
        )
        _SUCCESSORS[pred] = successor
        return successor


def succ(n: type[Natural]) -> type[Natural]:
    """Return the successor type of ``n``."""
    return S[n]


def add(a: type[Natural], b: type[Natural]) -> type[Natural]:
    """Type-level addition: ``Z + N = N`` and ``S[M] + N = S[M + N]``."""
    left, result = _check_nat(a), _check_nat(b)
    for _ in range(left.to_u64()):
        result = S[result]
    return result


def mul(a: type[Natural], b: type[Natural]) -> type[Natural]:
    """Type-level multiplication: ``Z * N = Z`` and ``S[M] * N = N + M * N``."""
    left, right = _check_nat(a), _check_nat(b)
    result: type[Natural] = Z
    for _ in range(left.to_u64()):
        result = add(right, result)
    return result


def lt(a: type[Natural], b: type[Natural]) -> bool:
    """Return whether ``a < b`` at the type level."""
    return _check_nat(a).to_u64() < _check_nat(b).to_u64()


N0 = Z
N1 = S[N0]
N2 = S[N1]
N3 = S[N2]
N4 = S[N3]
N5 = S[N4]
N6 = S[N5]
N7 = S[N6]
N8 = S[N7]