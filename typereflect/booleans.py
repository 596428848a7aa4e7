"""Type-level booleans and their logic."""

from __future__ import annotations

from typing import ClassVar

from .core import Reflect

__all__ = ["TypeBool", "TrueType", "FalseType", "not_", "and_", "or_"]


class TypeBool(Reflect):
    """Base of the two type-level booleans."""

    _truth: ClassVar[bool]

    @classmethod
    def to_bool(cls) -> bool:
        """Return the plain ``bool`` this type stands for."""
        try:
            return cls._truth
        except AttributeError:
            raise TypeError(f"{cls.__name__} is not a concrete type-level boolean") from None

    @classmethod
    def reflect(cls) -> bool:
        """Reflect to a plain ``bool``."""
        return cls.to_bool()


class TrueType(TypeBool):
    """Type-level true."""

    _truth = True


class FalseType(TypeBool):
    """Type-level false."""

    _truth = False


def _check(b: object) -> type[TypeBool]:
    if isinstance(b, type) and issubclass(b, (TrueType, FalseType)):
        return b
    raise TypeError(f"expected TrueType or FalseType, got {b!r}")


def _of(value: bool) -> type[TypeBool]:
    return TrueType if value else FalseType


def not_(b: type[TypeBool]) -> type[TypeBool]:
    """Type-level negation."""
    return _of(not _check(b).to_bool())


def and_(a: type[TypeBool], b: type[TypeBool]) -> type[TypeBool]:
    """Type-level conjunction."""
    left, right = _check(a), _check(b)
    return _of(left.to_bool() and right.to_bool())


def or_(a: type[TypeBool], b: type[TypeBool]) -> type[TypeBool]:
    """Type-level disjunction."""
    left, right = _check(a), _check(b)
    return _of(left.to_bool() or right.to_bool())