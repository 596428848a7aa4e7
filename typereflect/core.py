"""Runtime values, the Reflect protocol and scoped reification."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar, Union

__all__ = [
    "Nat",
    "Bool",
    "List",
    "Unit",
    "RuntimeValue",
    "Reflect",
    "Reified",
    "reify",
]

_U64_LIMIT = 1 << 64

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Nat:
    """A natural number in the range of an unsigned 64-bit integer."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Nat requires an int, got {type(self.value).__name__}")
        if not 0 <= self.value < _U64_LIMIT:
            raise ValueError(f"Nat value out of range: {self.value}")


@dataclass(frozen=True)
class Bool:
    """A boolean."""

    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(f"Bool requires a bool, got {type(self.value).__name__}")


@dataclass(frozen=True)
class List:
    """An ordered list of runtime values."""

    items: tuple = field(default=())

    def __post_init__(self) -> None:
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, (Nat, Bool, List, Unit)):
                raise TypeError(f"List items must be runtime values, got {item!r}")
        object.__setattr__(self, "items", items)

    @classmethod
    def of(cls, values: Iterable[RuntimeValue]) -> List:
        """Build a list from any iterable of runtime values."""
        return cls(tuple(values))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]


@dataclass(frozen=True)
class Unit:
    """The unit value."""


RuntimeValue = Union[Nat, Bool, List, Unit]


class Reflect:
    """Base for types that carry a value known from the type alone.

    Subclasses either set the class attribute ``reflected`` or override
    :meth:`reflect`.
    """

    reflected: ClassVar[Any]

    @classmethod
    def reflect(cls) -> Any:
        """Return the runtime value this type stands for."""
        try:
            return cls.reflected
        except AttributeError:
            raise TypeError(f"{cls.__name__} does not carry a reflectable value") from None


class Reified(Generic[T]):
    """A token giving access to a reified value within one :func:`reify` call.

    The token stops working once the callback that received it returns.
    """

    __slots__ = ("_value", "_live")

    def __init__(self, value: T) -> None:
        self._value = value
        self._live = True

    def reflect(self) -> T:
        """Return the reified value."""
        if not self._live:
            raise RuntimeError("reified token used outside of its reify scope")
        return self._value

    def _expire(self) -> None:
        self._live = False
        self._value = None


def reify(value: T, f: Callable[[Reified[T]], R]) -> R:
    """Call ``f`` with a token carrying ``value`` and return its result.

    The token is valid only while ``f`` runs.
    """
    token: Reified[T] = Reified(value)
    try:
        return f(token)
    finally:
        token._expire()