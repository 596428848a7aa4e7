"""Derive a structural reflection of a class's field types.

Decorating a class with :func:`derive_reflect` gives it a ``reflect()``
class method that describes the *shape* of the type as a runtime value:

- a class with annotated fields, or a dataclass, becomes a :class:`List`
  of ``[name_bytes, field_value]`` pairs (a dataclass with no fields gives
  an empty list);
- a class deriving from ``tuple[A, B, ...]`` becomes a :class:`List` of the
  positional field values;
- a class with no fields at all becomes :class:`Unit`;
- an :class:`~enum.Enum` whose members are :class:`Variant` values becomes a
  :class:`List` of ``[name_bytes, payload]`` entries, one per member.

Names are encoded as lists of their UTF-8 byte values. A field is left
out when its default is ``skip(...)``, when its annotation is
``Annotated[..., skip()]``, or, for dataclasses, when its metadata holds
``{"reflect": "skip"}``.

Field annotations are used as written; string annotations are not
resolved, so a field annotated with a string does not reflect.
"""

from __future__ import annotations

import dataclasses
from enum import EnumMeta
from typing import Annotated, Any, ClassVar, get_args, get_origin

from .core import Bool, List, Nat, RuntimeValue, Unit

__all__ = ["derive_reflect", "skip", "name_bytes", "Variant"]

_RUNTIME_TYPES = (Nat, Bool, List, Unit)
_SKIPPED_ATTR = "__reflect_skipped__"


class _Skip:
    """Marker placed on a field to leave it out of reflection."""

    __slots__ = ("default",)

    def __init__(self, default: Any) -> None:
        self.default = default

    def __repr__(self) -> str:
        return f"skip({self.default!r})"


def skip(default: Any = None) -> Any:
    """Mark a field as left out of reflection.

    Used as a class-level default (``label: str = skip("")``), the marker is
    replaced by ``default`` when the class is decorated. It can also be
    placed in annotation metadata: ``Annotated[int, skip()]``.
    """
    return _Skip(default)


def name_bytes(name: str) -> List:
    """Encode a name as a list of its UTF-8 byte values."""
    return List.of(Nat(byte) for byte in name.encode("utf-8"))


def _is_skip_annotation(annotation: Any) -> bool:
    if get_origin(annotation) is Annotated:
        return any(isinstance(meta, _Skip) for meta in annotation.__metadata__)
    return False


def _strip(annotation: Any) -> Any:
    if get_origin(annotation) is Annotated:
        return get_args(annotation)[0]
    return annotation


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _reflect_type(annotation: Any) -> RuntimeValue:
    kind = _strip(annotation)
    method = getattr(kind, "reflect", None) if isinstance(kind, type) else None
    if not callable(method):
        raise TypeError(f"{kind!r} does not implement Reflect")
    value = method()
    if not isinstance(value, _RUNTIME_TYPES):
        raise TypeError(f"{kind.__name__} does not reflect to a runtime value")
    return value


def _field_entry(name: str, annotation: Any) -> List:
    return List((name_bytes(name), _reflect_type(annotation)))


def _positional_value(annotations: tuple) -> List:
    return List.of(_reflect_type(t) for t in annotations if not _is_skip_annotation(t))


def _own_annotations(cls: type) -> dict[str, Any]:
    annotations = cls.__dict__.get("__annotations__")
    if annotations is None:
        annotations = getattr(cls, "__annotations__", None) or {}
    return dict(annotations)


def _tuple_params(cls: type) -> tuple | None:
    for base in cls.__dict__.get("__orig_bases__", ()):
        if get_origin(base) is tuple:
            return tuple(arg for arg in get_args(base) if arg != ())
    return None


def _named_fields(cls: type) -> list[tuple[str, Any]] | None:
    """Return the reflected named fields, or ``None`` for a field-less class."""
    annotations = _own_annotations(cls)
    skipped = cls.__dict__.get(_SKIPPED_ATTR, frozenset())
    if dataclasses.is_dataclass(cls):
        fields = []
        for f in dataclasses.fields(cls):
            if isinstance(f.default, _Skip):
                raise TypeError(
                    f"{cls.__name__}.{f.name}: apply derive_reflect before dataclass "
                    "to use skip() as a default"
                )
            hint = annotations.get(f.name, f.type)
            if f.name in skipped or f.metadata.get("reflect") == "skip" or _is_skip_annotation(hint):
                continue
            fields.append((f.name, hint))
        return fields
    if not annotations:
        return None
    fields = []
    for name, hint in annotations.items():
        if _is_class_var(hint) or name in skipped or _is_skip_annotation(hint):
            continue
        fields.append((name, hint))
    return fields


def _struct_value(cls: type) -> RuntimeValue:
    positional = _tuple_params(cls)
    if positional is not None:
        return _positional_value(positional)
    named = _named_fields(cls)
    if named is None:
        return Unit()
    return List.of(_field_entry(name, hint) for name, hint in named)


def _enum_value(cls: EnumMeta) -> List:
    return List.of(List((name_bytes(member.name), member.value._payload())) for member in cls)


def _derived_reflect(cls: type) -> RuntimeValue:
    if isinstance(cls, EnumMeta):
        return _enum_value(cls)
    return _struct_value(cls)


class Variant:
    """The shape of one enum variant.

    ``Variant()`` is a unit variant, ``Variant(A, B)`` a positional one and
    ``Variant(w=A, h=B)`` one with named fields.
    """

    __slots__ = ("name", "positional", "named")

    def __init__(self, *types: Any, name: str | None = None, **fields: Any) -> None:
        if types and fields:
            raise TypeError("a variant has either positional or named fields, not both")
        self.name = name
        self.positional: tuple = types
        self.named: dict[str, Any] | None = dict(fields) if fields else None

    def __repr__(self) -> str:
        parts = [repr(t) for t in self.positional]
        parts += [f"{key}={value!r}" for key, value in (self.named or {}).items()]
        if self.name is not None:
            parts.append(f"name={self.name!r}")
        return f"Variant({', '.join(parts)})"

    def _payload(self) -> RuntimeValue:
        if self.named is not None:
            return List.of(
                _field_entry(key, hint)
                for key, hint in self.named.items()
                if not _is_skip_annotation(hint)
            )
        if self.positional:
            return _positional_value(self.positional)
        return Unit()

    def reflect(self) -> List:
        """Reflect to ``[name_bytes, payload]``."""
        if self.name is None:
            raise ValueError("a variant needs a name to be reflected on its own")
        return List((name_bytes(self.name), self._payload()))


def derive_reflect(cls: type) -> type:
    """Class decorator adding a structural ``reflect()`` class method."""
    if not isinstance(cls, type):
        raise TypeError(f"derive_reflect needs a class, got {cls!r}")
    if isinstance(cls, EnumMeta):
        for member in cls:
            if not isinstance(member.value, Variant):
                raise TypeError(
                    f"{cls.__name__}.{member.name} must have a Variant value, got {member.value!r}"
                )
    else:
        markers = {name: value for name, value in vars(cls).items() if isinstance(value, _Skip)}
        if markers:
            if dataclasses.is_dataclass(cls):
                raise TypeError(
                    f"{cls.__name__}: apply derive_reflect before dataclass to use skip() as a default"
                )
            for name, marker in markers.items():
                setattr(cls, name, marker.default)
            setattr(cls, _SKIPPED_ATTR, frozenset(markers))
    cls.reflect = classmethod(_derived_reflect)
    return cls