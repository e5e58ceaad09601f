"""Target-side item definitions produced by the translator.

Every item is a frozen dataclass so translated output is immutable and
comparable: running the translator twice over the same inputs yields
equal item lists.  Items are passive; rendering them into source text
is left to downstream emitters.

``TypeRef`` is a small tagged tree rather than a pre-rendered string.
Rendering is deferred to :meth:`TypeRef.as_str`, whose output is
injective with respect to the tree shape (generic arguments use
``<...>``, tuples use ``(...)``).
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union


# ---------------------------------------------------------------------------
# Type references
# ---------------------------------------------------------------------------


class TypeRefKind(enum.Enum):
    """Shape of a ``TypeRef`` node."""

    NAMED = enum.auto()
    GENERIC = enum.auto()
    TUPLE = enum.auto()


@dataclass(frozen=True, slots=True)
class TypeRef:
    """A reference to a target type.

    Parameters
    ----------
    kind:
        Which constructor built this reference.
    name:
        The type name for ``NAMED`` and ``GENERIC`` references; empty for
        tuples.
    args:
        Generic arguments or tuple elements, in order.
    """

    kind: TypeRefKind
    name: str = ""
    args: tuple["TypeRef", ...] = ()

    @classmethod
    def new(cls, name: str) -> "TypeRef":
        """Return a bare named reference, e.g. ``String``."""
        return cls(kind=TypeRefKind.NAMED, name=name)

    @classmethod
    def new_generics(cls, name: str, generics: "tuple[TypeRef, ...] | list[TypeRef]") -> "TypeRef":
        """Return a generic instantiation, e.g. ``Vec<String>``."""
        return cls(kind=TypeRefKind.GENERIC, name=name, args=tuple(generics))

    @classmethod
    def new_tuple(cls, elements: "tuple[TypeRef, ...] | list[TypeRef]") -> "TypeRef":
        """Return a tuple type, e.g. ``(u32,u32)``."""
        return cls(kind=TypeRefKind.TUPLE, args=tuple(elements))

    def as_str(self) -> str:
        """Render this reference to its canonical text form."""
        if self.kind == TypeRefKind.NAMED:
            return self.name
        inner = ",".join(arg.as_str() for arg in self.args)
        if self.kind == TypeRefKind.GENERIC:
            return f"{self.name}<{inner}>"
        return f"({inner})"

    def __str__(self) -> str:
        return self.as_str()


# ---------------------------------------------------------------------------
# Protocol versions
# ---------------------------------------------------------------------------


class Version(enum.Enum):
    """Protocol version an item or field first appeared in."""

    UNKNOWN = "unknown"
    V3_2_0 = "3.2.0"
    V3_6_0 = "3.6.0"
    V3_8_0 = "3.8.0"
    V3_10_0 = "3.10.0"
    V3_12_0 = "3.12.0"
    V3_13_0 = "3.13.0"
    V3_14_0 = "3.14.0"
    V3_15_0 = "3.15.0"
    V3_16_0 = "3.16.0"
    V3_17_0 = "3.17.0"
    V3_18_0 = "3.18.0"

    @classmethod
    def parse(cls, text: str | None) -> "Version":
        """Parse a ``since`` annotation from the meta-model.

        Accepts the loose forms found upstream, e.g. ``"3.17.0"``,
        ``"version 3.16.0"``, ``"3.18.0 - proposed"`` and ``"3.16.0."``.

        Raises
        ------
        ValueError
            If the text does not name a known protocol version.
        """
        if text is None:
            return cls.UNKNOWN
        version = text.removeprefix("version ")
        version = version.split(" ", 1)[0]
        version = version.removesuffix(".")
        # Upstream writes "3.16" and "3.17" for features released in 3.17.0.
        if version in ("3.16", "3.17"):
            return cls.V3_17_0
        try:
            return cls(version)
        except ValueError:
            raise ValueError(f"invalid version {version}") from None


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StructField:
    """A single named field of a ``Struct``."""

    name: str
    ty: TypeRef
    doc: str | None = None
    since: Version = Version.UNKNOWN
    deprecated: str | None = None


@dataclass(frozen=True, slots=True)
class Struct:
    """A struct declaration.

    Parameters
    ----------
    name:
        Declared type name.
    extends:
        Base types whose fields are included, ``extends`` entries first
        followed by ``mixins``.  Order is preserved and duplicates are kept.
    fields:
        Fields in source property order.
    doc:
        Documentation carried over from the meta-model.
    since:
        Protocol version the structure appeared in.
    deprecated:
        Deprecation note, if any.
    """

    name: str
    extends: tuple[str, ...] = ()
    fields: tuple[StructField, ...] = ()
    doc: str | None = None
    since: Version = Version.UNKNOWN
    deprecated: str | None = None


@dataclass(frozen=True, slots=True)
class EnumVariant:
    """A single variant of an ``Enum``."""

    name: str
    doc: str | None = None
    since: Version = Version.UNKNOWN


@dataclass(frozen=True, slots=True)
class Enum:
    """An enum declaration.  Variant order follows the meta-model."""

    name: str
    variants: tuple[EnumVariant, ...] = ()
    doc: str | None = None
    since: Version = Version.UNKNOWN
    deprecated: str | None = None


@dataclass(frozen=True, slots=True)
class TraitImpl:
    """An implementation of ``interface`` for ``implementor``.

    ``assoc_types`` pairs associated type names with their bound
    references; ``assoc_const`` pairs constant names with their literal
    source text.
    """

    interface: str
    implementor: str
    assoc_types: tuple[tuple[str, TypeRef], ...] = ()
    assoc_const: tuple[tuple[str, str], ...] = ()


Item = Union[Struct, Enum, TraitImpl]
