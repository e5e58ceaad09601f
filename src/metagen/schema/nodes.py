"""Schema node definitions for the protocol meta-model.

These mirror the LSP ``metaModel.json`` description of requests,
notifications, structures, enumerations and type aliases.  Every node is
a frozen dataclass, so a loaded ``MetaModel`` is immutable and hashable;
sequences are stored as tuples in declaration order.

The ``Type`` union is the recursive backbone.  Downstream code dispatches
on it with ``isinstance`` checks.  ``ReferenceType`` names are never
resolved here: a reference is just a name.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from metagen.target.items import TypeRef


# ---------------------------------------------------------------------------
# Enums shared across node types
# ---------------------------------------------------------------------------


class BaseTypeName(Enum):
    """Primitive types of the meta-model.  Values are the JSON spellings."""

    URI = "URI"
    DOCUMENT_URI = "DocumentUri"
    INTEGER = "integer"
    UINTEGER = "uinteger"
    DECIMAL = "decimal"
    REGEXP = "RegExp"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"


class EnumerationTypeKind(Enum):
    """Underlying primitive of an enumeration."""

    STRING = "string"
    INTEGER = "integer"
    UINTEGER = "uinteger"


class MessageDirection(Enum):
    """Which side of the connection sends a request or notification."""

    CLIENT_TO_SERVER = "clientToServer"
    SERVER_TO_CLIENT = "serverToClient"
    BOTH = "both"


# ---------------------------------------------------------------------------
# Type variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BaseType:
    """A primitive type, e.g. ``string`` or ``uinteger``."""

    name: BaseTypeName


@dataclass(frozen=True, slots=True)
class ReferenceType:
    """A named reference to a structure, enumeration or type alias."""

    name: str


@dataclass(frozen=True, slots=True)
class ArrayType:
    """An array of ``element``."""

    element: "Type"


@dataclass(frozen=True, slots=True)
class MapType:
    """A key to value map.  Keys are unique and unordered."""

    key: "Type"
    value: "Type"


@dataclass(frozen=True, slots=True)
class OrType:
    """An untagged union of ``items``."""

    items: tuple["Type", ...]


@dataclass(frozen=True, slots=True)
class TupleType:
    """A fixed-length tuple of ``items``."""

    items: tuple["Type", ...]


@dataclass(frozen=True, slots=True)
class StructureLiteralType:
    """An inline anonymous structure."""

    value: "StructureLiteral"


@dataclass(frozen=True, slots=True)
class StringLiteralType:
    """A singleton string type, e.g. ``'create'``."""

    value: str


@dataclass(frozen=True, slots=True)
class IntegerLiteralType:
    """A singleton integer type."""

    value: int


@dataclass(frozen=True, slots=True)
class BooleanLiteralType:
    """A singleton boolean type."""

    value: bool


Type = Union[
    BaseType,
    ReferenceType,
    ArrayType,
    MapType,
    OrType,
    TupleType,
    StructureLiteralType,
    StringLiteralType,
    IntegerLiteralType,
    BooleanLiteralType,
]


# ---------------------------------------------------------------------------
# Structures
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Property:
    """A property of a structure or structure literal."""

    name: str
    type: Type
    optional: bool = False
    documentation: str | None = None
    since: str | None = None
    since_tags: tuple[str, ...] | None = None
    proposed: bool = False
    deprecated: str | None = None


@dataclass(frozen=True, slots=True)
class StructureLiteral:
    """The body of an inline ``literal`` type."""

    properties: tuple[Property, ...] = ()
    documentation: str | None = None
    since: str | None = None
    since_tags: tuple[str, ...] | None = None
    proposed: bool = False
    deprecated: str | None = None


@dataclass(frozen=True, slots=True)
class Structure:
    """A named structure.

    Parameters
    ----------
    name:
        Declared structure name.
    properties:
        Properties in declaration order.
    extends:
        Types this structure extends.  Always ``ReferenceType`` upstream.
    mixins:
        Types whose properties are mixed in.  Always ``ReferenceType``
        upstream.
    """

    name: str
    properties: tuple[Property, ...] = ()
    extends: tuple[Type, ...] = ()
    mixins: tuple[Type, ...] = ()
    documentation: str | None = None
    since: str | None = None
    since_tags: tuple[str, ...] | None = None
    proposed: bool = False
    deprecated: str | None = None


# ---------------------------------------------------------------------------
# Enumerations and aliases
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EnumerationEntry:
    """One entry of an enumeration.  ``value`` is a string or an integer."""

    name: str
    value: str | int
    documentation: str | None = None
    since: str | None = None
    proposed: bool = False


@dataclass(frozen=True, slots=True)
class Enumeration:
    """A named enumeration; entry order is preserved."""

    name: str
    type: EnumerationTypeKind
    values: tuple[EnumerationEntry, ...] = ()
    supports_custom_values: bool = False
    documentation: str | None = None
    since: str | None = None
    proposed: bool = False
    deprecated: str | None = None


@dataclass(frozen=True, slots=True)
class TypeAlias:
    """A named alias for ``type``."""

    name: str
    type: Type
    documentation: str | None = None
    since: str | None = None
    proposed: bool = False
    deprecated: str | None = None


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Request:
    """A request message.  ``params`` may be a single type or a tuple of types."""

    method: str
    result: Type
    message_direction: MessageDirection
    type_name: str | None = None
    params: Type | tuple[Type, ...] | None = None
    partial_result: Type | None = None
    registration_options: Type | None = None
    error_data: Type | None = None
    client_capability: str | None = None
    server_capability: str | None = None
    registration_method: str | None = None
    documentation: str | None = None
    since: str | None = None
    proposed: bool = False
    deprecated: str | None = None


@dataclass(frozen=True, slots=True)
class Notification:
    """A notification message."""

    method: str
    message_direction: MessageDirection
    type_name: str | None = None
    params: Type | tuple[Type, ...] | None = None
    registration_options: Type | None = None
    client_capability: str | None = None
    server_capability: str | None = None
    registration_method: str | None = None
    documentation: str | None = None
    since: str | None = None
    proposed: bool = False
    deprecated: str | None = None


@dataclass(frozen=True, slots=True)
class MetaData:
    """Meta-model header."""

    version: str


@dataclass(frozen=True, slots=True)
class MetaModel:
    """A complete, fully loaded protocol meta-model."""

    meta_data: MetaData
    requests: tuple[Request, ...] = ()
    notifications: tuple[Notification, ...] = ()
    structures: tuple[Structure, ...] = ()
    enumerations: tuple[Enumeration, ...] = ()
    type_aliases: tuple[TypeAlias, ...] = ()


# ---------------------------------------------------------------------------
# Reference fast path
# ---------------------------------------------------------------------------

_BASE_REFERENCES: dict[BaseTypeName, str] = {
    BaseTypeName.URI: "Uri",
    BaseTypeName.DOCUMENT_URI: "DocumentUri",
    BaseTypeName.INTEGER: "i64",
    BaseTypeName.UINTEGER: "u32",
    BaseTypeName.STRING: "String",
    BaseTypeName.BOOLEAN: "bool",
}


def into_reference(ty: Type) -> TypeRef | None:
    """Collapse *ty* into a single ``TypeRef`` without a full translation.

    Only references, the plainly named primitives, arrays of those and
    tuples of those have a reference form; every other shape returns
    ``None``.  This is the key builder for anonymous-union lookups.

    Raises
    ------
    ValueError
        If *ty* is a tuple with an element that has no reference form.
    """
    if isinstance(ty, ReferenceType):
        return TypeRef.new(ty.name)
    if isinstance(ty, BaseType):
        name = _BASE_REFERENCES.get(ty.name)
        return TypeRef.new(name) if name is not None else None
    if isinstance(ty, ArrayType):
        inner = into_reference(ty.element)
        if inner is None:
            return None
        return TypeRef.new_generics("Vec", [inner])
    if isinstance(ty, TupleType):
        elements: list[TypeRef] = []
        for item in ty.items:
            element = into_reference(item)
            if element is None:
                raise ValueError(f"tuple element {item!r} has no reference form")
            elements.append(element)
        return TypeRef.new_tuple(elements)
    return None
