"""Schema model of the protocol meta-model.

Exports all schema node types, the ``into_reference`` fast path, the
JSON serializer and the loader error type.
"""
from __future__ import annotations

from metagen.schema.errors import SchemaError
from metagen.schema.nodes import (
    ArrayType,
    BaseType,
    BaseTypeName,
    BooleanLiteralType,
    Enumeration,
    EnumerationEntry,
    EnumerationTypeKind,
    IntegerLiteralType,
    MapType,
    MessageDirection,
    MetaData,
    MetaModel,
    Notification,
    OrType,
    Property,
    ReferenceType,
    Request,
    StringLiteralType,
    Structure,
    StructureLiteral,
    StructureLiteralType,
    TupleType,
    Type,
    TypeAlias,
    into_reference,
)
from metagen.schema.serializer import SchemaSerializer, load_meta_model

__all__ = [
    # Entities
    "MetaModel",
    "MetaData",
    "Request",
    "Notification",
    "Structure",
    "Property",
    "StructureLiteral",
    "Enumeration",
    "EnumerationEntry",
    "TypeAlias",
    # Enums
    "BaseTypeName",
    "EnumerationTypeKind",
    "MessageDirection",
    # Type variants
    "Type",
    "BaseType",
    "ReferenceType",
    "ArrayType",
    "MapType",
    "OrType",
    "TupleType",
    "StructureLiteralType",
    "StringLiteralType",
    "IntegerLiteralType",
    "BooleanLiteralType",
    "into_reference",
    # Loading
    "SchemaSerializer",
    "SchemaError",
    "load_meta_model",
]
