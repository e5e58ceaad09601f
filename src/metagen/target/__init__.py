"""Target model: the declarations the translator produces.

Exports the item dataclasses, the ``TypeRef`` builder, ``Version`` tags
and the ``ItemSerializer`` used to dump items to JSON or YAML.
"""
from __future__ import annotations

from metagen.target.items import (
    Enum,
    EnumVariant,
    Item,
    Struct,
    StructField,
    TraitImpl,
    TypeRef,
    TypeRefKind,
    Version,
)
from metagen.target.serializer import ItemSerializer

__all__ = [
    # Items
    "Item",
    "Struct",
    "StructField",
    "Enum",
    "EnumVariant",
    "TraitImpl",
    # Type references
    "TypeRef",
    "TypeRefKind",
    "Version",
    # Serializer
    "ItemSerializer",
]
