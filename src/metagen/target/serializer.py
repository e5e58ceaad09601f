"""Serialization of translated items to plain dicts, JSON and YAML.

The dumps are meant for inspection and golden-file comparisons; they are
not source code.  Every item carries a ``"kind"`` discriminator and every
``TypeRef`` is rendered to its canonical text.

Usage
-----
::

    from metagen.target.serializer import ItemSerializer

    serializer = ItemSerializer()
    print(serializer.to_yaml(result.items))
"""
from __future__ import annotations

import json
from collections.abc import Iterable

import yaml

from metagen.target.items import (
    Enum,
    EnumVariant,
    Item,
    Struct,
    StructField,
    TraitImpl,
)


class ItemSerializer:
    """Converts target items to JSON-compatible dicts."""

    def to_dict(self, item: Item) -> dict[str, object]:
        """Serialize a single item."""
        if isinstance(item, Struct):
            return self._struct_to_dict(item)
        if isinstance(item, Enum):
            return self._enum_to_dict(item)
        if isinstance(item, TraitImpl):
            return self._trait_impl_to_dict(item)
        raise TypeError(f"Unknown item type: {type(item)}")

    def to_list(self, items: Iterable[Item]) -> list[dict[str, object]]:
        """Serialize items, preserving order."""
        return [self.to_dict(item) for item in items]

    def _struct_to_dict(self, s: Struct) -> dict[str, object]:
        return {
            "kind": "Struct",
            "name": s.name,
            "extends": list(s.extends),
            "fields": [self._field_to_dict(f) for f in s.fields],
            "doc": s.doc,
            "since": s.since.value,
            "deprecated": s.deprecated,
        }

    def _field_to_dict(self, f: StructField) -> dict[str, object]:
        return {
            "name": f.name,
            "ty": f.ty.as_str(),
            "doc": f.doc,
            "since": f.since.value,
            "deprecated": f.deprecated,
        }

    def _enum_to_dict(self, e: Enum) -> dict[str, object]:
        return {
            "kind": "Enum",
            "name": e.name,
            "variants": [self._variant_to_dict(v) for v in e.variants],
            "doc": e.doc,
            "since": e.since.value,
            "deprecated": e.deprecated,
        }

    def _variant_to_dict(self, v: EnumVariant) -> dict[str, object]:
        return {"name": v.name, "doc": v.doc, "since": v.since.value}

    def _trait_impl_to_dict(self, t: TraitImpl) -> dict[str, object]:
        return {
            "kind": "TraitImpl",
            "interface": t.interface,
            "implementor": t.implementor,
            "assoc_types": {name: ty.as_str() for name, ty in t.assoc_types},
            "assoc_const": {name: value for name, value in t.assoc_const},
        }

    # ------------------------------------------------------------------
    # JSON / YAML helpers
    # ------------------------------------------------------------------

    def to_json(self, items: Iterable[Item], indent: int = 2) -> str:
        """Serialize items to a JSON array."""
        return json.dumps(self.to_list(items), indent=indent, ensure_ascii=False)

    def to_yaml(self, items: Iterable[Item]) -> str:
        """Serialize items to a YAML sequence."""
        return yaml.dump(
            self.to_list(items),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )
