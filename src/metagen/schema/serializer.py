"""Conversion between meta-model JSON and schema nodes.

``SchemaSerializer.from_dict`` builds a ``MetaModel`` from the decoded
``metaModel.json`` document.  ``SchemaSerializer.to_dict`` goes the other
way for any individual node and is the canonical structural form used
for fingerprints: every field is present (``None`` included) so that any
change to a node changes its dict.

Usage
-----
::

    from metagen.schema.serializer import SchemaSerializer, load_meta_model

    meta_model = load_meta_model(Path("metaModel.json"))
    data = SchemaSerializer().to_dict(meta_model.structures[0])
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

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
)


def _require(d: dict[str, Any], key: str, path: str) -> Any:
    if not isinstance(d, dict):
        raise SchemaError(f"expected an object, got {type(d).__name__}", path)
    if key not in d:
        raise SchemaError(f"missing required field {key!r}", path)
    return d[key]


def _list(value: Any, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise SchemaError(f"expected a list, got {type(value).__name__}", path)
    return value


def _optional_list(d: dict[str, Any], key: str, path: str) -> list[Any]:
    if key not in d:
        return []
    return _list(d[key], f"{path}.{key}" if path else key)


def _tags(d: dict[str, Any], path: str) -> tuple[str, ...] | None:
    value = d.get("sinceTags")
    if value is None:
        return None
    return tuple(_list(value, f"{path}.sinceTags"))


class SchemaSerializer:
    """Converts between meta-model JSON dicts and schema nodes.

    JSON keys are the upstream camelCase spellings; the ``"kind"`` field
    discriminates ``Type`` variants.
    """

    # ------------------------------------------------------------------
    # Deserialization (dict → nodes)
    # ------------------------------------------------------------------

    def from_dict(self, data: dict[str, Any]) -> MetaModel:
        """Build a ``MetaModel`` from a decoded ``metaModel.json`` document."""
        meta_data = _require(data, "metaData", "")
        return MetaModel(
            meta_data=MetaData(version=_require(meta_data, "version", "metaData")),
            requests=tuple(
                self._request_from_dict(r, f"requests[{i}]")
                for i, r in enumerate(_optional_list(data, "requests", ""))
            ),
            notifications=tuple(
                self._notification_from_dict(n, f"notifications[{i}]")
                for i, n in enumerate(_optional_list(data, "notifications", ""))
            ),
            structures=tuple(
                self._structure_from_dict(s, f"structures[{i}]")
                for i, s in enumerate(_optional_list(data, "structures", ""))
            ),
            enumerations=tuple(
                self._enumeration_from_dict(e, f"enumerations[{i}]")
                for i, e in enumerate(_optional_list(data, "enumerations", ""))
            ),
            type_aliases=tuple(
                self._type_alias_from_dict(a, f"typeAliases[{i}]")
                for i, a in enumerate(_optional_list(data, "typeAliases", ""))
            ),
        )

    def from_json(self, text: str) -> MetaModel:
        """Build a ``MetaModel`` from JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SchemaError(f"invalid JSON: {exc}") from exc
        return self.from_dict(data)

    def _direction_from_value(self, value: Any, path: str) -> MessageDirection:
        try:
            return MessageDirection(value)
        except ValueError:
            raise SchemaError(f"unknown message direction {value!r}", path) from None

    def _params_from_value(self, value: Any, path: str) -> Type | tuple[Type, ...] | None:
        if value is None:
            return None
        if isinstance(value, list):
            return tuple(self.type_from_dict(p, f"{path}[{i}]") for i, p in enumerate(value))
        return self.type_from_dict(value, path)

    def _optional_type(self, value: Any, path: str) -> Type | None:
        return self.type_from_dict(value, path) if value is not None else None

    def _request_from_dict(self, d: dict[str, Any], path: str) -> Request:
        return Request(
            method=_require(d, "method", path),
            result=self.type_from_dict(_require(d, "result", path), f"{path}.result"),
            message_direction=self._direction_from_value(
                _require(d, "messageDirection", path), f"{path}.messageDirection"
            ),
            type_name=d.get("typeName"),
            params=self._params_from_value(d.get("params"), f"{path}.params"),
            partial_result=self._optional_type(d.get("partialResult"), f"{path}.partialResult"),
            registration_options=self._optional_type(
                d.get("registrationOptions"), f"{path}.registrationOptions"
            ),
            error_data=self._optional_type(d.get("errorData"), f"{path}.errorData"),
            client_capability=d.get("clientCapability"),
            server_capability=d.get("serverCapability"),
            registration_method=d.get("registrationMethod"),
            documentation=d.get("documentation"),
            since=d.get("since"),
            proposed=bool(d.get("proposed", False)),
            deprecated=d.get("deprecated"),
        )

    def _notification_from_dict(self, d: dict[str, Any], path: str) -> Notification:
        return Notification(
            method=_require(d, "method", path),
            message_direction=self._direction_from_value(
                _require(d, "messageDirection", path), f"{path}.messageDirection"
            ),
            type_name=d.get("typeName"),
            params=self._params_from_value(d.get("params"), f"{path}.params"),
            registration_options=self._optional_type(
                d.get("registrationOptions"), f"{path}.registrationOptions"
            ),
            client_capability=d.get("clientCapability"),
            server_capability=d.get("serverCapability"),
            registration_method=d.get("registrationMethod"),
            documentation=d.get("documentation"),
            since=d.get("since"),
            proposed=bool(d.get("proposed", False)),
            deprecated=d.get("deprecated"),
        )

    def _property_from_dict(self, d: dict[str, Any], path: str) -> Property:
        return Property(
            name=_require(d, "name", path),
            type=self.type_from_dict(_require(d, "type", path), f"{path}.type"),
            optional=bool(d.get("optional", False)),
            documentation=d.get("documentation"),
            since=d.get("since"),
            since_tags=_tags(d, path),
            proposed=bool(d.get("proposed", False)),
            deprecated=d.get("deprecated"),
        )

    def _properties_from_list(self, values: Any, path: str) -> tuple[Property, ...]:
        return tuple(
            self._property_from_dict(p, f"{path}[{i}]") for i, p in enumerate(_list(values, path))
        )

    def _structure_from_dict(self, d: dict[str, Any], path: str) -> Structure:
        return Structure(
            name=_require(d, "name", path),
            properties=self._properties_from_list(
                _require(d, "properties", path), f"{path}.properties"
            ),
            extends=tuple(
                self.type_from_dict(t, f"{path}.extends[{i}]")
                for i, t in enumerate(_optional_list(d, "extends", path))
            ),
            mixins=tuple(
                self.type_from_dict(t, f"{path}.mixins[{i}]")
                for i, t in enumerate(_optional_list(d, "mixins", path))
            ),
            documentation=d.get("documentation"),
            since=d.get("since"),
            since_tags=_tags(d, path),
            proposed=bool(d.get("proposed", False)),
            deprecated=d.get("deprecated"),
        )

    def _structure_literal_from_dict(self, d: dict[str, Any], path: str) -> StructureLiteral:
        return StructureLiteral(
            properties=self._properties_from_list(
                _require(d, "properties", path), f"{path}.properties"
            ),
            documentation=d.get("documentation"),
            since=d.get("since"),
            since_tags=_tags(d, path),
            proposed=bool(d.get("proposed", False)),
            deprecated=d.get("deprecated"),
        )

    def _enumeration_from_dict(self, d: dict[str, Any], path: str) -> Enumeration:
        type_ = _require(d, "type", path)
        kind = _require(type_, "kind", f"{path}.type")
        if kind != "base":
            raise SchemaError(f"enumeration type must be a base type, got {kind!r}", f"{path}.type")
        name = _require(type_, "name", f"{path}.type")
        try:
            enum_kind = EnumerationTypeKind(name)
        except ValueError:
            raise SchemaError(
                f"unsupported enumeration base type {name!r}", f"{path}.type"
            ) from None
        return Enumeration(
            name=_require(d, "name", path),
            type=enum_kind,
            values=tuple(
                self._entry_from_dict(v, f"{path}.values[{i}]")
                for i, v in enumerate(_list(_require(d, "values", path), f"{path}.values"))
            ),
            supports_custom_values=bool(d.get("supportsCustomValues", False)),
            documentation=d.get("documentation"),
            since=d.get("since"),
            proposed=bool(d.get("proposed", False)),
            deprecated=d.get("deprecated"),
        )

    def _entry_from_dict(self, d: dict[str, Any], path: str) -> EnumerationEntry:
        return EnumerationEntry(
            name=_require(d, "name", path),
            value=_require(d, "value", path),
            documentation=d.get("documentation"),
            since=d.get("since"),
            proposed=bool(d.get("proposed", False)),
        )

    def _type_alias_from_dict(self, d: dict[str, Any], path: str) -> TypeAlias:
        return TypeAlias(
            name=_require(d, "name", path),
            type=self.type_from_dict(_require(d, "type", path), f"{path}.type"),
            documentation=d.get("documentation"),
            since=d.get("since"),
            proposed=bool(d.get("proposed", False)),
            deprecated=d.get("deprecated"),
        )

    def type_from_dict(self, d: dict[str, Any], path: str = "") -> Type:
        """Build a ``Type`` from its ``"kind"``-tagged dict."""
        kind = _require(d, "kind", path)
        if kind == "base":
            name = _require(d, "name", path)
            try:
                return BaseType(name=BaseTypeName(name))
            except ValueError:
                raise SchemaError(f"unknown base type {name!r}", path) from None
        if kind == "reference":
            return ReferenceType(name=_require(d, "name", path))
        if kind == "array":
            return ArrayType(element=self.type_from_dict(_require(d, "element", path), f"{path}.element"))
        if kind == "map":
            return MapType(
                key=self.type_from_dict(_require(d, "key", path), f"{path}.key"),
                value=self.type_from_dict(_require(d, "value", path), f"{path}.value"),
            )
        if kind == "or":
            return OrType(items=self._type_items(d, path))
        if kind == "tuple":
            return TupleType(items=self._type_items(d, path))
        if kind == "literal":
            return StructureLiteralType(
                value=self._structure_literal_from_dict(_require(d, "value", path), f"{path}.value")
            )
        if kind == "stringLiteral":
            return StringLiteralType(value=_require(d, "value", path))
        if kind == "integerLiteral":
            value = _require(d, "value", path)
            # bool is an int subclass but never a valid integer literal.
            if not isinstance(value, int) or isinstance(value, bool):
                raise SchemaError(f"integer literal value must be an integer, got {value!r}", path)
            return IntegerLiteralType(value=value)
        if kind == "booleanLiteral":
            return BooleanLiteralType(value=bool(_require(d, "value", path)))
        raise SchemaError(f"unknown type kind {kind!r}", path)

    def _type_items(self, d: dict[str, Any], path: str) -> tuple[Type, ...]:
        return tuple(
            self.type_from_dict(t, f"{path}.items[{i}]")
            for i, t in enumerate(_list(_require(d, "items", path), f"{path}.items"))
        )

    # ------------------------------------------------------------------
    # Serialization (nodes → dict)
    # ------------------------------------------------------------------

    def to_dict(self, node: object) -> dict[str, Any]:
        """Serialize a structure, enumeration, type alias or type to a dict."""
        if isinstance(node, Structure):
            return self._structure_to_dict(node)
        if isinstance(node, Enumeration):
            return self._enumeration_to_dict(node)
        if isinstance(node, TypeAlias):
            return self._type_alias_to_dict(node)
        return self.type_to_dict(node)  # type: ignore[arg-type]

    def _property_to_dict(self, p: Property) -> dict[str, Any]:
        return {
            "name": p.name,
            "type": self.type_to_dict(p.type),
            "optional": p.optional,
            "documentation": p.documentation,
            "since": p.since,
            "sinceTags": list(p.since_tags) if p.since_tags is not None else None,
            "proposed": p.proposed,
            "deprecated": p.deprecated,
        }

    def _structure_to_dict(self, s: Structure) -> dict[str, Any]:
        return {
            "name": s.name,
            "properties": [self._property_to_dict(p) for p in s.properties],
            "extends": [self.type_to_dict(t) for t in s.extends],
            "mixins": [self.type_to_dict(t) for t in s.mixins],
            "documentation": s.documentation,
            "since": s.since,
            "sinceTags": list(s.since_tags) if s.since_tags is not None else None,
            "proposed": s.proposed,
            "deprecated": s.deprecated,
        }

    def _structure_literal_to_dict(self, s: StructureLiteral) -> dict[str, Any]:
        return {
            "properties": [self._property_to_dict(p) for p in s.properties],
            "documentation": s.documentation,
            "since": s.since,
            "sinceTags": list(s.since_tags) if s.since_tags is not None else None,
            "proposed": s.proposed,
            "deprecated": s.deprecated,
        }

    def _enumeration_to_dict(self, e: Enumeration) -> dict[str, Any]:
        return {
            "name": e.name,
            "type": {"kind": "base", "name": e.type.value},
            "values": [
                {
                    "name": v.name,
                    "value": v.value,
                    "documentation": v.documentation,
                    "since": v.since,
                    "proposed": v.proposed,
                }
                for v in e.values
            ],
            "supportsCustomValues": e.supports_custom_values,
            "documentation": e.documentation,
            "since": e.since,
            "proposed": e.proposed,
            "deprecated": e.deprecated,
        }

    def _type_alias_to_dict(self, a: TypeAlias) -> dict[str, Any]:
        return {
            "name": a.name,
            "type": self.type_to_dict(a.type),
            "documentation": a.documentation,
            "since": a.since,
            "proposed": a.proposed,
            "deprecated": a.deprecated,
        }

    def type_to_dict(self, ty: Type) -> dict[str, Any]:
        """Serialize a ``Type`` to its ``"kind"``-tagged dict."""
        if isinstance(ty, BaseType):
            return {"kind": "base", "name": ty.name.value}
        if isinstance(ty, ReferenceType):
            return {"kind": "reference", "name": ty.name}
        if isinstance(ty, ArrayType):
            return {"kind": "array", "element": self.type_to_dict(ty.element)}
        if isinstance(ty, MapType):
            return {
                "kind": "map",
                "key": self.type_to_dict(ty.key),
                "value": self.type_to_dict(ty.value),
            }
        if isinstance(ty, OrType):
            return {"kind": "or", "items": [self.type_to_dict(t) for t in ty.items]}
        if isinstance(ty, TupleType):
            return {"kind": "tuple", "items": [self.type_to_dict(t) for t in ty.items]}
        if isinstance(ty, StructureLiteralType):
            return {"kind": "literal", "value": self._structure_literal_to_dict(ty.value)}
        if isinstance(ty, StringLiteralType):
            return {"kind": "stringLiteral", "value": ty.value}
        if isinstance(ty, IntegerLiteralType):
            return {"kind": "integerLiteral", "value": ty.value}
        if isinstance(ty, BooleanLiteralType):
            return {"kind": "booleanLiteral", "value": ty.value}
        raise TypeError(f"Unknown schema node type: {type(ty)}")


def load_meta_model(path: Path) -> MetaModel:
    """Read and decode a ``metaModel.json`` file.

    Raises
    ------
    OSError
        If the file cannot be read.
    SchemaError
        If the document is not a valid meta-model.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SchemaError(f"not valid UTF-8: {exc}") from exc
    return SchemaSerializer().from_json(text)
