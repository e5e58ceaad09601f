"""Unit tests for metagen.target.serializer — ItemSerializer."""
from __future__ import annotations

import json

import pytest
import yaml

from metagen.target import (
    Enum,
    EnumVariant,
    ItemSerializer,
    Struct,
    StructField,
    TraitImpl,
    TypeRef,
    Version,
)


def _struct() -> Struct:
    return Struct(
        name="Foo",
        extends=("Base",),
        fields=(
            StructField(
                name="x",
                ty=TypeRef.new_generics("Option", [TypeRef.new("Bar")]),
                doc="The x.",
                since=Version.V3_17_0,
            ),
        ),
        doc="A foo.",
    )


@pytest.fixture()
def serializer() -> ItemSerializer:
    return ItemSerializer()


class TestItemSerializer:
    def test_struct(self, serializer: ItemSerializer) -> None:
        data = serializer.to_dict(_struct())
        assert data["kind"] == "Struct"
        assert data["extends"] == ["Base"]
        assert data["since"] == "unknown"
        assert data["fields"] == [
            {"name": "x", "ty": "Option<Bar>", "doc": "The x.", "since": "3.17.0", "deprecated": None}
        ]

    def test_enum(self, serializer: ItemSerializer) -> None:
        item = Enum(
            name="MarkupKind",
            variants=(EnumVariant(name="PlainText"), EnumVariant(name="Markdown", since=Version.V3_13_0)),
            deprecated="old",
        )
        data = serializer.to_dict(item)
        assert data["kind"] == "Enum"
        assert [v["name"] for v in data["variants"]] == ["PlainText", "Markdown"]
        assert data["variants"][1]["since"] == "3.13.0"
        assert data["deprecated"] == "old"

    def test_trait_impl(self, serializer: ItemSerializer) -> None:
        item = TraitImpl(
            interface="Request",
            implementor="DefinitionRequest",
            assoc_types=(("Params", TypeRef.new("DefinitionParams")),),
            assoc_const=(("METHOD", "textDocument/definition"),),
        )
        data = serializer.to_dict(item)
        assert data["assoc_types"] == {"Params": "DefinitionParams"}
        assert data["assoc_const"] == {"METHOD": "textDocument/definition"}

    def test_unknown_item_raises(self, serializer: ItemSerializer) -> None:
        with pytest.raises(TypeError):
            serializer.to_dict("Foo")  # type: ignore[arg-type]

    def test_to_json_preserves_order(self, serializer: ItemSerializer) -> None:
        items = [_struct(), Enum(name="Kind")]
        data = json.loads(serializer.to_json(items))
        assert [d["name"] for d in data] == ["Foo", "Kind"]

    def test_to_yaml_keeps_key_order(self, serializer: ItemSerializer) -> None:
        text = serializer.to_yaml([_struct()])
        assert text.index("kind:") < text.index("name:") < text.index("fields:")
        assert yaml.safe_load(text)[0]["fields"][0]["ty"] == "Option<Bar>"

    def test_empty_list(self, serializer: ItemSerializer) -> None:
        assert json.loads(serializer.to_json([])) == []
