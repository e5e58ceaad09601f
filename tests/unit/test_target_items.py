"""Unit tests for metagen.target.items — TypeRef, Version and item dataclasses."""
from __future__ import annotations

import pytest

from metagen.target.items import (
    Enum,
    EnumVariant,
    Struct,
    StructField,
    TraitImpl,
    TypeRef,
    TypeRefKind,
    Version,
)


# ---------------------------------------------------------------------------
# TypeRef
# ---------------------------------------------------------------------------


class TestTypeRef:
    def test_named_renders_name(self) -> None:
        assert TypeRef.new("String").as_str() == "String"

    def test_generic_renders_angle_brackets(self) -> None:
        ref = TypeRef.new_generics("Vec", [TypeRef.new("String")])
        assert ref.as_str() == "Vec<String>"

    def test_generic_arguments_joined_with_comma(self) -> None:
        ref = TypeRef.new_generics(
            "std::collections::HashMap", [TypeRef.new("String"), TypeRef.new("u32")]
        )
        assert ref.as_str() == "std::collections::HashMap<String,u32>"

    def test_tuple_renders_parentheses(self) -> None:
        ref = TypeRef.new_tuple([TypeRef.new("u32"), TypeRef.new("u32")])
        assert ref.as_str() == "(u32,u32)"

    def test_nested_generics(self) -> None:
        inner = TypeRef.new_generics("Vec", [TypeRef.new("Location")])
        ref = TypeRef.new_generics("Option", [inner])
        assert ref.as_str() == "Option<Vec<Location>>"

    def test_generic_and_tuple_render_differently(self) -> None:
        args = [TypeRef.new("A"), TypeRef.new("B")]
        assert TypeRef.new_generics("", args).as_str() != TypeRef.new_tuple(args).as_str()

    def test_str_matches_as_str(self) -> None:
        ref = TypeRef.new_generics("Option", [TypeRef.new("bool")])
        assert str(ref) == ref.as_str()

    def test_kinds(self) -> None:
        assert TypeRef.new("A").kind is TypeRefKind.NAMED
        assert TypeRef.new_generics("A", []).kind is TypeRefKind.GENERIC
        assert TypeRef.new_tuple([]).kind is TypeRefKind.TUPLE

    def test_args_are_stored_as_tuple(self) -> None:
        ref = TypeRef.new_generics("Vec", [TypeRef.new("A")])
        assert isinstance(ref.args, tuple)

    def test_equal_shapes_are_equal(self) -> None:
        a = TypeRef.new_generics("Vec", [TypeRef.new("A")])
        b = TypeRef.new_generics("Vec", [TypeRef.new("A")])
        assert a == b
        assert hash(a) == hash(b)

    def test_is_frozen(self) -> None:
        ref = TypeRef.new("A")
        with pytest.raises((AttributeError, TypeError)):
            ref.name = "B"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------


class TestVersion:
    def test_none_is_unknown(self) -> None:
        assert Version.parse(None) is Version.UNKNOWN

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("3.17.0", Version.V3_17_0),
            ("3.2.0", Version.V3_2_0),
            ("3.18.0", Version.V3_18_0),
            ("version 3.16.0", Version.V3_16_0),
            ("3.16.0.", Version.V3_16_0),
            ("3.18.0 - proposed", Version.V3_18_0),
        ],
    )
    def test_parses_loose_forms(self, text: str, expected: Version) -> None:
        assert Version.parse(text) is expected

    @pytest.mark.parametrize("text", ["3.16", "3.17"])
    def test_short_forms_map_to_3_17(self, text: str) -> None:
        assert Version.parse(text) is Version.V3_17_0

    @pytest.mark.parametrize("text", ["4.0.0", "3.1.0", "latest", ""])
    def test_unknown_versions_raise(self, text: str) -> None:
        with pytest.raises(ValueError, match="invalid version"):
            Version.parse(text)


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------


class TestItems:
    def test_struct_defaults(self) -> None:
        s = Struct(name="Position")
        assert s.extends == ()
        assert s.fields == ()
        assert s.doc is None
        assert s.since is Version.UNKNOWN
        assert s.deprecated is None

    def test_struct_field(self) -> None:
        f = StructField(name="line", ty=TypeRef.new("u32"), doc="Line.")
        assert f.ty.as_str() == "u32"
        assert f.since is Version.UNKNOWN

    def test_enum_keeps_variant_order(self) -> None:
        e = Enum(
            name="MarkupKind",
            variants=(EnumVariant(name="PlainText"), EnumVariant(name="Markdown")),
        )
        assert [v.name for v in e.variants] == ["PlainText", "Markdown"]

    def test_trait_impl(self) -> None:
        t = TraitImpl(
            interface="Request",
            implementor="DefinitionRequest",
            assoc_types=(("Params", TypeRef.new("DefinitionParams")),),
            assoc_const=(("METHOD", '"textDocument/definition"'),),
        )
        assert t.assoc_types[0][1].as_str() == "DefinitionParams"
        assert t.assoc_const[0][0] == "METHOD"

    def test_items_are_frozen(self) -> None:
        s = Struct(name="A")
        with pytest.raises((AttributeError, TypeError)):
            s.name = "B"  # type: ignore[misc]
