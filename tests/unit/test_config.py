"""Unit tests for metagen.config — loading and anonymous-union lookups."""
from __future__ import annotations

from pathlib import Path

import pytest

from metagen.config import (
    AnonLookupError,
    Checksum,
    Config,
    ConfigError,
    Generate,
    load_config,
)
from metagen.schema.nodes import (
    ArrayType,
    BaseType,
    BaseTypeName,
    OrType,
    ReferenceType,
    TupleType,
)

_CONFIG_TOML = """\
version = "3.17.0"

[anon-mappings]
"A|B" = "AOrB"
"Location|Vec<Location>" = "Definition"

[structs]
Position = true
Mixin = false
WorkspaceEdit = "1f3a9c0e"

[enums]
MarkupKind = true
"""


def _ref(name: str) -> ReferenceType:
    return ReferenceType(name=name)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


class TestFromToml:
    def test_parses_all_tables(self) -> None:
        config = Config.from_toml(_CONFIG_TOML)
        assert config.version == "3.17.0"
        assert config.anon_mappings["A|B"] == "AOrB"
        assert config.structs["Position"] == Generate(standalone=True)
        assert config.structs["Mixin"] == Generate(standalone=False)
        assert config.structs["WorkspaceEdit"] == Checksum(value="1f3a9c0e")
        assert config.enums["MarkupKind"] == Generate()

    def test_tables_are_optional(self) -> None:
        config = Config.from_toml('version = "3.17.0"\n')
        assert config.anon_mappings == {}
        assert config.structs == {}
        assert config.enums == {}

    def test_missing_version_raises(self) -> None:
        with pytest.raises(ConfigError, match="version"):
            Config.from_toml("[structs]\nA = true\n")

    def test_unknown_top_level_key_raises(self) -> None:
        with pytest.raises(ConfigError, match="anon_mappings"):
            Config.from_toml('version = "3.17.0"\n[anon_mappings]\n')

    def test_integer_option_raises(self) -> None:
        with pytest.raises(ConfigError, match="structs.Position"):
            Config.from_toml('version = "3.17.0"\n[structs]\nPosition = 1\n')

    def test_non_string_anon_mapping_raises(self) -> None:
        with pytest.raises(ConfigError, match="anon-mappings"):
            Config.from_toml('version = "3.17.0"\n[anon-mappings]\n"A|B" = true\n')

    def test_non_table_section_raises(self) -> None:
        with pytest.raises(ConfigError, match=r"\[structs\] must be a table"):
            Config.from_toml('version = "3.17.0"\nstructs = "all"\n')

    def test_invalid_toml_raises(self) -> None:
        with pytest.raises(ConfigError, match="invalid TOML"):
            Config.from_toml("version = \n")

    def test_config_error_is_value_error(self) -> None:
        assert issubclass(ConfigError, ValueError)

    def test_load_config_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "metagen.toml"
        path.write_text(_CONFIG_TOML, encoding="utf-8")
        assert load_config(path).structs["Position"] == Generate()

    def test_load_config_rejects_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "metagen.toml"
        path.write_bytes(b'version = "3.17.0"\n[structs]\n"\xff" = true\n')
        with pytest.raises(ConfigError, match="UTF-8"):
            load_config(path)

    def test_load_example_config(self, config_path: Path) -> None:
        config = load_config(config_path)
        assert isinstance(config.structs["WorkspaceEdit"], Checksum)
        assert "MarkupContent|MarkedString|Vec<MarkedString>" in config.anon_mappings


# ---------------------------------------------------------------------------
# lookup_anon
# ---------------------------------------------------------------------------


class TestLookupAnon:
    @pytest.fixture()
    def config(self) -> Config:
        return Config.from_toml(_CONFIG_TOML)

    def test_hit_returns_configured_name(self, config: Config) -> None:
        assert config.lookup_anon([_ref("A"), _ref("B")]).as_str() == "AOrB"

    def test_key_uses_reference_forms(self, config: Config) -> None:
        ref = config.lookup_anon([_ref("Location"), ArrayType(element=_ref("Location"))])
        assert ref.as_str() == "Definition"

    def test_miss_reports_key(self, config: Config) -> None:
        with pytest.raises(AnonLookupError) as exc_info:
            config.lookup_anon([_ref("A"), _ref("C")])
        assert exc_info.value.key == "A|C"
        assert exc_info.value.is_undecidable is False

    def test_order_sensitive(self, config: Config) -> None:
        with pytest.raises(AnonLookupError) as exc_info:
            config.lookup_anon([_ref("B"), _ref("A")])
        assert exc_info.value.key == "B|A"

    def test_both_orders_when_both_configured(self) -> None:
        config = Config(version="3.17.0", anon_mappings={"A|B": "AB", "B|A": "BA"})
        assert config.lookup_anon([_ref("A"), _ref("B")]).as_str() == "AB"
        assert config.lookup_anon([_ref("B"), _ref("A")]).as_str() == "BA"

    def test_base_types_use_short_names(self) -> None:
        config = Config(version="3.17.0", anon_mappings={"String|i64": "StringOrInt"})
        ref = config.lookup_anon(
            [BaseType(name=BaseTypeName.STRING), BaseType(name=BaseTypeName.INTEGER)]
        )
        assert ref.as_str() == "StringOrInt"

    def test_unreducible_arm_has_no_key(self, config: Config) -> None:
        items = [_ref("A"), BaseType(name=BaseTypeName.NULL)]
        with pytest.raises(AnonLookupError) as exc_info:
            config.lookup_anon(items)
        assert exc_info.value.key is None
        assert exc_info.value.is_undecidable is True

    def test_nested_union_has_no_key(self, config: Config) -> None:
        with pytest.raises(AnonLookupError) as exc_info:
            config.lookup_anon([_ref("A"), OrType(items=(_ref("B"), _ref("C")))])
        assert exc_info.value.key is None

    def test_tuple_arm_joins_into_key(self) -> None:
        config = Config(version="3.17.0", anon_mappings={"(u32,u32)|String": "Span"})
        tuple_arm = TupleType(
            items=(BaseType(name=BaseTypeName.UINTEGER), BaseType(name=BaseTypeName.UINTEGER))
        )
        ref = config.lookup_anon([tuple_arm, BaseType(name=BaseTypeName.STRING)])
        assert ref.as_str() == "Span"

    def test_lookup_does_not_modify_config(self, config: Config) -> None:
        before = dict(config.anon_mappings)
        config.lookup_anon([_ref("A"), _ref("B")])
        assert config.anon_mappings == before
