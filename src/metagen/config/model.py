"""Generation config: which entities to emit and how to name anonymous unions.

The config is authored by hand as TOML::

    version = "3.17.0"

    [anon-mappings]
    "Location|Vec<Location>" = "Definition"

    [structs]
    Position = true
    WorkspaceEdit = "1f3a9c0e"

    [enums]
    DiagnosticSeverity = true

Each struct or enum entry is a ``CodegenOption``: a boolean means
"generate it", a string freezes the entity at the given fingerprint.
The ``Config`` object is read-only during translation.
"""
from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from metagen.config.errors import AnonLookupError, ConfigError
from metagen.schema.nodes import Type, into_reference
from metagen.target.items import TypeRef


@dataclass(frozen=True, slots=True)
class Generate:
    """Translate and emit the entity.

    ``standalone`` is reserved for a mixin-only mode in which the entity
    would not get its own declaration; both values currently emit.
    """

    standalone: bool = True


@dataclass(frozen=True, slots=True)
class Checksum:
    """Do not translate; the entity's fingerprint must equal ``value``."""

    value: str


CodegenOption = Union[Generate, Checksum]

_TOP_LEVEL_KEYS = frozenset({"version", "anon-mappings", "structs", "enums"})


def _option_from_value(value: Any, path: str) -> CodegenOption:
    # bool first: TOML booleans must not be taken for strings or ints.
    if isinstance(value, bool):
        return Generate(standalone=value)
    if isinstance(value, str):
        return Checksum(value=value)
    raise ConfigError(
        f"{path}: expected a boolean or a checksum string, got {type(value).__name__}"
    )


def _table(data: dict[str, Any], key: str) -> dict[str, Any]:
    table = data.get(key, {})
    if not isinstance(table, dict):
        raise ConfigError(f"[{key}] must be a table")
    return table


@dataclass(frozen=True)
class Config:
    """Per-entity generation policy.

    Parameters
    ----------
    version:
        Protocol version the config was written for.
    anon_mappings:
        Composite ``A|B`` keys to the canonical type naming that union.
    structs:
        Structure name to ``CodegenOption``.
    enums:
        Enumeration name to ``CodegenOption``.
    """

    version: str
    anon_mappings: dict[str, str] = field(default_factory=dict)
    structs: dict[str, CodegenOption] = field(default_factory=dict)
    enums: dict[str, CodegenOption] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Build a ``Config`` from a decoded TOML document.

        Raises
        ------
        ConfigError
            On unknown top-level keys, a missing ``version`` or values of
            the wrong type.
        """
        unknown = sorted(set(data) - _TOP_LEVEL_KEYS)
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(unknown)}")
        version = data.get("version")
        if not isinstance(version, str):
            raise ConfigError("config must set a string 'version'")

        anon_mappings = _table(data, "anon-mappings")
        for key, value in anon_mappings.items():
            if not isinstance(value, str):
                raise ConfigError(f"anon-mappings.{key!r}: expected a type name string")

        return cls(
            version=version,
            anon_mappings=dict(anon_mappings),
            structs={
                name: _option_from_value(value, f"structs.{name}")
                for name, value in _table(data, "structs").items()
            },
            enums={
                name: _option_from_value(value, f"enums.{name}")
                for name, value in _table(data, "enums").items()
            },
        )

    @classmethod
    def from_toml(cls, text: str) -> "Config":
        """Build a ``Config`` from TOML text."""
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML: {exc}") from exc
        return cls.from_dict(data)

    def lookup_anon(self, items: tuple[Type, ...] | list[Type]) -> TypeRef:
        """Return the configured name for the anonymous union of *items*.

        Each arm is reduced with ``into_reference`` and the rendered
        references are joined with ``|`` in declaration order, so
        ``A|B`` and ``B|A`` are different keys.

        Raises
        ------
        AnonLookupError
            With ``key=None`` when some arm has no reference form, or
            with the composite key when it is not in ``anon_mappings``.
        """
        items = tuple(items)
        refs: list[TypeRef] = []
        for item in items:
            ref = into_reference(item)
            if ref is None:
                raise AnonLookupError(items, key=None)
            refs.append(ref)
        key = "|".join(ref.as_str() for ref in refs)

        name = self.anon_mappings.get(key)
        if name is None:
            raise AnonLookupError(items, key=key)
        return TypeRef.new(name)


def load_config(path: Path) -> Config:
    """Read and decode a TOML generation config.

    Raises
    ------
    OSError
        If the file cannot be read.
    ConfigError
        If the document is not a valid config.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(f"not valid UTF-8: {exc}") from exc
    return Config.from_toml(text)
