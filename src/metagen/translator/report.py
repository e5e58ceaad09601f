"""Recoverable diagnostics collected during one translation pass.

Gaps in the hand-written config do not abort translation.  They are
gathered into a ``TranslationReport`` and surfaced together, rendered as
TOML fragments a maintainer can paste straight into the config.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EntityKind(Enum):
    """Which config table an entity belongs to."""

    STRUCT = "structs"
    ENUM = "enums"

    @property
    def label(self) -> str:
        """Return the human-readable singular name, e.g. ``"structure"``."""
        return "structure" if self is EntityKind.STRUCT else "enumeration"


@dataclass(frozen=True)
class ChecksumMismatch:
    """A frozen entity whose schema changed since its checksum was recorded.

    Parameters
    ----------
    kind:
        Whether the entity is a structure or an enumeration.
    name:
        Entity name.
    expected:
        Checksum stored in the config.
    actual:
        Fingerprint of the entity in the current meta-model.
    """

    kind: EntityKind
    name: str
    expected: str
    actual: str

    def __str__(self) -> str:
        return (
            f"Hash mismatch for {self.kind.label} {self.name}, "
            f"expected {self.expected!r}, got {self.actual!r}"
        )


def _toml_string(text: str) -> str:
    """Quote *text* as a TOML basic string."""
    escaped = []
    for char in text:
        if char == '"':
            escaped.append('\\"')
        elif char == "\\":
            escaped.append("\\\\")
        elif char == "\n":
            escaped.append("\\n")
        elif char == "\t":
            escaped.append("\\t")
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            escaped.append(f"\\u{ord(char):04X}")
        else:
            escaped.append(char)
    return '"' + "".join(escaped) + '"'


def _fenced(header: str, table: str, lines: list[str]) -> str:
    body = "\n".join([f"[{table}]", *lines])
    return f"{header}\n```toml\n{body}\n```"


@dataclass
class TranslationReport:
    """Diagnostics from a single translation pass.

    Parameters
    ----------
    structs_missing:
        Structures in the meta-model with no config entry.
    enums_missing:
        Enumerations in the meta-model with no config entry.
    anon_missing:
        Composite keys of anonymous unions with no configured name.
    structs_unused:
        Configured structures that the meta-model does not declare.
    enums_unused:
        Configured enumerations that the meta-model does not declare.
    checksum_mismatches:
        Frozen entities whose fingerprint no longer matches, in the
        order they were detected.
    """

    structs_missing: set[str] = field(default_factory=set)
    enums_missing: set[str] = field(default_factory=set)
    anon_missing: set[str] = field(default_factory=set)
    structs_unused: set[str] = field(default_factory=set)
    enums_unused: set[str] = field(default_factory=set)
    checksum_mismatches: list[ChecksumMismatch] = field(default_factory=list)

    @property
    def has_diagnostics(self) -> bool:
        """Return True if anything was recorded."""
        return bool(
            self.structs_missing
            or self.enums_missing
            or self.anon_missing
            or self.structs_unused
            or self.enums_unused
            or self.checksum_mismatches
        )

    def toml_hints(self, bless: bool = False) -> list[str]:
        """Render the report as copy-pasteable TOML fragments.

        Parameters
        ----------
        bless:
            Also render the current fingerprints of stale checksum
            entries, ready to replace the old values.

        Returns
        -------
        list[str]
            One fenced block per non-empty category, in a fixed order.
        """
        hints: list[str] = []
        if self.structs_missing:
            hints.append(
                _fenced(
                    "These structs are missing. Add them.",
                    "structs",
                    [f"{name} = true" for name in sorted(self.structs_missing)],
                )
            )
        if self.enums_missing:
            hints.append(
                _fenced(
                    "These enums are missing. Add them.",
                    "enums",
                    [f"{name} = true" for name in sorted(self.enums_missing)],
                )
            )
        if self.anon_missing:
            hints.append(
                _fenced(
                    "These anon mappings are missing. Add them.",
                    "anon-mappings",
                    [f'{_toml_string(key)} = "todo"' for key in sorted(self.anon_missing)],
                )
            )
        for kind, unused in (
            (EntityKind.STRUCT, self.structs_unused),
            (EntityKind.ENUM, self.enums_unused),
        ):
            if unused:
                hints.append(
                    _fenced(
                        f"These {kind.value} are configured but not in the meta-model. "
                        "Remove them.",
                        kind.value,
                        [f"# {name}" for name in sorted(unused)],
                    )
                )
        if bless:
            for kind in EntityKind:
                stale = [m for m in self.checksum_mismatches if m.kind is kind]
                if stale:
                    hints.append(
                        _fenced(
                            f"These {kind.value} checksums are stale. Replace them.",
                            kind.value,
                            [f'{m.name} = "{m.actual}"' for m in stale],
                        )
                    )
        return hints

    def summary(self) -> str:
        """Return a one-line human-readable summary of this report."""
        return (
            f"{len(self.structs_missing)} missing struct(s), "
            f"{len(self.enums_missing)} missing enum(s), "
            f"{len(self.anon_missing)} missing anon mapping(s), "
            f"{len(self.checksum_mismatches)} checksum mismatch(es)"
        )
