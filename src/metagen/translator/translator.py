"""Schema translator: meta-model entities → target items.

The ``Translator`` walks the structures and then the enumerations of a
``MetaModel`` in declaration order, consults the ``Config`` for each one
and either translates it, checks its fingerprint, or records it as
missing.  Unsupported type shapes raise ``TranslationError`` and abort
the pass; config gaps are collected in a ``TranslationReport``.

Type mapping reference
----------------------

Schema type                      Target reference
-------------------------------  -----------------------------------------
``URI`` / ``DocumentUri``        ``crate::Uri`` / ``crate::DocumentUri``
``integer`` / ``uinteger``       ``i64`` / ``u32``
``decimal``                      ``f32``
``string`` / ``boolean``         ``String`` / ``bool``
``RegExp`` / ``null``            error
array of ``T``                   ``Vec<T>``
map ``K`` → ``V``                ``std::collections::HashMap<K,V>``
reference ``Name``               ``Name`` (unresolved)
``T | null``                     ``Option<T>``
other unions                     name from ``[anon-mappings]``
string literal                   no type; the property is dropped
tuple, literal, int/bool lit     error

Usage
-----
::

    from metagen.translator import translate_schema

    result = translate_schema(meta_model, config)
    for hint in result.report.toml_hints():
        print(hint)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from metagen.config.errors import AnonLookupError
from metagen.config.model import Checksum, CodegenOption, Config
from metagen.schema.nodes import (
    ArrayType,
    BaseType,
    BaseTypeName,
    BooleanLiteralType,
    Enumeration,
    EnumerationTypeKind,
    IntegerLiteralType,
    MapType,
    MetaModel,
    OrType,
    ReferenceType,
    StringLiteralType,
    Structure,
    StructureLiteralType,
    TupleType,
    Type,
    into_reference,
)
from metagen.target.items import (
    Enum,
    EnumVariant,
    Item,
    Struct,
    StructField,
    TypeRef,
    Version,
)
from metagen.translator.errors import TranslationError
from metagen.translator.fingerprint import fingerprint
from metagen.translator.report import ChecksumMismatch, EntityKind, TranslationReport

logger = logging.getLogger(__name__)

# Emitted for unions with no configured name; intentionally not a valid type.
PLACEHOLDER = "todo!()"

_BASE_TYPES: dict[BaseTypeName, str] = {
    BaseTypeName.URI: "crate::Uri",
    BaseTypeName.DOCUMENT_URI: "crate::DocumentUri",
    BaseTypeName.INTEGER: "i64",
    BaseTypeName.UINTEGER: "u32",
    BaseTypeName.DECIMAL: "f32",
    BaseTypeName.STRING: "String",
    BaseTypeName.BOOLEAN: "bool",
}

_NULL = BaseType(name=BaseTypeName.NULL)


@dataclass
class TranslationResult:
    """Output of one translation pass.

    Parameters
    ----------
    items:
        Translated items: structures first, then enumerations, each in
        meta-model declaration order.
    report:
        Recoverable diagnostics gathered during the pass.
    """

    items: list[Item]
    report: TranslationReport

    def summary(self) -> str:
        """Return a one-line human-readable summary of this result."""
        structs = sum(1 for item in self.items if isinstance(item, Struct))
        enums = sum(1 for item in self.items if isinstance(item, Enum))
        return f"Translated {structs} struct(s) and {enums} enum(s)"


def _is_empty_literal(ty: Type) -> bool:
    return isinstance(ty, StructureLiteralType) and not ty.value.properties


def _parse_version(since: str | None) -> Version:
    try:
        return Version.parse(since)
    except ValueError as exc:
        raise TranslationError(str(exc)) from exc


class Translator:
    """Translates a ``MetaModel`` into target items under a ``Config``.

    Parameters
    ----------
    config:
        Generation policy.  It is only read, never modified, so one
        config can drive any number of passes.

    The translator keeps no state between passes other than ``report``,
    which is replaced at the start of every :meth:`translate` call.
    """

    def __init__(self, config: Config) -> None:
        self._config = config
        self.report = TranslationReport()

    def translate(self, meta_model: MetaModel) -> TranslationResult:
        """Translate every configured structure and enumeration.

        Raises
        ------
        TranslationError
            If a generated entity contains an unsupported type shape.
        """
        self.report = TranslationReport()
        items: list[Item] = []

        names = {s.name for s in meta_model.structures}
        self.report.structs_missing = names - set(self._config.structs)
        self.report.structs_unused = set(self._config.structs) - names
        for structure in meta_model.structures:
            option = self._config.structs.get(structure.name)
            if self._should_translate(EntityKind.STRUCT, structure, option):
                try:
                    items.append(self.translate_structure(structure))
                except TranslationError as exc:
                    exc.add_context(f"translating structure {structure.name}")
                    raise

        names = {e.name for e in meta_model.enumerations}
        self.report.enums_missing = names - set(self._config.enums)
        self.report.enums_unused = set(self._config.enums) - names
        for enumeration in meta_model.enumerations:
            option = self._config.enums.get(enumeration.name)
            if self._should_translate(EntityKind.ENUM, enumeration, option):
                try:
                    items.append(self.translate_enumeration(enumeration))
                except TranslationError as exc:
                    exc.add_context(f"translating enumeration {enumeration.name}")
                    raise

        result = TranslationResult(items=items, report=self.report)
        logger.info("%s; %s", result.summary(), self.report.summary())
        return result

    def _should_translate(
        self,
        kind: EntityKind,
        entity: Structure | Enumeration,
        option: CodegenOption | None,
    ) -> bool:
        if option is None:
            logger.debug("Skipping %s %s: no config entry", kind.label, entity.name)
            return False
        if isinstance(option, Checksum):
            actual = fingerprint(entity)
            if actual != option.value:
                mismatch = ChecksumMismatch(
                    kind=kind, name=entity.name, expected=option.value, actual=actual
                )
                self.report.checksum_mismatches.append(mismatch)
                logger.warning("%s", mismatch)
            else:
                logger.debug("Checksum of %s %s is current", kind.label, entity.name)
            return False
        # TODO: honour Generate(standalone=False) once mixin-only structs are emitted inline.
        return True

    # ------------------------------------------------------------------
    # Entities
    # ------------------------------------------------------------------

    def translate_structure(self, structure: Structure) -> Struct:
        """Translate one structure.

        Properties whose type translates to nothing (string literals)
        are omitted from the struct.
        """
        extends: list[str] = []
        for base in (*structure.extends, *structure.mixins):
            try:
                ref = into_reference(base)
            except ValueError as exc:
                raise TranslationError(str(exc)) from exc
            if ref is None:
                raise TranslationError(f"base type {base!r} is not a reference")
            extends.append(ref.as_str())

        fields: list[StructField] = []
        for prop in structure.properties:
            try:
                ty = self.translate_type(prop.type)
                if ty is None:
                    logger.debug("Dropping property %s.%s", structure.name, prop.name)
                    continue
                fields.append(
                    StructField(
                        name=prop.name,
                        ty=ty,
                        doc=prop.documentation,
                        since=_parse_version(prop.since),
                        deprecated=prop.deprecated,
                    )
                )
            except TranslationError as exc:
                exc.add_context(f"translating property {prop.name}")
                raise

        return Struct(
            name=structure.name,
            extends=tuple(extends),
            fields=tuple(fields),
            doc=structure.documentation,
            since=_parse_version(structure.since),
            deprecated=structure.deprecated,
        )

    def translate_enumeration(self, enumeration: Enumeration) -> Enum:
        """Translate one string enumeration; integer kinds are unsupported."""
        if enumeration.type == EnumerationTypeKind.INTEGER:
            raise TranslationError("translate int enums")
        if enumeration.type == EnumerationTypeKind.UINTEGER:
            raise TranslationError("translate uint enums")

        variants = tuple(
            EnumVariant(
                name=entry.name,
                doc=entry.documentation,
                since=_parse_version(entry.since),
            )
            for entry in enumeration.values
        )
        return Enum(
            name=enumeration.name,
            variants=variants,
            doc=enumeration.documentation,
            since=_parse_version(enumeration.since),
            deprecated=enumeration.deprecated,
        )

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def translate_type(self, ty: Type) -> TypeRef | None:
        """Translate a schema type to a target reference.

        Returns ``None`` when the type has no target form and the
        enclosing property should be dropped.

        Raises
        ------
        TranslationError
            For shapes without a translation rule.
        """
        if isinstance(ty, BaseType):
            return self._base(ty)
        if isinstance(ty, ReferenceType):
            return TypeRef.new(ty.name)
        if isinstance(ty, ArrayType):
            element = self.translate_type(ty.element)
            if element is None:
                return None
            return TypeRef.new_generics("Vec", [element])
        if isinstance(ty, MapType):
            key = self.translate_type(ty.key)
            if key is None:
                return None
            value = self.translate_type(ty.value)
            if value is None:
                return None
            return TypeRef.new_generics("std::collections::HashMap", [key, value])
        if isinstance(ty, OrType):
            return self._or(ty)
        if isinstance(ty, TupleType):
            raise TranslationError(f"translate tuples: {ty.items!r}")
        if isinstance(ty, StructureLiteralType):
            raise TranslationError(f"translate literal type {ty.value!r}")
        if isinstance(ty, StringLiteralType):
            return None
        if isinstance(ty, IntegerLiteralType):
            raise TranslationError(f"translate integer literal type {ty.value!r}")
        if isinstance(ty, BooleanLiteralType):
            raise TranslationError(f"translate boolean literal type {ty.value!r}")
        raise TypeError(f"Unknown schema type: {type(ty)}")

    def _base(self, ty: BaseType) -> TypeRef:
        if ty.name == BaseTypeName.REGEXP:
            raise TranslationError("RegExp is described by the protocol but absent from the meta-model")
        if ty.name == BaseTypeName.NULL:
            raise TranslationError("translate null base type")
        return TypeRef.new(_BASE_TYPES[ty.name])

    def _or(self, ty: OrType) -> TypeRef | None:
        items = tuple(item for item in ty.items if not _is_empty_literal(item))
        if len(items) == 1:
            return self.translate_type(items[0])

        # Only the ``T | null`` order is optional; ``null | T`` is looked up.
        if len(items) == 2 and items[1] == _NULL:
            inner = self.translate_type(items[0])
            if inner is None:
                return None
            return TypeRef.new_generics("Option", [inner])

        try:
            return self._config.lookup_anon(items)
        except ValueError as exc:
            raise TranslationError(str(exc)) from exc
        except AnonLookupError as exc:
            if exc.key is None:
                raise TranslationError(
                    f"invalid collection of items for an enum: {items!r}"
                ) from exc
            logger.debug("No anon mapping for %r", exc.key)
            self.report.anon_missing.add(exc.key)
            return TypeRef.new(PLACEHOLDER)


def translate_schema(meta_model: MetaModel, config: Config) -> TranslationResult:
    """Convenience function: translate *meta_model* under *config*."""
    return Translator(config).translate(meta_model)
