"""Schema translator: turns a meta-model into target items.

Public API
----------
The stable surface is ``translate_schema``, the ``Translator`` class,
``TranslationResult``, ``TranslationReport`` and ``TranslationError``.

Example
-------
::

    from metagen.translator import translate_schema

    result = translate_schema(meta_model, config)
    print(result.summary())
    for hint in result.report.toml_hints():
        print(hint)
"""
from __future__ import annotations

from metagen.translator.errors import TranslationError
from metagen.translator.fingerprint import fingerprint
from metagen.translator.report import ChecksumMismatch, EntityKind, TranslationReport
from metagen.translator.translator import (
    PLACEHOLDER,
    TranslationResult,
    Translator,
    translate_schema,
)

__all__ = [
    "translate_schema",
    "Translator",
    "TranslationResult",
    "TranslationReport",
    "TranslationError",
    "ChecksumMismatch",
    "EntityKind",
    "fingerprint",
    "PLACEHOLDER",
]
