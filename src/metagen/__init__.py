"""metagen — protocol meta-model to type declaration translator.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    from pathlib import Path

    import metagen

    meta_model = metagen.load_meta_model(Path("metaModel.json"))
    config = metagen.load_config(Path("metagen.toml"))

    result = metagen.translate(meta_model, config)
    for hint in result.report.toml_hints():
        print(hint)

    metagen.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from pathlib import Path

    from metagen.config.model import Config
    from metagen.schema.nodes import MetaModel
    from metagen.translator.translator import TranslationResult


def load_meta_model(path: "Path") -> "MetaModel":
    """Load a ``metaModel.json`` file.

    Parameters
    ----------
    path:
        Path to the meta-model JSON document.

    Returns
    -------
    MetaModel
        The fully loaded, immutable meta-model.

    Raises
    ------
    metagen.schema.SchemaError
        If the document does not describe a valid meta-model.
    """
    from metagen.schema.serializer import load_meta_model as _load

    return _load(path)


def load_config(path: "Path") -> "Config":
    """Load a TOML generation config.

    Raises
    ------
    metagen.config.ConfigError
        If the document is not a valid config.
    """
    from metagen.config.model import load_config as _load

    return _load(path)


def translate(meta_model: "MetaModel", config: "Config") -> "TranslationResult":
    """Translate *meta_model* into target items under *config*.

    Parameters
    ----------
    meta_model:
        The loaded meta-model.
    config:
        The generation policy.

    Returns
    -------
    TranslationResult
        The translated items and the diagnostics report.

    Raises
    ------
    metagen.translator.TranslationError
        If a generated entity contains an unsupported type shape.
    """
    from metagen.translator.translator import translate_schema

    return translate_schema(meta_model, config)


__all__ = [
    "__version__",
    "load_meta_model",
    "load_config",
    "translate",
]
