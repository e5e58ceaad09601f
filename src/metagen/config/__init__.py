"""Config model: generate/skip/checksum policy and anonymous-union names."""
from __future__ import annotations

from metagen.config.errors import AnonLookupError, ConfigError
from metagen.config.model import (
    Checksum,
    CodegenOption,
    Config,
    Generate,
    load_config,
)

__all__ = [
    "Config",
    "CodegenOption",
    "Generate",
    "Checksum",
    "load_config",
    "ConfigError",
    "AnonLookupError",
]
