"""Shared test fixtures for metagen.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from pathlib import Path

import pytest

_EXAMPLES_DATA = Path(__file__).resolve().parents[1] / "examples" / "data"


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "metagen"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def meta_model_path() -> Path:
    """Return the path of the example ``metaModel.json``."""
    return _EXAMPLES_DATA / "metaModel.json"


@pytest.fixture()
def config_path() -> Path:
    """Return the path of the example ``metagen.toml``."""
    return _EXAMPLES_DATA / "metagen.toml"
