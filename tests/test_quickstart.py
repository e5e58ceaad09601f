"""Test that the quickstart API works for metagen."""
from __future__ import annotations


def test_quickstart_imports() -> None:
    import metagen

    assert callable(metagen.load_meta_model)
    assert callable(metagen.load_config)
    assert callable(metagen.translate)


def test_quickstart_version(package_name: str, expected_version: str) -> None:
    import importlib

    module = importlib.import_module(package_name)
    assert module.__version__ == expected_version


def test_quickstart_load_and_translate(meta_model_path, config_path) -> None:
    import metagen

    meta_model = metagen.load_meta_model(meta_model_path)
    config = metagen.load_config(config_path)
    result = metagen.translate(meta_model, config)
    assert isinstance(result.items, list)
    assert result.items
