#!/usr/bin/env python3
"""Example: Quickstart — metagen

Minimal working example: load a meta-model and a generation config,
translate, and print the items plus the config hints.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install metagen
"""
from __future__ import annotations

from pathlib import Path

import metagen
from metagen.target import ItemSerializer

DATA = Path(__file__).parent / "data"


def main() -> None:
    print(f"metagen version: {metagen.__version__}")

    # Step 1: Load the meta-model and the config
    meta_model = metagen.load_meta_model(DATA / "metaModel.json")
    config = metagen.load_config(DATA / "metagen.toml")
    print(f"Loaded meta-model {meta_model.meta_data.version}: "
          f"{len(meta_model.structures)} structures, "
          f"{len(meta_model.enumerations)} enumerations")

    # Step 2: Translate
    result = metagen.translate(meta_model, config)
    print(result.summary())

    # Step 3: Inspect the items
    print(ItemSerializer().to_yaml(result.items[:2]))

    # Step 4: Show what the config is missing
    for hint in result.report.toml_hints(bless=True):
        print(hint)


if __name__ == "__main__":
    main()
