"""CLI package.

The ``cli`` sub-package contains the Click application and its commands.
Commands import only from the public surface of the sibling packages
(``metagen.schema``, ``metagen.config``, ``metagen.target``,
``metagen.translator``).
"""
from __future__ import annotations
