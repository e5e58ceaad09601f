"""Error types raised while loading a meta-model."""
from __future__ import annotations


class SchemaError(ValueError):
    """The meta-model document does not match the expected shape.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    path:
        JSON-pointer-like location of the offending value, e.g.
        ``"structures[3].properties[0].type"``.
    """

    def __init__(self, message: str, path: str = "") -> None:
        self.message = message
        self.path = path
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message
