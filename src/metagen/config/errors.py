"""Error types for configuration loading and anonymous-union lookups."""
from __future__ import annotations


class ConfigError(ValueError):
    """The generation config is malformed."""


class AnonLookupError(LookupError):
    """An anonymous union has no configured name.

    Parameters
    ----------
    items:
        The union arms that were looked up.
    key:
        The composite ``A|B`` key that was missing from the mappings, or
        ``None`` when some arm has no reference form, in which case no
        entry in the mapping table can ever name the union.
    """

    def __init__(self, items: tuple[object, ...], key: str | None) -> None:
        self.items = items
        self.key = key
        if key is None:
            message = f"union arms cannot form a mapping key: {items!r}"
        else:
            message = f"no anon mapping for {key!r}"
        super().__init__(message)

    @property
    def is_undecidable(self) -> bool:
        """Return True if no mapping key exists for these arms."""
        return self.key is None
