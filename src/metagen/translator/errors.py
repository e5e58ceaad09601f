"""Fatal translation errors.

A ``TranslationError`` means the meta-model contains a shape the
translator has no rule for.  The pass aborts; no partial output is
returned.  Context frames are pushed as the error unwinds so the final
message reads outermost first::

    translating structure Foo: translating property bar: translate tuples: ...
"""
from __future__ import annotations


class TranslationError(Exception):
    """An unsupported schema shape was encountered.

    Parameters
    ----------
    message:
        Description of the innermost failure.
    context:
        Enclosing frames, outermost first.
    """

    def __init__(self, message: str, context: tuple[str, ...] = ()) -> None:
        self.message = message
        self.context = context
        super().__init__(str(self))

    def add_context(self, frame: str) -> None:
        """Wrap this error in an outer *frame* before re-raising it."""
        self.context = (frame, *self.context)
        self.args = (str(self),)

    def __str__(self) -> str:
        return ": ".join((*self.context, self.message))
