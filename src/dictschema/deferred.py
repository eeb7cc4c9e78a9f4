"""Late-bound schema references."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .safe_callable import SafeCallable


@dataclass(frozen=True)
class Deferred:
    """
    Schema reference resolved when a record is rendered, not when it is declared.

    Wrap a closure returning a schema class or tag. The closure may take the
    render context as its only argument. Use it where the schema class is not
    yet bound, typically a schema that nests itself.

    Example:
        class CategorySchema(AppSchema):
            name = Field()
            children = Association(deferred(lambda: CategorySchema))

    """

    fn: Callable[..., Any]

    def __post_init__(self) -> None:
        """Reject non-callables up front."""
        SafeCallable(self.fn)

    def evaluate(self, context: dict[str, Any]) -> Any:
        """Return the schema reference produced by the closure."""
        return SafeCallable(self.fn)(context)


def deferred(fn: Callable[..., Any]) -> Deferred:
    """Shorthand for ``Deferred(fn)``."""
    return Deferred(fn)
