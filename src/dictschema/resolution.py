"""Resolution of association schema references."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from .deferred import Deferred
from .render_error import InvalidSchemaValue, SchemaNotFound

if TYPE_CHECKING:
    from .base_schema import BaseSchema

logger = logging.getLogger(__name__)


def is_inline_body(ref: Any) -> bool:
    """Return True if ``ref`` is an inline schema body rather than a class, tag or Deferred."""
    return callable(ref) and not isinstance(ref, (type, Deferred))


def compile_inline_schema(body: Callable[..., Any], owner: type[BaseSchema], name: str) -> type[BaseSchema]:
    """
    Compile an inline association body into an anonymous schema class.

    The class derives from the configured base class and shares the tag
    registry of ``owner``, so tags stay resolvable inside nested schemas.
    Called once, when the association is declared.
    """
    from .base_schema import define_schema

    class_name = f"{owner.__name__}.{name}"
    logger.debug("Compiling inline schema %s", class_name)
    return define_schema(body, name=class_name, tags=owner._tagged_schemas)


def resolve_schema(
    ref: Any,
    owner: type[BaseSchema],
    *,
    controller: Any = None,
    context: Mapping[str, Any] | None = None,
) -> type[BaseSchema]:
    """
    Resolve an association reference to a schema class.

    Args:
        ref: A tag, a schema class or a Deferred reference.
        owner: Schema declaring the association; its family registry is searched first.
        controller: Optional host object whose ``find_schema(tag)`` is searched next.
        context: Render context handed to Deferred closures.

    Raises:
        SchemaNotFound: If a tag is registered neither in the family nor on the controller.
        InvalidSchemaValue: If ``ref`` is of any other kind.

    """
    from .base_schema import BaseSchema

    if isinstance(ref, str):
        schema = owner.lookup_tag(ref)
        if schema is None and controller is not None:
            schema = controller.find_schema(ref)
        if schema is None:
            raise SchemaNotFound(ref)
        return schema
    if isinstance(ref, type) and issubclass(ref, BaseSchema):
        return ref
    if isinstance(ref, Deferred):
        return resolve_schema(ref.evaluate(dict(context or {})), owner, controller=controller, context=context)
    raise InvalidSchemaValue(ref)
