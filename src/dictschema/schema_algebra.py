"""Composition of schema classes."""

from __future__ import annotations

from .base_schema import BaseSchema, define_schema
from .render_error import SchemaDefinitionError, SchemaError


class SchemaConflictError(SchemaError):
    """Two combined schemas define the same key differently."""

    def __init__(self, key: str, first: type[BaseSchema], second: type[BaseSchema]) -> None:
        self.key = key
        self.first = first
        self.second = second
        super().__init__(f"Key '{key}' is defined differently in {first.__name__} and {second.__name__}")


def combine_schemas(*schemas: type[BaseSchema], name: str | None = None) -> type[BaseSchema]:
    """
    Combine schemas into a new schema class.

    The definition is the union in argument order, hooks run in argument order
    and contexts are merged with later schemas winning. The result shares the
    tag registry of the first schema. A key defined identically in several
    schemas is kept once, and so is a hook shared by several schemas.

    Raises:
        SchemaDefinitionError: If no schema is given.
        SchemaConflictError: If a key is defined differently in two schemas.

    Example:
        UserWithOrders = combine_schemas(UserSchema, OrderSummarySchema)

    """
    if not schemas:
        msg = "combine_schemas needs at least one schema"
        raise SchemaDefinitionError(msg)

    class_name = name or "".join(schema.__name__ for schema in schemas)
    combined = define_schema(base=BaseSchema, name=class_name, tags=schemas[0]._tagged_schemas)
    owners: dict[str, type[BaseSchema]] = {}

    for schema in schemas:
        for key, spec in schema.definition().items():
            if key in owners and combined._definition[key] != spec:
                raise SchemaConflictError(key, owners[key], schema)
            owners.setdefault(key, schema)
            combined._add(key, spec)
        for hook_name, hooks in schema._hooks.items():
            seen = list(combined._hooks[hook_name])
            combined._hooks[hook_name].extend(hook for hook in hooks if hook not in seen)
        combined.set_context(schema.context())

    return combined
