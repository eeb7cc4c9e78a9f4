"""Exceptions raised while defining or rendering schemas."""

from __future__ import annotations

from typing import Any


class SchemaError(Exception):
    """Base class for every dictschema error."""


class SchemaDefinitionError(SchemaError, ValueError):
    """A builder was called without a usable closure, schema or option."""


class RenderError(SchemaError):
    """Errors raised during rendering inherit from this class."""


class InvalidFieldType(RenderError):
    """A definition entry is not a Field, Computed or Association."""

    def __init__(self, field: str, kind: Any) -> None:
        self.field = field
        self.kind = kind
        super().__init__(f"Invalid field type {kind!r} for field '{field}'")


class FieldMissing(RenderError):
    """The record does not expose the attribute a field reads."""

    def __init__(self, field: str, record: Any) -> None:
        self.field = field
        self.record = record
        super().__init__(f"Field '{field}' does not exist on record: {record!r}")


class SchemaNotFound(RenderError):
    """No schema is registered under the requested tag."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Schema with tag '{tag}' not found")


class InvalidSchemaValue(RenderError):
    """An association reference is neither a tag, a schema class nor a closure."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Invalid schema value: {value!r}")
