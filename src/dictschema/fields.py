"""Field specifications making up a schema definition."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any, Union

from .render_error import SchemaDefinitionError
from .safe_callable import SafeCallable


def _wrap(fn: Callable[..., Any] | None) -> SafeCallable | None:
    if fn is None:
        return None
    return SafeCallable(fn)


@dataclass(kw_only=True)
class _Spec:
    """
    Options shared by every kind of field specification.

    Attributes:
        alias: Output key used instead of the definition key. An alias is
            emitted as given; the configured key transform is not applied to it.
        if_: Closure ``(record, context)``; the entry is skipped when it returns a falsy value.
        unless: Closure ``(record, context)``; the entry is skipped when it returns a truthy value.
        refine: Closure ``(value, context)`` whose result replaces the rendered value.
        name: Definition key, set from the class attribute name or by the builder.

    """

    alias: str | None = None
    if_: Callable[..., Any] | None = None
    unless: Callable[..., Any] | None = None
    refine: Callable[..., Any] | None = None
    name: str = field(default="", init=False)

    def __post_init__(self) -> None:
        """Wrap the optional closures so they tolerate surplus arguments."""
        self.if_ = _wrap(self.if_)
        self.unless = _wrap(self.unless)
        self.refine = _wrap(self.refine)

    def __set_name__(self, owner: type, name: str) -> None:
        """Set the name attribute from the class attribute name."""
        self.name = name

    def named(self, name: str) -> _Spec:
        """Return a copy of this spec registered under ``name``."""
        spec = replace(self)
        spec.name = name
        return spec

    @property
    def kind(self) -> str:
        """Lower-case kind tag, used in error messages."""
        return type(self).__name__.lower()


@dataclass
class Field(_Spec):
    """
    Read an attribute (or mapping key) off the record.

    Attributes:
        source: Attribute to read. Defaults to the definition key.

    Example:
        class UserSchema(AppSchema):
            id = Field()
            email = Field(alias="emailAddress")
            nickname = Field(source="display_name", if_=lambda user: user.display_name)

    """

    source: str | None = None

    @property
    def source_name(self) -> str:
        """Attribute read off the record: ``source`` if set, else the definition key."""
        return self.source or self.name


@dataclass
class Computed(_Spec):
    """
    Produce a value by calling ``fn(record, context)``.

    Example:
        full_name = Computed(lambda user: f"{user.first_name} {user.last_name}")

    """

    fn: Callable[..., Any] | None

    def __post_init__(self) -> None:
        if self.fn is None:
            msg = "A callable must be provided for a computed field"
            raise SchemaDefinitionError(msg)
        self.fn = SafeCallable(self.fn)
        super().__post_init__()


@dataclass
class Association(_Spec):
    """
    Render a related record (or collection) with a nested schema.

    The schema reference is one of: a tag registered in the schema family
    (or on the host controller), a schema class, a :class:`~dictschema.deferred.Deferred`
    reference, or an inline body ``fn(schema_cls)`` compiled once into an
    anonymous schema class when the owning schema is defined.

    Attributes:
        schema: The schema reference.
        context: Values merged (shallowly) over the parent render context for the nested render.

    Example:
        class UserSchema(AppSchema):
            posts = Association("post")
            avatar = Association(lambda s: s.fields("url", "width"))

    """

    schema: Any
    context: dict[str, Any] | None = field(default=None, kw_only=True)

    def __post_init__(self) -> None:
        if self.schema is None:
            msg = "A schema, tag, or block must be provided"
            raise SchemaDefinitionError(msg)
        super().__post_init__()


FieldSpec = Union[Field, Computed, Association]
