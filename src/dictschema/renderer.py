"""The render engine: walks records and produces plain dicts."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from .configuration import configuration
from .fields import Association, Computed, Field, FieldSpec
from .frames import frame_records
from .render_error import FieldMissing, InvalidFieldType
from .resolution import resolve_schema

if TYPE_CHECKING:
    from .base_schema import BaseSchema

logger = logging.getLogger(__name__)

_UNSET = object()


def read_attribute(record: Any, name: str) -> Any:
    """
    Read ``name`` off a record.

    Mappings are read by key, any other object by attribute.

    Raises:
        FieldMissing: If the record has no such key or attribute.

    """
    if isinstance(record, Mapping):
        if name in record:
            return record[name]
        raise FieldMissing(name, record)
    try:
        return getattr(record, name)
    except AttributeError:
        raise FieldMissing(name, record) from None


def is_collection(value: Any) -> bool:
    """Return True if ``value`` is rendered element by element."""
    if isinstance(value, (Mapping, str, bytes, bytearray)):
        return False
    if isinstance(value, tuple) and hasattr(value, "_fields"):
        return False
    return isinstance(value, Iterable)


class Renderer:
    """
    Render one renderable (record or collection) with one schema.

    A renderer holds the state of a single render: the merged context, extra
    attributes added with :meth:`merge` and the slot written by
    :meth:`transform`. Use a new renderer per render; they are cheap.

    Attributes:
        schema: The schema class.
        renderable: The record or collection to render.
        context: Schema default context overridden by the call context.
        controller: Optional host object used to resolve association tags.

    """

    def __init__(
        self,
        schema: type[BaseSchema],
        renderable: Any = None,
        context: Mapping[str, Any] | None = None,
        *,
        controller: Any = None,
    ) -> None:
        self.schema = schema
        self.renderable = renderable
        self.controller = controller
        self.context: dict[str, Any] = {**schema.context(), **(context or {})}
        self._merged_attributes: dict[str, Any] = {}
        self._transformed: Any = _UNSET

    def render(self) -> Any:
        """Run the before hooks, render every record, then run the after hooks."""
        logger.debug("Rendering %s with %s", type(self.renderable).__name__, self.schema.__name__)
        data = self._apply_hooks("before_render", self.renderable)

        records = frame_records(data)
        if records is not None:
            output: Any = [self._render_record(record) for record in records]
        elif is_collection(data):
            output = [self._render_record(record) for record in data]
        else:
            output = self._render_record(data)

        return self._apply_hooks("after_render", output)

    def as_json(self) -> Any:
        """Alias of :meth:`render`, for hosts that call ``as_json`` on serializers."""
        return self.render()

    def to_json(self, **kwargs: Any) -> str:
        """Render and encode with :func:`json.dumps`, using the configured type serializers."""
        return json.dumps(self.render(), default=_serialize_value, **kwargs)

    def merge(self, values: Mapping[str, Any] | None = None, **kwargs: Any) -> Renderer:
        """
        Add extra keys to every rendered record.

        Merged keys go through the key transform, are added after the schema
        fields and win over them.
        """
        self._merged_attributes.update(values or {}, **kwargs)
        return self

    def transform(self, value: Any) -> Any:
        """Replace the value a hook was called with, for the later hooks and the result."""
        self._transformed = value
        return value

    def _apply_hooks(self, name: str, data: Any) -> Any:
        for hook in self.schema._hooks[name]:
            self._transformed = _UNSET
            hook(data, self.context, transform=self.transform)
            if self._transformed is not _UNSET:
                logger.debug("%s hook %r transformed the value", name, hook.fn)
                data = self._transformed
        self._transformed = _UNSET
        return data

    def _render_record(self, record: Any) -> dict[Any, Any]:
        config = configuration()
        result: dict[Any, Any] = {}
        for key, spec in self.schema._definition.items():
            if spec.if_ is not None and not spec.if_(record, self.context):
                continue
            if spec.unless is not None and spec.unless(record, self.context):
                continue

            output_key = spec.alias if spec.alias is not None else config.transform_key(key)
            value = self._render_value(record, key, spec)
            if spec.refine is not None:
                value = spec.refine(value, self.context)
            result[output_key] = value

        for key, value in self._merged_attributes.items():
            result[config.transform_key(key)] = value
        return result

    def _render_value(self, record: Any, key: str, spec: FieldSpec) -> Any:
        if isinstance(spec, Field):
            return read_attribute(record, spec.source_name)
        if isinstance(spec, Computed):
            return spec.fn(record, self.context)
        if isinstance(spec, Association):
            return self._render_association(record, key, spec)
        raise InvalidFieldType(key, spec)

    def _render_association(self, record: Any, key: str, spec: Association) -> Any:
        schema = resolve_schema(spec.schema, self.schema, controller=self.controller, context=self.context)
        data = read_attribute(record, key)
        if data is None:
            return None
        child_context = {**self.context, **(spec.context or {})}
        return Renderer(schema, data, child_context, controller=self.controller).render()


def _serialize_value(value: Any) -> Any:
    serializers = configuration().type_serializers
    for klass in type(value).__mro__:
        serializer = serializers.get(klass)
        if serializer is not None:
            return serializer(value)
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def render(
    schema: type[BaseSchema],
    renderable: Any,
    context: Mapping[str, Any] | None = None,
    *,
    controller: Any = None,
) -> Any:
    """Render ``renderable`` with ``schema``. Same as ``schema.render(...)``."""
    return Renderer(schema, renderable, context, controller=controller).render()
