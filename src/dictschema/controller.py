"""Mixin wiring named schemas into a host request handler."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, ClassVar

from .base_schema import BaseSchema, define_schema
from .render_error import InvalidSchemaValue, SchemaNotFound
from .safe_callable import safe_call

logger = logging.getLogger(__name__)


class SchemaController:
    """
    Host integration for request handlers (controllers, views, resources).

    Schemas registered on a controller class are available by name to
    :meth:`schema_for` and, as tags, to associations rendered through it.
    Registries and default context are copied on subclassing, so a child
    controller sees its parents' schemas without changing them.

    Example:
        class UsersController(SchemaController):
            pass

        UsersController.schema_context(current_user=lambda controller: controller.user)

        @UsersController.schema("post")
        def post_schema(s):
            s.fields("id", "title")

        @UsersController.schema()
        def user_schema(s):
            s.fields("id", "name")
            s.association("posts", "post")

        UsersController().schema_for(users)

    """

    _action_schemas: ClassVar[dict[str, type[BaseSchema]]] = {}
    _default_schema_context: ClassVar[dict[str, Any]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._action_schemas = dict(cls._action_schemas)
        cls._default_schema_context = dict(cls._default_schema_context)

    @classmethod
    def schema(
        cls,
        name: str = "default",
        body: Callable[..., Any] | type[BaseSchema] | None = None,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Register a schema under ``name``.

        ``body`` is a schema class or an inline body ``fn(schema_cls)`` compiled
        against the configured base class. Inline schemas get the controller's
        default schema context (as it stands now) merged with ``context``.
        Without ``body``, returns a decorator doing the registration and
        returning the schema class.
        """
        if body is None:

            def decorator(body: Callable[..., Any] | type[BaseSchema]) -> type[BaseSchema]:
                return cls.schema(name, body, context=context)

            return decorator

        if isinstance(body, type) and issubclass(body, BaseSchema):
            schema_cls = body
        else:
            schema_context = {**cls._default_schema_context, **(context or {})}
            schema_cls = define_schema(body, name=f"{cls.__name__}.{name}", context=schema_context)
        cls._action_schemas[name] = schema_cls
        logger.debug("Registered schema %r on %s", name, cls.__name__)
        return schema_cls

    @classmethod
    def schema_context(cls, values: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        """
        Merge values into the default context of every render.

        Callable values are called with the controller instance at render time.
        """
        cls._default_schema_context = {**cls._default_schema_context, **(values or {}), **kwargs}

    @classmethod
    def action_schemas(cls) -> dict[str, type[BaseSchema]]:
        """Return a copy of the schemas registered on this controller class, by name."""
        return dict(cls._action_schemas)

    @classmethod
    def default_schema_context(cls) -> dict[str, Any]:
        """Return a copy of the default schema context, callables not yet evaluated."""
        return dict(cls._default_schema_context)

    def resolved_schema_context(self) -> dict[str, Any]:
        """Return the default schema context with callable values evaluated."""
        return self._resolve_schema_context(self._default_schema_context)

    def find_schema(self, tag: str) -> type[BaseSchema] | None:
        """Return the schema registered under ``tag``, or None."""
        return self._action_schemas.get(tag)

    def resolve_schema(self, schema: str | type[BaseSchema]) -> type[BaseSchema]:
        """
        Resolve a registered name or a schema class.

        Raises:
            SchemaNotFound: If no schema is registered under the name.
            InvalidSchemaValue: If ``schema`` is neither a name nor a schema class.

        """
        if isinstance(schema, str):
            found = self.find_schema(schema)
            if found is None:
                raise SchemaNotFound(schema)
            return found
        if isinstance(schema, type) and issubclass(schema, BaseSchema):
            return schema
        raise InvalidSchemaValue(schema)

    def schema_for(
        self,
        renderable: Any,
        schema: str | type[BaseSchema] | Callable[..., Any] = "default",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Render ``renderable`` with a registered name, a schema class or an inline body.

        The render context is the schema's own context, then the controller's
        default schema context, then ``context``; callables in any of them are
        evaluated with this controller.
        """
        if callable(schema) and not isinstance(schema, type):
            schema_cls = define_schema(schema, name=f"{type(self).__name__}.inline")
        else:
            schema_cls = self.resolve_schema(schema)

        combined = {
            **self._resolve_schema_context(schema_cls.context()),
            **self.resolved_schema_context(),
            **self._resolve_schema_context(context or {}),
        }
        return schema_cls.render(renderable, combined, controller=self)

    def inline_schema(
        self,
        renderable: Any,
        body: Callable[..., Any],
        *,
        context: Mapping[str, Any] | None = None,
    ) -> Any:
        """Define an ad hoc schema from ``body`` and render ``renderable`` with it."""
        return self.schema_for(renderable, body, context=context)

    def _resolve_schema_context(self, context: Mapping[str, Any]) -> dict[str, Any]:
        return {
            key: safe_call(value, self) if callable(value) and not isinstance(value, type) else value
            for key, value in context.items()
        }
